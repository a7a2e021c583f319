"""Output of a compile: DDL keyed by node id and DML in visit order."""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List


@dataclass
class CompileResult:
    """Statements produced for one group.

    DDL maps are keyed by node id and read back sorted by key, so the batch
    only depends on the graph definition.
    """

    extract_sqls: Dict[str, str] = field(default_factory=dict)
    transform_sqls: Dict[str, str] = field(default_factory=dict)
    load_sqls: Dict[str, str] = field(default_factory=dict)
    insert_sqls: List[str] = field(default_factory=list)

    @property
    def create_table_sqls(self) -> List[str]:
        """All DDL: extract tables, transform views, then load tables."""
        sqls: List[str] = []
        for section in (self.extract_sqls, self.transform_sqls, self.load_sqls):
            sqls.extend(sql for _, sql in sorted(section.items()))
        return sqls

    def statements(self) -> List[str]:
        """The full batch in submission order: DDL then DML."""
        return self.create_table_sqls + list(self.insert_sqls)

    def to_script(self) -> str:
        """Render the batch as a single SQL script."""
        return "".join(f"{sql};\n\n" for sql in self.statements())

    def __len__(self) -> int:
        return len(self.extract_sqls) + len(self.transform_sqls) + len(self.load_sqls) + len(self.insert_sqls)
