"""Table aliases used while rendering multi-input SELECT statements."""

from __future__ import annotations
from typing import Dict, Iterable, Optional

from .exceptions import ValidationError


class TableAliases:
    """Maps input node ids to the table alias used in one SELECT.

    Built fresh for every join that is compiled. Fields are rendered through
    it, so node and field definitions are never modified.
    """

    def __init__(self, node_ids: Iterable[str]):
        self._aliases: Dict[str, str] = {}
        for node_id in node_ids:
            self._aliases[node_id] = self.alias_for(node_id)

    @staticmethod
    def alias_for(node_id: str) -> str:
        """Get the generated alias for a node id."""
        return f"t{node_id}"

    def get(self, node_id: str) -> Optional[str]:
        return self._aliases.get(node_id)

    def resolve(self, node_id: Optional[str], field_name: str) -> str:
        """Resolve the alias of a field referenced inside a multi-input relation.

        Raises:
            ValidationError: If the field has no node id or its node id is not
                one of the relation inputs
        """
        if node_id is None:
            raise ValidationError(
                f"node id of field '{field_name}' is required when a relation has more than one input node")
        alias = self._aliases.get(node_id)
        if alias is None:
            raise ValidationError(
                f"can not find any node by node id:{node_id} of field:{field_name}")
        return alias

    def __contains__(self, node_id: str) -> bool:
        return node_id in self._aliases

    def __len__(self) -> int:
        return len(self._aliases)
