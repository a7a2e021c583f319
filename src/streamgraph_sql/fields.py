"""Field references used by nodes, functions and field relations."""

from __future__ import annotations
from enum import Enum
from typing import TYPE_CHECKING, Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .exceptions import UnsupportedOperationError
from .formats import AnyFormat, StringFormat

if TYPE_CHECKING:
    from .aliases import TableAliases


def quote_name(name: str) -> str:
    """Wrap a column name in backticks unless it already is."""
    name = name.strip()
    if not name.startswith("`"):
        name = f"`{name}"
    if not name.endswith("`"):
        name = f"{name}`"
    return name


class FieldInfo(BaseModel):
    """A typed reference to a column of a node."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: Literal["base"] = "base"
    name: str = Field(..., min_length=1, description="Column name")
    node_id: Optional[str] = Field(
        None, description="Id of the node that owns the column")
    format_info: AnyFormat = Field(
        default_factory=StringFormat, description="Declared type of the column")

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Validate field name."""
        if not v.strip():
            raise ValueError("field name must not be blank")
        return v

    def format(self, aliases: Optional[TableAliases] = None) -> str:
        """Render the field as it appears in a SQL expression.

        Args:
            aliases: Table aliases of the relation being compiled, when it has
                more than one input

        Returns:
            `name` or alias.`name`
        """
        formatted = quote_name(self.name)
        if aliases is not None:
            return f"{aliases.resolve(self.node_id, self.name)}.{formatted}"
        return formatted

    def sql_type(self) -> str:
        return self.format_info.sql_type()


class MetaField(str, Enum):
    """Built-in columns whose values come from connector metadata."""

    PROCESS_TIME = "PROCESS_TIME"
    SCHEMA_NAME = "SCHEMA_NAME"
    DATABASE_NAME = "DATABASE_NAME"
    TABLE_NAME = "TABLE_NAME"
    OP_TS = "OP_TS"
    IS_DDL = "IS_DDL"
    OP_TYPE = "OP_TYPE"
    DATA = "DATA"
    UPDATE_BEFORE = "UPDATE_BEFORE"
    BATCH_ID = "BATCH_ID"
    SQL_TYPE = "SQL_TYPE"
    TS = "TS"
    MYSQL_TYPE = "MYSQL_TYPE"
    PK_NAMES = "PK_NAMES"

    @classmethod
    def for_name(cls, name: str) -> MetaField:
        """Look up a meta field by name, ignoring case."""
        for meta_field in cls:
            if meta_field.value == name.upper():
                return meta_field
        raise UnsupportedOperationError(f"Unsupported MetaField={name}")


class MetaFieldInfo(FieldInfo):
    """A column filled from connector metadata rather than the payload."""

    type: Literal["meta"] = "meta"
    meta_field: MetaField

    @field_validator('meta_field', mode='before')
    @classmethod
    def validate_meta_field(cls, v):
        """Accept meta field names in any case."""
        if isinstance(v, str) and not isinstance(v, MetaField):
            return MetaField.for_name(v)
        return v


AnyField = Annotated[Union[FieldInfo, MetaFieldInfo], Field(discriminator="type")]
