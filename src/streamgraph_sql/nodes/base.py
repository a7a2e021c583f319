"""Base classes for extract, transform and load nodes."""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import ClassVar, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..fields import AnyField, FieldInfo
from ..transformation import AnyFilter, FieldRelation, WatermarkField


class Node(BaseModel, ABC):
    """A stage of a stream graph.

    Nodes are built once from the graph definition and only read afterwards.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    direction: ClassVar[str] = ""

    id: str = Field(..., min_length=1, description="Node id, unique within a stream")
    name: Optional[str] = Field(None, description="Human readable node name")
    fields: List[AnyField] = Field(default_factory=list)
    properties: Dict[str, str] = Field(
        default_factory=dict, description="Extra connector options")
    primary_key: Optional[str] = Field(
        None, description="Comma separated primary key columns")
    partition_fields: Optional[List[FieldInfo]] = None

    @field_validator('id')
    @classmethod
    def validate_id(cls, v: str) -> str:
        """Validate node id."""
        if not v.strip():
            raise ValueError("node id must not be blank")
        return v

    @abstractmethod
    def gen_table_name(self) -> str:
        """Get the table or view name this node is registered under."""
        pass

    def connector_family(self) -> Optional[str]:
        """Get the connector family used to look up metadata columns."""
        return None

    def table_options(self) -> Dict[str, str]:
        """Get the WITH options of the node's table.

        Connector specific options override user supplied properties.
        """
        return dict(self.properties)

    def get_field(self, name: str) -> Optional[FieldInfo]:
        for field in self.fields:
            if field.name == name:
                return field
        return None


class ExtractNode(Node):
    """A source stage reading from an external system."""

    direction: ClassVar[str] = "extract"

    watermark_field: Optional[WatermarkField] = None

    def gen_table_name(self) -> str:
        return f"table_{self.id}"


class LoadNode(Node):
    """A sink stage writing to an external system."""

    direction: ClassVar[str] = "load"

    field_relations: List[FieldRelation] = Field(default_factory=list)
    filters: List[AnyFilter] = Field(default_factory=list)
    sink_parallelism: Optional[int] = Field(None, ge=1)
