"""Transform nodes: projection/filter/join views and deduplication."""

from __future__ import annotations
from typing import ClassVar, List, Literal, Optional

from pydantic import Field

from ..fields import FieldInfo
from ..transformation import AnyFilter, FieldRelation, OrderDirection
from .base import Node


class TransformNode(Node):
    """An intermediate stage computing a derived view."""

    direction: ClassVar[str] = "transform"

    type: Literal["baseTransform"] = "baseTransform"
    field_relations: List[FieldRelation] = Field(default_factory=list)
    filters: List[AnyFilter] = Field(default_factory=list)

    def gen_table_name(self) -> str:
        return f"transform_{self.id}"


class DistinctNode(TransformNode):
    """Keeps the first row per distinct key, ordered by one field."""

    type: Literal["distinct"] = "distinct"
    distinct_fields: List[FieldInfo] = Field(default_factory=list)
    order_field: Optional[FieldInfo] = None
    order_direction: OrderDirection = OrderDirection.ASC
