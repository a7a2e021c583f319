"""Relations describing how input nodes feed output nodes."""

from __future__ import annotations
from typing import Annotated, Dict, List, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from .transformation import AnyFilter


class NodeRelation(BaseModel):
    """One-to-one relation: a single input feeds a single output."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: Literal["baseRelation"] = "baseRelation"
    inputs: List[str] = Field(default_factory=list, description="Input node ids, in order")
    outputs: List[str] = Field(default_factory=list, description="Output node ids, in order")

    def format(self) -> str:
        return ""


class JoinRelation(NodeRelation):
    """Joins every input after the first onto the first input.

    join_conditions maps each non-primary input node id to its ON predicates.
    """

    join_conditions: Dict[str, List[AnyFilter]] = Field(default_factory=dict)


class InnerJoinNodeRelation(JoinRelation):
    type: Literal["innerJoin"] = "innerJoin"

    def format(self) -> str:
        return "INNER JOIN"


class LeftOuterJoinNodeRelation(JoinRelation):
    type: Literal["leftOuterJoin"] = "leftOuterJoin"

    def format(self) -> str:
        return "LEFT JOIN"


class RightOuterJoinNodeRelation(JoinRelation):
    type: Literal["rightOuterJoin"] = "rightOuterJoin"

    def format(self) -> str:
        return "RIGHT JOIN"


class UnionNodeRelation(NodeRelation):
    type: Literal["union"] = "union"

    def format(self) -> str:
        return "UNION"


AnyRelation = Annotated[
    Union[
        NodeRelation,
        InnerJoinNodeRelation,
        LeftOuterJoinNodeRelation,
        RightOuterJoinNodeRelation,
        UnionNodeRelation,
    ],
    Field(discriminator="type"),
]
