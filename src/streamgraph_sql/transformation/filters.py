"""Filter predicates for WHERE clauses and join conditions."""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Annotated, List, Literal, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .functions import FunctionParam
from .operators import CompareOperator, LogicOperator

if TYPE_CHECKING:
    from ..aliases import TableAliases


class FilterFunction(BaseModel, ABC):
    """Base class for a predicate."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    logic_operator: LogicOperator = Field(
        default=LogicOperator.AND,
        description="Operator joining this predicate to the previous one")

    @abstractmethod
    def format_condition(self, aliases: Optional[TableAliases] = None) -> str:
        """Render the predicate without its logic operator."""
        pass

    def format(self, aliases: Optional[TableAliases] = None, first: bool = False) -> str:
        """Render the predicate, prefixed by its logic operator unless first."""
        condition = self.format_condition(aliases)
        if first:
            return condition
        return f"{self.logic_operator.value} {condition}"


class SingleValueFilterFunction(FilterFunction):
    """source OP target, or source IS [NOT] NULL."""

    type: Literal["singleValueFilter"] = "singleValueFilter"
    source: FunctionParam
    compare_operator: CompareOperator
    target: Optional[FunctionParam] = None

    @model_validator(mode='after')
    def validate_target(self):
        """Validate target against the compare operator."""
        if self.compare_operator.is_multi_value:
            raise ValueError(
                f"{self.compare_operator.value} requires a multi value filter")
        if self.compare_operator.is_unary and self.target is not None:
            raise ValueError(
                f"{self.compare_operator.value} does not take a target")
        if not self.compare_operator.is_unary and self.target is None:
            raise ValueError(
                f"target is required for operator {self.compare_operator.value}")
        return self

    def format_condition(self, aliases: Optional[TableAliases] = None) -> str:
        source = self.source.format(aliases)
        if self.compare_operator.is_unary:
            return f"{source} {self.compare_operator.value}"
        return f"{source} {self.compare_operator.value} {self.target.format(aliases)}"


class MultiValueFilterFunction(FilterFunction):
    """source [NOT] IN (target, ...)."""

    type: Literal["multiValueFilter"] = "multiValueFilter"
    source: FunctionParam
    compare_operator: CompareOperator = CompareOperator.IN
    targets: List[FunctionParam] = Field(..., min_length=1)

    @model_validator(mode='after')
    def validate_operator(self):
        """Only IN and NOT IN take a list of targets."""
        if not self.compare_operator.is_multi_value:
            raise ValueError(
                f"multi value filter only supports IN and NOT IN, got {self.compare_operator.value}")
        return self

    def format_condition(self, aliases: Optional[TableAliases] = None) -> str:
        targets = ", ".join(target.format(aliases) for target in self.targets)
        return f"{self.source.format(aliases)} {self.compare_operator.value} ({targets})"


AnyFilter = Annotated[
    Union[SingleValueFilterFunction, MultiValueFilterFunction],
    Field(discriminator="type"),
]


def format_predicates(filters: Sequence[FilterFunction], aliases: Optional[TableAliases] = None) -> str:
    """Render a list of predicates; the first one has no logic operator."""
    return " ".join(
        predicate.format(aliases, first=(i == 0)) for i, predicate in enumerate(filters))
