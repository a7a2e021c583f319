"""Logic and comparison operators used by filter predicates."""

from __future__ import annotations
from enum import Enum


class LogicOperator(str, Enum):
    """Joins a predicate to the one before it."""
    AND = "AND"
    OR = "OR"


class CompareOperator(str, Enum):
    """Comparison between a source expression and its target(s)."""
    EQUAL = "="
    NOT_EQUAL = "<>"
    MORE_THAN = ">"
    MORE_THAN_OR_EQUAL = ">="
    LESS_THAN = "<"
    LESS_THAN_OR_EQUAL = "<="
    IS_NULL = "IS NULL"
    IS_NOT_NULL = "IS NOT NULL"
    IN = "IN"
    NOT_IN = "NOT IN"
    LIKE = "LIKE"
    NOT_LIKE = "NOT LIKE"

    @property
    def is_unary(self) -> bool:
        return self in (CompareOperator.IS_NULL, CompareOperator.IS_NOT_NULL)

    @property
    def is_multi_value(self) -> bool:
        return self in (CompareOperator.IN, CompareOperator.NOT_IN)


class OrderDirection(str, Enum):
    ASC = "ASC"
    DESC = "DESC"
