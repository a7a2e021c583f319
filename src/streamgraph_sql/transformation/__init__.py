"""Expressions used inside nodes: constants, functions, filters, field relations."""

from .params import ConstantParam, StringConstantParam, TimeUnit, TimeUnitConstantParam
from .functions import (
    CustomFunction,
    Function,
    FunctionParam,
    RegexpReplaceFunction,
    SplitIndexFunction,
)
from .operators import CompareOperator, LogicOperator, OrderDirection
from .filters import (
    AnyFilter,
    FilterFunction,
    MultiValueFilterFunction,
    SingleValueFilterFunction,
    format_predicates,
)
from .field_relation import FieldRelation
from .watermark import WatermarkField

__all__ = [
    "ConstantParam",
    "StringConstantParam",
    "TimeUnit",
    "TimeUnitConstantParam",
    "Function",
    "FunctionParam",
    "SplitIndexFunction",
    "RegexpReplaceFunction",
    "CustomFunction",
    "CompareOperator",
    "LogicOperator",
    "OrderDirection",
    "AnyFilter",
    "FilterFunction",
    "SingleValueFilterFunction",
    "MultiValueFilterFunction",
    "format_predicates",
    "FieldRelation",
    "WatermarkField",
]
