"""Functions that render themselves as SQL expressions.

A function parameter is a field, a constant or another function. Rendering is
recursive: nested fields resolve their table alias before the enclosing
function renders.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..fields import FieldInfo, MetaFieldInfo
from .params import ConstantParam, StringConstantParam, TimeUnitConstantParam

if TYPE_CHECKING:
    from ..aliases import TableAliases


class Function(BaseModel, ABC):
    """Base class for functions."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    @abstractmethod
    def get_name(self) -> str:
        pass

    @abstractmethod
    def get_params(self) -> List[FunctionParam]:
        pass

    def format(self, aliases: Optional[TableAliases] = None) -> str:
        """Render as NAME(param, ...)."""
        rendered = [param.format(aliases) for param in self.get_params()]
        return f"{self.get_name()}({', '.join(rendered)})"


class SplitIndexFunction(Function):
    """SPLIT_INDEX(field, separator, index)."""

    type: Literal["splitIndex"] = "splitIndex"
    field: FunctionParam
    sep: StringConstantParam
    index: ConstantParam

    def get_name(self) -> str:
        return "SPLIT_INDEX"

    def get_params(self) -> List[FunctionParam]:
        return [self.field, self.sep, self.index]


class RegexpReplaceFunction(Function):
    """REGEXP_REPLACE(field, regex, replacement)."""

    type: Literal["regexpReplace"] = "regexpReplace"
    field: FunctionParam
    regex: StringConstantParam
    replacement: StringConstantParam

    def get_name(self) -> str:
        return "REGEXP_REPLACE"

    def get_params(self) -> List[FunctionParam]:
        return [self.field, self.regex, self.replacement]


class CustomFunction(Function):
    """Any engine function given by name, e.g. UPPER or CONCAT."""

    type: Literal["custom"] = "custom"
    name: str = Field(..., min_length=1)
    params: List[FunctionParam] = Field(default_factory=list)

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Function names are plain identifiers."""
        if not v.replace("_", "").isalnum():
            raise ValueError(f"invalid function name: {v}")
        return v.upper()

    def get_name(self) -> str:
        return self.name

    def get_params(self) -> List[FunctionParam]:
        return list(self.params)


FunctionParam = Annotated[
    Union[
        FieldInfo,
        MetaFieldInfo,
        ConstantParam,
        StringConstantParam,
        TimeUnitConstantParam,
        SplitIndexFunction,
        RegexpReplaceFunction,
        CustomFunction,
    ],
    Field(discriminator="type"),
]

SplitIndexFunction.model_rebuild()
RegexpReplaceFunction.model_rebuild()
CustomFunction.model_rebuild()
