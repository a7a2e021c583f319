"""Constant parameters for functions and filters."""

from __future__ import annotations
from enum import Enum
from typing import TYPE_CHECKING, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict

if TYPE_CHECKING:
    from ..aliases import TableAliases


class ConstantParam(BaseModel):
    """A literal rendered as-is, e.g. a number."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: Literal["constant"] = "constant"
    value: Union[int, float, bool, str]

    def format(self, aliases: Optional[TableAliases] = None) -> str:
        if isinstance(self.value, bool):
            return "true" if self.value else "false"
        return str(self.value)


class StringConstantParam(BaseModel):
    """A string literal rendered in single quotes."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: Literal["stringConstant"] = "stringConstant"
    value: str

    def format(self, aliases: Optional[TableAliases] = None) -> str:
        escaped = self.value.replace("'", "''")
        return f"'{escaped}'"


class TimeUnit(str, Enum):
    SECOND = "SECOND"
    MINUTE = "MINUTE"
    HOUR = "HOUR"
    DAY = "DAY"
    WEEK = "WEEK"
    MONTH = "MONTH"
    YEAR = "YEAR"


class TimeUnitConstantParam(BaseModel):
    """A time unit keyword such as MINUTE."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: Literal["timeUnitConstant"] = "timeUnitConstant"
    time_unit: TimeUnit

    def format(self, aliases: Optional[TableAliases] = None) -> str:
        return self.time_unit.value
