"""Watermark declaration for the event-time column of an extract node."""

from __future__ import annotations
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict

from ..fields import FieldInfo
from .params import StringConstantParam, TimeUnitConstantParam, TimeUnit


class WatermarkField(BaseModel):
    """WATERMARK FOR `ts` AS `ts` - INTERVAL '1' MINUTE"""

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: Literal["watermark"] = "watermark"
    time_attr: FieldInfo
    interval: Optional[StringConstantParam] = None
    time_unit: Optional[TimeUnitConstantParam] = None

    def format(self) -> str:
        column = self.time_attr.format()
        if self.interval is None:
            return f"WATERMARK FOR {column} AS {column}"
        unit = self.time_unit or TimeUnitConstantParam(time_unit=TimeUnit.SECOND)
        return f"WATERMARK FOR {column} AS {column} - INTERVAL {self.interval.format()} {unit.format()}"
