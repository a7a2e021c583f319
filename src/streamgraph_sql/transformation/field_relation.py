"""Mapping of an input expression onto an output column."""

from __future__ import annotations
from typing import Literal

from pydantic import BaseModel, ConfigDict

from ..fields import AnyField
from .functions import FunctionParam


class FieldRelation(BaseModel):
    """Pairs one source expression with the output field it fills."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: Literal["fieldRelation"] = "fieldRelation"
    input_field: FunctionParam
    output_field: AnyField
