"""Declared field types and their SQL type names."""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class FormatInfo(BaseModel, ABC):
    """Base class for the declared type of a field."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    @abstractmethod
    def sql_type(self) -> str:
        """Get the SQL type name used in generated DDL."""
        pass


class StringFormat(FormatInfo):
    type: Literal["string"] = "string"

    def sql_type(self) -> str:
        return "STRING"


class BooleanFormat(FormatInfo):
    type: Literal["boolean"] = "boolean"

    def sql_type(self) -> str:
        return "BOOLEAN"


class ByteFormat(FormatInfo):
    type: Literal["byte"] = "byte"

    def sql_type(self) -> str:
        return "TINYINT"


class ShortFormat(FormatInfo):
    type: Literal["short"] = "short"

    def sql_type(self) -> str:
        return "SMALLINT"


class IntFormat(FormatInfo):
    type: Literal["int"] = "int"

    def sql_type(self) -> str:
        return "INT"


class LongFormat(FormatInfo):
    type: Literal["long"] = "long"

    def sql_type(self) -> str:
        return "BIGINT"


class FloatFormat(FormatInfo):
    type: Literal["float"] = "float"

    def sql_type(self) -> str:
        return "FLOAT"


class DoubleFormat(FormatInfo):
    type: Literal["double"] = "double"

    def sql_type(self) -> str:
        return "DOUBLE"


class DecimalFormat(FormatInfo):
    type: Literal["decimal"] = "decimal"
    precision: int = Field(default=10, ge=1, le=38)
    scale: int = Field(default=0, ge=0)

    def sql_type(self) -> str:
        return f"DECIMAL({self.precision}, {self.scale})"


class DateFormat(FormatInfo):
    type: Literal["date"] = "date"

    def sql_type(self) -> str:
        return "DATE"


class TimeFormat(FormatInfo):
    type: Literal["time"] = "time"
    precision: int = Field(default=0, ge=0, le=9)

    def sql_type(self) -> str:
        return f"TIME({self.precision})"


class TimestampFormat(FormatInfo):
    """Timestamp without time zone."""

    type: Literal["timestamp"] = "timestamp"
    precision: int = 2
    format: str = "yyyy-MM-dd HH:mm:ss"

    @field_validator('precision')
    @classmethod
    def validate_precision(cls, v: int) -> int:
        """Validate timestamp precision."""
        if not (0 <= v <= 9):
            raise ValueError("timestamp precision must be between 0 and 9")
        return v

    def sql_type(self) -> str:
        return f"TIMESTAMP({self.precision})"


class LocalZonedTimestampFormat(FormatInfo):
    """Timestamp with local time zone."""

    type: Literal["local_zoned_timestamp"] = "local_zoned_timestamp"
    precision: int = 2

    @field_validator('precision')
    @classmethod
    def validate_precision(cls, v: int) -> int:
        """Validate timestamp precision."""
        if not (0 <= v <= 9):
            raise ValueError("timestamp precision must be between 0 and 9")
        return v

    def sql_type(self) -> str:
        return f"TIMESTAMP_LTZ({self.precision})"


class BinaryFormat(FormatInfo):
    type: Literal["binary"] = "binary"

    def sql_type(self) -> str:
        return "BYTES"


class ArrayFormat(FormatInfo):
    type: Literal["array"] = "array"
    element: AnyFormat

    def sql_type(self) -> str:
        return f"ARRAY<{self.element.sql_type()}>"


class MapFormat(FormatInfo):
    type: Literal["map"] = "map"
    key: AnyFormat
    value: AnyFormat

    def sql_type(self) -> str:
        return f"MAP<{self.key.sql_type()}, {self.value.sql_type()}>"


AnyFormat = Annotated[
    Union[
        StringFormat,
        BooleanFormat,
        ByteFormat,
        ShortFormat,
        IntFormat,
        LongFormat,
        FloatFormat,
        DoubleFormat,
        DecimalFormat,
        DateFormat,
        TimeFormat,
        TimestampFormat,
        LocalZonedTimestampFormat,
        BinaryFormat,
        ArrayFormat,
        MapFormat,
    ],
    Field(discriminator="type"),
]

ArrayFormat.model_rebuild()
MapFormat.model_rebuild()


def with_timestamp_precision(format_info: FormatInfo, precision: int) -> FormatInfo:
    """Return a copy of a timestamp format with the given precision.

    Non-timestamp formats are returned unchanged.
    """
    if isinstance(format_info, (TimestampFormat, LocalZonedTimestampFormat)):
        return format_info.model_copy(update={"precision": precision})
    return format_info
