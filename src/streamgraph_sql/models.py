"""Stream graph and group models consumed by the compiler."""

from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import List, Union

from pydantic import BaseModel, ConfigDict, Field

from .nodes import AnyNode
from .relations import AnyRelation

logger = logging.getLogger(__name__)


class StreamInfo(BaseModel):
    """A named graph of nodes and the relations between them."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    stream_id: str = Field(..., min_length=1)
    nodes: List[AnyNode] = Field(default_factory=list)
    relations: List[AnyRelation] = Field(default_factory=list)

    @classmethod
    def from_json(cls, data: str) -> StreamInfo:
        return cls.model_validate_json(data)


class GroupInfo(BaseModel):
    """A group of streams compiled together into one statement batch."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    group_id: str = Field(..., min_length=1)
    streams: List[StreamInfo] = Field(default_factory=list)

    @classmethod
    def from_json(cls, data: str) -> GroupInfo:
        """Load a group from JSON.

        A document holding a single stream (with ``stream_id`` at the top level)
        is wrapped in a group of the same id.
        """
        raw = json.loads(data)
        if isinstance(raw, dict) and "stream_id" in raw and "streams" not in raw:
            stream = StreamInfo.model_validate(raw)
            return cls(group_id=stream.stream_id, streams=[stream])
        return cls.model_validate(raw)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> GroupInfo:
        """Load a group (or single stream) from a JSON file."""
        path = Path(path)
        logger.debug(f"Loading graph definition from {path}")
        return cls.from_json(path.read_text(encoding="utf-8"))
