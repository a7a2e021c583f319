"""Extract, transform and load nodes of a stream graph."""

from typing import Annotated, Union

from pydantic import Field

from .base import Node, ExtractNode, LoadNode
from .extract import MySqlExtractNode, KafkaExtractNode
from .transform import TransformNode, DistinctNode
from .load import KafkaLoadNode, HiveLoadNode, ClickHouseLoadNode

AnyNode = Annotated[
    Union[
        MySqlExtractNode,
        KafkaExtractNode,
        TransformNode,
        DistinctNode,
        KafkaLoadNode,
        HiveLoadNode,
        ClickHouseLoadNode,
    ],
    Field(discriminator="type"),
]

__all__ = [
    "Node",
    "ExtractNode",
    "LoadNode",
    "MySqlExtractNode",
    "KafkaExtractNode",
    "TransformNode",
    "DistinctNode",
    "KafkaLoadNode",
    "HiveLoadNode",
    "ClickHouseLoadNode",
    "AnyNode",
]
