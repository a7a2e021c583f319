"""streamgraph-sql

Compiles streaming ETL graphs (extract, transform and load nodes joined by
relations) into streaming SQL statement batches.
"""

from .exceptions import StreamGraphError, ValidationError, UnsupportedOperationError
from .fields import FieldInfo, MetaField, MetaFieldInfo
from .models import GroupInfo, StreamInfo
from .nodes import (
    ClickHouseLoadNode,
    DistinctNode,
    HiveLoadNode,
    KafkaExtractNode,
    KafkaLoadNode,
    MySqlExtractNode,
    TransformNode,
)
from .relations import (
    InnerJoinNodeRelation,
    LeftOuterJoinNodeRelation,
    NodeRelation,
    RightOuterJoinNodeRelation,
    UnionNodeRelation,
)
from .compiler import CompileResult, SqlCompiler
from .client import GatewayConfig, SqlGatewayClient

__all__ = [
    # Compiler
    "SqlCompiler",
    "CompileResult",

    # Graph models
    "GroupInfo",
    "StreamInfo",
    "FieldInfo",
    "MetaField",
    "MetaFieldInfo",

    # Nodes
    "MySqlExtractNode",
    "KafkaExtractNode",
    "TransformNode",
    "DistinctNode",
    "KafkaLoadNode",
    "HiveLoadNode",
    "ClickHouseLoadNode",

    # Relations
    "NodeRelation",
    "InnerJoinNodeRelation",
    "LeftOuterJoinNodeRelation",
    "RightOuterJoinNodeRelation",
    "UnionNodeRelation",

    # Gateway
    "GatewayConfig",
    "SqlGatewayClient",

    # Errors
    "StreamGraphError",
    "ValidationError",
    "UnsupportedOperationError",
]

__version__ = "0.1.0"
