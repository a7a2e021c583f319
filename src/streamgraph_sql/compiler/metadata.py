"""Column syntax for metadata fields, per connector family and direction.

The metadata keys are read by the execution engine's connectors, so every
string below must match what the connector exposes, character for character.
"""

from __future__ import annotations
import logging
from typing import Dict, Tuple

from ..exceptions import UnsupportedOperationError
from ..fields import MetaField, MetaFieldInfo
from ..nodes import Node

logger = logging.getLogger(__name__)

PROCESS_TIME_CLAUSE = "AS PROCTIME()"

MYSQL_EXTRACT_METADATA: Dict[MetaField, str] = {
    MetaField.TABLE_NAME: "STRING METADATA FROM 'meta.table_name' VIRTUAL",
    MetaField.DATABASE_NAME: "STRING METADATA FROM 'meta.database_name' VIRTUAL",
    MetaField.OP_TS: "TIMESTAMP(3) METADATA FROM 'meta.op_ts' VIRTUAL",
    MetaField.OP_TYPE: "STRING METADATA FROM 'meta.op_type' VIRTUAL",
    MetaField.DATA: "STRING METADATA FROM 'meta.data' VIRTUAL",
    MetaField.IS_DDL: "BOOLEAN METADATA FROM 'meta.is_ddl' VIRTUAL",
    MetaField.TS: "TIMESTAMP_LTZ(3) METADATA FROM 'meta.ts' VIRTUAL",
    MetaField.SQL_TYPE: "MAP<STRING, INT> METADATA FROM 'meta.sql_type' VIRTUAL",
    MetaField.MYSQL_TYPE: "MAP<STRING, STRING> METADATA FROM 'meta.mysql_type' VIRTUAL",
    MetaField.PK_NAMES: "ARRAY<STRING> METADATA FROM 'meta.pk_names' VIRTUAL",
    MetaField.BATCH_ID: "BIGINT METADATA FROM 'meta.batch_id' VIRTUAL",
    MetaField.UPDATE_BEFORE: "ARRAY<MAP<STRING, STRING>> METADATA FROM 'meta.update_before' VIRTUAL",
}

# Kafka sources expose the canal-json value metadata with dashed keys
KAFKA_EXTRACT_METADATA: Dict[MetaField, str] = {
    MetaField.TABLE_NAME: "STRING METADATA FROM 'value.table'",
    MetaField.DATABASE_NAME: "STRING METADATA FROM 'value.database'",
    MetaField.SQL_TYPE: "MAP<STRING, INT> METADATA FROM 'value.sql-type'",
    MetaField.PK_NAMES: "ARRAY<STRING> METADATA FROM 'value.pk-names'",
    MetaField.TS: "TIMESTAMP_LTZ(3) METADATA FROM 'value.ingestion-timestamp'",
    MetaField.OP_TS: "TIMESTAMP_LTZ(3) METADATA FROM 'value.event-timestamp'",
    MetaField.OP_TYPE: "STRING METADATA FROM 'value.op-type'",
    MetaField.IS_DDL: "BOOLEAN METADATA FROM 'value.is-ddl'",
    MetaField.MYSQL_TYPE: "MAP<STRING, STRING> METADATA FROM 'value.mysql-type'",
    MetaField.BATCH_ID: "BIGINT METADATA FROM 'value.batch-id'",
    MetaField.UPDATE_BEFORE: "ARRAY<MAP<STRING, STRING>> METADATA FROM 'value.update-before'",
}

# Kafka sinks write them back with underscored keys
KAFKA_LOAD_METADATA: Dict[MetaField, str] = {
    MetaField.TABLE_NAME: "STRING METADATA FROM 'value.table'",
    MetaField.DATABASE_NAME: "STRING METADATA FROM 'value.database'",
    MetaField.OP_TS: "TIMESTAMP(3) METADATA FROM 'value.op_ts'",
    MetaField.OP_TYPE: "STRING METADATA FROM 'value.op_type'",
    MetaField.DATA: "STRING METADATA FROM 'value.data'",
    MetaField.IS_DDL: "BOOLEAN METADATA FROM 'value.is_ddl'",
    MetaField.TS: "TIMESTAMP_LTZ(3) METADATA FROM 'value.ts'",
    MetaField.SQL_TYPE: "MAP<STRING, INT> METADATA FROM 'value.sql_type'",
    MetaField.MYSQL_TYPE: "MAP<STRING, STRING> METADATA FROM 'value.mysql_type'",
    MetaField.PK_NAMES: "ARRAY<STRING> METADATA FROM 'value.pk_names'",
    MetaField.BATCH_ID: "BIGINT METADATA FROM 'value.batch_id'",
    MetaField.UPDATE_BEFORE: "ARRAY<MAP<STRING, STRING>> METADATA FROM 'value.update_before'",
}

METADATA_TABLES: Dict[Tuple[str, str], Dict[MetaField, str]] = {
    ("mysql-cdc", "extract"): MYSQL_EXTRACT_METADATA,
    ("kafka", "extract"): KAFKA_EXTRACT_METADATA,
    ("kafka", "load"): KAFKA_LOAD_METADATA,
}


def render_meta_field(node: Node, field: MetaFieldInfo) -> str:
    """Render the type-and-source clause of a metadata column.

    Args:
        node: The node declaring the column
        field: The metadata field

    Returns:
        Clause following the column name in CREATE TABLE

    Raises:
        UnsupportedOperationError: If the node's connector has no metadata mapping
    """
    if field.meta_field == MetaField.PROCESS_TIME:
        return PROCESS_TIME_CLAUSE

    table = METADATA_TABLES.get((node.connector_family(), node.direction))
    if table is None:
        raise UnsupportedOperationError(
            f"This node:{type(node).__name__} does not currently support metadata fields")

    clause = table.get(field.meta_field)
    if clause is None:
        logger.debug(
            f"No metadata mapping for {field.meta_field.value} on {type(node).__name__}, "
            f"using declared type")
        return field.sql_type()
    return clause
