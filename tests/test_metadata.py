"""Tests for metadata column rendering."""

import pytest
from streamgraph_sql.compiler import gen_create_table_sql, render_meta_field
from streamgraph_sql.exceptions import UnsupportedOperationError
from streamgraph_sql.fields import FieldInfo, MetaField, MetaFieldInfo
from streamgraph_sql.formats import LongFormat, TimestampFormat
from streamgraph_sql.nodes import ClickHouseLoadNode, HiveLoadNode, KafkaExtractNode, KafkaLoadNode, MySqlExtractNode


def meta(meta_field, name=None):
    return MetaFieldInfo(name=name or meta_field.value.lower(), meta_field=meta_field)


MYSQL = MySqlExtractNode(
    id="1", hostname="localhost", username="root", password="pw", database="test", table_names=["user"])
KAFKA_EXTRACT = KafkaExtractNode(id="2", topic="in", bootstrap_servers="kafka:9092", format="canal-json")
KAFKA_LOAD = KafkaLoadNode(id="3", topic="out", bootstrap_servers="kafka:9092", format="canal-json")
HIVE = HiveLoadNode(
    id="4", table_name="t", catalog_name="c", database="d", hive_conf_dir="/conf", hive_version="3.1.2")


class TestMetadataTable:
    """Test per-connector metadata literals."""

    @pytest.mark.parametrize("meta_field,expected", [
        (MetaField.TABLE_NAME, "STRING METADATA FROM 'meta.table_name' VIRTUAL"),
        (MetaField.DATABASE_NAME, "STRING METADATA FROM 'meta.database_name' VIRTUAL"),
        (MetaField.OP_TS, "TIMESTAMP(3) METADATA FROM 'meta.op_ts' VIRTUAL"),
        (MetaField.OP_TYPE, "STRING METADATA FROM 'meta.op_type' VIRTUAL"),
        (MetaField.DATA, "STRING METADATA FROM 'meta.data' VIRTUAL"),
        (MetaField.IS_DDL, "BOOLEAN METADATA FROM 'meta.is_ddl' VIRTUAL"),
        (MetaField.TS, "TIMESTAMP_LTZ(3) METADATA FROM 'meta.ts' VIRTUAL"),
        (MetaField.SQL_TYPE, "MAP<STRING, INT> METADATA FROM 'meta.sql_type' VIRTUAL"),
        (MetaField.MYSQL_TYPE, "MAP<STRING, STRING> METADATA FROM 'meta.mysql_type' VIRTUAL"),
        (MetaField.PK_NAMES, "ARRAY<STRING> METADATA FROM 'meta.pk_names' VIRTUAL"),
        (MetaField.BATCH_ID, "BIGINT METADATA FROM 'meta.batch_id' VIRTUAL"),
        (MetaField.UPDATE_BEFORE, "ARRAY<MAP<STRING, STRING>> METADATA FROM 'meta.update_before' VIRTUAL"),
    ])
    def test_mysql_extract(self, meta_field, expected):
        assert render_meta_field(MYSQL, meta(meta_field)) == expected

    @pytest.mark.parametrize("meta_field,expected", [
        (MetaField.TABLE_NAME, "STRING METADATA FROM 'value.table'"),
        (MetaField.DATABASE_NAME, "STRING METADATA FROM 'value.database'"),
        (MetaField.SQL_TYPE, "MAP<STRING, INT> METADATA FROM 'value.sql-type'"),
        (MetaField.PK_NAMES, "ARRAY<STRING> METADATA FROM 'value.pk-names'"),
        (MetaField.TS, "TIMESTAMP_LTZ(3) METADATA FROM 'value.ingestion-timestamp'"),
        (MetaField.OP_TS, "TIMESTAMP_LTZ(3) METADATA FROM 'value.event-timestamp'"),
        (MetaField.OP_TYPE, "STRING METADATA FROM 'value.op-type'"),
        (MetaField.DATA, "STRING"),
        (MetaField.IS_DDL, "BOOLEAN METADATA FROM 'value.is-ddl'"),
        (MetaField.MYSQL_TYPE, "MAP<STRING, STRING> METADATA FROM 'value.mysql-type'"),
        (MetaField.BATCH_ID, "BIGINT METADATA FROM 'value.batch-id'"),
        (MetaField.UPDATE_BEFORE, "ARRAY<MAP<STRING, STRING>> METADATA FROM 'value.update-before'"),
    ])
    def test_kafka_extract(self, meta_field, expected):
        assert render_meta_field(KAFKA_EXTRACT, meta(meta_field)) == expected

    @pytest.mark.parametrize("meta_field,expected", [
        (MetaField.TABLE_NAME, "STRING METADATA FROM 'value.table'"),
        (MetaField.DATABASE_NAME, "STRING METADATA FROM 'value.database'"),
        (MetaField.OP_TS, "TIMESTAMP(3) METADATA FROM 'value.op_ts'"),
        (MetaField.OP_TYPE, "STRING METADATA FROM 'value.op_type'"),
        (MetaField.DATA, "STRING METADATA FROM 'value.data'"),
        (MetaField.IS_DDL, "BOOLEAN METADATA FROM 'value.is_ddl'"),
        (MetaField.TS, "TIMESTAMP_LTZ(3) METADATA FROM 'value.ts'"),
        (MetaField.SQL_TYPE, "MAP<STRING, INT> METADATA FROM 'value.sql_type'"),
        (MetaField.MYSQL_TYPE, "MAP<STRING, STRING> METADATA FROM 'value.mysql_type'"),
        (MetaField.PK_NAMES, "ARRAY<STRING> METADATA FROM 'value.pk_names'"),
        (MetaField.BATCH_ID, "BIGINT METADATA FROM 'value.batch_id'"),
        (MetaField.UPDATE_BEFORE, "ARRAY<MAP<STRING, STRING>> METADATA FROM 'value.update_before'"),
    ])
    def test_kafka_load(self, meta_field, expected):
        assert render_meta_field(KAFKA_LOAD, meta(meta_field)) == expected

    def test_process_time_for_any_node(self):
        assert render_meta_field(MYSQL, meta(MetaField.PROCESS_TIME)) == "AS PROCTIME()"
        assert render_meta_field(HIVE, meta(MetaField.PROCESS_TIME)) == "AS PROCTIME()"

    def test_unmapped_kind_uses_declared_type(self):
        field = MetaFieldInfo(name="data", meta_field=MetaField.DATA, format_info=LongFormat())
        assert render_meta_field(KAFKA_EXTRACT, field) == "BIGINT"
        assert render_meta_field(MYSQL, meta(MetaField.SCHEMA_NAME)) == "STRING"

    def test_unsupported_family(self):
        with pytest.raises(UnsupportedOperationError, match="does not currently support metadata fields"):
            render_meta_field(HIVE, meta(MetaField.OP_TS))

        clickhouse = ClickHouseLoadNode(id="5", table_name="t", url="jdbc:clickhouse://ch:8123/db")
        with pytest.raises(UnsupportedOperationError):
            render_meta_field(clickhouse, meta(MetaField.TABLE_NAME))


class TestCreateTable:
    """Test CREATE TABLE rendering with metadata and watermark columns."""

    def test_metadata_columns(self):
        node = KafkaLoadNode(
            id="3", topic="out", bootstrap_servers="kafka:9092", format="canal-json",
            fields=[
                FieldInfo(name="id", format_info=LongFormat()),
                meta(MetaField.TS, name="ts"),
                meta(MetaField.PROCESS_TIME, name="pt"),
            ],
        )
        sql = gen_create_table_sql(node)
        assert "`id` BIGINT,\n    `ts` TIMESTAMP_LTZ(3) METADATA FROM 'value.ts',\n    `pt` AS PROCTIME())" in sql

    def test_watermark_column(self):
        node = MySqlExtractNode.model_validate({
            "id": "1", "hostname": "localhost", "username": "root", "password": "pw",
            "database": "test", "table_names": ["user"],
            "fields": [
                {"type": "base", "name": "id", "format_info": {"type": "long"}},
                {"type": "base", "name": "ts", "format_info": {"type": "timestamp", "precision": 3}},
            ],
            "watermark_field": {
                "time_attr": {"name": "ts"},
                "interval": {"value": "5"},
                "time_unit": {"time_unit": "SECOND"},
            },
        })
        sql = gen_create_table_sql(node)
        assert sql.startswith(
            "CREATE TABLE `table_1`(\n"
            "    `id` BIGINT,\n"
            "    `ts` TIMESTAMP(3),\n"
            "    WATERMARK FOR `ts` AS `ts` - INTERVAL '5' SECOND)"
        )

    def test_partitioned_hive_table(self):
        node = HIVE.model_copy(update={
            "fields": [FieldInfo(name="id", format_info=LongFormat()),
                       FieldInfo(name="dt", format_info=TimestampFormat(precision=9))],
            "partition_fields": [FieldInfo(name="dt")],
            "primary_key": "id",
        })
        sql = gen_create_table_sql(node)
        assert sql.startswith(
            "CREATE TABLE `t`(\n"
            "    PRIMARY KEY (`id`) NOT ENFORCED,\n"
            "    `id` BIGINT,\n"
            "    `dt` TIMESTAMP(9))\n"
            "PARTITIONED BY (`dt`)\n"
            "    WITH (\n"
            "    'connector' = 'hive',\n"
        )
