"""Tests for node table names and connector options."""

import pytest
from streamgraph_sql.fields import FieldInfo
from streamgraph_sql.formats import LongFormat, TimestampFormat
from streamgraph_sql.nodes import (
    ClickHouseLoadNode,
    DistinctNode,
    HiveLoadNode,
    KafkaExtractNode,
    KafkaLoadNode,
    MySqlExtractNode,
    TransformNode,
)
from streamgraph_sql.nodes.base import LoadNode, Node
from streamgraph_sql.nodes.load import HIVE_PARTITION_DEFAULTS


def mysql_node(**kwargs):
    params = dict(
        id="1",
        hostname="localhost",
        username="root",
        password="pw",
        database="test",
        table_names=["user"],
    )
    params.update(kwargs)
    return MySqlExtractNode(**params)


class TestMySqlExtractNode:
    """Test MySQL CDC extract node options."""

    def test_table_name(self):
        assert mysql_node().gen_table_name() == "table_1"

    def test_options(self):
        options = mysql_node(server_id=5400).table_options()
        assert options["connector"] == "mysql-cdc"
        assert options["hostname"] == "localhost"
        assert options["port"] == "3306"
        assert options["database-name"] == "test"
        assert options["table-name"] == "user"
        assert options["server-id"] == "5400"
        assert "scan.incremental.snapshot.enabled" not in options

    def test_multiple_tables(self):
        options = mysql_node(table_names=["user", "order"]).table_options()
        assert options["table-name"] == "(user|order)"

    def test_incremental_snapshot(self):
        options = mysql_node(incremental_snapshot_enabled=False, snapshot_chunk_size=1000).table_options()
        assert options["scan.incremental.snapshot.enabled"] == "false"
        assert options["scan.incremental.snapshot.chunk.size"] == "1000"

    def test_invalid_port(self):
        with pytest.raises(ValueError, match="Port must be between 1 and 65535"):
            mysql_node(port=70000)

    def test_connector_options_override_properties(self):
        options = mysql_node(properties={"connector": "other", "debezium.snapshot.mode": "initial"}).table_options()
        assert options["connector"] == "mysql-cdc"
        assert options["debezium.snapshot.mode"] == "initial"


class TestKafkaExtractNode:
    """Test Kafka extract node options."""

    def test_plain_kafka(self):
        node = KafkaExtractNode(
            id="3", topic="events", bootstrap_servers="kafka:9092",
            format="json", format_options={"ignore-parse-errors": "true"}, group_id="g1",
        )
        options = node.table_options()
        assert node.gen_table_name() == "table_3"
        assert options["connector"] == "kafka"
        assert options["format"] == "json"
        assert options["scan.startup.mode"] == "earliest-offset"
        assert options["json.ignore-parse-errors"] == "true"
        assert options["properties.group.id"] == "g1"

    def test_upsert_kafka_with_primary_key(self):
        node = KafkaExtractNode(
            id="3", topic="events", bootstrap_servers="kafka:9092", primary_key="id",
            format_options={"ignore-parse-errors": "true"},
        )
        options = node.table_options()
        assert options["connector"] == "upsert-kafka"
        assert options["key.format"] == "json"
        assert options["value.format"] == "json"
        assert options["value.json.ignore-parse-errors"] == "true"
        assert "scan.startup.mode" not in options
        assert "properties.group.id" not in options

    def test_invalid_startup_mode(self):
        with pytest.raises(ValueError, match="scan_startup_mode must be one of"):
            KafkaExtractNode(id="3", topic="t", bootstrap_servers="k:9092", scan_startup_mode="bogus")

    def test_timestamp_startup_requires_millis(self):
        with pytest.raises(ValueError, match="scan_startup_timestamp_millis is required"):
            KafkaExtractNode(id="3", topic="t", bootstrap_servers="k:9092", scan_startup_mode="timestamp")


class TestTransformNodes:
    """Test transform node naming."""

    def test_transform_table_name(self):
        assert TransformNode(id="4").gen_table_name() == "transform_4"

    def test_distinct_defaults(self):
        node = DistinctNode(id="5")
        assert node.gen_table_name() == "transform_5"
        assert node.order_direction.value == "ASC"
        assert node.type == "distinct"


class TestLoadNodes:
    """Test load node options."""

    def test_kafka_load(self):
        node = KafkaLoadNode(id="2", topic="out", bootstrap_servers="kafka:9092", sink_parallelism=2)
        options = node.table_options()
        assert node.gen_table_name() == "node_2_out"
        assert options == {
            "connector": "kafka",
            "topic": "out",
            "properties.bootstrap.servers": "kafka:9092",
            "format": "json",
            "sink.parallelism": "2",
        }

    def test_sink_parallelism_must_be_positive(self):
        with pytest.raises(ValueError):
            KafkaLoadNode(id="2", topic="out", bootstrap_servers="kafka:9092", sink_parallelism=0)

    def hive_node(self, **kwargs):
        params = dict(
            id="6",
            table_name="user_hive",
            catalog_name="myhive",
            database="default",
            hive_conf_dir="/etc/hive/conf",
            hive_version="3.1.2",
            fields=[
                FieldInfo(name="id", format_info=LongFormat()),
                FieldInfo(name="created", format_info=TimestampFormat(precision=3)),
            ],
        )
        params.update(kwargs)
        return HiveLoadNode(**params)

    def test_hive_forces_timestamp_precision(self):
        node = self.hive_node()
        assert node.gen_table_name() == "user_hive"
        assert node.fields[0].sql_type() == "BIGINT"
        assert node.fields[1].sql_type() == "TIMESTAMP(9)"

    def test_hive_partition_defaults(self):
        node = self.hive_node(
            partition_fields=[FieldInfo(name="dt")],
            properties={"sink.partition-commit.delay": "1 h"},
        )
        options = node.table_options()
        assert options["connector"] == "hive"
        assert options["default-database"] == "default"
        assert options["sink.partition-commit.delay"] == "1 h"
        assert options["sink.partition-commit.trigger"] == HIVE_PARTITION_DEFAULTS["sink.partition-commit.trigger"]

    def test_hive_without_partitions(self):
        options = self.hive_node().table_options()
        assert "sink.partition-commit.trigger" not in options

    def test_clickhouse_load(self):
        node = ClickHouseLoadNode(
            id="7", table_name="events", url="jdbc:clickhouse://ch:8123/default",
            username="default", password="secret",
        )
        options = node.table_options()
        assert node.gen_table_name() == "events"
        assert options["connector"] == "jdbc"
        assert options["dialect-name"] == "clickhouse"
        assert options["table-name"] == "events"
        assert options["password"] == "secret"

    def test_clickhouse_invalid_url(self):
        with pytest.raises(ValueError, match="url must start with 'jdbc:clickhouse://'"):
            ClickHouseLoadNode(id="7", table_name="events", url="http://ch:8123")


class TestBaseNodes:
    """Test that base node classes cannot be built directly."""

    def test_node_is_abstract(self):
        with pytest.raises(TypeError):
            Node(id="1")

    def test_load_node_without_table_name_is_abstract(self):
        with pytest.raises(TypeError):
            LoadNode(id="2")
