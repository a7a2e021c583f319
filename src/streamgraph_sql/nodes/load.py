"""Load nodes: Kafka, Hive and ClickHouse sinks."""

from __future__ import annotations
from typing import Dict, List, Literal, Optional

from pydantic import Field, field_validator

from ..fields import AnyField
from ..formats import with_timestamp_precision
from .base import LoadNode


class KafkaLoadNode(LoadNode):
    """Kafka topic sink."""

    type: Literal["kafkaLoad"] = "kafkaLoad"

    topic: str = Field(..., min_length=1, description="Kafka topic to write to")
    bootstrap_servers: str = Field(..., min_length=1,
                                   description="Comma-separated list of Kafka brokers")
    format: str = Field(default="json", min_length=1, description="Message format")

    def connector_family(self) -> Optional[str]:
        return "kafka"

    def gen_table_name(self) -> str:
        return f"node_{self.id}_{self.topic}"

    def table_options(self) -> Dict[str, str]:
        options = super().table_options()
        options["connector"] = "kafka"
        options["topic"] = self.topic
        options["properties.bootstrap.servers"] = self.bootstrap_servers
        options["format"] = self.format
        if self.sink_parallelism is not None:
            options["sink.parallelism"] = str(self.sink_parallelism)
        return options


# Partition commit defaults, applied only when the user did not set them
HIVE_PARTITION_DEFAULTS = {
    "sink.partition-commit.trigger": "process-time",
    "partition.time-extractor.timestamp-pattern": "yyyy-MM-dd",
    "sink.partition-commit.delay": "10s",
    "sink.partition-commit.policy.kind": "metastore,success-file",
}

# Hive requires nanosecond timestamps
HIVE_TIMESTAMP_PRECISION = 9


class HiveLoadNode(LoadNode):
    """Hive table sink."""

    type: Literal["hiveLoad"] = "hiveLoad"

    table_name: str = Field(..., min_length=1, description="Target Hive table name")
    catalog_name: str = Field(..., min_length=1, description="Hive catalog name")
    database: str = Field(..., min_length=1, description="Hive database")
    hive_conf_dir: str = Field(..., min_length=1,
                               description="Directory holding hive-site.xml")
    hive_version: str = Field(..., min_length=1, description="Hive version, e.g. 3.1.2")
    hadoop_conf_dir: Optional[str] = None

    @field_validator('fields')
    @classmethod
    def force_timestamp_precision(cls, v: List[AnyField]) -> List[AnyField]:
        """Hive timestamp columns always use precision 9."""
        return [
            field.model_copy(update={
                "format_info": with_timestamp_precision(field.format_info, HIVE_TIMESTAMP_PRECISION)})
            for field in v
        ]

    def connector_family(self) -> Optional[str]:
        return "hive"

    def gen_table_name(self) -> str:
        return self.table_name

    def table_options(self) -> Dict[str, str]:
        options = super().table_options()
        options["connector"] = "hive"
        options["default-database"] = self.database
        options["hive-conf-dir"] = self.hive_conf_dir
        options["hive-version"] = self.hive_version
        if self.hadoop_conf_dir is not None:
            options["hadoop-conf-dir"] = self.hadoop_conf_dir
        if self.partition_fields is not None:
            for key, value in HIVE_PARTITION_DEFAULTS.items():
                if key not in self.properties:
                    options[key] = value
        return options


class ClickHouseLoadNode(LoadNode):
    """ClickHouse table sink written through the JDBC connector."""

    type: Literal["clickHouseLoad"] = "clickHouseLoad"

    table_name: str = Field(..., min_length=1, description="Target ClickHouse table")
    url: str = Field(..., min_length=1, description="JDBC url of the ClickHouse server")
    username: Optional[str] = None
    password: Optional[str] = None

    @field_validator('url')
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Validate ClickHouse JDBC url."""
        if not v.startswith("jdbc:clickhouse://"):
            raise ValueError("url must start with 'jdbc:clickhouse://'")
        return v

    def connector_family(self) -> Optional[str]:
        return "clickhouse"

    def gen_table_name(self) -> str:
        return self.table_name

    def table_options(self) -> Dict[str, str]:
        options = super().table_options()
        options["connector"] = "jdbc"
        options["dialect-name"] = "clickhouse"
        options["url"] = self.url
        options["table-name"] = self.table_name
        if self.username:
            options["username"] = self.username
        if self.password:
            options["password"] = self.password
        if self.sink_parallelism is not None:
            options["sink.parallelism"] = str(self.sink_parallelism)
        return options
