"""Extract nodes: MySQL CDC and Kafka sources."""

from __future__ import annotations
from typing import Dict, List, Literal, Optional

from pydantic import Field, field_validator, model_validator

from .base import ExtractNode


class MySqlExtractNode(ExtractNode):
    """Change-data-capture source reading MySQL binlog."""

    type: Literal["mysqlExtract"] = "mysqlExtract"

    # Required connection parameters
    hostname: str = Field(..., min_length=1, description="MySQL hostname")
    username: str = Field(..., min_length=1, description="MySQL username")
    password: str = Field(..., description="MySQL password")
    database: str = Field(..., min_length=1, description="MySQL database name")
    table_names: List[str] = Field(..., min_length=1,
                                   description="Tables (or patterns) to capture")
    port: int = Field(default=3306, description="MySQL port")

    # Optional CDC parameters
    server_id: Optional[int] = Field(
        None, description="MySQL server ID for replication")
    incremental_snapshot_enabled: Optional[bool] = Field(
        None, description="Enable incremental snapshot reading")
    snapshot_chunk_size: Optional[int] = Field(
        None, ge=1, description="Rows per incremental snapshot chunk")

    @field_validator('port')
    @classmethod
    def validate_port(cls, v: int) -> int:
        """Validate port number."""
        if not (1 <= v <= 65535):
            raise ValueError("Port must be between 1 and 65535")
        return v

    def connector_family(self) -> Optional[str]:
        return "mysql-cdc"

    def table_options(self) -> Dict[str, str]:
        """Convert to mysql-cdc connector options."""
        options = super().table_options()
        options.update({
            "connector": "mysql-cdc",
            "hostname": self.hostname,
            "port": str(self.port),
            "username": self.username,
            "password": self.password,
            "database-name": self.database,
            "table-name": self._format_table_names(),
        })

        # Add optional parameters
        if self.server_id is not None:
            options["server-id"] = str(self.server_id)

        if self.incremental_snapshot_enabled is not None:
            options["scan.incremental.snapshot.enabled"] = (
                "true" if self.incremental_snapshot_enabled else "false")

        if self.snapshot_chunk_size is not None:
            options["scan.incremental.snapshot.chunk.size"] = str(self.snapshot_chunk_size)

        return options

    def _format_table_names(self) -> str:
        if len(self.table_names) == 1:
            return self.table_names[0]
        return f"({'|'.join(self.table_names)})"


class KafkaExtractNode(ExtractNode):
    """Kafka topic source.

    With a primary key the node reads through the upsert-kafka connector.
    """

    type: Literal["kafkaExtract"] = "kafkaExtract"

    topic: str = Field(..., min_length=1, description="Kafka topic to consume from")
    bootstrap_servers: str = Field(..., min_length=1,
                                   description="Comma-separated list of Kafka brokers")
    format: str = Field(default="json", min_length=1,
                        description="Message format, e.g. json, csv, canal-json, debezium-json")
    format_options: Dict[str, str] = Field(
        default_factory=dict, description="Options of the format, without the format prefix")
    group_id: Optional[str] = Field(None, description="Consumer group id")
    scan_startup_mode: str = Field(
        default="earliest-offset", description="Startup mode for the consumer")
    scan_startup_timestamp_millis: Optional[int] = None

    @model_validator(mode='after')
    def validate_startup(self):
        """Validate startup mode configuration."""
        valid_modes = ["earliest-offset", "latest-offset",
                       "group-offsets", "timestamp", "specific-offsets"]
        if self.scan_startup_mode not in valid_modes:
            raise ValueError(
                f"scan_startup_mode must be one of {valid_modes}, got '{self.scan_startup_mode}'")
        if self.scan_startup_mode == "timestamp" and self.scan_startup_timestamp_millis is None:
            raise ValueError(
                "scan_startup_timestamp_millis is required when scan_startup_mode is 'timestamp'")
        return self

    def connector_family(self) -> Optional[str]:
        return "kafka"

    def table_options(self) -> Dict[str, str]:
        """Convert to kafka / upsert-kafka connector options."""
        options = super().table_options()
        options["topic"] = self.topic
        options["properties.bootstrap.servers"] = self.bootstrap_servers

        if self.primary_key:
            # upsert-kafka needs separate key and value formats and has no startup mode
            options["connector"] = "upsert-kafka"
            options["key.format"] = self.format
            options["value.format"] = self.format
            for key, value in self.format_options.items():
                options[f"value.{self.format}.{key}"] = value
        else:
            options["connector"] = "kafka"
            options["format"] = self.format
            options["scan.startup.mode"] = self.scan_startup_mode
            if self.scan_startup_mode == "timestamp":
                options["scan.startup.timestamp-millis"] = str(self.scan_startup_timestamp_millis)
            for key, value in self.format_options.items():
                options[f"{self.format}.{key}"] = value

        if self.group_id:
            options["properties.group.id"] = self.group_id

        return options
