"""Client submitting compiled statement batches to a SQL gateway."""

from __future__ import annotations
import logging
from contextlib import contextmanager
from typing import Generator, List, Optional
from urllib.parse import quote

import psycopg
from pydantic import BaseModel, Field

from .compiler import CompileResult

logger = logging.getLogger(__name__)


class GatewayConfig(BaseModel):
    """Configuration for the SQL gateway connection.

    The gateway must speak the Postgres wire protocol and accept the Flink SQL
    dialect the compiler emits. Defaults point at a local Postgres-wire port.
    """

    host: str = "localhost"
    port: int = Field(default=5432, ge=1, le=65535)
    user: str = "root"
    password: Optional[str] = None
    database: str = "default"

    # disable, prefer, require, verify-ca, verify-full
    ssl_mode: Optional[str] = None
    connect_timeout: int = 30

    def dsn(self) -> str:
        """Build the PostgreSQL connection string for the gateway."""
        if self.password:
            base_dsn = f"postgresql://{quote(self.user)}:{quote(self.password)}@{self.host}:{self.port}/{self.database}"
        else:
            base_dsn = f"postgresql://{quote(self.user)}@{self.host}:{self.port}/{self.database}"

        params = []
        if self.ssl_mode:
            params.append(f"sslmode={self.ssl_mode}")
        if self.connect_timeout != 30:
            params.append(f"connect_timeout={self.connect_timeout}")

        if params:
            base_dsn += "?" + "&".join(params)

        return base_dsn


class SqlGatewayClient:
    """Executes statements on a SQL gateway speaking the Postgres wire protocol."""

    def __init__(self, config: Optional[GatewayConfig] = None, dsn: Optional[str] = None):
        """Initialize the gateway client.

        Args:
            config: Connection settings, defaults to GatewayConfig()
            dsn: PostgreSQL connection string, if provided overrides config
        """
        self.config = config or GatewayConfig()
        self._dsn = dsn or self.config.dsn()

    @contextmanager
    def connection(self) -> Generator[psycopg.Connection, None, None]:
        """Get a database connection context manager."""
        with psycopg.connect(self._dsn, autocommit=True) as conn:
            yield conn

    def execute(self, sql: str) -> None:
        """Execute one SQL statement without returning results."""
        logger.info(f"Executing SQL: {sql}")
        with self.connection() as conn:
            with conn.cursor() as cur:
                cur.execute(sql)

    def fetch_one(self, sql: str) -> Optional[tuple]:
        """Execute SQL and fetch one result."""
        logger.debug(f"Fetching one SQL: {sql}")
        with self.connection() as conn:
            with conn.cursor() as cur:
                cur.execute(sql)
                return cur.fetchone()

    def submit(self, result: CompileResult, dry_run: bool = False) -> List[str]:
        """Submit a compiled batch: DDL first, then DML, in order.

        Args:
            result: Compiled statements
            dry_run: Return the statements without executing them

        Returns:
            The statements that were (or would be) executed

        Raises:
            psycopg.Error: If a statement fails; later statements are not run
        """
        statements = result.statements()
        if dry_run:
            logger.info(f"Dry run, {len(statements)} statements not executed")
            return statements

        with self.connection() as conn:
            with conn.cursor() as cur:
                for i, sql in enumerate(statements, 1):
                    logger.info(f"Executing statement {i}/{len(statements)}")
                    logger.debug(sql)
                    try:
                        cur.execute(sql)
                    except psycopg.Error as e:
                        logger.error(f"Statement {i} failed: {e}")
                        raise
        logger.info(f"Submitted {len(statements)} statements")
        return statements

    def health_check(self) -> bool:
        """Check if the gateway is healthy and responsive.

        Returns:
            True if the gateway answers, False otherwise
        """
        try:
            result = self.fetch_one("SELECT 1")
            return result == (1,)
        except psycopg.Error as e:
            logger.warning(f"Health check failed: {e}")
            return False
