"""PostgreSQL data source implementation."""

import logging
from typing import Any, Dict, List, Sequence, Tuple

import psycopg2
from psycopg2 import pool

from .base import DataSource

logger = logging.getLogger(__name__)


class PostgreSQLDataSource(DataSource):
    """PostgreSQL data source connector with connection pooling."""

    def __init__(self, name: str, config: Dict[str, Any]):
        """Initialize PostgreSQL data source.

        Config should include:
            - host: Database host
            - port: Database port
            - database: Database name
            - user: Username
            - password: Password
            - sslmode: SSL mode (default: disable)
            - min_connections: Minimum connections in pool (default: 1)
            - max_connections: Maximum connections in pool (default: 4)
        """
        super().__init__(name, config)
        self._pool = None
        self._min_connections = config.get("min_connections", 1)
        self._max_connections = config.get("max_connections", 4)

    def connect(self) -> None:
        """Establish connection pool to PostgreSQL."""
        try:
            logger.info(
                f"Connecting to PostgreSQL database '{self.config.get('database')}' "
                f"at {self.config.get('host')}"
            )
            self._pool = pool.ThreadedConnectionPool(
                self._min_connections,
                self._max_connections,
                host=self.config.get("host") or None,
                port=self.config.get("port") or 5432,
                database=self.config.get("database") or None,
                user=self.config.get("user") or None,
                password=self.config.get("password") or None,
                sslmode=self.config.get("sslmode", "disable"),
                options="-c standard_conforming_strings=on",
            )
            # Get a test connection to verify it works
            conn = self._pool.getconn()
            self._pool.putconn(conn)
            self._connected = True
            logger.info(f"Successfully connected to PostgreSQL: {self.name}")
        except psycopg2.Error as e:
            logger.error(f"Failed to connect to PostgreSQL {self.name}: {e}")
            raise ConnectionError(f"PostgreSQL connection failed: {e}") from e

    def disconnect(self) -> None:
        """Close all connections in the pool."""
        if self._pool:
            self._pool.closeall()
            logger.info(f"Disconnected from PostgreSQL: {self.name}")
            self._pool = None
            self._connected = False

    def _get_connection(self):
        """Get a connection from the pool."""
        if not self._pool:
            raise RuntimeError(f"Not connected to {self.name}")
        return self._pool.getconn()

    def _return_connection(self, conn):
        """Return a connection to the pool."""
        if self._pool:
            self._pool.putconn(conn)

    def query(self, sql: str, params: Sequence[Any] = ()) -> List[Tuple[Any, ...]]:
        """Execute a read-only query and fetch every row."""
        conn = self._get_connection()
        try:
            with conn.cursor() as cursor:
                logger.debug(f"Executing query on {self.name}: {sql.strip()[:100]}...")
                cursor.execute(sql, tuple(params))
                rows = cursor.fetchall()
            return [tuple(row) for row in rows]
        except psycopg2.Error as e:
            logger.error(f"Query execution failed on {self.name}: {e}")
            raise
        finally:
            self._return_connection(conn)
