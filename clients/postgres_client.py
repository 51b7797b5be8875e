"""
PostgreSQL client with connection pooling.

Uses psycopg2 with ThreadedConnectionPool so the card-data fan-out can run
its reads on worker threads. Every driver error surfaces as StorageError;
callers never see psycopg2 exception types.
"""

import logging
import threading
from contextlib import contextmanager
from typing import Any, Dict, List, Tuple
from uuid import UUID

import psycopg2
import psycopg2.extras
import psycopg2.pool

from core.exceptions import StorageError

logger = logging.getLogger(__name__)


class PostgresClient:
    """
    PostgreSQL client returning plain row dicts.

    Usage:
        db = PostgresClient(database_url, password=secret)

        rows = db.execute("SELECT id, name FROM customers ORDER BY name")
        count = db.execute_scalar("SELECT COUNT(*) FROM invoices")

    Each statement borrows a connection from the pool and returns it when
    done. Writes are committed per statement; there are no multi-statement
    transactions.
    """

    # Class-level connection pools shared across instances
    _connection_pools: Dict[str, psycopg2.pool.ThreadedConnectionPool] = {}
    _pools_lock = threading.RLock()

    def __init__(
        self,
        database_url: str,
        password: str | None = None,
        min_connections: int = 2,
        max_connections: int = 20,
    ):
        self._database_url = database_url
        self._password = password
        self._min_connections = min_connections
        self._max_connections = max_connections
        self._ensure_connection_pool()

    @classmethod
    def from_config(cls, config) -> "PostgresClient":
        """Build a client from a StorageConfig."""
        return cls(
            config.database_url,
            password=config.database_password,
            min_connections=config.pool_min_connections,
            max_connections=config.pool_max_connections,
        )

    def _ensure_connection_pool(self) -> None:
        """Create connection pool if it doesn't exist."""
        with self._pools_lock:
            if self._database_url not in self._connection_pools:
                connect_kwargs = {"connect_timeout": 30}
                if self._password is not None:
                    connect_kwargs["password"] = self._password

                try:
                    pool = psycopg2.pool.ThreadedConnectionPool(
                        minconn=self._min_connections,
                        maxconn=self._max_connections,
                        dsn=self._database_url,
                        **connect_kwargs,
                    )
                except psycopg2.Error as e:
                    raise StorageError(f"Could not connect to database: {e}") from e

                self._connection_pools[self._database_url] = pool
                logger.info("Connection pool created")

    @contextmanager
    def get_connection(self):
        """Borrow a pooled connection for the duration of the block."""
        if self._database_url not in self._connection_pools:
            self._ensure_connection_pool()

        pool = self._connection_pools[self._database_url]
        conn = None

        try:
            try:
                conn = pool.getconn()
            except psycopg2.Error as e:
                raise StorageError(f"Could not get connection from pool: {e}") from e
            if conn is None:
                raise StorageError("Could not get connection from pool")

            yield conn

        finally:
            if conn:
                pool.putconn(conn)

    def _convert_params(self, params: Tuple | Dict | None) -> Tuple | Dict | None:
        """Convert UUID objects to strings."""
        if params is None:
            return None

        def convert(value: Any) -> Any:
            if isinstance(value, UUID):
                return str(value)
            if isinstance(value, tuple):
                return tuple(convert(v) for v in value)
            if isinstance(value, dict):
                return {k: convert(v) for k, v in value.items()}
            return value

        return convert(params)

    def execute(self, query: str, params: Tuple | Dict | None = None) -> List[Dict[str, Any]]:
        """Execute query, return list of row dicts. Empty list if no results."""
        params = self._convert_params(params)
        with self.get_connection() as conn:
            try:
                with conn.cursor(cursor_factory=psycopg2.extras.RealDictCursor) as cur:
                    cur.execute(query, params)
                    if cur.description:
                        return [dict(row) for row in cur.fetchall()]
                    conn.commit()
                    return []
            except psycopg2.Error as e:
                raise StorageError(str(e).strip()) from e

    def execute_single(self, query: str, params: Tuple | Dict | None = None) -> Dict[str, Any] | None:
        """Execute query, return first row or None."""
        results = self.execute(query, params)
        return results[0] if results else None

    def execute_scalar(self, query: str, params: Tuple | Dict | None = None) -> Any:
        """Execute query, return first value of first row or None."""
        params = self._convert_params(params)
        with self.get_connection() as conn:
            try:
                with conn.cursor() as cur:
                    cur.execute(query, params)
                    result = cur.fetchone()
                    return result[0] if result else None
            except psycopg2.Error as e:
                raise StorageError(str(e).strip()) from e

    def execute_returning(self, query: str, params: Tuple | Dict | None = None) -> List[Dict[str, Any]]:
        """Execute INSERT/UPDATE/DELETE with RETURNING, commit, return rows."""
        params = self._convert_params(params)
        with self.get_connection() as conn:
            try:
                with conn.cursor(cursor_factory=psycopg2.extras.RealDictCursor) as cur:
                    cur.execute(query, params)
                    rows = [dict(row) for row in cur.fetchall()]
                conn.commit()
                return rows
            except psycopg2.Error as e:
                conn.rollback()
                raise StorageError(str(e).strip()) from e

    def close(self) -> None:
        """Close connection pool."""
        with self._pools_lock:
            if self._database_url in self._connection_pools:
                self._connection_pools[self._database_url].closeall()
                del self._connection_pools[self._database_url]

    @classmethod
    def close_all_pools(cls) -> None:
        """Close all connection pools."""
        with cls._pools_lock:
            for pool in cls._connection_pools.values():
                pool.closeall()
            cls._connection_pools.clear()
