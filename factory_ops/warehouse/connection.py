"""
psycopg 3 connection pool for the PostgreSQL collection store.

Callers build a DatabaseConnectionPool, open it, and pass it to
PostgresCollectionStore. Nothing here is global.
"""
import os
import time
from contextlib import contextmanager
from typing import Any, Iterator

from psycopg import Cursor, OperationalError
from psycopg.conninfo import make_conninfo
from psycopg.rows import dict_row
from psycopg_pool import ConnectionPool, PoolTimeout

from factory_ops.observability import get_logger

logger = get_logger(__name__)

Params = tuple | dict | None


class DatabaseConnectionPool:
    """
    Bounded pool of PostgreSQL connections returning rows as dicts.

    Connection settings not passed explicitly come from DB_HOST, DB_PORT,
    DB_NAME, DB_USER and DB_PASSWORD. A full `conninfo` string replaces all
    of them.

    Args:
        conninfo: libpq connection string
        min_size / max_size: Pool bounds
        timeout: Seconds to wait for a connection
    """

    def __init__(
        self,
        host: str | None = None,
        port: int | None = None,
        database: str | None = None,
        user: str | None = None,
        password: str | None = None,
        conninfo: str | None = None,
        min_size: int = 1,
        max_size: int = 5,
        timeout: float = 30.0,
    ) -> None:
        if not conninfo:
            password = password or os.getenv("DB_PASSWORD")
            if not password:
                raise ValueError("No database password: pass --db-password or set DB_PASSWORD")
            conninfo = make_conninfo(
                host=host or os.getenv("DB_HOST", "localhost"),
                port=port or int(os.getenv("DB_PORT", "5432")),
                dbname=database or os.getenv("DB_NAME", "factory_ops"),
                user=user or os.getenv("DB_USER", "factory_ops"),
                password=password,
                connect_timeout=int(timeout),
            )

        self.conninfo = conninfo
        self.bounds = (min_size, max_size)
        self.timeout = timeout
        self._pool: ConnectionPool | None = None

    @property
    def is_open(self) -> bool:
        return self._pool is not None

    def open(self, attempts: int = 3, backoff: float = 2.0) -> None:
        """
        Connect, retrying with a fixed backoff. Opening twice is a no-op.

        Raises:
            OperationalError: When every attempt failed
        """
        if self.is_open:
            return

        min_size, max_size = self.bounds
        last_error: Exception | None = None
        for attempt in range(1, attempts + 1):
            pool = ConnectionPool(
                self.conninfo,
                min_size=min_size,
                max_size=max_size,
                timeout=self.timeout,
                kwargs={"row_factory": dict_row},
                open=False,
            )
            try:
                pool.open(wait=True, timeout=self.timeout)
            except (PoolTimeout, OperationalError) as e:
                pool.close()
                last_error = e
                logger.warning(f"Database not reachable (attempt {attempt}/{attempts}): {e}")
                if attempt < attempts:
                    time.sleep(backoff)
                continue

            self._pool = pool
            logger.info("Database pool open", extra={"min_size": min_size, "max_size": max_size})
            return

        raise OperationalError(f"Could not connect after {attempts} attempts: {last_error}")

    def close(self) -> None:
        if self._pool is not None:
            self._pool.close()
            self._pool = None

    @contextmanager
    def transaction(self) -> Iterator[Cursor]:
        """
        Cursor whose statements commit together when the block exits, or roll
        back together when it raises.
        """
        if self._pool is None:
            raise RuntimeError("Database pool is closed; call open() first")
        with self._pool.connection() as conn, conn.cursor() as cur:
            yield cur

    def fetch_all(self, query: Any, params: Params = None) -> list[dict]:
        """Rows of a SELECT (or INSERT ... RETURNING)."""
        with self.transaction() as cur:
            cur.execute(query, params)
            return cur.fetchall()

    def execute(self, statement: Any, params: Params = None) -> int:
        """Run a write statement and return the affected row count."""
        with self.transaction() as cur:
            cur.execute(statement, params)
            return cur.rowcount

    def __enter__(self) -> "DatabaseConnectionPool":
        self.open()
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
