import time
from contextlib import contextmanager
from typing import Generator, Optional

import psycopg2
from psycopg2 import OperationalError
from psycopg2.extras import RealDictCursor
from psycopg2.pool import ThreadedConnectionPool

from lunaris_api.config import Settings
from lunaris_api.utils.logger import get_logger

logger = get_logger(__name__)


class PostgresStore:
    """
    Connection-pool backed store client.

    One instance is created per process (see `lunaris_api/main.py`) and handed
    to request handlers through `Depends(get_store)`.
    """

    def __init__(self, pool: ThreadedConnectionPool):
        self._pool: Optional[ThreadedConnectionPool] = pool

    @classmethod
    def from_settings(cls, settings: Settings) -> "PostgresStore":
        dsn = (settings.database_url or "").strip()
        if not dsn:
            raise RuntimeError("DATABASE_URL is not set.")

        connect_kwargs = {"options": "-c client_encoding=UTF8"}
        if settings.db_sslmode:
            connect_kwargs["sslmode"] = settings.db_sslmode

        max_retries = max(1, settings.db_conn_retries)
        retry_delay = max(0.0, settings.db_conn_retry_delay)
        for attempt in range(1, max_retries + 1):
            try:
                pool = ThreadedConnectionPool(
                    settings.db_pool_min,
                    max(settings.db_pool_min, settings.db_pool_max),
                    dsn=dsn,
                    **connect_kwargs,
                )
                break
            except OperationalError:
                if attempt == max_retries:
                    raise
                logger.warning(
                    "Database not reachable (attempt %s/%s); retrying in %.1fs",
                    attempt,
                    max_retries,
                    retry_delay,
                )
                time.sleep(retry_delay)
        logger.info(
            "Database pool ready (min=%s, max=%s)",
            settings.db_pool_min,
            settings.db_pool_max,
        )
        return cls(pool)

    @property
    def pool(self) -> ThreadedConnectionPool:
        if self._pool is None:
            raise RuntimeError("Store is closed.")
        return self._pool

    @contextmanager
    def cursor(self, cursor_factory=RealDictCursor) -> Generator[psycopg2.extensions.cursor, None, None]:
        conn = self.pool.getconn()
        try:
            cur = conn.cursor(cursor_factory=cursor_factory)
            try:
                yield cur
                conn.commit()
            except Exception:
                conn.rollback()
                raise
            finally:
                cur.close()
        finally:
            # Broken connections are discarded instead of going back to the pool.
            self.pool.putconn(conn, close=bool(conn.closed))

    def close(self) -> None:
        if self._pool is None:
            return
        self._pool.closeall()
        self._pool = None
