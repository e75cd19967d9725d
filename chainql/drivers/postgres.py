"""PostgreSQL driver backed by a psycopg 3 async connection pool.

Statements run on ``AsyncRawCursor`` so the grammar's ``$1, $2, ...``
placeholders are passed to the server untouched, and rows come back as
dicts via ``dict_row``.  Connections are in autocommit mode: every
statement commits on its own and nothing is wrapped in a transaction.

``INSERT ... RETURNING *`` and ``UPDATE ... RETURNING`` are native, so no
follow-up read is ever needed.

Example::

    from chainql import Builder
    from chainql.drivers import PostgresConfig, PostgresDriver

    async with PostgresDriver(PostgresConfig(dsn=dsn)) as driver:
        users = await Builder(driver).table("users").where("age", ">", 18).get()
"""
from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from psycopg import AsyncRawCursor
from psycopg.rows import dict_row
from psycopg_pool import AsyncConnectionPool

from chainql.drivers.base import Row
from chainql.drivers.config import PostgresConfig
from chainql.errors import DriverNotConnectedError

logger = logging.getLogger(__name__)


class PostgresDriver:
    """Async PostgreSQL execution port.

    Args:
        config: Connection and pool settings.
    """

    dialect = "postgres"

    def __init__(self, config: PostgresConfig) -> None:
        self._config = config
        self._pool: AsyncConnectionPool | None = None

    async def __aenter__(self) -> PostgresDriver:
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.disconnect()

    async def connect(self) -> None:
        """Open the pool and wait until ``min_size`` connections are ready."""
        if self._pool is not None:
            return
        pool = AsyncConnectionPool(
            conninfo=self._config.dsn,
            min_size=self._config.min_size,
            max_size=self._config.max_size,
            timeout=self._config.timeout,
            open=False,
            kwargs={
                "autocommit": True,
                "cursor_factory": AsyncRawCursor,
                "row_factory": dict_row,
            },
        )
        await pool.open(wait=True, timeout=self._config.timeout)
        self._pool = pool
        logger.info(
            "PostgreSQL pool opened (min_size=%d, max_size=%d)",
            self._config.min_size,
            self._config.max_size,
        )

    async def disconnect(self) -> None:
        if self._pool is None:
            return
        pool, self._pool = self._pool, None
        await pool.close()
        logger.info("PostgreSQL pool closed")

    async def execute(self, sql: str, params: Sequence[Any]) -> list[Row]:
        if self._pool is None:
            raise DriverNotConnectedError(type(self).__name__)
        async with self._pool.connection() as conn:
            cur = await conn.execute(sql, list(params))
            if cur.description is None:
                return []
            return await cur.fetchall()
