"""SQLite driver on top of the standard-library ``sqlite3`` module.

``sqlite3`` is blocking, so every call runs on a worker thread via
``asyncio.to_thread``.  A single connection is shared and serialised with
an ``asyncio.Lock``; the connection is opened in autocommit mode
(``isolation_level=None``), so each statement commits on its own.

``RETURNING`` needs SQLite 3.35 or newer.  No follow-up read is
synthesised for older libraries: ``create`` then fails with
:class:`~chainql.errors.MissingReturningError` or a syntax error from
SQLite itself.
"""
from __future__ import annotations

import asyncio
import logging
import sqlite3
from collections.abc import Sequence
from typing import Any

from chainql.drivers.base import Row
from chainql.drivers.config import SQLiteConfig
from chainql.errors import DriverNotConnectedError

logger = logging.getLogger(__name__)


class SQLiteDriver:
    """Async SQLite execution port.

    Args:
        config: Connection settings; defaults to a private in-memory DB.
    """

    dialect = "sqlite"

    def __init__(self, config: SQLiteConfig | None = None) -> None:
        self._config = config or SQLiteConfig()
        self._conn: sqlite3.Connection | None = None
        self._lock = asyncio.Lock()

    async def __aenter__(self) -> SQLiteDriver:
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.disconnect()

    async def connect(self) -> None:
        if self._conn is not None:
            return
        self._conn = await asyncio.to_thread(self._open)
        logger.info("SQLite connection opened (database=%s)", self._config.database)

    async def disconnect(self) -> None:
        if self._conn is None:
            return
        conn, self._conn = self._conn, None
        async with self._lock:
            await asyncio.to_thread(conn.close)
        logger.info("SQLite connection closed")

    async def execute(self, sql: str, params: Sequence[Any]) -> list[Row]:
        conn = self._conn
        if conn is None:
            raise DriverNotConnectedError(type(self).__name__)
        async with self._lock:
            return await asyncio.to_thread(self._run, conn, sql, list(params))

    def _open(self) -> sqlite3.Connection:
        conn = sqlite3.connect(
            self._config.database,
            timeout=self._config.timeout,
            isolation_level=None,
            check_same_thread=False,
        )
        conn.row_factory = sqlite3.Row
        return conn

    @staticmethod
    def _run(conn: sqlite3.Connection, sql: str, params: list[Any]) -> list[Row]:
        cur = conn.execute(sql, params)
        try:
            return [dict(row) for row in cur.fetchall()]
        finally:
            cur.close()
