"""Test fixtures: a recording fake driver and sample DDL."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Any, Literal

_FIXTURES_DIR = Path(__file__).parent


class RecordingDriver:
    """In-memory fake satisfying the ``Driver`` protocol.

    Returns queued canned results and records every ``execute`` call for
    assertions.

    Args:
        responses: One row list per expected call, consumed in order.  Calls
            past the end of the queue return ``[]``.
        error: When set, every ``execute`` call records itself and then
            raises this exception.
        dialect: Reported dialect, used by the builder to pick a grammar.
    """

    def __init__(
        self,
        responses: list[list[dict[str, Any]]] | None = None,
        error: Exception | None = None,
        dialect: str = "postgres",
    ) -> None:
        self.responses: list[list[dict[str, Any]]] = list(responses or [])
        self.error = error
        self.dialect = dialect
        self.calls: list[tuple[str, list[Any]]] = []
        self.connected = False

    async def connect(self) -> None:
        self.connected = True

    async def disconnect(self) -> None:
        self.connected = False

    async def execute(self, sql: str, params: Sequence[Any]) -> list[dict[str, Any]]:
        self.calls.append((sql, list(params)))
        if self.error is not None:
            raise self.error
        if self.responses:
            return self.responses.pop(0)
        return []

    @property
    def last_sql(self) -> str:
        return self.calls[-1][0]

    @property
    def last_params(self) -> list[Any]:
        return self.calls[-1][1]


def load_ddl(target: Literal["sqlite", "postgres"] = "sqlite") -> list[str]:
    """Return the sample DDL statements for the given backend.

    Statements are split on ``;`` so each can go through a driver's
    single-statement ``execute``.
    """
    text = (_FIXTURES_DIR / f"ddl_{target}.sql").read_text()
    return [stmt.strip() for stmt in text.split(";") if stmt.strip()]
