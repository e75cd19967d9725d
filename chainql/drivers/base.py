"""Protocol interface for the execution port.

The builder only ever calls :meth:`Driver.execute`.  ``connect`` and
``disconnect`` belong to the surrounding application, which owns the
driver's lifecycle.  Production implementations wrap a database client;
test fakes return canned rows with zero network or filesystem access.
"""
from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Protocol, runtime_checkable

#: A result row: column name → value.
Row = Mapping[str, Any]


@runtime_checkable
class Driver(Protocol):
    """Executes compiled SQL with positional parameters.

    A driver may expose a ``dialect`` attribute (e.g. ``"sqlite"``); the
    builder uses it to pick a matching grammar and falls back to
    ``"postgres"`` when it is absent.

    Pooling, timeouts, and cancellation are the driver's concern.  Errors
    raised by ``execute`` propagate to the builder's caller unchanged.
    """

    async def connect(self) -> None:
        """Acquire the underlying connection or pool."""
        ...

    async def disconnect(self) -> None:
        """Release the underlying connection or pool."""
        ...

    async def execute(self, sql: str, params: Sequence[Any]) -> list[Row]:
        """Execute ``sql`` with ``params`` bound positionally.

        Args:
            sql: Compiled SQL text.
            params: Bound values in placeholder order.

        Returns:
            The result rows; an empty list for statements returning nothing.
        """
        ...
