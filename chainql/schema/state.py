"""Per-query mutable state owned by a single :class:`~chainql.query.builder.Builder`.

``QueryState`` accumulates the shape of one query between fluent calls.
It is mutated in place without synchronisation, so one instance must never
be configured from several tasks at once.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

#: Sort directions accepted by ``order_by``.
Direction = Literal["asc", "desc"]


@dataclass(frozen=True)
class WhereClause:
    """A single conjunctive filter predicate.

    Attributes:
        column: Column name, interpolated as raw SQL text.
        operator: Comparison operator, interpolated as raw SQL text.
        value: Value sent out-of-band as a bound parameter.
    """

    column: str
    operator: str
    value: Any


@dataclass(frozen=True)
class OrderClause:
    """A single ``ORDER BY`` term."""

    column: str
    direction: Direction = "asc"


def _default_columns() -> list[str]:
    return ["*"]


@dataclass
class QueryState:
    """Accumulates the shape of one query.

    ``bindings`` mirrors ``wheres`` index for index and is the single source
    of truth for the positional parameters of read operations.

    Attributes:
        table: Target table; the empty string means no table is selected.
        columns: Projection list.
        wheres: AND-joined predicates, in placeholder order.
        orders: Ordering terms, in clause order.
        limit: Optional LIMIT value.
        offset: Optional OFFSET value.
        distinct: Whether to emit ``SELECT DISTINCT``.
        bindings: Bound where values.
    """

    table: str = ""
    columns: list[str] = field(default_factory=_default_columns)
    wheres: list[WhereClause] = field(default_factory=list)
    orders: list[OrderClause] = field(default_factory=list)
    limit: int | None = None
    offset: int | None = None
    distinct: bool = False
    bindings: list[Any] = field(default_factory=list)

    def add_where(self, where: WhereClause, binding: Any) -> None:
        """Append a predicate together with its bound value."""
        self.wheres.append(where)
        self.bindings.append(binding)

    def reset(self) -> None:
        """Return every field except ``table`` to its construction default."""
        self.columns = _default_columns()
        self.wheres = []
        self.orders = []
        self.limit = None
        self.offset = None
        self.distinct = False
        self.bindings = []
