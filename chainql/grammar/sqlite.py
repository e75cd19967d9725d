"""SQLite dialect grammar."""
from __future__ import annotations

import datetime
import json
import uuid
from decimal import Decimal
from typing import Any

from chainql.errors import InvalidValueError
from chainql.grammar.base import Grammar
from chainql.grammar.registry import GrammarFactory
from chainql.schema.state import WhereClause


def _json_scalar(value: Any) -> Any:
    # Same text forms sqlite3's own adapters would store.
    if isinstance(value, (datetime.date, datetime.time)):
        return value.isoformat()
    if isinstance(value, (Decimal, uuid.UUID)):
        return str(value)
    raise TypeError(f"{type(value).__name__} values cannot be matched with IN on SQLite.")


@GrammarFactory.register("sqlite")
class SQLiteGrammar(Grammar):
    """Renders SQLite-flavoured parameterized SQL.

    Parameter style: ``?`` – compatible with Python's built-in ``sqlite3``
    positional execution (``cursor.execute(sql, params)``).  Placeholders are
    bound in textual order, which matches the SET-then-WHERE numbering.

    Note: SQLite has no ``ILIKE``; it is mapped to ``LIKE``, which is
    case-insensitive for ASCII by default.  ``IN`` binds the sequence as one
    JSON array and expands it with ``json_each``.  Dates, times, ``Decimal``
    and ``UUID`` members are sent as text; ``bytes`` and other values with
    no JSON form are rejected with :class:`InvalidValueError`.
    """

    @property
    def dialect_name(self) -> str:
        return "sqlite"

    def placeholder(self, index: int) -> str:
        return "?"

    def compile_predicate(self, where: WhereClause, index: int) -> str:
        if where.operator == "IN":
            return f"{where.column} IN (SELECT value FROM json_each({self.placeholder(index)}))"
        if where.operator == "ILIKE":
            return f"{where.column} LIKE {self.placeholder(index)}"
        return super().compile_predicate(where, index)

    def bind_value(self, where: WhereClause):
        if where.operator == "IN":
            try:
                return json.dumps(list(where.value), default=_json_scalar)
            except (TypeError, ValueError) as e:
                raise InvalidValueError(where.column, where.operator, str(e)) from e
        return where.value
