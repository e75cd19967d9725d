"""Grammar abstractions: CompiledQuery and the Grammar base class.

The Template Method pattern is used:
- ``Grammar`` renders every statement shape (SELECT / INSERT / UPDATE /
  DELETE / COUNT) and the shared WHERE clause.
- ``PostgresGrammar`` and ``SQLiteGrammar`` override the dialect-specific
  steps (placeholder syntax, ``IN`` rendering, value binding).

Column names and operators are interpolated as raw text.  They are assumed
to come from trusted code; only values are parameterized.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from chainql.schema.state import QueryState, WhereClause


@dataclass
class CompiledQuery:
    """The output of a single compile step.

    Attributes:
        sql: The compiled SQL string with positional placeholders.
        values: Bound values in placeholder order.
    """

    sql: str
    values: list[Any] = field(default_factory=list)


class Grammar(ABC):
    """Abstract base for dialect-specific SQL grammars.

    Every method is pure: no I/O, no mutation of its inputs, and the same
    inputs always produce the same output.
    """

    @property
    @abstractmethod
    def dialect_name(self) -> str:
        """Return the canonical dialect name (``'postgres'`` or ``'sqlite'``)."""

    @abstractmethod
    def placeholder(self, index: int) -> str:
        """Return the placeholder for the 1-indexed positional parameter ``index``."""

    # ------------------------------------------------------------------
    # Dialect hooks
    # ------------------------------------------------------------------

    def compile_predicate(self, where: WhereClause, index: int) -> str:
        """Render one predicate bound to placeholder ``index``."""
        return f"{where.column} {where.operator} {self.placeholder(index)}"

    def bind_value(self, where: WhereClause) -> Any:
        """Return the value actually bound for ``where``."""
        return where.value

    # ------------------------------------------------------------------
    # Statement compilers
    # ------------------------------------------------------------------

    def compile_select(self, table: str, columns: Sequence[str] = ("*",)) -> str:
        cols = ", ".join(columns) if len(columns) > 0 else "*"
        return f"SELECT {cols} FROM {table}"

    def compile_insert(self, table: str, data: Mapping[str, Any]) -> CompiledQuery:
        """Render ``INSERT ... RETURNING *``.

        Placeholder ``i`` belongs to the ``i``-th key of ``data``.  An empty
        mapping renders ``INSERT INTO t () VALUES () RETURNING *``.
        """
        keys = list(data.keys())
        placeholders = ", ".join(self.placeholder(i + 1) for i in range(len(keys)))
        sql = (
            f"INSERT INTO {table} ({', '.join(keys)}) "
            f"VALUES ({placeholders}) RETURNING *"
        )
        return CompiledQuery(sql=sql, values=[data[k] for k in keys])

    def compile_update(
        self,
        table: str,
        data: Mapping[str, Any],
        wheres: Sequence[WhereClause],
    ) -> CompiledQuery:
        """Render ``UPDATE ... SET ... [WHERE ...]``.

        WHERE placeholders are numbered after all SET placeholders, so the
        caller must bind ``[*values, *where_bindings]`` in that order.  The
        returned ``values`` hold the SET values only.
        """
        keys = list(data.keys())
        set_clause = ", ".join(
            f"{key} = {self.placeholder(i + 1)}" for i, key in enumerate(keys)
        )
        sql = f"UPDATE {table} SET {set_clause}"
        sql += self.compile_wheres(wheres, offset=len(keys))
        return CompiledQuery(sql=sql, values=[data[k] for k in keys])

    def compile_delete(self, table: str, wheres: Sequence[WhereClause]) -> str:
        return f"DELETE FROM {table}" + self.compile_wheres(wheres)

    def compile_count(self, table: str, wheres: Sequence[WhereClause]) -> str:
        return f"SELECT COUNT(*) as count FROM {table}" + self.compile_wheres(wheres)

    def compile_wheres(self, wheres: Sequence[WhereClause], offset: int = 0) -> str:
        """Render `` WHERE c1 op p1 AND ...`` or the empty string.

        Args:
            wheres: Predicates in placeholder order.
            offset: Number of placeholders already used earlier in the
                statement.
        """
        if not wheres:
            return ""
        conditions = [
            self.compile_predicate(w, offset + i + 1) for i, w in enumerate(wheres)
        ]
        return f" WHERE {' AND '.join(conditions)}"

    def compile_query(self, state: QueryState) -> CompiledQuery:
        """Render a full read statement from ``state``.

        Clause order is fixed: SELECT, WHERE, ORDER BY, LIMIT, OFFSET.
        """
        sql = self.compile_select(state.table, state.columns)
        if state.distinct:
            sql = "SELECT DISTINCT" + sql[len("SELECT"):]
        sql += self.compile_wheres(state.wheres)
        if state.orders:
            order_parts = [f"{o.column} {o.direction.upper()}" for o in state.orders]
            sql += f" ORDER BY {', '.join(order_parts)}"
        if state.limit is not None:
            sql += f" LIMIT {state.limit}"
        if state.offset is not None:
            sql += f" OFFSET {state.offset}"
        return CompiledQuery(sql=sql, values=list(state.bindings))
