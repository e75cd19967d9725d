"""Fluent query builder.

``Builder`` accumulates one query's shape in a
:class:`~chainql.schema.state.QueryState`, hands it to the injected
:class:`~chainql.grammar.base.Grammar` on a terminal call, and passes the
compiled SQL to the :class:`~chainql.drivers.base.Driver`.

Lifecycle
---------
An instance alternates between *configuring* (fluent calls, no I/O) and a
single compile → execute step inside a terminal call.  After every
terminal call, successful or not, the state returns to its defaults
(the selected table is kept), so the same instance can be reused at once.

Concurrency
-----------
State is mutated in place without locks.  Never configure one instance
from several tasks; use :meth:`Builder.table` to get an independent
instance per query instead.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any, Generic, TypeVar, overload

from pydantic import BaseModel

from chainql.drivers.base import Driver, Row
from chainql.errors import (
    EmptyPayloadError,
    MissingReturningError,
    NoTableSelectedError,
    UnknownColumnError,
)
from chainql.grammar.base import Grammar
from chainql.grammar.registry import GrammarFactory
from chainql.query import guards
from chainql.schema.state import OrderClause, QueryState, WhereClause

logger = logging.getLogger(__name__)

RowT = TypeVar("RowT")
ModelT = TypeVar("ModelT")

#: Payload accepted by ``create`` / ``update``.
Payload = Mapping[str, Any] | BaseModel


class Builder(Generic[RowT]):
    """Stateful fluent accumulator over one query.

    Args:
        driver: Execution port, shared by reference with every instance
            derived through :meth:`table`.
        grammar: SQL grammar.  Defaults to the grammar registered for the
            driver's ``dialect`` attribute, or ``"postgres"``.
        model: Optional row-shape type.  When it is a pydantic model,
            result rows are validated into it and ``where`` / ``order_by``
            columns must be among its fields; any other type (e.g. a
            ``TypedDict``) only informs type checkers and rows stay dicts.
            A ``select(...)`` that leaves out a required model field makes
            hydration fail with pydantic's ``ValidationError``; narrow
            projections need a model whose missing fields have defaults.
    """

    def __init__(
        self,
        driver: Driver,
        grammar: Grammar | None = None,
        model: type[RowT] | None = None,
    ) -> None:
        self._driver = driver
        self._grammar = grammar or GrammarFactory.create(
            getattr(driver, "dialect", "postgres")
        )
        self._model = model
        self._state = QueryState()

    @property
    def grammar(self) -> Grammar:
        return self._grammar

    @property
    def state(self) -> QueryState:
        """The live query state (read it, don't mutate it)."""
        return self._state

    # ------------------------------------------------------------------
    # Fluent configuration
    # ------------------------------------------------------------------

    @overload
    def table(self, name: str) -> Builder[dict[str, Any]]: ...

    @overload
    def table(self, name: str, model: type[ModelT]) -> Builder[ModelT]: ...

    def table(self, name: str, model: type[Any] | None = None) -> Builder[Any]:
        """Return a NEW builder targeting ``name``.

        The new instance shares the driver and grammar but none of this
        instance's state.
        """
        instance: Builder[Any] = Builder(self._driver, self._grammar, model)
        instance._state.table = name
        return instance

    def select(self, *columns: str) -> Builder[RowT]:
        """Replace the projection list."""
        self._state.columns = list(columns)
        return self

    def distinct(self) -> Builder[RowT]:
        self._state.distinct = True
        return self

    def where(self, column: str, operator: str, value: Any) -> Builder[RowT]:
        """Append ``column operator value`` to the AND-joined filter list."""
        column = self._check_column(column)
        operator = guards.check_operator(operator)
        guards.check_value(column, operator, value)
        clause = WhereClause(column=column, operator=operator, value=value)
        self._state.add_where(clause, self._grammar.bind_value(clause))
        return self

    def order_by(self, column: str, direction: str = "asc") -> Builder[RowT]:
        column = self._check_column(column)
        self._state.orders.append(
            OrderClause(column=column, direction=guards.check_direction(direction))
        )
        return self

    def limit(self, n: int) -> Builder[RowT]:
        self._state.limit = guards.check_pagination("limit", n)
        return self

    def offset(self, n: int) -> Builder[RowT]:
        self._state.offset = guards.check_pagination("offset", n)
        return self

    # ------------------------------------------------------------------
    # Terminal operations
    # ------------------------------------------------------------------

    async def get(self) -> list[RowT]:
        """Run the SELECT and return every matching row."""
        try:
            self._require_table("get")
            compiled = self._grammar.compile_query(self._state)
            rows = await self._execute(compiled.sql, compiled.values)
        finally:
            self._state.reset()
        return [self._hydrate(row) for row in rows]

    async def first(self) -> RowT | None:
        """Run the SELECT with ``LIMIT 1``; ``None`` when nothing matches."""
        self._state.limit = 1
        rows = await self.get()
        return rows[0] if rows else None

    async def count(self) -> int:
        """Return ``COUNT(*)`` over the rows matching the current filters."""
        try:
            self._require_table("count")
            sql = self._grammar.compile_count(self._state.table, self._state.wheres)
            rows = await self._execute(sql, list(self._state.bindings))
        finally:
            self._state.reset()
        if not rows:
            return 0
        # Some drivers hand back bigint counts as strings.
        return int(str(rows[0]["count"]), 10)

    async def create(self, data: Payload) -> RowT:
        """INSERT one row and return it as echoed by ``RETURNING *``.

        Raises:
            EmptyPayloadError: If ``data`` has no keys.
            MissingReturningError: If the driver returned no row.
        """
        try:
            table = self._require_table("create")
            payload = self._payload(data, "create")
            compiled = self._grammar.compile_insert(table, payload)
            rows = await self._execute(compiled.sql, compiled.values)
        finally:
            self._state.reset()
        if not rows:
            raise MissingReturningError(table)
        return self._hydrate(rows[0])

    async def create_many(self, items: Iterable[Payload]) -> list[RowT]:
        """INSERT each item in order, one statement at a time.

        Inserts are not wrapped in a transaction: when one fails, the rows
        created before it stay committed and the error propagates.
        """
        created: list[RowT] = []
        try:
            self._require_table("create_many")
            for item in items:
                created.append(await self.create(item))
        finally:
            self._state.reset()
        return created

    async def update(self, data: Payload) -> list[RowT]:
        """UPDATE the rows matching the current filters and return them.

        Without any ``where`` this updates every row of the table.

        Raises:
            EmptyPayloadError: If ``data`` has no keys.
        """
        try:
            table = self._require_table("update")
            payload = self._payload(data, "update")
            compiled = self._grammar.compile_update(table, payload, self._state.wheres)
            # SET values first, then WHERE bindings.
            rows = await self._execute(
                compiled.sql, [*compiled.values, *self._state.bindings]
            )
        finally:
            self._state.reset()
        return [self._hydrate(row) for row in rows]

    async def delete(self) -> None:
        """DELETE the rows matching the current filters."""
        try:
            table = self._require_table("delete")
            sql = self._grammar.compile_delete(table, self._state.wheres)
            await self._execute(sql, list(self._state.bindings))
        finally:
            self._state.reset()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _execute(self, sql: str, params: Sequence[Any]) -> list[Row]:
        logger.debug("Executing %s (%d bindings)", sql, len(params))
        return list(await self._driver.execute(sql, params))

    def _require_table(self, operation: str) -> str:
        if not self._state.table:
            raise NoTableSelectedError(operation)
        return self._state.table

    def _check_column(self, column: str) -> str:
        column = guards.check_column(column)
        fields = self._model_fields()
        if fields is not None and column.rsplit(".", 1)[-1] not in fields:
            raise UnknownColumnError(column, self._model.__name__, fields)  # type: ignore[union-attr]
        return column

    def _model_fields(self) -> list[str] | None:
        if isinstance(self._model, type) and issubclass(self._model, BaseModel):
            return list(self._model.model_fields)
        return None

    def _hydrate(self, row: Row) -> RowT:
        if isinstance(self._model, type) and issubclass(self._model, BaseModel):
            return self._model.model_validate(dict(row))  # type: ignore[return-value]
        return dict(row)  # type: ignore[return-value]

    @staticmethod
    def _payload(data: Payload, operation: str) -> dict[str, Any]:
        if isinstance(data, BaseModel):
            payload = data.model_dump(exclude_unset=True)
        else:
            payload = dict(data)
        if not payload:
            raise EmptyPayloadError(operation)
        for key in payload:
            guards.check_column(key)
        return payload
