"""chainql – a fluent, parameterized SQL query builder.

Chain calls. Bind values. Let the driver run it.

Public API
----------
``Builder``
    Fluent accumulator: ``table`` / ``select`` / ``distinct`` / ``where`` /
    ``order_by`` / ``limit`` / ``offset``, then one of the async terminal
    operations ``get``, ``first``, ``count``, ``create``, ``create_many``,
    ``update``, ``delete``.

``Grammar``
    Pure renderer from query shape to dialect SQL and positional values.

``Driver``
    The execution port protocol; ``PostgresDriver`` and ``SQLiteDriver``
    are built in.

Example::

    import chainql

    async with chainql.SQLiteDriver() as driver:
        db = chainql.Builder(driver)
        adults = await (
            db.table("users")
            .where("age", ">", 18)
            .order_by("created_at", "desc")
            .limit(10)
            .get()
        )

Extensibility
-------------
New dialect grammars can be registered via::

    from chainql.grammar.registry import GrammarFactory

    @GrammarFactory.register("duckdb")
    class DuckDBGrammar(Grammar):
        ...

Any driver whose ``dialect`` attribute is ``"duckdb"`` then gets that
grammar automatically.
"""
from __future__ import annotations

from chainql.drivers import (
    Driver,
    PostgresConfig,
    PostgresDriver,
    Row,
    SQLiteConfig,
    SQLiteDriver,
)
from chainql.errors import (
    ChainQLError,
    CompilationError,
    DriverNotConnectedError,
    EmptyPayloadError,
    InvalidDirectionError,
    InvalidIdentifierError,
    InvalidOperatorError,
    InvalidPaginationError,
    InvalidValueError,
    MissingReturningError,
    NoTableSelectedError,
    UnknownColumnError,
    UsageError,
)
from chainql.grammar import (
    CompiledQuery,
    Grammar,
    GrammarFactory,
    PostgresGrammar,
    SQLiteGrammar,
)
from chainql.query import ALLOWED_OPERATORS, Builder
from chainql.schema import OrderClause, QueryState, WhereClause

__all__ = [
    # Builder
    "Builder",
    "ALLOWED_OPERATORS",
    # State
    "QueryState",
    "WhereClause",
    "OrderClause",
    # Grammar
    "CompiledQuery",
    "Grammar",
    "GrammarFactory",
    "PostgresGrammar",
    "SQLiteGrammar",
    # Drivers
    "Driver",
    "Row",
    "PostgresConfig",
    "PostgresDriver",
    "SQLiteConfig",
    "SQLiteDriver",
    # Errors
    "ChainQLError",
    "UsageError",
    "NoTableSelectedError",
    "EmptyPayloadError",
    "InvalidOperatorError",
    "InvalidIdentifierError",
    "InvalidDirectionError",
    "InvalidPaginationError",
    "InvalidValueError",
    "UnknownColumnError",
    "CompilationError",
    "MissingReturningError",
    "DriverNotConnectedError",
]
