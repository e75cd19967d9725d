"""PostgreSQL dialect grammar."""
from __future__ import annotations

from chainql.grammar.base import Grammar
from chainql.grammar.registry import GrammarFactory
from chainql.schema.state import WhereClause


@GrammarFactory.register("postgres")
class PostgresGrammar(Grammar):
    """Renders PostgreSQL-flavoured parameterized SQL.

    Parameter style: ``$1, $2, ...`` – PostgreSQL's native positional
    placeholders, as sent by ``psycopg``'s raw cursors.

    ``IN`` binds a single array parameter and renders as ``= ANY($n)``, so
    every predicate keeps exactly one placeholder.
    """

    @property
    def dialect_name(self) -> str:
        return "postgres"

    def placeholder(self, index: int) -> str:
        return f"${index}"

    def compile_predicate(self, where: WhereClause, index: int) -> str:
        if where.operator == "IN":
            return f"{where.column} = ANY({self.placeholder(index)})"
        return super().compile_predicate(where, index)

    def bind_value(self, where: WhereClause):
        if where.operator == "IN":
            return list(where.value)
        return where.value
