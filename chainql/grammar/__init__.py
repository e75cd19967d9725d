"""chainql grammar layer: query shape → dialect SQL + positional values."""
from chainql.grammar.base import CompiledQuery, Grammar
from chainql.grammar.postgres import PostgresGrammar
from chainql.grammar.registry import GrammarFactory
from chainql.grammar.sqlite import SQLiteGrammar

__all__ = [
    "CompiledQuery",
    "Grammar",
    "GrammarFactory",
    "PostgresGrammar",
    "SQLiteGrammar",
]
