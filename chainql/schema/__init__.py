"""chainql schema models: per-query state and clause records."""
from chainql.schema.state import Direction, OrderClause, QueryState, WhereClause

__all__ = [
    "Direction",
    "OrderClause",
    "QueryState",
    "WhereClause",
]
