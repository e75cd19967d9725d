"""chainql query layer: the fluent builder and its call-site guards."""
from chainql.query.builder import Builder
from chainql.query.guards import ALLOWED_OPERATORS

__all__ = [
    "ALLOWED_OPERATORS",
    "Builder",
]
