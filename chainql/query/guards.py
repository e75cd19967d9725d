"""Call-site checks for the fluent configuration methods.

Column names and operators end up in the SQL text verbatim, so they are
checked against a strict shape before they reach the state:

- operators must be in :data:`ALLOWED_OPERATORS`;
- columns must be ``name`` or ``qualifier.name`` identifiers;
- directions must be ``asc`` or ``desc``;
- ``LIMIT`` / ``OFFSET`` must be non-negative integers.

Every failure raises a :class:`~chainql.errors.UsageError` subclass.
"""
from __future__ import annotations

import re
from collections.abc import Sequence
from typing import Any

from chainql.errors import (
    InvalidDirectionError,
    InvalidIdentifierError,
    InvalidOperatorError,
    InvalidPaginationError,
    InvalidValueError,
)
from chainql.schema.state import Direction

#: Operators accepted by ``where``.  Keyword operators are matched
#: case-insensitively and normalised to upper case.
ALLOWED_OPERATORS: tuple[str, ...] = (
    "=", "!=", "<>", "<", "<=", ">", ">=", "LIKE", "ILIKE", "IN",
)

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)?$")


def check_operator(operator: str) -> str:
    """Return the normalised operator or raise :class:`InvalidOperatorError`."""
    normalised = operator.strip().upper()
    if normalised not in ALLOWED_OPERATORS:
        raise InvalidOperatorError(operator, list(ALLOWED_OPERATORS))
    return normalised


def check_column(column: str) -> str:
    if not isinstance(column, str) or not _IDENTIFIER.match(column):
        raise InvalidIdentifierError(str(column))
    return column


def check_direction(direction: str) -> Direction:
    normalised = str(direction).strip().lower()
    if normalised not in ("asc", "desc"):
        raise InvalidDirectionError(str(direction))
    return normalised  # type: ignore[return-value]


def check_pagination(name: str, value: Any) -> int:
    # bool is an int subclass; LIMIT TRUE is never intended.
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise InvalidPaginationError(name, value)
    return value


def check_value(column: str, operator: str, value: Any) -> None:
    """Reject values that cannot be bound for ``operator``.

    ``IN`` needs a real sequence of values; a bare string would be
    silently split into characters.
    """
    if operator != "IN":
        return
    if isinstance(value, (str, bytes)) or not isinstance(value, (Sequence, set, frozenset)):
        raise InvalidValueError(column, operator, "IN expects a list, tuple or set of values.")
