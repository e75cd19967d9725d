"""Custom exception hierarchy for chainql.

All public errors inherit from ChainQLError so callers can catch the base
class for any chainql-specific failure.  Errors raised by a driver's
``execute`` are never wrapped; they reach the caller unmodified.
"""
from __future__ import annotations

from typing import Any


class ChainQLError(Exception):
    """Base exception for all chainql errors."""


class UsageError(ChainQLError):
    """Raised when the builder is misused.

    Usage errors are detected before any SQL is compiled and before the
    driver is touched.

    Args:
        message: Human-readable description.
        code: Machine-readable error code (e.g. NO_TABLE_SELECTED).
        details: Extra structured context.
    """

    def __init__(
        self,
        message: str,
        code: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.details: dict[str, Any] = details or {}

    def to_error_response(self) -> dict[str, Any]:
        """Returns a structured error response."""
        return {
            "error": self.code,
            "message": str(self),
            "details": self.details,
        }


class NoTableSelectedError(UsageError):
    """Raised when a terminal operation runs before ``table()`` was called."""

    def __init__(self, operation: str) -> None:
        super().__init__(
            f"No table selected for '{operation}'. Call .table() first.",
            code="NO_TABLE_SELECTED",
            details={"operation": operation},
        )
        self.operation = operation


class EmptyPayloadError(UsageError):
    """Raised when ``create`` or ``update`` receives no data."""

    def __init__(self, operation: str) -> None:
        super().__init__(
            f"No data given for '{operation}'.",
            code="EMPTY_PAYLOAD",
            details={"operation": operation},
        )
        self.operation = operation


class InvalidOperatorError(UsageError):
    """Raised when a where predicate uses an operator outside the allowlist."""

    def __init__(self, operator: str, allowed_operators: list[str]) -> None:
        super().__init__(
            f"Operator '{operator}' is not allowed.",
            code="INVALID_OPERATOR",
            details={"operator": operator, "allowed_operators": allowed_operators},
        )
        self.operator = operator


class InvalidIdentifierError(UsageError):
    """Raised when a column name is not a plain or qualified identifier."""

    def __init__(self, identifier: str) -> None:
        super().__init__(
            f"'{identifier}' is not a valid column name.",
            code="INVALID_IDENTIFIER",
            details={"identifier": identifier},
        )
        self.identifier = identifier


class InvalidDirectionError(UsageError):
    """Raised when ``order_by`` receives a direction other than asc/desc."""

    def __init__(self, direction: str) -> None:
        super().__init__(
            f"Sort direction '{direction}' is not allowed; use 'asc' or 'desc'.",
            code="INVALID_DIRECTION",
            details={"direction": direction},
        )
        self.direction = direction


class InvalidPaginationError(UsageError):
    """Raised when ``limit`` or ``offset`` is not a non-negative integer."""

    def __init__(self, name: str, value: Any) -> None:
        super().__init__(
            f"{name.upper()} must be a non-negative integer, got {value!r}.",
            code="INVALID_PAGINATION",
            details={"clause": name, "value": value},
        )
        self.name = name
        self.value = value


class InvalidValueError(UsageError):
    """Raised when a where value cannot be bound for its operator."""

    def __init__(self, column: str, operator: str, reason: str) -> None:
        super().__init__(
            f"Invalid value for '{column} {operator}': {reason}",
            code="INVALID_VALUE",
            details={"column": column, "operator": operator},
        )


class UnknownColumnError(UsageError):
    """Raised when a column is not a field of the builder's row model."""

    def __init__(self, column: str, model: str, allowed_columns: list[str]) -> None:
        super().__init__(
            f"Column '{column}' is not a field of '{model}'.",
            code="UNKNOWN_COLUMN",
            details={
                "column": column,
                "model": model,
                "allowed_columns": allowed_columns,
            },
        )
        self.column = column


class CompilationError(ChainQLError):
    """Raised when SQL compilation fails for an unexpected reason.

    Args:
        message: Human-readable description.
        clause: The clause being compiled when the error occurred.
    """

    def __init__(self, message: str, clause: str | None = None) -> None:
        super().__init__(message)
        self.clause = clause


class MissingReturningError(ChainQLError):
    """Raised when an insert returns no row.

    The driver (or its database) did not honour ``RETURNING *``.
    """

    def __init__(self, table: str) -> None:
        super().__init__(
            f"INSERT into '{table}' returned no row; the driver must support RETURNING."
        )
        self.table = table


class DriverNotConnectedError(ChainQLError):
    """Raised when a driver executes before ``connect()`` was awaited."""

    def __init__(self, driver: str) -> None:
        super().__init__(f"{driver} is not connected. Await connect() first.")
        self.driver = driver
