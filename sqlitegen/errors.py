"""Custom exception hierarchy for sqlitegen.

All public errors inherit from SqliteGenError so callers can catch the base
class for any sqlitegen-specific failure.
"""
from __future__ import annotations

from typing import Any


class SqliteGenError(Exception):
    """Base exception for all sqlitegen errors."""


class UnsupportedTypeError(SqliteGenError):
    """Raised when a type classification has no SQLite storage class.

    DDL generation fails as a whole; no partial statement is returned.

    Args:
        type_class: The offending classification (a ``TypeClass`` member).
        table: Table being compiled, when known.
        column: Column whose type (or default value) is unsupported.
    """

    def __init__(
        self,
        type_class: Any,
        table: str | None = None,
        column: str | None = None,
    ) -> None:
        name = getattr(type_class, "name", str(type_class))
        if column is not None:
            where = f"column '{column}'" if table is None else f"column '{table}.{column}'"
            message = f"Unsupported type classification {name} on {where}."
        else:
            message = f"Unsupported type classification {name}."
        super().__init__(message)
        self.type_class = type_class
        self.table = table
        self.column = column

    def with_column(self, table: str, column: str) -> UnsupportedTypeError:
        """Return a copy of this error bound to ``table.column``."""
        return UnsupportedTypeError(self.type_class, table=table, column=column)


class MalformedPredicateValueError(SqliteGenError):
    """Raised when a BETWEEN / NOT BETWEEN value is not a 2-element pair.

    Args:
        field_name: The compared column.
        operator: The comparison operator.
        value: The rejected value.
    """

    def __init__(self, field_name: str, operator: Any, value: Any) -> None:
        op = getattr(operator, "name", str(operator))
        super().__init__(
            f"{op} on '{field_name}' requires exactly two values (lower, upper); "
            f"got {value!r}."
        )
        self.field_name = field_name
        self.operator = operator
        self.value = value


class CompilationError(SqliteGenError):
    """Raised when SQL compilation fails for an unexpected reason.

    Args:
        message: Human-readable description.
        clause: The clause being compiled when the error occurred.
    """

    def __init__(self, message: str, clause: str | None = None) -> None:
        super().__init__(message)
        self.clause = clause


class DescriptorConfigError(SqliteGenError):
    """Raised when a SchemaDescriptor is built from inconsistent metadata.

    Args:
        message: Human-readable description.
        details: Extra context (table, column, constraint name).
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.details: dict[str, Any] = details or {}


class SettingsConfigError(SqliteGenError):
    """Raised when DialectSettings are misconfigured.

    Detected at :meth:`DialectSettingsBuilder.build` time so the developer
    gets an actionable message before any SQL is generated.

    Args:
        message: Human-readable description.
        missing: Setting(s) that must be changed.
        reason: Why the constraint exists.
    """

    def __init__(
        self,
        message: str,
        missing: list[str] | None = None,
        reason: str | None = None,
    ) -> None:
        super().__init__(message)
        self.missing = missing or []
        self.reason = reason or ""


class MaterializationError(SqliteGenError):
    """Raised when a result row cannot be mapped onto a SchemaDescriptor.

    Args:
        column: The row column that failed to map.
        message: Human-readable description.
    """

    def __init__(self, column: str, message: str) -> None:
        super().__init__(message)
        self.column = column
