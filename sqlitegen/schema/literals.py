"""Special literal values understood by the compilers.

``SqlLiteral`` wraps text that must be embedded verbatim: parameter
placeholders produced by the predicate compiler, or caller-trusted SQL
fragments such as a subquery.  It bypasses both escaping and binding.

``DB_NULL`` is the database-null marker.  It renders as ``NULL`` and is never
bound as a parameter, exactly like ``None``.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class SqlLiteral:
    """Raw SQL text, embedded without quoting or escaping.

    Attributes:
        value: The SQL fragment.
    """

    value: str

    def __str__(self) -> str:
        return self.value


class _DBNullType:
    _instance: _DBNullType | None = None

    def __new__(cls) -> _DBNullType:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "DB_NULL"

    def __bool__(self) -> bool:
        return False


#: Singleton database-null marker.
DB_NULL = _DBNullType()


def is_null(value: Any) -> bool:
    """Return ``True`` for ``None`` and the ``DB_NULL`` marker."""
    return value is None or value is DB_NULL
