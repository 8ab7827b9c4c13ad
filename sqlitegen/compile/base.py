"""Compiler abstractions: CompiledSQL and the SQLCompiler ABC.

The Template Method pattern (GoF) is used:
- ``SQLCompiler`` defines the dialect-specific primitives every builder
  relies on (literal formatting, identifier quoting, placeholder naming).
- ``SQLiteCompiler`` implements them for the SQLite storage-class dialect.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any


@dataclass
class CompiledSQL:
    """The output of a successful predicate compilation.

    Attributes:
        sql: The compiled SQL fragment with named placeholders.
        params: Placeholder name to bound value, in binding order.
    """

    sql: str
    params: dict[str, Any] = field(default_factory=dict)

    def named_params(self) -> dict[str, Any]:
        """Return ``params`` keyed without the placeholder sigil.

        This is the mapping ``sqlite3`` expects for ``@name`` / ``:name`` /
        ``$name`` placeholders::

            compiled = compile_where(where)
            conn.execute(f"SELECT * FROM t WHERE {compiled.sql}", compiled.named_params())
        """
        return {name[1:]: value for name, value in self.params.items()}


class SQLCompiler(ABC):
    """Abstract base for dialect-specific SQL compilers.

    Builders use this interface via the Strategy / Template Method patterns.
    """

    @abstractmethod
    def format_literal(self, value: Any) -> str:
        """Return ``value`` rendered as an SQL literal.

        Args:
            value: Any scalar, ``None``, or a raw ``SqlLiteral``.

        Returns:
            Escaped and, where needed, quoted SQL literal text.
        """

    @abstractmethod
    def quote_identifier(self, name: str) -> str:
        """Return a properly-quoted SQL identifier.

        Args:
            name: Identifier, bare or already quoted.

        Returns:
            Quoted identifier.
        """

    @abstractmethod
    def parameter_name(self, index: int) -> str:
        """Return the placeholder name for the parameter at ``index``.

        Args:
            index: Zero-based position of the parameter in its command.

        Returns:
            Placeholder text, usable verbatim in SQL (e.g. ``'@P0'``).
        """

    @property
    @abstractmethod
    def dialect_name(self) -> str:
        """Return the canonical dialect name."""
