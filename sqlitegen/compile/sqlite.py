"""SQLite dialect compiler."""
from __future__ import annotations

from datetime import date, datetime, time
from enum import Enum
from typing import Any
from uuid import UUID

from sqlitegen.compile.base import SQLCompiler
from sqlitegen.schema.dialect import DEFAULT_SETTINGS, DialectSettings
from sqlitegen.schema.literals import SqlLiteral, is_null


class SQLiteCompiler(SQLCompiler):
    """Renders literals, identifiers and placeholders for SQLite.

    Parameter style: ``@P0``, ``@P1``, ... by default.  SQLite binds any
    ``@``, ``:`` or ``$`` name, and Python's ``sqlite3`` looks the name up
    without its sigil (``{"P0": value}``).

    Args:
        settings: Textual conventions; defaults to :data:`DEFAULT_SETTINGS`.
    """

    def __init__(self, settings: DialectSettings | None = None) -> None:
        self.settings = settings or DEFAULT_SETTINGS
        self._trim_chars = "".join(dict.fromkeys(self.settings.escape_chars))

    @property
    def dialect_name(self) -> str:
        return "sqlite"

    def parameter_name(self, index: int) -> str:
        return self.settings.parameter_name(index)

    def quote_identifier(self, name: str) -> str:
        opening, closing = self.settings.escape_chars
        return f"{opening}{name.strip(self._trim_chars)}{closing}"

    def format_literal(self, value: Any) -> str:
        """Render ``value`` as a SQLite literal.

        Enum members render as their ``value``; ``time`` values are quoted ISO
        text.  No value is rejected: types without a rule fall back to
        ``str()`` unquoted, which suits numbers.  Callers must check anything
        else before passing it as a literal.
        """
        if isinstance(value, Enum):
            value = value.value
        if is_null(value):
            return "NULL"
        if isinstance(value, SqlLiteral):
            return value.value
        if isinstance(value, str):
            return "'" + value.replace("'", "''") + "'"
        if isinstance(value, bool):
            return "1" if value else "0"
        if isinstance(value, date):
            if not isinstance(value, datetime):
                value = datetime.combine(value, time())
            return f"'{value.strftime(self.settings.datetime_format)}'"
        if isinstance(value, time):
            return f"'{value.isoformat()}'"
        if isinstance(value, UUID):
            return f"'{value}'"
        return str(value)
