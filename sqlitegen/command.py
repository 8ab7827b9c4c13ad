"""``sqlite3``-backed parameter sink.

``SQLiteCommand`` is a :class:`~sqlitegen.compile.sink.ParameterSink` that
also executes: compile a predicate into it, set its text, then call
:meth:`~SQLiteCommand.execute` or :meth:`~SQLiteCommand.query`.  The
connection belongs to the caller and is never closed here.

Bound values are adapted with :func:`~sqlitegen.compile.sink.adapt_value`.
"""
from __future__ import annotations

import logging
import sqlite3
from typing import Any

from sqlitegen.compile.sink import Parameter, adapt_value
from sqlitegen.compile.sqlite import SQLiteCompiler

logger = logging.getLogger(__name__)


class SQLiteCommand:
    """A SQL statement plus its bound parameters, run on a connection.

    Args:
        connection: Open ``sqlite3`` connection.
        text: SQL text; may be set later through :attr:`text`.
        compiler: Supplies the date/time format used to adapt bound values.
    """

    def __init__(
        self,
        connection: sqlite3.Connection,
        text: str = "",
        compiler: SQLiteCompiler | None = None,
    ) -> None:
        self._connection = connection
        self._compiler = compiler or SQLiteCompiler()
        self.text = text
        self.parameters: list[Parameter] = []

    # ------------------------------------------------------------------
    # ParameterSink
    # ------------------------------------------------------------------

    @property
    def parameter_count(self) -> int:
        return len(self.parameters)

    def create_parameter(self, name: str, value: Any) -> Parameter:
        return Parameter(name=name, value=adapt_value(value, self._compiler.settings))

    def add_parameter(self, param: Parameter) -> None:
        self.parameters.append(param)

    def bind(self, *values: Any) -> "SQLiteCommand":
        """Bind ``values`` positionally as the next placeholders."""
        for value in values:
            name = self._compiler.parameter_name(self.parameter_count)
            self.add_parameter(self.create_parameter(name, value))
        return self

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def execute(self) -> int:
        """Run the statement and return the number of affected rows.

        ``sqlite3`` reports ``-1`` for statements that change no rows by
        definition, such as DDL.
        """
        cursor = self._run()
        try:
            return cursor.rowcount
        finally:
            cursor.close()

    def query(self) -> list[dict[str, Any]]:
        """Run the statement and return every row as a ``dict``."""
        cursor = self._run()
        try:
            columns = [d[0] for d in cursor.description] if cursor.description else []
            return [dict(zip(columns, row)) for row in cursor.fetchall()]
        finally:
            cursor.close()

    def scalar(self) -> Any:
        """Run the statement and return the first column of the first row.

        Further columns and rows are ignored; ``None`` if there are no rows.
        """
        cursor = self._run()
        try:
            row = cursor.fetchone()
            return row[0] if row is not None else None
        finally:
            cursor.close()

    def _run(self) -> sqlite3.Cursor:
        params = {p.key: p.value for p in self.parameters}
        logger.debug("Executing SQL with %d parameter(s): %s", len(params), self.text)
        return self._connection.execute(self.text, params)
