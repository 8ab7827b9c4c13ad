"""Connection-level facade tying the compilers to ``sqlite3``.

Example::

    conn = sqlite3.connect(":memory:")
    ctx = SQLiteContext(conn)
    ctx.create_table(USERS, TableCreationOptions.IF_NOT_EXISTS)
    ctx.execute("INSERT INTO users (name) VALUES (@P0)", "ada")

    where = WhereStatement()
    where.add("name", Operator.LIKE, "a%")
    rows = ctx.select(USERS, where)
"""
from __future__ import annotations

import sqlite3
from collections.abc import Callable
from typing import Any

from sqlitegen.command import SQLiteCommand
from sqlitegen.compile.predicate_builder import PredicateBuilder
from sqlitegen.compile.sqlite import SQLiteCompiler
from sqlitegen.compile.table_builder import TableBuilder, TableCreationOptions
from sqlitegen.materialize import RowMaterializer
from sqlitegen.schema.descriptor import SchemaDescriptor
from sqlitegen.schema.dialect import DialectSettings
from sqlitegen.schema.predicate import WhereStatement


class SQLiteContext:
    """Compiles and runs statements on one caller-owned connection.

    Args:
        connection: Open ``sqlite3`` connection.  Not closed by the context.
        settings: Dialect settings shared by every compiler of this context.
    """

    def __init__(
        self,
        connection: sqlite3.Connection,
        settings: DialectSettings | None = None,
    ) -> None:
        self.connection = connection
        self.compiler = SQLiteCompiler(settings)
        self._tables = TableBuilder(self.compiler)
        self._predicates = PredicateBuilder(self.compiler)
        self._materializer = RowMaterializer()

    def command(self, text: str = "") -> SQLiteCommand:
        """Return a new command on this context's connection."""
        return SQLiteCommand(self.connection, text, self.compiler)

    # ------------------------------------------------------------------
    # DDL
    # ------------------------------------------------------------------

    def create_table(
        self,
        descriptor: SchemaDescriptor,
        options: TableCreationOptions = TableCreationOptions.NONE,
    ) -> int:
        """Create ``descriptor``'s table."""
        return self.command(self._tables.create_table(descriptor, options)).execute()

    def drop_table(self, descriptor: SchemaDescriptor) -> int:
        """Drop ``descriptor``'s table if it exists."""
        return self.command(self._tables.drop_table(descriptor)).execute()

    # ------------------------------------------------------------------
    # Raw statements
    # ------------------------------------------------------------------

    def execute(self, sql: str, *values: Any) -> int:
        """Run ``sql`` with ``values`` bound to ``@P0``, ``@P1``, ...

        Returns:
            The affected row count.
        """
        return self.command(sql).bind(*values).execute()

    def query(self, sql: str, *values: Any) -> list[dict[str, Any]]:
        """Run ``sql`` with positional ``values`` and return rows as dicts."""
        return self.command(sql).bind(*values).query()

    def scalar(self, sql: str, *values: Any, as_type: Any = None) -> Any:
        """Run ``sql`` and return the first column of the first row.

        Args:
            sql: Statement text with ``@P0``-style placeholders.
            *values: Positional parameter values.
            as_type: Optional Python type or
                :class:`~sqlitegen.schema.types.TypeClass`; the value is
                converted with the row materializer's reader for it.
        """
        value = self.command(sql).bind(*values).scalar()
        if as_type is None:
            return value
        return self._materializer.read(value, as_type)

    # ------------------------------------------------------------------
    # Entities
    # ------------------------------------------------------------------

    def select(
        self,
        descriptor: SchemaDescriptor,
        where: WhereStatement | None = None,
        factory: Callable[..., Any] | None = None,
    ) -> list[Any]:
        """Select rows of ``descriptor``'s table, optionally filtered.

        Args:
            descriptor: Table layout; every declared column is selected.
            where: Optional predicate, bound as parameters.
            factory: Optional entity constructor; see
                :meth:`RowMaterializer.materialize`.

        Returns:
            One materialized entity (or property dict) per row.
        """
        columns = ", ".join(self.compiler.quote_identifier(c) for c in descriptor.column_names)
        table = self.compiler.quote_identifier(descriptor.table_name)
        command = self.command()
        sql = f"SELECT {columns} FROM {table}"
        if where is not None and len(where):
            clause = self._predicates.build(where, command)
            if clause:
                sql += f" WHERE {clause}"
        command.text = sql
        return [
            self._materializer.materialize(descriptor, row, factory)
            for row in command.query()
        ]
