"""Schema DDL compiler: SchemaDescriptor → CREATE / DROP TABLE.

``TableBuilder`` is the top-level orchestrator for DDL.  It wires together
the line-level sub-builders and assembles the statement.  Identifier quoting
and literal formatting are delegated to the injected ``SQLiteCompiler``.

Sub-builder hierarchy
---------------------
TableBuilder
  ├── ColumnDefinitionBuilder   (clause_builders.py)
  ├── PrimaryKeyBuilder         (clause_builders.py)
  ├── UniqueConstraintBuilder   (clause_builders.py)
  └── ForeignKeyBuilder         (clause_builders.py)

Output layout
-------------
::

    CREATE [TEMP ]TABLE [IF NOT EXISTS ]`t` (
    \t`col` TYPE ...,
    \tPRIMARY KEY(`a`, `b`),
    \tUNIQUE(`c`, `d`),
    \tFOREIGN KEY(`e`) REFERENCES `p`(`id`) ON DELETE CASCADE
    )[ WITHOUT ROWID];

Every line is rendered before the statement is assembled, so a failure
produces no partial text.
"""

from __future__ import annotations

import logging
from enum import Flag, auto

from sqlitegen.compile.clause_builders import (
    ColumnDefinitionBuilder,
    ForeignKeyBuilder,
    PrimaryKeyBuilder,
    UniqueConstraintBuilder,
)
from sqlitegen.compile.sqlite import SQLiteCompiler
from sqlitegen.errors import CompilationError
from sqlitegen.schema.descriptor import SchemaDescriptor

logger = logging.getLogger(__name__)


class TableCreationOptions(Flag):
    """Modifiers for ``CREATE TABLE``; combine with ``|``."""

    NONE = 0
    TEMPORARY = auto()
    IF_NOT_EXISTS = auto()


class TableBuilder:
    """Compiles a :class:`SchemaDescriptor` to DDL.

    Args:
        compiler: Dialect compiler.  Defaults to a :class:`SQLiteCompiler`
            with default settings.
    """

    def __init__(self, compiler: SQLiteCompiler | None = None) -> None:
        self._compiler = compiler or SQLiteCompiler()
        self._columns = ColumnDefinitionBuilder(self._compiler)
        self._primary_key = PrimaryKeyBuilder(self._compiler)
        self._unique = UniqueConstraintBuilder(self._compiler)
        self._foreign_key = ForeignKeyBuilder(self._compiler)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def create_table(
        self,
        descriptor: SchemaDescriptor,
        options: TableCreationOptions = TableCreationOptions.NONE,
    ) -> str:
        """Compile a ``CREATE TABLE`` statement.

        Args:
            descriptor: The table layout.
            options: ``TEMPORARY`` and/or ``IF_NOT_EXISTS``.

        Returns:
            The statement, terminated by ``;``.

        Raises:
            UnsupportedTypeError: If a column (or its default value) has a
                type with no storage class.
            CompilationError: If the descriptor declares no columns.
        """
        if not descriptor.columns:
            raise CompilationError(
                f"Table '{descriptor.table_name}' declares no columns.", clause="CREATE TABLE"
            )

        lines = self._build_lines(descriptor)

        header = "CREATE "
        if TableCreationOptions.TEMPORARY in options:
            header += "TEMP "
        header += "TABLE "
        if TableCreationOptions.IF_NOT_EXISTS in options:
            header += "IF NOT EXISTS "
        header += f"{self._compiler.quote_identifier(descriptor.table_name)} ("

        sql = header + "\n" + ",\n".join(lines) + "\n)"
        if descriptor.without_row_id:
            sql += " WITHOUT ROWID"
        sql += ";"
        logger.debug("Compiled DDL for table %s:\n%s", descriptor.table_name, sql)
        return sql

    def drop_table(self, descriptor: SchemaDescriptor) -> str:
        """Compile ``DROP TABLE IF EXISTS`` for ``descriptor``'s table."""
        return f"DROP TABLE IF EXISTS {self._compiler.quote_identifier(descriptor.table_name)};"

    # ------------------------------------------------------------------
    # Line assembly
    # ------------------------------------------------------------------

    def _build_lines(self, descriptor: SchemaDescriptor) -> list[str]:
        lines = [self._columns.build(col, descriptor) for col in descriptor.columns.values()]

        composite = descriptor.composite_primary_key_columns
        if composite:
            lines.append(self._primary_key.build(composite))

        lines.extend(self._unique.build(c) for c in descriptor.unique_constraints)
        lines.extend(self._foreign_key.build(fk) for fk in descriptor.foreign_keys)
        return lines
