"""Clause-level DDL builders.

Each class renders exactly one kind of line inside ``CREATE TABLE (...)``.
Lines carry their leading tab; :class:`~sqlitegen.compile.table_builder.TableBuilder`
joins them with ``",\\n"``.

Classes
-------
ColumnDefinitionBuilder   ``\\t`col` TYPE [constraints]``
PrimaryKeyBuilder         ``\\tPRIMARY KEY(`a`, `b`)``
UniqueConstraintBuilder   ``\\tUNIQUE(`a`, `b`)``
ForeignKeyBuilder         ``\\tFOREIGN KEY(...) REFERENCES `p`(...) [ON UPDATE a] [ON DELETE a]``
"""
from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from sqlitegen.compile.sqlite import SQLiteCompiler
from sqlitegen.errors import UnsupportedTypeError
from sqlitegen.schema.descriptor import (
    Collation,
    ColumnDescriptor,
    ForeignKeyDescriptor,
    ReferentialAction,
    SchemaDescriptor,
    UniqueConstraint,
)
from sqlitegen.schema.literals import is_null
from sqlitegen.schema.types import StorageClass, classify, storage_class

#: Storage classes whose DEFAULT values are written unquoted.
UNQUOTED_DEFAULTS: frozenset[StorageClass] = frozenset({StorageClass.INTEGER, StorageClass.REAL})


class _LineBuilder:
    def __init__(self, compiler: SQLiteCompiler) -> None:
        self._compiler = compiler

    def _column_list(self, names: Sequence[str]) -> str:
        return ", ".join(self._compiler.quote_identifier(n) for n in names)


class ColumnDefinitionBuilder(_LineBuilder):
    """Builds one column definition.

    Constraints are appended in a fixed order: PRIMARY KEY, AUTOINCREMENT or
    UNIQUE, COLLATE, NOT NULL, DEFAULT.
    """

    def build(self, column: ColumnDescriptor, descriptor: SchemaDescriptor) -> str:
        """Render ``column``.

        Raises:
            UnsupportedTypeError: If the column type has no storage class.
                The error names the table and column.
        """
        try:
            storage = column.storage_class
        except UnsupportedTypeError as exc:
            raise exc.with_column(descriptor.table_name, column.name) from None

        parts = [self._compiler.quote_identifier(column.name), storage.value]

        is_single_key = descriptor.has_single_primary_key and column.primary_key
        if column.autoincrement or is_single_key:
            if is_single_key:
                parts.append("PRIMARY KEY")
            if column.autoincrement and storage is StorageClass.INTEGER:
                parts.append("AUTOINCREMENT")
        elif column.unique:
            parts.append("UNIQUE")

        if column.collation is not Collation.DEFAULT and storage is StorageClass.TEXT:
            parts.append(f"COLLATE {column.collation.value.upper()}")

        if column.required or (not column.primary_key and not column.nullable):
            parts.append("NOT NULL")

        if not is_null(column.default_value):
            parts.append(f"DEFAULT {self._default(column.default_value)}")

        return "\t" + " ".join(parts)

    def _default(self, value: Any) -> str:
        """Numbers are written bare; anything else is double-quoted as-is.

        The value is not escaped, so it must not contain a double quote.
        """
        if storage_class(classify(type(value))) in UNQUOTED_DEFAULTS:
            return self._compiler.format_literal(value)
        return f'"{value}"'


class PrimaryKeyBuilder(_LineBuilder):
    """Builds the table-level composite ``PRIMARY KEY(...)`` line."""

    def build(self, columns: Sequence[str]) -> str:
        return f"\tPRIMARY KEY({self._column_list(columns)})"


class UniqueConstraintBuilder(_LineBuilder):
    """Builds a table-level ``UNIQUE(...)`` line."""

    def build(self, constraint: UniqueConstraint) -> str:
        return f"\tUNIQUE({self._column_list(constraint.columns)})"


class ForeignKeyBuilder(_LineBuilder):
    """Builds a ``FOREIGN KEY ... REFERENCES ...`` line.

    ``ON UPDATE`` / ``ON DELETE`` are omitted for ``NO ACTION``, which is
    SQLite's default.
    """

    def build(self, fk: ForeignKeyDescriptor) -> str:
        parent = self._compiler.quote_identifier(fk.parent_table)
        sql = (
            f"\tFOREIGN KEY({self._column_list(fk.local_columns)}) "
            f"REFERENCES {parent}({self._column_list(fk.parent_columns)})"
        )
        if fk.on_update is not ReferentialAction.NO_ACTION:
            sql += f" ON UPDATE {fk.on_update.value}"
        if fk.on_delete is not ReferentialAction.NO_ACTION:
            sql += f" ON DELETE {fk.on_delete.value}"
        return sql
