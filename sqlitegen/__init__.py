"""sqlitegen – declarative SQLite statement generation.

Describe tables and predicates as data; get SQLite text and bound parameters.

Public API
----------
``format_literal`` / ``escape``
    Render a Python value as a SQLite literal; quote an identifier.

``compile_where``
    Compile a :class:`WhereStatement` to a WHERE-clause body plus parameters.

``create_table_sql`` / ``drop_table_sql``
    Compile a :class:`SchemaDescriptor` to ``CREATE TABLE`` / ``DROP TABLE``.

Re-exported types
-----------------
Schema models, ``DialectSettings``, the compilers, ``RowMaterializer``,
``SQLiteCommand``, ``SQLiteContext``, and all error classes.

Extensibility
-------------
Operator rendering and value reading are registry-driven::

    from sqlitegen.compile.registry import ReaderRegistry

    @ReaderRegistry.register(TypeClass.DATETIME)
    def _read_datetime(value):
        return datetime.strptime(value, "%Y/%m/%d %H:%M:%S")

After registration, ``RowMaterializer`` and ``SQLiteContext.select`` pick it
up automatically.
"""

from __future__ import annotations

from typing import Any

from sqlitegen.command import SQLiteCommand
from sqlitegen.compile.base import CompiledSQL, SQLCompiler
from sqlitegen.compile.predicate_builder import PredicateBuilder
from sqlitegen.compile.registry import OperatorRegistry, ReaderRegistry
from sqlitegen.compile.sink import Parameter, ParameterList, ParameterSink
from sqlitegen.compile.sqlite import SQLiteCompiler
from sqlitegen.compile.table_builder import TableBuilder, TableCreationOptions
from sqlitegen.context import SQLiteContext
from sqlitegen.errors import (
    CompilationError,
    DescriptorConfigError,
    MalformedPredicateValueError,
    MaterializationError,
    SettingsConfigError,
    SqliteGenError,
    UnsupportedTypeError,
)
from sqlitegen.materialize import RowMaterializer
from sqlitegen.schema.cache import DescriptorCache
from sqlitegen.schema.converters import descriptor_from_sqlalchemy
from sqlitegen.schema.descriptor import (
    Collation,
    ColumnDescriptor,
    ForeignKeyDescriptor,
    ReferentialAction,
    SchemaDescriptor,
    SchemaDescriptorBuilder,
    UniqueConstraint,
)
from sqlitegen.schema.dialect import DEFAULT_SETTINGS, DialectSettings, DialectSettingsBuilder
from sqlitegen.schema.expressions import LogicOperator, Operator
from sqlitegen.schema.literals import DB_NULL, SqlLiteral
from sqlitegen.schema.predicate import ClauseGroup, Comparison, WhereStatement
from sqlitegen.schema.types import StorageClass, TypeClass, classify, storage_class

__all__ = [
    # Helpers
    "format_literal",
    "escape",
    "compile_where",
    "create_table_sql",
    "drop_table_sql",
    # Descriptors
    "SchemaDescriptor",
    "SchemaDescriptorBuilder",
    "ColumnDescriptor",
    "ForeignKeyDescriptor",
    "UniqueConstraint",
    "ReferentialAction",
    "Collation",
    "DescriptorCache",
    "descriptor_from_sqlalchemy",
    # Types
    "TypeClass",
    "StorageClass",
    "classify",
    "storage_class",
    # Predicates
    "WhereStatement",
    "ClauseGroup",
    "Comparison",
    "Operator",
    "LogicOperator",
    "SqlLiteral",
    "DB_NULL",
    # Settings
    "DialectSettings",
    "DialectSettingsBuilder",
    "DEFAULT_SETTINGS",
    # Compilation
    "CompiledSQL",
    "SQLCompiler",
    "SQLiteCompiler",
    "PredicateBuilder",
    "TableBuilder",
    "TableCreationOptions",
    "OperatorRegistry",
    "ReaderRegistry",
    "Parameter",
    "ParameterList",
    "ParameterSink",
    # Execution
    "RowMaterializer",
    "SQLiteCommand",
    "SQLiteContext",
    # Errors
    "SqliteGenError",
    "UnsupportedTypeError",
    "MalformedPredicateValueError",
    "CompilationError",
    "DescriptorConfigError",
    "SettingsConfigError",
    "MaterializationError",
]


def format_literal(value: Any, settings: DialectSettings | None = None) -> str:
    """Render ``value`` as a SQLite literal.

    ``None`` and :data:`DB_NULL` give ``NULL``; strings are single-quoted with
    embedded quotes doubled; booleans give ``1`` / ``0``; dates use the
    settings' ``datetime_format``; a :class:`SqlLiteral` is inserted as-is.
    """
    return SQLiteCompiler(settings).format_literal(value)


def escape(name: str, settings: DialectSettings | None = None) -> str:
    """Quote ``name`` with the identifier delimiters (backticks by default)."""
    return SQLiteCompiler(settings).quote_identifier(name)


def compile_where(
    where: WhereStatement,
    settings: DialectSettings | None = None,
    *,
    parameterize: bool = True,
) -> CompiledSQL:
    """Compile ``where`` to a WHERE-clause body.

    Args:
        where: The predicate tree.
        settings: Optional dialect settings.
        parameterize: Bind values as ``@P0``-style parameters (the default);
            when ``False`` every value is rendered inline.

    Returns:
        :class:`CompiledSQL` with the SQL fragment and its parameters::

            compiled = sqlitegen.compile_where(where)
            conn.execute(f"SELECT * FROM users WHERE {compiled.sql}", compiled.named_params())
    """
    compiler = SQLiteCompiler(settings)
    sink = ParameterList(settings=compiler.settings) if parameterize else None
    sql = PredicateBuilder(compiler).build(where, sink)
    params = {p.name: p.value for p in sink} if sink is not None else {}
    return CompiledSQL(sql=sql, params=params)


def create_table_sql(
    descriptor: SchemaDescriptor,
    options: TableCreationOptions = TableCreationOptions.NONE,
    settings: DialectSettings | None = None,
) -> str:
    """Compile ``CREATE TABLE`` for ``descriptor``.

    Raises:
        UnsupportedTypeError: If a column type has no SQLite storage class.
    """
    return TableBuilder(SQLiteCompiler(settings)).create_table(descriptor, options)


def drop_table_sql(descriptor: SchemaDescriptor, settings: DialectSettings | None = None) -> str:
    """Compile ``DROP TABLE IF EXISTS`` for ``descriptor``."""
    return TableBuilder(SQLiteCompiler(settings)).drop_table(descriptor)
