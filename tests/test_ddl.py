"""Unit tests for TableBuilder (CREATE TABLE / DROP TABLE)."""

from __future__ import annotations

import logging
from typing import Annotated, Optional

import pytest

import sqlitegen
from sqlitegen.compile.sqlite import SQLiteCompiler
from sqlitegen.compile.table_builder import TableBuilder, TableCreationOptions
from sqlitegen.errors import CompilationError, UnsupportedTypeError
from sqlitegen.schema.descriptor import Collation, ReferentialAction, SchemaDescriptor
from sqlitegen.schema.dialect import DialectSettings
from sqlitegen.schema.literals import DB_NULL
from sqlitegen.schema.types import TypeClass


def test_users_table(tables: TableBuilder, users: SchemaDescriptor):
    assert tables.create_table(users) == (
        "CREATE TABLE `users` (\n"
        "\t`id` INTEGER PRIMARY KEY AUTOINCREMENT,\n"
        "\t`email` TEXT UNIQUE NOT NULL,\n"
        "\t`display_name` TEXT,\n"
        "\t`team_id` INTEGER,\n"
        "\t`active` INTEGER NOT NULL DEFAULT 1,\n"
        "\t`balance` NUMERIC NOT NULL DEFAULT 0,\n"
        "\t`rating` REAL NOT NULL DEFAULT 0.0,\n"
        '\t`grade_code` TEXT DEFAULT "C",\n'
        "\t`joined` NUMERIC,\n"
        "\tFOREIGN KEY(`team_id`) REFERENCES `teams`(`id`) ON DELETE SET NULL\n"
        ");"
    )


def test_unique_collated_column(tables: TableBuilder, teams: SchemaDescriptor):
    assert tables.create_table(teams) == (
        "CREATE TABLE `teams` (\n"
        "\t`id` INTEGER PRIMARY KEY AUTOINCREMENT,\n"
        "\t`name` TEXT UNIQUE COLLATE NOCASE NOT NULL\n"
        ");"
    )


def test_composite_key_table(tables: TableBuilder, memberships: SchemaDescriptor):
    assert tables.create_table(memberships) == (
        "CREATE TABLE `memberships` (\n"
        "\t`user_id` INTEGER,\n"
        "\t`team_id` INTEGER,\n"
        "\t`role` TEXT NOT NULL,\n"
        "\t`seat` INTEGER NOT NULL,\n"
        "\tPRIMARY KEY(`user_id`, `team_id`),\n"
        "\tUNIQUE(`team_id`, `seat`),\n"
        "\tFOREIGN KEY(`user_id`) REFERENCES `users`(`id`) ON UPDATE CASCADE ON DELETE CASCADE,\n"
        "\tFOREIGN KEY(`team_id`) REFERENCES `teams`(`id`) ON DELETE RESTRICT\n"
        ") WITHOUT ROWID;"
    )


def test_line_order_and_no_trailing_comma(tables: TableBuilder):
    descriptor = (
        SchemaDescriptor.builder("orders")
        .column("id", int, primary_key=True, autoincrement=True)
        .column("code", str, unique=True, collation=Collation.RTRIM)
        .column("shop_id", int)
        .column("shop_region", str)
        .foreign_key(
            ["shop_id", "shop_region"],
            "shops",
            ["id", "region"],
            on_delete=ReferentialAction.CASCADE,
        )
        .build()
    )
    sql = tables.create_table(descriptor)
    lines = sql.split("\n")
    pk_line = lines.index("\t`id` INTEGER PRIMARY KEY AUTOINCREMENT,")
    unique_line = lines.index("\t`code` TEXT UNIQUE COLLATE RTRIM,")
    fk_line = lines.index(
        "\tFOREIGN KEY(`shop_id`, `shop_region`) REFERENCES `shops`(`id`, `region`) ON DELETE CASCADE"
    )
    assert pk_line < unique_line < fk_line
    assert lines[-1] == ");"
    assert not lines[-2].endswith(",")


def test_composite_key_has_no_inline_primary_key(tables: TableBuilder, memberships: SchemaDescriptor):
    sql = tables.create_table(memberships)
    column_lines = [line for line in sql.split("\n") if line.startswith("\t`")]
    assert column_lines
    assert all("PRIMARY KEY" not in line for line in column_lines)
    assert "\tPRIMARY KEY(`user_id`, `team_id`)" in sql


def test_autoincrement_dropped_for_non_integer_key(tables: TableBuilder):
    descriptor = (
        SchemaDescriptor.builder("codes")
        .column("code", str, primary_key=True, autoincrement=True)
        .build()
    )
    assert "\t`code` TEXT PRIMARY KEY\n" in tables.create_table(descriptor)


def test_unique_not_emitted_on_single_primary_key(tables: TableBuilder):
    descriptor = (
        SchemaDescriptor.builder("t")
        .column("id", int, primary_key=True, unique=True)
        .build()
    )
    assert "\t`id` INTEGER PRIMARY KEY\n" in tables.create_table(descriptor)


def test_unique_on_composite_key_member(tables: TableBuilder):
    descriptor = (
        SchemaDescriptor.builder("t")
        .column("a", int, primary_key=True, unique=True)
        .column("b", int, primary_key=True)
        .build()
    )
    assert "\t`a` INTEGER UNIQUE,\n" in tables.create_table(descriptor)


def test_collation_ignored_on_non_text(tables: TableBuilder):
    descriptor = (
        SchemaDescriptor.builder("t")
        .column("n", int, collation=Collation.NOCASE)
        .column("s", str, collation=Collation.BINARY)
        .column("d", str, collation=Collation.DEFAULT)
        .build()
    )
    sql = tables.create_table(descriptor)
    assert "\t`n` INTEGER NOT NULL,\n" in sql
    assert "\t`s` TEXT COLLATE BINARY,\n" in sql
    assert "\t`d` TEXT\n" in sql


def test_not_null_rules(tables: TableBuilder):
    descriptor = (
        SchemaDescriptor.builder("t")
        .column("id", int, primary_key=True)
        .column("count", int)
        .column("maybe", Optional[int])
        .column("note", str)
        .column("title", str, required=True)
        .build()
    )
    sql = tables.create_table(descriptor)
    assert "\t`id` INTEGER PRIMARY KEY,\n" in sql
    assert "\t`count` INTEGER NOT NULL,\n" in sql
    assert "\t`maybe` INTEGER,\n" in sql
    assert "\t`note` TEXT,\n" in sql
    assert "\t`title` TEXT NOT NULL\n" in sql


def test_not_null_follows_explicit_type_class(tables: TableBuilder):
    descriptor = (
        SchemaDescriptor.builder("t")
        .column("id", int, primary_key=True)
        .column("initial", str, type_class=TypeClass.CHAR)
        .column("n", type_class=TypeClass.INT32)
        .column("tag", Optional[str], type_class=TypeClass.CHAR)
        .column("code", int, type_class=TypeClass.TEXT)
        .build()
    )
    assert tables.create_table(descriptor) == (
        "CREATE TABLE `t` (\n"
        "\t`id` INTEGER PRIMARY KEY,\n"
        "\t`initial` INTEGER NOT NULL,\n"
        "\t`n` INTEGER NOT NULL,\n"
        "\t`tag` INTEGER,\n"
        "\t`code` TEXT\n"
        ");"
    )


def test_explicit_nullable_overrides_derivation(tables: TableBuilder):
    descriptor = (
        SchemaDescriptor.builder("t")
        .column("count", int, nullable=True)
        .column("note", str, nullable=False)
        .build()
    )
    assert descriptor.columns["count"].nullable
    assert not descriptor.columns["note"].nullable
    assert tables.create_table(descriptor) == (
        "CREATE TABLE `t` (\n"
        "\t`count` INTEGER,\n"
        "\t`note` TEXT NOT NULL\n"
        ");"
    )


def test_default_values(tables: TableBuilder):
    descriptor = (
        SchemaDescriptor.builder("t")
        .column("flag", Optional[bool], default=False)
        .column("ratio", Optional[float], default=0.5)
        .column("label", Optional[str], default="none")
        .build()
    )
    sql = tables.create_table(descriptor)
    assert "\t`flag` INTEGER DEFAULT 0,\n" in sql
    assert "\t`ratio` REAL DEFAULT 0.5,\n" in sql
    assert '\t`label` TEXT DEFAULT "none"\n' in sql


def test_foreign_key_no_action_is_omitted(tables: TableBuilder):
    descriptor = (
        SchemaDescriptor.builder("child")
        .column("parent_id", int)
        .foreign_key("parent_id", "parent", "id")
        .build()
    )
    assert tables.create_table(descriptor).endswith(
        "\tFOREIGN KEY(`parent_id`) REFERENCES `parent`(`id`)\n);"
    )


@pytest.mark.parametrize(
    "options, header",
    [
        (TableCreationOptions.NONE, "CREATE TABLE `teams` ("),
        (TableCreationOptions.TEMPORARY, "CREATE TEMP TABLE `teams` ("),
        (TableCreationOptions.IF_NOT_EXISTS, "CREATE TABLE IF NOT EXISTS `teams` ("),
        (
            TableCreationOptions.TEMPORARY | TableCreationOptions.IF_NOT_EXISTS,
            "CREATE TEMP TABLE IF NOT EXISTS `teams` (",
        ),
    ],
)
def test_creation_options(tables: TableBuilder, teams: SchemaDescriptor, options, header):
    assert tables.create_table(teams, options).split("\n")[0] == header


def test_custom_delimiters(teams: SchemaDescriptor):
    settings = DialectSettings.builder().escape_with('"').build()
    sql = TableBuilder(SQLiteCompiler(settings)).create_table(teams)
    assert sql.startswith('CREATE TABLE "teams" (\n\t"id" INTEGER')


# ---------------------------------------------------------------------------
# Failures
# ---------------------------------------------------------------------------


def test_unsupported_column_type_fails(tables: TableBuilder, caplog):
    descriptor = (
        SchemaDescriptor.builder("measurements")
        .column("id", int, primary_key=True)
        .column("reading", Annotated[float, TypeClass.SINGLE])
        .build()
    )
    with caplog.at_level(logging.DEBUG, logger="sqlitegen"):
        with pytest.raises(UnsupportedTypeError) as exc_info:
            tables.create_table(descriptor)
    assert exc_info.value.table == "measurements"
    assert exc_info.value.column == "reading"
    assert exc_info.value.type_class is TypeClass.SINGLE
    assert "measurements.reading" in str(exc_info.value)
    assert "CREATE" not in caplog.text


@pytest.mark.parametrize(
    "type_class",
    [TypeClass.SBYTE, TypeClass.UINT16, TypeClass.UINT32, TypeClass.UINT64, TypeClass.EMPTY],
)
def test_other_unsupported_classes(tables: TableBuilder, type_class):
    descriptor = SchemaDescriptor.builder("t").column("c", type_class=type_class).build()
    with pytest.raises(UnsupportedTypeError):
        tables.create_table(descriptor)


def test_null_default_is_omitted(tables: TableBuilder):
    descriptor = (
        SchemaDescriptor.builder("t")
        .column("c", Optional[str], default=DB_NULL)
        .build()
    )
    assert "\t`c` TEXT\n" in tables.create_table(descriptor)


def test_table_without_columns_fails(tables: TableBuilder):
    with pytest.raises(CompilationError):
        tables.create_table(SchemaDescriptor(table_name="empty"))


# ---------------------------------------------------------------------------
# DROP TABLE and helpers
# ---------------------------------------------------------------------------


def test_drop_table(tables: TableBuilder, teams: SchemaDescriptor):
    assert tables.drop_table(teams) == "DROP TABLE IF EXISTS `teams`;"


def test_module_helpers(teams: SchemaDescriptor):
    assert sqlitegen.create_table_sql(teams) == TableBuilder().create_table(teams)
    assert sqlitegen.drop_table_sql(teams) == "DROP TABLE IF EXISTS `teams`;"
    assert sqlitegen.create_table_sql(teams, TableCreationOptions.TEMPORARY).startswith(
        "CREATE TEMP TABLE"
    )


def test_ddl_is_logged(tables: TableBuilder, teams: SchemaDescriptor, caplog):
    with caplog.at_level(logging.DEBUG, logger="sqlitegen.compile.table_builder"):
        sql = tables.create_table(teams)
    assert sql in caplog.text
