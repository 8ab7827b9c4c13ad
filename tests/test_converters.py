"""Unit tests for sqlitegen.schema.converters.descriptor_from_sqlalchemy."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

import pytest
from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    ForeignKeyConstraint,
    Integer,
    LargeBinary,
    MetaData,
    Numeric,
    String,
    Table,
    UniqueConstraint,
    text,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from sqlitegen.compile.table_builder import TableBuilder
from sqlitegen.schema.converters import descriptor_from_sqlalchemy
from sqlitegen.schema.descriptor import Collation, ReferentialAction, SchemaDescriptor
from sqlitegen.schema.types import TypeClass


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _accounts(metadata: MetaData) -> Table:
    return Table(
        "accounts",
        metadata,
        Column("id", Integer, primary_key=True, autoincrement=True),
        Column("email", String(120, collation="NOCASE"), nullable=False, unique=True),
        Column("nickname", String(40)),
        Column("active", Boolean, nullable=False, default=True),
        Column("balance", Numeric(10, 2), nullable=False, server_default="0"),
        Column("created", DateTime, server_default=text("CURRENT_TIMESTAMP")),
        Column("avatar", LargeBinary),
    )


def _positions(metadata: MetaData) -> Table:
    return Table(
        "positions",
        metadata,
        Column("account_id", Integer, ForeignKey("accounts.id", ondelete="CASCADE"), primary_key=True),
        Column("board", String(10), primary_key=True),
        Column("slot", Integer, nullable=False),
        Column("region", String(10), nullable=False),
        Column("region_code", String(10), nullable=False),
        UniqueConstraint("board", "slot", name="uq_board_slot"),
        ForeignKeyConstraint(
            ["region", "region_code"],
            ["regions.name", "regions.code"],
            onupdate="CASCADE",
            ondelete="SET NULL",
        ),
        sqlite_with_rowid=False,
    )


# ---------------------------------------------------------------------------
# Column mapping
# ---------------------------------------------------------------------------


class TestColumnMapping:
    @pytest.fixture()
    def descriptor(self) -> SchemaDescriptor:
        return descriptor_from_sqlalchemy(_accounts(MetaData()))

    def test_column_order(self, descriptor: SchemaDescriptor) -> None:
        assert descriptor.table_name == "accounts"
        assert descriptor.column_names == [
            "id", "email", "nickname", "active", "balance", "created", "avatar",
        ]

    def test_python_types(self, descriptor: SchemaDescriptor) -> None:
        assert descriptor.columns["id"].property_type is int
        assert descriptor.columns["email"].property_type is str
        assert descriptor.columns["nickname"].property_type == Optional[str]
        assert descriptor.columns["active"].type_class is TypeClass.BOOLEAN
        assert descriptor.columns["balance"].property_type is Decimal
        assert descriptor.columns["created"].property_type == Optional[datetime]
        assert descriptor.columns["avatar"].type_class is TypeClass.OBJECT

    def test_keys_and_constraints(self, descriptor: SchemaDescriptor) -> None:
        id_col = descriptor.columns["id"]
        assert id_col.primary_key and id_col.autoincrement and not id_col.required
        email = descriptor.columns["email"]
        assert email.unique and email.required
        assert email.collation is Collation.NOCASE
        assert not descriptor.columns["nickname"].required
        assert descriptor.columns["nickname"].nullable

    def test_defaults(self, descriptor: SchemaDescriptor) -> None:
        assert descriptor.columns["active"].default_value is True
        assert descriptor.columns["balance"].default_value == "0"
        assert descriptor.columns["created"].default_value is None

    def test_ddl(self, descriptor: SchemaDescriptor) -> None:
        assert TableBuilder().create_table(descriptor) == (
            "CREATE TABLE `accounts` (\n"
            "\t`id` INTEGER PRIMARY KEY AUTOINCREMENT,\n"
            "\t`email` TEXT UNIQUE COLLATE NOCASE NOT NULL,\n"
            "\t`nickname` TEXT,\n"
            "\t`active` INTEGER NOT NULL DEFAULT 1,\n"
            '\t`balance` NUMERIC NOT NULL DEFAULT "0",\n'
            "\t`created` NUMERIC,\n"
            "\t`avatar` BLOB\n"
            ");"
        )


# ---------------------------------------------------------------------------
# Table mapping
# ---------------------------------------------------------------------------


class TestTableMapping:
    @pytest.fixture()
    def descriptor(self) -> SchemaDescriptor:
        metadata = MetaData()
        _accounts(metadata)
        return descriptor_from_sqlalchemy(_positions(metadata))

    def test_composite_primary_key(self, descriptor: SchemaDescriptor) -> None:
        assert descriptor.composite_primary_key_columns == ["account_id", "board"]

    def test_unique_group(self, descriptor: SchemaDescriptor) -> None:
        assert [(u.name, u.columns) for u in descriptor.unique_constraints] == [
            ("uq_board_slot", ["board", "slot"])
        ]

    def test_foreign_keys(self, descriptor: SchemaDescriptor) -> None:
        fks = {tuple(fk.local_columns): fk for fk in descriptor.foreign_keys}
        single = fks[("account_id",)]
        assert single.parent_table == "accounts"
        assert single.parent_columns == ["id"]
        assert single.on_delete is ReferentialAction.CASCADE
        assert single.on_update is ReferentialAction.NO_ACTION
        composite = fks[("region", "region_code")]
        assert composite.parent_table == "regions"
        assert composite.parent_columns == ["name", "code"]
        assert composite.on_update is ReferentialAction.CASCADE
        assert composite.on_delete is ReferentialAction.SET_NULL

    def test_without_rowid(self, descriptor: SchemaDescriptor) -> None:
        assert descriptor.without_row_id
        assert TableBuilder().create_table(descriptor).endswith(") WITHOUT ROWID;")


class TestDeclarative:
    def test_declarative_class(self) -> None:
        class Base(DeclarativeBase):
            pass

        class Note(Base):
            __tablename__ = "notes"

            id: Mapped[int] = mapped_column(primary_key=True)
            body: Mapped[str] = mapped_column(String(200))
            pinned: Mapped[Optional[bool]]

        descriptor = descriptor_from_sqlalchemy(Note)
        assert descriptor.table_name == "notes"
        assert descriptor.column_names == ["id", "body", "pinned"]
        assert descriptor.columns["body"].required
        assert descriptor.columns["pinned"].property_type == Optional[bool]
