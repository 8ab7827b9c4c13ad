"""Shared pytest fixtures for sqlitegen unit and integration tests."""
from __future__ import annotations

import sqlite3

import pytest

from sqlitegen.compile.predicate_builder import PredicateBuilder
from sqlitegen.compile.sqlite import SQLiteCompiler
from sqlitegen.compile.table_builder import TableBuilder
from sqlitegen.schema.descriptor import SchemaDescriptor
from tests.fixtures import memberships_descriptor, teams_descriptor, users_descriptor


@pytest.fixture(scope="session")
def compiler() -> SQLiteCompiler:
    """SQLite compiler with default settings."""
    return SQLiteCompiler()


@pytest.fixture(scope="session")
def predicates(compiler: SQLiteCompiler) -> PredicateBuilder:
    return PredicateBuilder(compiler)


@pytest.fixture(scope="session")
def tables(compiler: SQLiteCompiler) -> TableBuilder:
    return TableBuilder(compiler)


@pytest.fixture(scope="session")
def teams() -> SchemaDescriptor:
    return teams_descriptor()


@pytest.fixture(scope="session")
def users() -> SchemaDescriptor:
    return users_descriptor()


@pytest.fixture(scope="session")
def memberships() -> SchemaDescriptor:
    return memberships_descriptor()


@pytest.fixture()
def conn() -> sqlite3.Connection:
    """Fresh in-memory database with foreign keys enforced."""
    connection = sqlite3.connect(":memory:")
    connection.execute("PRAGMA foreign_keys = ON")
    yield connection
    connection.close()
