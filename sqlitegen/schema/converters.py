"""Utilities for building a SchemaDescriptor from external sources.

SQLAlchemy converter
--------------------
:func:`descriptor_from_sqlalchemy` translates a :class:`sqlalchemy.Table`
(or a declarative class exposing ``__table__``) into a
:class:`~sqlitegen.schema.descriptor.SchemaDescriptor`.

Install the optional dependency before using this module::

    pip install "sqlitegen[sqlalchemy]"

Example::

    from sqlalchemy import Column, Integer, MetaData, String, Table
    from sqlitegen.schema.converters import descriptor_from_sqlalchemy

    users = Table(
        "users", MetaData(),
        Column("id", Integer, primary_key=True),
        Column("email", String, unique=True, nullable=False),
    )
    descriptor = descriptor_from_sqlalchemy(users)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

from sqlitegen.schema.descriptor import (
    Collation,
    ColumnDescriptor,
    ForeignKeyDescriptor,
    ReferentialAction,
    SchemaDescriptor,
    UniqueConstraint,
)

if TYPE_CHECKING:
    from sqlalchemy import Column, Table


def descriptor_from_sqlalchemy(source: Any) -> SchemaDescriptor:
    """Build a :class:`SchemaDescriptor` from SQLAlchemy table metadata.

    Column mapping
    --------------
    * The property type is the column type's ``python_type`` (``object``
      when SQLAlchemy cannot tell), wrapped in ``Optional`` for nullable
      non-key columns.
    * ``nullable=False`` on a non-key column becomes an explicit NOT NULL.
    * Only ``autoincrement=True`` (not SQLAlchemy's ``"auto"``) marks a
      column AUTOINCREMENT.
    * Scalar Python defaults and plain-string server defaults become the
      DEFAULT value; callable and SQL-expression defaults are skipped.
    * String collations matching a built-in SQLite collation are kept.

    Table mapping
    -------------
    * Multi-column ``UniqueConstraint`` objects become unique groups;
      single-column ones are folded into the column's ``unique`` flag.
    * Every ``ForeignKeyConstraint`` becomes a foreign key, composite keys
      included, with its ``onupdate`` / ``ondelete`` actions.
    * ``sqlite_with_rowid=False`` becomes ``WITHOUT ROWID``.

    Args:
        source: A :class:`sqlalchemy.Table`, or a declarative class (or any
            object) with a ``__table__`` attribute.

    Returns:
        The equivalent :class:`SchemaDescriptor`.

    Raises:
        ImportError: If ``sqlalchemy`` is not installed.
    """
    try:
        from sqlalchemy import Table as _Table
        from sqlalchemy import UniqueConstraint as _UniqueConstraint
    except ImportError as exc:
        raise ImportError(
            "SQLAlchemy is required for descriptor_from_sqlalchemy(). "
            'Install it with: pip install "sqlitegen[sqlalchemy]"'
        ) from exc

    table: Table = source if isinstance(source, _Table) else source.__table__

    single_unique: set[str] = set()
    groups: list[UniqueConstraint] = []
    for constraint in sorted(
        (c for c in table.constraints if isinstance(c, _UniqueConstraint)),
        key=lambda c: [col.name for col in c.columns],
    ):
        names = [col.name for col in constraint.columns]
        if len(names) == 1:
            single_unique.add(names[0])
        elif names:
            groups.append(
                UniqueConstraint(name=constraint.name or "uq_" + "_".join(names), columns=names)
            )

    columns = {
        col.name: _column_descriptor(col, unique=col.unique is True or col.name in single_unique)
        for col in table.columns
    }

    foreign_keys = []
    for fkc in sorted(table.foreign_key_constraints, key=lambda c: list(c.column_keys)):
        parent_table, parent_columns = _fk_target(fkc)
        foreign_keys.append(
            ForeignKeyDescriptor(
                local_columns=list(fkc.column_keys),
                parent_table=parent_table,
                parent_columns=parent_columns,
                on_update=_action(fkc.onupdate),
                on_delete=_action(fkc.ondelete),
            )
        )

    return SchemaDescriptor(
        table_name=table.name,
        columns=columns,
        unique_constraints=groups,
        foreign_keys=foreign_keys,
        without_row_id=table.dialect_kwargs.get("sqlite_with_rowid", True) is False,
    )


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _column_descriptor(col: Column, unique: bool) -> ColumnDescriptor:
    try:
        py_type: Any = col.type.python_type
    except NotImplementedError:
        py_type = object

    if col.nullable and not col.primary_key:
        py_type = Optional[py_type]

    return ColumnDescriptor(
        name=col.name,
        property_name=col.key,
        property_type=py_type,
        primary_key=col.primary_key,
        unique=unique and not col.primary_key,
        autoincrement=col.autoincrement is True,
        collation=_collation(getattr(col.type, "collation", None)),
        required=not col.nullable and not col.primary_key,
        default_value=_default_value(col),
    )


def _default_value(col: Column) -> Any:
    """Return a literal DEFAULT for ``col``, or ``None``."""
    default = col.default
    if default is not None and getattr(default, "is_scalar", False):
        return default.arg
    server_default = col.server_default
    if server_default is not None and isinstance(getattr(server_default, "arg", None), str):
        return server_default.arg
    return None


def _collation(name: str | None) -> Collation:
    if not name:
        return Collation.DEFAULT
    try:
        return Collation(name.upper())
    except ValueError:
        return Collation.DEFAULT


def _action(action: str | None) -> ReferentialAction:
    if not action:
        return ReferentialAction.NO_ACTION
    try:
        return ReferentialAction(action.upper())
    except ValueError:
        return ReferentialAction.NO_ACTION


def _fk_target(fkc: Any) -> tuple[str, list[str]]:
    """Return ``(parent_table, parent_columns)`` without resolving the parent.

    ``target_fullname`` is ``[schema.]table.column``; the parent table need
    not be present in the same MetaData.
    """
    parent_table = ""
    parent_columns: list[str] = []
    for element in fkc.elements:
        table_part, column = element.target_fullname.rsplit(".", 1)
        parent_table = table_part.rsplit(".", 1)[-1]
        parent_columns.append(column)
    return parent_table, parent_columns
