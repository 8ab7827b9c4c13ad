"""Pydantic models for the SchemaDescriptor consumed by the DDL compiler.

A SchemaDescriptor is the static table layout of one entity type: ordered
columns with their keys and constraints, table-level unique groups, and
foreign keys.  It is produced by the caller (or by
:mod:`sqlitegen.schema.converters`) and treated as immutable afterwards.

Build one with the fluent builder::

    users = (
        SchemaDescriptor.builder("users")
        .column("id", int, primary_key=True, autoincrement=True)
        .column("email", str, unique=True, collation=Collation.NOCASE)
        .column("team_id", int)
        .foreign_key("team_id", "teams", "id", on_delete=ReferentialAction.CASCADE)
        .build()
    )

Primary keys are flagged on columns.  Exactly one flagged column is a single
primary key, emitted inline; two or more form a composite key, emitted as a
table-level constraint.  The two encodings are therefore mutually exclusive
by construction.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Sequence

from pydantic import BaseModel, ConfigDict, Field, model_validator

from sqlitegen.errors import DescriptorConfigError
from sqlitegen.schema.types import (
    StorageClass,
    TypeClass,
    classify,
    is_nullable,
    storage_class,
)


class ReferentialAction(str, Enum):
    """Foreign key action on parent row update / delete."""

    NO_ACTION = "NO ACTION"
    CASCADE = "CASCADE"
    RESTRICT = "RESTRICT"
    SET_DEFAULT = "SET DEFAULT"
    SET_NULL = "SET NULL"


class Collation(str, Enum):
    """Built-in SQLite collating sequences."""

    DEFAULT = "DEFAULT"
    BINARY = "BINARY"
    NOCASE = "NOCASE"
    RTRIM = "RTRIM"


class ColumnDescriptor(BaseModel):
    """Metadata for a single column.

    Attributes:
        name: Column name.
        property_name: Entity attribute the column maps to; defaults to
            ``name``.
        property_type: Python type of the entity attribute.
        type_class: Classification of ``property_type``; derived with
            :func:`~sqlitegen.schema.types.classify` when omitted.
        primary_key: Whether the column is (part of) the primary key.
        unique: Whether the column carries a column-level UNIQUE constraint.
        autoincrement: Whether the column is AUTOINCREMENT (INTEGER only).
        collation: Collating sequence for TEXT columns.
        required: Explicit NOT NULL.
        default_value: Value for the DEFAULT clause, or ``None``.
        nullable: Whether ``property_type`` can represent an absent value;
            derived when omitted.
    """

    model_config = ConfigDict(extra="forbid", frozen=True, arbitrary_types_allowed=True)

    name: str = Field(min_length=1)
    property_name: str
    property_type: Any = str
    type_class: TypeClass
    primary_key: bool = False
    unique: bool = False
    autoincrement: bool = False
    collation: Collation = Collation.DEFAULT
    required: bool = False
    default_value: Any = None
    nullable: bool

    @model_validator(mode="before")
    @classmethod
    def _derive_type_metadata(cls, data: Any) -> Any:
        """Fill ``property_name``, ``type_class`` and ``nullable`` from the type."""
        if not isinstance(data, dict):
            return data
        data = dict(data)
        py_type = data.setdefault("property_type", str)
        if data.get("property_name") is None:
            data["property_name"] = data.get("name")
        explicit = data.get("type_class")
        if explicit is None:
            data["type_class"] = classify(py_type)
        if data.get("nullable") is None:
            data["nullable"] = is_nullable(py_type, explicit)
        return data

    @property
    def storage_class(self) -> StorageClass:
        """SQLite storage class of this column.

        Raises:
            UnsupportedTypeError: If the classification has no storage class.
        """
        return storage_class(self.type_class)


class UniqueConstraint(BaseModel):
    """A named table-level UNIQUE constraint over one or more columns."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str
    columns: list[str] = Field(min_length=1)


class ForeignKeyDescriptor(BaseModel):
    """A single- or multi-column foreign key.

    Attributes:
        local_columns: Referencing columns on this table.
        parent_table: Referenced table name.
        parent_columns: Referenced columns, positionally matched.
        on_update: Action when the parent row is updated.
        on_delete: Action when the parent row is deleted.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    local_columns: list[str] = Field(min_length=1)
    parent_table: str = Field(min_length=1)
    parent_columns: list[str] = Field(min_length=1)
    on_update: ReferentialAction = ReferentialAction.NO_ACTION
    on_delete: ReferentialAction = ReferentialAction.NO_ACTION

    @model_validator(mode="after")
    def _check_arity(self) -> ForeignKeyDescriptor:
        if len(self.local_columns) != len(self.parent_columns):
            raise DescriptorConfigError(
                f"Foreign key {self.local_columns} -> {self.parent_table}"
                f"{self.parent_columns} has mismatched column counts.",
                details={
                    "local_columns": self.local_columns,
                    "parent_table": self.parent_table,
                    "parent_columns": self.parent_columns,
                },
            )
        return self


class SchemaDescriptor(BaseModel):
    """Static table layout for one entity type.

    Attributes:
        table_name: Table name, escaped on use.
        columns: Ordered mapping of column name to metadata.  Insertion order
            is the column order of the generated DDL.
        unique_constraints: Table-level UNIQUE groups.
        foreign_keys: Foreign keys in output order.
        without_row_id: Emit ``WITHOUT ROWID``.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    table_name: str = Field(min_length=1)
    columns: dict[str, ColumnDescriptor] = Field(default_factory=dict)
    unique_constraints: list[UniqueConstraint] = Field(default_factory=list)
    foreign_keys: list[ForeignKeyDescriptor] = Field(default_factory=list)
    without_row_id: bool = False

    @classmethod
    def builder(cls, table_name: str) -> "SchemaDescriptorBuilder":
        """Return a :class:`SchemaDescriptorBuilder` for ``table_name``."""
        return SchemaDescriptorBuilder(table_name)

    @model_validator(mode="after")
    def _check_references(self) -> SchemaDescriptor:
        """Every constraint must reference declared columns."""
        for key, column in self.columns.items():
            if key != column.name:
                raise DescriptorConfigError(
                    f"Column key '{key}' does not match column name '{column.name}'.",
                    details={"table": self.table_name, "column": key},
                )
            if column.autoincrement and not (
                column.primary_key and len(self.primary_key_columns) == 1
            ):
                raise DescriptorConfigError(
                    f"Column '{key}' is AUTOINCREMENT but is not the table's "
                    "single primary key.",
                    details={"table": self.table_name, "column": key},
                )
        for constraint in self.unique_constraints:
            self._require_columns(constraint.columns, f"unique constraint '{constraint.name}'")
        for fk in self.foreign_keys:
            self._require_columns(fk.local_columns, f"foreign key to '{fk.parent_table}'")
        return self

    def _require_columns(self, names: Sequence[str], owner: str) -> None:
        missing = [n for n in names if n not in self.columns]
        if missing:
            raise DescriptorConfigError(
                f"Table '{self.table_name}': {owner} references unknown column(s) {missing}.",
                details={"table": self.table_name, "columns": missing},
            )

    # ------------------------------------------------------------------
    # Derived key metadata
    # ------------------------------------------------------------------

    @property
    def primary_key_columns(self) -> list[str]:
        """Names of all columns flagged as primary key, in column order."""
        return [name for name, col in self.columns.items() if col.primary_key]

    @property
    def has_single_primary_key(self) -> bool:
        """``True`` iff exactly one column is flagged as primary key."""
        return len(self.primary_key_columns) == 1

    @property
    def composite_primary_key_columns(self) -> list[str]:
        """Composite key columns; empty unless two or more are flagged."""
        keys = self.primary_key_columns
        return keys if len(keys) > 1 else []

    @property
    def column_names(self) -> list[str]:
        """Returns all column names in order."""
        return list(self.columns)

    def get_column(self, name: str) -> ColumnDescriptor | None:
        """Returns the ColumnDescriptor for ``name``, or ``None``."""
        return self.columns.get(name)


class SchemaDescriptorBuilder:
    """Fluent builder for :class:`SchemaDescriptor`.

    Always obtained via :meth:`SchemaDescriptor.builder`.
    """

    def __init__(self, table_name: str) -> None:
        self._table_name = table_name
        self._columns: dict[str, ColumnDescriptor] = {}
        self._unique_constraints: list[UniqueConstraint] = []
        self._foreign_keys: list[ForeignKeyDescriptor] = []
        self._without_row_id = False

    def column(
        self,
        name: str,
        property_type: Any = str,
        *,
        property_name: str | None = None,
        type_class: TypeClass | None = None,
        primary_key: bool = False,
        unique: bool = False,
        autoincrement: bool = False,
        collation: Collation = Collation.DEFAULT,
        required: bool = False,
        default: Any = None,
        nullable: bool | None = None,
    ) -> "SchemaDescriptorBuilder":
        """Append a column.

        ``nullable`` is derived from ``property_type`` and ``type_class`` when
        omitted.

        Raises:
            DescriptorConfigError: If ``name`` is already declared.
        """
        if name in self._columns:
            raise DescriptorConfigError(
                f"Column '{name}' is declared twice on table '{self._table_name}'.",
                details={"table": self._table_name, "column": name},
            )
        self._columns[name] = ColumnDescriptor(
            name=name,
            property_name=property_name,
            property_type=property_type,
            type_class=type_class,
            primary_key=primary_key,
            unique=unique,
            autoincrement=autoincrement,
            collation=collation,
            required=required,
            default_value=default,
            nullable=nullable,
        )
        return self

    def unique(self, name: str, *columns: str) -> "SchemaDescriptorBuilder":
        """Add a table-level UNIQUE constraint named ``name``."""
        self._unique_constraints.append(UniqueConstraint(name=name, columns=list(columns)))
        return self

    def foreign_key(
        self,
        local_columns: str | Sequence[str],
        parent: str | SchemaDescriptor,
        parent_columns: str | Sequence[str],
        *,
        on_update: ReferentialAction = ReferentialAction.NO_ACTION,
        on_delete: ReferentialAction = ReferentialAction.NO_ACTION,
    ) -> "SchemaDescriptorBuilder":
        """Add a foreign key; column arguments accept a name or a sequence.

        Args:
            local_columns: Referencing column(s) on this table.
            parent: Referenced table name or its descriptor.
            parent_columns: Referenced column(s).
            on_update: Action on parent update.
            on_delete: Action on parent delete.
        """
        parent_table = parent.table_name if isinstance(parent, SchemaDescriptor) else parent
        self._foreign_keys.append(
            ForeignKeyDescriptor(
                local_columns=_as_list(local_columns),
                parent_table=parent_table,
                parent_columns=_as_list(parent_columns),
                on_update=on_update,
                on_delete=on_delete,
            )
        )
        return self

    def without_rowid(self) -> "SchemaDescriptorBuilder":
        """Create the table ``WITHOUT ROWID``."""
        self._without_row_id = True
        return self

    def build(self) -> SchemaDescriptor:
        """Validate references and return the :class:`SchemaDescriptor`.

        Raises:
            DescriptorConfigError: If a constraint names an unknown column.
        """
        return SchemaDescriptor(
            table_name=self._table_name,
            columns=dict(self._columns),
            unique_constraints=list(self._unique_constraints),
            foreign_keys=list(self._foreign_keys),
            without_row_id=self._without_row_id,
        )


def _as_list(columns: str | Sequence[str]) -> list[str]:
    if isinstance(columns, str):
        return [columns]
    return list(columns)
