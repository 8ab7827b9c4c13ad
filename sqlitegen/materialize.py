"""Row materializer: stored SQLite values → typed Python values.

SQLite hands back only ``int``, ``float``, ``str``, ``bytes`` and ``None``.
``RowMaterializer.read`` converts one stored value to the Python type a
column declares, dispatching on its :class:`~sqlitegen.schema.types.TypeClass`
through the :class:`~sqlitegen.compile.registry.ReaderRegistry`:

=============================  ===================================
TypeClass                      Result
=============================  ===================================
BYTE, INT16, INT32, INT64      ``int``
BOOLEAN                        ``bool``
DECIMAL                        ``decimal.Decimal``
DOUBLE                         ``float``
CHAR                           one-character ``str``
anything else                  stored value, unchanged
=============================  ===================================

``None`` always reads as ``None``.  Importing this module registers the
readers above; register more with ``@ReaderRegistry.register(...)``.
"""
from __future__ import annotations

from collections.abc import Callable, Mapping
from decimal import Decimal
from typing import Any

from sqlitegen.compile.registry import ReaderRegistry
from sqlitegen.errors import MaterializationError
from sqlitegen.schema.descriptor import SchemaDescriptor
from sqlitegen.schema.types import TypeClass, classify

_TRUE_STRINGS = frozenset({"1", "true", "t", "yes", "y"})


# ---------------------------------------------------------------------------
# Built-in readers
# ---------------------------------------------------------------------------


@ReaderRegistry.register(TypeClass.BYTE, TypeClass.INT16, TypeClass.INT32, TypeClass.INT64)
def read_integer(value: Any) -> int:
    return int(value)


@ReaderRegistry.register(TypeClass.BOOLEAN)
def read_boolean(value: Any) -> bool:
    # Text affinity columns may hold the word rather than 0/1.
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_STRINGS
    return bool(value)


@ReaderRegistry.register(TypeClass.DECIMAL)
def read_decimal(value: Any) -> Decimal:
    if isinstance(value, float):
        return Decimal(repr(value))
    return Decimal(value)


@ReaderRegistry.register(TypeClass.DOUBLE)
def read_double(value: Any) -> float:
    return float(value)


@ReaderRegistry.register(TypeClass.CHAR)
def read_char(value: Any) -> str:
    if isinstance(value, int):
        return chr(value)
    if isinstance(value, bytes):
        value = value.decode()
    return str(value)[:1]


# ---------------------------------------------------------------------------
# Materializer
# ---------------------------------------------------------------------------


class RowMaterializer:
    """Converts stored values and whole rows using the reader registry."""

    def read(self, value: Any, declared_type: TypeClass | Any) -> Any:
        """Convert ``value`` to ``declared_type``.

        Args:
            value: A value as returned by ``sqlite3``.
            declared_type: A :class:`TypeClass` or a Python type, which is
                classified first.

        Returns:
            The converted value; ``None`` for ``None``; the value itself for
            classes without a reader.
        """
        if value is None:
            return None
        type_class = declared_type if isinstance(declared_type, TypeClass) else classify(declared_type)
        reader = ReaderRegistry.get(type_class)
        return value if reader is None else reader(value)

    def materialize(
        self,
        descriptor: SchemaDescriptor,
        row: Mapping[str, Any],
        factory: Callable[..., Any] | None = None,
    ) -> Any:
        """Convert one result row into an entity.

        Args:
            descriptor: Layout of the table the row came from.
            row: Mapping of column name to stored value.  ``sqlite3.Row`` is
                accepted.
            factory: Optional entity constructor, called with the converted
                values as keyword arguments keyed by property name.

        Returns:
            The entity, or a ``dict`` keyed by property name when no factory
            is given.

        Raises:
            MaterializationError: If the row holds a column the descriptor
                does not declare, or a value cannot be converted.
        """
        values: dict[str, Any] = {}
        for name in row.keys():
            column = descriptor.get_column(name)
            if column is None:
                raise MaterializationError(
                    name, f"Table '{descriptor.table_name}' has no column '{name}'."
                )
            try:
                values[column.property_name] = self.read(row[name], column.type_class)
            except (TypeError, ValueError, ArithmeticError) as exc:
                raise MaterializationError(
                    name, f"Cannot read {row[name]!r} as {column.type_class.name}: {exc}"
                ) from exc
        return values if factory is None else factory(**values)
