"""Type classification and the SQLite storage-class mapping.

Python has a single ``int`` and a single ``float``, so the width-specific
classifications are selected explicitly with ``Annotated``::

    from typing import Annotated
    from sqlitegen.schema.types import TypeClass

    age: Annotated[int, TypeClass.INT16]
    initial: Annotated[str, TypeClass.CHAR]
    checksum: Annotated[int, TypeClass.UINT32]   # unsupported by SQLite DDL

Unannotated types are classified by :func:`classify`.
"""
from __future__ import annotations

import types
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Annotated, Any, Union, get_args, get_origin

from sqlitegen.errors import UnsupportedTypeError


class TypeClass(str, Enum):
    """Static classification of a column's property type."""

    BOOLEAN = "BOOLEAN"
    BYTE = "BYTE"
    SBYTE = "SBYTE"
    INT16 = "INT16"
    UINT16 = "UINT16"
    INT32 = "INT32"
    UINT32 = "UINT32"
    INT64 = "INT64"
    UINT64 = "UINT64"
    CHAR = "CHAR"
    SINGLE = "SINGLE"
    DOUBLE = "DOUBLE"
    DECIMAL = "DECIMAL"
    DATETIME = "DATETIME"
    TEXT = "TEXT"
    OBJECT = "OBJECT"
    EMPTY = "EMPTY"


class StorageClass(str, Enum):
    """SQLite storage classes."""

    INTEGER = "INTEGER"
    TEXT = "TEXT"
    BLOB = "BLOB"
    REAL = "REAL"
    NUMERIC = "NUMERIC"

    def __str__(self) -> str:
        return self.value


_STORAGE_CLASSES: dict[TypeClass, StorageClass] = {
    TypeClass.BOOLEAN: StorageClass.INTEGER,
    TypeClass.BYTE: StorageClass.INTEGER,
    TypeClass.INT16: StorageClass.INTEGER,
    TypeClass.INT32: StorageClass.INTEGER,
    TypeClass.INT64: StorageClass.INTEGER,
    TypeClass.CHAR: StorageClass.INTEGER,
    TypeClass.TEXT: StorageClass.TEXT,
    TypeClass.OBJECT: StorageClass.BLOB,
    TypeClass.DECIMAL: StorageClass.NUMERIC,
    TypeClass.DATETIME: StorageClass.NUMERIC,
    TypeClass.DOUBLE: StorageClass.REAL,
}

#: Classifications whose values may be absent (reference-like types).
_NULLABLE_CLASSES: frozenset[TypeClass] = frozenset(
    {TypeClass.TEXT, TypeClass.OBJECT, TypeClass.EMPTY}
)


def storage_class(type_class: TypeClass) -> StorageClass:
    """Return the SQLite storage class for ``type_class``.

    Raises:
        UnsupportedTypeError: For unsigned integers, single-precision floats,
            signed bytes and the empty classification.
    """
    try:
        return _STORAGE_CLASSES[type_class]
    except KeyError:
        raise UnsupportedTypeError(type_class) from None


def classify(py_type: Any) -> TypeClass:
    """Classify a Python type annotation.

    Args:
        py_type: A class, ``Optional[...]`` / ``X | None`` union, or an
            ``Annotated[X, TypeClass.Y]`` alias.

    Returns:
        The matching :class:`TypeClass`.
    """
    origin = get_origin(py_type)
    if origin is Annotated:
        base, *metadata = get_args(py_type)
        for meta in metadata:
            if isinstance(meta, TypeClass):
                return meta
        return classify(base)
    if origin is Union or origin is types.UnionType:
        members = [a for a in get_args(py_type) if a is not type(None)]
        if len(members) == 1:
            return classify(members[0])
        return TypeClass.OBJECT
    if py_type is None or py_type is type(None):
        return TypeClass.EMPTY
    if not isinstance(py_type, type):
        return TypeClass.OBJECT
    if issubclass(py_type, bool):
        return TypeClass.BOOLEAN
    if issubclass(py_type, int):
        return TypeClass.INT64
    if issubclass(py_type, float):
        return TypeClass.DOUBLE
    if issubclass(py_type, Decimal):
        return TypeClass.DECIMAL
    if issubclass(py_type, date):
        return TypeClass.DATETIME
    if issubclass(py_type, str):
        return TypeClass.TEXT
    return TypeClass.OBJECT


def is_nullable(py_type: Any, type_class: TypeClass | None = None) -> bool:
    """Return ``True`` when ``py_type`` can represent an absent value.

    ``Optional[...]`` unions are nullable, and so are text and object types.
    Every other classification is a non-nullable value type.  An explicit
    ``type_class`` overrides the classification of ``py_type``.
    """
    origin = get_origin(py_type)
    if origin is Annotated:
        base, *metadata = get_args(py_type)
        if _is_optional(base):
            return True
        if type_class is None:
            type_class = next((m for m in metadata if isinstance(m, TypeClass)), None)
        return is_nullable(base, type_class)
    if _is_optional(py_type):
        return True
    if type_class is None:
        type_class = classify(py_type)
    return type_class in _NULLABLE_CLASSES


def _is_optional(py_type: Any) -> bool:
    origin = get_origin(py_type)
    if origin is Union or origin is types.UnionType:
        return type(None) in get_args(py_type)
    return False
