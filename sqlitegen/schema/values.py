"""Typed comparison values for predicate trees.

A comparison value is one of five tagged variants, so that illegal states
(a BETWEEN with three bounds, a raw fragment mistaken for user data) are
rejected when the predicate is built rather than when it is compiled.

Usage::

    from sqlitegen.schema.values import PairValue, to_value

    to_value(None)            # NullValue()
    to_value(5)               # ScalarValue(scalar=5)
    to_value([1, 2, 3])       # SequenceValue(sequence=(1, 2, 3))
    to_value(SqlLiteral("@P0"))  # RawValue(raw=SqlLiteral("@P0"))
    PairValue(pair=(1, 10)).lower  # 1
"""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Discriminator, Tag

from sqlitegen.schema.literals import SqlLiteral, is_null

_FORBID = ConfigDict(extra="forbid", frozen=True, arbitrary_types_allowed=True)

#: Python containers treated as value sequences.  Strings are scalars.
SEQUENCE_TYPES: tuple[type, ...] = (list, tuple, set, frozenset, range)


# ---------------------------------------------------------------------------
# Concrete value types
# ---------------------------------------------------------------------------


class NullValue(BaseModel):
    """``None`` or the ``DB_NULL`` marker: ``{"null": True}``."""

    model_config = _FORBID

    null: Literal[True] = True


class ScalarValue(BaseModel):
    """A single value: ``{"scalar": 42}``.

    For IN / NOT IN a string scalar is a pre-formatted list body.
    """

    model_config = _FORBID

    scalar: Any


class PairValue(BaseModel):
    """An ordered (lower, upper) pair for BETWEEN: ``{"pair": [1, 10]}``."""

    model_config = _FORBID

    pair: tuple[Any, Any]

    @property
    def lower(self) -> Any:
        return self.pair[0]

    @property
    def upper(self) -> Any:
        return self.pair[1]


class SequenceValue(BaseModel):
    """An ordered sequence for IN: ``{"sequence": [1, 2, 3]}``."""

    model_config = _FORBID

    sequence: tuple[Any, ...]


class RawValue(BaseModel):
    """A caller-trusted SQL fragment: ``{"raw": SqlLiteral("(SELECT ...)")}``."""

    model_config = _FORBID

    raw: SqlLiteral


# ---------------------------------------------------------------------------
# Discriminated union
# ---------------------------------------------------------------------------

_VALUE_TAGS: tuple[tuple[str, type[BaseModel]], ...] = (
    ("null", NullValue),
    ("scalar", ScalarValue),
    ("pair", PairValue),
    ("sequence", SequenceValue),
    ("raw", RawValue),
)


def _value_discriminator(v: Any) -> str | None:
    """Return the tag for the Pydantic discriminated union."""
    for tag, model in _VALUE_TAGS:
        if isinstance(v, model):
            return tag
    return None


ComparisonValue = Annotated[
    Annotated[NullValue, Tag("null")]
    | Annotated[ScalarValue, Tag("scalar")]
    | Annotated[PairValue, Tag("pair")]
    | Annotated[SequenceValue, Tag("sequence")]
    | Annotated[RawValue, Tag("raw")],
    Discriminator(_value_discriminator),
]

_VALUE_MODELS = tuple(model for _, model in _VALUE_TAGS)


def to_value(v: Any) -> ComparisonValue:
    """Convert a plain Python value to a typed ``ComparisonValue``.

    Already-typed values are returned as-is.  Two-element sequences stay
    :class:`SequenceValue`; the comparison promotes them to
    :class:`PairValue` for range operators.
    Sets have no stable iteration order, so their elements are sorted.

    Args:
        v: ``None``/``DB_NULL``, a :class:`SqlLiteral`, a list/tuple/set, or
            any scalar.

    Returns:
        A typed ``ComparisonValue`` instance.
    """
    if isinstance(v, _VALUE_MODELS):
        return v
    if is_null(v):
        return NullValue()
    if isinstance(v, SqlLiteral):
        return RawValue(raw=v)
    if isinstance(v, (set, frozenset)):
        return SequenceValue(sequence=tuple(_sorted_set(v)))
    if isinstance(v, SEQUENCE_TYPES):
        return SequenceValue(sequence=tuple(v))
    return ScalarValue(scalar=v)


def _sorted_set(values: set | frozenset) -> list[Any]:
    try:
        return sorted(values)
    except TypeError:
        # Mixed element types: order by type, then by text.
        return sorted(values, key=lambda item: (type(item).__name__, repr(item)))
