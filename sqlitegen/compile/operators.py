"""Built-in comparison rendering handlers.

Importing this module registers a handler for every
:class:`~sqlitegen.schema.expressions.Operator` with the
:class:`~sqlitegen.compile.registry.OperatorRegistry`.

Rendered forms::

    EQUALS            `f` = v
    NOT_EQUAL_TO      `f` <> v
    LIKE / NOT_LIKE   `f` LIKE v / NOT `f` LIKE v
    GREATER_THAN ...  `f` > v, >=, <, <=
    IN / NOT_IN       `f` IN (v1,v2) / NOT `f` IN (v1,v2)
    BETWEEN           `f` BETWEEN lo AND hi / NOT `f` BETWEEN lo AND hi
"""
from __future__ import annotations

from collections.abc import Callable
from typing import Any

from sqlitegen.compile.registry import OperatorRegistry
from sqlitegen.errors import CompilationError
from sqlitegen.schema.expressions import (
    BINARY_SQL,
    MEMBERSHIP_OPS,
    NEGATED_OPS,
    RANGE_OPS,
    Operator,
)
from sqlitegen.schema.values import (
    ComparisonValue,
    PairValue,
    RawValue,
    ScalarValue,
    SequenceValue,
)


def _not(op: Operator) -> str:
    return "NOT " if op in NEGATED_OPS else ""


def payload(value: ComparisonValue) -> Any:
    """Return the Python object carried by a single-valued variant."""
    if isinstance(value, ScalarValue):
        return value.scalar
    if isinstance(value, RawValue):
        return value.raw
    if isinstance(value, PairValue):
        return value.pair
    if isinstance(value, SequenceValue):
        return value.sequence
    return None


@OperatorRegistry.register(*BINARY_SQL)
def render_binary(
    field: str,
    op: Operator,
    value: ComparisonValue,
    fmt: Callable[[Any], str],
) -> str:
    return f"{_not(op)}{field} {BINARY_SQL[op]} {fmt(payload(value))}"


@OperatorRegistry.register(*MEMBERSHIP_OPS)
def render_membership(
    field: str,
    op: Operator,
    value: ComparisonValue,
    fmt: Callable[[Any], str],
) -> str:
    """Sequences are formatted element-wise; a string is a pre-formatted body.

    The string body is inserted verbatim.  Its content is the caller's
    responsibility.
    """
    if isinstance(value, (SequenceValue, PairValue)):
        items = value.sequence if isinstance(value, SequenceValue) else value.pair
        body = ",".join(fmt(item) for item in items)
    elif isinstance(value, ScalarValue) and isinstance(value.scalar, str):
        body = value.scalar
    else:
        body = fmt(payload(value))
    return f"{_not(op)}{field} IN ({body})"


@OperatorRegistry.register(*RANGE_OPS)
def render_range(
    field: str,
    op: Operator,
    value: ComparisonValue,
    fmt: Callable[[Any], str],
) -> str:
    if not isinstance(value, PairValue):
        raise CompilationError(
            f"{op.name} on {field} needs a (lower, upper) pair.", clause="WHERE"
        )
    return f"{_not(op)}{field} BETWEEN {fmt(value.lower)} AND {fmt(value.upper)}"
