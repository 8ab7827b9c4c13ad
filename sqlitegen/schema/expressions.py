"""Constants and helpers for predicate operators.

This module defines the operator enums and the operator groups used by the
predicate models and the predicate compiler.
"""

from __future__ import annotations

from enum import Enum

# ---------------------------------------------------------------------------
# Operator enums
# ---------------------------------------------------------------------------


class Operator(str, Enum):
    """Comparison operators available in a :class:`Comparison`."""

    EQUALS = "EQUALS"
    NOT_EQUAL_TO = "NOT_EQUAL_TO"
    LIKE = "LIKE"
    NOT_LIKE = "NOT_LIKE"
    GREATER_THAN = "GREATER_THAN"
    GREATER_OR_EQUALS = "GREATER_OR_EQUALS"
    LESS_THAN = "LESS_THAN"
    LESS_OR_EQUALS = "LESS_OR_EQUALS"
    IN = "IN"
    NOT_IN = "NOT_IN"
    BETWEEN = "BETWEEN"
    NOT_BETWEEN = "NOT_BETWEEN"


class LogicOperator(str, Enum):
    """Logical connectives between comparisons and between clause groups."""

    AND = "AND"
    OR = "OR"

    @property
    def joiner(self) -> str:
        """The connective surrounded by single spaces."""
        return f" {self.value} "


# ---------------------------------------------------------------------------
# Operator groups
# ---------------------------------------------------------------------------

#: Range operators: take a (lower, upper) pair.
RANGE_OPS: frozenset[Operator] = frozenset({Operator.BETWEEN, Operator.NOT_BETWEEN})

#: Membership operators: take a sequence, a pre-formatted list body, or a scalar.
MEMBERSHIP_OPS: frozenset[Operator] = frozenset({Operator.IN, Operator.NOT_IN})

#: Operators rendered with a ``NOT`` prefix.
NEGATED_OPS: frozenset[Operator] = frozenset(
    {Operator.NOT_LIKE, Operator.NOT_IN, Operator.NOT_BETWEEN}
)

#: Binary operators rendered as ``field <sql> value``.
BINARY_SQL: dict[Operator, str] = {
    Operator.EQUALS: "=",
    Operator.NOT_EQUAL_TO: "<>",
    Operator.LIKE: "LIKE",
    Operator.NOT_LIKE: "LIKE",
    Operator.GREATER_THAN: ">",
    Operator.GREATER_OR_EQUALS: ">=",
    Operator.LESS_THAN: "<",
    Operator.LESS_OR_EQUALS: "<=",
}
