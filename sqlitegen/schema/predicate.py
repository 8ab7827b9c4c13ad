"""Pydantic models for the predicate tree compiled into a WHERE clause.

A :class:`WhereStatement` is an ordered list of :class:`ClauseGroup` objects,
each an ordered, non-empty list of :class:`Comparison` objects::

    where = WhereStatement(group_operator=LogicOperator.AND)
    where.add("age", Operator.GREATER_THAN, 18).add(
        "country", Operator.EQUALS, "NZ", logic=LogicOperator.OR
    )
    where.add("name", Operator.LIKE, "A%")
    # (`age` > 18 OR `country` = 'NZ') AND `name` LIKE 'A%'

One ``group_operator`` joins every pair of adjacent groups; each
comparison's ``logic`` joins it to the comparisons before it in its group.
"""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from sqlitegen.errors import MalformedPredicateValueError
from sqlitegen.schema.expressions import RANGE_OPS, LogicOperator, Operator
from sqlitegen.schema.values import (
    ComparisonValue,
    NullValue,
    PairValue,
    SequenceValue,
    to_value,
)


class Comparison(BaseModel):
    """A single ``field <operator> value`` comparison.

    Attributes:
        field_name: Column name; escaped on use.
        operator: The comparison operator.
        value: Typed comparison value.  Plain Python values are converted
            with :func:`~sqlitegen.schema.values.to_value`.
        logic: Connective joining this comparison to the previous one in its
            group.  Ignored for the first comparison.
    """

    model_config = ConfigDict(extra="forbid", arbitrary_types_allowed=True)

    field_name: str = Field(min_length=1)
    operator: Operator
    value: ComparisonValue = Field(default_factory=NullValue)
    logic: LogicOperator = LogicOperator.AND

    @model_validator(mode="before")
    @classmethod
    def _coerce_value(cls, data: Any) -> Any:
        """Accept plain Python values in ``value``."""
        if isinstance(data, dict) and "value" in data:
            data = dict(data)
            data["value"] = to_value(data["value"])
        return data

    @model_validator(mode="after")
    def _check_range_value(self) -> Comparison:
        """Promote 2-element sequences to pairs; reject any other BETWEEN value."""
        if self.operator not in RANGE_OPS:
            return self
        value = self.value
        if isinstance(value, (PairValue, NullValue)):
            return self
        if isinstance(value, SequenceValue) and len(value.sequence) == 2:
            self.value = PairValue(pair=value.sequence)
            return self
        raise MalformedPredicateValueError(self.field_name, self.operator, value)


class ClauseGroup(BaseModel):
    """An ordered, non-empty group of comparisons.

    Rendered without parentheses when it holds a single comparison.
    """

    model_config = ConfigDict(extra="forbid")

    comparisons: list[Comparison] = Field(min_length=1)

    def add(
        self,
        field_name: str,
        operator: Operator,
        value: Any = None,
        logic: LogicOperator = LogicOperator.AND,
    ) -> ClauseGroup:
        """Append a comparison joined with ``logic`` and return this group."""
        self.comparisons.append(
            Comparison(field_name=field_name, operator=operator, value=value, logic=logic)
        )
        return self

    def __len__(self) -> int:
        return len(self.comparisons)


class WhereStatement(BaseModel):
    """A complete WHERE predicate.

    Attributes:
        groups: Clause groups in output order.
        group_operator: Connective inserted between every pair of adjacent
            groups.  Defaults to ``OR``.
    """

    model_config = ConfigDict(extra="forbid")

    groups: list[ClauseGroup] = Field(default_factory=list)
    group_operator: LogicOperator = LogicOperator.OR

    def add(self, field_name: str, operator: Operator, value: Any = None) -> ClauseGroup:
        """Start a new clause group with one comparison and return the group.

        Further comparisons are chained onto the returned group with
        :meth:`ClauseGroup.add`.
        """
        group = ClauseGroup(
            comparisons=[Comparison(field_name=field_name, operator=operator, value=value)]
        )
        self.groups.append(group)
        return group

    def __len__(self) -> int:
        return len(self.groups)
