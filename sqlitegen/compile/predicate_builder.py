"""Predicate compiler: WhereStatement → WHERE-clause SQL.

``PredicateBuilder`` renders a predicate tree without the leading ``WHERE``
keyword.  When a :class:`~sqlitegen.compile.sink.ParameterSink` is supplied,
comparison values are bound as parameters and only their placeholders appear
in the SQL text:

* BETWEEN / NOT BETWEEN bind two parameters (lower, then upper);
* IN / NOT IN are rendered inline unless the dialect settings enable
  ``parameterize_in_lists``; pre-formatted string bodies are always inline;
* every other operator binds one parameter;
* NULL values and raw :class:`~sqlitegen.schema.literals.SqlLiteral` values
  are never bound.

Placeholder names follow the sink's running parameter count, so several
predicates compiled one after the other into the same sink get distinct
names (``@P0``, ``@P1``, ...).
"""
from __future__ import annotations

import logging
from typing import Any

from sqlitegen.compile.operators import payload
from sqlitegen.compile.registry import OperatorRegistry
from sqlitegen.compile.sink import ParameterSink
from sqlitegen.compile.sqlite import SQLiteCompiler
from sqlitegen.schema.expressions import MEMBERSHIP_OPS, RANGE_OPS, Operator
from sqlitegen.schema.literals import SqlLiteral, is_null
from sqlitegen.schema.predicate import ClauseGroup, Comparison, WhereStatement
from sqlitegen.schema.values import (
    ComparisonValue,
    NullValue,
    PairValue,
    RawValue,
    ScalarValue,
    SequenceValue,
)

logger = logging.getLogger(__name__)


class PredicateBuilder:
    """Compiles :class:`WhereStatement` trees to SQL.

    Args:
        compiler: Dialect compiler for literals, identifiers and placeholder
            names.  Defaults to a :class:`SQLiteCompiler` with default settings.
    """

    def __init__(self, compiler: SQLiteCompiler | None = None) -> None:
        self._compiler = compiler or SQLiteCompiler()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def build(self, where: WhereStatement, sink: ParameterSink | None = None) -> str:
        """Compile ``where`` to a WHERE-clause body.

        Args:
            where: The predicate tree.
            sink: Optional parameter sink.  Without one, every value is
                rendered inline through the literal formatter.

        Returns:
            The SQL fragment, without a leading ``WHERE``.
        """
        parts: list[str] = []
        for index, group in enumerate(where.groups):
            if index > 0:
                parts.append(where.group_operator.joiner)
            parts.append(self.build_group(group, sink))
        sql = "".join(parts)
        logger.debug("Compiled predicate with %d group(s): %s", len(where.groups), sql)
        return sql

    def build_group(self, group: ClauseGroup, sink: ParameterSink | None = None) -> str:
        """Compile one clause group, parenthesized if it has several comparisons."""
        parts: list[str] = []
        for index, comparison in enumerate(group.comparisons):
            if index > 0:
                parts.append(comparison.logic.joiner)
            parts.append(self.build_comparison(comparison, sink))
        sql = "".join(parts)
        return f"({sql})" if len(group.comparisons) > 1 else sql

    def build_comparison(
        self, comparison: Comparison, sink: ParameterSink | None = None
    ) -> str:
        """Compile a single comparison."""
        field = self._compiler.quote_identifier(comparison.field_name)
        op = comparison.operator
        value = comparison.value

        if isinstance(value, NullValue):
            return self._build_null(field, op)

        if sink is not None and not isinstance(value, RawValue):
            value = self._bind(op, value, sink)

        handler = OperatorRegistry.get(op)
        return handler(field, op, value, self._compiler.format_literal)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @staticmethod
    def _build_null(field: str, op: Operator) -> str:
        # Only equality has a NULL form; any other operator yields no text.
        if op is Operator.EQUALS:
            return f"{field} IS NULL"
        if op is Operator.NOT_EQUAL_TO:
            return f"NOT {field} IS NULL"
        return ""

    def _bind(self, op: Operator, value: ComparisonValue, sink: ParameterSink) -> ComparisonValue:
        """Bind ``value`` into ``sink`` and return its placeholder form."""
        if op in RANGE_OPS and isinstance(value, PairValue):
            lower = self._add(sink, value.lower)
            upper = self._add(sink, value.upper)
            return PairValue(pair=(lower, upper))

        if op in MEMBERSHIP_OPS:
            if not self._compiler.settings.parameterize_in_lists:
                return value
            if isinstance(value, SequenceValue):
                return SequenceValue(sequence=tuple(self._add(sink, v) for v in value.sequence))
            if isinstance(value, PairValue):
                return SequenceValue(sequence=tuple(self._add(sink, v) for v in value.pair))
            if isinstance(value, ScalarValue) and isinstance(value.scalar, str):
                return value
            return SequenceValue(sequence=(self._add(sink, payload(value)),))

        placeholder = self._add(sink, payload(value))
        return RawValue(raw=placeholder) if isinstance(placeholder, SqlLiteral) else value

    def _add(self, sink: ParameterSink, value: Any) -> Any:
        """Add one parameter and return its placeholder as a raw literal.

        NULLs and raw literals are returned unchanged and stay inline.
        """
        if is_null(value) or isinstance(value, SqlLiteral):
            return value
        name = self._compiler.parameter_name(sink.parameter_count)
        sink.add_parameter(sink.create_parameter(name, value))
        logger.debug("Bound parameter %s", name)
        return SqlLiteral(name)

