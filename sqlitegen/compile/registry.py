"""Operator and value-reader registries (Open/Closed Principle).

These registries allow extension without modification.

``OperatorRegistry``
    Per-operator SQL rendering handlers.  The predicate builder looks up the
    handler for each comparison, so an operator's rendering can be replaced
    without touching :class:`~sqlitegen.compile.predicate_builder.PredicateBuilder`.

``ReaderRegistry``
    Per-classification value readers used by the row materializer.  Types
    without a reader are returned exactly as stored.

Usage::

    from sqlitegen.compile.registry import ReaderRegistry
    from sqlitegen.schema.types import TypeClass

    @ReaderRegistry.register(TypeClass.DATETIME)
    def _read_datetime(value):
        return datetime.fromisoformat(value)
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, ClassVar

from sqlitegen.errors import CompilationError
from sqlitegen.schema.expressions import Operator
from sqlitegen.schema.types import TypeClass
from sqlitegen.schema.values import ComparisonValue

# ---------------------------------------------------------------------------
# Operator registry
# ---------------------------------------------------------------------------

#: Type alias for a comparison rendering handler.
#: ``(quoted_field, operator, value, format_literal) -> sql_string``
OperatorHandler = Callable[[str, Operator, ComparisonValue, Callable[[Any], str]], str]


class OperatorRegistry:
    """Registry mapping comparison operators to SQL rendering handlers.

    Handlers receive a non-null value; NULL comparisons are rendered by the
    predicate builder itself.

    Example::

        @OperatorRegistry.register(Operator.LIKE)
        def _like_escaped(field, op, value, fmt):
            return f"{field} LIKE {fmt(value.scalar)} ESCAPE '\\\\'"
    """

    _operators: ClassVar[dict[Operator, OperatorHandler]] = {}

    @classmethod
    def register(cls, *operators: Operator) -> Callable[[OperatorHandler], OperatorHandler]:
        """Decorator that registers a handler for one or more operators.

        Args:
            operators: The operators the handler renders.

        Returns:
            A decorator that registers and returns the handler.
        """

        def decorator(handler: OperatorHandler) -> OperatorHandler:
            for op in operators:
                cls._operators[op] = handler
            return handler

        return decorator

    @classmethod
    def get(cls, operator: Operator) -> OperatorHandler:
        """Return the handler for ``operator``.

        Raises:
            CompilationError: If no handler is registered.
        """
        handler = cls._operators.get(operator)
        if handler is None:
            raise CompilationError(
                f"No rendering handler registered for operator {operator.name}.",
                clause="WHERE",
            )
        return handler

    @classmethod
    def registered_operators(cls) -> list[Operator]:
        """Return the registered operators in declaration order."""
        return [op for op in Operator if op in cls._operators]


# ---------------------------------------------------------------------------
# Reader registry
# ---------------------------------------------------------------------------

#: Type alias for a value reader: ``stored_value -> typed_value``.
ValueReader = Callable[[Any], Any]


class ReaderRegistry:
    """Registry mapping type classifications to value readers."""

    _readers: ClassVar[dict[TypeClass, ValueReader]] = {}

    @classmethod
    def register(cls, *type_classes: TypeClass) -> Callable[[ValueReader], ValueReader]:
        """Decorator that registers a reader for one or more classifications."""

        def decorator(reader: ValueReader) -> ValueReader:
            for type_class in type_classes:
                cls._readers[type_class] = reader
            return reader

        return decorator

    @classmethod
    def get(cls, type_class: TypeClass) -> ValueReader | None:
        """Return the reader for ``type_class``, or ``None`` if not registered."""
        return cls._readers.get(type_class)

    @classmethod
    def unregister(cls, type_class: TypeClass) -> None:
        """Remove the reader for ``type_class`` if one is registered."""
        cls._readers.pop(type_class, None)

    @classmethod
    def registered_types(cls) -> list[TypeClass]:
        """Return the classifications with a reader, in declaration order."""
        return [t for t in TypeClass if t in cls._readers]
