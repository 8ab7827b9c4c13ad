"""Parameter sinks: where the predicate compiler binds values.

A sink accumulates the parameters of a single SQL command.  Its running
``parameter_count`` names the next placeholder, so one sink may collect
parameters across several compilations without name collisions, provided
they run one after the other.  Sinks are not safe for concurrent use.

``ParameterList`` is the in-memory sink; :class:`~sqlitegen.command.SQLiteCommand`
is the ``sqlite3``-backed one.  Both store values through :func:`adapt_value`,
so a bound value compares in SQL exactly like its inline literal:

* ``date`` / ``datetime`` become text in the settings' ``datetime_format``
  (a ``date`` is taken at midnight)
* ``time`` becomes ISO text
* ``Decimal`` and ``UUID`` become ``str``
* ``Enum`` members become their ``value``
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import Any, Protocol, runtime_checkable
from uuid import UUID

from sqlitegen.schema.dialect import DEFAULT_SETTINGS, DialectSettings


def adapt_value(value: Any, settings: DialectSettings = DEFAULT_SETTINGS) -> Any:
    """Return ``value`` converted to a type ``sqlite3`` binds natively."""
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, date):
        if not isinstance(value, datetime):
            value = datetime.combine(value, time())
        return value.strftime(settings.datetime_format)
    if isinstance(value, time):
        return value.isoformat()
    if isinstance(value, (Decimal, UUID)):
        return str(value)
    return value


@dataclass(frozen=True)
class Parameter:
    """A named, bound value.

    Attributes:
        name: Placeholder name including its sigil (e.g. ``'@P0'``).
        value: The bound value.
    """

    name: str
    value: Any

    @property
    def key(self) -> str:
        """The name without its sigil, as ``sqlite3`` expects it."""
        return self.name[1:]


@runtime_checkable
class ParameterSink(Protocol):
    """The mutable collaborator that accumulates a command's parameters."""

    @property
    def parameter_count(self) -> int:
        """Number of parameters added so far."""
        ...

    def create_parameter(self, name: str, value: Any) -> Parameter:
        """Create (but do not add) a parameter."""
        ...

    def add_parameter(self, param: Parameter) -> None:
        """Append ``param`` to the command."""
        ...


@dataclass
class ParameterList:
    """In-memory :class:`ParameterSink`.

    ``settings`` supplies the ``datetime_format`` used when adapting values.

    Example::

        sink = ParameterList()
        sql = PredicateBuilder().build(where, sink)
        conn.execute(f"SELECT * FROM t WHERE {sql}", sink.as_dict())
    """

    parameters: list[Parameter] = field(default_factory=list)
    settings: DialectSettings = DEFAULT_SETTINGS

    @property
    def parameter_count(self) -> int:
        return len(self.parameters)

    def create_parameter(self, name: str, value: Any) -> Parameter:
        return Parameter(name=name, value=adapt_value(value, self.settings))

    def add_parameter(self, param: Parameter) -> None:
        self.parameters.append(param)

    def as_dict(self) -> dict[str, Any]:
        """Return ``{name_without_sigil: value}`` for ``sqlite3`` execution."""
        return {p.key: p.value for p in self.parameters}

    def __iter__(self):
        return iter(self.parameters)

    def __len__(self) -> int:
        return len(self.parameters)
