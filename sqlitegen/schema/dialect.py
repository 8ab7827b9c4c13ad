"""Pydantic model for the DialectSettings used by the SQLite compiler.

The settings control the textual details of generated SQL: identifier
delimiters, parameter placeholder naming, date/time literal format, and
whether IN lists are bound as parameters.

Create settings through the builder; every method changes exactly one
setting and the combination is checked once in :meth:`build`::

    from sqlitegen import DialectSettings

    # Double-quoted identifiers, ``:p0``-style placeholders
    settings = (
        DialectSettings.builder()
        .escape_with('"', '"')
        .parameter_prefix(":p")
        .build()
    )

    # Bind IN / NOT IN list elements instead of inlining them
    settings = DialectSettings.builder().parameterize_in_lists().build()
"""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from sqlitegen.errors import SettingsConfigError

#: Characters SQLite accepts as the first character of a named parameter.
PARAMETER_SIGILS: frozenset[str] = frozenset({"@", ":", "$"})

#: Default literal format for date/time values (fixed, locale independent).
DEFAULT_DATETIME_FORMAT = "%Y/%m/%d %H:%M:%S"


class DialectSettings(BaseModel):
    """Textual conventions for generated SQLite statements.

    Always created via :meth:`builder` in application code; the default
    instance is :data:`DEFAULT_SETTINGS`.

    Attributes:
        escape_chars: Opening and closing identifier delimiters.
        parameter_prefix: Placeholder prefix; parameter ``n`` is named
            ``f"{parameter_prefix}{n}"``.
        datetime_format: ``strftime`` format for date/time literals.
        parameterize_in_lists: Bind IN / NOT IN elements as parameters when a
            sink is supplied.  Off by default, which keeps the inline
            rendering of earlier releases.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    escape_chars: tuple[str, str] = ("`", "`")
    parameter_prefix: str = "@P"
    datetime_format: str = DEFAULT_DATETIME_FORMAT
    parameterize_in_lists: bool = False

    @classmethod
    def builder(cls) -> "DialectSettingsBuilder":
        """Return a :class:`DialectSettingsBuilder` starting from the defaults."""
        return DialectSettingsBuilder()

    def parameter_name(self, index: int) -> str:
        """Return the placeholder name for the parameter at ``index``."""
        return f"{self.parameter_prefix}{index}"


class DialectSettingsBuilder:
    """Fluent builder for :class:`DialectSettings`.

    Always obtained via :meth:`DialectSettings.builder`.
    """

    def __init__(self) -> None:
        defaults = DialectSettings()
        self._escape_chars = defaults.escape_chars
        self._parameter_prefix = defaults.parameter_prefix
        self._datetime_format = defaults.datetime_format
        self._parameterize_in_lists = defaults.parameterize_in_lists

    def escape_with(self, opening: str, closing: str | None = None) -> "DialectSettingsBuilder":
        """Use ``opening`` / ``closing`` as identifier delimiters.

        Args:
            opening: Opening delimiter character.
            closing: Closing delimiter character; defaults to ``opening``.
        """
        self._escape_chars = (opening, closing if closing is not None else opening)
        return self

    def parameter_prefix(self, prefix: str) -> "DialectSettingsBuilder":
        """Name placeholders ``f"{prefix}{n}"``."""
        self._parameter_prefix = prefix
        return self

    def datetime_format(self, fmt: str) -> "DialectSettingsBuilder":
        """Render date/time literals with the ``strftime`` format ``fmt``."""
        self._datetime_format = fmt
        return self

    def parameterize_in_lists(self, enabled: bool = True) -> "DialectSettingsBuilder":
        """Bind IN / NOT IN list elements as individual parameters."""
        self._parameterize_in_lists = enabled
        return self

    def build(self) -> DialectSettings:
        """Validate the configuration and return the :class:`DialectSettings`.

        Raises:
            SettingsConfigError: When a delimiter is not a single character,
                or the parameter prefix cannot be bound by SQLite.
        """
        self._validate()
        return DialectSettings(
            escape_chars=self._escape_chars,
            parameter_prefix=self._parameter_prefix,
            datetime_format=self._datetime_format,
            parameterize_in_lists=self._parameterize_in_lists,
        )

    # ------------------------------------------------------------------
    # Internal validation
    # ------------------------------------------------------------------

    def _validate(self) -> None:
        """Raise :class:`SettingsConfigError` for invalid configurations.

        Rules
        -----
        ``escape_chars``
            Both delimiters are single characters.  The escaper trims them
            character by character from identifier edges.

        ``parameter_prefix``
            Starts with ``@``, ``:`` or ``$`` and has at least one name
            character after the sigil, so SQLite can bind it by name.
        """
        if any(len(ch) != 1 for ch in self._escape_chars):
            raise SettingsConfigError(
                f"Identifier delimiters must be single characters; got {self._escape_chars!r}.",
                missing=["escape_chars"],
                reason="Delimiters are trimmed one character at a time from identifier edges.",
            )

        prefix = self._parameter_prefix
        if len(prefix) < 2 or prefix[0] not in PARAMETER_SIGILS:
            raise SettingsConfigError(
                f"Parameter prefix {prefix!r} cannot be bound by SQLite. "
                "Use a sigil (@, : or $) followed by at least one name character, "
                "for example '@P' or ':p'.",
                missing=["parameter_prefix"],
                reason="SQLite only binds named parameters that start with @, : or $.",
            )


#: Settings used by the module-level helpers.
DEFAULT_SETTINGS = DialectSettings()
