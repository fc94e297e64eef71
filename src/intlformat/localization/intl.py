"""Intl facade: one object bundling every formatter for a locale context.

IntlFormatter is what application code (and the declarative bindings) call.
Message formatting goes through the FallbackResolver and never raises in
non-strict mode. The single-value formatters (number, date, time, relative,
plural) never raise either: failures are logged and a readable fallback is
returned, so one bad value cannot break a whole view.

Python 3.13+. Uses Babel for i18n (via the runtime formatters).
"""

import html
import logging
from collections.abc import Callable, Mapping
from datetime import date, datetime
from decimal import Decimal
from typing import Any

from intlformat.diagnostics import FormattingError, IntlError
from intlformat.enums import PluralStyle
from intlformat.localization.config import IntlConfig, current_config
from intlformat.localization.descriptors import MessageDescriptor
from intlformat.localization.resolver import FallbackInfo, FallbackResolver
from intlformat.runtime.cache import FormatCache
from intlformat.runtime.formats import Formats, get_named_format
from intlformat.runtime.formatters import (
    get_datetime_formatter,
    get_number_formatter,
    get_relative_formatter,
)
from intlformat.runtime.plural_rules import select_plural_category
from intlformat.runtime.value_types import Fragments, is_number, is_rich_content, render_text

__all__ = ["IntlFormatter", "format_message", "get_shared_cache"]

logger = logging.getLogger(__name__)

_SHARED_CACHE = FormatCache()

_FALLBACK_ERRORS = (IntlError, ArithmeticError, LookupError, TypeError, ValueError)


def get_shared_cache() -> FormatCache:
    """Process-wide cache used by formatters that were not given their own."""
    return _SHARED_CACHE


def _fallback_text(value: object, error: Exception) -> str:
    if isinstance(error, FormattingError):
        return error.fallback_value
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


class IntlFormatter:
    """Formatting API bound to one resolved IntlConfig.

    Example:
        >>> intl = IntlFormatter(IntlConfig(locale="de"))
        >>> intl.format_number(1234.5)
        '1.234,5'
        >>> intl.format_plural(1)
        'one'
    """

    __slots__ = ("_cache", "_config", "_formats", "_resolver")

    def __init__(
        self,
        config: IntlConfig | None = None,
        *,
        cache: FormatCache | None = None,
        strict: bool = False,
        on_fallback: Callable[[FallbackInfo], None] | None = None,
    ) -> None:
        """Initialize facade.

        Args:
            config: Locale context (default: the current provider's config)
            cache: Memo cache (default: the process-wide shared cache)
            strict: Re-raise syntax errors in default messages
            on_fallback: Observer for messages that needed a fallback step
        """
        self._config = (config or current_config()).resolved()
        self._cache = cache if cache is not None else _SHARED_CACHE
        self._formats: Formats = self._config.merged_formats
        self._resolver = FallbackResolver(
            locale=self.locale,
            default_locale=self._config.default_locale or self.locale,
            messages=self._config.messages,
            formats=self._config.formats,
            default_formats=self._config.default_formats or {},
            cache=self._cache,
            strict=strict,
            on_fallback=on_fallback,
        )

    @property
    def config(self) -> IntlConfig:
        """The resolved config this formatter is bound to."""
        return self._config

    @property
    def locale(self) -> str:
        """Active locale code."""
        assert self._config.locale is not None  # Type narrowing: config is resolved
        return self._config.locale

    @property
    def cache(self) -> FormatCache:
        """Cache holding compiled messages and formatters."""
        return self._cache

    def now(self) -> datetime:
        """Current time from the config's clock."""
        assert self._config.now is not None  # Type narrowing: config is resolved
        return self._config.now()

    # ------------------------------------------------------------------
    # Messages
    # ------------------------------------------------------------------

    def format_message(
        self, descriptor: MessageDescriptor, values: Mapping[str, object] | None = None
    ) -> Fragments:
        """Format a message to fragments (rich-content values kept as-is)."""
        return self._resolver.resolve(descriptor, values)

    def format_message_text(
        self, descriptor: MessageDescriptor, values: Mapping[str, object] | None = None
    ) -> str:
        """Format a message to a plain string."""
        return render_text(self.format_message(descriptor, values))

    def format_html_message(
        self, descriptor: MessageDescriptor, values: Mapping[str, object] | None = None
    ) -> str:
        """Format a message whose template is HTML.

        String values are HTML-escaped before substitution. Rich-content
        values are not supported and are withheld, so a message that uses
        one falls back to the next step of the chain.
        """
        escaped: dict[str, object] = {}
        for name, value in (values or {}).items():
            if is_rich_content(value):
                logger.error(
                    "Rich content value '%s' is not supported in HTML message '%s'",
                    name,
                    descriptor.id,
                )
                continue
            escaped[name] = html.escape(value) if isinstance(value, str) else value
        return render_text(self.format_message(descriptor, escaped))

    # ------------------------------------------------------------------
    # Single values
    # ------------------------------------------------------------------

    def _options(self, kind: str, format_name: str | None, options: Mapping[str, Any]) -> dict[str, Any]:
        return {**get_named_format(self._formats, kind, format_name), **options}

    def format_number(
        self, value: int | float | Decimal, format_name: str | None = None, **options: Any
    ) -> str:
        """Format a number; named format options are overridden by ``options``.

        Example:
            >>> IntlFormatter(IntlConfig(locale="en")).format_number(0.25, "percent")
            '25%'
        """
        try:
            formatter = get_number_formatter(
                self.locale, self._options("number", format_name, options), self._cache
            )
            return formatter.format(value)
        except _FALLBACK_ERRORS as e:
            logger.error("Error formatting number %r: %s", value, e)
            return _fallback_text(value, e)

    def format_date(
        self, value: date | int | float, format_name: str | None = None, **options: Any
    ) -> str:
        """Format a date (datetime, date or epoch milliseconds)."""
        return self._format_datetime("date", value, format_name, options)

    def format_time(
        self, value: datetime | int | float, format_name: str | None = None, **options: Any
    ) -> str:
        """Format a time of day (datetime or epoch milliseconds)."""
        return self._format_datetime("time", value, format_name, options)

    def _format_datetime(
        self, kind: str, value: object, format_name: str | None, options: Mapping[str, Any]
    ) -> str:
        try:
            formatter = get_datetime_formatter(
                self.locale,
                "date" if kind == "date" else "time",
                self._options(kind, format_name, options),
                self._cache,
            )
            return formatter.format(value)  # type: ignore[arg-type]
        except _FALLBACK_ERRORS as e:
            logger.error("Error formatting %s %r: %s", kind, value, e)
            return _fallback_text(value, e)

    def format_relative(
        self,
        value: datetime | date | int | float,
        format_name: str | None = None,
        *,
        now: datetime | date | int | float | None = None,
        **options: Any,
    ) -> str:
        """Format ``value`` relative to ``now`` (default: the config clock).

        Example:
            >>> from datetime import datetime, timedelta, UTC
            >>> now = datetime(2025, 1, 1, tzinfo=UTC)
            >>> IntlFormatter(IntlConfig(locale="en")).format_relative(now - timedelta(hours=3), now=now)
            '3 hours ago'
        """
        try:
            formatter = get_relative_formatter(
                self.locale, self._options("relative", format_name, options), self._cache
            )
            return formatter.format(value, now if now is not None else self.now())
        except _FALLBACK_ERRORS as e:
            logger.error("Error formatting relative time %r: %s", value, e)
            return _fallback_text(value, e)

    def format_plural(
        self, value: int | float | Decimal, *, style: PluralStyle | str = PluralStyle.CARDINAL
    ) -> str:
        """CLDR plural category of ``value`` ("other" when it cannot be determined)."""
        if not is_number(value):
            logger.error("Error formatting plural: expected a number, got %r", value)
            return "other"
        try:
            return select_plural_category(value, self.locale, style)
        except _FALLBACK_ERRORS as e:
            logger.error("Error formatting plural %r: %s", value, e)
            return "other"

    def __repr__(self) -> str:
        return f"IntlFormatter(locale={self.locale!r}, default_locale={self._config.default_locale!r})"


def format_message(
    descriptor: MessageDescriptor,
    values: Mapping[str, object] | None = None,
    **overrides: Any,
) -> Fragments:
    """Format a message with the current provider's config.

    Args:
        descriptor: Message to format
        values: Substitution values
        **overrides: IntlConfig fields replacing the current ones for this call

    Example:
        >>> hello = MessageDescriptor("hello", "Hello, {name}!")
        >>> format_message(hello, {"name": "Eric"}, locale="en")
        ('Hello, Eric!',)
    """
    config = IntlConfig(**overrides).inherit(current_config())
    return IntlFormatter(config).format_message(descriptor, values)

