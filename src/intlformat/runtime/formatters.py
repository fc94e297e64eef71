"""Locale-aware number, date/time and relative-time formatters.

These are the "native formatter" objects of the engine: constructed once per
(locale, options) pair, validated at construction, then reused for every
value. Construction failures raise FormatterConstructionError; failures while
formatting a value raise FormattingError carrying a readable fallback.

Architecture:
    - Formatters use Babel (thread-safe, CLDR-based)
    - No dependency on Python's locale module (avoids global state)
    - Frozen dataclasses: safe to cache and share across threads
    - Options are Intl-style mappings with snake_case keys

Python 3.13+. Uses Babel for i18n.
"""

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date, datetime, tzinfo
from decimal import Decimal, InvalidOperation
from typing import Any, ClassVar, Literal

from babel import Locale, UnknownLocaleError
from babel import dates as babel_dates
from babel import numbers as babel_numbers

from intlformat.diagnostics import (
    ErrorTemplate,
    FormatterConstructionError,
    FormattingError,
)
from intlformat.enums import RelativeUnit
from intlformat.locale_utils import get_babel_locale
from intlformat.runtime.cache import FormatCache
from intlformat.runtime.relative import coerce_instant, select_units

__all__ = [
    "DateTimeFormatter",
    "NumberFormatter",
    "RelativeTimeFormatter",
    "get_datetime_formatter",
    "get_number_formatter",
    "get_relative_formatter",
]

type NumberStyle = Literal["decimal", "percent", "currency"]
type CurrencyDisplay = Literal["symbol", "code", "name"]
type DateTimeKind = Literal["date", "time"]
type RelativeWidth = Literal["long", "short", "narrow"]

_MAX_FRACTION_DIGITS = 20


def _invalid(kind: str, option: str, value: object) -> FormatterConstructionError:
    return FormatterConstructionError(ErrorTemplate.invalid_format_option(kind, option, value))


def _reject_unknown_options(kind: str, options: Mapping[str, Any], allowed: frozenset[str]) -> None:
    for key in options:
        if key not in allowed:
            raise _invalid(kind, key, options[key])


def _resolve_locale(kind: str, locale_code: str) -> Locale:
    try:
        return get_babel_locale(locale_code)
    except (UnknownLocaleError, ValueError, TypeError) as e:
        raise _invalid(kind, "locale", locale_code) from e


def _fraction_digits(kind: str, options: Mapping[str, Any], name: str) -> int | None:
    value = options.get(name)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise _invalid(kind, name, value)
    if not 0 <= value <= _MAX_FRACTION_DIGITS:
        raise _invalid(kind, name, value)
    return value


# ============================================================================
# NUMBERS
# ============================================================================


@dataclass(frozen=True, slots=True)
class NumberFormatter:
    """Immutable number formatter bound to a locale and option set.

    Use NumberFormatter.create() to construct instances with validation.

    Examples:
        >>> NumberFormatter.create("en-US").format(1234.5)
        '1,234.5'
        >>> NumberFormatter.create("de-DE").format(1234.5)
        '1.234,5'
        >>> NumberFormatter.create("en-US", {"style": "percent"}).format(0.25)
        '25%'
        >>> NumberFormatter.create("en-US", {"style": "currency", "currency": "EUR"}).format(3)
        '€3.00'

    CLDR Compliance:
        Patterns come from the locale's CLDR decimal/percent/currency formats
        and are applied with Babel's NumberPattern, matching
        Intl.NumberFormat semantics for the supported options.
    """

    _OPTIONS: ClassVar[frozenset[str]] = frozenset({
        "style",
        "currency",
        "currency_display",
        "minimum_fraction_digits",
        "maximum_fraction_digits",
        "use_grouping",
        "pattern",
    })

    locale_code: str
    style: NumberStyle
    currency: str | None
    currency_display: CurrencyDisplay
    use_grouping: bool
    explicit_digits: bool
    _babel_locale: Locale = field(repr=False, compare=False)
    _pattern: babel_numbers.NumberPattern | None = field(repr=False, compare=False)

    @classmethod
    def create(
        cls, locale_code: str, options: Mapping[str, Any] | None = None
    ) -> "NumberFormatter":
        """Validate options and build a formatter.

        Args:
            locale_code: BCP 47 locale identifier (e.g., 'en-US', 'lv-LV')
            options: style, currency, currency_display, minimum_fraction_digits,
                maximum_fraction_digits, use_grouping, pattern

        Raises:
            FormatterConstructionError: Unknown option, invalid value,
                currency style without a currency code, or unknown locale
        """
        options = options or {}
        _reject_unknown_options("number", options, cls._OPTIONS)
        babel_locale = _resolve_locale("number", locale_code)

        style = options.get("style", "decimal")
        if style not in ("decimal", "percent", "currency"):
            raise _invalid("number", "style", style)

        currency = options.get("currency")
        if style == "currency":
            if not isinstance(currency, str) or len(currency) != 3 or not currency.isalpha():
                raise _invalid("number", "currency", currency)
            currency = currency.upper()

        currency_display = options.get("currency_display", "symbol")
        if currency_display not in ("symbol", "code", "name"):
            raise _invalid("number", "currency_display", currency_display)

        use_grouping = options.get("use_grouping", True)
        if not isinstance(use_grouping, bool):
            raise _invalid("number", "use_grouping", use_grouping)

        min_digits = _fraction_digits("number", options, "minimum_fraction_digits")
        max_digits = _fraction_digits("number", options, "maximum_fraction_digits")
        if min_digits is not None and max_digits is not None and min_digits > max_digits:
            raise _invalid("number", "minimum_fraction_digits", min_digits)

        pattern = None
        if not (style == "currency" and currency_display == "name"):
            pattern = cls._build_pattern(
                babel_locale, style, currency_display, options.get("pattern"),
                min_digits, max_digits,
            )

        return cls(
            locale_code=locale_code,
            style=style,
            currency=currency,
            currency_display=currency_display,
            use_grouping=use_grouping,
            explicit_digits=min_digits is not None or max_digits is not None,
            _babel_locale=babel_locale,
            _pattern=pattern,
        )

    @staticmethod
    def _build_pattern(
        babel_locale: Locale,
        style: NumberStyle,
        currency_display: CurrencyDisplay,
        custom: object,
        min_digits: int | None,
        max_digits: int | None,
    ) -> babel_numbers.NumberPattern:
        """Parse a fresh NumberPattern so the locale's cached one is never mutated."""
        if custom is not None:
            if not isinstance(custom, str) or not custom:
                raise _invalid("number", "pattern", custom)
            source = custom
        elif style == "percent":
            source = babel_locale.percent_formats[None].pattern
        elif style == "currency":
            source = babel_locale.currency_formats["standard"].pattern
            if currency_display == "code" and "\xa4" in source:
                # Single U+00A4 = symbol, double = ISO code per CLDR
                source = source.replace("\xa4", "\xa4\xa4")
        else:
            source = babel_locale.decimal_formats[None].pattern

        try:
            pattern = babel_numbers.parse_pattern(source)
        except (ValueError, TypeError) as e:
            raise _invalid("number", "pattern", custom) from e

        if min_digits is not None or max_digits is not None:
            current_min, current_max = pattern.frac_prec
            new_min = min_digits if min_digits is not None else min(current_min, max_digits or 0)
            new_max = max_digits if max_digits is not None else max(current_max, new_min)
            pattern.frac_prec = (new_min, new_max)
        return pattern

    def format(self, value: int | float | Decimal) -> str:
        """Format a number with this formatter's locale and options.

        Raises:
            FormattingError: If Babel cannot format the value
        """
        try:
            if self._pattern is None:
                return str(
                    babel_numbers.format_currency(
                        value,
                        self.currency,
                        locale=self._babel_locale,
                        currency_digits=True,
                        format_type="name",
                        group_separator=self.use_grouping,
                    )
                )
            return str(
                self._pattern.apply(
                    value,
                    self._babel_locale,
                    currency=self.currency,
                    currency_digits=not self.explicit_digits,
                    group_separator=self.use_grouping,
                )
            )
        except (ValueError, TypeError, InvalidOperation, ArithmeticError, KeyError) as e:
            raise FormattingError(
                ErrorTemplate.formatting_failed("number", value, self.locale_code, str(e)),
                fallback_value=str(value),
            ) from e


# ============================================================================
# DATES AND TIMES
# ============================================================================

_STYLES: frozenset[str] = frozenset({"short", "medium", "long", "full"})

# Intl option value -> CLDR skeleton field, in canonical skeleton order.
_SKELETON_FIELDS: tuple[tuple[str, dict[str, str]], ...] = (
    ("year", {"numeric": "y", "2-digit": "yy"}),
    ("month", {"numeric": "M", "2-digit": "MM", "short": "MMM", "long": "MMMM", "narrow": "MMMMM"}),
    ("weekday", {"short": "E", "long": "EEEE", "narrow": "EEEEE"}),
    ("day", {"numeric": "d", "2-digit": "dd"}),
    ("hour", {"numeric": "h", "2-digit": "hh"}),
    ("minute", {"numeric": "m", "2-digit": "mm"}),
    ("second", {"numeric": "s", "2-digit": "ss"}),
    ("time_zone_name", {"short": "z", "long": "zzzz"}),
)

_DATE_FIELDS: frozenset[str] = frozenset({"year", "month", "weekday", "day"})
_TIME_FIELDS: frozenset[str] = frozenset({"hour", "minute", "second"})


def _prefers_12_hour(babel_locale: Locale) -> bool:
    short = babel_locale.time_formats["short"]
    return any(ch in short.pattern for ch in "hK")


@dataclass(frozen=True, slots=True)
class DateTimeFormatter:
    """Immutable date or time formatter bound to a locale and option set.

    Options are either a CLDR ``style`` (short/medium/long/full), an explicit
    CLDR ``pattern``, or Intl-style field options (year, month, day, weekday,
    hour, minute, second, time_zone_name, hour12) that are matched against
    the locale's available skeletons. ``time_zone`` converts aware values.

    Examples:
        >>> from datetime import datetime, UTC
        >>> dt = datetime(2025, 10, 27, 14, 30, tzinfo=UTC)
        >>> DateTimeFormatter.create("en-US", "date", {"style": "short"}).format(dt)
        '10/27/25'
        >>> DateTimeFormatter.create("de-DE", "date", {"style": "medium"}).format(dt)
        '27.10.2025'
        >>> DateTimeFormatter.create("de-DE", "time", {"style": "short"}).format(dt)
        '14:30'
    """

    _OPTIONS: ClassVar[frozenset[str]] = frozenset(
        {"style", "pattern", "hour12", "time_zone"} | {name for name, _ in _SKELETON_FIELDS}
    )

    locale_code: str
    kind: DateTimeKind
    pattern: str
    time_zone: str | None
    _babel_locale: Locale = field(repr=False, compare=False)
    _tzinfo: tzinfo | None = field(repr=False, compare=False)

    @classmethod
    def create(
        cls,
        locale_code: str,
        kind: DateTimeKind,
        options: Mapping[str, Any] | None = None,
    ) -> "DateTimeFormatter":
        """Validate options and resolve them to a CLDR pattern.

        Raises:
            FormatterConstructionError: Unknown option or value, unknown time
                zone, or field options no locale skeleton can satisfy
        """
        options = options or {}
        _reject_unknown_options(kind, options, cls._OPTIONS)
        babel_locale = _resolve_locale(kind, locale_code)

        time_zone = options.get("time_zone")
        tz: tzinfo | None = None
        if time_zone is not None:
            try:
                tz = babel_dates.get_timezone(time_zone)
            except (LookupError, ValueError, TypeError) as e:
                raise _invalid(kind, "time_zone", time_zone) from e

        pattern = cls._resolve_pattern(babel_locale, kind, options)
        return cls(
            locale_code=locale_code,
            kind=kind,
            pattern=pattern,
            time_zone=time_zone,
            _babel_locale=babel_locale,
            _tzinfo=tz,
        )

    @staticmethod
    def _resolve_pattern(babel_locale: Locale, kind: DateTimeKind, options: Mapping[str, Any]) -> str:
        custom = options.get("pattern")
        if custom is not None:
            if not isinstance(custom, str) or not custom:
                raise _invalid(kind, "pattern", custom)
            try:
                babel_dates.parse_pattern(custom)
            except (ValueError, KeyError, TypeError) as e:
                raise _invalid(kind, "pattern", custom) from e
            return custom

        style = options.get("style")
        if style is not None:
            if style not in _STYLES:
                raise _invalid(kind, "style", style)
            table = babel_locale.date_formats if kind == "date" else babel_locale.time_formats
            return table[style].pattern

        fields = {name: options[name] for name, _ in _SKELETON_FIELDS if options.get(name)}
        if kind == "date" and not fields:
            fields = {"year": "numeric", "month": "numeric", "day": "numeric"}
        elif kind == "time" and not fields.keys() & _TIME_FIELDS:
            fields |= {"hour": "numeric", "minute": "numeric"}

        hour12 = options.get("hour12")
        if hour12 is not None and not isinstance(hour12, bool):
            raise _invalid(kind, "hour12", hour12)
        if hour12 is None:
            hour12 = _prefers_12_hour(babel_locale)

        skeleton = ""
        for name, table in _SKELETON_FIELDS:
            if name not in fields:
                continue
            symbol = table.get(fields[name])
            if symbol is None:
                raise _invalid(kind, name, fields[name])
            if name == "hour" and not hour12:
                symbol = symbol.upper()
            skeleton += symbol

        skeletons = babel_locale.datetime_skeletons
        if skeleton not in skeletons:
            matched = babel_dates.match_skeleton(skeleton, skeletons)
            if matched is None:
                raise _invalid(kind, "fields", skeleton)
            skeleton = matched
        return skeletons[skeleton].pattern

    def format(self, value: datetime | date | int | float | Decimal) -> str:
        """Format a datetime, date, or epoch-milliseconds number.

        Naive datetimes are read as UTC. Plain dates are never shifted by
        ``time_zone``.

        Raises:
            FormattingError: If the value cannot be formatted
        """
        try:
            if isinstance(value, date) and not isinstance(value, datetime):
                return str(babel_dates.format_date(value, format=self.pattern, locale=self._babel_locale))
            instant = coerce_instant(value)
            return str(
                babel_dates.format_datetime(
                    instant, format=self.pattern, tzinfo=self._tzinfo, locale=self._babel_locale
                )
            )
        except (ValueError, TypeError, OverflowError, OSError, AttributeError, KeyError) as e:
            fallback = value.isoformat() if isinstance(value, date) else str(value)
            raise FormattingError(
                ErrorTemplate.formatting_failed(self.kind, value, self.locale_code, str(e)),
                fallback_value=fallback,
            ) from e


# ============================================================================
# RELATIVE TIME
# ============================================================================


@dataclass(frozen=True, slots=True)
class RelativeTimeFormatter:
    """Immutable relative-time formatter ("3 minutes ago", "in 2 days").

    Without ``units`` the unit is picked from the delta (see
    :func:`intlformat.runtime.relative.select_units`); with it the magnitude
    is always expressed in that unit.

    Examples:
        >>> from datetime import datetime, timedelta, UTC
        >>> now = datetime(2025, 1, 1, tzinfo=UTC)
        >>> RelativeTimeFormatter.create("en").format(now - timedelta(seconds=10), now)
        '10 seconds ago'
        >>> RelativeTimeFormatter.create("en", {"units": "minute"}).format(now + timedelta(hours=2), now)
        'in 120 minutes'
    """

    _OPTIONS: ClassVar[frozenset[str]] = frozenset({"units", "width"})

    locale_code: str
    units: RelativeUnit | None
    width: RelativeWidth
    _babel_locale: Locale = field(repr=False, compare=False)

    @classmethod
    def create(
        cls, locale_code: str, options: Mapping[str, Any] | None = None
    ) -> "RelativeTimeFormatter":
        """Validate options and build a formatter.

        Raises:
            FormatterConstructionError: Unknown option or value, or unknown locale
        """
        options = options or {}
        _reject_unknown_options("relative", options, cls._OPTIONS)
        babel_locale = _resolve_locale("relative", locale_code)

        raw_units = options.get("units")
        units: RelativeUnit | None = None
        if raw_units is not None:
            try:
                units = RelativeUnit(raw_units)
            except ValueError as e:
                raise _invalid("relative", "units", raw_units) from e

        width = options.get("width", "long")
        if width not in ("long", "short", "narrow"):
            raise _invalid("relative", "width", width)

        return cls(locale_code=locale_code, units=units, width=width, _babel_locale=babel_locale)

    def unit_for(self, delta_ms: float) -> RelativeUnit:
        """Unit this formatter displays for a signed delta."""
        return self.units or select_units(delta_ms)

    def format(self, value: object, now: object) -> str:
        """Format ``value`` relative to ``now``.

        Raises:
            FormattingError: If either instant cannot be interpreted
        """
        try:
            delta = coerce_instant(value) - coerce_instant(now)
            unit = self.unit_for(delta.total_seconds() * 1000)
            return str(
                babel_dates.format_timedelta(
                    delta,
                    granularity=unit.value,
                    threshold=math.inf,
                    add_direction=True,
                    format=self.width,
                    locale=self._babel_locale,
                )
            )
        except (ValueError, TypeError, OverflowError, OSError, KeyError) as e:
            raise FormattingError(
                ErrorTemplate.formatting_failed("relative", value, self.locale_code, str(e)),
                fallback_value=value.isoformat() if isinstance(value, date) else str(value),
            ) from e


# ============================================================================
# CACHED CONSTRUCTION
# ============================================================================


def _frozen_options(options: Mapping[str, Any] | None) -> tuple[tuple[str, Any], ...]:
    return tuple(sorted((options or {}).items()))


def get_number_formatter(
    locale_code: str, options: Mapping[str, Any] | None = None, cache: FormatCache | None = None
) -> NumberFormatter:
    """Construct (or fetch from ``cache``) a NumberFormatter."""
    if cache is None:
        return NumberFormatter.create(locale_code, options)
    return cache.get_or_compute(
        "number",
        (locale_code, _frozen_options(options)),
        lambda: NumberFormatter.create(locale_code, options),
    )


def get_datetime_formatter(
    locale_code: str,
    kind: DateTimeKind,
    options: Mapping[str, Any] | None = None,
    cache: FormatCache | None = None,
) -> DateTimeFormatter:
    """Construct (or fetch from ``cache``) a date or time formatter."""
    if cache is None:
        return DateTimeFormatter.create(locale_code, kind, options)
    return cache.get_or_compute(
        kind,
        (locale_code, _frozen_options(options)),
        lambda: DateTimeFormatter.create(locale_code, kind, options),
    )


def get_relative_formatter(
    locale_code: str, options: Mapping[str, Any] | None = None, cache: FormatCache | None = None
) -> RelativeTimeFormatter:
    """Construct (or fetch from ``cache``) a RelativeTimeFormatter."""
    if cache is None:
        return RelativeTimeFormatter.create(locale_code, options)
    return cache.get_or_compute(
        "relative",
        (locale_code, _frozen_options(options)),
        lambda: RelativeTimeFormatter.create(locale_code, options),
    )
