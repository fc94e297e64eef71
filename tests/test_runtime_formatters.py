"""Tests for NumberFormatter, DateTimeFormatter and RelativeTimeFormatter."""

from __future__ import annotations

from datetime import UTC, date, datetime, timedelta
from decimal import Decimal

import pytest
from hypothesis import given
from hypothesis import strategies as st

from intlformat.diagnostics import DiagnosticCode, FormatterConstructionError, FormattingError
from intlformat.enums import RelativeUnit
from intlformat.runtime.cache import FormatCache
from intlformat.runtime.formatters import (
    DateTimeFormatter,
    NumberFormatter,
    RelativeTimeFormatter,
    get_datetime_formatter,
    get_number_formatter,
    get_relative_formatter,
)

# Recent CLDR versions put U+202F before the day period ("2:30 PM").
_NNBSP = "\u202f"

DT = datetime(2025, 10, 27, 14, 30, 5, tzinfo=UTC)


def _construction_code(exc_info: pytest.ExceptionInfo[FormatterConstructionError]) -> DiagnosticCode:
    assert exc_info.value.diagnostic is not None
    return exc_info.value.diagnostic.code


class TestNumberFormatter:
    """Number formatting and option validation."""

    @pytest.mark.parametrize(
        ("locale", "value", "expected"),
        [
            ("en-US", 1234.5, "1,234.5"),
            ("de-DE", 1234.5, "1.234,5"),
            ("en-US", 1000, "1,000"),
            ("en-US", Decimal("0.125"), "0.125"),
            ("en-US", -42, "-42"),
        ],
    )
    def test_decimal_style(self, locale: str, value: object, expected: str) -> None:
        """Locale grouping and decimal separators are applied."""
        assert NumberFormatter.create(locale).format(value) == expected  # type: ignore[arg-type]

    def test_percent(self) -> None:
        """Percent style multiplies by 100."""
        assert NumberFormatter.create("en-US", {"style": "percent"}).format(0.25) == "25%"

    def test_currency_symbol(self) -> None:
        """Currency uses the currency's standard digits."""
        formatter = NumberFormatter.create("en-US", {"style": "currency", "currency": "EUR"})
        assert formatter.format(3) == "€3.00"

    def test_currency_code_display(self) -> None:
        """code display shows the ISO code."""
        formatter = NumberFormatter.create(
            "en-US", {"style": "currency", "currency": "usd", "currency_display": "code"}
        )
        assert formatter.currency == "USD"
        assert "USD" in formatter.format(5)

    def test_currency_name_display(self) -> None:
        """name display spells out the currency."""
        formatter = NumberFormatter.create(
            "en-US", {"style": "currency", "currency": "USD", "currency_display": "name"}
        )
        assert formatter.format(2) == "2.00 US dollars"

    def test_fraction_digits(self) -> None:
        """min/max fraction digits pad and round."""
        padded = NumberFormatter.create("en-US", {"minimum_fraction_digits": 2})
        assert padded.format(1) == "1.00"
        rounded = NumberFormatter.create("en-US", {"maximum_fraction_digits": 0})
        assert rounded.format(Decimal("2.4")) == "2"

    def test_grouping_disabled(self) -> None:
        """use_grouping=False drops group separators."""
        assert NumberFormatter.create("en-US", {"use_grouping": False}).format(1234567) == "1234567"

    def test_custom_pattern(self) -> None:
        """An explicit CLDR pattern overrides the locale default."""
        assert NumberFormatter.create("en-US", {"pattern": "#,##0.000"}).format(1.5) == "1.500"

    @pytest.mark.parametrize(
        "options",
        [
            {"style": "scientific"},
            {"style": "currency"},
            {"style": "currency", "currency": "EURO"},
            {"currency_display": "emoji"},
            {"minimum_fraction_digits": -1},
            {"maximum_fraction_digits": 21},
            {"maximum_fraction_digits": True},
            {"minimum_fraction_digits": 3, "maximum_fraction_digits": 1},
            {"use_grouping": "yes"},
            {"pattern": ""},
            {"compact": True},
        ],
    )
    def test_invalid_options(self, options: dict[str, object]) -> None:
        """Bad options fail at construction, not at format time."""
        with pytest.raises(FormatterConstructionError) as exc_info:
            NumberFormatter.create("en-US", options)
        assert _construction_code(exc_info) is DiagnosticCode.INVALID_FORMAT_OPTION

    def test_unknown_locale(self) -> None:
        """Unresolvable locales are construction errors."""
        with pytest.raises(FormatterConstructionError):
            NumberFormatter.create("xx-INVALID")

    def test_format_failure_carries_fallback(self) -> None:
        """Values Babel cannot handle raise FormattingError with str(value)."""
        formatter = NumberFormatter.create("en-US")
        with pytest.raises(FormattingError) as exc_info:
            formatter.format("not a number")  # type: ignore[arg-type]
        assert exc_info.value.fallback_value == "not a number"

    @given(st.integers(min_value=-(10**12), max_value=10**12))
    def test_integers_roundtrip_through_grouping(self, n: int) -> None:
        """Removing en-US group separators yields the integer back."""
        text = NumberFormatter.create("en-US").format(n)
        assert int(text.replace(",", "")) == n


class TestDateTimeFormatter:
    """Date and time formatting."""

    @pytest.mark.parametrize(
        ("locale", "style", "expected"),
        [
            ("en-US", "short", "10/27/25"),
            ("en-US", "medium", "Oct 27, 2025"),
            ("en-US", "long", "October 27, 2025"),
            ("de-DE", "medium", "27.10.2025"),
        ],
    )
    def test_date_styles(self, locale: str, style: str, expected: str) -> None:
        """CLDR date styles."""
        assert DateTimeFormatter.create(locale, "date", {"style": style}).format(DT) == expected

    def test_time_short_en(self) -> None:
        """en-US uses a 12-hour clock."""
        text = DateTimeFormatter.create("en-US", "time", {"style": "short"}).format(DT)
        assert text.replace(_NNBSP, " ") == "2:30 PM"

    def test_time_short_de(self) -> None:
        """de-DE uses a 24-hour clock."""
        assert DateTimeFormatter.create("de-DE", "time", {"style": "short"}).format(DT) == "14:30"

    def test_default_date_is_numeric(self) -> None:
        """Without options a date is year/month/day numeric."""
        assert DateTimeFormatter.create("en-US", "date").format(DT) == "10/27/2025"

    def test_default_time_follows_locale_clock(self) -> None:
        """Without options a time is hour and minute."""
        en = DateTimeFormatter.create("en-US", "time").format(DT)
        assert en.replace(_NNBSP, " ") == "2:30 PM"
        assert DateTimeFormatter.create("de-DE", "time").format(DT) == "14:30"

    def test_hour12_override(self) -> None:
        """hour12=False forces a 24-hour skeleton."""
        formatter = DateTimeFormatter.create("en-US", "time", {"hour12": False})
        assert formatter.format(DT) == "14:30"

    def test_skeleton_fields(self) -> None:
        """Field options resolve through the locale's skeletons."""
        formatter = DateTimeFormatter.create("en-US", "date", {"month": "long", "day": "numeric"})
        assert formatter.format(DT) == "October 27"

    def test_time_zone_conversion(self) -> None:
        """time_zone shifts aware values before formatting."""
        formatter = DateTimeFormatter.create(
            "de-DE", "time", {"style": "short", "time_zone": "Europe/Berlin"}
        )
        assert formatter.format(DT) == "15:30"

    def test_naive_datetime_is_utc(self) -> None:
        """Naive values are read as UTC."""
        formatter = DateTimeFormatter.create("de-DE", "time", {"style": "short"})
        assert formatter.format(DT.replace(tzinfo=None)) == "14:30"

    def test_epoch_milliseconds(self) -> None:
        """Numbers are epoch milliseconds."""
        formatter = DateTimeFormatter.create("en-US", "date", {"style": "short"})
        assert formatter.format(0) == "1/1/70"

    def test_plain_date(self) -> None:
        """date values format without a time component."""
        formatter = DateTimeFormatter.create("en-US", "date", {"style": "short"})
        assert formatter.format(date(2024, 2, 29)) == "2/29/24"

    def test_explicit_pattern(self) -> None:
        """A CLDR pattern is used verbatim."""
        formatter = DateTimeFormatter.create("en-US", "date", {"pattern": "yyyy-MM-dd"})
        assert formatter.pattern == "yyyy-MM-dd"
        assert formatter.format(DT) == "2025-10-27"

    @pytest.mark.parametrize(
        "options",
        [
            {"style": "tiny"},
            {"month": "roman"},
            {"hour12": "yes"},
            {"time_zone": "Mars/Olympus_Mons"},
            {"pattern": ""},
            {"era": "long"},
        ],
    )
    def test_invalid_options(self, options: dict[str, object]) -> None:
        """Bad options fail at construction."""
        with pytest.raises(FormatterConstructionError):
            DateTimeFormatter.create("en-US", "date", options)

    def test_format_failure_uses_iso_fallback(self) -> None:
        """Unformattable values raise FormattingError."""
        formatter = DateTimeFormatter.create("en-US", "date", {"style": "short"})
        with pytest.raises(FormattingError) as exc_info:
            formatter.format("yesterday")  # type: ignore[arg-type]
        assert exc_info.value.fallback_value == "yesterday"


class TestRelativeTimeFormatter:
    """Relative time formatting."""

    NOW = datetime(2025, 1, 1, tzinfo=UTC)

    @pytest.mark.parametrize(
        ("delta", "expected"),
        [
            (timedelta(seconds=-10), "10 seconds ago"),
            (timedelta(minutes=5), "in 5 minutes"),
            (timedelta(hours=-3), "3 hours ago"),
            (timedelta(days=2), "in 2 days"),
            (timedelta(days=-400), "1 year ago"),
        ],
    )
    def test_best_fit_unit(self, delta: timedelta, expected: str) -> None:
        """The unit follows the size of the delta."""
        formatter = RelativeTimeFormatter.create("en")
        assert formatter.format(self.NOW + delta, self.NOW) == expected

    def test_fixed_unit(self) -> None:
        """units pins the displayed unit."""
        formatter = RelativeTimeFormatter.create("en", {"units": "minute"})
        assert formatter.units is RelativeUnit.MINUTE
        assert formatter.format(self.NOW + timedelta(hours=2), self.NOW) == "in 120 minutes"

    def test_localized(self) -> None:
        """Other locales use their own phrasing."""
        formatter = RelativeTimeFormatter.create("de")
        assert formatter.format(self.NOW - timedelta(days=3), self.NOW) == "vor 3 Tagen"

    def test_epoch_values(self) -> None:
        """Epoch milliseconds work for both instants."""
        assert RelativeTimeFormatter.create("en").format(0, 30_000) == "30 seconds ago"

    def test_unit_for(self) -> None:
        """unit_for respects the pinned unit."""
        assert RelativeTimeFormatter.create("en").unit_for(-90_000) is RelativeUnit.MINUTE
        pinned = RelativeTimeFormatter.create("en", {"units": "day"})
        assert pinned.unit_for(-90_000) is RelativeUnit.DAY

    @pytest.mark.parametrize("options", [{"units": "fortnight"}, {"width": "wide"}, {"style": "x"}])
    def test_invalid_options(self, options: dict[str, object]) -> None:
        """Bad options fail at construction."""
        with pytest.raises(FormatterConstructionError):
            RelativeTimeFormatter.create("en", options)

    def test_bad_value(self) -> None:
        """Non-instants raise FormattingError."""
        with pytest.raises(FormattingError):
            RelativeTimeFormatter.create("en").format("soon", self.NOW)


class TestCachedConstruction:
    """get_*_formatter helpers."""

    def test_number_formatter_is_reused(self) -> None:
        """Equal options yield the identical formatter."""
        cache = FormatCache()
        first = get_number_formatter("en", {"style": "percent"}, cache)
        second = get_number_formatter("en", {"style": "percent"}, cache)
        assert first is second
        assert cache.hits == 1

    def test_kinds_do_not_collide(self) -> None:
        """date and time formatters with the same options are distinct."""
        cache = FormatCache()
        date_formatter = get_datetime_formatter("en", "date", {"style": "short"}, cache)
        time_formatter = get_datetime_formatter("en", "time", {"style": "short"}, cache)
        assert date_formatter.kind == "date"
        assert time_formatter.kind == "time"
        assert len(cache) == 2

    def test_without_cache(self) -> None:
        """No cache builds a fresh formatter every time."""
        assert get_relative_formatter("en") is not get_relative_formatter("en")

    def test_construction_errors_are_not_cached(self) -> None:
        """A failing construction is retried on the next call."""
        cache = FormatCache()
        for _ in range(2):
            with pytest.raises(FormatterConstructionError):
                get_number_formatter("en", {"style": "bogus"}, cache)
        assert len(cache) == 0
