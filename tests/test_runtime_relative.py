"""Tests for relative-time unit selection and instant coercion."""

from __future__ import annotations

from datetime import UTC, date, datetime, timedelta, timezone
from decimal import Decimal

import pytest
from hypothesis import given
from hypothesis import strategies as st

from intlformat.constants import DAY_MS, HOUR_MS, MAX_TIMER_DELAY_MS, MINUTE_MS, SECOND_MS
from intlformat.enums import RelativeUnit
from intlformat.runtime.relative import coerce_instant, select_units, to_epoch_ms, unit_delay_ms


class TestCoerceInstant:
    """coerce_instant accepts datetimes, dates and epoch milliseconds."""

    def test_aware_datetime_unchanged(self) -> None:
        """Aware values keep their offset."""
        tz = timezone(timedelta(hours=2))
        value = datetime(2025, 1, 1, 12, tzinfo=tz)
        assert coerce_instant(value) is value

    def test_naive_datetime_is_utc(self) -> None:
        """Naive values gain UTC."""
        assert coerce_instant(datetime(2025, 1, 1)).tzinfo is UTC

    def test_date_is_midnight_utc(self) -> None:
        """Dates become midnight UTC."""
        assert coerce_instant(date(2025, 1, 1)) == datetime(2025, 1, 1, tzinfo=UTC)

    @pytest.mark.parametrize("value", [86_400_000, 86_400_000.0, Decimal(86_400_000)])
    def test_numbers_are_epoch_ms(self, value: object) -> None:
        """ints, floats and Decimals are milliseconds."""
        assert coerce_instant(value) == datetime(1970, 1, 2, tzinfo=UTC)

    @pytest.mark.parametrize("value", [True, "2025-01-01", None, object()])
    def test_rejects_other_types(self, value: object) -> None:
        """bool, strings and other objects are TypeErrors."""
        with pytest.raises(TypeError):
            coerce_instant(value)

    def test_to_epoch_ms(self) -> None:
        """to_epoch_ms inverts coercion of numbers."""
        assert to_epoch_ms(datetime(1970, 1, 1, 0, 0, 1, tzinfo=UTC)) == 1000


class TestSelectUnits:
    """Best-fit display unit."""

    @pytest.mark.parametrize(
        ("delta", "unit"),
        [
            (0, RelativeUnit.SECOND),
            (-59_999, RelativeUnit.SECOND),
            (MINUTE_MS, RelativeUnit.MINUTE),
            (-HOUR_MS, RelativeUnit.HOUR),
            (DAY_MS, RelativeUnit.DAY),
            (-29 * DAY_MS, RelativeUnit.DAY),
            (30 * DAY_MS, RelativeUnit.MONTH),
            (-365 * DAY_MS, RelativeUnit.YEAR),
        ],
    )
    def test_thresholds(self, delta: int, unit: RelativeUnit) -> None:
        """Each threshold switches to the next unit."""
        assert select_units(delta) is unit

    @given(st.floats(min_value=-1e13, max_value=1e13, allow_nan=False))
    def test_sign_does_not_matter(self, delta: float) -> None:
        """Past and future deltas of equal size pick the same unit."""
        assert select_units(delta) is select_units(-delta)


class TestUnitDelay:
    """Length of one display step."""

    @pytest.mark.parametrize(
        ("unit", "delay"),
        [
            ("second", SECOND_MS),
            (RelativeUnit.MINUTE, MINUTE_MS),
            ("hour", HOUR_MS),
            ("day", DAY_MS),
            ("month", DAY_MS),
            ("year", DAY_MS),
        ],
    )
    def test_known_units(self, unit: str, delay: int) -> None:
        """Month and year are re-checked daily."""
        assert unit_delay_ms(unit) == delay

    @pytest.mark.parametrize("unit", [None, "fortnight"])
    def test_unknown_units_never_tick(self, unit: str | None) -> None:
        """Unknown units map to the maximum timer delay."""
        assert unit_delay_ms(unit) == MAX_TIMER_DELAY_MS
