"""Relative-time unit selection and instant coercion.

Shared by the relative-time formatter (which unit to display) and the
re-render scheduler (how long until the display changes). Keeping both on
the same table guarantees the scheduler wakes exactly when the formatter
would switch units.

Python 3.13+. Zero external dependencies.
"""

from datetime import UTC, date, datetime, time
from decimal import Decimal

from intlformat.constants import (
    DAY_MS,
    HOUR_MS,
    MAX_TIMER_DELAY_MS,
    MINUTE_MS,
    MONTH_THRESHOLD_MS,
    SECOND_MS,
    YEAR_THRESHOLD_MS,
)
from intlformat.enums import RelativeUnit

__all__ = [
    "coerce_instant",
    "select_units",
    "to_epoch_ms",
    "unit_delay_ms",
]

_UNIT_DELAYS_MS: dict[RelativeUnit, int] = {
    RelativeUnit.SECOND: SECOND_MS,
    RelativeUnit.MINUTE: MINUTE_MS,
    RelativeUnit.HOUR: HOUR_MS,
    RelativeUnit.DAY: DAY_MS,
    # Month/year magnitudes change at most daily; re-check once a day.
    RelativeUnit.MONTH: DAY_MS,
    RelativeUnit.YEAR: DAY_MS,
}


def coerce_instant(value: object) -> datetime:
    """Convert a date-like value to an aware datetime.

    Accepts aware/naive ``datetime`` (naive is read as UTC), ``date``
    (midnight UTC) and numbers (milliseconds since the Unix epoch).

    Raises:
        TypeError: For any other type (bool included)

    Example:
        >>> coerce_instant(0)
        datetime.datetime(1970, 1, 1, 0, 0, tzinfo=datetime.timezone.utc)
    """
    match value:
        case bool():
            pass
        case datetime():
            return value if value.tzinfo is not None else value.replace(tzinfo=UTC)
        case date():
            return datetime.combine(value, time(), tzinfo=UTC)
        case int() | float() | Decimal():
            return datetime.fromtimestamp(float(value) / 1000, tz=UTC)
    msg = f"Expected datetime, date or epoch milliseconds, got {type(value).__name__}"
    raise TypeError(msg)


def to_epoch_ms(value: object) -> float:
    """Milliseconds since the Unix epoch for any value coerce_instant accepts."""
    return coerce_instant(value).timestamp() * 1000


def select_units(delta_ms: float) -> RelativeUnit:
    """Pick the display unit for a signed delta in milliseconds.

    Examples:
        >>> select_units(-9_000)
        <RelativeUnit.SECOND: 'second'>
        >>> select_units(2 * 3_600_000)
        <RelativeUnit.HOUR: 'hour'>
    """
    abs_delta = abs(delta_ms)
    if abs_delta < MINUTE_MS:
        return RelativeUnit.SECOND
    if abs_delta < HOUR_MS:
        return RelativeUnit.MINUTE
    if abs_delta < DAY_MS:
        return RelativeUnit.HOUR
    if abs_delta < MONTH_THRESHOLD_MS:
        return RelativeUnit.DAY
    if abs_delta < YEAR_THRESHOLD_MS:
        return RelativeUnit.MONTH
    return RelativeUnit.YEAR


def unit_delay_ms(unit: RelativeUnit | str | None) -> int:
    """Length of one display step for a unit; unknown units never tick."""
    if unit is None:
        return MAX_TIMER_DELAY_MS
    try:
        return _UNIT_DELAYS_MS[RelativeUnit(unit)]
    except ValueError:
        return MAX_TIMER_DELAY_MS
