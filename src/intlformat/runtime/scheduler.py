"""Self-rescheduling timer for relative-time displays.

A relative-time display ("10 seconds ago") goes stale as the clock moves.
RelativeTimeScheduler computes the next instant at which the displayed text
can change, arms one single-shot timer for it, and on firing calls ``on_due``
with the current time and re-arms itself.

Lifecycle:
    created -> start() -> [timer armed] -> fire -> on_due(now) -> [re-armed] ...
    cancel() at any point moves to the terminal cancelled state. Cancelling
    twice, or after the last timer fired, is a no-op.

Thread Safety:
    Timer callbacks run on the timer's thread. State changes are guarded by
    an RLock and every armed timer carries a generation number, so a timer
    that fires after cancel() or update() is ignored. ``on_due`` runs while
    the lock is held: cancel() from another thread waits for an in-flight
    callback, and cancel() or update() from inside ``on_due`` re-enters.

Python 3.13+. Zero external dependencies.
"""

import logging
import math
import threading
from collections.abc import Callable
from datetime import UTC, datetime
from functools import partial
from typing import Final, Protocol

from intlformat.constants import MAX_TIMER_DELAY_MS
from intlformat.enums import RelativeUnit
from intlformat.runtime.relative import select_units, to_epoch_ms, unit_delay_ms

__all__ = [
    "Clock",
    "RelativeTimeScheduler",
    "TimerFactory",
    "TimerHandle",
    "compute_delay_ms",
    "schedule_relative_update",
    "system_clock",
]

logger = logging.getLogger(__name__)

# Default for update(units=...): keep the current unit. None clears it.
_KEEP_UNITS: Final = object()


class TimerHandle(Protocol):
    """Minimal interface of a one-shot timer (threading.Timer satisfies it)."""

    def start(self) -> None: ...

    def cancel(self) -> None: ...


type Clock = Callable[[], datetime]
type TimerFactory = Callable[[float, Callable[[], None]], TimerHandle]


def system_clock() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(UTC)


def _thread_timer(delay_seconds: float, callback: Callable[[], None]) -> TimerHandle:
    timer = threading.Timer(delay_seconds, callback)
    timer.daemon = True
    return timer


def compute_delay_ms(
    value: object,
    now: object,
    update_interval_ms: int | float | None,
    units: RelativeUnit | str | None = None,
) -> int | None:
    """Milliseconds until a relative display of ``value`` can next change.

    Args:
        value: The instant being displayed (datetime, date or epoch ms)
        now: The instant the display was last computed for
        update_interval_ms: Minimum delay between updates; falsy disables updates
        units: Fixed display unit, or None to pick it from the delta

    Returns:
        Delay in whole milliseconds (never below ``update_interval_ms``, never
        above MAX_TIMER_DELAY_MS), or None when updates are disabled

    Examples:
        >>> compute_delay_ms(0, 9_000, 10_000)  # 9 seconds ago
        10000
        >>> compute_delay_ms(0, 90_500, 1_000)  # 1.5 minutes ago
        29500
        >>> compute_delay_ms(0, 0, 0) is None
        True
    """
    if not update_interval_ms:
        return None

    delta = to_epoch_ms(value) - to_epoch_ms(now)
    unit_delay = unit_delay_ms(units or select_units(delta))
    # math.fmod keeps the sign of the dividend (truncated modulo).
    remainder = abs(math.fmod(delta, unit_delay))

    if delta < 0:
        delay = max(update_interval_ms, unit_delay - remainder)
    else:
        delay = max(update_interval_ms, remainder)
    return min(math.ceil(delay), MAX_TIMER_DELAY_MS)


class RelativeTimeScheduler:
    """Re-runs ``on_due`` whenever a relative-time display may have changed.

    Attributes:
        value: Instant being displayed
        update_interval_ms: Minimum delay between updates (falsy disables)
        units: Fixed display unit, or None to select from the delta

    Example:
        >>> fired = []
        >>> s = RelativeTimeScheduler(0, initial_now=9_000, update_interval_ms=0,
        ...                           on_due=fired.append)
        >>> s.start()
        >>> s.pending
        False
    """

    __slots__ = (
        "_cancelled",
        "_clock",
        "_generation",
        "_lock",
        "_now",
        "_on_due",
        "_timer",
        "_timer_factory",
        "units",
        "update_interval_ms",
        "value",
    )

    def __init__(
        self,
        value: object,
        *,
        initial_now: object,
        update_interval_ms: int | float | None,
        on_due: Callable[[datetime], object],
        units: RelativeUnit | str | None = None,
        clock: Clock | None = None,
        timer_factory: TimerFactory | None = None,
    ) -> None:
        """Initialize scheduler (no timer is armed until start()).

        Args:
            value: Instant being displayed (datetime, date or epoch ms)
            initial_now: Instant the first display was computed for
            update_interval_ms: Minimum delay between updates; falsy disables
            on_due: Called with the current time each time the timer fires
            units: Fixed display unit, or None
            clock: Source of "now" when the timer fires (default: system UTC)
            timer_factory: Builds one-shot timers from (seconds, callback);
                default threading.Timer as a daemon thread
        """
        self.value = value
        self.update_interval_ms = update_interval_ms
        self.units = units
        self._now = initial_now
        self._on_due = on_due
        self._clock = clock or system_clock
        self._timer_factory = timer_factory or _thread_timer
        self._lock = threading.RLock()
        self._timer: TimerHandle | None = None
        self._generation = 0
        self._cancelled = False

    @property
    def now(self) -> object:
        """Instant the display was last computed for."""
        with self._lock:
            return self._now

    @property
    def pending(self) -> bool:
        """True while a timer is armed."""
        with self._lock:
            return self._timer is not None

    @property
    def cancelled(self) -> bool:
        """True once cancel() has been called."""
        with self._lock:
            return self._cancelled

    def start(self) -> None:
        """Arm the first timer. No-op after cancel() or when updates are disabled."""
        with self._lock:
            if self._cancelled:
                return
            self._arm_locked()

    def update(
        self,
        *,
        value: object | None = None,
        now: object | None = None,
        update_interval_ms: int | float | None = None,
        units: RelativeUnit | str | None | object = _KEEP_UNITS,
    ) -> None:
        """Change inputs and re-arm; any armed timer is replaced.

        Arguments left as None keep their current value, except ``units``:
        omit it to keep the current unit, pass None to select from the delta.
        """
        with self._lock:
            if self._cancelled:
                return
            if value is not None:
                self.value = value
            if now is not None:
                self._now = now
            if update_interval_ms is not None:
                self.update_interval_ms = update_interval_ms
            if units is not _KEEP_UNITS:
                self.units = units  # type: ignore[assignment]
            self._disarm_locked()
            self._arm_locked()

    def cancel(self) -> None:
        """Stop updating. Safe to call any number of times."""
        with self._lock:
            self._cancelled = True
            self._disarm_locked()

    def _arm_locked(self) -> None:
        delay_ms = compute_delay_ms(self.value, self._now, self.update_interval_ms, self.units)
        if delay_ms is None:
            return
        self._generation += 1
        timer = self._timer_factory(delay_ms / 1000, partial(self._fire, self._generation))
        self._timer = timer
        logger.debug("Relative time update armed in %d ms", delay_ms)
        timer.start()

    def _disarm_locked(self) -> None:
        timer = self._timer
        self._timer = None
        self._generation += 1
        if timer is not None:
            timer.cancel()

    def _fire(self, generation: int) -> None:
        with self._lock:
            if self._cancelled or generation != self._generation:
                return
            self._timer = None
            now = self._clock()
            self._now = now
            # on_due runs under the lock so cancel() returns only after it.
            try:
                self._on_due(now)
            finally:
                if not self._cancelled and self._timer is None:
                    self._arm_locked()


def schedule_relative_update(
    value: object,
    initial_now: object,
    interval_ms: int | float | None,
    on_due: Callable[[datetime], object],
    *,
    units: RelativeUnit | str | None = None,
    clock: Clock | None = None,
    timer_factory: TimerFactory | None = None,
) -> RelativeTimeScheduler:
    """Create and start a scheduler; call ``cancel()`` on the result to stop it."""
    scheduler = RelativeTimeScheduler(
        value,
        initial_now=initial_now,
        update_interval_ms=interval_ms,
        on_due=on_due,
        units=units,
        clock=clock,
        timer_factory=timer_factory,
    )
    scheduler.start()
    return scheduler
