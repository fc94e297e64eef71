"""Declarative bindings: formatted values that know when to re-render.

Each binding captures its inputs (value, options, descriptor, ...) and an
IntlFormatter, and produces output through a render strategy
``render(fragments) -> Any`` (default: the config's renderer). UI layers keep
one binding per displayed value and ask ``should_update(**new_inputs)``
before re-rendering; formatting identical inputs is guaranteed to give
identical output, so a shallow comparison is enough.

FormattedRelative is the only binding that changes on its own: mount() arms
a RelativeTimeScheduler that re-renders whenever the displayed text can
change, and unmount() cancels it.

Python 3.13+.
"""

import logging
from collections.abc import Callable, Mapping
from datetime import datetime
from typing import Any

from intlformat.constants import DEFAULT_UPDATE_INTERVAL_MS
from intlformat.enums import PluralCategory, PluralStyle
from intlformat.localization import IntlFormatter, MessageDescriptor
from intlformat.runtime.scheduler import RelativeTimeScheduler, TimerFactory
from intlformat.runtime.value_types import Fragments

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    "Binding",
    "FormattedMessage",
    "FormattedHTMLMessage",
    "FormattedNumber",
    "FormattedDate",
    "FormattedTime",
    "FormattedPlural",
    "FormattedRelative",
]

logger = logging.getLogger(__name__)

type RenderStrategy = Callable[[Fragments], Any]


class Binding:
    """Base class: holds inputs, renders them, decides when to re-render.

    Subclasses implement ``_fragments()``.
    """

    __slots__ = ("_inputs", "intl", "render_strategy")

    def __init__(
        self,
        *,
        intl: IntlFormatter | None = None,
        render: RenderStrategy | None = None,
        **inputs: Any,
    ) -> None:
        self.intl = intl if intl is not None else IntlFormatter()
        self.render_strategy = render
        self._inputs: dict[str, Any] = inputs

    @property
    def inputs(self) -> Mapping[str, Any]:
        """Current inputs (read-only view)."""
        return dict(self._inputs)

    def _fragments(self) -> Fragments:
        raise NotImplementedError

    def render(self) -> Any:
        """Format the current inputs and pass them through the render strategy."""
        strategy = self.render_strategy or self.intl.config.renderer
        assert strategy is not None  # Type narrowing: config is resolved
        return strategy(self._fragments())

    def should_update(self, **new_inputs: Any) -> bool:
        """True if any given input differs from the current one.

        ``intl`` may be passed to compare the formatter (by identity).
        """
        for name, value in new_inputs.items():
            if name == "intl":
                if value is not self.intl:
                    return True
                continue
            if name not in self._inputs:
                msg = f"{type(self).__name__} has no input '{name}'"
                raise TypeError(msg)
            current = self._inputs[name]
            if value is not current and value != current:
                return True
        return False

    def update(self, **new_inputs: Any) -> bool:
        """Apply new inputs; returns whether anything changed."""
        if not self.should_update(**new_inputs):
            return False
        intl = new_inputs.pop("intl", None)
        if intl is not None:
            self.intl = intl
        self._inputs.update(new_inputs)
        return True

    def __repr__(self) -> str:
        args = ", ".join(f"{k}={v!r}" for k, v in self._inputs.items())
        return f"{type(self).__name__}({args})"


class FormattedMessage(Binding):
    """A message descriptor with values.

    Example:
        >>> from intlformat.localization import IntlConfig
        >>> intl = IntlFormatter(IntlConfig(locale="en"))
        >>> FormattedMessage(MessageDescriptor("hi", "Hi {name}"), {"name": "Ana"}, intl=intl).render()
        'Hi Ana'
    """

    __slots__ = ()

    def __init__(
        self,
        descriptor: MessageDescriptor,
        values: Mapping[str, object] | None = None,
        *,
        intl: IntlFormatter | None = None,
        render: RenderStrategy | None = None,
    ) -> None:
        super().__init__(intl=intl, render=render, descriptor=descriptor, values=values)

    def _fragments(self) -> Fragments:
        return self.intl.format_message(self._inputs["descriptor"], self._inputs["values"])


class FormattedHTMLMessage(FormattedMessage):
    """A message whose template is HTML; string values are escaped."""

    __slots__ = ()

    def _fragments(self) -> Fragments:
        return (self.intl.format_html_message(self._inputs["descriptor"], self._inputs["values"]),)


class _FormattedValue(Binding):
    """Single value with a named format and option overrides."""

    __slots__ = ()

    def __init__(
        self,
        value: object,
        format_name: str | None = None,
        *,
        intl: IntlFormatter | None = None,
        render: RenderStrategy | None = None,
        **options: Any,
    ) -> None:
        super().__init__(
            intl=intl, render=render, value=value, format_name=format_name, options=options
        )


class FormattedNumber(_FormattedValue):
    """A formatted number: ``FormattedNumber(0.5, style="percent")``."""

    __slots__ = ()

    def _fragments(self) -> Fragments:
        i = self._inputs
        return (self.intl.format_number(i["value"], i["format_name"], **i["options"]),)


class FormattedDate(_FormattedValue):
    """A formatted date: ``FormattedDate(dt, "short")``."""

    __slots__ = ()

    def _fragments(self) -> Fragments:
        i = self._inputs
        return (self.intl.format_date(i["value"], i["format_name"], **i["options"]),)


class FormattedTime(_FormattedValue):
    """A formatted time of day: ``FormattedTime(dt, hour="numeric")``."""

    __slots__ = ()

    def _fragments(self) -> Fragments:
        i = self._inputs
        return (self.intl.format_time(i["value"], i["format_name"], **i["options"]),)


class FormattedPlural(Binding):
    """Picks one of several texts by the value's plural category.

    ``other`` is required; missing categories fall back to it.

    Example:
        >>> from intlformat.localization import IntlConfig
        >>> intl = IntlFormatter(IntlConfig(locale="en"))
        >>> FormattedPlural(1, one="message", other="messages", intl=intl).render()
        'message'
    """

    __slots__ = ()

    def __init__(
        self,
        value: object,
        *,
        other: object,
        zero: object = None,
        one: object = None,
        two: object = None,
        few: object = None,
        many: object = None,
        style: PluralStyle | str = PluralStyle.CARDINAL,
        intl: IntlFormatter | None = None,
        render: RenderStrategy | None = None,
    ) -> None:
        super().__init__(
            intl=intl,
            render=render,
            value=value,
            style=PluralStyle(style),
            zero=zero,
            one=one,
            two=two,
            few=few,
            many=many,
            other=other,
        )

    def _fragments(self) -> Fragments:
        category = self.intl.format_plural(self._inputs["value"], style=self._inputs["style"])
        chosen = self._inputs.get(PluralCategory(category).value)
        if chosen is None:
            chosen = self._inputs["other"]
        return (chosen,)


class FormattedRelative(Binding):
    """Relative time that keeps itself current while mounted.

    Example:
        >>> from datetime import datetime, timedelta, UTC
        >>> from intlformat.localization import IntlConfig
        >>> now = datetime(2025, 1, 1, tzinfo=UTC)
        >>> intl = IntlFormatter(IntlConfig(locale="en", now=lambda: now))
        >>> FormattedRelative(now - timedelta(seconds=30), intl=intl).render()
        '30 seconds ago'
    """

    __slots__ = ("_initial_now", "_now", "_on_render", "_scheduler", "_timer_factory")

    def __init__(
        self,
        value: object,
        format_name: str | None = None,
        *,
        update_interval_ms: int | None = DEFAULT_UPDATE_INTERVAL_MS,
        initial_now: datetime | None = None,
        intl: IntlFormatter | None = None,
        render: RenderStrategy | None = None,
        timer_factory: TimerFactory | None = None,
        **options: Any,
    ) -> None:
        super().__init__(
            intl=intl,
            render=render,
            value=value,
            format_name=format_name,
            update_interval_ms=update_interval_ms,
            options=options,
        )
        self._initial_now = initial_now
        self._now: object = initial_now
        self._timer_factory = timer_factory
        self._on_render: Callable[[Any], object] | None = None
        self._scheduler: RelativeTimeScheduler | None = None

    @property
    def mounted(self) -> bool:
        """True between mount() and unmount()."""
        return self._scheduler is not None

    @property
    def now(self) -> object:
        """Instant the current rendering is relative to."""
        if self._now is None:
            self._now = self.intl.now()
        return self._now

    def _fragments(self) -> Fragments:
        i = self._inputs
        return (
            self.intl.format_relative(i["value"], i["format_name"], now=self.now, **i["options"]),
        )

    def mount(self, on_render: Callable[[Any], object]) -> Any:
        """Render once, deliver it to ``on_render``, and start auto-updating.

        Returns:
            The initial rendering
        """
        if self._scheduler is not None:
            msg = "FormattedRelative is already mounted"
            raise RuntimeError(msg)
        # initial_now pins only the first mount; later mounts read the clock.
        if self._initial_now is None:
            self._now = self.intl.now()
        self._initial_now = None
        self._on_render = on_render
        output = self.render()
        on_render(output)
        self._scheduler = RelativeTimeScheduler(
            self._inputs["value"],
            initial_now=self.now,
            update_interval_ms=self._inputs["update_interval_ms"],
            on_due=self._on_due,
            units=self._inputs["options"].get("units"),
            clock=self.intl.now,
            timer_factory=self._timer_factory,
        )
        self._scheduler.start()
        return output

    def _on_due(self, now: datetime) -> None:
        # Runs under the scheduler lock, so unmount() cannot interleave.
        on_render = self._on_render
        self._now = now
        if on_render is not None:
            on_render(self.render())

    def update(self, **new_inputs: Any) -> bool:
        """Apply new inputs; when mounted, re-render and reschedule."""
        changed = super().update(**new_inputs)
        if changed and self._scheduler is not None:
            self._now = self.intl.now()
            if self._on_render is not None:
                self._on_render(self.render())
            self._scheduler.update(
                value=self._inputs["value"],
                now=self._now,
                update_interval_ms=self._inputs["update_interval_ms"] or 0,
                units=self._inputs["options"].get("units"),
            )
        return changed

    def unmount(self) -> None:
        """Stop auto-updating. Safe to call when not mounted."""
        scheduler, self._scheduler = self._scheduler, None
        if scheduler is not None:
            scheduler.cancel()
            logger.debug("FormattedRelative unmounted; scheduler cancelled")
        self._on_render = None
