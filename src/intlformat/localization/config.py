"""Locale context: immutable configuration and the provider stack.

An IntlConfig describes the active locale, its translated messages and the
named formats. Providers nest: a child config overrides its parent field by
field, never wholesale, and the innermost one is what formatting uses.

Architecture:
    - IntlConfig: frozen dataclass, every field optional (None = inherit)
    - intl_provider(): context manager pushing a config onto a ContextVar
    - current_config(): innermost config with defaults filled in

Thread Safety:
    The provider stack lives in a ContextVar, so each thread and each asyncio
    task sees its own nesting.

Python 3.13+. Indirect dependency: Babel (locale validation).
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, fields, replace
from types import MappingProxyType
from typing import Any

from intlformat.constants import DEFAULT_LOCALE
from intlformat.diagnostics import ErrorTemplate
from intlformat.locale_utils import is_known_locale
from intlformat.runtime.formats import DEFAULT_FORMATS, Formats, merge_formats
from intlformat.runtime.scheduler import Clock, system_clock
from intlformat.runtime.value_types import Renderer, render_text

__all__ = ["IntlConfig", "current_config", "intl_provider"]

logger = logging.getLogger(__name__)

_EMPTY: Mapping[str, Any] = MappingProxyType({})


@dataclass(frozen=True, slots=True)
class IntlConfig:
    """Immutable locale context.

    Fields left as None are inherited from the enclosing provider, then
    filled by resolved().

    Attributes:
        locale: Active locale code (e.g., "fr", "en-GB")
        default_locale: Locale the default messages are written in
        messages: Translated templates for ``locale``, keyed by message id
        formats: Named formats, merged over ``default_formats``
        default_formats: Base named formats (number/date/time/relative)
        renderer: Turns a fragment tuple into the caller's output type
        now: Clock used for relative-time formatting

    Example:
        >>> child = IntlConfig(locale="fr")
        >>> child.inherit(IntlConfig(locale="en", default_locale="en")).default_locale
        'en'
    """

    locale: str | None = None
    default_locale: str | None = None
    messages: Mapping[str, str] | None = None
    formats: Formats | None = None
    default_formats: Formats | None = None
    renderer: Renderer | None = None
    now: Clock | None = None

    def __post_init__(self) -> None:
        """Validate configuration values at construction time.

        Raises:
            ValueError: If a locale field is an empty string
            TypeError: If a field has the wrong type
        """
        for name in ("locale", "default_locale"):
            value = getattr(self, name)
            if value is None:
                continue
            if not isinstance(value, str):
                msg = f"{name} must be a string, got {type(value).__name__}"
                raise TypeError(msg)
            if not value:
                msg = f"{name} must not be empty"
                raise ValueError(msg)
        for name in ("messages", "formats", "default_formats"):
            value = getattr(self, name)
            if value is not None and not isinstance(value, Mapping):
                msg = f"{name} must be a mapping, got {type(value).__name__}"
                raise TypeError(msg)
        for name in ("renderer", "now"):
            value = getattr(self, name)
            if value is not None and not callable(value):
                msg = f"{name} must be callable, got {type(value).__name__}"
                raise TypeError(msg)

    def inherit(self, parent: IntlConfig) -> IntlConfig:
        """Fill this config's unset fields from ``parent``."""
        return replace(
            self,
            **{
                f.name: getattr(parent, f.name)
                for f in fields(self)
                if getattr(self, f.name) is None
            },
        )

    def resolved(self) -> IntlConfig:
        """Return a copy with every field set.

        An unknown locale (no CLDR data) is replaced by ``default_locale``;
        its messages and custom formats are dropped so the default messages
        render with the default formats.
        """
        default_locale = self.default_locale or DEFAULT_LOCALE
        if not is_known_locale(default_locale):
            logger.warning(
                "%s", ErrorTemplate.unknown_locale(default_locale, DEFAULT_LOCALE).message
            )
            default_locale = DEFAULT_LOCALE

        locale = self.locale or default_locale
        messages = self.messages if self.messages is not None else _EMPTY
        formats = self.formats if self.formats is not None else _EMPTY
        default_formats = self.default_formats if self.default_formats is not None else DEFAULT_FORMATS

        if locale != default_locale and not is_known_locale(locale):
            logger.warning("%s", ErrorTemplate.unknown_locale(locale, default_locale).message)
            locale = default_locale
            messages = _EMPTY
            formats = _EMPTY

        return IntlConfig(
            locale=locale,
            default_locale=default_locale,
            messages=messages,
            formats=formats,
            default_formats=default_formats,
            renderer=self.renderer or render_text,
            now=self.now or system_clock,
        )

    @property
    def merged_formats(self) -> Formats:
        """``formats`` layered over ``default_formats`` (defaults where unset)."""
        return merge_formats(self.default_formats or DEFAULT_FORMATS, self.formats)


_current_config: ContextVar[IntlConfig] = ContextVar(
    "intlformat_config", default=IntlConfig()
)


@contextmanager
def intl_provider(config: IntlConfig | None = None, /, **overrides: Any) -> Iterator[IntlConfig]:
    """Make a config current for the duration of a ``with`` block.

    The new config inherits every unset field from the enclosing provider.

    Args:
        config: Base config for this level (optional)
        **overrides: IntlConfig fields set on top of ``config``

    Yields:
        The resolved config now in effect

    Example:
        >>> with intl_provider(locale="en", messages={"hi": "Hello"}):
        ...     with intl_provider(locale="de"):
        ...         current_config().messages["hi"]
        'Hello'
    """
    child = config or IntlConfig()
    if overrides:
        child = replace(child, **overrides)
    merged = child.inherit(_current_config.get())
    token = _current_config.set(merged)
    try:
        yield merged.resolved()
    finally:
        _current_config.reset(token)


def current_config() -> IntlConfig:
    """Innermost provider config, resolved (module defaults outside any provider)."""
    return _current_config.get().resolved()
