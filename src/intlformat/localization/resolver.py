"""Fallback resolver - formats a message descriptor without ever failing.

Tries, in order, until one attempt yields non-empty output:

1. the translated template, formatted for ``locale``
2. the default message, formatted for ``locale``
3. the translated template, formatted for ``default_locale``
4. the default message, formatted for ``default_locale``
5. the message id itself

Steps 3 and 4 are skipped when ``default_locale`` equals ``locale`` and no
custom formats are configured, since they would repeat steps 1 and 2. Each
failed attempt is logged and the next one is tried; the caller always gets
visible output.

Python 3.13+. Indirect dependency: Babel (via the evaluator).
"""

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from intlformat.constants import DEFAULT_LOCALE
from intlformat.diagnostics import IntlError, MessageSyntaxError
from intlformat.locale_utils import normalize_locale
from intlformat.localization.descriptors import MessageDescriptor
from intlformat.runtime.cache import FormatCache
from intlformat.runtime.evaluator import MessageEvaluator
from intlformat.runtime.formats import DEFAULT_FORMATS, Formats, merge_formats
from intlformat.runtime.value_types import Fragments
from intlformat.syntax import Message, compile_message

__all__ = ["FallbackInfo", "FallbackResolver", "compile_cached"]

logger = logging.getLogger(__name__)

# Final step of the chain; never evaluated.
ID_STEP = 5


@dataclass(frozen=True, slots=True)
class FallbackInfo:
    """Information about a message that did not resolve at the first step.

    Provided to the ``on_fallback`` callback.

    Attributes:
        message_id: Descriptor id
        requested_locale: Locale formatting was requested for
        resolved_locale: Locale the successful step formatted with
        step: 2-5, the step that produced the output (5 = message id)

    Example:
        >>> def log_fallback(info: FallbackInfo) -> None:
        ...     print(f"{info.message_id}: step {info.step} ({info.resolved_locale})")
    """

    message_id: str
    requested_locale: str
    resolved_locale: str
    step: int


def compile_cached(template: str, locale: str, cache: FormatCache | None) -> Message:
    """Compile ``template``, memoized per (template, locale) when a cache is given."""
    if cache is None:
        return compile_message(template)
    return cache.get_or_compute("message", (template, locale), lambda: compile_message(template))


def _same_locale(a: str, b: str) -> bool:
    return normalize_locale(a).lower() == normalize_locale(b).lower()


class FallbackResolver:
    """Formats descriptors through the five-step fallback chain.

    Non-strict (default): never raises for a valid descriptor.
    Strict: a MessageSyntaxError in the default message is re-raised, since
    a broken default template is a programming error.

    Thread Safety:
        Stateless apart from the shared FormatCache, which is thread-safe.
    """

    __slots__ = (
        "_cache",
        "_default_evaluator",
        "_evaluator",
        "_on_fallback",
        "_retry_with_defaults",
        "default_locale",
        "locale",
        "messages",
        "strict",
    )

    def __init__(
        self,
        locale: str,
        default_locale: str = DEFAULT_LOCALE,
        messages: Mapping[str, str] | None = None,
        formats: Formats | None = None,
        default_formats: Formats = DEFAULT_FORMATS,
        cache: FormatCache | None = None,
        *,
        strict: bool = False,
        on_fallback: Callable[[FallbackInfo], None] | None = None,
    ) -> None:
        """Initialize resolver.

        Args:
            locale: Active locale code
            default_locale: Locale the default messages are written in
            messages: Translated templates for ``locale``, keyed by id
            formats: Named formats for ``locale`` (layered over default_formats)
            default_formats: Formats used when formatting for default_locale
            cache: Memo cache for compiled messages and formatters
            strict: Re-raise syntax errors in default messages
            on_fallback: Called whenever step 1 did not produce the output
        """
        self.locale = locale
        self.default_locale = default_locale
        self.messages: Mapping[str, str] = messages if messages is not None else MappingProxyType({})
        self.strict = strict
        self._cache = cache
        self._on_fallback = on_fallback
        merged = merge_formats(default_formats, formats)
        self._evaluator = MessageEvaluator(locale, merged, cache=cache)
        # Steps 3-4 only differ from 1-2 by locale or by dropping custom formats.
        self._retry_with_defaults = not _same_locale(locale, default_locale) or (
            merged is not default_formats and merged != default_formats
        )
        self._default_evaluator = MessageEvaluator(default_locale, default_formats, cache=cache)

    def resolve(
        self, descriptor: MessageDescriptor, values: Mapping[str, object] | None = None
    ) -> Fragments:
        """Format ``descriptor`` with ``values``; always returns non-empty fragments.

        Raises:
            MessageSyntaxError: Only in strict mode, for a broken default message

        Example:
            >>> resolver = FallbackResolver("fr", "en", {"app.greeting": "Bonjour, {name}!"})
            >>> resolver.resolve(MessageDescriptor("app.greeting", "Hello, {name}!"), {"name": "Eric"})
            ('Bonjour, Eric!',)
        """
        message_id = descriptor.id
        translated = self.messages.get(message_id)
        default = descriptor.default_message

        if translated is None:
            if not default or not _same_locale(self.locale, self.default_locale):
                logger.warning(
                    "Missing message '%s' for locale '%s'%s",
                    message_id,
                    self.locale,
                    ", using default message as fallback" if default else "",
                )
            else:
                logger.debug("No translation for '%s'; using default message", message_id)

        attempts: list[tuple[int, str | None, MessageEvaluator, bool]] = [
            (1, translated, self._evaluator, False),
            (2, default, self._evaluator, True),
        ]
        if self._retry_with_defaults:
            attempts += [
                (3, translated, self._default_evaluator, False),
                (4, default, self._default_evaluator, True),
            ]

        for step, template, evaluator, is_default in attempts:
            if template is None:
                continue
            fragments = self._attempt(message_id, template, evaluator, values, is_default=is_default)
            if fragments:
                if step > 1:
                    self._notify(message_id, evaluator.locale, step)
                return fragments

        logger.warning(
            "Cannot format message '%s', using message id as fallback", message_id
        )
        self._notify(message_id, self.default_locale, ID_STEP)
        return (message_id,)

    def _attempt(
        self,
        message_id: str,
        template: str,
        evaluator: MessageEvaluator,
        values: Mapping[str, object] | None,
        *,
        is_default: bool,
    ) -> Fragments | None:
        try:
            message = compile_cached(template, evaluator.locale, self._cache)
            return evaluator.evaluate(message, values)
        except MessageSyntaxError:
            if self.strict and is_default:
                raise
            logger.warning(
                "Error compiling %s message '%s' for locale '%s'",
                "default" if is_default else "translated",
                message_id,
                evaluator.locale,
                exc_info=True,
            )
        except (IntlError, ArithmeticError, LookupError, TypeError, ValueError) as e:
            logger.warning(
                "Error formatting message '%s' for locale '%s': %s",
                message_id,
                evaluator.locale,
                e,
            )
        return None

    def _notify(self, message_id: str, resolved_locale: str, step: int) -> None:
        if self._on_fallback is not None:
            self._on_fallback(
                FallbackInfo(
                    message_id=message_id,
                    requested_locale=self.locale,
                    resolved_locale=resolved_locale,
                    step=step,
                )
            )
