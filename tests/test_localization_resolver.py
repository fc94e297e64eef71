"""Tests for the five-step fallback chain."""

from __future__ import annotations

import logging

import pytest
from hypothesis import given
from hypothesis import strategies as st

from intlformat.diagnostics import MessageSyntaxError
from intlformat.localization import FallbackInfo, FallbackResolver, MessageDescriptor
from intlformat.runtime.cache import FormatCache

GREETING = MessageDescriptor("app.greeting", "Hello, {name}!")
FR_MESSAGES = {"app.greeting": "Bonjour, {name}!"}


def _collecting_resolver(
    locale: str,
    messages: dict[str, str] | None = None,
    **kwargs: object,
) -> tuple[FallbackResolver, list[FallbackInfo]]:
    infos: list[FallbackInfo] = []
    resolver = FallbackResolver(
        locale, "en", messages, on_fallback=infos.append, **kwargs  # type: ignore[arg-type]
    )
    return resolver, infos


class TestChain:
    """Each step of the chain."""

    def test_step_one_translation(self) -> None:
        """A working translation is used directly."""
        resolver, infos = _collecting_resolver("fr", FR_MESSAGES)
        assert resolver.resolve(GREETING, {"name": "Eric"}) == ("Bonjour, Eric!",)
        assert infos == []

    def test_step_two_default_message(self, caplog: pytest.LogCaptureFixture) -> None:
        """Without a translation the default message is formatted for the locale."""
        resolver, infos = _collecting_resolver("fr")
        with caplog.at_level(logging.WARNING):
            assert resolver.resolve(GREETING, {"name": "Eric"}) == ("Hello, Eric!",)
        assert infos == [FallbackInfo("app.greeting", "fr", "fr", 2)]
        assert "Missing message 'app.greeting'" in caplog.text

    def test_step_two_uses_locale_formatting(self) -> None:
        """Step 2 formats numbers for the active locale."""
        descriptor = MessageDescriptor("total", "Total: {n, number}")
        resolver, _ = _collecting_resolver("de")
        assert resolver.resolve(descriptor, {"n": 1234.5}) == ("Total: 1.234,5",)

    def test_step_three_translation_in_default_locale(self) -> None:
        """A translation that fails for the locale is retried for the default locale."""
        descriptor = MessageDescriptor("when", "{missing, date}")
        messages = {"when": "{d, date, custom}"}
        infos: list[FallbackInfo] = []
        resolver = FallbackResolver(
            "fr",
            "en",
            messages,
            formats={"date": {"custom": {"style": "bogus"}}},
            default_formats={"date": {"custom": {"style": "short"}}},
            on_fallback=infos.append,
        )
        fragments = resolver.resolve(descriptor, {"d": 0})
        assert fragments == ("1/1/70",)
        assert infos[-1].step == 3
        assert infos[-1].resolved_locale == "en"

    def test_step_four_default_in_default_locale(self) -> None:
        """Formatter failures in the locale fall through to the default locale."""
        descriptor = MessageDescriptor("price", "{p, number, money}")
        infos: list[FallbackInfo] = []
        resolver = FallbackResolver(
            "fr",
            "en",
            formats={"number": {"money": {"style": "currency"}}},
            default_formats={"number": {"money": {"style": "percent"}}},
            on_fallback=infos.append,
        )
        assert resolver.resolve(descriptor, {"p": 0.5}) == ("50%",)
        assert infos == [FallbackInfo("price", "fr", "en", 4)]

    def test_step_five_message_id(self, caplog: pytest.LogCaptureFixture) -> None:
        """When every attempt fails the id is returned."""
        resolver, infos = _collecting_resolver("fr", FR_MESSAGES)
        with caplog.at_level(logging.WARNING):
            assert resolver.resolve(GREETING, {}) == ("app.greeting",)
        assert infos[-1].step == 5
        assert "using message id as fallback" in caplog.text

    def test_no_default_and_no_translation(self) -> None:
        """A bare id resolves to itself."""
        resolver, _ = _collecting_resolver("en")
        assert resolver.resolve(MessageDescriptor("orphan")) == ("orphan",)

    def test_same_locale_skips_default_locale_steps(self) -> None:
        """With locale == default_locale only steps 1, 2 and 5 run."""
        infos: list[FallbackInfo] = []
        resolver = FallbackResolver(
            "en-US", "en_us", {"app.greeting": "Hi {missing}"}, on_fallback=infos.append
        )
        assert resolver.resolve(GREETING, {"name": "Eric"}) == ("Hello, Eric!",)
        assert [info.step for info in infos] == [2]

    def test_same_locale_retries_without_custom_formats(self) -> None:
        """A broken custom format still recovers through the default formats."""
        infos: list[FallbackInfo] = []
        resolver = FallbackResolver(
            "en",
            "en",
            formats={"number": {"money": {"style": "bogus"}}},
            on_fallback=infos.append,
        )
        descriptor = MessageDescriptor("app.total", "Total: {n, number, money}")
        assert resolver.resolve(descriptor, {"n": 5}) == ("Total: 5",)
        assert [info.step for info in infos] == [4]

    def test_empty_output_counts_as_failure(self) -> None:
        """A translation that renders nothing falls back."""
        resolver, infos = _collecting_resolver("fr", {"app.greeting": "{name}"})
        assert resolver.resolve(GREETING, {"name": ""}) == ("Hello, !",)
        assert infos[0].step == 2


class TestErrorsAndStrictMode:
    """Syntax errors and strict mode."""

    def test_broken_translation_falls_back(self, caplog: pytest.LogCaptureFixture) -> None:
        """A translation that does not compile is logged and skipped."""
        resolver, _ = _collecting_resolver("fr", {"app.greeting": "Bonjour, {name"}, strict=True)
        with caplog.at_level(logging.WARNING):
            assert resolver.resolve(GREETING, {"name": "Eric"}) == ("Hello, Eric!",)
        assert "Error compiling translated message 'app.greeting'" in caplog.text

    def test_broken_default_non_strict(self) -> None:
        """Non-strict mode returns the id for a broken default."""
        descriptor = MessageDescriptor("broken", "Hello, {name")
        resolver, _ = _collecting_resolver("en")
        assert resolver.resolve(descriptor, {"name": "x"}) == ("broken",)

    def test_broken_default_strict(self) -> None:
        """Strict mode re-raises syntax errors in the default message."""
        descriptor = MessageDescriptor("broken", "Hello, {name")
        resolver, _ = _collecting_resolver("en", strict=True)
        with pytest.raises(MessageSyntaxError):
            resolver.resolve(descriptor, {"name": "x"})

    def test_type_errors_fall_back(self) -> None:
        """A value of the wrong type moves to the next step."""
        descriptor = MessageDescriptor("count", "{n, number} items")
        resolver, _ = _collecting_resolver("en", {"count": "{n, plural, other {# items}}"})
        assert resolver.resolve(descriptor, {"n": "many"}) == ("count",)

    @given(
        st.text(max_size=30),
        st.dictionaries(st.sampled_from(["name", "n", "x"]), st.integers() | st.text(), max_size=3),
    )
    def test_never_empty(self, template: str, values: dict[str, object]) -> None:
        """Arbitrary templates and values always produce visible output."""
        resolver = FallbackResolver("fr", "en", {"m": template})
        fragments = resolver.resolve(MessageDescriptor("m", template), values)
        assert fragments
        assert any(f != "" for f in fragments)


class TestCompileCache:
    """Compiled templates are memoized."""

    def test_templates_compile_once(self) -> None:
        """Repeated resolution hits the cache."""
        cache = FormatCache()
        resolver = FallbackResolver("fr", "en", FR_MESSAGES, cache=cache)
        resolver.resolve(GREETING, {"name": "A"})
        misses = cache.misses
        resolver.resolve(GREETING, {"name": "B"})
        assert cache.misses == misses
