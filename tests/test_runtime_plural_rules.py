"""Tests for CLDR plural category selection."""

from __future__ import annotations

from decimal import Decimal

import pytest
from hypothesis import given
from hypothesis import strategies as st

from intlformat.enums import PluralCategory, PluralStyle
from intlformat.runtime.plural_rules import select_plural_category

_CATEGORIES = {c.value for c in PluralCategory}


class TestCardinal:
    """Cardinal rules."""

    @pytest.mark.parametrize(
        ("n", "locale", "expected"),
        [
            (1, "en", "one"),
            (0, "en", "other"),
            (2, "en-US", "other"),
            (1, "ru-RU", "one"),
            (3, "ru-RU", "few"),
            (5, "ru-RU", "many"),
            (21, "ru", "one"),
            (0, "lv", "zero"),
            (2, "ar", "two"),
            (42, "ja", "other"),
        ],
    )
    def test_categories(self, n: int, locale: str, expected: str) -> None:
        """Categories follow the locale's CLDR rules."""
        assert select_plural_category(n, locale) == expected

    def test_decimal_with_visible_fraction(self) -> None:
        """1.0 with visible fraction digits is not 'one' in English."""
        assert select_plural_category(Decimal("1.0"), "en") == "other"


class TestOrdinal:
    """Ordinal rules."""

    @pytest.mark.parametrize(
        ("n", "expected"),
        [(1, "one"), (2, "two"), (3, "few"), (4, "other"), (11, "other"), (22, "two")],
    )
    def test_english_ordinals(self, n: int, expected: str) -> None:
        """English st/nd/rd/th."""
        assert select_plural_category(n, "en", PluralStyle.ORDINAL) == expected

    def test_style_accepts_string(self) -> None:
        """The style may be given as a plain string."""
        assert select_plural_category(2, "en", "ordinal") == "two"


class TestUnknownLocale:
    """Fallback rule."""

    def test_cardinal_fallback(self) -> None:
        """Unknown locales use abs(n) == 1 -> one."""
        assert select_plural_category(1, "xx-NOWHERE") == "one"
        assert select_plural_category(-1, "xx-NOWHERE") == "one"
        assert select_plural_category(2, "xx-NOWHERE") == "other"

    def test_ordinal_fallback(self) -> None:
        """Unknown locales have no ordinal distinctions."""
        assert select_plural_category(1, "xx-NOWHERE", "ordinal") == "other"

    @given(st.integers(min_value=-10_000, max_value=10_000))
    def test_result_is_a_cldr_category(self, n: int) -> None:
        """Every result is one of the six CLDR categories."""
        assert select_plural_category(n, "pl") in _CATEGORIES
