"""CLDR plural rules implementation using Babel.

Provides plural category selection for all locales using Babel's CLDR data,
for both cardinal ("1 item") and ordinal ("1st") rules.

Python 3.13+. Depends on Babel for CLDR data.

Reference: https://www.unicode.org/cldr/charts/latest/supplemental/language_plural_rules.html
"""

from decimal import Decimal

from babel import UnknownLocaleError

from intlformat.enums import PluralStyle
from intlformat.locale_utils import get_babel_locale

__all__ = ["select_plural_category"]


def select_plural_category(
    n: int | float | Decimal,
    locale: str,
    style: PluralStyle | str = PluralStyle.CARDINAL,
) -> str:
    """Select CLDR plural category for number using Babel's CLDR data.

    Args:
        n: Number to categorize
        locale: Locale code (e.g., "lv_LV", "en-US", "ar-SA")
        style: "cardinal" (default) or "ordinal"

    Returns:
        Plural category: "zero", "one", "two", "few", "many", or "other"

    Examples:
        >>> select_plural_category(1, "en_US")
        'one'
        >>> select_plural_category(5, "ru_RU")
        'many'
        >>> select_plural_category(2, "en", "ordinal")
        'two'
        >>> select_plural_category(42, "ja_JP")
        'other'

    Fallback:
        If locale parsing fails, a simple rule is used: cardinal
        ``abs(n) == 1 -> "one"``, ordinal always ``"other"``.
    """
    ordinal = PluralStyle(style) is PluralStyle.ORDINAL
    try:
        locale_obj = get_babel_locale(locale)
    except (UnknownLocaleError, ValueError):
        if ordinal:
            return "other"
        return "one" if abs(n) == 1 else "other"

    plural_rule = locale_obj.ordinal_form if ordinal else locale_obj.plural_form
    return plural_rule(n)
