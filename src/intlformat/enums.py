"""Enumerations for intlformat type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class ArgumentType(StrEnum):
    """Formatter type named in a simple argument: ``{n, number, percent}``.

    StrEnum provides automatic string conversion: str(ArgumentType.NUMBER) == "number"
    """

    NUMBER = "number"
    """Locale number formatting: {count, number}"""

    DATE = "date"
    """Locale date formatting: {when, date, short}"""

    TIME = "time"
    """Locale time formatting: {when, time, short}"""


class PluralStyle(StrEnum):
    """Plural rule family used to pick a category.

    StrEnum provides automatic string conversion: str(PluralStyle.ORDINAL) == "ordinal"
    """

    CARDINAL = "cardinal"
    """Counting: {n, plural, one {# item} other {# items}}"""

    ORDINAL = "ordinal"
    """Ranking: {n, selectordinal, one {#st} two {#nd} few {#rd} other {#th}}"""


class PluralCategory(StrEnum):
    """CLDR plural category."""

    ZERO = "zero"
    ONE = "one"
    TWO = "two"
    FEW = "few"
    MANY = "many"
    OTHER = "other"


class RelativeUnit(StrEnum):
    """Unit a relative time is displayed in ("3 minutes ago")."""

    SECOND = "second"
    MINUTE = "minute"
    HOUR = "hour"
    DAY = "day"
    MONTH = "month"
    YEAR = "year"


__all__ = [
    "ArgumentType",
    "PluralCategory",
    "PluralStyle",
    "RelativeUnit",
]
