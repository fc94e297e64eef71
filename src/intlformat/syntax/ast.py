"""Message AST (Abstract Syntax Tree) node definitions.

A compiled template is a Message: an ordered tuple of elements. Nodes are
frozen, slotted dataclasses so a compiled plan can be cached and shared
between threads without copying.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from decimal import Decimal

from intlformat.enums import ArgumentType, PluralStyle

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Root
    "Message",
    # Elements
    "Literal",
    "Argument",
    "Pound",
    "Plural",
    "Select",
    # Cases
    "Case",
    "ExactKey",
    # Type aliases
    "Element",
    "CaseKey",
    "OTHER",
]

OTHER: str = "other"


@dataclass(frozen=True, slots=True)
class Message:
    """Root node: the ordered elements of a template (or of a case body)."""

    elements: tuple["Element", ...]

    @property
    def is_empty(self) -> bool:
        """True when the template has no elements at all."""
        return not self.elements


@dataclass(frozen=True, slots=True)
class Literal:
    """Verbatim text, escapes already decoded.

    Example:
        "Hello, " in "Hello, {name}!"
    """

    text: str


@dataclass(frozen=True, slots=True)
class Argument:
    """Simple argument interpolation.

    Examples:
        {name}                 -> Argument("name")
        {total, number}        -> Argument("total", ArgumentType.NUMBER)
        {when, date, short}    -> Argument("when", ArgumentType.DATE, "short")
    """

    name: str
    type: ArgumentType | None = None
    style: str | None = None


@dataclass(frozen=True, slots=True)
class Pound:
    """The ``#`` marker inside a plural case body.

    Evaluates to the locale-formatted value of the innermost enclosing
    plural argument, minus its offset.
    """


@dataclass(frozen=True, slots=True)
class ExactKey:
    """Exact-match plural case key: ``=0``, ``=1``, ``=2.5``."""

    value: Decimal

    def matches(self, number: int | float | Decimal) -> bool:
        """Compare against the raw (offset-free) argument value."""
        return Decimal(str(number)) == self.value

    def __str__(self) -> str:
        return f"={self.value}"


type CaseKey = str | ExactKey


@dataclass(frozen=True, slots=True)
class Case:
    """One ``key {message}`` branch of a plural or select argument."""

    key: CaseKey
    value: Message


def _find_case(cases: tuple[Case, ...], key: CaseKey) -> Case | None:
    for case in cases:
        if case.key == key:
            return case
    return None


@dataclass(frozen=True, slots=True)
class Plural:
    """Plural or selectordinal argument.

    Example:
        {n, plural, offset:1 =0 {nobody} one {# other} other {# others}}
    """

    name: str
    cases: tuple[Case, ...]
    offset: int = 0
    style: PluralStyle = PluralStyle.CARDINAL

    def get_case(self, key: CaseKey) -> Case | None:
        """Return the case with this key, if present."""
        return _find_case(self.cases, key)

    @property
    def exact_cases(self) -> tuple[Case, ...]:
        """Cases keyed by ``=N``, in source order."""
        return tuple(c for c in self.cases if isinstance(c.key, ExactKey))


@dataclass(frozen=True, slots=True)
class Select:
    """Select argument keyed by exact string match.

    Example:
        {gender, select, female {she} male {he} other {they}}
    """

    name: str
    cases: tuple[Case, ...]

    def get_case(self, key: str) -> Case | None:
        """Return the case with this key, if present."""
        return _find_case(self.cases, key)


type Element = Literal | Argument | Pound | Plural | Select
