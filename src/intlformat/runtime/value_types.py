"""Value and fragment types shared by the evaluator and the facade.

A substitution value is either a primitive that the engine knows how to
format, or an opaque rich-content handle (an embedded UI node, a link
object, ...) that passes through formatting untouched.

Python 3.13+.
"""

from collections.abc import Callable, Iterable
from datetime import date, datetime
from decimal import Decimal
from typing import TypeIs

__all__ = [
    "Fragment",
    "Fragments",
    "IntlValue",
    "Primitive",
    "Renderer",
    "is_number",
    "is_rich_content",
    "merge_fragments",
    "render_text",
]

type Primitive = str | int | float | Decimal | bool | date | datetime | None

# Anything that is not a Primitive is treated as an opaque handle.
type IntlValue = Primitive | object

type Fragment = str | object

type Fragments = tuple[Fragment, ...]

type Renderer = Callable[[Fragments], object]

_PRIMITIVE_TYPES: tuple[type, ...] = (str, int, float, Decimal, bool, date, datetime)


def is_rich_content(value: object) -> bool:
    """True for values the engine must emit unchanged.

    Example:
        >>> is_rich_content("text"), is_rich_content(3), is_rich_content(object())
        (False, False, True)
    """
    return value is not None and not isinstance(value, _PRIMITIVE_TYPES)


def is_number(value: object) -> TypeIs[int | float | Decimal]:
    """True for int/float/Decimal; bool is rejected even though it subclasses int."""
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


def merge_fragments(pieces: Iterable[Fragment]) -> Fragments:
    """Join adjacent strings and drop empty ones; keep rich handles by identity.

    Example:
        >>> handle = object()
        >>> merge_fragments(["Hello", ", ", handle, "", "!"]) == ("Hello, ", handle, "!")
        True
    """
    merged: list[Fragment] = []
    buffer: list[str] = []
    for piece in pieces:
        if isinstance(piece, str):
            if piece:
                buffer.append(piece)
            continue
        if buffer:
            merged.append("".join(buffer))
            buffer.clear()
        merged.append(piece)
    if buffer:
        merged.append("".join(buffer))
    return tuple(merged)


def render_text(fragments: Fragments) -> str:
    """Default renderer: concatenate fragments, stringifying rich handles.

    Example:
        >>> render_text(("Hello, ", "Eric", "!"))
        'Hello, Eric!'
    """
    return "".join(f if isinstance(f, str) else str(f) for f in fragments)
