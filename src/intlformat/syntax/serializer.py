"""Serialize a Message AST back to ICU template syntax.

Useful for:
- Normalizing translator-authored templates
- Code generators and extraction tooling
- Property-based testing (roundtrip: compile -> serialize -> compile)

Python 3.13+.
"""

from intlformat.enums import PluralStyle

from .ast import Argument, Case, Element, Literal, Message, Plural, Pound, Select

__all__ = ["serialize_message"]

_LITERAL_ESCAPES: dict[int, str] = str.maketrans(
    {"\\": "\\\\", "{": "\\{", "}": "\\}", "#": "\\#"}
)


def _serialize_cases(cases: tuple[Case, ...]) -> str:
    return " ".join(f"{case.key} {{{serialize_message(case.value)}}}" for case in cases)


def _serialize_element(element: Element) -> str:
    match element:
        case Literal():
            return element.text.translate(_LITERAL_ESCAPES)
        case Pound():
            return "#"
        case Argument(name=name, type=None):
            return f"{{{name}}}"
        case Argument(name=name, type=arg_type, style=None):
            return f"{{{name}, {arg_type}}}"
        case Argument(name=name, type=arg_type, style=style):
            return f"{{{name}, {arg_type}, {style}}}"
        case Plural():
            keyword = "selectordinal" if element.style is PluralStyle.ORDINAL else "plural"
            offset = f"offset:{element.offset} " if element.offset else ""
            return f"{{{element.name}, {keyword}, {offset}{_serialize_cases(element.cases)}}}"
        case Select():
            return f"{{{element.name}, select, {_serialize_cases(element.cases)}}}"
        case _:
            msg = f"Cannot serialize {type(element).__name__}"
            raise TypeError(msg)


def serialize_message(message: Message) -> str:
    """Convert a Message AST to template source.

    Literal braces, backslashes and ``#`` are escaped so that compiling the
    result yields an AST equal to the input.

    Example:
        >>> from intlformat.syntax.parser import compile_message
        >>> serialize_message(compile_message("{n, plural, one {# item} other {# items}}"))
        '{n, plural, one {# item} other {# items}}'
    """
    return "".join(_serialize_element(element) for element in message.elements)
