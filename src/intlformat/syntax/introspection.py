"""Read-only queries over compiled messages.

Python 3.13+.
"""

from .ast import Argument, Element, Message, Plural, Select

__all__ = ["extract_argument_names"]


def _walk(elements: tuple[Element, ...], names: set[str]) -> None:
    for element in elements:
        match element:
            case Argument(name=name):
                names.add(name)
            case Plural(name=name, cases=cases) | Select(name=name, cases=cases):
                names.add(name)
                for case in cases:
                    _walk(case.value.elements, names)
            case _:
                pass


def extract_argument_names(message: Message) -> frozenset[str]:
    """Return every argument name the message can reference.

    Includes names used only inside some plural/select cases, so the result
    is the set of values a caller may need to supply.

    Example:
        >>> from intlformat.syntax.parser import compile_message
        >>> sorted(extract_argument_names(compile_message("{a} {b, select, x {{c}} other {}}")))
        ['a', 'b', 'c']
    """
    names: set[str] = set()
    _walk(message.elements, names)
    return frozenset(names)
