"""Strategies generating ICU message ASTs.

Generated ASTs are in the normal form the compiler produces: no empty or
adjacent Literals, Pound only inside plural cases, every plural/select has an
``other`` case, no duplicate keys.
"""

from __future__ import annotations

from decimal import Decimal

from hypothesis import strategies as st

from intlformat.enums import ArgumentType, PluralStyle
from intlformat.syntax import (
    OTHER,
    Argument,
    Case,
    CaseKey,
    Element,
    ExactKey,
    Literal,
    Message,
    Plural,
    Pound,
    Select,
)

argument_names = st.from_regex(r"[a-z][a-zA-Z0-9_]{0,8}", fullmatch=True)

literal_text = st.text(
    alphabet=st.characters(blacklist_categories=("Cs",)), min_size=1, max_size=12
)

select_keys = argument_names.filter(lambda key: key != OTHER)

_CATEGORY_KEYS = ("zero", "one", "two", "few", "many")

_plural_keys: st.SearchStrategy[CaseKey] = st.one_of(
    st.sampled_from(_CATEGORY_KEYS),
    st.integers(min_value=0, max_value=20).map(lambda n: ExactKey(Decimal(n))),
)


def _merge_literals(elements: list[Element]) -> tuple[Element, ...]:
    merged: list[Element] = []
    for element in elements:
        if isinstance(element, Literal) and merged and isinstance(merged[-1], Literal):
            merged[-1] = Literal(merged[-1].text + element.text)
        else:
            merged.append(element)
    return tuple(merged)


@st.composite
def icu_messages(
    draw: st.DrawFn, max_depth: int = 2, in_plural: bool = False
) -> Message:
    """Draw a Message AST in compiler normal form."""
    kinds = ["literal", "argument", "typed"]
    if in_plural:
        kinds.append("pound")
    if max_depth > 0:
        kinds += ["plural", "select"]

    elements: list[Element] = []
    for _ in range(draw(st.integers(min_value=0, max_value=4))):
        match draw(st.sampled_from(kinds)):
            case "literal":
                elements.append(Literal(draw(literal_text)))
            case "argument":
                elements.append(Argument(draw(argument_names)))
            case "typed":
                elements.append(
                    Argument(
                        draw(argument_names),
                        draw(st.sampled_from(list(ArgumentType))),
                        draw(st.sampled_from([None, "short", "percent", "integer"])),
                    )
                )
            case "pound":
                elements.append(Pound())
            case "plural":
                keys = draw(st.lists(_plural_keys, max_size=3, unique=True))
                cases = tuple(
                    Case(key, draw(icu_messages(max_depth - 1, in_plural=True)))
                    for key in [*keys, OTHER]
                )
                elements.append(
                    Plural(
                        draw(argument_names),
                        cases,
                        offset=draw(st.integers(min_value=0, max_value=3)),
                        style=draw(st.sampled_from(list(PluralStyle))),
                    )
                )
            case "select":
                keys = draw(st.lists(select_keys, max_size=3, unique=True))
                cases = tuple(
                    Case(key, draw(icu_messages(max_depth - 1, in_plural=in_plural)))
                    for key in [*keys, OTHER]
                )
                elements.append(Select(draw(argument_names), cases))
    return Message(_merge_literals(elements))
