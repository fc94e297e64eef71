"""ICU message template compiler.

Compiles translator-authored template strings into the Message AST defined
in :mod:`intlformat.syntax.ast`.

Architecture:
    Recursive descent over an immutable :class:`~intlformat.syntax.cursor.Cursor`.
    Each rule takes a cursor and returns a
    :class:`~intlformat.syntax.cursor.ParseResult` with the node and the cursor
    after it. Unlike a resource parser there is no Junk recovery: a template
    either compiles completely or raises MessageSyntaxError, because a half
    compiled plan would render misleading text.

Grammar (informal):
    message   := (text | escape | '#' | argument)*
    argument  := '{' name (',' type (',' rest)?)? '}'
    simple    := ('number' | 'date' | 'time') (',' style)?
    plural    := ('plural' | 'selectordinal') ',' ('offset:' int)? case+
    select    := 'select' ',' case+
    case      := key '{' message '}'
    escape    := '\\{' | '\\}' | '\\#' | '\\\\' | '\\u' hex{4}

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import NoReturn

from intlformat.constants import MAX_DEPTH
from intlformat.diagnostics import Diagnostic, ErrorTemplate, MessageSyntaxError
from intlformat.enums import ArgumentType, PluralCategory, PluralStyle
from intlformat.syntax.ast import (
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
from intlformat.syntax.cursor import WHITESPACE, Cursor, ParseResult

__all__ = ["compile_message"]

# Characters that end an argument name, type keyword, style or case key.
_NAME_TERMINATORS: frozenset[str] = WHITESPACE | frozenset("{},")

_PLURAL_CATEGORIES: frozenset[str] = frozenset(c.value for c in PluralCategory)

_SIMPLE_TYPES: dict[str, ArgumentType] = {t.value: t for t in ArgumentType}

_PLURAL_TYPES: dict[str, PluralStyle] = {
    "plural": PluralStyle.CARDINAL,
    "selectordinal": PluralStyle.ORDINAL,
}

_ESCAPABLE: frozenset[str] = frozenset("{}#\\")

_HEX_DIGITS: frozenset[str] = frozenset("0123456789abcdefABCDEF")


@dataclass(frozen=True, slots=True)
class _ParseContext:
    """Per-position parsing state.

    Attributes:
        depth: Number of enclosing plural/select arguments
        in_plural: True when '#' refers to an enclosing plural value
    """

    depth: int = 0
    in_plural: bool = False

    def enter(self, *, plural: bool) -> "_ParseContext":
        return _ParseContext(depth=self.depth + 1, in_plural=self.in_plural or plural)


def _fail(diagnostic: Diagnostic) -> NoReturn:
    raise MessageSyntaxError(diagnostic)


def _expect_char(cursor: Cursor, char: str, expected: str) -> Cursor:
    """Consume a required character or raise."""
    if cursor.is_eof:
        _fail(ErrorTemplate.unexpected_eof(cursor.span()))
    nxt = cursor.expect(char)
    if nxt is None:
        _fail(ErrorTemplate.unexpected_character(cursor.current, expected, cursor.span(1)))
    return nxt


def _parse_word(cursor: Cursor) -> ParseResult[str]:
    """Read a run of characters up to whitespace, a brace, or a comma."""
    start = cursor
    while not cursor.is_eof and cursor.current not in _NAME_TERMINATORS:
        cursor = cursor.advance()
    return ParseResult(start.slice_to(cursor.pos), cursor)


def _parse_escape(cursor: Cursor) -> ParseResult[str]:
    """Decode a backslash escape; cursor is at the backslash."""
    nxt = cursor.advance()
    if nxt.is_eof:
        _fail(ErrorTemplate.invalid_escape("\\", cursor.span(1)))
    char = nxt.current
    if char in _ESCAPABLE:
        return ParseResult(char, nxt.advance())
    if char == "u":
        digits = nxt.advance().slice_to(nxt.pos + 5)
        if len(digits) == 4 and all(d in _HEX_DIGITS for d in digits):
            return ParseResult(chr(int(digits, 16)), nxt.advance(5))
        _fail(ErrorTemplate.invalid_escape("\\u" + digits, cursor.span(2 + len(digits))))
    _fail(ErrorTemplate.invalid_escape("\\" + char, cursor.span(2)))


def _parse_message(cursor: Cursor, ctx: _ParseContext) -> ParseResult[Message]:
    """Parse elements until EOF (top level) or an unconsumed '}' (case body)."""
    elements: list[Element] = []
    text: list[str] = []

    def flush() -> None:
        if text:
            elements.append(Literal("".join(text)))
            text.clear()

    nested = ctx.depth > 0
    while not cursor.is_eof:
        char = cursor.current
        if char == "{":
            flush()
            result = _parse_argument(cursor, ctx)
            elements.append(result.value)
            cursor = result.cursor
        elif char == "}":
            if nested:
                break
            _fail(ErrorTemplate.unmatched_close_brace(cursor.span(1)))
        elif char == "#" and ctx.in_plural:
            flush()
            elements.append(Pound())
            cursor = cursor.advance()
        elif char == "\\":
            escaped = _parse_escape(cursor)
            text.append(escaped.value)
            cursor = escaped.cursor
        else:
            text.append(char)
            cursor = cursor.advance()

    if nested and cursor.is_eof:
        _fail(ErrorTemplate.unexpected_eof(cursor.span()))
    flush()
    return ParseResult(Message(tuple(elements)), cursor)


def _parse_argument(cursor: Cursor, ctx: _ParseContext) -> ParseResult[Element]:
    """Parse ``{...}``; cursor is at the opening brace."""
    open_brace = cursor
    cursor = cursor.advance().skip_whitespace()
    if cursor.is_eof:
        _fail(ErrorTemplate.unexpected_eof(cursor.span()))

    name_result = _parse_word(cursor)
    name = name_result.value
    if not name:
        _fail(ErrorTemplate.expected_argument_name(cursor.span(1)))
    cursor = name_result.cursor.skip_whitespace()

    if cursor.is_eof:
        _fail(ErrorTemplate.unexpected_eof(cursor.span()))
    if cursor.current == "}":
        return ParseResult(Argument(name), cursor.advance())

    cursor = _expect_char(cursor, ",", "',' or '}'").skip_whitespace()
    type_start = cursor
    type_result = _parse_word(cursor)
    type_name = type_result.value
    cursor = type_result.cursor.skip_whitespace()

    if type_name in _SIMPLE_TYPES:
        return _parse_simple_argument(cursor, name, _SIMPLE_TYPES[type_name])
    if type_name in _PLURAL_TYPES:
        return _parse_plural_argument(cursor, open_brace, name, _PLURAL_TYPES[type_name], ctx)
    if type_name == "select":
        return _parse_select_argument(cursor, open_brace, name, ctx)
    _fail(ErrorTemplate.unknown_argument_type(type_name, type_start.span(len(type_name))))


def _parse_simple_argument(
    cursor: Cursor, name: str, arg_type: ArgumentType
) -> ParseResult[Element]:
    """Parse the optional ``, style`` tail of a number/date/time argument."""
    style: str | None = None
    if cursor.expect(","):
        cursor = cursor.advance().skip_whitespace()
        style_result = _parse_word(cursor)
        if not style_result.value:
            if cursor.is_eof:
                _fail(ErrorTemplate.unexpected_eof(cursor.span()))
            _fail(ErrorTemplate.unexpected_character(cursor.current, "a style name", cursor.span(1)))
        style = style_result.value
        cursor = style_result.cursor.skip_whitespace()
    cursor = _expect_char(cursor, "}", "'}'")
    return ParseResult(Argument(name, arg_type, style), cursor)


def _parse_offset(cursor: Cursor) -> ParseResult[int]:
    """Parse ``offset:N`` if present; returns 0 otherwise."""
    if cursor.slice_to(cursor.pos + 7) != "offset:":
        return ParseResult(0, cursor)
    start = cursor
    cursor = cursor.advance(7).skip_whitespace()
    digits_start = cursor
    while not cursor.is_eof and cursor.current.isdigit():
        cursor = cursor.advance()
    digits = digits_start.slice_to(cursor.pos)
    if not digits or not digits.isascii():
        _fail(ErrorTemplate.invalid_offset(start.span(7 + len(digits))))
    return ParseResult(int(digits), cursor.skip_whitespace())


def _parse_plural_key(cursor: Cursor, key: str) -> CaseKey:
    """Validate a plural/selectordinal case key."""
    if key.startswith("="):
        try:
            value = Decimal(key[1:])
        except InvalidOperation:
            _fail(ErrorTemplate.invalid_plural_key(key, cursor.span(len(key))))
        if not value.is_finite():
            _fail(ErrorTemplate.invalid_plural_key(key, cursor.span(len(key))))
        return ExactKey(value)
    if key not in _PLURAL_CATEGORIES:
        _fail(ErrorTemplate.invalid_plural_key(key, cursor.span(len(key))))
    return key


def _parse_cases(
    cursor: Cursor,
    open_brace: Cursor,
    name: str,
    ctx: _ParseContext,
    *,
    plural: bool,
) -> ParseResult[tuple[Case, ...]]:
    """Parse ``key {message}`` pairs up to and including the closing '}'."""
    inner = ctx.enter(plural=plural)
    if inner.depth > MAX_DEPTH:
        _fail(ErrorTemplate.nesting_depth_exceeded(MAX_DEPTH, open_brace.span(1)))

    cases: list[Case] = []
    seen: set[CaseKey] = set()
    while True:
        cursor = cursor.skip_whitespace()
        if cursor.is_eof:
            _fail(ErrorTemplate.unexpected_eof(cursor.span()))
        if cursor.current == "}":
            break

        key_start = cursor
        key_result = _parse_word(cursor)
        raw_key = key_result.value
        if not raw_key:
            _fail(ErrorTemplate.unexpected_character(cursor.current, "a case key", cursor.span(1)))
        key: CaseKey = _parse_plural_key(key_start, raw_key) if plural else raw_key
        if key in seen:
            _fail(ErrorTemplate.duplicate_case(name, raw_key, key_start.span(len(raw_key))))
        seen.add(key)

        cursor = _expect_char(key_result.cursor.skip_whitespace(), "{", "'{'")
        body = _parse_message(cursor, inner)
        cursor = _expect_char(body.cursor, "}", "'}'")
        cases.append(Case(key, body.value))

    if OTHER not in seen:
        _fail(ErrorTemplate.missing_other_case(name, open_brace.span(1)))
    return ParseResult(tuple(cases), cursor.advance())


def _parse_plural_argument(
    cursor: Cursor,
    open_brace: Cursor,
    name: str,
    style: PluralStyle,
    ctx: _ParseContext,
) -> ParseResult[Element]:
    cursor = _expect_char(cursor, ",", "','").skip_whitespace()
    offset_result = _parse_offset(cursor)
    cases = _parse_cases(offset_result.cursor, open_brace, name, ctx, plural=True)
    node = Plural(name, cases.value, offset=offset_result.value, style=style)
    return ParseResult(node, cases.cursor)


def _parse_select_argument(
    cursor: Cursor, open_brace: Cursor, name: str, ctx: _ParseContext
) -> ParseResult[Element]:
    cursor = _expect_char(cursor, ",", "','")
    cases = _parse_cases(cursor, open_brace, name, ctx, plural=False)
    return ParseResult(Select(name, cases.value), cases.cursor)


def compile_message(template: str) -> Message:
    """Compile an ICU message template into a Message AST.

    Pure function of the template string: the same input always yields an
    equal AST, so results may be cached freely.

    Args:
        template: Template source, e.g. ``"Hello, {name}!"``

    Returns:
        Compiled Message

    Raises:
        MessageSyntaxError: Unbalanced braces, unknown argument type, invalid
            plural key, duplicate case, or plural/select without ``other``
        TypeError: If template is not a string

    Examples:
        >>> compile_message("Hello, {name}!")
        Message(elements=(Literal(text='Hello, '), Argument(name='name', type=None, style=None), Literal(text='!')))

        >>> compile_message("{n, plural, one {# item}}")  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
            ...
        intlformat.diagnostics.errors.MessageSyntaxError: Argument 'n' has no 'other' case
    """
    if not isinstance(template, str):
        msg = f"Template must be str, got {type(template).__name__}"
        raise TypeError(msg)
    return _parse_message(Cursor(template, 0), _ParseContext()).value
