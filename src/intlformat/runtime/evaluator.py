"""Message evaluator - turns a compiled Message into output fragments.

Walks the AST in document order, substituting values, formatting numbers and
dates through the locale's formatters, and choosing plural/select branches.
Python 3.13+. Indirect dependency: Babel (via formatters and plural_rules).

Thread Safety:
    The evaluator holds no mutable state; the ``#`` binding of the innermost
    plural is passed down explicitly. Evaluation is a pure function of
    (message, values, locale, formats).
"""

from collections.abc import Mapping
from datetime import date
from decimal import Decimal

from intlformat.diagnostics import (
    ArgumentTypeError,
    ErrorTemplate,
    MissingValueError,
)
from intlformat.enums import ArgumentType
from intlformat.runtime.cache import FormatCache
from intlformat.runtime.formats import DEFAULT_FORMATS, Formats, get_named_format
from intlformat.runtime.formatters import get_datetime_formatter, get_number_formatter
from intlformat.runtime.plural_rules import select_plural_category
from intlformat.runtime.value_types import (
    Fragment,
    Fragments,
    is_number,
    is_rich_content,
    merge_fragments,
)
from intlformat.syntax import (
    OTHER,
    Argument,
    ExactKey,
    Literal,
    Message,
    Plural,
    Pound,
    Select,
)

__all__ = ["MessageEvaluator", "evaluate"]

_POUND_TEXT = "#"


class MessageEvaluator:
    """Evaluates compiled messages for one locale and formats table.

    Errors propagate to the caller (the fallback resolver decides whether
    they are fatal):
    - MissingValueError: referenced argument not supplied
    - ArgumentTypeError: value unusable for its argument kind
    - FormatterConstructionError / FormattingError: from the formatters
    """

    __slots__ = ("cache", "formats", "locale")

    def __init__(
        self,
        locale: str,
        formats: Formats = DEFAULT_FORMATS,
        *,
        cache: FormatCache | None = None,
    ) -> None:
        """Initialize evaluator.

        Args:
            locale: Locale code for number/date formatting and plural rules
            formats: Named formats table (already merged with defaults)
            cache: Optional cache for constructed formatters
        """
        self.locale = locale
        self.formats = formats
        self.cache = cache

    def evaluate(self, message: Message, values: Mapping[str, object] | None = None) -> Fragments:
        """Evaluate a message to a tuple of fragments.

        Adjacent strings are merged; rich-content handles are kept as-is.

        Raises:
            MissingValueError: If a referenced argument is absent from values
            ArgumentTypeError: If a value has the wrong type for its argument
        """
        pieces: list[Fragment] = []
        self._evaluate_into(message, values or {}, None, pieces)
        return merge_fragments(pieces)

    def _evaluate_into(
        self,
        message: Message,
        values: Mapping[str, object],
        pound: str | None,
        out: list[Fragment],
    ) -> None:
        for element in message.elements:
            match element:
                case Literal(text=text):
                    out.append(text)
                case Pound():
                    out.append(pound if pound is not None else _POUND_TEXT)
                case Argument():
                    out.append(self._format_argument(element, values))
                case Plural():
                    self._evaluate_plural(element, values, out)
                case Select():
                    self._evaluate_select(element, values, pound, out)

    @staticmethod
    def _lookup(name: str, values: Mapping[str, object]) -> object:
        if name not in values:
            raise MissingValueError(ErrorTemplate.value_not_provided(name))
        return values[name]

    def _format_argument(self, arg: Argument, values: Mapping[str, object]) -> Fragment:
        value = self._lookup(arg.name, values)
        if is_rich_content(value):
            return value

        match arg.type:
            case None:
                return self._format_untyped(value)
            case ArgumentType.NUMBER:
                if not is_number(value):
                    raise ArgumentTypeError(
                        ErrorTemplate.value_type_mismatch(arg.name, "number", value)
                    )
                return self.format_number(value, arg.style)
            case ArgumentType.DATE | ArgumentType.TIME:
                if isinstance(value, bool) or not isinstance(value, (date, int, float, Decimal)):
                    raise ArgumentTypeError(
                        ErrorTemplate.value_type_mismatch(arg.name, arg.type.value, value)
                    )
                options = get_named_format(self.formats, arg.type.value, arg.style)
                formatter = get_datetime_formatter(self.locale, arg.type.value, options, self.cache)
                return formatter.format(value)

    def _format_untyped(self, value: object) -> str:
        match value:
            case None:
                return ""
            case bool():
                return "true" if value else "false"
            case str():
                return value
            case int() | float() | Decimal():
                return self.format_number(value)
            case date():
                return get_datetime_formatter(self.locale, "date", None, self.cache).format(value)
        return str(value)

    def format_number(self, value: int | float | Decimal, style: str | None = None) -> str:
        """Format a number with a named style (or the locale default)."""
        options = get_named_format(self.formats, "number", style)
        return get_number_formatter(self.locale, options, self.cache).format(value)

    def _evaluate_plural(
        self, node: Plural, values: Mapping[str, object], out: list[Fragment]
    ) -> None:
        value = self._lookup(node.name, values)
        if not is_number(value):
            raise ArgumentTypeError(ErrorTemplate.value_type_mismatch(node.name, "number", value))

        chosen = next(
            (c for c in node.exact_cases if isinstance(c.key, ExactKey) and c.key.matches(value)),
            None,
        )

        adjusted = value - node.offset
        if chosen is None:
            category = select_plural_category(adjusted, self.locale, node.style)
            chosen = node.get_case(category) or node.get_case(OTHER)

        assert chosen is not None  # Type narrowing: compiler guarantees "other"
        self._evaluate_into(chosen.value, values, self.format_number(adjusted), out)

    def _evaluate_select(
        self,
        node: Select,
        values: Mapping[str, object],
        pound: str | None,
        out: list[Fragment],
    ) -> None:
        value = self._lookup(node.name, values)
        if is_rich_content(value):
            raise ArgumentTypeError(ErrorTemplate.value_type_mismatch(node.name, "string", value))

        match value:
            case None:
                key = ""
            case bool():
                key = "true" if value else "false"
            case _:
                key = str(value)

        chosen = node.get_case(key) or node.get_case(OTHER)
        assert chosen is not None  # Type narrowing: compiler guarantees "other"
        self._evaluate_into(chosen.value, values, pound, out)


def evaluate(
    message: Message,
    values: Mapping[str, object] | None,
    locale: str,
    formats: Formats = DEFAULT_FORMATS,
    cache: FormatCache | None = None,
) -> Fragments:
    """Evaluate ``message`` with ``values`` for ``locale``.

    Example:
        >>> from intlformat.syntax import compile_message
        >>> msg = compile_message("{n, plural, one {# photo} other {# photos}}")
        >>> evaluate(msg, {"n": 1000}, "en")
        ('1,000 photos',)
    """
    return MessageEvaluator(locale, formats, cache=cache).evaluate(message, values)
