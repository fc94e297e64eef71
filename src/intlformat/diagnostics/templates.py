"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, SourceSpan


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here. NO f-strings in exception constructors!
    This provides:
        - Testable error messages
        - Consistent formatting
        - Documentation of all error cases
    """

    # ------------------------------------------------------------------
    # Value errors
    # ------------------------------------------------------------------

    @staticmethod
    def value_not_provided(name: str) -> Diagnostic:
        """Argument referenced by the template but missing from values."""
        return Diagnostic(
            code=DiagnosticCode.VALUE_NOT_PROVIDED,
            message=f"No value provided for argument '{name}'",
            hint=f"Pass '{name}' in the substitution values",
            argument_name=name,
        )

    @staticmethod
    def value_type_mismatch(name: str, expected: str, received: object) -> Diagnostic:
        """Value has a type the argument cannot use.

        Args:
            name: Argument name
            expected: Human description of the accepted types
            received: The offending value
        """
        return Diagnostic(
            code=DiagnosticCode.VALUE_TYPE_MISMATCH,
            message=(
                f"Argument '{name}' expects {expected}, "
                f"got {type(received).__name__}"
            ),
            argument_name=name,
        )

    # ------------------------------------------------------------------
    # Formatting errors
    # ------------------------------------------------------------------

    @staticmethod
    def invalid_format_option(kind: str, option: str, value: object) -> Diagnostic:
        """Formatter option has an unsupported value.

        Args:
            kind: Formatter kind ("number", "date", "time", "relative")
            option: Option name
            value: Rejected value
        """
        return Diagnostic(
            code=DiagnosticCode.INVALID_FORMAT_OPTION,
            message=f"Invalid {kind} format option {option}={value!r}",
            hint="Check the option against the formatter's documented values",
        )

    @staticmethod
    def unknown_format_style(kind: str, name: str) -> Diagnostic:
        """Named format not found in formats or default formats."""
        return Diagnostic(
            code=DiagnosticCode.UNKNOWN_FORMAT_STYLE,
            message=f"No {kind} format named '{name}'",
            hint=f"Define '{name}' under formats['{kind}'] in the locale context",
        )

    @staticmethod
    def formatting_failed(kind: str, value: object, locale_code: str, reason: str) -> Diagnostic:
        """Babel raised while formatting a value."""
        return Diagnostic(
            code=DiagnosticCode.FORMATTING_FAILED,
            message=f"{kind.capitalize()} formatting failed for {value!r}: {reason}",
            locale_code=locale_code,
        )

    @staticmethod
    def unknown_locale(locale_code: str, fallback: str) -> Diagnostic:
        """Locale has no CLDR data."""
        return Diagnostic(
            code=DiagnosticCode.UNKNOWN_LOCALE,
            message=f"Missing locale data for '{locale_code}', using '{fallback}'",
            locale_code=locale_code,
        )

    # ------------------------------------------------------------------
    # Syntax errors
    # ------------------------------------------------------------------

    @staticmethod
    def unexpected_eof(span: SourceSpan | None = None) -> Diagnostic:
        """Template ended inside an argument."""
        return Diagnostic(
            code=DiagnosticCode.UNEXPECTED_EOF,
            message="Unexpected end of template",
            span=span,
            hint="Check that every '{' has a matching '}'",
        )

    @staticmethod
    def unexpected_character(found: str, expected: str, span: SourceSpan) -> Diagnostic:
        """Found a character the grammar does not allow here."""
        return Diagnostic(
            code=DiagnosticCode.UNEXPECTED_CHARACTER,
            message=f"Expected {expected} but found {found!r}",
            span=span,
        )

    @staticmethod
    def unmatched_close_brace(span: SourceSpan) -> Diagnostic:
        """Stray '}' in literal text."""
        return Diagnostic(
            code=DiagnosticCode.UNMATCHED_CLOSE_BRACE,
            message="Unmatched '}'",
            span=span,
            hint="Escape literal braces as \\}",
        )

    @staticmethod
    def expected_argument_name(span: SourceSpan) -> Diagnostic:
        """'{' not followed by an argument name."""
        return Diagnostic(
            code=DiagnosticCode.EXPECTED_ARGUMENT_NAME,
            message="Expected an argument name after '{'",
            span=span,
        )

    @staticmethod
    def unknown_argument_type(type_name: str, span: SourceSpan) -> Diagnostic:
        """Argument type other than number/date/time/plural/selectordinal/select."""
        return Diagnostic(
            code=DiagnosticCode.UNKNOWN_ARGUMENT_TYPE,
            message=f"Unknown argument type '{type_name}'",
            span=span,
            hint="Use one of: number, date, time, plural, selectordinal, select",
        )

    @staticmethod
    def invalid_plural_key(key: str, span: SourceSpan) -> Diagnostic:
        """Plural case keyword that is neither a CLDR category nor '=N'."""
        return Diagnostic(
            code=DiagnosticCode.INVALID_PLURAL_KEY,
            message=f"Invalid plural case '{key}'",
            span=span,
            hint="Use zero, one, two, few, many, other, or an exact match like =0",
        )

    @staticmethod
    def missing_other_case(name: str, span: SourceSpan) -> Diagnostic:
        """Plural/select without the mandatory 'other' case."""
        return Diagnostic(
            code=DiagnosticCode.MISSING_OTHER_CASE,
            message=f"Argument '{name}' has no 'other' case",
            span=span,
            hint="ICU requires an 'other' case for plural and select",
            argument_name=name,
        )

    @staticmethod
    def duplicate_case(name: str, key: str, span: SourceSpan) -> Diagnostic:
        """The same case key appears twice."""
        return Diagnostic(
            code=DiagnosticCode.DUPLICATE_CASE,
            message=f"Duplicate case '{key}' in argument '{name}'",
            span=span,
            argument_name=name,
        )

    @staticmethod
    def invalid_offset(span: SourceSpan) -> Diagnostic:
        """'offset:' not followed by an integer."""
        return Diagnostic(
            code=DiagnosticCode.INVALID_OFFSET,
            message="Plural offset must be an integer",
            span=span,
        )

    @staticmethod
    def invalid_escape(sequence: str, span: SourceSpan) -> Diagnostic:
        """Backslash followed by an unsupported sequence."""
        return Diagnostic(
            code=DiagnosticCode.INVALID_ESCAPE,
            message=f"Invalid escape sequence '{sequence}'",
            span=span,
            hint="Supported escapes: \\{ \\} \\# \\\\ \\uXXXX",
        )

    @staticmethod
    def nesting_depth_exceeded(max_depth: int, span: SourceSpan) -> Diagnostic:
        """Plural/select nesting exceeds MAX_DEPTH."""
        return Diagnostic(
            code=DiagnosticCode.NESTING_DEPTH_EXCEEDED,
            message=f"Argument nesting exceeds maximum depth of {max_depth}",
            span=span,
        )
