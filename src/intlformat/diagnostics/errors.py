"""intlformat exception hierarchy with structured diagnostics.

All exceptions optionally store Diagnostic objects for rich error information.
Each concrete error also derives from the closest builtin exception so callers
that only know the standard library can still catch it.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic


class IntlError(Exception):
    """Base exception for all intlformat errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize IntlError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class MessageSyntaxError(IntlError, ValueError):
    """Malformed message template.

    Raised by the compiler for unbalanced braces, unknown argument types,
    invalid plural keys, or a plural/select argument without ``other``.
    Fatal for a default template; a recoverable fallback step otherwise.
    """


class MissingValueError(IntlError, KeyError):
    """Template references an argument that was not supplied.

    Recoverable: the fallback resolver moves on to the next step.
    """

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the diagnostic text readable.
        return Exception.__str__(self)


class ArgumentTypeError(IntlError, TypeError):
    """Supplied value has the wrong type for the argument that uses it.

    Examples:
    - A string passed to a plural argument
    - A rich-content handle used as a select key
    """


class FormatterConstructionError(IntlError, ValueError):
    """Invalid option combination for a number/date/relative formatter.

    Raised when the formatter is built, before any value is formatted.
    """


class FormattingError(IntlError):
    """Babel failed while formatting an otherwise valid value.

    Attributes:
        fallback_value: String to show when the caller chooses to degrade
    """

    def __init__(self, message: str | Diagnostic, fallback_value: str) -> None:
        """Initialize FormattingError.

        Args:
            message: Error message string OR Diagnostic object
            fallback_value: Value to use in output when formatting fails
        """
        super().__init__(message)
        self.fallback_value = fallback_value
