"""Diagnostic codes and data structures.

Defines error codes, source spans, and diagnostic messages.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "SourceSpan",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Value errors (missing or mistyped substitution values)
        2000-2999: Formatting errors (formatter construction and output)
        3000-3999: Syntax errors (template compilation failures)
    """

    # Value errors (1000-1999)
    VALUE_NOT_PROVIDED = 1001
    VALUE_TYPE_MISMATCH = 1002

    # Formatting errors (2000-2999)
    INVALID_FORMAT_OPTION = 2001
    UNKNOWN_FORMAT_STYLE = 2002
    FORMATTING_FAILED = 2003
    UNKNOWN_LOCALE = 2004

    # Syntax errors (3000-3999)
    UNEXPECTED_EOF = 3001
    UNEXPECTED_CHARACTER = 3002
    UNMATCHED_CLOSE_BRACE = 3003
    EXPECTED_ARGUMENT_NAME = 3004
    UNKNOWN_ARGUMENT_TYPE = 3005
    INVALID_PLURAL_KEY = 3006
    MISSING_OTHER_CASE = 3007
    DUPLICATE_CASE = 3008
    INVALID_OFFSET = 3009
    INVALID_ESCAPE = 3010
    NESTING_DEPTH_EXCEEDED = 3011


@dataclass(frozen=True, slots=True)
class SourceSpan:
    """Source code location for error reporting.

    Attributes:
        start: Starting character offset (0-indexed)
        end: Ending character offset (exclusive)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """

    start: int
    end: int
    line: int
    column: int

    def __post_init__(self) -> None:
        """Validate SourceSpan invariants.

        Raises:
            ValueError: If start is negative, end precedes start, or
                line/column are below 1 (both are 1-indexed).
        """
        if self.start < 0:
            msg = f"SourceSpan.start must be >= 0, got {self.start}"
            raise ValueError(msg)
        if self.end < self.start:
            msg = f"SourceSpan.end ({self.end}) must be >= start ({self.start})"
            raise ValueError(msg)
        if self.line < 1:
            msg = f"SourceSpan.line must be >= 1 (1-indexed), got {self.line}"
            raise ValueError(msg)
        if self.column < 1:
            msg = f"SourceSpan.column must be >= 1 (1-indexed), got {self.column}"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        span: Source location (None for non-syntax errors)
        hint: Suggestion for fixing the error
        argument_name: Argument the error concerns (value/format errors)
        locale_code: Locale in effect when the error occurred
    """

    code: DiagnosticCode
    message: str
    span: SourceSpan | None = None
    hint: str | None = None
    argument_name: str | None = None
    locale_code: str | None = None

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like a compiler error.

        Example output:
            error[MISSING_OTHER_CASE]: Argument 'n' has no 'other' case
              --> line 1, column 2
              = help: ICU requires an 'other' case for plural and select

        Returns:
            Formatted error message
        """
        lines = [f"error[{self.code.name}]: {self.message}"]
        if self.span is not None:
            lines.append(f"  --> line {self.span.line}, column {self.span.column}")
        if self.hint:
            lines.append(f"  = help: {self.hint}")
        return "\n".join(lines)
