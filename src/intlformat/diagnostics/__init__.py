"""Diagnostic system for intlformat errors.

Provides structured error diagnostics with codes, spans, and hints.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, SourceSpan
from .errors import (
    ArgumentTypeError,
    FormatterConstructionError,
    FormattingError,
    IntlError,
    MessageSyntaxError,
    MissingValueError,
)
from .templates import ErrorTemplate

__all__ = [
    "ArgumentTypeError",
    "Diagnostic",
    "DiagnosticCode",
    "ErrorTemplate",
    "FormatterConstructionError",
    "FormattingError",
    "IntlError",
    "MessageSyntaxError",
    "MissingValueError",
    "SourceSpan",
]
