"""ICU message syntax package.

Provides the compiler, AST definitions, and serialization.
Separate from runtime to enable tooling (linters, extractors, formatters).

Python 3.13+.
"""

from .ast import (
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
from .cursor import Cursor, ParseResult
from .introspection import extract_argument_names
from .parser import compile_message
from .serializer import serialize_message

__all__ = [
    "OTHER",
    "Argument",
    "Case",
    "CaseKey",
    "Cursor",
    "Element",
    "ExactKey",
    "Literal",
    "Message",
    "ParseResult",
    "Plural",
    "Pound",
    "Select",
    "compile_message",
    "extract_argument_names",
    "serialize_message",
]
