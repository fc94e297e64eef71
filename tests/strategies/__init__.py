"""Hypothesis strategies for intlformat property-based testing.

Strategies are organized by domain:

- icu: argument names, literal text and whole Message ASTs

Usage:
    from tests.strategies import icu_messages, argument_names
"""

from .icu import argument_names, icu_messages, literal_text, select_keys

__all__ = [
    "argument_names",
    "icu_messages",
    "literal_text",
    "select_keys",
]
