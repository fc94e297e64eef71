"""Named format tables.

A formats table maps a formatter kind to named option sets::

    {
        "number": {"usd": {"style": "currency", "currency": "USD"}},
        "date": {"short": {"style": "short"}},
        "time": {...},
        "relative": {"hours": {"units": "hour"}},
    }

Templates refer to these by name (``{total, number, usd}``) and so do the
facade methods (``format_number(value, "usd")``).

Python 3.13+. Zero external dependencies.
"""

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from intlformat.diagnostics import ErrorTemplate

__all__ = [
    "DEFAULT_FORMATS",
    "FORMAT_KINDS",
    "FormatOptions",
    "Formats",
    "get_named_format",
    "merge_formats",
]

logger = logging.getLogger(__name__)

type FormatOptions = Mapping[str, Any]
type Formats = Mapping[str, Mapping[str, FormatOptions]]

FORMAT_KINDS: tuple[str, ...] = ("number", "date", "time", "relative")

DEFAULT_FORMATS: Formats = MappingProxyType({
    "number": MappingProxyType({
        "integer": MappingProxyType({"maximum_fraction_digits": 0}),
        "currency": MappingProxyType({"style": "currency"}),
        "percent": MappingProxyType({"style": "percent"}),
    }),
    "date": MappingProxyType({
        "short": MappingProxyType({"style": "short"}),
        "medium": MappingProxyType({"style": "medium"}),
        "long": MappingProxyType({"style": "long"}),
        "full": MappingProxyType({"style": "full"}),
    }),
    "time": MappingProxyType({
        "short": MappingProxyType({"style": "short"}),
        "medium": MappingProxyType({"style": "medium"}),
        "long": MappingProxyType({"style": "long"}),
        "full": MappingProxyType({"style": "full"}),
    }),
    "relative": MappingProxyType({}),
})


def merge_formats(defaults: Formats, overrides: Formats | None) -> Formats:
    """Merge two formats tables kind by kind; names in overrides win.

    Example:
        >>> merged = merge_formats(DEFAULT_FORMATS, {"number": {"usd": {"style": "currency"}}})
        >>> sorted(merged["number"])
        ['currency', 'integer', 'percent', 'usd']
    """
    if not overrides:
        return defaults
    kinds = dict.fromkeys([*defaults, *overrides])
    return {
        kind: {**defaults.get(kind, {}), **overrides.get(kind, {})}
        for kind in kinds
    }


def get_named_format(formats: Formats, kind: str, name: str | None) -> FormatOptions:
    """Look up named options; unknown names log a warning and yield defaults.

    Args:
        formats: Merged formats table
        kind: "number", "date", "time" or "relative"
        name: Format name, or None for the formatter's defaults

    Returns:
        Options mapping (empty when name is None or unknown)
    """
    if name is None:
        return {}
    options = formats.get(kind, {}).get(name)
    if options is None:
        logger.warning("%s", ErrorTemplate.unknown_format_style(kind, name).message)
        return {}
    return options
