"""Formatting runtime package.

Provides message evaluation, Babel-backed formatters, the format cache and
the relative-time scheduler. Depends on syntax package for compiled messages.

Python 3.13+.
"""

from .cache import FormatCache
from .evaluator import MessageEvaluator, evaluate
from .formats import DEFAULT_FORMATS, Formats, get_named_format, merge_formats
from .formatters import (
    DateTimeFormatter,
    NumberFormatter,
    RelativeTimeFormatter,
    get_datetime_formatter,
    get_number_formatter,
    get_relative_formatter,
)
from .plural_rules import select_plural_category
from .relative import coerce_instant, select_units, to_epoch_ms, unit_delay_ms
from .scheduler import RelativeTimeScheduler, compute_delay_ms, schedule_relative_update
from .value_types import Fragments, IntlValue, Renderer, is_rich_content, render_text

__all__ = [
    "DEFAULT_FORMATS",
    "DateTimeFormatter",
    "FormatCache",
    "Formats",
    "Fragments",
    "IntlValue",
    "MessageEvaluator",
    "NumberFormatter",
    "RelativeTimeFormatter",
    "RelativeTimeScheduler",
    "Renderer",
    "coerce_instant",
    "compute_delay_ms",
    "evaluate",
    "get_datetime_formatter",
    "get_named_format",
    "get_number_formatter",
    "get_relative_formatter",
    "is_rich_content",
    "merge_formats",
    "render_text",
    "schedule_relative_update",
    "select_plural_category",
    "select_units",
    "to_epoch_ms",
    "unit_delay_ms",
]
