"""intlformat - locale-aware ICU message formatting with fallback resolution.

Formats ICU message templates, numbers, dates, times, plurals and relative
times for a locale context, using Babel's CLDR data. Message formatting never
fails in production: a five-step fallback chain ends at the message id.

Public API:
    MessageDescriptor - Message id + default template
    IntlConfig / intl_provider - Locale context and nested providers
    IntlFormatter - Formatting facade for one locale context
    format_message - Format with the current provider's config
    compile_message / serialize_message - ICU template <-> AST
    RelativeTimeScheduler / schedule_relative_update - Relative-time re-render timer

Exceptions:
    IntlError - Base exception class
    MessageSyntaxError - Malformed template
    MissingValueError - Argument not supplied
    ArgumentTypeError - Value of the wrong type for its argument
    FormatterConstructionError - Invalid formatter options
    FormattingError - Babel failed to format a value

Submodules:
    intlformat.syntax - Compiler, AST node types, serializer
    intlformat.runtime - Evaluator, formatters, cache, scheduler
    intlformat.localization - Config, resolver, facade
    intlformat.bindings - Declarative Formatted* bindings
    intlformat.diagnostics - Error types and diagnostics
"""

from .diagnostics import (
    ArgumentTypeError,
    FormatterConstructionError,
    FormattingError,
    IntlError,
    MessageSyntaxError,
    MissingValueError,
)
from .localization import (
    FallbackResolver,
    IntlConfig,
    IntlFormatter,
    MessageDescriptor,
    current_config,
    define_messages,
    format_message,
    intl_provider,
)
from .runtime import FormatCache, RelativeTimeScheduler, schedule_relative_update
from .syntax import compile_message, serialize_message

# Version information - Auto-populated from package metadata
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("intlformat")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "ArgumentTypeError",
    "FallbackResolver",
    "FormatCache",
    "FormatterConstructionError",
    "FormattingError",
    "IntlConfig",
    "IntlError",
    "IntlFormatter",
    "MessageDescriptor",
    "MessageSyntaxError",
    "MissingValueError",
    "RelativeTimeScheduler",
    "__version__",
    "compile_message",
    "current_config",
    "define_messages",
    "format_message",
    "intl_provider",
    "schedule_relative_update",
    "serialize_message",
]
