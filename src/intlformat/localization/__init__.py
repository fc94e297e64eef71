"""Locale context and message formatting API.

Submodules:
    descriptors - MessageDescriptor, define_messages
    config      - IntlConfig, intl_provider, current_config
    resolver    - FallbackResolver (five-step fallback chain), FallbackInfo
    intl        - IntlFormatter facade, format_message

Python 3.13+. Uses Babel for i18n (via the runtime package).
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability

from intlformat.localization.config import IntlConfig, current_config, intl_provider
from intlformat.localization.descriptors import MessageDescriptor, define_messages
from intlformat.localization.intl import IntlFormatter, format_message, get_shared_cache
from intlformat.localization.resolver import FallbackInfo, FallbackResolver

__all__ = [
    # Descriptors
    "MessageDescriptor",
    "define_messages",
    # Locale context
    "IntlConfig",
    "current_config",
    "intl_provider",
    # Formatting
    "IntlFormatter",
    "FallbackResolver",
    "format_message",
    "get_shared_cache",
    # Fallback observability
    "FallbackInfo",
]
