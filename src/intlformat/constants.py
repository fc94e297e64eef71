"""Shared constants for intlformat.

Centralized configuration constants used across the syntax, runtime and
localization packages. Placing them here avoids circular imports.

Constants are grouped by domain:
- Depth limits: Recursion protection for compilation and evaluation
- Locale defaults: Fallback locale and cache bounds
- Relative time: Unit lengths and timer limits for the re-render scheduler

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Depth limits
    "MAX_DEPTH",
    # Locale defaults
    "DEFAULT_LOCALE",
    "MAX_LOCALE_CACHE_SIZE",
    # Relative time
    "SECOND_MS",
    "MINUTE_MS",
    "HOUR_MS",
    "DAY_MS",
    "MONTH_THRESHOLD_MS",
    "YEAR_THRESHOLD_MS",
    "MAX_TIMER_DELAY_MS",
    "DEFAULT_UPDATE_INTERVAL_MS",
]

# ============================================================================
# DEPTH LIMITS
# ============================================================================

# Maximum nesting of plural/select arguments inside each other.
# Used by: compiler (nesting check in syntax.parser).
# Real templates rarely nest more than three levels; 100 is clearly malformed.
MAX_DEPTH: int = 100

# ============================================================================
# LOCALE DEFAULTS
# ============================================================================

# Locale used when a configuration names no locale and no default locale.
DEFAULT_LOCALE: str = "en"

# Maximum cached Babel Locale objects (see locale_utils.get_babel_locale).
MAX_LOCALE_CACHE_SIZE: int = 128

# ============================================================================
# RELATIVE TIME
# ============================================================================

SECOND_MS: int = 1000
MINUTE_MS: int = 60 * SECOND_MS
HOUR_MS: int = 60 * MINUTE_MS
DAY_MS: int = 24 * HOUR_MS

# Deltas at or beyond these switch the displayed unit to month / year.
MONTH_THRESHOLD_MS: int = 30 * DAY_MS
YEAR_THRESHOLD_MS: int = 365 * DAY_MS

# Largest delay a host timer accepts (signed 32-bit milliseconds).
MAX_TIMER_DELAY_MS: int = 2_147_483_647

# Re-render interval used by relative-time bindings unless overridden.
DEFAULT_UPDATE_INTERVAL_MS: int = 10 * SECOND_MS
