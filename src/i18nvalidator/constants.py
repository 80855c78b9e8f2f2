"""Shared constants for i18nvalidator.

Python 3.11+. Zero external dependencies.
"""

__all__ = [
    "DEFAULT_PATTERN",
    "FALLBACK_LOCALE",
    "FALLBACK_TIMEZONE",
    "MAX_LOCALE_CACHE_SIZE",
    "TWO_DIGIT_YEAR_LOOKBACK",
    "UNLIMITED_MESSAGE_LENGTH",
    "VALUE_OBSCURE_CHAR",
]

# ============================================================================
# LOCALE / TIMEZONE DEFAULTS
# ============================================================================

# Used when neither Babel nor the environment yields a usable locale.
FALLBACK_LOCALE: str = "en_US"

# Used when the process timezone cannot be identified by name.
FALLBACK_TIMEZONE: str = "UTC"

# Maximum number of parsed Babel Locale objects kept by get_babel_locale().
MAX_LOCALE_CACHE_SIZE: int = 128

# ============================================================================
# FORMATTER
# ============================================================================

# Pattern used when both date and time styles are NONE and no explicit
# pattern is configured. Same fallback as ICU's SimpleDateFormat.
DEFAULT_PATTERN: str = "yyyyMMdd hh:mm a"

# Two-digit years resolve into the 100-year window starting this many years
# before the current year (ICU's default century).
TWO_DIGIT_YEAR_LOOKBACK: int = 80

# ============================================================================
# VALIDATOR MESSAGES
# ============================================================================

# message_length value meaning "never truncate".
UNLIMITED_MESSAGE_LENGTH: int = -1

# Replacement character for %value% when value_obscured is enabled.
VALUE_OBSCURE_CHAR: str = "*"
