"""i18nvalidator - Locale-aware date/time validation.

Checks whether a string is a date/time written the way a locale writes it,
using CLDR data from Babel and a non-lenient parse that must consume the
whole input.

Public API:
    DateTimeValidator - Configurable validator (locale, styles, timezone,
        calendar, pattern) with recorded failure messages
    AbstractValidator - Base class for option-driven validators
    DateFormatter - Babel-backed locale-aware formatter and positional parser
    DateTimeStyle, CalendarKind - Configuration enumerations
    DefaultsProvider, SystemDefaults, FixedDefaults - Default locale/timezone sources

Exceptions:
    ValidatorError - Base exception class
    InvalidConfigurationError - Unusable locale, timezone, pattern or option value
    UnknownOptionError - Option key without a setter

Example:
    >>> from i18nvalidator import DateTimeValidator, DateTimeStyle
    >>> validator = DateTimeValidator(locale="de_DE", date_format=DateTimeStyle.MEDIUM)
    >>> validator.is_valid("03.06.2014")
    True
"""

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

from .defaults import DefaultsProvider, FixedDefaults, SystemDefaults
from .diagnostics import InvalidConfigurationError, UnknownOptionError, ValidatorError
from .enums import CalendarKind, DateTimeStyle
from .formatting import DateFormatter, FormatterStatus, ParseResult
from .validator import AbstractValidator, DateTimeValidator

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
try:
    __version__ = _get_version("i18nvalidator")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "AbstractValidator",
    "CalendarKind",
    "DateFormatter",
    "DateTimeStyle",
    "DateTimeValidator",
    "DefaultsProvider",
    "FixedDefaults",
    "FormatterStatus",
    "InvalidConfigurationError",
    "ParseResult",
    "SystemDefaults",
    "UnknownOptionError",
    "ValidatorError",
    "__version__",
]
