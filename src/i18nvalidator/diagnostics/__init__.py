"""Exception types and error message templates.

Python 3.11+. Zero external dependencies.
"""

from .errors import InvalidConfigurationError, UnknownOptionError, ValidatorError
from .templates import ErrorTemplate

__all__ = [
    "ErrorTemplate",
    "InvalidConfigurationError",
    "UnknownOptionError",
    "ValidatorError",
]
