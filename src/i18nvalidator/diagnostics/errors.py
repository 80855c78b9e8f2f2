"""Validator exception hierarchy.

Data-quality problems (wrong type, unparseable date) are never raised: they
are recorded on the validator. Exceptions signal programmer or configuration
mistakes and always propagate to the caller.

Python 3.11+. Zero external dependencies.
"""

__all__ = [
    "InvalidConfigurationError",
    "UnknownOptionError",
    "ValidatorError",
]


class ValidatorError(Exception):
    """Base exception for all i18nvalidator errors."""


class InvalidConfigurationError(ValidatorError):
    """Validator configuration is unusable.

    Raised for locales Babel cannot load, unknown timezones, unsupported
    pattern fields and out-of-domain option values.

    Attributes:
        option: Name of the offending option ("" if not tied to one option)
        value: The rejected value
    """

    def __init__(self, message: str, *, option: str = "", value: object = None) -> None:
        """Initialize InvalidConfigurationError.

        Args:
            message: Error message (see ErrorTemplate)
            option: Name of the offending option
            value: The rejected value
        """
        super().__init__(message)
        self.option = option
        self.value = value


class UnknownOptionError(InvalidConfigurationError):
    """Option key has no matching setter on the validator.

    Example:
        >>> DateTimeValidator({"colour": "red"})
        Traceback (most recent call last):
        UnknownOptionError: Unknown option 'colour' for DateTimeValidator
    """
