"""Locale-aware date/time string validator.

DateTimeValidator accepts a string only if a non-lenient DateFormatter built
from the validator's configuration parses it completely: a parse that stops
before the end of the input is a failure.

The formatter is built lazily and cached. Every setter marks it stale; the
next validation (or read-back getter) rebuilds it.

Getter read policy:
    get_calendar(), get_timezone() and get_pattern() return the value read
    back from the live formatter while it is up to date, and the stored
    configuration while it is stale. get_locale(), get_date_format() and
    get_time_format() always return the stored configuration.

Python 3.11+.
"""

from __future__ import annotations

import logging
from enum import StrEnum
from typing import Any, ClassVar, Self, TypeVar

from i18nvalidator.defaults import DefaultsProvider, SystemDefaults
from i18nvalidator.diagnostics import ErrorTemplate, InvalidConfigurationError
from i18nvalidator.enums import CalendarKind, DateTimeStyle
from i18nvalidator.formatting import DateFormatter, FormatterStatus

from .base import AbstractValidator, Options

__all__ = ["DateTimeValidator"]

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=StrEnum)


def _coerce_enum(enum_type: type[E], option: str, value: Any) -> E | None:
    if value is None:
        return None
    try:
        return enum_type(value)
    except ValueError:
        allowed = tuple(member.value for member in enum_type)
        raise InvalidConfigurationError(
            ErrorTemplate.invalid_option_value(option, value, allowed),
            option=option,
            value=value,
        ) from None


def _check_optional_str(option: str, value: Any) -> str | None:
    if value is not None and not isinstance(value, str):
        raise InvalidConfigurationError(
            ErrorTemplate.invalid_option_type(option, value, "str or None"),
            option=option,
            value=value,
        )
    return value


class DateTimeValidator(AbstractValidator):
    """Validate that a string is a date/time in the configured locale format.

    Examples:
        >>> validator = DateTimeValidator(
        ...     {"locale": "en_US", "date_format": DateTimeStyle.FULL, "timezone": "UTC"}
        ... )
        >>> validator.is_valid("Tuesday, June 3, 2014")
        True
        >>> validator.is_valid("Tuesday, June 3, 2014 garbage")
        False
        >>> validator.get_errors()
        ('datetimeInvalidDateTime',)

        >>> DateTimeValidator(pattern="yyyy-MM-dd", timezone="UTC").is_valid("2014-02-30")
        False

    Options:
        locale, date_format, time_format, timezone, calendar, pattern, plus
        the options of AbstractValidator.

    Raises (from is_valid):
        InvalidConfigurationError: If the configured locale, timezone or
            pattern cannot be used. Invalid input data never raises.
    """

    INVALID: ClassVar[str] = "datetimeInvalid"
    INVALID_DATETIME: ClassVar[str] = "datetimeInvalidDateTime"

    message_templates: ClassVar[dict[str, str]] = {
        INVALID: "Invalid type given. String expected",
        INVALID_DATETIME: "The input does not appear to be a valid datetime",
    }

    def __init__(
        self,
        options: Options | None = None,
        *,
        defaults: DefaultsProvider | None = None,
        **kwargs: Any,
    ) -> None:
        """Initialize DateTimeValidator.

        Args:
            options: Mapping or iterable of (key, value) pairs
            defaults: Source of the default locale and timezone
                (SystemDefaults when omitted)
            **kwargs: Further options, applied after ``options``
        """
        self._defaults: DefaultsProvider = defaults if defaults is not None else SystemDefaults()
        self._locale: str | None = None
        self._date_format: DateTimeStyle | None = None
        self._time_format: DateTimeStyle | None = None
        self._timezone: str | None = None
        self._calendar: CalendarKind | None = None
        self._pattern: str | None = None
        self._formatter: DateFormatter | None = None
        # No formatter yet, so nothing is up to date
        self._invalidate_formatter = True
        super().__init__(options, **kwargs)

    # ------------------------------------------------------------------
    # Locale
    # ------------------------------------------------------------------

    def set_locale(self, locale: str | None) -> Self:
        self._locale = _check_optional_str("locale", locale)
        self._invalidate_formatter = True
        return self

    def get_locale(self) -> str:
        """Configured locale, or the provider's default locale if none is set."""
        if self._locale is None:
            self._locale = self._defaults.default_locale()
        return self._locale

    # ------------------------------------------------------------------
    # Styles
    # ------------------------------------------------------------------

    def set_date_format(self, style: DateTimeStyle | str | None) -> Self:
        self._date_format = _coerce_enum(DateTimeStyle, "date_format", style)
        self._invalidate_formatter = True
        return self

    def get_date_format(self) -> DateTimeStyle:
        if self._date_format is None:
            self._date_format = DateTimeStyle.NONE
        return self._date_format

    def set_time_format(self, style: DateTimeStyle | str | None) -> Self:
        self._time_format = _coerce_enum(DateTimeStyle, "time_format", style)
        self._invalidate_formatter = True
        return self

    def get_time_format(self) -> DateTimeStyle:
        if self._time_format is None:
            self._time_format = DateTimeStyle.NONE
        return self._time_format

    # ------------------------------------------------------------------
    # Formatter-backed settings
    # ------------------------------------------------------------------

    def set_timezone(self, timezone: str | None) -> Self:
        self._timezone = _check_optional_str("timezone", timezone)
        self._invalidate_formatter = True
        return self

    def get_timezone(self) -> str:
        """Timezone id of the live formatter, or the configured/default timezone."""
        if self._timezone is None:
            self._timezone = self._defaults.default_timezone()
        if not self._invalidate_formatter:
            return self._get_formatter().timezone_id
        return self._timezone

    def set_calendar(self, calendar: CalendarKind | str | None) -> Self:
        self._calendar = _coerce_enum(CalendarKind, "calendar", calendar)
        self._invalidate_formatter = True
        return self

    def get_calendar(self) -> CalendarKind:
        if self._calendar is None:
            self._calendar = CalendarKind.GREGORIAN
        if not self._invalidate_formatter:
            return self._get_formatter().calendar
        return self._calendar

    def set_pattern(self, pattern: str | None) -> Self:
        self._pattern = _check_optional_str("pattern", pattern)
        self._invalidate_formatter = True
        return self

    def get_pattern(self) -> str | None:
        """Effective pattern of the live formatter, or the configured pattern."""
        if not self._invalidate_formatter:
            formatter = self._get_formatter()
            # A formatter that failed to build never derived a pattern
            if formatter.status is not FormatterStatus.ILLEGAL_ARGUMENT_ERROR:
                return formatter.pattern
        return self._pattern

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def is_valid(self, value: Any) -> bool:
        """Return True if value is a string fully matching the configured format.

        Raises:
            InvalidConfigurationError: If the formatter cannot be built from
                the current configuration.
        """
        if not isinstance(value, str):
            self._clear_messages()
            self.error(self.INVALID, value)
            return False

        self._set_value(value)

        formatter = self._get_formatter()
        # Parse failures also leave a failure status; only construction failures are fatal
        if formatter.status is FormatterStatus.ILLEGAL_ARGUMENT_ERROR:
            if formatter.locale_failure:
                raise InvalidConfigurationError(
                    ErrorTemplate.invalid_locale(self.get_locale()),
                    option="locale",
                    value=self.get_locale(),
                )
            raise InvalidConfigurationError(formatter.error_message)

        result = formatter.parse(value, 0)
        if result.status.is_failure:
            self.error(self.INVALID_DATETIME)
            return False

        if result.position != len(value):
            self.error(self.INVALID_DATETIME)
            return False

        return True

    def _get_formatter(self) -> DateFormatter:
        """Return the cached non-lenient formatter, rebuilding it when stale."""
        if self._formatter is None or self._invalidate_formatter:
            # Read stored fields, not the read-back getters
            if self._calendar is None:
                self._calendar = CalendarKind.GREGORIAN
            if self._timezone is None:
                self._timezone = self._defaults.default_timezone()
            formatter = DateFormatter(
                self.get_locale(),
                self.get_date_format(),
                self.get_time_format(),
                self._timezone,
                self._calendar,
                self._pattern,
            )
            formatter.lenient = False
            logger.debug("Rebuilt date formatter: %r", formatter)

            self._formatter = formatter
            self._invalidate_formatter = False

        return self._formatter

    def __repr__(self) -> str:
        return (
            f"DateTimeValidator(locale={self._locale!r}, date_format={self._date_format!r}, "
            f"time_format={self._time_format!r}, timezone={self._timezone!r}, "
            f"calendar={self._calendar!r}, pattern={self._pattern!r})"
        )
