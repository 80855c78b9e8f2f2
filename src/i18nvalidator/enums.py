"""Enumerations for i18nvalidator type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, so option values such as "full" or
"gregorian" coerce directly: DateTimeStyle("full") is DateTimeStyle.FULL.

Python 3.11+.
"""

from enum import StrEnum

__all__ = [
    "CalendarKind",
    "DateTimeStyle",
]


class DateTimeStyle(StrEnum):
    """CLDR date/time format style.

    Values match the style keys of Babel's ``Locale.date_formats``,
    ``Locale.time_formats`` and ``Locale.datetime_formats``.
    """

    NONE = "none"
    """No date (or time) component."""

    SHORT = "short"
    """Numeric form: 6/3/14"""

    MEDIUM = "medium"
    """Abbreviated form: Jun 3, 2014"""

    LONG = "long"
    """Long form: June 3, 2014"""

    FULL = "full"
    """Complete form: Tuesday, June 3, 2014"""


class CalendarKind(StrEnum):
    """Calendar system used to interpret date fields."""

    GREGORIAN = "gregorian"
    """Proleptic Gregorian calendar."""

    TRADITIONAL = "traditional"
    """The locale's traditional calendar (rendered as Gregorian by Babel)."""
