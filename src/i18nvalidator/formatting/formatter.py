"""Locale-aware date/time parser and formatter backed by Babel.

DateFormatter is built from (locale, date style, time style, timezone,
calendar, pattern). Formatting delegates to ``babel.dates.format_datetime``;
parsing compiles the same CLDR pattern against Babel's locale data (see
``i18nvalidator.formatting.pattern``) so that anything Babel formats can be
parsed back.

Error reporting follows the status-code model of ICU formatters: construction
never raises for bad configuration. Instead ``status`` records the failure and
``error_message`` describes it. Each ``parse()`` call updates ``status``.

Lenient vs non-lenient parsing:
    Non-lenient (``lenient = False``) literals match exactly, field values are
    range-checked and dates that do not exist ("2014-02-30") fail.
    Lenient (the default, as in ICU) literals match case-insensitively with
    flexible whitespace, and out-of-range values roll over (February 30 ->
    March 2).

Thread Safety:
    Not thread-safe when ``lenient`` is reassigned concurrently with parsing.
    Parsing and formatting on a formatter that is no longer mutated are safe.

Python 3.11+. Uses Babel for CLDR data.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from enum import Enum
from functools import partial
from typing import TYPE_CHECKING

from babel import UnknownLocaleError
from babel import dates as babel_dates

from i18nvalidator.constants import DEFAULT_PATTERN, TWO_DIGIT_YEAR_LOOKBACK
from i18nvalidator.diagnostics import ErrorTemplate, InvalidConfigurationError
from i18nvalidator.enums import CalendarKind, DateTimeStyle
from i18nvalidator.locale_utils import (
    get_babel_locale,
    get_system_timezone,
    normalize_locale,
    timezone_name,
)

from .pattern import (
    CompiledPattern,
    FieldKind,
    PatternError,
    Vocabulary,
    compile_pattern,
    parse_offset,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from babel import Locale

__all__ = ["DateFormatter", "FormatterStatus", "ParseResult"]

logger = logging.getLogger(__name__)

# Timezone identifiers given as raw offsets: "+02:00", "GMT-5", "UTC+0530"
_OFFSET_ZONE = re.compile(r"(?:GMT|UTC)?([+-])(\d{1,2})(?::?(\d{2}))?", re.IGNORECASE)

_MONTH_WIDTHS: tuple[str, ...] = ("abbreviated", "wide")
_DAY_WIDTHS: tuple[str, ...] = ("abbreviated", "wide", "short")
_ERA_WIDTHS: tuple[str, ...] = ("abbreviated", "wide")
_QUARTER_WIDTHS: tuple[str, ...] = ("abbreviated", "wide")
_CONTEXTS: tuple[str, ...] = ("format", "stand-alone")


class FormatterStatus(Enum):
    """Outcome of the last formatter operation.

    Numeric values mirror the ICU UErrorCode constants of the same name.
    """

    ZERO_ERROR = 0
    ILLEGAL_ARGUMENT_ERROR = 1
    PARSE_ERROR = 9

    @property
    def is_failure(self) -> bool:
        """True for every status except ZERO_ERROR."""
        return self is not FormatterStatus.ZERO_ERROR


@dataclass(frozen=True, slots=True)
class ParseResult:
    """Result of DateFormatter.parse().

    Attributes:
        value: Parsed timezone-aware datetime, None on failure
        position: Index just past the consumed text (the start index on failure)
        status: ZERO_ERROR on success, PARSE_ERROR or ILLEGAL_ARGUMENT_ERROR otherwise
    """

    value: datetime | None
    position: int
    status: FormatterStatus


def _localize(naive: datetime, zone: tzinfo) -> datetime:
    # pytz zones need localize(); zoneinfo and fixed offsets take replace()
    localize: Callable[[datetime], datetime] | None = getattr(zone, "localize", None)
    if localize is not None:
        return localize(naive)
    return naive.replace(tzinfo=zone)


def _resolve_timezone(zone: str) -> tuple[tzinfo, str]:
    """Turn a timezone identifier into (tzinfo, canonical id).

    Raises:
        LookupError: Unknown zone name
        ValueError: Malformed zone name or offset out of range
    """
    match = _OFFSET_ZONE.fullmatch(zone.strip())
    if match is not None:
        sign, hours_text, minutes_text = match.groups()
        hours, minutes = int(hours_text), int(minutes_text or 0)
        if hours > 18 or minutes > 59:
            raise ValueError(ErrorTemplate.unknown_timezone(zone))
        seconds = (hours * 3600 + minutes * 60) * (-1 if sign == "-" else 1)
        if seconds == 0:
            return timezone(timedelta(0), "GMT"), "GMT"
        zone_id = f"GMT{sign}{hours:02d}:{minutes:02d}"
        return timezone(timedelta(seconds=seconds), zone_id), zone_id

    resolved = babel_dates.get_timezone(zone)
    return resolved, timezone_name(resolved) or zone


def _build_vocabulary(locale: Locale, zone: tzinfo, zone_id: str) -> Vocabulary:
    months: dict[str, int] = {}
    weekdays: dict[str, int] = {}
    eras: dict[str, int] = {}
    quarters: dict[str, int] = {}
    periods: dict[str, str] = {}
    day_periods: set[str] = set()

    for context in _CONTEXTS:
        for width in _MONTH_WIDTHS:
            for number, name in locale.months.get(context, {}).get(width, {}).items():
                months.setdefault(name.lower(), number)
        for width in _DAY_WIDTHS:
            for number, name in locale.days.get(context, {}).get(width, {}).items():
                weekdays.setdefault(name.lower(), number)
        for width_names in locale.day_periods.get(context, {}).values():
            for key, name in width_names.items():
                if key in ("am", "pm"):
                    periods.setdefault(name.lower(), key)
                day_periods.add(name)
        for width in _QUARTER_WIDTHS:
            for number, name in locale.quarters.get(context, {}).get(width, {}).items():
                quarters.setdefault(name.lower(), number)

    for width in _ERA_WIDTHS:
        for index, name in locale.eras.get(width, {}).items():
            eras.setdefault(name.lower(), index)

    gmt_format = locale.zone_formats.get("gmt", "GMT%s")
    return Vocabulary(
        months=months,
        weekdays=weekdays,
        eras=eras,
        quarters=quarters,
        periods=periods,
        day_periods=tuple(sorted(day_periods)),
        zone_names=_zone_names(locale, zone, zone_id),
        gmt_prefix=gmt_format.split("%s", 1)[0] or "GMT",
    )


def _zone_names(locale: Locale, zone: tzinfo, zone_id: str) -> tuple[str, ...]:
    """Collect every display name Babel may render for the configured zone.

    Specific names are sampled in January and July so that both standard
    and daylight names are covered in either hemisphere.
    """
    year = datetime.now(timezone.utc).year
    samples = [_localize(datetime(year, 1, 15, 12), zone), _localize(datetime(year, 7, 15, 12), zone)]

    lookups: list[Callable[[], str]] = []
    for sample in samples:
        for width in ("short", "long"):
            lookups.append(partial(babel_dates.get_timezone_name, sample, width, locale=locale))
    for width in ("short", "long"):
        lookups.append(partial(babel_dates.get_timezone_name, zone, width, locale=locale))
    lookups.append(partial(babel_dates.get_timezone_name, zone, locale=locale, return_zone=True))
    lookups.append(partial(babel_dates.get_timezone_location, zone, locale=locale))
    lookups.append(
        partial(babel_dates.get_timezone_location, zone, locale=locale, return_city=True)
    )

    names = {zone_id}
    for lookup in lookups:
        try:
            names.add(lookup())
        except (AttributeError, LookupError, TypeError, ValueError) as e:
            logger.debug("Babel has no display name for timezone %s: %s", zone_id, e)
    return tuple(sorted(name for name in names if name))


class DateFormatter:
    """Locale-aware date/time formatter and positional parser.

    Examples:
        >>> fmt = DateFormatter("en_US", DateTimeStyle.FULL, DateTimeStyle.NONE, "UTC")
        >>> fmt.pattern
        'EEEE, MMMM d, y'
        >>> fmt.lenient = False
        >>> result = fmt.parse("Tuesday, June 3, 2014 garbage")
        >>> result.position, result.status.is_failure
        (21, False)

        >>> broken = DateFormatter("not-a-real-locale!!")
        >>> broken.status
        <FormatterStatus.ILLEGAL_ARGUMENT_ERROR: 1>
    """

    __slots__ = (
        "_babel_locale",
        "_calendar",
        "_compiled",
        "_date_style",
        "_error_message",
        "_lenient",
        "_locale_code",
        "_locale_failure",
        "_pattern",
        "_status",
        "_time_style",
        "_timezone_id",
        "_two_digit_year_start",
        "_tzinfo",
        "_vocabulary",
    )

    def __init__(
        self,
        locale: str,
        date_style: DateTimeStyle | str = DateTimeStyle.NONE,
        time_style: DateTimeStyle | str = DateTimeStyle.NONE,
        timezone_id: str | None = None,
        calendar: CalendarKind | str = CalendarKind.GREGORIAN,
        pattern: str | None = None,
    ) -> None:
        """Initialize DateFormatter.

        Args:
            locale: Locale identifier (BCP-47 or POSIX)
            date_style: Date style, ignored when pattern is given
            time_style: Time style, ignored when pattern is given
            timezone_id: IANA zone name or UTC offset; None for the system zone
            calendar: Calendar kind
            pattern: Explicit CLDR pattern overriding the styles

        Raises:
            ValueError: If date_style, time_style or calendar is not a member
                of its enumeration.
        """
        self._locale_code = locale
        self._date_style = DateTimeStyle(date_style)
        self._time_style = DateTimeStyle(time_style)
        self._calendar = CalendarKind(calendar)
        self._timezone_id = timezone_id if timezone_id is not None else get_system_timezone()
        self._pattern = pattern or ""
        self._lenient = True
        self._status = FormatterStatus.ZERO_ERROR
        self._error_message = ""
        self._locale_failure = False
        self._babel_locale: Locale | None = None
        self._tzinfo: tzinfo | None = None
        self._compiled: CompiledPattern | None = None
        self._vocabulary = Vocabulary()
        self._two_digit_year_start = datetime.now(timezone.utc).year - TWO_DIGIT_YEAR_LOOKBACK
        self._setup()

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    def _setup(self) -> None:
        try:
            self._babel_locale = get_babel_locale(self._locale_code)
        except (UnknownLocaleError, ValueError, TypeError) as e:
            self._fail(ErrorTemplate.invalid_locale(self._locale_code), e, locale_failure=True)
            return

        try:
            self._tzinfo, self._timezone_id = _resolve_timezone(self._timezone_id)
        except (LookupError, ValueError) as e:
            self._fail(ErrorTemplate.unknown_timezone(self._timezone_id), e)
            return

        if not self._pattern:
            try:
                self._pattern = self._derive_pattern(self._babel_locale)
            except KeyError as e:
                self._fail(str(e.args[0]) if e.args else repr(e), e)
                return

        self._vocabulary = _build_vocabulary(self._babel_locale, self._tzinfo, self._timezone_id)
        self._compile()

    def _derive_pattern(self, locale: Locale) -> str:
        date_style, time_style = self._date_style, self._time_style
        if date_style is DateTimeStyle.NONE and time_style is DateTimeStyle.NONE:
            return DEFAULT_PATTERN

        date_pattern = time_pattern = None
        if date_style is not DateTimeStyle.NONE:
            date_pattern = self._style_pattern(locale.date_formats, "date", date_style)
        if time_style is not DateTimeStyle.NONE:
            time_pattern = self._style_pattern(locale.time_formats, "time", time_style)
        if time_pattern is None:
            return date_pattern  # type: ignore[return-value]
        if date_pattern is None:
            return time_pattern

        # CLDR dateTimeFormat glue: {1} is the date, {0} the time
        glue = self._style_pattern(locale.datetime_formats, "datetime", date_style)
        return glue.replace("{0}", time_pattern).replace("{1}", date_pattern)

    def _style_pattern(self, formats: object, kind: str, style: DateTimeStyle) -> str:
        try:
            entry = formats[style.value]  # type: ignore[index]
        except KeyError:
            raise KeyError(
                ErrorTemplate.missing_style_pattern(kind, style.value, self._locale_code)
            ) from None
        return str(getattr(entry, "pattern", entry))

    def _compile(self) -> None:
        try:
            self._compiled = compile_pattern(
                self._pattern, self._vocabulary, lenient=self._lenient
            )
        except PatternError as e:
            self._compiled = None
            self._fail(str(e), e)

    def _fail(self, message: str, cause: Exception, *, locale_failure: bool = False) -> None:
        self._status = FormatterStatus.ILLEGAL_ARGUMENT_ERROR
        self._error_message = message
        self._locale_failure = locale_failure
        logger.warning("Date formatter configuration rejected: %s (%s)", message, cause)

    # ------------------------------------------------------------------
    # Read-back accessors
    # ------------------------------------------------------------------

    @property
    def locale(self) -> str:
        """Effective locale identifier (POSIX form), or the rejected input."""
        if self._babel_locale is None:
            return normalize_locale(self._locale_code)
        return str(self._babel_locale)

    @property
    def date_style(self) -> DateTimeStyle:
        return self._date_style

    @property
    def time_style(self) -> DateTimeStyle:
        return self._time_style

    @property
    def calendar(self) -> CalendarKind:
        return self._calendar

    @property
    def pattern(self) -> str:
        """Effective CLDR pattern (derived from the styles when none was given)."""
        return self._pattern

    @property
    def timezone_id(self) -> str:
        """Canonical timezone identifier ("Europe/Riga", "GMT+02:00")."""
        return self._timezone_id

    @property
    def tzinfo(self) -> tzinfo | None:
        return self._tzinfo

    @property
    def lenient(self) -> bool:
        return self._lenient

    @lenient.setter
    def lenient(self, value: bool) -> None:
        self._lenient = bool(value)
        if self._babel_locale is not None and self._tzinfo is not None and self._pattern:
            self._compile()

    @property
    def status(self) -> FormatterStatus:
        """Status of the last operation (construction or parse)."""
        return self._status

    error_code = status

    @property
    def error_message(self) -> str:
        return self._error_message

    @property
    def locale_failure(self) -> bool:
        """True when construction failed because the locale could not be loaded."""
        return self._locale_failure

    def is_failure(self) -> bool:
        return self._status.is_failure

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def format(self, value: date | datetime) -> str:
        """Format a date or datetime with the effective pattern.

        Naive datetimes and plain dates are taken to be wall-clock values in
        the formatter's timezone.

        Raises:
            InvalidConfigurationError: If the formatter failed to construct.
        """
        if self._compiled is None or self._babel_locale is None or self._tzinfo is None:
            raise InvalidConfigurationError(self._error_message)
        if not isinstance(value, datetime):
            value = datetime.combine(value, time())
        if value.tzinfo is None:
            value = _localize(value, self._tzinfo)
        return babel_dates.format_datetime(
            value, self._pattern, tzinfo=self._tzinfo, locale=self._babel_locale
        )

    def parse(self, text: str, position: int = 0) -> ParseResult:
        """Parse text starting at position.

        Parsing stops where the pattern ends; trailing input is not an error.
        Compare ``result.position`` with ``len(text)`` to require a full match.

        Args:
            text: Input string
            position: Index to start matching at

        Returns:
            ParseResult with the consumed end position and status
        """
        if self._compiled is None:
            return ParseResult(None, position, self._status)

        match = self._compiled.regex.match(text, position)
        if match is None:
            return self._parse_failed(position)
        try:
            value = self._assemble(match)
        except (KeyError, OverflowError, ValueError):
            return self._parse_failed(position)

        self._status = FormatterStatus.ZERO_ERROR
        self._error_message = ""
        return ParseResult(value, match.end(), self._status)

    def _parse_failed(self, position: int) -> ParseResult:
        self._status = FormatterStatus.PARSE_ERROR
        self._error_message = "Date parsing failed"
        return ParseResult(None, position, self._status)

    def _assemble(self, match: re.Match[str]) -> datetime:
        """Build a datetime from matched field texts.

        Raises:
            KeyError: Name not in the vocabulary
            ValueError: Field value out of range (non-lenient), date does not
                exist, or the wall time falls in a DST gap (non-lenient)
        """
        assert self._compiled is not None  # noqa: S101
        vocabulary = self._vocabulary
        year, month, day = 1970, 1, 1
        hour = minute = second = microsecond = 0
        hour_letter = ""
        era: int | None = None
        period: str | None = None
        offset: int | None = None
        day_of_year: int | None = None
        has_month_or_day = False

        for pattern_field in self._compiled.fields:
            text = match.group(pattern_field.group)
            kind = pattern_field.kind
            if kind is FieldKind.YEAR:
                year = int(text)
                if pattern_field.letter in "yY" and pattern_field.count <= 2 and len(text) == 2:
                    year = self._resolve_two_digit_year(year)
            elif kind is FieldKind.MONTH:
                month, has_month_or_day = int(text), True
            elif kind is FieldKind.MONTH_NAME:
                month, has_month_or_day = vocabulary.months[text.lower()], True
            elif kind is FieldKind.DAY:
                day, has_month_or_day = int(text), True
            elif kind is FieldKind.DAY_OF_YEAR:
                day_of_year = int(text)
            elif kind is FieldKind.ERA:
                era = vocabulary.eras[text.lower()]
            elif kind is FieldKind.PERIOD:
                period = vocabulary.periods[text.lower()]
            elif kind is FieldKind.HOUR:
                hour, hour_letter = int(text), pattern_field.letter
            elif kind is FieldKind.MINUTE:
                minute = int(text)
            elif kind is FieldKind.SECOND:
                second = int(text)
            elif kind is FieldKind.FRACTION:
                microsecond = int(text[:6].ljust(6, "0"))
            elif kind is FieldKind.ZONE_NAME:
                if text.lower() not in vocabulary.zone_keys:
                    offset = parse_offset(text, vocabulary.gmt_prefix)
            elif kind is FieldKind.ZONE_OFFSET:
                offset = parse_offset(text, vocabulary.gmt_prefix)
            # Weekdays, week numbers, quarters and flexible day periods are
            # matched but not interpreted

        if era == 0:
            year = 1 - year
        hour = self._resolve_hour(hour, hour_letter, period)

        # Explicit month/day take precedence over a day of year
        if day_of_year is not None and not has_month_or_day:
            month, day = self._resolve_day_of_year(year, day_of_year)

        if self._lenient:
            year += (month - 1) // 12
            month = (month - 1) % 12 + 1
            naive = datetime(year, month, 1) + timedelta(
                days=day - 1,
                hours=hour,
                minutes=minute,
                seconds=second,
                microseconds=microsecond,
            )
        else:
            if not (0 <= minute <= 59 and 0 <= second <= 59):
                msg = "minute or second out of range"
                raise ValueError(msg)
            naive = datetime(year, month, day, hour, minute, second, microsecond)

        if offset is not None:
            return naive.replace(tzinfo=timezone(timedelta(seconds=offset)))
        assert self._tzinfo is not None  # noqa: S101
        aware = _localize(naive, self._tzinfo)
        if not self._lenient:
            # A wall time skipped by a DST transition does not survive a UTC round trip
            wall = aware.astimezone(timezone.utc).astimezone(self._tzinfo).replace(tzinfo=None)
            if wall != naive:
                msg = f"{naive} does not exist in {self._timezone_id}"
                raise ValueError(msg)
        return aware

    def _resolve_day_of_year(self, year: int, day_of_year: int) -> tuple[int, int]:
        if self._lenient:
            # Rolled over by the timedelta arithmetic in _assemble
            return 1, day_of_year
        resolved = date(year, 1, 1) + timedelta(days=day_of_year - 1)
        if day_of_year < 1 or resolved.year != year:
            msg = f"day of year {day_of_year} out of range for {year}"
            raise ValueError(msg)
        return resolved.month, resolved.day

    def _resolve_hour(self, hour: int, letter: str, period: str | None) -> int:
        # Valid ranges per hour letter: h 1-12, K 0-11, k 1-24, H 0-23
        ranges = {"h": (1, 12), "K": (0, 11), "k": (1, 24), "H": (0, 23)}
        if letter and not self._lenient:
            low, high = ranges[letter]
            if not low <= hour <= high:
                msg = f"hour {hour} out of range for '{letter}'"
                raise ValueError(msg)
        if letter == "k" and hour == 24:
            return 0
        if letter in ("h", "K"):
            if hour == 12 and letter == "h":
                hour = 0
            if period == "pm" and hour < 12:
                hour += 12
        return hour

    def _resolve_two_digit_year(self, short_year: int) -> int:
        start = self._two_digit_year_start
        year = start - start % 100 + short_year
        if year < start:
            year += 100
        return year

    def __repr__(self) -> str:
        return (
            f"DateFormatter(locale={self.locale!r}, pattern={self._pattern!r}, "
            f"timezone={self._timezone_id!r}, lenient={self._lenient}, "
            f"status={self._status.name})"
        )
