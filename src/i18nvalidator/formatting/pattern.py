"""CLDR date pattern tokenizer and compiler.

Turns a Unicode CLDR date pattern (the syntax Babel exposes through
``Locale.date_formats`` etc.) into an anchored regular expression with one
named group per field. Locale-dependent vocabulary (month names, weekday
names, eras, day periods, timezone names) is supplied by the caller from
Babel's CLDR data; this module holds no locale data of its own.

CLDR Pattern Syntax (subset supported for parsing):
    Letters | Meaning                 | Example
    --------|-------------------------|--------
    G..GGGG | Era                     | AD, Anno Domini
    y, yyyy | Year                    | 2014
    yy      | 2-digit year            | 14
    Y, u    | Week year, extended year| 2014
    M, MM   | Month (numeric)         | 6, 06
    MMM(M)  | Month name              | Jun, June
    L...    | Stand-alone month       | June
    d, dd   | Day of month            | 3, 03
    D..DDD  | Day of year             | 154
    Q, q    | Quarter                 | 2, Q2, 2nd quarter
    w, W, F | Week numbers (matched, not interpreted)
    E...    | Weekday name            | Tue, Tuesday
    e, c    | Local weekday (numeric for 1-2 letters, else name)
    a       | AM/PM marker            | PM
    b, B    | Day period              | noon, in the afternoon
    h, H    | Hour 1-12, hour 0-23    | 2, 14
    K, k    | Hour 0-11, hour 1-24    | 2, 24
    m, s    | Minute, second          | 05
    S+      | Fractional seconds      | 123
    z, v, V | Timezone name           | Pacific Standard Time
    Z, O, x, X | UTC offset           | -0800, GMT-08:00, Z

QUOTE ESCAPING (CLDR):
    - Single quotes delimit literal text: 'at' -> "at"
    - Double single quotes escape: '' -> "'"
    - Only ASCII letters are pattern letters; "y年M月d日" has literal 年/月/日

Python 3.11+.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import StrEnum

from i18nvalidator.diagnostics.templates import ErrorTemplate

__all__ = [
    "CompiledPattern",
    "FieldKind",
    "PatternError",
    "PatternField",
    "Vocabulary",
    "compile_pattern",
    "parse_offset",
    "tokenize_pattern",
]


class PatternError(ValueError):
    """CLDR pattern cannot be compiled (unsupported field, unterminated quote)."""


class FieldKind(StrEnum):
    """Semantic role of a pattern field."""

    ERA = "era"
    YEAR = "year"
    MONTH = "month"
    MONTH_NAME = "month_name"
    DAY = "day"
    WEEKDAY = "weekday"
    WEEKDAY_NAME = "weekday_name"
    PERIOD = "period"
    DAY_PERIOD = "day_period"
    HOUR = "hour"
    MINUTE = "minute"
    SECOND = "second"
    FRACTION = "fraction"
    ZONE_NAME = "zone_name"
    ZONE_OFFSET = "zone_offset"
    DAY_OF_YEAR = "day_of_year"
    QUARTER = "quarter"
    QUARTER_NAME = "quarter_name"
    WEEK = "week"


# Kinds whose text is a run of ASCII digits. Adjacent numeric fields
# ("yyyyMMdd") are matched with fixed widths.
_NUMERIC_KINDS: frozenset[FieldKind] = frozenset(
    {
        FieldKind.YEAR,
        FieldKind.MONTH,
        FieldKind.DAY,
        FieldKind.DAY_OF_YEAR,
        FieldKind.QUARTER,
        FieldKind.WEEK,
        FieldKind.WEEKDAY,
        FieldKind.HOUR,
        FieldKind.MINUTE,
        FieldKind.SECOND,
        FieldKind.FRACTION,
    }
)

_FIXED_KINDS: dict[str, FieldKind] = {
    "G": FieldKind.ERA,
    "y": FieldKind.YEAR,
    "Y": FieldKind.YEAR,
    "u": FieldKind.YEAR,
    "d": FieldKind.DAY,
    "D": FieldKind.DAY_OF_YEAR,
    "w": FieldKind.WEEK,
    "W": FieldKind.WEEK,
    "F": FieldKind.WEEK,
    "E": FieldKind.WEEKDAY_NAME,
    "a": FieldKind.PERIOD,
    "b": FieldKind.DAY_PERIOD,
    "B": FieldKind.DAY_PERIOD,
    "h": FieldKind.HOUR,
    "H": FieldKind.HOUR,
    "k": FieldKind.HOUR,
    "K": FieldKind.HOUR,
    "m": FieldKind.MINUTE,
    "s": FieldKind.SECOND,
    "S": FieldKind.FRACTION,
    "z": FieldKind.ZONE_NAME,
    "v": FieldKind.ZONE_NAME,
    "V": FieldKind.ZONE_NAME,
    "Z": FieldKind.ZONE_OFFSET,
    "O": FieldKind.ZONE_OFFSET,
    "x": FieldKind.ZONE_OFFSET,
    "X": FieldKind.ZONE_OFFSET,
}

_OFFSET_BODY = r"Z|[+-]\d{1,2}(?::?\d{2})?"


@dataclass(frozen=True, slots=True)
class PatternField:
    """One field of a compiled pattern.

    Attributes:
        letter: Pattern letter ("y", "M", ...)
        count: Repetition count ("yyyy" -> 4)
        kind: Semantic role
        group: Name of the regex group capturing this field
    """

    letter: str
    count: int
    kind: FieldKind
    group: str


@dataclass(frozen=True, slots=True)
class Vocabulary:
    """Locale-dependent words a pattern may match.

    Keys of the name mappings are lowercased; lookups must lowercase the
    matched text first.

    Attributes:
        months: Month name -> month number (1-12)
        weekdays: Weekday name -> weekday number (0=Monday)
        eras: Era name -> era index (0=BC, 1=AD)
        quarters: Quarter name -> quarter number (1-4)
        periods: AM/PM marker -> "am" or "pm"
        day_periods: Flexible day period names (matched, not interpreted)
        zone_names: Display names of the configured timezone
        gmt_prefix: Localized GMT prefix ("GMT", "UTC", ...)
        zone_keys: Lowercased zone_names, for parse-time lookups
    """

    months: dict[str, int] = field(default_factory=dict)
    weekdays: dict[str, int] = field(default_factory=dict)
    eras: dict[str, int] = field(default_factory=dict)
    quarters: dict[str, int] = field(default_factory=dict)
    periods: dict[str, str] = field(default_factory=dict)
    day_periods: tuple[str, ...] = ()
    zone_names: tuple[str, ...] = ()
    gmt_prefix: str = "GMT"
    zone_keys: frozenset[str] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "zone_keys", frozenset(n.lower() for n in self.zone_names))


@dataclass(frozen=True, slots=True)
class CompiledPattern:
    """A CLDR pattern compiled into a positional matcher.

    Attributes:
        pattern: Source CLDR pattern
        regex: Compiled expression; use ``regex.match(text, pos)``
        fields: Fields in pattern order
    """

    pattern: str
    regex: re.Pattern[str]
    fields: tuple[PatternField, ...]


def tokenize_pattern(pattern: str) -> list[tuple[bool, str]]:
    """Tokenize a CLDR pattern into field and literal tokens.

    CLDR quote escaping rules:
    - Single quotes delimit literal text: 'at' produces "at"
    - Two consecutive single quotes '' produce a literal single quote
    - '' inside quoted text also produces a literal single quote

    Adjacent literal characters are merged into one token.

    Examples:
        "h 'o''clock' a" -> [(True, "h"), (False, " o'clock "), (True, "a")]
        "d.MM.yyyy" -> [(True, "d"), (False, "."), (True, "MM"), (False, "."), (True, "yyyy")]

    Args:
        pattern: CLDR date pattern

    Returns:
        List of (is_field, text) tuples.

    Raises:
        PatternError: If a quoted section is not terminated.
    """
    tokens: list[tuple[bool, str]] = []
    literal: list[str] = []
    i = 0
    n = len(pattern)

    def flush() -> None:
        if literal:
            tokens.append((False, "".join(literal)))
            literal.clear()

    while i < n:
        char = pattern[i]

        if char == "'":
            if i + 1 < n and pattern[i + 1] == "'":
                literal.append("'")
                i += 2
                continue

            i += 1
            closed = False
            while i < n:
                if pattern[i] == "'":
                    if i + 1 < n and pattern[i + 1] == "'":
                        literal.append("'")
                        i += 2
                    else:
                        i += 1
                        closed = True
                        break
                else:
                    literal.append(pattern[i])
                    i += 1
            if not closed:
                raise PatternError(ErrorTemplate.unterminated_quote(pattern))
            continue

        # Only ASCII letters are pattern letters
        if char.isascii() and char.isalpha():
            flush()
            j = i + 1
            while j < n and pattern[j] == char:
                j += 1
            tokens.append((True, pattern[i:j]))
            i = j
            continue

        literal.append(char)
        i += 1

    flush()
    return tokens


def _field_kind(letter: str, count: int) -> FieldKind | None:
    if letter in ("M", "L"):
        return FieldKind.MONTH if count <= 2 else FieldKind.MONTH_NAME
    if letter in ("Q", "q"):
        return FieldKind.QUARTER if count <= 2 else FieldKind.QUARTER_NAME
    if letter in ("e", "c"):
        return FieldKind.WEEKDAY if count <= 2 else FieldKind.WEEKDAY_NAME
    return _FIXED_KINDS.get(letter)


def _alternation(words: Iterable[str]) -> str:
    # Longest first so "June" wins over "Jun"
    unique = sorted({w for w in words if w}, key=lambda w: (-len(w), w))
    if not unique:
        # Never matches
        return r"(?!)"
    return "(?i:" + "|".join(re.escape(w) for w in unique) + ")"


def _numeric_regex(kind: FieldKind, count: int, abutting: bool) -> str:
    if abutting:
        width = count
        if kind is FieldKind.YEAR and count != 2:
            width = max(count, 4)
        return rf"\d{{{width}}}"
    if kind in (FieldKind.YEAR, FieldKind.FRACTION):
        return r"\d{1,9}"
    return rf"\d{{1,{max(count, 2)}}}"


def _field_regex(
    pattern_field: PatternField, vocabulary: Vocabulary, abutting: bool
) -> str:
    kind = pattern_field.kind
    if kind in _NUMERIC_KINDS:
        return _numeric_regex(kind, pattern_field.count, abutting)
    if kind is FieldKind.MONTH_NAME:
        return _alternation(vocabulary.months)
    if kind is FieldKind.WEEKDAY_NAME:
        return _alternation(vocabulary.weekdays)
    if kind is FieldKind.ERA:
        return _alternation(vocabulary.eras)
    if kind is FieldKind.QUARTER_NAME:
        return _alternation(vocabulary.quarters)
    if kind is FieldKind.PERIOD:
        return _alternation(vocabulary.periods)
    if kind is FieldKind.DAY_PERIOD:
        return _alternation(vocabulary.day_periods)
    if kind is FieldKind.ZONE_NAME:
        # Names of the configured zone, or any explicit offset
        offset = _offset_regex(vocabulary.gmt_prefix)
        names = _alternation(vocabulary.zone_names)
        return f"{names}|{offset}" if vocabulary.zone_names else offset
    return _offset_regex(vocabulary.gmt_prefix)


def _offset_regex(gmt_prefix: str) -> str:
    prefix = re.escape(gmt_prefix)
    return rf"(?:{prefix})?(?:{_OFFSET_BODY})|{prefix}"


def _literal_regex(text: str, lenient: bool) -> str:
    if not lenient:
        return re.escape(text)
    parts = []
    for chunk in re.split(r"(\s+)", text):
        if not chunk:
            continue
        parts.append(r"\s*" if chunk.isspace() else re.escape(chunk))
    return "".join(parts)


def compile_pattern(
    pattern: str, vocabulary: Vocabulary, *, lenient: bool = False
) -> CompiledPattern:
    """Compile a CLDR pattern against a locale vocabulary.

    Non-lenient: literals must match exactly, including case and whitespace.
    Lenient: literals match case-insensitively and any whitespace run may be
    absent or longer. Names always match case-insensitively.

    Args:
        pattern: CLDR date pattern
        vocabulary: Locale-dependent words
        lenient: Relax literal matching

    Returns:
        CompiledPattern

    Raises:
        PatternError: If the pattern is empty or contains unsupported fields.
    """
    tokens = tokenize_pattern(pattern)
    if not tokens:
        raise PatternError(ErrorTemplate.empty_pattern())

    fields: list[PatternField] = []
    for is_field, text in tokens:
        if not is_field:
            continue
        kind = _field_kind(text[0], len(text))
        if kind is None:
            raise PatternError(ErrorTemplate.unsupported_pattern_field(text, pattern))
        fields.append(PatternField(text[0], len(text), kind, f"f{len(fields)}"))

    parts: list[str] = []
    field_iter = iter(fields)
    for index, (is_field, text) in enumerate(tokens):
        if not is_field:
            parts.append(_literal_regex(text, lenient))
            continue
        current = next(field_iter)
        following = tokens[index + 1] if index + 1 < len(tokens) else None
        abutting = (
            current.kind in _NUMERIC_KINDS
            and following is not None
            and following[0]
            and _field_kind(following[1][0], len(following[1])) in _NUMERIC_KINDS
        )
        body = _field_regex(current, vocabulary, abutting)
        parts.append(f"(?P<{current.group}>{body})")

    flags = re.IGNORECASE if lenient else 0
    return CompiledPattern(pattern, re.compile("".join(parts), flags), tuple(fields))


def parse_offset(text: str, gmt_prefix: str = "GMT") -> int:
    """Convert matched offset text to seconds east of UTC.

    Examples:
        >>> parse_offset("-0800")
        -28800
        >>> parse_offset("GMT+05:30")
        19800
        >>> parse_offset("Z")
        0

    Raises:
        ValueError: If hours or minutes are out of range.
    """
    body = text
    if gmt_prefix and body.upper().startswith(gmt_prefix.upper()):
        body = body[len(gmt_prefix) :]
    if body in ("", "Z", "z"):
        return 0
    sign = -1 if body[0] == "-" else 1
    digits = body[1:].replace(":", "")
    if len(digits) <= 2:
        hours, minutes = int(digits), 0
    else:
        hours, minutes = int(digits[:-2]), int(digits[-2:])
    if hours > 18 or minutes > 59:
        msg = f"UTC offset out of range: {text}"
        raise ValueError(msg)
    return sign * (hours * 3600 + minutes * 60)
