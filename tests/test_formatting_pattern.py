"""Tests for CLDR pattern tokenizing and compilation.

Vocabularies are built by hand so that these tests exercise the compiler
without loading CLDR data.
"""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from i18nvalidator.formatting.pattern import (
    FieldKind,
    PatternError,
    Vocabulary,
    compile_pattern,
    parse_offset,
    tokenize_pattern,
)

ENGLISH = Vocabulary(
    months={"january": 1, "jan": 1, "june": 6, "jun": 6},
    weekdays={"tuesday": 1, "tue": 1},
    eras={"bc": 0, "ad": 1},
    quarters={"q2": 2, "2nd quarter": 2},
    periods={"am": "am", "pm": "pm"},
    zone_names=("Coordinated Universal Time", "UTC"),
)


class TestTokenizePattern:
    """CLDR quote escaping and field splitting."""

    def test_simple_fields_and_literals(self) -> None:
        """Literals between fields are kept as separate tokens."""
        assert tokenize_pattern("d.MM.yyyy") == [
            (True, "d"),
            (False, "."),
            (True, "MM"),
            (False, "."),
            (True, "yyyy"),
        ]

    def test_quoted_literal_with_escaped_quote(self) -> None:
        """'' inside quotes is a literal apostrophe, merged with surrounding text."""
        assert tokenize_pattern("h 'o''clock' a") == [
            (True, "h"),
            (False, " o'clock "),
            (True, "a"),
        ]

    def test_doubled_quote_outside_quotes(self) -> None:
        """'' outside quotes is a literal apostrophe."""
        assert tokenize_pattern("''") == [(False, "'")]

    def test_quoted_letters_are_literal(self) -> None:
        """Letters inside quotes never become fields."""
        assert tokenize_pattern("d 'de' MMMM") == [
            (True, "d"),
            (False, " de "),
            (True, "MMMM"),
        ]

    def test_non_ascii_letters_are_literal(self) -> None:
        """CJK characters are literals even though they are alphabetic."""
        assert tokenize_pattern("y年M月d日") == [
            (True, "y"),
            (False, "年"),
            (True, "M"),
            (False, "月"),
            (True, "d"),
            (False, "日"),
        ]

    def test_runs_of_same_letter_grouped(self) -> None:
        """Adjacent different letters form separate fields."""
        assert tokenize_pattern("yyyyMMdd") == [(True, "yyyy"), (True, "MM"), (True, "dd")]

    def test_unterminated_quote_raises(self) -> None:
        """A quote that is never closed is rejected."""
        with pytest.raises(PatternError, match="Unterminated quoted literal"):
            tokenize_pattern("yyyy 'at")

    def test_empty_pattern(self) -> None:
        """Empty input yields no tokens."""
        assert tokenize_pattern("") == []

    @given(text=st.text(alphabet=" .,:/-年月日", max_size=20))
    def test_letterless_pattern_is_one_literal(self, text: str) -> None:
        """PROPERTY: a pattern without letters or quotes is a single literal token."""
        tokens = tokenize_pattern(text)
        if text:
            assert tokens == [(False, text)]
        else:
            assert tokens == []


class TestCompilePattern:
    """Regex compilation against a vocabulary."""

    def test_field_kinds_in_order(self) -> None:
        """Fields are reported in pattern order with their semantic kind."""
        compiled = compile_pattern("EEEE, MMMM d, y", ENGLISH)
        assert [f.kind for f in compiled.fields] == [
            FieldKind.WEEKDAY_NAME,
            FieldKind.MONTH_NAME,
            FieldKind.DAY,
            FieldKind.YEAR,
        ]
        assert [f.group for f in compiled.fields] == ["f0", "f1", "f2", "f3"]

    def test_abutting_numeric_fields_fixed_width(self) -> None:
        """Adjacent numeric fields split by width."""
        compiled = compile_pattern("yyyyMMdd", ENGLISH)
        match = compiled.regex.match("20140603")
        assert match is not None
        assert (match.group("f0"), match.group("f1"), match.group("f2")) == ("2014", "06", "03")

    def test_separated_numeric_fields_variable_width(self) -> None:
        """Separated numeric fields accept one or two digits."""
        compiled = compile_pattern("M/d/yy", ENGLISH)
        match = compiled.regex.match("6/3/14")
        assert match is not None
        assert match.end() == len("6/3/14")

    def test_month_name_longest_alternative_wins(self) -> None:
        """The full month name is preferred over its abbreviation."""
        compiled = compile_pattern("MMMM d", ENGLISH)
        match = compiled.regex.match("June 3")
        assert match is not None
        assert match.group("f0") == "June"

    def test_names_case_insensitive(self) -> None:
        """Names match regardless of case, even when non-lenient."""
        compiled = compile_pattern("MMMM", ENGLISH, lenient=False)
        assert compiled.regex.match("JUNE") is not None

    def test_non_lenient_literal_exact(self) -> None:
        """Non-lenient literals are case sensitive."""
        compiled = compile_pattern("yyyy'T'HH", ENGLISH, lenient=False)
        assert compiled.regex.match("2014T10") is not None
        assert compiled.regex.match("2014t10") is None

    def test_lenient_literal_relaxed(self) -> None:
        """Lenient literals ignore case and whitespace width."""
        assert compile_pattern("yyyy'T'HH", ENGLISH, lenient=True).regex.match("2014t10")
        lenient = compile_pattern("d MMM", ENGLISH, lenient=True)
        assert lenient.regex.fullmatch("3Jun") is not None
        assert lenient.regex.fullmatch("3   Jun") is not None

    def test_offset_field(self) -> None:
        """ISO offsets are matched by X fields."""
        compiled = compile_pattern("HH:mmXXX", ENGLISH)
        match = compiled.regex.match("14:30+02:00")
        assert match is not None
        assert match.group("f2") == "+02:00"

    def test_zone_name_field_accepts_names_and_offsets(self) -> None:
        """z fields match the zone's display names or a GMT offset."""
        compiled = compile_pattern("HH:mm zzzz", ENGLISH)
        assert compiled.regex.fullmatch("14:30 Coordinated Universal Time") is not None
        assert compiled.regex.fullmatch("14:30 GMT+02:00") is not None

    @pytest.mark.parametrize(
        ("pattern", "kind"),
        [
            ("DDD", FieldKind.DAY_OF_YEAR),
            ("Q", FieldKind.QUARTER),
            ("QQQ", FieldKind.QUARTER_NAME),
            ("qqqq", FieldKind.QUARTER_NAME),
            ("ww", FieldKind.WEEK),
            ("W", FieldKind.WEEK),
            ("F", FieldKind.WEEK),
        ],
    )
    def test_calendar_field_kinds(self, pattern: str, kind: FieldKind) -> None:
        """Day-of-year, quarter and week letters compile."""
        assert compile_pattern(pattern, ENGLISH).fields[0].kind is kind

    def test_quarter_name_matched(self) -> None:
        """Quarter names come from the vocabulary, longest first."""
        compiled = compile_pattern("QQQQ yyyy", ENGLISH)
        match = compiled.regex.fullmatch("2nd Quarter 2014")
        assert match is not None
        assert match.group("f0") == "2nd Quarter"

    def test_day_of_year_width(self) -> None:
        """DDD accepts up to three digits."""
        compiled = compile_pattern("yyyy-DDD", ENGLISH)
        assert compiled.regex.fullmatch("2014-154") is not None
        assert compiled.regex.fullmatch("2014-1540") is None

    def test_empty_vocabulary_never_matches_names(self) -> None:
        """A name field with no known names matches nothing."""
        compiled = compile_pattern("MMMM", Vocabulary())
        assert compiled.regex.match("June") is None

    def test_match_is_prefix_only(self) -> None:
        """The regex matches a prefix; trailing text is left unconsumed."""
        compiled = compile_pattern("yyyy-MM-dd", ENGLISH)
        match = compiled.regex.match("2014-06-03 garbage")
        assert match is not None
        assert match.end() == 10

    def test_unsupported_field_raises(self) -> None:
        """Modified Julian day fields cannot be parsed."""
        with pytest.raises(PatternError, match="Unsupported field 'gg'"):
            compile_pattern("yyyy-gg", ENGLISH)

    def test_empty_pattern_raises(self) -> None:
        """Empty patterns are rejected."""
        with pytest.raises(PatternError, match="must not be empty"):
            compile_pattern("", ENGLISH)

    def test_pattern_error_is_value_error(self) -> None:
        """PatternError can be caught as ValueError."""
        assert issubclass(PatternError, ValueError)


class TestVocabulary:
    """Derived lookup tables."""

    def test_zone_keys_lowercased(self) -> None:
        """zone_keys holds each zone name lowercased."""
        assert ENGLISH.zone_keys == frozenset({"coordinated universal time", "utc"})

    def test_zone_keys_empty_by_default(self) -> None:
        """An empty vocabulary has no zone keys."""
        assert Vocabulary().zone_keys == frozenset()


class TestParseOffset:
    """Offset text to seconds east of UTC."""

    @pytest.mark.parametrize(
        ("text", "seconds"),
        [
            ("-0800", -28800),
            ("GMT+05:30", 19800),
            ("+02", 7200),
            ("+2", 7200),
            ("Z", 0),
            ("GMT", 0),
        ],
    )
    def test_valid_offsets(self, text: str, seconds: int) -> None:
        """Supported offset spellings convert to seconds."""
        assert parse_offset(text) == seconds

    def test_localized_prefix(self) -> None:
        """A locale's own GMT prefix is stripped."""
        assert parse_offset("UTC+01:00", "UTC") == 3600

    def test_hours_out_of_range(self) -> None:
        """Offsets beyond 18 hours are rejected."""
        with pytest.raises(ValueError, match="out of range"):
            parse_offset("+19:00")

    @given(
        hours=st.integers(min_value=0, max_value=18),
        minutes=st.integers(min_value=0, max_value=59),
        sign=st.sampled_from(["+", "-"]),
    )
    def test_hh_mm_property(self, hours: int, minutes: int, sign: str) -> None:
        """PROPERTY: +HH:MM converts to signed seconds."""
        expected = (hours * 3600 + minutes * 60) * (-1 if sign == "-" else 1)
        assert parse_offset(f"{sign}{hours:02d}:{minutes:02d}") == expected
