"""Locale-aware date formatting and positional parsing.

Public API:
    DateFormatter - Babel-backed formatter/parser built from locale, styles,
        timezone, calendar and pattern
    ParseResult - (value, position, status) returned by DateFormatter.parse()
    FormatterStatus - ICU-style status codes

Python 3.11+. Uses Babel CLDR data for all locale-dependent text.
"""

from .formatter import DateFormatter, FormatterStatus, ParseResult
from .pattern import PatternError, compile_pattern, tokenize_pattern

__all__ = [
    "DateFormatter",
    "FormatterStatus",
    "ParseResult",
    "PatternError",
    "compile_pattern",
    "tokenize_pattern",
]
