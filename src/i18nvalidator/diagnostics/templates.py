"""Error message templates.

Centralized error message templates for testable, consistent error messages.
NO f-strings in exception constructors: every raise site asks ErrorTemplate.

Python 3.11+. Zero external dependencies.
"""

__all__ = ["ErrorTemplate"]


class ErrorTemplate:
    """Centralized error message templates."""

    @staticmethod
    def invalid_locale(locale_code: str) -> str:
        """Locale cannot be loaded by Babel.

        Args:
            locale_code: The rejected locale identifier
        """
        return f"Invalid locale string given: '{locale_code}'"

    @staticmethod
    def unknown_timezone(zone: str) -> str:
        """Timezone identifier is neither a known zone nor a UTC offset."""
        return f"Unknown timezone '{zone}'"

    @staticmethod
    def unsupported_pattern_field(field: str, pattern: str) -> str:
        """Pattern contains a field the formatter cannot parse.

        Args:
            field: The offending pattern letters (e.g. "g")
            pattern: The full CLDR pattern
        """
        return f"Unsupported field '{field}' in date pattern '{pattern}'"

    @staticmethod
    def unterminated_quote(pattern: str) -> str:
        """Quoted literal section is never closed."""
        return f"Unterminated quoted literal in date pattern '{pattern}'"

    @staticmethod
    def empty_pattern() -> str:
        """Pattern contains no fields and no literals."""
        return "Date pattern must not be empty"

    @staticmethod
    def missing_style_pattern(kind: str, style: str, locale_code: str) -> str:
        """Locale lacks CLDR data for the requested style.

        Args:
            kind: "date", "time" or "datetime"
            style: Style name
            locale_code: Locale identifier
        """
        return f"Locale '{locale_code}' has no {kind} pattern for style '{style}'"

    @staticmethod
    def invalid_option_value(option: str, value: object, allowed: tuple[str, ...]) -> str:
        """Option value is outside its enumeration.

        Args:
            option: Option name
            value: The rejected value
            allowed: Accepted string values
        """
        return f"Invalid value {value!r} for option '{option}'; expected one of {', '.join(allowed)}"

    @staticmethod
    def invalid_option_type(option: str, value: object, expected: str) -> str:
        """Option value has the wrong type."""
        return f"Option '{option}' expects {expected}, got {type(value).__name__}"

    @staticmethod
    def unknown_option(option: str, validator: str) -> str:
        """Option key has no setter."""
        return f"Unknown option '{option}' for {validator}"

    @staticmethod
    def invalid_options(value: object) -> str:
        """Options argument is neither a mapping nor an iterable of pairs."""
        return f"Options must be a mapping or an iterable of key/value pairs, got {type(value).__name__}"

    @staticmethod
    def unknown_message_key(key: str, validator: str) -> str:
        """Message key is not among the validator's message templates."""
        return f"No message template exists for key '{key}' in {validator}"
