"""Base class for stateful validators.

A validator is configured once (through a mapping of options or fluent
setters) and then asked ``is_valid(value)`` any number of times. Failures are
recorded, not raised: after a call, ``get_messages()`` maps each failure code
to a rendered human-readable message.

Message templates may reference ``%value%`` (the value under validation) and
any name listed in the subclass's ``message_variables``.

Python 3.11+.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from typing import Any, ClassVar, Self

from i18nvalidator.constants import UNLIMITED_MESSAGE_LENGTH, VALUE_OBSCURE_CHAR
from i18nvalidator.diagnostics import (
    ErrorTemplate,
    InvalidConfigurationError,
    UnknownOptionError,
)

__all__ = ["AbstractValidator", "Options"]

logger = logging.getLogger(__name__)

Options = Mapping[str, Any] | Iterable[tuple[str, Any]]

# Option keys that name methods but are not configuration setters
_RESERVED_OPTIONS: frozenset[str] = frozenset({"options"})

_UNSET: Any = object()


def _option_items(options: Options | None) -> list[tuple[str, Any]]:
    """Normalize a mapping or an iterable of pairs into a list of items.

    Raises:
        InvalidConfigurationError: If options is neither shape.
    """
    if options is None:
        return []
    if isinstance(options, Mapping):
        return list(options.items())
    if isinstance(options, (str, bytes)) or not isinstance(options, Iterable):
        raise InvalidConfigurationError(ErrorTemplate.invalid_options(options), value=options)

    items: list[tuple[str, Any]] = []
    for item in options:
        if not isinstance(item, tuple | list) or len(item) != 2:
            raise InvalidConfigurationError(ErrorTemplate.invalid_options(item), value=item)
        key, value = item
        items.append((key, value))
    return items


class AbstractValidator(ABC):
    """Configurable validator that records failures as coded messages.

    Subclasses declare ``message_templates`` (failure code -> template) and
    implement ``is_valid()``, calling ``self.error(code)`` for each failure.

    Recognized options (besides the subclass's own ``set_<name>`` setters):
        messages: Mapping of code -> template overriding the defaults
        message: Single template applied to every code
        message_length: Truncate rendered messages (-1 = unlimited)
        value_obscured: Render %value% as asterisks

    Thread Safety:
        Not thread-safe. A validator records the value and messages of its
        last call; share instances across threads only with external locking.
    """

    message_templates: ClassVar[Mapping[str, str]] = {}
    message_variables: ClassVar[Mapping[str, str]] = {}

    def __init__(self, options: Options | None = None, **kwargs: Any) -> None:
        """Initialize the validator and apply options.

        Args:
            options: Mapping or iterable of (key, value) pairs
            **kwargs: Further options, applied after ``options``

        Raises:
            UnknownOptionError: If an option key has no setter
            InvalidConfigurationError: If options has an unusable shape or value
        """
        self._templates: dict[str, str] = dict(self.message_templates)
        self._messages: dict[str, str] = {}
        self._value: Any = None
        self._value_obscured = False
        self._message_length = UNLIMITED_MESSAGE_LENGTH
        self.set_options(_option_items(options) + list(kwargs.items()))

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def set_options(self, options: Options) -> Self:
        """Apply options by dispatching each key to ``set_<key>``.

        Raises:
            UnknownOptionError: If a key has no matching setter
        """
        for key, value in _option_items(options):
            setter = None
            if isinstance(key, str) and not key.startswith("_") and key not in _RESERVED_OPTIONS:
                setter = getattr(self, f"set_{key}", None)
            if not callable(setter):
                raise UnknownOptionError(
                    ErrorTemplate.unknown_option(str(key), type(self).__name__),
                    option=str(key),
                    value=value,
                )
            setter(value)
        return self

    def set_message(self, message: str, key: str | None = None) -> Self:
        """Override the template for one failure code, or for all when key is None.

        Raises:
            InvalidConfigurationError: If key is not a known failure code
        """
        if key is None:
            for code in self._templates:
                self._templates[code] = message
            return self
        if key not in self._templates:
            raise InvalidConfigurationError(
                ErrorTemplate.unknown_message_key(key, type(self).__name__),
                option="messages",
                value=key,
            )
        self._templates[key] = message
        return self

    def set_messages(self, messages: Mapping[str, str]) -> Self:
        for key, message in messages.items():
            self.set_message(message, key)
        return self

    def get_message_templates(self) -> dict[str, str]:
        return dict(self._templates)

    def get_message_variables(self) -> tuple[str, ...]:
        return tuple(self.message_variables)

    def set_value_obscured(self, flag: bool) -> Self:
        self._value_obscured = bool(flag)
        return self

    def is_value_obscured(self) -> bool:
        return self._value_obscured

    def set_message_length(self, length: int) -> Self:
        if not isinstance(length, int) or isinstance(length, bool):
            raise InvalidConfigurationError(
                ErrorTemplate.invalid_option_type("message_length", length, "int"),
                option="message_length",
                value=length,
            )
        self._message_length = length
        return self

    def get_message_length(self) -> int:
        return self._message_length

    # ------------------------------------------------------------------
    # Validation state
    # ------------------------------------------------------------------

    @property
    def value(self) -> Any:
        """The value most recently submitted for validation."""
        return self._value

    def _set_value(self, value: Any) -> None:
        self._value = value
        self._messages = {}

    def _clear_messages(self) -> None:
        self._messages = {}

    def error(self, code: str, value: Any = _UNSET) -> None:
        """Record a failure.

        Args:
            code: Failure code; must be a key of the message templates
            value: Value to render as %value% (defaults to the current value)

        Raises:
            InvalidConfigurationError: If code has no template
        """
        if code not in self._templates:
            raise InvalidConfigurationError(
                ErrorTemplate.unknown_message_key(code, type(self).__name__)
            )
        subject = self._value if value is _UNSET else value
        self._messages[code] = self._render(self._templates[code], subject)
        logger.debug("%s recorded %s", type(self).__name__, code)

    def _render(self, template: str, value: Any) -> str:
        shown = value if isinstance(value, str) else repr(value)
        if self._value_obscured:
            shown = VALUE_OBSCURE_CHAR * len(shown)
        message = template.replace("%value%", shown)
        for name, attribute in self.message_variables.items():
            message = message.replace(f"%{name}%", str(getattr(self, attribute)))

        length = self._message_length
        if length > -1 and len(message) > length:
            message = message[: max(length - 3, 0)] + "..."
        return message

    def get_messages(self) -> dict[str, str]:
        """Failure code -> rendered message for the last validation."""
        return dict(self._messages)

    def get_errors(self) -> tuple[str, ...]:
        """Failure codes recorded by the last validation, in recording order."""
        return tuple(self._messages)

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    @abstractmethod
    def is_valid(self, value: Any) -> bool:
        """Return True if value passes; record failures otherwise."""

    def __call__(self, value: Any) -> bool:
        return self.is_valid(value)
