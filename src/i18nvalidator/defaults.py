"""Default locale and timezone providers.

Validators never read process-global defaults directly. They ask an injected
DefaultsProvider, so tests (and multi-tenant services) can pin the defaults
without touching environment variables.

Python 3.11+.
"""

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from i18nvalidator.constants import FALLBACK_LOCALE, FALLBACK_TIMEZONE
from i18nvalidator.locale_utils import get_system_locale, get_system_timezone

__all__ = [
    "DefaultsProvider",
    "FixedDefaults",
    "SystemDefaults",
]


# pylint: disable=unnecessary-ellipsis
@runtime_checkable
class DefaultsProvider(Protocol):
    """Source of the default locale and timezone."""

    def default_locale(self) -> str:
        """Locale used when none is configured."""
        ...

    def default_timezone(self) -> str:
        """Timezone identifier used when none is configured."""
        ...


class SystemDefaults:
    """Defaults taken from the running process (environment, /etc/localtime).

    Detection happens on every call, so changes to the environment are
    picked up by validators created afterwards.
    """

    def default_locale(self) -> str:
        return get_system_locale()

    def default_timezone(self) -> str:
        return get_system_timezone()

    def __repr__(self) -> str:
        return "SystemDefaults()"


@dataclass(frozen=True, slots=True)
class FixedDefaults:
    """Constant defaults, independent of process state.

    Example:
        >>> defaults = FixedDefaults(locale="lv_LV", timezone="Europe/Riga")
        >>> defaults.default_locale()
        'lv_LV'
    """

    locale: str = FALLBACK_LOCALE
    timezone: str = FALLBACK_TIMEZONE

    def default_locale(self) -> str:
        return self.locale

    def default_timezone(self) -> str:
        return self.timezone
