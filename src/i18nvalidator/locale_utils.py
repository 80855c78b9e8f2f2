"""Locale and timezone utilities.

Centralizes locale format normalization and system default detection.
Provides canonical locale handling so that "en-US" and "en_US" resolve to the
same Babel Locale and the same cache entry.

Python 3.11+.
"""

from __future__ import annotations

import functools
import logging
from datetime import tzinfo
from typing import TYPE_CHECKING

from i18nvalidator.constants import FALLBACK_LOCALE, FALLBACK_TIMEZONE, MAX_LOCALE_CACHE_SIZE

if TYPE_CHECKING:
    from babel import Locale

__all__ = [
    "get_babel_locale",
    "get_system_locale",
    "get_system_timezone",
    "normalize_locale",
    "timezone_name",
]

logger = logging.getLogger(__name__)


def normalize_locale(locale_code: str) -> str:
    """Convert BCP-47 locale code to POSIX format for Babel.

    BCP-47 uses hyphens (en-US), while Babel/POSIX uses underscores (en_US).
    Encoding suffixes ("de_DE.UTF-8") and modifiers ("sr_RS@latin") are
    dropped since Babel cannot parse them.

    Example:
        >>> normalize_locale("en-US")
        'en_US'
        >>> normalize_locale("de_DE.UTF-8")
        'de_DE'
    """
    code = locale_code.split(".", 1)[0].split("@", 1)[0]
    return code.replace("-", "_")


@functools.lru_cache(maxsize=MAX_LOCALE_CACHE_SIZE)
def get_babel_locale(locale_code: str) -> Locale:
    """Get a Babel Locale object with caching.

    Parses the locale code once and caches the result.
    Thread-safe via lru_cache internal locking.

    Args:
        locale_code: Locale code (BCP-47 or POSIX format accepted)

    Returns:
        Babel Locale object

    Raises:
        babel.core.UnknownLocaleError: If locale is not recognized
        ValueError: If locale format is invalid
    """
    # Lazy import: Babel loads CLDR data at import time; defer until needed
    from babel import Locale  # noqa: PLC0415

    return Locale.parse(normalize_locale(locale_code))


def get_system_locale() -> str:
    """Detect the process default locale.

    Asks Babel, which consults LANGUAGE, LC_ALL, LC_TIME and LANG in that
    order and resolves aliases. Filters out the "C"/"POSIX" pseudo-locales
    (Babel maps them to en_US_POSIX).

    Returns:
        Locale code in POSIX format, FALLBACK_LOCALE if not determinable.
    """
    from babel import default_locale  # noqa: PLC0415

    detected = default_locale("LC_TIME")
    if detected and detected != "en_US_POSIX":
        return normalize_locale(detected)
    logger.debug("No system locale detected, using %s", FALLBACK_LOCALE)
    return FALLBACK_LOCALE


def timezone_name(zone: tzinfo) -> str | None:
    """Return the identifier of a tzinfo object, or None if it has none.

    Handles zoneinfo (``key``), pytz (``zone``) and fixed-offset
    ``datetime.timezone`` objects (``tzname``).
    """
    name = getattr(zone, "key", None) or getattr(zone, "zone", None)
    if name:
        return str(name)
    return zone.tzname(None)


def get_system_timezone() -> str:
    """Detect the process default timezone identifier.

    Uses Babel's LOCALTZ (TZ environment variable, /etc/localtime, or the
    Windows registry).

    Returns:
        Timezone identifier (e.g. "Europe/Riga"), FALLBACK_TIMEZONE if the
        local zone has no usable name.
    """
    from babel.dates import LOCALTZ  # noqa: PLC0415

    name = timezone_name(LOCALTZ)
    if not name or name == "local":
        logger.debug("Local timezone has no identifier, using %s", FALLBACK_TIMEZONE)
        return FALLBACK_TIMEZONE
    return name
