"""Locale value type and BCP-47/POSIX normalization.

Centralizes locale handling used throughout the codebase. Every public entry
point converts its locale argument with to_locale() at the system boundary,
so cache keys and candidate identifiers are always derived from the same
canonical (language, region, variant) triple.

Python 3.13+.
"""

from __future__ import annotations

import functools
import logging
import os
from dataclasses import dataclass
from typing import TYPE_CHECKING

from propsource.constants import MAX_LOCALE_CACHE_SIZE

if TYPE_CHECKING:
    import babel

__all__ = [
    "ROOT_LOCALE",
    "Locale",
    "LocaleLike",
    "get_babel_locale",
    "get_system_locale",
    "normalize_locale",
    "to_locale",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Locale:
    """Language, region and variant sub-tags of a locale.

    Each sub-tag may be empty. Equality and hashing are structural, so two
    independently parsed locales address the same cache entries.

    Attributes:
        language: Lower-case language code (e.g., 'en'), or ''
        region: Upper-case region code (e.g., 'US'), or ''
        variant: Variant as written (e.g., 'POSIX'), or ''

    Example:
        >>> Locale("en", "US")
        Locale(language='en', region='US', variant='')
        >>> str(Locale("en", "US"))
        'en_US'
        >>> str(Locale("de", "", "POSIX"))
        'de__POSIX'
    """

    language: str = ""
    region: str = ""
    variant: str = ""

    def __str__(self) -> str:
        """Render POSIX-style tag (language_REGION_variant)."""
        if self.variant:
            return f"{self.language}_{self.region}_{self.variant}"
        if self.region:
            return f"{self.language}_{self.region}"
        return self.language

    @property
    def is_root(self) -> bool:
        """True when all sub-tags are empty."""
        return not (self.language or self.region or self.variant)


type LocaleLike = Locale | str | babel.Locale
"""Anything to_locale() accepts."""

ROOT_LOCALE = Locale()


def normalize_locale(locale_code: str) -> str:
    """Convert BCP-47 locale code to POSIX format.

    BCP-47 uses hyphens (en-US), while POSIX uses underscores (en_US).
    Encoding and modifier suffixes (".UTF-8", "@euro") are dropped.

    Args:
        locale_code: BCP-47 or POSIX locale code (e.g., "en-US", "pt_BR.UTF-8")

    Returns:
        POSIX-formatted locale code (e.g., "en_US", "pt_BR")

    Example:
        >>> normalize_locale("en-US")
        'en_US'
        >>> normalize_locale("de_DE.UTF-8@euro")
        'de_DE'
        >>> normalize_locale("en")  # Already normalized
        'en'
    """
    code = locale_code.strip()
    for marker in (".", "@"):
        if marker in code:
            code = code.split(marker, 1)[0]
    return code.replace("-", "_")


def to_locale(value: LocaleLike) -> Locale:
    """Convert a locale argument to the canonical Locale value type.

    Accepts Locale instances (returned unchanged), Babel Locale objects
    (territory maps to region) and locale code strings. A four-letter
    second sub-tag is a script subtag (zh-Hans-CN) and is dropped, since
    candidate identifiers are built from language, region and variant only.

    Args:
        value: Locale, babel.Locale, or BCP-47/POSIX code

    Returns:
        Canonical Locale

    Raises:
        TypeError: If value is not a supported locale type

    Example:
        >>> to_locale("en-us")
        Locale(language='en', region='US', variant='')
        >>> to_locale("zh-Hans-CN")
        Locale(language='zh', region='CN', variant='')
        >>> to_locale("")
        Locale(language='', region='', variant='')
    """
    match value:
        case Locale():
            return value
        case str():
            parts = normalize_locale(value).split("_", 2)
            language = parts[0].lower()
            rest = parts[1:]
            if rest and len(rest[0]) == 4 and rest[0].isalpha():
                rest = rest[1].split("_", 1) if len(rest) > 1 else []
            region = rest[0].upper() if rest else ""
            variant = rest[1] if len(rest) > 1 else ""
            return Locale(language, region, variant)
        case _ if hasattr(value, "territory") and hasattr(value, "language"):
            return Locale(
                (value.language or "").lower(),
                (value.territory or "").upper(),
                value.variant or "",
            )
        case _:
            msg = f"Unsupported locale type: {type(value).__name__}"
            raise TypeError(msg)


@functools.lru_cache(maxsize=MAX_LOCALE_CACHE_SIZE)
def get_babel_locale(locale: Locale) -> babel.Locale:
    """Get a Babel Locale object for formatting, with caching.

    Locales Babel does not know (including the root locale) fall back
    to en_US so that formatting always succeeds.

    Thread-safe via lru_cache internal locking.

    Args:
        locale: Canonical locale

    Returns:
        Babel Locale object
    """
    # Lazy import: Babel loads CLDR data at import time; defer until needed
    from babel import Locale as BabelLocale  # noqa: PLC0415
    from babel import UnknownLocaleError  # noqa: PLC0415

    if not locale.language:
        logger.debug("No language in locale '%s'; formatting with en_US", locale)
        return BabelLocale.parse("en_US")
    try:
        return BabelLocale.parse(str(locale))
    except (UnknownLocaleError, ValueError) as e:
        if locale.variant or locale.region:
            # Babel lacks many variant/region combinations; try the language alone.
            try:
                return BabelLocale.parse(locale.language)
            except (UnknownLocaleError, ValueError):
                pass
        logger.warning("Unknown locale '%s': %s. Falling back to en_US", locale, e)
        return BabelLocale.parse("en_US")


def get_system_locale(*, raise_on_failure: bool = False) -> Locale:
    """Detect system locale from OS and environment variables.

    Detection order:
    1. Python locale.getlocale() (OS-level locale)
    2. LC_ALL environment variable (overrides all)
    3. LC_MESSAGES environment variable (for message catalogs)
    4. LANG environment variable (default locale)

    Filters out "C" and "POSIX" pseudo-locales.

    Args:
        raise_on_failure: If True, raise RuntimeError when locale cannot be
            determined. If False (default), return en_US as fallback.

    Returns:
        Detected locale. Locale("en", "US") if not determinable and
        raise_on_failure is False.

    Raises:
        RuntimeError: If raise_on_failure is True and locale cannot be determined.
    """
    import locale as locale_module  # noqa: PLC0415

    try:
        system_locale, _ = locale_module.getlocale()
        if system_locale and system_locale not in ("C", "POSIX"):
            return to_locale(system_locale)
    except (ValueError, AttributeError):
        pass

    for var in ("LC_ALL", "LC_MESSAGES", "LANG"):
        value = os.environ.get(var)
        if value and normalize_locale(value) not in ("C", "POSIX", ""):
            return to_locale(value)

    if raise_on_failure:
        msg = (
            "Could not determine system locale. "
            "Set LC_ALL, LC_MESSAGES, or LANG environment variable."
        )
        raise RuntimeError(msg)

    return Locale("en", "US")
