"""Locale fallback chains: candidate identifiers for a base name and locale.

For base name "messages" and locale en_US_POSIX the own chain is:

    messages_en_US_POSIX   (variant, only with a language or region)
    messages_en_US         (region)
    messages_en            (language)

When fallback to the default locale is enabled and the requested locale
differs from it, the default locale's own chain is appended (skipping
candidates already present), and the bare base name always comes last.

An empty sub-tag still occupies its position, so a locale with a region but
no language yields "messages__US".

Both functions are pure; FilenameCache memoizes calculate_all_filenames().

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from propsource.locale_utils import Locale
from propsource.localization.types import BaseName, CandidateId

__all__ = ["calculate_all_filenames", "calculate_filenames_for_locale"]


def calculate_filenames_for_locale(basename: BaseName, locale: Locale) -> list[CandidateId]:
    """Candidates derived from one locale, most specific first.

    The bare base name is not included.

    Example:
        >>> calculate_filenames_for_locale("messages", Locale("de", "AT"))
        ['messages_de_AT', 'messages_de']
        >>> calculate_filenames_for_locale("messages", Locale())
        []
    """
    result: list[CandidateId] = []
    prefix = basename + "_"
    if locale.language:
        prefix += locale.language
        result.insert(0, prefix)
    prefix += "_"
    if locale.region:
        prefix += locale.region
        result.insert(0, prefix)
    if locale.variant and (locale.language or locale.region):
        prefix += "_" + locale.variant
        result.insert(0, prefix)
    return result


def calculate_all_filenames(
    basename: BaseName,
    locale: Locale,
    default_locale: Locale | None = None,
    *,
    fallback_to_default_locale: bool = True,
) -> tuple[CandidateId, ...]:
    """Full fallback chain for a base name and requested locale.

    Args:
        basename: Base name of the resource family
        locale: Requested locale
        default_locale: Process default locale, or None for no default
        fallback_to_default_locale: Append the default locale's candidates

    Returns:
        Deduplicated candidates, most specific first, ending with basename

    Example:
        >>> calculate_all_filenames("app", Locale("fr", "CA"), Locale("en", "US"))
        ('app_fr_CA', 'app_fr', 'app_en_US', 'app_en', 'app')
        >>> calculate_all_filenames(
        ...     "app", Locale("fr"), Locale("en"), fallback_to_default_locale=False
        ... )
        ('app_fr', 'app')
    """
    filenames = calculate_filenames_for_locale(basename, locale)
    if fallback_to_default_locale and default_locale is not None and default_locale != locale:
        for candidate in calculate_filenames_for_locale(basename, default_locale):
            if candidate not in filenames:
                filenames.append(candidate)
    if basename not in filenames:
        filenames.append(basename)
    return tuple(filenames)
