"""Hypothesis strategies for locales and basenames.

Event-Emitting Strategies (HypoFuzz-Optimized):
- locales: Emits locale_shape=root|language|region|variant|no_language

Python 3.13+.
"""

from __future__ import annotations

import string
from typing import TYPE_CHECKING

from hypothesis import event
from hypothesis import strategies as st

from propsource.locale_utils import Locale

if TYPE_CHECKING:
    from hypothesis.strategies import DrawFn

_LANGUAGES = ["en", "de", "fr", "es", "lv", "ja", "zh", "pt"]
_REGIONS = ["US", "GB", "DE", "AT", "FR", "CA", "LV", "BR", "JP"]
_VARIANTS = ["POSIX", "polyton", "VALENCIA"]


@st.composite
def locales(draw: DrawFn) -> Locale:
    """Generate locales with any combination of empty sub-tags.

    Events emitted:
    - locale_shape=root|language|region|variant|no_language
    """
    language = draw(st.sampled_from(["", *_LANGUAGES]))
    region = draw(st.sampled_from(["", *_REGIONS]))
    variant = draw(st.sampled_from(["", *_VARIANTS]))
    locale = Locale(language, region, variant)
    if locale.is_root:
        shape = "root"
    elif not language:
        shape = "no_language"
    elif variant:
        shape = "variant"
    elif region:
        shape = "region"
    else:
        shape = "language"
    event(f"locale_shape={shape}")
    return locale


def language_only_locales() -> st.SearchStrategy[Locale]:
    """Locales with a language and no region or variant."""
    return st.sampled_from(_LANGUAGES).map(Locale)


def basenames() -> st.SearchStrategy[str]:
    """Basenames such as 'messages' or 'i18n/errors'."""
    segment = st.text(alphabet=string.ascii_lowercase, min_size=1, max_size=10)
    return st.lists(segment, min_size=1, max_size=3).map("/".join)
