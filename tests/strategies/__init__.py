"""Hypothesis strategies for propsource property-based testing.

Usage:
    from tests.strategies import basenames, locales
"""

from .locales import basenames, language_only_locales, locales

__all__ = ["basenames", "language_only_locales", "locales"]
