"""Parsers for resource files and message patterns.

Modules:
    cursor          - Immutable Cursor shared by the text parsers
    properties      - .properties text format
    xml_properties  - XML properties documents
    pattern         - Positional message patterns ({0}, {0,number,integer}, choice)

Python 3.13+. Uses Babel to check number patterns.
"""

from .pattern import ChoiceOption, PatternElement, Placeholder, TextElement, parse_pattern
from .properties import parse_properties
from .xml_properties import parse_xml_properties

__all__ = [
    "ChoiceOption",
    "PatternElement",
    "Placeholder",
    "TextElement",
    "parse_pattern",
    "parse_properties",
    "parse_xml_properties",
]
