"""Parser for XML properties documents.

Document shape:
    <?xml version="1.0" encoding="UTF-8"?>
    <!DOCTYPE properties SYSTEM "http://java.sun.com/dtd/properties.dtd">
    <properties>
        <comment>optional</comment>
        <entry key="greeting">Hello, {0}!</entry>
    </properties>

The document declares its own encoding, so parsing works on raw bytes and
ignores any configured text encoding. The DOCTYPE is never fetched.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET

from propsource.diagnostics import ErrorTemplate, PropertiesSyntaxError

__all__ = ["parse_xml_properties"]

_ROOT_TAG = "properties"
_ENTRY_TAG = "entry"


def parse_xml_properties(data: bytes, *, resource: str | None = None) -> dict[str, str]:
    """Parse an XML properties document.

    Args:
        data: Raw document bytes
        resource: Display name used in diagnostics

    Returns:
        Key to value mapping, later duplicates winning

    Raises:
        PropertiesSyntaxError: If the document is malformed, the root element
            is not <properties>, or an <entry> has no key attribute

    Example:
        >>> parse_xml_properties(b'<properties><entry key="a">1</entry></properties>')
        {'a': '1'}
    """
    try:
        root = ET.fromstring(data)
    except ET.ParseError as e:
        raise PropertiesSyntaxError(ErrorTemplate.xml_malformed(str(e), resource)) from e

    if root.tag != _ROOT_TAG:
        raise PropertiesSyntaxError(ErrorTemplate.xml_unexpected_root(root.tag, resource))

    entries: dict[str, str] = {}
    for element in root.iter(_ENTRY_TAG):
        key = element.get("key")
        if key is None:
            raise PropertiesSyntaxError(ErrorTemplate.xml_entry_without_key(resource))
        entries[key] = element.text or ""
    return entries
