"""Parser for the line-oriented .properties text format.

Grammar (informal):
    file          := (logical-line)*
    logical-line  := natural lines joined where a line ends in an odd number
                     of backslashes; leading blanks of each joined line dropped
    comment       := logical line whose first non-blank character is '#' or '!'
    entry         := key [blanks] [('=' | ':') [blanks]] value
    key           := characters up to the first unescaped '=', ':' or blank

Escapes (in keys and values):
    \\t \\n \\r \\f   Control characters
    \\uXXXX         UTF-16 code unit (surrogate pairs are combined)
    \\<other>       The character itself (\\= \\: \\# \\  \\\\ ...)

Later occurrences of a key replace earlier ones.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from propsource.diagnostics import ErrorTemplate, PropertiesSyntaxError
from propsource.syntax.cursor import BLANK_CHARS, LINE_END_CHARS, Cursor

__all__ = ["PropertiesParser", "parse_properties"]

_SEPARATORS = frozenset("=:")
_COMMENT_MARKERS = frozenset("#!")
_SIMPLE_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}
_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


class _LogicalLine:
    """Characters of one logical line plus their source offsets."""

    __slots__ = ("chars", "offsets")

    def __init__(self) -> None:
        self.chars: list[str] = []
        self.offsets: list[int] = []

    def append(self, char: str, offset: int) -> None:
        self.chars.append(char)
        self.offsets.append(offset)


class PropertiesParser:
    """Single-use parser turning .properties source text into a dict.

    Example:
        >>> PropertiesParser("greeting = Hello, {0}!\\n# note\\nbye:Bye").parse()
        {'greeting': 'Hello, {0}!', 'bye': 'Bye'}
    """

    __slots__ = ("_resource", "_source")

    def __init__(self, source: str, *, resource: str | None = None) -> None:
        """Initialize parser.

        Args:
            source: Decoded resource text
            resource: Display name used in diagnostics
        """
        self._source = source
        self._resource = resource

    def parse(self) -> dict[str, str]:
        """Parse the whole source.

        Returns:
            Key to value mapping, later duplicates winning

        Raises:
            PropertiesSyntaxError: On a malformed \\uxxxx escape
        """
        entries: dict[str, str] = {}
        cursor = Cursor(self._source, 0)
        while True:
            line, cursor = self._read_logical_line(cursor)
            if line is None:
                return entries
            key, value = self._split_entry(line)
            entries[key] = value

    def _read_logical_line(self, cursor: Cursor) -> tuple[_LogicalLine | None, Cursor]:
        """Read the next non-blank, non-comment logical line.

        Returns:
            (line, cursor after it); line is None at end of input
        """
        while not cursor.is_eof:
            cursor = cursor.skip_blanks()
            if cursor.is_eof:
                break
            if cursor.current in LINE_END_CHARS:
                cursor = cursor.skip_line_end()
                continue
            if cursor.current in _COMMENT_MARKERS:
                cursor = cursor.skip_to_line_end().skip_line_end()
                continue
            return self._collect_line(cursor)
        return None, cursor

    @staticmethod
    def _collect_line(cursor: Cursor) -> tuple[_LogicalLine, Cursor]:
        """Collect a logical line starting at a non-blank character."""
        line = _LogicalLine()
        preceding_backslash = False
        while not cursor.is_eof:
            char = cursor.current
            if char in LINE_END_CHARS:
                if not preceding_backslash:
                    return line, cursor.skip_line_end()
                # Continuation: drop the backslash and the next line's indentation.
                line.chars.pop()
                line.offsets.pop()
                preceding_backslash = False
                cursor = cursor.skip_line_end().skip_blanks()
                continue
            preceding_backslash = (not preceding_backslash) if char == "\\" else False
            line.append(char, cursor.pos)
            cursor = cursor.advance()
        if preceding_backslash:
            # Backslash at EOF continues onto nothing.
            line.chars.pop()
            line.offsets.pop()
        return line, cursor

    def _split_entry(self, line: _LogicalLine) -> tuple[str, str]:
        """Split a logical line into unescaped key and value."""
        chars = line.chars
        key_end = len(chars)
        value_start = len(chars)
        has_separator = False
        preceding_backslash = False
        for index, char in enumerate(chars):
            if char in _SEPARATORS and not preceding_backslash:
                key_end, value_start, has_separator = index, index + 1, True
                break
            if char in BLANK_CHARS and not preceding_backslash:
                key_end, value_start = index, index + 1
                break
            preceding_backslash = (not preceding_backslash) if char == "\\" else False

        while value_start < len(chars):
            char = chars[value_start]
            if char in BLANK_CHARS:
                value_start += 1
            elif char in _SEPARATORS and not has_separator:
                has_separator = True
                value_start += 1
            else:
                break

        key = self._unescape(line, 0, key_end)
        value = self._unescape(line, value_start, len(chars))
        return key, value

    def _unescape(self, line: _LogicalLine, start: int, end: int) -> str:
        """Convert escape sequences in line[start:end]."""
        chars = line.chars
        out: list[str] = []
        index = start
        while index < end:
            char = chars[index]
            index += 1
            if char != "\\" or index >= end:
                out.append(char)
                continue
            escaped = chars[index]
            index += 1
            if escaped == "u":
                digits = "".join(chars[index : min(index + 4, end)])
                if len(digits) != 4 or not set(digits) <= _HEX_DIGITS:
                    offset = line.offsets[index - 2]
                    cursor = Cursor(self._source, offset)
                    diagnostic = ErrorTemplate.malformed_escape(
                        cursor.span_to(offset + 2 + len(digits)), self._resource
                    )
                    raise PropertiesSyntaxError(diagnostic)
                index += 4
                out.append(chr(int(digits, 16)))
            else:
                out.append(_SIMPLE_ESCAPES.get(escaped, escaped))
        text = "".join(out)
        if any("\ud800" <= c <= "\udfff" for c in text):
            # Escaped UTF-16 surrogate pairs (\\ud83d\\ude00) become one code point.
            text = text.encode("utf-16", "surrogatepass").decode("utf-16", "replace")
        return text


def parse_properties(source: str, *, resource: str | None = None) -> dict[str, str]:
    """Parse .properties source text.

    Args:
        source: Decoded resource text
        resource: Display name used in diagnostics

    Returns:
        Key to value mapping

    Raises:
        PropertiesSyntaxError: On a malformed \\uxxxx escape

    Example:
        >>> parse_properties("a=1\\nb = two \\\\\\n    lines")
        {'a': '1', 'b': 'two lines'}
    """
    return PropertiesParser(source, resource=resource).parse()
