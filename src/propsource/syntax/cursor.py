"""Immutable cursor infrastructure for the resource and pattern parsers.

Implements the immutable cursor pattern for zero-`None` parsing.
Python 3.13+. Zero external dependencies.

Design Philosophy:
    - Cursor is immutable (frozen dataclass)
    - EOF is a state (is_eof), not a return value
    - Every advance() returns NEW cursor (prevents infinite loops)
    - Line:column computed on-demand (O(n) only for errors)

Line Ending Support:
    - LF (Unix, \\n), CRLF (Windows, \\r\\n) and CR-only (\\r) all end a line.
      Classic properties files may use any of the three.
"""

from dataclasses import dataclass

from propsource.diagnostics import SourceSpan

__all__ = ["BLANK_CHARS", "LINE_END_CHARS", "Cursor"]

# Inline whitespace in .properties files: space, tab, form feed.
BLANK_CHARS = frozenset(" \t\f")

LINE_END_CHARS = frozenset("\r\n")


@dataclass(frozen=True, slots=True)
class Cursor:
    """Immutable source position tracker.

    Example:
        >>> cursor = Cursor("hello", 0)
        >>> cursor.current
        'h'
        >>> cursor.advance().current
        'e'
        >>> cursor.current  # Original unchanged (immutability)
        'h'
        >>> Cursor("hi", 2).is_eof
        True
    """

    source: str
    pos: int

    @property
    def is_eof(self) -> bool:
        """Check if at end of input."""
        return self.pos >= len(self.source)

    @property
    def current(self) -> str:
        """Get current character.

        Raises:
            EOFError: If at end of input
        """
        if self.is_eof:
            msg = f"Unexpected EOF at position {self.pos}"
            raise EOFError(msg)
        return self.source[self.pos]

    def peek(self, offset: int = 0) -> str | None:
        """Peek at character with offset without advancing.

        Returns:
            Character at position + offset, or None if beyond EOF
        """
        target_pos = self.pos + offset
        if target_pos >= len(self.source):
            return None
        return self.source[target_pos]

    def advance(self, count: int = 1) -> "Cursor":
        """Return new cursor advanced by count positions (clamped at EOF)."""
        new_pos = min(self.pos + count, len(self.source))
        return Cursor(self.source, new_pos)

    def skip_blanks(self) -> "Cursor":
        """Skip spaces, tabs and form feeds (not line endings).

        Example:
            >>> Cursor(" \\t\\fkey", 0).skip_blanks().current
            'k'
        """
        c = self
        while not c.is_eof and c.current in BLANK_CHARS:
            c = c.advance()
        return c

    def skip_line_end(self) -> "Cursor":
        """Skip LF, CR, or CRLF line ending.

        Returns:
            New cursor advanced past the line ending, or unchanged if not at line end.

        Example:
            >>> Cursor("hello\\r\\nworld", 5).skip_line_end().pos
            7
        """
        if self.is_eof:
            return self
        if self.current == "\r":
            cursor = self.advance()
            if not cursor.is_eof and cursor.current == "\n":
                return cursor.advance()
            return cursor
        if self.current == "\n":
            return self.advance()
        return self

    def skip_to_line_end(self) -> "Cursor":
        """Advance to the next line ending character (not consumed)."""
        cursor = self
        while not cursor.is_eof and cursor.current not in LINE_END_CHARS:
            cursor = cursor.advance()
        return cursor

    def compute_line_col(self) -> tuple[int, int]:
        """Compute line and column for current position.

        LF, CR and CRLF each count as one line break.

        Returns:
            (line, column) tuple (1-indexed, like text editors)

        Performance:
            O(n) where n = current position. Only call for error reporting.

        Example:
            >>> Cursor("line1\\nline2", 8).compute_line_col()
            (2, 3)
            >>> Cursor("line1\\rline2", 8).compute_line_col()
            (2, 3)
        """
        prefix = self.source[: self.pos]
        line = prefix.count("\n") + prefix.count("\r") - prefix.count("\r\n") + 1
        last_break = max(prefix.rfind("\n"), prefix.rfind("\r"))
        return (line, self.pos - last_break)

    def span_to(self, end_pos: int) -> SourceSpan:
        """Build a SourceSpan from the current position to end_pos."""
        line, col = self.compute_line_col()
        return SourceSpan(start=self.pos, end=max(end_pos, self.pos), line=line, column=col)
