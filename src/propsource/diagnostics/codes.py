"""Diagnostic codes and data structures.

Defines error codes, source spans, and diagnostic messages.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "SourceSpan",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Lookup errors (missing messages)
        2000-2999: Resource errors (resolution, size limits)
        3000-3999: Resource syntax errors (.properties and XML)
        4000-4999: Message pattern errors
    """

    # Lookup errors (1000-1999)
    MESSAGE_NOT_FOUND = 1001

    # Resource errors (2000-2999)
    RESOURCE_RESOLUTION_FAILED = 2001
    RESOURCE_TOO_LARGE = 2002

    # Resource syntax errors (3000-3999)
    PROPERTIES_MALFORMED_ESCAPE = 3001
    XML_MALFORMED = 3002
    XML_UNEXPECTED_ROOT = 3003
    XML_ENTRY_WITHOUT_KEY = 3004

    # Message pattern errors (4000-4999)
    PATTERN_UNMATCHED_BRACE = 4001
    PATTERN_INVALID_ARGUMENT_INDEX = 4002
    PATTERN_UNKNOWN_FORMAT_TYPE = 4003
    PATTERN_INVALID_CHOICE = 4004
    PATTERN_INVALID_NUMBER_STYLE = 4005


@dataclass(frozen=True, slots=True)
class SourceSpan:
    """Source code location for error reporting.

    Attributes:
        start: Starting character offset (0-indexed)
        end: Ending character offset (exclusive)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """

    start: int
    end: int
    line: int
    column: int

    def __post_init__(self) -> None:
        """Validate SourceSpan invariants.

        Raises:
            ValueError: If start is negative, end precedes start, or line/column
                is less than 1 (both are 1-indexed).
        """
        if self.start < 0:
            msg = f"SourceSpan.start must be >= 0, got {self.start}"
            raise ValueError(msg)
        if self.end < self.start:
            msg = f"SourceSpan.end ({self.end}) must be >= start ({self.start})"
            raise ValueError(msg)
        if self.line < 1:
            msg = f"SourceSpan.line must be >= 1 (1-indexed), got {self.line}"
            raise ValueError(msg)
        if self.column < 1:
            msg = f"SourceSpan.column must be >= 1 (1-indexed), got {self.column}"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        span: Source location (None for non-syntax errors)
        hint: Suggestion for fixing the error
        resource: Display name of the resource involved, if any
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    span: SourceSpan | None = None
    hint: str | None = None
    resource: str | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like a compiler message.

        Example output:
            error[PROPERTIES_MALFORMED_ESCAPE]: Malformed \\uxxxx encoding
              --> messages_en.properties:3:9
              = help: Escapes need exactly four hexadecimal digits

        Returns:
            Formatted error message
        """
        lines = [f"{self.severity}[{self.code.name}]: {self.message}"]
        if self.span is not None and self.resource:
            lines.append(f"  --> {self.resource}:{self.span.line}:{self.span.column}")
        elif self.span is not None:
            lines.append(f"  --> line {self.span.line}, column {self.span.column}")
        elif self.resource:
            lines.append(f"  --> {self.resource}")
        if self.hint:
            lines.append(f"  = help: {self.hint}")
        return "\n".join(lines)
