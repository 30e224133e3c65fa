"""propsource exception hierarchy with structured diagnostics.

All exceptions optionally store a Diagnostic object for rich error
information. Only NoSuchMessageError ever reaches callers of a lookup;
the others are raised by parsers and loaders and absorbed by the caches,
which log them and degrade to "no entries for this candidate".

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic

__all__ = [
    "MessagePatternError",
    "NoSuchMessageError",
    "PropSourceError",
    "PropertiesSyntaxError",
    "ResourceResolutionError",
]


class PropSourceError(Exception):
    """Base exception for all propsource errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize PropSourceError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class ResourceResolutionError(PropSourceError):
    """Resource location could not be resolved.

    Raised by loaders when the resolution mechanism itself fails, for
    example an invalid wildcard pattern. The candidate resolves to the
    negative-cache table.
    """


class PropertiesSyntaxError(PropSourceError, ValueError):
    """Resource exists but its content cannot be parsed.

    Examples:
    - Malformed \\uxxxx escape in a .properties file
    - Malformed XML, or an <entry> without a key attribute

    The resource contributes no entries; sibling resources still load.
    """


class MessagePatternError(PropSourceError, ValueError):
    """Message text is not a valid message pattern.

    Examples:
    - Unmatched braces: "Hello {0"
    - Non-numeric argument index: "{name}"
    - Unknown format type: "{0,money}"
    """


class NoSuchMessageError(PropSourceError, LookupError):
    """No message found for a key in any resource, parent or default.

    Attributes:
        key: The message key that was looked up
        locale: The requested locale tag
    """

    def __init__(self, message: str | Diagnostic, *, key: str = "", locale: str = "") -> None:
        """Initialize NoSuchMessageError.

        Args:
            message: Error message string OR Diagnostic object
            key: The message key that was looked up
            locale: The requested locale tag
        """
        super().__init__(message)
        self.key = key
        self.locale = locale
