"""Enumerations for propsource type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class LoadStatus(StrEnum):
    """Outcome of loading one backing resource.

    StrEnum provides automatic string conversion: str(LoadStatus.SUCCESS) == "success"
    """

    SUCCESS = "success"
    """Resource parsed and contributed its entries."""

    UNCHANGED = "unchanged"
    """Resource modification time unchanged; previous entries reused."""

    NOT_FOUND = "not_found"
    """No resource matched the candidate identifier."""

    ERROR = "error"
    """Resource could not be resolved, read or parsed."""


class ArgumentType(StrEnum):
    """Format type of a message pattern placeholder.

    StrEnum provides automatic string conversion: str(ArgumentType.NUMBER) == "number"
    """

    NONE = ""
    """Untyped placeholder: {0}"""

    NUMBER = "number"
    """Number placeholder: {0,number,integer}"""

    DATE = "date"
    """Date placeholder: {0,date,short}"""

    TIME = "time"
    """Time placeholder: {0,time,HH:mm}"""

    CHOICE = "choice"
    """Choice placeholder: {0,choice,0#none|1#one|1<many}"""


__all__ = [
    "ArgumentType",
    "LoadStatus",
]
