"""Runtime package: compiled message patterns and cached resource tables.

Depends on the syntax package for parsing; Babel for formatting.

Python 3.13+.
"""

from .cache_config import CacheConfig
from .message_format import MessagePattern
from .table import FileTable, SourceSnapshot

__all__ = [
    "CacheConfig",
    "FileTable",
    "MessagePattern",
    "SourceSnapshot",
]
