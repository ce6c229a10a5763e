"""
Data models for the key set.
"""

from llrbset.models.exceptions import KeyRangeError, TreeInvariantError
from llrbset.models.key_stream import KeyStream

__all__ = [
    "KeyRangeError",
    "KeyStream",
    "TreeInvariantError",
]
