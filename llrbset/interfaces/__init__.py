"""
Abstract base classes and protocols for the key set.
"""

from llrbset.interfaces.ordered_key_set import OrderedKeySet
from llrbset.interfaces.range_iterable import RangeIterable

__all__ = ["OrderedKeySet", "RangeIterable"]
