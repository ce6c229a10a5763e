"""
RangeIterable protocol for key sets that support range iteration.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterator
from typing import Any


class RangeIterable(ABC):
    """
    Protocol for data structures that support iteration over a range of keys.

    Implementations must support:
    - Full iteration via __iter__
    - Range-bounded iteration via iterator(start, end)
    """

    @abstractmethod
    def __iter__(self) -> Iterator[Any]:
        """Return an iterator over all keys in ascending order."""
        pass

    @abstractmethod
    def iterator(self, start: Any = None, end: Any = None) -> Iterator[Any]:
        """
        Return an iterator over the keys in the specified range.

        Args:
            start: Start key (inclusive). If None, starts from the smallest key.
            end: End key (exclusive). If None, iterates to the largest key.

        Returns:
            Iterator yielding keys in ascending order.
        """
        pass
