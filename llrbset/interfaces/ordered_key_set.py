"""
OrderedKeySet abstract base class for self-balancing ordered key sets.
"""

from abc import abstractmethod
from typing import Any

from llrbset.interfaces.range_iterable import RangeIterable


class OrderedKeySet(RangeIterable):
    """
    Abstract base class for ordered sets of unique, comparable keys.

    Provides O(log N) insert, delete and search. Duplicate inserts and
    deletes of absent keys are defined no-ops, never errors.
    Inherits range iteration capabilities from RangeIterable.

    Implementations:
    - LLRBTree: Left-Leaning Red-Black tree
    """

    @abstractmethod
    def insert(self, key: Any) -> bool:
        """
        Insert a key.

        Args:
            key: The key to insert.

        Returns:
            True if the key was added, False if it was already present.

        Time complexity: O(log N)
        """
        pass

    @abstractmethod
    def delete(self, key: Any) -> bool:
        """
        Remove a key.

        Args:
            key: The key to remove.

        Returns:
            True if the key was found and removed, False otherwise.

        Time complexity: O(log N)
        """
        pass

    @abstractmethod
    def has(self, key: Any) -> bool:
        """
        Check if a key exists.

        Args:
            key: The key to check.

        Returns:
            True if the key exists, False otherwise.

        Time complexity: O(log N)
        """
        pass

    @abstractmethod
    def collect_smallest(self, k: int) -> list[Any]:
        """
        Return up to k smallest keys in ascending order.

        Args:
            k: Maximum number of keys to collect.

        Returns:
            The k smallest keys, or every key if the set holds fewer than k.

        Time complexity: O(log N + k)
        """
        pass

    @abstractmethod
    def size(self) -> int:
        """
        Return the number of keys.

        Time complexity: O(1)
        """
        pass

    @abstractmethod
    def clear(self) -> int:
        """
        Release every key.

        Returns:
            The number of keys released.
        """
        pass
