"""
Ordered integer key set backed by a Left-Leaning Red-Black tree.

This package provides:
- insert(key) - O(log N), duplicates ignored
- delete(key) - O(log N), absent keys ignored
- has(key) - O(log N) search
- collect_smallest(k) - k smallest keys in ascending order
- Bulk loading from a flat binary stream of integers
"""

from llrbset.engine.session import Session
from llrbset.models.sortedcontainers import LLRBTree

__all__ = ["LLRBTree", "Session"]
