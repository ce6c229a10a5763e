"""
Ordered key set implementations.
"""

from llrbset.models.sortedcontainers.llrb_tree import LLRBTree

__all__ = ["LLRBTree"]
