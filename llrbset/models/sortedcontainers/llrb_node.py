"""
Node model and O(1) restructuring primitives for the Left-Leaning Red-Black tree.

The color of a node is the color of the link from its parent. Every primitive
works on a subtree root and returns the (possibly new) subtree root; the caller
relinks it into the parent slot.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Any


class Color(IntEnum):
    """Node color for the LLRB tree."""

    RED = 0
    BLACK = 1


@dataclass
class Node:
    """Node in the LLRB tree. Owns its two child slots."""

    key: Any
    color: Color = Color.RED
    left: "Node | None" = None
    right: "Node | None" = None

    def __repr__(self) -> str:
        return f"<{'R' if self.color == Color.RED else 'B'} {self.key!r}>"


def is_red(node: Node | None) -> bool:
    """Absent children count as black."""
    return node is not None and node.color == Color.RED


def rotate_left(h: Node) -> Node:
    """
    Turn a right-leaning link of h into a left-leaning one.

    Args:
        h: Subtree root. Must have a right child.

    Returns:
        The new subtree root (h's former right child).
    """
    x = h.right
    h.right = x.left
    x.left = h
    x.color = h.color
    h.color = Color.RED
    return x


def rotate_right(h: Node) -> Node:
    """
    Turn a left-leaning link of h into a right-leaning one.

    Args:
        h: Subtree root. Must have a left child.

    Returns:
        The new subtree root (h's former left child).
    """
    x = h.left
    h.left = x.right
    x.right = h
    x.color = h.color
    h.color = Color.RED
    return x


def _invert(node: Node) -> None:
    node.color = Color.BLACK if node.color == Color.RED else Color.RED


def flip_colors(h: Node) -> None:
    """Invert the color of h and of each present child."""
    _invert(h)
    if h.left is not None:
        _invert(h.left)
    if h.right is not None:
        _invert(h.right)
