"""
Left-Leaning Red-Black tree implementation of an ordered key set.

Insert and delete run in O(log N) and rebalance with three local primitives:
left rotation, right rotation and color flip.
"""

from collections.abc import Iterator
from typing import Any

from llrbset.interfaces.ordered_key_set import OrderedKeySet
from llrbset.models.exceptions import TreeInvariantError
from llrbset.models.sortedcontainers.llrb_node import (
    Color,
    Node,
    flip_colors,
    is_red,
    rotate_left,
    rotate_right,
)


class LLRBTree(OrderedKeySet):
    """
    Left-Leaning Red-Black tree implementation of OrderedKeySet.

    Properties maintained after every insert/delete:
    1. No node has a red right child (red links lean left)
    2. No red node has a red left child (no two red links in a row)
    3. Every path from root to an empty link has the same number of black links
    4. Root is always black
    5. In-order traversal yields strictly ascending keys
    """

    def __init__(self) -> None:
        self._root: Node | None = None
        self._size: int = 0

    @property
    def root(self) -> Node | None:
        """Root node, for read-only traversals such as rendering."""
        return self._root

    def insert(self, key: Any) -> bool:
        """Insert a key. Duplicates are ignored. O(log N)"""
        size_before = self._size
        self._root = self._insert(self._root, key)
        self._root.color = Color.BLACK
        return self._size > size_before

    def delete(self, key: Any) -> bool:
        """Remove a key. Absent keys are ignored. O(log N)"""
        if self._root is None:
            return False

        size_before = self._size
        self._root = self._remove(self._root, key)
        if self._root is not None:
            self._root.color = Color.BLACK
        return self._size < size_before

    def has(self, key: Any) -> bool:
        return self._find_node(key) is not None

    def find(self, key: Any) -> Node | None:
        """Return the node holding key, or None. Never mutates the tree."""
        return self._find_node(key)

    def size(self) -> int:
        return self._size

    def height(self) -> int:
        """Number of nodes on the longest root-to-leaf path."""
        return self._height(self._root)

    def min_key(self) -> Any | None:
        if self._root is None:
            return None
        return self._min_node(self._root).key

    def max_key(self) -> Any | None:
        node = self._root
        if node is None:
            return None
        while node.right is not None:
            node = node.right
        return node.key

    def collect_smallest(self, k: int) -> list[Any]:
        """Return up to k smallest keys in ascending order. O(log N + k)"""
        result: list[Any] = []
        if k > 0:
            self._collect(self._root, result, k)
        return result

    def clear(self) -> int:
        """Release every node in post-order and empty the tree."""
        released = self._release_subtree(self._root)
        self._root = None
        return released

    def __contains__(self, key: Any) -> bool:
        return self.has(key)

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[Any]:
        return self.iterator()

    def iterator(self, start: Any = None, end: Any = None) -> Iterator[Any]:
        return _RangeIterator(self._root, start, end)

    def __repr__(self) -> str:
        return f"LLRBTree({list(self)!r})"

    def validate(self) -> None:
        """
        Verify that the tree satisfies the LLRB invariants.

        Raises:
            TreeInvariantError: naming the first violated rule and the key
                where it was detected.
        """
        if self._root is None:
            if self._size != 0:
                raise TreeInvariantError("size counter does not match node count", None)
            return

        if is_red(self._root):
            raise TreeInvariantError("root is not black", self._root.key)

        count = 0

        def dfs(node: Node | None, low: Any, high: Any) -> int:
            """Return the black height of the subtree; raise on the first violation."""
            nonlocal count
            if node is None:
                return 0
            count += 1

            if low is not None and not low < node.key:
                raise TreeInvariantError("keys out of order (left bound)", node.key)
            if high is not None and not node.key < high:
                raise TreeInvariantError("keys out of order (right bound)", node.key)

            if is_red(node.right):
                raise TreeInvariantError("right-leaning red link", node.key)
            if is_red(node) and is_red(node.left):
                raise TreeInvariantError("two red links in a row", node.key)

            left_black = dfs(node.left, low, node.key)
            right_black = dfs(node.right, node.key, high)
            if left_black != right_black:
                raise TreeInvariantError("black height mismatch", node.key)

            return left_black + (0 if is_red(node) else 1)

        dfs(self._root, None, None)

        if count != self._size:
            raise TreeInvariantError("size counter does not match node count", None)

    def _find_node(self, key: Any) -> Node | None:
        """Find node by key."""
        current = self._root
        while current is not None:
            if key < current.key:
                current = current.left
            elif key > current.key:
                current = current.right
            else:
                return current
        return None

    def _insert(self, h: Node | None, key: Any) -> Node:
        if h is None:
            self._size += 1
            return Node(key=key)

        if key < h.key:
            h.left = self._insert(h.left, key)
        elif key > h.key:
            h.right = self._insert(h.right, key)

        if is_red(h.right) and not is_red(h.left):
            h = rotate_left(h)
        if is_red(h.left) and is_red(h.left.left):
            h = rotate_right(h)
        if is_red(h.left) and is_red(h.right):
            flip_colors(h)

        return h

    def _move_red_left(self, h: Node) -> Node:
        """
        Make h.left or one of its children red.

        Precondition: h.left and h.left.left are black, h.right is present.
        """
        flip_colors(h)
        if is_red(h.right.left):
            h.right = rotate_right(h.right)
            h = rotate_left(h)
            flip_colors(h)
        return h

    def _move_red_right(self, h: Node) -> Node:
        """
        Make h.right or one of its children red.

        Precondition: h.right and h.right.left are black, h.left is present.
        """
        flip_colors(h)
        if is_red(h.left.left):
            h = rotate_right(h)
            flip_colors(h)
        return h

    def _fix_up(self, h: Node) -> Node:
        """Restore left-leaning reds on the way back up."""
        if is_red(h.right):
            h = rotate_left(h)
        if is_red(h.left) and is_red(h.left.left):
            h = rotate_right(h)
        if is_red(h.left) and is_red(h.right):
            flip_colors(h)
        return h

    def _min_node(self, h: Node) -> Node:
        while h.left is not None:
            h = h.left
        return h

    def _remove_min(self, h: Node) -> Node | None:
        if h.left is None:
            self._release(h)
            return None

        if not is_red(h.left) and not is_red(h.left.left):
            h = self._move_red_left(h)

        h.left = self._remove_min(h.left)
        return self._fix_up(h)

    def _remove(self, h: Node, key: Any) -> Node | None:
        if key < h.key:
            if h.left is None:
                # Key not present
                return h
            if not is_red(h.left) and not is_red(h.left.left):
                h = self._move_red_left(h)
            h.left = self._remove(h.left, key)
        else:
            if is_red(h.left):
                h = rotate_right(h)
            if key == h.key and h.right is None:
                self._release(h)
                return None
            if h.right is None:
                # Key not present; undo the rotation above
                return self._fix_up(h)
            if not is_red(h.right) and not is_red(h.right.left):
                h = self._move_red_right(h)
            if key == h.key:
                h.key = self._min_node(h.right).key
                h.right = self._remove_min(h.right)
            else:
                h.right = self._remove(h.right, key)

        return self._fix_up(h)

    def _collect(self, node: Node | None, result: list[Any], k: int) -> None:
        if node is None or len(result) >= k:
            return
        self._collect(node.left, result, k)
        if len(result) < k:
            result.append(node.key)
        self._collect(node.right, result, k)

    def _height(self, node: Node | None) -> int:
        if node is None:
            return 0
        return 1 + max(self._height(node.left), self._height(node.right))

    def _release(self, node: Node) -> None:
        """Detach a node that is leaving the tree."""
        node.left = None
        node.right = None
        self._size -= 1

    def _release_subtree(self, node: Node | None) -> int:
        if node is None:
            return 0
        released = self._release_subtree(node.left) + self._release_subtree(node.right)
        self._release(node)
        return released + 1


class _RangeIterator(Iterator[Any]):
    """Iterator for range queries on the LLRB tree."""

    def __init__(self, root: Node | None, start: Any, end: Any) -> None:
        self._stack: list[Node] = []
        self._end = end

        # Initialize stack with nodes >= start
        self._push_left_path(root, start)

    def __iter__(self) -> Iterator[Any]:
        return self

    def __next__(self) -> Any:
        if not self._stack:
            raise StopIteration

        node = self._stack.pop()

        if self._end is not None and node.key >= self._end:
            self._stack.clear()
            raise StopIteration

        # Push right subtree's left path
        self._push_left_path(node.right, None)

        return node.key

    def _push_left_path(self, node: Node | None, start: Any) -> None:
        """Push leftmost path to stack, respecting start bound."""
        while node:
            if start is not None and node.key < start:
                node = node.right
            else:
                self._stack.append(node)
                node = node.left

