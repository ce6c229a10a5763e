"""
Tests for data models: Node primitives, LLRBTree, KeyStream and exceptions.
"""

import pytest

from llrbset.models.exceptions import KeyRangeError, TreeInvariantError
from llrbset.models.key_stream import KeyStream
from llrbset.models.sortedcontainers import LLRBTree
from llrbset.models.sortedcontainers.llrb_node import (
    Color,
    Node,
    flip_colors,
    is_red,
    rotate_left,
    rotate_right,
)


class TestNodePrimitives:
    """Tests for rotations and color flips."""

    def test_new_node_is_red_leaf(self):
        node = Node(key=1)
        assert node.color == Color.RED
        assert node.left is None
        assert node.right is None

    def test_is_red_treats_absent_as_black(self):
        assert not is_red(None)
        assert is_red(Node(key=1))
        assert not is_red(Node(key=1, color=Color.BLACK))

    def test_rotate_left(self):
        """Right child becomes root, inherits color, old root turns red."""
        a, b, c = Node(key=1), Node(key=3), Node(key=5)
        x = Node(key=4, left=b, right=c)
        h = Node(key=2, color=Color.BLACK, left=a, right=x)

        root = rotate_left(h)

        assert root is x
        assert root.color == Color.BLACK
        assert root.left is h
        assert root.right is c
        assert h.color == Color.RED
        assert h.left is a
        assert h.right is b

    def test_rotate_right(self):
        """Left child becomes root, inherits color, old root turns red."""
        a, b, c = Node(key=1), Node(key=3), Node(key=5)
        x = Node(key=2, left=a, right=b)
        h = Node(key=4, color=Color.BLACK, left=x, right=c)

        root = rotate_right(h)

        assert root is x
        assert root.color == Color.BLACK
        assert root.right is h
        assert root.left is a
        assert h.color == Color.RED
        assert h.left is b
        assert h.right is c

    def test_flip_colors(self):
        left = Node(key=1, color=Color.RED)
        right = Node(key=3, color=Color.RED)
        h = Node(key=2, color=Color.BLACK, left=left, right=right)

        flip_colors(h)

        assert h.color == Color.RED
        assert left.color == Color.BLACK
        assert right.color == Color.BLACK

    def test_flip_colors_skips_absent_child(self):
        left = Node(key=1, color=Color.BLACK)
        h = Node(key=2, color=Color.RED, left=left)

        flip_colors(h)

        assert h.color == Color.BLACK
        assert left.color == Color.RED
        assert h.right is None


class TestLLRBTree:
    """Tests for the LLRBTree ordered key set."""

    def test_insert_and_has(self, tree):
        assert tree.insert(10)
        assert tree.insert(5)

        assert tree.has(10)
        assert 5 in tree
        assert not tree.has(7)
        assert tree.size() == 2

    def test_duplicate_insert_is_noop(self, tree):
        assert tree.insert(1)
        assert not tree.insert(1)

        assert tree.size() == 1
        assert list(tree) == [1]

    def test_root_is_black_after_insert(self, tree):
        for key in range(20):
            tree.insert(key)
            assert tree.root.color == Color.BLACK

    def test_example_queries(self, sample_tree):
        """Search and bounded collection on the reference tree."""
        assert sample_tree.has(4)
        assert not sample_tree.has(6)
        assert sample_tree.collect_smallest(3) == [1, 3, 4]

    def test_example_shape(self, sample_tree):
        """Inserting 5, 3, 8, 1, 4, 7, 9 yields a perfect all-black tree."""
        root = sample_tree.root
        assert root.key == 5
        assert (root.left.key, root.right.key) == (3, 8)
        assert (root.left.left.key, root.left.right.key) == (1, 4)
        assert (root.right.left.key, root.right.right.key) == (7, 9)
        assert all(sample_tree.find(k).color == Color.BLACK for k in sample_tree)

    def test_delete(self, sample_tree):
        assert sample_tree.delete(5)

        assert not sample_tree.has(5)
        assert list(sample_tree) == [1, 3, 4, 7, 8, 9]
        assert sample_tree.size() == 6
        sample_tree.validate()

    def test_delete_absent_key(self, sample_tree):
        assert sample_tree.delete(5)
        assert not sample_tree.delete(100)
        assert not sample_tree.delete(-100)
        assert not sample_tree.delete(5)

        assert list(sample_tree) == [1, 3, 4, 7, 8, 9]
        sample_tree.validate()

    def test_empty_tree_operations(self, tree):
        assert not tree.has(1)
        assert not tree.delete(1)
        assert tree.collect_smallest(10) == []
        assert tree.min_key() is None
        assert tree.max_key() is None
        assert tree.height() == 0
        assert tree.root is None
        tree.validate()

    def test_delete_last_key_empties_tree(self, tree):
        tree.insert(42)
        assert tree.delete(42)

        assert tree.root is None
        assert len(tree) == 0

    def test_find(self, sample_tree):
        node = sample_tree.find(7)
        assert node is not None
        assert node.key == 7
        assert sample_tree.find(6) is None

    def test_collect_smallest_bounds(self, sample_tree):
        assert sample_tree.collect_smallest(0) == []
        assert sample_tree.collect_smallest(-3) == []
        assert sample_tree.collect_smallest(1) == [1]
        assert sample_tree.collect_smallest(7) == [1, 3, 4, 5, 7, 8, 9]
        assert sample_tree.collect_smallest(10) == [1, 3, 4, 5, 7, 8, 9]

    def test_min_max_height(self, sample_tree):
        assert sample_tree.min_key() == 1
        assert sample_tree.max_key() == 9
        assert sample_tree.height() == 3

    def test_iteration(self, tree):
        for key in [30, 10, 20]:
            tree.insert(key)

        assert list(tree) == [10, 20, 30]

    def test_range_iteration(self, tree):
        for key in range(10):
            tree.insert(key)

        assert list(tree.iterator(3, 7)) == [3, 4, 5, 6]
        assert list(tree.iterator(start=8)) == [8, 9]
        assert list(tree.iterator(end=2)) == [0, 1]
        assert list(tree.iterator(20, 30)) == []

    def test_clear(self, sample_tree):
        root = sample_tree.root

        assert sample_tree.clear() == 7
        assert sample_tree.size() == 0
        assert sample_tree.root is None
        assert root.left is None and root.right is None

        # Reusable after teardown
        sample_tree.insert(1)
        assert list(sample_tree) == [1]

    def test_clear_empty_tree(self, tree):
        assert tree.clear() == 0

    def test_validate_detects_red_root(self, sample_tree):
        sample_tree.root.color = Color.RED

        with pytest.raises(TreeInvariantError) as exc_info:
            sample_tree.validate()
        assert exc_info.value.rule == "root is not black"
        assert exc_info.value.key == 5

    def test_validate_detects_right_leaning_red(self, sample_tree):
        # Black parent with a red right child
        sample_tree.find(9).color = Color.RED

        with pytest.raises(TreeInvariantError) as exc_info:
            sample_tree.validate()
        assert exc_info.value.rule == "right-leaning red link"
        assert exc_info.value.key == 8

    def test_validate_detects_red_red(self, sample_tree):
        sample_tree.find(3).color = Color.RED
        sample_tree.find(1).color = Color.RED

        with pytest.raises(TreeInvariantError) as exc_info:
            sample_tree.validate()
        assert exc_info.value.rule == "two red links in a row"
        assert exc_info.value.key == 3

    def test_validate_detects_black_imbalance(self, sample_tree):
        sample_tree.find(1).color = Color.RED

        with pytest.raises(TreeInvariantError) as exc_info:
            sample_tree.validate()
        assert exc_info.value.rule == "black height mismatch"
        assert exc_info.value.key == 3

    def test_validate_detects_disorder(self, sample_tree):
        sample_tree.find(4).key = 2

        with pytest.raises(TreeInvariantError) as exc_info:
            sample_tree.validate()
        assert "out of order" in exc_info.value.rule

    def test_repr(self, sample_tree):
        assert repr(sample_tree) == "LLRBTree([1, 3, 4, 5, 7, 8, 9])"


class TestKeyStream:
    """Tests for the flat binary key stream."""

    def test_append_and_iterate(self, write_keys):
        path = write_keys([5, -3, 0, 2147483647, -2147483648])

        assert list(KeyStream(path)) == [5, -3, 0, 2147483647, -2147483648]

    def test_record_layout(self, write_keys):
        path = write_keys([1, 2, 3])

        with open(path, "rb") as f:
            data = f.read()
        assert len(data) == 3 * KeyStream.RECORD_SIZE
        assert KeyStream.RECORD_SIZE == 4

    def test_truncated_tail_is_ignored(self, write_keys):
        path = write_keys([7, 8, 9], tail=b"\x01\x02")
        stream = KeyStream(path)

        assert list(stream) == [7, 8, 9]
        assert stream.trailing_bytes() == 2

    def test_empty_stream(self, write_keys):
        path = write_keys([])

        assert list(KeyStream(path)) == []

    def test_missing_file(self, stream_path):
        with pytest.raises(FileNotFoundError):
            list(KeyStream(stream_path))

    def test_key_out_of_range(self, stream_path):
        stream = KeyStream(stream_path)
        stream.open(read_only=False)

        with pytest.raises(KeyRangeError) as exc_info:
            stream.append_all([1, 2**31])
        stream.close()

        assert exc_info.value.value == 2**31
        assert exc_info.value.maximum == KeyStream.MAX_KEY
        # Nothing written when any key is out of range
        assert list(KeyStream(stream_path)) == []

    def test_append_requires_writable(self, write_keys):
        path = write_keys([1])

        with KeyStream(path) as stream:
            assert stream.is_read_only()
            with pytest.raises(RuntimeError):
                stream.append(2)

    def test_append_extends_file(self, write_keys):
        path = write_keys([1, 2])
        stream = KeyStream(path)
        stream.open(read_only=False)
        stream.append(3)
        stream.close()

        assert list(KeyStream(path)) == [1, 2, 3]

    def test_iterate_open_stream_uses_its_handle(self, write_keys, monkeypatch):
        path = write_keys([4, 5, 6])

        with KeyStream(path) as stream:
            handle = stream._file

            def fail_open(*args, **kwargs):
                raise AssertionError("iteration opened a second handle")

            monkeypatch.setattr("builtins.open", fail_open)
            assert list(stream) == [4, 5, 6]
            # Rewinds on each pass and leaves the handle open
            assert list(stream) == [4, 5, 6]
            assert stream._file is handle
            assert not handle.closed
            monkeypatch.undo()

        assert handle.closed
