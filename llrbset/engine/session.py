"""
Session - Caller-owned handle around one ordered key set.
"""

import logging
import time
from dataclasses import dataclass
from typing import Any

from llrbset.engine.loader import KeySetLoader, LoadReport
from llrbset.engine.renderer import TreeRenderer
from llrbset.models.key_stream import KeyStream
from llrbset.models.sortedcontainers import LLRBTree

logger = logging.getLogger()


@dataclass
class OperationResult:
    """
    Outcome of a timed operation.

    Attributes:
        value: What the operation produced (found flag, added flag, keys, ...).
        elapsed: Wall-clock duration in seconds.
    """

    value: Any
    elapsed: float


class Session:
    """
    Owns one LLRB tree for the lifetime of an interactive run.

    Provides:
    - search(key): Check whether a key is present
    - insert(key): Add a key (duplicates ignored)
    - delete(key): Remove a key (absent keys ignored)
    - smallest(k): The k smallest keys in ascending order
    - render(max_depth): ASCII drawing of the tree
    - load(path): Bulk insert from a binary key stream
    - close(): Release every node, exactly once

    Every query and update is timed with a monotonic performance counter.
    """

    # Number of keys reported by the "smallest" menu entry
    DEFAULT_SMALLEST_COUNT = 10

    def __init__(self, tree: LLRBTree | None = None) -> None:
        """
        Initialize the session.

        Args:
            tree: Tree to take ownership of. A new empty tree if None.
        """
        self._tree = tree if tree is not None else LLRBTree()
        self._loader = KeySetLoader()
        self._renderer = TreeRenderer()
        self._closed = False

    @classmethod
    def from_file(cls, file_path: str) -> "Session":
        """
        Create a session and bulk load the given key stream into it.

        Raises:
            FileNotFoundError: If the file does not exist.
        """
        session = cls()
        session.load(file_path)
        return session

    @property
    def tree(self) -> LLRBTree:
        return self._tree

    @property
    def closed(self) -> bool:
        return self._closed

    def load(self, file_path: str) -> LoadReport:
        """Insert every complete record of the key stream at file_path."""
        self._check_open()
        with KeyStream(file_path) as stream:
            return self._loader.load(stream, self._tree)

    def search(self, key: int) -> OperationResult:
        self._check_open()
        start_time = time.perf_counter()
        found = self._tree.has(key)
        return OperationResult(found, time.perf_counter() - start_time)

    def insert(self, key: int) -> OperationResult:
        self._check_open()
        start_time = time.perf_counter()
        added = self._tree.insert(key)
        return OperationResult(added, time.perf_counter() - start_time)

    def delete(self, key: int) -> OperationResult:
        self._check_open()
        start_time = time.perf_counter()
        removed = self._tree.delete(key)
        return OperationResult(removed, time.perf_counter() - start_time)

    def smallest(self, k: int = DEFAULT_SMALLEST_COUNT) -> OperationResult:
        """
        Collect the k smallest keys.

        Raises:
            RuntimeError: If the session is closed.
            ValueError: If k is negative.
        """
        self._check_open()
        if k < 0:
            raise ValueError(f"k must be >= 0, got {k}")
        start_time = time.perf_counter()
        keys = self._tree.collect_smallest(k)
        return OperationResult(keys, time.perf_counter() - start_time)

    def render(self, max_depth: int = TreeRenderer.UNLIMITED_DEPTH) -> list[str]:
        self._check_open()
        return self._renderer.render(self._tree.root, max_depth)

    def close(self) -> None:
        """Release every node of the tree. Later calls do nothing."""
        if self._closed:
            return
        released = self._tree.clear()
        self._closed = True
        logger.debug(f"Session closed, released {released} nodes")

    def _check_open(self) -> None:
        if self._closed:
            raise RuntimeError("Session is closed")

    def __enter__(self) -> "Session":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
