"""
Shared pytest fixtures for key set tests.
"""

import os
import tempfile

import pytest

from llrbset.engine.session import Session
from llrbset.models.key_stream import KeyStream
from llrbset.models.sortedcontainers import LLRBTree


@pytest.fixture
def temp_dir():
    """Provide a temporary directory that is cleaned up after test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir


@pytest.fixture
def stream_path(temp_dir):
    """Provide a path for a key stream file."""
    return os.path.join(temp_dir, "keys.bin")


@pytest.fixture
def write_keys(stream_path):
    """Write keys to the stream file and return its path."""

    def _write(keys, tail: bytes = b""):
        stream = KeyStream(stream_path)
        stream.open(read_only=False)
        stream.append_all(keys)
        stream.close()
        if tail:
            with open(stream_path, "ab") as f:
                f.write(tail)
        return stream_path

    return _write


@pytest.fixture
def sample_keys():
    """Keys of the reference example tree."""
    return [5, 3, 8, 1, 4, 7, 9]


@pytest.fixture
def tree():
    """Provide a fresh LLRBTree instance."""
    return LLRBTree()


@pytest.fixture
def sample_tree(sample_keys):
    """Provide a tree holding the sample keys."""
    tree = LLRBTree()
    for key in sample_keys:
        tree.insert(key)
    return tree


@pytest.fixture
def session(sample_tree):
    """Provide a Session owning the sample tree."""
    with Session(sample_tree) as s:
        yield s
