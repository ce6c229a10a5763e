import os
import struct
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import BinaryIO

from llrbset.models.exceptions import KeyRangeError


class KeyStream:
    """
    Flat binary stream of integer keys.

    Each record is one signed integer of the native C ``int`` size in native
    byte order. There is no header and no length prefix; a truncated trailing
    record marks the end of the stream.
    """

    RECORD_FORMAT = "=i"
    RECORD_SIZE = struct.calcsize(RECORD_FORMAT)
    MIN_KEY = -(1 << (RECORD_SIZE * 8 - 1))
    MAX_KEY = (1 << (RECORD_SIZE * 8 - 1)) - 1

    def __init__(self, file_path: str) -> None:
        """
        Initialize key stream.

        Args:
            file_path: Path to the stream file.
        """
        self.file_path = file_path
        self._file: BinaryIO | None = None
        self._read_only: bool = True
        self._record = struct.Struct(self.RECORD_FORMAT)

    def open(self, read_only: bool = True) -> None:
        """
        Open the stream file.

        Args:
            read_only: If True, open for reading only; otherwise records are
                appended to the end of the file.

        Raises:
            FileNotFoundError: If opened read-only and the file does not exist.
        """
        self._read_only = read_only
        if not read_only:
            Path(self.file_path).parent.mkdir(parents=True, exist_ok=True)
        self._file = open(self.file_path, "rb" if read_only else "ab")

    def is_read_only(self) -> bool:
        return self._read_only

    def close(self) -> None:
        """Close the stream file, flushing if writable."""
        if self._file:
            if not self._read_only:
                self._file.flush()
            self._file.close()
            self._file = None

    def append(self, key: int) -> None:
        """
        Append one key record.

        Raises:
            RuntimeError: If the stream is read-only or not open.
            KeyRangeError: If key does not fit into a record.
        """
        self.append_all([key])

    def append_all(self, keys: Iterable[int]) -> int:
        """
        Append key records in order.

        Every key is range-checked before anything is written.

        Returns:
            Number of records written.
        """
        if self._read_only:
            raise RuntimeError("Cannot append to read-only key stream")
        if self._file is None:
            raise RuntimeError("Key stream is not open")

        keys = list(keys)
        for key in keys:
            if not self.MIN_KEY <= key <= self.MAX_KEY:
                raise KeyRangeError(key, self.MIN_KEY, self.MAX_KEY)

        self._file.write(b"".join(self._record.pack(key) for key in keys))
        return len(keys)

    def trailing_bytes(self) -> int:
        """Number of bytes after the last complete record."""
        if not os.path.exists(self.file_path):
            return 0
        return os.path.getsize(self.file_path) % self.RECORD_SIZE

    def __enter__(self) -> "KeyStream":
        if self._file is None:
            self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __iter__(self) -> Iterator[int]:
        """
        Iterate over all complete records in file order.

        A stream opened for reading is read through its own handle from the
        start of the file; otherwise the iterator opens and closes a handle.
        """
        if self._file is not None and self._read_only:
            self._file.seek(0)
            return _KeyStreamIterator(self._file, self._record, owns_file=False)
        return _KeyStreamIterator(open(self.file_path, "rb"), self._record)


class _KeyStreamIterator(Iterator[int]):
    """Iterator over key stream records."""

    def __init__(self, file: BinaryIO, record: struct.Struct, owns_file: bool = True) -> None:
        self._record = record
        self._file: BinaryIO | None = file
        self._owns_file = owns_file

    def __iter__(self) -> Iterator[int]:
        return self

    def __next__(self) -> int:
        if self._file is None:
            raise StopIteration

        chunk = self._file.read(self._record.size)
        if len(chunk) < self._record.size:
            # Empty or truncated trailing record ends the stream
            self.close()
            raise StopIteration

        return self._record.unpack(chunk)[0]

    def close(self) -> None:
        if self._file:
            if self._owns_file:
                self._file.close()
            self._file = None

    def __del__(self) -> None:
        self.close()

    def __enter__(self) -> "_KeyStreamIterator":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
