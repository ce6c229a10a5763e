"""
Custom exceptions for the key set.
"""

from typing import Any


class TreeInvariantError(Exception):
    """
    Raised by validation when a red-black invariant does not hold.

    This indicates a bug in the rebalancing code, never bad user input.
    """

    def __init__(self, rule: str, key: Any):
        """
        Initialize invariant error.

        Args:
            rule: Short name of the violated invariant.
            key: Key of the node where the violation was detected.
        """
        self.rule = rule
        self.key = key
        super().__init__(f"Tree invariant violated at key {key!r}: {rule}")


class KeyRangeError(ValueError):
    """Raised when a key does not fit into a fixed-width stream record."""

    def __init__(self, value: int, minimum: int, maximum: int):
        self.value = value
        self.minimum = minimum
        self.maximum = maximum
        super().__init__(
            f"Key {value} does not fit a stream record: "
            f"expected {minimum} <= key <= {maximum}"
        )
