"""Rotation index shared across pulse ticks."""

import threading

__all__ = ["MonitorState", "next_index"]


def next_index(current: int, total: int) -> int:
    """Return the index following ``current`` in a set of ``total`` endpoints.

    Wraps to 0 past the last index. An empty set, or a ``current`` already
    beyond the set (it shrank on reload), also yields 0.
    """
    candidate = current + 1
    if candidate >= total:
        return 0
    return candidate


class MonitorState:
    """Round-robin cursor over the endpoint set.

    The lock covers the whole read-increment-wrap computation so that
    overlapping ticks could never probe the same endpoint twice or skip one.
    """

    def __init__(self, start_index: int = 0) -> None:
        if start_index < 0:
            raise ValueError("start_index must be >= 0")
        self._next_index = start_index
        self._lock = threading.Lock()

    def current_index(self) -> int:
        """Index of the endpoint to probe on this tick."""
        with self._lock:
            return self._next_index

    def advance(self, total: int) -> int:
        """Move to the next endpoint, wrapping at ``total``.

        Args:
            total: Size of the endpoint set loaded for this tick.

        Returns:
            The new index.
        """
        with self._lock:
            self._next_index = next_index(self._next_index, total)
            return self._next_index
