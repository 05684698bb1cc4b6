"""Thread-safe bounded FIFO queue with millisecond timeouts."""

from __future__ import annotations

import threading
from collections import deque
from typing import Generic, TypeVar

from .core import CspError, InvalidError

MAX_TIMEOUT = 0xFFFFFFFF
"""Timeout value that means wait forever."""

T = TypeVar("T")


class QueueFull(CspError):
    """No free slot became available before the timeout."""


class QueueEmpty(CspError):
    """No item became available before the timeout."""


def _timeout_seconds(timeout_ms: int | None) -> float | None:
    if timeout_ms is None or timeout_ms == MAX_TIMEOUT:
        return None
    return max(0, timeout_ms) / 1000.0


class BoundedQueue(Generic[T]):
    """FIFO queue holding at most a fixed number of items."""

    def __init__(self, length: int) -> None:
        if length < 1:
            raise InvalidError(f"queue length must be positive, got {length}")
        self.maxsize = length
        self._items: deque[T] = deque()
        self._cond = threading.Condition()

    def __len__(self) -> int:
        with self._cond:
            return len(self._items)

    def put(self, item: T, timeout_ms: int | None = 0) -> None:
        """Append an item, waiting up to timeout_ms for room; raises QueueFull."""
        with self._cond:
            if not self._cond.wait_for(lambda: len(self._items) < self.maxsize,
                                       _timeout_seconds(timeout_ms)):
                raise QueueFull(f"queue of {self.maxsize} items is full")
            self._items.append(item)
            self._cond.notify_all()

    def get(self, timeout_ms: int | None = 0) -> T:
        """Remove the oldest item, waiting up to timeout_ms; raises QueueEmpty."""
        with self._cond:
            if not self._cond.wait_for(lambda: bool(self._items), _timeout_seconds(timeout_ms)):
                raise QueueEmpty("queue is empty")
            item = self._items.popleft()
            self._cond.notify_all()
            return item

    def put_nowait(self, item: T) -> None:
        """Append an item without waiting."""
        self.put(item, 0)

    def get_nowait(self) -> T:
        """Remove the oldest item without waiting."""
        return self.get(0)

    def free(self) -> int:
        """Number of free slots."""
        with self._cond:
            return self.maxsize - len(self._items)

    def clear(self) -> None:
        """Drop every queued item."""
        with self._cond:
            self._items.clear()
            self._cond.notify_all()