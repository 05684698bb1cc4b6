"""Binary semaphore with millisecond timeouts."""

from __future__ import annotations

import threading

from .queue import MAX_TIMEOUT


class BinarySemaphore:
    """Semaphore whose count never exceeds one; starts available."""

    def __init__(self, available: bool = True) -> None:
        self._value = 1 if available else 0
        self._cond = threading.Condition()

    @property
    def available(self) -> bool:
        """True if a wait would succeed at once."""
        with self._cond:
            return self._value > 0

    def wait(self, timeout_ms: int | None = MAX_TIMEOUT) -> bool:
        """Take the semaphore, waiting up to timeout_ms; False on timeout."""
        timeout = None if timeout_ms is None or timeout_ms == MAX_TIMEOUT else max(0, timeout_ms) / 1000.0
        with self._cond:
            if not self._cond.wait_for(lambda: self._value > 0, timeout):
                return False
            self._value = 0
            return True

    def post(self) -> None:
        """Release the semaphore; posting an available semaphore does nothing."""
        with self._cond:
            if self._value > 0:
                return
            self._value = 1
            self._cond.notify()