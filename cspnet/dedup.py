"""Detection of packets received twice within a short window."""

from __future__ import annotations

from collections.abc import Callable

from .clock import get_ms
from .crc32 import crc32_memory
from .header import Packet

DEDUP_COUNT = 16
DEDUP_WINDOW_MS = 100

_U32 = 0xFFFFFFFF


class Deduplicator:
    """Remembers checksums of recent frames in a ring buffer."""

    def __init__(self, version: int = 2, clock: Callable[[], int] = get_ms,
                 count: int = DEDUP_COUNT, window_ms: int = DEDUP_WINDOW_MS) -> None:
        self.version = version
        self.window_ms = window_ms
        self._clock = clock
        self._count = count
        self._crcs = [0] * count
        self._stamps = [0] * count
        self._next = 0

    def is_duplicate(self, packet: Packet) -> bool:
        """True if the same frame was seen recently; otherwise record it."""
        crc = crc32_memory(packet.frame(self.version))
        now = self._clock()

        index = (self._next - 1) % self._count
        while index != self._next:
            if now > (self._stamps[index] + self.window_ms) & _U32:
                break
            if crc == self._crcs[index]:
                return True
            index = (index - 1) % self._count

        self._crcs[self._next] = crc
        self._stamps[self._next] = now
        self._next = (self._next + 1) % self._count
        return False