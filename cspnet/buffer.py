"""Fixed pool of reference-counted packet buffers."""

from __future__ import annotations

import threading
from dataclasses import replace

from .core import BUFFER_SIZE, AlreadyError, DebugCounters, InvalidError, NoMemoryError
from .header import Packet, PacketId
from .queue import BoundedQueue, QueueEmpty

DEFAULT_BUFFER_COUNT = 10


class BufferPool:
    """Hands out packets from a fixed set and takes them back when released."""

    def __init__(self, count: int = DEFAULT_BUFFER_COUNT, size: int = BUFFER_SIZE,
                 counters: DebugCounters | None = None) -> None:
        self.size = size
        self.counters = counters if counters is not None else DebugCounters()
        self._lock = threading.Lock()
        self._members: dict[int, Packet] = {}
        self._refcount: dict[int, int] = {}
        self._free: BoundedQueue[Packet] = BoundedQueue(count)
        for _ in range(count):
            packet = Packet(capacity=size)
            self._members[id(packet)] = packet
            self._refcount[id(packet)] = 0
            self._free.put_nowait(packet)

    def _key(self, packet: Packet) -> int:
        key = id(packet)
        if self._members.get(key) is not packet:
            raise InvalidError("packet does not belong to this pool")
        return key

    def get(self) -> Packet:
        """Take an empty packet from the pool; raises NoMemoryError if none is left."""
        try:
            packet = self._free.get_nowait()
        except QueueEmpty:
            self.counters.buffer_out += 1
            raise NoMemoryError("no free buffers") from None
        packet.id = PacketId()
        packet.data = bytearray()
        packet.timestamp_rx = 0
        with self._lock:
            self._refcount[id(packet)] = 1
        return packet

    def free(self, packet: Packet | None) -> None:
        """Drop one reference; the packet returns to the pool at zero."""
        if packet is None:
            return
        with self._lock:
            key = self._key(packet)
            if self._refcount[key] == 0:
                raise AlreadyError("buffer is already free")
            self._refcount[key] -= 1
            if self._refcount[key] > 0:
                return
        self._free.put_nowait(packet)

    def clone(self, packet: Packet | None) -> Packet | None:
        """A new pool packet holding a copy of packet's identifier and payload."""
        if packet is None:
            return None
        copy = self.get()
        copy.id = replace(packet.id)
        copy.data = bytearray(packet.data[:self.size])
        copy.timestamp_rx = packet.timestamp_rx
        return copy

    def ref_inc(self, packet: Packet) -> None:
        """Add a reference, so one more free is needed to release the packet."""
        if packet is None:
            raise InvalidError("cannot reference a missing packet")
        with self._lock:
            key = self._key(packet)
            self._refcount[key] += 1

    def remaining(self) -> int:
        """Number of packets still available."""
        return len(self._free)