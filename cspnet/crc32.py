"""CRC32 (Castagnoli polynomial) checksums and packet trailers."""

from __future__ import annotations

from .core import BUFFER_SIZE, Crc32Error, NoMemoryError
from .header import Packet, pack_id

_POLY = 0x82F63B78
_TRAILER = 4


def _make_table() -> tuple[int, ...]:
    table = []
    for byte in range(256):
        crc = byte
        for _ in range(8):
            crc = (crc >> 1) ^ _POLY if crc & 1 else crc >> 1
        table.append(crc)
    return tuple(table)


_TABLE = _make_table()


class Crc32:
    """Running CRC32 computation."""

    def __init__(self, data: bytes = b"") -> None:
        self._crc = 0xFFFFFFFF
        if data:
            self.update(data)

    def update(self, data: bytes) -> Crc32:
        """Feed more bytes and return self."""
        crc = self._crc
        for byte in bytes(data):
            crc = _TABLE[(crc ^ byte) & 0xFF] ^ (crc >> 8)
        self._crc = crc
        return self

    def digest(self) -> int:
        """The final checksum as an unsigned 32-bit integer."""
        return self._crc ^ 0xFFFFFFFF


def crc32_memory(data: bytes) -> int:
    """Checksum of a block of bytes."""
    return Crc32(data).digest()


def crc32_append(packet: Packet, version: int = 2, include_header: bool = False) -> None:
    """Append a big-endian CRC32 to the packet payload."""
    capacity = getattr(packet, "capacity", BUFFER_SIZE)
    if packet.length + _TRAILER > capacity:
        raise NoMemoryError("no room for CRC32 trailer")
    covered = packet.frame(version) if include_header else bytes(packet.data)
    packet.data += crc32_memory(covered).to_bytes(_TRAILER, "big")


def crc32_verify(packet: Packet, version: int = 2) -> None:
    """Check and strip the CRC32 trailer, with or without the header covered."""
    if packet.length < _TRAILER:
        raise Crc32Error("packet too short to hold a CRC32")
    body = bytes(packet.data[:-_TRAILER])
    trailer = int.from_bytes(bytes(packet.data[-_TRAILER:]), "big")
    if crc32_memory(pack_id(packet.id, version) + body) != trailer and crc32_memory(body) != trailer:
        raise Crc32Error("CRC32 mismatch")
    del packet.data[-_TRAILER:]