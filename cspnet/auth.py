"""HMAC-SHA1 packet authentication."""

from __future__ import annotations

import hmac as _hmac

from .core import BUFFER_SIZE, HmacError, InvalidError, NoMemoryError
from .header import Packet, pack_id
from .sha1 import BLOCK_SIZE, Sha1, sha1_memory

HMAC_KEY_LENGTH = 16
HMAC_LENGTH = 4


def hmac_memory(key: bytes, data: bytes) -> bytes:
    """Full 20-byte HMAC-SHA1 of data under key."""
    key = bytes(key)
    if not key:
        raise InvalidError("HMAC key must not be empty")
    if len(key) > BLOCK_SIZE:
        key = sha1_memory(key)
    key = key.ljust(BLOCK_SIZE, b"\x00")

    inner = Sha1(bytes(byte ^ 0x36 for byte in key)).update(data).digest()
    return Sha1(bytes(byte ^ 0x5C for byte in key)).update(inner).digest()


class HmacAuthenticator:
    """Appends and checks truncated HMAC trailers on packets."""

    def __init__(self, key: bytes | None = None, length: int = HMAC_LENGTH) -> None:
        self.length = length
        self._key = bytes(HMAC_KEY_LENGTH)
        if key is not None:
            self.set_key(key)

    def set_key(self, key: bytes) -> None:
        """Derive the packet key from a shared secret via SHA-1."""
        self._key = sha1_memory(bytes(key))[:HMAC_KEY_LENGTH]

    def _mac(self, packet: Packet, body: bytes, include_header: bool, version: int) -> bytes:
        covered = pack_id(packet.id, version) + body if include_header else body
        return hmac_memory(self._key, covered)[:self.length]

    def append(self, packet: Packet, include_header: bool = False, version: int = 2) -> None:
        """Append an HMAC trailer to the packet payload."""
        capacity = getattr(packet, "capacity", BUFFER_SIZE)
        if packet.length + self.length > capacity:
            raise NoMemoryError("no room for HMAC trailer")
        packet.data += self._mac(packet, bytes(packet.data), include_header, version)

    def verify(self, packet: Packet, include_header: bool = False, version: int = 2) -> None:
        """Check and strip the HMAC trailer; raises HmacError on mismatch."""
        if packet.length < self.length:
            raise HmacError("packet too short to hold an HMAC")
        split = packet.length - self.length
        body = bytes(packet.data[:split])
        expected = self._mac(packet, body, include_header, version)
        if not _hmac.compare_digest(expected, bytes(packet.data[split:])):
            raise HmacError("HMAC mismatch")
        del packet.data[split:]