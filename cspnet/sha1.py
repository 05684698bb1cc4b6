"""SHA-1 message digest."""

from __future__ import annotations

BLOCK_SIZE = 64
DIGEST_SIZE = 20

_MASK = 0xFFFFFFFF
_INITIAL = (0x67452301, 0xEFCDAB89, 0x98BADCFE, 0x10325476, 0xC3D2E1F0)


def _rol(value: int, count: int) -> int:
    return ((value << count) | (value >> (32 - count))) & _MASK


def _compress(state: list[int], block: bytes) -> None:
    w = [int.from_bytes(block[offset:offset + 4], "big") for offset in range(0, BLOCK_SIZE, 4)]
    for index in range(16, 80):
        w.append(_rol(w[index - 3] ^ w[index - 8] ^ w[index - 14] ^ w[index - 16], 1))

    a, b, c, d, e = state
    for index, word in enumerate(w):
        if index < 20:
            f, k = d ^ (b & (c ^ d)), 0x5A827999
        elif index < 40:
            f, k = b ^ c ^ d, 0x6ED9EBA1
        elif index < 60:
            f, k = (b & c) | (d & (b | c)), 0x8F1BBCDC
        else:
            f, k = b ^ c ^ d, 0xCA62C1D6
        temp = (_rol(a, 5) + f + e + word + k) & _MASK
        a, b, c, d, e = temp, a, _rol(b, 30), c, d

    for position, value in enumerate((a, b, c, d, e)):
        state[position] = (state[position] + value) & _MASK


class Sha1:
    """Running SHA-1 computation."""

    block_size = BLOCK_SIZE
    digest_size = DIGEST_SIZE

    def __init__(self, data: bytes = b"") -> None:
        self._state = list(_INITIAL)
        self._pending = bytearray()
        self._length = 0
        if data:
            self.update(data)

    def update(self, data: bytes) -> Sha1:
        """Feed more bytes and return self."""
        data = bytes(data)
        self._length += len(data)
        self._pending += data
        full = len(self._pending) - len(self._pending) % BLOCK_SIZE
        for offset in range(0, full, BLOCK_SIZE):
            _compress(self._state, bytes(self._pending[offset:offset + BLOCK_SIZE]))
        del self._pending[:full]
        return self

    def digest(self) -> bytes:
        """The 20-byte digest of everything fed so far."""
        state = list(self._state)
        tail = bytes(self._pending) + b"\x80"
        tail += bytes((56 - len(tail)) % BLOCK_SIZE)
        tail += ((self._length * 8) & 0xFFFFFFFFFFFFFFFF).to_bytes(8, "big")
        for offset in range(0, len(tail), BLOCK_SIZE):
            _compress(state, tail[offset:offset + BLOCK_SIZE])
        return b"".join(value.to_bytes(4, "big") for value in state)


def sha1_memory(data: bytes) -> bytes:
    """SHA-1 digest of a block of bytes."""
    return Sha1(data).digest()