"""Packet identifiers and their wire encoding for header versions 1 and 2."""

from __future__ import annotations

from dataclasses import dataclass, field

from .core import BUFFER_SIZE, InvalidError

_PORT_BITS = 6


@dataclass(frozen=True)
class _HeaderFormat:
    """Size, address width and field layout of one header version."""

    size: int
    host_bits: int
    # field name -> (offset, mask)
    layout: dict[str, tuple[int, int]]


_V1 = _HeaderFormat(
    size=4,
    host_bits=5,
    layout={
        "pri": (30, 0x3),
        "src": (25, 0x1F),
        "dst": (20, 0x1F),
        "dport": (14, 0x3F),
        "sport": (8, 0x3F),
        "flags": (0, 0xFF),
    },
)

_V2 = _HeaderFormat(
    size=6,
    host_bits=14,
    layout={
        "pri": (46, 0x3),
        "dst": (32, 0x3FFF),
        "src": (18, 0x3FFF),
        "dport": (12, 0x3F),
        "sport": (6, 0x3F),
        "flags": (0, 0x3F),
    },
)


def _format(version: int) -> _HeaderFormat:
    # Anything other than version 2 is treated as version 1.
    return _V2 if version == 2 else _V1


def header_size(version: int = 2) -> int:
    """Number of header bytes for the given version."""
    return _format(version).size


def host_bits(version: int = 2) -> int:
    """Number of bits in a node address."""
    return _format(version).host_bits


def max_node_id(version: int = 2) -> int:
    """Highest node address, which is also the broadcast address."""
    return (1 << host_bits(version)) - 1


def max_port(version: int = 2) -> int:
    """Highest port number."""
    return (1 << _PORT_BITS) - 1


@dataclass
class PacketId:
    """The fields carried in a packet header."""

    pri: int = 0
    dst: int = 0
    src: int = 0
    dport: int = 0
    sport: int = 0
    flags: int = 0


def pack_id(packet_id: PacketId, version: int = 2) -> bytes:
    """Encode an identifier as big-endian header bytes."""
    fmt = _format(version)
    value = 0
    for name, (offset, mask) in fmt.layout.items():
        value |= (getattr(packet_id, name) & mask) << offset
    return value.to_bytes(fmt.size, "big")


def unpack_id(header: bytes, version: int = 2) -> PacketId:
    """Decode the identifier from the first header bytes of a frame."""
    fmt = _format(version)
    if len(header) < fmt.size:
        raise InvalidError(
            f"frame of {len(header)} bytes is shorter than the {fmt.size}-byte header"
        )
    value = int.from_bytes(bytes(header[: fmt.size]), "big")
    return PacketId(
        **{name: (value >> offset) & mask for name, (offset, mask) in fmt.layout.items()}
    )


def is_broadcast(addr: int, iface_addr: int, netmask: int, version: int = 2) -> bool:
    """Tell whether addr is a broadcast address on an interface's subnet."""
    bits = host_bits(version)
    if not 0 <= netmask <= bits:
        raise InvalidError(f"netmask {netmask} out of range 0..{bits}")
    hostmask = ((1 << (bits - netmask)) - 1) & 0xFFFF
    netbits = ((1 << bits) - 1 - hostmask) & 0xFFFF
    addr &= 0xFFFF
    if (addr & hostmask) == hostmask and (addr & netbits) == (iface_addr & netbits):
        return True
    return addr == max_node_id(version)


@dataclass
class Packet:
    """A packet: identifier plus payload."""

    id: PacketId = field(default_factory=PacketId)
    data: bytearray = field(default_factory=bytearray)
    timestamp_rx: int = 0
    capacity: int = field(default=BUFFER_SIZE, compare=False)

    def __post_init__(self) -> None:
        self.data = bytearray(self.data)

    @property
    def length(self) -> int:
        """Number of payload bytes."""
        return len(self.data)

    def frame(self, version: int = 2) -> bytes:
        """Header followed by payload, as sent on the wire."""
        return pack_id(self.id, version) + bytes(self.data)

    @classmethod
    def from_frame(cls, frame: bytes, version: int = 2) -> Packet:
        """Parse a received frame into a packet."""
        packet_id = unpack_id(frame, version)
        return cls(id=packet_id, data=bytearray(frame[header_size(version):]), timestamp_rx=0)