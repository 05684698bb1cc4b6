"""Configuration, option flags, error types and debug counters shared by the stack."""

from __future__ import annotations

from dataclasses import dataclass, fields
from enum import IntEnum, IntFlag

BUFFER_SIZE = 256
"""Default number of data bytes a packet can hold."""


class CspError(Exception):
    """Base class for all errors raised by the stack."""


class NoMemoryError(CspError):
    """No room left: a buffer, queue or packet is full."""


class InvalidError(CspError):
    """An argument or a received frame is not valid."""


class AlreadyError(CspError):
    """The object is already registered or already in the requested state."""


class UnsupportedError(CspError):
    """The requested feature is not available."""


class Crc32Error(CspError):
    """A CRC32 checksum did not match."""


class HmacError(CspError):
    """An HMAC did not match."""


class Priority(IntEnum):
    """Packet priority, carried in the two top bits of the header."""

    CRITICAL = 0
    HIGH = 1
    NORM = 2
    LOW = 3


class Flag(IntFlag):
    """Header flags."""

    NONE = 0
    CRC32 = 0x01
    RDP = 0x02
    HMAC = 0x08
    FRAG = 0x10


class ConnOption(IntFlag):
    """Options given when opening a connection."""

    NONE = 0
    RDP = 0x01
    NORDP = 0x02
    HMAC = 0x04
    NOHMAC = 0x08
    CRC32 = 0x40
    NOCRC32 = 0x80


class DedupMode(IntEnum):
    """Where duplicate packets are filtered out."""

    OFF = 0
    FORWARD = 1
    INCOMING = 2
    ALL = 3


@dataclass
class Config:
    """Stack-wide settings."""

    version: int = 2
    hostname: str = ""
    model: str = ""
    revision: str = ""
    conn_dfl_so: ConnOption = ConnOption.NONE
    dedup: DedupMode = DedupMode.OFF

    def validate(self) -> Config:
        """Replace out-of-range settings with their defaults and return self."""
        if not 1 <= self.version <= 2:
            self.version = 2
        if int(self.dedup) > DedupMode.ALL or int(self.dedup) < 0:
            self.dedup = DedupMode.OFF
        else:
            self.dedup = DedupMode(int(self.dedup))
        self.conn_dfl_so = ConnOption(int(self.conn_dfl_so))
        return self


@dataclass
class DebugCounters:
    """Counters of error conditions seen by the stack."""

    buffer_out: int = 0
    errno: int = 0
    conn_out: int = 0
    conn_ovf: int = 0
    conn_noroute: int = 0
    can_errno: int = 0
    eth_errno: int = 0
    inval_reply: int = 0
    rdp_print: int = 0
    packet_print: int = 0

    def reset(self) -> None:
        """Set every counter back to zero."""
        for item in fields(self):
            setattr(self, item.name, 0)