"""Registry of network interfaces and their traffic counters."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from .core import AlreadyError, InvalidError
from .header import host_bits

_KIB = 1024
_MIB = 1024 * 1024


def bytesize(count: int) -> tuple[int, str]:
    """Scale a byte count to whole megabytes, kilobytes or bytes, with its unit letter."""
    if count >= _MIB:
        return count // _MIB, "M"
    if count >= _KIB:
        return count // _KIB, "K"
    return count, "B"


@dataclass(eq=False)
class Interface:
    """A network interface with its address, netmask and statistics."""

    name: str
    addr: int = 0
    netmask: int = 0
    is_default: bool = False
    tx: int = 0
    rx: int = 0
    tx_error: int = 0
    rx_error: int = 0
    drop: int = 0
    autherr: int = 0
    frame: int = 0
    txbytes: int = 0
    rxbytes: int = 0

    def is_within_subnet(self, addr: int, version: int = 2) -> bool:
        """True if addr lies on the same subnet as this interface."""
        bits = host_bits(version)
        if not 0 <= self.netmask <= bits:
            raise InvalidError(f"netmask {self.netmask} out of range 0..{bits}")
        mask = (((1 << self.netmask) - 1) << (bits - self.netmask)) & 0xFFFF
        return (self.addr & mask) == (addr & mask)


class InterfaceList:
    """Ordered collection of interfaces with unique names."""

    def __init__(self, version: int = 2, loopback: Interface | None = None) -> None:
        self.version = version
        self.loopback = loopback
        self._ifaces: list[Interface] = []
        if loopback is not None:
            self.add(loopback)

    def __iter__(self) -> Iterator[Interface]:
        return iter(list(self._ifaces))

    def __len__(self) -> int:
        return len(self._ifaces)

    def add(self, iface: Interface) -> None:
        """Append an interface; raises AlreadyError if it or its name is present."""
        for existing in self._ifaces:
            if existing is iface or existing.name == iface.name:
                raise AlreadyError(f"interface {iface.name!r} is already registered")
        self._ifaces.append(iface)

    def remove(self, iface: Interface | None) -> None:
        """Remove an interface; does nothing if it is not registered."""
        if iface is None:
            return
        self._ifaces = [existing for existing in self._ifaces if existing is not iface]

    def get_by_addr(self, addr: int) -> Interface | None:
        """First interface with the given address."""
        return next((iface for iface in self._ifaces if iface.addr == addr), None)

    def get_by_name(self, name: str) -> Interface | None:
        """Interface with the given name."""
        return next((iface for iface in self._ifaces if iface.name == name), None)

    def get_by_index(self, index: int) -> Interface | None:
        """Interface at a position in registration order, or None."""
        if 0 <= index < len(self._ifaces):
            return self._ifaces[index]
        return None

    def iter_by_subnet(self, addr: int) -> Iterator[Interface]:
        """Interfaces with a netmask whose subnet contains addr."""
        for iface in list(self._ifaces):
            if iface.netmask == 0:
                continue
            if iface.is_within_subnet(addr, self.version):
                yield iface

    def iter_default(self) -> Iterator[Interface]:
        """Interfaces marked as default."""
        for iface in list(self._ifaces):
            if iface.is_default:
                yield iface

    def check_default(self) -> None:
        """If no interface is default, make every one except loopback default."""
        if next(self.iter_default(), None) is not None:
            return
        for iface in self._ifaces:
            if iface is self.loopback:
                continue
            iface.is_default = True

    def format_table(self) -> str:
        """Human-readable listing of every interface and its counters."""
        blocks = []
        for iface in self._ifaces:
            tx, tx_unit = bytesize(iface.txbytes)
            rx, rx_unit = bytesize(iface.rxbytes)
            blocks.append(
                f"{iface.name:<10} addr: {iface.addr} netmask: {iface.netmask} dfl: {int(iface.is_default)}\n"
                f"           tx: {iface.tx:05d} rx: {iface.rx:05d} "
                f"txe: {iface.tx_error:05d} rxe: {iface.rx_error:05d}\n"
                f"           drop: {iface.drop:05d} autherr: {iface.autherr:05d} frame: {iface.frame:05d}\n"
                f"           txb: {iface.txbytes} ({tx}{tx_unit}) rxb: {iface.rxbytes} ({rx}{rx_unit}) \n"
            )
        return "\n".join(blocks)