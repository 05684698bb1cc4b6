"""Connection pool: allocation, lookup by identifier, queuing and closing."""

from __future__ import annotations

import threading
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from enum import IntEnum
from typing import Any

from .buffer import BufferPool
from .clock import get_ms
from .core import Config, ConnOption, DebugCounters, Flag, InvalidError, NoMemoryError, UnsupportedError
from .header import Packet, PacketId, max_port
from .queue import BoundedQueue, QueueEmpty, QueueFull

CONN_MAX = 8
CONN_RXQUEUE_LEN = 16
PORT_MAX_BIND = 16


class ConnState(IntEnum):
    """Whether a connection slot is in use."""

    CLOSED = 0
    OPEN = 1


class ConnType(IntEnum):
    """Which side opened the connection."""

    CLIENT = 0
    SERVER = 1


@dataclass(eq=False)
class Connection:
    """One slot of the connection pool."""

    table: ConnectionTable = field(repr=False)
    index: int
    sport_outgoing: int
    rx_queue: BoundedQueue[Packet] = field(repr=False)
    state: ConnState = ConnState.CLOSED
    type: ConnType = ConnType.CLIENT
    idin: PacketId = field(default_factory=PacketId)
    idout: PacketId = field(default_factory=PacketId)
    dest_socket: Any = None
    callback: Callable[[Packet], None] | None = None
    timestamp: int = 0
    opts: ConnOption = ConnOption.NONE

    @property
    def dport(self) -> int:
        return self.idin.dport

    @property
    def sport(self) -> int:
        return self.idin.sport

    @property
    def dst(self) -> int:
        return self.idin.dst

    @property
    def src(self) -> int:
        return self.idin.src

    @property
    def flags(self) -> int:
        return self.idin.flags

    def close(self) -> None:
        """Close the connection and drop its queued packets."""
        self.table.close(self)


class ConnectionTable:
    """Fixed pool of connections with outgoing source ports assigned per slot."""

    def __init__(self, max_conns: int = CONN_MAX, rxqueue_len: int = CONN_RXQUEUE_LEN,
                 config: Config | None = None, counters: DebugCounters | None = None,
                 buffers: BufferPool | None = None, clock: Callable[[], int] = get_ms,
                 port_max_bind: int = PORT_MAX_BIND, hmac_enabled: bool = True) -> None:
        self.config = config if config is not None else Config()
        if max_conns < 1:
            raise InvalidError(f"connection count must be positive, got {max_conns}")
        if port_max_bind + max_conns > max_port(self.config.version):
            raise InvalidError("more connections than available outgoing ports")
        self.counters = counters if counters is not None else DebugCounters()
        self.buffers = buffers
        self.hmac_enabled = hmac_enabled
        self._clock = clock
        self._lock = threading.Lock()
        self._last_given = 0
        self._conns = [
            Connection(table=self, index=index, sport_outgoing=port_max_bind + 1 + index,
                       rx_queue=BoundedQueue(rxqueue_len))
            for index in range(max_conns)
        ]

    def __iter__(self):
        return iter(self._conns)

    def __len__(self) -> int:
        return len(self._conns)

    def allocate(self, conn_type: ConnType) -> Connection:
        """Claim a closed slot, searching round-robin; raises NoMemoryError if none."""
        count = len(self._conns)
        with self._lock:
            index = self._last_given
            for _ in range(count):
                index = (index + 1) % count
                conn = self._conns[index]
                if conn.state == ConnState.CLOSED:
                    conn.state = ConnState.OPEN
                    self._last_given = index
                    break
            else:
                self.counters.conn_out += 1
                raise NoMemoryError("no free connections")
        conn.timestamp = 0
        conn.type = ConnType(conn_type)
        conn.idin.flags = 0
        conn.idout.flags = 0
        return conn

    def new(self, idin: PacketId, idout: PacketId, conn_type: ConnType) -> Connection:
        """Allocate a connection with the given identifiers and an empty queue."""
        conn = self.allocate(conn_type)
        conn.idin = replace(idin)
        conn.idout = replace(idout)
        conn.timestamp = self._clock()
        self._flush(conn)
        return conn

    def find_existing(self, packet_id: PacketId) -> Connection | None:
        """Open connection that an incoming packet with this identifier belongs to."""
        for conn in self._conns:
            if conn.state != ConnState.OPEN:
                continue
            if conn.idin.dport != packet_id.dport:
                continue
            if conn.type != ConnType.CLIENT:
                if conn.idin.sport != packet_id.sport or conn.idin.src != packet_id.src:
                    continue
            return conn
        return None

    def find_dport(self, dport: int) -> Connection | None:
        """Open client connection whose incoming destination port is dport."""
        for conn in self._conns:
            if conn.idin.dport == dport and conn.state == ConnState.OPEN \
                    and conn.type == ConnType.CLIENT:
                return conn
        return None

    def enqueue_packet(self, conn: Connection | None, packet: Packet) -> None:
        """Queue a received packet on a connection; raises NoMemoryError when full."""
        if conn is None:
            raise InvalidError("no connection given")
        try:
            conn.rx_queue.put_nowait(packet)
        except QueueFull:
            self.counters.conn_ovf += 1
            raise NoMemoryError("connection receive queue is full") from None

    def _flush(self, conn: Connection) -> None:
        while True:
            try:
                packet = conn.rx_queue.get_nowait()
            except QueueEmpty:
                return
            if packet is not None and self.buffers is not None:
                self.buffers.free(packet)

    def close(self, conn: Connection | None) -> None:
        """Close a connection; closing None or a closed connection does nothing."""
        if conn is None or conn.state == ConnState.CLOSED:
            return
        self._flush(conn)
        conn.state = ConnState.CLOSED

    def connect(self, prio: int, dest: int, dport: int,
                opts: ConnOption = ConnOption.NONE) -> Connection:
        """Open an outgoing client connection to dest:dport."""
        opts = ConnOption(int(opts) | int(self.config.conn_dfl_so))
        if opts & ConnOption.NOCRC32:
            opts &= ~ConnOption.CRC32

        flags = Flag.NONE
        if opts & ConnOption.RDP:
            raise UnsupportedError("reliable connections are not supported")
        if opts & ConnOption.HMAC:
            if not self.hmac_enabled:
                raise UnsupportedError("HMAC is not enabled")
            flags |= Flag.HMAC
        if opts & ConnOption.CRC32:
            flags |= Flag.CRC32

        incoming = PacketId(pri=prio, src=dest, dst=0, sport=dport, flags=int(flags))
        outgoing = PacketId(pri=prio, dst=dest, src=0, dport=dport, flags=int(flags))

        conn = self.new(incoming, outgoing, ConnType.CLIENT)
        conn.idout.sport = conn.sport_outgoing
        conn.idin.dport = conn.sport_outgoing
        conn.dest_socket = None
        conn.opts = opts
        return conn

    def format_table(self) -> str:
        """One line per connection slot with its state and identifiers."""
        return "\n".join(
            f"[{conn.index:02d}] S:{int(conn.state)}, {conn.idin.src} -> {conn.idin.dst}, "
            f"{conn.idin.dport} -> {conn.idin.sport} ({conn.sport_outgoing}) fl {conn.idin.flags:x}"
            for conn in self._conns
        )