# cspnet

Building blocks for the Cubesat Space Protocol (CSP), written in plain Python
with no dependencies outside the standard library.

## Modules

- `cspnet.core` – stack settings (`Config`, with `Config.validate()`),
  `Priority`, header flags (`Flag`), connection options (`ConnOption`),
  `DedupMode`, `DebugCounters` and the `CspError` family of exceptions
  (`NoMemoryError`, `InvalidError`, `AlreadyError`, `UnsupportedError`,
  `Crc32Error`, `HmacError`).
- `cspnet.header` – `PacketId` and `Packet`, encoding and decoding of the
  4-byte (version 1) and 6-byte (version 2) headers with `pack_id` and
  `unpack_id`, and the helpers `header_size`, `host_bits`, `max_node_id`,
  `max_port` and `is_broadcast`.
- `cspnet.crc32` – the CRC-32C checksum (`Crc32`, `crc32_memory`) and packet
  trailers (`crc32_append`, `crc32_verify`).
- `cspnet.sha1` – SHA-1 (`Sha1`, `sha1_memory`).
- `cspnet.auth` – HMAC-SHA1 (`hmac_memory`) and truncated HMAC trailers on
  packets (`HmacAuthenticator`).
- `cspnet.dedup` – `Deduplicator`, which remembers the checksums of the last
  16 frames and reports a frame seen again within 100 ms as a duplicate.
- `cspnet.queue` – `BoundedQueue`, a thread-safe FIFO with millisecond
  timeouts that raises `QueueFull` and `QueueEmpty`.
- `cspnet.semaphore` – `BinarySemaphore` with millisecond timeouts.
- `cspnet.buffer` – `BufferPool`, a fixed pool of reference-counted packets.
- `cspnet.iflist` – `Interface` and `InterfaceList`: lookup by address, name,
  index and subnet, default-interface handling and a printable table; also
  `bytesize` for scaling byte counts.
- `cspnet.conn` – `ConnectionTable` and `Connection`: round-robin
  allocation, lookup of the connection an incoming identifier belongs to,
  receive queues, closing and outgoing client connections.
- `cspnet.hexdump` – `hex_dump_lines` and `hex_dump`.
- `cspnet.clock` – `get_ms`, `get_s`, `get_time`, `set_time` and `Timestamp`.

## Examples

Checksums use the Castagnoli polynomial:

```python
from cspnet.crc32 import crc32_memory

assert crc32_memory(b"123456789") == 0xE3069283
```

Headers round-trip through their wire form:

```python
from cspnet.header import Packet, PacketId

packet = Packet(id=PacketId(pri=2, dst=10, src=1, dport=10, sport=20), data=b"hello")
frame = packet.frame(version=2)
assert Packet.from_frame(frame, version=2) == packet
```

Authenticating a packet and checking it on the other side:

```python
from cspnet.auth import HmacAuthenticator
from cspnet.header import Packet

key = b"secret"
auth = HmacAuthenticator(key)
packet = Packet(data=b"payload")
auth.append(packet)          # adds a 4-byte trailer
auth.verify(packet)          # checks and strips it, or raises HmacError
assert bytes(packet.data) == b"payload"
```

Buffers and connections:

```python
from cspnet.buffer import BufferPool
from cspnet.conn import ConnectionTable
from cspnet.core import ConnOption, Priority

pool = BufferPool(count=4)
table = ConnectionTable(buffers=pool)

conn = table.connect(Priority.NORM, dest=5, dport=10, opts=ConnOption.CRC32)
packet = pool.get()          # raises NoMemoryError when the pool is empty
packet.data += b"Hello world A\x00"
table.enqueue_packet(conn, packet)
conn.close()                 # queued packets go back to the pool
assert pool.remaining() == 4
```

A readable dump of some bytes:

```python
from cspnet.hexdump import hex_dump

hex_dump(b"Hello world A\x00", "payload")
```

## What this package does not do

It has no command-line programs, no router, no sockets or ports to bind, no
reliable (RDP) transport and no interface drivers: nothing here sends or
receives frames over a link. `ConnectionTable.connect` raises
`UnsupportedError` when asked for a reliable connection. The package provides
the data structures and checks that such a stack is built from.