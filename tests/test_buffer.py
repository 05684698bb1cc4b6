import pytest

from cspnet.buffer import BufferPool
from cspnet.core import AlreadyError, DebugCounters, InvalidError, NoMemoryError
from cspnet.header import Packet, PacketId


def test_get_and_free_round_trip():
    pool = BufferPool(count=3)
    assert pool.remaining() == 3
    packet = pool.get()
    assert pool.remaining() == 2
    assert packet.length == 0
    pool.free(packet)
    assert pool.remaining() == 3


def test_exhaustion_raises_and_counts():
    counters = DebugCounters()
    pool = BufferPool(count=2, counters=counters)
    first = pool.get()
    second = pool.get()
    assert first is not second
    with pytest.raises(NoMemoryError):
        pool.get()
    assert counters.buffer_out == 1
    assert pool.remaining() == 0


def test_double_free_raises():
    pool = BufferPool(count=2)
    packet = pool.get()
    pool.free(packet)
    with pytest.raises(AlreadyError):
        pool.free(packet)
    assert pool.remaining() == 2


def test_free_none_leaves_pool_unchanged():
    pool = BufferPool(count=2)
    pool.get()
    pool.free(None)
    assert pool.remaining() == 1


def test_foreign_packet_rejected():
    pool = BufferPool(count=2)
    with pytest.raises(InvalidError):
        pool.free(Packet())
    with pytest.raises(InvalidError):
        pool.ref_inc(Packet())
    with pytest.raises(InvalidError):
        pool.ref_inc(None)


def test_refcount_needs_matching_frees():
    pool = BufferPool(count=2)
    packet = pool.get()
    pool.ref_inc(packet)
    pool.free(packet)
    assert pool.remaining() == 1
    pool.free(packet)
    assert pool.remaining() == 2


def test_get_returns_cleared_packet():
    pool = BufferPool(count=1)
    packet = pool.get()
    packet.data += b"Hello world A"
    packet.id = PacketId(pri=2, dst=5, dport=10)
    pool.free(packet)
    again = pool.get()
    assert again is packet
    assert again.length == 0
    assert again.id == PacketId()


def test_clone_copies_contents():
    pool = BufferPool(count=3)
    original = pool.get()
    original.data += b"Hello world A"
    original.id = PacketId(pri=2, dst=5, src=1, dport=10, sport=20)
    copy = pool.clone(original)
    assert copy is not original
    assert copy == original
    copy.data += b"!"
    assert original.data == bytearray(b"Hello world A")
    assert pool.remaining() == 1


def test_clone_none_and_exhausted():
    pool = BufferPool(count=1)
    assert pool.clone(None) is None
    packet = pool.get()
    with pytest.raises(NoMemoryError):
        pool.clone(packet)


def test_packets_carry_pool_size():
    pool = BufferPool(count=1, size=100)
    assert pool.get().capacity == 100