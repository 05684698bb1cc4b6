import pytest

from cspnet.core import AlreadyError, InvalidError
from cspnet.iflist import Interface, InterfaceList, bytesize


def test_bytesize_units():
    assert bytesize(512) == (512, "B")
    assert bytesize(5 * 1024) == (5, "K")
    assert bytesize(7 * 1024 * 1024) == (7, "M")


def test_bytesize_rounds_down():
    size, unit = bytesize(5 * 1024 + 1000)
    assert (size, unit) == (5, "K")


def test_add_and_lookup():
    ifaces = InterfaceList()
    a = Interface("A", addr=5)
    b = Interface("B", addr=9)
    ifaces.add(a)
    ifaces.add(b)
    assert ifaces.get_by_name("B") is b
    assert ifaces.get_by_addr(5) is a
    assert ifaces.get_by_index(0) is a
    assert ifaces.get_by_index(1) is b
    assert ifaces.get_by_index(2) is None
    assert ifaces.get_by_index(-1) is None
    assert ifaces.get_by_name("C") is None
    assert list(ifaces) == [a, b]


def test_add_duplicate_name_rejected():
    ifaces = InterfaceList()
    ifaces.add(Interface("CAN"))
    with pytest.raises(AlreadyError):
        ifaces.add(Interface("CAN"))
    assert len(ifaces) == 1


def test_add_same_object_rejected():
    ifaces = InterfaceList()
    iface = Interface("ZMQ")
    ifaces.add(iface)
    with pytest.raises(AlreadyError):
        ifaces.add(iface)


def test_remove_head_and_middle():
    ifaces = InterfaceList()
    a, b, c = Interface("A"), Interface("B"), Interface("C")
    for iface in (a, b, c):
        ifaces.add(iface)
    ifaces.remove(b)
    assert list(ifaces) == [a, c]
    ifaces.remove(a)
    assert list(ifaces) == [c]
    ifaces.remove(Interface("X"))
    ifaces.remove(None)
    assert list(ifaces) == [c]


def test_is_within_subnet():
    iface = Interface("A", addr=0x1000, netmask=4)
    assert iface.is_within_subnet(0x1005)
    assert not iface.is_within_subnet(0x2000)


def test_is_within_subnet_bad_netmask():
    with pytest.raises(InvalidError):
        Interface("A", netmask=20).is_within_subnet(1)


def test_iter_by_subnet_skips_zero_netmask():
    ifaces = InterfaceList()
    zero = Interface("Z", addr=0x1000, netmask=0)
    net = Interface("N", addr=0x1000, netmask=4)
    other = Interface("O", addr=0x2000, netmask=4)
    for iface in (zero, net, other):
        ifaces.add(iface)
    assert list(ifaces.iter_by_subnet(0x1001)) == [net]


def test_check_default_sets_all_but_loopback():
    loop = Interface("LOOP", netmask=14)
    ifaces = InterfaceList(loopback=loop)
    a, b = Interface("A"), Interface("B")
    ifaces.add(a)
    ifaces.add(b)
    ifaces.check_default()
    assert list(ifaces.iter_default()) == [a, b]
    assert not loop.is_default


def test_check_default_keeps_existing_choice():
    ifaces = InterfaceList()
    a, b = Interface("A"), Interface("B", is_default=True)
    ifaces.add(a)
    ifaces.add(b)
    ifaces.check_default()
    assert list(ifaces.iter_default()) == [b]


def test_format_table_mentions_interfaces():
    ifaces = InterfaceList()
    ifaces.add(Interface("KISS", addr=5, netmask=8, txbytes=3 * 1024))
    text = ifaces.format_table()
    assert text.startswith("KISS")
    assert "addr: 5 netmask: 8" in text
    assert "(3K)" in text