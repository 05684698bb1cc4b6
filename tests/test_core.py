import pytest

from cspnet.core import (
    AlreadyError,
    Config,
    ConnOption,
    CspError,
    Crc32Error,
    DebugCounters,
    DedupMode,
    HmacError,
    InvalidError,
    NoMemoryError,
    UnsupportedError,
)


def test_config_defaults():
    conf = Config()
    assert conf.version == 2
    assert conf.hostname == ""
    assert conf.conn_dfl_so == ConnOption.NONE
    assert conf.dedup == DedupMode.OFF


@pytest.mark.parametrize("version", [0, 3, 200])
def test_validate_resets_bad_version(version):
    assert Config(version=version).validate().version == 2


def test_validate_keeps_version_one():
    assert Config(version=1).validate().version == 1


def test_validate_resets_bad_dedup():
    conf = Config(dedup=7).validate()
    assert conf.dedup is DedupMode.OFF


def test_validate_keeps_valid_dedup():
    conf = Config(dedup=3).validate()
    assert conf.dedup is DedupMode.ALL


def test_debug_counters_reset():
    counters = DebugCounters()
    counters.buffer_out += 3
    counters.conn_ovf += 1
    counters.reset()
    assert counters == DebugCounters()


@pytest.mark.parametrize(
    "exc", [NoMemoryError, InvalidError, AlreadyError, UnsupportedError, Crc32Error, HmacError]
)
def test_errors_share_base(exc):
    err = exc("boom")
    assert isinstance(err, CspError)
    assert str(err) == "boom"