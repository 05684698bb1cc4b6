"""Monotonic uptime counters and the wall clock."""

from __future__ import annotations

import time
from dataclasses import dataclass

from .core import InvalidError, UnsupportedError

_U32 = 0xFFFFFFFF


@dataclass(frozen=True)
class Timestamp:
    """Wall-clock time in seconds and nanoseconds."""

    tv_sec: int = 0
    tv_nsec: int = 0


def get_ms() -> int:
    """Milliseconds of monotonic time, wrapping at 32 bits."""
    return (time.monotonic_ns() // 1_000_000) & _U32


def get_s() -> int:
    """Seconds of monotonic time, wrapping at 32 bits."""
    return (time.monotonic_ns() // 1_000_000_000) & _U32


def get_time() -> Timestamp:
    """Current wall-clock time."""
    sec, nsec = divmod(time.time_ns(), 1_000_000_000)
    return Timestamp(tv_sec=sec & _U32, tv_nsec=nsec)


def set_time(timestamp: Timestamp) -> None:
    """Set the wall clock; raises InvalidError if the system refuses."""
    setter = getattr(time, "clock_settime_ns", None)
    if setter is None:
        raise UnsupportedError("setting the clock is not supported on this platform")
    try:
        setter(time.CLOCK_REALTIME, timestamp.tv_sec * 1_000_000_000 + timestamp.tv_nsec)
    except OSError as exc:
        raise InvalidError(f"cannot set clock: {exc}") from exc