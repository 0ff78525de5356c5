"""Wall-clock time, time-zone information and short sleeps."""

from __future__ import annotations

import time
from dataclasses import dataclass

# Microseconds between 1601-01-01 and 1970-01-01.
DELTA_EPOCH_IN_MICROSECS = 11644473600000000

_BUSY_WAIT_LIMIT = 100


@dataclass(frozen=True)
class TimeZone:
    """Minutes west of Greenwich and the daylight-saving flag."""

    minutes_west: int
    dst_time: int


def filetime_to_timeval(filetime: int) -> tuple[int, int]:
    """Turn 100-nanosecond ticks since 1601 into ``(seconds, microseconds)``.

    Raises ValueError for times before the Unix epoch.
    """
    micros = int(filetime) // 10 - DELTA_EPOCH_IN_MICROSECS
    if micros < 0:
        raise ValueError("time lies before the Unix epoch")
    return micros // 1_000_000, micros % 1_000_000


def gettimeofday() -> tuple[int, int]:
    """Return the current time as ``(seconds, microseconds)`` since the epoch."""
    micros = time.time_ns() // 1000
    return micros // 1_000_000, micros % 1_000_000


def local_timezone() -> TimeZone:
    """Return the local time zone as minutes west of UTC and a DST flag."""
    return TimeZone(int(time.timezone / 60), int(time.daylight))


def usleep(microseconds: int) -> None:
    """Sleep for ``microseconds``; very short waits are spun for accuracy."""
    if microseconds <= 0:
        return
    if microseconds > _BUSY_WAIT_LIMIT:
        time.sleep(microseconds / 1_000_000)
        return
    start = time.perf_counter()
    while (time.perf_counter() - start) * 1_000_000 < microseconds:
        pass