"""Time helpers for the generator.

This module provides:
- TIME_UNIT_NS: the length of one time unit, in nanoseconds
- DEFAULT_EPOCH: the zero point used when no epoch is configured
- to_units: a function to convert a datetime into whole time units
- now_ns: the default clock
- current_elapsed_time: a function for units elapsed since an epoch
- sleep_time: a function for how long to wait out a borrowed time unit
"""

import time
from datetime import datetime, timezone

TIME_UNIT_NS = 10_000_000  # 10 msec

DEFAULT_EPOCH = datetime(2014, 9, 1, tzinfo=timezone.utc)

_UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def as_utc(moment: datetime) -> datetime:
    """Returns ``moment`` in UTC, treating naive datetimes as UTC already."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def to_nanoseconds(moment: datetime) -> int:
    """Converts a datetime into integer nanoseconds since the Unix epoch.

    Integer arithmetic on the timedelta keeps microsecond precision that
    ``datetime.timestamp()`` would round away.
    """
    delta = as_utc(moment) - _UNIX_EPOCH
    return (delta.days * 86_400 + delta.seconds) * 1_000_000_000 + delta.microseconds * 1_000


def to_units(moment: datetime) -> int:
    """Converts a datetime into whole time units since the Unix epoch."""
    return to_nanoseconds(moment) // TIME_UNIT_NS


def now_ns() -> int:
    """Returns the current wall-clock time in UTC nanoseconds."""
    return time.time_ns()


def current_elapsed_time(epoch_units: int, now: int) -> int:
    """Returns whole time units elapsed between ``epoch_units`` and ``now`` (ns)."""
    return now // TIME_UNIT_NS - epoch_units


def sleep_time(overtime: int, now: int) -> float:
    """Returns seconds to block until a borrowed unit begins.

    Args:
        overtime (int): How many units ahead of the clock the generator is
        now (int): The clock reading in nanoseconds that ``overtime`` was computed against

    Returns:
        float: Seconds to sleep, never negative
    """
    wait = overtime * TIME_UNIT_NS - now % TIME_UNIT_NS
    return max(wait, 0) / 1_000_000_000
