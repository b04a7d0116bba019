"""Packs and unpacks Snooflake IDs.

An ID is 63 significant bits, most significant first::

    [0][time:39][sequence:8][machine-id:16]

This module provides:
- encode: a function that packs the three fields into an ID
- decode: a function that splits any unsigned 64-bit integer into its fields
- Decomposition: the record returned by ``decode``
- to_datetime: a function that turns a decoded time field back into a datetime
"""

from datetime import datetime, timedelta
from typing import NamedTuple

from .utils.clock import DEFAULT_EPOCH, TIME_UNIT_NS, as_utc

BIT_LEN_TIME = 39
BIT_LEN_SEQUENCE = 8
BIT_LEN_MACHINE_ID = 63 - BIT_LEN_TIME - BIT_LEN_SEQUENCE

SHIFT_TIME = BIT_LEN_SEQUENCE + BIT_LEN_MACHINE_ID
SHIFT_SEQUENCE = BIT_LEN_MACHINE_ID

MAX_TIME = 1 << BIT_LEN_TIME
MASK_SEQUENCE = (1 << BIT_LEN_SEQUENCE) - 1
MASK_MACHINE_ID = (1 << BIT_LEN_MACHINE_ID) - 1
MASK_TIME = MAX_TIME - 1

MAX_ID = (1 << 64) - 1


class Decomposition(NamedTuple):
    """The parts of an ID."""

    id: int
    msb: int
    time: int
    sequence: int
    machine_id: int

    def as_dict(self) -> dict[str, int]:
        """Returns the parts keyed the way they go over the wire."""
        return {
            "id": self.id,
            "msb": self.msb,
            "time": self.time,
            "sequence": self.sequence,
            "machine-id": self.machine_id,
        }


def encode(elapsed_time: int, sequence: int, machine_id: int) -> int:
    """Packs the fields into an ID. Range checks are the caller's job."""
    return elapsed_time << SHIFT_TIME | sequence << SHIFT_SEQUENCE | machine_id


def decode(snowflake: int) -> Decomposition:
    """Splits an ID into its parts.

    Accepts any unsigned 64-bit integer, including ones this package never
    produced; the top bit is reported as ``msb`` and excluded from ``time``.
    """
    return Decomposition(
        id=snowflake,
        msb=snowflake >> 63,
        time=snowflake >> SHIFT_TIME & MASK_TIME,
        sequence=snowflake >> SHIFT_SEQUENCE & MASK_SEQUENCE,
        machine_id=snowflake & MASK_MACHINE_ID,
    )


def to_datetime(time: int, epoch: datetime = DEFAULT_EPOCH) -> datetime:
    """Returns the UTC start of the time unit ``time`` counted from ``epoch``."""
    start = as_utc(epoch)
    start -= timedelta(microseconds=start.microsecond % (TIME_UNIT_NS // 1_000))
    return start + timedelta(microseconds=time * TIME_UNIT_NS // 1_000)
