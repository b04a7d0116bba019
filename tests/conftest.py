"""Shared fixtures: a controllable clock and a generator built on it."""

from datetime import datetime, timezone

import pytest

from snooflake.ids import Generator
from snooflake.utils.clock import TIME_UNIT_NS, to_nanoseconds
from snooflake.utils.network import fixed_machine_id

T0 = datetime(2020, 1, 1, tzinfo=timezone.utc)
T0_NS = to_nanoseconds(T0)
MS = 1_000_000


class FakeClock:
    """A clock that only moves when told to, or when something sleeps on it."""

    def __init__(self, now):
        self.now = now
        self.sleeps = []

    def __call__(self):
        return self.now

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += round(seconds * 1_000_000_000)

    def advance(self, nanoseconds):
        self.now += nanoseconds


@pytest.fixture
def clock():
    return FakeClock(T0_NS + 25 * MS)


@pytest.fixture
def generator(clock):
    return Generator(epoch=T0, machine_id=fixed_machine_id(0x0102), clock=clock, sleep=clock.sleep)


def units(count):
    return count * TIME_UNIT_NS
