"""A module for handling unique ID generation.

This module provides:
- Generator: a class that spits out unique, time-ordered 63-bit IDs
- new_generator: a function that returns None instead of raising on bad settings
"""

import logging
import time
from collections.abc import Callable
from datetime import datetime
from threading import Lock
from typing import Optional

from .codec import BIT_LEN_MACHINE_ID, MASK_SEQUENCE, MAX_TIME, Decomposition, decode, encode
from .utils.clock import (
    DEFAULT_EPOCH,
    as_utc,
    current_elapsed_time,
    now_ns,
    sleep_time,
    to_nanoseconds,
    to_units,
)
from .utils.errors import FutureEpochError, GeneratorError, MachineIDError, OverTimeLimitError
from .utils.network import lower_16bit_private_ip

logger = logging.getLogger(__name__)


class Generator:
    """A class that spits out unique IDs.

    IDs from one instance are strictly increasing. At most 256 IDs are handed
    out per 10 ms; past that, allocation blocks until the clock catches up.
    """

    def __init__(
        self,
        epoch: Optional[datetime] = None,
        machine_id: Optional[Callable[[], int]] = None,
        check_machine_id: Optional[Callable[[int], bool]] = None,
        clock: Callable[[], int] = now_ns,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """Validates the epoch and resolves the machine ID.

        Args:
            epoch (datetime): The zero point of the time field, defaults to 2014-09-01 UTC
            machine_id (Callable): Returns this instance's 16-bit ID,
                defaults to the lower 16 bits of the private IP address
            check_machine_id (Callable): Returns False to reject the resolved machine ID
            clock (Callable): Returns the current time in UTC nanoseconds
            sleep (Callable): Blocks for the given number of seconds

        Raises:
            FutureEpochError: If ``epoch`` is ahead of ``clock``
            MachineIDError: If the provider fails, yields an out of range value,
                or ``check_machine_id`` rejects it
        """
        self.lock = Lock()
        self.clock = clock
        self.sleep = sleep
        self.sequence = MASK_SEQUENCE
        self.elapsed_time = 0

        epoch = DEFAULT_EPOCH if epoch is None else as_utc(epoch)
        if to_nanoseconds(epoch) > self.clock():
            raise FutureEpochError(f"epoch {epoch.isoformat()} is ahead of the current time")
        self._epoch = epoch
        self.start_time = to_units(epoch)

        provider = machine_id or lower_16bit_private_ip
        try:
            resolved = provider()
        except MachineIDError:
            raise
        except Exception as e:
            raise MachineIDError(f"machine ID provider failed: {e}") from e
        if not isinstance(resolved, int) or not 0 <= resolved < 1 << BIT_LEN_MACHINE_ID:
            raise MachineIDError(f"machine ID {resolved!r} does not fit in {BIT_LEN_MACHINE_ID} bits")
        if check_machine_id is not None and not check_machine_id(resolved):
            raise MachineIDError(f"machine ID {resolved} was rejected")
        self._machine_id = resolved

        logger.info("Generator ready: machine ID %d, epoch %s", resolved, epoch.isoformat())

    @property
    def epoch(self) -> datetime:
        return self._epoch

    @property
    def machine_id(self) -> int:
        return self._machine_id

    def next_id(self) -> int:
        """Generates the next unique ID.

        Returns:
            int: The ID

        Raises:
            OverTimeLimitError: If the time field is exhausted
        """
        with self.lock:
            return self._next_id()

    def next_ids(self, count: int) -> list[int]:
        """Generates ``count`` IDs under a single lock acquisition.

        No other caller can interleave with the batch.

        Raises:
            ValueError: If ``count`` is negative
            OverTimeLimitError: If the time field runs out mid-batch; its ``ids``
                attribute holds the IDs produced before that
        """
        if count < 0:
            raise ValueError(f"count must be non-negative, got {count}")
        ids = []
        with self.lock:
            for _ in range(count):
                try:
                    ids.append(self._next_id())
                except OverTimeLimitError as e:
                    raise OverTimeLimitError(str(e), ids=ids) from e
        return ids

    def _next_id(self) -> int:
        # Caller must hold self.lock.
        now = self.clock()
        current = current_elapsed_time(self.start_time, now)
        if self.elapsed_time < current:
            self.elapsed_time = current
            self.sequence = 0
        else:
            self.sequence = (self.sequence + 1) & MASK_SEQUENCE
            if self.sequence == 0:
                self.elapsed_time += 1
                wait = sleep_time(self.elapsed_time - current, now)
                logger.debug("Sequence exhausted, sleeping %.6fs", wait)
                self.sleep(wait)
        return self._to_id()

    def _to_id(self) -> int:
        if self.elapsed_time >= MAX_TIME:
            logger.error("Time field exhausted at %d units past %s", self.elapsed_time, self._epoch.isoformat())
            raise OverTimeLimitError()
        return encode(self.elapsed_time, self.sequence, self._machine_id)

    @staticmethod
    def decompose(snowflake: int) -> Decomposition:
        """Splits an ID into its parts."""
        return decode(snowflake)


def new_generator(**settings) -> Optional[Generator]:
    """Builds a Generator, or returns None if the settings are rejected.

    Takes the same keyword arguments as ``Generator``.
    """
    try:
        return Generator(**settings)
    except GeneratorError as e:
        logger.warning("Generator not created: %s", e)
        return None
