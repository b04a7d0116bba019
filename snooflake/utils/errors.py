"""Errors tailored for this project.

This module provides:
- GeneratorError: A base error for anything the generator refuses to do
- FutureEpochError: An error if the configured epoch is ahead of the clock
- MachineIDError: An error if a machine ID could not be resolved or was rejected
- OverTimeLimitError: An error if the time field ran out of bits
"""


class GeneratorError(RuntimeError):
    """The generator could not be created or could not produce an ID."""

class FutureEpochError(GeneratorError, ValueError):
    """The epoch is ahead of the current time."""

class MachineIDError(GeneratorError, LookupError):
    """A machine ID could not be resolved, or it was rejected by the checker."""

class OverTimeLimitError(GeneratorError, OverflowError):
    """The elapsed time no longer fits in the time field.

    When raised from a batch allocation, ``ids`` holds the IDs produced
    before the failure.
    """

    def __init__(self, message="over the time limit", ids=None):
        super().__init__(message)
        self.ids = list(ids or [])
