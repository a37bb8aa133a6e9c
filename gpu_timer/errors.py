"""Exception hierarchy for the checkpoint timer."""

from __future__ import annotations


class GpuTimerError(Exception):
    """Base class for every error raised by :mod:`gpu_timer`."""


class InvalidArgumentError(GpuTimerError, ValueError):
    """A checkpoint name was empty or a callback was not callable."""


class DuplicateCallbackError(GpuTimerError):
    """A callback is already registered for the ``(from, to)`` pair."""

    def __init__(self, from_name: str, to_name: str):
        super().__init__(f"callback already registered for {from_name!r} -> {to_name!r}")
        self.from_name = from_name
        self.to_name = to_name


class RingOverrunError(GpuTimerError):
    """Every query slot is still waiting on the GPU when a new one is needed."""


class BackendUnavailableError(GpuTimerError):
    """The requested timer-query backend cannot run in this environment."""


__all__ = [
    "GpuTimerError",
    "InvalidArgumentError",
    "DuplicateCallbackError",
    "RingOverrunError",
    "BackendUnavailableError",
]
