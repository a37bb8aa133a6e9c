"""Process-wide default timer for code that does not thread one through."""

from __future__ import annotations

from typing import Optional

from ..backends.base import QueryBackend
from ..errors import GpuTimerError
from ..timing.checkpoint_timer import CheckpointTimer, TimerConfig, TimerState
from ..timing.registry import IntervalCallback

_default_timer: Optional[CheckpointTimer] = None


def get_default_timer() -> CheckpointTimer:
    """Return the shared timer, creating it on first use."""
    global _default_timer
    if _default_timer is None:
        _default_timer = CheckpointTimer()
    return _default_timer


def configure_default_timer(
    config: Optional[TimerConfig] = None,
    backend: Optional[QueryBackend] = None,
) -> CheckpointTimer:
    """Replace the shared timer. Only allowed before its first checkpoint."""
    global _default_timer
    if _default_timer is not None and _default_timer.state is TimerState.RUNNING:
        raise GpuTimerError("default timer is already running; call reset_default_timer() first")
    _default_timer = CheckpointTimer(backend=backend, config=config)
    return _default_timer


def reset_default_timer() -> None:
    global _default_timer
    _default_timer = None


def add_callback(from_name: str, to_name: str, callback: IntervalCallback) -> None:
    get_default_timer().add_callback(from_name, to_name, callback)


def checkpoint(name: str) -> None:
    get_default_timer().checkpoint(name)


__all__ = [
    "get_default_timer",
    "configure_default_timer",
    "reset_default_timer",
    "add_callback",
    "checkpoint",
]
