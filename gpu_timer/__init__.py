"""Asynchronous GPU timing between named checkpoints."""

from importlib.metadata import version

from .errors import (
    BackendUnavailableError,
    DuplicateCallbackError,
    GpuTimerError,
    InvalidArgumentError,
    RingOverrunError,
)
from .runtime.default import add_callback, checkpoint, get_default_timer
from .timing.checkpoint_timer import CheckpointTimer, TimerConfig, TimerState
from .timing.query_ring import OverrunPolicy
from .timing.registry import RegistrationStatus

__all__ = [
    "__version__",
    "CheckpointTimer",
    "TimerConfig",
    "TimerState",
    "OverrunPolicy",
    "RegistrationStatus",
    "add_callback",
    "checkpoint",
    "get_default_timer",
    "GpuTimerError",
    "InvalidArgumentError",
    "DuplicateCallbackError",
    "RingOverrunError",
    "BackendUnavailableError",
]


def __getattr__(name: str) -> str:
    if name == "__version__":
        try:
            return version("gpu-checkpoint-timer")
        except Exception:  # pragma: no cover - fallback when pkg metadata missing
            return "0.1.0"
    raise AttributeError(name)
