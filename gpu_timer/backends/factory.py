"""Select a timer-query backend by name."""

from __future__ import annotations

from typing import Any

from ..errors import BackendUnavailableError, InvalidArgumentError
from ..utils.logging import logger
from .base import QueryBackend
from .cuda_events import CudaEventBackend
from .simulated import make_simulated
from .wallclock import WallClockBackend

BACKEND_NAMES = ("auto", "cuda", "wallclock", "simulated")


def create_backend(name: str = "auto", **kwargs: Any) -> QueryBackend:
    """Build a backend.

    ``"auto"`` prefers CUDA events and falls back to the host clock.
    """

    if name == "cuda":
        return CudaEventBackend(**kwargs)
    if name == "wallclock":
        return WallClockBackend()
    if name == "simulated":
        return make_simulated(**kwargs)
    if name == "auto":
        try:
            return CudaEventBackend(**kwargs)
        except BackendUnavailableError as exc:
            logger.info("CUDA timer queries unavailable ({}); using wall clock", exc)
            return WallClockBackend()
    raise InvalidArgumentError(f"unknown backend {name!r}; expected one of {BACKEND_NAMES}")


__all__ = ["create_backend", "BACKEND_NAMES"]
