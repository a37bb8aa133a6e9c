"""Timer queries backed by CUDA events through :mod:`torch`."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

import torch

from ..errors import BackendUnavailableError
from .base import QueryBackend


@dataclass
class EventPair:
    start: torch.cuda.Event
    stop: torch.cuda.Event


class CudaEventBackend(QueryBackend):
    """Record a start/stop event pair per query on a CUDA stream.

    ``Event.query()`` is a non-blocking poll, so the read side never stalls
    the host. Events on one stream complete in recording order.
    """

    name = "cuda"

    def __init__(self, stream: Optional[torch.cuda.Stream] = None):
        if not torch.cuda.is_available():
            raise BackendUnavailableError("CUDA is not available; use the 'wallclock' backend instead")
        self.stream = stream

    def allocate(self, n: int) -> List[EventPair]:
        return [
            EventPair(torch.cuda.Event(enable_timing=True), torch.cuda.Event(enable_timing=True))
            for _ in range(n)
        ]

    def begin(self, handle: EventPair) -> None:
        handle.start.record(self.stream)

    def end(self, handle: EventPair) -> None:
        handle.stop.record(self.stream)

    def is_result_available(self, handle: EventPair) -> bool:
        return bool(handle.stop.query())

    def fetch_result_ns(self, handle: EventPair) -> int:
        # elapsed_time reports milliseconds as a float
        return int(round(handle.start.elapsed_time(handle.stop) * 1e6))


__all__ = ["CudaEventBackend", "EventPair"]
