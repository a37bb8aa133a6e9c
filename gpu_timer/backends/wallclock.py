"""Host-clock fallback used when no GPU is present."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import List

from .base import QueryBackend


@dataclass
class ClockQuery:
    start_ns: int = 0
    stop_ns: int = 0


class WallClockBackend(QueryBackend):
    """Measure host time with :func:`time.perf_counter_ns`; results are ready at once."""

    name = "wallclock"

    def allocate(self, n: int) -> List[ClockQuery]:
        return [ClockQuery() for _ in range(n)]

    def begin(self, handle: ClockQuery) -> None:
        handle.start_ns = time.perf_counter_ns()

    def end(self, handle: ClockQuery) -> None:
        handle.stop_ns = time.perf_counter_ns()

    def is_result_available(self, handle: ClockQuery) -> bool:
        return True

    def fetch_result_ns(self, handle: ClockQuery) -> int:
        return max(0, handle.stop_ns - handle.start_ns)


__all__ = ["WallClockBackend", "ClockQuery"]
