"""Aggregated interval statistics, usable directly as timer callbacks."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Deque, Dict, Iterable, Tuple

import numpy as np

if TYPE_CHECKING:  # pragma: no cover
    from ..timing.checkpoint_timer import CheckpointTimer

Edge = Tuple[str, str]


@dataclass
class IntervalStats:
    """Running statistics for one checkpoint edge."""

    count: int = 0
    total: float = 0.0
    minimum: float = float("inf")
    maximum: float = 0.0
    last: float = 0.0
    window: int = 256
    samples: Deque[float] = field(default_factory=deque, repr=False)

    def update(self, duration: float) -> None:
        self.count += 1
        self.total += duration
        self.minimum = min(self.minimum, duration)
        self.maximum = max(self.maximum, duration)
        self.last = duration
        self.samples.append(duration)
        while len(self.samples) > self.window:
            self.samples.popleft()

    @property
    def avg(self) -> float:
        return self.total / self.count if self.count else 0.0

    def percentile(self, q: float) -> float:
        """Percentile over the most recent ``window`` samples."""
        if not self.samples:
            return 0.0
        return float(np.percentile(np.fromiter(self.samples, dtype=np.float64), q))


@dataclass
class IntervalStatsPool:
    """One :class:`IntervalStats` per ``(from, to)`` edge."""

    stats: Dict[Edge, IntervalStats] = field(default_factory=dict)
    window: int = 256

    def __call__(self, from_name: str, to_name: str, interval: float) -> None:
        self.stats.setdefault((from_name, to_name), IntervalStats(window=self.window)).update(interval)

    def attach(self, timer: "CheckpointTimer", edges: Iterable[Edge]) -> "IntervalStatsPool":
        for from_name, to_name in edges:
            timer.add_callback(from_name, to_name, self)
        return self

    def get(self, from_name: str, to_name: str) -> IntervalStats:
        return self.stats.get((from_name, to_name), IntervalStats(window=self.window))


__all__ = ["IntervalStats", "IntervalStatsPool"]
