"""Scripted timer queries for tests and dry runs."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Iterable, List, Optional

from .base import QueryBackend


@dataclass
class SimulatedQuery:
    index: int
    duration_ns: int = 0
    issued: bool = False
    complete: bool = False


@dataclass
class SimulatedQueryBackend(QueryBackend):
    """Backend whose "GPU" only makes progress when told to.

    Each ended query takes the next value from ``durations_ns`` (or
    ``default_duration_ns``). Queries become available strictly in issue order
    through :meth:`complete` / :meth:`complete_all`, unless ``auto_complete``
    is set.
    """

    default_duration_ns: int = 1_000_000
    durations_ns: Deque[int] = field(default_factory=deque)
    auto_complete: bool = False
    begin_calls: int = 0
    end_calls: int = 0
    allocated: int = 0
    _in_flight: Deque[SimulatedQuery] = field(default_factory=deque, repr=False)

    name = "simulated"

    def queue_durations(self, durations_ns: Iterable[int]) -> None:
        self.durations_ns.extend(int(d) for d in durations_ns)

    def allocate(self, n: int) -> List[SimulatedQuery]:
        handles = [SimulatedQuery(index=self.allocated + i) for i in range(n)]
        self.allocated += n
        return handles

    def begin(self, handle: SimulatedQuery) -> None:
        self.begin_calls += 1
        # a reused handle forgets the query it was last issued for
        self._in_flight = deque(q for q in self._in_flight if q is not handle)
        handle.issued = True
        handle.complete = False

    def end(self, handle: SimulatedQuery) -> None:
        self.end_calls += 1
        handle.duration_ns = self.durations_ns.popleft() if self.durations_ns else self.default_duration_ns
        if self.auto_complete:
            handle.complete = True
        else:
            self._in_flight.append(handle)

    def complete(self, count: int = 1) -> int:
        """Finish up to ``count`` of the oldest pending queries; return how many finished."""
        done = 0
        while self._in_flight and done < count:
            self._in_flight.popleft().complete = True
            done += 1
        return done

    def complete_all(self) -> int:
        return self.complete(len(self._in_flight))

    @property
    def pending(self) -> int:
        return len(self._in_flight)

    def is_result_available(self, handle: SimulatedQuery) -> bool:
        return handle.complete

    def fetch_result_ns(self, handle: SimulatedQuery) -> int:
        return handle.duration_ns


def make_simulated(durations_ns: Optional[Iterable[int]] = None, **kwargs) -> SimulatedQueryBackend:
    backend = SimulatedQueryBackend(**kwargs)
    if durations_ns is not None:
        backend.queue_durations(durations_ns)
    return backend


__all__ = ["SimulatedQueryBackend", "SimulatedQuery", "make_simulated"]
