"""Interval callbacks keyed by ``(from, to)`` checkpoint pairs."""

from __future__ import annotations

from enum import Enum
from typing import Callable, Dict, Iterator, List, Tuple

from ..errors import DuplicateCallbackError, InvalidArgumentError
from .ledger import CheckpointLedger

IntervalCallback = Callable[[str, str, float], None]


class RegistrationStatus(str, Enum):
    INSERTED = "inserted"
    ALREADY_PRESENT = "already_present"


def check_name(name: object, what: str = "checkpoint name") -> str:
    if not isinstance(name, str) or not name:
        raise InvalidArgumentError(f"{what} must be a non-empty string, got {name!r}")
    return name


def fan_out(*callbacks: IntervalCallback) -> IntervalCallback:
    """Combine callbacks so several consumers can share one (from, to) edge."""

    def dispatch(from_name: str, to_name: str, interval: float) -> None:
        for callback in callbacks:
            callback(from_name, to_name, interval)

    return dispatch


def check_edge(from_name: object, to_name: object, callback: object) -> None:
    check_name(from_name, "from checkpoint name")
    check_name(to_name, "to checkpoint name")
    if not callable(callback):
        raise InvalidArgumentError(f"callback for {from_name!r} -> {to_name!r} is not callable")


class CallbackRegistry:
    """Nested table ``to -> (from -> callback)``.

    Lookups happen by ``to`` because a callback can only be resolved once the
    query ending at ``to`` has been drained.
    """

    def __init__(self) -> None:
        self._by_target: Dict[str, Dict[str, IntervalCallback]] = {}

    def try_add(self, from_name: str, to_name: str, callback: IntervalCallback) -> RegistrationStatus:
        """Insert the edge unless one already exists for the pair."""
        check_edge(from_name, to_name, callback)
        sources = self._by_target.setdefault(to_name, {})
        if from_name in sources:
            return RegistrationStatus.ALREADY_PRESENT
        sources[from_name] = callback
        return RegistrationStatus.INSERTED

    def add_callback(self, from_name: str, to_name: str, callback: IntervalCallback) -> None:
        if self.try_add(from_name, to_name, callback) is RegistrationStatus.ALREADY_PRESENT:
            raise DuplicateCallbackError(from_name, to_name)

    def resolve(self, to_name: str, accumulated_time: float, ledger: CheckpointLedger) -> int:
        """Fire every callback ending at ``to_name`` whose start has been seen.

        Returns the number of callbacks invoked.
        """
        sources = self._by_target.get(to_name)
        if not sources:
            return 0
        fired = 0
        # callbacks may register new edges while we iterate
        for from_name, callback in list(sources.items()):
            from_time = ledger.lookup(from_name)
            if from_time is None:
                continue
            callback(from_name, to_name, accumulated_time - from_time)
            fired += 1
        return fired

    def edges(self) -> List[Tuple[str, str]]:
        return [(src, dst) for dst, sources in self._by_target.items() for src in sources]

    def __contains__(self, edge: object) -> bool:
        if not isinstance(edge, tuple) or len(edge) != 2:
            return False
        from_name, to_name = edge
        return from_name in self._by_target.get(to_name, {})

    def __len__(self) -> int:
        return sum(len(sources) for sources in self._by_target.values())

    def __iter__(self) -> Iterator[Tuple[str, str]]:
        return iter(self.edges())


__all__ = ["CallbackRegistry", "IntervalCallback", "RegistrationStatus", "check_edge", "check_name", "fan_out"]
