"""Fixed ring of in-flight timer queries."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, List, Optional

from ..backends.base import QueryBackend
from ..errors import InvalidArgumentError, RingOverrunError
from ..utils.logging import logger


class OverrunPolicy(str, Enum):
    """What to do when every slot is still waiting on the GPU."""

    RAISE = "raise"
    GROW = "grow"
    DROP_OLDEST = "drop_oldest"


@dataclass
class TimerSlot:
    handle: Any
    checkpoint_name: Optional[str] = None


class QueryRing:
    """Circular buffer of query slots with a write and a read cursor.

    Slots ``read_index .. read_index + outstanding - 1`` (mod capacity) have
    been ended and await their results, oldest first. ``write_index`` is the
    slot that the next ``begin`` opens. ``read_index`` is ``None`` until the
    first drain.
    """

    def __init__(
        self,
        backend: QueryBackend,
        num_slots: int = 8,
        policy: OverrunPolicy = OverrunPolicy.RAISE,
        max_slots: int = 64,
    ):
        if num_slots < 1:
            raise InvalidArgumentError(f"num_slots must be >= 1, got {num_slots}")
        if max_slots < num_slots:
            raise InvalidArgumentError(f"max_slots ({max_slots}) is smaller than num_slots ({num_slots})")
        self.backend = backend
        self.policy = OverrunPolicy(policy)
        self.max_slots = max_slots
        self.slots: List[TimerSlot] = [TimerSlot(handle) for handle in backend.allocate(num_slots)]
        self.write_index = 0
        self.read_index: Optional[int] = None
        self.outstanding = 0
        self._active: Optional[int] = None

    @property
    def capacity(self) -> int:
        return len(self.slots)

    @property
    def started(self) -> bool:
        return self.read_index is not None

    @property
    def has_open_query(self) -> bool:
        return self._active is not None

    def end(self, name: str) -> bool:
        """Close the open query and tag its slot with ``name``.

        Returns ``False`` when nothing was open, i.e. the previous begin was
        refused and the interval up to ``name`` is lost.
        """
        if self._active is None:
            logger.warning("No open timer query at checkpoint {!r}; interval dropped", name)
            return False
        slot = self.slots[self._active]
        self.backend.end(slot.handle)
        slot.checkpoint_name = name
        self._active = None
        self.write_index = (self.write_index + 1) % self.capacity
        self.outstanding += 1
        return True

    def drain(self, on_ready: Callable[[str, float], None]) -> int:
        """Hand every ready result, oldest first, to ``on_ready(name, seconds)``.

        Stops at the first query still running on the GPU. Never blocks.
        """
        if self.read_index is None:
            self.read_index = 0
            return 0
        drained = 0
        while self.outstanding:
            slot = self.slots[self.read_index]
            if not self.backend.is_result_available(slot.handle):
                break
            seconds = self.backend.fetch_result_ns(slot.handle) / 1e9
            self.read_index = (self.read_index + 1) % self.capacity
            self.outstanding -= 1
            drained += 1
            on_ready(slot.checkpoint_name, seconds)
        return drained

    def begin(self) -> None:
        if self.outstanding >= self.capacity:
            self._make_room()
        slot = self.slots[self.write_index]
        self.backend.begin(slot.handle)
        self._active = self.write_index

    def _make_room(self) -> None:
        if self.policy is OverrunPolicy.GROW and self.capacity < self.max_slots:
            handle = self.backend.allocate(1)[0]
            # splice in just before the oldest pending slot so issue order is kept
            self.slots.insert(self.write_index, TimerSlot(handle))
            self.read_index = (self.read_index + 1) % self.capacity
            logger.warning("Timer query ring full; grew to {} slots", self.capacity)
            return
        if self.policy is OverrunPolicy.DROP_OLDEST:
            dropped = self.slots[self.read_index]
            self.read_index = (self.read_index + 1) % self.capacity
            self.outstanding -= 1
            logger.warning("Timer query ring full; dropped pending result for {!r}", dropped.checkpoint_name)
            return
        logger.error("All {} timer query slots await GPU results", self.capacity)
        raise RingOverrunError(
            f"all {self.capacity} timer query slots are still pending "
            f"(policy={self.policy.value}, max_slots={self.max_slots})"
        )


__all__ = ["QueryRing", "TimerSlot", "OverrunPolicy"]
