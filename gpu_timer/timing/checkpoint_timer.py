"""Asynchronous GPU interval timing between named checkpoints."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..backends.base import QueryBackend
from ..backends.factory import create_backend
from ..errors import InvalidArgumentError
from ..utils.logging import logger
from .ledger import CheckpointLedger
from .query_ring import OverrunPolicy, QueryRing
from .registry import CallbackRegistry, IntervalCallback, RegistrationStatus, check_edge, check_name


@dataclass
class TimerConfig:
    """Ring sizing and overrun handling."""

    num_slots: int = 8
    overrun_policy: str = "raise"
    max_slots: int = 64
    log_intervals: bool = False
    backend: str = "auto"

    def __post_init__(self) -> None:
        try:
            OverrunPolicy(self.overrun_policy)
        except ValueError:
            choices = [p.value for p in OverrunPolicy]
            raise InvalidArgumentError(
                f"unknown overrun_policy {self.overrun_policy!r}; expected one of {choices}"
            ) from None


class TimerState(str, Enum):
    UNSTARTED = "unstarted"
    RUNNING = "running"


class CheckpointTimer:
    """Correlate GPU time between checkpoints without waiting on the GPU.

    Usage::

        timer = CheckpointTimer()
        timer.add_callback("A", "B", report)

        # in the render/compute loop
        timer.checkpoint("A")
        ...  # GPU work
        timer.checkpoint("B")

    ``report("A", "B", seconds)`` fires from a later ``checkpoint`` call, once
    the query ending at ``B`` has completed on the GPU. Callbacks run inside
    ``checkpoint``, so keep them short.

    Not thread-safe; calls must be serialized by the caller.
    """

    def __init__(self, backend: Optional[QueryBackend] = None, config: Optional[TimerConfig] = None):
        self.config = config or TimerConfig()
        self.ledger = CheckpointLedger()
        self.registry = CallbackRegistry()
        self.total_time = 0.0
        self._backend = backend
        self._ring: Optional[QueryRing] = None

    # ------------------------------------------------------------------ lifecycle
    def _init_if_needed(self) -> QueryRing:
        if self._ring is None:
            if self._backend is None:
                self._backend = create_backend(self.config.backend)
            self._ring = QueryRing(
                self._backend,
                num_slots=self.config.num_slots,
                policy=OverrunPolicy(self.config.overrun_policy),
                max_slots=self.config.max_slots,
            )
            logger.debug("Allocated {} timer query slots on {} backend", self._ring.capacity, self._backend.name)
        return self._ring

    @property
    def backend(self) -> Optional[QueryBackend]:
        return self._backend

    @property
    def state(self) -> TimerState:
        if self._ring is not None and self._ring.started:
            return TimerState.RUNNING
        return TimerState.UNSTARTED

    @property
    def capacity(self) -> int:
        return self._ring.capacity if self._ring is not None else self.config.num_slots

    @property
    def outstanding(self) -> int:
        return self._ring.outstanding if self._ring is not None else 0

    # ------------------------------------------------------------------ public API
    def add_callback(self, from_name: str, to_name: str, callback: IntervalCallback) -> None:
        """Register ``callback(from, to, seconds)`` for the interval ``from -> to``.

        Raises:
            DuplicateCallbackError: the pair already has a callback.
            InvalidArgumentError: a name is empty or ``callback`` is not callable.
        """
        check_edge(from_name, to_name, callback)
        self._init_if_needed()
        self.registry.add_callback(from_name, to_name, callback)
        logger.debug("Registered interval callback {} -> {}", from_name, to_name)

    def try_add_callback(self, from_name: str, to_name: str, callback: IntervalCallback) -> RegistrationStatus:
        check_edge(from_name, to_name, callback)
        self._init_if_needed()
        return self.registry.try_add(from_name, to_name, callback)

    def checkpoint(self, name: str) -> None:
        """Mark ``name`` in the GPU timeline: end, drain, begin."""
        check_name(name)
        ring = self._init_if_needed()
        self._end_current(ring, name)
        try:
            ring.drain(self._handle_ready)
        finally:
            # a failing callback must not leave the next interval unmeasured
            ring.begin()

    # ------------------------------------------------------------------ internals
    def _end_current(self, ring: QueryRing, name: str) -> None:
        if not ring.started:
            # first checkpoint: nothing to end, it defines t = 0
            self.ledger.record_time(name, 0.0)
            return
        ring.end(name)

    def _handle_ready(self, name: str, seconds: float) -> None:
        self.total_time += seconds
        try:
            fired = self.registry.resolve(name, self.total_time, self.ledger)
        finally:
            self.ledger.record_time(name, self.total_time)
        if self.config.log_intervals:
            logger.debug("{}: +{:.6f}s (total {:.6f}s, {} callbacks)", name, seconds, self.total_time, fired)
        else:
            logger.trace("{}: +{:.6f}s (total {:.6f}s)", name, seconds, self.total_time)


__all__ = ["CheckpointTimer", "TimerConfig", "TimerState"]
