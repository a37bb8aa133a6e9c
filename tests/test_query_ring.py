from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from gpu_timer.backends.simulated import SimulatedQueryBackend
from gpu_timer.errors import InvalidArgumentError, RingOverrunError
from gpu_timer.timing.query_ring import OverrunPolicy, QueryRing


def test_rejects_bad_sizes():
    with pytest.raises(InvalidArgumentError):
        QueryRing(SimulatedQueryBackend(), num_slots=0)
    with pytest.raises(InvalidArgumentError):
        QueryRing(SimulatedQueryBackend(), num_slots=4, max_slots=2)


def test_first_drain_only_starts_the_ring():
    ring = QueryRing(SimulatedQueryBackend(), num_slots=4)
    assert not ring.started
    assert ring.drain(lambda name, s: None) == 0
    assert ring.read_index == 0


def test_end_tags_slot_and_advances_cursor():
    backend = SimulatedQueryBackend()
    ring = QueryRing(backend, num_slots=3)
    ring.drain(lambda name, s: None)
    ring.begin()
    assert ring.end("B")
    assert ring.slots[0].checkpoint_name == "B"
    assert ring.write_index == 1
    assert ring.outstanding == 1


def test_drain_stops_at_first_pending_result():
    backend = SimulatedQueryBackend(default_duration_ns=2_000_000)
    ring = QueryRing(backend, num_slots=4)
    ring.drain(lambda name, s: None)
    for name in ("B", "C", "D"):
        ring.begin()
        ring.end(name)
    backend.complete(2)

    seen = []
    assert ring.drain(lambda name, s: seen.append((name, s))) == 2
    assert seen == [("B", pytest.approx(0.002)), ("C", pytest.approx(0.002))]
    assert ring.outstanding == 1
    assert ring.read_index == 2


def test_end_without_open_query_is_ignored():
    ring = QueryRing(SimulatedQueryBackend(), num_slots=2)
    assert not ring.end("B")
    assert ring.outstanding == 0


def fill(ring: QueryRing) -> None:
    ring.drain(lambda name, s: None)
    for i in range(ring.capacity):
        ring.begin()
        ring.end(f"n{i}")


def test_full_ring_raises_by_default():
    ring = QueryRing(SimulatedQueryBackend(), num_slots=2)
    fill(ring)
    with pytest.raises(RingOverrunError):
        ring.begin()
    assert not ring.has_open_query


def test_full_ring_grows_before_oldest_pending_slot():
    backend = SimulatedQueryBackend()
    ring = QueryRing(backend, num_slots=2, policy=OverrunPolicy.GROW, max_slots=3)
    fill(ring)
    ring.begin()
    assert ring.capacity == 3
    assert backend.allocated == 3
    ring.end("n2")
    backend.complete_all()

    seen = []
    ring.drain(lambda name, s: seen.append(name))
    assert seen == ["n0", "n1", "n2"]

    fill(ring)
    with pytest.raises(RingOverrunError):
        ring.begin()


def test_full_ring_can_drop_oldest():
    backend = SimulatedQueryBackend()
    ring = QueryRing(backend, num_slots=2, policy="drop_oldest")
    fill(ring)
    ring.begin()
    ring.end("n2")
    backend.complete_all()

    seen = []
    ring.drain(lambda name, s: seen.append(name))
    assert seen == ["n1", "n2"]
