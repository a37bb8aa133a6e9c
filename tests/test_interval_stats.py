from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from gpu_timer.backends.simulated import make_simulated
from gpu_timer.timing.checkpoint_timer import CheckpointTimer
from gpu_timer.utils.timers import IntervalStats, IntervalStatsPool


def test_interval_stats_aggregates():
    stats = IntervalStats(window=3)
    for value in (1.0, 2.0, 3.0, 4.0):
        stats.update(value)
    assert stats.count == 4
    assert stats.avg == pytest.approx(2.5)
    assert (stats.minimum, stats.maximum, stats.last) == (1.0, 4.0, 4.0)
    assert list(stats.samples) == [2.0, 3.0, 4.0]
    assert stats.percentile(50) == pytest.approx(3.0)


def test_empty_stats():
    stats = IntervalStats()
    assert stats.avg == 0.0
    assert stats.percentile(95) == 0.0


def test_pool_attached_to_timer():
    timer = CheckpointTimer(backend=make_simulated(auto_complete=True, durations_ns=[1_000_000, 3_000_000] * 3))
    pool = IntervalStatsPool().attach(timer, [("begin", "end"), ("end", "begin")])
    for name in ("begin", "end") * 3 + ("begin",):
        timer.checkpoint(name)

    forward = pool.get("begin", "end")
    backward = pool.get("end", "begin")
    assert forward.count == 3
    assert forward.avg == pytest.approx(0.001)
    assert backward.count == 3
    assert backward.avg == pytest.approx(0.003)
    assert pool.get("missing", "edge").count == 0
