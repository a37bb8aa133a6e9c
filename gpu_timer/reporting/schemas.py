"""Pydantic models summarising measured GPU intervals."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional

from pydantic import BaseModel

from ..timing.checkpoint_timer import CheckpointTimer
from ..utils.fileio import write_yaml
from ..utils.timers import IntervalStatsPool


class EdgeSummary(BaseModel):
    from_name: str
    to_name: str
    count: int
    mean_s: float
    min_s: float
    max_s: float
    last_s: float
    p50_s: float
    p95_s: float


class TimingReport(BaseModel):
    backend: str
    total_time_s: float
    checkpoints: Dict[str, float]
    edges: List[EdgeSummary]


def build_report(pool: IntervalStatsPool, timer: Optional[CheckpointTimer] = None) -> TimingReport:
    edges = [
        EdgeSummary(
            from_name=src,
            to_name=dst,
            count=stats.count,
            mean_s=stats.avg,
            min_s=stats.minimum if stats.count else 0.0,
            max_s=stats.maximum,
            last_s=stats.last,
            p50_s=stats.percentile(50),
            p95_s=stats.percentile(95),
        )
        for (src, dst), stats in sorted(pool.stats.items())
    ]
    backend = timer.backend.name if timer is not None and timer.backend is not None else "unknown"
    return TimingReport(
        backend=backend,
        total_time_s=timer.total_time if timer is not None else 0.0,
        checkpoints=timer.ledger.as_dict() if timer is not None else {},
        edges=edges,
    )


def save_report(report: TimingReport, path: Path) -> Path:
    write_yaml(report.model_dump(), path)
    return path


__all__ = ["EdgeSummary", "TimingReport", "build_report", "save_report"]
