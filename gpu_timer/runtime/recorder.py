"""Interval recorder that keeps every fired interval as a table row."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

import pandas as pd

from ..timing.checkpoint_timer import CheckpointTimer
from ..utils.fileio import write_parquet

COLUMNS = ["from", "to", "interval_s", "total_time_s"]


@dataclass
class RecorderConfig:
    output: Path = Path("data/gpu_intervals.parquet")
    max_rows: Optional[int] = None


class IntervalRecorder:
    """Callback collecting ``(from, to, interval)`` rows for later analysis."""

    def __init__(self, config: Optional[RecorderConfig] = None, timer: Optional[CheckpointTimer] = None):
        self.config = config or RecorderConfig()
        self.timer = timer
        self.rows: List[Dict[str, object]] = []

    def __call__(self, from_name: str, to_name: str, interval: float) -> None:
        if self.config.max_rows is not None and len(self.rows) >= self.config.max_rows:
            return
        total = self.timer.total_time if self.timer is not None else float("nan")
        self.rows.append({"from": from_name, "to": to_name, "interval_s": interval, "total_time_s": total})

    def attach(self, timer: CheckpointTimer, edges: Iterable[Tuple[str, str]]) -> "IntervalRecorder":
        self.timer = timer
        for from_name, to_name in edges:
            timer.add_callback(from_name, to_name, self)
        return self

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(self.rows, columns=COLUMNS)

    def save(self, path: Optional[Path] = None) -> Path:
        path = Path(path) if path is not None else self.config.output
        write_parquet(self.to_frame(), path)
        return path

    def __len__(self) -> int:
        return len(self.rows)


__all__ = ["IntervalRecorder", "RecorderConfig"]
