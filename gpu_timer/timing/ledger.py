"""Last-seen absolute time per checkpoint name."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional


@dataclass
class CheckpointLedger:
    """Map checkpoint name -> time (seconds on the accumulated GPU clock) it was last reached.

    Entries are never removed; the set of checkpoint names is expected to stay
    small for the life of a timer.
    """

    times: Dict[str, float] = field(default_factory=dict)

    def record_time(self, name: str, time: float) -> None:
        self.times[name] = float(time)

    def lookup(self, name: str) -> Optional[float]:
        return self.times.get(name)

    def names(self) -> List[str]:
        return list(self.times)

    def as_dict(self) -> Dict[str, float]:
        return dict(self.times)

    def __contains__(self, name: object) -> bool:
        return name in self.times

    def __len__(self) -> int:
        return len(self.times)

    def __iter__(self) -> Iterator[str]:
        return iter(self.times)


__all__ = ["CheckpointLedger"]
