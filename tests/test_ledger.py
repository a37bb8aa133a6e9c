from __future__ import annotations

import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

from gpu_timer.timing.ledger import CheckpointLedger


def test_lookup_unknown_name_is_none():
    ledger = CheckpointLedger()
    assert ledger.lookup("never") is None
    assert "never" not in ledger


def test_record_overwrites_in_place():
    ledger = CheckpointLedger()
    ledger.record_time("A", 0.5)
    ledger.record_time("A", 1.25)
    ledger.record_time("B", 2.0)
    assert ledger.lookup("A") == 1.25
    assert len(ledger) == 2
    assert ledger.names() == ["A", "B"]
    assert ledger.as_dict() == {"A": 1.25, "B": 2.0}
