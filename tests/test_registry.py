from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from gpu_timer.errors import DuplicateCallbackError, InvalidArgumentError
from gpu_timer.timing.ledger import CheckpointLedger
from gpu_timer.timing.registry import CallbackRegistry, RegistrationStatus, fan_out


def collect(calls):
    def callback(src, dst, interval):
        calls.append((src, dst, interval))

    return callback


def test_try_add_reports_status():
    registry = CallbackRegistry()
    calls = []
    assert registry.try_add("A", "B", collect(calls)) is RegistrationStatus.INSERTED
    assert registry.try_add("A", "B", collect(calls)) is RegistrationStatus.ALREADY_PRESENT
    assert registry.try_add("C", "B", collect(calls)) is RegistrationStatus.INSERTED
    assert len(registry) == 2
    assert ("A", "B") in registry
    assert ("B", "A") not in registry
    assert sorted(registry.edges()) == [("A", "B"), ("C", "B")]


def test_duplicate_pair_raises():
    registry = CallbackRegistry()
    registry.add_callback("A", "B", lambda *args: None)
    with pytest.raises(DuplicateCallbackError) as info:
        registry.add_callback("A", "B", lambda *args: None)
    assert (info.value.from_name, info.value.to_name) == ("A", "B")


@pytest.mark.parametrize("src,dst", [("", "B"), ("A", ""), (None, "B"), ("A", None)])
def test_invalid_names_rejected(src, dst):
    registry = CallbackRegistry()
    with pytest.raises(InvalidArgumentError):
        registry.add_callback(src, dst, lambda *args: None)


def test_non_callable_rejected():
    registry = CallbackRegistry()
    with pytest.raises(InvalidArgumentError):
        registry.add_callback("A", "B", None)


def test_resolve_uses_ledger_and_skips_unseen_sources():
    registry = CallbackRegistry()
    ledger = CheckpointLedger()
    calls = []
    registry.add_callback("A", "B", collect(calls))
    registry.add_callback("X", "B", collect(calls))
    ledger.record_time("A", 0.25)

    fired = registry.resolve("B", 1.0, ledger)

    assert fired == 1
    assert calls == [("A", "B", pytest.approx(0.75))]
    assert registry.resolve("nothing-ends-here", 1.0, ledger) == 0


def test_callback_may_register_during_resolve():
    registry = CallbackRegistry()
    ledger = CheckpointLedger()
    ledger.record_time("A", 0.0)
    calls = []

    def register_more(src, dst, interval):
        registry.try_add("late", "B", collect(calls))

    registry.add_callback("A", "B", register_more)
    assert registry.resolve("B", 1.0, ledger) == 1
    assert ("late", "B") in registry


def test_fan_out_calls_each_consumer():
    first, second = [], []
    combined = fan_out(collect(first), collect(second))
    combined("A", "B", 0.5)
    assert first == second == [("A", "B", 0.5)]
