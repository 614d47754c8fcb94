"""Tests for DebounceSlot and the schedulers behind it."""

from __future__ import annotations

import time

import pytest

from reportsort.utils.debounce import DebounceSlot, ManualScheduler


def test_manual_scheduler_runs_due_calls_in_order():
    sched = ManualScheduler()
    hits = []
    sched.call_later(20, lambda: hits.append("b"))
    sched.call_later(10, lambda: hits.append("a"))
    sched.call_later(50, lambda: hits.append("c"))
    assert sched.advance(30) == 2
    assert hits == ["a", "b"]
    assert sched.now_ms == 30
    assert sched.pending_count() == 1


def test_rearm_cancels_previous_and_uses_latest_args():
    sched = ManualScheduler()
    slot = DebounceSlot(sched, 100)
    hits = []
    slot.arm(hits.append, "first")
    sched.advance(60)
    slot.arm(hits.append, "second")
    assert sched.pending_count() == 1
    sched.advance(60)
    assert hits == []
    sched.advance(40)
    assert hits == ["second"]
    assert not slot.pending


def test_flush_and_cancel():
    sched = ManualScheduler()
    slot = DebounceSlot(sched, 100)
    hits = []
    slot.arm(hits.append, 1)
    assert slot.flush() is True
    assert hits == [1]
    assert slot.flush() is False
    slot.arm(hits.append, 2)
    slot.cancel()
    sched.advance(500)
    assert hits == [1]


def test_action_may_rearm_slot():
    sched = ManualScheduler()
    slot = DebounceSlot(sched, 10)
    hits = []

    def again():
        hits.append(len(hits))
        if len(hits) < 2:
            slot.arm(again)

    slot.arm(again)
    sched.advance(100)
    assert hits == [0, 1]


def test_qt_timer_scheduler_fires_once():
    QtCore = pytest.importorskip("PyQt6.QtCore")
    from reportsort.utils.qt_scheduler import QtTimerScheduler

    app = QtCore.QCoreApplication.instance() or QtCore.QCoreApplication([])
    assert QtTimerScheduler.available()
    slot = DebounceSlot(QtTimerScheduler(), 30)
    hits = []
    slot.arm(hits.append, "first")
    slot.arm(hits.append, "second")
    deadline = time.monotonic() + 2.0
    while not hits and time.monotonic() < deadline:
        app.processEvents()
        time.sleep(0.005)
    for _ in range(10):
        app.processEvents()
        time.sleep(0.005)
    assert hits == ["second"]
