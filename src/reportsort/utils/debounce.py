"""Single-slot debouncing (last-activation-wins after a quiet period).

A :class:`DebounceSlot` holds at most one pending deferred action. Arming
it again before the action fires cancels the pending call and schedules a
new one with the latest arguments.

Timers come from a :class:`Scheduler`: ``QtTimerScheduler`` inside a running
Qt application, ``ManualScheduler`` (virtual clock driven by ``advance``)
everywhere else, including tests.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import partial
from itertools import count
from typing import Any, Callable, List, Optional, Protocol

__all__ = [
    "Scheduler",
    "ScheduledCall",
    "ManualScheduler",
    "DebounceSlot",
    "default_scheduler",
]


class ScheduledCall(Protocol):
    @property
    def active(self) -> bool: ...  # pragma: no cover - structural

    def cancel(self) -> None: ...  # pragma: no cover - structural


class Scheduler(Protocol):
    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> ScheduledCall: ...


@dataclass
class _ManualCall:
    due_ms: int
    seq: int
    callback: Callable[[], None]
    active: bool = True

    def cancel(self) -> None:
        self.active = False


@dataclass
class ManualScheduler:
    """Deterministic scheduler; time only moves when ``advance`` is called."""

    now_ms: int = 0
    _calls: List[_ManualCall] = field(default_factory=list)
    _seq: Any = field(default_factory=count)

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> _ManualCall:
        call = _ManualCall(self.now_ms + max(0, int(delay_ms)), next(self._seq), callback)
        self._calls.append(call)
        return call

    def pending_count(self) -> int:
        return sum(1 for c in self._calls if c.active)

    def advance(self, ms: int) -> int:
        """Move the clock forward, running due callbacks in order. Returns calls fired."""
        target = self.now_ms + max(0, int(ms))
        fired = 0
        while True:
            due = [c for c in self._calls if c.active and c.due_ms <= target]
            if not due:
                break
            call = min(due, key=lambda c: (c.due_ms, c.seq))
            call.active = False
            self.now_ms = call.due_ms
            fired += 1
            call.callback()
        self.now_ms = target
        self._calls = [c for c in self._calls if c.active]
        return fired


class DebounceSlot:
    def __init__(self, scheduler: Scheduler, delay_ms: int):
        self._scheduler = scheduler
        self._delay_ms = max(0, int(delay_ms))
        self._call: Optional[ScheduledCall] = None
        self._action: Optional[Callable[[], None]] = None

    @property
    def delay_ms(self) -> int:
        return self._delay_ms

    @property
    def pending(self) -> bool:
        return self._action is not None

    def arm(self, callback: Callable[..., Any], *args: Any, **kwargs: Any) -> None:
        self.cancel()
        self._action = partial(callback, *args, **kwargs)
        self._call = self._scheduler.call_later(self._delay_ms, self._fire)

    def cancel(self) -> None:
        if self._call is not None:
            self._call.cancel()
        self._call = None
        self._action = None

    def flush(self) -> bool:
        """Run the pending action now. Returns False when nothing was pending."""
        if self._action is None:
            return False
        if self._call is not None:
            self._call.cancel()
        self._fire()
        return True

    def _fire(self) -> None:
        action = self._action
        self._action = None
        self._call = None
        if action is not None:
            action()


def default_scheduler() -> Scheduler:
    """Qt timers when a Qt application exists, otherwise a manual clock."""
    from reportsort.utils.qt_scheduler import QtTimerScheduler  # local import keeps Qt lazy

    if QtTimerScheduler.available():
        return QtTimerScheduler()
    return ManualScheduler()
