"""QTimer-backed scheduler for debounced activations inside a Qt event loop."""

from __future__ import annotations

from typing import Callable, Set

from PyQt6.QtCore import QCoreApplication, QTimer

__all__ = ["QtTimerScheduler"]


class _QtCall:
    def __init__(self, timer: QTimer, live: Set[QTimer]):
        self._timer = timer
        self._live = live

    @property
    def active(self) -> bool:
        return self._timer.isActive()

    def cancel(self) -> None:
        self._timer.stop()
        self._live.discard(self._timer)


class QtTimerScheduler:
    """Single-shot QTimers; timers are kept referenced until they fire or are cancelled."""

    def __init__(self) -> None:
        self._live: Set[QTimer] = set()

    @staticmethod
    def available() -> bool:
        return QCoreApplication.instance() is not None

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> _QtCall:
        timer = QTimer()
        timer.setSingleShot(True)

        def _on_timeout() -> None:
            self._live.discard(timer)
            callback()

        timer.timeout.connect(_on_timeout)  # type: ignore[attr-defined]
        self._live.add(timer)
        timer.start(max(0, int(delay_ms)))
        return _QtCall(timer, self._live)

    def pending_count(self) -> int:
        return sum(1 for t in self._live if t.isActive())
