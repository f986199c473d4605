from __future__ import annotations

"""Periodic clock tick driving status recomputation.

Design:
 - Wraps a QTimer; nothing runs until ``start()`` and ``stop()`` cancels it.
 - Each tick emits the current (day_of_week, "HH:mm") pair, read from an
   injectable clock so tests can move time by hand.
 - Never touches persisted data; listeners rebuild derived display state.
"""

from datetime import datetime
from typing import Callable, Optional

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from .schedule import day_of_week, hhmm

TimeProvider = Callable[[], datetime]

DEFAULT_INTERVAL_SECONDS = 30


class StatusTicker(QObject):
    tick = pyqtSignal(int, str)  # day_of_week, HH:mm
    started = pyqtSignal()
    stopped = pyqtSignal()

    def __init__(
        self,
        interval_seconds: int = DEFAULT_INTERVAL_SECONDS,
        time_provider: Optional[TimeProvider] = None,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self._time_provider: TimeProvider = time_provider or datetime.now
        self._timer = QTimer(self)
        self._timer.setInterval(interval_seconds * 1000)
        self._timer.timeout.connect(self._on_tick)

    # --- Properties -----------------------------------------------------
    @property
    def is_active(self) -> bool:
        return self._timer.isActive()

    @property
    def interval_seconds(self) -> int:
        return self._timer.interval() // 1000

    def now(self) -> tuple[int, str]:
        current = self._time_provider()
        return day_of_week(current), hhmm(current)

    # --- Public API -----------------------------------------------------
    def start(self) -> None:
        if self._timer.isActive():
            return
        self._timer.start()
        self.started.emit()
        self._on_tick()

    def stop(self) -> None:
        if not self._timer.isActive():
            return
        self._timer.stop()
        self.stopped.emit()

    # --- Internal -------------------------------------------------------
    def _on_tick(self) -> None:
        day, time_str = self.now()
        self.tick.emit(day, time_str)


__all__ = ["StatusTicker", "DEFAULT_INTERVAL_SECONDS"]
