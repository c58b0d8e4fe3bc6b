"""Periodic tick source for the timer engine."""

from __future__ import annotations

from PyQt6.QtCore import QObject, QTimer, pyqtSignal


TICK_INTERVAL_MS = 1000  # one quantum


class TickDriver(QObject):
    """A cancellable once-per-second trigger.

    Knows nothing about timer phases; whoever owns it decides when to
    :meth:`start` and :meth:`cancel`.  ``cancel`` is safe to call any
    number of times.
    """

    fired = pyqtSignal()

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        interval_ms: int = TICK_INTERVAL_MS,
    ) -> None:
        super().__init__(parent)
        self._qt_timer = QTimer(self)
        self._qt_timer.setInterval(interval_ms)
        self._qt_timer.timeout.connect(self.fired)

    @property
    def is_active(self) -> bool:
        return self._qt_timer.isActive()

    @property
    def interval_ms(self) -> int:
        return self._qt_timer.interval()

    def start(self) -> None:
        """Arm the timer; a full interval passes before the first tick."""
        self._qt_timer.start()

    def cancel(self) -> None:
        if self._qt_timer.isActive():
            self._qt_timer.stop()
