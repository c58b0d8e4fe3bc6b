"""Countdown state machine for Meeetimer.

States
------
IDLE       Configured, waiting for the speaker to start.
RUNNING    Counting down, one tick per second.
PAUSED     Frozen; elapsed time is kept.
FINISHED   Time is up.  Only ``reset`` leaves this state.

Transitions
-----------
IDLE → RUNNING          (start)
RUNNING → PAUSED        (pause)
PAUSED → RUNNING        (resume)
RUNNING → FINISHED      (tick reaching 0 remaining)
Any → IDLE              (reset)

Anything else is a silent no-op, so controls can be pressed freely.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from functools import partial

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from .alerts import AlertScheduler, AlertSlot, FinalAlert, NotificationSink
from .driver import TickDriver
from .validation import DEFAULT_SETTINGS, TimerSettings


logger = logging.getLogger(__name__)


# ── enums / values ────────────────────────────────────────────────────────


class Phase(Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    FINISHED = "finished"


ALERT_STAGGER_MS = 600  # gap between alerts crossed on the same tick


@dataclass(frozen=True)
class TimerSnapshot:
    """Read-only view of the engine after a transition."""

    phase: Phase
    total_duration_seconds: int
    elapsed_seconds: int
    remaining_seconds: int
    triggered_thresholds: tuple[int, ...]

    @property
    def percent_complete(self) -> float:
        """0.0 → 1.0 progress through the talk."""
        return min(1.0, self.elapsed_seconds / self.total_duration_seconds)


class _SilentSink:
    def play(self, slot: AlertSlot) -> None:
        pass


# ── engine ────────────────────────────────────────────────────────────────


class TimerEngine(QObject):
    """Qt-based presentation countdown with remaining-time alerts.

    Signals
    -------
    snapshot_changed(snapshot: TimerSnapshot)
        Emitted after every transition, ticks included.
    phase_changed(phase: Phase)
        Emitted when the phase changes.
    threshold_crossed(threshold: int)
        Emitted once per alert threshold, in crossing order.
    finished()
        Emitted when the countdown reaches zero.
    """

    snapshot_changed = pyqtSignal(object)
    phase_changed = pyqtSignal(object)
    threshold_crossed = pyqtSignal(int)
    finished = pyqtSignal()

    def __init__(
        self,
        settings: TimerSettings = DEFAULT_SETTINGS,
        parent: QObject | None = None,
        *,
        sink: NotificationSink | None = None,
        driver: TickDriver | None = None,
        stagger_ms: int = ALERT_STAGGER_MS,
    ) -> None:
        super().__init__(parent)

        self._sink: NotificationSink = sink if sink is not None else _SilentSink()
        self._stagger_ms = max(0, stagger_ms)
        self._pending_alerts: list[QTimer] = []
        self._disposed = False
        self._generation = 0  # bumped by every reset

        self._driver = driver if driver is not None else TickDriver(self)
        self._driver.fired.connect(self.tick)

        self._install(settings)

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def settings(self) -> TimerSettings:
        return self._settings

    @property
    def elapsed(self) -> int:
        return self._elapsed

    @property
    def remaining(self) -> int:
        """Seconds left on the clock."""
        return self._remaining

    @property
    def triggered(self) -> tuple[int, ...]:
        """Thresholds already announced, in crossing order."""
        return tuple(self._triggered)

    @property
    def is_running(self) -> bool:
        return self._phase == Phase.RUNNING

    @property
    def driver(self) -> TickDriver:
        return self._driver

    def snapshot(self) -> TimerSnapshot:
        return TimerSnapshot(
            phase=self._phase,
            total_duration_seconds=self._settings.total_duration_seconds,
            elapsed_seconds=self._elapsed,
            remaining_seconds=self._remaining,
            triggered_thresholds=tuple(self._triggered),
        )

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def start(self) -> None:
        """Begin the countdown.  Only valid from IDLE."""
        if self._phase != Phase.IDLE or self._disposed:
            return
        self._set_phase(Phase.RUNNING)
        self._driver.start()

    def pause(self) -> None:
        if self._phase != Phase.RUNNING:
            return
        self._driver.cancel()
        self._set_phase(Phase.PAUSED)

    def resume(self) -> None:
        if self._phase != Phase.PAUSED or self._disposed:
            return
        self._set_phase(Phase.RUNNING)
        self._driver.start()

    def toggle(self) -> None:
        """Single start/pause control: start, pause or resume as fits."""
        if self._phase == Phase.IDLE:
            self.start()
        elif self._phase == Phase.RUNNING:
            self.pause()
        elif self._phase == Phase.PAUSED:
            self.resume()

    def reset(self, settings: TimerSettings | None = None) -> None:
        """Back to IDLE with a full clock, optionally with new settings.

        Pending ticks and queued alerts are cancelled before state is
        rebuilt, so nothing from before the reset can land after it.
        """
        self._driver.cancel()
        self._cancel_pending_alerts()
        self._install(settings if settings is not None else self._settings)
        logger.debug("timer reset to %ss", self._remaining)
        self.phase_changed.emit(self._phase)
        self.snapshot_changed.emit(self.snapshot())

    def dispose(self) -> None:
        """Stop the driver and drop queued alerts for good."""
        self._disposed = True
        self._driver.cancel()
        self._cancel_pending_alerts()

    # ══════════════════════════════════════════════════════════════════
    #  TICK
    # ══════════════════════════════════════════════════════════════════

    def tick(self) -> None:
        """Advance one second.  Ignored unless RUNNING.

        State is fully updated before any signal fires or the sink is
        called.  If a listener resets the engine, the rest of this tick's
        announcements are dropped.
        """
        if self._phase != Phase.RUNNING:
            return

        total = self._settings.total_duration_seconds
        self._elapsed = min(total, self._elapsed + 1)
        self._remaining = max(0, total - self._elapsed)

        crossed = self._scheduler.evaluate(self._remaining, self._triggered)
        self._triggered.extend(crossed)
        slots: list[AlertSlot] = [self._scheduler.slot_for(t) for t in crossed]

        done = self._remaining == 0
        if done:
            slots.append(FinalAlert())
            self._driver.cancel()
            logger.debug("phase %s -> %s", self._phase.value, Phase.FINISHED.value)
            self._phase = Phase.FINISHED

        # ── announce ──────────────────────────────────────────────────
        snapshot = self.snapshot()
        generation = self._generation
        if crossed:
            logger.info("alert: %s remaining", ", ".join(f"{t}s" for t in crossed))
        if done:
            logger.info("time is up")

        outward = [partial(self.threshold_crossed.emit, t) for t in crossed]
        outward.append(partial(self._notify_staggered, slots, generation))
        if done:
            outward.append(partial(self.phase_changed.emit, Phase.FINISHED))
        outward.append(partial(self.snapshot_changed.emit, snapshot))
        if done:
            outward.append(self.finished.emit)

        for call in outward:
            if self._generation != generation:
                return
            call()

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL
    # ══════════════════════════════════════════════════════════════════

    def _install(self, settings: TimerSettings) -> None:
        self._settings = settings
        self._scheduler = AlertScheduler(settings.alert_thresholds)
        self._phase = Phase.IDLE
        self._elapsed = 0
        self._remaining = settings.total_duration_seconds
        self._triggered: list[int] = []
        self._generation += 1

    def _set_phase(self, phase: Phase) -> None:
        logger.debug("phase %s -> %s", self._phase.value, phase.value)
        self._phase = phase
        self.phase_changed.emit(phase)
        self.snapshot_changed.emit(self.snapshot())

    def _notify_staggered(self, slots: list[AlertSlot], generation: int) -> None:
        """Play *slots* in order, ``stagger_ms`` apart; the first right away.

        Stops early if the sink resets the engine.
        """
        for i, slot in enumerate(slots):
            if self._generation != generation:
                return
            if i == 0 or self._stagger_ms == 0:
                self._notify(slot)
                continue
            timer = QTimer(self)
            timer.setSingleShot(True)
            timer.timeout.connect(
                lambda slot=slot, timer=timer: self._fire_pending(timer, slot)
            )
            self._pending_alerts.append(timer)
            timer.start(i * self._stagger_ms)

    def _fire_pending(self, timer: QTimer, slot: AlertSlot) -> None:
        if timer in self._pending_alerts:
            self._pending_alerts.remove(timer)
        timer.deleteLater()
        self._notify(slot)

    def _notify(self, slot: AlertSlot) -> None:
        try:
            self._sink.play(slot)
        except Exception:
            logger.warning("notification for %r failed", slot, exc_info=True)

    def _cancel_pending_alerts(self) -> None:
        for timer in self._pending_alerts:
            timer.stop()
            timer.deleteLater()
        self._pending_alerts.clear()
