"""Alert scheduling: which thresholds a tick has crossed, and in what order.

A threshold ``t`` is crossed on a tick when ``0 < remaining <= t`` and it
has not fired yet.  Thresholds crossed on the same tick come back
furthest-out first (descending); spacing the resulting sounds apart is the
caller's job, this module does no timing.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Protocol, Union


# ── notification slots ────────────────────────────────────────────────────


@dataclass(frozen=True)
class ThresholdAlert:
    """A remaining-time alert.  ``index`` 0 is the furthest-out alert."""

    index: int
    threshold: int


@dataclass(frozen=True)
class FinalAlert:
    """The time-is-up alert."""


AlertSlot = Union[ThresholdAlert, FinalAlert]


class NotificationSink(Protocol):
    """Anything that can announce an alert slot (sound, beep, ...)."""

    def play(self, slot: AlertSlot) -> None: ...


# ── scheduler ─────────────────────────────────────────────────────────────


def evaluate(remaining_seconds: int, pending_thresholds: Iterable[int]) -> list[int]:
    """Return the pending thresholds crossed at *remaining_seconds*, descending."""
    if remaining_seconds <= 0:
        return []
    return sorted(
        (t for t in pending_thresholds if remaining_seconds <= t),
        reverse=True,
    )


class AlertScheduler:
    """Binds :func:`evaluate` to one configured threshold set."""

    def __init__(self, thresholds: Iterable[int]) -> None:
        self._thresholds: tuple[int, ...] = tuple(sorted(set(thresholds), reverse=True))

    @property
    def thresholds(self) -> tuple[int, ...]:
        return self._thresholds

    def pending(self, triggered: Iterable[int]) -> list[int]:
        fired = set(triggered)
        return [t for t in self._thresholds if t not in fired]

    def evaluate(self, remaining_seconds: int, triggered: Iterable[int] = ()) -> list[int]:
        return evaluate(remaining_seconds, self.pending(triggered))

    def slot_for(self, threshold: int) -> ThresholdAlert:
        return ThresholdAlert(self._thresholds.index(threshold), threshold)
