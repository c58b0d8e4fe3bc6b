"""Shared test helpers for Meeetimer."""

from meeetimer.timer.alerts import FinalAlert
from meeetimer.timer.engine import TimerEngine


class SignalCollector:
    """Utility to capture pyqtSignal emissions into a list."""

    def __init__(self):
        self.items: list = []

    def slot(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __call__(self, *args):
        self.slot(*args)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, idx):
        return self.items[idx]

    @property
    def last(self):
        return self.items[-1] if self.items else None

    def clear(self):
        self.items.clear()


class RecordingSink:
    """Notification sink that remembers every slot it was asked to play."""

    def __init__(self):
        self.played: list = []

    def play(self, slot):
        self.played.append(slot)

    @property
    def thresholds(self) -> list[int]:
        return [s.threshold for s in self.played if not isinstance(s, FinalAlert)]

    @property
    def finals(self) -> int:
        return sum(isinstance(s, FinalAlert) for s in self.played)


class ExplodingSink:
    """Notification sink whose every call fails."""

    def __init__(self):
        self.calls = 0

    def play(self, slot):
        self.calls += 1
        raise RuntimeError("audio device gone")


def run_ticks(engine: TimerEngine, count: int) -> None:
    """Deliver *count* ticks directly, bypassing the Qt driver."""
    for _ in range(count):
        engine.tick()
