"""Timer package."""

from .alerts import (
    AlertScheduler,
    AlertSlot,
    FinalAlert,
    NotificationSink,
    ThresholdAlert,
    evaluate,
)
from .driver import TickDriver, TICK_INTERVAL_MS
from .engine import TimerEngine, TimerSnapshot, Phase, ALERT_STAGGER_MS
from .validation import (
    TimerSettings,
    InvalidSettings,
    validate,
    preset,
    with_threshold,
    without_threshold,
    replace_threshold,
    DEFAULT_SETTINGS,
    MAX_ALERTS,
    PRESET_MINUTES,
)

__all__ = [
    "AlertScheduler",
    "AlertSlot",
    "FinalAlert",
    "NotificationSink",
    "ThresholdAlert",
    "evaluate",
    "TickDriver",
    "TICK_INTERVAL_MS",
    "TimerEngine",
    "TimerSnapshot",
    "Phase",
    "ALERT_STAGGER_MS",
    "TimerSettings",
    "InvalidSettings",
    "validate",
    "preset",
    "with_threshold",
    "without_threshold",
    "replace_threshold",
    "DEFAULT_SETTINGS",
    "MAX_ALERTS",
    "PRESET_MINUTES",
]
