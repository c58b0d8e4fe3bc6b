"""Timer configuration: validation and alert editing helpers.

Raw input (a duration and a list of alert thresholds, all in seconds) is
normalised into a :class:`TimerSettings` before the engine ever sees it::

    settings = validate(20 * 60, [600, 300, 60])
    settings = with_threshold(settings)        # adds a default alert
    settings = replace_threshold(settings, 600, 540)
"""

from __future__ import annotations

from dataclasses import dataclass


# ── constants ─────────────────────────────────────────────────────────────

MAX_ALERTS = 3
PRESET_MINUTES = (10, 15, 20, 30)
PRESET_ALERT_MINUTES = (10, 5, 1)  # remaining-time alerts for presets


class InvalidSettings(ValueError):
    """Raised when a timer configuration cannot be used."""


# ── settings value ────────────────────────────────────────────────────────


@dataclass(frozen=True)
class TimerSettings:
    """Canonical timer configuration.

    ``alert_thresholds`` holds remaining-time values in seconds, distinct,
    descending, each strictly between 0 and the total duration.
    """

    total_duration_seconds: int
    alert_thresholds: tuple[int, ...] = ()

    def __post_init__(self) -> None:
        total = self.total_duration_seconds
        if not _is_int(total) or total <= 0:
            raise InvalidSettings(
                f"total duration must be a positive integer, got {total!r}"
            )
        thresholds = tuple(self.alert_thresholds)
        object.__setattr__(self, "alert_thresholds", thresholds)
        if len(thresholds) > MAX_ALERTS:
            raise InvalidSettings(f"at most {MAX_ALERTS} alerts are allowed")
        if any(not _is_int(t) or not 0 < t < total for t in thresholds):
            raise InvalidSettings(
                f"alert thresholds must lie between 0 and {total} seconds"
            )
        if list(thresholds) != sorted(set(thresholds), reverse=True):
            raise InvalidSettings("alert thresholds must be distinct and descending")


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


# ── validation ────────────────────────────────────────────────────────────


def validate(raw_duration, raw_thresholds=()) -> TimerSettings:
    """Normalise raw user input into a :class:`TimerSettings`.

    Raises :class:`InvalidSettings` only for a bad duration.  Thresholds
    that are out of range or not integers are dropped, duplicates are
    removed, the first ``MAX_ALERTS`` survivors are kept and the result is
    sorted descending.
    """
    if not _is_int(raw_duration) or raw_duration <= 0:
        raise InvalidSettings(
            f"duration must be at least 1 second, got {raw_duration!r}"
        )

    kept: list[int] = []
    for value in raw_thresholds:
        if not _is_int(value) or not 0 < value < raw_duration:
            continue
        if value in kept:
            continue
        kept.append(value)
        if len(kept) == MAX_ALERTS:
            break

    return TimerSettings(raw_duration, tuple(sorted(kept, reverse=True)))


def preset(minutes: int) -> TimerSettings:
    """Settings for a preset duration with alerts at 10/5/1 min remaining."""
    total = minutes * 60
    return validate(total, [m * 60 for m in PRESET_ALERT_MINUTES])


DEFAULT_SETTINGS = preset(20)


# ── alert editing ─────────────────────────────────────────────────────────


def default_threshold(settings: TimerSettings) -> int:
    """Where a newly added alert lands when the user gives no value.

    Half the duration for the first alert, otherwise one minute beyond the
    furthest-out alert (never past the duration itself).
    """
    total = settings.total_duration_seconds
    if not settings.alert_thresholds:
        return total // 2
    return min(total, max(settings.alert_thresholds) + 60)


def with_threshold(settings: TimerSettings, seconds: int | None = None) -> TimerSettings:
    if len(settings.alert_thresholds) >= MAX_ALERTS:
        return settings
    if seconds is None:
        seconds = default_threshold(settings)
    return validate(
        settings.total_duration_seconds,
        [*settings.alert_thresholds, seconds],
    )


def without_threshold(settings: TimerSettings, seconds: int) -> TimerSettings:
    return validate(
        settings.total_duration_seconds,
        [t for t in settings.alert_thresholds if t != seconds],
    )


def replace_threshold(settings: TimerSettings, old: int, new: int) -> TimerSettings:
    """Swap one alert for another; an out-of-range *new* removes it."""
    return validate(
        settings.total_duration_seconds,
        [new if t == old else t for t in settings.alert_thresholds],
    )
