"""Console rendering of timer snapshots."""

from __future__ import annotations

from .timer.engine import Phase, TimerSnapshot


_PHASE_LABELS = {
    Phase.IDLE: "ready",
    Phase.RUNNING: "",
    Phase.PAUSED: "paused",
    Phase.FINISHED: "time is up",
}


def format_time(seconds: int) -> str:
    """``MM:SS``, or ``H:MM:SS`` from one hour up."""
    seconds = max(0, seconds)
    hours, rest = divmod(seconds, 3600)
    minutes, secs = divmod(rest, 60)
    if hours:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes:02d}:{secs:02d}"


def status_line(snapshot: TimerSnapshot) -> str:
    """One-line summary: remaining, elapsed, alerts fired, phase."""
    line = (
        f"{format_time(snapshot.remaining_seconds)} left"
        f"  (elapsed {format_time(snapshot.elapsed_seconds)})"
    )
    if snapshot.triggered_thresholds:
        fired = ", ".join(format_time(t) for t in snapshot.triggered_thresholds)
        line += f"  alerts: {fired}"
    label = _PHASE_LABELS[snapshot.phase]
    if label:
        line += f"  [{label}]"
    return line
