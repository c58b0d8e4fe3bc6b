"""Console runner: python -m meeetimer."""

from __future__ import annotations

import logging
import signal
import sys
from typing import List, Optional

import typer

from .display import format_time, status_line
from .settings import Settings, load_settings, save_settings, settings_from
from .timer import (
    PRESET_MINUTES,
    InvalidSettings,
    Phase,
    TimerEngine,
    TimerSettings,
    preset,
    validate,
)


logger = logging.getLogger(__name__)

app = typer.Typer(
    name="meeetimer",
    help="Presentation countdown timer with remaining-time alerts.",
    add_completion=False,
)

QUIT_DELAY_MS = 1500  # let the final sound finish before exiting


def build_settings(
    prefs: Settings,
    minutes: Optional[int],
    seconds: Optional[int],
    alerts: Optional[List[int]],
    preset_minutes: Optional[int],
) -> TimerSettings:
    """Merge command-line values over saved preferences and validate."""
    if preset_minutes is not None:
        if preset_minutes not in PRESET_MINUTES:
            raise InvalidSettings(
                f"preset must be one of {', '.join(map(str, PRESET_MINUTES))}"
            )
        base = preset(preset_minutes)
        total, thresholds = base.total_duration_seconds, list(base.alert_thresholds)
    else:
        total, thresholds = prefs.total_duration_seconds, prefs.alert_thresholds

    if minutes is not None or seconds is not None:
        total = (minutes or 0) * 60 + (seconds or 0)
    if alerts:
        thresholds = alerts
    return validate(total, thresholds)


def run_countdown(settings: TimerSettings, prefs: Settings) -> bool:
    """Run the countdown on a Qt event loop.  True if it reached zero."""
    from PyQt6.QtCore import QTimer
    from PyQt6.QtWidgets import QApplication

    from .audio.sounds import SoundManager

    qt_app = QApplication.instance() or QApplication(sys.argv[:1])

    sounds = SoundManager()
    sounds.set_volume(prefs.sound_volume)
    sounds.set_enabled(prefs.sound_enabled)

    engine = TimerEngine(settings, sink=sounds, stagger_ms=prefs.alert_stagger_ms)
    engine.snapshot_changed.connect(lambda snap: typer.echo(status_line(snap)))
    engine.threshold_crossed.connect(
        lambda t: typer.echo(f"** {format_time(t)} remaining **")
    )
    engine.finished.connect(lambda: QTimer.singleShot(QUIT_DELAY_MS, qt_app.quit))

    # Ctrl-C: Python only sees the signal when the interpreter gets a turn
    signal.signal(signal.SIGINT, lambda *_: qt_app.quit())
    heartbeat = QTimer()
    heartbeat.timeout.connect(lambda: None)
    heartbeat.start(200)

    engine.start()
    try:
        qt_app.exec()
    finally:
        heartbeat.stop()
        engine.dispose()
        signal.signal(signal.SIGINT, signal.default_int_handler)
    return engine.phase == Phase.FINISHED


@app.command()
def main(
    minutes: Optional[int] = typer.Option(None, "--minutes", "-m", help="Talk length, minutes part"),
    seconds: Optional[int] = typer.Option(None, "--seconds", "-s", help="Talk length, seconds part"),
    alerts: Optional[List[int]] = typer.Option(
        None, "--alert", "-a", help="Alert at this many seconds remaining (up to 3)"
    ),
    preset_minutes: Optional[int] = typer.Option(
        None, "--preset", "-p", help="Preset length in minutes with 10/5/1 min alerts"
    ),
    mute: bool = typer.Option(False, "--mute", help="No sounds"),
    volume: Optional[int] = typer.Option(None, "--volume", help="Sound volume 0-100"),
    save: bool = typer.Option(False, "--save", help="Remember these settings"),
    show: bool = typer.Option(False, "--show", help="Print the settings and exit"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Count down a presentation, sounding each alert as it is reached."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    prefs = load_settings()
    try:
        settings = build_settings(prefs, minutes, seconds, alerts, preset_minutes)
    except InvalidSettings as exc:
        typer.echo(f"Invalid settings: {exc}", err=True)
        raise typer.Exit(2)

    if mute:
        prefs.sound_enabled = False
    if volume is not None:
        prefs.sound_volume = max(0, min(volume, 100))

    if save:
        save_settings(settings_from(settings, prefs))
        logger.info("settings saved")

    alert_text = ", ".join(format_time(t) for t in settings.alert_thresholds) or "none"
    typer.echo(
        f"Duration {format_time(settings.total_duration_seconds)}; alerts at {alert_text}"
    )
    if show:
        return

    if not run_countdown(settings, prefs):
        typer.echo("Stopped.")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
