"""Application settings with JSON persistence.

Settings are stored at:
    ~/Library/Application Support/Meeetimer/settings.json

Usage::

    settings = load_settings()
    settings.alert_thresholds = [300, 60]
    save_settings(settings)
    engine.reset(settings.timer_settings())
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, asdict, field, fields
from pathlib import Path

from .timer.validation import TimerSettings, validate


logger = logging.getLogger(__name__)

APP_SUPPORT_DIR = Path.home() / "Library" / "Application Support" / "Meeetimer"
SETTINGS_PATH = APP_SUPPORT_DIR / "settings.json"


@dataclass
class Settings:
    """All user-configurable preferences."""

    # ── timer ─────────────────────────────────────────────────────────
    total_duration_seconds: int = 20 * 60
    alert_thresholds: list[int] = field(default_factory=lambda: [600, 300, 60])

    # ── audio ─────────────────────────────────────────────────────────
    sound_enabled: bool = True
    sound_volume: int = 70                 # 0-100
    alert_stagger_ms: int = 600

    def timer_settings(self) -> TimerSettings:
        """Validated timer configuration.  Raises ``InvalidSettings``."""
        return validate(self.total_duration_seconds, self.alert_thresholds)


def load_settings() -> Settings:
    """Load settings from disk, falling back to defaults."""
    try:
        if SETTINGS_PATH.exists():
            data = json.loads(SETTINGS_PATH.read_text(encoding="utf-8"))
            # Only use keys that exist in the dataclass
            valid_keys = {f.name for f in fields(Settings)}
            filtered = {k: v for k, v in data.items() if k in valid_keys}
            return Settings(**filtered)
    except (OSError, ValueError, TypeError, AttributeError) as exc:
        logger.warning("ignoring unreadable settings at %s: %s", SETTINGS_PATH, exc)
    return Settings()


def save_settings(settings: Settings) -> None:
    """Write settings to disk as JSON."""
    APP_SUPPORT_DIR.mkdir(parents=True, exist_ok=True)
    SETTINGS_PATH.write_text(
        json.dumps(asdict(settings), indent=2) + "\n",
        encoding="utf-8",
    )


def settings_from(timer_settings: TimerSettings, base: Settings | None = None) -> Settings:
    """Copy a validated timer configuration into a preferences object."""
    base = base or Settings()
    base.total_duration_seconds = timer_settings.total_duration_seconds
    base.alert_thresholds = list(timer_settings.alert_thresholds)
    return base
