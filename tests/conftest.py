"""Shared pytest fixtures for Meeetimer tests."""

import os
import sys
import pytest

# Headless CI has no display server
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtWidgets import QApplication

from meeetimer.timer.engine import TimerEngine
from meeetimer.timer.validation import validate

from helpers import RecordingSink


@pytest.fixture(scope="session")
def qapp():
    """A single QApplication instance shared across the entire test run."""
    app = QApplication.instance() or QApplication(sys.argv)
    yield app


@pytest.fixture(autouse=True)
def settings_file(tmp_path, monkeypatch):
    """Keep every test away from the real settings/sounds directory."""
    monkeypatch.setattr("meeetimer.settings.APP_SUPPORT_DIR", tmp_path)
    monkeypatch.setattr("meeetimer.settings.SETTINGS_PATH", tmp_path / "settings.json")
    yield tmp_path / "settings.json"


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def engine(qapp, sink):
    """15-minute talk with alerts at 10/5/1 min, alerts played back to back."""
    eng = TimerEngine(validate(900, [600, 300, 60]), sink=sink, stagger_ms=0)
    yield eng
    eng.dispose()


@pytest.fixture
def make_engine(qapp, sink):
    """Factory: ``make_engine(total, thresholds, **kwargs)``."""
    created: list[TimerEngine] = []

    def _make(total, thresholds=(), **kwargs):
        kwargs.setdefault("sink", sink)
        kwargs.setdefault("stagger_ms", 0)
        eng = TimerEngine(validate(total, list(thresholds)), **kwargs)
        created.append(eng)
        return eng

    yield _make
    for eng in created:
        eng.dispose()
