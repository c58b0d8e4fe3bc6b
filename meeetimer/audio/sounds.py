"""Alert sound synthesis and playback using numpy + QSoundEffect.

All sounds are generated programmatically as WAV files: a sine tone with
an exponential fade, the same shape as a browser oscillator beep.  Files
are cached to disk so later launches skip synthesis.

Sound names
-----------
- ``alert_1``  — first (furthest-out) remaining-time alert, 800 Hz
- ``alert_2``  — second alert, a fourth higher
- ``alert_3``  — third alert, an octave higher
- ``final``    — time is up: three descending beeps

``SoundManager`` is the timer's notification sink: ``play`` accepts an
alert slot or a sound name and never raises.  When a sound cannot be
played it logs a warning and falls back to the system beep.
"""

from __future__ import annotations

import io
import logging
import wave
from pathlib import Path

import numpy as np

from PyQt6.QtCore import QObject, QUrl
from PyQt6.QtMultimedia import QSoundEffect
from PyQt6.QtWidgets import QApplication

from ..settings import APP_SUPPORT_DIR
from ..timer.alerts import AlertSlot, FinalAlert, ThresholdAlert


logger = logging.getLogger(__name__)


# ── paths ────────────────────────────────────────────────────────────────

SOUNDS_DIR = APP_SUPPORT_DIR / "sounds"

SOUND_NAMES = (
    "alert_1",
    "alert_2",
    "alert_3",
    "final",
)

SAMPLE_RATE = 44100
BEEP_SECONDS = 0.5
BEEP_GAIN = 0.3
BEEP_FLOOR = 0.01  # gain the fade decays to


# ═══════════════════════════════════════════════════════════════════════════
#  WAV SYNTHESIS HELPERS
# ═══════════════════════════════════════════════════════════════════════════


def _sine(freq: float, duration_s: float) -> np.ndarray:
    """Pure sine wave at *freq* Hz for *duration_s* seconds."""
    t = np.linspace(0, duration_s, int(SAMPLE_RATE * duration_s), endpoint=False)
    return np.sin(2 * np.pi * freq * t)


def _exp_fade(length: int, start: float = BEEP_GAIN, end: float = BEEP_FLOOR) -> np.ndarray:
    """Exponential gain ramp from *start* to *end* over *length* samples."""
    return np.geomspace(start, end, length)


def _beep(freq: float, duration_s: float = BEEP_SECONDS) -> np.ndarray:
    tone = _sine(freq, duration_s)
    return tone * _exp_fade(len(tone))


def _to_wav_bytes(samples: np.ndarray) -> bytes:
    """Convert a float64 numpy array (-1..1) to 16-bit PCM WAV bytes."""
    samples = np.clip(samples, -1.0, 1.0)
    int_samples = (samples * 32767).astype(np.int16)

    buf = io.BytesIO()
    with wave.open(buf, "wb") as wf:
        wf.setnchannels(1)
        wf.setsampwidth(2)
        wf.setframerate(SAMPLE_RATE)
        wf.writeframes(int_samples.tobytes())
    return buf.getvalue()


# ═══════════════════════════════════════════════════════════════════════════
#  SOUND GENERATORS
# ═══════════════════════════════════════════════════════════════════════════


ALERT_FREQUENCIES = (800.0, 1066.67, 1600.0)


def _generate_alert(index: int) -> bytes:
    """Single fading beep; later alerts are pitched higher."""
    return _to_wav_bytes(_beep(ALERT_FREQUENCIES[index]))


def _generate_final() -> bytes:
    """Time is up — three descending beeps with short gaps."""
    gap = np.zeros(int(SAMPLE_RATE * 0.1))
    parts: list[np.ndarray] = []
    for freq in (1600.0, 1200.0, 800.0):
        parts.append(_beep(freq, 0.3))
        parts.append(gap)
    return _to_wav_bytes(np.concatenate(parts))


_GENERATORS = {
    "alert_1": lambda: _generate_alert(0),
    "alert_2": lambda: _generate_alert(1),
    "alert_3": lambda: _generate_alert(2),
    "final": _generate_final,
}


def sound_name_for(slot: AlertSlot) -> str:
    if isinstance(slot, FinalAlert):
        return "final"
    if isinstance(slot, ThresholdAlert):
        return f"alert_{min(slot.index, len(ALERT_FREQUENCIES) - 1) + 1}"
    raise TypeError(f"not an alert slot: {slot!r}")


# ═══════════════════════════════════════════════════════════════════════════
#  SOUND MANAGER
# ═══════════════════════════════════════════════════════════════════════════


class SoundManager(QObject):
    """Manages sound synthesis, caching, and playback.

    Usage::

        mgr = SoundManager(parent=self)
        mgr.set_volume(70)
        mgr.play(FinalAlert())
    """

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        sounds_dir: Path | None = None,
    ) -> None:
        super().__init__(parent)
        self._enabled = True
        self._volume = 0.7  # 0.0–1.0
        self._sounds_dir = sounds_dir or SOUNDS_DIR
        self._effects: dict[str, QSoundEffect] = {}
        self._fallback_count = 0

        self._ensure_wav_files()
        self._load_effects()

    # ── public API ────────────────────────────────────────────────────

    def set_volume(self, level: int) -> None:
        """Set volume (0-100).  Updates all loaded effects."""
        self._volume = max(0, min(level, 100)) / 100.0
        for effect in self._effects.values():
            effect.setVolume(self._volume)

    def set_enabled(self, enabled: bool) -> None:
        self._enabled = enabled

    def play(self, slot: AlertSlot | str) -> None:
        """Play the sound for an alert slot (or a sound name).

        No-op if disabled.  Unknown names, broken effects and playback
        errors fall back to the system beep.
        """
        if not self._enabled:
            return
        name = slot if isinstance(slot, str) else sound_name_for(slot)
        effect = self._effects.get(name)
        if effect is None:
            logger.warning("no sound loaded for %r", name)
            self._fallback()
            return
        try:
            if effect.status() == QSoundEffect.Status.Error:
                raise RuntimeError(f"sound effect {name!r} failed to load")
            effect.play()
        except Exception:
            logger.warning("could not play %r", name, exc_info=True)
            self._fallback()

    @property
    def volume(self) -> int:
        """Current volume as 0-100 integer."""
        return round(self._volume * 100)

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def fallback_count(self) -> int:
        """How many times playback fell back to the system beep."""
        return self._fallback_count

    # ── internal ──────────────────────────────────────────────────────

    def _fallback(self) -> None:
        self._fallback_count += 1
        try:
            QApplication.beep()
        except Exception:
            logger.warning("system beep unavailable", exc_info=True)

    def _ensure_wav_files(self) -> None:
        """Generate any missing WAV files to the cache directory."""
        self._sounds_dir.mkdir(parents=True, exist_ok=True)
        for name, gen_fn in _GENERATORS.items():
            path = self._sounds_dir / f"{name}.wav"
            if not path.exists():
                path.write_bytes(gen_fn())

    def _load_effects(self) -> None:
        """Create QSoundEffect instances from cached WAV files."""
        for name in SOUND_NAMES:
            path = self._sounds_dir / f"{name}.wav"
            if path.exists():
                effect = QSoundEffect(self)
                effect.setSource(QUrl.fromLocalFile(str(path)))
                effect.setVolume(self._volume)
                self._effects[name] = effect
