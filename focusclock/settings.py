"""Application settings loaded from JSON.

Settings are read from:
    ~/.config/FocusClock/settings.json

Usage::

    settings = load_settings()
    engine = build_engine(settings)
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, fields
from pathlib import Path

from .timer.engine import (
    CompletionPolicy, Phase, TimerEngine, TimerMode, validate_durations,
)

logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".config" / "FocusClock"
SETTINGS_PATH = CONFIG_DIR / "settings.json"


def minutes_to_seconds(minutes: float) -> int:
    """Durations are edited in minutes but configured in seconds."""
    return int(round(minutes * 60))


@dataclass
class Settings:
    """All user-configurable preferences."""

    # ── timer ─────────────────────────────────────────────────────────
    mode: str = TimerMode.POMODORO.value
    work_duration: int = 25 * 60           # seconds
    break_duration: int = 5 * 60
    countdown_duration: int = 10 * 60
    completion_policy: str = CompletionPolicy.ADVANCE.value
    reset_to_initial_phase: bool = False

    # ── window ────────────────────────────────────────────────────────
    window_width: int = 420
    window_height: int = 520
    always_on_top: bool = False

    # ── diagnostics ───────────────────────────────────────────────────
    log_level: str = "WARNING"

    def timer_mode(self) -> TimerMode:
        return TimerMode(self.mode)

    def policy(self) -> CompletionPolicy:
        return CompletionPolicy(self.completion_policy)

    def logging_level(self) -> int:
        """Numeric level for ``log_level``; raises ValueError if unknown."""
        level = None
        if isinstance(self.log_level, str):
            level = logging.getLevelName(self.log_level.upper())
        if not isinstance(level, int):
            raise ValueError(f"unknown log level {self.log_level!r}")
        return level

    def durations(self) -> dict[Phase, int]:
        """Durations for the phases used by the configured mode."""
        all_phases = {
            Phase.WORK: self.work_duration,
            Phase.BREAK: self.break_duration,
            Phase.COUNTDOWN: self.countdown_duration,
        }
        return {phase: all_phases[phase] for phase in self.timer_mode().phases}


def load_settings(path: Path | None = None) -> Settings:
    """Load settings from disk, falling back to defaults."""
    path = path or SETTINGS_PATH
    if not path.exists():
        return Settings()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        # Only use keys that exist in the dataclass
        valid_keys = {f.name for f in fields(Settings)}
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        settings = Settings(**filtered)
        # fail here rather than at engine construction
        validate_durations(settings.timer_mode(), settings.durations())
        settings.policy()
        settings.logging_level()
        return settings
    except (OSError, ValueError, TypeError, AttributeError) as exc:
        logger.warning("Ignoring unreadable settings file %s: %s", path, exc)
        return Settings()


def build_engine(settings: Settings, parent=None) -> TimerEngine:
    """Create a ``TimerEngine`` configured from *settings*.

    Raises ``InvalidConfiguration`` if a stored duration is unusable.
    """
    return TimerEngine(
        parent,
        mode=settings.timer_mode(),
        durations=settings.durations(),
        completion_policy=settings.policy(),
        reset_to_initial_phase=settings.reset_to_initial_phase,
    )
