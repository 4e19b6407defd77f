"""Timer package."""

from .engine import (
    TimerEngine,
    EngineState,
    Phase,
    Status,
    TimerMode,
    CompletionPolicy,
    InvalidConfiguration,
    DEFAULT_DURATIONS,
    TICK_INTERVAL_MS,
    format_clock,
    validate_durations,
)

__all__ = [
    "TimerEngine",
    "EngineState",
    "Phase",
    "Status",
    "TimerMode",
    "CompletionPolicy",
    "InvalidConfiguration",
    "DEFAULT_DURATIONS",
    "TICK_INTERVAL_MS",
    "format_clock",
    "validate_durations",
]
