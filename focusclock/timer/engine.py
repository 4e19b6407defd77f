"""Timer state machine for FocusClock.

States
------
IDLE        Not running, remaining time loaded from configuration.
RUNNING     Counting down, one tick per second.
PAUSED      Frozen; remaining time retained.
COMPLETED   The phase reached zero and the engine halted on it.

Transitions
-----------
IDLE | PAUSED | COMPLETED → RUNNING   (start / resume from PAUSED)
RUNNING → PAUSED                       (pause)
RUNNING | PAUSED → IDLE                (stop)
Any → IDLE                             (reset / switch_phase)
RUNNING → COMPLETED → per policy       (remaining reaches 0)

What happens after a phase completes is decided by the
``CompletionPolicy`` given at construction: halt, advance and wait,
advance paused, or advance and keep running.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from numbers import Real
from typing import Mapping, Union

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

logger = logging.getLogger(__name__)


# ── enums ─────────────────────────────────────────────────────────────────


class Phase(Enum):
    WORK = "work"
    BREAK = "break"
    COUNTDOWN = "countdown"


class Status(Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    COMPLETED = "completed"


class TimerMode(Enum):
    """Which phases the engine cycles through."""

    POMODORO = "pomodoro"
    COUNTDOWN = "countdown"

    @property
    def phases(self) -> tuple[Phase, ...]:
        return _MODE_PHASES[self]


class CompletionPolicy(Enum):
    """What the engine does once the current phase hits zero."""

    HALT = "halt"
    ADVANCE = "advance"
    ADVANCE_PAUSED = "advance_paused"
    ADVANCE_AND_START = "advance_and_start"


# ── constants ─────────────────────────────────────────────────────────────

TICK_INTERVAL_MS = 1000

DEFAULT_DURATIONS: dict[Phase, int] = {
    Phase.WORK: 25 * 60,
    Phase.BREAK: 5 * 60,
    Phase.COUNTDOWN: 10 * 60,
}

_MODE_PHASES: dict[TimerMode, tuple[Phase, ...]] = {
    TimerMode.POMODORO: (Phase.WORK, Phase.BREAK),
    TimerMode.COUNTDOWN: (Phase.COUNTDOWN,),
}

PhaseKey = Union[Phase, str]


# ── errors ────────────────────────────────────────────────────────────────


class InvalidConfiguration(ValueError):
    """A duration passed to ``configure`` was rejected.

    Raised before anything is mutated, so the engine keeps its previous
    configuration and state.
    """


# ── snapshot ──────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class EngineState:
    """Immutable view of the engine handed to consumers."""

    phase: Phase
    remaining_seconds: int
    status: Status
    completed_cycles: int
    duration_seconds: int

    @property
    def progress_fraction(self) -> float:
        """0.0 → 1.0 progress through the current phase."""
        if self.duration_seconds <= 0:
            return 0.0
        elapsed = self.duration_seconds - self.remaining_seconds
        return elapsed / self.duration_seconds


def format_clock(seconds: int) -> str:
    """Render seconds as ``MM:SS`` (minutes are not wrapped at 60)."""
    minutes, secs = divmod(max(0, int(seconds)), 60)
    return f"{minutes:02d}:{secs:02d}"


# ── engine ────────────────────────────────────────────────────────────────


class TimerEngine(QObject):
    """Qt-based countdown engine with work/break cycling.

    Signals
    -------
    state_changed(state: EngineState)
        Emitted after every mutation, ticks included.
    phase_completed(phase_name: str)
        Emitted exactly once when a phase reaches zero, before the next
        phase (if any) is loaded.
    """

    state_changed = pyqtSignal(object)
    phase_completed = pyqtSignal(str)

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        mode: TimerMode = TimerMode.POMODORO,
        durations: Mapping[PhaseKey, float] | None = None,
        completion_policy: CompletionPolicy = CompletionPolicy.ADVANCE,
        reset_to_initial_phase: bool = False,
        tick_interval_ms: int = TICK_INTERVAL_MS,
    ) -> None:
        super().__init__(parent)

        # ── configuration ─────────────────────────────────────────────
        self._mode: TimerMode = mode
        self._durations: dict[Phase, int] = {
            phase: DEFAULT_DURATIONS[phase] for phase in mode.phases
        }
        if durations:
            self._durations.update(self._validate(durations))
        self._pending: dict[Phase, int] = {}
        self._completion_policy: CompletionPolicy = completion_policy
        self._reset_to_initial_phase: bool = reset_to_initial_phase

        # ── countdown state ───────────────────────────────────────────
        self._phase: Phase = mode.phases[0]
        self._remaining: int = self._durations[self._phase]
        self._status: Status = Status.IDLE
        self._completed_cycles: int = 0
        self._disposed: bool = False

        # ── tick source (the only one this engine ever owns) ──────────
        self._ticker = QTimer(self)
        self._ticker.setInterval(tick_interval_ms)
        self._ticker.timeout.connect(self._on_tick)

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def mode(self) -> TimerMode:
        return self._mode

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def status(self) -> Status:
        return self._status

    @property
    def remaining(self) -> int:
        """Seconds left on the clock."""
        return self._remaining

    @property
    def completed_cycles(self) -> int:
        return self._completed_cycles

    @property
    def is_running(self) -> bool:
        return self._status == Status.RUNNING

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    @property
    def durations(self) -> dict[Phase, int]:
        return dict(self._durations)

    @property
    def pending_durations(self) -> dict[Phase, int]:
        """Configuration buffered while running, not yet applied."""
        return dict(self._pending)

    @property
    def completion_policy(self) -> CompletionPolicy:
        return self._completion_policy

    @completion_policy.setter
    def completion_policy(self, value: CompletionPolicy) -> None:
        self._completion_policy = value

    @property
    def reset_to_initial_phase(self) -> bool:
        return self._reset_to_initial_phase

    @reset_to_initial_phase.setter
    def reset_to_initial_phase(self, value: bool) -> None:
        self._reset_to_initial_phase = value

    @property
    def progress_fraction(self) -> float:
        return self.get_state().progress_fraction

    @property
    def state(self) -> EngineState:
        return self.get_state()

    def get_state(self) -> EngineState:
        return EngineState(
            phase=self._phase,
            remaining_seconds=self._remaining,
            status=self._status,
            completed_cycles=self._completed_cycles,
            duration_seconds=self._durations[self._phase],
        )

    def duration_for(self, phase: PhaseKey) -> int:
        return self._durations[self._resolve_phase(phase)]

    def next_phase(self) -> Phase:
        """The phase that follows the current one in this mode."""
        phases = self._mode.phases
        return phases[(phases.index(self._phase) + 1) % len(phases)]

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def start(self) -> None:
        """Begin counting down.  No-op while already running."""
        if self._disposed or self._status == Status.RUNNING:
            return
        if self._remaining == 0:
            self._apply_pending()
            self._remaining = self._durations[self._phase]
        self._transition(Status.RUNNING)

    def pause(self) -> None:
        if self._status != Status.RUNNING:
            return
        self._transition(Status.PAUSED)

    def resume(self) -> None:
        """Resume from PAUSED.  No-op in any other state."""
        if self._disposed or self._status != Status.PAUSED:
            return
        self._transition(Status.RUNNING)

    def toggle(self) -> None:
        """Start/pause button behaviour."""
        if self._status == Status.RUNNING:
            self.pause()
        else:
            self.start()

    def stop(self) -> None:
        """Abandon the running or paused phase and reload its duration."""
        if self._status not in (Status.RUNNING, Status.PAUSED):
            return
        self._apply_pending()
        self._remaining = self._durations[self._phase]
        self._transition(Status.IDLE)

    def reset(self, full: bool = False) -> None:
        """Return to IDLE with a full clock.

        ``full=True`` also clears the cycle counter, drops buffered
        configuration and always goes back to the initial phase.
        """
        if self._disposed:
            return
        if full:
            self._pending.clear()
            self._completed_cycles = 0
        else:
            self._apply_pending()
        if full or self._reset_to_initial_phase:
            self._phase = self._mode.phases[0]
        self._remaining = self._durations[self._phase]
        self._transition(Status.IDLE)

    def switch_phase(self, phase: PhaseKey | None = None) -> None:
        """Jump to ``phase`` (default: the next one) and wait in IDLE.

        A manual switch never counts as a completed cycle.
        """
        if self._disposed:
            return
        target = self.next_phase() if phase is None else self._resolve_phase(phase)
        self._apply_pending()
        self._phase = target
        self._remaining = self._durations[target]
        self._transition(Status.IDLE)

    def configure(self, durations: Mapping[PhaseKey, float]) -> bool:
        """Update phase durations.

        Returns ``True`` when applied immediately and ``False`` when the
        engine is running and the change was buffered until the clock is
        next reloaded.  Raises ``InvalidConfiguration`` on bad input.
        """
        try:
            validated = self._validate(durations)
        except InvalidConfiguration as exc:
            logger.warning("Rejected configuration %r: %s", dict(durations), exc)
            raise

        if self._status == Status.RUNNING:
            self._pending.update(validated)
            logger.info(
                "Engine running, deferring configuration %s",
                {p.value: s for p, s in validated.items()},
            )
            return False

        self._apply_pending()
        self._durations.update(validated)
        self._remaining = self._durations[self._phase]
        self._notify()
        return True

    def dispose(self) -> None:
        """Cancel the tick source for good.

        A running engine is left PAUSED; ``start``/``resume`` are ignored
        from then on.
        """
        if self._disposed:
            return
        if self._status == Status.RUNNING:
            self._transition(Status.PAUSED)
        self._ticker.stop()
        self._disposed = True
        logger.debug("Engine disposed")

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL — timer mechanics
    # ══════════════════════════════════════════════════════════════════

    def _transition(self, status: Status) -> None:
        """Single place where the tick source is cancelled and restarted."""
        self._ticker.stop()
        if status == Status.RUNNING:
            self._ticker.start()
        if status != self._status:
            logger.debug(
                "%s: %s -> %s", self._phase.value,
                self._status.value, status.value,
            )
        self._status = status
        self._notify()

    def _on_tick(self) -> None:
        if self._status != Status.RUNNING:
            # stale timeout delivered after a cancel
            return
        if self._remaining > 1:
            self._remaining -= 1
            self._notify()
            return
        self._remaining = 0
        self._complete_phase()

    def _complete_phase(self) -> None:
        finished = self._phase
        self._transition(Status.COMPLETED)
        logger.info("Phase %s completed", finished.value)
        self.phase_completed.emit(finished.value)

        # a slot may already have issued a command in response
        if self._status != Status.COMPLETED:
            return
        policy = self._completion_policy
        if policy == CompletionPolicy.HALT or len(self._mode.phases) == 1:
            return

        # ── advance to the next phase ─────────────────────────────────
        if finished == Phase.WORK:
            self._completed_cycles += 1
        self._apply_pending()
        self._phase = self.next_phase()
        self._remaining = self._durations[self._phase]

        if policy == CompletionPolicy.ADVANCE_AND_START:
            self._transition(Status.RUNNING)
        elif policy == CompletionPolicy.ADVANCE_PAUSED:
            self._transition(Status.PAUSED)
        else:
            self._transition(Status.IDLE)

    def _apply_pending(self) -> None:
        if not self._pending:
            return
        self._durations.update(self._pending)
        logger.info(
            "Applied deferred configuration %s",
            {p.value: s for p, s in self._pending.items()},
        )
        self._pending.clear()

    def _notify(self) -> None:
        self.state_changed.emit(self.get_state())

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL — validation
    # ══════════════════════════════════════════════════════════════════

    def _resolve_phase(self, key: PhaseKey) -> Phase:
        return resolve_phase(self._mode, key)

    def _validate(self, durations: Mapping[PhaseKey, float]) -> dict[Phase, int]:
        return validate_durations(self._mode, durations)


# ── validation ────────────────────────────────────────────────────────────


def resolve_phase(mode: TimerMode, key: PhaseKey) -> Phase:
    """Map a phase or phase name onto a phase used by *mode*."""
    if isinstance(key, Phase):
        phase = key
    else:
        try:
            phase = Phase(key)
        except ValueError:
            raise InvalidConfiguration(f"unknown phase {key!r}") from None
    if phase not in mode.phases:
        raise InvalidConfiguration(
            f"phase {phase.value!r} is not used in {mode.value} mode"
        )
    return phase


def validate_durations(
    mode: TimerMode, durations: Mapping[PhaseKey, float],
) -> dict[Phase, int]:
    """Check durations for *mode* and normalise them to whole seconds.

    Raises ``InvalidConfiguration`` on the first bad entry.
    """
    validated: dict[Phase, int] = {}
    for key, seconds in durations.items():
        phase = resolve_phase(mode, key)
        if isinstance(seconds, bool) or not isinstance(seconds, Real):
            raise InvalidConfiguration(
                f"{phase.value}: duration must be a number, got {seconds!r}"
            )
        # ints are always finite; math.isfinite would overflow on huge ones
        if not isinstance(seconds, int):
            try:
                finite = math.isfinite(seconds)
            except OverflowError:
                raise InvalidConfiguration(
                    f"{phase.value}: duration is too large, got {seconds!r}"
                ) from None
            if not finite:
                raise InvalidConfiguration(
                    f"{phase.value}: duration must be finite, got {seconds!r}"
                )
        if seconds < 0:
            raise InvalidConfiguration(
                f"{phase.value}: duration must not be negative, got {seconds!r}"
            )
        if int(seconds) != seconds:
            raise InvalidConfiguration(
                f"{phase.value}: duration must be whole seconds, got {seconds!r}"
            )
        validated[phase] = int(seconds)
    return validated
