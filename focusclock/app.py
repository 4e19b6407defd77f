"""Main application window for FocusClock."""

from __future__ import annotations

import logging

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import QMainWindow, QStatusBar, QVBoxLayout, QWidget

from .settings import Settings, build_engine, load_settings
from .timer.engine import (
    CompletionPolicy, EngineState, Phase, Status, TimerEngine,
)
from .ui.styles import build_stylesheet
from .ui.timer_widget import TimerWidget

logger = logging.getLogger(__name__)


STATUS_MESSAGES: dict[Status, str] = {
    Status.IDLE:      "Ready when you are",
    Status.RUNNING:   "Running...",
    Status.PAUSED:    "Paused",
    Status.COMPLETED: "Done",
}

COMPLETION_MESSAGES: dict[str, str] = {
    Phase.WORK.value:      "Work phase finished, time for a break",
    Phase.BREAK.value:     "Break over, back to work",
    Phase.COUNTDOWN.value: "Countdown finished",
}


class FocusClockWindow(QMainWindow):
    """Main application window."""

    def __init__(
        self,
        settings: Settings | None = None,
        engine: TimerEngine | None = None,
    ) -> None:
        super().__init__()
        self._settings: Settings = settings or load_settings()
        self.setWindowTitle("FocusClock")
        self.resize(self._settings.window_width, self._settings.window_height)
        if self._settings.always_on_top:
            self.setWindowFlag(Qt.WindowType.WindowStaysOnTopHint, True)

        self._last_status: Status | None = None
        # phase whose completion message is on the status bar
        self._completed_phase: str | None = None

        # ── engine ────────────────────────────────────────────────────
        # an engine handed in belongs to the caller, who disposes it
        self._owns_engine = engine is None
        self._timer_engine = engine or build_engine(self._settings, parent=self)
        self._timer_engine.state_changed.connect(self._on_state_changed)
        self._timer_engine.phase_completed.connect(self._on_phase_completed)

        # ── layout ────────────────────────────────────────────────────
        central = QWidget(self)
        layout = QVBoxLayout(central)
        layout.setContentsMargins(20, 20, 20, 20)
        self._timer_widget = TimerWidget(self._timer_engine, central)
        layout.addWidget(self._timer_widget)
        self.setCentralWidget(central)

        self._status_bar = QStatusBar(self)
        self.setStatusBar(self._status_bar)
        self._last_status = self._timer_engine.status
        self._status_bar.showMessage(STATUS_MESSAGES[self._last_status])

        self.setStyleSheet(build_stylesheet())

    @property
    def engine(self) -> TimerEngine:
        return self._timer_engine

    # ══════════════════════════════════════════════════════════════════
    #  TIMER SIGNALS
    # ══════════════════════════════════════════════════════════════════

    def _on_state_changed(self, state: EngineState) -> None:
        if state.status == self._last_status:
            return  # plain tick
        advanced = self._is_automatic_advance(state)
        self._last_status = state.status
        self._completed_phase = None
        if advanced:
            return  # keep the completion text up
        self._status_bar.showMessage(STATUS_MESSAGES[state.status])

    def _on_phase_completed(self, phase_name: str) -> None:
        logger.debug("Showing completion message for %s", phase_name)
        self._completed_phase = phase_name
        self._status_bar.showMessage(COMPLETION_MESSAGES.get(phase_name, "Done"))

    def _is_automatic_advance(self, state: EngineState) -> bool:
        """True for the move out of COMPLETED made by the completion policy."""
        return (
            self._completed_phase is not None
            and self._last_status == Status.COMPLETED
            and self._timer_engine.completion_policy != CompletionPolicy.HALT
            and state.phase.value != self._completed_phase
        )

    # ══════════════════════════════════════════════════════════════════
    #  WINDOW EVENTS
    # ══════════════════════════════════════════════════════════════════

    def _on_space(self) -> None:
        """Start, pause, or resume the timer."""
        self._timer_engine.toggle()

    def _on_escape(self) -> None:
        """Stop the timer (no-op when not running or paused)."""
        self._timer_engine.stop()

    def closeEvent(self, event) -> None:  # type: ignore[override]
        if self._owns_engine:
            self._timer_engine.dispose()
        event.accept()

    def keyPressEvent(self, event) -> None:  # type: ignore[override]
        """Handle Space (start/pause) and Escape (stop) globally."""
        key = event.key()
        if key == Qt.Key.Key_Space and not event.modifiers():
            self._on_space()
            event.accept()
            return
        if key == Qt.Key.Key_Escape:
            self._on_escape()
            event.accept()
            return
        super().keyPressEvent(event)
