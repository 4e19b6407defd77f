"""Main timer display widget.

Layout (top → bottom):
    - ProgressRing (large, centred)
    - Main action button row (Stop / Start-Pause / Switch)
    - Reset button and completed-cycles counter

The widget never touches engine state directly: buttons issue engine
commands and everything shown is re-rendered from the ``EngineState``
carried by ``state_changed``.
"""

from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout,
    QLabel, QPushButton, QFrame, QSizePolicy,
)

from ..timer.engine import EngineState, Phase, Status, TimerEngine, format_clock
from .progress_ring import ProgressRing
from .styles import ring_colors_for


PHASE_LABELS: dict[Phase, str] = {
    Phase.WORK:      "WORK",
    Phase.BREAK:     "BREAK",
    Phase.COUNTDOWN: "COUNTDOWN",
}

START_LABELS: dict[Status, str] = {
    Status.IDLE:      "Start",
    Status.RUNNING:   "Pause",
    Status.PAUSED:    "Resume",
    Status.COMPLETED: "Restart",
}


class TimerWidget(QWidget):
    """The timer card shown in the main window."""

    def __init__(self, engine: TimerEngine, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._engine = engine
        self._build_ui()
        self._connect_signals()
        self.render_state(engine.get_state())

    # ── build ─────────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)

        card = QFrame(self)
        card.setObjectName("card")
        root.addWidget(card)

        layout = QVBoxLayout(card)
        layout.setContentsMargins(32, 24, 32, 28)
        layout.setSpacing(0)
        layout.setAlignment(Qt.AlignmentFlag.AlignCenter)

        # ── progress ring (centrepiece) ──────────────────────────────
        ring_container = QHBoxLayout()
        ring_container.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._ring = ProgressRing(card)
        self._ring.setSizePolicy(
            QSizePolicy.Policy.Fixed, QSizePolicy.Policy.Fixed,
        )
        self._ring.setFixedSize(300, 300)
        ring_container.addWidget(self._ring)
        layout.addLayout(ring_container)

        layout.addSpacing(12)

        # ── main controls ────────────────────────────────────────────
        btn_row = QHBoxLayout()
        btn_row.setSpacing(12)
        btn_row.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._stop_btn = QPushButton("Stop", card)
        self._stop_btn.setObjectName("dangerButton")

        self._start_pause_btn = QPushButton("Start", card)
        self._start_pause_btn.setObjectName("primaryButton")

        self._switch_btn = QPushButton("Switch", card)
        self._switch_btn.setObjectName("secondaryButton")
        self._switch_btn.setToolTip("Jump to the next phase")

        btn_row.addWidget(self._stop_btn)
        btn_row.addWidget(self._start_pause_btn)
        btn_row.addWidget(self._switch_btn)
        layout.addLayout(btn_row)

        layout.addSpacing(12)

        # ── reset + cycle counter ────────────────────────────────────
        footer = QHBoxLayout()
        footer.setAlignment(Qt.AlignmentFlag.AlignCenter)
        footer.setSpacing(16)

        self._reset_btn = QPushButton("Reset", card)
        self._reset_btn.setObjectName("secondaryButton")

        self._cycles_label = QLabel("", card)
        self._cycles_label.setObjectName("cyclesLabel")

        footer.addWidget(self._reset_btn)
        footer.addWidget(self._cycles_label)
        layout.addLayout(footer)

    # ── signals ───────────────────────────────────────────────────────────

    def _connect_signals(self) -> None:
        self._start_pause_btn.clicked.connect(self._engine.toggle)
        self._stop_btn.clicked.connect(self._engine.stop)
        self._reset_btn.clicked.connect(lambda: self._engine.reset())
        self._switch_btn.clicked.connect(lambda: self._engine.switch_phase())

        self._engine.state_changed.connect(self.render_state)

    # ── rendering ─────────────────────────────────────────────────────────

    def render_state(self, state: EngineState) -> None:
        self._ring.set_time_text(format_clock(state.remaining_seconds))
        self._ring.set_percent(state.progress_fraction)
        self._ring.set_colors(*ring_colors_for(state))

        label = PHASE_LABELS[state.phase]
        if state.status == Status.PAUSED:
            label = f"{label} · PAUSED"
        elif state.status == Status.COMPLETED:
            label = f"{label} · DONE"
        self._ring.set_phase_label(label)

        self._start_pause_btn.setText(START_LABELS[state.status])
        self._stop_btn.setVisible(
            state.status in (Status.RUNNING, Status.PAUSED)
        )
        multi_phase = len(self._engine.mode.phases) > 1
        self._switch_btn.setVisible(multi_phase)

        if multi_phase:
            n = state.completed_cycles
            self._cycles_label.setText(
                f"{n} cycle{'s' if n != 1 else ''} completed"
            )
            upcoming = self._engine.next_phase()
            self._ring.set_cycle_text(f"next: {PHASE_LABELS[upcoming].lower()}")
        else:
            self._cycles_label.setText("")
            self._ring.set_cycle_text("")
