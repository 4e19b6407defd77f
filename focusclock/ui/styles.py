"""QSS stylesheet and ring colours for FocusClock."""

from __future__ import annotations

from ..timer.engine import EngineState, Phase, Status

# ── ring gradient pairs (primary, secondary) ────────────────────────────
#    Running phases are coloured by phase; every other status has its own
#    muted pair regardless of phase.

PHASE_COLORS: dict[Phase, tuple[str, str]] = {
    Phase.WORK:      ("#FF6B6B", "#FFA07A"),   # warm coral
    Phase.BREAK:     ("#4ECDC4", "#44B09E"),   # cool teal
    Phase.COUNTDOWN: ("#A18CD1", "#7B68EE"),   # calm purple
}

STATUS_COLORS: dict[Status, tuple[str, str]] = {
    Status.PAUSED:    ("#6C7086", "#585B70"),  # desaturated gray
    Status.COMPLETED: ("#A6E3A1", "#94D18F"),  # done green
    Status.IDLE:      ("#4A4A5E", "#3A3A4E"),  # neutral dim
}

DEFAULT_PALETTE: dict[str, str] = {
    "bg":           "#1A1A2E",
    "bg_secondary": "#232340",
    "accent":       "#CBA6F7",
    "accent2":      "#89B4FA",
    "text":         "#E2E2F0",
    "text_muted":   "#7A7A9A",
    "danger":       "#F38BA8",
    "border":       "#313154",
}


def ring_colors_for(state: EngineState) -> tuple[str, str]:
    if state.status == Status.RUNNING:
        return PHASE_COLORS[state.phase]
    return STATUS_COLORS[state.status]


# ── QSS builder ───────────────────────────────────────────────────────


def build_stylesheet(palette: dict[str, str] | None = None) -> str:
    p = palette or DEFAULT_PALETTE
    return f"""
    /* ── global ─────────────────────────────────── */
    QWidget {{
        background-color: {p['bg']};
        color: {p['text']};
        font-family: "Helvetica Neue", Arial;
        font-size: 14px;
    }}

    /* ── buttons ────────────────────────────────── */
    QPushButton {{
        background-color: {p['bg_secondary']};
        color: {p['text']};
        border: 1px solid {p['border']};
        border-radius: 10px;
        padding: 10px 24px;
        font-weight: 600;
    }}

    QPushButton:hover {{
        border-color: {p['accent']};
    }}

    QPushButton#primaryButton {{
        background-color: {p['accent']};
        color: {p['bg']};
        border: none;
        font-size: 17px;
        padding: 14px 40px;
        border-radius: 12px;
        font-weight: 700;
    }}

    QPushButton#primaryButton:hover {{
        background-color: {p['accent2']};
    }}

    QPushButton#secondaryButton {{
        background-color: transparent;
        color: {p['text_muted']};
        font-size: 13px;
        padding: 8px 16px;
        border-radius: 8px;
    }}

    QPushButton#dangerButton {{
        background-color: transparent;
        color: {p['danger']};
        font-size: 13px;
        padding: 8px 16px;
        border-radius: 8px;
    }}

    /* ── frame / card ────────────────────────────── */
    QFrame#card {{
        background-color: {p['bg_secondary']};
        border: 1px solid {p['border']};
        border-radius: 12px;
    }}

    QLabel#cyclesLabel {{
        font-size: 13px;
        color: {p['text_muted']};
    }}

    /* ── status bar ──────────────────────────────── */
    QStatusBar {{
        background-color: {p['bg']};
        color: {p['text_muted']};
        font-size: 12px;
        border-top: 1px solid {p['border']};
    }}
    """
