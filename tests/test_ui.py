"""Tests for the timer widget, progress ring and main window.

The widgets only render ``EngineState`` and forward button presses to
engine commands, so every test drives the engine and checks what is
shown (or clicks a button and checks the engine).
"""

from __future__ import annotations

import pytest
from PyQt6.QtCore import Qt
from PyQt6.QtTest import QTest

from focusclock.app import COMPLETION_MESSAGES, STATUS_MESSAGES, FocusClockWindow
from focusclock.settings import Settings
from focusclock.timer.engine import (
    CompletionPolicy, Phase, Status, TimerEngine, TimerMode,
)
from focusclock.ui.styles import (
    PHASE_COLORS, STATUS_COLORS, build_stylesheet, ring_colors_for,
)
from focusclock.ui.timer_widget import TimerWidget

from helpers import complete_phase, tick


# ═══════════════════════════════════════════════════════════════════════
#  TIMER WIDGET
# ═══════════════════════════════════════════════════════════════════════


@pytest.mark.usefixtures("qapp")
class TestTimerWidget:
    def test_initial_render(self, engine):
        w = TimerWidget(engine)
        assert w._ring.time_text == "25:00"
        assert w._ring.phase_label == "WORK"
        assert w._start_pause_btn.text() == "Start"
        assert w._cycles_label.text() == "0 cycles completed"

    def test_start_button_starts_engine(self, engine):
        w = TimerWidget(engine)
        w._start_pause_btn.click()
        assert engine.status == Status.RUNNING
        assert w._start_pause_btn.text() == "Pause"

        w._start_pause_btn.click()
        assert engine.status == Status.PAUSED
        assert w._start_pause_btn.text() == "Resume"
        assert w._ring.phase_label == "WORK · PAUSED"

    def test_tick_updates_clock(self, engine):
        w = TimerWidget(engine)
        engine.start()
        tick(engine, 61)
        assert w._ring.time_text == "23:59"
        assert w._ring.percent == pytest.approx(61 / 1500)

    def test_stop_button_reloads(self, engine):
        w = TimerWidget(engine)
        engine.start()
        tick(engine, 5)
        w._stop_btn.click()
        assert engine.status == Status.IDLE
        assert w._ring.time_text == "25:00"

    def test_reset_button(self, engine):
        w = TimerWidget(engine)
        engine.switch_phase(Phase.BREAK)
        engine.start()
        tick(engine, 5)
        w._reset_btn.click()
        assert engine.status == Status.IDLE
        assert engine.phase == Phase.BREAK
        assert engine.remaining == 300

    def test_switch_button(self, engine):
        w = TimerWidget(engine)
        w._switch_btn.click()
        assert engine.phase == Phase.BREAK
        assert w._ring.phase_label == "BREAK"
        assert w._ring.time_text == "05:00"

    def test_cycle_counter_after_completion(self, engine):
        w = TimerWidget(engine)
        engine.start()
        complete_phase(engine)
        assert w._cycles_label.text() == "1 cycle completed"

    def test_completed_label_when_halted(self, engine_halt):
        w = TimerWidget(engine_halt)
        engine_halt.start()
        complete_phase(engine_halt)
        assert w._ring.phase_label == "WORK · DONE"
        assert w._start_pause_btn.text() == "Restart"
        assert w._ring.time_text == "00:00"

    def test_countdown_mode_hides_switch(self, countdown):
        w = TimerWidget(countdown)
        assert w._switch_btn.isHidden()
        assert w._cycles_label.text() == ""


# ═══════════════════════════════════════════════════════════════════════
#  STYLES
# ═══════════════════════════════════════════════════════════════════════


class TestStyles:
    def test_running_uses_phase_colors(self, engine):
        engine.start()
        assert ring_colors_for(engine.get_state()) == PHASE_COLORS[Phase.WORK]

    def test_paused_uses_status_colors(self, engine):
        engine.start()
        engine.pause()
        assert ring_colors_for(engine.get_state()) == STATUS_COLORS[Status.PAUSED]

    def test_stylesheet_builds(self):
        qss = build_stylesheet()
        assert "QPushButton#primaryButton" in qss


# ═══════════════════════════════════════════════════════════════════════
#  MAIN WINDOW
# ═══════════════════════════════════════════════════════════════════════


@pytest.mark.usefixtures("qapp")
class TestMainWindow:
    def _window(self, **kwargs) -> FocusClockWindow:
        return FocusClockWindow(settings=Settings(**kwargs))

    def test_window_builds_engine_from_settings(self):
        win = self._window(work_duration=600, completion_policy="halt")
        assert win.engine.remaining == 600
        assert win.engine.completion_policy == CompletionPolicy.HALT
        win.close()

    def test_space_toggles_and_escape_stops(self):
        win = self._window()
        QTest.keyClick(win, Qt.Key.Key_Space)
        assert win.engine.status == Status.RUNNING
        QTest.keyClick(win, Qt.Key.Key_Space)
        assert win.engine.status == Status.PAUSED
        QTest.keyClick(win, Qt.Key.Key_Escape)
        assert win.engine.status == Status.IDLE
        win.close()

    def test_status_bar_follows_status(self):
        win = self._window()
        assert win.statusBar().currentMessage() == STATUS_MESSAGES[Status.IDLE]
        win.engine.start()
        assert win.statusBar().currentMessage() == STATUS_MESSAGES[Status.RUNNING]
        win.close()

    def test_completion_message_survives_advance(self):
        win = self._window()
        win.engine.start()
        complete_phase(win.engine)
        assert win.engine.phase == Phase.BREAK
        assert (win.statusBar().currentMessage()
                == COMPLETION_MESSAGES[Phase.WORK.value])
        win.engine.start()
        assert win.statusBar().currentMessage() == STATUS_MESSAGES[Status.RUNNING]
        win.close()

    def test_completion_message_survives_auto_start(self):
        win = self._window(completion_policy="advance_and_start")
        win.engine.start()
        complete_phase(win.engine)
        assert win.engine.phase == Phase.BREAK
        assert win.engine.status == Status.RUNNING
        assert (win.statusBar().currentMessage()
                == COMPLETION_MESSAGES[Phase.WORK.value])
        tick(win.engine, 3)
        assert (win.statusBar().currentMessage()
                == COMPLETION_MESSAGES[Phase.WORK.value])
        win.engine.pause()
        assert win.statusBar().currentMessage() == STATUS_MESSAGES[Status.PAUSED]
        win.close()

    def test_halt_replaces_completion_message_on_switch(self):
        win = self._window(completion_policy="halt")
        win.engine.start()
        complete_phase(win.engine)
        assert (win.statusBar().currentMessage()
                == COMPLETION_MESSAGES[Phase.WORK.value])
        win.engine.switch_phase()
        assert win.statusBar().currentMessage() == STATUS_MESSAGES[Status.IDLE]
        win.close()

    def test_close_disposes_engine(self):
        win = self._window()
        win.show()
        win.engine.start()
        win.close()
        assert win.engine.is_disposed
        assert win.engine.status == Status.PAUSED

    def test_accepts_external_engine(self):
        eng = TimerEngine(mode=TimerMode.COUNTDOWN)
        win = FocusClockWindow(settings=Settings(), engine=eng)
        assert win.engine is eng
        win.close()
        eng.dispose()

    def test_close_leaves_external_engine_alone(self):
        eng = TimerEngine(mode=TimerMode.COUNTDOWN)
        win = FocusClockWindow(settings=Settings(), engine=eng)
        win.show()
        eng.start()
        win.close()
        assert not eng.is_disposed
        assert eng.status == Status.RUNNING
        eng.dispose()
