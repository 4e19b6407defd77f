"""Shared pytest fixtures for FocusClock tests."""

import os
import sys

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtWidgets import QApplication  # noqa: E402

from focusclock.timer.engine import (  # noqa: E402
    CompletionPolicy, TimerEngine, TimerMode,
)


@pytest.fixture(scope="session")
def qapp():
    """A single QApplication instance shared across the entire test run."""
    app = QApplication.instance() or QApplication(sys.argv)
    yield app


@pytest.fixture
def engine(qapp):
    """Pomodoro engine that advances to the next phase and waits."""
    eng = TimerEngine(parent=None, completion_policy=CompletionPolicy.ADVANCE)
    yield eng
    eng.dispose()


@pytest.fixture
def engine_auto(qapp):
    """Pomodoro engine that starts the next phase on its own."""
    eng = TimerEngine(
        parent=None, completion_policy=CompletionPolicy.ADVANCE_AND_START,
    )
    yield eng
    eng.dispose()


@pytest.fixture
def engine_halt(qapp):
    """Pomodoro engine that stops on the finished phase."""
    eng = TimerEngine(parent=None, completion_policy=CompletionPolicy.HALT)
    yield eng
    eng.dispose()


@pytest.fixture
def countdown(qapp):
    """Single-phase countdown engine."""
    eng = TimerEngine(parent=None, mode=TimerMode.COUNTDOWN)
    yield eng
    eng.dispose()
