"""Maps terminal input events onto timer operations."""

from __future__ import annotations

from studyfocus_cli.utils.logger import get_logger

from .cycling import PomodoroTimer
from .engine import TimerEngine
from .keyboard import FOCUS_IN, FOCUS_OUT
from .visibility import VisibilityTracker

logger = get_logger("focus.controller")

STOP_KEYS = ("s", "q")


class ConcentrationController:
    """Applies key presses and focus events to a running concentration session.

    Keys that make no sense in the current state are ignored, so the engine
    never sees an invalid transition from the keyboard.
    """

    def __init__(
        self,
        engine: TimerEngine,
        tracker: VisibilityTracker,
        pause_reasons: dict[str, str] | None = None,
    ):
        self.engine = engine
        self.tracker = tracker
        self.pause_reasons = pause_reasons or {}
        self.selected_reason: str | None = None
        self.stop_requested = False

    def handle(self, event: str) -> None:
        """Apply one input event."""
        state = self.engine.state
        if event == FOCUS_OUT:
            self.tracker.hidden()
        elif event == FOCUS_IN:
            self.tracker.visible()
        elif event in STOP_KEYS:
            self.stop_requested = True
        elif event == "p" and state == "running":
            self.selected_reason = None
            self.engine.pause()
        elif event in self.pause_reasons and state == "paused":
            self.selected_reason = self.pause_reasons[event]
        elif event == "r" and state == "paused":
            self.engine.resume(self.selected_reason)
            self.selected_reason = None
        else:
            logger.debug("ignored input %r while %s", event, state)


class PomodoroController:
    """Applies key presses to a Pomodoro timer."""

    def __init__(self, timer: PomodoroTimer):
        self.timer = timer
        self.quit_requested = False

    def handle(self, event: str) -> None:
        if event == "q":
            self.quit_requested = True
        elif event == " " and not self.timer.is_running:
            self.timer.start()
        elif event == "p" and self.timer.is_running:
            self.timer.pause()
        elif event == "x":
            self.timer.reset()
