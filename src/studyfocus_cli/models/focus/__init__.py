"""Focus mode - concentration timer and Pomodoro cycles for StudyFocus CLI."""

from .autosave import AutosavePublisher
from .cycling import PomodoroRecord, PomodoroSettings, PomodoroTimer
from .engine import TimerEngine
from .exceptions import FocusError, InvalidTransitionError, SessionCreateError
from .scheduling import PeriodicSchedule
from .session import NO_REASON, FocusSession, PauseEntry, SessionSnapshot
from .visibility import VisibilityTracker

__all__ = [
    "AutosavePublisher",
    "FocusError",
    "FocusSession",
    "InvalidTransitionError",
    "NO_REASON",
    "PauseEntry",
    "PeriodicSchedule",
    "PomodoroRecord",
    "PomodoroSettings",
    "PomodoroTimer",
    "SessionCreateError",
    "SessionSnapshot",
    "TimerEngine",
    "VisibilityTracker",
]
