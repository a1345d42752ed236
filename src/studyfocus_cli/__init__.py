"""StudyFocus CLI - concentration timer and Pomodoro client for StudyFocus."""

__version__ = "0.1.0"
