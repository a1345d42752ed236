"""Pomodoro work/break countdown."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Literal

from .engine import Notifier

TimerPhase = Literal["idle", "work", "break"]


@dataclass
class PomodoroSettings:
    """Interval lengths for the Pomodoro timer."""

    work_duration: int = 25  # minutes
    break_duration: int = 5  # minutes


@dataclass
class PomodoroRecord:
    """One finished work interval, as stored by the service."""

    work_duration: int
    break_duration: int
    completed_cycles: int = 1

    def to_dict(self) -> dict:
        """Convert to the API payload."""
        return {
            "workDuration": self.work_duration,
            "breakDuration": self.break_duration,
            "completedCycles": self.completed_cycles,
        }


class PomodoroTimer:
    """Countdown alternating between work and break intervals.

    ``tick()`` is driven once per second by the caller. When an interval
    runs out the timer stops, switches phase and waits for ``start()``.
    """

    def __init__(
        self,
        settings: PomodoroSettings | None = None,
        on_work_complete: Callable[[PomodoroRecord], None] | None = None,
        notifier: Notifier | None = None,
    ):
        self.settings = settings or PomodoroSettings()
        self.on_work_complete = on_work_complete
        self.notifier = notifier
        self.phase: TimerPhase = "idle"
        self.time_left = self.settings.work_duration * 60
        self.completed_cycles = 0
        self.is_running = False

    @property
    def total_seconds(self) -> int:
        """Full length of the current phase."""
        if self.phase == "break":
            return self.settings.break_duration * 60
        return self.settings.work_duration * 60

    @property
    def progress(self) -> float:
        """Percentage of the current phase already spent."""
        total = self.total_seconds
        if total <= 0:
            return 0.0
        return (total - self.time_left) / total * 100

    def start(self) -> None:
        if self.phase == "idle":
            self.phase = "work"
            self.time_left = self.settings.work_duration * 60
        self.is_running = True

    def pause(self) -> None:
        self.is_running = False

    def reset(self) -> None:
        self.is_running = False
        self.phase = "idle"
        self.time_left = self.settings.work_duration * 60
        self.completed_cycles = 0

    def update_settings(self, work_duration: int, break_duration: int) -> None:
        """Change interval lengths; the countdown restarts unless running."""
        if work_duration < 1 or break_duration < 1:
            raise ValueError("durations must be at least one minute")
        self.settings = PomodoroSettings(work_duration, break_duration)
        if self.phase == "idle" or not self.is_running:
            self.time_left = work_duration * 60

    def tick(self) -> None:
        """Count down one second; completes the phase at zero."""
        if not self.is_running:
            return
        if self.time_left <= 1:
            self.time_left = 0
            self._complete()
            return
        self.time_left -= 1

    def _complete(self) -> None:
        self.is_running = False

        if self.phase == "work":
            self.completed_cycles += 1
            if self.on_work_complete is not None:
                self.on_work_complete(
                    PomodoroRecord(
                        work_duration=self.settings.work_duration,
                        break_duration=self.settings.break_duration,
                    )
                )
            self.phase = "break"
            self.time_left = self.settings.break_duration * 60
            self._notify("Work Session Complete!", "Great job! Time for a break.")
        elif self.phase == "break":
            self.phase = "work"
            self.time_left = self.settings.work_duration * 60
            self._notify("Break Complete!", "Ready to focus again?")

    def _notify(self, title: str, message: str) -> None:
        if self.notifier is not None:
            self.notifier.beep()
            self.notifier.notify(title, message)
