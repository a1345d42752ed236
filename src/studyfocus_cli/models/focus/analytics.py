"""Aggregate statistics over session records returned by the service."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ConcentrationStats:
    """Totals over concentration-mode study sessions."""

    total_sessions: int = 0
    total_focus_minutes: int = 0
    total_tab_switches: int = 0
    total_time_wasted_minutes: int = 0
    total_pauses: int = 0
    total_pause_seconds: int = 0

    @property
    def focus_score(self) -> int:
        """Share of recorded time not lost to tab switches, in percent."""
        if self.total_focus_minutes <= 0:
            return 100
        focused = max(0, self.total_focus_minutes - self.total_time_wasted_minutes)
        return (focused * 100) // self.total_focus_minutes

    @classmethod
    def from_sessions(cls, sessions: list[dict[str, Any]]) -> "ConcentrationStats":
        """Summarise the records flagged ``isConcentrationMode``."""
        records = [s for s in sessions if s.get("isConcentrationMode")]
        return cls(
            total_sessions=len(records),
            total_focus_minutes=sum(int(s.get("duration") or 0) for s in records),
            total_tab_switches=sum(int(s.get("tabSwitches") or 0) for s in records),
            total_time_wasted_minutes=sum(int(s.get("timeWasted") or 0) for s in records),
            total_pauses=sum(int(s.get("pauseCount") or 0) for s in records),
            total_pause_seconds=sum(int(s.get("pauseDuration") or 0) for s in records),
        )

    def to_dict(self) -> dict[str, int]:
        return {
            "total_sessions": self.total_sessions,
            "total_focus_minutes": self.total_focus_minutes,
            "total_tab_switches": self.total_tab_switches,
            "total_time_wasted_minutes": self.total_time_wasted_minutes,
            "total_pauses": self.total_pauses,
            "total_pause_seconds": self.total_pause_seconds,
            "focus_score": self.focus_score,
        }


@dataclass(frozen=True)
class PomodoroStats:
    """Totals over Pomodoro-session records."""

    total_sessions: int = 0
    total_cycles: int = 0
    total_study_minutes: int = 0

    @classmethod
    def from_sessions(cls, sessions: list[dict[str, Any]]) -> "PomodoroStats":
        return cls(
            total_sessions=len(sessions),
            total_cycles=sum(int(s.get("completedCycles") or 0) for s in sessions),
            total_study_minutes=sum(
                int(s.get("workDuration") or 0) * int(s.get("completedCycles") or 0)
                for s in sessions
            ),
        )

    def to_dict(self) -> dict[str, int]:
        return {
            "total_sessions": self.total_sessions,
            "total_cycles": self.total_cycles,
            "total_study_minutes": self.total_study_minutes,
        }
