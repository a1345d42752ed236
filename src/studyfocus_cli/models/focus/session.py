"""Focus session counters and snapshots."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Literal

SessionStatus = Literal["idle", "running", "paused", "stopped"]

NO_REASON = "No reason given"


@dataclass(frozen=True)
class PauseEntry:
    """One completed pause."""

    reason: str
    duration_seconds: int
    ended_at: str  # ISO 8601

    def to_wire(self) -> dict[str, Any]:
        """Convert to the service's ``{reason, duration, timestamp}`` form."""
        return {
            "reason": self.reason,
            "duration": self.duration_seconds,
            "timestamp": self.ended_at,
        }

    @classmethod
    def from_wire(cls, data: dict[str, Any]) -> "PauseEntry":
        """Create from the service's wire form."""
        return cls(
            reason=data.get("reason") or NO_REASON,
            duration_seconds=int(data.get("duration", 0)),
            ended_at=data.get("timestamp", ""),
        )


@dataclass(frozen=True)
class SessionSnapshot:
    """Immutable copy of a session's counters at one instant."""

    session_id: str | None
    state: SessionStatus
    elapsed_seconds: int = 0
    distraction_count: int = 0
    distraction_seconds: int = 0
    pause_count: int = 0
    pause_seconds: int = 0
    pause_log: tuple[PauseEntry, ...] = ()
    started_at: str | None = None
    ended_at: str | None = None

    @property
    def focused_seconds(self) -> int:
        """Elapsed running time minus time lost to distractions."""
        return max(0, self.elapsed_seconds - self.distraction_seconds)

    @property
    def focus_score(self) -> int:
        """Focused share of elapsed time as a whole percentage."""
        if self.elapsed_seconds <= 0:
            return 100
        return (self.focused_seconds * 100) // self.elapsed_seconds

    def to_payload(self) -> dict[str, Any]:
        """Convert to the persistence units used by the study-sessions API.

        Elapsed and distraction time are sent in whole minutes, pause time
        in seconds.
        """
        payload: dict[str, Any] = {
            "duration": self.elapsed_seconds // 60,
            "tabSwitches": self.distraction_count,
            "timeWasted": self.distraction_seconds // 60,
            "pauseCount": self.pause_count,
            "pauseDuration": self.pause_seconds,
            "pauseReasons": [entry.to_wire() for entry in self.pause_log],
        }
        if self.ended_at is not None:
            payload["endTime"] = self.ended_at
        return payload


@dataclass
class FocusSession:
    """Mutable counters of one concentration run.

    Only the timer engine mutates a session; everything else reads
    snapshots.
    """

    id: str | None = None
    state: SessionStatus = "idle"
    elapsed_seconds: int = 0
    distraction_count: int = 0
    distraction_seconds: int = 0
    pause_count: int = 0
    pause_seconds: int = 0
    pause_log: list[PauseEntry] = field(default_factory=list)
    started_at: str | None = None
    ended_at: str | None = None

    @property
    def is_active(self) -> bool:
        """True while running or paused."""
        return self.state in ("running", "paused")

    def record_pause(self, entry: PauseEntry) -> None:
        """Account for a finished pause."""
        self.pause_log.append(entry)
        self.pause_count += 1
        self.pause_seconds += entry.duration_seconds

    def record_distraction(self, seconds: int) -> int:
        """Account for one lost-focus interval and return the seconds credited.

        The credit is capped so that distraction time never exceeds the
        elapsed running time.
        """
        headroom = max(0, self.elapsed_seconds - self.distraction_seconds)
        credited = min(max(0, int(seconds)), headroom)
        self.distraction_count += 1
        self.distraction_seconds += credited
        return credited

    def snapshot(self) -> SessionSnapshot:
        """Take an immutable copy of the current counters."""
        return SessionSnapshot(
            session_id=self.id,
            state=self.state,
            elapsed_seconds=self.elapsed_seconds,
            distraction_count=self.distraction_count,
            distraction_seconds=self.distraction_seconds,
            pause_count=self.pause_count,
            pause_seconds=self.pause_seconds,
            pause_log=tuple(self.pause_log),
            started_at=self.started_at,
            ended_at=self.ended_at,
        )


def finalize(snapshot: SessionSnapshot, ended_at: str) -> SessionSnapshot:
    """Return ``snapshot`` marked as stopped at ``ended_at``."""
    return replace(snapshot, state="stopped", ended_at=ended_at)
