"""Tests for focus session counters and snapshots."""

from studyfocus_cli.models.focus.session import (
    NO_REASON,
    FocusSession,
    PauseEntry,
    SessionSnapshot,
    finalize,
)


def _entry(reason="Bathroom break", duration=40):
    return PauseEntry(reason=reason, duration_seconds=duration, ended_at="2026-03-02T09:03:05+00:00")


class TestPauseEntry:
    def test_to_wire(self):
        assert _entry().to_wire() == {
            "reason": "Bathroom break",
            "duration": 40,
            "timestamp": "2026-03-02T09:03:05+00:00",
        }

    def test_from_wire(self):
        entry = PauseEntry.from_wire(
            {"reason": "Phone call", "duration": "15", "timestamp": "2026-03-02T10:00:00Z"}
        )
        assert entry == PauseEntry("Phone call", 15, "2026-03-02T10:00:00Z")

    def test_from_wire_without_reason(self):
        entry = PauseEntry.from_wire({"reason": "", "duration": 3})
        assert entry.reason == NO_REASON
        assert entry.ended_at == ""


class TestFocusSession:
    def test_defaults(self):
        session = FocusSession()
        assert session.state == "idle"
        assert not session.is_active
        assert session.pause_log == []

    def test_record_pause_keeps_count_in_step_with_log(self):
        session = FocusSession()
        session.record_pause(_entry(duration=40))
        session.record_pause(_entry(reason="Phone call", duration=15))

        assert session.pause_count == len(session.pause_log) == 2
        assert session.pause_seconds == 55

    def test_record_distraction(self):
        session = FocusSession(elapsed_seconds=25)
        assert session.record_distraction(15) == 15
        assert session.distraction_count == 1
        assert session.distraction_seconds == 15

    def test_distraction_capped_at_elapsed(self):
        session = FocusSession(elapsed_seconds=20, distraction_seconds=15)
        assert session.record_distraction(30) == 5
        assert session.distraction_count == 1
        assert session.distraction_seconds == 20

    def test_negative_distraction_counts_zero_seconds(self):
        session = FocusSession(elapsed_seconds=20)
        assert session.record_distraction(-4) == 0
        assert session.distraction_count == 1

    def test_snapshot_is_detached_copy(self):
        session = FocusSession(id="s1", state="running", elapsed_seconds=10)
        session.record_pause(_entry())
        snapshot = session.snapshot()

        session.elapsed_seconds = 99
        session.record_pause(_entry())

        assert snapshot.elapsed_seconds == 10
        assert snapshot.pause_log == (_entry(),)


class TestSessionSnapshot:
    def test_focus_score(self):
        snapshot = SessionSnapshot("s1", "running", elapsed_seconds=200, distraction_seconds=50)
        assert snapshot.focused_seconds == 150
        assert snapshot.focus_score == 75

    def test_focus_score_without_elapsed_time(self):
        assert SessionSnapshot("s1", "running").focus_score == 100

    def test_to_payload_converts_units(self):
        snapshot = SessionSnapshot(
            "s1",
            "running",
            elapsed_seconds=125,
            distraction_count=2,
            distraction_seconds=119,
            pause_count=1,
            pause_seconds=40,
            pause_log=(_entry(),),
        )
        assert snapshot.to_payload() == {
            "duration": 2,
            "tabSwitches": 2,
            "timeWasted": 1,
            "pauseCount": 1,
            "pauseDuration": 40,
            "pauseReasons": [_entry().to_wire()],
        }

    def test_finalize_adds_end_time(self):
        snapshot = finalize(SessionSnapshot("s1", "running"), "2026-03-02T10:00:00+00:00")
        assert snapshot.state == "stopped"
        assert snapshot.to_payload()["endTime"] == "2026-03-02T10:00:00+00:00"
