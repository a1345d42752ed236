"""Pomodoro sessions API endpoints."""

from studyfocus_cli.services.api.client import APIClient


class PomodoroSessionsAPI:
    """Pomodoro sessions API client."""

    def __init__(self, client: APIClient):
        self.client = client

    async def list_sessions(self) -> list[dict]:
        """List recorded Pomodoro sessions, newest first."""
        response = await self.client.get("/api/pomodoro-sessions")
        return response.json()

    async def create_session(
        self, work_duration: int, break_duration: int, completed_cycles: int = 1
    ) -> dict:
        """Record a finished work interval."""
        response = await self.client.post(
            "/api/pomodoro-sessions",
            json={
                "workDuration": work_duration,
                "breakDuration": break_duration,
                "completedCycles": completed_cycles,
            },
        )
        return response.json()
