"""Study sessions API endpoints."""

from typing import Any

from studyfocus_cli.services.api.client import APIClient


class StudySessionsAPI:
    """Study sessions API client.

    Sessions are created with zeroed counters and then updated in place; the
    server treats ``PATCH`` as a last-write-wins upsert of the given fields.
    """

    def __init__(self, client: APIClient):
        self.client = client

    async def create_session(self, *, concentration_mode: bool = True) -> dict:
        """Create a new study session and return it (including its ``id``)."""
        response = await self.client.post(
            "/api/study-sessions",
            json={
                "duration": 0,
                "tabSwitches": 0,
                "timeWasted": 0,
                "isConcentrationMode": concentration_mode,
            },
        )
        return response.json()

    async def update_session(
        self, session_id: str, payload: dict[str, Any], *, retry: int | None = None
    ) -> dict:
        """Update counters of an existing session."""
        response = await self.client.patch(
            f"/api/study-sessions/{session_id}", json=payload, retry=retry
        )
        return response.json()

    async def list_sessions(
        self, *, concentration_mode: bool | None = None
    ) -> list[dict]:
        """List the user's sessions, newest first.

        ``concentration_mode`` filters on the ``isConcentrationMode`` flag
        when given.
        """
        response = await self.client.get("/api/study-sessions")
        sessions = response.json()
        if concentration_mode is None:
            return sessions
        return [
            s
            for s in sessions
            if bool(s.get("isConcentrationMode")) == concentration_mode
        ]
