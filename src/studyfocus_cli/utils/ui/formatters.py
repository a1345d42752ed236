"""Output formatters for messages, durations and session tables."""

import json
from datetime import datetime
from typing import Any

from rich.table import Table

from studyfocus_cli.utils.ui.console import get_console

console = get_console()


def format_error(message: str) -> None:
    """Format and display an error message."""
    console.print(f"[bold red]Error:[/bold red] {message}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    console.print(f"[bold green]Success:[/bold green] {message}")


def format_info(message: str) -> None:
    """Format and display an info message."""
    console.print(f"[bold blue]Info:[/bold blue] {message}")


def format_json(data: Any) -> None:
    """Print data as indented JSON."""
    print(json.dumps(data, indent=2, default=str))


def format_clock(seconds: int) -> str:
    """Render a second count as ``MM:SS``, or ``H:MM:SS`` past one hour."""
    seconds = max(0, int(seconds))
    hours = seconds // 3600
    mins = (seconds % 3600) // 60
    secs = seconds % 60
    if hours > 0:
        return f"{hours}:{mins:02d}:{secs:02d}"
    return f"{mins:02d}:{secs:02d}"


def format_hours_minutes(minutes: int) -> str:
    """Render a minute count as ``Xh Ym``."""
    minutes = max(0, int(minutes))
    return f"{minutes // 60}h {minutes % 60}m"


def format_minutes_seconds(seconds: int) -> str:
    """Render a second count as ``Xm Ys``."""
    seconds = max(0, int(seconds))
    return f"{seconds // 60}m {seconds % 60}s"


def _format_timestamp(value: str | None) -> str:
    if not value:
        return "—"
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return value
    return parsed.strftime("%Y-%m-%d %H:%M")


def study_sessions_table(sessions: list[dict[str, Any]], title: str) -> Table:
    """Build a table of study-session records as returned by the API."""
    table = Table(title=title, show_header=True)
    table.add_column("Started", style="cyan")
    table.add_column("Ended")
    table.add_column("Focus", justify="right")
    table.add_column("Tab switches", justify="right")
    table.add_column("Wasted", justify="right")
    table.add_column("Pauses", justify="right")

    for session in sessions:
        table.add_row(
            _format_timestamp(session.get("startTime")),
            _format_timestamp(session.get("endTime")),
            f"{session.get('duration', 0)}m",
            str(session.get("tabSwitches", 0)),
            f"{session.get('timeWasted', 0)}m",
            str(session.get("pauseCount", 0)),
        )
    return table


def pomodoro_sessions_table(sessions: list[dict[str, Any]], title: str) -> Table:
    """Build a table of Pomodoro-session records as returned by the API."""
    table = Table(title=title, show_header=True)
    table.add_column("Date", style="cyan")
    table.add_column("Work", justify="right")
    table.add_column("Break", justify="right")
    table.add_column("Cycles", justify="right")

    for session in sessions:
        table.add_row(
            _format_timestamp(session.get("createdAt")),
            f"{session.get('workDuration', 0)}m",
            f"{session.get('breakDuration', 0)}m",
            str(session.get("completedCycles", 0)),
        )
    return table
