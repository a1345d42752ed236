"""Pomodoro timer commands."""

import asyncio

import httpx
import typer
from rich.live import Live

from studyfocus_cli.models.focus.analytics import PomodoroStats
from studyfocus_cli.models.focus.controller import PomodoroController
from studyfocus_cli.models.focus.cycling import PomodoroRecord, PomodoroSettings, PomodoroTimer
from studyfocus_cli.models.focus.keyboard import KeyboardHandler
from studyfocus_cli.models.focus.ui import ConsoleNotifier, PomodoroDisplay
from studyfocus_cli.services.api.client import APIClient
from studyfocus_cli.services.api.pomodoro_sessions import PomodoroSessionsAPI
from studyfocus_cli.services.config_service import get_config_service
from studyfocus_cli.utils.exit_codes import ERROR_INVALID_ARGS
from studyfocus_cli.utils.logger import get_logger
from studyfocus_cli.utils.typer_helpers import SuggestingGroup
from studyfocus_cli.utils.ui.console import get_console
from studyfocus_cli.utils.ui.formatters import (
    format_hours_minutes,
    format_json,
    pomodoro_sessions_table,
)

from .decorators import AppError, command_wrapper

console = get_console()
logger = get_logger("commands.pomodoro")
app = typer.Typer(cls=SuggestingGroup, help="Pomodoro timer with work and break intervals")


class PomodoroRecorder:
    """Posts finished work intervals in the background."""

    def __init__(self, api: PomodoroSessionsAPI, notifier: ConsoleNotifier | None = None):
        self.api = api
        self.notifier = notifier
        self.saved = 0
        self._tasks: set[asyncio.Task] = set()

    def __call__(self, record: PomodoroRecord) -> None:
        task = asyncio.get_running_loop().create_task(self._save(record))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _save(self, record: PomodoroRecord) -> None:
        try:
            await self.api.create_session(
                record.work_duration, record.break_duration, record.completed_cycles
            )
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("pomodoro session not saved: %s", e)
            if self.notifier is not None:
                self.notifier.notify("Error", f"Session not saved: {e}", "destructive")
            return
        self.saved += 1
        if self.notifier is not None:
            self.notifier.notify("Session Saved", "Completed 1 cycle!")

    async def drain(self) -> None:
        """Wait for saves still in flight."""
        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)


async def run_pomodoro(
    timer: PomodoroTimer,
    controller: PomodoroController,
    keyboard: KeyboardHandler,
    render=None,
    poll_interval: float = 0.1,
) -> None:
    """Drive the timer once per second and apply input until quit."""
    loop = asyncio.get_running_loop()
    next_tick = loop.time() + 1
    while not controller.quit_requested:
        for event in keyboard.get_events():
            controller.handle(event)
        if loop.time() >= next_tick:
            timer.tick()
            next_tick += 1
        if render is not None:
            render()
        await asyncio.sleep(poll_interval)


@app.command("start")
@command_wrapper
async def start_pomodoro(
    work: int = typer.Option(None, "--work", "-w", help="Work duration (minutes)"),
    break_: int = typer.Option(None, "--break", "-b", help="Break duration (minutes)"),
):
    """Run the Pomodoro timer. Finished work intervals are saved to your account."""
    defaults = get_config_service().config.pomodoro
    work = work or defaults.work_duration
    break_ = break_ or defaults.break_duration
    if not 1 <= work <= 180 or not 1 <= break_ <= 60:
        raise AppError(
            "Work must be 1-180 minutes and break 1-60 minutes", ERROR_INVALID_ARGS
        )

    notifier = ConsoleNotifier(console, beep=get_config_service().config.focus.beep)
    display = PomodoroDisplay()

    async with APIClient() as client:
        recorder = PomodoroRecorder(PomodoroSessionsAPI(client), notifier)
        timer = PomodoroTimer(PomodoroSettings(work, break_), recorder, notifier)
        controller = PomodoroController(timer)
        timer.start()

        with KeyboardHandler(focus_reporting=False) as keyboard:
            with Live(
                display.create_layout(timer, notifier),
                console=console,
                refresh_per_second=4,
                screen=True,
            ) as live:
                await run_pomodoro(
                    timer,
                    controller,
                    keyboard,
                    lambda: live.update(display.create_layout(timer, notifier)),
                )
        await recorder.drain()

    console.print(
        f"[bold green]Pomodoro finished[/bold green] - {timer.completed_cycles} "
        f"cycle{'s' if timer.completed_cycles != 1 else ''}, {recorder.saved} saved"
    )


@app.command("history")
@command_wrapper
async def pomodoro_history(
    limit: int = typer.Option(20, "--limit", "-n", help="Number of sessions to show"),
    output: str = typer.Option(None, "--output", "-o", help="Output format: pretty or json"),
):
    """Show recorded Pomodoro sessions and total study time."""
    output = output or get_config_service().config.output.format

    async with APIClient() as client:
        sessions = await PomodoroSessionsAPI(client).list_sessions()

    stats = PomodoroStats.from_sessions(sessions)
    if output == "json":
        format_json({**stats.to_dict(), "sessions": sessions[:limit]})
        return

    if not sessions:
        console.print("[yellow]No Pomodoro sessions found[/yellow]")
        return

    console.print(
        pomodoro_sessions_table(sessions[:limit], f"Pomodoro Sessions ({len(sessions[:limit])})")
    )
    console.print(f"\nTotal Study Time: {format_hours_minutes(stats.total_study_minutes)}")
    console.print(f"Completed Cycles: {stats.total_cycles}\n")
