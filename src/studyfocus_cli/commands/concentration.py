"""Concentration mode: elapsed timer with tab-switch tracking and autosave."""

import asyncio

import typer
from rich.live import Live

from studyfocus_cli.models.focus.analytics import ConcentrationStats
from studyfocus_cli.models.focus.autosave import AutosavePublisher
from studyfocus_cli.models.focus.controller import ConcentrationController
from studyfocus_cli.models.focus.engine import TimerEngine
from studyfocus_cli.models.focus.exceptions import SessionCreateError
from studyfocus_cli.models.focus.keyboard import KeyboardHandler
from studyfocus_cli.models.focus.session import SessionSnapshot
from studyfocus_cli.models.focus.ui import (
    PAUSE_REASONS,
    ConcentrationDisplay,
    ConsoleNotifier,
    show_session_summary,
)
from studyfocus_cli.models.focus.visibility import VisibilityTracker
from studyfocus_cli.services.api.client import APIClient
from studyfocus_cli.services.api.study_sessions import StudySessionsAPI
from studyfocus_cli.services.config_service import get_config_service
from studyfocus_cli.utils.exit_codes import ERROR_NETWORK
from studyfocus_cli.utils.typer_helpers import SuggestingGroup
from studyfocus_cli.utils.ui.console import get_console
from studyfocus_cli.utils.ui.formatters import (
    format_hours_minutes,
    format_json,
    format_minutes_seconds,
    study_sessions_table,
)

from .decorators import AppError, command_wrapper

console = get_console()
app = typer.Typer(cls=SuggestingGroup, help="Concentration mode with tab-switch tracking")

POLL_INTERVAL = 0.1


async def run_session(
    engine: TimerEngine,
    controller: ConcentrationController,
    keyboard: KeyboardHandler,
    render=None,
    poll_interval: float = POLL_INTERVAL,
) -> SessionSnapshot:
    """Feed input events to the controller until a stop is requested."""
    while not controller.stop_requested:
        for event in keyboard.get_events():
            controller.handle(event)
            if controller.stop_requested:
                break
        if render is not None:
            render()
        await asyncio.sleep(poll_interval)
    return await engine.stop()


@app.command("start")
@command_wrapper
async def start_concentration(
    no_focus_tracking: bool = typer.Option(
        False,
        "--no-focus-tracking",
        help="Do not count terminal focus loss as distraction",
    ),
    no_beep: bool = typer.Option(False, "--no-beep", help="Silence milestone beeps"),
):
    """Start a concentration session. Beeps every 5 minutes; tab switches are tracked."""
    focus_config = get_config_service().config.focus
    notifier = ConsoleNotifier(console, beep=focus_config.beep and not no_beep)

    async with APIClient() as client:
        sessions_api = StudySessionsAPI(client)
        async with TimerEngine(
            sessions_api,
            notifier,
            milestone_interval=focus_config.milestone_interval,
        ) as engine:
            try:
                await engine.start()
            except SessionCreateError as e:
                raise AppError(f"Could not start session: {e}", ERROR_NETWORK) from e

            AutosavePublisher(
                engine, sessions_api, notifier, interval=focus_config.autosave_interval
            ).start()
            tracker = VisibilityTracker(engine, notifier)
            tracker.attach()
            controller = ConcentrationController(engine, tracker, PAUSE_REASONS)
            display = ConcentrationDisplay()

            console.print("[bold green]Concentration Mode Started[/bold green]")
            with KeyboardHandler(
                focus_reporting=focus_config.focus_reporting and not no_focus_tracking
            ) as keyboard:
                with Live(
                    display.create_layout(engine.session.snapshot(), notifier),
                    console=console,
                    refresh_per_second=4,
                    screen=True,
                ) as live:

                    def render() -> None:
                        live.update(
                            display.create_layout(
                                engine.session.snapshot(),
                                notifier,
                                engine.paused_for(),
                                controller.selected_reason,
                            )
                        )

                    snapshot = await run_session(engine, controller, keyboard, render)

    show_session_summary(snapshot, console)


@app.command("stats")
@command_wrapper
async def concentration_stats(
    history: bool = typer.Option(False, "--history", help="List individual sessions"),
    limit: int = typer.Option(10, "--limit", "-n", help="Sessions to list with --history"),
    output: str = typer.Option(None, "--output", "-o", help="Output format: pretty or json"),
):
    """Show totals over your concentration sessions."""
    output = output or get_config_service().config.output.format

    async with APIClient() as client:
        sessions = await StudySessionsAPI(client).list_sessions(concentration_mode=True)

    stats = ConcentrationStats.from_sessions(sessions)

    if output == "json":
        data = stats.to_dict()
        if history:
            data["sessions"] = sessions[:limit]
        format_json(data)
        return

    console.print("\n[bold]Your Stats[/bold]\n")
    console.print(f"Total Focus Time: {format_hours_minutes(stats.total_focus_minutes)}")
    console.print(f"Total Sessions: {stats.total_sessions}")
    console.print(f"Total Interruptions: {stats.total_tab_switches}")
    console.print(f"Time Wasted: {format_hours_minutes(stats.total_time_wasted_minutes)}")
    console.print(
        f"Breaks: {stats.total_pauses} ({format_minutes_seconds(stats.total_pause_seconds)})"
    )
    console.print(f"Focus Score: {stats.focus_score}%")
    console.print()

    if history:
        if not sessions:
            console.print("[yellow]No concentration sessions found[/yellow]")
            return
        console.print(
            study_sessions_table(
                sessions[:limit], f"Recent Sessions ({min(limit, len(sessions))})"
            )
        )
