"""Main entry point for StudyFocus CLI."""

import typer

from studyfocus_cli import __version__
from studyfocus_cli.commands import auth, concentration, config, pomodoro
from studyfocus_cli.services.config_service import get_config_service
from studyfocus_cli.utils.typer_helpers import SuggestingGroup
from studyfocus_cli.utils.ui.console import configure_console, get_console

app = typer.Typer(
    name="studyfocus",
    cls=SuggestingGroup,
    help="Concentration and Pomodoro timers for StudyFocus",
    no_args_is_help=True,
)

console = get_console()

app.add_typer(
    concentration.app,
    name="concentration",
    help="Concentration mode with tab-switch tracking",
)
app.add_typer(pomodoro.app, name="pomodoro", help="Pomodoro work/break timer")
app.add_typer(config.app, name="config", help="Configuration management")
app.add_typer(auth.app, name="auth", help="Authentication commands")


@app.callback()
def main_callback(
    no_color: bool = typer.Option(False, "--no-color", help="Disable colored output"),
):
    if no_color or not get_config_service().config.output.color:
        configure_console(color=False)


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]StudyFocus CLI[/bold] version [cyan]{__version__}[/cyan]")


def main() -> None:
    """Console script entry point."""
    app()


if __name__ == "__main__":
    main()
