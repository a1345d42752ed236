"""Typer helper utilities."""

from difflib import get_close_matches

import typer
from typer.core import TyperGroup

from studyfocus_cli.utils.ui.console import get_console


class SuggestingGroup(TyperGroup):
    """Typer group that suggests the closest sub-command on typos.

    ``studyfocus pomodor`` prints ``Did you mean this? pomodoro`` instead of
    click's bare "No such command" usage error.
    """

    def resolve_command(self, ctx, args):
        try:
            return super().resolve_command(ctx, args)
        except Exception as e:
            if not args:
                raise
            attempted = args[0]
            suggestions = get_close_matches(attempted, list(self.commands), n=3, cutoff=0.6)
            if not suggestions:
                raise

            console = get_console()
            console.print(
                f'[red]Error:[/red] unknown command "{attempted}" for "{ctx.command_path}"'
            )
            console.print()
            if len(suggestions) == 1:
                console.print("[yellow]Did you mean this?[/yellow]")
            else:
                console.print("[yellow]Did you mean one of these?[/yellow]")
            for suggestion in suggestions:
                console.print(f"        {suggestion}")
            console.print(f"\nRun '{ctx.command_path} --help' for usage.")
            raise typer.Exit(1) from e
