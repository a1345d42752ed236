"""Configuration management commands."""

import typer

from studyfocus_cli.services.config_service import get_config_service
from studyfocus_cli.utils.exit_codes import ERROR_INVALID_ARGS
from studyfocus_cli.utils.typer_helpers import SuggestingGroup
from studyfocus_cli.utils.ui.console import get_console
from studyfocus_cli.utils.ui.formatters import format_json, format_success

from .decorators import AppError, command_wrapper

console = get_console()
app = typer.Typer(cls=SuggestingGroup, help="Configuration management")


@app.command("show")
@command_wrapper(auth_required=False)
def show_config():
    """Show the whole configuration."""
    format_json(get_config_service().config.model_dump())


@app.command("get")
@command_wrapper(auth_required=False)
def get_config(key: str = typer.Argument(..., help="Dot-separated key, e.g. api.endpoint")):
    """Get a configuration value."""
    value = get_config_service().get(key)
    if value is None:
        raise AppError(f"Unknown config key: {key}", ERROR_INVALID_ARGS)
    if isinstance(value, dict):
        format_json(value)
    else:
        console.print(f"{key} = {value}")


@app.command("set")
@command_wrapper(auth_required=False)
def set_config(
    key: str = typer.Argument(..., help="Dot-separated key, e.g. focus.autosave_interval"),
    value: str = typer.Argument(..., help="New value"),
):
    """Set a configuration value."""
    try:
        get_config_service().set(key, value)
    except KeyError as e:
        raise AppError(f"Unknown config key: {key}", ERROR_INVALID_ARGS) from e
    except ValueError as e:
        raise AppError(str(e), ERROR_INVALID_ARGS) from e
    format_success(f"{key} = {get_config_service().get(key)}")


@app.command("reset")
@command_wrapper(auth_required=False)
def reset_config(
    key: str = typer.Argument(None, help="Key to reset (all settings when omitted)"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation prompt"),
):
    """Reset configuration to defaults."""
    if key is None and not yes and not typer.confirm("Reset all settings to defaults?"):
        console.print("[yellow]Cancelled[/yellow]")
        return
    try:
        get_config_service().reset(key)
    except KeyError as e:
        raise AppError(f"Unknown config key: {key}", ERROR_INVALID_ARGS) from e
    format_success(f"{key or 'Configuration'} reset to defaults")
