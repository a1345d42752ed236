"""Authentication commands.

The StudyFocus web app signs users in through its identity provider; the
CLI authenticates with a bearer token copied from the account page.
"""

import typer

from studyfocus_cli.services.api.client import APIClient
from studyfocus_cli.services.config_service import get_config_service
from studyfocus_cli.utils.typer_helpers import SuggestingGroup
from studyfocus_cli.utils.ui.console import get_console
from studyfocus_cli.utils.ui.formatters import format_info, format_success

from .decorators import command_wrapper

console = get_console()
app = typer.Typer(cls=SuggestingGroup, help="Authentication commands")


@app.command("login")
@command_wrapper(auth_required=False)
async def login(
    token: str = typer.Option(
        ..., "--token", prompt=True, hide_input=True, help="API token from your account page"
    ),
    verify: bool = typer.Option(True, "--verify/--no-verify", help="Check the token against the API"),
):
    """Store an API token."""
    config_service = get_config_service()
    config_service.save_credentials(token.strip())

    if verify:
        try:
            async with APIClient() as client:
                await client.get("/api/study-sessions")
        except Exception:
            config_service.clear_credentials()
            raise

    format_success("Logged in")


@app.command("logout")
@command_wrapper(auth_required=False)
def logout():
    """Remove the stored API token."""
    get_config_service().clear_credentials()
    format_success("Logged out")


@app.command("status")
@command_wrapper(auth_required=False)
def status():
    """Show whether a token is stored."""
    config_service = get_config_service()
    if config_service.load_credentials():
        format_info(f"Logged in to {config_service.config.api.endpoint}")
    else:
        format_info("Not logged in")
