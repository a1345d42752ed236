"""Decorators for command functions."""

import asyncio
import functools
import time
import traceback
from collections.abc import Callable

import httpx
import typer

from studyfocus_cli.services.config_service import get_config_service
from studyfocus_cli.utils.exit_codes import ERROR_AUTH_FAILURE, ERROR_GENERAL, ERROR_NETWORK
from studyfocus_cli.utils.logger import get_logger
from studyfocus_cli.utils.ui.formatters import format_error


def _require_auth() -> None:
    """Require a stored API token."""
    credentials = get_config_service().load_credentials()
    if not credentials or "token" not in credentials:
        format_error("Not logged in. Use 'studyfocus auth login' to authenticate.")
        raise typer.Exit(ERROR_AUTH_FAILURE)


class AppError(Exception):
    """Custom application error with exit code."""

    def __init__(self, message: str, exit_code: int = ERROR_GENERAL):
        super().__init__(message)
        self.exit_code = exit_code


def command_wrapper(_func: Callable | None = None, *, auth_required: bool = True):
    """Decorator to wrap command functions with common functionality."""

    def decorator(func: Callable):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            logger = get_logger()
            cmd = func.__name__
            start = time.monotonic()
            logger.info("command started: %s", cmd)
            try:
                if auth_required:
                    _require_auth()

                if asyncio.iscoroutinefunction(func):
                    result = asyncio.run(func(*args, **kwargs))
                else:
                    result = func(*args, **kwargs)

                elapsed = time.monotonic() - start
                logger.info("command completed: %s (%.3fs)", cmd, elapsed)
                return result

            except AppError as e:
                elapsed = time.monotonic() - start
                logger.error("command failed: %s (%.3fs) - %s", cmd, elapsed, str(e))
                format_error(str(e))
                raise typer.Exit(code=e.exit_code) from e

            except typer.Exit:
                raise

            except httpx.HTTPStatusError as e:
                logger.error("command failed: %s - HTTP %s", cmd, e.response.status_code)
                if e.response.status_code == 401:
                    format_error("Your session has expired. Run 'studyfocus auth login'.")
                    raise typer.Exit(code=ERROR_AUTH_FAILURE) from e
                format_error(f"API error {e.response.status_code}: {e.response.text}")
                raise typer.Exit(code=ERROR_NETWORK) from e

            except httpx.RequestError as e:
                logger.error("command failed: %s - %s", cmd, str(e))
                format_error(f"Could not reach the StudyFocus API: {e}")
                raise typer.Exit(code=ERROR_NETWORK) from e

            except Exception as e:
                elapsed = time.monotonic() - start
                logger.error(
                    "command failed: %s (%.3fs) - %s\n%s",
                    cmd,
                    elapsed,
                    str(e),
                    traceback.format_exc(),
                )
                format_error(f"An unexpected error occurred: {str(e)}")
                raise typer.Exit(code=ERROR_GENERAL) from e

        return wrapper

    if _func is None:
        return decorator
    return decorator(_func)
