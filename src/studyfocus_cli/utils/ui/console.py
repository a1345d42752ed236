"""Console utilities for StudyFocus CLI."""

from functools import lru_cache

from rich.console import Console


@lru_cache(maxsize=2)
def get_console(highlight: bool = True) -> Console:
    """Get a Rich Console instance for consistent output formatting."""
    return Console(highlight=highlight)


def configure_console(color: bool = True) -> None:
    """Apply the ``output.color`` setting to the shared console."""
    get_console().no_color = not color
