"""Rich console utilities for output formatting."""

from __future__ import annotations

import logging
import platform

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.text import Text

from leftover_hunter import __version__


def create_console() -> Console:
    """Create a configured Rich console."""
    if platform.system() == "Windows":
        return Console(legacy_windows=True, emoji=False)
    return Console()


def setup_logging(console: Console, verbose: bool = False) -> None:
    """Route the package loggers through Rich."""
    handler = RichHandler(console=console, show_path=False, markup=False)
    logger = logging.getLogger("leftover_hunter")
    logger.handlers = [handler]
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False


def print_banner(console: Console) -> None:
    """Print the Leftover Hunter banner."""
    banner_text = Text()
    banner_text.append("LEFTOVER ", style="bold red")
    banner_text.append("HUNTER", style="bold yellow")

    tagline = Text("Clean up after apps that are long gone", style="dim italic")

    panel = Panel(
        Text.assemble(banner_text, "\n", tagline),
        border_style="blue",
        padding=(0, 2),
        subtitle=f"v{__version__}",
        subtitle_align="right",
    )

    console.print(panel)
    console.print()
