"""Logging setup shared by the command line entry points."""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(
    verbose: bool = False, quiet: bool = False, console: Optional[Console] = None
) -> None:
    """
    Configure logging with a rich handler.

    Args:
        verbose: If True, set logging level to DEBUG
        quiet: If True, set logging level to WARNING
        console: Console the handler writes to
    """
    if quiet:
        level = logging.WARNING
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, console=console, show_path=False)],
        force=True,
    )
