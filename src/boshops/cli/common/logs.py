"""Logging setup for the CLI."""

import logging

from rich.logging import RichHandler

from boshops.cli.common.progress import console


def configure_logging(verbose: bool) -> None:
    """Route `boshops` library logs through rich; debug level with --verbose."""
    logger = logging.getLogger("boshops")
    logger.handlers.clear()
    logger.addHandler(
        RichHandler(console=console, show_path=False, rich_tracebacks=verbose)
    )
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
