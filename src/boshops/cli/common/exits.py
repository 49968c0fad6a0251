"""Exit handling utilities for the CLI."""

from typing import NoReturn

import typer
from rich.markup import escape

from boshops.cli.common.output import out
from boshops.core.errors import DirectorError

_BODY_PREVIEW = 200


def die(msg: str, code: int = 1) -> NoReturn:
    """Exit with an error message and optional exit code."""
    out.error(msg)
    raise typer.Exit(code)


def warn_exit(msg: str, code: int = 0) -> NoReturn:
    """Exit with a warning message and optional exit code."""
    out.warn(msg)
    raise typer.Exit(code)


def describe_error(exc: DirectorError) -> str:
    """Render a director error with the HTTP status/body that caused it."""
    message = escape(str(exc))
    resp = exc.response
    if resp is None:
        return message
    body = resp.text.strip()
    if len(body) > _BODY_PREVIEW:
        body = f"{body[:_BODY_PREVIEW]}..."
    detail = f"HTTP {resp.status_code}"
    if body:
        detail = f"{detail}: {escape(body)}"
    return f"{message}\n  {detail}"


def exit_from_exc(exc: Exception, *, message: str, code: int = 1) -> NoReturn:
    """
    Helper function to print an error message and exit with a given code.

    Keeps the original exception chained for `--verbose` tracebacks.
    """
    out.error(message)
    raise typer.Exit(code) from exc
