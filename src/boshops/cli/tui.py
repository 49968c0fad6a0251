"""Terminal UI utilities for director operations tooling."""

from __future__ import annotations

import questionary

from boshops.cli.common.output import out
from boshops.core.inventory import Deployment

_MAX_NAME_WIDTH = 64


def _truncate(text: str, max_len: int) -> str:
    """Return text capped at max_len characters using an ASCII ellipsis."""
    if max_len <= 3 or len(text) <= max_len:
        return text[:max_len]
    return f"{text[: max_len - 3]}..."


def select_deployment(deployments: list[Deployment]) -> str | None:
    """Prompt for one deployment name.

    Args:
        deployments: Deployments to choose from.

    Returns:
        The selected deployment name, or None if cancelled or empty.
    """
    choices = [
        questionary.Choice(title=_truncate(d.name, _MAX_NAME_WIDTH), value=d.name)
        for d in deployments
    ]
    return out.select_one("Select a deployment:", choices)
