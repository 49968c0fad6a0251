"""Output formatting utilities for the CLI."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Iterable, Mapping

import questionary
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.theme import Theme

from boshops.cli.common.tui_style import QUESTIONARY_STYLE_SELECT

_THEME = Theme(
    {
        "ok": "bold green",
        "warn": "yellow",
        "err": "bold red",
        "meta": "dim",
    }
)

console = Console(theme=_THEME)


def _pct(value: float) -> str:
    return f"{value:.1f}%"


@dataclass(frozen=True)
class Out:
    """Output formatter for CLI messages and tables."""

    def _q(self, message: str) -> str:
        """Prefix Questionary prompts to be BOSHOPS consistent."""
        return f"[BOSHOPS] {message}"

    @contextmanager
    def status(self, msg: str):
        """Show a transient status spinner while work is in progress."""
        with console.status(msg, spinner="dots"):
            yield

    def warn(self, msg: str) -> None:
        """Print a warning message."""
        console.print(f"[warn]⚠[/] {msg}")

    def error(self, msg: str) -> None:
        """Print an error message."""
        console.print(f"[err]✗[/] {msg}")

    def kv(self, items: Mapping[str, Any]) -> None:
        """Print key-value pairs."""
        for k, v in items.items():
            console.print(f"[meta]{k}[/]: {v}")

    def select_one(
        self, message: str, choices: list[str | questionary.Choice]
    ) -> str | None:
        """
        Prompt the user to select a single item from a list (radio list).

        Returns:
            The selected value, or None if cancelled.
        """
        if not choices:
            return None

        return questionary.select(
            self._q(message),
            choices=choices,
            style=QUESTIONARY_STYLE_SELECT,
            qmark="✦",
            instruction="Use ↑/↓ then Enter",
        ).ask()

    def stemcells_table(
        self, stemcells: Iterable[Any], title: str = "Stemcells"
    ) -> None:
        """
        Expects objects with .name .version .cid .deployments
        (like boshops.core.inventory.Stemcell)
        """
        t = Table(title=title, show_lines=False)
        t.add_column("Name", style="ok")
        t.add_column("Version", no_wrap=True)
        t.add_column("CID", style="meta")
        t.add_column("Deployments")

        for s in stemcells:
            t.add_row(
                escape(s.name),
                escape(s.version),
                escape(s.cid),
                escape(", ".join(s.deployments)),
            )

        console.print(t)

    def deployments_table(
        self, deployments: Iterable[Any], title: str = "Deployments"
    ) -> None:
        """Render deployments with their releases and stemcells."""
        t = Table(title=title, show_lines=False)
        t.add_column("Name", style="ok")
        t.add_column("Releases")
        t.add_column("Stemcells", style="meta")

        for d in deployments:
            t.add_row(
                escape(d.name),
                escape(", ".join(d.releases)),
                escape(", ".join(d.stemcells)),
            )

        console.print(t)

    def vms_table(self, vms: Iterable[Any], title: str = "VMs") -> None:
        """
        Render VM status and vitals.

        Expects boshops.core.vms.VMStatus records; rows keep director order.
        """
        t = Table(title=title, show_lines=False)
        t.add_column("Job/index", style="ok", no_wrap=True)
        t.add_column("State")
        t.add_column("Resource pool", style="meta")
        t.add_column("IPs")
        t.add_column("Load (1m, 5m, 15m)", no_wrap=True)
        t.add_column("CPU user/sys/wait", no_wrap=True)
        t.add_column("Memory")
        t.add_column("Swap")
        t.add_column("System disk")
        t.add_column("Persistent disk")

        for vm in vms:
            style = "ok" if vm.job_state == "running" else "err"
            t.add_row(
                escape(f"{vm.job_name}/{vm.index}"),
                f"[{style}]{escape(vm.job_state)}[/{style}]",
                escape(vm.resource_pool),
                escape(", ".join(vm.ips)),
                f"{vm.load_1m:.2f}, {vm.load_5m:.2f}, {vm.load_15m:.2f}",
                f"{_pct(vm.cpu_user)} / {_pct(vm.cpu_sys)} / {_pct(vm.cpu_wait)}",
                f"{_pct(vm.memory_percent)} ({vm.memory_kb} kB)",
                f"{_pct(vm.swap_percent)} ({vm.swap_kb} kB)",
                _pct(vm.disk_system_percent),
                _pct(vm.disk_persistent_percent),
            )

        console.print(t)

    def task_details(self, task: Any) -> None:
        """Print one director task as key-value pairs."""
        created = datetime.fromtimestamp(task.timestamp, tz=timezone.utc)
        style = "ok" if task.state == "done" else "warn"
        self.kv(
            {
                "Task": task.id,
                "State": f"[{style}]{escape(task.state)}[/{style}]",
                "Description": escape(task.description),
                "User": escape(task.user),
                "Created": created.strftime("%Y-%m-%d %H:%M:%S UTC"),
                "Result": escape(task.result or "-"),
            }
        )


out = Out()
