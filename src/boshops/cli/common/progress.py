"""Progress display for task polling."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn

from boshops.core.tasks import Task, TaskAdapter, TaskState
from boshops.core.vms import VMStatus, fetch_vms_status

console = Console(stderr=True)


def _style_for(status: TaskState | None) -> str:
    if status == TaskState.DONE:
        return "green"
    if status in (TaskState.QUEUED, TaskState.PROCESSING):
        return "yellow"
    if status is None:
        return "dim"
    return "red"


def _task_progress() -> Progress:
    return Progress(
        SpinnerColumn(),
        TextColumn("[bold]{task.fields[label]}[/]"),
        TextColumn("task={task.fields[director_task]}"),
        TextColumn(
            "state=[{task.fields[style]}]{task.fields[state]}[/{task.fields[style]}]"
        ),
        TimeElapsedColumn(),
        console=console,
        transient=True,
    )


def fetch_vms_with_progress(
    adapter: TaskAdapter,
    deployment: str,
    *,
    poll_interval: float,
    timeout: float | None,
    skip_invalid: bool = False,
) -> list[VMStatus]:
    """
    Fetch VM status while showing a spinner row with the live task state.

    The row shows the director task id once the redirect was followed and
    is updated on every polled snapshot.
    """
    progress = _task_progress()
    row = progress.add_task(
        "",
        total=1,
        label=f"vms {escape(deployment)}",
        director_task="-",
        state="starting",
        style=_style_for(None),
    )

    def _on_state(task: Task) -> None:
        progress.update(
            row,
            director_task=str(task.id),
            state=escape(task.state),
            style=_style_for(task.status),
            completed=1 if task.is_terminal else 0,
        )

    with progress:
        return fetch_vms_status(
            adapter,
            deployment,
            skip_invalid=skip_invalid,
            poll_interval=poll_interval,
            timeout=timeout,
            on_state=_on_state,
        )
