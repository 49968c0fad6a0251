"""Commands for director tasks."""

import typer

from boshops.cli.common.context import DirectorAppContext, build_director_context
from boshops.cli.common.exits import describe_error, die, exit_from_exc
from boshops.cli.common.options import EnvironmentOpt, InsecureOpt
from boshops.cli.common.output import out
from boshops.core.errors import DirectorError
from boshops.core.tasks import get_task

app = typer.Typer(help="Inspect director tasks", no_args_is_help=True)


@app.callback()
def _init(
    ctx: typer.Context,
    environment: str | None = EnvironmentOpt,
    insecure: bool = InsecureOpt,
):
    """Initialize director context."""
    ctx.obj = build_director_context(environment, insecure=insecure)


@app.command()
def show(
    ctx: typer.Context,
    task_id: int = typer.Argument(..., help="Director task id"),
):
    """
    Show the current state of a task.
    """
    appctx: DirectorAppContext = ctx.obj

    try:
        task = get_task(appctx.adapter, task_id)
    except DirectorError as exc:
        exit_from_exc(exc, message=describe_error(exc))
    except KeyboardInterrupt:
        die("Interrupted", code=130)

    out.task_details(task)
