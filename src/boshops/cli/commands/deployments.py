"""Commands for director deployments and their VMs."""

import typer
from rich.markup import escape

from boshops.cli.common.context import DirectorAppContext, build_director_context
from boshops.cli.common.exits import (
    describe_error,
    die,
    exit_from_exc,
    warn_exit,
)
from boshops.cli.common.options import (
    EnvironmentOpt,
    InsecureOpt,
    PollIntervalOpt,
    SkipInvalidOpt,
    TimeoutOpt,
)
from boshops.cli.common.output import out
from boshops.cli.common.progress import fetch_vms_with_progress
from boshops.cli.tui import select_deployment
from boshops.core.errors import DirectorError, PollInterrupted, TaskFailed
from boshops.core.inventory import get_deployments

app = typer.Typer(help="Work with director deployments", no_args_is_help=True)


@app.callback()
def _init(
    ctx: typer.Context,
    environment: str | None = EnvironmentOpt,
    insecure: bool = InsecureOpt,
):
    """Initialize director context."""
    ctx.obj = build_director_context(environment, insecure=insecure)


@app.command("list")
def list_(ctx: typer.Context):
    """
    List deployments.
    """
    appctx: DirectorAppContext = ctx.obj

    try:
        with out.status("Loading deployments..."):
            deployments = get_deployments(appctx.adapter)
    except DirectorError as exc:
        exit_from_exc(exc, message=describe_error(exc))
    except KeyboardInterrupt:
        die("Interrupted", code=130)

    if not deployments:
        warn_exit("No deployments found", code=0)

    out.deployments_table(deployments)


@app.command()
def vms(
    ctx: typer.Context,
    deployment: str | None = typer.Argument(
        None, help="Deployment name (prompted for when omitted)"
    ),
    poll_interval: float | None = PollIntervalOpt,
    timeout: float | None = TimeoutOpt,
    skip_invalid: bool = SkipInvalidOpt,
):
    """
    Show status and vitals of every VM in a deployment.
    """
    appctx: DirectorAppContext = ctx.obj
    config = appctx.config.with_overrides(
        poll_interval=poll_interval, poll_timeout=timeout
    )

    if not deployment:
        try:
            with out.status("Loading deployments..."):
                deployments = get_deployments(appctx.adapter)
        except DirectorError as exc:
            exit_from_exc(exc, message=describe_error(exc))
        except KeyboardInterrupt:
            die("Interrupted", code=130)
        if not deployments:
            warn_exit("No deployments found", code=0)
        deployment = select_deployment(deployments)
        if not deployment:
            warn_exit("No deployment selected", code=0)

    try:
        statuses = fetch_vms_with_progress(
            appctx.adapter,
            deployment,
            poll_interval=config.poll_interval,
            timeout=config.poll_timeout or None,
            skip_invalid=skip_invalid,
        )
    except TaskFailed as exc:
        exit_from_exc(exc, message=f"VM status task failed: {describe_error(exc)}")
    except PollInterrupted as exc:
        exit_from_exc(exc, message=str(exc))
    except DirectorError as exc:
        exit_from_exc(exc, message=describe_error(exc))
    except KeyboardInterrupt:
        die("Interrupted", code=130)

    if not statuses:
        warn_exit(f"Deployment '{escape(deployment)}' has no VMs", code=0)

    out.vms_table(statuses, title=f"VMs of {escape(deployment)}")
