"""Commands for director stemcells."""

import typer

from boshops.cli.common.context import DirectorAppContext, build_director_context
from boshops.cli.common.exits import (
    describe_error,
    die,
    exit_from_exc,
    warn_exit,
)
from boshops.cli.common.options import EnvironmentOpt, InsecureOpt
from boshops.cli.common.output import out
from boshops.core.errors import DirectorError
from boshops.core.inventory import get_stemcells

app = typer.Typer(help="Work with director stemcells", no_args_is_help=True)


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
    List uploaded stemcells.
    """
    appctx: DirectorAppContext = ctx.obj

    try:
        with out.status("Loading stemcells..."):
            stemcells = get_stemcells(appctx.adapter)
    except DirectorError as exc:
        exit_from_exc(exc, message=describe_error(exc))
    except KeyboardInterrupt:
        die("Interrupted", code=130)

    if not stemcells:
        warn_exit("No stemcells found", code=0)

    out.stemcells_table(stemcells)
