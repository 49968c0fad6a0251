"""CLI application for director operations tooling."""

import typer

from boshops.cli.commands.deployments import app as deployments_app
from boshops.cli.commands.stemcells import app as stemcells_app
from boshops.cli.commands.tasks import app as tasks_app
from boshops.cli.common.logs import configure_logging
from boshops.cli.common.options import VerboseOpt

app = typer.Typer(
    help="boshops - BOSH director operations tooling",
    no_args_is_help=True,
)


@app.callback()
def _main(verbose: bool = VerboseOpt):
    """Configure logging for every command."""
    configure_logging(verbose)


app.add_typer(
    deployments_app, name="deployments", help="List deployments / show VM status."
)
app.add_typer(stemcells_app, name="stemcells", help="List stemcells.")
app.add_typer(tasks_app, name="tasks", help="Inspect director tasks.")


if __name__ == "__main__":
    app()
