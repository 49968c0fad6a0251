"""Common CLI options for the CLI."""

import typer

EnvironmentOpt = typer.Option(
    None,
    "--environment",
    "-e",
    help="Director URL (defaults to $BOSH_ENVIRONMENT)",
)

InsecureOpt = typer.Option(
    False,
    "--insecure",
    help="Skip TLS verification of the director certificate",
)

VerboseOpt = typer.Option(
    False,
    "--verbose",
    "-v",
    help="Log every director request",
)

PollIntervalOpt = typer.Option(
    None,
    "--poll-interval",
    help="Seconds between task polls (defaults to $BOSHOPS_POLL_INTERVAL or 1)",
    min=0.1,
)

TimeoutOpt = typer.Option(
    None,
    "--timeout",
    help="Give up polling after this many seconds (defaults to $BOSHOPS_POLL_TIMEOUT)",
    min=0,
)

SkipInvalidOpt = typer.Option(
    False,
    "--skip-invalid",
    help="Skip VM records that cannot be decoded instead of failing",
)
