"""Application context management for the CLI."""

from dataclasses import dataclass

from boshops.cli.common.exits import die
from boshops.core.adapters.director import DirectorAdapter
from boshops.core.auth import AuthError, get_adapter
from boshops.core.config import DirectorConfig


@dataclass
class DirectorAppContext:
    """Application context holding director settings and the adapter."""

    config: DirectorConfig
    adapter: DirectorAdapter


def build_director_context(
    environment: str | None, *, insecure: bool = False
) -> DirectorAppContext:
    """Build and return the application context for director commands.

    Args:
        environment: Optional director URL overriding $BOSH_ENVIRONMENT.
        insecure: Disable TLS verification.

    Returns:
        DirectorAppContext: Context with resolved settings and adapter.
    """
    config = DirectorConfig.from_env().with_overrides(
        url=environment, insecure=insecure or None
    )
    try:
        adapter = get_adapter(config)
    except AuthError as exc:
        die(str(exc), code=1)
    return DirectorAppContext(config=config, adapter=adapter)
