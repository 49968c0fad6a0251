"""Authentication helpers for the director.

This module centralizes creation of the httpx client used to talk to the
director and applies small but important normalization rules (such as
sanitizing the host URL) to avoid malformed API URLs.
"""

from __future__ import annotations

import ssl

import httpx

from boshops.core.adapters.director import DirectorAdapter
from boshops.core.config import DirectorConfig


class AuthError(RuntimeError):
    """Raised when the director connection cannot be configured."""


def _sanitize_host(host: str | None) -> str | None:
    """
    Normalize a director URL.

    - Removes query strings (e.g. '?o=123')
    - Removes trailing slashes
    """
    if not host:
        return host
    host = host.strip().split("?", 1)[0]
    return host.rstrip("/")


def _verify(config: DirectorConfig) -> bool | ssl.SSLContext:
    if config.insecure:
        return False
    if config.ca_cert:
        return ssl.create_default_context(cafile=config.ca_cert)
    return True


def get_client(config: DirectorConfig) -> httpx.Client:
    """
    Create an httpx client for the configured director.

    Token auth wins over basic auth. Redirects are never followed
    automatically: task endpoints answer with a redirect the poller must see.
    """
    url = _sanitize_host(config.url)
    if not url:
        raise AuthError(
            "No director configured. Set BOSH_ENVIRONMENT or pass --environment."
        )
    if not url.startswith(("http://", "https://")):
        url = f"https://{url}"

    auth: httpx.Auth | None = None
    headers: dict[str, str] = {"Accept": "application/json"}
    if config.token:
        headers["Authorization"] = f"Bearer {config.token}"
    elif config.username:
        auth = httpx.BasicAuth(config.username, config.password or "")
    elif config.password:
        raise AuthError("BOSH_CLIENT_SECRET is set but BOSH_CLIENT is missing.")

    return httpx.Client(
        base_url=url,
        auth=auth,
        headers=headers,
        verify=_verify(config),
        timeout=httpx.Timeout(config.http_timeout),
        follow_redirects=False,
    )


def get_adapter(config: DirectorConfig) -> DirectorAdapter:
    """Return a director adapter for the given settings."""
    return DirectorAdapter(get_client(config))
