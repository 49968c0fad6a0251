"""Director connection settings.

Settings are read from the environment, using the same variable names as
the BOSH CLI where one exists (`BOSH_ENVIRONMENT`, `BOSH_CLIENT`, ...).
Malformed numeric values fall back to the defaults instead of failing.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Mapping

_ENVIRONMENT_ENV = "BOSH_ENVIRONMENT"
_CLIENT_ENV = "BOSH_CLIENT"
_CLIENT_SECRET_ENV = "BOSH_CLIENT_SECRET"
_TOKEN_ENV = "BOSH_TOKEN"
_CA_CERT_ENV = "BOSH_CA_CERT"
_INSECURE_ENV = "BOSHOPS_INSECURE"
_HTTP_TIMEOUT_ENV = "BOSHOPS_HTTP_TIMEOUT"
_POLL_INTERVAL_ENV = "BOSHOPS_POLL_INTERVAL"
_POLL_TIMEOUT_ENV = "BOSHOPS_POLL_TIMEOUT"

DEFAULT_HTTP_TIMEOUT_SECONDS = 30.0
DEFAULT_POLL_INTERVAL_SECONDS = 1.0
DEFAULT_POLL_TIMEOUT_SECONDS = 600.0


def _float_env(env: Mapping[str, str], name: str, default: float) -> float:
    """Return a non-negative float from env, or the default."""
    raw = env.get(name)
    if raw is None:
        return default
    try:
        return max(float(raw), 0.0)
    except ValueError:
        return default


def _flag_env(env: Mapping[str, str], name: str) -> bool:
    return env.get(name, "").strip().lower() in {"1", "true", "yes"}


@dataclass(frozen=True)
class DirectorConfig:
    """
    Connection settings for one director.

    Attributes:
        url: Director base URL, e.g. `https://192.168.50.4:25555`.
        username: Basic auth user (BOSH_CLIENT).
        password: Basic auth password (BOSH_CLIENT_SECRET).
        token: Bearer token; used instead of basic auth when set.
        ca_cert: Path to a CA bundle used to verify the director.
        insecure: Disable TLS verification entirely.
        http_timeout: Per-request timeout in seconds.
        poll_interval: Seconds between two task polls; zero or negative values
            in the environment fall back to the default.
        poll_timeout: Overall task poll deadline in seconds (None = no deadline).
    """

    url: str | None = None
    username: str | None = None
    password: str | None = None
    token: str | None = None
    ca_cert: str | None = None
    insecure: bool = False
    http_timeout: float = DEFAULT_HTTP_TIMEOUT_SECONDS
    poll_interval: float = DEFAULT_POLL_INTERVAL_SECONDS
    poll_timeout: float | None = DEFAULT_POLL_TIMEOUT_SECONDS

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> DirectorConfig:
        """Build settings from environment variables."""
        env = os.environ if env is None else env
        poll_timeout = _float_env(env, _POLL_TIMEOUT_ENV, DEFAULT_POLL_TIMEOUT_SECONDS)
        poll_interval = (
            _float_env(env, _POLL_INTERVAL_ENV, DEFAULT_POLL_INTERVAL_SECONDS)
            or DEFAULT_POLL_INTERVAL_SECONDS
        )
        return cls(
            url=env.get(_ENVIRONMENT_ENV) or None,
            username=env.get(_CLIENT_ENV) or None,
            password=env.get(_CLIENT_SECRET_ENV) or None,
            token=env.get(_TOKEN_ENV) or None,
            ca_cert=env.get(_CA_CERT_ENV) or None,
            insecure=_flag_env(env, _INSECURE_ENV),
            http_timeout=_float_env(
                env, _HTTP_TIMEOUT_ENV, DEFAULT_HTTP_TIMEOUT_SECONDS
            ),
            poll_interval=poll_interval,
            poll_timeout=poll_timeout or None,
        )

    def with_overrides(self, **overrides: object) -> DirectorConfig:
        """Return a copy with every non-None override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})
