import httpx
import pytest

from boshops.core.auth import AuthError, _sanitize_host, get_client
from boshops.core.config import (
    DEFAULT_HTTP_TIMEOUT_SECONDS,
    DEFAULT_POLL_INTERVAL_SECONDS,
    DirectorConfig,
)


def test_from_env_reads_bosh_variables():
    config = DirectorConfig.from_env(
        {
            "BOSH_ENVIRONMENT": "https://10.0.0.6:25555",
            "BOSH_CLIENT": "admin",
            "BOSH_CLIENT_SECRET": "secret",
            "BOSHOPS_POLL_INTERVAL": "0.5",
            "BOSHOPS_POLL_TIMEOUT": "0",
            "BOSHOPS_INSECURE": "yes",
        }
    )

    assert config.url == "https://10.0.0.6:25555"
    assert config.username == "admin"
    assert config.password == "secret"
    assert config.poll_interval == 0.5
    assert config.poll_timeout is None
    assert config.insecure is True


def test_from_env_falls_back_on_bad_numbers():
    config = DirectorConfig.from_env(
        {"BOSHOPS_HTTP_TIMEOUT": "soon", "BOSHOPS_POLL_INTERVAL": "-3"}
    )

    assert config.http_timeout == DEFAULT_HTTP_TIMEOUT_SECONDS
    assert config.poll_interval == DEFAULT_POLL_INTERVAL_SECONDS
    assert DirectorConfig.from_env({}).poll_interval == DEFAULT_POLL_INTERVAL_SECONDS


def test_from_env_never_yields_a_zero_poll_interval():
    config = DirectorConfig.from_env({"BOSHOPS_POLL_INTERVAL": "0"})

    assert config.poll_interval == DEFAULT_POLL_INTERVAL_SECONDS


def test_with_overrides_ignores_none():
    config = DirectorConfig(url="https://a").with_overrides(url=None, poll_interval=2.0)

    assert config.url == "https://a"
    assert config.poll_interval == 2.0


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("https://director:25555/", "https://director:25555"),
        ("https://director:25555?o=1", "https://director:25555"),
        (None, None),
    ],
)
def test_sanitize_host(raw, expected):
    assert _sanitize_host(raw) == expected


def test_get_client_requires_url():
    with pytest.raises(AuthError, match="BOSH_ENVIRONMENT"):
        get_client(DirectorConfig())


def test_get_client_prefers_token_and_never_follows_redirects():
    client = get_client(DirectorConfig(url="10.0.0.6:25555/", token="abc", username="u"))

    assert client.base_url.scheme == "https"
    assert client.base_url.host == "10.0.0.6"
    assert client.base_url.port == 25555
    assert client.headers["Authorization"] == "Bearer abc"
    assert client.follow_redirects is False


def test_get_client_uses_basic_auth():
    client = get_client(DirectorConfig(url="https://d", username="admin", password="pw"))

    assert isinstance(client.auth, httpx.BasicAuth)
    assert "Authorization" not in client.headers


def test_get_client_rejects_secret_without_client():
    with pytest.raises(AuthError, match="BOSH_CLIENT"):
        get_client(DirectorConfig(url="https://d", password="pw"))
