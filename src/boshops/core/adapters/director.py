from __future__ import annotations

import json
import logging
from typing import Any, Mapping

import httpx

from boshops.core.errors import ApiResponse, ProtocolError, TransportError

logger = logging.getLogger(__name__)


class DirectorAdapter:
    """Adapter around the director HTTP API (one request at a time, no redirects)."""

    def __init__(self, client: httpx.Client) -> None:
        """Create an adapter on top of a configured httpx client."""
        self.client = client

    def request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, str] | None = None,
        body: Any = None,
        phase: str = "request",
    ) -> ApiResponse:
        """Send one request and return the raw response.

        Redirects are returned as-is so the task poller can read `Location`.
        Network level failures (DNS, TLS, timeouts) become TransportError.
        """
        logger.debug("%s %s params=%s", method, path, dict(params or {}))
        try:
            resp = self.client.request(
                method.upper(),
                path,
                params=params,
                json=body,
                follow_redirects=False,
            )
        except httpx.TransportError as exc:
            raise TransportError(
                f"{phase}: {method.upper()} {path} failed: {exc}", phase=phase
            ) from exc

        logger.debug("%s %s -> %s", method, path, resp.status_code)
        return ApiResponse(
            status_code=resp.status_code,
            headers=resp.headers,
            body=resp.content,
        )

    def get_json(self, path: str, *, phase: str = "request") -> Any:
        """GET a JSON resource, failing on non-2xx status or malformed JSON."""
        resp = self.request("GET", path, phase=phase)
        if not resp.is_success:
            raise ProtocolError(
                f"{phase}: GET {path} returned status {resp.status_code}",
                response=resp,
                phase=phase,
            )
        try:
            return json.loads(resp.body)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise ProtocolError(
                f"{phase}: GET {path} returned malformed JSON: {exc}",
                response=resp,
                phase=phase,
            ) from exc
