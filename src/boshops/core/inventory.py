"""Synchronous director listings (stemcells, deployments).

These endpoints answer directly with a JSON array, so they only need the
adapter's `get_json` helper and a mapping onto lightweight, immutable
models.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol

from boshops.core.errors import ProtocolError


@dataclass(frozen=True)
class Stemcell:
    """Lightweight representation of a director stemcell."""

    name: str
    version: str
    cid: str
    deployments: tuple[str, ...] = ()


@dataclass(frozen=True)
class Deployment:
    """Lightweight representation of a director deployment."""

    name: str
    releases: tuple[str, ...] = ()
    stemcells: tuple[str, ...] = ()


class JsonAdapter(Protocol):
    """Interface for JSON lookups used by the listings."""

    def get_json(self, path: str, *, phase: str = "request") -> Any:
        """GET a JSON resource."""
        ...


def _items(adapter: JsonAdapter, path: str) -> list[dict[str, Any]]:
    payload = adapter.get_json(path)
    if not isinstance(payload, list):
        raise ProtocolError(f"GET {path}: expected a JSON array")
    return [item for item in payload if isinstance(item, dict)]


def _name_versions(items: Any) -> tuple[str, ...]:
    """Render `[{name, version}]` as `name/version` strings."""
    out: list[str] = []
    for item in items or []:
        name = item.get("name") if isinstance(item, dict) else None
        if not name:
            continue
        version = item.get("version")
        out.append(f"{name}/{version}" if version else str(name))
    return tuple(out)


def get_stemcells(adapter: JsonAdapter) -> list[Stemcell]:
    """List the stemcells uploaded to the director."""
    out: list[Stemcell] = []
    for item in _items(adapter, "/stemcells"):
        name = item.get("name")
        if not name:
            continue
        out.append(
            Stemcell(
                name=str(name),
                version=str(item.get("version") or ""),
                cid=str(item.get("cid") or ""),
                # older directors send strings, newer ones `{"name": ...}`
                deployments=tuple(
                    str(d.get("name", "")) if isinstance(d, dict) else str(d)
                    for d in item.get("deployments") or []
                ),
            )
        )
    return out


def get_deployments(adapter: JsonAdapter) -> list[Deployment]:
    """List the deployments known to the director."""
    out: list[Deployment] = []
    for item in _items(adapter, "/deployments"):
        name = item.get("name")
        if not name:
            continue
        out.append(
            Deployment(
                name=str(name),
                releases=_name_versions(item.get("releases")),
                stemcells=_name_versions(item.get("stemcells")),
            )
        )
    return out
