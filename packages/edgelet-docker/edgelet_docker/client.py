"""Container engine HTTP client.

Thin asynchronous wrapper around the engine REST API.  One method per
engine endpoint; no policy lives here beyond turning HTTP failures into
``EngineError``.

Usage::

    async with DockerClient(base_url="http://docker", transport=transport) as client:
        await client.container_start("edgeHub")
        containers = await client.container_list(True, 0, True, filters)
"""

from __future__ import annotations

import base64
import json
from typing import Any
from urllib.parse import quote

import httpx

from edgelet_docker.exceptions import EngineError


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return response.text or response.reason_phrase


def _flag(value: bool) -> str:
    return "true" if value else "false"


def _container_path(id: str) -> str:
    return quote(id, safe="")


def _image_path(name: str) -> str:
    # Registry hosts, repository paths, tags and digests stay readable.
    return quote(name, safe="/:@")


class DockerClient:
    """Asynchronous HTTP client for the container engine API.

    The underlying ``httpx.AsyncClient`` pools connections and is safe to share
    between concurrent tasks.  No client-side timeout is applied; callers that
    need a deadline wrap the awaitable themselves.
    """

    def __init__(
        self,
        base_url: str,
        transport: httpx.AsyncBaseTransport | None = None,
        api_version: str | None = None,
    ) -> None:
        self._prefix = f"/v{api_version.lstrip('v')}" if api_version else ""
        self._http = httpx.AsyncClient(
            base_url=base_url,
            transport=transport,
            timeout=None,
        )

    # ------------------------------------------------------------------
    # Plumbing
    # ------------------------------------------------------------------

    async def _request(
        self,
        operation: str,
        method: str,
        path: str,
        **kwargs: Any,
    ) -> httpx.Response:
        try:
            resp = await self._http.request(method, self._prefix + path, **kwargs)
            resp.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise EngineError(
                f"{operation} failed ({exc.response.status_code}): {_error_message(exc.response)}",
                operation=operation,
                status_code=exc.response.status_code,
            ) from exc
        except httpx.HTTPError as exc:
            raise EngineError(f"{operation} failed: {exc}", operation=operation) from exc
        return resp

    # ------------------------------------------------------------------
    # Images
    # ------------------------------------------------------------------

    async def image_create(self, from_image: str, registry_auth: str = "") -> None:
        """Pull *from_image*.  *registry_auth* is the JSON credential object or ``""``."""
        headers: dict[str, str] = {}
        if registry_auth:
            headers["X-Registry-Auth"] = base64.urlsafe_b64encode(
                registry_auth.encode("utf-8")
            ).decode("ascii")
        resp = await self._request(
            "image_create",
            "POST",
            "/images/create",
            params={"fromImage": from_image},
            headers=headers,
        )
        # The engine reports pull failures inside a 200 progress stream.
        for line in resp.text.splitlines():
            if not line.strip():
                continue
            try:
                event = json.loads(line)
            except ValueError:
                continue
            if isinstance(event, dict) and event.get("error"):
                raise EngineError(
                    f"image_create failed: {event['error']}",
                    operation="image_create",
                    status_code=resp.status_code,
                )

    async def image_delete(self, name: str, force: bool, noprune: bool) -> list[dict[str, Any]]:
        resp = await self._request(
            "image_delete",
            "DELETE",
            f"/images/{_image_path(name)}",
            params={"force": _flag(force), "noprune": _flag(noprune)},
        )
        return resp.json()  # type: ignore[no-any-return]

    # ------------------------------------------------------------------
    # Containers
    # ------------------------------------------------------------------

    async def container_create(self, body: dict[str, Any], name: str) -> dict[str, Any]:
        resp = await self._request(
            "container_create",
            "POST",
            "/containers/create",
            params={"name": name},
            json=body,
        )
        return resp.json()  # type: ignore[no-any-return]

    async def container_start(self, id: str) -> None:
        path = f"/containers/{_container_path(id)}/start"
        await self._request("container_start", "POST", path)

    async def container_stop(self, id: str, t: int) -> None:
        path = f"/containers/{_container_path(id)}/stop"
        await self._request("container_stop", "POST", path, params={"t": t})

    async def container_restart(self, id: str, t: int) -> None:
        path = f"/containers/{_container_path(id)}/restart"
        await self._request("container_restart", "POST", path, params={"t": t})

    async def container_delete(self, id: str, v: bool, force: bool, link: bool) -> None:
        await self._request(
            "container_delete",
            "DELETE",
            f"/containers/{_container_path(id)}",
            params={"v": _flag(v), "force": _flag(force), "link": _flag(link)},
        )

    async def container_list(
        self, all: bool, limit: int, size: bool, filters: str
    ) -> list[dict[str, Any]]:
        """List containers.  *filters* is the JSON-encoded filter mapping."""
        resp = await self._request(
            "container_list",
            "GET",
            "/containers/json",
            params={
                "all": _flag(all),
                "limit": limit,
                "size": _flag(size),
                "filters": filters,
            },
        )
        return resp.json()  # type: ignore[no-any-return]

    async def container_inspect(self, id: str) -> dict[str, Any]:
        path = f"/containers/{_container_path(id)}/json"
        resp = await self._request("container_inspect", "GET", path)
        return resp.json()  # type: ignore[no-any-return]

    # ------------------------------------------------------------------
    # Lifetime
    # ------------------------------------------------------------------

    async def close(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "DockerClient":
        return self

    async def __aexit__(self, *_: Any) -> None:
        await self.close()
