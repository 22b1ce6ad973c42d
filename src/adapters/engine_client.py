"""Engine REST client (httpx).

Why a wrapper:
- Standardises timeouts, headers and Unix-socket transport for the
  Docker-compatible API that both Podman and Docker serve.
- Maps HTTP failures to the store errors the Core understands.
- Easy to test: any `httpx.Client` (e.g. with `httpx.MockTransport`) can be
  injected.
"""

from __future__ import annotations

import logging
import threading
from typing import Any
from urllib.parse import quote

import httpx

from core.config import AppSettings
from core.domain.models import ContainerHandle, ImageHandle
from core.interfaces.stores import ObjectNotFoundError, StoreError

logger = logging.getLogger(__name__)

_UNIX_SCHEME = "unix://"
# Host part is ignored when talking over a Unix socket.
_SOCKET_BASE_URL = "http://d"


def build_engine_client(settings: AppSettings | None = None) -> httpx.Client:
    """Create an `httpx.Client` pointed at the configured engine endpoint."""

    settings = settings or AppSettings()
    prefix = "/" + settings.engine_api_prefix.strip("/") if settings.engine_api_prefix.strip("/") else ""
    headers = {
        "User-Agent": "podspect",
        "Accept": "application/json",
    }
    timeout = httpx.Timeout(settings.http_timeout_seconds)

    if settings.engine_url.startswith(_UNIX_SCHEME):
        socket_path = settings.engine_url[len(_UNIX_SCHEME):]
        return httpx.Client(
            base_url=_SOCKET_BASE_URL + prefix,
            transport=httpx.HTTPTransport(uds=socket_path),
            timeout=timeout,
            headers=headers,
        )
    return httpx.Client(
        base_url=settings.engine_url.rstrip("/") + prefix,
        timeout=timeout,
        headers=headers,
    )


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and isinstance(body.get("message"), str):
        return body["message"]
    return f"HTTP {response.status_code}"


class EngineClient:
    """`ObjectStore` + `InspectionProvider` over the engine REST API."""

    def __init__(self, client: httpx.Client) -> None:
        self._client = client

    @classmethod
    def from_settings(cls, settings: AppSettings | None = None) -> "EngineClient":
        return cls(build_engine_client(settings))

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "EngineClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _get_json(self, path: str, params: dict[str, str] | None = None) -> Any:
        try:
            response = self._client.get(path, params=params)
        except httpx.HTTPError as exc:
            raise StoreError(f"engine request {path} failed: {exc}") from exc

        if response.status_code == 404:
            raise ObjectNotFoundError(_error_message(response))
        if response.status_code >= 400:
            raise StoreError(f"engine request {path} failed: {_error_message(response)}")
        try:
            return response.json()
        except ValueError as exc:
            raise StoreError(f"engine returned invalid JSON for {path}") from exc

    def ping(self) -> tuple[bool, str]:
        try:
            response = self._client.get("/_ping")
        except httpx.HTTPError as exc:
            return False, str(exc)
        return response.is_success, f"HTTP {response.status_code}"

    # ObjectStore

    def lookup_container(self, identifier: str) -> ContainerHandle:
        data = self._get_json(f"/containers/{quote(identifier, safe='')}/json")
        if not isinstance(data, dict) or not data.get("Id"):
            raise StoreError(f"engine returned no ID for container {identifier!r}")
        name = data.get("Name")
        return ContainerHandle(
            id=data["Id"],
            identifier=identifier,
            name=name.lstrip("/") if isinstance(name, str) else None,
        )

    def lookup_image(self, identifier: str) -> ImageHandle:
        data = self._get_json(f"/images/{quote(identifier, safe='/:@')}/json")
        if not isinstance(data, dict) or not data.get("Id"):
            raise StoreError(f"engine returned no ID for image {identifier!r}")
        return ImageHandle(id=data["Id"], identifier=identifier)

    def latest_container_id(self) -> str:
        data = self._get_json("/containers/json", params={"all": "true", "limit": "1"})
        if not isinstance(data, list) or not data:
            raise ObjectNotFoundError("no containers to inspect")
        entry = data[0]
        if not isinstance(entry, dict) or not entry.get("Id"):
            raise StoreError("engine returned a container list entry without an ID")
        return entry["Id"]

    # InspectionProvider

    def container_inspect(self, handle: ContainerHandle, include_size: bool = False) -> dict[str, Any]:
        params = {"size": "true"} if include_size else None
        logger.debug("inspecting container %s (size=%s)", handle.id, include_size)
        return self._get_json(f"/containers/{quote(handle.id, safe='')}/json", params=params)

    def image_inspect(
        self,
        handle: ImageHandle,
        *,
        cancel: threading.Event | None = None,
    ) -> dict[str, Any]:
        if cancel is not None and cancel.is_set():
            raise StoreError("image inspect cancelled")
        logger.debug("inspecting image %s", handle.id)
        return self._get_json(f"/images/{quote(handle.id, safe=':')}/json")
