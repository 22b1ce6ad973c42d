"""Contracts for the engine-side collaborators.

Why Protocol:
- Structural typing keeps the Core free of HTTP and filesystem details.
- A REST client, an offline snapshot and a test fake are interchangeable.
"""

from __future__ import annotations

import threading
from typing import Any, Protocol, runtime_checkable

from core.domain.models import ContainerHandle, ImageHandle

CREATE_CONFIG_ARTIFACT = "create-config"


class StoreError(Exception):
    """Any failure raised by an object, inspection or artifact store."""


class ObjectNotFoundError(StoreError):
    """No container or image matches the identifier."""


class ArtifactNotFoundError(StoreError):
    """The container has no artifact under the requested key."""


@runtime_checkable
class ObjectStore(Protocol):
    def lookup_container(self, identifier: str) -> ContainerHandle:
        """Resolve a name, ID or unique ID prefix to a container."""

        ...

    def lookup_image(self, identifier: str) -> ImageHandle:
        """Resolve a name, tag, ID or unique ID prefix to an image."""

        ...

    def latest_container_id(self) -> str:
        """ID of the most recently created container.

        Raises `ObjectNotFoundError` when there are no containers.
        """

        ...


@runtime_checkable
class InspectionProvider(Protocol):
    def container_inspect(self, handle: ContainerHandle, include_size: bool = False) -> dict[str, Any]:
        ...

    def image_inspect(
        self,
        handle: ImageHandle,
        *,
        cancel: threading.Event | None = None,
    ) -> dict[str, Any]:
        ...


@runtime_checkable
class ArtifactStore(Protocol):
    def get_artifact(self, handle: ContainerHandle, key: str) -> bytes:
        """Raw bytes of a persisted artifact; `ArtifactNotFoundError` if absent."""

        ...
