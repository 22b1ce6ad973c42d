"""In-memory stores backed by a `SnapshotFile`."""

from __future__ import annotations

import copy
import json
import logging
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from adapters.snapshot.loader import load_snapshot
from adapters.snapshot.models import SnapshotContainer, SnapshotFile, SnapshotImage
from core.domain.models import ContainerHandle, ImageHandle
from core.interfaces.stores import ArtifactNotFoundError, ObjectNotFoundError, StoreError

logger = logging.getLogger(__name__)

_DIGEST_PREFIX = "sha256:"
_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def _bare_id(value: str) -> str:
    return value[len(_DIGEST_PREFIX):] if value.startswith(_DIGEST_PREFIX) else value


def _with_default_tag(name: str) -> str:
    last = name.rsplit("/", 1)[-1]
    if ":" in last or "@" in last:
        return name
    return f"{name}:latest"


def _created_key(created: datetime | None) -> datetime:
    if created is None:
        return _EPOCH
    if created.tzinfo is None:
        return created.replace(tzinfo=timezone.utc)
    return created


class SnapshotStore:
    """Serves `ObjectStore`, `InspectionProvider` and `ArtifactStore` from a snapshot."""

    def __init__(self, snapshot: SnapshotFile) -> None:
        self._snapshot = snapshot

    @classmethod
    def from_path(cls, path: Path) -> "SnapshotStore":
        return cls(load_snapshot(path))

    # ObjectStore

    def lookup_container(self, identifier: str) -> ContainerHandle:
        container = self._find_container(identifier)
        name = container.names[0].lstrip("/") if container.names else None
        return ContainerHandle(id=container.id, identifier=identifier, name=name)

    def lookup_image(self, identifier: str) -> ImageHandle:
        image = self._find_image(identifier)
        return ImageHandle(id=image.id, identifier=identifier)

    def latest_container_id(self) -> str:
        if not self._snapshot.containers:
            raise ObjectNotFoundError("no containers to inspect")
        latest = max(self._snapshot.containers, key=lambda c: _created_key(c.created))
        return latest.id

    # InspectionProvider

    def container_inspect(self, handle: ContainerHandle, include_size: bool = False) -> dict[str, Any]:
        container = self._container_by_id(handle.id)
        record = copy.deepcopy(container.inspect)
        if include_size:
            record.update(copy.deepcopy(container.size))
        return record

    def image_inspect(
        self,
        handle: ImageHandle,
        *,
        cancel: threading.Event | None = None,
    ) -> dict[str, Any]:
        if cancel is not None and cancel.is_set():
            raise StoreError("image inspect cancelled")
        for image in self._snapshot.images:
            if image.id == handle.id:
                return copy.deepcopy(image.inspect)
        raise ObjectNotFoundError(f"no such image {handle.id}")

    # ArtifactStore

    def get_artifact(self, handle: ContainerHandle, key: str) -> bytes:
        container = self._container_by_id(handle.id)
        if key not in container.artifacts:
            raise ArtifactNotFoundError(f"artifact {key!r} not found for container {handle.id}")
        value = container.artifacts[key]
        if isinstance(value, str):
            return value.encode("utf-8")
        return json.dumps(value).encode("utf-8")

    # helpers

    def _container_by_id(self, container_id: str) -> SnapshotContainer:
        for container in self._snapshot.containers:
            if container.id == container_id:
                return container
        raise ObjectNotFoundError(f"no such container {container_id}")

    def _find_container(self, identifier: str) -> SnapshotContainer:
        containers = self._snapshot.containers
        for container in containers:
            if container.id == identifier:
                return container
        for container in containers:
            if container.matches_name(identifier):
                return container

        matches = [c for c in containers if identifier and c.id.startswith(identifier)]
        if len(matches) == 1:
            return matches[0]
        if len(matches) > 1:
            raise StoreError(f"more than one result for container ID prefix {identifier!r}")
        raise ObjectNotFoundError(f"no such container {identifier}")

    def _find_image(self, identifier: str) -> SnapshotImage:
        images = self._snapshot.images
        bare = _bare_id(identifier)
        for image in images:
            if _bare_id(image.id) == bare:
                return image

        tagged = _with_default_tag(identifier)
        for image in images:
            for tag in image.repo_tags:
                if tag == tagged or tag.endswith("/" + tagged):
                    return image

        matches = [i for i in images if bare and _bare_id(i.id).startswith(bare)]
        if len(matches) == 1:
            return matches[0]
        if len(matches) > 1:
            raise StoreError(f"more than one result for image ID prefix {identifier!r}")
        logger.debug("no image matches %r in snapshot", identifier)
        raise ObjectNotFoundError(f"{identifier}: image not known")
