"""Persisted container artifacts on the local filesystem.

Layout (libpod storage):
    <artifacts_dir>/<container id>/userdata/artifacts/<key>
"""

from __future__ import annotations

from pathlib import Path

from core.domain.models import ContainerHandle
from core.interfaces.stores import ArtifactNotFoundError, StoreError


class FilesystemArtifactStore:
    """`ArtifactStore` reading artifact files written at container creation."""

    def __init__(self, root: Path) -> None:
        self.root = Path(root)

    def artifact_path(self, container_id: str, key: str) -> Path:
        if not key or "/" in key or key in (".", ".."):
            raise StoreError(f"invalid artifact key {key!r}")
        return self.root / container_id / "userdata" / "artifacts" / key

    def get_artifact(self, handle: ContainerHandle, key: str) -> bytes:
        path = self.artifact_path(handle.id, key)
        try:
            return path.read_bytes()
        except FileNotFoundError as exc:
            raise ArtifactNotFoundError(f"artifact {key!r} not found for container {handle.id}") from exc
        except OSError as exc:
            raise StoreError(f"cannot read {path}: {exc.strerror or exc}") from exc
