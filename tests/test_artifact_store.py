"""Tests for the filesystem artifact store."""

import pytest

from adapters.artifact_store import FilesystemArtifactStore
from core.domain.models import ContainerHandle
from core.interfaces.stores import ArtifactNotFoundError, StoreError

HANDLE = ContainerHandle(id="c0ffee01", identifier="web")


def test_reads_artifact_from_container_userdata(tmp_path):
    path = tmp_path / "c0ffee01" / "userdata" / "artifacts" / "create-config"
    path.parent.mkdir(parents=True)
    path.write_bytes(b'{"Name": "web"}')

    store = FilesystemArtifactStore(tmp_path)

    assert store.get_artifact(HANDLE, "create-config") == b'{"Name": "web"}'


def test_missing_artifact(tmp_path):
    with pytest.raises(ArtifactNotFoundError, match="create-config"):
        FilesystemArtifactStore(tmp_path).get_artifact(HANDLE, "create-config")


@pytest.mark.parametrize("key", ["", "..", "../etc/passwd"])
def test_invalid_keys(tmp_path, key):
    with pytest.raises(StoreError, match="invalid artifact key"):
        FilesystemArtifactStore(tmp_path).get_artifact(HANDLE, key)
