"""Tests for the offline snapshot store."""

import json
import threading

import pytest

from adapters.snapshot import SnapshotStore, load_snapshot
from core.domain.models import ContainerHandle, ImageHandle
from core.interfaces import ArtifactStore, InspectionProvider, ObjectStore
from core.interfaces.stores import ArtifactNotFoundError, ObjectNotFoundError, StoreError


@pytest.fixture
def store(snapshot_path):
    return SnapshotStore.from_path(snapshot_path)


def test_store_satisfies_all_protocols(store):
    assert isinstance(store, ObjectStore)
    assert isinstance(store, InspectionProvider)
    assert isinstance(store, ArtifactStore)


@pytest.mark.parametrize("identifier", ["mycontainer", "/mycontainer", "c0ffee0123456789", "c0ffee01"])
def test_container_lookup(store, identifier):
    handle = store.lookup_container(identifier)
    assert handle.id == "c0ffee0123456789"
    assert handle.name == "mycontainer"
    assert handle.identifier == identifier


def test_ambiguous_prefix_is_an_error(store):
    with pytest.raises(StoreError, match="more than one"):
        store.lookup_container("c0ffee")


def test_unknown_container(store):
    with pytest.raises(ObjectNotFoundError):
        store.lookup_container("ghost")


@pytest.mark.parametrize(
    "identifier",
    ["alpine", "alpine:latest", "library/alpine", "docker.io/library/alpine:latest", "sha256:a1p1ne", "a1p1"],
)
def test_image_lookup(store, identifier):
    assert store.lookup_image(identifier).id == "sha256:a1p1ne"


def test_image_tag_must_match(store):
    with pytest.raises(ObjectNotFoundError):
        store.lookup_image("alpine:3.19")


def test_latest_is_newest_created(store):
    assert store.latest_container_id() == "c0ffee9999999999"


def test_latest_with_empty_snapshot(tmp_path):
    path = tmp_path / "empty.json"
    path.write_text("{}", encoding="utf-8")
    with pytest.raises(ObjectNotFoundError):
        SnapshotStore.from_path(path).latest_container_id()


def test_size_only_with_flag(store):
    handle = ContainerHandle(id="c0ffee0123456789", identifier="mycontainer")
    assert "SizeRw" not in store.container_inspect(handle)
    assert store.container_inspect(handle, include_size=True)["SizeRootFs"] == 5000


def test_inspect_returns_copies(store):
    handle = ContainerHandle(id="c0ffee0123456789", identifier="mycontainer")
    store.container_inspect(handle)["ID"] = "mutated"
    assert store.container_inspect(handle)["ID"] == "c0ffee0123456789"


def test_artifacts_are_served_as_json_bytes(store):
    handle = ContainerHandle(id="c0ffee0123456789", identifier="mycontainer")
    assert json.loads(store.get_artifact(handle, "create-config"))["Tty"] is True
    with pytest.raises(ArtifactNotFoundError):
        store.get_artifact(handle, "other")


def test_cancelled_image_inspect(store):
    token = threading.Event()
    token.set()
    with pytest.raises(StoreError, match="cancelled"):
        store.image_inspect(ImageHandle(id="sha256:a1p1ne", identifier="alpine"), cancel=token)


def test_invalid_snapshot(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text('{"containers": [{"names": []}]}', encoding="utf-8")
    with pytest.raises(StoreError, match="invalid snapshot"):
        load_snapshot(path)
    with pytest.raises(StoreError, match="cannot read"):
        load_snapshot(tmp_path / "missing.json")
