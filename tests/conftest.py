"""Shared fixtures: an in-memory engine that records every call.

No sys.path hacks - tests import the installed `core`, `adapters` and `cli`
packages.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from adapters.json_encoder import JsonArrayEncoder
from adapters.template_engine import JinjaTemplateEngine
from core.config import AppSettings
from core.domain.models import ContainerHandle, ImageHandle
from core.interfaces.stores import ArtifactNotFoundError, ObjectNotFoundError


class FakeEngine:
    """Implements ObjectStore, InspectionProvider and ArtifactStore."""

    def __init__(self) -> None:
        self.containers: dict[str, dict] = {}
        self.images: dict[str, dict] = {}
        self.artifacts: dict[tuple[str, str], bytes] = {}
        self.created_order: list[str] = []
        self.calls: list[tuple[str, str]] = []

    def add_container(self, cid: str, name: str, inspect: dict, create_config: dict | None = None) -> None:
        self.containers[cid] = {"name": name, "inspect": inspect}
        self.created_order.append(cid)
        if create_config is not None:
            self.artifacts[(cid, "create-config")] = json.dumps(create_config).encode()

    def add_image(self, iid: str, name: str, inspect: dict) -> None:
        self.images[iid] = {"name": name, "inspect": inspect}

    def lookup_container(self, identifier: str) -> ContainerHandle:
        self.calls.append(("lookup_container", identifier))
        for cid, entry in self.containers.items():
            if identifier in (cid, entry["name"]):
                return ContainerHandle(id=cid, identifier=identifier, name=entry["name"])
        raise ObjectNotFoundError(f"no such container {identifier}")

    def lookup_image(self, identifier: str) -> ImageHandle:
        self.calls.append(("lookup_image", identifier))
        for iid, entry in self.images.items():
            if identifier in (iid, entry["name"]):
                return ImageHandle(id=iid, identifier=identifier)
        raise ObjectNotFoundError(f"{identifier}: image not known")

    def latest_container_id(self) -> str:
        self.calls.append(("latest_container_id", ""))
        if not self.created_order:
            raise ObjectNotFoundError("no containers to inspect")
        return self.created_order[-1]

    def container_inspect(self, handle: ContainerHandle, include_size: bool = False) -> dict:
        self.calls.append(("container_inspect", handle.id))
        record = json.loads(json.dumps(self.containers[handle.id]["inspect"]))
        if include_size:
            record["SizeRw"] = 1024
            record["SizeRootFs"] = 4096
        return record

    def image_inspect(self, handle: ImageHandle, *, cancel=None) -> dict:
        self.calls.append(("image_inspect", handle.id))
        return json.loads(json.dumps(self.images[handle.id]["inspect"]))

    def get_artifact(self, handle: ContainerHandle, key: str) -> bytes:
        self.calls.append(("get_artifact", handle.id))
        try:
            return self.artifacts[(handle.id, key)]
        except KeyError:
            raise ArtifactNotFoundError(f"artifact {key!r} not found for container {handle.id}") from None

    def lookups(self) -> list[str]:
        return [name for name, _ in self.calls if name.startswith("lookup_")]


@pytest.fixture
def engine() -> FakeEngine:
    fake = FakeEngine()
    fake.add_container(
        "c0ffee01",
        "mycontainer",
        {"ID": "c0ffee01", "Name": "mycontainer", "ImageID": "sha256:a1p1ne", "State": {"Status": "running"}},
        {"Name": "mycontainer", "Image": "alpine", "Command": ["sh"], "Env": {"PATH": "/usr/bin"}},
    )
    fake.add_container(
        "beef0002",
        "web",
        {"ID": "beef0002", "Name": "web", "ImageID": "sha256:a1p1ne", "State": {"Status": "exited"}},
        {"Name": "web", "Image": "alpine"},
    )
    fake.add_image("sha256:a1p1ne", "alpine", {"ID": "sha256:a1p1ne", "RepoTags": ["docker.io/library/alpine:latest"]})
    return fake


@pytest.fixture
def settings(tmp_path: Path) -> AppSettings:
    # _env_file=None keeps a developer's .env out of the tests.
    return AppSettings(_env_file=None, artifacts_dir=tmp_path / "artifacts")


@pytest.fixture
def templates() -> JinjaTemplateEngine:
    return JinjaTemplateEngine()


@pytest.fixture
def encoder() -> JsonArrayEncoder:
    return JsonArrayEncoder(indent=4)


SNAPSHOT = {
    "containers": [
        {
            "id": "c0ffee0123456789",
            "names": ["/mycontainer"],
            "created": "2024-05-01T10:00:00Z",
            "inspect": {"ID": "c0ffee0123456789", "Name": "mycontainer", "ImageID": "sha256:a1p1ne"},
            "size": {"SizeRw": 12, "SizeRootFs": 5000},
            "artifacts": {"create-config": {"Name": "mycontainer", "Image": "alpine", "Tty": True}},
        },
        {
            "id": "c0ffee9999999999",
            "names": ["/web"],
            "created": "2024-06-01T10:00:00Z",
            "inspect": {"ID": "c0ffee9999999999", "Name": "web", "ImageID": "sha256:a1p1ne"},
            "artifacts": {"create-config": {"Name": "web", "Image": "alpine"}},
        },
    ],
    "images": [
        {
            "id": "sha256:a1p1ne",
            "repo_tags": ["docker.io/library/alpine:latest"],
            "inspect": {"ID": "sha256:a1p1ne", "RepoTags": ["docker.io/library/alpine:latest"]},
        }
    ],
}


@pytest.fixture
def snapshot_path(tmp_path: Path) -> Path:
    path = tmp_path / "snapshot.json"
    path.write_text(json.dumps(SNAPSHOT), encoding="utf-8")
    return path
