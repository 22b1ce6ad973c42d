"""Wiring of concrete collaborators from settings.

Keeps the CLI free of adapter construction details: a snapshot file, when
configured, replaces the live engine and serves artifacts as well.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator

from adapters.artifact_store import FilesystemArtifactStore
from adapters.engine_client import EngineClient
from adapters.json_encoder import JsonArrayEncoder
from adapters.snapshot import SnapshotStore
from adapters.template_engine import JinjaTemplateEngine
from core.config import AppSettings
from core.interfaces import ArtifactStore, InspectionProvider, JsonEncoder, ObjectStore, TemplateEngine


@dataclass
class Backends:
    store: ObjectStore
    provider: InspectionProvider
    artifacts: ArtifactStore
    templates: TemplateEngine
    encoder: JsonEncoder


@contextmanager
def open_backends(settings: AppSettings) -> Iterator[Backends]:
    """Yield the collaborators for one invocation and release them afterwards."""

    templates = JinjaTemplateEngine()
    encoder = JsonArrayEncoder(indent=settings.json_indent)

    if settings.snapshot_path is not None:
        snapshot = SnapshotStore.from_path(settings.snapshot_path)
        yield Backends(snapshot, snapshot, snapshot, templates, encoder)
        return

    with EngineClient.from_settings(settings) as engine:
        yield Backends(
            store=engine,
            provider=engine,
            artifacts=FilesystemArtifactStore(settings.artifacts_dir),
            templates=templates,
            encoder=encoder,
        )
