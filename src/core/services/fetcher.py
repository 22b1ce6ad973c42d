"""Metadata retrieval for resolved handles.

Containers get their live inspect data merged with the `create-config`
artifact written at creation time; images are inspected as-is.
"""

from __future__ import annotations

import copy
import logging
import threading
from typing import Any, Callable

from pydantic import TypeAdapter, ValidationError

from core.domain.errors import FetchFailedError
from core.domain.models import (
    ContainerHandle,
    CreateConfig,
    ImageHandle,
    InspectionRecord,
    ResolvedEntity,
)
from core.interfaces.stores import (
    CREATE_CONFIG_ARTIFACT,
    ArtifactNotFoundError,
    ArtifactStore,
    InspectionProvider,
    StoreError,
)

logger = logging.getLogger(__name__)

ArtifactDecoder = Callable[[bytes], CreateConfig]

_RECORD_ADAPTER: TypeAdapter[InspectionRecord] = TypeAdapter(InspectionRecord)


def decode_create_config(raw: bytes) -> CreateConfig:
    """Decode the JSON `create-config` artifact."""

    return CreateConfig.model_validate_json(raw)


def merge_container_record(live: dict[str, Any], create_config: CreateConfig | None) -> dict[str, Any]:
    """Union of the live inspect data and the creation configuration.

    Live values win. Creation values only fill keys missing from the live
    `Config`/`HostConfig` sections, and the whole decoded artifact is exposed
    under `CreateConfig`. `live` itself is never modified.
    """

    record = copy.deepcopy(live)
    if create_config is None:
        return record

    sections = (
        ("Config", create_config.config_section()),
        ("HostConfig", create_config.host_config_section()),
    )
    for key, section in sections:
        existing = record.get(key)
        if existing is None:
            if section:
                record[key] = section
        elif isinstance(existing, dict):
            for field_name, value in section.items():
                existing.setdefault(field_name, value)

    record["CreateConfig"] = create_config.model_dump(mode="json", by_alias=True, exclude_none=True)
    return record


RECORD_KEY_RENAMES: dict[str, str] = {"Id": "ID"}
CONTAINER_KEY_RENAMES: dict[str, str] = {"Id": "ID", "Image": "ImageID"}


def canonicalize_record(data: dict[str, Any], *, container: bool = False) -> dict[str, Any]:
    """Move engine-style top-level keys to the names records use.

    Docker-compatible engines report `Id` (and `Image` for the image ID of a
    container); records carry `ID` and `ImageID`. A key that already has its
    canonical counterpart is left in place. `data` itself is never modified.
    """

    renames = CONTAINER_KEY_RENAMES if container else RECORD_KEY_RENAMES
    record = dict(data)
    for legacy, canonical in renames.items():
        if legacy in record and canonical not in record:
            record[canonical] = record.pop(legacy)
    return record


def as_record(value: Any) -> InspectionRecord:
    """Validate that `value` is a JSON object tree; raise `ValueError` otherwise."""

    if not isinstance(value, dict):
        raise ValueError(f"inspect data must be a JSON object, got {type(value).__name__}")
    try:
        return _RECORD_ADAPTER.validate_python(value)
    except ValidationError as exc:
        raise ValueError(f"inspect data is not JSON-compatible ({exc.error_count()} errors)") from exc


class MetadataFetcher:
    """Turns a `ResolvedEntity` into one inspection record."""

    def __init__(
        self,
        provider: InspectionProvider,
        artifacts: ArtifactStore,
        *,
        decode_artifact: ArtifactDecoder = decode_create_config,
        allow_missing_artifact: bool = False,
    ) -> None:
        self._provider = provider
        self._artifacts = artifacts
        self._decode_artifact = decode_artifact
        self._allow_missing_artifact = allow_missing_artifact

    def fetch(
        self,
        entity: ResolvedEntity,
        include_size: bool = False,
        cancel: threading.Event | None = None,
    ) -> InspectionRecord:
        if isinstance(entity, ContainerHandle):
            return self._fetch_container(entity, include_size)
        return self._fetch_image(entity, cancel)

    def _fetch_container(self, handle: ContainerHandle, include_size: bool) -> InspectionRecord:
        try:
            live = self._provider.container_inspect(handle, include_size)
            if not isinstance(live, dict):
                raise ValueError(f"inspect data must be a JSON object, got {type(live).__name__}")
        except (StoreError, ValueError) as exc:
            raise FetchFailedError(
                f"error getting container inspect data {handle.id}",
                identifier=handle.identifier,
                stage="inspect",
                cause=exc,
            ) from exc

        create_config = self._load_create_config(handle)

        try:
            live = canonicalize_record(live, container=True)
            return as_record(merge_container_record(live, create_config))
        except ValueError as exc:
            raise FetchFailedError(
                f"error parsing container data {handle.id}",
                identifier=handle.identifier,
                stage="merge",
                cause=exc,
            ) from exc

    def _load_create_config(self, handle: ContainerHandle) -> CreateConfig | None:
        try:
            raw = self._artifacts.get_artifact(handle, CREATE_CONFIG_ARTIFACT)
        except StoreError as exc:
            if isinstance(exc, ArtifactNotFoundError) and self._allow_missing_artifact:
                logger.info("container %s has no %s artifact, skipping merge", handle.id, CREATE_CONFIG_ARTIFACT)
                return None
            raise FetchFailedError(
                f"error reading {CREATE_CONFIG_ARTIFACT} artifact for container {handle.id}",
                identifier=handle.identifier,
                stage="artifact",
                cause=exc,
            ) from exc

        try:
            return self._decode_artifact(raw)
        except ValueError as exc:
            raise FetchFailedError(
                f"error decoding {CREATE_CONFIG_ARTIFACT} artifact for container {handle.id}",
                identifier=handle.identifier,
                stage="artifact",
                cause=exc,
            ) from exc

    def _fetch_image(self, handle: ImageHandle, cancel: threading.Event | None) -> InspectionRecord:
        try:
            data = self._provider.image_inspect(handle, cancel=cancel)
            if not isinstance(data, dict):
                raise ValueError(f"inspect data must be a JSON object, got {type(data).__name__}")
            return as_record(canonicalize_record(data))
        except (StoreError, ValueError) as exc:
            raise FetchFailedError(
                f"error parsing image data {handle.id}",
                identifier=handle.identifier,
                stage="inspect",
                cause=exc,
            ) from exc
