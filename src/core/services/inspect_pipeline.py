"""Inspect orchestration.

This module is the single entry-point the CLI (or any other caller) uses:
one validated `InspectionRequest` in, rendered text out, or exactly one
`InspectError` raised. Side-effects such as printing stay in the CLI layer.
"""

from __future__ import annotations

import logging
import threading

from core.config import AppSettings
from core.domain.errors import ResolutionFailedError
from core.domain.models import InspectionRequest, InspectKind
from core.domain.policy import BatchPolicy
from core.interfaces.rendering import JsonEncoder, TemplateEngine
from core.interfaces.stores import ArtifactStore, InspectionProvider, ObjectStore, StoreError
from core.services.batch import BatchInspector
from core.services.fetcher import ArtifactDecoder, MetadataFetcher, decode_create_config
from core.services.field_aliases import normalize_format
from core.services.output import render_output
from core.services.resolver import IdentifierResolver

logger = logging.getLogger(__name__)


def resolve_targets(request: InspectionRequest, store: ObjectStore) -> tuple[list[str], InspectKind]:
    """Identifiers and kind to inspect; `--latest` becomes one container ID."""

    if not request.use_latest:
        return list(request.names), request.kind
    try:
        latest = store.latest_container_id()
    except StoreError as exc:
        raise ResolutionFailedError(
            "unable to get latest container",
            identifier="--latest",
            cause=exc,
        ) from exc
    logger.debug("--latest resolved to container %s", latest)
    return [latest], InspectKind.CONTAINER


def run_inspect(
    request: InspectionRequest,
    *,
    store: ObjectStore,
    provider: InspectionProvider,
    artifacts: ArtifactStore,
    templates: TemplateEngine,
    encoder: JsonEncoder,
    settings: AppSettings | None = None,
    policy: BatchPolicy | None = None,
    decode_artifact: ArtifactDecoder = decode_create_config,
    cancel: threading.Event | None = None,
) -> str:
    """Inspect every requested object and render the collected records."""

    settings = settings or AppSettings()
    policy = policy or settings.batch_policy

    output_format = normalize_format(request.format)
    identifiers, kind = resolve_targets(request, store)

    inspector = BatchInspector(
        IdentifierResolver(store),
        MetadataFetcher(
            provider,
            artifacts,
            decode_artifact=decode_artifact,
            allow_missing_artifact=settings.allow_missing_artifact,
        ),
        policy=policy,
    )
    result = inspector.inspect(identifiers, kind, include_size=request.include_size, cancel=cancel)
    if result.error is not None:
        raise result.error

    return render_output(result.records, output_format, templates=templates, encoder=encoder)
