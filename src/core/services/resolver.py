"""Identifier resolution.

Maps a user-typed name or ID plus a kind constraint to a concrete handle.
"""

from __future__ import annotations

import logging

from core.domain.errors import ResolutionFailedError
from core.domain.models import InspectKind, ResolvedEntity
from core.interfaces.stores import ObjectStore, StoreError

logger = logging.getLogger(__name__)

# Lookup order for `--type all`. Containers are tried first, so a name that
# matches both a container and an image inspects the container; when every
# lookup fails the error of the last one (the image) is reported.
EITHER_LOOKUP_ORDER: tuple[InspectKind, ...] = (InspectKind.CONTAINER, InspectKind.IMAGE)


class IdentifierResolver:
    """Resolves identifiers against an `ObjectStore`."""

    def __init__(self, store: ObjectStore) -> None:
        self._store = store

    def resolve(self, identifier: str, kind: InspectKind) -> ResolvedEntity:
        if kind is InspectKind.ALL:
            return self._resolve_any(identifier)
        return self._lookup(identifier, kind)

    def _resolve_any(self, identifier: str) -> ResolvedEntity:
        last_error: ResolutionFailedError | None = None
        for kind in EITHER_LOOKUP_ORDER:
            try:
                return self._lookup(identifier, kind)
            except ResolutionFailedError as exc:
                logger.debug("%s lookup failed for %r, trying next kind", kind.value, identifier)
                last_error = exc
        assert last_error is not None
        raise last_error

    def _lookup(self, identifier: str, kind: InspectKind) -> ResolvedEntity:
        logger.debug("Getting %s %s", kind.value, identifier)
        if kind is InspectKind.CONTAINER:
            try:
                return self._store.lookup_container(identifier)
            except StoreError as exc:
                raise ResolutionFailedError(
                    f"error looking up container {identifier!r}",
                    identifier=identifier,
                    cause=exc,
                ) from exc
        try:
            return self._store.lookup_image(identifier)
        except StoreError as exc:
            raise ResolutionFailedError(
                f"error getting image {identifier!r}",
                identifier=identifier,
                cause=exc,
            ) from exc
