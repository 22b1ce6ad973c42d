"""Core interfaces/abstractions.

Why:
- Defines the contracts (Protocol) that concrete adapters implement.
- Inverts dependencies: the Core depends on abstractions only.
"""

from core.interfaces.rendering import JsonEncoder, TemplateEngine
from core.interfaces.stores import (
    CREATE_CONFIG_ARTIFACT,
    ArtifactNotFoundError,
    ArtifactStore,
    InspectionProvider,
    ObjectNotFoundError,
    ObjectStore,
    StoreError,
)

__all__ = [
    "CREATE_CONFIG_ARTIFACT",
    "ArtifactNotFoundError",
    "ArtifactStore",
    "InspectionProvider",
    "JsonEncoder",
    "ObjectNotFoundError",
    "ObjectStore",
    "StoreError",
    "TemplateEngine",
]
