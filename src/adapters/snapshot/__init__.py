"""Offline snapshot store (JSON export of containers and images)."""

from adapters.snapshot.loader import load_snapshot
from adapters.snapshot.models import SnapshotContainer, SnapshotFile, SnapshotImage
from adapters.snapshot.store import SnapshotStore

__all__ = [
    "SnapshotContainer",
    "SnapshotFile",
    "SnapshotImage",
    "SnapshotStore",
    "load_snapshot",
]
