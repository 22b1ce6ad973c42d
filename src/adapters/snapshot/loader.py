"""Snapshot loading (JSON file on disk)."""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import ValidationError

from adapters.snapshot.models import SnapshotFile
from core.interfaces.stores import StoreError


def load_snapshot(path: Path) -> SnapshotFile:
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise StoreError(f"cannot read snapshot {path}: {exc.strerror or exc}") from exc
    try:
        data = json.loads(raw)
        return SnapshotFile.model_validate(data)
    except (json.JSONDecodeError, ValidationError) as exc:
        raise StoreError(f"invalid snapshot {path}: {exc}") from exc
