"""Models for offline inspect snapshots.

Idea:
- Instead of a live engine socket, read a JSON export of containers, images
  and their artifacts, and serve lookups/inspects from it.

Shape:
    {"containers": [{"id", "names", "created", "inspect", "size", "artifacts"}],
     "images": [{"id", "repo_tags", "created", "inspect"}]}
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field, JsonValue


class SnapshotContainer(BaseModel):
    id: str = Field(..., min_length=1)
    names: list[str] = Field(default_factory=list)
    created: datetime | None = None
    inspect: dict[str, JsonValue] = Field(default_factory=dict)
    size: dict[str, JsonValue] = Field(
        default_factory=dict,
        description="Size accounting keys merged into inspect data only with --size.",
    )
    artifacts: dict[str, JsonValue] = Field(default_factory=dict)

    def matches_name(self, name: str) -> bool:
        return any(n.lstrip("/") == name.lstrip("/") for n in self.names)


class SnapshotImage(BaseModel):
    id: str = Field(..., min_length=1)
    repo_tags: list[str] = Field(default_factory=list)
    created: datetime | None = None
    inspect: dict[str, JsonValue] = Field(default_factory=dict)


class SnapshotFile(BaseModel):
    containers: list[SnapshotContainer] = Field(default_factory=list)
    images: list[SnapshotImage] = Field(default_factory=list)
