"""Core configuration.

Why here:
- Centralises environment variables (pydantic-settings) without leaking into
  the CLI.
- Lets the adapters (engine REST, artifacts, snapshot) read configuration
  consistently.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.policy import BatchPolicy


def get_user_config_dir() -> Path:
    """Per-user configuration directory (cross-platform, no dependencies)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "podspect"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "podspect"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "podspect"
    return Path.home() / ".config" / "podspect"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str], env_path: Path | None = None) -> Path:
    """Write/update variables in the user's global .env."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# podspect user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Central application settings.

    Why pydantic-settings:
    - Typed, validated env vars at the edge without leaking into the Core.
    - A single configuration contract for the CLI and the adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="PODSPECT_",
        extra="ignore",
        case_sensitive=False,
        # Project first (dev), then the per-user global config.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    engine_url: str = Field(
        default="unix:///run/podman/podman.sock",
        min_length=1,
        description="Engine REST endpoint: unix:///path/to.sock or http(s)://host:port.",
    )
    engine_api_prefix: str = Field(
        default="/v1.40",
        description="Versioned path prefix of the Docker-compatible API.",
    )
    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout per engine request (seconds).",
    )
    artifacts_dir: Path = Field(
        default=Path("/var/lib/containers/storage/overlay-containers"),
        description="Root holding <container id>/userdata/artifacts/<key>.",
    )
    snapshot_path: Path | None = Field(
        default=None,
        description="Inspect an offline JSON snapshot instead of a live engine.",
    )
    allow_missing_artifact: bool = Field(
        default=False,
        description="Inspect containers without a create-config artifact instead of failing.",
    )
    batch_policy: BatchPolicy = Field(
        default=BatchPolicy.SHARED_ERROR_SLOT,
        description="How failures in a multi-identifier batch are aggregated.",
    )
    json_indent: int = Field(
        default=4,
        ge=0,
        le=16,
        description="Indentation of the JSON array output.",
    )
    log_level: str = Field(
        default="WARNING",
        description="Root logging level (DEBUG, INFO, WARNING, ERROR).",
    )
