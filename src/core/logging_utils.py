"""Centralised logging configuration helpers."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

PathLike = Union[str, Path]

DEFAULT_FORMAT = "[%(levelname)s] %(name)s: %(message)s"


def resolve_level(level: int | str) -> int:
    """Accept `logging.DEBUG` or "debug"; unknown names fall back to WARNING."""

    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.strip().upper())
    return value if isinstance(value, int) else logging.WARNING


def setup_logging(
    *,
    level: int | str = logging.WARNING,
    log_file: PathLike | None = None,
    fmt: str = DEFAULT_FORMAT,
    stream: bool = True,
    force: bool = True,
) -> None:
    """Configure root logging with consistent handlers.

    Args:
        level: Logging level to apply.
        log_file: Optional file path for log output. File is truncated on setup.
        fmt: Log message format string.
        stream: Whether to emit logs to stderr via ``StreamHandler``.
        force: Whether to override existing logging configuration.
    """
    handlers: list[logging.Handler] = []
    if stream:
        handlers.append(logging.StreamHandler())
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, mode="w", encoding="utf-8"))

    logging.basicConfig(
        level=resolve_level(level),
        format=fmt,
        handlers=handlers or None,
        force=force,
    )
