"""Settings shared by every command of one invocation."""

from __future__ import annotations

import typer

from core.config import AppSettings


def current_settings(ctx: typer.Context) -> AppSettings:
    """Settings stored by the root callback, with global options applied.

    Falls back to a fresh `AppSettings()` when a command runs without the
    root callback (e.g. a sub-app invoked on its own).
    """

    obj = ctx.find_root().obj
    return obj if isinstance(obj, AppSettings) else AppSettings()
