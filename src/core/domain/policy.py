"""Batch error policies.

This module lives in the domain layer so both the settings and the batch
service can share one source of truth without importing each other.
"""

from __future__ import annotations

from enum import Enum


class BatchPolicy(str, Enum):
    """How a batch turns per-identifier outcomes into records and one error."""

    SHARED_ERROR_SLOT = "shared-error-slot"
    COLLECT_ALL = "collect-all"

    @classmethod
    def default(cls) -> "BatchPolicy":
        """The policy the engine CLI has always applied."""

        return cls.SHARED_ERROR_SLOT

    def label(self) -> str:
        """Human readable label for diagnostics."""

        if self is BatchPolicy.COLLECT_ALL:
            return "collect all successes, report all failures"
        return "last error wins, later records dropped"
