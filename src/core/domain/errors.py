"""Core errors.

Why a hierarchy:
- The CLI catches a single base class and prints one descriptive message.
- Each stage (request, resolution, fetch, render) gets its own type so tests
  and callers can tell them apart without parsing strings.
"""

from __future__ import annotations

from typing import Sequence


class InspectError(Exception):
    """Base class for every failure surfaced by the inspect pipeline."""

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause

    def __str__(self) -> str:
        if self.cause is not None:
            return f"{self.message}: {self.cause}"
        return self.message


class InvalidRequestError(InspectError):
    """The request itself is malformed (names vs --latest, unknown type)."""


class ResolutionFailedError(InspectError):
    """An identifier matched none of the requested object kinds."""

    def __init__(
        self,
        message: str,
        *,
        identifier: str,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message, cause)
        self.identifier = identifier


class FetchFailedError(InspectError):
    """A resolved object could not be inspected.

    `stage` is one of "inspect", "artifact" or "merge".
    """

    def __init__(
        self,
        message: str,
        *,
        identifier: str,
        stage: str,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message, cause)
        self.identifier = identifier
        self.stage = stage


class RenderFailedError(InspectError):
    """The output template could not be parsed or executed."""


class InspectBatchError(InspectError):
    """Every failure of a batch, in input order."""

    def __init__(self, failures: Sequence[InspectError]) -> None:
        self.failures = list(failures)
        lines = [str(f) for f in self.failures]
        super().__init__("; ".join(lines) if lines else "batch failed")
