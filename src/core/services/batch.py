"""Batch driving for multi-identifier inspections.

The loop produces one `InspectionOutcome` per identifier, strictly in input
order. Turning those outcomes into the records to render and the error to
report is a separate, named reduction chosen by `BatchPolicy`.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Sequence

from core.domain.errors import InspectBatchError, InspectError
from core.domain.models import BatchResult, InspectionOutcome, InspectKind
from core.domain.policy import BatchPolicy
from core.services.fetcher import MetadataFetcher
from core.services.resolver import IdentifierResolver

logger = logging.getLogger(__name__)

BatchReducer = Callable[[Sequence[InspectionOutcome]], BatchResult]


def reduce_shared_error_slot(outcomes: Sequence[InspectionOutcome]) -> BatchResult:
    """One error slot for the whole batch, never cleared.

    A failure overwrites the slot. A success is kept only while the slot is
    still empty, so every record after the first failure is dropped and the
    reported error is the last failure seen.
    """

    result = BatchResult(outcomes=list(outcomes))
    for outcome in outcomes:
        if outcome.error is not None:
            result.error = outcome.error
            continue
        if result.error is None:
            assert outcome.record is not None
            result.records.append(outcome.record)
        else:
            logger.warning(
                "dropping inspect data for %r after an earlier failure in the batch",
                outcome.identifier,
            )
    return result


def reduce_collect_all(outcomes: Sequence[InspectionOutcome]) -> BatchResult:
    """Keep every success and report every failure together."""

    result = BatchResult(outcomes=list(outcomes))
    failures: list[InspectError] = []
    for outcome in outcomes:
        if outcome.error is not None:
            failures.append(outcome.error)
        else:
            assert outcome.record is not None
            result.records.append(outcome.record)
    if len(failures) == 1:
        result.error = failures[0]
    elif failures:
        result.error = InspectBatchError(failures)
    return result


REDUCERS: dict[BatchPolicy, BatchReducer] = {
    BatchPolicy.SHARED_ERROR_SLOT: reduce_shared_error_slot,
    BatchPolicy.COLLECT_ALL: reduce_collect_all,
}


class BatchInspector:
    """Resolves and fetches each identifier, then applies the batch policy."""

    def __init__(
        self,
        resolver: IdentifierResolver,
        fetcher: MetadataFetcher,
        policy: BatchPolicy = BatchPolicy.SHARED_ERROR_SLOT,
    ) -> None:
        self._resolver = resolver
        self._fetcher = fetcher
        self.policy = policy

    def inspect_one(
        self,
        identifier: str,
        kind: InspectKind,
        include_size: bool = False,
        cancel: threading.Event | None = None,
    ) -> InspectionOutcome:
        try:
            entity = self._resolver.resolve(identifier, kind)
            record = self._fetcher.fetch(entity, include_size=include_size, cancel=cancel)
        except InspectError as exc:
            logger.debug("inspect failed for %r: %s", identifier, exc)
            return InspectionOutcome(identifier=identifier, error=exc)
        return InspectionOutcome(identifier=identifier, record=record)

    def collect(
        self,
        identifiers: Sequence[str],
        kind: InspectKind,
        include_size: bool = False,
        cancel: threading.Event | None = None,
    ) -> list[InspectionOutcome]:
        return [
            self.inspect_one(identifier, kind, include_size=include_size, cancel=cancel)
            for identifier in identifiers
        ]

    def inspect(
        self,
        identifiers: Sequence[str],
        kind: InspectKind,
        include_size: bool = False,
        cancel: threading.Event | None = None,
    ) -> BatchResult:
        outcomes = self.collect(identifiers, kind, include_size=include_size, cancel=cancel)
        return REDUCERS[self.policy](outcomes)
