"""Contracts for the output engines."""

from __future__ import annotations

from typing import Any, Protocol, Sequence, runtime_checkable


@runtime_checkable
class TemplateEngine(Protocol):
    def render(self, template: str, value: Any) -> str:
        """Render `template` against one record.

        Raises `RenderFailedError` on parse or execution errors.
        """

        ...


@runtime_checkable
class JsonEncoder(Protocol):
    def encode(self, values: Sequence[Any]) -> str:
        ...
