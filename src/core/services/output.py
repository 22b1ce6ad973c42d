"""Output selection: JSON array or per-record template."""

from __future__ import annotations

from typing import Sequence

from core.domain.models import JSON_FORMAT_MARKER, InspectionRecord
from core.interfaces.rendering import JsonEncoder, TemplateEngine


def wants_json(fmt: str) -> bool:
    """Only an empty format or exactly `json` means the default JSON array."""

    return fmt == "" or fmt == JSON_FORMAT_MARKER


def render_output(
    records: Sequence[InspectionRecord],
    fmt: str,
    *,
    templates: TemplateEngine,
    encoder: JsonEncoder,
) -> str:
    """Render the whole batch; a template error aborts the entire call."""

    if wants_json(fmt):
        return encoder.encode(list(records)) + "\n"
    return "".join(templates.render(fmt, record) + "\n" for record in records)
