"""JSON array output.

Why a dedicated encoder:
- The engine CLI always prints a JSON array, even for a single object.
- Keeps indentation in one place so CLI and library callers agree.
"""

from __future__ import annotations

import json
from typing import Any, Sequence


class JsonArrayEncoder:
    """Encodes a batch of records as one UTF-8 JSON array."""

    def __init__(self, indent: int | None = 4) -> None:
        self.indent = indent if indent else None

    def encode(self, values: Sequence[Any]) -> str:
        return json.dumps(list(values), ensure_ascii=False, indent=self.indent)
