from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

TYPE_BAR = "bar"
TYPE_LINE = "line"
TYPE_PIE = "pie"


@dataclass
class Chart:
    """Chart.js configuration: ``{"type": ..., "data": ..., "options": ...}``."""

    type: str
    data: dict[str, Any] = field(default_factory=dict)
    options: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "data": self.data, "options": self.options}

    def to_json(self, indent: int | None = None) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)
