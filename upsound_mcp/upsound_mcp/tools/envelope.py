from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any


@dataclass(slots=True)
class ResultEnvelope:
    is_error: bool
    payload: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def ok(cls, payload: dict[str, Any]) -> "ResultEnvelope":
        return cls(False, payload)

    @classmethod
    def error(cls, payload: dict[str, Any]) -> "ResultEnvelope":
        return cls(True, payload)

    @property
    def text(self) -> str:
        return json.dumps(self.payload, indent=2, ensure_ascii=False)

    def to_dict(self) -> dict[str, Any]:
        return {"content": [{"type": "text", "text": self.text}], "isError": self.is_error}
