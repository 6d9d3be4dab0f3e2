from __future__ import annotations

from dataclasses import dataclass, field
from urllib.parse import urlencode, urlsplit


@dataclass(frozen=True, slots=True)
class ParameterSpec:
    type: str
    description: str
    required: bool = False


@dataclass(frozen=True, slots=True)
class Operation:
    name: str
    description: str
    parameters: tuple[tuple[str, ParameterSpec], ...] = ()

    def input_schema(self) -> dict:
        return {
            "type": "object",
            "properties": {
                name: {"type": spec.type, "description": spec.description} for name, spec in self.parameters
            },
            "required": [name for name, spec in self.parameters if spec.required],
        }

    def to_dict(self) -> dict:
        return {"name": self.name, "description": self.description, "inputSchema": self.input_schema()}


@dataclass(slots=True)
class UpstreamRequest:
    path: str
    query: list[tuple[str, str]] = field(default_factory=list)

    @property
    def path_and_query(self) -> str:
        if not self.query:
            return self.path
        return f"{self.path}?{urlencode(self.query)}"

    def url(self, base_url: str) -> str:
        return base_url.rstrip("/") + self.path_and_query

    def policy_path(self, base_url: str) -> str:
        """Path and query of the full URL, i.e. including any base path prefix."""
        parts = urlsplit(self.url(base_url))
        return f"{parts.path or '/'}?{parts.query}" if parts.query else parts.path or "/"
