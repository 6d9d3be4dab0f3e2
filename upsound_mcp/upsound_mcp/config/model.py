from __future__ import annotations

from dataclasses import dataclass

DEFAULT_BASE_URL = "https://api.upsound.com/api"
DEFAULT_USER_AGENT = "ModelContextProtocol/1.0 (Autonomous; +https://github.com/modelcontextprotocol/servers)"
DEFAULT_ACCEPT_LANGUAGE = "en-US,en;q=0.9"


@dataclass(slots=True)
class ServerConfig:
    base_url: str = DEFAULT_BASE_URL
    user_agent: str = DEFAULT_USER_AGENT
    accept_language: str = DEFAULT_ACCEPT_LANGUAGE
    timeout_sec: float = 20.0
    respect_robots_txt: bool = True
    audit_dir: str = ""
    log_level: str = "INFO"

    @property
    def robots_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/robots.txt"
