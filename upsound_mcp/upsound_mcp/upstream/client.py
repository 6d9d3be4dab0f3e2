from __future__ import annotations

import asyncio
import logging
from typing import Any

import requests

from upsound_mcp.config.model import ServerConfig

log = logging.getLogger(__name__)


class TransportError(RuntimeError):
    pass


class UpstreamClient:
    """Blocking ``requests`` calls against the catalog API, run off the event loop.

    No retries: every failure surfaces as ``TransportError`` on the first attempt.
    """

    def __init__(self, config: ServerConfig):
        self.config = config

    @property
    def headers(self) -> dict[str, str]:
        return {
            "User-Agent": self.config.user_agent,
            "Accept-Language": self.config.accept_language,
        }

    def _get(self, url: str) -> requests.Response:
        log.debug("GET %s", url)
        try:
            return requests.get(url, headers=self.headers, timeout=self.config.timeout_sec)
        except requests.RequestException as exc:
            raise TransportError(f"request to {url} failed: {exc}") from exc

    def get_text(self, url: str) -> str:
        response = self._get(url)
        if not 200 <= response.status_code < 300:
            raise TransportError(f"HTTP error: {response.status_code}")
        return response.text

    def get_json(self, url: str) -> Any:
        response = self._get(url)
        try:
            return response.json()
        except ValueError as exc:
            raise TransportError(f"response from {url} was not valid JSON (HTTP {response.status_code})") from exc

    async def fetch_text(self, url: str) -> str:
        return await asyncio.to_thread(self.get_text, url)

    async def fetch_json(self, url: str) -> Any:
        return await asyncio.to_thread(self.get_json, url)
