from __future__ import annotations

import asyncio
import logging
from typing import Protocol

from .evaluate import Decision, evaluate_robots
from .load import parse_robots
from .model import RobotsPolicy

log = logging.getLogger(__name__)

NOT_LOADED = "not_loaded"
LOADED = "loaded"
LOADED_EMPTY = "loaded_empty"


class TextFetcher(Protocol):
    async def fetch_text(self, url: str) -> str: ...


class RobotsPolicyCache:
    """Process-wide robots.txt cache.

    The document is fetched at most once. Concurrent ``ensure_loaded`` callers
    share the same in-flight task. A failed fetch leaves the cache loaded but
    empty, which allows every path.
    """

    def __init__(self, client: TextFetcher, robots_url: str, enforcing: bool = True):
        self.client = client
        self.robots_url = robots_url
        self.enforcing = enforcing
        self._text: str | None = None
        self._policy: RobotsPolicy | None = None
        self._load_task: asyncio.Task[None] | None = None

    @property
    def state(self) -> str:
        if self._text is None:
            return NOT_LOADED
        return LOADED if self._text.strip() else LOADED_EMPTY

    @property
    def text(self) -> str:
        return self._text or ""

    async def ensure_loaded(self) -> None:
        if not self.enforcing:
            return
        if self._load_task is None:
            self._load_task = asyncio.ensure_future(self._load())
        await asyncio.shield(self._load_task)

    async def _load(self) -> None:
        try:
            text = await self.client.fetch_text(self.robots_url)
        except Exception as exc:
            log.warning("Error fetching robots.txt from %s, treating as allow-all: %s", self.robots_url, exc)
            text = ""
        self._text = text
        self._policy = parse_robots(text) if text.strip() else None
        log.info("robots.txt %s (%d bytes)", self.state, len(text))

    def evaluate(self, path: str, agent_token: str) -> Decision:
        if self._policy is None:
            return Decision(True, "no robots.txt rules loaded", "robots_default_allow")
        return evaluate_robots(self._policy, path, agent_token)

    def is_allowed(self, path: str, agent_token: str) -> bool:
        return self.evaluate(path, agent_token).allowed
