from __future__ import annotations

import asyncio

import pytest

from upsound_mcp.config.model import ServerConfig


class FakeCatalogClient:
    def __init__(self, robots_txt="", json_body=None, robots_error=None, json_error=None, delay=0.0):
        self.robots_txt = robots_txt
        self.json_body = {"results": []} if json_body is None else json_body
        self.robots_error = robots_error
        self.json_error = json_error
        self.delay = delay
        self.text_calls: list[str] = []
        self.json_calls: list[str] = []

    async def fetch_text(self, url: str) -> str:
        self.text_calls.append(url)
        await asyncio.sleep(self.delay)
        if self.robots_error is not None:
            raise self.robots_error
        return self.robots_txt

    async def fetch_json(self, url: str):
        self.json_calls.append(url)
        if self.json_error is not None:
            raise self.json_error
        return self.json_body


@pytest.fixture
def config() -> ServerConfig:
    return ServerConfig()


@pytest.fixture
def fake_client_factory():
    return FakeCatalogClient
