"""Shared test fixtures for botnotify."""

from __future__ import annotations

import base64
import json
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from botnotify.models import InvocationConfig
from botnotify.template.github import ContentFetcher

# 2023-11-14T22:13:20.5Z; the fraction is exact in binary floating point
FIXED_NOW = 1700000000.5


class FakeFetcher(ContentFetcher):
    """In-memory repository keyed by (path, ref)."""

    def __init__(self, files: dict[tuple[str, str], str]) -> None:
        self.files = files
        self.calls: list[tuple[str, str]] = []

    async def fetch(self, path: str, ref: str) -> dict[str, Any]:
        self.calls.append((path, ref))
        text = self.files[(path, ref)]
        return {"content": base64.b64encode(text.encode()).decode()}


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW


@pytest.fixture
def fake_fetcher():
    def _create(files: dict[tuple[str, str], Any]) -> FakeFetcher:
        encoded = {
            key: value if isinstance(value, str) else json.dumps(value)
            for key, value in files.items()
        }
        return FakeFetcher(encoded)

    return _create


def make_config(**kwargs: Any) -> InvocationConfig:
    defaults: dict[str, Any] = {
        "app": "dingtalk",
        "webhook": "https://example.test/hook?key=1",
        "template": '{"msg": "hi"}',
    }
    defaults.update(kwargs)
    return InvocationConfig(**defaults)


def mock_async_client(response: MagicMock | None = None, **post_kwargs: Any) -> AsyncMock:
    """Build an AsyncMock usable as ``async with httpx.AsyncClient() as c``."""
    client = AsyncMock()
    if response is not None:
        client.post.return_value = response
        client.get.return_value = response
    for name, value in post_kwargs.items():
        setattr(client.post, name, value)
    client.__aenter__ = AsyncMock(return_value=client)
    client.__aexit__ = AsyncMock(return_value=False)
    return client


def make_response(body: Any = None, status_code: int = 200, text: str | None = None) -> MagicMock:
    """Fake httpx.Response; ``body=None`` with ``text`` simulates non-JSON."""
    resp = MagicMock(status_code=status_code)
    if body is None and text is not None:
        resp.json.side_effect = json.JSONDecodeError("Expecting value", text, 0)
        resp.text = text
    else:
        resp.json.return_value = body
        resp.text = json.dumps(body)
    return resp
