# File: tests/conftest.py
from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

import pytest

from path_scout.config import ScanSettings


class FakeResponse:
    """Stand-in for FetchResponse with a fixed status and body."""

    def __init__(
        self,
        url: str,
        status: int = 200,
        body: bytes = b"",
        content_type: str = "text/plain",
        redirect: Optional[str] = None,
        content_length: Optional[int] = None,
    ) -> None:
        self.url = url
        self.status = status
        self.body = body
        self.content_type = content_type
        self.redirect = redirect
        self.content_length = len(body) if content_length is None else content_length
        self.released = False

    async def read(self) -> bytes:
        return self.body

    def release(self) -> None:
        self.released = True

    async def __aenter__(self) -> "FakeResponse":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.release()


Route = Union[int, Dict[str, Any], BaseException]


class FakeClient:
    """Answers from a route table: a status code, FakeResponse kwargs, or an exception to raise."""

    def __init__(self, routes: Dict[str, Route], default: int = 404) -> None:
        self.routes = routes
        self.default = default
        self.requests: List[str] = []
        self.responses: List[FakeResponse] = []
        self.closed = False

    async def request_url(self, url: str) -> FakeResponse:
        self.requests.append(url)
        route = self.routes.get(url, self.default)
        if isinstance(route, BaseException):
            raise route
        kwargs = {"status": route} if isinstance(route, int) else dict(route)
        resp = FakeResponse(url, **kwargs)
        self.responses.append(resp)
        return resp

    async def close(self) -> None:
        self.closed = True


class FakeFactory:
    def __init__(self, routes: Optional[Dict[str, Route]] = None, default: int = 404) -> None:
        self.routes = routes or {}
        self.default = default
        self.clients: List[FakeClient] = []

    def get(self) -> FakeClient:
        client = FakeClient(self.routes, self.default)
        self.clients.append(client)
        return client

    @property
    def requests(self) -> List[str]:
        return [url for client in self.clients for url in client.requests]

    @property
    def responses(self) -> List[FakeResponse]:
        return [resp for client in self.clients for resp in client.responses]

    async def close_all(self) -> None:
        for client in self.clients:
            await client.close()


class Recorder:
    """Collects adder/done calls made by a worker."""

    def __init__(self) -> None:
        self.added: List[str] = []
        self.done_calls: List[int] = []

    def add(self, *urls: str) -> None:
        self.added.extend(urls)

    def done(self, n: int) -> None:
        self.done_calls.append(n)


def drain(rchan: asyncio.Queue) -> list:
    """Everything currently in the results queue."""
    items = []
    while not rchan.empty():
        items.append(rchan.get_nowait())
    return items


@pytest.fixture()
def make_settings() -> Callable[..., ScanSettings]:
    """Factory for ScanSettings with test-friendly defaults."""

    def _make(**kwargs: Any) -> ScanSettings:
        data: Dict[str, Any] = {
            "base_url": "http://x/",
            "workers": 1,
            "extensions": [],
            "mangle": True,
            "spider_codes": [200],
            "parse_html": False,
            "timeout": 2.0,
            "user_agent": "TestAgent/1.0",
        }
        data.update(kwargs)
        return ScanSettings(**data)

    return _make


@pytest.fixture()
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture()
def wordlist_file(tmp_path) -> Path:
    """Temporary wordlist with two entries, a blank line and a comment."""
    path = tmp_path / "words.txt"
    path.write_text("admin\n\n# comment\n/backup\n", encoding="utf-8")
    return path
