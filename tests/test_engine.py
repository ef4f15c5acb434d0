# File: tests/test_engine.py
"""End-to-end scans against a local aiohttp server."""
from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator

import pytest
import pytest_asyncio
from aiohttp import web
from path_scout.config import ScanSettings
from path_scout.engine import Engine, start_scan


async def _serve_app(app: web.Application, port: int) -> AsyncIterator[str]:
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, "localhost", port)
    await site.start()
    try:
        yield f"http://localhost:{port}"
    finally:
        await runner.cleanup()


def build_app() -> web.Application:
    app = web.Application()

    async def root(_):
        return web.Response(
            text='<a href="/admin">Admin</a><a href="/old">Old</a><a href="http://other.example/x">X</a>',
            content_type="text/html",
        )

    async def text(_):
        return web.Response(text="secret")

    async def old(_):
        raise web.HTTPFound(location="/new/")

    app.router.add_get("/", root)
    app.router.add_get("/admin", text)
    app.router.add_get("/admin.bak", text)
    app.router.add_get("/old", old)
    app.router.add_get("/new/", text)
    app.router.add_get("/hidden/", text)
    return app


@pytest_asyncio.fixture
async def site(unused_tcp_port: int) -> AsyncIterator[str]:
    async for url in _serve_app(build_app(), unused_tcp_port):
        yield url


def settings_for(base: str, **kwargs) -> ScanSettings:
    data = {
        "base_url": base,
        "workers": 3,
        "extensions": ["php"],
        "spider_codes": [200],
        "timeout": 2.0,
        "user_agent": "TestAgent/1.0",
    }
    data.update(kwargs)
    return ScanSettings(**data)


@pytest.mark.asyncio()
async def test_scan_follows_links_redirects_and_mangles(site):
    results = await asyncio.wait_for(start_scan(settings_for(site)), timeout=15)
    by_url = {r.url: r for r in results}

    assert by_url[f"{site}/"].code == 200
    assert by_url[f"{site}/admin"].code == 200
    assert by_url[f"{site}/admin.bak"].code == 200
    assert by_url[f"{site}/admin.php"].code == 404
    assert by_url[f"{site}/old"].code == 302
    assert by_url[f"{site}/old"].redir == f"{site}/new/"
    assert by_url[f"{site}/old"].error is None
    assert by_url[f"{site}/new/"].code == 200
    assert not any("other.example" in url for url in by_url)
    # the root and /new/ are referred back but deduplicated
    assert [r.url for r in results].count(f"{site}/") == 1


@pytest.mark.asyncio()
async def test_scan_without_html_parsing(site):
    results = await asyncio.wait_for(start_scan(settings_for(site, parse_html=False)), timeout=15)
    assert [r.url for r in results] == [f"{site}/"]


@pytest.mark.asyncio()
async def test_scan_with_wordlist(site, tmp_path):
    words = tmp_path / "words.txt"
    words.write_text("hidden/\nnothing\n", encoding="utf-8")
    cfg = settings_for(site, parse_html=False, wordlist=str(words), mangle=False, extensions=[])

    results = await asyncio.wait_for(start_scan(cfg), timeout=15)
    codes = {r.url: r.code for r in results}

    assert codes[f"{site}/hidden/"] == 200
    assert codes[f"{site}/nothing"] == 404
    assert codes[f"{site}/hidden/nothing"] == 404


@pytest.mark.asyncio()
async def test_unreachable_host_is_reported_not_raised(unused_tcp_port):
    cfg = settings_for(f"http://localhost:{unused_tcp_port}", workers=1)
    results = await asyncio.wait_for(start_scan(cfg), timeout=15)
    assert len(results) == 1
    assert results[0].error is not None
    assert results[0].code is None


def test_engine_facade_builds_report(monkeypatch):
    from path_scout import engine as engine_module
    from path_scout.crawler.models import Result

    async def fake_scan(cfg):
        return [
            Result(url="http://x/", code=200, length=10),
            Result(url="http://x/old", code=301, redir="http://x/new"),
            Result(url="http://x/gone", code=404),
        ]

    monkeypatch.setattr(engine_module, "start_scan", fake_scan)
    report = Engine(ScanSettings(base_url="http://x/")).start_scan()

    assert report.total == 3
    assert report.status_counts == {"200": 1, "301": 1, "404": 1}
    assert [r["url"] for r in report.found] == ["http://x/"]
    assert [r["url"] for r in report.redirects] == ["http://x/old"]


@pytest.mark.asyncio()
async def test_failing_worker_waits_for_the_rest(monkeypatch, tmp_path):
    from path_scout import engine as engine_module
    from path_scout.crawler.worker import Worker

    words = tmp_path / "words.txt"
    words.write_text("slow\nboom\n", encoding="utf-8")
    cfg = settings_for("http://scan.test/", wordlist=str(words), extensions=[], parse_html=False)

    started = []
    real_start_workers = engine_module.start_workers

    def spy_start_workers(*args, **kwargs):
        workers = real_start_workers(*args, **kwargs)
        started.extend(workers)
        return workers

    async def fake_try_url(self, task):
        if task.endswith("/boom"):
            raise RuntimeError("boom")
        await asyncio.sleep(0.3)
        return False

    monkeypatch.setattr(engine_module, "start_workers", spy_start_workers)
    monkeypatch.setattr(Worker, "try_url", fake_try_url)

    with pytest.raises(RuntimeError):
        await asyncio.wait_for(start_scan(cfg), timeout=5)

    assert len(started) == 3
    assert all(w.stopped for w in started)
