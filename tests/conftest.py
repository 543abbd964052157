# File: tests/conftest.py
from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from typing import Awaitable, Callable, Dict, List, Optional, Tuple

import pytest
import pytest_asyncio
from aiohttp import ClientSession, ClientTimeout, web

from sitemap_check.config import CheckerConfig

SM_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"
MARKDOWN = "text/markdown; charset=utf-8"

Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]


def urlset(*locs: str) -> str:
    """Build a urlset document with one <url><loc> per argument."""
    entries = "".join(f"<url><loc>{loc}</loc><changefreq>daily</changefreq></url>" for loc in locs)
    return f'<?xml version="1.0" encoding="UTF-8"?><urlset xmlns="{SM_NS}">{entries}</urlset>'


def sitemapindex(*locs: str) -> str:
    """Build a sitemapindex document with one <sitemap><loc> per argument."""
    entries = "".join(f"<sitemap><loc>{loc}</loc></sitemap>" for loc in locs)
    return f'<?xml version="1.0" encoding="UTF-8"?><sitemapindex xmlns="{SM_NS}">{entries}</sitemapindex>'


class FakeSite:
    """
    Catch-all aiohttp handler whose routes can be added after the server started.

    Records every request as ``(method, path)`` and tracks the peak number of
    page requests being served at the same time.
    """

    def __init__(self, base: str) -> None:
        self.base = base
        self.routes: Dict[str, Handler] = {}
        self.hits: List[Tuple[str, str]] = []
        self.user_agents: List[Optional[str]] = []
        self.in_flight = 0
        self.peak_in_flight = 0

    def url(self, path: str) -> str:
        return f"{self.base}{path}"

    def xml(self, path: str, body: str, status: int = 200) -> str:
        async def handler(_):
            return web.Response(status=status, text=body, content_type="application/xml")

        self.routes[path] = handler
        return self.url(path)

    def raw(self, path: str, body: bytes, content_type: str = "application/octet-stream") -> str:
        async def handler(_):
            return web.Response(body=body, content_type=content_type)

        self.routes[path] = handler
        return self.url(path)

    def page(self, path: str, content_type: str = MARKDOWN, status: int = 200, delay: float = 0.0) -> str:
        async def handler(_):
            self.in_flight += 1
            self.peak_in_flight = max(self.peak_in_flight, self.in_flight)
            try:
                if delay:
                    await asyncio.sleep(delay)
                return web.Response(status=status, headers={"Content-Type": content_type})
            finally:
                self.in_flight -= 1

        self.routes[path] = handler
        return self.url(path)

    async def handle(self, request: web.Request) -> web.StreamResponse:
        self.hits.append((request.method, request.path))
        self.user_agents.append(request.headers.get("User-Agent"))
        handler = self.routes.get(request.path)
        if handler is None:
            return web.Response(status=404, text="not found")
        return await handler(request)


@pytest_asyncio.fixture
async def fake_site(unused_tcp_port: int) -> AsyncIterator[FakeSite]:
    """Serve a FakeSite on localhost, clean up afterwards."""
    site = FakeSite(f"http://127.0.0.1:{unused_tcp_port}")
    app = web.Application()
    app.router.add_route("*", "/{tail:.*}", site.handle)
    runner = web.AppRunner(app)
    await runner.setup()
    await web.TCPSite(runner, "127.0.0.1", unused_tcp_port).start()
    try:
        yield site
    finally:
        await runner.cleanup()


@pytest_asyncio.fixture
async def session() -> AsyncIterator[ClientSession]:
    async with ClientSession(
        timeout=ClientTimeout(total=2.0),
        headers={"User-Agent": "TestAgent/1.0"},
    ) as s:
        yield s


@pytest.fixture()
def basic_config() -> CheckerConfig:
    """Return a small, fast CheckerConfig for engine tests."""
    return CheckerConfig(user_agent="TestAgent/1.0", batch_size=3, timeout=2.0)
