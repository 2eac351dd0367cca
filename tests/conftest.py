# File: tests/conftest.py
import asyncio
from typing import Awaitable, Callable, Dict, List, Optional, Union

import pytest
import pytest_asyncio
from aiohttp import web

from agent_ready.config import CrawlConfig
from agent_ready.crawler.errors import FetchError

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"


def urlset(*urls: str) -> str:
    """Build a namespaced <urlset> sitemap listing *urls*."""
    entries = "".join(f"<url><loc>{u}</loc></url>" for u in urls)
    return f'<?xml version="1.0" encoding="UTF-8"?><urlset xmlns="{SITEMAP_NS}">{entries}</urlset>'


def sitemap_index(*children: str) -> str:
    """Build a namespaced <sitemapindex> referencing *children*."""
    entries = "".join(f"<sitemap><loc>{c}</loc></sitemap>" for c in children)
    return f'<?xml version="1.0" encoding="UTF-8"?><sitemapindex xmlns="{SITEMAP_NS}">{entries}</sitemapindex>'


class FakeFetcher:
    """
    In-memory stand-in for Fetcher.

    ``pages`` maps absolute URL to body; a missing URL fails like a 404, a
    FetchError value is raised as-is. Tracks request order and the highest
    number of simultaneously running fetches.
    """

    def __init__(self, pages: Dict[str, Union[str, FetchError]], delay: float = 0.0) -> None:
        self.pages = pages
        self.delay = delay
        self.requested: List[str] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def fetch(self, url: str) -> str:
        self.requested.append(url)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delay)
            body = self.pages.get(url)
            if body is None:
                raise FetchError(url, "HTTP 404", status=404)
            if isinstance(body, FetchError):
                raise body
            return body
        finally:
            self.in_flight -= 1


@pytest.fixture()
def fake_fetcher() -> Callable[..., FakeFetcher]:
    """Factory for FakeFetcher instances."""
    return FakeFetcher


@pytest.fixture()
def make_config() -> Callable[..., CrawlConfig]:
    """Factory for CrawlConfig with test-friendly defaults."""

    def _make(base_url: str = "https://e.com", **overrides) -> CrawlConfig:
        return CrawlConfig(base_url=base_url, **overrides)

    return _make


@pytest_asyncio.fixture
async def serve(unused_tcp_port_factory) -> Callable[[web.Application], Awaitable[str]]:
    """Start aiohttp apps on free ports; every started app is cleaned up after the test."""
    runners: List[web.AppRunner] = []

    async def _serve(app: web.Application, port: Optional[int] = None) -> str:
        runner = web.AppRunner(app)
        await runner.setup()
        runners.append(runner)
        port = port or unused_tcp_port_factory()
        site = web.TCPSite(runner, "127.0.0.1", port)
        await site.start()
        return f"http://127.0.0.1:{port}"

    yield _serve
    for runner in runners:
        await runner.cleanup()
