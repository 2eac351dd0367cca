# agent_ready/crawler/sitemap.py
"""
Sitemap discovery: obtain the complete page list of a site from its sitemap documents.
"""
from __future__ import annotations

from typing import List, Sequence
from urllib.parse import urljoin

from agent_ready.crawler.errors import FetchError, SitemapParseError
from agent_ready.logger import get_logger
from agent_ready.parser.sitemap_parser import SitemapDocument, parse_sitemap

#: probed in this order, relative to the site origin
SITEMAP_PATHS: Sequence[str] = ("/sitemap.xml", "/sitemap_index.xml")

logger = get_logger("sitemap")


def sitemap_candidates(base_url: str) -> List[str]:
    """Return the absolute sitemap URLs to probe for *base_url*."""
    return [urljoin(base_url, path) for path in SITEMAP_PATHS]


class SitemapResolver:
    """Resolve a site's URL list from ``/sitemap.xml`` or ``/sitemap_index.xml``.

    An index is followed one level deep. An empty result is the "no sitemap"
    signal, never an error.
    """

    def __init__(self, fetcher) -> None:
        self.fetcher = fetcher

    async def resolve(self, base_url: str) -> List[str]:
        for candidate in sitemap_candidates(base_url):
            try:
                urls = await self._collect(candidate)
            except (FetchError, SitemapParseError) as exc:
                logger.debug("Sitemap %s unavailable: %s", candidate, exc)
                continue
            if urls:
                logger.info("Sitemap %s lists %d URLs", candidate, len(urls))
                return urls
            logger.debug("Sitemap %s has no <url> entries", candidate)
        return []

    async def _collect(self, sitemap_url: str) -> List[str]:
        document = await self._load(sitemap_url)
        if not document.is_index:
            return document.urls

        urls: List[str] = []
        for child_url in document.sitemaps:
            try:
                child = await self._load(child_url)
            except (FetchError, SitemapParseError) as exc:
                logger.debug("Skipping child sitemap %s: %s", child_url, exc)
                continue
            urls.extend(child.urls)
        return urls

    async def _load(self, url: str) -> SitemapDocument:
        return parse_sitemap(await self.fetcher.fetch(url))
