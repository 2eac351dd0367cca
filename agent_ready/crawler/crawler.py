# === FILE: agent_ready/crawler/crawler.py ===
from __future__ import annotations

import asyncio
import time
from collections import deque
from typing import Deque, List, Optional, Set
from urllib.parse import urlsplit

from agent_ready.config import CrawlConfig
from agent_ready.crawler.errors import FetchError
from agent_ready.crawler.fetcher import Fetcher
from agent_ready.crawler.link_extractor import extract_links, normalize_url
from agent_ready.crawler.models import CrawlReport, CrawlResult, CrawlTarget, FetchOutcome
from agent_ready.crawler.path_filter import PathFilter
from agent_ready.crawler.sitemap import SitemapResolver
from agent_ready.logger import get_logger

__all__ = ("AsyncCrawler",)


class AsyncCrawler:
    """Batch-dispatching crawler: sitemap seeding or same-origin link following.

    The frontier is drained in batches of ``config.concurrency`` entries; a
    batch is awaited as a whole before the next one starts, so no more than
    ``concurrency`` fetches are ever in flight. Visited URLs and results
    belong to this instance and are reset by every :meth:`crawl` call.
    """

    def __init__(self, config: CrawlConfig, fetcher: Optional[Fetcher] = None) -> None:
        self.config = config
        self.base_url = str(config.base_url)
        self.path_filter = PathFilter(config.include, config.exclude)
        self.fetcher = fetcher or Fetcher(user_agent=config.user_agent, timeout=config.timeout)
        self._owns_fetcher = fetcher is None
        self.visited: Set[str] = set()
        self.results: List[CrawlResult] = []
        self.failures: List[FetchOutcome] = []
        self.follow_links = True
        self.logger = get_logger("crawler")

    async def __aenter__(self) -> AsyncCrawler:
        if self._owns_fetcher:
            await self.fetcher.__aenter__()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._owns_fetcher:
            await self.fetcher.__aexit__(exc_type, exc, tb)

    @property
    def report(self) -> CrawlReport:
        return CrawlReport(pages=list(self.results), failures=list(self.failures))

    async def crawl(self) -> List[CrawlResult]:
        self.logger.info("Crawl started: %s", self.base_url)
        start = time.monotonic()
        self.visited = set()
        self.results = []
        self.failures = []

        frontier = await self._seed()
        while frontier:
            batch = [frontier.popleft() for _ in range(min(self.config.concurrency, len(frontier)))]
            await asyncio.gather(*(self._process(target, frontier) for target in batch))

        duration = time.monotonic() - start
        self.logger.info(
            "Crawl finished: %d pages, %d failed, %d visited in %.2f s",
            len(self.results), len(self.failures), len(self.visited), duration,
        )
        return list(self.results)

    async def _seed(self) -> Deque[CrawlTarget]:
        seeds: List[str] = []
        if self.config.sitemap:
            seeds = await SitemapResolver(self.fetcher).resolve(self.base_url)
        if seeds:
            self.follow_links = False
            self.logger.info("Using sitemap: %d URLs, link discovery disabled", len(seeds))
            return deque(CrawlTarget(url, 0) for url in seeds)
        self.follow_links = True
        self.logger.info("No sitemap, following links up to depth %d", self.config.max_depth)
        return deque([CrawlTarget(self.base_url, 0)])

    async def _process(self, target: CrawlTarget, frontier: Deque[CrawlTarget]) -> None:
        url = normalize_url(target.url)
        # check-and-mark must stay before the first await
        if url in self.visited:
            return
        self.visited.add(url)

        path = urlsplit(url).path or "/"
        if not self.path_filter.allows(path):
            self.logger.debug("Filtered out: %s", url)
            return

        outcome = await self._fetch(url)
        if not outcome.ok:
            self.logger.warning("Skipping %s: %s", url, outcome.error.reason)
            self.failures.append(outcome)
            return

        self.results.append(CrawlResult(url, outcome.html))
        if self.follow_links and target.depth < self.config.max_depth:
            for link in extract_links(outcome.html, url):
                if normalize_url(link) not in self.visited:
                    frontier.append(CrawlTarget(link, target.depth + 1))

    async def _fetch(self, url: str) -> FetchOutcome:
        try:
            html = await self.fetcher.fetch(url)
        except FetchError as exc:
            return FetchOutcome(url, error=exc)
        return FetchOutcome(url, html=html)
