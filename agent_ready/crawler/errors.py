# agent_ready/crawler/errors.py
"""
Exception hierarchy of the crawler core.

None of these escape :meth:`AsyncCrawler.crawl`: the scheduler and the
sitemap resolver recover from them locally.
"""
from __future__ import annotations

from typing import Optional


class CrawlError(Exception):
    """Base class for crawler errors."""


class FetchError(CrawlError):
    """A single GET failed: bad status, wrong content type, timeout or network error."""

    def __init__(self, url: str, reason: str, status: Optional[int] = None) -> None:
        super().__init__(f"{reason} for {url}")
        self.url = url
        self.reason = reason
        self.status = status


class SitemapParseError(CrawlError):
    """A sitemap document could not be parsed as XML."""
