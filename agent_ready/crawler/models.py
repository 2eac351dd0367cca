# agent_ready/crawler/models.py
"""
Data models for the AgentReady crawler.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from agent_ready.crawler.errors import FetchError


@dataclass(frozen=True, slots=True)
class CrawlTarget:
    """Frontier entry: a URL waiting to be dispatched and its link depth."""

    url: str
    depth: int


@dataclass(frozen=True, slots=True)
class CrawlResult:
    """Normalized URL and HTML of a successfully fetched page."""

    url: str
    html: str

    def to_dict(self) -> Dict[str, str]:
        return {"url": self.url, "html": self.html}


@dataclass(frozen=True, slots=True)
class FetchOutcome:
    """Result of fetching one URL: either ``html`` or ``error`` is set."""

    url: str
    html: Optional[str] = None
    error: Optional[FetchError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(slots=True)
class CrawlReport:
    """Everything one crawl produced: pages in completion order plus the failed fetches."""

    pages: List[CrawlResult] = field(default_factory=list)
    failures: List[FetchOutcome] = field(default_factory=list)

    def records(self) -> List[Dict[str, str]]:
        """Return pages as plain ``{url, html}`` dicts for serialization."""
        return [page.to_dict() for page in self.pages]
