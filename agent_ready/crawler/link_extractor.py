# agent_ready/crawler/link_extractor.py
"""
Link extraction and URL normalization utilities for AgentReady.
"""
from __future__ import annotations

import re
from typing import Dict, List, Optional, Tuple
from urllib.parse import SplitResult, urljoin, urlsplit, urlunsplit

from bs4 import BeautifulSoup
from bs4.element import Tag

from agent_ready.logger import get_logger

#: paths ending in one of these are assets, not documents
ASSET_EXTENSIONS: Tuple[str, ...] = (
    "jpg", "jpeg", "png", "gif", "svg", "webp",
    "pdf", "zip",
    "css", "js",
    "ico",
    "woff", "woff2", "ttf", "eot",
    "mp3", "mp4", "avi",
)
_ASSET_RE = re.compile(r"\.(?:%s)$" % "|".join(ASSET_EXTENSIONS), re.IGNORECASE)
_DEFAULT_PORTS: Dict[str, int] = {"http": 80, "https": 443}

logger = get_logger("links")

_Origin = Tuple[str, str, Optional[int]]


def _origin(parts: SplitResult) -> _Origin:
    """Scheme, host and effective port; raises ValueError on a malformed port."""
    scheme = parts.scheme.lower()
    return scheme, (parts.hostname or "").lower(), parts.port or _DEFAULT_PORTS.get(scheme)


def is_asset(path: str) -> bool:
    """Return True if *path* ends in a known non-document extension."""
    return _ASSET_RE.search(path) is not None


def extract_links(html: str, page_url: str) -> List[str]:
    """
    Extract same-origin document links from *html*.

    Hrefs are resolved against *page_url*; cross-origin links, assets and
    unparsable hrefs are dropped, fragments stripped. The result is distinct,
    in first-seen order.
    """
    soup = BeautifulSoup(html, "html.parser")
    base = _origin(urlsplit(page_url))
    links: Dict[str, None] = {}
    for tag in soup.find_all("a", href=True):
        if not isinstance(tag, Tag):
            continue
        href_val = tag.get("href")
        if not isinstance(href_val, str):
            continue
        try:
            parts = urlsplit(urljoin(page_url, href_val.strip()))
            if _origin(parts) != base:
                continue
        except ValueError as exc:
            logger.debug("Discarding malformed link %r on %s: %s", href_val, page_url, exc)
            continue
        if is_asset(parts.path):
            continue
        links.setdefault(urlunsplit(parts._replace(fragment="")), None)
    return list(links)


def normalize_url(url: str) -> str:
    """
    Canonical identity of *url* for deduplication.

    Lowercases scheme and host, drops the fragment and trailing slashes of
    non-root paths; an empty path becomes ``/``. Idempotent. Unparsable input
    is returned unchanged.
    """
    try:
        parts = urlsplit(url)
    except ValueError:
        return url
    path = parts.path
    if parts.netloc:
        path = path.rstrip("/") or "/"
    return urlunsplit((parts.scheme.lower(), parts.netloc.lower(), path, parts.query, ""))
