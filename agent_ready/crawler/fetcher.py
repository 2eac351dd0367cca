# agent_ready/crawler/fetcher.py
"""
Fetcher module: performs a single bounded HTTP GET with content-type validation and timeout.
"""
from __future__ import annotations

import asyncio
from typing import Optional, Sequence

from aiohttp import ClientError, ClientSession, ClientTimeout

from agent_ready import __version__
from agent_ready.crawler.errors import FetchError

PROJECT_URL = "https://github.com/dylanfeltus/site-to-md"
DEFAULT_USER_AGENT = f"AgentReady/{__version__} (+{PROJECT_URL})"
DEFAULT_TIMEOUT = 15.0

#: substrings of ``Content-Type`` a page response must carry one of
ACCEPTED_CONTENT_TYPES: Sequence[str] = (
    "text/html",
    "text/xml",
    "application/xml",
    "application/xhtml",
)


class Fetcher:
    """Fetches HTML/XML documents over one shared aiohttp session.

    Use as an async context manager. A session passed in by the caller is
    used as-is and left open on exit.
    """

    def __init__(
        self,
        *,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[ClientSession] = None,
    ) -> None:
        self.user_agent = user_agent
        self.timeout = ClientTimeout(total=timeout)
        self.session = session
        self._owns_session = session is None

    async def __aenter__(self) -> Fetcher:
        if self.session is None:
            self.session = ClientSession(
                timeout=self.timeout,
                headers={"User-Agent": self.user_agent},
                raise_for_status=False,
            )
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._owns_session and self.session and not self.session.closed:
            await self.session.close()
            self.session = None

    async def fetch(self, url: str) -> str:
        """
        GET *url* and return the decoded body.

        Raises FetchError on a non-2xx status, a content type that is not
        HTML/XML/XHTML, a timeout or any client/network failure.
        """
        if not self.session:
            raise RuntimeError("Session not initialized")
        try:
            async with self.session.get(
                url,
                headers={"User-Agent": self.user_agent},
                timeout=self.timeout,
                allow_redirects=True,
            ) as resp:
                if not 200 <= resp.status < 300:
                    raise FetchError(url, f"HTTP {resp.status}", status=resp.status)
                ctype = resp.headers.get("Content-Type", "").lower()
                if not any(accepted in ctype for accepted in ACCEPTED_CONTENT_TYPES):
                    raise FetchError(url, f"Not HTML: {ctype or 'no content type'}", status=resp.status)
                return await resp.text(errors="replace")
        except asyncio.TimeoutError as exc:
            raise FetchError(url, f"timed out after {self.timeout.total:g} s") from exc
        except (ClientError, ValueError) as exc:
            raise FetchError(url, str(exc) or type(exc).__name__) from exc
