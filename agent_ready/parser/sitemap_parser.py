# File: agent_ready/parser/sitemap_parser.py
"""agent_ready.parser.sitemap_parser: parsing of sitemap.xml / sitemap index documents."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Union

from lxml import etree

from agent_ready.crawler.errors import SitemapParseError

__all__ = ("SitemapDocument", "parse_sitemap")

_XML_DECLARATION = re.compile(r"^\s*<\?xml[^>]*\?>")


@dataclass(slots=True)
class SitemapDocument:
    """Locations found in one sitemap document, in document order.

    ``sitemaps`` holds ``<sitemap><loc>`` entries (child sitemaps of an index),
    ``urls`` holds ``<url><loc>`` entries (pages).
    """

    sitemaps: List[str] = field(default_factory=list)
    urls: List[str] = field(default_factory=list)

    @property
    def is_index(self) -> bool:
        return bool(self.sitemaps)


def _locs(root: etree._Element, parent: str) -> List[str]:
    locs = root.iterfind(f".//{{*}}{parent}/{{*}}loc")
    return [loc.text.strip() for loc in locs if loc.text and loc.text.strip()]


def parse_sitemap(xml_content: Union[str, bytes]) -> SitemapDocument:
    """Parse sitemap XML and return its child-sitemap and page locations.

    Both namespaced (``http://www.sitemaps.org/schemas/sitemap/0.9``) and
    un-namespaced documents are accepted. Raw bytes are decoded by lxml using
    the document's own encoding declaration; for decoded text the declaration
    is dropped.

    Raises:
        SitemapParseError: the content is not XML at all.

    Пример:
    ```python
    from agent_ready.parser.sitemap_parser import parse_sitemap

    doc = parse_sitemap(xml)
    pages = doc.urls if not doc.is_index else []
    ```
    """
    if isinstance(xml_content, str):
        xml_content = _XML_DECLARATION.sub("", xml_content.lstrip("\ufeff"), count=1)
    parser = etree.XMLParser(ns_clean=True, recover=True, resolve_entities=False, no_network=True)
    try:
        root = etree.fromstring(xml_content, parser=parser)
    except (etree.XMLSyntaxError, ValueError) as exc:
        raise SitemapParseError(f"invalid sitemap XML: {exc}") from exc
    if root is None:
        raise SitemapParseError("empty or unparsable sitemap document")
    return SitemapDocument(sitemaps=_locs(root, "sitemap"), urls=_locs(root, "url"))
