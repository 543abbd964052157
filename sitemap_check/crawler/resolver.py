# === FILE: sitemap_check/crawler/resolver.py ===
"""Flattens a tree of sitemap indexes into the ordered list of page URLs."""

from __future__ import annotations

from typing import Callable, List, Optional, Protocol, Tuple, Union

from sitemap_check.crawler.models import SitemapDocument
from sitemap_check.exceptions import CycleError
from sitemap_check.logger import get_logger
from sitemap_check.parser.sitemap_parser import parse_sitemap

__all__ = ("TreeResolver", "SitemapObserver")

SitemapObserver = Callable[[str, SitemapDocument], None]


class _Fetcher(Protocol):
    async def fetch(self, url: str) -> Union[str, bytes]: ...


class TreeResolver:
    """
    Depth-first, strictly sequential expansion of sitemap indexes.

    Uses an explicit stack instead of recursion. Each stack frame carries the
    chain of index URLs above it, so a sitemap that lists one of its own
    ancestors raises CycleError. Reaching the same sitemap through two
    separate branches is not a cycle; its URLs then appear twice.
    """

    def __init__(self, fetcher: _Fetcher, on_sitemap: Optional[SitemapObserver] = None) -> None:
        self.fetcher = fetcher
        self.on_sitemap = on_sitemap
        self.logger = get_logger("resolver")

    async def fetch_document(self, url: str) -> SitemapDocument:
        xml = await self.fetcher.fetch(url)
        return parse_sitemap(xml, url)

    async def resolve(self, root_url: str) -> List[str]:
        """Return every page URL reachable from *root_url*, in traversal order."""
        urls: List[str] = []
        stack: List[Tuple[str, Tuple[str, ...]]] = [(root_url, ())]
        documents = 0

        while stack:
            url, ancestors = stack.pop()
            document = await self.fetch_document(url)
            documents += 1
            if self.on_sitemap is not None:
                self.on_sitemap(url, document)

            if not document.is_index:
                urls.extend(document.locations)
                continue

            chain = ancestors + (url,)
            self.logger.info("Sitemap index %s: %d children", url, len(document.locations))
            # reversed so the first child is popped first
            for child in reversed(document.locations):
                if child in chain:
                    raise CycleError(child, chain)
                stack.append((child, chain))

        self.logger.info("Resolved %d URLs from %d sitemaps under %s", len(urls), documents, root_url)
        return urls
