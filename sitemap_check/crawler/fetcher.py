# sitemap_check/crawler/fetcher.py
"""
Fetcher module: downloads sitemap documents over a shared aiohttp session.
"""
from __future__ import annotations

import asyncio
import gzip

from aiohttp import ClientError, ClientSession

from sitemap_check.exceptions import FetchError
from sitemap_check.logger import get_logger

_GZIP_MAGIC = b"\x1f\x8b"


class SitemapFetcher:
    """Fetches sitemap XML; any failure is fatal and raised as FetchError."""

    def __init__(self, session: ClientSession) -> None:
        self.session = session
        self.logger = get_logger("fetcher")

    async def fetch(self, url: str) -> bytes:
        """
        GET the sitemap at *url* and return its raw body.

        Bytes are returned undecoded so the parser can honour the
        encoding declared in the XML prolog.

        Gzip-compressed bodies (``sitemap.xml.gz``) are decompressed.
        Raises FetchError on a non-2xx status or a transport failure.
        """
        self.logger.info("Fetching sitemap: %s", url)
        try:
            async with self.session.get(url) as resp:
                if not 200 <= resp.status < 300:
                    self.logger.error("Sitemap %s -> HTTP %s", url, resp.status)
                    raise FetchError(url, status=resp.status, reason=resp.reason)
                body = await resp.read()
        except asyncio.TimeoutError as exc:
            self.logger.error("Timeout fetching %s", url)
            raise FetchError(url, reason="request timed out") from exc
        except ClientError as exc:
            self.logger.error("Error fetching %s: %s", url, exc)
            raise FetchError(url, reason=str(exc) or type(exc).__name__) from exc

        if body[:2] == _GZIP_MAGIC:
            try:
                body = gzip.decompress(body)
            except (OSError, EOFError) as exc:
                raise FetchError(url, reason=f"corrupt gzip body: {exc}") from exc

        self.logger.debug("Fetched %s (%d bytes)", url, len(body))
        return body
