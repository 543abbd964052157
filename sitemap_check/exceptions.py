# File: sitemap_check/exceptions.py
"""sitemap_check.exceptions: fatal errors raised while resolving a sitemap tree.

Page-level validation problems are never raised; they are reported as
:class:`~sitemap_check.crawler.models.ValidationResult` objects instead.
"""

from __future__ import annotations

from typing import Optional, Sequence

__all__ = ["SitemapError", "FetchError", "ParseError", "CycleError"]


class SitemapError(Exception):
    """Base class for errors that abort a whole run."""

    def __init__(self, url: str, message: str) -> None:
        super().__init__(message)
        self.url = url


class FetchError(SitemapError):
    """A sitemap document could not be downloaded."""

    def __init__(self, url: str, status: Optional[int] = None, reason: Optional[str] = None) -> None:
        self.status = status
        self.reason = reason
        if status is not None:
            message = f"Failed to fetch sitemap {url}: HTTP {status}"
            if reason:
                message += f" {reason}"
        else:
            message = f"Failed to fetch sitemap {url}: {reason or 'transport error'}"
        super().__init__(url, message)


class ParseError(SitemapError):
    """A sitemap document is not well-formed or has an unexpected root."""

    def __init__(self, url: str, cause: str) -> None:
        self.cause = cause
        super().__init__(url, f"Failed to parse sitemap {url or '<unknown>'}: {cause}")


class CycleError(SitemapError):
    """A sitemap index references one of its own ancestors."""

    def __init__(self, url: str, chain: Sequence[str]) -> None:
        self.chain = tuple(chain)
        path = " -> ".join((*self.chain, url))
        super().__init__(url, f"Sitemap cycle detected: {path}")
