# === FILE: sitemap_check/crawler/validator.py ===
"""Content-type probing of page URLs with a fixed concurrency ceiling."""

from __future__ import annotations

import asyncio
from typing import Callable, Iterator, List, Optional, Protocol, Sequence, TypeVar

from aiohttp import ClientError, ClientSession

from sitemap_check.config import DEFAULT_CONTENT_TYPE
from sitemap_check.crawler.models import ValidationResult
from sitemap_check.logger import get_logger

__all__ = ("UrlValidator", "BatchValidator", "ResultObserver", "batches")

T = TypeVar("T")
ResultObserver = Callable[[ValidationResult, int, int], None]


def batches(items: Sequence[T], size: int) -> Iterator[Sequence[T]]:
    """Yield contiguous slices of *items* with at most *size* elements."""
    if size < 1:
        raise ValueError("batch size must be >= 1")
    for start in range(0, len(items), size):
        yield items[start:start + size]


class _Validator(Protocol):
    async def validate(self, url: str) -> ValidationResult: ...


class UrlValidator:
    """Issues a HEAD request and checks the Content-Type prefix. Never raises."""

    def __init__(self, session: ClientSession, expected_content_type: str = DEFAULT_CONTENT_TYPE) -> None:
        self.session = session
        self.expected_content_type = expected_content_type.lower()
        self.logger = get_logger("validator")

    def classify(self, url: str, content_type: Optional[str]) -> ValidationResult:
        success = content_type is not None and content_type.lower().startswith(self.expected_content_type)
        return ValidationResult(url=url, success=success, content_type=content_type)

    async def validate(self, url: str) -> ValidationResult:
        try:
            async with self.session.head(url, allow_redirects=True) as resp:
                content_type = resp.headers.get("Content-Type")
                self.logger.debug("HEAD %s -> %s (%s)", url, resp.status, content_type)
        # ValueError: malformed URLs, including IDNA failures on bad host labels
        except (ClientError, asyncio.TimeoutError, OSError, ValueError) as exc:
            message = str(exc) or type(exc).__name__
            self.logger.warning("HEAD %s failed: %s", url, message)
            return ValidationResult(url=url, success=False, error=message)
        return self.classify(url, content_type)


class BatchValidator:
    """
    Validates URLs in sequential batches of ``batch_size``.

    All URLs in one batch are checked concurrently and the batch is joined
    before the next starts, so no more than ``batch_size`` requests are ever
    outstanding. Results come back in input order.
    """

    def __init__(self, validator: _Validator, batch_size: int = 10) -> None:
        if batch_size < 1:
            raise ValueError("batch_size must be >= 1")
        self.validator = validator
        self.batch_size = batch_size
        self.logger = get_logger("validator")

    async def _check_one(
        self, url: str, position: int, total: int, on_result: Optional[ResultObserver]
    ) -> ValidationResult:
        result = await self.validator.validate(url)
        if on_result is not None:
            on_result(result, position, total)
        return result

    async def run(self, urls: Sequence[str], on_result: Optional[ResultObserver] = None) -> List[ValidationResult]:
        total = len(urls)
        results: List[ValidationResult] = []
        for number, batch in enumerate(batches(urls, self.batch_size), start=1):
            offset = len(results)
            self.logger.debug("Batch %d: URLs %d-%d of %d", number, offset + 1, offset + len(batch), total)
            batch_results = await asyncio.gather(
                *(self._check_one(url, offset + i + 1, total, on_result) for i, url in enumerate(batch))
            )
            results.extend(batch_results)
        return results
