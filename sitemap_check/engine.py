# File: sitemap_check/engine.py
"""sitemap_check.engine: orchestration layer: resolve the sitemap tree, validate, summarize."""

from __future__ import annotations

import time
from typing import List, Optional

from aiohttp import ClientSession, ClientTimeout

from sitemap_check.aggregator import ProgressReporter, summarize
from sitemap_check.config import CheckerConfig
from sitemap_check.crawler.fetcher import SitemapFetcher
from sitemap_check.crawler.models import ValidationSummary
from sitemap_check.crawler.resolver import SitemapObserver, TreeResolver
from sitemap_check.crawler.validator import BatchValidator, ResultObserver, UrlValidator
from sitemap_check.logger import logger

__all__ = ["SitemapChecker", "start_check", "start_resolve"]


class SitemapChecker:
    """Фасад для CLI и тестов: одна HTTP-сессия на весь запуск."""

    def __init__(self, config: CheckerConfig, on_sitemap: Optional[SitemapObserver] = None) -> None:
        self.config = config
        self.on_sitemap = on_sitemap
        self.session: Optional[ClientSession] = None

    async def __aenter__(self) -> SitemapChecker:
        self.session = ClientSession(
            timeout=ClientTimeout(total=self.config.timeout),
            headers={"User-Agent": self.config.user_agent},
            raise_for_status=False,
        )
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.session and not self.session.closed:
            await self.session.close()

    def _require_session(self) -> ClientSession:
        if self.session is None or self.session.closed:
            raise RuntimeError("Session not initialized")
        return self.session

    async def resolve(self, sitemap_url: str) -> List[str]:
        """Разворачивает дерево sitemap в плоский упорядоченный список URL."""
        resolver = TreeResolver(SitemapFetcher(self._require_session()), on_sitemap=self.on_sitemap)
        return await resolver.resolve(sitemap_url)

    async def validate(self, urls: List[str], on_progress: Optional[ResultObserver] = None) -> ValidationSummary:
        """Проверяет URL пакетами и возвращает сводку."""
        validator = UrlValidator(self._require_session(), self.config.expected_content_type)
        reporter = ProgressReporter(on_progress)
        results = await BatchValidator(validator, self.config.batch_size).run(urls, reporter)
        reporter.check_complete(results)
        return summarize(results)

    async def check(self, sitemap_url: str, on_progress: Optional[ResultObserver] = None) -> ValidationSummary:
        """Полный прогон: resolve → validate → summary. Фатальные ошибки прерывают до проверки URL."""
        start = time.monotonic()
        urls = await self.resolve(sitemap_url)
        logger.info("Found %d URLs to validate (batch size %d)", len(urls), self.config.batch_size)
        summary = await self.validate(urls, on_progress)
        logger.info(
            "Validated %d URLs in %.2f s: %d ok, %d failed",
            summary.total, time.monotonic() - start, summary.successful, summary.failed,
        )
        return summary


async def start_check(
    config: CheckerConfig, sitemap_url: str, on_progress: Optional[ResultObserver] = None
) -> ValidationSummary:
    """Запускает SitemapChecker в контексте и возвращает ValidationSummary."""
    async with SitemapChecker(config) as checker:
        return await checker.check(sitemap_url, on_progress)


async def start_resolve(config: CheckerConfig, sitemap_url: str) -> List[str]:
    """Только разворачивает sitemap, без проверки страниц."""
    async with SitemapChecker(config) as checker:
        return await checker.resolve(sitemap_url)
