# sitemap_check/crawler/models.py
"""
Data models for the SitemapCheck crawler.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class SitemapKind(str, Enum):
    """Shape of a parsed sitemap document."""

    INDEX = "sitemapindex"
    LEAF = "urlset"


@dataclass(frozen=True, slots=True)
class SitemapDocument:
    """One parsed sitemap: child sitemap URLs (index) or page URLs (leaf)."""

    kind: SitemapKind
    locations: Tuple[str, ...] = ()

    @property
    def is_index(self) -> bool:
        return self.kind is SitemapKind.INDEX


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Outcome of probing a single page URL."""

    url: str
    success: bool
    content_type: Optional[str] = None
    error: Optional[str] = None

    def as_dict(self) -> Dict[str, Any]:
        return {
            "url": self.url,
            "success": self.success,
            "content_type": self.content_type,
            "error": self.error,
        }


@dataclass(slots=True)
class ValidationSummary:
    """Totals and ordered results of one validation run."""

    total: int
    successful: int
    failed: int
    results: List[ValidationResult] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.failed == 0

    def failures(self) -> List[ValidationResult]:
        return [r for r in self.results if not r.success]

    def as_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "successful": self.successful,
            "failed": self.failed,
            "results": [r.as_dict() for r in self.results],
        }
