# File: sitemap_check/aggregator.py
"""sitemap_check.aggregator: прогресс проверки и итоговая сводка."""

from __future__ import annotations

from typing import Optional, Sequence

from sitemap_check.crawler.models import ValidationResult, ValidationSummary
from sitemap_check.crawler.validator import ResultObserver

__all__ = ["ProgressReporter", "summarize"]


class ProgressReporter:
    """Передаёт каждый готовый результат наблюдателю и считает завершённые проверки."""

    def __init__(self, observer: Optional[ResultObserver] = None) -> None:
        self.observer = observer
        self.completed = 0

    def notify(self, result: ValidationResult, current: int, total: int) -> None:
        self.completed += 1
        if self.observer is not None:
            self.observer(result, current, total)

    __call__ = notify

    def check_complete(self, results: Sequence[ValidationResult]) -> None:
        """Каждый результат должен был пройти через notify ровно один раз."""
        if self.completed != len(results):
            raise RuntimeError(
                f"Progress reported {self.completed} results, validation returned {len(results)}"
            )


def summarize(results: Sequence[ValidationResult]) -> ValidationSummary:
    """Считает успешные и неудачные проверки, сохраняя порядок результатов."""
    successful = sum(1 for r in results if r.success)
    return ValidationSummary(
        total=len(results),
        successful=successful,
        failed=len(results) - successful,
        results=list(results),
    )
