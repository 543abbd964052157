# File: sitemap_check/report/text_report.py
"""sitemap_check.report.text_report: текстовый вывод для терминала."""

from __future__ import annotations

from typing import List

from sitemap_check.crawler.models import ValidationResult, ValidationSummary

URL_WIDTH = 80


def format_progress(result: ValidationResult, current: int, total: int) -> str:
    """Одна строка прогресса, перерисовываемая на месте через ``\\r``."""
    status = "OK  " if result.success else "FAIL"
    return f"\r[{current}/{total}] {status} {result.url[:URL_WIDTH]}"


def format_summary(summary: ValidationSummary, expected_content_type: str = "text/markdown") -> str:
    """Итоговый блок: счётчики и, при наличии, список неудачных URL."""
    lines: List[str] = [
        "=== Validation Results ===",
        "",
        f"Total URLs: {summary.total}",
        f"Successful ({expected_content_type}): {summary.successful}",
        f"Failed: {summary.failed}",
    ]
    failures = summary.failures()
    if failures:
        lines += ["", "=== Failed URLs ===", ""]
        for failure in failures:
            lines.append(f"URL: {failure.url}")
            lines.append(f"Content-Type: {failure.content_type or 'N/A'}")
            if failure.error:
                lines.append(f"Error: {failure.error}")
            lines.append("")
    return "\n".join(lines).rstrip("\n")
