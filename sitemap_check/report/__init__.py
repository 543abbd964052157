# File: sitemap_check/report/__init__.py
"""sitemap_check.report: генерация отчётов (текст, JSON и HTML), используемая CLI и тестами."""

from __future__ import annotations

from .html_report import DEFAULT_TEMPLATE_DIR, render_html
from .json_report import render_json
from .text_report import format_progress, format_summary

__all__ = ["render_json", "render_html", "format_summary", "format_progress", "DEFAULT_TEMPLATE_DIR"]
