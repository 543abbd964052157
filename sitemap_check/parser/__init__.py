"""sitemap_check.parser: sitemap XML parsing."""

from .sitemap_parser import parse_sitemap

__all__ = ["parse_sitemap"]
