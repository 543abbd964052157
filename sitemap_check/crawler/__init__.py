"""sitemap_check.crawler: fetching, resolving and validating sitemap URLs."""
