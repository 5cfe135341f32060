"""Input validation for sitemap URLs.

Exports:
- ``validate_sitemap_url``: scheme, hostname and SSRF checks.
- ``normalize_sitemap_url``: whitespace trimming applied before submission.
"""

from sitemap_ping.validation.urls import normalize_sitemap_url, validate_sitemap_url

__all__ = ["normalize_sitemap_url", "validate_sitemap_url"]
