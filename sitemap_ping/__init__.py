"""Submit XML sitemaps to the Google and Bing ping endpoints.

Usage example:

    from sitemap_ping import ping_all

    result = ping_all("https://example.com/sitemap.xml")
    print(result.google.succeeded, result.bing.succeeded)
"""

__version__ = "1.0.0"

from sitemap_ping.errors import NetworkFailure, PingError, ValidationFailure
from sitemap_ping.models import PING_ENDPOINTS, PingAllResult, PingResult, Service
from sitemap_ping.pinger import SitemapPinger, ping_all, ping_bing, ping_google, ping_service

__all__ = [
    "__version__",
    "NetworkFailure",
    "PingError",
    "ValidationFailure",
    "PING_ENDPOINTS",
    "PingAllResult",
    "PingResult",
    "Service",
    "SitemapPinger",
    "ping_all",
    "ping_bing",
    "ping_google",
    "ping_service",
]
