"""Network utilities for outbound sitemap pings.

Exports:
- ``SitemapTransport``: single-shot GET with timeout and status classification.
- ``HttpResponse``: status code and body of a completed request.
- ``build_ping_url``: append the encoded ``sitemap`` query parameter.
"""

from sitemap_ping.network.transport import (
    HEADERS,
    HttpResponse,
    SitemapTransport,
    build_ping_url,
    classify_transport_error,
)

__all__ = [
    "HEADERS",
    "HttpResponse",
    "SitemapTransport",
    "build_ping_url",
    "classify_transport_error",
]
