"""Sitemap URL validation and normalization.

Validation runs before any network activity. Besides checking that the input
is an absolute http(s) URL, it refuses loopback, link-local and private-range
hostnames so the tool cannot be pointed at internal network targets.
"""

import ipaddress
import logging
import re
import socket
from typing import Any
from urllib.parse import urlsplit

from sitemap_ping.errors import ValidationFailure

LOGGER = logging.getLogger(__name__)

ALLOWED_SCHEMES = ("http", "https")
SITEMAP_EXTENSIONS = (".xml", ".xml.gz", ".txt")

PRIVATE_HOST_PATTERNS = (
    re.compile(r"^10\."),
    re.compile(r"^172\.(1[6-9]|2[0-9]|3[0-1])\."),
    re.compile(r"^192\.168\."),
    re.compile(r"^169\.254\."),  # link-local
    re.compile(r"^fc00:"),
    re.compile(r"^fd00:"),
)
UNIQUE_LOCAL_V6 = ipaddress.IPv6Network("fc00::/7")
NUMERIC_HOST = re.compile(r"^[0-9a-fx.]+$")


def _canonical_host(hostname: str) -> str:
    """Rewrite numeric IPv4 spellings as a dotted quad.

    Resolvers accept ``2130706433``, ``0x7f.1``, ``0177.0.0.1`` and IPv4-mapped
    IPv6 (``::ffff:127.0.0.1``), so the loopback and private-range rules must
    see the address actually connected to.
    """
    if ":" in hostname:
        try:
            mapped = ipaddress.IPv6Address(hostname).ipv4_mapped
        except ValueError:
            return hostname
        return str(mapped) if mapped is not None else hostname
    if not NUMERIC_HOST.match(hostname) or not any(ch.isdigit() for ch in hostname):
        return hostname
    try:
        return socket.inet_ntoa(socket.inet_aton(hostname))
    except OSError:
        return hostname


def _is_loopback_host(hostname: str) -> bool:
    return (
        hostname in ("localhost", "127.0.0.1", "::1")
        or hostname.startswith("127.")
        or hostname.endswith(".local")
    )


def _is_private_host(hostname: str) -> bool:
    if any(pattern.match(hostname) for pattern in PRIVATE_HOST_PATTERNS):
        return True
    try:
        address = ipaddress.IPv6Address(hostname)
    except ValueError:
        return False
    return address in UNIQUE_LOCAL_V6


def validate_sitemap_url(url: Any) -> None:
    """Validate that ``url`` is a public HTTP/HTTPS sitemap URL.

    Raises:
        ValidationFailure: On the first failed check.
    """
    if not url or not isinstance(url, str):
        raise ValidationFailure("Sitemap URL must be a non-empty string")

    trimmed = url.strip()
    if not trimmed:
        raise ValidationFailure("Sitemap URL cannot be empty")

    try:
        parts = urlsplit(trimmed)
        parts.port  # raises ValueError for out-of-range or non-numeric ports
    except ValueError:
        raise ValidationFailure(f"Invalid URL format: {trimmed}") from None
    if not parts.scheme or any(ch.isspace() for ch in trimmed):
        raise ValidationFailure(f"Invalid URL format: {trimmed}")

    if parts.scheme not in ALLOWED_SCHEMES:
        raise ValidationFailure(f"URL must use HTTP or HTTPS protocol, got: {parts.scheme}:")

    hostname = (parts.hostname or "").lower()
    if not hostname:
        raise ValidationFailure("URL must have a valid hostname")
    hostname = _canonical_host(hostname)

    if _is_loopback_host(hostname):
        raise ValidationFailure("Localhost URLs are not allowed")
    if _is_private_host(hostname):
        raise ValidationFailure("Private IP addresses are not allowed")

    # Extension check is advisory only; sitemaps are served from arbitrary paths.
    path = parts.path.lower()
    if path and path != "/" and not path.endswith(SITEMAP_EXTENSIONS):
        LOGGER.debug("Sitemap URL path has no usual sitemap extension: %s", parts.path)


def normalize_sitemap_url(url: str) -> str:
    """Return ``url`` with surrounding whitespace removed.

    Percent-encoding happens later, when the URL is embedded as a query
    parameter of the ping request.
    """
    return url.strip()


__all__ = [
    "validate_sitemap_url",
    "normalize_sitemap_url",
    "ALLOWED_SCHEMES",
    "SITEMAP_EXTENSIONS",
]
