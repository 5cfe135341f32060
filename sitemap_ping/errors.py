"""Error types raised by the validator, transport and pinger.

Only two kinds exist. ``ValidationFailure`` means the input never left the
process; ``NetworkFailure`` means a request was attempted and optionally
carries the HTTP status code that made it fail.
"""

from typing import Optional


class PingError(Exception):
    """Base class for sitemap-ping failures; ``kind`` tells them apart."""

    kind = "error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationFailure(PingError):
    """Raised when a sitemap URL is rejected before any network activity."""

    kind = "validation"


class NetworkFailure(PingError):
    """Raised when a ping request fails at the transport or HTTP level."""

    kind = "network"

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


__all__ = ["PingError", "ValidationFailure", "NetworkFailure"]
