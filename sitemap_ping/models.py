"""Result types and fixed ping endpoints for the supported search engines."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple


class Service(str, Enum):
    """Search engines that accept sitemap pings."""

    GOOGLE = "google"
    BING = "bing"

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS = {Service.GOOGLE: "Google", Service.BING: "Bing"}

PING_ENDPOINTS: Mapping[Service, str] = MappingProxyType(
    {
        Service.GOOGLE: "http://www.google.com/ping",
        Service.BING: "http://www.bing.com/ping",
    }
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class PingResult:
    """Outcome of a single ping attempt against one service.

    Attributes:
        succeeded: Whether the search engine answered with HTTP 200.
        service: The search engine that was pinged.
        submitted_url: The normalized sitemap URL that was submitted.
        status_code: HTTP status observed; always 200 on success, may be None
            on failure.
        error_message: Failure description; None on success.
        timestamp: UTC time at which the result was recorded.
    """

    succeeded: bool
    service: Service
    submitted_url: str
    status_code: Optional[int] = None
    error_message: Optional[str] = None
    timestamp: datetime = field(default_factory=_utcnow)

    def __post_init__(self) -> None:
        if self.succeeded:
            if self.status_code != 200:
                raise ValueError(f"successful ping must have status 200, got {self.status_code}")
            if self.error_message is not None:
                raise ValueError("successful ping must not carry an error message")
        elif not self.error_message:
            raise ValueError("failed ping must carry an error message")

    @classmethod
    def success(cls, service: Service, submitted_url: str, status_code: int = 200) -> "PingResult":
        return cls(succeeded=True, service=service, submitted_url=submitted_url, status_code=status_code)

    @classmethod
    def failure(
        cls,
        service: Service,
        submitted_url: str,
        error_message: str,
        status_code: Optional[int] = None,
    ) -> "PingResult":
        return cls(
            succeeded=False,
            service=service,
            submitted_url=submitted_url,
            status_code=status_code,
            error_message=error_message,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "succeeded": self.succeeded,
            "service": self.service.value,
            "status_code": self.status_code,
            "timestamp": self.timestamp.isoformat(),
            "error_message": self.error_message,
            "submitted_url": self.submitted_url,
        }


@dataclass(frozen=True)
class PingAllResult:
    """Outcomes of pinging every supported service; both fields always set."""

    google: PingResult
    bing: PingResult

    @property
    def all_succeeded(self) -> bool:
        return self.google.succeeded and self.bing.succeeded

    def results(self) -> Tuple[PingResult, PingResult]:
        return (self.google, self.bing)

    def to_dict(self) -> Dict[str, Any]:
        return {"google": self.google.to_dict(), "bing": self.bing.to_dict()}


__all__ = ["Service", "PING_ENDPOINTS", "PingResult", "PingAllResult"]
