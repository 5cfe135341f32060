"""Ping orchestration: validate, submit to each search engine, aggregate.

Single-service pings propagate ``ValidationFailure`` and ``NetworkFailure``
to the caller. ``ping_all`` submits both services concurrently, waits for both
to settle and reports each outcome as a ``PingResult``; only a validation
failure of the shared URL escapes it.
"""

import logging
from concurrent.futures import ALL_COMPLETED, Future, ThreadPoolExecutor, wait
from typing import Dict, Mapping, Optional, Union

from sitemap_ping.errors import NetworkFailure, ValidationFailure
from sitemap_ping.logging_utils import perf
from sitemap_ping.models import PING_ENDPOINTS, PingAllResult, PingResult, Service
from sitemap_ping.network import SitemapTransport
from sitemap_ping.validation import normalize_sitemap_url, validate_sitemap_url

LOGGER = logging.getLogger(__name__)

UNKNOWN_ERROR = "Unknown error"


class SitemapPinger:
    """Submit sitemap URLs to the configured search engine endpoints."""

    def __init__(
        self,
        transport: Optional[SitemapTransport] = None,
        endpoints: Mapping[Service, str] = PING_ENDPOINTS,
    ) -> None:
        self._transport = transport or SitemapTransport()
        self._endpoints = endpoints

    def _ping_normalized(self, service: Service, sitemap_url: str) -> PingResult:
        endpoint = self._endpoints[service]
        LOGGER.info("Pinging %s endpoint=%s sitemap=%s", service.value, endpoint, sitemap_url)
        try:
            response = self._transport.send_ping(endpoint, sitemap_url)
        except (NetworkFailure, ValidationFailure):
            raise
        except Exception as exc:
            raise NetworkFailure(f"Unexpected error: {exc}") from exc
        return PingResult.success(service, sitemap_url, response.status_code)

    def ping_service(self, service: Union[Service, str], sitemap_url: str) -> PingResult:
        """Validate ``sitemap_url`` and ping a single search engine.

        Raises:
            ValidationFailure: If the URL is rejected; no request is made.
            NetworkFailure: If the request fails or returns a non-200 status.
        """
        service = Service(service)
        validate_sitemap_url(sitemap_url)
        return self._ping_normalized(service, normalize_sitemap_url(sitemap_url))

    def ping_google(self, sitemap_url: str) -> PingResult:
        return self.ping_service(Service.GOOGLE, sitemap_url)

    def ping_bing(self, sitemap_url: str) -> PingResult:
        return self.ping_service(Service.BING, sitemap_url)

    @perf("pinger.ping_all", tags={"component": "pinger"})
    def ping_all(self, sitemap_url: str) -> PingAllResult:
        """Ping every service concurrently and collect each outcome.

        Network failures are reported inside the returned results and never
        raised.

        Raises:
            ValidationFailure: If the URL is rejected; no request is made.
        """
        validate_sitemap_url(sitemap_url)
        normalized = normalize_sitemap_url(sitemap_url)

        with ThreadPoolExecutor(max_workers=len(Service), thread_name_prefix="sitemap-ping") as executor:
            futures: Dict[Service, Future] = {
                service: executor.submit(self._ping_normalized, service, normalized)
                for service in Service
            }
            wait(futures.values(), return_when=ALL_COMPLETED)

        results = {service: self._settle(service, normalized, fut) for service, fut in futures.items()}
        return PingAllResult(google=results[Service.GOOGLE], bing=results[Service.BING])

    @staticmethod
    def _settle(service: Service, sitemap_url: str, future: Future) -> PingResult:
        exc = future.exception()
        if exc is None:
            return future.result()
        LOGGER.warning("Ping to %s failed: %s", service.value, exc)
        return PingResult.failure(service, sitemap_url, str(exc) or UNKNOWN_ERROR)

    def close(self) -> None:
        self._transport.close()

    def __enter__(self) -> "SitemapPinger":
        return self

    def __exit__(self, exc_type, exc, exc_tb) -> None:
        self.close()


def ping_service(service: Union[Service, str], sitemap_url: str) -> PingResult:
    with SitemapPinger() as pinger:
        return pinger.ping_service(service, sitemap_url)


def ping_google(sitemap_url: str) -> PingResult:
    """Ping Google with ``sitemap_url`` using a default transport."""
    return ping_service(Service.GOOGLE, sitemap_url)


def ping_bing(sitemap_url: str) -> PingResult:
    """Ping Bing with ``sitemap_url`` using a default transport."""
    return ping_service(Service.BING, sitemap_url)


def ping_all(sitemap_url: str) -> PingAllResult:
    """Ping Google and Bing concurrently using a default transport."""
    with SitemapPinger() as pinger:
        return pinger.ping_all(sitemap_url)


__all__ = [
    "SitemapPinger",
    "ping_service",
    "ping_google",
    "ping_bing",
    "ping_all",
]
