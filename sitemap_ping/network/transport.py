"""HTTP transport for sitemap pings.

Issues exactly one GET per call (no retries, no caching) and turns transport
and HTTP-level problems into ``NetworkFailure`` errors with readable messages.
"""

import codecs
import logging
import socket
import threading
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeout
from dataclasses import dataclass
from typing import Iterator, Optional
from urllib.parse import quote, urlsplit

import requests

from sitemap_ping import __version__
from sitemap_ping.errors import NetworkFailure
from sitemap_ping.logging_utils import perf

LOGGER = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 30.0
HEADERS = {"User-Agent": f"sitemap-ping/{__version__}"}
# Characters left unescaped when the sitemap URL becomes a query value.
QUERY_SAFE_CHARS = "-_.!~*'()"
_CHUNK_SIZE = 8192


@dataclass(frozen=True)
class HttpResponse:
    status_code: int
    body: str


def _iter_causes(exc: BaseException) -> Iterator[BaseException]:
    """Walk an exception, its wrapped reasons and its cause/context chain."""
    pending = [exc]
    seen = set()
    while pending:
        current = pending.pop(0)
        if id(current) in seen:
            continue
        seen.add(id(current))
        yield current
        reason = getattr(current, "reason", None)
        if isinstance(reason, BaseException):
            pending.append(reason)
        pending.extend(arg for arg in current.args if isinstance(arg, BaseException))
        for linked in (current.__cause__, current.__context__):
            if linked is not None:
                pending.append(linked)


def _timeout_message(timeout: float) -> str:
    return f"Request timeout - server did not respond within {timeout:g} seconds"


def classify_transport_error(exc: Exception, url: str, timeout: float) -> NetworkFailure:
    """Map a ``requests`` exception to a ``NetworkFailure`` without status code."""
    if isinstance(exc, requests.Timeout):
        return NetworkFailure(_timeout_message(timeout))
    for cause in _iter_causes(exc):
        if isinstance(cause, socket.gaierror):
            hostname = urlsplit(url).hostname or url
            return NetworkFailure(f"DNS resolution failed - hostname not found: {hostname}")
        if isinstance(cause, ConnectionRefusedError):
            return NetworkFailure("Connection refused - server is not accepting connections")
        if isinstance(cause, (socket.timeout, TimeoutError)):
            return NetworkFailure(_timeout_message(timeout))
    return NetworkFailure(f"Network error: {exc}")


def build_ping_url(endpoint: str, sitemap_url: str) -> str:
    """Return ``endpoint`` with the percent-encoded sitemap URL as query."""
    return f"{endpoint}?sitemap={quote(sitemap_url, safe=QUERY_SAFE_CHARS)}"


def _codec_for(encoding: Optional[str]) -> str:
    """Return ``encoding`` when Python knows it, otherwise utf-8."""
    if not encoding:
        return "utf-8"
    try:
        codecs.lookup(encoding)
    except LookupError:
        LOGGER.debug("transport.fetch unknown charset=%s, decoding as utf-8", encoding)
        return "utf-8"
    return encoding


class _InFlight:
    """Hands the streamed response of a worker thread to the timing-out caller."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._response: Optional[requests.Response] = None
        self._aborted = False

    def attach(self, response: requests.Response) -> None:
        with self._lock:
            if not self._aborted:
                self._response = response
                return
        response.close()
        raise NetworkFailure("Request aborted after timeout")

    def abort(self) -> None:
        with self._lock:
            self._aborted = True
            response = self._response
        if response is None:
            # Still connecting; the worker gives up at its own connect/read timeout.
            return
        # Unblocks a read in progress on the worker thread.
        response.raw.shutdown()
        response.close()


class SitemapTransport:
    """Thin wrapper around a Requests session used to submit pings."""

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        """Initialize the transport.

        Args:
            session: Optional pre-configured Requests session.
            timeout: Per-request wall-clock budget in seconds, covering the
                connect, the response headers and the whole body.
        """
        if timeout <= 0:
            raise ValueError("timeout must be positive")
        self._session = session or requests.Session()
        self._timeout = timeout

    @property
    def timeout(self) -> float:
        return self._timeout

    def _get(self, url: str, limit: float, in_flight: _InFlight) -> HttpResponse:
        try:
            response = self._session.get(
                url,
                headers=HEADERS,
                timeout=(limit, limit),
                stream=True,
            )
        except requests.RequestException as exc:
            raise classify_transport_error(exc, url, limit) from exc

        in_flight.attach(response)
        try:
            chunks = list(response.iter_content(chunk_size=_CHUNK_SIZE))
        except requests.RequestException as exc:
            raise classify_transport_error(exc, url, limit) from exc
        finally:
            response.close()

        body = b"".join(chunks).decode(_codec_for(response.encoding), errors="replace")
        return HttpResponse(status_code=response.status_code, body=body)

    def fetch(self, url: str, timeout: Optional[float] = None) -> HttpResponse:
        """Perform a single GET and return its status code and body.

        The timeout is a wall-clock budget covering connect, headers and body.
        When it runs out the in-flight response is shut down and the call
        fails without waiting for the worker thread.

        Raises:
            NetworkFailure: On timeout, DNS failure, refused connection or any
                other transport-level error. No status code is attached.
        """
        limit = timeout if timeout is not None else self._timeout
        LOGGER.debug("transport.fetch url=%s timeout=%s", url, limit)

        in_flight = _InFlight()
        executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="sitemap-ping-fetch")
        try:
            future = executor.submit(self._get, url, limit, in_flight)
            try:
                return future.result(timeout=limit)
            except FutureTimeout:
                LOGGER.debug("transport.fetch aborted after %ss url=%s", limit, url)
                in_flight.abort()
                raise NetworkFailure(_timeout_message(limit)) from None
        finally:
            executor.shutdown(wait=False)

    @perf("transport.send_ping", tags={"component": "transport"})
    def send_ping(self, endpoint: str, sitemap_url: str) -> HttpResponse:
        """Submit ``sitemap_url`` to a ping ``endpoint`` and check the status.

        Raises:
            NetworkFailure: On transport errors, or when the endpoint answers
                with anything other than HTTP 200 (status code attached).
        """
        response = self.fetch(build_ping_url(endpoint, sitemap_url))
        status = response.status_code

        if 500 <= status < 600:
            raise NetworkFailure(
                f"Server error ({status}) - the search engine service is temporarily unavailable",
                status,
            )
        if 400 <= status < 500:
            raise NetworkFailure(
                f"Client error ({status}) - the sitemap URL may be invalid or inaccessible",
                status,
            )
        if status != 200:
            raise NetworkFailure(f"Unexpected status code: {status}", status)
        return response

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> "SitemapTransport":
        return self

    def __exit__(self, exc_type, exc, exc_tb) -> None:
        self.close()


__all__ = [
    "SitemapTransport",
    "HttpResponse",
    "HEADERS",
    "DEFAULT_TIMEOUT_SECONDS",
    "build_ping_url",
    "classify_transport_error",
]
