"""Shared pytest fixtures for the sitemap_ping package tests.

Provides reusable fakes so tests stay deterministic and never touch the
network.
"""

import logging
import threading
import time
from pathlib import Path
from typing import Dict, Iterator, List

import pytest

from sitemap_ping.config import AppConfig
from sitemap_ping.errors import NetworkFailure
from sitemap_ping.network import HttpResponse


@pytest.fixture
def app_config(tmp_path: Path) -> AppConfig:
    """Application config fixture pointing log files at a temporary directory."""
    return AppConfig(
        log_directory=tmp_path,
        log_level="INFO",
    )


@pytest.fixture(autouse=True)
def _reset_root_logging() -> Iterator[None]:
    yield
    root = logging.getLogger()
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        if isinstance(handler, logging.FileHandler):
            handler.close()


class FakeTransport:
    """Records ``send_ping`` calls and replays canned outcomes per endpoint.

    ``outcomes`` maps an endpoint base URL to either a status code (returned
    as an ``HttpResponse``) or an exception instance (raised).
    """

    def __init__(self, outcomes: Dict[str, object], delay: float = 0.0) -> None:
        self.outcomes = outcomes
        self.delay = delay
        self.calls: List[tuple] = []
        self.start_times: Dict[str, float] = {}
        self.closed = False
        self._lock = threading.Lock()

    def send_ping(self, endpoint: str, sitemap_url: str) -> HttpResponse:
        with self._lock:
            self.calls.append((endpoint, sitemap_url))
            self.start_times[endpoint] = time.monotonic()
        if self.delay:
            time.sleep(self.delay)
        outcome = self.outcomes[endpoint]
        if isinstance(outcome, BaseException):
            raise outcome
        return HttpResponse(status_code=outcome, body="")

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def make_transport():
    """Factory for ``FakeTransport`` instances."""

    def _make(outcomes: Dict[str, object], delay: float = 0.0) -> FakeTransport:
        return FakeTransport(outcomes, delay=delay)

    return _make


@pytest.fixture
def server_error() -> NetworkFailure:
    return NetworkFailure("Server error (503) - the search engine service is temporarily unavailable", 503)
