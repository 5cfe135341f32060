"""Fixtures for integration tests that hit the live search engine endpoints."""

import os

import pytest


@pytest.fixture(scope="session")
def live_sitemap_url() -> str:
    url = os.getenv("SITEMAP_PING_LIVE_URL")
    if not url:
        pytest.skip("SITEMAP_PING_LIVE_URL must be set to run integration tests.")
    return url
