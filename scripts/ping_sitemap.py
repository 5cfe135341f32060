#!/usr/bin/env python3
"""CLI wrapper to submit a sitemap URL to the search engine ping endpoints."""

from sitemap_ping.cli import main

if __name__ == "__main__":  # pragma: no cover - script entrypoint
    raise SystemExit(main())
