"""Command-line entrypoint for submitting a sitemap to search engines."""

import argparse
import logging
import sys
from typing import List, Optional, Sequence

from sitemap_ping import __version__
from sitemap_ping.config import AppConfig, load_config
from sitemap_ping.errors import NetworkFailure, ValidationFailure
from sitemap_ping.logging_utils import configure_logging, perf_span
from sitemap_ping.models import Service
from sitemap_ping.network import SitemapTransport
from sitemap_ping.pinger import SitemapPinger

PROG = "sitemap-ping"

HELP_TEXT = f"""
{PROG} - Submit XML sitemaps to search engines

USAGE:
  {PROG} <sitemap-url> [options]

OPTIONS:
  --google         Ping only Google
  --bing           Ping only Bing
  --all            Ping both Google and Bing (default)
  -h, --help       Show this help message
  -v, --version    Show version information

EXAMPLES:
  {PROG} https://example.com/sitemap.xml
  {PROG} https://example.com/sitemap.xml --google
  {PROG} https://example.com/sitemap.xml --bing
  {PROG} https://example.com/sitemap.xml --all

SUPPORTED FORMATS:
  - .xml files (standard XML sitemaps)
  - .xml.gz files (compressed sitemaps)
  - Sitemap index files

ENVIRONMENT:
  SITEMAP_PING_TIMEOUT   Request timeout in seconds (default: 30)
  LOG_LEVEL              Logging level for stderr diagnostics (default: WARNING)
  LOG_DIR                Directory for per-run log files (default: none)
"""

LOGGER = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=PROG, add_help=False, allow_abbrev=False)
    parser.add_argument("url", nargs="?", help="Sitemap URL to submit.")
    parser.add_argument("--google", action="store_true", help="Ping only Google.")
    parser.add_argument("--bing", action="store_true", help="Ping only Bing.")
    parser.add_argument("--all", action="store_true", help="Ping both Google and Bing.")
    parser.add_argument("-h", "--help", action="store_true", help="Show help.")
    parser.add_argument("-v", "--version", action="store_true", help="Show version.")
    return parser


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse CLI arguments; unknown dash-options are ignored."""
    args, _unknown = build_parser().parse_known_args(argv)
    return args


def resolve_services(args: argparse.Namespace) -> List[Service]:
    """Return the services to ping; anything but a lone flag means both."""
    if args.google and not args.bing and not args.all:
        return [Service.GOOGLE]
    if args.bing and not args.google and not args.all:
        return [Service.BING]
    return list(Service)


def _print_out(text: str = "") -> None:
    print(text, file=sys.stdout)


def _print_err(text: str = "") -> None:
    print(text, file=sys.stderr)


def _ping_both(pinger: SitemapPinger, url: str) -> int:
    _print_out(f"Pinging search engines with sitemap: {url}\n")
    with perf_span("cli.ping_all", tags={"services": "all"}, logger=LOGGER):
        result = pinger.ping_all(url)

    for item in result.results():
        if item.succeeded:
            _print_out(f"✓ {item.service.label}: Successfully pinged ({item.status_code})")
        else:
            _print_err(f"✗ {item.service.label}: Failed - {item.error_message}")

    if not result.all_succeeded:
        _print_err("\nSome pings failed. Check the errors above.")
        return 1

    _print_out("\nAll pings completed successfully!")
    return 0


def _ping_one(pinger: SitemapPinger, service: Service, url: str) -> int:
    _print_out(f"Pinging {service.label} with sitemap: {url}\n")
    with perf_span("cli.ping_service", tags={"service": service.value}, logger=LOGGER):
        result = pinger.ping_service(service, url)
    _print_out(f"✓ {service.label}: Successfully pinged ({result.status_code})")
    _print_out("\nPing completed successfully!")
    return 0


def run(args: argparse.Namespace, pinger: SitemapPinger) -> int:
    """Execute the ping selected by ``args`` and map the outcome to an exit code."""
    services = resolve_services(args)
    try:
        if len(services) > 1:
            return _ping_both(pinger, args.url)
        return _ping_one(pinger, services[0], args.url)
    except ValidationFailure as exc:
        _print_err(f"Validation Error: {exc.message}")
        _print_err("\nPlease provide a valid HTTP/HTTPS sitemap URL")
        return 1
    except NetworkFailure as exc:
        _print_err(f"Network Error: {exc.message}")
        if exc.status_code:
            _print_err(f"Status Code: {exc.status_code}")
        return 1
    except Exception as exc:  # noqa: BLE001 - report anything else and exit 1
        LOGGER.exception("Unexpected failure while pinging %s", args.url)
        _print_err(f"Unexpected Error: {exc}")
        return 1


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)

    if args.help:
        _print_out(HELP_TEXT)
        return 0
    if args.version:
        _print_out(f"{PROG} version {__version__}")
        return 0

    if not args.url:
        _print_err("Error: Sitemap URL is required\n")
        _print_err(f"Usage: {PROG} <sitemap-url> [options]")
        _print_err(f'Run "{PROG} --help" for more information')
        return 1

    try:
        config = load_config()
    except ValueError as exc:
        configure_logging(AppConfig())
        LOGGER.error("Failed to load configuration: %s", exc)
        _print_err(f"Configuration Error: {exc}")
        return 1

    configure_logging(config)

    with SitemapPinger(SitemapTransport(timeout=config.request_timeout)) as pinger:
        return run(args, pinger)


if __name__ == "__main__":  # pragma: no cover - module entrypoint
    raise SystemExit(main())
