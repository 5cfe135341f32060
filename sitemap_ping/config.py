"""Configuration utilities for sitemap-ping runs.

This module reads environment variables (optionally from an `.env` file) and
produces an application configuration object consumed by the CLI and the
pinger.

The `.env` file and a relative `LOG_DIR` are looked up under the repository
root in a source checkout and under the working directory otherwise.

Supported keys: `LOG_DIR`, `LOG_LEVEL`, `APP_NAME` and `SITEMAP_PING_TIMEOUT`
(per-request timeout in seconds).

Usage example:

    from sitemap_ping.config import load_config

    config = load_config()
    transport = SitemapTransport(timeout=config.request_timeout)
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping, MutableMapping, Optional

REPO_ROOT = Path(__file__).resolve().parents[1]
DEFAULT_TIMEOUT_SECONDS = 30.0


def base_directory() -> Path:
    """Directory holding ``.env`` and anchoring a relative ``LOG_DIR``.

    A source checkout uses the repository root; an installed package, whose
    parent is site-packages, uses the current working directory.
    """
    if (REPO_ROOT / "pyproject.toml").exists():
        return REPO_ROOT
    return Path.cwd()


def _load_env_file(path: Path) -> Dict[str, str]:
    """Parse a dotenv-style file into a dictionary."""
    if not path.exists():
        return {}

    data: Dict[str, str] = {}
    for raw_line in path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        data[key.strip()] = value.strip().strip("\"'")
    return data


def _merge_envs(dotenv_values: Mapping[str, str], env: MutableMapping[str, str]) -> Dict[str, str]:
    """Merge dotenv values with the current environment, preferring os.environ."""
    merged = dict(dotenv_values)
    merged.update(env)  # os.environ wins
    return merged


def load_environment(env_file: Optional[Path] = None) -> Dict[str, str]:
    """Return the dotenv file merged with ``os.environ``."""
    target_file = env_file or base_directory() / ".env"
    return _merge_envs(_load_env_file(target_file), os.environ)


def _parse_timeout(raw: Optional[str]) -> float:
    if raw is None or not raw.strip():
        return DEFAULT_TIMEOUT_SECONDS
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"SITEMAP_PING_TIMEOUT must be a number of seconds, got: {raw!r}") from None
    if value <= 0:
        raise ValueError(f"SITEMAP_PING_TIMEOUT must be positive, got: {raw!r}")
    return value


@dataclass(frozen=True)
class AppConfig:
    """Application-level configuration values."""

    log_directory: Optional[Path] = None
    log_level: str = "WARNING"
    app_name: str = "sitemap-ping"
    request_timeout: float = DEFAULT_TIMEOUT_SECONDS


def load_config(env_file: Optional[Path] = None) -> AppConfig:
    """Load configuration values using environment defaults."""
    merged = load_environment(env_file)

    log_directory: Optional[Path] = None
    raw_log_dir = merged.get("LOG_DIR")
    if raw_log_dir:
        log_directory = Path(raw_log_dir)
        if not log_directory.is_absolute():
            log_directory = base_directory() / log_directory

    log_level = merged.get("LOG_LEVEL", "WARNING").upper()

    return AppConfig(
        log_directory=log_directory,
        log_level=log_level,
        app_name=merged.get("APP_NAME", "sitemap-ping"),
        request_timeout=_parse_timeout(merged.get("SITEMAP_PING_TIMEOUT")),
    )


__all__ = [
    "AppConfig",
    "load_config",
    "load_environment",
    "base_directory",
    "REPO_ROOT",
    "DEFAULT_TIMEOUT_SECONDS",
]
