"""Configuration management using lib_layered_config.

Purpose
-------
Provides a centralized configuration loader that merges defaults, application
configs, host configs, user configs, .env files, and environment variables
following a deterministic precedence order.

Contents
--------
* :func:`get_config` – loads configuration with lib_layered_config
* :func:`get_default_config_path` – returns path to bundled default config
* :func:`get_checker_settings` – returns registry and pacing settings

Configuration identifiers (vendor, app, slug) are imported from
:mod:`ivy_dated.__init__conf__` as LAYEREDCONF_* constants.

System Role
-----------
Acts as the configuration adapter layer. Only the CLI reads configuration;
the parser, resolver and checker receive plain values.
"""

from __future__ import annotations

import math
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from lib_layered_config import Config, read_config

from . import __init__conf__

# Environment variable prefix for native (short) env vars
_ENV_PREFIX = "IVY_DATED_"

DEFAULT_SEARCH_URL = "https://search.maven.org/solrsearch/select"
DEFAULT_TIMEOUT = 30.0
DEFAULT_REQUEST_DELAY = 0.2
DEFAULT_USER_AGENT = f"{__init__conf__.shell_command}/{__init__conf__.version}"


def get_default_config_path() -> Path:
    """Return the path to the bundled default configuration file.

    Returns:
        Absolute path to defaultconfig.toml.

    Example:
        >>> path = get_default_config_path()
        >>> path.name
        'defaultconfig.toml'
        >>> path.exists()
        True
    """
    return Path(__file__).parent / "defaultconfig.toml"


@lru_cache(maxsize=1)
def get_config(*, start_dir: str | None = None) -> Config:
    """Load layered configuration with application defaults.

    Loads configuration from multiple sources in precedence order:
    defaults → app → host → user → dotenv → env

    Args:
        start_dir: Optional directory that seeds .env discovery. Defaults to
            current working directory when None.

    Returns:
        Immutable configuration object with provenance tracking.

    Note:
        This function is cached (maxsize=1).
    """
    return read_config(
        vendor=__init__conf__.LAYEREDCONF_VENDOR,
        app=__init__conf__.LAYEREDCONF_APP,
        slug=__init__conf__.LAYEREDCONF_SLUG,
        default_file=get_default_config_path(),
        start_dir=start_dir,
    )


@dataclass(frozen=True, slots=True)
class CheckerSettings:
    """Immutable settings for registry lookups.

    Attributes:
        search_url: Maven Central search endpoint.
        timeout: Maximum seconds to wait for a registry response.
        request_delay: Seconds to wait between consecutive registry calls.
        user_agent: User-Agent header sent with every request.
    """

    search_url: str = DEFAULT_SEARCH_URL
    timeout: float = DEFAULT_TIMEOUT
    request_delay: float = DEFAULT_REQUEST_DELAY
    user_agent: str = DEFAULT_USER_AGENT


def _to_float(raw: object) -> float | None:
    """Convert ``raw`` to a finite float, or None if it is not one."""
    try:
        value = float(raw)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None
    return value if math.isfinite(value) else None


def _setting_float(section: dict[str, object], key: str, fallback: float) -> float:
    """Read a numeric setting from the ``[registry]`` section.

    Raises:
        ValueError: If the configured value is not a finite number.
    """
    raw = section.get(key, fallback)
    value = _to_float(raw)
    if value is None:
        raise ValueError(f"registry.{key} must be a number, got {raw!r}")
    return value


def _env_float(name: str, fallback: float) -> float:
    """Read a float override from the environment, keeping ``fallback`` if invalid."""
    raw = os.environ.get(f"{_ENV_PREFIX}{name}")
    if not raw:
        return fallback
    value = _to_float(raw)
    return fallback if value is None else value


def get_checker_settings() -> CheckerSettings:
    """Get checker settings from configuration with environment variable overrides.

    Settings are resolved in the following precedence order (highest wins):
    1. Native environment variables (IVY_DATED_SEARCH_URL, IVY_DATED_TIMEOUT,
       IVY_DATED_REQUEST_DELAY)
    2. lib_layered_config environment variables (IVY_DATED___REGISTRY__*)
    3. User, host and application config files
    4. Default config (bundled defaultconfig.toml)

    Returns:
        CheckerSettings with resolved values.

    Raises:
        ValueError: If ``registry.timeout`` or ``registry.request_delay`` is
            not a finite number.
    """
    config = get_config()
    registry_section = config.get("registry", default={})

    search_url = registry_section.get("search_url", DEFAULT_SEARCH_URL)
    timeout = _setting_float(registry_section, "timeout", DEFAULT_TIMEOUT)
    request_delay = _setting_float(registry_section, "request_delay", DEFAULT_REQUEST_DELAY)
    user_agent = registry_section.get("user_agent", DEFAULT_USER_AGENT)

    if env_url := os.environ.get(f"{_ENV_PREFIX}SEARCH_URL"):
        search_url = env_url

    return CheckerSettings(
        search_url=str(search_url),
        timeout=_env_float("TIMEOUT", timeout),
        request_delay=_env_float("REQUEST_DELAY", request_delay),
        user_agent=str(user_agent) if user_agent else DEFAULT_USER_AGENT,
    )


__all__ = [
    "CheckerSettings",
    "get_checker_settings",
    "get_config",
    "get_default_config_path",
]
