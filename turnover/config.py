"""
Configuration utilities for the turnover collision engine.
Keeps the priority marker, ranking limits and display defaults in one
immutable object so the scanner, watch and expander agree on them.
"""

from __future__ import annotations
import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

_LOGGER = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

DEFAULT_PRIORITY_MARKER = "CASA AMPLIA"
DEFAULT_MAX_CRITICAL_DAYS = 4
DEFAULT_UPCOMING_LIMIT = 3
DEFAULT_CHECK_IN_TIME = "14:00"
DEFAULT_CHECK_OUT_TIME = "11:00"
DEFAULT_UNKNOWN_PROPERTY = "Unknown"
DEFAULT_CACHE_SIZE = 64


# ---------------------------------------------------------------------------
# Dataclass Configuration
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Config:
    """Immutable configuration for the collision engine."""

    priority_marker: str = DEFAULT_PRIORITY_MARKER
    max_critical_days: int = DEFAULT_MAX_CRITICAL_DAYS
    upcoming_limit: int = DEFAULT_UPCOMING_LIMIT
    default_check_in_time: str = DEFAULT_CHECK_IN_TIME
    default_check_out_time: str = DEFAULT_CHECK_OUT_TIME
    unknown_property_label: str = DEFAULT_UNKNOWN_PROPERTY
    cache_size: int = DEFAULT_CACHE_SIZE


_cached_config: Optional[Config] = None


# ---------------------------------------------------------------------------
# Environment Handling
# ---------------------------------------------------------------------------

def _env_str(name: str, default: str) -> str:
    value = os.getenv(name, "").strip()
    return value or default


def _env_int(name: str, default: int, minimum: int = 0) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        _LOGGER.warning("Ignoring non-integer %s=%r; using %s", name, raw, default)
        return default
    if value < minimum:
        _LOGGER.warning("Ignoring %s=%s below minimum %s; using %s", name, value, minimum, default)
        return default
    return value


def load_config(refresh: bool = False) -> Config:
    """
    Load configuration from environment and cache the result.
    Parameters
    ----------
    refresh : bool
        If True, re-read environment variables and reinitialize Config.
    """
    global _cached_config
    if _cached_config is not None and not refresh:
        return _cached_config

    load_dotenv(override=False)

    _cached_config = Config(
        priority_marker=_env_str("TURNOVER_PRIORITY_MARKER", DEFAULT_PRIORITY_MARKER),
        max_critical_days=_env_int("TURNOVER_MAX_CRITICAL_DAYS", DEFAULT_MAX_CRITICAL_DAYS),
        upcoming_limit=_env_int("TURNOVER_UPCOMING_LIMIT", DEFAULT_UPCOMING_LIMIT),
        default_check_in_time=_env_str("TURNOVER_DEFAULT_CHECK_IN_TIME", DEFAULT_CHECK_IN_TIME),
        default_check_out_time=_env_str("TURNOVER_DEFAULT_CHECK_OUT_TIME", DEFAULT_CHECK_OUT_TIME),
        unknown_property_label=_env_str("TURNOVER_UNKNOWN_PROPERTY", DEFAULT_UNKNOWN_PROPERTY),
        cache_size=_env_int("TURNOVER_CACHE_SIZE", DEFAULT_CACHE_SIZE, minimum=1),
    )

    _LOGGER.debug(
        "Loaded configuration: marker=%s | max_days=%s | cache_size=%s",
        _cached_config.priority_marker,
        _cached_config.max_critical_days,
        _cached_config.cache_size,
    )
    return _cached_config


__all__ = [
    "Config",
    "load_config",
    "DEFAULT_PRIORITY_MARKER",
    "DEFAULT_CHECK_IN_TIME",
    "DEFAULT_CHECK_OUT_TIME",
]
