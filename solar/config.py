#!/usr/bin/env python3
"""Configuration for the solar command line.

Settings are layered, later layers winning:

* built-in defaults
* options.json in the config directory
* environment variables (plain or Home Assistant style)
* command line flags (applied by main.py)

Nothing here is read by the calculation modules; the resolved values are
passed to them as plain arguments.
"""

import json
import logging
import os
from dataclasses import dataclass, fields
from datetime import tzinfo
from typing import Any, Dict, Optional, Sequence

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .const import (
    CLOCK_FORMAT,
    DEFAULT_HIGH_TEMPERATURE,
    DEFAULT_LOW_TEMPERATURE,
    ENV_CONFIG_DIR,
    ENV_LATITUDE,
    ENV_LONGITUDE,
    ENV_MAX_COLOR_TEMP,
    ENV_MIN_COLOR_TEMP,
    ENV_TIME_ZONE,
    OPTIONS_FILENAME,
)
from .errors import ConfigError

logger = logging.getLogger(__name__)


@dataclass
class Config:
    """Resolved settings for one run."""
    latitude: float = 0.0
    longitude: Optional[float] = None      # None = estimate from the timezone
    low_temperature: float = DEFAULT_LOW_TEMPERATURE
    high_temperature: float = DEFAULT_HIGH_TEMPERATURE
    timezone: Optional[str] = None         # IANA name; None = system local
    time_format: str = CLOCK_FORMAT
    city: Optional[str] = None

    def __post_init__(self) -> None:
        self.latitude = _to_float("latitude", self.latitude)
        if self.longitude is not None:
            self.longitude = _to_float("longitude", self.longitude)
        self.low_temperature = _to_temperature("low_temperature", self.low_temperature)
        self.high_temperature = _to_temperature("high_temperature", self.high_temperature)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Config":
        """Create from dictionary. Unknown keys are ignored."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(k for k in data if k not in known)
        if unknown:
            logger.warning(f"Ignoring unknown config keys: {unknown}")
        return cls(**{k: v for k, v in data.items() if k in known})

    def tzinfo(self) -> Optional[tzinfo]:
        """The configured timezone, or None for the system local zone."""
        if not self.timezone:
            return None
        try:
            return ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError):
            logger.warning("Unknown timezone '%s' – falling back to system local", self.timezone)
            return None


def _to_float(name: str, value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{name} must be a number, got {value!r}") from None


def _to_temperature(name: str, value: Any) -> float:
    temp = _to_float(name, value)
    if not temp > 0:
        raise ConfigError(f"{name} must be a positive temperature in Kelvin, got {value!r}")
    return temp


def get_config_directory() -> str:
    """Directory holding options.json."""
    return os.getenv(ENV_CONFIG_DIR) or os.path.join(os.path.expanduser("~"), ".config", "solar")


def load_options(config_dir: Optional[str] = None) -> Dict[str, Any]:
    """Load options.json from the config directory.

    A missing, unreadable or corrupt file yields an empty dict.
    """
    if config_dir is None:
        config_dir = get_config_directory()

    path = os.path.join(config_dir, OPTIONS_FILENAME)
    if not os.path.exists(path):
        logger.debug(f"No options file at {path}")
        return {}

    try:
        with open(path, 'r') as f:
            options = json.load(f)
    except json.JSONDecodeError as e:
        logger.warning(f"JSON error reading {path}: {e}")
        return {}
    except OSError as e:
        logger.warning(f"Could not read {path}: {e}")
        return {}

    if not isinstance(options, dict):
        logger.warning(f"Ignoring {path}: expected a JSON object, got {type(options).__name__}")
        return {}

    logger.info(f"Loaded options from {path}")
    return options


def _first_env(names: Sequence[str]) -> Optional[str]:
    for name in names:
        value = os.getenv(name)
        if value:
            return value
    return None


def load_environment() -> Dict[str, Any]:
    """Collect settings from environment variables."""
    env: Dict[str, Any] = {}

    latitude = _first_env(ENV_LATITUDE)
    if latitude is not None:
        env["latitude"] = latitude
    longitude = _first_env(ENV_LONGITUDE)
    if longitude is not None:
        env["longitude"] = longitude
    tz = _first_env(ENV_TIME_ZONE)
    if tz is not None:
        env["timezone"] = tz

    low = os.getenv(ENV_MIN_COLOR_TEMP)
    if low:
        env["low_temperature"] = low
    high = os.getenv(ENV_MAX_COLOR_TEMP)
    if high:
        env["high_temperature"] = high

    return env


def load_config(
    config_dir: Optional[str] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> Config:
    """Load the layered configuration.

    Args:
        config_dir: Directory holding options.json. If None, auto-detected.
        overrides: Highest-precedence values (e.g. command line flags);
            None values are skipped.

    Returns:
        The resolved Config

    Raises:
        ConfigError: If a value is malformed
    """
    merged: Dict[str, Any] = {}
    merged.update(load_options(config_dir))
    merged.update(load_environment())
    if overrides:
        merged.update({k: v for k, v in overrides.items() if v is not None})

    config = Config.from_dict(merged)
    logger.debug(f"Resolved config: {config.to_dict()}")
    return config
