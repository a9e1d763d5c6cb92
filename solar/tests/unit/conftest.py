"""Shared fixtures for the solar unit tests."""

from zoneinfo import ZoneInfo

import pytest

ENV_VARS = [
    "LATITUDE",
    "HASS_LATITUDE",
    "LONGITUDE",
    "HASS_LONGITUDE",
    "TZ",
    "HASS_TIME_ZONE",
    "MIN_COLOR_TEMP",
    "MAX_COLOR_TEMP",
    "SOLAR_CONFIG_DIR",
]


@pytest.fixture
def los_angeles():
    """The America/Los_Angeles timezone."""
    return ZoneInfo("America/Los_Angeles")


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every environment variable the config layer reads."""
    for k in ENV_VARS:
        monkeypatch.delenv(k, raising=False)
    return monkeypatch
