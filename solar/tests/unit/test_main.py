#!/usr/bin/env python3
"""Test the command line front end in main.py."""

import io
import json
from datetime import timedelta

import pytest

from solar.config import Config
from solar.main import lookup_city, main, resolve_time

# 11/07/2021 05:12:47 PM PST, the day Daylight Saving Time ended.
DST_END_UNIX = 1636333967

LA_ARGS = [
    "--lat", "34.1",
    "--long", "-118.2",
    "--tz", "America/Los_Angeles",
]


@pytest.fixture
def run_cli(tmp_path, clean_env):
    """Run main() with an empty config directory and return its output."""
    def run(*args):
        out = io.StringIO()
        code = main(["--config-dir", str(tmp_path), *args], out=out)
        assert code == 0
        return out.getvalue()
    return run


class TestTextOutput:
    """Human-readable output."""

    def test_los_angeles_evening(self, run_cli):
        output = run_cli(*LA_ARGS, "--now", str(DST_END_UNIX))

        assert "latitude: 34.1\n" in output
        assert "longitude: -118.2\n" in output
        assert "sun condition: normal sun\n" in output
        assert "dawn time: 05:28:" in output
        assert "sunrise time: 06:10:" in output
        assert "sunset time: 16:18:" in output
        assert "dusk time: 17:00:" in output
        # 5:12 PM is past dusk.
        assert "color temperature: 4000K\n" in output
        assert "whitepoint: 1.0000 0.8234 0.5976\n" in output

    def test_midday_is_neutral(self, run_cli):
        noon = DST_END_UNIX - 5 * 3600
        output = run_cli(*LA_ARGS, "--now", str(noon))

        assert "color temperature: 6500K\n" in output
        assert "whitepoint: 1.0000 1.0000 1.0000\n" in output

    def test_custom_bounds(self, run_cli):
        output = run_cli(*LA_ARGS, "--now", str(DST_END_UNIX), "--lo", "3000", "--hi", "5000")
        assert "color temperature: 3000K\n" in output

    def test_time_format(self, run_cli):
        output = run_cli(*LA_ARGS, "--now", str(DST_END_UNIX), "-t", "%I:%M %p")
        assert "sunrise time: 06:10 AM\n" in output
        assert "sunset time: 04:18 PM\n" in output

    def test_polar_night_hides_missing_times(self, run_cli):
        # 2022-12-21 11:00 UTC
        output = run_cli(
            "--lat", "69.65", "--long", "18.96", "--tz", "Europe/Oslo", "--now", "1671620400",
        )
        assert "sun condition: polar night sun\n" in output
        assert "sunrise time" not in output
        assert "sunset time" not in output
        assert "dawn time" in output
        assert "color temperature: 4000K\n" in output


class TestJsonOutput:
    """Machine-readable output."""

    def test_structure(self, run_cli):
        output = run_cli(*LA_ARGS, "--now", str(DST_END_UNIX), "--json")
        data = json.loads(output)

        assert data["latitude"] == 34.1
        assert data["longitude"] == -118.2
        assert data["temperature"] == 4000
        assert data["whitepoint"] == pytest.approx([1, 0.823415, 0.597612], abs=1e-5)
        assert data["sun"]["condition"] == "normal sun"
        assert data["sun"]["sunrise"].startswith("2021-11-07T06:10:")
        assert data["sun"]["sunrise"].endswith("-08:00")
        assert "location" not in data

    def test_longitude_estimated_from_timezone(self, run_cli):
        output = run_cli(
            "--lat", "34.1", "--tz", "America/Los_Angeles", "--now", str(DST_END_UNIX), "-j",
        )
        assert json.loads(output)["longitude"] == -120.0

    def test_longitude_estimated_from_system_timezone_in_summer(self, run_cli, monkeypatch):
        monkeypatch.setenv("TZ", "America/Los_Angeles")
        # 2021-07-01 12:00 UTC, during PDT
        data = json.loads(run_cli("--lat", "34.1", "--now", "1625140800", "-j"))

        assert data["longitude"] == -120.0
        assert data["sun"]["sunrise"].endswith("-07:00")

    def test_resolve_time_uses_system_zone_rules(self, clean_env):
        clean_env.setenv("TZ", "America/Los_Angeles")
        now = resolve_time(1625140800, Config())
        assert now.dst() == timedelta(hours=1)
        assert now.utcoffset() == timedelta(hours=-7)

    def test_settings_from_options_file(self, run_cli, tmp_path):
        (tmp_path / "options.json").write_text(json.dumps({
            "latitude": 34.1,
            "longitude": -118.2,
            "timezone": "America/Los_Angeles",
            "high_temperature": 6000,
        }))
        noon = DST_END_UNIX - 5 * 3600
        data = json.loads(run_cli("--now", str(noon), "-j"))

        assert data["latitude"] == 34.1
        assert data["temperature"] == 6000


class TestCity:
    """Offline city lookup."""

    def test_lookup(self):
        london = lookup_city("London")
        assert london.latitude == pytest.approx(51.5, abs=0.1)
        assert london.timezone == "Europe/London"

    def test_lookup_unknown(self):
        with pytest.raises(KeyError):
            lookup_city("Atlantis-under-the-sea")

    def test_city_sets_location(self, run_cli):
        data = json.loads(run_cli("--city", "London", "--now", str(DST_END_UNIX), "--json"))

        assert data["location"]["name"] == "London"
        assert data["location"]["timezone"] == "Europe/London"
        assert data["latitude"] == pytest.approx(51.5, abs=0.1)
        assert data["sun"]["condition"] == "normal sun"
        assert data["sun"]["sunrise"].startswith("2021-11-08T")

    def test_unknown_city_exits(self, tmp_path, clean_env):
        with pytest.raises(SystemExit) as exc:
            main(["--config-dir", str(tmp_path), "--city", "Atlantis-under-the-sea"], out=io.StringIO())
        assert exc.value.code == 2


class TestErrors:
    """Invalid configuration."""

    def test_invalid_temperature_exits(self, tmp_path, clean_env):
        with pytest.raises(SystemExit) as exc:
            main(["--config-dir", str(tmp_path), "--lo", "0"], out=io.StringIO())
        assert exc.value.code == 2
