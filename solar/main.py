#!/usr/bin/env python3
"""Command line front end: print today's sun times and color temperature.

Example usage:
    solar --lat 34.1 --long -118.2
    solar --city London --json
    solar --lat 69.6 --now 1655812800 --tz Europe/Oslo
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import time
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional, TextIO

from astral import LocationInfo
from astral.geocoder import database, lookup

from .config import Config, load_config
from .errors import ConfigError
from .sun import SunTimes, system_timezone, time_longitude
from .temperature import Temperature, current_temperature
from .whitepoint import RGB, whitepoint

logger = logging.getLogger(__name__)


@dataclass
class Results:
    """Everything printed for one run."""
    latitude: float
    longitude: float
    temperature: Temperature
    whitepoint: RGB
    sun: SunTimes
    location: Optional[LocationInfo] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        d: Dict[str, Any] = {
            "latitude": self.latitude,
            "longitude": self.longitude,
        }
        if self.location is not None:
            d["location"] = {
                "name": self.location.name,
                "region": self.location.region,
                "timezone": self.location.timezone,
            }
        d["temperature"] = self.temperature
        d["whitepoint"] = list(self.whitepoint)
        d["sun"] = self.sun.to_dict()
        return d

    def print_json(self, out: TextIO) -> None:
        json.dump(self.to_dict(), out, indent=2)
        out.write("\n")

    def print_text(self, out: TextIO, time_format: str) -> None:
        out.write(f"latitude: {self.latitude:g}\n")
        out.write(f"longitude: {self.longitude:g}\n")
        if self.location is not None:
            out.write(f"location: {self.location.name}, {self.location.region}\n")
        out.write(f"sun condition: {self.sun.condition}\n")
        for label, t in (
            ("dawn time", self.sun.dawn),
            ("sunrise time", self.sun.sunrise),
            ("sunset time", self.sun.sunset),
            ("dusk time", self.sun.dusk),
        ):
            if t is not None:
                out.write(f"{label}: {t.strftime(time_format)}\n")
        out.write(f"color temperature: {self.temperature:.0f}K\n")
        r, g, b = self.whitepoint
        out.write(f"whitepoint: {r:.4f} {g:.4f} {b:.4f}\n")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="solar",
        description="Calculate sun times and the night light color temperature.",
    )
    parser.add_argument("--lat", type=float, dest="latitude", help="latitude in degrees")
    parser.add_argument("--long", type=float, dest="longitude",
                        help="longitude in degrees, optional (default: estimated from the timezone)")
    parser.add_argument("--lo", type=float, dest="low_temperature", help="lowest temperature in Kelvin")
    parser.add_argument("--hi", type=float, dest="high_temperature", help="highest temperature in Kelvin")
    parser.add_argument("-t", "--time-format", dest="time_format", help="strftime format for times")
    parser.add_argument("--now", type=int, default=None, help="current time in Unix seconds")
    parser.add_argument("--tz", dest="timezone", help="IANA timezone (default: system local)")
    parser.add_argument("-c", "--city", dest="city",
                        help="city name to look up, takes precedence over --lat and --long")
    parser.add_argument("-j", "--json", action="store_true", help="print JSON instead of human-readable")
    parser.add_argument("--config-dir", help="directory holding options.json")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    return parser


def lookup_city(name: str) -> LocationInfo:
    """Look up a city in astral's built-in database.

    Raises:
        KeyError: If the city is unknown
    """
    found = lookup(name, database())
    if not isinstance(found, LocationInfo):
        raise KeyError(name)
    return found


def resolve_time(now: Optional[int], config: Config) -> datetime:
    """The instant to calculate for, localized to the configured timezone."""
    ts = time.time() if now is None else now
    tz = config.tzinfo()
    if tz is None:
        tz = system_timezone()
    return datetime.fromtimestamp(ts, tz)


def run(config: Config, now: datetime, location: Optional[LocationInfo] = None) -> Results:
    """Calculate the results for a resolved configuration."""
    longitude = config.longitude
    if longitude is None:
        longitude = time_longitude(now)
        logger.info(f"Estimated longitude {longitude:g} from timezone {now.tzname()}")

    temp, sun = current_temperature(
        now, config.latitude, longitude, config.low_temperature, config.high_temperature
    )
    return Results(
        latitude=config.latitude,
        longitude=longitude,
        temperature=temp,
        whitepoint=whitepoint(temp),
        sun=sun,
        location=location,
    )


def main(argv: Optional[List[str]] = None, out: Optional[TextIO] = None) -> int:
    out = out or sys.stdout
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stderr,
    )

    overrides = {
        "latitude": args.latitude,
        "longitude": args.longitude,
        "low_temperature": args.low_temperature,
        "high_temperature": args.high_temperature,
        "time_format": args.time_format,
        "timezone": args.timezone,
        "city": args.city,
    }
    try:
        config = load_config(args.config_dir, overrides)
    except ConfigError as e:
        parser.error(str(e))

    location = None
    if config.city:
        try:
            location = lookup_city(config.city)
        except KeyError:
            parser.error(f"unknown city: {config.city}")
        config.latitude = location.latitude
        config.longitude = location.longitude
        if args.timezone is None:
            config.timezone = location.timezone

    now = resolve_time(args.now, config)
    results = run(config, now, location)

    if args.json:
        results.print_json(out)
    else:
        results.print_text(out, config.time_format)
    return 0


if __name__ == "__main__":
    sys.exit(main())
