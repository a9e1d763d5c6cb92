#!/usr/bin/env python3
"""Sun position calculator.

Computes dawn, sunrise, sunset and dusk for a given day and latitude using
the NOAA general solar position approximation:

https://gml.noaa.gov/grad/solcalc/solareqns.PDF

The longitude only refines the day truncation (up to +-1 hour); a longitude
of zero still gives usable results. Everything here is a pure function of
its inputs.
"""

from __future__ import annotations

import calendar
import logging
import math
import os
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone, tzinfo
from enum import IntEnum
from typing import Any, Dict, Optional

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .const import (
    CLOCK_FORMAT,
    DAYLIGHT_ZENITH,
    HALF_DAY_SECONDS,
    HOUR_SECONDS,
    TWILIGHT_ZENITH,
)

logger = logging.getLogger(__name__)


class SunCondition(IntEnum):
    """Condition of the sun for a given day."""
    NORMAL = 0          # Regular sunrise and sunset
    MIDNIGHT_SUN = 1    # Sun never sets (continuous daylight)
    POLAR_NIGHT = 2     # Sun never rises (continuous darkness)

    def __str__(self) -> str:
        return _CONDITION_NAMES[self]


_CONDITION_NAMES = {
    SunCondition.NORMAL: "normal sun",
    SunCondition.MIDNIGHT_SUN: "midnight sun",
    SunCondition.POLAR_NIGHT: "polar night sun",
}


def condition_name(value: int) -> str:
    """Format a condition tag, including tags that are not valid conditions."""
    try:
        return str(SunCondition(value))
    except ValueError:
        return f"SunCondition({value})"


@dataclass(frozen=True)
class SunTimes:
    """Times for the positions of the sun on a single day.

    The dates of the timestamps are the date given to compute_sun. The times
    are only all meaningful when condition is NORMAL; otherwise any of them
    may be None.
    """
    dawn: Optional[datetime]
    sunrise: Optional[datetime]
    sunset: Optional[datetime]
    dusk: Optional[datetime]
    condition: SunCondition = SunCondition.NORMAL

    def __str__(self) -> str:
        return (
            f"dawn at {_clock(self.dawn)}, sunrise at {_clock(self.sunrise)}, "
            f"sunset at {_clock(self.sunset)}, dusk at {_clock(self.dusk)}, "
            f"condition: {self.condition}"
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization. Absent times are omitted."""
        d: Dict[str, Any] = {}
        for name in ("dawn", "sunrise", "sunset", "dusk"):
            value = getattr(self, name)
            if value is not None:
                d[name] = value.isoformat()
        d["condition"] = str(self.condition)
        return d


def _clock(t: Optional[datetime]) -> str:
    if t is None:
        return "--:--:--"
    return t.strftime(CLOCK_FORMAT)


# ---------------------------------------------------------------------------
# Time helpers
# ---------------------------------------------------------------------------

def _require_aware(t: datetime) -> None:
    if t.tzinfo is None or t.utcoffset() is None:
        raise ValueError(f"timestamp must be timezone-aware, got naive {t!r}")


def add_seconds(t: datetime, secs: float) -> Optional[datetime]:
    """Add a float number of seconds to t on the absolute timeline.

    Returns None if secs is NaN.
    """
    if math.isnan(secs):
        return None

    frac, whole = math.modf(secs)
    delta = timedelta(seconds=whole, microseconds=frac * 1e6)
    return (t.astimezone(timezone.utc) + delta).astimezone(t.tzinfo)


def truncate_day(t: datetime) -> datetime:
    """Truncate t to the start of its day in its own timezone.

    The wall clock time of t is subtracted as an absolute duration, so on a
    DST transition day the result may read 01:00 instead of 00:00.
    """
    elapsed = timedelta(
        hours=t.hour,
        minutes=t.minute,
        seconds=t.second,
        microseconds=t.microsecond,
    )
    return (t.astimezone(timezone.utc) - elapsed).astimezone(t.tzinfo)


def longitude_time_offset(longitude: float) -> float:
    """Longitude offset in seconds."""
    return longitude * HALF_DAY_SECONDS / math.pi


def truncate_day_longitude(t: datetime, longitude: float) -> datetime:
    """Truncate t to the start of its day, then shift it by the longitude offset.

    The offset is reduced modulo one hour, keeping its sign. The raw offset
    is hours too large since t already carries its timezone; the sub-hour
    remainder tracks solar noon much more closely (Los Angeles sunrise goes
    from 6:40 to 6:10 against a real 6:19).
    """
    offset = longitude_time_offset(longitude)
    offset = math.fmod(offset, HOUR_SECONDS) if math.isfinite(offset) else 0.0
    return add_seconds(truncate_day(t), offset)


def yesterday(t: datetime) -> datetime:
    """The same instant 24 hours earlier."""
    return (t.astimezone(timezone.utc) - timedelta(hours=24)).astimezone(t.tzinfo)


def days_in_year(d: date) -> int:
    """Number of days in the calendar year of d (365 or 366)."""
    return 366 if calendar.isleap(d.year) else 365


# ---------------------------------------------------------------------------
# Solar equations
# ---------------------------------------------------------------------------

def date_orbit_angle(t: datetime) -> float:
    """Fractional year in radians."""
    return (2.0 * math.pi / days_in_year(t)) * t.timetuple().tm_yday


def equation_of_time(orbit_angle: float) -> float:
    """Equation of time (eqtime) for the given orbit angle."""
    return 4 * (0.000075
                + 0.001868 * math.cos(orbit_angle)
                - 0.032077 * math.sin(orbit_angle)
                - 0.014615 * math.cos(2 * orbit_angle)
                - 0.040849 * math.sin(2 * orbit_angle))


def sun_declination(orbit_angle: float) -> float:
    """Solar declination in radians."""
    return (0.006918
            - 0.399912 * math.cos(orbit_angle)
            + 0.070257 * math.sin(orbit_angle)
            - 0.006758 * math.cos(2 * orbit_angle)
            + 0.000907 * math.sin(2 * orbit_angle)
            - 0.002697 * math.cos(3 * orbit_angle)
            + 0.001480 * math.sin(3 * orbit_angle))


def sun_hour_angle(latitude: float, declination: float, target_zenith: float) -> Optional[float]:
    """Hour angle at which the sun crosses target_zenith, all in radians.

    Returns None when the sun never crosses that angle on this day.
    """
    if not math.isfinite(latitude):
        return None
    # Grouping follows wlsunset; the pinned sun times depend on it.
    cos_ha = (math.cos(target_zenith) / math.cos(latitude) * math.cos(declination)
              - math.tan(latitude) * math.tan(declination))
    if not -1.0 <= cos_ha <= 1.0:
        return None
    return math.acos(cos_ha)


def hour_angle_to_seconds_offset(hour_angle: float, eqtime: float) -> float:
    """Seconds from the start of the day for the given hour angle.

    The inner term is in minute-radians; it is converted to minute-degrees
    before scaling to seconds.
    """
    return math.degrees((4.0 * math.pi - 4 * hour_angle - eqtime) * 60)


def calc_condition(latitude: float, declination: float) -> SunCondition:
    """Classify a day without normal sun crossings.

    Latitude and declination on the same side of the equator mean the sun
    never sets. Only sign bits are compared, so signed zeros and signed NaNs
    classify by their sign.
    """
    if math.copysign(1.0, latitude) == math.copysign(1.0, declination):
        return SunCondition.MIDNIGHT_SUN
    return SunCondition.POLAR_NIGHT


def _event_time(
    day: datetime, hour_angle: Optional[float], eqtime: float, morning: bool
) -> Optional[datetime]:
    if hour_angle is None:
        return None
    ha = abs(hour_angle) if morning else -abs(hour_angle)
    return add_seconds(day, hour_angle_to_seconds_offset(ha, eqtime))


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def compute_sun(t: datetime, latitude: float, longitude: float = 0.0) -> SunTimes:
    """Calculate the sun times and condition for the day of t.

    Args:
        t: Timezone-aware timestamp; its timezone determines the day
        latitude: Latitude in degrees, [-90, 90] (not enforced)
        longitude: Longitude in degrees; only improves accuracy by up to +-1 hour

    Returns:
        SunTimes for the day. If the condition is not NORMAL, some of the
        times may be None.
    """
    _require_aware(t)

    day = truncate_day_longitude(t, longitude)
    latitude_rad = math.radians(latitude)

    orbit_angle = date_orbit_angle(day)
    decl = sun_declination(orbit_angle)
    eqtime = equation_of_time(orbit_angle)

    ha_twilight = sun_hour_angle(latitude_rad, decl, TWILIGHT_ZENITH)
    ha_daylight = sun_hour_angle(latitude_rad, decl, DAYLIGHT_ZENITH)

    if ha_twilight is None or ha_daylight is None:
        condition = calc_condition(latitude_rad, decl)
    else:
        condition = SunCondition.NORMAL

    logger.debug(
        f"Sun for {day.isoformat()}: decl={decl:.5f} eqtime={eqtime:.5f} "
        f"ha_twilight={ha_twilight} ha_daylight={ha_daylight} -> {condition}"
    )

    return SunTimes(
        dawn=_event_time(day, ha_twilight, eqtime, morning=True),
        sunrise=_event_time(day, ha_daylight, eqtime, morning=True),
        sunset=_event_time(day, ha_daylight, eqtime, morning=False),
        dusk=_event_time(day, ha_twilight, eqtime, morning=False),
        condition=condition,
    )


# ---------------------------------------------------------------------------
# Longitude estimation (configuration boundary only)
# ---------------------------------------------------------------------------

def time_longitude(t: datetime) -> float:
    """Estimate a longitude from the UTC offset of t.

    DST moves clocks forward, so the DST shift is removed first. Each hour
    of offset is 15 degrees.
    """
    _require_aware(t)
    offset = t.utcoffset()
    dst = t.dst()
    if dst:
        offset -= dst
    return offset.total_seconds() / 3600 * 15


def _zone_from_file(path: str) -> Optional[tzinfo]:
    try:
        with open(path, 'rb') as f:
            return ZoneInfo.from_file(f)
    except (OSError, ValueError) as e:
        logger.debug(f"Could not read timezone file {path}: {e}")
        return None


def system_timezone() -> tzinfo:
    """The system local timezone, including its DST rules.

    Resolved from $TZ (a zone name or a path to a zone file), falling back
    to /etc/localtime. If neither can be read, returns the current fixed
    UTC offset, whose dst() is unknown.
    """
    name = os.environ.get("TZ", "").lstrip(":")
    if name:
        if os.path.isabs(name):
            zone = _zone_from_file(name)
            if zone is not None:
                return zone
        else:
            try:
                return ZoneInfo(name)
            except (ZoneInfoNotFoundError, ValueError):
                logger.debug(f"TZ={name!r} is not an IANA zone name")
    else:
        zone = _zone_from_file("/etc/localtime")
        if zone is not None:
            return zone

    logger.info("System timezone rules unknown, using the current UTC offset")
    return datetime.now().astimezone().tzinfo


def local_longitude(now: Optional[datetime] = None) -> float:
    """Estimate the longitude from the system timezone."""
    if now is None:
        now = datetime.now(system_timezone())
    return time_longitude(now)
