"""Color temperature interpolation over the course of a day.

The temperature stays at the low bound during the night, ramps linearly to
the high bound between dawn and sunrise, stays high during the day and ramps
back down between sunset and dusk.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Tuple

from .const import DEFAULT_HIGH_TEMPERATURE, DEFAULT_LOW_TEMPERATURE
from .errors import InvariantError
from .sun import SunCondition, SunTimes, compute_sun, condition_name, yesterday

logger = logging.getLogger(__name__)

# Color temperature in Kelvin
Temperature = float


def clamp(value: float) -> float:
    """Clamp value to [0.0, 1.0]."""
    if value > 1.0:
        return 1.0
    if value < 0.0:
        return 0.0
    return value


def _instant(t: datetime) -> datetime:
    # Aware datetimes sharing a tzinfo compare by wall clock, which misorders
    # the repeated hour of a DST fall-back. Compare on UTC instead.
    return t.astimezone(timezone.utc)


def interp_temperature(
    t: datetime,
    start: datetime,
    stop: datetime,
    temp_start: Temperature,
    temp_stop: Temperature,
) -> Temperature:
    """Linearly interpolate the temperature for t within [start, stop]."""
    if temp_start == temp_stop:
        return temp_stop

    span = (_instant(stop) - _instant(start)).total_seconds()
    if span <= 0:
        return temp_stop if _instant(t) >= _instant(stop) else temp_start

    position = clamp((_instant(t) - _instant(start)).total_seconds() / span)
    return temp_start + (temp_stop - temp_start) * position


def _temperature_normal(
    t: datetime, sun: SunTimes, low: Temperature, high: Temperature
) -> Temperature:
    now = _instant(t)
    if now < _instant(sun.dawn):
        window = "night"
        result = low
    elif now < _instant(sun.sunrise):
        window = "dawn"
        result = interp_temperature(t, sun.dawn, sun.sunrise, low, high)
    elif now < _instant(sun.sunset):
        window = "day"
        result = high
    elif now < _instant(sun.dusk):
        window = "dusk"
        result = interp_temperature(t, sun.sunset, sun.dusk, high, low)
    else:
        window = "night"
        result = low

    logger.debug(f"{t.isoformat()} in {window} window -> {result:.0f}K")
    return result


def interpolate_day_temperature(
    t: datetime,
    sun: SunTimes,
    low: Temperature = DEFAULT_LOW_TEMPERATURE,
    high: Temperature = DEFAULT_HIGH_TEMPERATURE,
) -> Temperature:
    """Temperature at t for the day described by sun.

    Normal days follow the dawn/sunrise/sunset/dusk windows. A midnight sun
    day is high throughout and a polar night is low throughout; see
    current_temperature for the ramp into a midnight sun.

    Args:
        t: Timezone-aware timestamp on the day of sun
        sun: Sun times for the day of t
        low: Night temperature in Kelvin
        high: Day temperature in Kelvin
    """
    if sun.condition == SunCondition.NORMAL:
        return _temperature_normal(t, sun, low, high)
    if sun.condition == SunCondition.MIDNIGHT_SUN:
        return high
    if sun.condition == SunCondition.POLAR_NIGHT:
        # No evening ramp into polar night, same as wlsunset.
        return low
    raise InvariantError(f"unreachable: unknown sun condition {condition_name(sun.condition)}")


def current_temperature(
    t: datetime,
    latitude: float,
    longitude: float = 0.0,
    low: Temperature = DEFAULT_LOW_TEMPERATURE,
    high: Temperature = DEFAULT_HIGH_TEMPERATURE,
) -> Tuple[Temperature, SunTimes]:
    """Calculate the color temperature at t for the given location.

    Args:
        t: Timezone-aware timestamp
        latitude: Latitude in degrees
        longitude: Longitude in degrees (accuracy refinement only)
        low: Minimum (night) temperature in Kelvin
        high: Maximum (day) temperature in Kelvin

    Returns:
        Tuple of (temperature, sun times for the day of t)
    """
    current = compute_sun(t, latitude, longitude)

    if current.condition == SunCondition.MIDNIGHT_SUN:
        # A midnight sun day following a normal day still gets its dawn ramp.
        previous = compute_sun(yesterday(t), latitude, longitude)
        if (
            previous.condition == SunCondition.NORMAL
            and current.sunrise is not None
            and _instant(t) < _instant(current.sunrise)
        ):
            if current.dawn is None:
                return high, current
            return _temperature_normal(t, current, low, high), current

    return interpolate_day_temperature(t, current, low, high), current
