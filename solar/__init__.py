from .const import DEFAULT_HIGH_TEMPERATURE, DEFAULT_LOW_TEMPERATURE
from .errors import ConfigError, InvariantError, SolarError
from .sun import (
    SunCondition,
    SunTimes,
    compute_sun,
    days_in_year,
    local_longitude,
    system_timezone,
    time_longitude,
)
from .temperature import (
    Temperature,
    current_temperature,
    interpolate_day_temperature,
)
from .whitepoint import whitepoint

__all__ = [
    "DEFAULT_HIGH_TEMPERATURE",
    "DEFAULT_LOW_TEMPERATURE",
    "ConfigError",
    "InvariantError",
    "SolarError",
    "SunCondition",
    "SunTimes",
    "compute_sun",
    "days_in_year",
    "local_longitude",
    "system_timezone",
    "time_longitude",
    "Temperature",
    "current_temperature",
    "interpolate_day_temperature",
    "whitepoint",
]
