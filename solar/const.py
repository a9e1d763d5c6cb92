"""Constants for the solar package."""
import math
from typing import Final

# Color temperature bounds (Kelvin)
DEFAULT_LOW_TEMPERATURE: Final = 4000.0
DEFAULT_HIGH_TEMPERATURE: Final = 6500.0
NEUTRAL_TEMPERATURE: Final = 6500.0

# Solar zenith angles in radians
TWILIGHT_ZENITH: Final = math.radians(90.833 + 6)  # civil dawn/dusk
DAYLIGHT_ZENITH: Final = math.radians(90.833 - 3)  # sunrise/sunset

HALF_DAY_SECONDS: Final = 43200
HOUR_SECONDS: Final = 3600

# Default strftime format for event times
CLOCK_FORMAT: Final = "%H:%M:%S"

# Configuration
OPTIONS_FILENAME: Final = "options.json"
ENV_CONFIG_DIR: Final = "SOLAR_CONFIG_DIR"
ENV_LATITUDE: Final = ("LATITUDE", "HASS_LATITUDE")
ENV_LONGITUDE: Final = ("LONGITUDE", "HASS_LONGITUDE")
ENV_TIME_ZONE: Final = ("TZ", "HASS_TIME_ZONE")
ENV_MIN_COLOR_TEMP: Final = "MIN_COLOR_TEMP"
ENV_MAX_COLOR_TEMP: Final = "MAX_COLOR_TEMP"
