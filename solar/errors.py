"""Exceptions raised by the solar package."""


class SolarError(Exception):
    """Base class for all solar errors."""


class InvariantError(SolarError, AssertionError):
    """An internal invariant was violated; indicates a programming bug."""


class ConfigError(SolarError, ValueError):
    """A configuration value is malformed."""
