"""Whitepoint calculation for a color temperature.

Maps a temperature in Kelvin to CIE xy chromaticity (daylight locus, black
body locus, or a blend of the two), converts it to sRGB and normalizes the
channels so the brightest one is 1.0. The constants match the color math
in wlsunset:

https://git.sr.ht/~kennylevinsen/wlsunset/tree/master/item/color_math.c
"""

from __future__ import annotations

import math
from typing import Tuple

from .const import NEUTRAL_TEMPERATURE
from .errors import InvariantError

RGB = Tuple[float, float, float]

# wlsunset encodes with 2.2 rather than the 2.4 of the sRGB standard.
GAMMA = 2.2


def illuminant_d(temp: float) -> Tuple[float, float]:
    """Chromaticity on the daylight locus (standard illuminant series D).

    D65, the whitepoint assumed by most monitors, sits on this locus. The
    approximation is defined from 4000K to 25000K; it is stretched down to
    2500K for the blend into the black body locus.

    https://en.wikipedia.org/wiki/Standard_illuminant#Illuminant_series_D
    """
    if 2500 <= temp <= 7000:
        x = (0.244063
             + 0.09911e3 / temp
             + 2.9678e6 / temp ** 2
             - 4.6070e9 / temp ** 3)
    elif 7000 < temp <= 25000:
        x = (0.237040
             + 0.24748e3 / temp
             + 1.9018e6 / temp ** 2
             - 2.0064e9 / temp ** 3)
    else:
        raise InvariantError(f"unreachable: temp {temp:f} out of range [2500, 25000]")

    y = (-3 * x ** 2) + (2.870 * x) - 0.275
    return x, y


def planckian_locus(temp: float) -> Tuple[float, float]:
    """Chromaticity of a black body radiator, valid from 1667K to 25000K.

    https://en.wikipedia.org/wiki/Planckian_locus#Approximation
    """
    if 1667 <= temp <= 4000:
        x = (-0.2661239e9 / temp ** 3
             - 0.2343589e6 / temp ** 2
             + 0.8776956e3 / temp
             + 0.179910)
        # The locus bends sharply below 2222K.
        if temp <= 2222:
            y = (-1.1064814 * x ** 3
                 - 1.34811020 * x ** 2
                 + 2.18555832 * x
                 - 0.20219683)
        else:
            y = (-0.9549476 * x ** 3
                 - 1.37418593 * x ** 2
                 + 2.09137015 * x
                 - 0.16748867)
    elif 4000 < temp < 25000:
        x = (-3.0258469e9 / temp ** 3
             + 2.1070379e6 / temp ** 2
             + 0.2226347e3 / temp
             + 0.240390)
        y = (3.0817580 * x ** 3
             - 5.87338670 * x ** 2
             + 3.75112997 * x
             - 0.37001483)
    else:
        raise InvariantError(f"unreachable: temp {temp:f} out of range [1667, 25000]")
    return x, y


def srgb_gamma(value: float, gamma: float = GAMMA) -> float:
    """Gamma-encode a linear channel value."""
    if value <= 0.0031308:
        return 12.92 * value
    return (1.055 * value) ** (1.0 / gamma) - 0.055


def _clamp(value: float) -> float:
    return max(0.0, min(1.0, value))


def xyz_to_srgb(x: float, y: float, z: float) -> RGB:
    """Convert XYZ to gamma-encoded sRGB, clamping linear channels to [0, 1].

    http://www.brucelindbloom.com/index.html?Eqn_RGB_XYZ_Matrix.html
    """
    r = srgb_gamma(_clamp(3.2404542 * x - 1.5371385 * y - 0.4985314 * z))
    g = srgb_gamma(_clamp(-0.9692660 * x + 1.8760108 * y + 0.0415560 * z))
    b = srgb_gamma(_clamp(0.0556434 * x - 0.2040259 * y + 1.0572252 * z))
    return r, g, b


def srgb_normalize(r: float, g: float, b: float) -> RGB:
    """Scale the channels so the largest is 1.0."""
    maxw = max(r, g, b)
    return r / maxw, g / maxw, b / maxw


def chromaticity(temp: float) -> Tuple[float, float]:
    """CIE xy chromaticity for a temperature, clamped to [1667, 25000]K."""
    if temp >= 25000:
        return illuminant_d(25000)
    if temp >= 4000:
        return illuminant_d(temp)
    if temp >= 2500:
        # Raised cosine blend across 2500-4000K where the two loci diverge.
        x1, y1 = illuminant_d(temp)
        x2, y2 = planckian_locus(temp)
        factor = (4000 - temp) / 1500
        weight = (math.cos(math.pi * factor) + 1.0) / 2.0
        return x1 * weight + x2 * (1.0 - weight), y1 * weight + y2 * (1.0 - weight)
    if temp >= 1667:
        return planckian_locus(temp)
    # Below range and NaN
    return planckian_locus(1667)


def whitepoint(temp: float) -> RGB:
    """Whitepoint multipliers for the red, green and blue channels.

    Temperatures outside 1667K-25000K are clamped. 6500K is white,
    (1.0, 1.0, 1.0). All channels are within [0.0, 1.0].
    """
    if temp == NEUTRAL_TEMPERATURE:
        return 1.0, 1.0, 1.0

    x, y = chromaticity(temp)
    z = 1.0 - x - y

    return srgb_normalize(*xyz_to_srgb(x, y, z))
