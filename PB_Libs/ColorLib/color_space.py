"""
Color space conversion for PixelBead.

Converts sRGB colors to CIE L*a*b* (D65 reference white) and measures the
CIE76 color difference between two Lab colors. Matching and denoise
thresholds are tuned for CIE76, so the distance metric is intentionally
the plain Euclidean one.

Functions:
    rgb_to_lab: Convert an sRGB triple (0-255) to Lab
    delta_e: CIE76 distance between two Lab colors
    hex_to_rgb: Parse '#RRGGBB' into an RGB triple
    rgb_to_hex: Format an RGB triple as '#rrggbb'
    text_color_for: Pick a readable label color for a bead swatch
"""

import math
import re
from typing import NamedTuple, Tuple

from PB_Libs.constants import TEXT_LUMA_THRESHOLD, TEXT_COLOR_DARK, TEXT_COLOR_LIGHT

RgbColor = Tuple[int, int, int]

# D65 reference white, XYZ scaled to 0-100
REF_X = 95.047
REF_Y = 100.000
REF_Z = 108.883

_HEX_PATTERN = re.compile(r"^#?([0-9a-fA-F]{2})([0-9a-fA-F]{2})([0-9a-fA-F]{2})$")


class LabColor(NamedTuple):
    l: float
    a: float
    b: float


def _inverse_gamma(value: float) -> float:
    if value > 0.04045:
        return ((value + 0.055) / 1.055) ** 2.4
    return value / 12.92


def _lab_f(t: float) -> float:
    if t > 0.008856:
        return t ** (1.0 / 3.0)
    return 7.787 * t + 16.0 / 116.0


def rgb_to_lab(r: float, g: float, b: float) -> LabColor:
    """
    Convert an sRGB color to CIE L*a*b*.

    Args:
        r, g, b: Channel values in [0, 255]. Floats are accepted so averaged
            samples do not have to be rounded first.

    Returns:
        LabColor(l, a, b)
    """
    red = _inverse_gamma(r / 255.0)
    green = _inverse_gamma(g / 255.0)
    blue = _inverse_gamma(b / 255.0)

    x = (red * 0.4124 + green * 0.3576 + blue * 0.1805) * 100.0
    y = (red * 0.2126 + green * 0.7152 + blue * 0.0722) * 100.0
    z = (red * 0.0193 + green * 0.1192 + blue * 0.9505) * 100.0

    fx = _lab_f(x / REF_X)
    fy = _lab_f(y / REF_Y)
    fz = _lab_f(z / REF_Z)

    return LabColor(
        116.0 * fy - 16.0,
        500.0 * (fx - fy),
        200.0 * (fy - fz),
    )


def delta_e(lab1: Tuple[float, float, float], lab2: Tuple[float, float, float]) -> float:
    """CIE76 color difference (Euclidean distance in Lab)."""
    return math.sqrt(
        (lab1[0] - lab2[0]) ** 2
        + (lab1[1] - lab2[1]) ** 2
        + (lab1[2] - lab2[2]) ** 2
    )


def hex_to_rgb(hex_value: str) -> RgbColor:
    """
    Convert '#RRGGBB' (leading '#' optional) to an (R, G, B) tuple.

    Raises:
        ValueError: If the string is not a six-digit hex color
    """
    match = _HEX_PATTERN.match(str(hex_value).strip())
    if match is None:
        raise ValueError(f"Invalid hex color: {hex_value!r}")
    return int(match.group(1), 16), int(match.group(2), 16), int(match.group(3), 16)


def rgb_to_hex(r: float, g: float, b: float) -> str:
    channels = (max(0, min(255, int(math.floor(value + 0.5)))) for value in (r, g, b))
    return "#" + "".join(f"{channel:02x}" for channel in channels)


def text_color_for(hex_value: str) -> str:
    """Return black or white, whichever reads better on top of the given color."""
    r, g, b = hex_to_rgb(hex_value)
    luma = r * 0.299 + g * 0.587 + b * 0.114
    return TEXT_COLOR_DARK if luma > TEXT_LUMA_THRESHOLD else TEXT_COLOR_LIGHT
