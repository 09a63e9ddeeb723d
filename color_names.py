"""
Descriptive names for palette colors: a lightness prefix plus a hue family.
"""

import math

from color_model import to_color


# Lightness thresholds are LAB L* values, not HSL lightness
VERY_LIGHT_THRESHOLD = 80
DARK_THRESHOLD = 30

HUE_BANDS = (
    (30, 'Orange', 60),
    (60, 'Yellow', 90),
    (90, 'Green', 150),
    (150, 'Cyan', 210),
    (210, 'Blue', 270),
    (270, 'Purple', 330),
)


def hue_name(hue: float) -> str:
    """Name the hue family of an HSL hue angle in degrees."""
    if not math.isfinite(hue):
        return 'Color'

    if 0 <= hue < 30 or 330 <= hue < 360:
        return 'Red'
    for low, name, high in HUE_BANDS:
        if low <= hue < high:
            return name

    # Unreachable for hues normalized to [0, 360)
    return 'Color'


def name_color(color) -> str:
    """Generate a descriptive name such as 'Dark Blue' or 'Very Light Yellow'."""
    color = to_color(color)
    lightness = color.lightness
    # Grays have no hue family
    family = hue_name(color.hue if color.saturation > 0 else math.nan)

    if lightness > VERY_LIGHT_THRESHOLD:
        return f"Very Light {family}"
    if lightness < DARK_THRESHOLD:
        return f"Dark {family}"
    return family
