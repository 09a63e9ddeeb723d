"""
Color value type and the color math the palette engine is built on.

A Color is identified by its canonical hex string. Everything else (RGB, LAB,
HSL hue, lightness) is recomputed from the hex on access.
"""

import colorsys
import math
import re
from dataclasses import dataclass

import numpy as np


# =============================================================================
# Constants
# =============================================================================

# LAB lightness / LCH chroma step for one unit of brighten, darken, desaturate
KN = 18

# D65 reference white
XN, YN, ZN = 0.95047, 1.0, 1.08883

EPSILON = 0.008856
KAPPA = 903.3

# '#rgb' or '#rrggbb', leading '#' optional
HEX_COLOR_RE = re.compile(r'#?([0-9a-fA-F]{6}|[0-9a-fA-F]{3})')


class InvalidColorError(ValueError):
    """Raised when a value cannot be normalized to a color."""


class EmptySeedSetError(ValueError):
    """Raised when an operation needs at least one color and got none."""


# =============================================================================
# Color Conversion
# =============================================================================

def rgb_to_lab(rgb: np.ndarray) -> np.ndarray:
    """Convert RGB array (0-255) to LAB color space."""
    rgb_norm = np.atleast_2d(rgb).astype(np.float64) / 255.0

    # Apply gamma correction
    mask = rgb_norm > 0.04045
    rgb_linear = np.where(mask, ((rgb_norm + 0.055) / 1.055) ** 2.4, rgb_norm / 12.92)

    # RGB to XYZ matrix
    r, g, b = rgb_linear[:, 0], rgb_linear[:, 1], rgb_linear[:, 2]
    x = r * 0.4124564 + g * 0.3575761 + b * 0.1804375
    y = r * 0.2126729 + g * 0.7151522 + b * 0.0721750
    z = r * 0.0193339 + g * 0.1191920 + b * 0.9503041

    x, y, z = x / XN, y / YN, z / ZN

    fx = np.where(x > EPSILON, np.cbrt(x), (KAPPA * x + 16) / 116)
    fy = np.where(y > EPSILON, np.cbrt(y), (KAPPA * y + 16) / 116)
    fz = np.where(z > EPSILON, np.cbrt(z), (KAPPA * z + 16) / 116)

    L = 116 * fy - 16
    a = 500 * (fx - fy)
    b_val = 200 * (fy - fz)

    return np.column_stack([L, a, b_val])


def lab_to_rgb(lab: np.ndarray) -> np.ndarray:
    """Convert LAB array to RGB (0-255), rounded to the nearest channel value and clipped."""
    lab = np.atleast_2d(np.asarray(lab, dtype=np.float64))

    L, a, b = lab[:, 0], lab[:, 1], lab[:, 2]

    fy = (L + 16) / 116
    fx = a / 500 + fy
    fz = fy - b / 200

    x = np.where(fx**3 > EPSILON, fx**3, (116 * fx - 16) / KAPPA)
    y = np.where(L > KAPPA * EPSILON, ((L + 16) / 116) ** 3, L / KAPPA)
    z = np.where(fz**3 > EPSILON, fz**3, (116 * fz - 16) / KAPPA)

    x = x * XN
    z = z * ZN

    r = x * 3.2404542 - y * 1.5371385 - z * 0.4985314
    g = -x * 0.9692660 + y * 1.8760108 + z * 0.0415560
    b_out = x * 0.0556434 - y * 0.2040259 + z * 1.0572252

    rgb_linear = np.column_stack([r, g, b_out])
    mask = rgb_linear > 0.0031308
    rgb = np.where(mask, 1.055 * np.power(np.clip(rgb_linear, 0, None), 1/2.4) - 0.055, 12.92 * rgb_linear)

    # Round half up, then clip into gamut
    return np.clip(np.floor(rgb * 255 + 0.5), 0, 255).astype(np.uint8)


def lab_to_lch(lab: np.ndarray) -> tuple[float, float, float]:
    """Convert a single LAB triple to (L, C, h) with h in degrees."""
    L, a, b = (float(v) for v in lab)
    c = math.hypot(a, b)
    h = math.degrees(math.atan2(b, a)) % 360
    return L, c, h


def lch_to_lab(L: float, c: float, h: float) -> np.ndarray:
    """Convert (L, C, h) back to a LAB triple."""
    rad = math.radians(h)
    return np.array([L, c * math.cos(rad), c * math.sin(rad)])


def rgb_to_hex(rgb) -> str:
    """Format an RGB triple (0-255) as a lowercase hex string."""
    r, g, b = (int(v) for v in rgb)
    return f"#{r:02x}{g:02x}{b:02x}"


def lab_to_hex(lab: np.ndarray) -> str:
    """Convert LAB to hex string."""
    return rgb_to_hex(lab_to_rgb(lab)[0])


def relative_luminance(rgb) -> float:
    """WCAG relative luminance of an RGB triple (0-255)."""
    def linearize(channel):
        c = channel / 255.0
        return c / 12.92 if c <= 0.03928 else ((c + 0.055) / 1.055) ** 2.4

    r, g, b = rgb
    return 0.2126 * linearize(r) + 0.7152 * linearize(g) + 0.0722 * linearize(b)


def _parse_hex(value: str) -> str:
    match = HEX_COLOR_RE.fullmatch(value.strip())
    if match is None:
        raise InvalidColorError(f"Not a hex color: {value!r}")
    digits = match.group(1).lower()
    if len(digits) == 3:
        digits = ''.join(ch * 2 for ch in digits)
    return '#' + digits


def _parse_rgb(value) -> str:
    try:
        channels = [float(v) for v in value]
    except (TypeError, ValueError):
        raise InvalidColorError(f"Not an RGB triple: {value!r}") from None
    if len(channels) != 3:
        raise InvalidColorError(f"RGB triple needs 3 channels, got {len(channels)}: {value!r}")
    if not all(0 <= c <= 255 for c in channels):
        raise InvalidColorError(f"RGB channels must be within 0-255: {value!r}")
    return rgb_to_hex(math.floor(c + 0.5) for c in channels)


def parse_hue_delta(delta) -> float:
    """Parse a hue rotation given as a number or a relative string like '+30'."""
    if isinstance(delta, str):
        try:
            value = float(delta.strip())
        except ValueError:
            raise ValueError(f"Invalid hue delta: {delta!r}") from None
    elif isinstance(delta, (int, float, np.integer, np.floating)) and not isinstance(delta, bool):
        value = float(delta)
    else:
        raise ValueError(f"Invalid hue delta: {delta!r}")

    if not math.isfinite(value):
        raise ValueError(f"Invalid hue delta: {delta!r}")
    return value


# =============================================================================
# Color
# =============================================================================

@dataclass(frozen=True)
class Color:
    """An sRGB color identified by its canonical lowercase hex string."""
    hex: str

    def __post_init__(self):
        if not isinstance(self.hex, str):
            raise InvalidColorError(f"Color hex must be a string, got {self.hex!r}")
        object.__setattr__(self, 'hex', _parse_hex(self.hex))

    @classmethod
    def parse(cls, value) -> 'Color':
        """Normalize a hex string, an RGB triple or a Color."""
        if isinstance(value, Color):
            return value
        if isinstance(value, str):
            return cls(value)
        if isinstance(value, (tuple, list, np.ndarray)):
            return cls(_parse_rgb(value))
        raise InvalidColorError(f"Cannot interpret {value!r} as a color")

    @classmethod
    def from_lab(cls, lab) -> 'Color':
        return cls(lab_to_hex(np.asarray(lab, dtype=np.float64)))

    @property
    def rgb(self) -> tuple:
        h = self.hex
        return (int(h[1:3], 16), int(h[3:5], 16), int(h[5:7], 16))

    @property
    def lab(self) -> np.ndarray:
        return rgb_to_lab(np.array(self.rgb))[0]

    @property
    def hsl(self) -> tuple[float, float, float]:
        """HSL as (hue degrees, saturation 0-1, lightness 0-1)."""
        r, g, b = (c / 255.0 for c in self.rgb)
        h, l, s = colorsys.rgb_to_hls(r, g, b)
        return (h * 360.0) % 360.0, s, l

    @property
    def hue(self) -> float:
        """HSL hue in [0, 360). Achromatic colors report 0."""
        return self.hsl[0]

    @property
    def saturation(self) -> float:
        return self.hsl[1]

    @property
    def lightness(self) -> float:
        """Perceptual lightness (LAB L*) in [0, 100]."""
        return min(100.0, max(0.0, float(self.lab[0])))

    @property
    def luminance(self) -> float:
        return relative_luminance(self.rgb)

    def adjust_hue(self, delta) -> 'Color':
        """Rotate the HSL hue by delta degrees, wrapping modulo 360."""
        h, s, l = self.hsl
        new_h = (h + parse_hue_delta(delta)) % 360.0
        r, g, b = colorsys.hls_to_rgb(new_h / 360.0, l, s)
        return Color(rgb_to_hex(min(255, max(0, math.floor(c * 255 + 0.5))) for c in (r, g, b)))

    def brighten(self, amount: float = 1) -> 'Color':
        lab = self.lab.copy()
        lab[0] += KN * amount
        return Color.from_lab(lab)

    def darken(self, amount: float = 1) -> 'Color':
        return self.brighten(-amount)

    def desaturate(self, amount: float = 1) -> 'Color':
        L, c, h = lab_to_lch(self.lab)
        c = max(0.0, c - KN * amount)
        return Color.from_lab(lch_to_lab(L, c, h))

    def __str__(self):
        return self.hex


WHITE = Color('#ffffff')
BLACK = Color('#000000')


def to_color(value) -> Color:
    """Normalize any supported color value to a Color."""
    return Color.parse(value)


def contrast(a, b) -> float:
    """WCAG 2.x contrast ratio between two colors, in [1, 21]."""
    l1 = to_color(a).luminance
    l2 = to_color(b).luminance
    lighter, darker = max(l1, l2), min(l1, l2)
    return (lighter + 0.05) / (darker + 0.05)


def average(colors, space: str = 'lab') -> Color:
    """
    Mean color of a sequence.

    Args:
        colors: Color values (hex strings, RGB triples or Colors)
        space: 'lab' (perceptual, default) or 'rgb'

    Raises:
        EmptySeedSetError: If colors is empty
        ValueError: If space is not supported
    """
    parsed = [to_color(c) for c in colors]
    if not parsed:
        raise EmptySeedSetError("Cannot average an empty set of colors")

    if space == 'lab':
        labs = rgb_to_lab(np.array([c.rgb for c in parsed]))
        return Color.from_lab(labs.mean(axis=0))
    if space == 'rgb':
        mean = np.array([c.rgb for c in parsed], dtype=np.float64).mean(axis=0)
        return Color.parse(mean)

    raise ValueError(f"Unsupported averaging space: {space!r} (expected 'lab' or 'rgb')")
