from __future__ import annotations

import colorsys
import math
import numbers
import re

from .errors import InvalidChannelError, InvalidFormatError


HEX_RE = re.compile(r'^#?([0-9a-fA-F]{2})([0-9a-fA-F]{2})([0-9a-fA-F]{2})$')

LIGHTNESS_STEP = 15
DESATURATE_STEP = 30
SATURATE_STEP = 20

BLACK = '#000000'
WHITE = '#ffffff'


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _channel(value) -> int:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidChannelError(f'Channel is not a number: {value!r}')
    number = float(value)
    if not math.isfinite(number):
        raise InvalidChannelError(f'Channel is not finite: {value!r}')
    if number < 0 or number > 255:
        raise InvalidChannelError(f'Channel out of range 0-255: {value!r}')
    return min(255, round_half_up(number))


def rgb_to_hex(r, g, b) -> str:
    return '#{:02x}{:02x}{:02x}'.format(_channel(r), _channel(g), _channel(b))


def hex_to_rgb(value: str) -> tuple[int, int, int]:
    if not isinstance(value, str):
        raise InvalidFormatError(f'HEX must be a string, got {type(value).__name__}')
    match = HEX_RE.match(value.strip())
    if match is None:
        raise InvalidFormatError(f'HEX must be 6 hex digits: {value!r}')
    return tuple(int(part, 16) for part in match.groups())


def normalize_hex(value: str) -> str:
    return rgb_to_hex(*hex_to_rgb(value))


def display_hex(value: str) -> str:
    return normalize_hex(value).upper()


def rgb_to_hsl(r, g, b) -> tuple[float, float, float]:
    """Return (hue 0-360, saturation 0-100, lightness 0-100).

    Achromatic colors report hue 0 and saturation 0.
    """
    h, l, s = colorsys.rgb_to_hls(r / 255.0, g / 255.0, b / 255.0)
    hue = (h * 360.0) % 360.0
    return hue, s * 100.0, l * 100.0


def hsl_to_rgb(h, s, l) -> tuple[int, int, int]:
    hue = (float(h) % 360.0) / 360.0
    sat = max(0.0, min(100.0, float(s))) / 100.0
    light = max(0.0, min(100.0, float(l))) / 100.0
    r, g, b = colorsys.hls_to_rgb(hue, light, sat)
    return tuple(max(0, min(255, round_half_up(c * 255))) for c in (r, g, b))


def hue_of(color: str) -> float:
    return rgb_to_hsl(*hex_to_rgb(color))[0]


def contrast_color(color: str) -> str:
    r, g, b = hex_to_rgb(color)
    luminance = (0.299 * r + 0.587 * g + 0.114 * b) / 255
    return BLACK if luminance > 0.5 else WHITE


def derive_variations(r, g, b, count=3) -> list[str]:
    """Lighter, darker, desaturated and (count 4 only) more saturated siblings."""
    if count not in (3, 4):
        raise ValueError(f'Variation count must be 3 or 4, got {count!r}')

    h, s, l = rgb_to_hsl(r, g, b)
    variations = [
        rgb_to_hex(*hsl_to_rgb(h, s, min(100.0, l + LIGHTNESS_STEP))),
        rgb_to_hex(*hsl_to_rgb(h, s, max(0.0, l - LIGHTNESS_STEP))),
        rgb_to_hex(*hsl_to_rgb(h, max(0.0, s - DESATURATE_STEP), l)),
    ]
    if count == 4:
        variations.append(rgb_to_hex(*hsl_to_rgb(h, min(100.0, s + SATURATE_STEP), l)))
    return variations[:count]
