"""
Color conversion and compositing for overlay effects.

Functions:
    hsv_to_rgb: Convert an HSV color to 0-255 RGB
    screen_blend: Screen-composite an overlay color onto a base color
"""

import math
from typing import Any

import numpy as np

from RL_Libs.constants import BYTE_MAX, HUE_DEGREES
from RL_Libs.RasterLib.raster_models import RgbColor


def _unit(value: float) -> float:
    if math.isnan(value):
        return 0.0
    return min(1.0, max(0.0, value))


def hsv_to_rgb(h: float, s: float, v: float) -> RgbColor:
    """
    Convert HSV to RGB using the hue/chroma/intermediate construction.

    Args:
        h: Hue in degrees (any value, wrapped into 0-360)
        s: Saturation 0-1 (clamped)
        v: Value 0-1 (clamped)

    Returns:
        (r, g, b) integers in 0-255, rounded half up

    Example:
        >>> hsv_to_rgb(120, 1, 1)
        (0, 255, 0)
    """
    h = float(h)
    s = _unit(float(s))
    v = _unit(float(v))
    if not math.isfinite(h):
        h = 0.0

    chroma = v * s
    sector_pos = (h % HUE_DEGREES) / 60.0
    x = chroma * (1 - abs(sector_pos % 2 - 1))
    sector = int(sector_pos) % 6

    if sector == 0:
        r, g, b = chroma, x, 0.0
    elif sector == 1:
        r, g, b = x, chroma, 0.0
    elif sector == 2:
        r, g, b = 0.0, chroma, x
    elif sector == 3:
        r, g, b = 0.0, x, chroma
    elif sector == 4:
        r, g, b = x, 0.0, chroma
    else:
        r, g, b = chroma, 0.0, x

    m = v - chroma
    return tuple(int(math.floor((channel + m) * BYTE_MAX + 0.5)) for channel in (r, g, b))


def screen_blend(base: Any, blend: Any, alpha: Any) -> Any:
    """
    Screen blend 1 - (1 - base) * (1 - blend * alpha) in normalized space.

    Args:
        base: Base channel value(s) in 0-1
        blend: Overlay channel value(s) in 0-1
        alpha: Overlay coverage; always clamped to 0-1 (NaN counts as 0)

    Returns:
        Blended value(s) in 0-1, same shape as the broadcast inputs
    """
    coverage = np.clip(np.nan_to_num(np.asarray(alpha, dtype=np.float64), nan=0.0), 0.0, 1.0)
    result = 1.0 - (1.0 - np.asarray(base, dtype=np.float64)) * (
        1.0 - np.asarray(blend, dtype=np.float64) * coverage
    )
    if np.ndim(result) == 0:
        return float(result)
    return result
