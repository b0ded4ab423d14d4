"""
Morphological dilation (max filter) over scalar fields.

Each output value is the maximum of the source within a square window of
radius r. Window positions outside the field are skipped rather than read as
zero, so border pixels see a smaller window and are not darkened.

Performance:
    Cost is O(width * height * r^2). Radii exposed to users are limited to
    MAX_DILATION_RADIUS; larger radii would need a separable or van Herk
    filter to stay interactive.
"""

import math
from typing import Any

import numpy as np

from RL_Libs.RasterLib.raster_models import ScalarField


def effective_radius(radius: Any) -> int:
    """
    Integer window radius for a user supplied radius.

    Returns 0 (identity) for radius <= 0 or non-finite input, otherwise
    max(1, round(radius)) with halves rounded up.
    """
    try:
        value = float(radius)
    except (TypeError, ValueError):
        return 0
    if not math.isfinite(value) or value <= 0:
        return 0
    return max(1, int(math.floor(value + 0.5)))


def dilate_array(values: np.ndarray, radius: int) -> np.ndarray:
    """Max filter of a 2D array with an integer window radius (radius >= 1)."""
    source = np.asarray(values, dtype=np.float64)
    height, width = source.shape
    padded = np.full((height + 2 * radius, width + 2 * radius), -np.inf)
    padded[radius:radius + height, radius:radius + width] = source

    output = np.full((height, width), -np.inf)
    for dy in range(2 * radius + 1):
        for dx in range(2 * radius + 1):
            np.maximum(output, padded[dy:dy + height, dx:dx + width], out=output)
    return output


def dilate(field: ScalarField, radius: Any) -> ScalarField:
    """
    Dilate a ScalarField.

    Args:
        field: Source field
        radius: Window radius; values <= 0 leave the field unchanged

    Returns:
        A fresh ScalarField (an identical copy when radius <= 0)
    """
    r = effective_radius(radius)
    if r == 0:
        return field.copy()
    return ScalarField(field.width, field.height, dilate_array(field.values, r))
