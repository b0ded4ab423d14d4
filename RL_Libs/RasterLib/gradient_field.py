"""
Sobel gradients and gradient magnitude over a luma field.

Example:
    >>> luma = luma_field(raster)
    >>> magnitude = gradient_magnitude(luma)
    >>> edges = normalize_field(magnitude, peak=255.0)
"""

from typing import Tuple

import numpy as np

from RL_Libs.constants import SOBEL_X_KERNEL, SOBEL_Y_KERNEL
from RL_Libs.RasterLib.convolver import convolve_array
from RL_Libs.RasterLib.raster_models import ScalarField


def sobel_gradients(luma: ScalarField) -> Tuple[np.ndarray, np.ndarray]:
    """
    Horizontal and vertical derivatives of a luma field.

    Returns:
        (gx, gy) float64 arrays; the border ring is zero
    """
    gx = convolve_array(luma.values, SOBEL_X_KERNEL)
    gy = convolve_array(luma.values, SOBEL_Y_KERNEL)
    return gx, gy


def gradient_magnitude(luma: ScalarField) -> ScalarField:
    """
    Unnormalized Euclidean gradient magnitude hypot(gx, gy).

    Args:
        luma: Grayscale field

    Returns:
        ScalarField with the luma field's dimensions
    """
    gx, gy = sobel_gradients(luma)
    return ScalarField(luma.width, luma.height, np.hypot(gx, gy))


def normalize_field(field: ScalarField, peak: float) -> ScalarField:
    """
    Rescale a field by peak / max(field).

    A field whose maximum is 0 (uniform image, or an empty field) is scaled
    by 1, so it stays all zero instead of dividing by zero.

    Args:
        field: Field to rescale (typically a gradient magnitude)
        peak: Value the field maximum maps to (255.0 for edges, 1.0 for outline)

    Returns:
        A fresh rescaled ScalarField
    """
    largest = field.max()
    scale = peak / largest if largest > 0 else 1.0
    return ScalarField(field.width, field.height, field.values.astype(np.float64) * scale)
