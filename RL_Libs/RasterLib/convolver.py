"""
3x3 kernel convolution over scalar fields and RGB channels.

Kernels are 9 row-major coefficients applied in correlation order: the
coefficient at row j, column i weights the neighbor at (x + i - 1, y + j - 1).

Only interior pixels (1 <= x < width - 1, 1 <= y < height - 1) are computed.
The outer one-pixel ring is never recomputed: it stays zero in a fresh field,
and callers sharpening a raster copy the ring from the source unchanged. This
leaves a thin unprocessed border around every filtered image.

Functions:
    convolve_array: Convolve a 2D float array
    convolve_field: Convolve a ScalarField into a fresh ScalarField
    convolve_rgb: Convolve each RGB channel of a RasterBuffer independently
"""

from typing import Sequence, Tuple

import numpy as np

from RL_Libs.RasterLib.raster_models import RasterBuffer, ScalarField

Kernel = Sequence[float]


def _kernel_matrix(kernel: Kernel) -> np.ndarray:
    coefficients = np.asarray(kernel, dtype=np.float64).ravel()
    if coefficients.size != 9:
        raise ValueError(f"kernel must have 9 coefficients, got {coefficients.size}")
    return coefficients.reshape(3, 3)


def has_interior(width: int, height: int) -> bool:
    """True when the raster has at least one non-border pixel."""
    return width >= 3 and height >= 3


def convolve_array(values: np.ndarray, kernel: Kernel) -> np.ndarray:
    """
    Convolve a (height, width) array, leaving the border ring at zero.

    Args:
        values: 2D array of samples
        kernel: 9 row-major coefficients

    Returns:
        float64 array with the same shape as values
    """
    matrix = _kernel_matrix(kernel)
    source = np.asarray(values, dtype=np.float64)
    height, width = source.shape
    output = np.zeros((height, width), dtype=np.float64)

    if not has_interior(width, height):
        return output

    interior = output[1:height - 1, 1:width - 1]
    for j in range(3):
        for i in range(3):
            weight = matrix[j, i]
            if weight == 0:
                continue
            interior += weight * source[j:j + height - 2, i:i + width - 2]
    return output


def convolve_field(field: ScalarField, kernel: Kernel) -> ScalarField:
    """Convolve a ScalarField into a fresh field of the same dimensions."""
    return ScalarField(field.width, field.height, convolve_array(field.values, kernel))


def convolve_rgb(raster: RasterBuffer, kernel: Kernel) -> np.ndarray:
    """
    Convolve the R, G and B channels of a raster independently.

    Args:
        raster: Source RasterBuffer (alpha is ignored)
        kernel: 9 row-major coefficients

    Returns:
        float64 array of shape (height, width, 3) holding the raw, unclamped
        sums. The border ring is zero.
    """
    rgb = raster.to_array()[:, :, :3].astype(np.float64)
    channels = [convolve_array(rgb[:, :, c], kernel) for c in range(3)]
    return np.stack(channels, axis=-1)


def interior_slices(width: int, height: int) -> Tuple[slice, slice]:
    """Row and column slices selecting the recomputed interior."""
    return slice(1, max(1, height - 1)), slice(1, max(1, width - 1))
