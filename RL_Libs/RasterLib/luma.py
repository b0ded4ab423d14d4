"""
Grayscale projection of RGBA rasters using ITU-R BT.709 luma coefficients.
"""

from typing import Any

import numpy as np

from RL_Libs.constants import LUMA_BLUE, LUMA_GREEN, LUMA_RED
from RL_Libs.RasterLib.raster_models import RasterBuffer, ScalarField


def rgb_to_luma(r: Any, g: Any, b: Any) -> Any:
    """
    Weighted luma of an RGB triple.

    Works on plain numbers or on numpy arrays of matching shape.
    """
    return LUMA_RED * r + LUMA_GREEN * g + LUMA_BLUE * b


def luma_values(raster: RasterBuffer) -> np.ndarray:
    """Float64 (height, width) luma array of a raster, alpha ignored."""
    rgb = raster.to_array()[:, :, :3].astype(np.float64)
    return rgb_to_luma(rgb[:, :, 0], rgb[:, :, 1], rgb[:, :, 2])


def luma_field(raster: RasterBuffer) -> ScalarField:
    """
    Build the grayscale ScalarField of a raster.

    Args:
        raster: Source RasterBuffer

    Returns:
        ScalarField with the raster's dimensions
    """
    return ScalarField(raster.width, raster.height, luma_values(raster))
