"""
Threshold effect.

Maps every pixel to pure black or pure white depending on whether its luma
reaches 128 * shift, optionally inverted. Alpha is forced to 255.
"""

import numpy as np

from RL_Libs.constants import MID_GRAY
from RL_Libs.EffectsLib.effect_params import ThresholdParams
from RL_Libs.RasterLib.luma import luma_values
from RL_Libs.RasterLib.raster_models import RasterBuffer


def apply_threshold(raster: RasterBuffer, params: ThresholdParams) -> RasterBuffer:
    """
    Threshold a raster to black and white.

    Args:
        raster: Source raster (not modified)
        params: Threshold parameters (clamped before use)

    Returns:
        New RasterBuffer whose channels only contain 0 and 255
    """
    params = params.clamped()
    cutoff = MID_GRAY * params.shift

    bright = luma_values(raster) >= cutoff
    if params.invert:
        bright = ~bright
    level = np.where(bright, 255, 0).astype(np.uint8)

    output = np.empty((raster.height, raster.width, 4), dtype=np.uint8)
    output[:, :, :3] = level[:, :, None]
    output[:, :, 3] = 255
    return RasterBuffer.from_array(output)
