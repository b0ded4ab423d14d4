"""
Sharpen effect.

Convolves each RGB channel with a 3x3 sharpen kernel and passes the raw sum
through contrast(). Interior pixels get alpha 255; the one-pixel border ring
is copied from the source unchanged.
"""

from RL_Libs.constants import SHARPEN_KERNEL
from RL_Libs.EffectsLib.effect_params import SharpenParams
from RL_Libs.RasterLib.convolver import convolve_rgb, has_interior, interior_slices
from RL_Libs.RasterLib.raster_models import RasterBuffer
from RL_Libs.RasterLib.tone_mapper import contrast, to_bytes


def apply_sharpen(raster: RasterBuffer, params: SharpenParams) -> RasterBuffer:
    """
    Sharpen a raster.

    Args:
        raster: Source raster (not modified)
        params: Sharpen parameters (clamped before use)

    Returns:
        New RasterBuffer with the sharpened interior
    """
    params = params.clamped()
    output = raster.to_array()
    if not has_interior(raster.width, raster.height):
        return RasterBuffer.from_array(output)

    rows, cols = interior_slices(raster.width, raster.height)
    sums = convolve_rgb(raster, SHARPEN_KERNEL)
    output[rows, cols, :3] = to_bytes(contrast(sums[rows, cols], params.amount))
    output[rows, cols, 3] = 255
    return RasterBuffer.from_array(output)
