"""
Edge-detection effect.

Produces dark edge lines on a white background:

    luma -> gradient magnitude -> normalize to 0-255 -> invert
         -> * threshold -> contrast(strength) -> dilate(thickness)
         -> contrast(recontrast) -> gray RGB, alpha 255
"""

import numpy as np

from RL_Libs.constants import BYTE_MAX, EDGES_NORMALIZE_PEAK
from RL_Libs.EffectsLib.effect_params import EdgesParams
from RL_Libs.RasterLib.dilator import dilate
from RL_Libs.RasterLib.gradient_field import gradient_magnitude, normalize_field
from RL_Libs.RasterLib.luma import luma_field
from RL_Libs.RasterLib.raster_models import RasterBuffer, ScalarField
from RL_Libs.RasterLib.tone_mapper import contrast, to_bytes


def edge_map(raster: RasterBuffer, params: EdgesParams) -> ScalarField:
    """
    Compute the final grayscale edge map (0-255) for a raster.

    Args:
        raster: Source raster
        params: Edge parameters (clamped before use)

    Returns:
        ScalarField of gray levels
    """
    params = params.clamped()

    magnitude = normalize_field(gradient_magnitude(luma_field(raster)), EDGES_NORMALIZE_PEAK)
    inverted = (BYTE_MAX - magnitude.values.astype(np.float64)) * params.threshold
    stretched = ScalarField(raster.width, raster.height, contrast(inverted, params.strength))

    thickened = dilate(stretched, params.thickness)
    final = contrast(thickened.values.astype(np.float64), params.recontrast)
    return ScalarField(raster.width, raster.height, final)


def apply_edges(raster: RasterBuffer, params: EdgesParams) -> RasterBuffer:
    """
    Render the edge map of a raster as an opaque grayscale image.

    Args:
        raster: Source raster (not modified)
        params: Edge parameters

    Returns:
        New RasterBuffer with R = G = B = edge level and A = 255
    """
    level = to_bytes(edge_map(raster, params).values)

    output = np.empty((raster.height, raster.width, 4), dtype=np.uint8)
    output[:, :, :3] = level[:, :, None]
    output[:, :, 3] = 255
    return RasterBuffer.from_array(output)
