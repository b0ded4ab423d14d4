"""
Colored outline effect.

Screen-blends a single overlay color onto the original image, weighted by the
normalized (0-1) edge magnitude. Unlike the edges effect, the magnitude is
normalized to 0-1 rather than 0-255; dilation still runs on the 0-255
representation and is rescaled back.
"""

import numpy as np

from RL_Libs.constants import BYTE_MAX, OUTLINE_NORMALIZE_PEAK, OUTLINE_SATURATION_SCALE
from RL_Libs.EffectsLib.effect_params import OutlineParams
from RL_Libs.RasterLib.color_mixer import hsv_to_rgb, screen_blend
from RL_Libs.RasterLib.dilator import dilate, effective_radius
from RL_Libs.RasterLib.gradient_field import gradient_magnitude, normalize_field
from RL_Libs.RasterLib.luma import luma_field
from RL_Libs.RasterLib.raster_models import RasterBuffer, RgbColor, ScalarField
from RL_Libs.RasterLib.tone_mapper import to_bytes


def outline_color(params: OutlineParams) -> RgbColor:
    """Overlay color for a set of outline parameters."""
    params = params.clamped()
    saturation = min(1.0, params.saturation / OUTLINE_SATURATION_SCALE)
    return hsv_to_rgb(params.hue, saturation, 1.0)


def outline_mask(raster: RasterBuffer, params: OutlineParams) -> ScalarField:
    """
    Edge magnitude in 0-1, optionally widened by dilation.

    Args:
        raster: Source raster
        params: Outline parameters (clamped before use)
    """
    params = params.clamped()
    magnitude = normalize_field(gradient_magnitude(luma_field(raster)), OUTLINE_NORMALIZE_PEAK)
    if effective_radius(params.width) == 0:
        return magnitude

    scaled = ScalarField(raster.width, raster.height, magnitude.values.astype(np.float64) * BYTE_MAX)
    widened = dilate(scaled, params.width)
    return ScalarField(raster.width, raster.height, widened.values.astype(np.float64) / BYTE_MAX)


def apply_outline(raster: RasterBuffer, params: OutlineParams) -> RasterBuffer:
    """
    Overlay a colored outline on the original image.

    Args:
        raster: Source raster (not modified)
        params: Outline parameters

    Returns:
        New RasterBuffer with blended RGB and A = 255
    """
    params = params.clamped()
    mask = outline_mask(raster, params)
    overlay = np.asarray(outline_color(params), dtype=np.float64) / BYTE_MAX

    alpha = np.clip(mask.values.astype(np.float64) * params.opacity, 0.0, 1.0)
    source = raster.to_array()
    base = source[:, :, :3].astype(np.float64) / BYTE_MAX

    blended = screen_blend(base, overlay[None, None, :], alpha[:, :, None])

    output = np.empty_like(source)
    output[:, :, :3] = to_bytes(np.asarray(blended) * BYTE_MAX)
    output[:, :, 3] = 255
    return RasterBuffer.from_array(output)
