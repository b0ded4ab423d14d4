"""
RasterLib - Raster data types and numeric building blocks

This module provides the raster models and the pure per-pixel operations
the effect pipeline is composed of.
"""

from RL_Libs.RasterLib.raster_models import (
    RasterBuffer,
    ScalarField,
    RgbaColor,
    RgbColor,
    HsvColor,
)
from RL_Libs.RasterLib.luma import rgb_to_luma, luma_field
from RL_Libs.RasterLib.convolver import convolve_field, convolve_rgb
from RL_Libs.RasterLib.gradient_field import gradient_magnitude, normalize_field
from RL_Libs.RasterLib.dilator import dilate
from RL_Libs.RasterLib.tone_mapper import clamp_byte, contrast, to_bytes
from RL_Libs.RasterLib.color_mixer import hsv_to_rgb, screen_blend

__all__ = [
    "RasterBuffer",
    "ScalarField",
    "RgbaColor",
    "RgbColor",
    "HsvColor",
    "rgb_to_luma",
    "luma_field",
    "convolve_field",
    "convolve_rgb",
    "gradient_magnitude",
    "normalize_field",
    "dilate",
    "clamp_byte",
    "contrast",
    "to_bytes",
    "hsv_to_rgb",
    "screen_blend",
]
