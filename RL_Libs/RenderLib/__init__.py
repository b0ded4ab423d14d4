"""
RenderLib - Boundary adapters around the effect pipeline

This module handles image fetch/decode, PNG export, approximate preview
rendering, render sessions with generation tokens, and effect presets.
"""

from RL_Libs.RenderLib.image_source import (
    ImageFetcher,
    decode_raster,
    load_raster,
    raster_from_image,
    image_from_raster,
)
from RL_Libs.RenderLib.png_export import ExportConfig, ExportHandler, encode_png
from RL_Libs.RenderLib.preview_renderer import build_preview_graph, render_preview
from RL_Libs.RenderLib.render_session import (
    Renderer,
    PreviewRenderer,
    ExportRenderer,
    GenerationToken,
    RenderSession,
)
from RL_Libs.RenderLib.preset_store import (
    get_presets_path,
    load_preset_data,
    save_preset,
    load_preset,
    list_presets,
    delete_preset,
)

__all__ = [
    "ImageFetcher",
    "decode_raster",
    "load_raster",
    "raster_from_image",
    "image_from_raster",
    "ExportConfig",
    "ExportHandler",
    "encode_png",
    "build_preview_graph",
    "render_preview",
    "Renderer",
    "PreviewRenderer",
    "ExportRenderer",
    "GenerationToken",
    "RenderSession",
    "get_presets_path",
    "load_preset_data",
    "save_preset",
    "load_preset",
    "list_presets",
    "delete_preset",
]
