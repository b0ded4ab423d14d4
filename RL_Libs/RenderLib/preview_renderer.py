"""
Approximate preview rendering through a declarative filter graph.

The preview path trades accuracy for speed: each effect is described as a
short list of Pillow filter steps and executed with Pillow's built-in filters.
It shares default parameter values with the exact pipeline but does not
reproduce its output byte for byte, and must never be used for export.

A graph is a list of step dictionaries, for example:

    [
        {"op": "grayscale"},
        {"op": "find_edges"},
        {"op": "autocontrast"},
        {"op": "invert"},
        {"op": "contrast", "factor": 1.8},
    ]

Functions:
    build_preview_graph: Describe an effect as a list of filter steps
    render_preview: Execute a filter graph on a raster
    list_preview_ops: Names of the supported filter steps
"""

from typing import Any, Callable, Dict, List, Union

from RL_Libs.constants import MID_GRAY
from RL_Libs.EffectsLib.effect_params import EffectKind, EffectParameters
from RL_Libs.EffectsLib.effect_pipeline import resolve_params
from RL_Libs.EffectsLib.outline_effect import outline_color
from RL_Libs.RasterLib.dilator import effective_radius
from RL_Libs.RasterLib.raster_models import RasterBuffer
from RL_Libs.pillow_compat import Image, ImageChops, ImageEnhance, ImageFilter, ImageOps
from RL_Libs.RenderLib.image_source import image_from_raster, raster_from_image

PreviewStep = Dict[str, Any]
StepFunction = Callable[[Any, Any, PreviewStep], Any]


def build_preview_graph(
    kind: Union[str, EffectKind],
    params: Union[EffectParameters, Dict[str, Any], None] = None,
) -> List[PreviewStep]:
    """
    Describe an effect as a declarative list of Pillow filter steps.

    Args:
        kind: Effect kind or name
        params: Parameter dataclass, dictionary of knobs, or None for defaults

    Returns:
        List of step dictionaries understood by render_preview()
    """
    params = resolve_params(kind, params).clamped()
    kind = params.kind

    if kind == EffectKind.NONE:
        return []

    if kind == EffectKind.SHARPEN:
        return [
            {"op": "sharpen"},
            {"op": "contrast", "factor": params.amount},
        ]

    if kind == EffectKind.THRESHOLD:
        return [
            {"op": "grayscale"},
            {"op": "threshold", "cutoff": MID_GRAY * params.shift, "invert": params.invert},
        ]

    if kind == EffectKind.EDGES:
        graph = [
            {"op": "grayscale"},
            {"op": "find_edges"},
            {"op": "autocontrast"},
            {"op": "invert"},
            {"op": "brightness", "factor": params.threshold},
            {"op": "contrast", "factor": params.strength},
        ]
        radius = effective_radius(params.thickness)
        if radius:
            graph.append({"op": "max_filter", "radius": radius})
        graph.append({"op": "contrast", "factor": params.recontrast})
        return graph

    graph = [
        {"op": "grayscale"},
        {"op": "find_edges"},
        {"op": "autocontrast"},
    ]
    radius = effective_radius(params.width)
    if radius:
        graph.append({"op": "max_filter", "radius": radius})
    graph.append({
        "op": "screen_overlay",
        "color": outline_color(params),
        "opacity": params.opacity,
    })
    return graph


def _grayscale(image: Any, source: Any, step: PreviewStep) -> Any:
    return ImageOps.grayscale(image)


def _find_edges(image: Any, source: Any, step: PreviewStep) -> Any:
    return image.filter(ImageFilter.FIND_EDGES)


def _autocontrast(image: Any, source: Any, step: PreviewStep) -> Any:
    return ImageOps.autocontrast(image)


def _invert(image: Any, source: Any, step: PreviewStep) -> Any:
    return ImageOps.invert(image)


def _sharpen(image: Any, source: Any, step: PreviewStep) -> Any:
    return image.filter(ImageFilter.SHARPEN)


def _brightness(image: Any, source: Any, step: PreviewStep) -> Any:
    return ImageEnhance.Brightness(image).enhance(float(step.get("factor", 1.0)))


def _contrast(image: Any, source: Any, step: PreviewStep) -> Any:
    return ImageEnhance.Contrast(image).enhance(float(step.get("factor", 1.0)))


def _max_filter(image: Any, source: Any, step: PreviewStep) -> Any:
    radius = int(step.get("radius", 1))
    return image.filter(ImageFilter.MaxFilter(2 * radius + 1))


def _threshold(image: Any, source: Any, step: PreviewStep) -> Any:
    cutoff = float(step.get("cutoff", MID_GRAY))
    low, high = (255, 0) if step.get("invert") else (0, 255)
    return image.point(lambda v: high if v >= cutoff else low)


def _screen_overlay(image: Any, source: Any, step: PreviewStep) -> Any:
    opacity = max(0.0, min(1.0, float(step.get("opacity", 1.0))))
    mask = image.convert("L").point(lambda v: int(min(255, v * opacity)))
    color_layer = Image.new("RGB", source.size, tuple(step.get("color", (255, 255, 255))))
    black = Image.new("RGB", source.size, (0, 0, 0))
    return ImageChops.screen(source.convert("RGB"), Image.composite(color_layer, black, mask))


_STEP_FUNCTIONS: Dict[str, StepFunction] = {
    "grayscale": _grayscale,
    "find_edges": _find_edges,
    "autocontrast": _autocontrast,
    "invert": _invert,
    "sharpen": _sharpen,
    "brightness": _brightness,
    "contrast": _contrast,
    "max_filter": _max_filter,
    "threshold": _threshold,
    "screen_overlay": _screen_overlay,
}


def list_preview_ops() -> List[str]:
    return sorted(_STEP_FUNCTIONS)


def render_preview(raster: RasterBuffer, graph: List[PreviewStep]) -> RasterBuffer:
    """
    Execute a preview filter graph.

    Args:
        raster: Source raster (not modified)
        graph: Steps from build_preview_graph()

    Returns:
        New RasterBuffer with the source's dimensions. An empty graph
        returns a copy of the source.

    Raises:
        ValueError: If a step names an unknown op
    """
    if not graph or raster.width == 0 or raster.height == 0:
        return raster.clone()

    source = image_from_raster(raster)
    current = source.convert("RGB")
    for step in graph:
        op = str(step.get("op", ""))
        if op not in _STEP_FUNCTIONS:
            raise ValueError(f"Unknown preview op: {op}. Valid ops: {', '.join(list_preview_ops())}")
        current = _STEP_FUNCTIONS[op](current, source, step)

    result = current.convert("RGBA")
    result.putalpha(255)
    return raster_from_image(result)
