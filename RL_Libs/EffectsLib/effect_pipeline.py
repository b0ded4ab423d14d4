"""
Effect pipeline entry point.

apply_effect() is the pure function (RasterBuffer, EffectKind, EffectParameters)
-> RasterBuffer behind both interactive export and file export. It holds no
state between calls; every intermediate field it allocates is dropped when
the call returns.

Example:
    >>> from RL_Libs.EffectsLib.effect_pipeline import apply_effect
    >>> result = apply_effect(raster, "edges", {"strength": 2.0, "thickness": 1})
"""

from typing import Any, Dict, Optional, Union
import logging

from RL_Libs.EffectsLib.effect_params import (
    EffectKind,
    EffectParameters,
    default_params,
    params_from_dict,
    parse_effect_kind,
)
from RL_Libs.EffectsLib.effect_registry import EffectRegistry, get_default_registry
from RL_Libs.RasterLib.raster_models import RasterBuffer

logger = logging.getLogger(__name__)


def resolve_params(
    kind: Union[str, EffectKind],
    params: Union[EffectParameters, Dict[str, Any], None] = None,
) -> EffectParameters:
    """
    Turn caller supplied parameters into the dataclass for an effect kind.

    Args:
        kind: Effect kind or name
        params: Parameter dataclass, dictionary of knobs, or None for defaults

    Returns:
        Parameter dataclass (not yet clamped)

    Raises:
        ValueError: If kind is unknown
        TypeError: If params is a dataclass for a different effect kind
    """
    kind = parse_effect_kind(kind)

    if params is None:
        return default_params(kind)

    if isinstance(params, dict):
        return params_from_dict(kind, params)

    if getattr(params, "kind", None) != kind:
        raise TypeError(
            f"Parameters of type {type(params).__name__} do not belong to effect '{kind.value}'"
        )
    return params


def apply_effect(
    raster: RasterBuffer,
    kind: Union[str, EffectKind],
    params: Union[EffectParameters, Dict[str, Any], None] = None,
    registry: Optional[EffectRegistry] = None,
) -> RasterBuffer:
    """
    Apply one effect to a raster.

    Args:
        raster: Source RasterBuffer (never modified)
        kind: Effect kind or name ('none', 'edges', 'sharpen', 'threshold', 'outline')
        params: Parameter dataclass, dictionary of knobs, or None for defaults.
                Knob values are clamped inside the effect, never rejected.
        registry: Registry to look executors up in (default: global registry)

    Returns:
        New RasterBuffer with the same dimensions as the source

    Raises:
        TypeError: If raster is not a RasterBuffer or params belong to another effect
        ValueError: If kind is unknown
    """
    if not isinstance(raster, RasterBuffer):
        raise TypeError(f"Expected RasterBuffer, got {type(raster)}")

    kind = parse_effect_kind(kind)
    resolved = resolve_params(kind, params)
    registry = registry or get_default_registry()

    logger.debug(f"Applying effect '{kind.value}' to {raster.width}x{raster.height} raster")
    return registry.execute(kind, raster, resolved)
