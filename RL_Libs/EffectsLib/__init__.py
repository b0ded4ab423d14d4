"""
EffectsLib - Pixel effects and the effect pipeline

This module provides the effect parameter models, one executor per effect,
the effect registry and the apply_effect() pipeline entry point.
"""

from RL_Libs.EffectsLib.effect_params import (
    EffectKind,
    NoEffectParams,
    EdgesParams,
    SharpenParams,
    ThresholdParams,
    OutlineParams,
    parse_effect_kind,
    default_params,
    params_from_dict,
)
from RL_Libs.EffectsLib.effect_registry import (
    EffectRegistry,
    get_default_registry,
)
from RL_Libs.EffectsLib.effect_pipeline import apply_effect, resolve_params

__all__ = [
    "EffectKind",
    "NoEffectParams",
    "EdgesParams",
    "SharpenParams",
    "ThresholdParams",
    "OutlineParams",
    "parse_effect_kind",
    "default_params",
    "params_from_dict",
    "EffectRegistry",
    "get_default_registry",
    "apply_effect",
    "resolve_params",
]
