"""
Effect kinds and per-effect parameter configuration.

Every knob is accepted at any value; clamped() returns a copy whose values
are finite and inside the ranges declared in RL_Libs.constants. Effects call
clamped() themselves, so callers never have to.

Classes:
    EffectKind: Closed set of supported effects
    NoEffectParams, EdgesParams, SharpenParams, ThresholdParams, OutlineParams:
        Parameter dataclasses, one per effect kind

Functions:
    parse_effect_kind: Convert a name or EffectKind into an EffectKind
    default_params: Default parameters for an effect kind
    params_from_dict: Build parameters for an effect kind from a dictionary
    merge_params: Overlay knob values on existing parameters
"""

from dataclasses import asdict, dataclass, replace
from enum import Enum
from typing import Any, Dict, Type, Union

from RL_Libs.constants import (
    DEFAULT_EDGES_RECONTRAST,
    DEFAULT_EDGES_STRENGTH,
    DEFAULT_EDGES_THICKNESS,
    DEFAULT_EDGES_THRESHOLD,
    DEFAULT_OUTLINE_HUE,
    DEFAULT_OUTLINE_OPACITY,
    DEFAULT_OUTLINE_SATURATION,
    DEFAULT_OUTLINE_WIDTH,
    DEFAULT_SHARPEN_AMOUNT,
    DEFAULT_THRESHOLD_INVERT,
    DEFAULT_THRESHOLD_SHIFT,
    EDGES_RECONTRAST_RANGE,
    EDGES_STRENGTH_RANGE,
    EDGES_THICKNESS_RANGE,
    EDGES_THRESHOLD_RANGE,
    EFFECT_EDGES,
    EFFECT_NONE,
    EFFECT_OUTLINE,
    EFFECT_SHARPEN,
    EFFECT_THRESHOLD,
    HUE_DEGREES,
    OUTLINE_OPACITY_RANGE,
    OUTLINE_SATURATION_RANGE,
    OUTLINE_WIDTH_RANGE,
    SHARPEN_AMOUNT_RANGE,
    THRESHOLD_SHIFT_RANGE,
)
from RL_Libs.RasterLib.tone_mapper import sanitize


class EffectKind(str, Enum):
    NONE = EFFECT_NONE
    EDGES = EFFECT_EDGES
    SHARPEN = EFFECT_SHARPEN
    THRESHOLD = EFFECT_THRESHOLD
    OUTLINE = EFFECT_OUTLINE


def parse_effect_kind(kind: Union[str, EffectKind]) -> EffectKind:
    """
    Convert a name (case-insensitive) or EffectKind into an EffectKind.

    Raises:
        ValueError: If the name is not a known effect
    """
    if isinstance(kind, EffectKind):
        return kind
    name = str(kind).strip().lower()
    try:
        return EffectKind(name)
    except ValueError:
        valid = ", ".join(k.value for k in EffectKind)
        raise ValueError(f"Unknown effect: {kind}. Valid effects: {valid}") from None


def _as_bool(value: Any, default: bool) -> bool:
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("1", "true", "yes", "on"):
            return True
        if lowered in ("0", "false", "no", "off", ""):
            return False
        return default
    if value is None:
        return default
    return bool(value)


class _ParamsMixin:
    """Dictionary conversion shared by all parameter dataclasses."""

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]):
        """Create from dictionary, ignoring unknown keys."""
        filtered = {k: v for k, v in data.items()
                    if k in cls.__dataclass_fields__}
        return cls(**filtered)


@dataclass(frozen=True)
class NoEffectParams(_ParamsMixin):
    kind = EffectKind.NONE

    def clamped(self) -> "NoEffectParams":
        return self


@dataclass(frozen=True)
class EdgesParams(_ParamsMixin):
    """Parameters for the edge-detection effect.

    Attributes:
        strength: Contrast applied to the inverted edge map
        threshold: Multiplier applied to the inverted edge map before contrast
        thickness: Dilation radius for the edge lines (0 = off)
        recontrast: Final contrast after dilation
    """
    kind = EffectKind.EDGES

    strength: float = DEFAULT_EDGES_STRENGTH
    threshold: float = DEFAULT_EDGES_THRESHOLD
    thickness: float = DEFAULT_EDGES_THICKNESS
    recontrast: float = DEFAULT_EDGES_RECONTRAST

    def clamped(self) -> "EdgesParams":
        return replace(
            self,
            strength=sanitize(self.strength, DEFAULT_EDGES_STRENGTH, *EDGES_STRENGTH_RANGE),
            threshold=sanitize(self.threshold, DEFAULT_EDGES_THRESHOLD, *EDGES_THRESHOLD_RANGE),
            thickness=sanitize(self.thickness, DEFAULT_EDGES_THICKNESS, *EDGES_THICKNESS_RANGE),
            recontrast=sanitize(self.recontrast, DEFAULT_EDGES_RECONTRAST, *EDGES_RECONTRAST_RANGE),
        )


@dataclass(frozen=True)
class SharpenParams(_ParamsMixin):
    """Parameters for the sharpen effect.

    Attributes:
        amount: Contrast applied to each sharpened channel
    """
    kind = EffectKind.SHARPEN

    amount: float = DEFAULT_SHARPEN_AMOUNT

    def clamped(self) -> "SharpenParams":
        return replace(
            self,
            amount=sanitize(self.amount, DEFAULT_SHARPEN_AMOUNT, *SHARPEN_AMOUNT_RANGE),
        )


@dataclass(frozen=True)
class ThresholdParams(_ParamsMixin):
    """Parameters for the threshold effect.

    Attributes:
        shift: Multiplier on mid-gray giving the luma cut-off (128 * shift)
        invert: Swap black and white in the output
    """
    kind = EffectKind.THRESHOLD

    shift: float = DEFAULT_THRESHOLD_SHIFT
    invert: bool = DEFAULT_THRESHOLD_INVERT

    def clamped(self) -> "ThresholdParams":
        return replace(
            self,
            shift=sanitize(self.shift, DEFAULT_THRESHOLD_SHIFT, *THRESHOLD_SHIFT_RANGE),
            invert=_as_bool(self.invert, DEFAULT_THRESHOLD_INVERT),
        )


@dataclass(frozen=True)
class OutlineParams(_ParamsMixin):
    """Parameters for the colored outline effect.

    Attributes:
        width: Dilation radius for the outline (0 = off)
        hue: Outline hue in degrees, wrapped into 0-360
        saturation: Outline saturation on a 0-3 scale (divided by 3)
        opacity: Multiplier on edge magnitude giving the blend alpha
    """
    kind = EffectKind.OUTLINE

    width: float = DEFAULT_OUTLINE_WIDTH
    hue: float = DEFAULT_OUTLINE_HUE
    saturation: float = DEFAULT_OUTLINE_SATURATION
    opacity: float = DEFAULT_OUTLINE_OPACITY

    def clamped(self) -> "OutlineParams":
        hue = sanitize(self.hue, DEFAULT_OUTLINE_HUE) % HUE_DEGREES
        return replace(
            self,
            width=sanitize(self.width, DEFAULT_OUTLINE_WIDTH, *OUTLINE_WIDTH_RANGE),
            hue=hue,
            saturation=sanitize(self.saturation, DEFAULT_OUTLINE_SATURATION, *OUTLINE_SATURATION_RANGE),
            opacity=sanitize(self.opacity, DEFAULT_OUTLINE_OPACITY, *OUTLINE_OPACITY_RANGE),
        )


EffectParameters = Union[NoEffectParams, EdgesParams, SharpenParams, ThresholdParams, OutlineParams]

PARAMS_BY_KIND: Dict[EffectKind, Type[Any]] = {
    EffectKind.NONE: NoEffectParams,
    EffectKind.EDGES: EdgesParams,
    EffectKind.SHARPEN: SharpenParams,
    EffectKind.THRESHOLD: ThresholdParams,
    EffectKind.OUTLINE: OutlineParams,
}


def default_params(kind: Union[str, EffectKind]) -> EffectParameters:
    return PARAMS_BY_KIND[parse_effect_kind(kind)]()


def params_from_dict(kind: Union[str, EffectKind], data: Dict[str, Any]) -> EffectParameters:
    """
    Build the parameter dataclass for an effect kind from a dictionary.

    Unknown keys are ignored and missing keys keep their defaults.
    """
    return PARAMS_BY_KIND[parse_effect_kind(kind)].from_dict(dict(data or {}))


def merge_params(
    kind: Union[str, EffectKind],
    base: Union[EffectParameters, None],
    overrides: Dict[str, Any],
) -> EffectParameters:
    """
    Overlay individual knob values on top of a parameter set.

    Args:
        kind: Effect kind or name
        base: Starting parameters (None = defaults for kind)
        overrides: Knob values to replace; knobs of other effects are ignored
    """
    kind = parse_effect_kind(kind)
    data = (base or default_params(kind)).to_dict()
    data.update(overrides or {})
    return params_from_dict(kind, data)
