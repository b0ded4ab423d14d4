"""
Effect Executors Registry.

This module provides a centralized registry of effect executors. It enables
registration, lookup, and execution of the pixel effects the pipeline offers.

Classes:
    EffectRegistry: Registry for effect executors

Functions:
    get_default_registry: Get the global default registry (singleton)
    register_default_effects: Register all built-in effect executors
"""

from typing import Any, Callable, Dict, List, Optional, Type, Union
import logging

from RL_Libs.EffectsLib.effect_params import (
    EffectKind,
    EdgesParams,
    NoEffectParams,
    OutlineParams,
    SharpenParams,
    ThresholdParams,
    parse_effect_kind,
)
from RL_Libs.RasterLib.raster_models import RasterBuffer

logger = logging.getLogger(__name__)

# Type alias for executor function
EffectExecutor = Callable[[RasterBuffer, Any], RasterBuffer]


class EffectRegistry:
    """
    Registry for effect executors.

    Maps each EffectKind to the function that renders it, together with the
    parameter dataclass it expects and descriptive metadata.

    Example:
        >>> registry = EffectRegistry()
        >>> registry.register(EffectKind.SHARPEN, apply_sharpen, SharpenParams)
        >>> executor = registry.get_executor("sharpen")
        >>> result = executor(raster, SharpenParams(amount=1.5))
    """

    def __init__(self):
        """Initialize an empty registry."""
        self._executors: Dict[EffectKind, EffectExecutor] = {}
        self._metadata: Dict[EffectKind, Dict[str, Any]] = {}

    def register(
        self,
        kind: Union[str, EffectKind],
        executor: EffectExecutor,
        params_type: Type[Any],
        description: str = "",
        tags: Optional[List[str]] = None,
    ) -> None:
        """
        Register an effect executor.

        Args:
            kind: Effect kind (or its name)
            executor: Callable taking (raster, params) and returning a new raster
            params_type: Parameter dataclass the executor expects
            description: Human-readable description of the effect
            tags: Optional list of tags for categorization (e.g., ["edges", "gradient"])

        Raises:
            ValueError: If kind is unknown or executor is not callable
            RuntimeError: If kind is already registered
        """
        kind = parse_effect_kind(kind)

        if not callable(executor):
            raise ValueError(f"executor must be callable, got {type(executor)}")

        if kind in self._executors:
            raise RuntimeError(
                f"Effect '{kind.value}' is already registered. "
                f"Use unregister() first to replace it."
            )

        self._executors[kind] = executor
        self._metadata[kind] = {
            "description": str(description),
            "params_type": params_type,
            "tags": list(tags) if tags else [],
        }

        logger.debug(f"Registered executor for effect: {kind.value}")

    def unregister(self, kind: Union[str, EffectKind]) -> bool:
        """
        Unregister an effect executor.

        Returns:
            True if unregistered, False if kind was not registered
        """
        kind = parse_effect_kind(kind)

        if kind in self._executors:
            del self._executors[kind]
            del self._metadata[kind]
            logger.debug(f"Unregistered executor for effect: {kind.value}")
            return True

        return False

    def get_executor(self, kind: Union[str, EffectKind]) -> EffectExecutor:
        """
        Get the executor for an effect kind.

        Raises:
            ValueError: If kind is not a known effect name
            KeyError: If kind is known but not registered
        """
        kind = parse_effect_kind(kind)

        if kind not in self._executors:
            available = ", ".join(self.list_effect_kinds())
            raise KeyError(
                f"No executor registered for effect '{kind.value}'. "
                f"Available effects: {available}"
            )

        return self._executors[kind]

    def has_executor(self, kind: Union[str, EffectKind]) -> bool:
        try:
            return parse_effect_kind(kind) in self._executors
        except ValueError:
            return False

    def params_type(self, kind: Union[str, EffectKind]) -> Type[Any]:
        return self.get_metadata(kind)["params_type"]

    def execute(
        self,
        kind: Union[str, EffectKind],
        raster: RasterBuffer,
        params: Any,
    ) -> RasterBuffer:
        """
        Execute an effect by looking up its executor.

        Raises:
            KeyError: If kind is not registered
            Exception: Any exception raised by the executor
        """
        executor = self.get_executor(kind)
        return executor(raster, params)

    def list_effect_kinds(self) -> List[str]:
        """Sorted list of registered effect names."""
        return sorted(kind.value for kind in self._executors)

    def get_metadata(self, kind: Union[str, EffectKind]) -> Dict[str, Any]:
        """
        Get metadata for an effect kind.

        Returns:
            Dictionary with description, params_type and tags

        Raises:
            KeyError: If kind is not registered
        """
        kind = parse_effect_kind(kind)

        if kind not in self._metadata:
            raise KeyError(f"No metadata for effect: {kind.value}")

        return dict(self._metadata[kind])

    def filter_by_tag(self, tag: str) -> List[str]:
        """Sorted effect names carrying a tag (case-insensitive)."""
        tag = str(tag).strip().lower()
        return sorted([
            kind.value
            for kind, meta in self._metadata.items()
            if tag in [t.lower() for t in meta.get("tags", [])]
        ])

    def clear(self) -> None:
        """Clear all registered executors. Use with caution."""
        self._executors.clear()
        self._metadata.clear()
        logger.warning("Effect registry cleared")


def apply_identity(raster: RasterBuffer, params: NoEffectParams) -> RasterBuffer:
    """The 'none' effect: an exact copy of the input."""
    return raster.clone()


# Global singleton registry
_default_registry: Optional[EffectRegistry] = None


def get_default_registry() -> EffectRegistry:
    """
    Get the global default registry (singleton).

    Creates the registry on first call and registers the built-in effects.
    """
    global _default_registry

    if _default_registry is None:
        _default_registry = EffectRegistry()
        register_default_effects(_default_registry)

    return _default_registry


def register_default_effects(registry: EffectRegistry) -> None:
    """
    Register all built-in effect executors: none, sharpen, threshold,
    edges and outline.
    """
    from RL_Libs.EffectsLib.sharpen_effect import apply_sharpen
    from RL_Libs.EffectsLib.threshold_effect import apply_threshold
    from RL_Libs.EffectsLib.edges_effect import apply_edges
    from RL_Libs.EffectsLib.outline_effect import apply_outline

    registry.register(
        kind=EffectKind.NONE,
        executor=apply_identity,
        params_type=NoEffectParams,
        description="Leave the image unchanged",
        tags=["identity"],
    )

    registry.register(
        kind=EffectKind.SHARPEN,
        executor=apply_sharpen,
        params_type=SharpenParams,
        description="3x3 sharpen kernel with contrast",
        tags=["convolution", "color"],
    )

    registry.register(
        kind=EffectKind.THRESHOLD,
        executor=apply_threshold,
        params_type=ThresholdParams,
        description="Black and white luma threshold",
        tags=["luma", "monochrome"],
    )

    registry.register(
        kind=EffectKind.EDGES,
        executor=apply_edges,
        params_type=EdgesParams,
        description="Sobel edge lines on a white background",
        tags=["convolution", "gradient", "monochrome", "dilation"],
    )

    registry.register(
        kind=EffectKind.OUTLINE,
        executor=apply_outline,
        params_type=OutlineParams,
        description="Colored edge outline screen-blended onto the image",
        tags=["convolution", "gradient", "color", "dilation"],
    )

    logger.info("Registered default effect executors")
