"""
Preview and export renderers and the render session.

Two renderers implement one interface:

- PreviewRenderer: approximate, fast, Pillow filter graph (on-screen feedback)
- ExportRenderer: exact effect pipeline (file export)

RenderSession ties a source fetch, a render and an optional export together
for interactive callers. Every invocation takes a generation token; results
that arrive with a token older than the latest one are discarded instead of
overwriting newer output.

Example:
    >>> session = RenderSession(ImageFetcher())
    >>> token = session.begin()
    >>> raster = session.fetch(token, "https://example.org/photo.jpg")
    >>> result = session.render(token, raster, "edges", mode="export")
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from threading import Lock
from typing import Any, Dict, Optional, Union
import logging

from RL_Libs.constants import RENDER_MODE_EXPORT, RENDER_MODE_PREVIEW
from RL_Libs.EffectsLib.effect_params import EffectKind, EffectParameters, parse_effect_kind
from RL_Libs.EffectsLib.effect_pipeline import apply_effect
from RL_Libs.RasterLib.raster_models import RasterBuffer
from RL_Libs.RenderLib.image_source import ImageFetcher
from RL_Libs.RenderLib.png_export import ExportHandler
from RL_Libs.RenderLib.preview_renderer import build_preview_graph, render_preview

logger = logging.getLogger(__name__)

ParamsLike = Union[EffectParameters, Dict[str, Any], None]


class Renderer(ABC):
    """Renders a raster with an effect."""

    name = ""

    @abstractmethod
    def render(
        self,
        raster: RasterBuffer,
        kind: Union[str, EffectKind],
        params: ParamsLike = None,
    ) -> RasterBuffer:
        raise NotImplementedError


class PreviewRenderer(Renderer):
    """Approximate renderer built on a declarative Pillow filter graph."""

    name = RENDER_MODE_PREVIEW

    def render(self, raster, kind, params=None):
        return render_preview(raster, build_preview_graph(kind, params))


class ExportRenderer(Renderer):
    """Exact renderer built on the effect pipeline."""

    name = RENDER_MODE_EXPORT

    def render(self, raster, kind, params=None):
        return apply_effect(raster, kind, params)


@dataclass(frozen=True)
class GenerationToken:
    generation: int


class RenderSession:
    """
    Issues generation tokens and discards results from superseded invocations.

    The session holds no image data; only the latest generation number is
    shared, guarded by a lock so callers on different threads can race safely.
    """

    def __init__(
        self,
        fetcher: Optional[ImageFetcher] = None,
        renderers: Optional[Dict[str, Renderer]] = None,
    ):
        self.fetcher = fetcher or ImageFetcher()
        self.renderers = renderers or {
            RENDER_MODE_PREVIEW: PreviewRenderer(),
            RENDER_MODE_EXPORT: ExportRenderer(),
        }
        self._generation = 0
        self._lock = Lock()

    def begin(self) -> GenerationToken:
        """Start a new invocation; every older token becomes stale."""
        with self._lock:
            self._generation += 1
            return GenerationToken(self._generation)

    def is_current(self, token: GenerationToken) -> bool:
        with self._lock:
            return token.generation == self._generation

    def deliver(self, token: GenerationToken, result: Any) -> Optional[Any]:
        """
        Pass a result through if its token is still current.

        Returns:
            The result, or None when the token is stale
        """
        if self.is_current(token):
            return result
        logger.warning(f"Discarding stale result from generation {token.generation}")
        return None

    def fetch(self, token: GenerationToken, url: str) -> Optional[RasterBuffer]:
        """
        Fetch a source image for an invocation.

        Raises:
            FetchBlocked, FetchFailed: Surfaced once; no retry
        """
        return self.deliver(token, self.fetcher.fetch(url))

    def render(
        self,
        token: GenerationToken,
        raster: RasterBuffer,
        kind: Union[str, EffectKind],
        params: ParamsLike = None,
        mode: str = RENDER_MODE_PREVIEW,
    ) -> Optional[RasterBuffer]:
        """
        Render a raster with the preview or export renderer.

        Raises:
            ValueError: If mode is not a registered renderer
        """
        if mode not in self.renderers:
            raise ValueError(f"Unknown render mode: {mode}. Valid modes: {', '.join(sorted(self.renderers))}")
        if not self.is_current(token):
            logger.debug(f"Skipping render for stale generation {token.generation}")
            return None
        return self.deliver(token, self.renderers[mode].render(raster, kind, params))

    def export(
        self,
        token: GenerationToken,
        raster: RasterBuffer,
        kind: Union[str, EffectKind],
        params: ParamsLike,
        handler: ExportHandler,
    ) -> Optional[Path]:
        """
        Render with the exact pipeline and save the PNG.

        Nothing is written when the token goes stale before saving.

        Raises:
            ExportFailed: If encoding or writing fails
        """
        result = self.render(token, raster, kind, params, mode=RENDER_MODE_EXPORT)
        if result is None or not self.is_current(token):
            return None
        return handler.export(result, parse_effect_kind(kind).value)
