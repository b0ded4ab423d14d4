"""
Compatibility wrapper to import Pillow (which provides the `PIL` namespace)
in one place for the boundary adapters.

Only the codec and preview modules need Pillow; the numeric core works on
numpy arrays. This module loads the Pillow-provided modules via importlib and
re-exports the symbols those adapters use: `Image`, `ImageFilter`, `ImageOps`,
`ImageChops`, `ImageEnhance` and `UnidentifiedImageError`.
"""
from importlib import import_module
from types import ModuleType
from typing import Optional


def _import(name: str) -> Optional[ModuleType]:
    try:
        return import_module(name)
    except ImportError:
        return None


_pil = _import("PIL")
_pil_image = _import("PIL.Image")

if _pil is None or _pil_image is None:
    raise ImportError("pillow (PIL) is required: install with 'pip install Pillow'")

Image = _pil_image
ImageFilter = import_module("PIL.ImageFilter")
ImageOps = import_module("PIL.ImageOps")
ImageChops = import_module("PIL.ImageChops")
ImageEnhance = import_module("PIL.ImageEnhance")

UnidentifiedImageError = getattr(_pil, "UnidentifiedImageError")
