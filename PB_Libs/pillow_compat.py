"""
Compatibility wrapper that loads Pillow (the `PIL` namespace) once and
re-exports the symbols PixelBead needs: the `Image` and `ImageDraw` modules
and the `Resampling` filter namespace.

Older Pillow releases keep the resampling filters as module attributes
instead of the `Image.Resampling` enum; `BOX` resolves to the
right value on either layout.
"""
from importlib import import_module
from types import ModuleType
from typing import Optional

def _import(name: str) -> Optional[ModuleType]:
    try:
        return import_module(name)
    except ImportError:
        return None

_pil_image = _import("PIL.Image")
_pil_imagedraw = _import("PIL.ImageDraw")

if _pil_image is None or _pil_imagedraw is None:
    raise ImportError("pillow (PIL) is required: install with 'pip install Pillow'")

Image = _pil_image
ImageDraw = _pil_imagedraw

_resampling = getattr(_pil_image, "Resampling", _pil_image)
BOX = _resampling.BOX

