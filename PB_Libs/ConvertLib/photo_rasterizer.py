"""
Photo rasterizer for PixelBead.

Turns an ordinary photo into a bead grid: the image is scaled down to the
requested number of cells across (height follows the aspect ratio) and each
resulting pixel is matched to the nearest palette color. Mostly-transparent
pixels stay empty so cut-out subjects keep their outline.

Functions:
    suggest_target_width: Default grid width for an image
    rasterize_photo: Convert a SourceImage into a bead grid
"""

import logging
from typing import Dict, Tuple

import numpy as np

from PB_Libs.ColorLib.palette_matcher import EmptyPaletteError, PaletteCache
from PB_Libs.ConvertLib.conversion_models import ConversionResult, round_half_up
from PB_Libs.ConvertLib.source_image import SourceImage
from PB_Libs.constants import ALPHA_CUTOFF, DEFAULT_PHOTO_WIDTH
from PB_Libs.pillow_compat import BOX

logger = logging.getLogger(__name__)

PHOTO_TITLE = "Imported photo"


def suggest_target_width(source_width: int) -> int:
    return max(1, min(DEFAULT_PHOTO_WIDTH, source_width))


def target_height_for(source: SourceImage, target_width: int) -> int:
    return max(1, round_half_up(source.height * target_width / source.width))


def rasterize_photo(
    source: SourceImage,
    target_width: int,
    palette: PaletteCache,
) -> ConversionResult:
    """
    Downsample a photo and match every cell to the palette.

    Args:
        source: Decoded RGBA image
        target_width: Grid width in cells (>= 1)
        palette: Palette to match against

    Returns:
        ConversionResult with cells at [0, width) x [0, height)

    Raises:
        ValueError: If target_width < 1
        EmptyPaletteError: If the palette is empty
    """
    if target_width < 1:
        raise ValueError(f"target_width must be at least 1, got {target_width}")
    if palette.is_empty:
        raise EmptyPaletteError("Cannot rasterize photo: the palette is empty")

    target_height = target_height_for(source, target_width)
    resized = source.to_image().resize((target_width, target_height), BOX)
    pixels = np.asarray(resized, dtype=np.uint8)

    matches: Dict[Tuple[int, int, int], str] = {}
    grid = {}
    for y in range(target_height):
        for x in range(target_width):
            r, g, b, a = (int(value) for value in pixels[y, x])
            if a < ALPHA_CUTOFF:
                continue
            key = (r, g, b)
            color_id = matches.get(key)
            if color_id is None:
                color_id = palette.nearest_color(key)
                matches[key] = color_id
            grid[(x, y)] = color_id

    logger.info(
        f"Rasterized {source.width}x{source.height} photo to {target_width}x{target_height} "
        f"({len(grid)} beads, {len(matches)} distinct source colors)"
    )
    return ConversionResult(grid=grid, width=target_width, height=target_height, title=PHOTO_TITLE)
