"""
Canvas bounds rules for PixelBead.

Fixed canvases never change size and reject edits outside their rectangle.
Free canvases accept every edit and grow by whole chunks whenever an edit
lands within `margin` cells of an edge; they never shrink.

Growth on the left or top moves min_x / min_y further negative. The
caller has to shift its viewport by the same number of cells in the
opposite direction, which is why BoundsUpdate reports added_left and
added_top.

Classes:
    BoundsUpdate: Result of checking an edit target against the bounds

Functions:
    resolve_edit_target: Validate one edit target and grow free bounds
    expand_to_include: Grow free bounds around a batch of coordinates
"""

import logging
from dataclasses import dataclass
from typing import Iterable

from PB_Libs.GridLib.grid_models import Bounds, Coord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BoundsUpdate:
    """
    Attributes:
        bounds: Bounds after the edit (same object when unchanged)
        accepted: False if the target must be ignored (fixed mode, outside)
        added_left: Cells added in front of the old min_x
        added_top: Cells added above the old min_y
    """
    bounds: Bounds
    accepted: bool
    added_left: int = 0
    added_top: int = 0

    @property
    def shifts_origin(self) -> bool:
        return self.added_left > 0 or self.added_top > 0


def _grow(bounds: Bounds, x: int, y: int, chunk: int, margin: int) -> Bounds:
    min_x, max_x, min_y, max_y = bounds.min_x, bounds.max_x, bounds.min_y, bounds.max_y
    while x < min_x + margin:
        min_x -= chunk
    while x >= max_x - margin:
        max_x += chunk
    while y < min_y + margin:
        min_y -= chunk
    while y >= max_y - margin:
        max_y += chunk

    if (min_x, max_x, min_y, max_y) == (bounds.min_x, bounds.max_x, bounds.min_y, bounds.max_y):
        return bounds
    return Bounds(min_x, max_x, min_y, max_y, bounds.mode)


def resolve_edit_target(bounds: Bounds, x: int, y: int, chunk: int, margin: int) -> BoundsUpdate:
    """
    Check an edit target and grow free-mode bounds around it.

    Args:
        bounds: Current canvas bounds
        x, y: Target cell
        chunk: Cells added per growth step
        margin: Edge distance that triggers growth

    Returns:
        BoundsUpdate describing the (possibly grown) bounds
    """
    if not bounds.is_free:
        return BoundsUpdate(bounds=bounds, accepted=bounds.contains(x, y))

    grown = _grow(bounds, x, y, chunk, margin)
    if grown is bounds:
        return BoundsUpdate(bounds=bounds, accepted=True)

    logger.debug(
        f"Free canvas grew from x[{bounds.min_x},{bounds.max_x}) y[{bounds.min_y},{bounds.max_y}) "
        f"to x[{grown.min_x},{grown.max_x}) y[{grown.min_y},{grown.max_y})"
    )
    return BoundsUpdate(
        bounds=grown,
        accepted=True,
        added_left=bounds.min_x - grown.min_x,
        added_top=bounds.min_y - grown.min_y,
    )


def expand_to_include(bounds: Bounds, coords: Iterable[Coord], chunk: int, margin: int) -> BoundsUpdate:
    """
    Grow free-mode bounds so every coordinate sits inside the margin.

    Fixed bounds are returned unchanged; `accepted` is then True only if
    every coordinate already lies inside them.
    """
    if not bounds.is_free:
        return BoundsUpdate(bounds=bounds, accepted=all(bounds.contains(x, y) for x, y in coords))

    grown = bounds
    for x, y in coords:
        grown = _grow(grown, x, y, chunk, margin)
    return BoundsUpdate(
        bounds=grown,
        accepted=True,
        added_left=bounds.min_x - grown.min_x,
        added_top=bounds.min_y - grown.min_y,
    )
