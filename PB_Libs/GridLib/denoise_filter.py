"""
Isolated-bead cleanup for PixelBead.

Photo conversions leave single stray beads wherever the source had noise.
One denoise pass looks at every bead's eight neighbours: a bead whose
color appears among them is connected and kept; an isolated bead is
replaced by its most common neighbour color, unless the two colors are
further apart than the threshold, in which case it is treated as a
deliberate detail and kept. Beads without any neighbour are never touched.

The pass reads only the input grid, so results do not depend on scan order.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

from PB_Libs.ColorLib.color_space import delta_e
from PB_Libs.ColorLib.palette_matcher import PaletteCache
from PB_Libs.GridLib.grid_models import Bounds, Grid

logger = logging.getLogger(__name__)

# Fixed enumeration order; majority ties go to the first color seen here.
NEIGHBOR_OFFSETS_8 = (
    (-1, -1), (0, -1), (1, -1),
    (-1, 0),           (1, 0),
    (-1, 1),  (0, 1),  (1, 1),
)


@dataclass
class DenoiseResult:
    grid: Grid
    replaced: int = 0


def denoise_grid(
    grid: Grid,
    palette: PaletteCache,
    threshold: float,
    bounds: Optional[Bounds] = None,
) -> DenoiseResult:
    """
    Run one denoise pass.

    Args:
        grid: Grid to clean (not modified)
        palette: Palette used to look up each color's Lab value
        threshold: Isolated beads within this deltaE of the majority
            neighbour color are replaced; further ones are kept
        bounds: If given, only cells inside the bounds are considered

    Returns:
        DenoiseResult with a new grid and the number of replaced beads
    """
    result = dict(grid)
    replaced = 0

    for (x, y), color_id in grid.items():
        if bounds is not None and not bounds.contains(x, y):
            continue

        counts: Dict[str, int] = {}
        for dx, dy in NEIGHBOR_OFFSETS_8:
            neighbor = grid.get((x + dx, y + dy))
            if neighbor is not None:
                counts[neighbor] = counts.get(neighbor, 0) + 1

        if not counts or color_id in counts:
            continue

        # max() keeps the first of equal counts, i.e. enumeration order
        majority = max(counts, key=counts.get)
        own_lab = palette.lab_of(color_id)
        majority_lab = palette.lab_of(majority)
        if own_lab is None or majority_lab is None:
            continue

        if delta_e(own_lab, majority_lab) > threshold:
            continue

        result[(x, y)] = majority
        replaced += 1

    logger.debug(f"Denoise replaced {replaced} isolated beads (threshold {threshold})")
    return DenoiseResult(grid=result, replaced=replaced)
