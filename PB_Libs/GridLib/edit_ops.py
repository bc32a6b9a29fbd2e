"""
Core grid editing operations for PixelBead.

This module provides the per-cell tool semantics. Targets are expected to
have gone through the bounds manager already; these functions do not grow
bounds themselves.

Functions:
    apply_pen: Paint one cell
    apply_eraser: Clear one cell
    pick_color: Read one cell's color
    flood_fill: 4-connected fill with a visitation cap
    find_color_cells: Every cell of one color, grid-wide
    apply_magic_wand: Delete or recolor a magic wand selection
"""

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import List, Optional

from PB_Libs.GridLib.grid_models import Bounds, Coord, Grid

logger = logging.getLogger(__name__)

NEIGHBOR_OFFSETS_4 = ((1, 0), (-1, 0), (0, 1), (0, -1))


@dataclass
class FillResult:
    grid: Grid
    painted: int = 0
    capped: bool = False


@dataclass
class MagicWandSelection:
    """Cells sharing one exact color id anywhere in the grid."""
    color_id: str
    cells: List[Coord] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.cells)


def apply_pen(grid: Grid, x: int, y: int, color_id: str) -> bool:
    """Paint a cell in place. Returns True if the cell changed."""
    if grid.get((x, y)) == color_id:
        return False
    grid[(x, y)] = color_id
    return True


def apply_eraser(grid: Grid, x: int, y: int) -> bool:
    """Clear a cell in place. Returns True if something was removed."""
    return grid.pop((x, y), None) is not None


def pick_color(grid: Grid, x: int, y: int) -> Optional[str]:
    return grid.get((x, y))


def flood_fill(grid: Grid, x: int, y: int, color_id: str, bounds: Bounds, max_cells: int) -> FillResult:
    """
    Breadth-first 4-connected fill starting at (x, y).

    Every reached cell whose stored value equals the start cell's value is
    painted with `color_id`. An empty start cell only spreads over empty
    cells and a colored one only over that exact color. In fixed mode the
    fill never leaves `bounds`; in free mode only `max_cells` limits it.
    Reaching the cap is not an error, the region is simply left partly
    filled.

    Args:
        grid: Source grid (not modified)
        x, y: Start cell
        color_id: Color to paint
        bounds: Canvas bounds
        max_cells: Maximum number of cells painted

    Returns:
        FillResult with a new grid and the number of painted cells
    """
    target = grid.get((x, y))
    result = dict(grid)
    if target == color_id:
        return FillResult(grid=result)

    queue = deque([(x, y)])
    visited = {(x, y)}
    painted = 0

    while queue and painted < max_cells:
        cx, cy = queue.popleft()
        result[(cx, cy)] = color_id
        painted += 1

        for dx, dy in NEIGHBOR_OFFSETS_4:
            neighbor = (cx + dx, cy + dy)
            if neighbor in visited:
                continue
            if not bounds.is_free and not bounds.contains(*neighbor):
                continue
            if grid.get(neighbor) == target:
                visited.add(neighbor)
                queue.append(neighbor)

    capped = bool(queue)
    if capped:
        logger.debug(f"Flood fill from ({x}, {y}) stopped at the {max_cells} cell cap")
    return FillResult(grid=result, painted=painted, capped=capped)


def find_color_cells(grid: Grid, color_id: str) -> MagicWandSelection:
    """Collect every cell holding exactly `color_id`, connected or not."""
    cells = [coord for coord, value in grid.items() if value == color_id]
    return MagicWandSelection(color_id=color_id, cells=cells)


def apply_magic_wand(grid: Grid, selection: MagicWandSelection, replacement: Optional[str]) -> Grid:
    """
    Delete (replacement=None) or recolor every selected cell.

    Only cells still holding the selected color are touched.

    Returns:
        A new grid
    """
    result = dict(grid)
    for coord in selection.cells:
        if result.get(coord) != selection.color_id:
            continue
        if replacement is None:
            del result[coord]
        else:
            result[coord] = replacement
    return result
