"""
Rectangular selection and move for PixelBead.

The selection is a small state machine driven by pointer events:

    IDLE --press--> SELECTING --release--> ACTIVE --press inside--> DRAGGING
      ^                 |                    |  ^                       |
      |   nothing lifted                     |  +-------release---------+
      +------------------ press outside / commit -----------------------+

On release of the marquee every colored cell inside the rectangle is lifted
out of the grid into a floating buffer keyed relative to the rectangle's
top-left cell. Dragging accumulates a whole-cell offset. Committing stamps
the buffer back at rect_min + relative + offset, overwriting what is there.

Classes:
    SelectionPhase: States of the selection state machine
    SelectionState: Rectangle, floating pixels and drag offset
    SelectionEngine: Transition functions over a grid
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, Optional, Tuple

from PB_Libs.GridLib.grid_models import Bounds, Coord, Grid

logger = logging.getLogger(__name__)


class SelectionPhase(Enum):
    IDLE = "idle"
    SELECTING = "selecting"
    ACTIVE = "active"
    DRAGGING = "dragging"


@dataclass
class SelectionState:
    """
    Attributes:
        active: True while pixels are floating
        rect_start: Cell where the marquee started
        rect_end: Cell where the marquee currently ends
        floating_pixels: Lifted colors keyed relative to the rectangle's min corner
        offset: Accumulated drag delta in cells
    """
    active: bool = False
    rect_start: Coord = (0, 0)
    rect_end: Coord = (0, 0)
    floating_pixels: Dict[Coord, str] = field(default_factory=dict)
    offset: Coord = (0, 0)

    @property
    def rect_min(self) -> Coord:
        return min(self.rect_start[0], self.rect_end[0]), min(self.rect_start[1], self.rect_end[1])

    @property
    def rect_max(self) -> Coord:
        """Inclusive bottom-right cell."""
        return max(self.rect_start[0], self.rect_end[0]), max(self.rect_start[1], self.rect_end[1])


class SelectionEngine:
    """
    Drives one rectangular selection over a grid.

    The grid is passed into each transition; the engine only keeps the
    selection state. Methods that stamp pixels back report it so the caller
    can record a history entry.
    """

    def __init__(self) -> None:
        self.phase = SelectionPhase.IDLE
        self.state = SelectionState()
        self._drag_anchor: Optional[Coord] = None

    @property
    def is_active(self) -> bool:
        return self.phase in (SelectionPhase.ACTIVE, SelectionPhase.DRAGGING)

    @property
    def is_busy(self) -> bool:
        return self.phase is not SelectionPhase.IDLE

    def contains(self, x: int, y: int) -> bool:
        """Whether (x, y) lies in the rectangle at its current dragged position."""
        if not self.is_active:
            return False
        (min_x, min_y), (max_x, max_y) = self.state.rect_min, self.state.rect_max
        dx, dy = self.state.offset
        return min_x + dx <= x <= max_x + dx and min_y + dy <= y <= max_y + dy

    def floating_cells(self) -> Iterator[Tuple[Coord, str]]:
        """Absolute positions and colors of the floating pixels."""
        if not self.is_active:
            return
        min_x, min_y = self.state.rect_min
        dx, dy = self.state.offset
        for (rel_x, rel_y), color_id in self.state.floating_pixels.items():
            yield (min_x + rel_x + dx, min_y + rel_y + dy), color_id

    def press(self, grid: Grid, x: int, y: int, bounds: Optional[Bounds] = None) -> bool:
        """
        Pointer down with the marquee tool.

        Returns:
            True if an active selection was committed into `grid`
        """
        if self.phase is SelectionPhase.ACTIVE and self.contains(x, y):
            self.phase = SelectionPhase.DRAGGING
            self._drag_anchor = (x, y)
            return False

        committed = False
        if self.is_active:
            committed = self.commit(grid, bounds)

        self.state = SelectionState(rect_start=(x, y), rect_end=(x, y))
        self.phase = SelectionPhase.SELECTING
        return committed

    def move(self, x: int, y: int) -> None:
        if self.phase is SelectionPhase.SELECTING:
            self.state.rect_end = (x, y)
        elif self.phase is SelectionPhase.DRAGGING and self._drag_anchor is not None:
            anchor_x, anchor_y = self._drag_anchor
            dx, dy = x - anchor_x, y - anchor_y
            if dx or dy:
                offset_x, offset_y = self.state.offset
                self.state.offset = (offset_x + dx, offset_y + dy)
                self._drag_anchor = (x, y)

    def release(self, grid: Grid) -> int:
        """
        Pointer up.

        Finishing a marquee lifts the colored cells inside it out of `grid`.

        Returns:
            Number of cells lifted (0 when not finishing a marquee)
        """
        if self.phase is SelectionPhase.DRAGGING:
            self.phase = SelectionPhase.ACTIVE
            self._drag_anchor = None
            return 0
        if self.phase is not SelectionPhase.SELECTING:
            return 0

        (min_x, min_y), (max_x, max_y) = self.state.rect_min, self.state.rect_max
        lifted: Dict[Coord, str] = {}
        for (x, y) in list(grid):
            if min_x <= x <= max_x and min_y <= y <= max_y:
                lifted[(x - min_x, y - min_y)] = grid.pop((x, y))

        if not lifted:
            self.clear()
            return 0

        self.state.floating_pixels = lifted
        self.state.active = True
        self.phase = SelectionPhase.ACTIVE
        logger.debug(f"Lifted {len(lifted)} cells from x[{min_x},{max_x}] y[{min_y},{max_y}]")
        return len(lifted)

    def commit(self, grid: Grid, bounds: Optional[Bounds] = None) -> bool:
        """
        Stamp the floating pixels into `grid` at their dragged position.

        With fixed bounds, pixels that would land outside the canvas are
        dropped.

        Returns:
            True if there was an active selection to commit
        """
        if not self.is_active:
            self.clear()
            return False

        dropped = 0
        for (x, y), color_id in list(self.floating_cells()):
            if bounds is not None and not bounds.is_free and not bounds.contains(x, y):
                dropped += 1
                continue
            grid[(x, y)] = color_id

        if dropped:
            logger.debug(f"Dropped {dropped} floating cells outside the fixed canvas")
        self.clear()
        return True

    def revert(self, grid: Grid) -> bool:
        """Put floating pixels back where they were lifted from, ignoring the drag."""
        if not self.is_active:
            self.clear()
            return False

        min_x, min_y = self.state.rect_min
        for (rel_x, rel_y), color_id in self.state.floating_pixels.items():
            grid[(min_x + rel_x, min_y + rel_y)] = color_id
        self.clear()
        return True

    def clear(self) -> None:
        self.phase = SelectionPhase.IDLE
        self.state = SelectionState()
        self._drag_anchor = None
