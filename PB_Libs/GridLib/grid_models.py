"""
Grid data models for PixelBead.

This module defines the core data structures used throughout the editing
system.

Classes:
    BoundsMode: Whether canvas bounds are fixed or grow on demand
    Bounds: Editable canvas rectangle [min_x, max_x) x [min_y, max_y)
    Viewport: Pan and zoom of the rendered canvas

Type Aliases:
    Coord: An (x, y) cell coordinate; may be negative
    Grid: Sparse mapping from Coord to palette color id; no key means empty
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple

Coord = Tuple[int, int]
Grid = Dict[Coord, str]


class BoundsMode(Enum):
    FIXED = "fixed"
    FREE = "free"


@dataclass(frozen=True)
class Bounds:
    min_x: int
    max_x: int
    min_y: int
    max_y: int
    mode: BoundsMode = BoundsMode.FIXED

    def __post_init__(self) -> None:
        if self.min_x >= self.max_x or self.min_y >= self.max_y:
            raise ValueError(
                f"Invalid bounds: x [{self.min_x}, {self.max_x}), y [{self.min_y}, {self.max_y})"
            )

    @classmethod
    def of_size(cls, width: int, height: int, mode: BoundsMode = BoundsMode.FIXED,
                min_x: int = 0, min_y: int = 0) -> "Bounds":
        return cls(min_x, min_x + width, min_y, min_y + height, mode)

    @property
    def width(self) -> int:
        return self.max_x - self.min_x

    @property
    def height(self) -> int:
        return self.max_y - self.min_y

    @property
    def is_free(self) -> bool:
        return self.mode is BoundsMode.FREE

    def contains(self, x: int, y: int) -> bool:
        return self.min_x <= x < self.max_x and self.min_y <= y < self.max_y


@dataclass(frozen=True)
class Viewport:
    """Screen-space pan offset and zoom of the canvas.

    Attributes:
        offset_x: Screen x of the canvas' top-left corner (cell min_x)
        offset_y: Screen y of the canvas' top-left corner (cell min_y)
        zoom: Scale factor applied to the configured cell size
    """
    offset_x: float = 0.0
    offset_y: float = 0.0
    zoom: float = 1.0

    def screen_to_grid(self, screen_x: float, screen_y: float, bounds: Bounds, cell_size: float) -> Coord:
        """Cell under a screen position."""
        grid_px = (screen_x - self.offset_x) / self.zoom
        grid_py = (screen_y - self.offset_y) / self.zoom
        return (
            int(math.floor(grid_px / cell_size)) + bounds.min_x,
            int(math.floor(grid_py / cell_size)) + bounds.min_y,
        )

    def pan(self, dx: float, dy: float) -> "Viewport":
        return Viewport(self.offset_x + dx, self.offset_y + dy, self.zoom)

    def compensate_growth(self, added_left: int, added_top: int, cell_size: float) -> "Viewport":
        """Shift the pan so content stays put after cells are added on the left/top."""
        return Viewport(
            self.offset_x - added_left * cell_size * self.zoom,
            self.offset_y - added_top * cell_size * self.zoom,
            self.zoom,
        )

    def zoom_at(self, screen_x: float, screen_y: float, zoom: float,
                min_zoom: float, max_zoom: float) -> "Viewport":
        """Zoom toward a screen point, keeping the world point under it fixed."""
        new_zoom = min(max(min_zoom, zoom), max_zoom)
        world_x = (screen_x - self.offset_x) / self.zoom
        world_y = (screen_y - self.offset_y) / self.zoom
        return Viewport(screen_x - world_x * new_zoom, screen_y - world_y * new_zoom, new_zoom)

    @classmethod
    def centered(cls, bounds: Bounds, view_width: float, view_height: float, cell_size: float) -> "Viewport":
        return cls(
            offset_x=(view_width - bounds.width * cell_size) / 2.0,
            offset_y=(view_height - bounds.height * cell_size) / 2.0,
            zoom=1.0,
        )
