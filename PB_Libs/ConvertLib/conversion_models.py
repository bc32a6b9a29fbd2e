"""
Shared result type and helpers for the image-to-grid pipelines.
"""

import math
from dataclasses import dataclass, field
from typing import Dict, Tuple

Coord = Tuple[int, int]


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive values (Python's round() is banker's)."""
    return int(math.floor(value + 0.5))


@dataclass
class ConversionResult:
    """Grid produced by a conversion, with the canvas size it was made for.

    Attributes:
        grid: Sparse grid, coordinates start at (0, 0)
        width: Canvas width in cells
        height: Canvas height in cells
        title: Suggested draft title
    """
    grid: Dict[Coord, str] = field(default_factory=dict)
    width: int = 0
    height: int = 0
    title: str = ""

    @property
    def filled_cells(self) -> int:
        return len(self.grid)
