"""
Pattern sampler for PixelBead.

Digitizes a photograph of an existing bead pattern. The user lines up a
virtual grid over the photo (offset, cell size, rotation, column and row
count); every grid cell is then read from the photo and matched to a
palette color.

A single centre sample is brittle against moire and slight misalignment,
so each cell is sampled at nine points. Samples are grouped by a coarse
32-level color bucket, the most populated bucket wins, and the average of
that bucket's original colors is what gets matched.

Classes:
    CalibrationState: Virtual grid placement in source-image pixels

Functions:
    default_calibration: Initial grid guess for a freshly loaded image
    cell_to_source: Map a grid-local point to source-image pixels
    grid_outline: Source-space corners of the calibrated grid
    sample_pattern: Convert a SourceImage through a calibrated grid
"""

import logging
import math
from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional, Tuple

import numpy as np

from PB_Libs.ColorLib.palette_matcher import EmptyPaletteError, PaletteCache
from PB_Libs.ConvertLib.conversion_models import ConversionResult, round_half_up
from PB_Libs.ConvertLib.source_image import SourceImage
from PB_Libs.constants import (
    ALPHA_CUTOFF,
    QUANTIZE_STEP,
    SAMPLE_SPREAD,
    DEFAULT_PATTERN_COLS,
    MIN_ESTIMATED_CELL_SIZE,
)

logger = logging.getLogger(__name__)

PATTERN_TITLE = "Scanned pattern"

# Row by row: dy outer, dx inner. Bucket ties depend on this order.
SAMPLE_OFFSETS: Tuple[Tuple[float, float], ...] = tuple(
    (dx, dy)
    for dy in (-SAMPLE_SPREAD, 0.0, SAMPLE_SPREAD)
    for dx in (-SAMPLE_SPREAD, 0.0, SAMPLE_SPREAD)
)


@dataclass
class CalibrationState:
    """Placement of the virtual grid over the source image.

    Attributes:
        offset_x: Grid origin x in source pixels
        offset_y: Grid origin y in source pixels
        cell_size: Width of one cell in source pixels
        rotation_degrees: Grid rotation about its origin
        cols: Number of grid columns
        rows: Number of grid rows
        target_brand: Brand whose palette the cells are matched against
    """
    offset_x: float = 0.0
    offset_y: float = 0.0
    cell_size: float = 10.0
    rotation_degrees: float = 0.0
    cols: int = 30
    rows: int = 30
    target_brand: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CalibrationState":
        """Create from dictionary."""
        filtered = {k: v for k, v in data.items() if k in cls.__dataclass_fields__}
        return cls(**filtered)


def default_calibration(width: int, height: int, target_brand: str = "") -> CalibrationState:
    """
    Initial grid guess for a freshly loaded pattern photo.

    Assumes the pattern is about 40 cells wide and fills the image.
    """
    cell_size = max(MIN_ESTIMATED_CELL_SIZE, width / DEFAULT_PATTERN_COLS)
    return CalibrationState(
        offset_x=0.0,
        offset_y=0.0,
        cell_size=cell_size,
        rotation_degrees=0.0,
        cols=DEFAULT_PATTERN_COLS,
        rows=int(math.floor(height / cell_size)),
        target_brand=target_brand,
    )


def cell_to_source(calibration: CalibrationState, local_x: float, local_y: float) -> Tuple[float, float]:
    """Rotate a grid-local point about the grid origin, then translate by the offset."""
    radians = math.radians(calibration.rotation_degrees)
    cos_t = math.cos(radians)
    sin_t = math.sin(radians)
    rotated_x = local_x * cos_t - local_y * sin_t
    rotated_y = local_x * sin_t + local_y * cos_t
    return calibration.offset_x + rotated_x, calibration.offset_y + rotated_y


def grid_outline(calibration: CalibrationState) -> List[Tuple[float, float]]:
    """Corners of the calibrated grid in source pixels, clockwise from the origin."""
    width = calibration.cols * calibration.cell_size
    height = calibration.rows * calibration.cell_size
    return [
        cell_to_source(calibration, 0.0, 0.0),
        cell_to_source(calibration, width, 0.0),
        cell_to_source(calibration, width, height),
        cell_to_source(calibration, 0.0, height),
    ]


def _quantize(channel: int) -> int:
    return round_half_up(channel / QUANTIZE_STEP) * QUANTIZE_STEP


def _sample_cell(
    pixels: np.ndarray,
    calibration: CalibrationState,
    col: int,
    row: int,
) -> Optional[Tuple[float, float, float]]:
    """Majority-bucket average color of one cell, or None when no sample is usable."""
    height, width = pixels.shape[:2]
    cell_size = calibration.cell_size
    center_x = col * cell_size + cell_size / 2.0
    center_y = row * cell_size + cell_size / 2.0

    # dict keeps insertion order, so ties go to the first bucket seen
    buckets: Dict[Tuple[int, int, int], List[int]] = {}
    for dx, dy in SAMPLE_OFFSETS:
        source_x, source_y = cell_to_source(
            calibration,
            center_x + dx * cell_size,
            center_y + dy * cell_size,
        )
        ix = int(math.floor(source_x))
        iy = int(math.floor(source_y))
        if ix < 0 or ix >= width or iy < 0 or iy >= height:
            continue
        r, g, b, a = (int(value) for value in pixels[iy, ix])
        if a < ALPHA_CUTOFF:
            continue

        key = (_quantize(r), _quantize(g), _quantize(b))
        bucket = buckets.get(key)
        if bucket is None:
            buckets[key] = [1, r, g, b]
        else:
            bucket[0] += 1
            bucket[1] += r
            bucket[2] += g
            bucket[3] += b

    if not buckets:
        return None

    best: Optional[List[int]] = None
    for bucket in buckets.values():
        if best is None or bucket[0] > best[0]:
            best = bucket

    count = best[0]
    return best[1] / count, best[2] / count, best[3] / count


def sample_pattern(
    source: SourceImage,
    calibration: CalibrationState,
    palette: PaletteCache,
) -> ConversionResult:
    """
    Read every cell of a calibrated grid from a pattern photo.

    Args:
        source: Decoded RGBA photo of the pattern
        calibration: Grid placement over the photo
        palette: Palette to match against

    Returns:
        ConversionResult of size cols x rows; cells without any usable
        sample are left empty

    Raises:
        EmptyPaletteError: If the palette is empty
    """
    if palette.is_empty:
        raise EmptyPaletteError("Cannot sample pattern: the palette is empty")

    pixels = source.to_array()
    grid = {}
    skipped = 0
    for row in range(calibration.rows):
        for col in range(calibration.cols):
            average = _sample_cell(pixels, calibration, col, row)
            if average is None:
                skipped += 1
                continue
            grid[(col, row)] = palette.nearest_color(average)

    logger.info(
        f"Sampled {calibration.cols}x{calibration.rows} pattern grid "
        f"({len(grid)} beads, {skipped} empty cells)"
    )
    return ConversionResult(
        grid=grid,
        width=calibration.cols,
        height=calibration.rows,
        title=PATTERN_TITLE,
    )
