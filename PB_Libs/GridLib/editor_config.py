"""
Editor tunables for PixelBead.

The flood-fill cap, free-mode growth chunk and margin, and denoise
threshold are empirical values. They are collected here so hosts can
override them instead of editing the tools.
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict

from PB_Libs.constants import (
    DEFAULT_FILL_MAX_CELLS,
    DEFAULT_EXPAND_CHUNK,
    DEFAULT_EXPAND_MARGIN,
    DEFAULT_DENOISE_THRESHOLD,
    DEFAULT_CELL_SIZE_PX,
    MIN_ZOOM,
    MAX_ZOOM,
)


@dataclass
class EditorConfig:
    """Configuration for an editing session.

    Attributes:
        fill_max_cells: Flood fill stops after painting this many cells
        expand_chunk: Cells added to a free-mode edge when it grows
        expand_margin: Distance from an edge that triggers growth
        denoise_threshold: Max deltaE for an isolated bead to count as noise
        cell_size_px: On-screen size of one cell at zoom 1.0
        min_zoom: Lower zoom limit
        max_zoom: Upper zoom limit
    """
    fill_max_cells: int = DEFAULT_FILL_MAX_CELLS
    expand_chunk: int = DEFAULT_EXPAND_CHUNK
    expand_margin: int = DEFAULT_EXPAND_MARGIN
    denoise_threshold: float = DEFAULT_DENOISE_THRESHOLD
    cell_size_px: int = DEFAULT_CELL_SIZE_PX
    min_zoom: float = MIN_ZOOM
    max_zoom: float = MAX_ZOOM

    def __post_init__(self) -> None:
        self.fill_max_cells = max(1, int(self.fill_max_cells))
        self.expand_chunk = max(1, int(self.expand_chunk))
        self.expand_margin = max(0, int(self.expand_margin))
        self.denoise_threshold = max(0.0, float(self.denoise_threshold))
        self.cell_size_px = max(1, int(self.cell_size_px))
        self.min_zoom = max(0.01, float(self.min_zoom))
        self.max_zoom = max(self.min_zoom, float(self.max_zoom))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EditorConfig":
        """Create from dictionary, ignoring unknown keys."""
        filtered = {k: v for k, v in data.items() if k in cls.__dataclass_fields__}
        return cls(**filtered)
