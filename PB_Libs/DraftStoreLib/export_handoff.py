"""
Export handoff for PixelBead.

The export sheet itself is drawn elsewhere; this module prepares what it
needs: the grid with coordinates shifted so the canvas starts at (0, 0),
its size and title, and the bill of materials (bead count per color).
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from PB_Libs.ColorLib.palette_matcher import PaletteCache
from PB_Libs.GridLib.editor_session import EditorSession
from PB_Libs.GridLib.grid_models import Bounds, Grid
from PB_Libs.constants import DEFAULT_TITLE

logger = logging.getLogger(__name__)


@dataclass
class BeadCount:
    color_id: str
    code: str
    hex: str
    count: int


@dataclass
class ExportHandoff:
    """
    Attributes:
        grid: Cells with coordinates relative to the canvas' top-left corner
        width: Canvas width in cells
        height: Canvas height in cells
        title: Pattern title
        materials: Bead counts sorted by color code
    """
    grid: Grid
    width: int
    height: int
    title: str
    materials: List[BeadCount] = field(default_factory=list)

    @property
    def total_beads(self) -> int:
        return sum(item.count for item in self.materials)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "grid": {f"{x},{y}": color_id for (x, y), color_id in self.grid.items()},
            "width": self.width,
            "height": self.height,
            "title": self.title,
            "materials": [
                {"id": item.color_id, "code": item.code, "hex": item.hex, "count": item.count}
                for item in self.materials
            ],
            "totalBeads": self.total_beads,
        }


def normalize_grid(grid: Grid, bounds: Bounds) -> Grid:
    return {(x - bounds.min_x, y - bounds.min_y): color_id for (x, y), color_id in grid.items()}


def count_beads(grid: Grid, palette: Optional[PaletteCache] = None) -> List[BeadCount]:
    """
    Count beads per color, sorted by color code.

    Colors missing from the palette are listed with their id as code and
    an empty hex.
    """
    counts: Dict[str, int] = {}
    for color_id in grid.values():
        counts[color_id] = counts.get(color_id, 0) + 1

    materials = []
    for color_id, count in counts.items():
        color = palette.get(color_id) if palette is not None else None
        if color is None:
            materials.append(BeadCount(color_id, color_id, "", count))
        else:
            materials.append(BeadCount(color_id, color.code or color_id, color.hex, count))

    materials.sort(key=lambda item: (item.code, item.color_id))
    return materials


def build_export_handoff(grid: Grid, bounds: Bounds, title: str = DEFAULT_TITLE,
                         palette: Optional[PaletteCache] = None) -> ExportHandoff:
    return ExportHandoff(
        grid=normalize_grid(grid, bounds),
        width=bounds.width,
        height=bounds.height,
        title=title or DEFAULT_TITLE,
        materials=count_beads(grid, palette),
    )


def export_session(session: EditorSession) -> ExportHandoff:
    """Settle pending edits and build the handoff for the session's pattern."""
    session.finalize()
    handoff = build_export_handoff(session.grid, session.bounds, session.title, session.palette)
    logger.info(
        f"Prepared export of {handoff.width}x{handoff.height} pattern "
        f"with {handoff.total_beads} beads in {len(handoff.materials)} colors"
    )
    return handoff
