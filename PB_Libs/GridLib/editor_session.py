"""
Editing session controller for PixelBead.

EditorSession owns every piece of mutable editing state (grid, bounds,
viewport, history, selection, active tool and color) and is the only
thing that changes it. Tools are driven through pointer events expressed
in grid coordinates; hosts convert screen positions with screen_to_grid().

History granularity:
    - pen / eraser: one entry per stroke (pointer down to pointer up)
    - fill, magic wand, denoise, palette conversion: one entry each
    - selection: one entry when the floating pixels are committed

Classes:
    Tool: Available editing tools
    EditorSession: The session controller
"""

import logging
from enum import Enum
from typing import Dict, Optional

from PB_Libs.ColorLib.palette_matcher import PaletteCache, remap_grid
from PB_Libs.ConvertLib.conversion_models import ConversionResult
from PB_Libs.GridLib.bounds_manager import BoundsUpdate, expand_to_include, resolve_edit_target
from PB_Libs.GridLib.denoise_filter import denoise_grid
from PB_Libs.GridLib.edit_ops import (
    MagicWandSelection,
    apply_eraser,
    apply_magic_wand,
    apply_pen,
    find_color_cells,
    flood_fill,
    pick_color,
)
from PB_Libs.GridLib.editor_config import EditorConfig
from PB_Libs.GridLib.grid_models import Bounds, BoundsMode, Coord, Grid, Viewport
from PB_Libs.GridLib.history import HistoryLog
from PB_Libs.GridLib.selection import SelectionEngine
from PB_Libs.constants import DEFAULT_CANVAS_SIZE, DEFAULT_TITLE, FREE_MODE_CANVAS_SIZE

logger = logging.getLogger(__name__)


class Tool(Enum):
    PEN = "pen"
    ERASER = "eraser"
    PICKER = "picker"
    FILL = "fill"
    MAGIC_WAND = "magic_wand"
    MARQUEE = "marquee"
    PAN = "pan"


class EditorSession:
    """
    One open pattern and everything needed to edit it.

    Example:
        >>> session = EditorSession.new_canvas(palette, size=10)
        >>> session.select_color("MARD_A01")
        >>> session.pointer_down(2, 3)
        >>> session.pointer_up()
        >>> session.grid[(2, 3)]
        'MARD_A01'
    """

    def __init__(
        self,
        palette: PaletteCache,
        bounds: Bounds,
        grid: Optional[Grid] = None,
        config: Optional[EditorConfig] = None,
        viewport: Optional[Viewport] = None,
        title: str = DEFAULT_TITLE,
        draft_id: str = "",
    ):
        self.palette = palette
        self.config = config or EditorConfig()
        self.bounds = bounds
        self.grid: Grid = dict(grid or {})
        self.viewport = viewport or Viewport()
        self.title = title
        self.draft_id = draft_id

        self.history = HistoryLog(self.grid)
        self.selection = SelectionEngine()
        self.tool = Tool.PEN
        self.selected_color_id: Optional[str] = None
        self.wand_selection: Optional[MagicWandSelection] = None
        self._stroke_active = False

    @classmethod
    def new_canvas(
        cls,
        palette: PaletteCache,
        size: int = DEFAULT_CANVAS_SIZE,
        free_mode: Optional[bool] = None,
        config: Optional[EditorConfig] = None,
    ) -> "EditorSession":
        """Blank square canvas. A canvas of the free-mode size starts in free mode unless told otherwise."""
        if free_mode is None:
            free_mode = size == FREE_MODE_CANVAS_SIZE
        mode = BoundsMode.FREE if free_mode else BoundsMode.FIXED
        return cls(palette, Bounds.of_size(size, size, mode), config=config)

    @classmethod
    def from_conversion(
        cls,
        result: ConversionResult,
        palette: PaletteCache,
        config: Optional[EditorConfig] = None,
    ) -> "EditorSession":
        """Fixed canvas seeded with a converted image; the seed is the first history entry."""
        bounds = Bounds.of_size(max(1, result.width), max(1, result.height))
        return cls(palette, bounds, grid=result.grid, config=config, title=result.title or DEFAULT_TITLE)

    # ------------------------------------------------------------------
    # Tool and color state
    # ------------------------------------------------------------------

    def select_color(self, color_id: str) -> None:
        """Choose the active color; like the palette picker, this switches to the pen."""
        self.selected_color_id = color_id
        self.set_tool(Tool.PEN)

    def set_tool(self, tool: Tool) -> None:
        """Switch tools, committing any floating selection and ending any stroke."""
        if tool is not Tool.MARQUEE:
            self.commit_selection()
        self._end_stroke()
        if tool is not Tool.MAGIC_WAND:
            self.wand_selection = None
        self.tool = tool

    # ------------------------------------------------------------------
    # Viewport
    # ------------------------------------------------------------------

    def screen_to_grid(self, screen_x: float, screen_y: float) -> Coord:
        return self.viewport.screen_to_grid(screen_x, screen_y, self.bounds, self.config.cell_size_px)

    def pan_by(self, dx: float, dy: float) -> None:
        self.viewport = self.viewport.pan(dx, dy)

    def zoom_at(self, screen_x: float, screen_y: float, zoom: float) -> None:
        self.viewport = self.viewport.zoom_at(
            screen_x, screen_y, zoom, self.config.min_zoom, self.config.max_zoom
        )

    def _apply_bounds_update(self, update: BoundsUpdate) -> None:
        # growth to the left/top must shift the viewport in the same step
        if update.bounds is self.bounds:
            return
        self.bounds = update.bounds
        if update.shifts_origin:
            self.viewport = self.viewport.compensate_growth(
                update.added_left, update.added_top, self.config.cell_size_px
            )

    def _accept_target(self, x: int, y: int) -> bool:
        update = resolve_edit_target(
            self.bounds, x, y, self.config.expand_chunk, self.config.expand_margin
        )
        self._apply_bounds_update(update)
        return update.accepted

    # ------------------------------------------------------------------
    # Pointer events
    # ------------------------------------------------------------------

    def pointer_down(self, x: int, y: int) -> None:
        if self.tool is Tool.MARQUEE:
            if self.selection.press(self.grid, x, y, self.bounds):
                self._record_selection_commit()
        elif self.tool is Tool.PICKER:
            self.pick(x, y)
        elif self.tool is Tool.MAGIC_WAND:
            self.magic_wand_pick(x, y)
        elif self.tool is Tool.FILL:
            self.fill(x, y)
        elif self.tool in (Tool.PEN, Tool.ERASER):
            self._stroke_active = True
            self._stroke_cell(x, y)

    def pointer_move(self, x: int, y: int) -> None:
        if self.tool is Tool.MARQUEE:
            self.selection.move(x, y)
        elif self._stroke_active:
            self._stroke_cell(x, y)

    def pointer_up(self) -> None:
        if self.tool is Tool.MARQUEE:
            self.selection.release(self.grid)
        self._end_stroke()

    def _stroke_cell(self, x: int, y: int) -> None:
        if self.tool is Tool.PEN and self.selected_color_id is None:
            return
        if not self._accept_target(x, y):
            return
        if self.tool is Tool.PEN:
            apply_pen(self.grid, x, y, self.selected_color_id)
        else:
            apply_eraser(self.grid, x, y)

    def _end_stroke(self) -> None:
        if self._stroke_active:
            self._stroke_active = False
            self.history.commit(self.grid)

    # ------------------------------------------------------------------
    # Single-shot tools
    # ------------------------------------------------------------------

    def pick(self, x: int, y: int) -> Optional[str]:
        """Adopt the color under (x, y) and switch to the pen; no-op on an empty cell."""
        color_id = pick_color(self.grid, x, y)
        if color_id is not None:
            self.select_color(color_id)
        return color_id

    def fill(self, x: int, y: int) -> int:
        """Flood fill from (x, y) with the selected color. Returns painted cell count."""
        if self.selected_color_id is None or not self._accept_target(x, y):
            return 0

        result = flood_fill(
            self.grid, x, y, self.selected_color_id, self.bounds, self.config.fill_max_cells
        )
        if not result.painted:
            return 0

        if self.bounds.is_free:
            new_cells = [coord for coord, value in result.grid.items() if self.grid.get(coord) != value]
            self._apply_bounds_update(
                expand_to_include(self.bounds, new_cells, self.config.expand_chunk, self.config.expand_margin)
            )
        self.grid = result.grid
        self.history.commit(self.grid)
        return result.painted

    def magic_wand_pick(self, x: int, y: int) -> int:
        """Select every cell with the clicked color. Returns how many were found."""
        color_id = pick_color(self.grid, x, y)
        if color_id is None:
            self.wand_selection = None
            return 0
        self.wand_selection = find_color_cells(self.grid, color_id)
        return self.wand_selection.count

    def confirm_magic_wand(self, delete: bool) -> int:
        """
        Apply the pending magic wand selection as one history entry.

        Args:
            delete: Remove the cells if True, else recolor them with the
                selected color

        Returns:
            Number of cells affected
        """
        selection = self.wand_selection
        self.wand_selection = None
        if selection is None or not selection.count:
            return 0
        if not delete and self.selected_color_id is None:
            return 0

        replacement = None if delete else self.selected_color_id
        self.grid = apply_magic_wand(self.grid, selection, replacement)
        self.history.commit(self.grid)
        return selection.count

    def cancel_magic_wand(self) -> None:
        self.wand_selection = None

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def _record_selection_commit(self) -> None:
        if self.bounds.is_free:
            self._apply_bounds_update(
                expand_to_include(self.bounds, list(self.grid), self.config.expand_chunk, self.config.expand_margin)
            )
        self.history.commit(self.grid)

    def commit_selection(self) -> bool:
        """Stamp any floating selection into the grid (one history entry)."""
        if not self.selection.is_busy:
            return False
        if self.selection.commit(self.grid, self.bounds):
            self._record_selection_commit()
            return True
        return False

    def finalize(self) -> None:
        """Settle pending gestures before saving or exporting."""
        self._end_stroke()
        self.commit_selection()

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------

    def undo(self) -> bool:
        self.finalize()
        grid = self.history.undo()
        if grid is None:
            return False
        self.grid = grid
        return True

    def redo(self) -> bool:
        self.finalize()
        grid = self.history.redo()
        if grid is None:
            return False
        self.grid = grid
        return True

    # ------------------------------------------------------------------
    # Whole-grid transforms
    # ------------------------------------------------------------------

    def denoise(self, threshold: Optional[float] = None) -> int:
        """Run one denoise pass over the canvas. Returns the number of replaced beads."""
        self.finalize()
        if threshold is None:
            threshold = self.config.denoise_threshold
        result = denoise_grid(self.grid, self.palette, threshold, self.bounds)
        if result.replaced:
            self.grid = result.grid
            self.history.commit(self.grid)
        return result.replaced

    def convert_palette(self, target: PaletteCache, denoise_threshold: Optional[float] = None) -> None:
        """
        Re-match the whole pattern against another palette, optionally
        denoising afterwards, as a single history entry.
        """
        self.finalize()
        source_colors = {color.id: color for color in self.palette}
        grid = remap_grid(self.grid, source_colors, target)
        if self.selected_color_id is not None and self.selected_color_id in source_colors:
            self.selected_color_id = target.nearest_lab(source_colors[self.selected_color_id].lab)
        self.palette = target

        if denoise_threshold is not None:
            grid = denoise_grid(grid, target, denoise_threshold, self.bounds).grid

        self.grid = grid
        self.history.commit(self.grid)
        logger.info(f"Converted pattern to a {len(target)} color palette")

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render_cells(self) -> Dict[Coord, str]:
        """Cells to draw: the base grid with floating selection pixels on top."""
        cells = dict(self.grid)
        for coord, color_id in self.selection.floating_cells():
            cells[coord] = color_id
        return cells
