"""
GridLib - Sparse bead grid editing

This module provides the grid and bounds models, per-cell editing tools,
undo/redo history, rectangular selection, denoise and the session
controller that ties them together.
"""

from PB_Libs.GridLib.grid_models import Coord, Grid, BoundsMode, Bounds, Viewport
from PB_Libs.GridLib.editor_config import EditorConfig
from PB_Libs.GridLib.bounds_manager import BoundsUpdate, resolve_edit_target, expand_to_include
from PB_Libs.GridLib.edit_ops import (
    FillResult,
    MagicWandSelection,
    apply_pen,
    apply_eraser,
    pick_color,
    flood_fill,
    find_color_cells,
    apply_magic_wand,
)
from PB_Libs.GridLib.history import HistoryLog
from PB_Libs.GridLib.selection import SelectionPhase, SelectionState, SelectionEngine
from PB_Libs.GridLib.denoise_filter import DenoiseResult, denoise_grid
from PB_Libs.GridLib.editor_session import Tool, EditorSession

__all__ = [
    "Coord",
    "Grid",
    "BoundsMode",
    "Bounds",
    "Viewport",
    "EditorConfig",
    "BoundsUpdate",
    "resolve_edit_target",
    "expand_to_include",
    "FillResult",
    "MagicWandSelection",
    "apply_pen",
    "apply_eraser",
    "pick_color",
    "flood_fill",
    "find_color_cells",
    "apply_magic_wand",
    "HistoryLog",
    "SelectionPhase",
    "SelectionState",
    "SelectionEngine",
    "DenoiseResult",
    "denoise_grid",
    "Tool",
    "EditorSession",
]
