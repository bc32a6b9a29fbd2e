"""
ColorLib - Color conversion and palette matching

This module provides Lab conversion, CIE76 distance, bead palette
loading and nearest-color matching for the PixelBead project.
"""

from PB_Libs.ColorLib.color_space import (
    LabColor,
    RgbColor,
    rgb_to_lab,
    delta_e,
    hex_to_rgb,
    rgb_to_hex,
    text_color_for,
)
from PB_Libs.ColorLib.palette_matcher import (
    EmptyPaletteError,
    PaletteColor,
    PaletteCache,
    remap_grid,
)
from PB_Libs.ColorLib.palette_loader import (
    PaletteConfig,
    parse_bead_records,
    load_bead_colors,
    available_brands,
    available_sets,
    filter_palette,
    switch_brand,
    load_palette_config,
    save_palette_config,
)

__all__ = [
    "LabColor",
    "RgbColor",
    "rgb_to_lab",
    "delta_e",
    "hex_to_rgb",
    "rgb_to_hex",
    "text_color_for",
    "EmptyPaletteError",
    "PaletteColor",
    "PaletteCache",
    "remap_grid",
    "PaletteConfig",
    "parse_bead_records",
    "load_bead_colors",
    "available_brands",
    "available_sets",
    "filter_palette",
    "switch_brand",
    "load_palette_config",
    "save_palette_config",
]
