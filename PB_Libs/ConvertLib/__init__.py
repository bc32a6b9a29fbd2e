"""
ConvertLib - Image to bead grid conversion

This module turns decoded RGBA images into sparse bead grids, either by
downsampling a photo or by sampling a photographed pattern through a
calibrated virtual grid.
"""

from PB_Libs.ConvertLib.source_image import SourceImage
from PB_Libs.ConvertLib.conversion_models import ConversionResult, round_half_up
from PB_Libs.ConvertLib.photo_rasterizer import (
    suggest_target_width,
    target_height_for,
    rasterize_photo,
)
from PB_Libs.ConvertLib.pattern_sampler import (
    SAMPLE_OFFSETS,
    CalibrationState,
    default_calibration,
    cell_to_source,
    grid_outline,
    sample_pattern,
)

__all__ = [
    "SourceImage",
    "ConversionResult",
    "round_half_up",
    "suggest_target_width",
    "target_height_for",
    "rasterize_photo",
    "SAMPLE_OFFSETS",
    "CalibrationState",
    "default_calibration",
    "cell_to_source",
    "grid_outline",
    "sample_pattern",
]
