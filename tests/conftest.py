"""
Pytest configuration and shared fixtures for PixelBead tests.

This module provides shared test fixtures and configuration
used across multiple test modules.
"""

import json

import pytest

from PB_Libs.ColorLib.palette_matcher import PaletteCache, PaletteColor
from PB_Libs.ConvertLib.source_image import SourceImage
from PB_Libs.GridLib.grid_models import Bounds, BoundsMode


@pytest.fixture
def solid_source():
    """Factory for SourceImages filled with a single RGBA color."""
    def _make(width, height, rgba):
        return SourceImage(width, height, bytes(rgba) * (width * height))
    return _make


@pytest.fixture
def sample_colors():
    """
    Provide a small mixed-brand color list.

    Returns:
        List of PaletteColor with black, white, red, green and blue
    """
    return [
        PaletteColor("MARD_H7", "#000000", brand="MARD", code="H7", sets=(24, 48)),
        PaletteColor("MARD_H2", "#ffffff", brand="MARD", code="H2", sets=(24, 48)),
        PaletteColor("MARD_F5", "#ff0000", brand="MARD", code="F5", sets=(48,)),
        PaletteColor("COCO_B3", "#00ff00", brand="COCO", code="B3", sets=(24,)),
        PaletteColor("COCO_C8", "#0000ff", brand="COCO", code="C8", sets=(24,)),
    ]


@pytest.fixture
def palette(sample_colors):
    """PaletteCache over sample_colors, in the same order."""
    return PaletteCache(sample_colors)


@pytest.fixture
def fixed_bounds():
    """A 10x10 fixed canvas at the origin."""
    return Bounds.of_size(10, 10)


@pytest.fixture
def free_bounds():
    """A 100x100 free-mode canvas at the origin."""
    return Bounds.of_size(100, 100, BoundsMode.FREE)


@pytest.fixture
def temp_base_dir(tmp_path):
    """
    Provide a temporary base directory for draft files.

    Args:
        tmp_path: Pytest's built-in temporary directory fixture

    Returns:
        Path object pointing to a temporary directory
    """
    return tmp_path


@pytest.fixture
def bead_json(tmp_path):
    """Write a raw bead color file and return its path."""
    records = [
        {"id": "MARD_H7", "code": "H7", "rgb": [0, 0, 0], "sets": [24, 48]},
        {"id": "MARD_H2", "code": "H2", "rgb": [255, 255, 255], "sets": [24, 48]},
        {"id": "MARD_F5", "code": "F5", "rgb": [255, 0, 0], "sets": [48]},
        {"id": "COCO_B3", "code": "B3", "rgb": [0, 255, 0], "sets": [24]},
        {"id": "COCO_C8", "code": "C8", "rgb": [0, 0, 255], "sets": [24]},
    ]
    path = tmp_path / "beads.json"
    path.write_text(json.dumps(records), encoding="utf-8")
    return path
