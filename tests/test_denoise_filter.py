"""
Unit tests for denoise_filter module.

Tests isolated-bead replacement, connectivity and threshold handling.
"""

import pytest

from PB_Libs.ColorLib.palette_matcher import PaletteCache, PaletteColor
from PB_Libs.GridLib.denoise_filter import denoise_grid
from PB_Libs.GridLib.grid_models import Bounds


@pytest.fixture
def reds():
    """Two close reds and black."""
    return PaletteCache([
        PaletteColor("r1", "#ff0000"),
        PaletteColor("r2", "#f00a0a"),
        PaletteColor("k", "#000000"),
    ])


def _field(color_id, size=3):
    return {(x, y): color_id for x in range(size) for y in range(size)}


class TestDenoiseGrid:
    """Tests for denoise_grid function."""

    def test_replaces_similar_isolated_bead(self, reds):
        """A lone close color should take the surrounding color."""
        grid = _field("r1")
        grid[(1, 1)] = "r2"

        result = denoise_grid(grid, reds, 55)

        assert result.replaced == 1
        assert result.grid == _field("r1")
        assert grid[(1, 1)] == "r2"

    def test_keeps_distant_isolated_bead(self, reds):
        """A lone color further than the threshold should be kept as detail."""
        grid = _field("r1")
        grid[(1, 1)] = "k"

        result = denoise_grid(grid, reds, 55)

        assert result.replaced == 0
        assert result.grid[(1, 1)] == "k"

    def test_keeps_connected_beads(self, reds):
        """Beads with a same-colored neighbour should never change."""
        grid = _field("r1", 4)
        grid[(1, 1)] = "r2"
        grid[(2, 2)] = "r2"

        result = denoise_grid(grid, reds, 55)

        assert result.grid == grid

    def test_bead_without_neighbours_untouched(self, reds):
        """A bead with no neighbours at all should be left alone."""
        grid = {(0, 0): "r2", (5, 5): "r1"}

        result = denoise_grid(grid, reds, 1000)

        assert result.grid == grid
        assert result.replaced == 0

    def test_reads_input_only(self, reds):
        """Decisions should use the input grid, not cells replaced this pass."""
        grid = {(0, 0): "r2", (1, 0): "r1"}

        result = denoise_grid(grid, reds, 55)

        assert result.grid == {(0, 0): "r1", (1, 0): "r2"}
        assert result.replaced == 2

    def test_majority_tie_uses_neighbour_order(self, reds):
        """Equal counts should go to the first neighbour in scan order (top-left first)."""
        grid = {(0, 0): "r2", (1, 1): "k", (2, 2): "r1"}

        result = denoise_grid(grid, reds, 1000)

        assert result.grid[(1, 1)] == "r2"

    def test_majority_color_wins(self, reds):
        """The most common neighbour color should be used."""
        grid = {(0, 0): "r2", (2, 0): "r1", (0, 2): "r1", (1, 1): "k"}

        result = denoise_grid(grid, reds, 1000)

        assert result.grid[(1, 1)] == "r1"

    def test_bounds_limit_scan(self, reds):
        """Cells outside the given bounds should not be considered."""
        grid = _field("r1")
        grid[(1, 1)] = "r2"

        result = denoise_grid(grid, reds, 55, Bounds(2, 10, 0, 10))

        assert result.grid[(1, 1)] == "r2"

    def test_unknown_ids_skipped(self, reds):
        """Colors missing from the palette should be left unchanged."""
        grid = _field("r1")
        grid[(1, 1)] = "mystery"

        result = denoise_grid(grid, reds, 1000)

        assert result.grid[(1, 1)] == "mystery"
