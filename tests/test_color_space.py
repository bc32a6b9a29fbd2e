"""
Unit tests for color_space module.

Tests sRGB to Lab conversion, CIE76 distance and hex helpers.
"""

import pytest

from PB_Libs.ColorLib.color_space import (
    delta_e,
    hex_to_rgb,
    rgb_to_hex,
    rgb_to_lab,
    text_color_for,
)


class TestRgbToLab:
    """Tests for rgb_to_lab function."""

    def test_pure_red(self):
        """Should match the reference Lab value of pure red."""
        lab = rgb_to_lab(255, 0, 0)

        assert lab.l == pytest.approx(53.24, abs=0.2)
        assert lab.a == pytest.approx(80.09, abs=0.2)
        assert lab.b == pytest.approx(67.20, abs=0.2)

    def test_black_is_origin(self):
        """Black should map to (0, 0, 0)."""
        lab = rgb_to_lab(0, 0, 0)

        assert lab.l == pytest.approx(0.0, abs=1e-9)
        assert lab.a == pytest.approx(0.0, abs=1e-9)
        assert lab.b == pytest.approx(0.0, abs=1e-9)

    def test_white_is_full_lightness(self):
        """White should have L close to 100 and a, b close to 0."""
        lab = rgb_to_lab(255, 255, 255)

        assert lab.l == pytest.approx(100.0, abs=0.01)
        assert lab.a == pytest.approx(0.0, abs=0.05)
        assert lab.b == pytest.approx(0.0, abs=0.05)

    def test_accepts_float_channels(self):
        """Averaged samples should not need rounding first."""
        assert rgb_to_lab(127.5, 127.5, 127.5).l == pytest.approx(
            (rgb_to_lab(127, 127, 127).l + rgb_to_lab(128, 128, 128).l) / 2, abs=0.2
        )


class TestDeltaE:
    """Tests for delta_e function."""

    def test_reflexive(self):
        """A color should have zero distance to itself."""
        for rgb in [(0, 0, 0), (255, 0, 0), (12, 200, 99), (255, 255, 255)]:
            lab = rgb_to_lab(*rgb)
            assert delta_e(lab, lab) == 0

    def test_symmetric(self):
        """Distance should not depend on argument order."""
        lab1 = rgb_to_lab(10, 20, 30)
        lab2 = rgb_to_lab(200, 100, 50)

        assert delta_e(lab1, lab2) == delta_e(lab2, lab1)

    def test_white_black_distance(self):
        """White and black should be about 100 apart."""
        distance = delta_e(rgb_to_lab(255, 255, 255), rgb_to_lab(0, 0, 0))

        assert distance == pytest.approx(100.0, abs=0.1)

    def test_euclidean(self):
        """Should be plain Euclidean distance."""
        assert delta_e((0, 0, 0), (3, 4, 0)) == pytest.approx(5.0)


class TestHexHelpers:
    """Tests for hex_to_rgb, rgb_to_hex and text_color_for."""

    def test_hex_to_rgb(self):
        """Should parse upper and lower case, with or without '#'."""
        assert hex_to_rgb("#FF8000") == (255, 128, 0)
        assert hex_to_rgb("ff8000") == (255, 128, 0)

    @pytest.mark.parametrize("value", ["", "#fff", "#12345", "#gg0000", "not a color"])
    def test_hex_to_rgb_rejects_invalid(self, value):
        """Should raise ValueError for malformed strings."""
        with pytest.raises(ValueError):
            hex_to_rgb(value)

    def test_rgb_to_hex(self):
        """Should format lowercase two-digit channels."""
        assert rgb_to_hex(255, 128, 0) == "#ff8000"
        assert rgb_to_hex(0, 0, 0) == "#000000"

    def test_rgb_to_hex_rounds_and_clamps(self):
        """Should round half up and clamp to [0, 255]."""
        assert rgb_to_hex(300, -5, 127.5) == "#ff0080"

    def test_text_color_for(self):
        """Light swatches get dark text and dark swatches light text."""
        assert text_color_for("#ffffff") == "#000000"
        assert text_color_for("#000000") == "#ffffff"
        assert text_color_for("#ffff00") == "#000000"
