"""
Tests for the pixel_bead command line entry point.

Runs main() end to end on small generated images.
"""

from PB_Libs.DraftStoreLib.draft_store import list_drafts
from PB_Libs.pillow_compat import Image

import pixel_bead


def _write_image(path, size, color):
    Image.new("RGB", size, color).save(path)
    return path


class TestPhotoCommand:
    """Tests for the photo sub-command."""

    def test_converts_and_saves_draft(self, tmp_path, bead_json, capsys):
        """A solid red photo should become an all-red draft."""
        image_path = _write_image(tmp_path / "red.png", (8, 8), (255, 0, 0))

        code = pixel_bead.main([
            "--palette", str(bead_json),
            "--base-dir", str(tmp_path),
            "--title", "Red square",
            "photo", str(image_path), "--width", "4",
        ])

        assert code == 0
        drafts = list_drafts(tmp_path)
        assert len(drafts) == 1
        assert drafts[0]["title"] == "Red square"
        assert len(drafts[0]["grid"]) == 16
        assert set(drafts[0]["grid"].values()) == {"MARD_F5"}
        assert "F5" in capsys.readouterr().out

    def test_denoise_flag(self, tmp_path, bead_json):
        """--denoise should run without changing a clean pattern."""
        image_path = _write_image(tmp_path / "white.png", (6, 6), (255, 255, 255))

        code = pixel_bead.main([
            "--palette", str(bead_json), "--base-dir", str(tmp_path), "--denoise",
            "photo", str(image_path),
        ])

        assert code == 0
        assert len(list_drafts(tmp_path)[0]["grid"]) == 36

    def test_empty_brand_fails(self, tmp_path, bead_json):
        """A brand with no colors should exit with code 2 and save nothing."""
        image_path = _write_image(tmp_path / "red.png", (4, 4), (255, 0, 0))

        code = pixel_bead.main([
            "--palette", str(bead_json), "--base-dir", str(tmp_path), "--brand", "NOPE",
            "photo", str(image_path),
        ])

        assert code == 2
        assert not (tmp_path / "Drafts").exists()

    def test_missing_image_fails(self, tmp_path, bead_json):
        """An unreadable input should exit with code 1."""
        code = pixel_bead.main([
            "--palette", str(bead_json), "--base-dir", str(tmp_path),
            "photo", str(tmp_path / "missing.png"),
        ])

        assert code == 1


class TestPatternCommand:
    """Tests for the pattern sub-command."""

    def test_samples_calibrated_grid(self, tmp_path, bead_json):
        """Explicit calibration should decide the draft size."""
        image_path = _write_image(tmp_path / "blue.png", (60, 40), (0, 0, 255))

        code = pixel_bead.main([
            "--palette", str(bead_json), "--base-dir", str(tmp_path), "--brand", "COCO",
            "pattern", str(image_path), "--cell-size", "10", "--cols", "6", "--rows", "4",
        ])

        assert code == 0
        draft = list_drafts(tmp_path)[0]
        assert (draft["width"], draft["height"]) == (6, 4)
        assert set(draft["grid"].values()) == {"COCO_C8"}
