"""
PixelBead command line.

Converts an image into a bead pattern draft:

    python pixel_bead.py --palette beads.json photo portrait.png --width 40
    python pixel_bead.py --palette beads.json --denoise pattern scan.jpg --cols 52 --rows 52

The draft is written to <base>/Drafts/ and can be opened by any PixelBead
editor front end.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from PB_Libs.ColorLib.palette_loader import (
    PaletteConfig,
    filter_palette,
    load_bead_colors,
    load_palette_config,
)
from PB_Libs.ColorLib.palette_matcher import EmptyPaletteError, PaletteCache
from PB_Libs.ConvertLib.pattern_sampler import default_calibration, sample_pattern
from PB_Libs.ConvertLib.photo_rasterizer import rasterize_photo, suggest_target_width
from PB_Libs.ConvertLib.source_image import SourceImage
from PB_Libs.DraftStoreLib.draft_store import build_draft, save_draft
from PB_Libs.DraftStoreLib.export_handoff import count_beads
from PB_Libs.GridLib.editor_config import EditorConfig
from PB_Libs.GridLib.editor_session import EditorSession
from PB_Libs.constants import DEFAULT_DENOISE_THRESHOLD, PALETTE_SET_ALL
from PB_Libs.pillow_compat import Image

logger = logging.getLogger("pixel_bead")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="PixelBead - bead pattern generator")
    parser.add_argument("--palette", required=True,
                        help="Bead color JSON (list of {id, code, rgb, sets} records)")
    parser.add_argument("--palette-config", default=None,
                        help="Saved palette choice (brand, set, custom/hidden ids); default: whole brand list")
    parser.add_argument("--brand", default=None,
                        help="Restrict matching to one brand (overrides --palette-config)")
    parser.add_argument("--base-dir", default=".",
                        help="Directory that holds the Drafts folder (default: current directory)")
    parser.add_argument("--title", default=None, help="Draft title")
    parser.add_argument("--denoise", action="store_true", help="Run one denoise pass on the result")
    parser.add_argument("--denoise-threshold", type=float, default=DEFAULT_DENOISE_THRESHOLD,
                        help=f"Max deltaE for a stray bead to be replaced (default: {DEFAULT_DENOISE_THRESHOLD:g})")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    commands = parser.add_subparsers(dest="command", required=True)

    photo = commands.add_parser("photo", help="Convert a photo by downsampling")
    photo.add_argument("input", help="Input image path")
    photo.add_argument("-w", "--width", type=int, default=None,
                       help="Pattern width in cells (default: min(50, image width))")

    pattern = commands.add_parser("pattern", help="Read an existing pattern from a photo of it")
    pattern.add_argument("input", help="Input image path")
    pattern.add_argument("--offset-x", type=float, default=None, help="Grid origin x in image pixels")
    pattern.add_argument("--offset-y", type=float, default=None, help="Grid origin y in image pixels")
    pattern.add_argument("--cell-size", type=float, default=None, help="Cell width in image pixels")
    pattern.add_argument("--rotation", type=float, default=None, help="Grid rotation in degrees")
    pattern.add_argument("--cols", type=int, default=None, help="Number of grid columns")
    pattern.add_argument("--rows", type=int, default=None, help="Number of grid rows")
    return parser


def _load_palette(args: argparse.Namespace) -> PaletteCache:
    colors = load_bead_colors(Path(args.palette))
    if args.brand:
        config = PaletteConfig(brand=args.brand, set=PALETTE_SET_ALL)
        colors = filter_palette(colors, config)
    elif args.palette_config:
        colors = filter_palette(colors, load_palette_config(Path(args.palette_config)))
    return PaletteCache(colors)


def _convert(args: argparse.Namespace, source: SourceImage, palette: PaletteCache):
    if args.command == "photo":
        width = args.width if args.width is not None else suggest_target_width(source.width)
        return rasterize_photo(source, width, palette)

    calibration = default_calibration(source.width, source.height, args.brand or "")
    overrides = {
        "offset_x": args.offset_x,
        "offset_y": args.offset_y,
        "cell_size": args.cell_size,
        "rotation_degrees": args.rotation,
        "cols": args.cols,
        "rows": args.rows,
    }
    for key, value in overrides.items():
        if value is not None:
            setattr(calibration, key, value)
    return sample_pattern(source, calibration, palette)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        palette = _load_palette(args)
        with Image.open(args.input) as image:
            source = SourceImage.from_image(image)
        result = _convert(args, source, palette)
    except EmptyPaletteError as exc:
        logger.error(f"{exc}. Check --brand / --palette-config")
        return 2
    except (OSError, ValueError) as exc:
        logger.error(f"Conversion failed: {exc}")
        return 1

    if args.title:
        result.title = args.title

    session = EditorSession.from_conversion(result, palette, EditorConfig())
    if args.denoise:
        replaced = session.denoise(args.denoise_threshold)
        logger.info(f"Denoise replaced {replaced} beads")

    path = save_draft(Path(args.base_dir), build_draft(session))

    materials = count_beads(session.grid, palette)
    print(f"Saved: {path}")
    print(f"Pattern {result.width}x{result.height}, {len(session.grid)} beads in {len(materials)} colors:")
    for item in materials:
        print(f"  {item.code:>6s}: {item.count:5d}  {item.hex}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
