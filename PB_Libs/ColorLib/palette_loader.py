"""
Bead palette loading and filtering for PixelBead.

Bead databases are JSON lists of raw records:

    [{"id": "MARD_A01", "code": "A01", "rgb": [250, 245, 205], "sets": [24, 48]}, ...]

The brand is the part of the id before the first underscore. A
PaletteConfig narrows the full database down to the palette the user
works with: one brand and one numbered kit, the whole brand ("all"), or a
hand-picked cross-brand list ("custom"), minus any colors the user hid.

Classes:
    PaletteConfig: The user's current palette choice

Functions:
    parse_bead_records: Build PaletteColors from raw records
    load_bead_colors: Read a bead database file
    available_brands: Brands present in a color list
    available_sets: Kit numbers offered by a brand
    filter_palette: Apply a PaletteConfig to the full color list
    switch_brand: Change brand while keeping a compatible kit
    load_palette_config: Read a PaletteConfig, falling back to defaults
    save_palette_config: Write a PaletteConfig
"""

import json
import logging
from dataclasses import dataclass, field, asdict, replace
from pathlib import Path
from typing import Any, Dict, Iterable, List, Sequence, Union

from PB_Libs.ColorLib.color_space import rgb_to_hex
from PB_Libs.ColorLib.palette_matcher import PaletteColor
from PB_Libs.constants import (
    DEFAULT_PALETTE_BRAND,
    DEFAULT_PALETTE_SET,
    PALETTE_SET_ALL,
    PALETTE_SET_CUSTOM,
    FIELD_BEAD_ID,
    FIELD_BEAD_CODE,
    FIELD_BEAD_RGB,
    FIELD_BEAD_SETS,
)

logger = logging.getLogger(__name__)

PaletteSet = Union[int, str]


@dataclass
class PaletteConfig:
    """The user's palette choice.

    Attributes:
        brand: Brand whose colors are offered
        set: Kit number, "all" for the whole brand, or "custom"
        custom_ids: Color ids of the custom palette (any brand)
        hidden_ids: Color ids removed from standard kits
    """
    brand: str = DEFAULT_PALETTE_BRAND
    set: PaletteSet = DEFAULT_PALETTE_SET
    custom_ids: List[str] = field(default_factory=list)
    hidden_ids: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PaletteConfig":
        """Create from dictionary, ignoring unknown keys and bad values."""
        config = cls()
        brand = data.get("brand")
        if isinstance(brand, str) and brand.strip():
            config.brand = brand
        palette_set = data.get("set")
        if palette_set in (PALETTE_SET_ALL, PALETTE_SET_CUSTOM):
            config.set = palette_set
        elif isinstance(palette_set, int) and not isinstance(palette_set, bool):
            config.set = palette_set
        for key in ("custom_ids", "hidden_ids"):
            values = data.get(key)
            if isinstance(values, list):
                setattr(config, key, [str(value) for value in values])
        return config

    def toggle_hidden(self, color_id: str) -> "PaletteConfig":
        hidden = [cid for cid in self.hidden_ids if cid != color_id]
        if len(hidden) == len(self.hidden_ids):
            hidden.append(color_id)
        return replace(self, hidden_ids=hidden)

    def toggle_custom(self, color_id: str) -> "PaletteConfig":
        custom = [cid for cid in self.custom_ids if cid != color_id]
        if len(custom) == len(self.custom_ids):
            custom.append(color_id)
        return replace(self, custom_ids=custom)

    def reset_custom(self) -> "PaletteConfig":
        return replace(self, custom_ids=[])


def _brand_of(bead_id: str) -> str:
    return bead_id.split("_")[0]


def parse_bead_records(records: Iterable[Any]) -> List[PaletteColor]:
    """
    Build PaletteColors from raw bead records.

    Malformed records are skipped with a warning; record order is kept
    since palette order decides matching ties.
    """
    colors: List[PaletteColor] = []
    for index, record in enumerate(records):
        if not isinstance(record, dict):
            logger.warning(f"Skipping bead record {index}: not an object")
            continue
        try:
            bead_id = str(record[FIELD_BEAD_ID])
            rgb = record[FIELD_BEAD_RGB]
            if not isinstance(rgb, (list, tuple)) or len(rgb) < 3:
                raise ValueError(f"rgb must hold three channels, got {rgb!r}")
            sets = tuple(int(value) for value in record.get(FIELD_BEAD_SETS) or [])
            colors.append(
                PaletteColor(
                    id=bead_id,
                    hex=rgb_to_hex(float(rgb[0]), float(rgb[1]), float(rgb[2])),
                    brand=_brand_of(bead_id),
                    code=str(record.get(FIELD_BEAD_CODE) or ""),
                    sets=sets,
                )
            )
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning(f"Skipping bead record {index}: {exc}")
    return colors


def load_bead_colors(json_path: Path) -> List[PaletteColor]:
    """
    Load the bead database from a JSON file.

    The file may hold a bare list of records or an object with a "beads" list.

    Raises:
        OSError: If the file cannot be read
        ValueError: If the file is not valid JSON or holds no record list
    """
    payload = json.loads(Path(json_path).read_text(encoding="utf-8"))
    if isinstance(payload, dict):
        payload = payload.get("beads")
    if not isinstance(payload, list):
        raise ValueError(f"Bead database {json_path} does not contain a list of beads")

    colors = parse_bead_records(payload)
    logger.info(f"Loaded {len(colors)} bead colors from {json_path}")
    return colors


def available_brands(colors: Sequence[PaletteColor]) -> List[str]:
    """Brands in first-seen order."""
    brands: Dict[str, None] = {}
    for color in colors:
        brands.setdefault(color.brand, None)
    return list(brands)


def available_sets(colors: Sequence[PaletteColor], brand: str) -> List[int]:
    sets = set()
    for color in colors:
        if color.brand == brand:
            sets.update(color.sets)
    return sorted(sets)


def filter_palette(colors: Sequence[PaletteColor], config: PaletteConfig) -> List[PaletteColor]:
    """
    Apply a PaletteConfig to the full color list.

    A custom palette may mix brands and ignores hidden ids; standard kits
    are restricted to the configured brand with hidden ids removed.
    """
    if config.set == PALETTE_SET_CUSTOM:
        custom = set(config.custom_ids)
        return [color for color in colors if color.id in custom]

    selected = [color for color in colors if color.brand == config.brand]
    if config.set != PALETTE_SET_ALL:
        selected = [color for color in selected if config.set in color.sets]

    hidden = set(config.hidden_ids)
    return [color for color in selected if color.id not in hidden]


def switch_brand(config: PaletteConfig, colors: Sequence[PaletteColor], brand: str) -> PaletteConfig:
    """
    Change brand, keeping the current kit number when the new brand has it.

    Otherwise the brand's first kit is chosen, or "all" if it has none.
    """
    new_set = config.set
    if new_set not in (PALETTE_SET_ALL, PALETTE_SET_CUSTOM):
        brand_sets = available_sets(colors, brand)
        if new_set not in brand_sets:
            new_set = brand_sets[0] if brand_sets else PALETTE_SET_ALL
    return replace(config, brand=brand, set=new_set)


def load_palette_config(config_path: Path) -> PaletteConfig:
    """
    Load a PaletteConfig from disk.

    Returns:
        The stored config, or the default config if the file is missing or
        unreadable
    """
    try:
        payload = json.loads(Path(config_path).read_text(encoding="utf-8"))
    except FileNotFoundError:
        return PaletteConfig()
    except (json.JSONDecodeError, OSError) as exc:
        logger.warning(f"Could not read palette config {config_path}, using defaults: {exc}")
        return PaletteConfig()

    if not isinstance(payload, dict):
        logger.warning(f"Palette config {config_path} is not an object, using defaults")
        return PaletteConfig()
    return PaletteConfig.from_dict(payload)


def save_palette_config(config_path: Path, config: PaletteConfig) -> None:
    Path(config_path).write_text(json.dumps(config.to_dict(), indent=2), encoding="utf-8")
