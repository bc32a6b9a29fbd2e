"""
Palette matching for PixelBead.

A palette is an ordered, non-empty list of bead colors. PaletteCache keeps
each color's Lab value next to it so matching an arbitrary RGB value only
converts the probe once and then scans the cached Lab array.

Tie-break contract: when two palette entries are at exactly the same
distance from a probe, the entry earlier in palette order wins. Reordering
a palette therefore changes tie outcomes.

Classes:
    PaletteColor: One bead color with its cached Lab value
    PaletteCache: Ordered palette with nearest-color lookup
    EmptyPaletteError: Raised when matching against an empty palette

Functions:
    remap_grid: Re-match every cell of a grid against another palette
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Mapping, Optional, Sequence, Tuple

import numpy as np

from PB_Libs.ColorLib.color_space import LabColor, RgbColor, hex_to_rgb, rgb_to_lab

logger = logging.getLogger(__name__)


class EmptyPaletteError(ValueError):
    """Raised when a color match is requested against an empty palette."""


@dataclass(frozen=True)
class PaletteColor:
    """A single bead color.

    Attributes:
        id: Unique identifier, e.g. "MARD_A01"
        hex: Display color as '#RRGGBB'
        brand: Bead brand the color belongs to
        code: Manufacturer's color code
        sets: Numbered kits that contain this color
        lab: Lab value derived from hex, computed once at construction
    """
    id: str
    hex: str
    brand: str = ""
    code: str = ""
    sets: Tuple[int, ...] = ()
    lab: LabColor = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "lab", rgb_to_lab(*hex_to_rgb(self.hex)))

    @property
    def rgb(self) -> RgbColor:
        return hex_to_rgb(self.hex)

    @property
    def name(self) -> str:
        return f"{self.brand} {self.code}".strip()


class PaletteCache:
    """
    Ordered palette with precomputed Lab values.

    Example:
        >>> cache = PaletteCache([PaletteColor("k", "#000000"), PaletteColor("w", "#ffffff")])
        >>> cache.nearest_color((20, 20, 20))
        'k'
    """

    def __init__(self, colors: Sequence[PaletteColor]):
        self._colors: List[PaletteColor] = list(colors)
        self._ids: List[str] = [color.id for color in self._colors]
        self._by_id: Dict[str, PaletteColor] = {}
        for color in self._colors:
            self._by_id.setdefault(color.id, color)
        self._labs = np.array([tuple(color.lab) for color in self._colors], dtype=np.float64).reshape(-1, 3)

    def __len__(self) -> int:
        return len(self._colors)

    def __iter__(self) -> Iterator[PaletteColor]:
        return iter(self._colors)

    def __contains__(self, color_id: object) -> bool:
        return color_id in self._by_id

    @property
    def colors(self) -> List[PaletteColor]:
        return list(self._colors)

    @property
    def is_empty(self) -> bool:
        return not self._colors

    def get(self, color_id: str) -> Optional[PaletteColor]:
        return self._by_id.get(color_id)

    def lab_of(self, color_id: str) -> Optional[LabColor]:
        color = self._by_id.get(color_id)
        return color.lab if color is not None else None

    def nearest_lab(self, lab: Tuple[float, float, float]) -> str:
        """
        Find the palette id closest to a Lab color (CIE76).

        Raises:
            EmptyPaletteError: If the palette holds no colors
        """
        if not self._colors:
            raise EmptyPaletteError("Cannot match colors: the palette is empty")

        diff = self._labs - np.asarray(lab, dtype=np.float64)
        distances = np.sqrt((diff * diff).sum(axis=1))
        # argmin returns the first index among equal minima
        return self._ids[int(np.argmin(distances))]

    def nearest_color(self, rgb: Tuple[float, float, float]) -> str:
        """
        Find the palette id closest to an RGB color.

        Args:
            rgb: (R, G, B) with channels in [0, 255]

        Returns:
            The id of the nearest palette color

        Raises:
            EmptyPaletteError: If the palette holds no colors
        """
        if not self._colors:
            raise EmptyPaletteError("Cannot match colors: the palette is empty")
        return self.nearest_lab(rgb_to_lab(rgb[0], rgb[1], rgb[2]))


def remap_grid(
    grid: Mapping[Tuple[int, int], str],
    source_colors: Mapping[str, PaletteColor],
    target: PaletteCache,
) -> Dict[Tuple[int, int], str]:
    """
    Re-match every cell of a grid against another palette.

    Used when a finished pattern is converted to a different brand or kit.
    Cells whose color id is unknown to `source_colors` are kept unchanged.

    Args:
        grid: Grid to convert
        source_colors: Lookup from the grid's current color ids to colors
        target: Palette to convert into

    Returns:
        A new grid using only ids from `target` (plus any unknown ids kept)
    """
    mapping: Dict[str, str] = {}
    unknown: set = set()
    result: Dict[Tuple[int, int], str] = {}

    for coord, color_id in grid.items():
        if color_id not in mapping:
            color = source_colors.get(color_id)
            if color is None:
                unknown.add(color_id)
                mapping[color_id] = color_id
            else:
                mapping[color_id] = target.nearest_lab(color.lab)
        result[coord] = mapping[color_id]

    if unknown:
        logger.warning(f"Kept {len(unknown)} unknown color id(s) during palette conversion: {sorted(unknown)}")
    return result
