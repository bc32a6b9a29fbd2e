"""
Draft file storage for PixelBead.

This module handles the persistence layer for unfinished patterns: one
JSON file per draft in the Drafts directory, in the .pbdraft format.

The draft file schema includes:
- Draft metadata (id, title, last modified time, schema version)
- The sparse grid, keyed by "x,y" strings
- Canvas bounds (minX/minY plus width/height) and free-mode flag
- Viewport pan and zoom
- A small PNG thumbnail as a data URL

Loading never raises for bad content: unreadable files and wrong field
types fall back to defaults and are logged.

Functions:
    create_draft_id: New time-based draft id
    serialize_grid / deserialize_grid: Convert between tuple and "x,y" keys
    render_thumbnail: Draw a grid as a PNG data URL
    build_draft: Snapshot an EditorSession into a draft record
    save_draft / load_draft / delete_draft: Draft file I/O
    list_drafts: All drafts, newest first
    restore_session: Rebuild an EditorSession from a draft record
"""

import base64
import io
import json
import logging
import time
from pathlib import Path
from typing import Any, Dict, List, Optional

from PB_Libs.ColorLib.palette_matcher import PaletteCache
from PB_Libs.GridLib.editor_config import EditorConfig
from PB_Libs.GridLib.editor_session import EditorSession
from PB_Libs.GridLib.grid_models import Bounds, BoundsMode, Grid, Viewport
from PB_Libs.constants import (
    DRAFTS_DIR_NAME,
    DRAFT_EXTENSION,
    SCHEMA_VERSION,
    DEFAULT_TITLE,
    DEFAULT_CANVAS_SIZE,
    FREE_MODE_CANVAS_SIZE,
    THUMBNAIL_CELL_PX,
    THUMBNAIL_BACKGROUND,
    GRID_KEY_SEPARATOR,
    FIELD_SCHEMA_VERSION,
    FIELD_ID,
    FIELD_TITLE,
    FIELD_GRID,
    FIELD_WIDTH,
    FIELD_HEIGHT,
    FIELD_MIN_X,
    FIELD_MIN_Y,
    FIELD_IS_FREE_MODE,
    FIELD_OFFSET_X,
    FIELD_OFFSET_Y,
    FIELD_ZOOM,
    FIELD_LAST_MODIFIED,
    FIELD_THUMBNAIL,
)
from PB_Libs.pillow_compat import Image, ImageDraw

logger = logging.getLogger(__name__)

THUMBNAIL_PREFIX = "data:image/png;base64,"


def create_draft_id() -> str:
    """Millisecond timestamp string, matching the ids of existing drafts."""
    return str(int(time.time() * 1000))


def serialize_grid(grid: Grid) -> Dict[str, str]:
    return {f"{x}{GRID_KEY_SEPARATOR}{y}": color_id for (x, y), color_id in grid.items()}


def deserialize_grid(data: Any) -> Grid:
    """
    Parse a "x,y"-keyed mapping back into a grid.

    Malformed keys and non-string values are skipped with a warning.
    """
    if not isinstance(data, dict):
        if data is not None:
            logger.warning(f"Draft grid is not an object ({type(data).__name__}); using an empty grid")
        return {}

    grid: Grid = {}
    skipped = 0
    for key, color_id in data.items():
        parts = str(key).split(GRID_KEY_SEPARATOR)
        if len(parts) != 2 or not isinstance(color_id, str) or not color_id:
            skipped += 1
            continue
        try:
            grid[(int(parts[0]), int(parts[1]))] = color_id
        except ValueError:
            skipped += 1

    if skipped:
        logger.warning(f"Skipped {skipped} malformed grid entries while loading a draft")
    return grid


def render_thumbnail(grid: Grid, bounds: Bounds, palette: PaletteCache,
                     cell_px: int = THUMBNAIL_CELL_PX) -> str:
    """
    Draw the grid onto a white PNG, `cell_px` pixels per cell.

    Cells whose color is not in the palette are left white.

    Returns:
        A "data:image/png;base64,..." URL
    """
    width = max(1, bounds.width * cell_px)
    height = max(1, bounds.height * cell_px)
    image = Image.new("RGB", (width, height), THUMBNAIL_BACKGROUND)
    draw = ImageDraw.Draw(image)

    for (x, y), color_id in grid.items():
        color = palette.get(color_id)
        if color is None:
            continue
        left = (x - bounds.min_x) * cell_px
        top = (y - bounds.min_y) * cell_px
        draw.rectangle([left, top, left + cell_px - 1, top + cell_px - 1], fill=color.rgb)

    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return THUMBNAIL_PREFIX + base64.b64encode(buffer.getvalue()).decode("ascii")


def build_draft(session: EditorSession, draft_id: Optional[str] = None,
                thumbnail: Optional[str] = None) -> Dict[str, Any]:
    """
    Snapshot a session into a draft record.

    Pending strokes and floating selections are committed first. The
    thumbnail is rendered from the session's palette unless one is given.
    """
    session.finalize()
    if draft_id is None:
        draft_id = session.draft_id or create_draft_id()
    session.draft_id = draft_id

    bounds = session.bounds
    if thumbnail is None:
        thumbnail = render_thumbnail(session.grid, bounds, session.palette)

    return {
        FIELD_SCHEMA_VERSION: SCHEMA_VERSION,
        FIELD_ID: draft_id,
        FIELD_TITLE: session.title,
        FIELD_GRID: serialize_grid(session.grid),
        FIELD_WIDTH: bounds.max_x - bounds.min_x,
        FIELD_HEIGHT: bounds.max_y - bounds.min_y,
        FIELD_MIN_X: bounds.min_x,
        FIELD_MIN_Y: bounds.min_y,
        FIELD_IS_FREE_MODE: bounds.is_free,
        FIELD_OFFSET_X: session.viewport.offset_x,
        FIELD_OFFSET_Y: session.viewport.offset_y,
        FIELD_ZOOM: session.viewport.zoom,
        FIELD_LAST_MODIFIED: int(time.time() * 1000),
        FIELD_THUMBNAIL: thumbnail,
    }


def get_drafts_dir(base_dir: Path) -> Path:
    drafts_dir = base_dir / DRAFTS_DIR_NAME
    drafts_dir.mkdir(parents=True, exist_ok=True)
    return drafts_dir


def draft_path(base_dir: Path, draft_id: str) -> Path:
    """
    Raises:
        ValueError: If draft_id would escape the Drafts directory
    """
    if not draft_id or "/" in draft_id or "\\" in draft_id or draft_id in (".", ".."):
        raise ValueError(f"Invalid draft id: {draft_id!r}")
    return get_drafts_dir(base_dir) / f"{draft_id}{DRAFT_EXTENSION}"


def save_draft(base_dir: Path, draft: Dict[str, Any]) -> Path:
    """
    Write a draft record, replacing any draft with the same id.

    Returns:
        Path to the written file
    """
    draft_id = str(draft.get(FIELD_ID) or create_draft_id())
    draft[FIELD_ID] = draft_id
    draft[FIELD_SCHEMA_VERSION] = SCHEMA_VERSION

    path = draft_path(base_dir, draft_id)
    path.write_text(json.dumps(draft, indent=2), encoding="utf-8")
    logger.info(f"Saved draft {draft_id} ({len(draft.get(FIELD_GRID) or {})} cells) to {path}")
    return path


def _int_field(payload: Dict[str, Any], key: str, default: int) -> int:
    value = payload.get(key)
    if value is None:
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        logger.warning(f"Draft field {key!r} is not an integer ({value!r}); using {default}")
        return default


def _float_field(payload: Dict[str, Any], key: str) -> Optional[float]:
    value = payload.get(key)
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        logger.warning(f"Draft field {key!r} is not a number ({value!r}); ignoring it")
        return None


def normalize_draft(payload: Any, fallback_id: str = "") -> Dict[str, Any]:
    """
    Fill in defaults and coerce types of a raw draft record.

    Missing minX/minY default to 0, a missing isFreeMode defaults to
    "width is the free-mode canvas size", and offsets/zoom are left as
    None when absent so the caller can keep its own viewport.
    """
    if not isinstance(payload, dict):
        if payload is not None:
            logger.warning(f"Draft {fallback_id!r} is not an object; using an empty draft")
        payload = {}

    width = max(1, _int_field(payload, FIELD_WIDTH, DEFAULT_CANVAS_SIZE))
    height = max(1, _int_field(payload, FIELD_HEIGHT, width))

    is_free = payload.get(FIELD_IS_FREE_MODE)
    if not isinstance(is_free, bool):
        is_free = width == FREE_MODE_CANVAS_SIZE

    zoom = _float_field(payload, FIELD_ZOOM)
    if zoom is not None and zoom <= 0:
        logger.warning(f"Draft zoom {zoom} is not positive; ignoring it")
        zoom = None

    return {
        FIELD_SCHEMA_VERSION: _int_field(payload, FIELD_SCHEMA_VERSION, SCHEMA_VERSION),
        FIELD_ID: str(payload.get(FIELD_ID) or fallback_id),
        FIELD_TITLE: str(payload.get(FIELD_TITLE) or DEFAULT_TITLE),
        FIELD_GRID: serialize_grid(deserialize_grid(payload.get(FIELD_GRID))),
        FIELD_WIDTH: width,
        FIELD_HEIGHT: height,
        FIELD_MIN_X: _int_field(payload, FIELD_MIN_X, 0),
        FIELD_MIN_Y: _int_field(payload, FIELD_MIN_Y, 0),
        FIELD_IS_FREE_MODE: is_free,
        FIELD_OFFSET_X: _float_field(payload, FIELD_OFFSET_X),
        FIELD_OFFSET_Y: _float_field(payload, FIELD_OFFSET_Y),
        FIELD_ZOOM: zoom,
        FIELD_LAST_MODIFIED: _int_field(payload, FIELD_LAST_MODIFIED, 0),
        FIELD_THUMBNAIL: payload.get(FIELD_THUMBNAIL) if isinstance(payload.get(FIELD_THUMBNAIL), str) else None,
    }


def load_draft_file(path: Path) -> Dict[str, Any]:
    """Load and normalize a draft file; unreadable files yield an empty draft."""
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning(f"Could not read draft {path}: {exc}")
        payload = {}
    return normalize_draft(payload, fallback_id=path.stem)


def load_draft(base_dir: Path, draft_id: str) -> Dict[str, Any]:
    return load_draft_file(draft_path(base_dir, draft_id))


def list_drafts(base_dir: Path) -> List[Dict[str, Any]]:
    """All drafts in the Drafts directory, most recently modified first."""
    drafts_dir = get_drafts_dir(base_dir)
    drafts = [load_draft_file(path) for path in sorted(drafts_dir.glob(f"*{DRAFT_EXTENSION}"))]
    drafts.sort(key=lambda draft: draft[FIELD_LAST_MODIFIED], reverse=True)
    return drafts


def delete_draft(base_dir: Path, draft_id: str) -> bool:
    path = draft_path(base_dir, draft_id)
    if not path.exists():
        return False
    path.unlink()
    logger.info(f"Deleted draft {draft_id}")
    return True


def restore_session(draft: Dict[str, Any], palette: PaletteCache,
                    config: Optional[EditorConfig] = None) -> EditorSession:
    """
    Rebuild an editing session from a draft record.

    The history starts from the draft's grid, so the first undo cannot go
    past the loaded state.
    """
    draft = normalize_draft(draft)
    mode = BoundsMode.FREE if draft[FIELD_IS_FREE_MODE] else BoundsMode.FIXED
    bounds = Bounds.of_size(
        draft[FIELD_WIDTH],
        draft[FIELD_HEIGHT],
        mode,
        min_x=draft[FIELD_MIN_X],
        min_y=draft[FIELD_MIN_Y],
    )

    viewport = Viewport()
    if draft[FIELD_OFFSET_X] is not None and draft[FIELD_OFFSET_Y] is not None:
        viewport = Viewport(draft[FIELD_OFFSET_X], draft[FIELD_OFFSET_Y], viewport.zoom)
    if draft[FIELD_ZOOM] is not None:
        viewport = Viewport(viewport.offset_x, viewport.offset_y, draft[FIELD_ZOOM])

    return EditorSession(
        palette,
        bounds,
        grid=deserialize_grid(draft[FIELD_GRID]),
        config=config,
        viewport=viewport,
        title=draft[FIELD_TITLE],
        draft_id=draft[FIELD_ID],
    )
