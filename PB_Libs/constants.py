"""
Constants and configuration values for PixelBead.

This module centralizes all constant values, magic numbers, and
configuration settings used throughout the application.
"""

# Draft file constants
DRAFTS_DIR_NAME = "Drafts"
DRAFT_EXTENSION = ".pbdraft"
SCHEMA_VERSION = 1
DEFAULT_TITLE = "Untitled"

# Palette config file
DEFAULT_PALETTE_BRAND = "COCO"
DEFAULT_PALETTE_SET = 24
PALETTE_SET_ALL = "all"
PALETTE_SET_CUSTOM = "custom"

# Editing tunables
DEFAULT_FILL_MAX_CELLS = 2000
DEFAULT_EXPAND_CHUNK = 20
DEFAULT_EXPAND_MARGIN = 5
DEFAULT_DENOISE_THRESHOLD = 55.0

# Canvas and viewport
DEFAULT_CANVAS_SIZE = 50
FREE_MODE_CANVAS_SIZE = 100
DEFAULT_CELL_SIZE_PX = 24
MIN_ZOOM = 0.1
MAX_ZOOM = 5.0
THUMBNAIL_CELL_PX = 5
THUMBNAIL_BACKGROUND = (255, 255, 255)

# Conversion
ALPHA_CUTOFF = 128
QUANTIZE_STEP = 32
SAMPLE_SPREAD = 0.3
DEFAULT_PHOTO_WIDTH = 50
DEFAULT_PATTERN_COLS = 40
MIN_ESTIMATED_CELL_SIZE = 5.0

# Label contrast
TEXT_LUMA_THRESHOLD = 186
TEXT_COLOR_DARK = "#000000"
TEXT_COLOR_LIGHT = "#ffffff"

# Draft field names
FIELD_SCHEMA_VERSION = "schemaVersion"
FIELD_ID = "id"
FIELD_TITLE = "title"
FIELD_GRID = "grid"
FIELD_WIDTH = "width"
FIELD_HEIGHT = "height"
FIELD_MIN_X = "minX"
FIELD_MIN_Y = "minY"
FIELD_IS_FREE_MODE = "isFreeMode"
FIELD_OFFSET_X = "offsetX"
FIELD_OFFSET_Y = "offsetY"
FIELD_ZOOM = "zoom"
FIELD_LAST_MODIFIED = "lastModified"
FIELD_THUMBNAIL = "thumbnail"

# Raw bead record field names
FIELD_BEAD_ID = "id"
FIELD_BEAD_CODE = "code"
FIELD_BEAD_RGB = "rgb"
FIELD_BEAD_SETS = "sets"

# Grid key formatting
GRID_KEY_SEPARATOR = ","
