"""
Constants and configuration values for Sprite Splitter.

This module centralizes all constant values, magic numbers, and
configuration settings used throughout the application.
"""

# Opacity mask
# A pixel counts as opaque when its alpha is strictly above this value.
ALPHA_CUTOFF = 1
CHANNELS = 4
ALPHA_CHANNEL = 3

# Extraction settings (defaults and inclusive ranges)
DEFAULT_THRESHOLD = 128
MIN_THRESHOLD = 0
MAX_THRESHOLD = 255
DEFAULT_MIN_SIZE = 20
MIN_MIN_SIZE = 1
MAX_MIN_SIZE = 100
DEFAULT_PADDING = 1
MIN_PADDING = 0
MAX_PADDING = 10

# Eraser brush
DEFAULT_BRUSH_SIZE = 20
MIN_BRUSH_SIZE = 2
MAX_BRUSH_SIZE = 50

# Crop rectangle
MIN_CROP_SIZE = 10
CORNER_HIT_RADIUS = 10
DEFAULT_CROP_SIZE = 100

# Corner tags
CORNER_TOP_LEFT = "tl"
CORNER_TOP_RIGHT = "tr"
CORNER_BOTTOM_LEFT = "bl"
CORNER_BOTTOM_RIGHT = "br"
CORNERS = (CORNER_TOP_LEFT, CORNER_TOP_RIGHT, CORNER_BOTTOM_LEFT, CORNER_BOTTOM_RIGHT)

# Export
SPRITE_NAME_TEMPLATE = "sprite_{index}"
SPRITE_FILE_EXTENSION = ".png"
DEFAULT_ARCHIVE_NAME = "sprites.zip"
DEFAULT_OUTPUT_FORMAT = "PNG"
# Substrings a sprite name may not contain; names become file and archive entry names
INVALID_NAME_SEQUENCES = ("/", "\\", "..", "\0")

# Sprite id prefix used by the id allocator
SPRITE_ID_PREFIX = "sprite-"
