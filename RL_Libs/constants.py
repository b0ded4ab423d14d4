"""
Constants and configuration values for Rover Lens.

This module centralizes all constant values, magic numbers, and
configuration settings used throughout the library.
"""

# Luma coefficients (ITU-R BT.709)
LUMA_RED = 0.2126
LUMA_GREEN = 0.7152
LUMA_BLUE = 0.0722

# Byte range
BYTE_MIN = 0.0
BYTE_MAX = 255.0
MID_GRAY = 128.0
CHANNELS = 4

# 3x3 kernels, row-major
SOBEL_X_KERNEL = (-1, 0, 1, -2, 0, 2, -1, 0, 1)
SOBEL_Y_KERNEL = (-1, -2, -1, 0, 0, 0, 1, 2, 1)
SHARPEN_KERNEL = (0, -1, 0, -1, 5, -1, 0, -1, 0)

# Normalization peaks
EDGES_NORMALIZE_PEAK = 255.0
OUTLINE_NORMALIZE_PEAK = 1.0

# Dilation radius exposed to users (cost grows with radius squared)
MAX_DILATION_RADIUS = 4

# Effect names
EFFECT_NONE = "none"
EFFECT_EDGES = "edges"
EFFECT_SHARPEN = "sharpen"
EFFECT_THRESHOLD = "threshold"
EFFECT_OUTLINE = "outline"

# Edges defaults and knob ranges
DEFAULT_EDGES_STRENGTH = 1.8
DEFAULT_EDGES_THRESHOLD = 1.0
DEFAULT_EDGES_THICKNESS = 0.0
DEFAULT_EDGES_RECONTRAST = 1.0
EDGES_STRENGTH_RANGE = (0.0, 5.0)
EDGES_THRESHOLD_RANGE = (0.0, 2.0)
EDGES_THICKNESS_RANGE = (0.0, float(MAX_DILATION_RADIUS))
EDGES_RECONTRAST_RANGE = (0.0, 3.0)

# Sharpen defaults and knob ranges
DEFAULT_SHARPEN_AMOUNT = 1.0
SHARPEN_AMOUNT_RANGE = (0.0, 5.0)

# Threshold defaults and knob ranges
DEFAULT_THRESHOLD_SHIFT = 1.0
DEFAULT_THRESHOLD_INVERT = False
THRESHOLD_SHIFT_RANGE = (0.0, 2.0)

# Outline defaults and knob ranges
DEFAULT_OUTLINE_WIDTH = 1.0
DEFAULT_OUTLINE_HUE = 190.0
DEFAULT_OUTLINE_SATURATION = 3.0
DEFAULT_OUTLINE_OPACITY = 0.85
OUTLINE_WIDTH_RANGE = (0.0, float(MAX_DILATION_RADIUS))
OUTLINE_SATURATION_RANGE = (0.0, 3.0)
OUTLINE_OPACITY_RANGE = (0.0, 2.0)
OUTLINE_SATURATION_SCALE = 3.0
HUE_DEGREES = 360.0

# Fetch collaborator
DEFAULT_FETCH_TIMEOUT = 30.0
BLOCKED_HTTP_STATUSES = {401, 403, 407, 451}
RELAY_URL_PARAM = "url"

# Export collaborator
DEFAULT_EXPORT_TEMPLATE = "rover_{EFFECT}_{DATE}.png"
EXPORT_FORMAT = "PNG"
TEMP_FILE_SUFFIX = ".partial"

# Preset store
PRESETS_FILE_NAME = "presets.rlpreset.json"
PRESET_SCHEMA_VERSION = 1
FIELD_SCHEMA_VERSION = "schema_version"
FIELD_PRESETS = "presets"
FIELD_EFFECT = "effect"
FIELD_PARAMS = "params"

# Render modes
RENDER_MODE_PREVIEW = "preview"
RENDER_MODE_EXPORT = "export"
