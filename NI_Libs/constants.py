"""
Constants and configuration values for Nied.

This module centralizes all constant values, magic numbers, and
configuration settings used throughout the library.
"""

# Color constants
CHANNEL_MAX = 255
RGBA_CHANNELS = 4
# Machine epsilon of a 32-bit float; alpha above this counts as visible
EPSILON = 1.1920929e-07

# Signed 32-bit coordinate space
I32_MIN = -(2 ** 31)
I32_MAX = 2 ** 31 - 1
U32_MODULUS = 2 ** 32

# Blur radius limits (radius is an 8-bit value)
MIN_BLUR_RADIUS = 0
MAX_BLUR_RADIUS = 255

# Rasterizer defaults
DEFAULT_ROWS_PER_CHUNK = 16
DEFAULT_OUTPUT_FORMAT = "PNG"

# Pillow modes accepted by SampledImage, mapped to their channel count
SUPPORTED_PIL_MODES = {
    "L": 1,
    "LA": 2,
    "RGB": 3,
    "RGBA": 4,
}

# Source graph field names
FIELD_NODE_ID = "id"
FIELD_NODE_TYPE = "type"
FIELD_FROM_NODE = "from_node"
FIELD_TO_NODE = "to_node"

# Built-in node types
NODE_TYPE_COLOR = "Color"
NODE_TYPE_IMAGE = "Image"
NODE_TYPE_OFFSET = "Offset"
NODE_TYPE_SCALE = "Scale"
NODE_TYPE_BLUR = "Blur"
NODE_TYPE_STACK = "Stack"

# Input count meaning "any number of inputs"
ANY_INPUT_COUNT = -1
