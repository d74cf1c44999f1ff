"""
ColorLib - Color values and blending

This module provides the floating point RGBA color used by every source.
"""

from NI_Libs.ColorLib.color import ByteColor, Color, lerp

__all__ = [
    "ByteColor",
    "Color",
    "lerp",
]
