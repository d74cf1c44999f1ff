"""
Nied Sources Library.

This package contains the leaf sources and combinators of the compositing
engine. Every class here implements the Source contract, so they nest freely.

Modules:
    image_source: Sampled image backed by a decoded pixel grid
    offset_source: Translation
    scale_source: Resampling with nearest or linear filtering
    blur_source: Disc-average blur
    stack_source: Ordered back-to-front layering
"""

from NI_Libs.source import Borders, Source, truncate_i32, wrap_i32
from NI_Libs.SourcesLib.image_source import SampledImage, UnsupportedFormatError
from NI_Libs.SourcesLib.offset_source import OffsetSource
from NI_Libs.SourcesLib.scale_source import Filter, ScaleSource, linear_points
from NI_Libs.SourcesLib.blur_source import BlurSource, disc_offsets
from NI_Libs.SourcesLib.stack_source import StackSource

__all__ = [
    "Borders",
    "Source",
    "truncate_i32",
    "wrap_i32",
    "SampledImage",
    "UnsupportedFormatError",
    "OffsetSource",
    "Filter",
    "ScaleSource",
    "linear_points",
    "BlurSource",
    "disc_offsets",
    "StackSource",
]
