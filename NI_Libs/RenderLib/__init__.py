"""
RenderLib - Rasterization and codec glue

This module turns source trees into pixel buffers and moves pixel data
between Pillow and Nied.
"""

from NI_Libs.RenderLib.rasterizer import render, render_image, split_rows
from NI_Libs.RenderLib.codec import encode_rgba, load_sampled_image, save_rgba

__all__ = [
    "render",
    "render_image",
    "split_rows",
    "encode_rgba",
    "load_sampled_image",
    "save_rgba",
]
