"""
Sampled Image Source.

Wraps a decoded pixel grid behind the Source contract. Grids with 1 (gray),
2 (gray + alpha), 3 (RGB) or 4 (RGBA) channels are supported and normalized
to RGBA Colors on read.

Example:
    >>> from PIL import Image
    >>> image = SampledImage.from_pil(Image.new("LA", (4, 4), (200, 128)))
    >>> image.size()
    (4, 4)
    >>> image.borders()
    Borders(x_range=(0, 3), y_range=(0, 3))
"""

from typing import Any, Optional, Tuple

import numpy as np

from NI_Libs.ColorLib.color import Color
from NI_Libs.constants import CHANNEL_MAX, RGBA_CHANNELS, SUPPORTED_PIL_MODES
from NI_Libs.source import Borders, Source


class UnsupportedFormatError(ValueError):
    """Raised when a pixel grid uses a layout SampledImage cannot read."""


class SampledImage(Source):
    """
    Read-only pixel grid source.

    Pixels outside the grid sample as the default transparent Color. The
    backing array is copied on construction and marked read-only, so one
    SampledImage can be shared by any number of combinators and threads.

    Attributes:
        channels: Number of channels in the backing grid (1-4)
    """

    def __init__(self, pixels: Any):
        """
        Create a sampled image from a numpy array.

        Args:
            pixels: uint8 array shaped (height, width) or
                    (height, width, channels) with 1-4 channels

        Raises:
            UnsupportedFormatError: If the dtype or shape is not supported
        """
        array = np.asarray(pixels)

        if array.dtype != np.uint8:
            raise UnsupportedFormatError(
                f"Pixel grid must be uint8, got {array.dtype}"
            )

        if array.ndim == 2:
            array = array[:, :, np.newaxis]

        if array.ndim != 3 or not (1 <= array.shape[2] <= RGBA_CHANNELS):
            raise UnsupportedFormatError(
                f"Pixel grid must be (height, width[, 1-4 channels]), got shape {array.shape}"
            )

        self._pixels = np.array(array, dtype=np.uint8, copy=True)
        self._pixels.setflags(write=False)
        self.channels = int(self._pixels.shape[2])

    @classmethod
    def from_pil(cls, image: Any) -> "SampledImage":
        """
        Create a sampled image from a Pillow image.

        Args:
            image: PIL Image in mode 'L', 'LA', 'RGB' or 'RGBA'

        Returns:
            New SampledImage

        Raises:
            TypeError: If image is not a PIL Image
            UnsupportedFormatError: If the image mode is not supported
        """
        if not hasattr(image, "mode") or not hasattr(image, "size"):
            raise TypeError(f"Expected PIL Image, got {type(image)}")

        if image.mode not in SUPPORTED_PIL_MODES:
            supported = ", ".join(SUPPORTED_PIL_MODES)
            raise UnsupportedFormatError(
                f"Unsupported image mode: {image.mode}. Supported modes: {supported}"
            )

        width, height = image.size
        pixels = np.asarray(image, dtype=np.uint8).reshape(
            height, width, SUPPORTED_PIL_MODES[image.mode]
        )
        return cls(pixels)

    def size(self) -> Tuple[int, int]:
        """Get (width, height) of the grid."""
        height, width = self._pixels.shape[:2]
        return int(width), int(height)

    def color_at(self, x: int, y: int) -> Optional[Color]:
        """
        Get the color of a grid pixel.

        Returns:
            The pixel as an RGBA Color, or None if (x, y) is outside the grid
        """
        width, height = self.size()
        if not (0 <= x < width and 0 <= y < height):
            return None

        values = self._pixels[y, x].tolist()

        if self.channels == 1:
            gray = values[0]
            rgba = (gray, gray, gray, CHANNEL_MAX)
        elif self.channels == 2:
            gray, alpha = values
            rgba = (gray, gray, gray, alpha)
        elif self.channels == 3:
            rgba = (values[0], values[1], values[2], CHANNEL_MAX)
        else:
            rgba = values

        return Color.from_byte_array(rgba)

    def sample(self, x: int, y: int) -> Color:
        color = self.color_at(x, y)
        return color if color is not None else Color()

    def borders(self) -> Borders:
        # A zero-sized axis yields the empty range (0, -1)
        width, height = self.size()
        return Borders(x_range=(0, width - 1), y_range=(0, height - 1))

    def __repr__(self) -> str:
        width, height = self.size()
        return f"SampledImage(size=({width}, {height}), channels={self.channels})"
