"""
Source contract for Nied.

A source answers "what color is at integer pixel (x, y)?" for every pair of
integers, and may report the rectangle (its borders) outside of which it only
ever produces the default transparent color.

Classes:
    Source: Base class of every sampleable object
    Borders: Inclusive rectangle of meaningful data

Functions:
    wrap_i32: Reduce an int into the signed 32-bit range, wrapping
    truncate_i32: Convert a float to a saturated, truncated 32-bit int
"""

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Tuple

from NI_Libs.constants import I32_MAX, I32_MIN, U32_MODULUS

if TYPE_CHECKING:
    from NI_Libs.ColorLib.color import Color


def wrap_i32(value: int) -> int:
    """
    Wrap an integer into the signed 32-bit range (modulo 2**32).

    Example:
        >>> wrap_i32(2 ** 31)
        -2147483648
    """
    return (value - I32_MIN) % U32_MODULUS + I32_MIN


def truncate_i32(value: float) -> int:
    """
    Convert a float to an int, truncating toward zero.

    Values beyond the 32-bit range saturate at its limits and NaN becomes 0,
    so the conversion is defined for every float.
    """
    if math.isnan(value):
        return 0
    if value >= I32_MAX:
        return I32_MAX
    if value <= I32_MIN:
        return I32_MIN
    return int(value)


@dataclass(frozen=True)
class Borders:
    """Inclusive rectangle within which a source has meaningful data.

    Attributes:
        x_range: (min, max) inclusive column bounds
        y_range: (min, max) inclusive row bounds

    A range whose min is greater than its max contains no point.
    """
    x_range: Tuple[int, int]
    y_range: Tuple[int, int]

    def contains(self, x: int, y: int) -> bool:
        x0, x1 = self.x_range
        y0, y1 = self.y_range
        return x0 <= x <= x1 and y0 <= y <= y1

    def is_empty(self) -> bool:
        return self.x_range[0] > self.x_range[1] or self.y_range[0] > self.y_range[1]

    def translate(self, dx: int, dy: int) -> "Borders":
        """Move the rectangle by (dx, dy) using wrapping arithmetic."""
        x0, x1 = self.x_range
        y0, y1 = self.y_range
        return Borders(
            x_range=(wrap_i32(x0 + dx), wrap_i32(x1 + dx)),
            y_range=(wrap_i32(y0 + dy), wrap_i32(y1 + dy)),
        )

    def expand(self, amount: int) -> "Borders":
        """Grow the rectangle by ``amount`` on every side, wrapping."""
        x0, x1 = self.x_range
        y0, y1 = self.y_range
        return Borders(
            x_range=(wrap_i32(x0 - amount), wrap_i32(x1 + amount)),
            y_range=(wrap_i32(y0 - amount), wrap_i32(y1 + amount)),
        )

    def scale(self, factor: float) -> "Borders":
        """Multiply every bound by ``factor``, truncating to integers.

        No reordering happens: an inverted rectangle stays inverted.
        """
        x0, x1 = self.x_range
        y0, y1 = self.y_range
        return Borders(
            x_range=(truncate_i32(x0 * factor), truncate_i32(x1 * factor)),
            y_range=(truncate_i32(y0 * factor), truncate_i32(y1 * factor)),
        )


class Source:
    """
    Base class for everything that can be sampled.

    Subclasses implement ``sample``. Sampling must be a pure function of the
    source's construction parameters and the coordinates, so one source tree
    can be sampled from many threads at once.
    """

    def sample(self, x: int, y: int) -> "Color":
        """
        Get the color at integer pixel (x, y).

        Args:
            x: Column, any integer
            y: Row, any integer

        Returns:
            The Color at that pixel (never raises for out-of-range input)
        """
        raise NotImplementedError(f"{type(self).__name__} does not implement sample()")

    def borders(self) -> Optional[Borders]:
        """Rectangle of meaningful data, or None when unbounded."""
        return None
