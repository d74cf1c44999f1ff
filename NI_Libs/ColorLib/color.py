"""
Floating point RGBA color.

Channels are conventionally in the 0.0-1.0 range but no operation clamps.
A Color is also a Source: it is the same color at every pixel.

Example:
    >>> red = Color.from_u32(0xFF0000FF)
    >>> blue = Color(0.0, 0.0, 1.0, 0.5)
    >>> red.overlay(blue).to_byte_array()
    (127, 0, 127, 255)
"""

import math
import string
from dataclasses import dataclass
from numbers import Real
from typing import Sequence, Tuple, Union

from NI_Libs.constants import CHANNEL_MAX, EPSILON
from NI_Libs.source import Source

ByteColor = Tuple[int, int, int, int]


def lerp(x: float, y: float, t: float) -> float:
    return x + t * (y - x)


def _to_byte(value: float) -> int:
    # Truncate toward zero; out-of-range values saturate, NaN becomes 0
    if math.isnan(value):
        return 0
    scaled = value * CHANNEL_MAX
    if scaled >= CHANNEL_MAX:
        return CHANNEL_MAX
    if scaled <= 0:
        return 0
    return int(scaled)


@dataclass(frozen=True)
class Color(Source):
    """RGBA color with float channels.

    Attributes:
        r: Red channel
        g: Green channel
        b: Blue channel
        a: Alpha channel (0.0 transparent, 1.0 opaque)
    """
    r: float = 0.0
    g: float = 0.0
    b: float = 0.0
    a: float = 0.0

    @classmethod
    def from_u32(cls, value: int) -> "Color":
        """Create a color from a packed 0xRRGGBBAA integer."""
        return cls.from_byte_array((
            (value >> 24) & 0xFF,
            (value >> 16) & 0xFF,
            (value >> 8) & 0xFF,
            value & 0xFF,
        ))

    @classmethod
    def from_array(cls, values: Sequence[float]) -> "Color":
        r, g, b, a = values
        return cls(float(r), float(g), float(b), float(a))

    @classmethod
    def from_byte_array(cls, values: Sequence[int]) -> "Color":
        r, g, b, a = values
        return cls(
            r / CHANNEL_MAX,
            g / CHANNEL_MAX,
            b / CHANNEL_MAX,
            a / CHANNEL_MAX,
        )

    @classmethod
    def from_hex(cls, text: str) -> "Color":
        """
        Create a color from a "#RRGGBB" or "#RRGGBBAA" string.

        Args:
            text: Hex color, leading '#' optional. Alpha defaults to opaque.

        Returns:
            The parsed Color

        Raises:
            ValueError: If the string is not 6 or 8 hex digits
        """
        digits = str(text).strip().lstrip("#")
        if len(digits) == 6:
            digits += "ff"
        if len(digits) != 8:
            raise ValueError(f"Expected '#RRGGBB' or '#RRGGBBAA', got {text!r}")
        if not all(c in string.hexdigits for c in digits):
            raise ValueError(f"Invalid hex color: {text!r}")
        return cls.from_u32(int(digits, 16))

    def to_byte_array(self) -> ByteColor:
        """
        Convert to 8-bit channels.

        Each channel is multiplied by 255 and truncated (no rounding).
        Values outside 0.0-1.0 saturate to 0 or 255.
        """
        return (
            _to_byte(self.r),
            _to_byte(self.g),
            _to_byte(self.b),
            _to_byte(self.a),
        )

    def to_array(self) -> Tuple[float, float, float, float]:
        return (self.r, self.g, self.b, self.a)

    def is_visible(self) -> bool:
        return self.a > EPSILON

    def is_transparent(self) -> bool:
        """True unless the color is fully opaque (alpha >= 1)."""
        return self.a < 1.0

    def overlay(self, top: "Color") -> "Color":
        """
        Put ``top`` over this color.

        RGB channels move toward ``top`` by ``top.a``; the resulting alpha is
        the larger of the two alphas.
        """
        return Color(
            lerp(self.r, top.r, top.a),
            lerp(self.g, top.g, top.a),
            lerp(self.b, top.b, top.a),
            max(self.a, top.a),
        )

    def lerp(self, other: "Color", t: float) -> "Color":
        return Color(
            lerp(self.r, other.r, t),
            lerp(self.g, other.g, t),
            lerp(self.b, other.b, t),
            lerp(self.a, other.a, t),
        )

    def __add__(self, other: "Color") -> "Color":
        if not isinstance(other, Color):
            return NotImplemented
        return Color(
            self.r + other.r,
            self.g + other.g,
            self.b + other.b,
            self.a + other.a,
        )

    def __mul__(self, other: Union["Color", float]) -> "Color":
        if isinstance(other, Color):
            return Color(
                self.r * other.r,
                self.g * other.g,
                self.b * other.b,
                self.a * other.a,
            )
        if isinstance(other, Real):
            return Color(
                self.r * other,
                self.g * other,
                self.b * other,
                self.a * other,
            )
        return NotImplemented

    def __rmul__(self, other: float) -> "Color":
        if isinstance(other, Real):
            return self * other
        return NotImplemented

    def sample(self, x: int, y: int) -> "Color":
        return self
