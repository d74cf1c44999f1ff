"""
Blur Source.

Averages the child source over a disc of integer offsets. The disc holds every
(dx, dy) with dx and dy in [-radius, radius) and dx*dx + dy*dy < radius*radius.

Pixels outside the blur's own borders (child borders grown by the radius) are
the default transparent Color without sampling the child at all. A radius of
0 has no offsets in its disc and therefore yields the default Color everywhere.
"""

from typing import List, Optional, Tuple

from NI_Libs.ColorLib.color import Color
from NI_Libs.constants import MAX_BLUR_RADIUS, MIN_BLUR_RADIUS
from NI_Libs.source import Borders, Source, wrap_i32


def disc_offsets(radius: int) -> List[Tuple[int, int]]:
    """
    List the sample offsets of a blur disc, row by row.

    Example:
        >>> disc_offsets(1)
        [(0, 0)]
        >>> len(disc_offsets(2))
        9
    """
    radius_sqr = radius * radius
    return [
        (dx, dy)
        for dy in range(-radius, radius)
        for dx in range(-radius, radius)
        if dx * dx + dy * dy < radius_sqr
    ]


class BlurSource(Source):
    """Disc-average blur of a child source."""

    def __init__(self, source: Source, radius: int):
        """
        Args:
            source: Child source to blur
            radius: Disc radius in pixels (0-255)

        Raises:
            TypeError: If radius is not an int
            ValueError: If radius is outside 0-255
        """
        if isinstance(radius, bool) or not isinstance(radius, int):
            raise TypeError(f"radius must be an int, got {type(radius)}")

        if not (MIN_BLUR_RADIUS <= radius <= MAX_BLUR_RADIUS):
            raise ValueError(
                f"radius must be {MIN_BLUR_RADIUS}-{MAX_BLUR_RADIUS}, got {radius}"
            )

        self.source = source
        self.radius = radius
        self._offsets = disc_offsets(radius)
        # Child trees are immutable, so the borders never change
        self._borders = self._compute_borders()

    def _compute_borders(self) -> Optional[Borders]:
        child = self.source.borders()
        if child is None:
            return None
        return child.expand(self.radius)

    def sample(self, x: int, y: int) -> Color:
        if self._borders is not None and not self._borders.contains(x, y):
            return Color()

        if not self._offsets:
            return Color()

        total = Color()
        for dx, dy in self._offsets:
            total = total + self.source.sample(wrap_i32(x + dx), wrap_i32(y + dy))

        return total * (1.0 / len(self._offsets))

    def borders(self) -> Optional[Borders]:
        return self._borders

    def __repr__(self) -> str:
        return f"BlurSource(radius={self.radius})"
