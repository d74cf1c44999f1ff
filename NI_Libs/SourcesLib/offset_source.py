"""
Offset Source.

Translates a child source by (dx, dy): the child's pixel (x, y) appears at
(x + dx, y + dy). Coordinate arithmetic wraps in the signed 32-bit range.
"""

from typing import Optional, Tuple

from NI_Libs.ColorLib.color import Color
from NI_Libs.source import Borders, Source, wrap_i32


class OffsetSource(Source):
    """Child source moved by a fixed vector."""

    def __init__(self, source: Source, offset: Tuple[int, int]):
        """
        Args:
            source: Child source to translate
            offset: (dx, dy) translation in pixels

        Raises:
            TypeError: If an offset component is not an integer
        """
        dx, dy = offset
        for name, value in (("dx", dx), ("dy", dy)):
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError(f"offset {name} must be an int, got {type(value)}")

        self.source = source
        self.offset = (wrap_i32(dx), wrap_i32(dy))

    def sample(self, x: int, y: int) -> Color:
        dx, dy = self.offset
        return self.source.sample(wrap_i32(x - dx), wrap_i32(y - dy))

    def borders(self) -> Optional[Borders]:
        child = self.source.borders()
        if child is None:
            return None
        return child.translate(*self.offset)

    def __repr__(self) -> str:
        return f"OffsetSource(offset={self.offset})"
