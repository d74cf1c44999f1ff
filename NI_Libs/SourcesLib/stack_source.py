"""
Stack Source.

Composites an ordered sequence of sources back to front with
``Color.overlay``. Compositing stops at the first layer that makes the
accumulated color opaque; layers after it are never sampled, so cheap or
likely-visible layers belong at the front of the sequence.

A stack never reports borders: it is treated as unbounded, and combinators
wrapping a stack get no bounding-rectangle early-outs through it.
"""

from typing import Iterable, Iterator, Optional

from NI_Libs.ColorLib.color import Color
from NI_Libs.source import Borders, Source


class StackSource(Source):
    """Ordered overlay of several sources."""

    def __init__(self, sources: Iterable[Source]):
        """
        Args:
            sources: Layers, first one at the back

        Raises:
            TypeError: If a layer is not a Source
        """
        layers = tuple(sources)
        for index, layer in enumerate(layers):
            if not isinstance(layer, Source):
                raise TypeError(f"Layer {index} is not a Source, got {type(layer)}")
        self.sources = layers

    def sample(self, x: int, y: int) -> Color:
        result = Color()
        for source in self.sources:
            result = result.overlay(source.sample(x, y))
            if not result.is_transparent():
                break
        return result

    def borders(self) -> Optional[Borders]:
        return None

    def __len__(self) -> int:
        return len(self.sources)

    def __iter__(self) -> Iterator[Source]:
        return iter(self.sources)

    def __repr__(self) -> str:
        return f"StackSource(layers={len(self.sources)})"
