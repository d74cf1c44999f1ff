"""
Scale Source.

Resamples a child source by a positive factor using either nearest-neighbour
or a pixel-center bilinear filter.

Example:
    >>> from NI_Libs.ColorLib.color import Color
    >>> half = ScaleSource(Color(1.0, 0.0, 0.0, 1.0), 0.5, Filter.LINEAR)
    >>> half.sample(3, 3)
    Color(r=1.0, g=0.0, b=0.0, a=1.0)
"""

import math
from enum import Enum
from numbers import Real
from typing import Optional, Tuple, Union

from NI_Libs.ColorLib.color import Color
from NI_Libs.constants import EPSILON
from NI_Libs.source import Borders, Source, truncate_i32, wrap_i32


class Filter(Enum):
    """Resampling filter used by ScaleSource."""
    NEAREST = "nearest"
    LINEAR = "linear"


def linear_points(value: float) -> Tuple[int, int, float]:
    """
    Find the two samples around a child-space coordinate.

    The fractional part of ``abs(value)`` is compared to the pixel center:
    below 0.5 the second point is one step back, above 0.5 one step forward,
    and exactly 0.5 gives a single point with weight 0.

    Returns:
        (first_point, second_point, weight_of_second_point)
    """
    base = truncate_i32(value)
    fract = math.fabs(value) % 1.0

    if fract < 0.5:
        return base, wrap_i32(base - 1), 0.5 - fract
    if fract == 0.5:
        return base, base, 0.0
    return base, wrap_i32(base + 1), fract - 0.5


class ScaleSource(Source):
    """
    Child source resampled by ``factor``.

    A factor of 2.0 doubles the size of the child; 0.5 halves it. Output pixel
    (x, y) reads child pixel (x / factor, y / factor) through the filter.
    """

    def __init__(
        self,
        source: Source,
        factor: float,
        filter: Union[Filter, str] = Filter.NEAREST,
    ):
        """
        Args:
            source: Child source
            factor: Positive, finite scale factor
            filter: Filter.NEAREST or Filter.LINEAR (or 'nearest' / 'linear')

        Raises:
            ValueError: If factor <= 0 (or not finite) or filter is unknown
            TypeError: If factor is not a number
        """
        if isinstance(factor, bool) or not isinstance(factor, Real):
            raise TypeError(f"factor must be a number, got {type(factor)}")

        factor = float(factor)
        if not math.isfinite(factor) or factor <= EPSILON:
            raise ValueError(f"factor must be a finite number > 0, got {factor}")

        if not isinstance(filter, Filter):
            try:
                filter = Filter(str(filter).strip().lower())
            except ValueError:
                valid = ", ".join(f.value for f in Filter)
                raise ValueError(
                    f"Unknown filter: {filter}. Valid filters: {valid}"
                ) from None

        self.source = source
        self.factor = factor
        self.reciprocal = 1.0 / factor
        self.filter = filter

    def sample(self, x: int, y: int) -> Color:
        u = self.reciprocal * x
        v = self.reciprocal * y

        if self.filter is Filter.NEAREST:
            return self.source.sample(truncate_i32(u), truncate_i32(v))

        x0, x1, xt = linear_points(u)
        y0, y1, yt = linear_points(v)
        sample = self.source.sample

        if x0 == x1 and y0 == y1:
            return sample(x0, y0)

        if y0 == y1:
            return sample(x0, y0).lerp(sample(x1, y0), xt)

        if x0 == x1:
            return sample(x0, y0).lerp(sample(x0, y1), yt)

        top = sample(x0, y0).lerp(sample(x1, y0), xt)
        bottom = sample(x0, y1).lerp(sample(x1, y1), xt)
        return top.lerp(bottom, yt)

    def borders(self) -> Optional[Borders]:
        child = self.source.borders()
        if child is None:
            return None
        return child.scale(self.factor)

    def __repr__(self) -> str:
        return f"ScaleSource(factor={self.factor}, filter={self.filter.value})"
