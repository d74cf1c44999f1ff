"""
Rasterizer for Source Trees.

Renders a source into a finite RGBA8 buffer by sampling every output pixel.
Rows are split into fixed chunks that run on a thread pool; each chunk writes
its own rows of the output array, so no locking is needed.

Example:
    >>> from NI_Libs.ColorLib.color import Color
    >>> render(Color(1.0, 0.0, 0.0, 1.0), 2, 1)
    b'\\xff\\x00\\x00\\xff\\xff\\x00\\x00\\xff'
"""

import concurrent.futures
import logging
import time
from typing import Any, Dict, List, Optional, Tuple

import numpy as np

from NI_Libs.constants import DEFAULT_ROWS_PER_CHUNK, RGBA_CHANNELS
from NI_Libs.RenderLib.codec import encode_rgba
from NI_Libs.source import Source

logger = logging.getLogger(__name__)

RowRange = Tuple[int, int]


def _validate_dimension(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an int, got {type(value)}")
    if value < 0:
        raise ValueError(f"{name} must be >= 0, got {value}")
    return value


def split_rows(height: int, rows_per_chunk: int) -> List[RowRange]:
    """
    Partition ``range(height)`` into consecutive [start, stop) chunks.

    Example:
        >>> split_rows(5, 2)
        [(0, 2), (2, 4), (4, 5)]
    """
    if rows_per_chunk < 1:
        raise ValueError(f"rows_per_chunk must be >= 1, got {rows_per_chunk}")
    return [
        (start, min(start + rows_per_chunk, height))
        for start in range(0, height, rows_per_chunk)
    ]


def _render_rows(source: Source, buffer: Any, width: int, rows: RowRange) -> None:
    start, stop = rows
    sample = source.sample
    for y in range(start, stop):
        buffer[y] = [sample(x, y).to_byte_array() for x in range(width)]


def render(
    source: Source,
    width: int,
    height: int,
    use_threading: bool = True,
    max_workers: Optional[int] = None,
    rows_per_chunk: int = DEFAULT_ROWS_PER_CHUNK,
) -> bytes:
    """
    Render a source into an RGBA8 pixel buffer.

    Pixel n of the buffer covers (x, y) = (n % width, n // width). The source
    is sampled exactly once per output pixel, in no particular order.

    Args:
        source: Root of the source tree
        width: Output width in pixels
        height: Output height in pixels
        use_threading: Sample chunks on a thread pool (default: True)
        max_workers: Maximum number of threads (default: None = executor default)
        rows_per_chunk: Rows handed to a worker at a time

    Returns:
        Row-major RGBA bytes of length width * height * 4

    Raises:
        TypeError: If source is not a Source or a dimension is not an int
        ValueError: If a dimension is negative or rows_per_chunk < 1
        RuntimeError: If sampling fails inside a chunk
        MemoryError: If the output buffer cannot be allocated
    """
    if not isinstance(source, Source):
        raise TypeError(f"Expected Source, got {type(source)}")

    width = _validate_dimension("width", width)
    height = _validate_dimension("height", height)

    if width == 0 or height == 0:
        return b""

    chunks = split_rows(height, rows_per_chunk)
    buffer = np.zeros((height, width, RGBA_CHANNELS), dtype=np.uint8)

    started = time.perf_counter()
    logger.debug(f"Rendering {width}x{height} in {len(chunks)} chunk(s)")

    if use_threading and len(chunks) > 1:
        with concurrent.futures.ThreadPoolExecutor(max_workers=max_workers) as executor:
            futures: Dict[concurrent.futures.Future, RowRange] = {
                executor.submit(_render_rows, source, buffer, width, rows): rows
                for rows in chunks
            }

            for future in concurrent.futures.as_completed(futures):
                start, stop = futures[future]
                try:
                    future.result()
                except Exception as e:
                    raise RuntimeError(
                        f"Error rendering rows {start}-{stop - 1}: {str(e)}"
                    ) from e
    else:
        for rows in chunks:
            start, stop = rows
            try:
                _render_rows(source, buffer, width, rows)
            except Exception as e:
                raise RuntimeError(
                    f"Error rendering rows {start}-{stop - 1}: {str(e)}"
                ) from e

    elapsed = time.perf_counter() - started
    logger.info(f"Rendered {width}x{height} image in {elapsed:.3f}s")

    return buffer.tobytes()


def render_image(
    source: Source,
    size: Tuple[int, int],
    **options: Any,
) -> Any:
    """
    Render a source straight into a Pillow image.

    Args:
        source: Root of the source tree
        size: (width, height) of the output
        **options: Passed to render() (use_threading, max_workers, rows_per_chunk)

    Returns:
        PIL Image in RGBA mode
    """
    width, height = size
    return encode_rgba(render(source, width, height, **options), (width, height))
