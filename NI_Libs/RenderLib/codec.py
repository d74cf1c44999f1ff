"""
Codec glue between Pillow and Nied.

Pillow does all decoding and encoding. This module only moves pixel data
across the boundary: files into SampledImage sources, and rendered RGBA
buffers back into Pillow images.

Functions:
    load_sampled_image: Decode an image file into a SampledImage
    encode_rgba: Wrap a rendered RGBA buffer in a PIL Image
    save_rgba: Encode and save a rendered RGBA buffer
"""

import logging
from pathlib import Path
from typing import Any, Optional, Tuple, Union

from PIL import Image

from NI_Libs.constants import DEFAULT_OUTPUT_FORMAT, RGBA_CHANNELS
from NI_Libs.SourcesLib.image_source import SampledImage

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def load_sampled_image(
    file_path: PathLike,
    convert_mode: Optional[str] = None,
) -> SampledImage:
    """
    Decode an image file into a SampledImage.

    Args:
        file_path: Path to the image file
        convert_mode: Optional Pillow mode to convert to before wrapping
                      (e.g. 'RGBA' for palette images). Without it, images
                      in unsupported modes are rejected.

    Returns:
        SampledImage holding the decoded pixels

    Raises:
        FileNotFoundError: If the file does not exist
        UnsupportedFormatError: If the decoded mode is not supported
    """
    file_path = Path(file_path)

    if not file_path.is_file():
        raise FileNotFoundError(f"Image file not found: {file_path}")

    with Image.open(file_path) as image:
        image.load()
        if convert_mode is not None and image.mode != convert_mode:
            logger.debug(f"Converting {file_path.name} from {image.mode} to {convert_mode}")
            image = image.convert(convert_mode)
        sampled = SampledImage.from_pil(image)

    logger.debug(f"Loaded {file_path.name}: {sampled!r}")
    return sampled


def encode_rgba(buffer: bytes, size: Tuple[int, int]) -> Any:
    """
    Wrap a rendered RGBA buffer in a Pillow image.

    Args:
        buffer: Row-major RGBA bytes, as returned by render()
        size: (width, height) of the buffer

    Returns:
        PIL Image in RGBA mode

    Raises:
        ValueError: If the buffer length does not match the size
    """
    width, height = size
    expected = width * height * RGBA_CHANNELS

    if len(buffer) != expected:
        raise ValueError(
            f"Buffer holds {len(buffer)} bytes, expected {expected} for {width}x{height} RGBA"
        )

    if expected == 0:
        return Image.new("RGBA", (width, height))

    return Image.frombytes("RGBA", (width, height), bytes(buffer))


def save_rgba(
    buffer: bytes,
    size: Tuple[int, int],
    file_path: PathLike,
    format: Optional[str] = None,
) -> Path:
    """
    Encode a rendered RGBA buffer and save it to disk.

    Args:
        buffer: Row-major RGBA bytes, as returned by render()
        size: (width, height) of the buffer
        file_path: Destination path; parent directories are created
        format: Pillow format name (default: from the extension, else PNG)

    Returns:
        Path the image was written to
    """
    file_path = Path(file_path)
    file_path.parent.mkdir(parents=True, exist_ok=True)

    if format is None and not file_path.suffix:
        format = DEFAULT_OUTPUT_FORMAT

    encode_rgba(buffer, size).save(file_path, format=format)
    logger.info(f"Saved {size[0]}x{size[1]} image to {file_path}")
    return file_path
