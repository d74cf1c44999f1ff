"""
Pytest configuration and shared fixtures for Nied tests.

This module provides shared test fixtures and configuration
used across multiple test modules.
"""

import pytest
from PIL import Image

from NI_Libs.ColorLib.color import Color


@pytest.fixture
def temp_output_dir(tmp_path):
    """
    Provide a temporary directory for rendered files.

    Args:
        tmp_path: Pytest's built-in temporary directory fixture

    Returns:
        Path object pointing to a temporary directory
    """
    return tmp_path


@pytest.fixture
def sample_rgba_colors():
    """
    Provide a list of sample RGBA byte tuples for testing.

    Returns:
        List of (R, G, B, A) tuples with common test colors
    """
    return [
        (255, 0, 0, 255),    # Red
        (0, 255, 0, 255),    # Green
        (0, 0, 255, 255),    # Blue
        (255, 255, 255, 128),  # Half-transparent white
        (0, 0, 0, 0),        # Transparent
    ]


@pytest.fixture
def gradient_image():
    """
    Provide a 4x3 RGBA Pillow image whose pixels encode their coordinates.

    Pixel (x, y) is (x * 60, y * 80, 10, 255).
    """
    image = Image.new("RGBA", (4, 3))
    for y in range(3):
        for x in range(4):
            image.putpixel((x, y), (x * 60, y * 80, 10, 255))
    return image


@pytest.fixture
def opaque_red():
    return Color(1.0, 0.0, 0.0, 1.0)
