"""
Pytest fixtures for ShadowStag tests
"""

import numpy as np
import pytest

from shadowstag import Mask, PixelBuffer


def make_square_image(width=100, height=100, margin=0, color=(255, 255, 255)):
    """Create an RGBA image with an opaque square inset by margin."""
    img = np.zeros((height, width, 4), dtype=np.uint8)
    img[margin:height - margin, margin:width - margin] = [*color, 255]
    return img


def make_disk_mask(size, radius, value=255):
    """Create a square mask holding a centered disk."""
    c = size // 2
    y, x = np.ogrid[:size, :size]
    values = np.zeros((size, size), dtype=np.uint8)
    values[(x - c) ** 2 + (y - c) ** 2 <= radius ** 2] = value
    return Mask(values)


@pytest.fixture
def white_square() -> PixelBuffer:
    """A fully opaque 100x100 white image."""
    return PixelBuffer(make_square_image(100, 100))


@pytest.fixture
def red_square() -> PixelBuffer:
    """A 100x100 transparent image with a red square in the center."""
    return PixelBuffer(make_square_image(100, 100, margin=25, color=(255, 0, 0)))


@pytest.fixture
def transparent_image() -> PixelBuffer:
    """A fully transparent 60x40 image."""
    return PixelBuffer.blank(60, 40)


@pytest.fixture
def single_point_mask() -> Mask:
    """A 41x41 mask with one fully covered pixel in the middle."""
    values = np.zeros((41, 41), dtype=np.uint8)
    values[20, 20] = 255
    return Mask(values)
