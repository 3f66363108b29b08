"""Anti-aliased rounded corners."""

import logging
from typing import ClassVar

import numpy as np

from ..buffer import PixelBuffer
from ..exceptions import InvalidParamsError
from ..params import CornerParams
from .base import BaseFilter

logger = logging.getLogger(__name__)


def rounded_rect_coverage(width: int, height: int, radius: float) -> np.ndarray:
    """
    Per-pixel coverage of a rounded rectangle spanning the whole canvas.

    The signed distance of every pixel center to the rectangle's outline is
    mapped to coverage as clamp(0.5 - d, 0, 1), which gives a one pixel wide
    anti-aliased border. The radius is clamped to min(width, height) / 2.

    :param width: Canvas width
    :param height: Canvas height
    :param radius: Corner radius in pixels
    :return: float64 coverage of shape (height, width) in 0..1
    """
    radius = min(float(radius), min(width, height) / 2.0)
    half_w = width / 2.0
    half_h = height / 2.0
    xs = np.abs(np.arange(width, dtype=np.float64) + 0.5 - half_w) - (half_w - radius)
    ys = np.abs(np.arange(height, dtype=np.float64) + 0.5 - half_h) - (half_h - radius)
    qx = xs[np.newaxis, :]
    qy = ys[:, np.newaxis]
    outside = np.hypot(np.maximum(qx, 0.0), np.maximum(qy, 0.0))
    inside = np.minimum(np.maximum(qx, qy), 0.0)
    distance = outside + inside - radius
    return np.clip(0.5 - distance, 0.0, 1.0)


def round_corners(buffer: PixelBuffer, radius: int) -> PixelBuffer:
    """
    Clips the image to a rounded rectangle by scaling its alpha.

    :param buffer: The image to round
    :param radius: Corner radius, 0 returns a bit-identical copy
    :return: The rounded image
    """
    if radius < 0:
        raise InvalidParamsError(f"Corner radius must not be negative, got {radius}")
    if radius == 0:
        return PixelBuffer(buffer.pixels)

    coverage = rounded_rect_coverage(buffer.width, buffer.height, radius)
    pixels = buffer.to_array()
    alpha = np.rint(pixels[:, :, 3].astype(np.float64) * coverage)
    pixels[:, :, 3] = np.clip(alpha, 0, 255).astype(np.uint8)

    logger.debug(f"Rounded corners of {buffer.width}x{buffer.height} image with radius {radius}")
    return PixelBuffer(pixels)


class CornerRounder(BaseFilter):
    """Rounded-rectangle clip of the final image."""

    filter_type: ClassVar[str] = "round_corners"
    name: ClassVar[str] = "Round Corners"
    description: ClassVar[str] = "Clip the image to an anti-aliased rounded rectangle"

    params: CornerParams = CornerParams()

    def apply(self, buffer: PixelBuffer) -> PixelBuffer:
        return round_corners(buffer, self.params.radius)
