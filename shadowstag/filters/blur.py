"""
Separable box blur approximating a Gaussian.

The blur radius is interpreted as the Gaussian's standard deviation. Three box
passes whose widths are chosen by :func:`box_sizes_for_gauss` yield a kernel
with (nearly) the same variance; every pass runs along the rows and then along
the columns. Sums are accumulated as int64 so repeated passes do not drift.
"""

import logging
import math
from typing import ClassVar

import numpy as np
from pydantic import Field

from ..buffer import Mask
from ..exceptions import InvalidParamsError
from .base import BaseFilter

logger = logging.getLogger(__name__)

BOX_PASSES = 3
"Number of box passes used to approximate the Gaussian"


def box_sizes_for_gauss(sigma: float, passes: int = BOX_PASSES) -> list[int]:
    """
    Odd box widths whose successive application approximates a Gaussian.

    :param sigma: Standard deviation of the Gaussian
    :param passes: Number of box passes
    :return: One odd width per pass, smaller widths first
    """
    if sigma <= 0:
        return [1] * passes
    w_ideal = math.sqrt(12 * sigma * sigma / passes + 1)
    wl = int(math.floor(w_ideal))
    if wl % 2 == 0:
        wl -= 1
    wu = wl + 2
    m_ideal = (12 * sigma * sigma - passes * wl * wl - 4 * passes * wl - 3 * passes) / (-4 * wl - 4)
    m = round(m_ideal)
    return [wl if i < m else wu for i in range(passes)]


def blur_extent(radius: int) -> int:
    """How far (in pixels) the blur spreads coverage beyond a shape's edge."""
    return sum((size - 1) // 2 for size in box_sizes_for_gauss(radius))


def _box_pass_rows(values: np.ndarray, half: int) -> np.ndarray:
    """Rounded mean over [x - half, x + half] along each row, zero outside."""
    size = 2 * half + 1
    padded = np.pad(values, ((0, 0), (half + 1, half)), mode='constant', constant_values=0)
    csum = np.cumsum(padded, axis=1, dtype=np.int64)
    sums = csum[:, size:] - csum[:, :-size]
    return (sums + size // 2) // size


def box_blur(mask: Mask, radius: int) -> Mask:
    """
    Blurs the mask.

    :param mask: The input mask
    :param radius: Blur radius (Gaussian sigma), 0 returns an equal copy
    :return: The blurred mask, same size as the input
    """
    if radius < 0:
        raise InvalidParamsError(f"Blur radius must not be negative, got {radius}")
    if radius == 0:
        return Mask(mask.values)

    sizes = box_sizes_for_gauss(radius)
    values = mask.values.astype(np.int64)
    for size in sizes:
        half = (size - 1) // 2
        if half == 0:
            continue
        values = _box_pass_rows(values, half)
        values = _box_pass_rows(values.T, half).T
        np.clip(values, 0, 255, out=values)

    logger.debug(f"Blurred {mask.width}x{mask.height} mask with radius {radius} (boxes {sizes})")
    return Mask(values.astype(np.uint8))


class BoxBlur(BaseFilter):
    """Soft shadow falloff via repeated separable box passes."""

    filter_type: ClassVar[str] = "box_blur"
    name: ClassVar[str] = "Box Blur"
    description: ClassVar[str] = "Approximate a Gaussian blur with three box passes"

    radius: int = Field(default=0, ge=0)

    def apply(self, mask: Mask) -> Mask:
        return box_blur(mask, self.radius)
