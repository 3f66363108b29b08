"""Morphological dilation ("spread") of coverage masks."""

import logging
from typing import ClassVar

import numpy as np
from pydantic import Field

from ..buffer import Mask
from ..exceptions import InvalidParamsError
from .base import BaseFilter

logger = logging.getLogger(__name__)


def octagon_half_widths(radius: int) -> list[int]:
    """
    Half-width of every row of the octagon used as structuring element.

    The octagon holds all integer offsets with |dx| <= r, |dy| <= r and
    |dx| + |dy| <= r + ceil(r / 2). It is symmetric in all eight directions,
    and two consecutive dilations by r1 and r2 cover at least one dilation by
    r1 + r2.

    :param radius: The octagon radius
    :return: 2r + 1 half-widths for dy = -r..r
    """
    diagonal = radius + (radius + 1) // 2
    return [min(radius, diagonal - abs(dy)) for dy in range(-radius, radius + 1)]


def _max_levels(rows: np.ndarray, lengths: set[int]) -> dict[int, np.ndarray]:
    """
    Level k holds the max over each horizontal run of 2**k values.

    Only the levels needed for the given run lengths are kept.
    """
    needed = {length.bit_length() - 1 for length in lengths}
    longest = max(lengths)
    levels: dict[int, np.ndarray] = {}
    level = rows
    span = 1
    k = 0
    while True:
        if k in needed:
            levels[k] = level
        if span * 2 > longest:
            return levels
        level = np.maximum(level[:, :-span], level[:, span:])
        span *= 2
        k += 1


def _horizontal_max(levels: dict[int, np.ndarray], half_width: int, pad: int, width: int) -> np.ndarray:
    """Max over [x - half_width, x + half_width] for every unpadded column x."""
    length = 2 * half_width + 1
    k = length.bit_length() - 1
    span = 1 << k
    start = pad - half_width
    table = levels[k]
    left = table[:, start:start + width]
    right = table[:, start + length - span:start + length - span + width]
    return np.maximum(left, right)


def dilate(mask: Mask, radius: int) -> Mask:
    """
    Grows the mask outward by the given radius.

    Each output value is the maximum input value within the octagon of the
    given radius around it. Positions outside of the mask count as zero
    coverage and the output keeps the input's dimensions.

    Memory use is bounded by the mask size: a radius beyond the mask's
    extent produces the same result as the extent itself.

    :param mask: The input mask
    :param radius: The spread radius, 0 returns an equal copy
    :return: The dilated mask
    """
    if radius < 0:
        raise InvalidParamsError(f"Spread radius must not be negative, got {radius}")
    if radius == 0:
        return Mask(mask.values)

    height, width = mask.height, mask.width
    # From width + height on, the octagon covers every offset inside the mask
    radius = min(radius, width + height)
    pad = min(radius, width - 1)
    reach = min(radius, height - 1)

    half_widths = octagon_half_widths(radius)
    offsets_by_width: dict[int, list[int]] = {}
    for dy in range(-reach, reach + 1):
        half_width = min(half_widths[dy + radius], pad)
        offsets_by_width.setdefault(half_width, []).append(dy)

    padded = np.pad(mask.values, ((0, 0), (pad, pad)), mode='constant', constant_values=0)
    levels = _max_levels(padded, {2 * half_width + 1 for half_width in offsets_by_width})

    result = np.zeros((height, width), dtype=np.uint8)
    for half_width, offsets in offsets_by_width.items():
        rows = _horizontal_max(levels, half_width, pad, width)
        for dy in offsets:
            top, bottom = max(0, -dy), min(height, height - dy)
            np.maximum(result[top:bottom], rows[top + dy:bottom + dy], out=result[top:bottom])

    logger.debug(f"Dilated {width}x{height} mask by {radius}px")
    return Mask(result)


class Dilator(BaseFilter):
    """Spread: grows the shadow shape before it gets blurred."""

    filter_type: ClassVar[str] = "spread"
    name: ClassVar[str] = "Spread"
    description: ClassVar[str] = "Dilate the coverage mask by an octagon of the given radius"

    radius: int = Field(default=0, ge=0)

    def apply(self, mask: Mask) -> Mask:
        return dilate(mask, self.radius)
