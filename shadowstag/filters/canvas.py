"""Canvas expansion so the shadow is not clipped at the image border."""

from dataclasses import dataclass
from typing import ClassVar

import numpy as np

from ..buffer import PixelBuffer
from ..config import settings
from ..exceptions import ArithmeticOverflowError
from ..params import ShadowParams
from .base import BaseFilter
from .blur import blur_extent


@dataclass(frozen=True)
class Expansion:
    """How much an effect expands the canvas."""
    left: int = 0
    top: int = 0
    right: int = 0
    bottom: int = 0

    @property
    def is_empty(self) -> bool:
        return not (self.left or self.top or self.right or self.bottom)


def compute_expansion(params: ShadowParams) -> Expansion:
    """
    Calculate the expansion needed for the shadow.

    Spread and blur grow the shadow in every direction, the offset moves it
    towards one side.
    """
    extent = params.spread + blur_extent(params.blur)
    return Expansion(
        left=max(0, extent - params.offset_x),
        top=max(0, extent - params.offset_y),
        right=max(0, extent + params.offset_x),
        bottom=max(0, extent + params.offset_y),
    )


def expand_canvas(buffer: PixelBuffer, expansion: Expansion,
                  max_pixels: int | None = None) -> PixelBuffer:
    """
    Pads the image with transparent pixels.

    :param buffer: The image
    :param expansion: Pixels to add on each side
    :param max_pixels: Maximum pixel count of the result,
        ``settings.MAX_CANVAS_PIXELS`` by default
    :return: The padded image; the source lands at (left, top)
    """
    if max_pixels is None:
        max_pixels = settings.MAX_CANVAS_PIXELS
    new_width = buffer.width + expansion.left + expansion.right
    new_height = buffer.height + expansion.top + expansion.bottom
    if new_width * new_height > max_pixels:
        raise ArithmeticOverflowError(
            f"Expanded canvas {new_width}x{new_height} exceeds the limit of {max_pixels} pixels"
        )
    if expansion.is_empty:
        return PixelBuffer(buffer.pixels)
    padded = np.pad(
        buffer.pixels,
        ((expansion.top, expansion.bottom), (expansion.left, expansion.right), (0, 0)),
        mode='constant',
        constant_values=0,
    )
    return PixelBuffer(padded)


class CanvasExpander(BaseFilter):
    """Transparent border large enough to hold the whole shadow."""

    filter_type: ClassVar[str] = "expand_canvas"
    name: ClassVar[str] = "Expand Canvas"
    description: ClassVar[str] = "Pad the image so spread, blur and offset fit"

    params: ShadowParams = ShadowParams()

    @property
    def expansion(self) -> Expansion:
        return compute_expansion(self.params)

    def apply(self, buffer: PixelBuffer) -> PixelBuffer:
        return expand_canvas(buffer, self.expansion)
