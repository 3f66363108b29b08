"""Alpha mask extraction."""

from typing import ClassVar

from ..buffer import Mask, PixelBuffer
from .base import BaseFilter


def extract_alpha_mask(buffer: PixelBuffer) -> Mask:
    """
    Derives the occupancy mask of an image from its alpha channel.

    :param buffer: The source image
    :return: A mask of the same size where mask(x, y) = alpha(x, y)
    """
    return Mask(buffer.alpha)


class AlphaMaskExtractor(BaseFilter):
    """Single-channel occupancy mask from the alpha channel."""

    filter_type: ClassVar[str] = "alpha_mask"
    name: ClassVar[str] = "Alpha Mask"
    description: ClassVar[str] = "Extract the alpha channel as coverage mask"

    def apply(self, buffer: PixelBuffer) -> Mask:
        return extract_alpha_mask(buffer)
