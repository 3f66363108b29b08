"""
Shadow compositing.

The shadow layer is a solid color whose opacity follows the (spread and
blurred) mask, shifted by the shadow offset. The original image is then
composited over it with straight-alpha src-over blending, so the image always
stays visible on top of its own shadow.
"""

import logging
from typing import ClassVar

import numpy as np

from ..buffer import Mask, PixelBuffer
from ..exceptions import InvalidImageError
from ..params import ShadowParams
from .base import BaseFilter

logger = logging.getLogger(__name__)


def shift_mask(values: np.ndarray, dx: int, dy: int) -> np.ndarray:
    """
    Moves coverage by (dx, dy); result(x, y) = values(x - dx, y - dy).

    Positions read from outside of the mask become zero.
    """
    height, width = values.shape
    shifted = np.zeros_like(values)
    if abs(dx) >= width or abs(dy) >= height:
        return shifted
    src_x0, dst_x0 = max(0, -dx), max(0, dx)
    src_y0, dst_y0 = max(0, -dy), max(0, dy)
    w = width - abs(dx)
    h = height - abs(dy)
    shifted[dst_y0:dst_y0 + h, dst_x0:dst_x0 + w] = values[src_y0:src_y0 + h, src_x0:src_x0 + w]
    return shifted


def alpha_over(src: np.ndarray, dst: np.ndarray) -> np.ndarray:
    """
    Straight-alpha src-over-dst blending of two uint8 RGBA arrays.

    :param src: Foreground pixels (H, W, 4)
    :param dst: Background pixels (H, W, 4)
    :return: Blended uint8 pixels; color is zero where the result is transparent
    """
    src_f = src.astype(np.float64) / 255.0
    dst_f = dst.astype(np.float64) / 255.0
    sa = src_f[:, :, 3:4]
    da = dst_f[:, :, 3:4] * (1.0 - sa)
    out_a = sa + da
    with np.errstate(divide='ignore', invalid='ignore'):
        rgb = np.where(out_a > 0, (src_f[:, :, :3] * sa + dst_f[:, :, :3] * da) / out_a, 0.0)
    out = np.concatenate([rgb, out_a], axis=2)
    return np.clip(np.rint(out * 255.0), 0, 255).astype(np.uint8)


def composite_shadow(buffer: PixelBuffer, mask: Mask, params: ShadowParams) -> PixelBuffer:
    """
    Paints the offset shadow beneath the image.

    :param buffer: The original image
    :param mask: Coverage of the shadow shape, same size as the image
    :param params: Shadow offset, opacity and color
    :return: The composited image, same size as the input
    """
    if mask.size != buffer.size:
        raise InvalidImageError(
            f"Mask size {mask.width}x{mask.height} does not match "
            f"image size {buffer.width}x{buffer.height}"
        )
    coverage = shift_mask(mask.values, params.offset_x, params.offset_y).astype(np.uint32)
    shadow_alpha = (coverage * params.alpha + 127) // 255

    shadow = np.empty((buffer.height, buffer.width, 4), dtype=np.uint8)
    shadow[:, :, :3] = params.color
    shadow[:, :, 3] = np.minimum(shadow_alpha, 255).astype(np.uint8)

    logger.debug(
        f"Compositing shadow at offset {params.offset} "
        f"(alpha={params.alpha}, color={params.color_hex})"
    )
    return PixelBuffer(alpha_over(buffer.pixels, shadow))


class ShadowCompositor(BaseFilter):
    """Solid-color shadow layer beneath the original image."""

    filter_type: ClassVar[str] = "shadow_composite"
    name: ClassVar[str] = "Shadow Composite"
    description: ClassVar[str] = "Paint the shadow mask beneath the image"

    params: ShadowParams = ShadowParams()

    def apply(self, buffer: PixelBuffer, mask: Mask) -> PixelBuffer:
        return composite_shadow(buffer, mask, self.params)
