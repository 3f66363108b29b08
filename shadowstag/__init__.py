"""
ShadowStag - rounded corners and drop shadows for raster images.

Quick start:
    >>> from shadowstag import PixelBuffer, ShadowPipeline
    >>> pipeline = ShadowPipeline.from_options(offset="10,10", radius=8, spread=4, blur=5, alpha=150)
    >>> result = pipeline.run(PixelBuffer.from_array(pixels))
    >>> png = encode_png(result.image)
"""

from .buffer import PixelBuffer, Mask
from .codec import decode_image, encode_png
from .exceptions import (
    ShadowStagError,
    InvalidImageError,
    InvalidParamsError,
    ArithmeticOverflowError,
)
from .params import ShadowParams, CornerParams
from .pipeline import ShadowPipeline, PipelineResult

__all__ = [
    # Buffers
    "PixelBuffer",
    "Mask",
    # Parameters
    "ShadowParams",
    "CornerParams",
    # Pipeline
    "ShadowPipeline",
    "PipelineResult",
    # Codec
    "decode_image",
    "encode_png",
    # Errors
    "ShadowStagError",
    "InvalidImageError",
    "InvalidParamsError",
    "ArithmeticOverflowError",
]

__version__ = "0.1.0"
