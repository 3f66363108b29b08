"""
ShadowStag pipeline stages.

Every stage is a frozen pydantic model holding its parameters with a pure
``apply()`` that returns a new buffer or mask, plus a module-level function
doing the actual work:

    - AlphaMaskExtractor / extract_alpha_mask: alpha channel as coverage mask
    - Dilator / dilate: spread the mask by an octagon
    - BoxBlur / box_blur: separable Gaussian approximation
    - ShadowCompositor / composite_shadow: offset shadow beneath the image
    - CornerRounder / round_corners: anti-aliased rounded-rectangle clip
    - CanvasExpander / expand_canvas: transparent border for the shadow
"""

from .base import BaseFilter
from .mask import AlphaMaskExtractor, extract_alpha_mask
from .morphology import Dilator, dilate, octagon_half_widths
from .blur import BoxBlur, box_blur, box_sizes_for_gauss, blur_extent
from .composite import ShadowCompositor, composite_shadow, alpha_over, shift_mask
from .corners import CornerRounder, round_corners, rounded_rect_coverage
from .canvas import CanvasExpander, Expansion, compute_expansion, expand_canvas

__all__ = [
    # Base
    "BaseFilter",
    # Stages
    "AlphaMaskExtractor",
    "Dilator",
    "BoxBlur",
    "ShadowCompositor",
    "CornerRounder",
    "CanvasExpander",
    "Expansion",
    # Functions
    "extract_alpha_mask",
    "dilate",
    "octagon_half_widths",
    "box_blur",
    "box_sizes_for_gauss",
    "blur_extent",
    "composite_shadow",
    "alpha_over",
    "shift_mask",
    "round_corners",
    "rounded_rect_coverage",
    "compute_expansion",
    "expand_canvas",
]
