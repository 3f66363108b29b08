"""
ShadowPipeline for rounding an image and adding a drop shadow.

The stages always run in the same order:

1. Expand the canvas (optional) so spread, blur and offset fit
2. Extract the alpha channel as coverage mask
3. Dilate the mask by the spread radius
4. Blur the mask
5. Paint the offset shadow beneath the image
6. Round the corners of the composite

Each stage returns a new buffer or mask; nothing is modified in place and no
state survives between runs.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable

from pydantic import StrictBool, TypeAdapter, ValidationError

from .buffer import PixelBuffer
from .config import settings
from .exceptions import ArithmeticOverflowError, InvalidParamsError
from .filters import (
    AlphaMaskExtractor,
    BaseFilter,
    BoxBlur,
    CanvasExpander,
    CornerRounder,
    Dilator,
    Expansion,
    ShadowCompositor,
)
from .params import CornerParams, ShadowParams

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    """Result of running the pipeline."""
    image: PixelBuffer  # Output image (may be larger than input)
    offset_x: int = 0  # X offset of output relative to input origin
    offset_y: int = 0  # Y offset of output relative to input origin


@dataclass(frozen=True)
class ShadowPipeline:
    """Rounded corners plus drop shadow, as one fixed chain of stages.

    Example:
        >>> pipeline = ShadowPipeline.from_options(offset="10,10", blur=3, radius=8)
        >>> result = pipeline.run(PixelBuffer.from_array(pixels))
        >>> result.image.size
    """
    shadow: ShadowParams = field(default_factory=ShadowParams)
    corners: CornerParams = field(default_factory=CornerParams)
    expand_canvas: bool = True

    @classmethod
    def from_options(
        cls,
        offset: tuple[int, int] | str | None = None,
        radius: int | None = None,
        spread: int | None = None,
        blur: int | None = None,
        alpha: int | None = None,
        color: Any = None,
        expand_canvas: bool | None = None,
    ) -> ShadowPipeline:
        """
        Builds a pipeline from loose option values.

        Options left at None fall back to the application settings.

        :param offset: Shadow offset as (x, y) or ``"x,y"``
        :param radius: Corner radius
        :param spread: Spread (dilation) radius
        :param blur: Blur radius
        :param alpha: Shadow opacity, 0..255
        :param color: Shadow color as hex string or RGB tuple
        :param expand_canvas: Whether to grow the canvas to fit the shadow
        :return: The configured pipeline

        Raises an InvalidParamsError for values out of range.
        """
        shadow = ShadowParams.create(
            offset=offset if offset is not None else (settings.OFFSET_X, settings.OFFSET_Y),
            spread=spread if spread is not None else settings.SPREAD,
            blur=blur if blur is not None else settings.BLUR,
            alpha=alpha if alpha is not None else settings.SHADOW_ALPHA,
            color=color if color is not None else settings.SHADOW_COLOR,
        )
        corners = CornerParams.create(
            radius=radius if radius is not None else settings.CORNER_RADIUS,
        )
        if expand_canvas is None:
            expand_canvas = settings.EXPAND_CANVAS
        return cls(shadow=shadow, corners=corners, expand_canvas=expand_canvas)

    @property
    def expansion(self) -> Expansion:
        """The canvas growth this pipeline applies."""
        if not self.expand_canvas:
            return Expansion()
        return CanvasExpander(params=self.shadow).expansion

    def stages(self) -> list[BaseFilter]:
        """The configured stages in execution order."""
        stages: list[BaseFilter] = []
        if self.expand_canvas:
            stages.append(CanvasExpander(params=self.shadow))
        stages.extend([
            AlphaMaskExtractor(),
            Dilator(radius=self.shadow.spread),
            BoxBlur(radius=self.shadow.blur),
            ShadowCompositor(params=self.shadow),
            CornerRounder(params=self.corners),
        ])
        return stages

    @staticmethod
    def _timed(stage: BaseFilter, fn: Callable[..., Any], *inputs: Any) -> Any:
        start = time.perf_counter()
        result = fn(*inputs)
        logger.debug(f"{stage.name}: {(time.perf_counter() - start) * 1000:.1f} ms")
        return result

    def run(self, buffer: PixelBuffer) -> PipelineResult:
        """
        Applies all stages to the image.

        :param buffer: The decoded source image
        :return: The result image and its offset relative to the source
        """
        logger.debug(
            f"Running pipeline on {buffer.width}x{buffer.height} image: "
            f"shadow={self.shadow!r}, corners={self.corners!r}, expand={self.expand_canvas}"
        )
        expansion = self.expansion
        image = buffer
        mask = None
        try:
            for stage in self.stages():
                if isinstance(stage, AlphaMaskExtractor):
                    mask = self._timed(stage, stage.apply, image)
                elif isinstance(stage, (Dilator, BoxBlur)):
                    mask = self._timed(stage, stage.apply, mask)
                elif isinstance(stage, ShadowCompositor):
                    image = self._timed(stage, stage.apply, image, mask)
                else:
                    image = self._timed(stage, stage.apply, image)
        except MemoryError as e:
            raise ArithmeticOverflowError(
                f"Not enough memory to process a {buffer.width}x{buffer.height} image "
                f"with spread {self.shadow.spread} and blur {self.shadow.blur}"
            ) from e

        logger.debug(f"Pipeline produced {image.width}x{image.height} image")
        return PipelineResult(image=image, offset_x=-expansion.left, offset_y=-expansion.top)

    def to_dict(self) -> dict[str, Any]:
        """Serialize pipeline to dictionary."""
        return {
            'type': 'ShadowPipeline',
            'expandCanvas': self.expand_canvas,
            'shadow': self.shadow.model_dump(mode='json'),
            'corners': self.corners.model_dump(mode='json'),
            'filters': [stage.to_dict() for stage in self.stages()],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ShadowPipeline:
        """Deserialize pipeline from dictionary."""
        try:
            shadow = ShadowParams.model_validate(data.get('shadow', {}))
            corners = CornerParams.model_validate(data.get('corners', {}))
            expand_canvas = TypeAdapter(StrictBool).validate_python(data.get('expandCanvas', True))
        except ValidationError as e:
            raise InvalidParamsError(f"Invalid pipeline definition: {e}") from e
        return cls(
            shadow=shadow,
            corners=corners,
            expand_canvas=expand_canvas,
        )
