"""
Immutable effect parameters.

:class:`ShadowParams` and :class:`CornerParams` are built once at the
boundary (CLI, settings or library caller) and handed by reference to every
stage. They are frozen pydantic models, so no stage can change them.
"""

from typing import Any, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from .config import settings
from .exceptions import InvalidParamsError

RGB = Tuple[int, int, int]


def parse_offset(text: str) -> Tuple[int, int]:
    """
    Parses an offset in the form ``"x,y"``.

    :param text: The offset text, e.g. ``"-20,-20"``
    :return: The (x, y) tuple
    """
    parts = [part.strip() for part in str(text).split(",")]
    if len(parts) != 2:
        raise InvalidParamsError(f"Offset must have the form x,y, got {text!r}")
    try:
        return int(parts[0]), int(parts[1])
    except ValueError:
        raise InvalidParamsError(f"Offset components must be integers, got {text!r}") from None


def hex_to_rgb(hex_str: str) -> RGB:
    """Convert hex color string (#RRGGBB or RRGGBB) to RGB tuple (0-255)."""
    hex_str = hex_str.strip().lstrip('#')
    if len(hex_str) != 6:
        raise ValueError(f"Invalid hex color: {hex_str}")
    try:
        return (
            int(hex_str[0:2], 16),
            int(hex_str[2:4], 16),
            int(hex_str[4:6], 16),
        )
    except ValueError:
        raise ValueError(f"Invalid hex color: {hex_str}") from None


def rgb_to_hex(color: RGB) -> str:
    """Convert RGB tuple (0-255) to hex color string (#RRGGBB)."""
    return f"#{color[0]:02X}{color[1]:02X}{color[2]:02X}"


class EffectParams(BaseModel):
    """Common base of the frozen parameter models."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        extra='forbid',
    )

    @classmethod
    def create(cls, **values: Any):
        """
        Builds the parameters, reporting invalid values as InvalidParamsError.

        :param values: The raw parameter values
        :return: The validated, immutable parameters
        """
        try:
            return cls(**values)
        except ValidationError as e:
            raise InvalidParamsError(f"Invalid {cls.__name__}: {e}") from e


class ShadowParams(EffectParams):
    """
    Drop shadow configuration.

    Example:
        >>> params = ShadowParams(offset="10,10", blur=5, spread=2, alpha=150)
        >>> params.offset
        (10, 10)
    """

    offset_x: int = Field(default=0, alias='offsetX')
    offset_y: int = Field(default=0, alias='offsetY')
    blur: int = Field(default=0, ge=0)
    spread: int = Field(default=0, ge=0)
    alpha: int = Field(default=255, ge=0, le=255)
    color: RGB = (0, 0, 0)

    @model_validator(mode='before')
    @classmethod
    def _normalize(cls, data: Any) -> Any:
        """Split a combined offset and convert hex colors."""
        if isinstance(data, dict):
            data = dict(data)
            offset = data.pop('offset', None)
            if offset is not None:
                if isinstance(offset, str):
                    offset = parse_offset(offset)
                if not isinstance(offset, (tuple, list)) or len(offset) != 2:
                    raise ValueError(f"Offset must be a pair, got {offset!r}")
                data['offset_x'], data['offset_y'] = offset
            color = data.get('color')
            if isinstance(color, str):
                data['color'] = hex_to_rgb(color)
        return data

    @field_validator('offset_x', 'offset_y')
    @classmethod
    def _check_offset(cls, value: int) -> int:
        if abs(value) > settings.MAX_OFFSET:
            raise ValueError(f"Offset {value} exceeds the limit of {settings.MAX_OFFSET} pixels")
        return value

    @field_validator('color')
    @classmethod
    def _check_color(cls, value: RGB) -> RGB:
        if any(not 0 <= channel <= 255 for channel in value):
            raise ValueError(f"Color channels must be in 0..255, got {value}")
        return value

    @property
    def offset(self) -> Tuple[int, int]:
        return self.offset_x, self.offset_y

    @property
    def color_hex(self) -> str:
        return rgb_to_hex(self.color)


class CornerParams(EffectParams):
    """Rounded corner configuration. A radius of 0 disables rounding."""

    radius: int = Field(default=0, ge=0)
