"""
Implements :class:`.PixelBuffer` and :class:`.Mask`, the two in-memory image
representations every pipeline stage reads and writes.

Both classes copy the data they are constructed from and mark the copy
read-only, so a stage can never modify the buffer it received and no two
stages share storage.
"""

from __future__ import annotations

import numpy as np

from .exceptions import InvalidImageError


def _frozen_copy(array: np.ndarray) -> np.ndarray:
    """Returns a contiguous, read-only uint8 copy of the given array."""
    data = np.array(array, dtype=np.uint8, copy=True, order="C")
    data.flags.writeable = False
    return data


class PixelBuffer:
    """
    A width x height grid of straight (non-premultiplied) RGBA samples.

    The samples are stored row-major in a numpy array of shape (H, W, 4)
    with dtype uint8.
    """

    __slots__ = ("_pixels",)

    def __init__(self, pixels: np.ndarray):
        """
        :param pixels: RGBA data of shape (height, width, 4). Values outside
            of 0..255 are clipped before conversion to uint8.

        Raises an InvalidImageError if the array is not RGBA or has no area.
        """
        pixels = np.asarray(pixels)
        if pixels.ndim != 3 or pixels.shape[2] != 4:
            raise InvalidImageError(
                f"Expected RGBA data of shape (H, W, 4), got {pixels.shape}"
            )
        if pixels.shape[0] == 0 or pixels.shape[1] == 0:
            raise InvalidImageError(
                f"Image has zero area ({pixels.shape[1]}x{pixels.shape[0]})"
            )
        if pixels.dtype != np.uint8:
            pixels = np.clip(pixels, 0, 255)
        self._pixels = _frozen_copy(pixels)

    @classmethod
    def from_array(cls, array: np.ndarray) -> PixelBuffer:
        """
        Creates a buffer from gray, RGB or RGBA pixel data.

        :param array: Array of shape (H, W), (H, W, 3) or (H, W, 4). Gray data
            is replicated into the color channels, missing alpha is opaque.
        :return: The new buffer
        """
        array = np.asarray(array)
        if array.ndim == 2:
            array = np.repeat(array[:, :, np.newaxis], 3, axis=2)
        if array.ndim == 3 and array.shape[2] == 3:
            alpha = np.full((*array.shape[:2], 1), 255, dtype=array.dtype)
            array = np.concatenate([array, alpha], axis=2)
        return cls(array)

    @classmethod
    def blank(cls, width: int, height: int) -> PixelBuffer:
        """Creates a fully transparent buffer of the given size."""
        return cls(np.zeros((height, width, 4), dtype=np.uint8))

    @property
    def pixels(self) -> np.ndarray:
        """The read-only (H, W, 4) pixel array."""
        return self._pixels

    @property
    def width(self) -> int:
        return self._pixels.shape[1]

    @property
    def height(self) -> int:
        return self._pixels.shape[0]

    @property
    def size(self) -> tuple[int, int]:
        """The buffer's size as (width, height)."""
        return self.width, self.height

    @property
    def alpha(self) -> np.ndarray:
        """The read-only (H, W) alpha plane."""
        return self._pixels[:, :, 3]

    def pixel(self, x: int, y: int) -> tuple[int, int, int, int]:
        """Returns the RGBA quadruple at (x, y)."""
        r, g, b, a = self._pixels[y, x]
        return int(r), int(g), int(b), int(a)

    def to_array(self) -> np.ndarray:
        """Returns a writable copy of the pixel data."""
        return self._pixels.copy()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        return np.array_equal(self._pixels, other._pixels)

    def __repr__(self) -> str:
        return f"PixelBuffer(width={self.width}, height={self.height})"


class Mask:
    """
    A width x height grid of single-byte coverage values (0..255).

    A mask describes how much shadow (or shape) exists at each position and
    is independent of the buffer it was derived from.
    """

    __slots__ = ("_values",)

    def __init__(self, values: np.ndarray):
        """
        :param values: Coverage data of shape (height, width).

        Raises an InvalidImageError if the array is not 2D or has no area.
        """
        values = np.asarray(values)
        if values.ndim != 2:
            raise InvalidImageError(f"Expected a 2D mask, got shape {values.shape}")
        if values.shape[0] == 0 or values.shape[1] == 0:
            raise InvalidImageError(
                f"Mask has zero area ({values.shape[1]}x{values.shape[0]})"
            )
        if values.dtype != np.uint8:
            values = np.clip(values, 0, 255)
        self._values = _frozen_copy(values)

    @property
    def values(self) -> np.ndarray:
        """The read-only (H, W) coverage array."""
        return self._values

    @property
    def width(self) -> int:
        return self._values.shape[1]

    @property
    def height(self) -> int:
        return self._values.shape[0]

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height

    def value(self, x: int, y: int) -> int:
        return int(self._values[y, x])

    def total(self) -> int:
        """Sum of all coverage values, the mask's energy."""
        return int(self._values.sum(dtype=np.int64))

    def to_array(self) -> np.ndarray:
        return self._values.copy()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Mask):
            return NotImplemented
        return np.array_equal(self._values, other._values)

    def __repr__(self) -> str:
        return f"Mask(width={self.width}, height={self.height})"
