"""
Decoding and encoding of image byte streams.

The pipeline itself never touches bytes: :func:`decode_image` turns encoded
data into a :class:`.PixelBuffer` and :func:`encode_png` turns the result back
into PNG data. PNG is the only encode target.
"""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import BinaryIO

import PIL.Image
import filetype
import numpy as np

from .buffer import PixelBuffer
from .exceptions import InvalidImageError

logger = logging.getLogger(__name__)


def _detect_mime_type(data: bytes) -> str:
    """Guess the mime type of encoded image data, for diagnostics only."""
    kind = filetype.guess(data)
    return kind.mime if kind is not None else "application/octet-stream"


def decode_image(data: bytes) -> PixelBuffer:
    """
    Decodes an image into an RGBA buffer.

    :param data: Encoded image data in any format Pillow can read
    :return: The decoded buffer

    Raises an InvalidImageError if the data is empty or cannot be decoded.
    """
    if not data:
        raise InvalidImageError(
            "No input data received. Make sure you're piping an image to this program."
        )
    logger.debug(f"Input data size: {len(data)} bytes, guessed type: {_detect_mime_type(data)}")
    try:
        with PIL.Image.open(io.BytesIO(data)) as image:
            image.load()
            rgba = image.convert("RGBA")
    except (PIL.UnidentifiedImageError, OSError, ValueError) as e:
        raise InvalidImageError(f"Failed to decode image: {e}") from e
    logger.debug(f"Decoded {rgba.width}x{rgba.height} image")
    return PixelBuffer(np.asarray(rgba))


def encode_png(buffer: PixelBuffer) -> bytes:
    """
    Encodes the buffer as 8-bit RGBA PNG.

    :param buffer: The image to encode
    :return: The PNG data
    """
    output = io.BytesIO()
    PIL.Image.fromarray(buffer.to_array()).save(output, format="PNG")
    return output.getvalue()


def read_input(path: str | Path | None, stream: BinaryIO) -> bytes:
    """
    Reads the raw input from a file or, when no path is given, the stream.

    Raises an InvalidImageError if the file cannot be read.
    """
    if path is None:
        data = stream.read()
        logger.debug(f"Read {len(data)} bytes from stdin")
        return data
    try:
        return Path(path).read_bytes()
    except OSError as e:
        raise InvalidImageError(f"Failed to read input file {path}: {e}") from e


def write_output(data: bytes, path: str | Path | None, stream: BinaryIO) -> None:
    """Writes the encoded result to a file or, when no path is given, the stream."""
    if path is None:
        stream.write(data)
        stream.flush()
        return
    Path(path).write_bytes(data)
