"""
Image format conversion utilities.

Handles conversions between PixelBuffer and the formats used at the edges
of the engine:
- NumPy arrays (H, W) / (H, W, C)
- PIL Images (L / RGB)
- Base64 encoded PNG/JPEG strings
- Image files on disk (PNG/JPEG via Pillow)
- Grayscale/RGB channel conversion (OpenCV)

Codec work is delegated to Pillow; nothing here decodes or encodes pixels
itself.
"""

import base64
import binascii
import io
import logging
from pathlib import Path
from typing import Optional, Union

import cv2
import numpy as np
from PIL import Image, UnidentifiedImageError

from pixelkit.core.buffer import PixelBuffer
from pixelkit.core.constants import BufferConstants, CodecConstants

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class ImageDecodeError(ValueError):
    """Raised when bytes or a file cannot be decoded into an image."""


def buffer_to_numpy(buffer: PixelBuffer) -> np.ndarray:
    """
    Convert PixelBuffer to a NumPy array.

    Returns:
        (H, W) uint8 array for grayscale, (H, W, 3) for RGB (a copy)
    """
    array = np.array(buffer.as_array(), copy=True)
    if buffer.channels == BufferConstants.GRAY_CHANNELS:
        return np.ascontiguousarray(array[:, :, 0])
    return array


def numpy_to_buffer(array: np.ndarray) -> PixelBuffer:
    """
    Convert NumPy array to PixelBuffer.

    Four-channel arrays are reduced to RGB by dropping alpha.
    """
    if array.ndim == 3 and array.shape[2] == 4:
        array = cv2.cvtColor(array, cv2.COLOR_RGBA2RGB)
    return PixelBuffer.from_array(array)


def buffer_to_pil(buffer: PixelBuffer) -> Image.Image:
    """
    Convert PixelBuffer to PIL Image.

    Returns:
        PIL Image in "L" mode for grayscale, "RGB" mode otherwise
    """
    return Image.fromarray(buffer_to_numpy(buffer))


def pil_to_buffer(image: Image.Image, channels: Optional[int] = None) -> PixelBuffer:
    """
    Convert PIL Image to PixelBuffer.

    Args:
        image: PIL Image in any mode
        channels: Force 1 or 3 channels; None keeps grayscale images
            grayscale and converts everything else to RGB

    Returns:
        PixelBuffer
    """
    if channels is None:
        channels = BufferConstants.GRAY_CHANNELS if image.mode in ("L", "1") else BufferConstants.RGB_CHANNELS

    if channels == BufferConstants.GRAY_CHANNELS:
        image = image.convert("L")
    elif channels == BufferConstants.RGB_CHANNELS:
        image = image.convert("RGB")
    else:
        raise ValueError(f"Unsupported channel count: {channels} (expected 1 or 3)")

    return PixelBuffer.from_array(np.array(image))


def to_base64(
    buffer: PixelBuffer,
    format: str = CodecConstants.DEFAULT_FORMAT,
    quality: int = CodecConstants.DEFAULT_JPEG_QUALITY,
) -> str:
    """
    Encode PixelBuffer to a base64 string.

    Args:
        buffer: Input image
        format: Image format (PNG, JPEG)
        quality: JPEG quality (1-100, ignored for PNG)

    Returns:
        Base64 encoded string
    """
    try:
        return base64.b64encode(encode_image(buffer, format, quality)).decode("utf-8")
    except Exception as e:
        logger.error(f"Failed to convert image to base64: {e}")
        raise


def from_base64(base64_string: str, channels: Optional[int] = None) -> PixelBuffer:
    """
    Decode a base64 string into a PixelBuffer.

    Args:
        base64_string: Base64 encoded PNG/JPEG (a data URL prefix is accepted)
        channels: Force 1 or 3 channels (see pil_to_buffer)

    Raises:
        ImageDecodeError: If the string is not a decodable image
    """
    if "," in base64_string and base64_string.startswith("data:"):
        base64_string = base64_string.split(",", 1)[1]

    try:
        image_bytes = base64.b64decode(base64_string, validate=True)
    except (binascii.Error, ValueError) as e:
        logger.error(f"Failed to decode base64 image: {e}")
        raise ImageDecodeError(f"Invalid base64 data: {e}") from e

    return decode_image(image_bytes, channels)


def encode_image(
    buffer: PixelBuffer,
    format: str = CodecConstants.DEFAULT_FORMAT,
    quality: int = CodecConstants.DEFAULT_JPEG_QUALITY,
) -> bytes:
    """Encode PixelBuffer to PNG/JPEG bytes with Pillow."""
    image = buffer_to_pil(buffer)
    output = io.BytesIO()
    save_kwargs = {"format": format.upper()}

    if format.upper() == "JPEG":
        save_kwargs["quality"] = quality
        save_kwargs["optimize"] = True

    image.save(output, **save_kwargs)
    return output.getvalue()


def decode_image(image_bytes: bytes, channels: Optional[int] = None) -> PixelBuffer:
    """
    Decode PNG/JPEG bytes with Pillow.

    Raises:
        ImageDecodeError: If Pillow cannot identify the data
    """
    try:
        with Image.open(io.BytesIO(image_bytes)) as image:
            image.load()
            return pil_to_buffer(image, channels)
    except (UnidentifiedImageError, OSError) as e:
        logger.error(f"Failed to decode image: {e}")
        raise ImageDecodeError(f"Cannot decode image: {e}") from e


def read_image(path: PathLike, channels: Optional[int] = BufferConstants.RGB_CHANNELS) -> PixelBuffer:
    """
    Read a PNG or JPEG file.

    Args:
        path: File path
        channels: 1 or 3 to force a channel count, None to keep the file's

    Raises:
        FileNotFoundError: If the file does not exist
        ImageDecodeError: If the file is not a decodable image
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Image file not found: {path}")

    buffer = decode_image(path.read_bytes(), channels)
    logger.info(f"Read {path.name}: {buffer.width}x{buffer.height}x{buffer.channels}")
    return buffer


def write_image(buffer: PixelBuffer, path: PathLike, quality: int = CodecConstants.DEFAULT_JPEG_QUALITY) -> Path:
    """
    Write a PixelBuffer to disk; the format follows the file extension.

    Args:
        buffer: Image to write
        path: Destination (.png, .jpg or .jpeg)
        quality: JPEG quality (1-100)

    Returns:
        The written path
    """
    path = Path(path)
    format = CodecConstants.EXTENSION_FORMATS.get(path.suffix.lower())
    if format is None:
        raise ValueError(f"Unsupported image extension: {path.suffix or '(none)'}")
    if not CodecConstants.MIN_JPEG_QUALITY <= quality <= CodecConstants.MAX_JPEG_QUALITY:
        raise ValueError(f"JPEG quality must be between 1 and 100, got {quality}")

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(encode_image(buffer, format, quality))
    logger.info(f"Wrote {path.name}: {buffer.width}x{buffer.height}x{buffer.channels} ({format})")
    return path


def to_grayscale(buffer: PixelBuffer) -> PixelBuffer:
    """
    Ensure image is grayscale (convert from RGB if needed).

    Returns:
        Single-channel buffer (a copy when already grayscale)
    """
    if buffer.channels == BufferConstants.GRAY_CHANNELS:
        return buffer.copy()
    return PixelBuffer.from_array(cv2.cvtColor(buffer_to_numpy(buffer), cv2.COLOR_RGB2GRAY))


def to_rgb(buffer: PixelBuffer) -> PixelBuffer:
    """
    Ensure image is RGB (replicate the gray channel if needed).

    Returns:
        Three-channel buffer (a copy when already RGB)
    """
    if buffer.channels == BufferConstants.RGB_CHANNELS:
        return buffer.copy()
    return PixelBuffer.from_array(cv2.cvtColor(buffer_to_numpy(buffer), cv2.COLOR_GRAY2RGB))
