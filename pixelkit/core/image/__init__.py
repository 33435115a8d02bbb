"""
Image conversion utilities.

This package provides the glue between PixelBuffer and the outside world:
- converters: Format conversions (NumPy, PIL, base64, files, gray/RGB)
"""

from pixelkit.core.image.converters import (
    ImageDecodeError,
    buffer_to_numpy,
    buffer_to_pil,
    decode_image,
    encode_image,
    from_base64,
    numpy_to_buffer,
    pil_to_buffer,
    read_image,
    to_base64,
    to_grayscale,
    to_rgb,
    write_image,
)

__all__ = [
    "ImageDecodeError",
    "buffer_to_numpy",
    "buffer_to_pil",
    "decode_image",
    "encode_image",
    "from_base64",
    "numpy_to_buffer",
    "pil_to_buffer",
    "read_image",
    "to_base64",
    "to_grayscale",
    "to_rgb",
    "write_image",
]
