"""
Error taxonomy for the pixel-buffer engine.

All engine failures derive from PixelKitError. The concrete errors also
derive from ValueError so callers that only guard against bad arguments
keep working.
"""

from typing import Tuple


class PixelKitError(Exception):
    """Base class for engine errors."""


class DataLengthMismatch(PixelKitError, ValueError):
    """Buffer length does not match the declared dimensions."""

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Data length must be width * height * channels: expected {expected}, got {actual}")


class InvalidKernelSize(PixelKitError, ValueError):
    """Kernel has an even dimension or a weight count that does not match its size."""


class InvalidCropRegion(PixelKitError, ValueError):
    """Crop region lies (partly) outside the image."""

    def __init__(self, region: Tuple[int, int, int, int], image_size: Tuple[int, int]):
        self.region = region
        self.image_size = image_size
        x, y, width, height = region
        super().__init__(
            f"Crop region {width}x{height} at ({x},{y}) exceeds image bounds "
            f"{image_size[0]}x{image_size[1]}"
        )
