"""
Pixel buffer - dense 8-bit image storage.

A PixelBuffer owns a contiguous row-major, channel-interleaved byte buffer
with one (grayscale) or three (RGB) channels. Internally the bytes live in a
numpy array of shape (height, width, channels) so single- and three-channel
images share every code path in the engines.
"""

import logging
from typing import Optional, Tuple, Union

import numpy as np

from pixelkit.core.constants import BufferConstants
from pixelkit.core.errors import DataLengthMismatch

logger = logging.getLogger(__name__)

Sample = Union[int, Tuple[int, ...]]


class PixelBuffer:
    """Row-major 8-bit image with 1 or 3 interleaved channels."""

    __slots__ = ("_array",)

    def __init__(
        self,
        width: int,
        height: int,
        data: Union[bytes, bytearray, memoryview, np.ndarray],
        channels: int = BufferConstants.RGB_CHANNELS,
    ):
        """
        Create a buffer from raw interleaved bytes.

        Args:
            width: Number of columns
            height: Number of rows
            data: Raw pixel bytes, width * height * channels long
            channels: 1 (grayscale) or 3 (RGB)

        Raises:
            DataLengthMismatch: If the data length does not match the dimensions
            ValueError: If the channel count or a dimension is invalid,
                or an array holds non-integer or out-of-range samples
        """
        _check_shape(width, height, channels)

        if isinstance(data, np.ndarray):
            flat = _check_samples(data).reshape(-1)
        else:
            flat = np.frombuffer(bytes(data), dtype=np.uint8)
        expected = width * height * channels
        if flat.size != expected:
            raise DataLengthMismatch(expected, int(flat.size))

        self._array = np.array(flat, dtype=np.uint8).reshape(height, width, channels)

    @classmethod
    def zeros(cls, width: int, height: int, channels: int = BufferConstants.RGB_CHANNELS) -> "PixelBuffer":
        """Create a buffer filled with zeros."""
        _check_shape(width, height, channels)
        return cls._wrap(np.zeros((height, width, channels), dtype=np.uint8))

    @classmethod
    def from_array(cls, array: np.ndarray) -> "PixelBuffer":
        """
        Create a buffer from a numpy array.

        Accepts (H, W) grayscale arrays or (H, W, C) arrays with C in {1, 3}.
        The array is copied.

        Raises:
            ValueError: If the array is not integer-typed or holds samples
                outside [0, 255]
        """
        array = _check_samples(np.asarray(array))
        if array.ndim == 2:
            array = array[:, :, np.newaxis]
        if array.ndim != 3:
            raise ValueError(f"Expected a 2D or 3D array, got shape {array.shape}")

        height, width, channels = array.shape
        _check_shape(width, height, channels)
        return cls._wrap(np.array(array, dtype=np.uint8, copy=True))

    @classmethod
    def _wrap(cls, array: np.ndarray) -> "PixelBuffer":
        """Adopt an (H, W, C) uint8 array without copying."""
        buffer = cls.__new__(cls)
        buffer._array = np.ascontiguousarray(array, dtype=np.uint8)
        return buffer

    @property
    def width(self) -> int:
        return self._array.shape[1]

    @property
    def height(self) -> int:
        return self._array.shape[0]

    @property
    def channels(self) -> int:
        return self._array.shape[2]

    @property
    def dimensions(self) -> Tuple[int, int]:
        """Dimensions as (width, height)."""
        return self.width, self.height

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get_pixel(self, x: int, y: int) -> Optional[Sample]:
        """
        Read one pixel.

        Returns:
            An int for grayscale buffers, an (r, g, b) tuple for RGB buffers,
            or None when (x, y) is outside the image.
        """
        if not self.in_bounds(x, y):
            return None

        pixel = self._array[y, x]
        if self.channels == BufferConstants.GRAY_CHANNELS:
            return int(pixel[0])
        return tuple(int(v) for v in pixel)

    def set_pixel(self, x: int, y: int, value: Sample) -> bool:
        """
        Write one pixel.

        Returns:
            True if the pixel was written, False if (x, y) is out of bounds.

        Raises:
            ValueError: If the sample arity or a sample value is invalid
        """
        if not self.in_bounds(x, y):
            return False

        if isinstance(value, (int, np.integer)):
            value = (int(value),) * self.channels
        if len(value) != self.channels:
            raise ValueError(f"Expected {self.channels} channel values, got {len(value)}")
        if any(
            not isinstance(v, (int, np.integer))
            or not BufferConstants.MIN_VALUE <= v <= BufferConstants.MAX_VALUE
            for v in value
        ):
            raise ValueError(f"Pixel samples must be integers in [0, 255], got {tuple(value)}")

        self._array[y, x] = value
        return True

    def raw_data(self) -> bytes:
        """Interleaved row-major bytes."""
        return self._array.tobytes()

    def as_array(self) -> np.ndarray:
        """Read-only (H, W, C) view of the pixel data."""
        view = self._array.view()
        view.flags.writeable = False
        return view

    def copy(self) -> "PixelBuffer":
        return PixelBuffer._wrap(self._array.copy())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        return self._array.shape == other._array.shape and np.array_equal(self._array, other._array)

    __hash__ = None

    def __str__(self) -> str:
        return f"PixelBuffer {{ width: {self.width}, height: {self.height}, channels: {self.channels} }}"

    def __repr__(self) -> str:
        return f"PixelBuffer(width={self.width}, height={self.height}, channels={self.channels})"


def _check_shape(width: int, height: int, channels: int) -> None:
    if channels not in BufferConstants.SUPPORTED_CHANNELS:
        raise ValueError(f"Unsupported channel count: {channels} (expected 1 or 3)")
    if width < 0 or height < 0:
        raise ValueError(f"Invalid dimensions: {width}x{height}")


def _check_samples(array: np.ndarray) -> np.ndarray:
    """Reject arrays that cannot be stored as 8-bit samples without changing a value."""
    if array.dtype == np.uint8:
        return array
    if not (np.issubdtype(array.dtype, np.integer) or array.dtype == np.bool_):
        raise ValueError(f"Pixel data must be integer-typed, got dtype {array.dtype}")
    if array.size and (array.min() < BufferConstants.MIN_VALUE or array.max() > BufferConstants.MAX_VALUE):
        raise ValueError(
            f"Pixel samples must lie in [{BufferConstants.MIN_VALUE}, {BufferConstants.MAX_VALUE}], "
            f"got range [{array.min()}, {array.max()}]"
        )
    return array
