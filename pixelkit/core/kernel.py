"""
Convolution kernels.

A Kernel is an immutable, odd-sized, row-major float32 weight matrix. The
named constructors cover the common filters; ``from_outer`` builds the 2D
equivalent of a pair of separable 1D kernels.
"""

import logging
import math
from typing import Iterable, Sequence

import numpy as np

from pixelkit.core.constants import KernelConstants
from pixelkit.core.errors import InvalidKernelSize

logger = logging.getLogger(__name__)


class Kernel:
    """Immutable 2D convolution kernel with odd width and height."""

    __slots__ = ("_width", "_height", "_weights")

    def __init__(self, width: int, height: int, weights: Iterable[float]):
        """
        Create a kernel.

        Args:
            width: Kernel width (odd)
            height: Kernel height (odd)
            weights: width * height weights in row-major order

        Raises:
            InvalidKernelSize: If a dimension is even or the weight count is wrong
        """
        if width < 1 or width % 2 == 0:
            raise InvalidKernelSize(f"Kernel width must be odd, got {width}")
        if height < 1 or height % 2 == 0:
            raise InvalidKernelSize(f"Kernel height must be odd, got {height}")

        data = np.array(list(weights), dtype=np.float32)
        if data.size != width * height:
            raise InvalidKernelSize(
                f"Data length must match width * height: expected {width * height}, got {data.size}"
            )

        data.flags.writeable = False
        self._width = width
        self._height = height
        self._weights = data

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def weights(self) -> np.ndarray:
        """Read-only flat float32 weights."""
        return self._weights

    @property
    def half_width(self) -> int:
        return self._width // 2

    @property
    def half_height(self) -> int:
        return self._height // 2

    def weight(self, kx: int, ky: int) -> float:
        return float(self._weights[ky * self._width + kx])

    def as_array(self) -> np.ndarray:
        """Read-only (height, width) view of the weights."""
        return self._weights.reshape(self._height, self._width)

    def total(self) -> float:
        return float(self._weights.sum(dtype=np.float64))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Kernel):
            return NotImplemented
        return (
            self._width == other._width
            and self._height == other._height
            and np.array_equal(self._weights, other._weights)
        )

    __hash__ = None

    def __repr__(self) -> str:
        return f"Kernel(width={self._width}, height={self._height})"

    # === Named constructors ===

    @classmethod
    def from_array(cls, array) -> "Kernel":
        """Create a kernel from a 2D array-like of weights."""
        arr = np.asarray(array, dtype=np.float32)
        if arr.ndim != 2:
            raise InvalidKernelSize(f"Kernel array must be 2D, got shape {arr.shape}")
        height, width = arr.shape
        return cls(width, height, arr.ravel())

    @classmethod
    def from_outer(cls, kernel_x: Sequence[float], kernel_y: Sequence[float]) -> "Kernel":
        """2D kernel equal to the outer product of a vertical and a horizontal 1D kernel."""
        kx = np.asarray(kernel_x, dtype=np.float32)
        ky = np.asarray(kernel_y, dtype=np.float32)
        return cls(kx.size, ky.size, np.outer(ky, kx).ravel())

    @classmethod
    def identity(cls, size: int = KernelConstants.DEFAULT_KERNEL_SIZE) -> "Kernel":
        """All zero except a centre weight of one."""
        weights = [0.0] * (size * size)
        if size % 2 == 1:
            weights[(size * size) // 2] = 1.0
        return cls(size, size, weights)

    @classmethod
    def box_blur(cls, size: int) -> "Kernel":
        """Uniform averaging kernel."""
        if size < 1 or size % 2 == 0:
            raise InvalidKernelSize(f"Kernel size must be odd, got {size}")
        count = size * size
        value = np.float32(1.0) / np.float32(count)
        return cls(size, size, [value] * count)

    @classmethod
    def gaussian(cls, size: int, sigma: float = KernelConstants.DEFAULT_GAUSSIAN_SIGMA) -> "Kernel":
        """
        Gaussian blur kernel.

        Samples the 2D Gaussian density at integer offsets from the centre and
        normalizes the result so the weights sum to one.

        Args:
            size: Kernel size (odd)
            sigma: Standard deviation in pixels (> 0)
        """
        if size < 1 or size % 2 == 0:
            raise InvalidKernelSize(f"Kernel size must be odd, got {size}")
        if sigma <= 0:
            raise ValueError(f"Gaussian sigma must be positive, got {sigma}")

        half = size // 2
        offsets = np.arange(-half, half + 1, dtype=np.float32)
        xs, ys = np.meshgrid(offsets, offsets)
        sigma32 = np.float32(sigma)

        coefficient = np.float32(1.0) / (np.float32(2.0 * math.pi) * sigma32 * sigma32)
        exponent = -(xs * xs + ys * ys) / (np.float32(2.0) * sigma32 * sigma32)
        data = coefficient * np.exp(exponent)

        # Summed one weight at a time in row-major order, in float32
        total = np.float32(0.0)
        for value in data.ravel():
            total = np.float32(total + value)
        data = data / total

        logger.debug(f"Gaussian kernel {size}x{size} sigma={sigma} sum={float(data.sum()):.6f}")
        return cls(size, size, data.ravel())

    @classmethod
    def sobel_x(cls) -> "Kernel":
        """Horizontal gradient (responds to vertical edges)."""
        return cls(3, 3, [-1.0, 0.0, 1.0, -2.0, 0.0, 2.0, -1.0, 0.0, 1.0])

    @classmethod
    def sobel_y(cls) -> "Kernel":
        """Vertical gradient (responds to horizontal edges)."""
        return cls(3, 3, [-1.0, -2.0, -1.0, 0.0, 0.0, 0.0, 1.0, 2.0, 1.0])

    @classmethod
    def laplacian(cls) -> "Kernel":
        """Discrete Laplace operator."""
        return cls(3, 3, [0.0, 1.0, 0.0, 1.0, -4.0, 1.0, 0.0, 1.0, 0.0])

    @classmethod
    def sharpen(cls) -> "Kernel":
        return cls(3, 3, [0.0, -1.0, 0.0, -1.0, 5.0, -1.0, 0.0, -1.0, 0.0])
