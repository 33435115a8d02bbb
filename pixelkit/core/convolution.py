"""
Convolution engine.

Direct 2D convolution and two-pass separable convolution over 1- and
3-channel pixel buffers with a configurable border policy.

Numerics:
- every output sample accumulates ``weight * sample`` in float32, tap by tap
  in row-major kernel order;
- the sum is clamped to [0, 255] and truncated toward zero (never rounded);
- the separable path stores its intermediate image at 8-bit precision, so it
  can differ from direct convolution by one unit per sample.

Each output row depends only on the input, so rows are handed to an
ExecutionStrategy. A row is accumulated entirely by one worker, which keeps
sequential and parallel output byte-identical.
"""

import logging
from typing import Sequence, Union

import numpy as np

from pixelkit.core.border import resolve_indices
from pixelkit.core.buffer import PixelBuffer
from pixelkit.core.constants import BufferConstants
from pixelkit.core.enums import BorderMode
from pixelkit.core.errors import InvalidKernelSize
from pixelkit.core.execution import ExecutionStrategy, get_strategy
from pixelkit.core.kernel import Kernel
from pixelkit.core.utils.decorators import log_duration
from pixelkit.core.utils.enum_converter import parse_enum

logger = logging.getLogger(__name__)

Kernel1D = Union[Sequence[float], np.ndarray]
StrategyLike = Union[ExecutionStrategy, str, None]


def _clamp_truncate(acc: np.ndarray) -> np.ndarray:
    """Clamp float sums to the 8-bit range and truncate toward zero."""
    return np.clip(acc, BufferConstants.MIN_VALUE, BufferConstants.MAX_VALUE).astype(np.uint8)


def _with_zero_sentinel(src: np.ndarray) -> np.ndarray:
    """
    Append one zero column and one zero row.

    Border resolution maps Zero-policy misses to index ``width``/``height``,
    which then read from this padding.
    """
    height, width, channels = src.shape
    ext = np.zeros((height + 1, width + 1, channels), dtype=np.uint8)
    ext[:height, :width] = src
    return ext


def _as_kernel_1d(values: Kernel1D, axis: str) -> np.ndarray:
    weights = np.asarray(values, dtype=np.float32).ravel()
    if weights.size % 2 == 0:
        raise InvalidKernelSize(f"Kernel length must be odd ({axis} kernel has {weights.size} taps)")
    return weights


class ConvolutionEngine:
    """
    Applies kernels to pixel buffers.

    The engine holds only its execution strategy; it never mutates an input
    buffer and allocates exactly one output buffer per call.
    """

    def __init__(self, strategy: StrategyLike = None):
        """
        Initialize convolution engine.

        Args:
            strategy: Execution strategy, strategy name, or None for the
                configured default
        """
        self.strategy = get_strategy(strategy)

    @log_duration
    def convolve(self, image: PixelBuffer, kernel: Kernel, border_mode: Union[BorderMode, str]) -> PixelBuffer:
        """
        Convolve an image with a 2D kernel.

        Args:
            image: Input buffer (1 or 3 channels)
            kernel: Odd-sized kernel
            border_mode: Policy for taps outside the image

        Returns:
            New buffer with the same dimensions and channel count
        """
        border_mode = parse_enum(border_mode, BorderMode)
        height, width, channels = image.height, image.width, image.channels

        logger.debug(
            f"convolve {width}x{height}x{channels} with {kernel.width}x{kernel.height} kernel, "
            f"border={border_mode.value}, strategy={self.strategy.name}"
        )

        if width == 0 or height == 0:
            return image.copy()

        ext = _with_zero_sentinel(image.as_array())
        weights = kernel.as_array()
        k_half_w = kernel.half_width
        k_half_h = kernel.half_height

        # (kernel.width, width) source column for every tap column and output x
        xs = np.arange(width, dtype=np.int64)
        col_index = np.stack(
            [resolve_indices(xs + kx - k_half_w, width, border_mode) for kx in range(kernel.width)]
        )
        row_offsets = np.arange(kernel.height, dtype=np.int64) - k_half_h

        def convolve_row(y: int) -> np.ndarray:
            acc = np.zeros((width, channels), dtype=np.float32)
            src_rows = resolve_indices(y + row_offsets, height, border_mode)
            for ky in range(kernel.height):
                taps = ext[src_rows[ky]][col_index].astype(np.float32)
                for kx in range(kernel.width):
                    acc += taps[kx] * weights[ky, kx]
            return _clamp_truncate(acc)

        data = self.strategy.run(convolve_row, height, (width, channels))
        return PixelBuffer._wrap(data)

    @log_duration
    def convolve_separable(
        self,
        image: PixelBuffer,
        kernel_x: Kernel1D,
        kernel_y: Kernel1D,
        border_mode: Union[BorderMode, str],
    ) -> PixelBuffer:
        """
        Convolve with a horizontal then a vertical 1D kernel.

        Equivalent (within one unit per sample) to convolving with the outer
        product kernel, at O(Kw + Kh) instead of O(Kw * Kh) work per sample.

        Args:
            image: Input buffer (1 or 3 channels)
            kernel_x: Horizontal taps (odd length)
            kernel_y: Vertical taps (odd length)
            border_mode: Policy for taps outside the image

        Returns:
            New buffer with the same dimensions and channel count

        Raises:
            InvalidKernelSize: If either kernel has even length
        """
        border_mode = parse_enum(border_mode, BorderMode)
        kx = _as_kernel_1d(kernel_x, "horizontal")
        ky = _as_kernel_1d(kernel_y, "vertical")

        logger.debug(
            f"convolve_separable {image.width}x{image.height}x{image.channels} with "
            f"{kx.size}+{ky.size} taps, border={border_mode.value}, strategy={self.strategy.name}"
        )

        if image.width == 0 or image.height == 0:
            return image.copy()

        temp = self._convolve_horizontal(image.as_array(), kx, border_mode)
        return PixelBuffer._wrap(self._convolve_vertical(temp, ky, border_mode))

    def _convolve_horizontal(self, src: np.ndarray, kernel: np.ndarray, border_mode: BorderMode) -> np.ndarray:
        height, width, channels = src.shape
        ext = _with_zero_sentinel(src)
        k_half = kernel.size // 2

        xs = np.arange(width, dtype=np.int64)
        col_index = np.stack(
            [resolve_indices(xs + k - k_half, width, border_mode) for k in range(kernel.size)]
        )

        def horizontal_row(y: int) -> np.ndarray:
            acc = np.zeros((width, channels), dtype=np.float32)
            taps = ext[y][col_index].astype(np.float32)
            for k in range(kernel.size):
                acc += taps[k] * kernel[k]
            return _clamp_truncate(acc)

        return self.strategy.run(horizontal_row, height, (width, channels))

    def _convolve_vertical(self, src: np.ndarray, kernel: np.ndarray, border_mode: BorderMode) -> np.ndarray:
        height, width, channels = src.shape
        ext = _with_zero_sentinel(src)
        k_half = kernel.size // 2
        offsets = np.arange(kernel.size, dtype=np.int64) - k_half

        def vertical_row(y: int) -> np.ndarray:
            acc = np.zeros((width, channels), dtype=np.float32)
            src_rows = resolve_indices(y + offsets, height, border_mode)
            for k in range(kernel.size):
                acc += ext[src_rows[k], :width].astype(np.float32) * kernel[k]
            return _clamp_truncate(acc)

        return self.strategy.run(vertical_row, height, (width, channels))


def convolve(
    image: PixelBuffer,
    kernel: Kernel,
    border_mode: Union[BorderMode, str],
    strategy: StrategyLike = None,
) -> PixelBuffer:
    """Convolve ``image`` with ``kernel``; see ConvolutionEngine.convolve."""
    return ConvolutionEngine(strategy).convolve(image, kernel, border_mode)


def convolve_separable(
    image: PixelBuffer,
    kernel_x: Kernel1D,
    kernel_y: Kernel1D,
    border_mode: Union[BorderMode, str],
    strategy: StrategyLike = None,
) -> PixelBuffer:
    """Two-pass separable convolution; see ConvolutionEngine.convolve_separable."""
    return ConvolutionEngine(strategy).convolve_separable(image, kernel_x, kernel_y, border_mode)

