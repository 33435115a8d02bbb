"""
PixelKit - 2D pixel buffer processing.

Convolution with configurable border policies and pluggable row execution,
plus resize, crop and rotation over 8-bit grayscale and RGB buffers.
"""

__version__ = "1.0.0"

from pixelkit.core import (  # noqa: E402
    BorderMode,
    ConvolutionEngine,
    DataLengthMismatch,
    ExecutionMode,
    ExecutionStrategy,
    InterpolationMethod,
    InvalidCropRegion,
    InvalidKernelSize,
    Kernel,
    PixelBuffer,
    PixelKitError,
    ResamplingEngine,
    Rotation,
    RotationAngle,
    SequentialStrategy,
    ThreadPoolStrategy,
    convolve,
    convolve_separable,
    crop,
    get_strategy,
    resize,
    rotate,
    rotate_custom,
)

__all__ = [
    "__version__",
    "PixelBuffer",
    "Kernel",
    "BorderMode",
    "ExecutionMode",
    "InterpolationMethod",
    "RotationAngle",
    "Rotation",
    "ConvolutionEngine",
    "ResamplingEngine",
    "ExecutionStrategy",
    "SequentialStrategy",
    "ThreadPoolStrategy",
    "get_strategy",
    "convolve",
    "convolve_separable",
    "resize",
    "crop",
    "rotate",
    "rotate_custom",
    "PixelKitError",
    "DataLengthMismatch",
    "InvalidCropRegion",
    "InvalidKernelSize",
]
