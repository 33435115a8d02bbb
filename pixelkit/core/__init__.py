"""
Core modules for PixelKit
"""

from .border import reflect_coordinate, replicate_coordinate, resolve_coordinate, wrap_coordinate
from .buffer import PixelBuffer
from .convolution import ConvolutionEngine, convolve, convolve_separable
from .enums import BorderMode, ExecutionMode, InterpolationMethod, RotationAngle
from .errors import DataLengthMismatch, InvalidCropRegion, InvalidKernelSize, PixelKitError
from .execution import ExecutionStrategy, SequentialStrategy, ThreadPoolStrategy, get_strategy
from .kernel import Kernel
from .resampling import ResamplingEngine, Rotation, crop, resize, rotate, rotate_custom

__all__ = [
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
    "reflect_coordinate",
    "replicate_coordinate",
    "resolve_coordinate",
    "wrap_coordinate",
    "PixelKitError",
    "DataLengthMismatch",
    "InvalidCropRegion",
    "InvalidKernelSize",
]
