"""
Centralized enums for the pixel-buffer engine.

Enums are string-valued where they cross the API boundary so they can be
parsed straight from request payloads.
"""

from enum import Enum, IntEnum


class BorderMode(str, Enum):
    """Policy for samples that fall outside the image during convolution."""

    ZERO = "zero"  # pad with zeros
    REPLICATE = "replicate"  # repeat the edge pixel
    REFLECT = "reflect"  # mirror without duplicating the edge (abcd|dcba)
    WRAP = "wrap"  # tile the image


class InterpolationMethod(str, Enum):
    """Sampling method for resize and arbitrary rotation."""

    NEAREST = "nearest"
    BILINEAR = "bilinear"


class RotationAngle(IntEnum):
    """Lossless clockwise rotation in 90 degree steps."""

    ROTATE_90 = 90
    ROTATE_180 = 180
    ROTATE_270 = 270


class ExecutionMode(str, Enum):
    """Row scheduling used by the convolution engine."""

    SEQUENTIAL = "sequential"
    THREAD = "thread"
