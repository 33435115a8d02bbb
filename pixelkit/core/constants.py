"""
Constants and configuration values for the PixelKit engine.
Centralizes all magic numbers and configuration constants.
"""


class BufferConstants:
    """Constants related to pixel buffers."""

    GRAY_CHANNELS = 1
    RGB_CHANNELS = 3
    SUPPORTED_CHANNELS = (GRAY_CHANNELS, RGB_CHANNELS)

    MIN_VALUE = 0
    MAX_VALUE = 255


class KernelConstants:
    """Constants related to convolution kernels."""

    # Gaussian weights must sum to one within this tolerance
    NORMALIZATION_TOLERANCE = 1e-5

    DEFAULT_KERNEL_SIZE = 3
    DEFAULT_GAUSSIAN_SIGMA = 1.0
    MAX_KERNEL_SIZE = 101


class ExecutionConstants:
    """Constants related to row scheduling."""

    DEFAULT_MAX_WORKERS = 4
    MIN_WORKERS = 1
    MAX_WORKERS = 64


class CodecConstants:
    """Constants related to image encoding at the edges of the engine."""

    DEFAULT_FORMAT = "PNG"
    DEFAULT_JPEG_QUALITY = 90
    MIN_JPEG_QUALITY = 1
    MAX_JPEG_QUALITY = 100
    EXTENSION_FORMATS = {
        ".png": "PNG",
        ".jpg": "JPEG",
        ".jpeg": "JPEG",
    }


class ApiConstants:
    """Constants related to the HTTP surface."""

    DEFAULT_HOST = "0.0.0.0"
    DEFAULT_PORT = 8000
    MAX_IMAGE_DIMENSION = 4096
