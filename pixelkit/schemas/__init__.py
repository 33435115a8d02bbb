"""
Schemas Package

Pydantic schemas for request validation and response serialization,
organized by domain:
- common: shared image payload/response models
- filter: convolution requests
- transform: resize/crop/rotate requests
"""

# Re-export enums from centralized location for convenience
from pixelkit.core.enums import BorderMode, ExecutionMode, InterpolationMethod, RotationAngle

from .common import ImagePayload, ImageResponse, SystemInfo
from .filter import KERNEL_NAMES, ConvolveRequest, KernelSpec, SeparableConvolveRequest
from .transform import CropRegion, CropRequest, ResizeRequest, RotateCustomRequest, RotateRequest

__all__ = [
    # Common models
    "ImagePayload",
    "ImageResponse",
    "SystemInfo",
    # Filter models
    "KERNEL_NAMES",
    "KernelSpec",
    "ConvolveRequest",
    "SeparableConvolveRequest",
    # Transform models
    "CropRegion",
    "CropRequest",
    "ResizeRequest",
    "RotateRequest",
    "RotateCustomRequest",
    # Enums (re-exported from core.enums)
    "BorderMode",
    "ExecutionMode",
    "InterpolationMethod",
    "RotationAngle",
]
