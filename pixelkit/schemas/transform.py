"""
Transform API models.

This module contains models for geometric operations:
- Resize, crop, lossless and arbitrary rotation
"""

from pydantic import BaseModel, Field

from pixelkit.core.enums import InterpolationMethod, RotationAngle

from .common import ImagePayload


class ResizeRequest(ImagePayload):
    """Request to resize an image"""

    width: int = Field(..., ge=1, description="Target width")
    height: int = Field(..., ge=1, description="Target height")
    method: InterpolationMethod = Field(default=InterpolationMethod.BILINEAR)


class CropRegion(BaseModel):
    """Crop rectangle (validated against the image, never clipped)"""

    x: int = Field(..., ge=0, description="X coordinate")
    y: int = Field(..., ge=0, description="Y coordinate")
    width: int = Field(..., ge=0, description="Width")
    height: int = Field(..., ge=0, description="Height")


class CropRequest(ImagePayload):
    """Request to crop an image"""

    region: CropRegion


class RotateRequest(ImagePayload):
    """Request for a lossless clockwise rotation"""

    angle: RotationAngle = Field(..., description="90, 180 or 270")


class RotateCustomRequest(ImagePayload):
    """Request for an arbitrary clockwise rotation with canvas growth"""

    angle: float = Field(..., description="Rotation angle")
    radians: bool = Field(default=False, description="Interpret angle as radians instead of degrees")
    method: InterpolationMethod = Field(default=InterpolationMethod.BILINEAR)
