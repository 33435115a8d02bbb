"""
Filtering API models.

This module contains models for convolution operations:
- Named or explicit 2D kernels
- Separable 1D kernel pairs
"""

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from pixelkit.core.constants import KernelConstants
from pixelkit.core.enums import BorderMode, ExecutionMode

from .common import ImagePayload

KERNEL_NAMES = ("identity", "box_blur", "gaussian", "sobel_x", "sobel_y", "laplacian", "sharpen")


class KernelSpec(BaseModel):
    """
    Kernel description.

    Either a named kernel (with size/sigma where applicable) or an explicit
    width x height weight list.
    """

    name: Optional[str] = Field(default=None, description=f"One of: {', '.join(KERNEL_NAMES)}")
    size: int = Field(
        default=KernelConstants.DEFAULT_KERNEL_SIZE,
        ge=1,
        le=KernelConstants.MAX_KERNEL_SIZE,
        description="Size for identity/box_blur/gaussian (odd)",
    )
    sigma: float = Field(
        default=KernelConstants.DEFAULT_GAUSSIAN_SIGMA, gt=0, description="Gaussian standard deviation"
    )
    width: Optional[int] = Field(
        default=None, ge=1, le=KernelConstants.MAX_KERNEL_SIZE, description="Explicit kernel width (odd)"
    )
    height: Optional[int] = Field(
        default=None, ge=1, le=KernelConstants.MAX_KERNEL_SIZE, description="Explicit kernel height (odd)"
    )
    weights: Optional[List[float]] = Field(
        default=None,
        max_length=KernelConstants.MAX_KERNEL_SIZE * KernelConstants.MAX_KERNEL_SIZE,
        description="Explicit row-major weights",
    )

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        name = v.lower()
        if name not in KERNEL_NAMES:
            raise ValueError(f"Unknown kernel '{v}' (expected one of: {', '.join(KERNEL_NAMES)})")
        return name

    @model_validator(mode="after")
    def check_definition(self) -> "KernelSpec":
        if self.name is None and self.weights is None:
            raise ValueError("Either a kernel name or explicit weights must be given")
        if self.weights is not None and (self.width is None or self.height is None):
            raise ValueError("Explicit weights need width and height")
        return self


class ConvolveRequest(ImagePayload):
    """Request to convolve an image with a 2D kernel"""

    kernel: KernelSpec
    border_mode: BorderMode = Field(default=BorderMode.REPLICATE, description="Border policy")
    strategy: Optional[ExecutionMode] = Field(default=None, description="Row scheduling override")


class SeparableConvolveRequest(ImagePayload):
    """Request for a two-pass separable convolution"""

    kernel_x: List[float] = Field(
        ..., min_length=1, max_length=KernelConstants.MAX_KERNEL_SIZE, description="Horizontal taps (odd length)"
    )
    kernel_y: List[float] = Field(
        ..., min_length=1, max_length=KernelConstants.MAX_KERNEL_SIZE, description="Vertical taps (odd length)"
    )
    border_mode: BorderMode = Field(default=BorderMode.REPLICATE, description="Border policy")
    strategy: Optional[ExecutionMode] = Field(default=None, description="Row scheduling override")
