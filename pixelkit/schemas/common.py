"""
Common API models shared by the filter and transform endpoints.
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from pixelkit.core.enums import ExecutionMode


class ImagePayload(BaseModel):
    """Base request carrying one encoded image."""

    image_base64: str = Field(..., min_length=1, description="Base64 encoded PNG or JPEG image")
    channels: Optional[int] = Field(
        default=None,
        description="Force 1 (grayscale) or 3 (RGB) channels; default keeps the image's own",
    )
    output_format: str = Field(default="PNG", description="Encoding of the result (PNG or JPEG)")

    @field_validator("output_format")
    @classmethod
    def validate_output_format(cls, v: str) -> str:
        fmt = v.upper()
        if fmt == "JPG":
            fmt = "JPEG"
        if fmt not in ("PNG", "JPEG"):
            raise ValueError(f"Unsupported output format: {v}")
        return fmt

    @field_validator("channels")
    @classmethod
    def validate_channels(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v not in (1, 3):
            raise ValueError(f"channels must be 1 or 3, got {v}")
        return v


class ImageResponse(BaseModel):
    """Processed image with its geometry and timing."""

    image_base64: str
    width: int
    height: int
    channels: int
    processing_time_ms: float


class SystemInfo(BaseModel):
    """Engine and server information."""

    name: str
    version: str
    execution_strategy: ExecutionMode
    max_workers: int
    max_image_dimension: int
