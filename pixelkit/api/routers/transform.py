"""
Transform API Router - Resize, crop and rotation
"""

import logging

from fastapi import APIRouter, Depends

from pixelkit.api.dependencies import get_processing_service
from pixelkit.api.exceptions import safe_endpoint
from pixelkit.schemas import (
    CropRequest,
    ImageResponse,
    ResizeRequest,
    RotateCustomRequest,
    RotateRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/resize")
@safe_endpoint
async def resize(request: ResizeRequest, service=Depends(get_processing_service)) -> ImageResponse:
    """Resize to an explicit width and height (nearest or bilinear)."""
    return service.resize(request, request.width, request.height, request.method)


@router.post("/crop")
@safe_endpoint
async def crop(request: CropRequest, service=Depends(get_processing_service)) -> ImageResponse:
    """
    Crop a rectangle out of the image.

    Regions reaching past the image are rejected with 400, never clipped.
    """
    region = request.region
    return service.crop(request, (region.x, region.y, region.width, region.height))


@router.post("/rotate")
@safe_endpoint
async def rotate(request: RotateRequest, service=Depends(get_processing_service)) -> ImageResponse:
    """Lossless clockwise rotation by 90, 180 or 270 degrees."""
    return service.rotate(request, request.angle)


@router.post("/rotate-custom")
@safe_endpoint
async def rotate_custom(
    request: RotateCustomRequest, service=Depends(get_processing_service)
) -> ImageResponse:
    """Rotate by an arbitrary angle; the canvas grows to fit and uncovered pixels are zero."""
    return service.rotate_custom(request, request.angle, request.radians, request.method)
