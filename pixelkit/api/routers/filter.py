"""
Filter API Router - Convolution operations
"""

import logging

from fastapi import APIRouter, Depends

from pixelkit.api.dependencies import get_processing_service
from pixelkit.api.exceptions import safe_endpoint
from pixelkit.schemas import ConvolveRequest, ImageResponse, SeparableConvolveRequest

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/convolve")
@safe_endpoint
async def convolve(request: ConvolveRequest, service=Depends(get_processing_service)) -> ImageResponse:
    """
    Convolve an image with a named or explicit 2D kernel.

    Output has the input's size and channel count; sums are clamped to
    [0, 255] and truncated.
    """
    return service.convolve(request, request.kernel, request.border_mode, request.strategy)


@router.post("/separable")
@safe_endpoint
async def convolve_separable(
    request: SeparableConvolveRequest, service=Depends(get_processing_service)
) -> ImageResponse:
    """Two-pass separable convolution (horizontal, then vertical)."""
    return service.convolve_separable(
        request, request.kernel_x, request.kernel_y, request.border_mode, request.strategy
    )
