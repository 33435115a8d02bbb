"""
System API Router - Engine information
"""

import logging

from fastapi import APIRouter, Depends

from pixelkit import __version__
from pixelkit.api.dependencies import get_app_settings
from pixelkit.api.exceptions import safe_endpoint
from pixelkit.schemas import SystemInfo

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/info")
@safe_endpoint
async def get_info(settings=Depends(get_app_settings)) -> SystemInfo:
    """Get engine version and processing defaults"""
    return SystemInfo(
        name="PixelKit",
        version=__version__,
        execution_strategy=settings.processing.execution_strategy,
        max_workers=settings.processing.max_workers,
        max_image_dimension=settings.api.max_image_dimension,
    )
