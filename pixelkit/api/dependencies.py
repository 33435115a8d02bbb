"""
Shared FastAPI dependencies for PixelKit.
"""

import logging

from fastapi import HTTPException, Request

from pixelkit.config import Settings
from pixelkit.services.processing_service import ProcessingService

logger = logging.getLogger(__name__)


def get_processing_service(request: Request) -> ProcessingService:
    """
    Get the ProcessingService instance from app state.

    Raises:
        HTTPException: If the service was not initialized
    """
    try:
        return request.app.state.processing_service
    except AttributeError as e:
        logger.error(f"Processing service not initialized in app state: {e}")
        raise HTTPException(status_code=500, detail="Internal server error: Service not initialized")


def get_app_settings(request: Request) -> Settings:
    """Get the Settings instance the app was started with."""
    try:
        return request.app.state.settings
    except AttributeError as e:
        logger.error(f"Settings not initialized in app state: {e}")
        raise HTTPException(status_code=500, detail="Internal server error: Settings not initialized")
