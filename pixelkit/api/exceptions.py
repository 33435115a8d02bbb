"""
API exceptions and error handling.

Domain errors raised by the engine are translated into HTTP responses in
one place:
- PixelKitError (bad kernel, bad crop region, bad buffer length) -> 400
- ImageDecodeError / ValueError (undecodable input, bad arguments) -> 400
- APIException subclasses carry their own status code
"""

import functools
import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from pixelkit.core.errors import InvalidCropRegion, PixelKitError
from pixelkit.core.image.converters import ImageDecodeError

logger = logging.getLogger(__name__)


class APIException(Exception):
    """Base exception for API errors with an HTTP status code."""

    status_code = 500
    error = "internal_error"

    def __init__(self, detail: str, extra: Optional[Dict[str, Any]] = None):
        super().__init__(detail)
        self.detail = detail
        self.extra = extra or {}

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.error, "detail": self.detail, **self.extra}


class ImageTooLargeException(APIException):
    """Raised when an input or output image exceeds the configured dimension limit."""

    status_code = 413
    error = "image_too_large"

    def __init__(self, width: int, height: int, limit: int):
        super().__init__(
            f"Image {width}x{height} exceeds the maximum dimension of {limit}",
            {"width": width, "height": height, "limit": limit},
        )


class InvalidImageException(APIException):
    """Raised when the request image cannot be decoded."""

    status_code = 400
    error = "invalid_image"


class ProcessingException(APIException):
    """Raised when the engine rejects the requested operation."""

    status_code = 400
    error = "processing_error"


def _translate(exc: Exception) -> APIException:
    if isinstance(exc, ImageDecodeError):
        return InvalidImageException(str(exc))
    if isinstance(exc, InvalidCropRegion):
        x, y, width, height = exc.region
        return ProcessingException(
            str(exc),
            {
                "region": {"x": x, "y": y, "width": width, "height": height},
                "image_size": {"width": exc.image_size[0], "height": exc.image_size[1]},
            },
        )
    return ProcessingException(str(exc))


def safe_endpoint(func):
    """
    Decorator translating engine errors raised by an async endpoint.

    HTTPException passes through untouched; anything that is not a known
    domain error propagates to the global handler.
    """

    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except (HTTPException, APIException):
            raise
        except (PixelKitError, ValueError) as e:
            api_exc = _translate(e)
            logger.warning(f"{func.__name__} failed: {api_exc.detail}")
            raise api_exc from e

    return wrapper


def register_exception_handlers(app: FastAPI) -> None:
    """Install JSON handlers for API and unexpected exceptions."""

    @app.exception_handler(APIException)
    async def api_exception_handler(request: Request, exc: APIException):
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Global exception: {exc}", exc_info=True)
        return JSONResponse(status_code=500, content={"detail": f"Internal server error: {str(exc)}"})
