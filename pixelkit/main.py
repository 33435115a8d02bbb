"""
PixelKit - Main FastAPI Application
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pixelkit import __version__
from pixelkit.api.exceptions import register_exception_handlers
from pixelkit.api.routers import filter, system, transform
from pixelkit.config import get_settings
from pixelkit.services.processing_service import ProcessingService

# Get configuration
settings = get_settings()

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.system.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle"""
    logger.info("Starting PixelKit server...")
    logger.info(f"Environment: {settings.environment}")
    logger.info(
        f"Execution strategy: {settings.processing.execution_strategy.value} "
        f"(max_workers={settings.processing.max_workers})"
    )

    app.state.settings = settings
    app.state.processing_service = ProcessingService(settings)
    app.state.debug = settings.system.debug

    yield

    logger.info("Server shutdown complete")


# Create FastAPI app
app = FastAPI(
    title="PixelKit",
    description="Convolution and geometric transforms over 8-bit pixel buffers",
    version=__version__,
    lifespan=lifespan,
)

if settings.api.cors_enabled:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

# Register exception handlers
register_exception_handlers(app)

# Include routers
app.include_router(filter.router, prefix="/api/filter", tags=["Filter"])
app.include_router(transform.router, prefix="/api/transform", tags=["Transform"])
app.include_router(system.router, prefix="/api/system", tags=["System"])


# Root endpoint
@app.get("/")
async def root():
    return {
        "name": "PixelKit",
        "status": "running",
        "version": __version__,
        "endpoints": {
            "filter": "/api/filter",
            "transform": "/api/transform",
            "system": "/api/system",
            "docs": "/docs",
        },
    }


# Health check endpoint
@app.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "services": {
            "processing_service": getattr(app.state, "processing_service", None) is not None,
        },
    }


def main() -> None:
    """Run the API server with uvicorn."""
    server_config = uvicorn.Config(
        "pixelkit.main:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.system.debug,
        log_level=settings.system.log_level.lower(),
        loop="asyncio",
    )
    server = uvicorn.Server(server_config)

    try:
        server.run()
    except KeyboardInterrupt:
        logger.info("Received keyboard interrupt, shutting down...")
    finally:
        logger.info("Server exiting...")


if __name__ == "__main__":
    main()
