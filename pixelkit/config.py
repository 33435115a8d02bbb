"""
Configuration for PixelKit.

Settings are grouped into nested Pydantic models and read once from
PIXELKIT_* environment variables. Use get_settings() everywhere; it caches
the parsed result.
"""

import logging
import os
from functools import lru_cache
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from pixelkit.core.constants import ApiConstants, CodecConstants, ExecutionConstants
from pixelkit.core.enums import ExecutionMode

logger = logging.getLogger(__name__)

ENV_PREFIX = "PIXELKIT_"


class SystemConfig(BaseModel):
    """Process-wide settings."""

    log_level: str = Field(default="INFO", description="Logging level name")
    debug: bool = Field(default=False, description="Enable debug mode")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Invalid log level: {v}")
        return level


class ApiConfig(BaseModel):
    """HTTP server settings."""

    host: str = Field(default=ApiConstants.DEFAULT_HOST, description="Bind address")
    port: int = Field(default=ApiConstants.DEFAULT_PORT, ge=1, le=65535, description="Bind port")
    cors_enabled: bool = Field(default=True, description="Enable CORS middleware")
    cors_origins: List[str] = Field(default_factory=lambda: ["*"], description="Allowed CORS origins")
    max_image_dimension: int = Field(
        default=ApiConstants.MAX_IMAGE_DIMENSION,
        ge=1,
        description="Largest width/height accepted or produced by the API",
    )


class ProcessingConfig(BaseModel):
    """Engine settings."""

    execution_strategy: ExecutionMode = Field(
        default=ExecutionMode.SEQUENTIAL, description="Default row scheduling for convolution"
    )
    max_workers: int = Field(
        default=ExecutionConstants.DEFAULT_MAX_WORKERS,
        ge=ExecutionConstants.MIN_WORKERS,
        le=ExecutionConstants.MAX_WORKERS,
        description="Worker threads for the thread strategy",
    )
    jpeg_quality: int = Field(
        default=CodecConstants.DEFAULT_JPEG_QUALITY,
        ge=CodecConstants.MIN_JPEG_QUALITY,
        le=CodecConstants.MAX_JPEG_QUALITY,
        description="Quality used when encoding JPEG output",
    )


class Settings(BaseModel):
    """Root settings object."""

    environment: str = Field(default="development")
    system: SystemConfig = Field(default_factory=SystemConfig)
    api: ApiConfig = Field(default_factory=ApiConfig)
    processing: ProcessingConfig = Field(default_factory=ProcessingConfig)

    @classmethod
    def from_env(cls, environ: Optional[Dict[str, str]] = None) -> "Settings":
        """
        Build settings from environment variables.

        Recognized variables (all optional):
            PIXELKIT_ENV, PIXELKIT_LOG_LEVEL, PIXELKIT_DEBUG,
            PIXELKIT_HOST, PIXELKIT_PORT, PIXELKIT_CORS_ORIGINS (comma separated),
            PIXELKIT_EXECUTION_STRATEGY, PIXELKIT_MAX_WORKERS, PIXELKIT_JPEG_QUALITY
        """
        env = os.environ if environ is None else environ

        def get(name: str):
            return env.get(f"{ENV_PREFIX}{name}")

        system: Dict[str, Any] = {}
        api: Dict[str, Any] = {}
        processing: Dict[str, Any] = {}

        if get("LOG_LEVEL"):
            system["log_level"] = get("LOG_LEVEL")
        if get("DEBUG"):
            system["debug"] = get("DEBUG").lower() in ("1", "true", "yes", "on")
        if get("HOST"):
            api["host"] = get("HOST")
        if get("PORT"):
            api["port"] = int(get("PORT"))
        if get("CORS_ORIGINS"):
            api["cors_origins"] = [o.strip() for o in get("CORS_ORIGINS").split(",") if o.strip()]
        if get("EXECUTION_STRATEGY"):
            processing["execution_strategy"] = get("EXECUTION_STRATEGY").lower()
        if get("MAX_WORKERS"):
            processing["max_workers"] = int(get("MAX_WORKERS"))
        if get("JPEG_QUALITY"):
            processing["jpeg_quality"] = int(get("JPEG_QUALITY"))

        return cls(
            environment=get("ENV") or "development",
            system=SystemConfig(**system),
            api=ApiConfig(**api),
            processing=ProcessingConfig(**processing),
        )

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings (parsed from the environment on first call)."""
    settings = Settings.from_env()
    logger.debug(f"Loaded settings for environment '{settings.environment}'")
    return settings
