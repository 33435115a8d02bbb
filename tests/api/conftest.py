"""
Pytest configuration for API integration tests
"""

import pytest
from fastapi.testclient import TestClient

from pixelkit.core.image.converters import from_base64, to_base64


@pytest.fixture(scope="function")
def client():
    """
    Create a test client with properly initialized app state.
    Each test gets a fresh service to avoid state contamination.
    """
    from pixelkit.config import ApiConfig, Settings
    from pixelkit.main import app
    from pixelkit.services.processing_service import ProcessingService

    settings = Settings(api=ApiConfig(max_image_dimension=512))

    app.state.settings = settings
    app.state.processing_service = ProcessingService(settings)

    # Create test client (no context manager so lifespan state is not replaced)
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def encode():
    """Encode a PixelBuffer for a request body"""
    return to_base64


@pytest.fixture
def decode():
    """Decode the image_base64 field of a response"""

    def _decode(data, channels=None):
        return from_base64(data["image_base64"], channels)

    return _decode
