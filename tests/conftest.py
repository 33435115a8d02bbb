"""
Pytest configuration and fixtures for PixelKit tests
"""

import cv2
import numpy as np
import pytest

from pixelkit.core.buffer import PixelBuffer
from pixelkit.core.execution import SequentialStrategy, ThreadPoolStrategy


@pytest.fixture
def rng():
    """Deterministic random generator"""
    return np.random.default_rng(12345)


@pytest.fixture
def test_image():
    """Create a 64x48 RGB test image with some shapes"""
    image = np.zeros((48, 64, 3), dtype=np.uint8)
    cv2.rectangle(image, (8, 8), (30, 30), (255, 255, 255), -1)
    cv2.circle(image, (46, 28), 12, (128, 64, 200), -1)
    return PixelBuffer.from_array(image)


@pytest.fixture
def gray_image():
    """Create a 32x24 grayscale horizontal gradient"""
    row = np.linspace(0, 255, 32).astype(np.uint8)
    return PixelBuffer.from_array(np.tile(row, (24, 1)))


@pytest.fixture
def impulse_image():
    """10x10 grayscale image, all zero except (5, 5) = 255"""
    buffer = PixelBuffer.zeros(10, 10, channels=1)
    buffer.set_pixel(5, 5, 255)
    return buffer


@pytest.fixture
def sequential():
    return SequentialStrategy()


@pytest.fixture
def thread_pool():
    return ThreadPoolStrategy(max_workers=4)


@pytest.fixture
def random_buffer(rng):
    """Factory for random buffers: random_buffer(width, height, channels=3)"""

    def make(width: int, height: int, channels: int = 3) -> PixelBuffer:
        data = rng.integers(0, 256, size=(height, width, channels), dtype=np.uint8)
        return PixelBuffer.from_array(data)

    return make
