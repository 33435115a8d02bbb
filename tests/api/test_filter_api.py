"""
API Integration Tests for Filter Endpoints
"""

import pytest

from pixelkit.core.convolution import ConvolutionEngine
from pixelkit.core.enums import BorderMode
from pixelkit.core.kernel import Kernel


class TestConvolveAPI:
    """Integration tests for /api/filter/convolve"""

    def test_identity_kernel(self, client, encode, decode, test_image):
        request = {"image_base64": encode(test_image), "kernel": {"name": "identity"}, "border_mode": "zero"}
        response = client.post("/api/filter/convolve", json=request)

        assert response.status_code == 200
        data = response.json()
        assert data["width"] == 64
        assert data["height"] == 48
        assert data["channels"] == 3
        assert data["processing_time_ms"] >= 0
        assert decode(data) == test_image

    @pytest.mark.parametrize("strategy", ["sequential", "thread"])
    def test_matches_engine(self, client, encode, decode, gray_image, sequential, strategy):
        request = {
            "image_base64": encode(gray_image),
            "kernel": {"name": "gaussian", "size": 5, "sigma": 1.5},
            "border_mode": "reflect",
            "strategy": strategy,
        }
        response = client.post("/api/filter/convolve", json=request)

        assert response.status_code == 200
        expected = ConvolutionEngine(sequential).convolve(gray_image, Kernel.gaussian(5, 1.5), BorderMode.REFLECT)
        assert decode(response.json()) == expected

    def test_explicit_weights(self, client, encode, decode, gray_image, sequential):
        request = {
            "image_base64": encode(gray_image),
            "kernel": {"width": 3, "height": 1, "weights": [1.0, 0.0, 0.0]},
            "border_mode": "wrap",
        }
        response = client.post("/api/filter/convolve", json=request)

        assert response.status_code == 200
        expected = ConvolutionEngine(sequential).convolve(gray_image, Kernel(3, 1, [1.0, 0.0, 0.0]), "wrap")
        assert decode(response.json()) == expected

    def test_force_grayscale_output(self, client, encode, test_image):
        request = {"image_base64": encode(test_image), "kernel": {"name": "sobel_x"}, "channels": 1}
        response = client.post("/api/filter/convolve", json=request)

        assert response.status_code == 200
        assert response.json()["channels"] == 1

    def test_even_kernel_rejected(self, client, encode, test_image):
        request = {
            "image_base64": encode(test_image),
            "kernel": {"width": 2, "height": 1, "weights": [0.5, 0.5]},
        }
        response = client.post("/api/filter/convolve", json=request)

        assert response.status_code == 400
        assert response.json()["error"] == "processing_error"

    @pytest.mark.parametrize(
        "kernel",
        [
            {"width": 103, "height": 1, "weights": [0.0] * 103},
            {"width": 1, "height": 103, "weights": [0.0] * 103},
            {"weights": [0.0] * (101 * 101 + 1)},
        ],
    )
    def test_oversized_explicit_kernel_rejected(self, client, encode, test_image, kernel):
        request = {"image_base64": encode(test_image), "kernel": kernel}
        response = client.post("/api/filter/convolve", json=request)

        assert response.status_code == 422

    def test_unknown_kernel_name(self, client, encode, test_image):
        request = {"image_base64": encode(test_image), "kernel": {"name": "emboss"}}
        response = client.post("/api/filter/convolve", json=request)

        assert response.status_code == 422

    def test_unknown_border_mode(self, client, encode, test_image):
        request = {"image_base64": encode(test_image), "kernel": {"name": "sharpen"}, "border_mode": "mirror"}
        response = client.post("/api/filter/convolve", json=request)

        assert response.status_code == 422

    def test_invalid_image(self, client):
        request = {"image_base64": "not-an-image", "kernel": {"name": "identity"}}
        response = client.post("/api/filter/convolve", json=request)

        assert response.status_code == 400
        assert response.json()["error"] == "invalid_image"

    def test_image_too_large(self, client, encode):
        from pixelkit.core.buffer import PixelBuffer

        request = {"image_base64": encode(PixelBuffer.zeros(600, 2)), "kernel": {"name": "identity"}}
        response = client.post("/api/filter/convolve", json=request)

        assert response.status_code == 413
        assert response.json()["limit"] == 512


class TestSeparableAPI:
    """Integration tests for /api/filter/separable"""

    def test_separable(self, client, encode, decode, test_image, sequential):
        taps = [0.25, 0.5, 0.25]
        request = {"image_base64": encode(test_image), "kernel_x": taps, "kernel_y": taps, "border_mode": "replicate"}
        response = client.post("/api/filter/separable", json=request)

        assert response.status_code == 200
        expected = ConvolutionEngine(sequential).convolve_separable(test_image, taps, taps, BorderMode.REPLICATE)
        assert decode(response.json()) == expected

    def test_even_length_rejected(self, client, encode, test_image):
        request = {"image_base64": encode(test_image), "kernel_x": [0.5, 0.5], "kernel_y": [1.0]}
        response = client.post("/api/filter/separable", json=request)

        assert response.status_code == 400

    @pytest.mark.parametrize("axis", ["kernel_x", "kernel_y"])
    def test_oversized_taps_rejected(self, client, encode, test_image, axis):
        request = {"image_base64": encode(test_image), "kernel_x": [1.0], "kernel_y": [1.0]}
        request[axis] = [0.0] * 103
        response = client.post("/api/filter/separable", json=request)

        assert response.status_code == 422
