"""
API Integration Tests for Transform Endpoints
"""

import pytest


class TestResizeAPI:
    """Integration tests for /api/transform/resize"""

    @pytest.mark.parametrize("method", ["nearest", "bilinear"])
    def test_resize(self, client, encode, decode, test_image, method):
        request = {"image_base64": encode(test_image), "width": 32, "height": 20, "method": method}
        response = client.post("/api/transform/resize", json=request)

        assert response.status_code == 200
        data = response.json()
        assert (data["width"], data["height"]) == (32, 20)
        assert decode(data).dimensions == (32, 20)

    def test_zero_size_rejected(self, client, encode, test_image):
        request = {"image_base64": encode(test_image), "width": 0, "height": 20}
        response = client.post("/api/transform/resize", json=request)

        assert response.status_code == 422

    def test_target_too_large(self, client, encode, test_image):
        request = {"image_base64": encode(test_image), "width": 1000, "height": 20}
        response = client.post("/api/transform/resize", json=request)

        assert response.status_code == 413
        assert response.json()["error"] == "image_too_large"


class TestCropAPI:
    """Integration tests for /api/transform/crop"""

    def test_crop(self, client, encode, decode, test_image):
        request = {"image_base64": encode(test_image), "region": {"x": 8, "y": 8, "width": 10, "height": 5}}
        response = client.post("/api/transform/crop", json=request)

        assert response.status_code == 200
        cropped = decode(response.json())
        assert cropped.dimensions == (10, 5)
        assert cropped.get_pixel(0, 0) == (255, 255, 255)

    def test_region_outside_image(self, client, encode, test_image):
        request = {"image_base64": encode(test_image), "region": {"x": 60, "y": 0, "width": 10, "height": 5}}
        response = client.post("/api/transform/crop", json=request)

        assert response.status_code == 400
        data = response.json()
        assert data["error"] == "processing_error"
        assert data["region"] == {"x": 60, "y": 0, "width": 10, "height": 5}
        assert data["image_size"] == {"width": 64, "height": 48}

    def test_negative_region(self, client, encode, test_image):
        request = {"image_base64": encode(test_image), "region": {"x": -1, "y": 0, "width": 10, "height": 5}}
        response = client.post("/api/transform/crop", json=request)

        assert response.status_code == 422


class TestRotateAPI:
    """Integration tests for the rotation endpoints"""

    @pytest.mark.parametrize("angle,size", [(90, (48, 64)), (180, (64, 48)), (270, (48, 64))])
    def test_rotate(self, client, encode, test_image, angle, size):
        request = {"image_base64": encode(test_image), "angle": angle}
        response = client.post("/api/transform/rotate", json=request)

        assert response.status_code == 200
        data = response.json()
        assert (data["width"], data["height"]) == size

    def test_rotate_rejects_arbitrary_angle(self, client, encode, test_image):
        request = {"image_base64": encode(test_image), "angle": 45}
        response = client.post("/api/transform/rotate", json=request)

        assert response.status_code == 422

    def test_rotate_custom_zero_is_identity(self, client, encode, decode, test_image):
        request = {"image_base64": encode(test_image), "angle": 0}
        response = client.post("/api/transform/rotate-custom", json=request)

        assert response.status_code == 200
        assert decode(response.json()) == test_image

    def test_rotate_custom_grows_canvas(self, client, encode, gray_image):
        request = {"image_base64": encode(gray_image), "angle": 0.5, "radians": True, "method": "nearest"}
        response = client.post("/api/transform/rotate-custom", json=request)

        assert response.status_code == 200
        data = response.json()
        assert data["width"] > gray_image.width
        assert data["height"] > gray_image.height
        assert data["channels"] == 1


class TestSystemAPI:
    """Integration tests for system endpoints"""

    def test_info(self, client):
        response = client.get("/api/system/info")

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "PixelKit"
        assert data["max_image_dimension"] == 512
        assert data["execution_strategy"] in ("sequential", "thread")

    def test_root_and_health(self, client):
        assert client.get("/").json()["status"] == "running"

        health = client.get("/health").json()
        assert health["status"] == "healthy"
        assert health["services"]["processing_service"] is True
