"""
Unit tests for Kernel
"""

import math

import numpy as np
import pytest

from pixelkit.core.constants import KernelConstants
from pixelkit.core.errors import InvalidKernelSize
from pixelkit.core.kernel import Kernel


class TestKernelConstruction:
    """Test kernel validation"""

    @pytest.mark.parametrize("width,height", [(2, 3), (3, 2), (4, 4), (0, 1)])
    def test_even_or_empty_dimensions_rejected(self, width, height):
        with pytest.raises(InvalidKernelSize):
            Kernel(width, height, [0.0] * (width * height))

    def test_weight_count_must_match(self):
        with pytest.raises(InvalidKernelSize):
            Kernel(3, 3, [1.0] * 8)

    def test_row_major_weights(self):
        kernel = Kernel(3, 1, [1.0, 2.0, 3.0])

        assert kernel.width == 3
        assert kernel.height == 1
        assert kernel.half_width == 1
        assert kernel.half_height == 0
        assert kernel.weight(2, 0) == 3.0

    def test_weights_are_immutable(self):
        kernel = Kernel.sharpen()

        with pytest.raises(ValueError):
            kernel.weights[0] = 1.0

    def test_from_array(self):
        kernel = Kernel.from_array([[0, 1, 0], [1, -4, 1], [0, 1, 0]])

        assert kernel == Kernel.laplacian()

    def test_from_outer(self):
        kernel = Kernel.from_outer([1.0, 2.0, 1.0], [1.0, 0.0, -1.0])

        assert kernel.width == 3
        assert kernel.height == 3
        np.testing.assert_array_equal(
            kernel.as_array(), [[1.0, 2.0, 1.0], [0.0, 0.0, 0.0], [-1.0, -2.0, -1.0]]
        )


class TestNamedKernels:
    """Test the named constructors"""

    def test_identity(self):
        kernel = Kernel.identity(5)

        assert kernel.total() == 1.0
        assert kernel.weight(2, 2) == 1.0
        assert kernel.weight(0, 0) == 0.0

    def test_box_blur_is_uniform(self):
        kernel = Kernel.box_blur(3)

        assert np.all(kernel.weights == np.float32(1.0 / 9.0))
        assert kernel.total() == pytest.approx(1.0, abs=KernelConstants.NORMALIZATION_TOLERANCE)

    def test_box_blur_size_one(self):
        assert Kernel.box_blur(1).weight(0, 0) == 1.0

    def test_box_blur_even_size(self):
        with pytest.raises(InvalidKernelSize):
            Kernel.box_blur(4)

    @pytest.mark.parametrize("size", [3, 5, 9, 15, 21])
    @pytest.mark.parametrize("sigma", [0.5, 1.0, 2.5, 7.0])
    def test_gaussian_normalized(self, size, sigma):
        kernel = Kernel.gaussian(size, sigma)

        assert kernel.total() == pytest.approx(1.0, abs=KernelConstants.NORMALIZATION_TOLERANCE)

    def test_gaussian_peaks_at_centre_and_is_symmetric(self):
        weights = Kernel.gaussian(5, 1.0).as_array()

        assert weights.argmax() == 12
        np.testing.assert_array_equal(weights, weights.T)
        np.testing.assert_array_equal(weights, weights[::-1, ::-1])

    @pytest.mark.parametrize("size,sigma", [(5, 1.7), (9, 2.0), (21, 3.3)])
    def test_gaussian_normalized_by_sequential_sum(self, size, sigma):
        """Test weights are divided by the float32 sum taken in row-major order"""
        half = size // 2
        offsets = np.arange(-half, half + 1, dtype=np.float32)
        xs, ys = np.meshgrid(offsets, offsets)
        s = np.float32(sigma)
        raw = (np.float32(1.0) / (np.float32(2.0 * math.pi) * s * s)) * np.exp(
            -(xs * xs + ys * ys) / (np.float32(2.0) * s * s)
        )

        total = np.float32(0.0)
        for value in raw.ravel():
            total = np.float32(total + value)
        expected = (raw / total).ravel()

        np.testing.assert_array_equal(Kernel.gaussian(size, sigma).weights, expected)

    def test_gaussian_rejects_bad_sigma(self):
        with pytest.raises(ValueError):
            Kernel.gaussian(3, 0.0)

    def test_fixed_tables(self):
        assert Kernel.sobel_x().weight(0, 0) == -1.0
        assert Kernel.sobel_x().weight(2, 1) == 2.0
        assert Kernel.sobel_y().weight(1, 2) == 2.0
        assert Kernel.laplacian().weight(1, 1) == -4.0
        assert Kernel.sharpen().weight(1, 1) == 5.0
        assert Kernel.sharpen().total() == 1.0
