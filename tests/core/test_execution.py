"""
Unit tests for execution strategies
"""

import numpy as np
import pytest

from pixelkit.core.convolution import ConvolutionEngine
from pixelkit.core.enums import BorderMode, ExecutionMode
from pixelkit.core.execution import SequentialStrategy, ThreadPoolStrategy, get_strategy
from pixelkit.core.kernel import Kernel


class TestStrategies:
    """Test strategy construction and row ordering"""

    def test_get_strategy_by_name(self):
        assert isinstance(get_strategy("sequential", 2), SequentialStrategy)
        assert isinstance(get_strategy(ExecutionMode.THREAD, 2), ThreadPoolStrategy)
        assert get_strategy("THREAD", 3).max_workers == 3

    def test_get_strategy_passes_instances_through(self, thread_pool):
        assert get_strategy(thread_pool) is thread_pool

    def test_unknown_strategy(self):
        with pytest.raises(ValueError, match="Unknown execution strategy"):
            get_strategy("gpu", 2)

    def test_invalid_worker_count(self):
        with pytest.raises(ValueError):
            ThreadPoolStrategy(max_workers=0)

    @pytest.mark.parametrize("strategy", [SequentialStrategy(), ThreadPoolStrategy(max_workers=8)])
    def test_rows_returned_in_order(self, strategy):
        rows = strategy.map_rows(lambda y: np.full((4, 1), y, dtype=np.uint8), 50)

        assert [int(row[0, 0]) for row in rows] == list(range(50))

    def test_run_with_no_rows(self, thread_pool):
        result = thread_pool.run(lambda y: np.zeros((3, 1), dtype=np.uint8), 0, (3, 1))

        assert result.shape == (0, 3, 1)


class TestParallelDeterminism:
    """Sequential and thread-pool convolution must be byte-identical"""

    @pytest.mark.parametrize("mode", list(BorderMode))
    @pytest.mark.parametrize("size", [1, 3, 5, 7])
    def test_convolve_identical(self, random_buffer, rng, sequential, thread_pool, mode, size):
        image = random_buffer(int(rng.integers(1, 64)), int(rng.integers(1, 64)), 3)
        kernel = Kernel(size, size, rng.normal(0.0, 0.5, size * size))

        expected = ConvolutionEngine(sequential).convolve(image, kernel, mode)
        actual = ConvolutionEngine(thread_pool).convolve(image, kernel, mode)

        assert actual.raw_data() == expected.raw_data()

    @pytest.mark.parametrize("mode", list(BorderMode))
    def test_convolve_identical_large(self, random_buffer, sequential, thread_pool, mode):
        image = random_buffer(256, 256, 1)
        kernel = Kernel.gaussian(5, 1.5)

        expected = ConvolutionEngine(sequential).convolve(image, kernel, mode)
        actual = ConvolutionEngine(thread_pool).convolve(image, kernel, mode)

        assert actual.raw_data() == expected.raw_data()

    @pytest.mark.parametrize("mode", list(BorderMode))
    def test_separable_identical(self, random_buffer, sequential, thread_pool, mode):
        image = random_buffer(97, 61, 3)
        kernel_x = [0.1, 0.2, 0.4, 0.2, 0.1]
        kernel_y = [-0.5, 2.0, -0.5]

        expected = ConvolutionEngine(sequential).convolve_separable(image, kernel_x, kernel_y, mode)
        actual = ConvolutionEngine(thread_pool).convolve_separable(image, kernel_x, kernel_y, mode)

        assert actual.raw_data() == expected.raw_data()
