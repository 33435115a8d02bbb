"""
Row execution strategies.

Convolution computes every output row independently, so the row loop can run
on the calling thread or be fanned out to a worker pool. Each row function
returns a private array; strategies only decide where it runs and always
return results in row order, which keeps the output byte-identical across
strategies.
"""

import logging
from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Optional, Union

import numpy as np

from pixelkit.core.constants import ExecutionConstants
from pixelkit.core.enums import ExecutionMode

logger = logging.getLogger(__name__)

RowFunction = Callable[[int], np.ndarray]


class ExecutionStrategy(ABC):
    """Maps a row function over ``range(height)``."""

    name: str = "abstract"

    @abstractmethod
    def map_rows(self, row_fn: RowFunction, height: int) -> List[np.ndarray]:
        """
        Compute every row.

        Args:
            row_fn: Function computing output row ``y``
            height: Number of rows

        Returns:
            Row arrays ordered by row index
        """

    def run(self, row_fn: RowFunction, height: int, row_shape: tuple) -> np.ndarray:
        """Compute every row and stack the results into one (height, ...) array."""
        if height == 0:
            return np.zeros((0,) + tuple(row_shape), dtype=np.uint8)
        return np.stack(self.map_rows(row_fn, height))

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class SequentialStrategy(ExecutionStrategy):
    """Computes rows one after another on the calling thread."""

    name = ExecutionMode.SEQUENTIAL.value

    def map_rows(self, row_fn: RowFunction, height: int) -> List[np.ndarray]:
        return [row_fn(y) for y in range(height)]


class ThreadPoolStrategy(ExecutionStrategy):
    """
    Fans rows out to a thread pool.

    numpy releases the GIL inside its array kernels, so rows make progress
    concurrently. A pool is created per call and shut down before returning.
    """

    name = ExecutionMode.THREAD.value

    def __init__(self, max_workers: int = ExecutionConstants.DEFAULT_MAX_WORKERS):
        if max_workers < ExecutionConstants.MIN_WORKERS:
            raise ValueError(f"max_workers must be >= {ExecutionConstants.MIN_WORKERS}, got {max_workers}")
        self.max_workers = max_workers

    def map_rows(self, row_fn: RowFunction, height: int) -> List[np.ndarray]:
        workers = min(self.max_workers, height) or 1
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="pixelkit-row") as pool:
            # map() yields in submission order regardless of completion order
            return list(pool.map(row_fn, range(height)))

    def __repr__(self) -> str:
        return f"ThreadPoolStrategy(max_workers={self.max_workers})"


def get_strategy(
    mode: Union[str, ExecutionMode, ExecutionStrategy, None] = None,
    max_workers: Optional[int] = None,
) -> ExecutionStrategy:
    """
    Build an execution strategy.

    Args:
        mode: Strategy instance, mode name ("sequential"/"thread") or None for
            the configured default
        max_workers: Worker count for the thread strategy (configured default
            if None)

    Returns:
        ExecutionStrategy instance
    """
    if isinstance(mode, ExecutionStrategy):
        return mode

    if mode is None or max_workers is None:
        from pixelkit.config import get_settings

        processing = get_settings().processing
        if mode is None:
            mode = processing.execution_strategy
        if max_workers is None:
            max_workers = processing.max_workers

    try:
        mode = ExecutionMode(mode.lower() if isinstance(mode, str) else mode)
    except ValueError:
        raise ValueError(f"Unknown execution strategy: {mode}") from None

    if mode == ExecutionMode.THREAD:
        return ThreadPoolStrategy(max_workers=max_workers)
    return SequentialStrategy()
