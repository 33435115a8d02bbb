"""
Utility decorators and context managers.
"""

import functools
import logging
import time
from contextlib import contextmanager
from typing import Dict, Iterator

logger = logging.getLogger(__name__)


@contextmanager
def timer() -> Iterator[Dict[str, float]]:
    """
    Measure wall time of a block.

    The yielded dict receives the elapsed milliseconds under "ms" when the
    block exits, so read it after the with statement.

    Example:
        >>> with timer() as t:
        ...     result = convolve(image, kernel, BorderMode.ZERO)
        >>> elapsed = t["ms"]
    """
    timing = {"ms": 0.0}
    start = time.perf_counter()
    try:
        yield timing
    finally:
        timing["ms"] = (time.perf_counter() - start) * 1000.0


def log_duration(func):
    """Log how long an engine entry point took at debug level."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        with timer() as t:
            result = func(*args, **kwargs)
        logger.debug(f"{func.__name__} took {t['ms']:.2f} ms")
        return result

    return wrapper
