"""
Border policies for convolution.

Resolves a tap coordinate that may fall outside the image against an extent
n > 0. Reflect and Wrap apply a single correction step, so they are exact only
while the overshoot is at most one extent.
"""

from typing import Optional

import numpy as np

from pixelkit.core.enums import BorderMode


def replicate_coordinate(coord: int, size: int) -> int:
    """Clamp to the nearest edge."""
    return max(0, min(coord, size - 1))


def reflect_coordinate(coord: int, size: int) -> int:
    """Mirror around the edge without repeating it (abcd|dcba)."""
    c = coord
    if c < 0:
        c = -c - 1
    if c >= size:
        c = 2 * size - c - 1
    return max(0, min(c, size - 1))


def wrap_coordinate(coord: int, size: int) -> int:
    """Tile the image periodically."""
    return ((coord % size) + size) % size


def resolve_coordinate(coord: int, size: int, mode: BorderMode) -> Optional[int]:
    """
    Resolve a single coordinate under a border mode.

    Args:
        coord: Coordinate to resolve, possibly out of range
        size: Extent of the axis (must be > 0)
        mode: Border policy

    Returns:
        A coordinate in [0, size), or None when the Zero policy asks for a
        zero sample instead
    """
    if mode == BorderMode.ZERO:
        return coord if 0 <= coord < size else None
    if mode == BorderMode.REPLICATE:
        return replicate_coordinate(coord, size)
    if mode == BorderMode.REFLECT:
        return reflect_coordinate(coord, size)
    if mode == BorderMode.WRAP:
        return wrap_coordinate(coord, size)
    raise ValueError(f"Unknown border mode: {mode}")


def resolve_indices(coords: np.ndarray, size: int, mode: BorderMode) -> np.ndarray:
    """
    Vectorized resolve_coordinate for a whole axis.

    Zero-policy misses map to the sentinel index ``size``; callers append one
    zero sample to the axis so the sentinel reads as 0.

    Returns:
        int64 array of resolved indices in [0, size]
    """
    c = np.asarray(coords, dtype=np.int64)

    if mode == BorderMode.ZERO:
        return np.where((c < 0) | (c >= size), size, c)
    if mode == BorderMode.REPLICATE:
        return np.clip(c, 0, size - 1)
    if mode == BorderMode.REFLECT:
        c = np.where(c < 0, -c - 1, c)
        c = np.where(c >= size, 2 * size - c - 1, c)
        return np.clip(c, 0, size - 1)
    if mode == BorderMode.WRAP:
        return ((c % size) + size) % size
    raise ValueError(f"Unknown border mode: {mode}")
