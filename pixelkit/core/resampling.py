"""
Geometric resampling: resize, crop and rotation.

Rounding policy differs from convolution on purpose: bilinear samples are
rounded to nearest (half away from zero) while convolution truncates.
Arbitrary rotation grows the canvas to the rotated bounding box and fills
every destination pixel whose source lies outside the image with zero,
independent of any convolution border mode.
"""

import logging
import math
from dataclasses import dataclass
from typing import Union

import numpy as np

from pixelkit.core.buffer import PixelBuffer
from pixelkit.core.constants import BufferConstants
from pixelkit.core.enums import InterpolationMethod, RotationAngle
from pixelkit.core.errors import InvalidCropRegion
from pixelkit.core.utils.decorators import log_duration
from pixelkit.core.utils.enum_converter import parse_enum

logger = logging.getLogger(__name__)

_PI = np.float32(math.pi)


@dataclass(frozen=True)
class Rotation:
    """
    Arbitrary rotation angle, clockwise in image coordinates (y down).

    Use Rotation.degrees(...) or Rotation.radians(...) to build one.
    """

    value: float
    in_degrees: bool = True

    @classmethod
    def degrees(cls, value: float) -> "Rotation":
        return cls(float(value), True)

    @classmethod
    def radians(cls, value: float) -> "Rotation":
        return cls(float(value), False)

    def to_radians(self) -> float:
        if self.in_degrees:
            return float(np.float32(self.value) * _PI / np.float32(180.0))
        return self.value

    def to_degrees(self) -> float:
        if self.in_degrees:
            return self.value
        return float(np.float32(self.value) * np.float32(180.0) / _PI)


def _round_half_away(values: np.ndarray) -> np.ndarray:
    """Round half away from zero, exactly, for float arrays."""
    magnitude = np.abs(values)
    floor = np.floor(magnitude)
    rounded = floor + (magnitude - floor >= 0.5)
    return np.copysign(rounded, values)


def _to_uint8(values: np.ndarray) -> np.ndarray:
    rounded = _round_half_away(values)
    return np.clip(rounded, BufferConstants.MIN_VALUE, BufferConstants.MAX_VALUE).astype(np.uint8)


def _bilinear(src: np.ndarray, sx: np.ndarray, sy: np.ndarray) -> np.ndarray:
    """
    Interpolate ``src`` at in-bounds float32 coordinates.

    Args:
        src: (H, W, C) uint8 source
        sx: float32 x coordinates, any shape, all in [0, W)
        sy: float32 y coordinates broadcastable to sx, all in [0, H)

    Returns:
        float32 samples of shape sx.shape + (C,)
    """
    height, width = src.shape[:2]

    x1 = np.floor(sx).astype(np.int64)
    y1 = np.floor(sy).astype(np.int64)
    x2 = np.minimum(x1 + 1, width - 1)
    y2 = np.minimum(y1 + 1, height - 1)

    dx = (sx - x1.astype(np.float32))[..., np.newaxis]
    dy = (sy - y1.astype(np.float32))[..., np.newaxis]
    one = np.float32(1.0)

    p11 = src[y1, x1].astype(np.float32)
    p12 = src[y2, x1].astype(np.float32)
    p21 = src[y1, x2].astype(np.float32)
    p22 = src[y2, x2].astype(np.float32)

    return (
        p11 * (one - dx) * (one - dy)
        + p21 * dx * (one - dy)
        + p12 * (one - dx) * dy
        + p22 * dx * dy
    )


class ResamplingEngine:
    """Stateless geometric transforms over pixel buffers."""

    @log_duration
    def resize(
        self,
        image: PixelBuffer,
        new_width: int,
        new_height: int,
        method: Union[InterpolationMethod, str] = InterpolationMethod.BILINEAR,
    ) -> PixelBuffer:
        """
        Resize an image.

        Args:
            image: Input buffer (non-empty)
            new_width: Target width (>= 1)
            new_height: Target height (>= 1)
            method: Nearest neighbour or bilinear interpolation

        Returns:
            New buffer of size new_width x new_height
        """
        method = parse_enum(method, InterpolationMethod)
        if new_width < 1 or new_height < 1:
            raise ValueError(f"Target size must be positive, got {new_width}x{new_height}")
        if image.width == 0 or image.height == 0:
            raise ValueError("Cannot resize an empty image")

        logger.debug(
            f"resize {image.width}x{image.height} -> {new_width}x{new_height} ({method.value})"
        )

        src = image.as_array()
        if method == InterpolationMethod.NEAREST:
            data = self._resize_nearest(src, new_width, new_height)
        else:
            data = self._resize_bilinear(src, new_width, new_height)
        return PixelBuffer._wrap(data)

    @staticmethod
    def _resize_nearest(src: np.ndarray, new_width: int, new_height: int) -> np.ndarray:
        height, width = src.shape[:2]
        x_ratio = np.float32(width) / np.float32(new_width)
        y_ratio = np.float32(height) / np.float32(new_height)

        src_x = (np.arange(new_width, dtype=np.float32) * x_ratio).astype(np.int64)
        src_y = (np.arange(new_height, dtype=np.float32) * y_ratio).astype(np.int64)
        src_x = np.minimum(src_x, width - 1)
        src_y = np.minimum(src_y, height - 1)

        return src[src_y[:, np.newaxis], src_x[np.newaxis, :]]

    @staticmethod
    def _resize_bilinear(src: np.ndarray, new_width: int, new_height: int) -> np.ndarray:
        height, width = src.shape[:2]
        x_ratio = np.float32(width - 1) / np.float32(new_width)
        y_ratio = np.float32(height - 1) / np.float32(new_height)

        sx = (np.arange(new_width, dtype=np.float32) * x_ratio)[np.newaxis, :]
        sy = (np.arange(new_height, dtype=np.float32) * y_ratio)[:, np.newaxis]
        sx, sy = np.broadcast_arrays(sx, sy)

        return _to_uint8(_bilinear(src, sx, sy))

    def crop(self, image: PixelBuffer, x: int, y: int, width: int, height: int) -> PixelBuffer:
        """
        Cut out a rectangle.

        The region is validated strictly and never clipped to the image.

        Raises:
            InvalidCropRegion: If x + width > image.width or y + height > image.height
                (or any argument is negative)
        """
        if min(x, y, width, height) < 0 or x + width > image.width or y + height > image.height:
            logger.warning(
                f"Rejected crop {width}x{height} at ({x},{y}) on {image.width}x{image.height} image"
            )
            raise InvalidCropRegion((x, y, width, height), image.dimensions)

        return PixelBuffer._wrap(image.as_array()[y : y + height, x : x + width].copy())

    def rotate(self, image: PixelBuffer, angle: Union[RotationAngle, int]) -> PixelBuffer:
        """
        Rotate clockwise by 90, 180 or 270 degrees.

        Pure index permutation, no interpolation. 90 and 270 swap width and height.
        """
        angle = parse_enum(angle, RotationAngle)
        src = image.as_array()

        if angle == RotationAngle.ROTATE_90:
            data = np.rot90(src, k=-1)
        elif angle == RotationAngle.ROTATE_180:
            data = src[::-1, ::-1]
        else:
            data = np.rot90(src, k=1)

        return PixelBuffer._wrap(data.copy())

    @log_duration
    def rotate_custom(
        self,
        image: PixelBuffer,
        angle: Union[Rotation, float],
        method: Union[InterpolationMethod, str] = InterpolationMethod.BILINEAR,
    ) -> PixelBuffer:
        """
        Rotate by an arbitrary angle without clipping.

        The output is sized to the bounding box of the rotated image. Every
        destination pixel is mapped back about both centres into the source
        and sampled; sources outside [0, W) x [0, H) produce zero.

        Args:
            image: Input buffer
            angle: Rotation, or a plain number of degrees (clockwise)
            method: Nearest neighbour or bilinear sampling

        Returns:
            New buffer containing the whole rotated image
        """
        method = parse_enum(method, InterpolationMethod)
        if not isinstance(angle, Rotation):
            angle = Rotation.degrees(angle)

        theta = np.float32(angle.to_radians())
        cos_a = np.cos(theta)
        sin_a = np.sin(theta)

        w = np.float32(image.width)
        h = np.float32(image.height)
        corners = np.array([[0.0, 0.0], [w, 0.0], [0.0, h], [w, h]], dtype=np.float32)
        rx = corners[:, 0] * cos_a - corners[:, 1] * sin_a
        ry = corners[:, 0] * sin_a + corners[:, 1] * cos_a

        new_width = int(math.ceil(float(rx.max() - rx.min())))
        new_height = int(math.ceil(float(ry.max() - ry.min())))

        logger.debug(
            f"rotate_custom {image.width}x{image.height} by {angle.to_degrees():.3f} deg "
            f"-> {new_width}x{new_height} ({method.value})"
        )

        channels = image.channels
        out = np.zeros((new_height, new_width, channels), dtype=np.uint8)
        if new_width == 0 or new_height == 0 or image.width == 0 or image.height == 0:
            return PixelBuffer._wrap(out)

        center_x = w / np.float32(2.0)
        center_y = h / np.float32(2.0)
        new_center_x = np.float32(new_width) / np.float32(2.0)
        new_center_y = np.float32(new_height) / np.float32(2.0)

        dx = (np.arange(new_width, dtype=np.float32) - new_center_x)[np.newaxis, :]
        dy = (np.arange(new_height, dtype=np.float32) - new_center_y)[:, np.newaxis]

        # Inverse rotation back into source coordinates
        src_x = dx * cos_a + dy * sin_a + center_x
        src_y = -dx * sin_a + dy * cos_a + center_y

        src = image.as_array()
        if method == InterpolationMethod.NEAREST:
            ix = _round_half_away(src_x).astype(np.int64)
            iy = _round_half_away(src_y).astype(np.int64)
            inside = (ix >= 0) & (iy >= 0) & (ix < image.width) & (iy < image.height)
            out[inside] = src[iy[inside], ix[inside]]
        else:
            inside = (src_x >= 0) & (src_y >= 0) & (src_x < w) & (src_y < h)
            samples = _bilinear(src, src_x[inside], src_y[inside])
            out[inside] = _to_uint8(samples)

        return PixelBuffer._wrap(out)


_engine = ResamplingEngine()


def resize(
    image: PixelBuffer,
    new_width: int,
    new_height: int,
    method: Union[InterpolationMethod, str] = InterpolationMethod.BILINEAR,
) -> PixelBuffer:
    return _engine.resize(image, new_width, new_height, method)


def crop(image: PixelBuffer, x: int, y: int, width: int, height: int) -> PixelBuffer:
    return _engine.crop(image, x, y, width, height)


def rotate(image: PixelBuffer, angle: Union[RotationAngle, int]) -> PixelBuffer:
    return _engine.rotate(image, angle)


def rotate_custom(
    image: PixelBuffer,
    angle: Union[Rotation, float],
    method: Union[InterpolationMethod, str] = InterpolationMethod.BILINEAR,
) -> PixelBuffer:
    return _engine.rotate_custom(image, angle, method)
