"""
Processing Service - Business logic behind the filter and transform endpoints.

Every operation follows the same template:
- decode the request image
- check it against the configured size limit
- run one engine call
- check and encode the result
"""

import logging
from typing import Callable, Optional, Sequence, Tuple

from pixelkit.api.exceptions import ImageTooLargeException
from pixelkit.config import Settings, get_settings
from pixelkit.core.buffer import PixelBuffer
from pixelkit.core.convolution import ConvolutionEngine
from pixelkit.core.enums import BorderMode, ExecutionMode, InterpolationMethod, RotationAngle
from pixelkit.core.execution import get_strategy
from pixelkit.core.image.converters import from_base64, to_base64
from pixelkit.core.kernel import Kernel
from pixelkit.core.resampling import ResamplingEngine, Rotation
from pixelkit.core.utils.decorators import timer
from pixelkit.schemas import ImagePayload, ImageResponse, KernelSpec

logger = logging.getLogger(__name__)


class KernelFactory:
    """Builds Kernel instances from API kernel descriptions."""

    _FIXED = {
        "sobel_x": Kernel.sobel_x,
        "sobel_y": Kernel.sobel_y,
        "laplacian": Kernel.laplacian,
        "sharpen": Kernel.sharpen,
    }

    @classmethod
    def create(cls, definition: KernelSpec) -> Kernel:
        """
        Create a kernel.

        Args:
            definition: Named kernel or explicit weights

        Returns:
            Kernel instance

        Raises:
            InvalidKernelSize: If the resulting kernel has even dimensions
        """
        if definition.weights is not None:
            return Kernel(definition.width, definition.height, definition.weights)
        if definition.name == "identity":
            return Kernel.identity(definition.size)
        if definition.name == "box_blur":
            return Kernel.box_blur(definition.size)
        if definition.name == "gaussian":
            return Kernel.gaussian(definition.size, definition.sigma)
        return cls._FIXED[definition.name]()


class ProcessingService:
    """
    Service for image filtering and geometric transforms.

    Holds one resampling engine; convolution engines are built per request
    so each call can pick its own execution strategy.
    """

    def __init__(self, settings: Optional[Settings] = None):
        """
        Initialize processing service.

        Args:
            settings: Settings to use (cached environment settings if None)
        """
        self.settings = settings or get_settings()
        self.resampler = ResamplingEngine()

    @property
    def max_dimension(self) -> int:
        return self.settings.api.max_image_dimension

    def _check_size(self, width: int, height: int) -> None:
        limit = self.max_dimension
        if width > limit or height > limit:
            raise ImageTooLargeException(width, height, limit)

    def _convolution_engine(self, strategy: Optional[ExecutionMode]) -> ConvolutionEngine:
        processing = self.settings.processing
        mode = strategy or processing.execution_strategy
        return ConvolutionEngine(get_strategy(mode, processing.max_workers))

    def _execute(
        self, request: ImagePayload, operation: Callable[[PixelBuffer], PixelBuffer]
    ) -> ImageResponse:
        """
        Template method for one decode, process, encode round.

        Args:
            request: Request carrying the encoded image
            operation: Engine call applied to the decoded buffer

        Returns:
            ImageResponse with the encoded result and timing
        """
        with timer() as t:
            image = from_base64(request.image_base64, request.channels)
            self._check_size(image.width, image.height)

            result = operation(image)
            self._check_size(result.width, result.height)

            encoded = to_base64(result, request.output_format, self.settings.processing.jpeg_quality)

        # Read processing time AFTER with block (timer updates in finally)
        processing_time_ms = t["ms"]
        logger.info(
            f"Processed {image.width}x{image.height}x{image.channels} -> "
            f"{result.width}x{result.height} in {processing_time_ms:.1f}ms"
        )

        return ImageResponse(
            image_base64=encoded,
            width=result.width,
            height=result.height,
            channels=result.channels,
            processing_time_ms=round(processing_time_ms, 3),
        )

    def convolve(
        self,
        request: ImagePayload,
        kernel_spec: KernelSpec,
        border_mode: BorderMode,
        strategy: Optional[ExecutionMode] = None,
    ) -> ImageResponse:
        """Apply a 2D kernel."""
        kernel = KernelFactory.create(kernel_spec)
        engine = self._convolution_engine(strategy)
        return self._execute(request, lambda image: engine.convolve(image, kernel, border_mode))

    def convolve_separable(
        self,
        request: ImagePayload,
        kernel_x: Sequence[float],
        kernel_y: Sequence[float],
        border_mode: BorderMode,
        strategy: Optional[ExecutionMode] = None,
    ) -> ImageResponse:
        """Apply a horizontal then a vertical 1D kernel."""
        engine = self._convolution_engine(strategy)
        return self._execute(
            request, lambda image: engine.convolve_separable(image, kernel_x, kernel_y, border_mode)
        )

    def resize(
        self, request: ImagePayload, width: int, height: int, method: InterpolationMethod
    ) -> ImageResponse:
        """Resize to an explicit size."""
        # Reject oversized targets before allocating them
        self._check_size(width, height)
        return self._execute(request, lambda image: self.resampler.resize(image, width, height, method))

    def crop(self, request: ImagePayload, region: Tuple[int, int, int, int]) -> ImageResponse:
        """Cut out ``region`` given as (x, y, width, height)."""
        x, y, width, height = region
        return self._execute(request, lambda image: self.resampler.crop(image, x, y, width, height))

    def rotate(self, request: ImagePayload, angle: RotationAngle) -> ImageResponse:
        """Lossless clockwise rotation by a multiple of 90 degrees."""
        return self._execute(request, lambda image: self.resampler.rotate(image, angle))

    def rotate_custom(
        self,
        request: ImagePayload,
        angle: float,
        radians: bool = False,
        method: InterpolationMethod = InterpolationMethod.BILINEAR,
    ) -> ImageResponse:
        """Arbitrary clockwise rotation onto a grown canvas."""
        rotation = Rotation.radians(angle) if radians else Rotation.degrees(angle)
        return self._execute(request, lambda image: self.resampler.rotate_custom(image, rotation, method))
