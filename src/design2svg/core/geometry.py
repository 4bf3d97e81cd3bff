"""Logo measurement and scaling onto the fixed canvas."""

import asyncio
import dataclasses
import logging
from typing import Callable

from PIL import Image

from design2svg import image_utils
from design2svg.core.constants import CANVAS_SIZE, MAX_LOGO_DIMENSION
from design2svg.exceptions import ImageDecodeError, InvalidGeometryError

logger = logging.getLogger(__name__)

ImageLoader = Callable[[str], Image.Image]


@dataclasses.dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclasses.dataclass(frozen=True)
class LogoDimensions:
    """Natural pixel size of a decoded logo."""

    width: int
    height: int


@dataclasses.dataclass(frozen=True)
class ScaledLogoBox:
    """Logo size in canvas units after scaling to fit."""

    width: float
    height: float

    def placement(self, center: Point) -> tuple[float, float]:
        """Top-left corner that centers the box on the given point."""
        return center.x - self.width / 2, center.y - self.height / 2


CANVAS_CENTER = Point(CANVAS_SIZE / 2, CANVAS_SIZE / 2)


async def measure_logo(
    logo: str, loader: ImageLoader = image_utils.load_image
) -> LogoDimensions:
    """Decode the logo resource and return its natural dimensions.

    The decode runs once in a worker thread; there is no retry.

    Raises:
        ImageDecodeError: If the resource cannot be fetched or decoded.
    """
    try:
        image = await asyncio.to_thread(loader, logo)
    except (OSError, ValueError) as e:
        raise ImageDecodeError(
            "Failed to load logo image to determine dimensions."
        ) from e
    logger.debug(f"Measured logo: {image.width}x{image.height}")
    return LogoDimensions(width=image.width, height=image.height)


def scale_to_fit(
    dims: LogoDimensions, max_dimension: float = MAX_LOGO_DIMENSION
) -> ScaledLogoBox:
    """Scale dimensions down so the larger side is at most max_dimension.

    The ratio is ``min(max/width, max/height, 1)``: aspect ratio is preserved
    and small logos keep their natural size.

    Raises:
        InvalidGeometryError: If either dimension is zero or negative.
    """
    if dims.width <= 0 or dims.height <= 0:
        raise InvalidGeometryError(
            f"Logo has invalid dimensions: {dims.width}x{dims.height}"
        )
    ratio = min(max_dimension / dims.width, max_dimension / dims.height, 1.0)
    return ScaledLogoBox(width=dims.width * ratio, height=dims.height * ratio)
