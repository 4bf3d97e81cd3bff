"""Off-screen rasterization of composed SVG documents."""

import asyncio
import logging
import xml.etree.ElementTree as ET

from PIL import Image

from design2svg import image_utils, svg_utils
from design2svg.core.constants import CANVAS_SIZE, SUPERSAMPLING_FACTOR
from design2svg.exceptions import RasterContextError, RasterDecodeError
from design2svg.rasterizer import BaseRasterizer, ResvgRasterizer

logger = logging.getLogger(__name__)

SUPPORTED_FORMATS = ("PNG", "JPEG", "WEBP")


def scale_document(svg: str, size: int) -> str:
    """Set the rendered size of a document, keeping its viewBox.

    Raises:
        RasterDecodeError: If the document is not well-formed XML.
    """
    try:
        root = svg_utils.fromstring(svg)
    except ET.ParseError as e:
        raise RasterDecodeError(
            f"Failed to parse SVG document for rasterization: {e}"
        ) from e
    if root.get("viewBox") is None:
        viewbox = svg_utils.seq2str([0, 0, CANVAS_SIZE, CANVAS_SIZE], sep=" ")
        root.set("viewBox", viewbox)
    svg_utils.set_attribute(root, "width", size)
    svg_utils.set_attribute(root, "height", size)
    return svg_utils.tostring(root, indent="")


def create_surface(size: int) -> Image.Image:
    """Allocate a transparent square RGBA surface.

    Raises:
        RasterContextError: If the surface cannot be allocated.
    """
    try:
        return Image.new("RGBA", (size, size), (0, 0, 0, 0))
    except (MemoryError, ValueError) as e:
        raise RasterContextError(
            "Could not get canvas context for raster generation."
        ) from e


async def rasterize_svg(
    svg: str,
    rasterizer: BaseRasterizer | None = None,
    image_format: str = "png",
    scale: int = SUPERSAMPLING_FACTOR,
    quality: int = image_utils.DEFAULT_JPEG_QUALITY,
) -> str:
    """Render an SVG document of the fixed canvas into a raster data URI.

    The document is rendered at ``scale`` times the canvas size, drawn onto a
    fresh transparent surface of the same size, and serialized.

    Args:
        svg: Composed SVG document. Fonts must be embedded to render reliably.
        rasterizer: SVG decoder; ResvgRasterizer by default.
        image_format: Output format, 'png', 'jpeg' or 'webp'.
        scale: Supersampling factor.
        quality: JPEG quality.

    Returns:
        Data URI of the raster image.

    Raises:
        ValueError: If image_format is unsupported.
        RasterDecodeError: If the document cannot be decoded.
        RasterContextError: If the drawing surface cannot be allocated.
    """
    format = image_utils.normalize_format(image_format)
    if format not in SUPPORTED_FORMATS:
        raise ValueError(
            f"Unsupported image format: {image_format}. "
            f"Supported formats: {', '.join(SUPPORTED_FORMATS)}"
        )
    rasterizer = rasterizer or ResvgRasterizer()
    size = CANVAS_SIZE * scale

    svg_string = scale_document(svg, size)
    try:
        image = await asyncio.to_thread(rasterizer.from_string, svg_string)
    except Exception as e:
        raise RasterDecodeError(
            "Failed to load SVG image for raster conversion. "
            "It may contain unsupported features."
        ) from e
    logger.debug(f"Decoded SVG into {image.width}x{image.height} image")

    surface = create_surface(size)
    if image.size != surface.size:
        image = image.resize(surface.size, Image.Resampling.LANCZOS)
    surface.alpha_composite(image.convert("RGBA"))
    return await asyncio.to_thread(
        image_utils.encode_data_uri, surface, format, quality
    )
