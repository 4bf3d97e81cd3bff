import base64
import binascii
import io
import logging
import os
import xml.etree.ElementTree as ET
from urllib.parse import urlparse
from urllib.request import urlopen

import resvg_py
from PIL import Image

from design2svg import svg_utils

logger = logging.getLogger(__name__)

DEFAULT_JPEG_QUALITY = 90

SVG_MEDIA_TYPE = "image/svg+xml"


def normalize_format(format: str) -> str:
    """Normalize an image format name for PIL (e.g., 'jpg' -> 'JPEG')."""
    format = format.upper()
    return "JPEG" if format == "JPG" else format


def flatten_alpha(image: Image.Image, color: str = "white") -> Image.Image:
    """Composite an image with transparency onto an opaque background."""
    if image.mode not in ("RGBA", "LA", "P"):
        return image.convert("RGB")
    image = image.convert("RGBA")
    background = Image.new("RGB", image.size, color)
    background.paste(image, mask=image.split()[3])  # Use alpha as mask
    return background


def encode_image(
    image: Image.Image, format: str = "PNG", quality: int = DEFAULT_JPEG_QUALITY
) -> bytes:
    """Encode a PIL image to bytes in the specified format.

    For JPEG format, transparent images are flattened onto a white background.
    """
    format = normalize_format(format)
    options = {}
    if format == "JPEG":
        image = flatten_alpha(image)
        options["quality"] = quality

    with io.BytesIO() as output:
        image.save(output, format=format, **options)
        return output.getvalue()


def encode_data_uri(
    image: Image.Image, format: str = "PNG", quality: int = DEFAULT_JPEG_QUALITY
) -> str:
    """Encode a PIL image as a base64 data URI."""
    format = normalize_format(format)
    image_bytes = encode_image(image, format, quality=quality)
    base64_data = base64.b64encode(image_bytes).decode("utf-8")
    return f"data:image/{format.lower()};base64,{base64_data}"


def decode_image(data: bytes, mode: str | None = None) -> Image.Image:
    """Decode image data from bytes to a PIL image."""
    with io.BytesIO(data) as input:
        image = Image.open(input)
        image.load()
    if mode is not None:
        return image.convert(mode)
    return image


def decode_data_uri_bytes(data_uri: str) -> tuple[str, bytes]:
    """Split a base64 data URI into its media type and payload bytes.

    Raises:
        ValueError: If the string is not a base64 data URI.
    """
    if not data_uri.startswith("data:") or "," not in data_uri:
        raise ValueError("Not a data URI")
    header, base64_data = data_uri.split(",", 1)
    if not header.endswith(";base64"):
        raise ValueError("Only base64 data URIs are supported")
    media_type = header[len("data:") : -len(";base64")]
    try:
        return media_type, base64.b64decode(base64_data, validate=True)
    except binascii.Error as e:
        raise ValueError(f"Invalid base64 payload in data URI: {e}") from e


def decode_data_uri(data_uri: str, mode: str | None = None) -> Image.Image:
    """Decode a base64 data URI to a PIL image."""
    _, data = decode_data_uri_bytes(data_uri)
    return decode_image(data, mode)


def is_svg(data: bytes) -> bool:
    """Check whether data looks like an SVG document."""
    head = data[:4096].lstrip(b"\xef\xbb\xbf \t\r\n")
    return head.startswith(b"<") and b"<svg" in head


def decode_svg(data: bytes) -> Image.Image:
    """Render SVG data to a PIL image at its natural size.

    The size comes from the root ``width`` and ``height``, falling back to the
    ``viewBox``.

    Raises:
        ValueError: If the data is not a renderable SVG document.
    """
    try:
        root = ET.fromstring(data)
    except ET.ParseError as e:
        raise ValueError(f"Invalid SVG image: {e}") from e
    if svg_utils.get_local_name(root) != "svg":
        raise ValueError(f"Not an SVG image: <{svg_utils.get_local_name(root)}>")
    try:
        png_bytes = resvg_py.svg_to_bytes(svg_string=data.decode("utf-8"))
    except Exception as e:
        raise ValueError(f"Failed to render SVG image: {e}") from e
    return decode_image(bytes(png_bytes))


def read_resource(resource: str, timeout: float | None = None) -> bytes:
    """Read the bytes of an http(s) URL or a file path."""
    scheme = urlparse(resource).scheme
    if scheme in ("http", "https"):
        logger.debug(f"Fetching image: {resource}")
        with urlopen(resource, timeout=timeout) as response:
            return response.read()

    if not os.path.exists(resource):
        raise FileNotFoundError(f"Image file not found: {resource}")
    with open(resource, "rb") as f:
        return f.read()


def load_image(resource: str, timeout: float | None = None) -> Image.Image:
    """Load an image from a data URI, an http(s) URL, or a file path.

    SVG images (``image/svg+xml`` data URIs, ``.svg`` paths, or any content
    with an ``<svg>`` root) are rendered with resvg; other formats are
    decoded with PIL.

    Raises:
        OSError: If the resource cannot be fetched or decoded.
        ValueError: If a data URI or an SVG document is malformed.
    """
    if resource.startswith("data:"):
        media_type, data = decode_data_uri_bytes(resource)
        svg = media_type == SVG_MEDIA_TYPE
    else:
        data = read_resource(resource, timeout)
        svg = urlparse(resource).path.lower().endswith(".svg")

    if svg or is_svg(data):
        return decode_svg(data)
    return decode_image(data)
