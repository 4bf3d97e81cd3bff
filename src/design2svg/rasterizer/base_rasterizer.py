import logging
import os
import tempfile
from abc import ABC, abstractmethod
from typing import Union

from PIL import Image

logger = logging.getLogger(__name__)


class BaseRasterizer(ABC):
    """Base class for SVG rasterizer implementations.

    Subclasses implement `from_file`; `from_string` goes through a temporary
    file unless overridden. Any rendering failure propagates to the caller.
    """

    def from_string(self, svg_content: Union[str, bytes]) -> Image.Image:
        """Rasterize SVG content from a string or bytes to a PIL Image."""
        content_bytes = (
            svg_content
            if isinstance(svg_content, bytes)
            else svg_content.encode("utf-8")
        )
        with tempfile.TemporaryDirectory(prefix="design2svg-") as dirname:
            filepath = os.path.join(dirname, "document.svg")
            with open(filepath, "wb") as f:
                f.write(content_bytes)
            return self.from_file(filepath)

    @abstractmethod
    def from_file(self, filepath: str) -> Image.Image:
        """Rasterize an SVG file to a PIL Image.

        Args:
            filepath: Path to the SVG file to rasterize.

        Returns:
            PIL Image object containing the rasterized SVG.
        """
        raise NotImplementedError

    def _composite_background(self, image: Image.Image) -> Image.Image:
        """Composite image onto a transparent background to normalize alpha."""
        background = Image.new("RGBA", size=image.size, color=(255, 255, 255, 0))
        background.alpha_composite(image.convert("RGBA"))
        return background
