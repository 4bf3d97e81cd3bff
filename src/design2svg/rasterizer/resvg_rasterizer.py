"""Resvg-based rasterizer module.

This module provides SVG rasterization using the resvg library via resvg-py,
offering fast and accurate rendering with no external dependencies.
"""

import logging
import os
import re
import tempfile
from io import BytesIO
from typing import Union

import resvg_py
from fontTools.ttLib import TTFont
from PIL import Image

from design2svg.image_utils import decode_data_uri_bytes
from design2svg.settings import DEFAULT_SANS_SERIF_FAMILY

from .base_rasterizer import BaseRasterizer

logger = logging.getLogger(__name__)

FONT_FACE_RE = re.compile(r"@font-face\s*\{([^}]*)\}")
FONT_FAMILY_RE = re.compile(r"font-family:\s*[\"']?([^;\"']+)[\"']?\s*;")
FONT_DATA_URI_RE = re.compile(r"src:\s*url\([\"']?(data:font/[^\"')]+)[\"']?\)")
FONT_FILE_URL_RE = re.compile(r"src:\s*url\([\"']?(file://[^\"')]+)[\"']?\)")


class ResvgRasterizer(BaseRasterizer):
    """SVG rasterizer using resvg.

    Note:
        Resvg ignores CSS @font-face rules. Fonts embedded as data URIs are
        decoded, converted to plain TrueType/OpenType with fontTools (WOFF2
        needs brotli), and written to a temporary directory that is passed to
        resvg's native font loading API and removed after rendering. Fonts
        referenced by ``file://`` URLs are passed as-is.

    Example:
        >>> rasterizer = ResvgRasterizer()
        >>> image = rasterizer.from_string('<svg>...</svg>')
        >>> image.save('output.png')
    """

    def __init__(
        self, dpi: int = 0, sans_serif_family: str = DEFAULT_SANS_SERIF_FAMILY
    ) -> None:
        """Initialize the resvg rasterizer.

        Args:
            dpi: Dots per inch for rendering. If 0 (default), uses resvg's
                default of 96 DPI.
            sans_serif_family: Installed font rendering the generic sans-serif
                family, the fallback of text whose font is not available.
        """
        self.dpi = dpi
        self.sans_serif_family = sans_serif_family

    @staticmethod
    def _extract_font_file_paths(svg_content: str) -> list[str]:
        """Extract font file paths from src: url("file://...") declarations."""
        return [
            match.replace("file://", "")
            for match in FONT_FILE_URL_RE.findall(svg_content)
        ]

    @staticmethod
    def _rename_font_family(font: TTFont, family: str) -> None:
        """Set the family names of a font so CSS font-family lookups match it."""
        name_table = font["name"]
        for record in name_table.names:
            if record.nameID in (1, 16):  # Family and typographic family
                record.string = family

    @staticmethod
    def _write_embedded_fonts(svg_content: str, dirname: str) -> list[str]:
        """Write fonts embedded as data URIs to dirname and return their paths.

        Each font is registered under the family its @font-face rule declares,
        whatever the family name stored in the font file. Fonts that cannot be
        decoded are skipped with a warning; the text then renders with the
        fallback sans-serif family.
        """
        font_files = []
        for index, rule in enumerate(FONT_FACE_RE.findall(svg_content)):
            match = FONT_DATA_URI_RE.search(rule)
            if match is None:
                continue
            family = FONT_FAMILY_RE.search(rule)
            try:
                _, data = decode_data_uri_bytes(match.group(1))
                font = TTFont(BytesIO(data))
                font.flavor = None  # Decompress WOFF/WOFF2 to sfnt
                if family is not None:
                    ResvgRasterizer._rename_font_family(font, family.group(1).strip())
                suffix = ".otf" if "CFF " in font else ".ttf"
                path = os.path.join(dirname, f"font_{index}{suffix}")
                font.save(path)
                font.close()
            except Exception as e:
                logger.warning(f"Failed to load embedded font #{index}: {e}")
                continue
            font_files.append(path)
        return font_files

    def from_file(
        self, filepath: str, font_files: list[str] | None = None
    ) -> Image.Image:
        """Rasterize an SVG file to a PIL Image.

        Raises:
            FileNotFoundError: If the SVG file does not exist.
            ValueError: If the SVG content is invalid.
        """
        png_bytes = resvg_py.svg_to_bytes(
            svg_path=filepath,
            dpi=int(self.dpi),
            sans_serif_family=self.sans_serif_family,
            font_files=font_files,
        )
        image = Image.open(BytesIO(bytes(png_bytes)))
        return self._composite_background(image)

    def from_string(
        self, svg_content: Union[str, bytes], font_files: list[str] | None = None
    ) -> Image.Image:
        """Rasterize SVG content from a string to a PIL Image.

        If font_files is not provided, fonts declared in @font-face rules of
        the SVG content (data URIs and file:// URLs) are used.

        Raises:
            ValueError: If the SVG content is invalid.
        """
        svg_string = (
            svg_content.decode("utf-8")
            if isinstance(svg_content, bytes)
            else svg_content
        )

        with tempfile.TemporaryDirectory(prefix="design2svg-fonts-") as dirname:
            if font_files is None:
                font_files = self._extract_font_file_paths(svg_string)
                font_files += self._write_embedded_fonts(svg_string, dirname)
                if font_files:
                    logger.debug(f"Extracted {len(font_files)} font file(s) from SVG")

            png_bytes = resvg_py.svg_to_bytes(
                svg_string=svg_string,
                dpi=int(self.dpi),
                sans_serif_family=self.sans_serif_family,
                font_files=font_files,
            )
        image = Image.open(BytesIO(bytes(png_bytes)))
        return self._composite_background(image)
