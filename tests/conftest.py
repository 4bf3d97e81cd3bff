import base64
import io
import logging
import string
import xml.etree.ElementTree as ET
from typing import Callable, Optional

import pytest
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen
from PIL import Image

from design2svg import image_utils, svg_utils
from design2svg.composer import DesignComposer, DesignOptions
from design2svg.fonts import FontResolver
from design2svg.rasterizer import BaseRasterizer
from design2svg.settings import RenderSettings

logger = logging.getLogger(__name__)

FONT_CSS = b"""/* latin */
@font-face {
  font-family: 'Anton';
  font-style: normal;
  font-weight: 400;
  src: url(https://fonts.gstatic.com/s/anton/v25/1Ptgg87LROyAm0K08i4gS7lu.woff2) format('woff2');
}
"""
FONT_BINARY_URL = "https://fonts.gstatic.com/s/anton/v25/1Ptgg87LROyAm0K08i4gS7lu.woff2"
FONT_BYTES = b"wOF2\x00\x01fake-font-data"


def make_logo_data_uri(width: int = 800, height: int = 400) -> str:
    """Create a PNG data URI of a solid logo."""
    image = Image.new("RGBA", (width, height), (255, 0, 0, 255))
    return image_utils.encode_data_uri(image)


def make_svg_logo(
    width: int | None = 200, height: int | None = 100, viewbox: str | None = None
) -> str:
    """Create an SVG logo document, optionally without a size."""
    attributes = ' xmlns="http://www.w3.org/2000/svg"'
    if width is not None:
        attributes += f' width="{width}"'
    if height is not None:
        attributes += f' height="{height}"'
    if viewbox is not None:
        attributes += f' viewBox="{viewbox}"'
    return f'<svg{attributes}><circle cx="50" cy="50" r="40" fill="red"/></svg>'


def make_svg_logo_data_uri(**kwargs) -> str:
    payload = base64.b64encode(make_svg_logo(**kwargs).encode("utf-8"))
    return f"data:image/svg+xml;base64,{payload.decode('ascii')}"


def make_font_bytes(family: str = "Anton", flavor: str | None = None) -> bytes:
    """Build a font drawing every capital letter as a filled box."""
    letters = list(string.ascii_uppercase)
    glyph_order = [".notdef", "space"] + letters
    glyphs = {}
    for name in glyph_order:
        pen = TTGlyphPen(None)
        if name != "space":
            pen.moveTo((50, 0))
            pen.lineTo((50, 700))
            pen.lineTo((550, 700))
            pen.lineTo((550, 0))
            pen.closePath()
        glyphs[name] = pen.glyph()

    builder = FontBuilder(1000, isTTF=True)
    builder.setupGlyphOrder(glyph_order)
    builder.setupCharacterMap({ord(" "): "space", **{ord(c): c for c in letters}})
    builder.setupGlyf(glyphs)
    builder.setupHorizontalMetrics({name: (600, 50) for name in glyph_order})
    builder.setupHorizontalHeader(ascent=800, descent=-200)
    builder.setupNameTable({"familyName": family, "styleName": "Regular"})
    builder.setupOS2(sTypoAscender=800, usWinAscent=800, usWinDescent=200)
    builder.setupPost()
    builder.font.flavor = flavor
    with io.BytesIO() as output:
        builder.save(output)
        return output.getvalue()


def parse_svg(svg: str) -> ET.Element:
    """Parse a composed document, failing the test if it is not well-formed."""
    return svg_utils.fromstring(svg)


def find_all(svg: str | ET.Element, tag: str) -> list[ET.Element]:
    """Find all descendants with the given local tag name, namespaced or not."""
    root = parse_svg(svg) if isinstance(svg, str) else svg
    return [node for node in root.iter() if svg_utils.get_local_name(node) == tag]


class FakeFetcher:
    """Blocking fetch double serving canned bodies by URL prefix."""

    def __init__(self, responses: dict[str, bytes | Exception]) -> None:
        self.responses = responses
        self.calls: list[tuple[str, dict[str, str], Optional[float]]] = []

    def __call__(
        self, url: str, headers: dict[str, str], timeout: Optional[float]
    ) -> bytes:
        self.calls.append((url, headers, timeout))
        for prefix, response in self.responses.items():
            if url.startswith(prefix):
                if isinstance(response, Exception):
                    raise response
                return response
        raise OSError(f"HTTP Error 404: Not Found: {url}")


class FakeRasterizer(BaseRasterizer):
    """Rasterizer double returning a solid image and recording its input."""

    def __init__(self, size: tuple[int, int] = (2000, 2000), error=None) -> None:
        self.size = size
        self.error = error
        self.documents: list[str] = []

    def from_string(self, svg_content) -> Image.Image:
        self.documents.append(svg_content)
        if self.error is not None:
            raise self.error
        return Image.new("RGBA", self.size, (0, 0, 255, 128))

    def from_file(self, filepath: str) -> Image.Image:
        with open(filepath) as f:
            return self.from_string(f.read())


@pytest.fixture
def logo() -> str:
    return make_logo_data_uri()


@pytest.fixture
def design(logo: str) -> DesignOptions:
    return DesignOptions(logo=logo, text="HELLO BIG WORLD", font="anton")


@pytest.fixture
def settings() -> RenderSettings:
    return RenderSettings()


@pytest.fixture
def fetcher() -> FakeFetcher:
    return FakeFetcher(
        {
            "https://fonts.googleapis.com/": FONT_CSS,
            "https://fonts.gstatic.com/": FONT_BYTES,
        }
    )


@pytest.fixture
def failing_fetcher() -> FakeFetcher:
    return FakeFetcher({"https://": OSError("Network is unreachable")})


@pytest.fixture
def make_composer(
    settings: RenderSettings,
) -> Callable[[FakeFetcher], DesignComposer]:
    def _make(fetcher: FakeFetcher) -> DesignComposer:
        return DesignComposer(
            font_resolver=FontResolver(settings, fetch=fetcher), settings=settings
        )

    return _make


@pytest.fixture
def composer(make_composer, fetcher: FakeFetcher) -> DesignComposer:
    return make_composer(fetcher)
