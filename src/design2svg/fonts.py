"""Web font catalog and resolution into embeddable or linkable CSS."""

import asyncio
import base64
import logging
import re
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Optional
from urllib.parse import quote
from urllib.request import Request, urlopen

from design2svg.core.constants import DEFAULT_FONT_NAME
from design2svg.settings import DEFAULT_FONT_CSS_URL, RenderSettings

logger = logging.getLogger(__name__)

# Blocking fetch: (url, headers, timeout) -> response body.
Fetcher = Callable[[str, dict[str, str], Optional[float]], bytes]

_FONT_MIME_TYPES = {
    "ttf": "font/ttf",
    "otf": "font/otf",
    "woff": "font/woff",
    "woff2": "font/woff2",
}


class FontCatalog(Mapping[str, str]):
    """Read-only mapping of logical font ids to display names.

    Lookups of unknown ids through :meth:`resolve` fall back to the default
    display name.

    Example:
        >>> catalog = FontCatalog({"anton": "Anton"})
        >>> catalog.resolve("anton")
        'Anton'
        >>> catalog.resolve("missing")
        'Impact'
    """

    def __init__(
        self, fonts: Mapping[str, str], default: str = DEFAULT_FONT_NAME
    ) -> None:
        self._fonts = MappingProxyType(dict(fonts))
        self.default = default

    def __getitem__(self, font_id: str) -> str:
        return self._fonts[font_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fonts)

    def __len__(self) -> int:
        return len(self._fonts)

    def resolve(self, font_id: str | None) -> str:
        """Get the display name of a font id, or the default if unknown."""
        if font_id is None:
            return self.default
        name = self._fonts.get(font_id)
        if name is None:
            logger.debug(f"Unknown font id {font_id!r}, using {self.default!r}")
            return self.default
        return name


DEFAULT_FONT_CATALOG = FontCatalog(
    {
        "impact": "Impact",
        "anton": "Anton",
        "bangers": "Bangers",
        "bebas_neue": "Bebas Neue",
        "black_ops_one": "Black Ops One",
        "bungee": "Bungee",
        "creepster": "Creepster",
        "fredoka_one": "Fredoka One",
        "lobster": "Lobster",
        "luckiest_guy": "Luckiest Guy",
        "monoton": "Monoton",
        "oswald": "Oswald",
        "pacifico": "Pacifico",
        "permanent_marker": "Permanent Marker",
        "press_start_2p": "Press Start 2P",
        "righteous": "Righteous",
        "roboto_slab": "Roboto Slab",
        "russo_one": "Russo One",
    }
)


def build_font_url(name: str, base_url: str = DEFAULT_FONT_CSS_URL) -> str:
    """Build the stylesheet URL of a web font requesting weights 400 and 700.

    Example:
        >>> build_font_url("Bebas Neue")
        'https://fonts.googleapis.com/css2?family=Bebas+Neue:wght@400;700&display=swap'
    """
    family = quote(name, safe=" ").replace(" ", "+")
    return f"{base_url}?family={family}:wght@400;700&display=swap"


def encode_font_bytes_to_data_uri(font_bytes: bytes, font_format: str) -> str:
    """Encode font bytes as a base64 data URI.

    Raises:
        ValueError: If font_format is unsupported.
    """
    if font_format not in _FONT_MIME_TYPES:
        raise ValueError(
            f"Unsupported font format: {font_format}. "
            f"Supported formats: {', '.join(_FONT_MIME_TYPES.keys())}"
        )
    base64_data = base64.b64encode(font_bytes).decode("utf-8")
    return f"data:{_FONT_MIME_TYPES[font_format]};base64,{base64_data}"


@dataclass(frozen=True)
class FontImport:
    """Stylesheet import of a web font (link mode)."""

    url: str

    def to_css(self, family: str) -> str:
        return f"@import url('{self.url}');"


@dataclass(frozen=True)
class DegradedFontAsset(FontImport):
    """Import fallback used when embedding a font failed."""

    reason: str = ""
    data_uri: str = ""
    format: str = ""


@dataclass(frozen=True)
class FontAsset:
    """Font binary inlined as a data URI (embed mode)."""

    data_uri: str
    format: str

    def to_css(self, family: str) -> str:
        """Generate the @font-face rule declaring this font for the family."""
        return f"""@font-face {{
  font-family: '{family}';
  src: url({self.data_uri}) format('{self.format}');
}}"""


FontSource = FontAsset | FontImport


def fetch_url(
    url: str, headers: dict[str, str] | None = None, timeout: float | None = None
) -> bytes:
    """Fetch a URL and return the response body.

    Raises:
        OSError: On network failures and non-success HTTP statuses.
    """
    request = Request(url, headers=headers or {})
    with urlopen(request, timeout=timeout) as response:
        return response.read()


class FontResolver:
    """Resolve display names into font sources for the document stylesheet.

    In link mode the font is referenced by a stylesheet import without any
    network access. In embed mode the stylesheet is fetched, the first binary
    font URL is extracted and fetched, and the binary is inlined as a data
    URI. Embedding failures are logged and degrade to the import reference;
    :meth:`resolve` never raises.

    Args:
        settings: Endpoint, user agent and timeout; environment defaults if None.
        fetch: Blocking fetch function, run in a worker thread.
    """

    def __init__(
        self,
        settings: RenderSettings | None = None,
        fetch: Fetcher | None = None,
    ) -> None:
        self.settings = settings or RenderSettings.default()
        self.fetch = fetch or fetch_url
        self._font_url_re = re.compile(
            r"url\(\s*['\"]?(https://[^)'\"\s]+\."
            + re.escape(self.settings.font_format)
            + r")['\"]?\s*\)"
        )

    def build_url(self, name: str) -> str:
        return build_font_url(name, self.settings.font_css_url)

    async def resolve(self, name: str, embed: bool = False) -> FontSource:
        """Resolve a display name to an embedded asset or an import reference."""
        url = self.build_url(name)
        if not embed:
            return FontImport(url)
        return await self.fetch_font_asset(url)

    async def fetch_font_asset(self, url: str) -> FontAsset | DegradedFontAsset:
        """Fetch the stylesheet at url and inline the first binary font it names."""
        try:
            css = await self._fetch(url, {"User-Agent": self.settings.user_agent})
            match = self._font_url_re.search(css.decode("utf-8", errors="replace"))
            if match is None:
                logger.warning(
                    f"Could not find {self.settings.font_format} URL in font CSS: "
                    f"{url}. Raster output might have font issues."
                )
                return DegradedFontAsset(url, reason="font URL not found")
            font_url = match.group(1)
            font_bytes = await self._fetch(font_url, {})
            data_uri = await asyncio.to_thread(
                encode_font_bytes_to_data_uri, font_bytes, self.settings.font_format
            )
        except Exception as e:
            logger.warning(f"Failed to fetch and encode font from {url}: {e}")
            return DegradedFontAsset(url, reason=str(e))

        logger.info(f"Embedded font {font_url} ({len(font_bytes)} bytes)")
        return FontAsset(data_uri=data_uri, format=self.settings.font_format)

    async def _fetch(self, url: str, headers: dict[str, str]) -> bytes:
        timeout = (
            self.settings.fetch_timeout
            if self.settings.is_timeout_enabled()
            else None
        )
        logger.debug(f"Fetching {url}")
        return await asyncio.to_thread(self.fetch, url, headers, timeout)
