from design2svg.composer import (
    DesignComposer,
    DesignOptions,
    compose_combined,
    compose_engraving,
    compose_text_only,
    render_combined_raster,
    render_to_raster,
)
from design2svg.core.layout import LayoutStyle
from design2svg.core.style import TextStyle
from design2svg.exceptions import (
    Design2SVGError,
    ImageDecodeError,
    InvalidGeometryError,
    MissingLogoError,
    RasterContextError,
    RasterDecodeError,
)
from design2svg.fonts import DEFAULT_FONT_CATALOG, FontCatalog, FontResolver
from design2svg.settings import RenderSettings
from design2svg.version import __version__

__all__ = [
    "DEFAULT_FONT_CATALOG",
    "Design2SVGError",
    "DesignComposer",
    "DesignOptions",
    "FontCatalog",
    "FontResolver",
    "ImageDecodeError",
    "InvalidGeometryError",
    "LayoutStyle",
    "MissingLogoError",
    "RasterContextError",
    "RasterDecodeError",
    "RenderSettings",
    "TextStyle",
    "__version__",
    "compose_combined",
    "compose_engraving",
    "compose_text_only",
    "render_combined_raster",
    "render_to_raster",
]
