"""Compose design artifacts: text-only, combined and engraving SVG, and rasters."""

import asyncio
import dataclasses
import logging
from typing import Optional

from design2svg import image_utils, svg_utils
from design2svg.core.builder import DocumentBuilder, create_empty_document
from design2svg.core.constants import (
    COMBINED_NAMESPACE,
    ENGRAVING_NAMESPACE,
    ENGRAVING_TEXT_COLOR,
    TEXT_ONLY_NAMESPACE,
)
from design2svg.core.geometry import (
    ImageLoader,
    ScaledLogoBox,
    measure_logo,
    scale_to_fit,
)
from design2svg.core.layout import LayoutStyle
from design2svg.core.style import TextStyle
from design2svg.exceptions import MissingLogoError
from design2svg.fonts import DEFAULT_FONT_CATALOG, FontCatalog, FontResolver
from design2svg.raster import rasterize_svg
from design2svg.rasterizer import BaseRasterizer, ResvgRasterizer
from design2svg.settings import RenderSettings

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class DesignOptions:
    """Design record read by the composer.

    Attributes:
        logo: Logo image as a data URI, an http(s) URL or a file path.
        text: Text to place around the logo; may be empty.
        font: Logical font id looked up in the font catalog.
        style: Layout arrangement, see :class:`LayoutStyle`.
        text_style: Visual style, see :class:`TextStyle`.
        text_color: Main text color.
        gradient_start_color: First color of the ``gradient`` style.
        gradient_end_color: Last color of the ``gradient`` style.
    """

    logo: Optional[str] = None
    text: str = ""
    font: str = "impact"
    style: str = LayoutStyle.CLASSIC.value
    text_style: str = TextStyle.NONE.value
    text_color: str = "#000000"
    gradient_start_color: str = "#FF0000"
    gradient_end_color: str = "#0000FF"


class DesignComposer:
    """Composer of SVG and raster artifacts from design options.

    Example usage:

        import asyncio
        from design2svg.composer import DesignComposer, DesignOptions

        design = DesignOptions(logo="logo.png", text="HELLO WORLD", style="classic")
        composer = DesignComposer()
        svg = asyncio.run(composer.compose_combined(design))

    Args:
        font_catalog: Logical font id to display name mapping.
        font_resolver: Resolver of font stylesheets; built from settings if None.
        image_loader: Blocking loader of logo resources.
        settings: Font fetching and raster settings; environment defaults if None.
    """

    def __init__(
        self,
        font_catalog: FontCatalog = DEFAULT_FONT_CATALOG,
        font_resolver: FontResolver | None = None,
        image_loader: ImageLoader = image_utils.load_image,
        settings: RenderSettings | None = None,
    ) -> None:
        self.settings = settings or RenderSettings.default()
        self.font_catalog = font_catalog
        self.font_resolver = font_resolver or FontResolver(self.settings)
        self.image_loader = image_loader

    async def compose_text_only(
        self, design: DesignOptions, embed_font: bool = False
    ) -> str:
        """Compose the text of the design as laid out around the logo.

        The logo is measured to position the text but is not drawn. Empty or
        whitespace-only text gives an empty canvas document.

        Args:
            design: Design options.
            embed_font: Inline the font as a data URI instead of importing it.

        Raises:
            MissingLogoError: If the design has no logo.
            ImageDecodeError: If the logo cannot be decoded.
        """
        builder = await self._build_text_only(design, embed_font)
        if builder is None:
            return svg_utils.tostring(create_empty_document())
        return builder.tostring()

    async def compose_combined(
        self, design: DesignOptions, embed_font: bool = False
    ) -> str:
        """Compose the logo and the text in one document.

        Raises:
            MissingLogoError: If the design has no logo.
            ImageDecodeError: If the logo cannot be decoded.
        """
        logo = self._require_logo(
            design, "Logo is required to generate the design SVG."
        )
        box, builder = await self._measure_with_builder(
            logo, design, COMBINED_NAMESPACE, embed_font
        )
        attributes = builder.add_text_style(
            design.text_style,
            design.text_color,
            design.gradient_start_color,
            design.gradient_end_color,
        )
        builder.add_image(logo, box)
        if design.text.strip():
            builder.add_text_layout(design.text, design.style, attributes, box)
        return builder.tostring()

    async def compose_engraving(self, design: DesignOptions) -> str:
        """Compose a single-tone document for engraving.

        Text is always black with no visual style and the logo is desaturated,
        whatever colors the design uses.

        Raises:
            MissingLogoError: If the design has no logo.
            ImageDecodeError: If the logo cannot be decoded.
        """
        logo = self._require_logo(design)
        box = await self._measure(logo)
        text_design = dataclasses.replace(
            design, text_color=ENGRAVING_TEXT_COLOR, text_style=TextStyle.NONE.value
        )
        text_builder = await self._build_text_only(text_design, False, box=box)

        builder = DocumentBuilder(ENGRAVING_NAMESPACE)
        monochrome = builder.add_monochrome_filter()
        if text_builder is not None:
            builder.add_fragment(svg_utils.extract_content(text_builder.svg))
        builder.add_image(logo, box, filter=monochrome)
        return builder.tostring()

    async def render_to_raster(
        self,
        design: DesignOptions,
        rasterizer: BaseRasterizer | None = None,
        image_format: str = "png",
    ) -> str:
        """Render the text-only artifact with an embedded font to a data URI.

        Raises:
            MissingLogoError: If the design has no logo.
            ImageDecodeError: If the logo cannot be decoded.
            RasterDecodeError: If the rasterizer cannot decode the document.
            RasterContextError: If the drawing surface cannot be allocated.
        """
        svg = await self.compose_text_only(design, embed_font=True)
        return await rasterize_svg(
            svg, rasterizer or self._create_rasterizer(), image_format
        )

    async def render_combined_raster(
        self,
        design: DesignOptions,
        rasterizer: BaseRasterizer | None = None,
        image_format: str = "png",
    ) -> str:
        """Render the combined artifact with an embedded font to a data URI."""
        svg = await self.compose_combined(design, embed_font=True)
        return await rasterize_svg(
            svg, rasterizer or self._create_rasterizer(), image_format
        )

    def _create_rasterizer(self) -> BaseRasterizer:
        return ResvgRasterizer(sans_serif_family=self.settings.sans_serif_family)

    @staticmethod
    def _require_logo(
        design: DesignOptions, message: str = "Logo is required for layout."
    ) -> str:
        if not design.logo:
            raise MissingLogoError(message)
        return design.logo

    async def _measure(self, logo: str) -> ScaledLogoBox:
        dims = await measure_logo(logo, self.image_loader)
        box = scale_to_fit(dims)
        logger.debug(f"Scaled logo {dims.width}x{dims.height} to {box}")
        return box

    async def _measure_with_builder(
        self, logo: str, design: DesignOptions, namespace: str, embed_font: bool
    ) -> tuple[ScaledLogoBox, DocumentBuilder]:
        """Measure the logo while the font resolves.

        If either step fails, the other one is cancelled before the error
        propagates.
        """
        tasks = [
            asyncio.ensure_future(self._measure(logo)),
            asyncio.ensure_future(
                self._create_builder(design, namespace, embed_font)
            ),
        ]
        try:
            box, builder = await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            raise
        return box, builder

    async def _create_builder(
        self, design: DesignOptions, namespace: str, embed_font: bool
    ) -> DocumentBuilder:
        """Create a document builder with the design font declared."""
        font_name = self.font_catalog.resolve(design.font)
        source = await self.font_resolver.resolve(font_name, embed=embed_font)
        builder = DocumentBuilder(namespace, font_name=font_name)
        builder.add_font_style(source)
        return builder

    async def _build_text_only(
        self,
        design: DesignOptions,
        embed_font: bool,
        box: ScaledLogoBox | None = None,
    ) -> DocumentBuilder | None:
        """Build the text-only document, or None when there is no text."""
        logo = self._require_logo(design)
        if not design.text.strip():
            logger.debug("Empty text, composing an empty canvas")
            return None

        if box is None:
            box, builder = await self._measure_with_builder(
                logo, design, TEXT_ONLY_NAMESPACE, embed_font
            )
        else:
            builder = await self._create_builder(
                design, TEXT_ONLY_NAMESPACE, embed_font
            )
        attributes = builder.add_text_style(
            design.text_style,
            design.text_color,
            design.gradient_start_color,
            design.gradient_end_color,
        )
        builder.add_text_layout(design.text, design.style, attributes, box)
        return builder


_default_composer: DesignComposer | None = None


def get_default_composer() -> DesignComposer:
    """Get the composer used by the module-level functions."""
    global _default_composer
    if _default_composer is None:
        _default_composer = DesignComposer()
    return _default_composer


async def compose_text_only(design: DesignOptions, embed_font: bool = False) -> str:
    """Compose the text-only SVG with the default composer."""
    return await get_default_composer().compose_text_only(design, embed_font)


async def compose_combined(design: DesignOptions, embed_font: bool = False) -> str:
    """Compose the logo and text SVG with the default composer."""
    return await get_default_composer().compose_combined(design, embed_font)


async def compose_engraving(design: DesignOptions) -> str:
    """Compose the engraving SVG with the default composer."""
    return await get_default_composer().compose_engraving(design)


async def render_to_raster(
    design: DesignOptions,
    rasterizer: BaseRasterizer | None = None,
    image_format: str = "png",
) -> str:
    """Render the text-only raster with the default composer."""
    return await get_default_composer().render_to_raster(
        design, rasterizer, image_format
    )


async def render_combined_raster(
    design: DesignOptions,
    rasterizer: BaseRasterizer | None = None,
    image_format: str = "png",
) -> str:
    """Render the combined raster with the default composer."""
    return await get_default_composer().render_combined_raster(
        design, rasterizer, image_format
    )
