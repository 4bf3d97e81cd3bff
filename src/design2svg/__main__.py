import argparse
import asyncio
import logging
import sys

from design2svg import image_utils
from design2svg.composer import DesignComposer, DesignOptions
from design2svg.core.layout import LayoutStyle
from design2svg.core.style import TextStyle
from design2svg.exceptions import Design2SVGError

logger = logging.getLogger(__name__)

ARTIFACTS = ["text-svg", "text-png", "combined-svg", "combined-png", "engraving-svg"]


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Compose a logo and styled text into SVG or raster artwork"
    )
    parser.add_argument(
        "logo", metavar="LOGO", type=str, help="Logo image file path, URL or data URI"
    )
    parser.add_argument("output", metavar="PATH", type=str, help="Output file.")
    parser.add_argument(
        "--text", type=str, default="", help="Text placed around the logo."
    )
    parser.add_argument(
        "--font",
        metavar="FONT",
        type=str,
        default="impact",
        help="Font id from the font catalog. Default: impact",
    )
    parser.add_argument(
        "--layout",
        type=str,
        choices=[style.value for style in LayoutStyle],
        default=LayoutStyle.CLASSIC.value,
        help="Text arrangement around the logo. Default: classic",
    )
    parser.add_argument(
        "--text-style",
        type=str,
        choices=[style.value for style in TextStyle],
        default=TextStyle.NONE.value,
        help="Visual style of the text. Default: none",
    )
    parser.add_argument(
        "--text-color",
        metavar="COLOR",
        type=str,
        default="#000000",
        help="Text color. Default: #000000",
    )
    parser.add_argument(
        "--gradient-start",
        metavar="COLOR",
        type=str,
        default="#FF0000",
        help="First color of the gradient text style.",
    )
    parser.add_argument(
        "--gradient-end",
        metavar="COLOR",
        type=str,
        default="#0000FF",
        help="Last color of the gradient text style.",
    )
    parser.add_argument(
        "--artifact",
        type=str,
        choices=ARTIFACTS,
        default="combined-svg",
        help="Artifact to generate. Default: combined-svg",
    )
    parser.add_argument(
        "--image-format",
        metavar="FORMAT",
        type=str,
        choices=["png", "jpeg", "webp"],
        default="png",
        help="Image format for raster artifacts (png, jpeg, webp). Default: png",
    )
    parser.add_argument(
        "--embed-fonts",
        dest="embed_fonts",
        action="store_true",
        help="Embed the web font as a data URI in SVG artifacts.",
    )
    parser.add_argument(
        "--loglevel",
        metavar="LEVEL",
        default="WARNING",
        help="Logging level, default WARNING",
    )
    return parser.parse_args(argv)


async def generate(args: argparse.Namespace) -> str:
    """Generate the requested artifact as an SVG string or a raster data URI."""
    design = DesignOptions(
        logo=args.logo,
        text=args.text,
        font=args.font,
        style=args.layout,
        text_style=args.text_style,
        text_color=args.text_color,
        gradient_start_color=args.gradient_start,
        gradient_end_color=args.gradient_end,
    )
    composer = DesignComposer()
    if args.artifact == "text-svg":
        return await composer.compose_text_only(design, embed_font=args.embed_fonts)
    if args.artifact == "combined-svg":
        return await composer.compose_combined(design, embed_font=args.embed_fonts)
    if args.artifact == "engraving-svg":
        return await composer.compose_engraving(design)
    if args.artifact == "text-png":
        return await composer.render_to_raster(design, image_format=args.image_format)
    return await composer.render_combined_raster(
        design, image_format=args.image_format
    )


def main(argv: list[str] | None = None) -> None:
    """Main function to compose a design and write the artifact."""
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.loglevel.upper(), "WARNING"))
    try:
        result = asyncio.run(generate(args))
    except Design2SVGError as e:
        print(f"error: {e}", file=sys.stderr)
        sys.exit(1)

    if result.startswith("data:"):
        _, data = image_utils.decode_data_uri_bytes(result)
        with open(args.output, "wb") as f:
            f.write(data)
    else:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(result)
    logger.info(f"Saved {args.artifact} to {args.output}")


if __name__ == "__main__":
    main()
