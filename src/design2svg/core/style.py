"""Visual text styles: presentation attributes plus filter/gradient defs."""

import logging
import xml.etree.ElementTree as ET
from enum import Enum

from design2svg import svg_utils
from design2svg.core.base import BuilderProtocol

logger = logging.getLogger(__name__)


class TextStyle(str, Enum):
    """Visual style of the text. Unknown values resolve to NONE."""

    NONE = "none"
    OUTLINE = "outline"
    SHADOW = "shadow"
    GLOW = "glow"
    NEON = "neon"
    THREE_D = "3d"
    METALLIC = "metallic"
    CHROME = "chrome"
    GRADIENT = "gradient"
    VARSITY = "varsity"

    @classmethod
    def _missing_(cls, value: object) -> "TextStyle":
        logger.debug(f"Unknown text style {value!r}, using plain fill")
        return cls.NONE


def _create_filter(kind: str, id_: str, margin: int) -> ET.Element:
    """Create a filter node whose region extends margin percent on each side."""
    return svg_utils.create_node(
        "filter",
        id=f"{kind}-{id_}",
        x=f"-{margin}%",
        y=f"-{margin}%",
        width=f"{100 + 2 * margin}%",
        height=f"{100 + 2 * margin}%",
    )


def _create_merge(parent: ET.Element, *inputs: str) -> ET.Element:
    merge = svg_utils.create_node("feMerge", parent=parent)
    for name in inputs:
        svg_utils.create_node("feMergeNode", parent=merge, in_=name)
    return merge


def _create_linear_gradient(
    kind: str,
    id_: str,
    stops: list[tuple[str, str]],
    diagonal: bool = False,
) -> ET.Element:
    """Create a linear gradient, vertical unless diagonal is set."""
    gradient = svg_utils.create_node(
        "linearGradient",
        id=f"{kind}-{id_}",
        x1="0%",
        y1="0%",
        x2="100%" if diagonal else "0%",
        y2="100%",
    )
    for offset, color in stops:
        svg_utils.create_node(
            "stop", parent=gradient, offset=offset, stop_color=color
        )
    return gradient


def resolve_text_style(
    text_style: TextStyle | str,
    text_color: str,
    gradient_start: str,
    gradient_end: str,
    id_: str,
) -> tuple[dict[str, str], list[ET.Element]]:
    """Resolve a visual style into text attributes and the defs it references.

    Args:
        text_style: Visual style; unrecognized values fall back to a plain fill.
        text_color: Main text color.
        gradient_start: First stop of the ``gradient`` style.
        gradient_end: Last stop of the ``gradient`` style.
        id_: Namespace appended to generated def ids (e.g. ``shadow-<id_>``).

    Returns:
        Tuple of (attributes, defs). Attributes always include ``fill``.
    """
    style = TextStyle(text_style)

    if style == TextStyle.OUTLINE:
        return {"stroke": "black", "stroke-width": "2", "fill": text_color}, []

    if style == TextStyle.SHADOW:
        filter = _create_filter("shadow", id_, 20)
        svg_utils.create_node(
            "feDropShadow",
            parent=filter,
            dx=3,
            dy=3,
            stdDeviation=3,
            flood_color="#000000",
            flood_opacity=0.5,
        )
        return {
            "fill": text_color,
            "filter": svg_utils.get_funciri(filter),
        }, [filter]

    if style == TextStyle.GLOW:
        filter = _create_filter("glow", id_, 50)
        svg_utils.create_node(
            "feGaussianBlur",
            parent=filter,
            in_="SourceGraphic",
            stdDeviation=4,
            result="blur",
        )
        _create_merge(filter, "blur", "SourceGraphic")
        return {"fill": "white", "filter": svg_utils.get_funciri(filter)}, [filter]

    if style == TextStyle.NEON:
        filter = _create_filter("neon", id_, 50)
        svg_utils.create_node(
            "feFlood",
            parent=filter,
            result="flood",
            flood_color=text_color,
            flood_opacity=0.7,
        )
        svg_utils.create_node(
            "feComposite",
            parent=filter,
            in_="flood",
            in2="SourceGraphic",
            operator="in",
            result="color-out",
        )
        svg_utils.create_node(
            "feGaussianBlur",
            parent=filter,
            in_="color-out",
            stdDeviation=4,
            result="blur-out",
        )
        _create_merge(filter, "blur-out", "SourceGraphic")
        return {
            "fill": text_color,
            "filter": svg_utils.get_funciri(filter),
        }, [filter]

    if style == TextStyle.THREE_D:
        filter = _create_filter("three-d", id_, 20)
        svg_utils.create_node(
            "feDropShadow",
            parent=filter,
            dx=3,
            dy=3,
            stdDeviation=0,
            flood_color="#4B5563",
        )
        return {
            "fill": text_color,
            "filter": svg_utils.get_funciri(filter),
        }, [filter]

    if style == TextStyle.METALLIC:
        gradient = _create_linear_gradient(
            "metallic",
            id_,
            [("0%", "#E5E7EB"), ("50%", "#9CA3AF"), ("100%", "#E5E7EB")],
        )
        return {"fill": svg_utils.get_funciri(gradient)}, [gradient]

    if style == TextStyle.CHROME:
        gradient = _create_linear_gradient(
            "chrome",
            id_,
            [
                ("0%", "#6B7280"),
                ("30%", "#D1D5DB"),
                ("50%", "#F9FAFB"),
                ("70%", "#D1D5DB"),
                ("100%", "#6B7280"),
            ],
        )
        return {
            "fill": svg_utils.get_funciri(gradient),
            "stroke": "#4B5563",
            "stroke-width": "0.5",
        }, [gradient]

    if style == TextStyle.GRADIENT:
        gradient = _create_linear_gradient(
            "gradient",
            id_,
            [("0%", gradient_start), ("100%", gradient_end)],
            diagonal=True,
        )
        return {"fill": svg_utils.get_funciri(gradient)}, [gradient]

    if style == TextStyle.VARSITY:
        return {
            "stroke": "black",
            "stroke-width": "4",
            "stroke-linejoin": "round",
            "fill": text_color,
        }, []

    return {"fill": text_color}, []


class StyleConverter(BuilderProtocol):
    """Text style mixin."""

    def add_text_style(
        self,
        text_style: TextStyle | str,
        text_color: str,
        gradient_start: str,
        gradient_end: str,
    ) -> dict[str, str]:
        """Add the defs of a text style to the document and return its attributes."""
        attributes, defs = resolve_text_style(
            text_style, text_color, gradient_start, gradient_end, self.namespace
        )
        svg_utils.append_children(self.defs, defs)
        return attributes
