import logging
import xml.etree.ElementTree as ET
from typing import TYPE_CHECKING, Any

from design2svg import svg_utils
from design2svg.core.constants import (
    CANVAS_SIZE,
    DEFAULT_FONT_NAME,
    FONT_SIZE,
    GENERIC_FONT_FAMILY,
    MONOCHROME_SATURATION,
)
from design2svg.core.counter import AutoCounter
from design2svg.core.geometry import CANVAS_CENTER, Point, ScaledLogoBox
from design2svg.core.layout import LayoutConverter
from design2svg.core.style import StyleConverter

if TYPE_CHECKING:
    from design2svg.fonts import FontSource

logger = logging.getLogger(__name__)

MONOCHROME_FILTER_ID = "monochrome"


def create_empty_document() -> ET.Element:
    """Create a bare canvas-sized SVG root with no content."""
    return svg_utils.create_node(
        "svg", xmlns=svg_utils.NAMESPACE, width=CANVAS_SIZE, height=CANVAS_SIZE
    )


class DocumentBuilder(StyleConverter, LayoutConverter):
    """Builder of a single fixed-canvas SVG document.

    Example usage:

        from design2svg.core.builder import DocumentBuilder

        builder = DocumentBuilder("text-element", font_name="Anton")
        attributes = builder.add_text_style("shadow", "#FF0000", "", "")
        builder.add_text_layout("HELLO", "classic", attributes, box)
        svg_string = builder.tostring()

    Args:
        namespace: Suffix of every generated id, so that documents built
            independently can share a page or be merged.
        font_name: Display name of the font used by text elements.
        font_size: CSS font size of text elements.
    """

    _id_counter: AutoCounter | None = None

    def __init__(
        self,
        namespace: str,
        font_name: str = DEFAULT_FONT_NAME,
        font_size: str = FONT_SIZE,
    ) -> None:
        self.namespace = namespace
        self.font_name = font_name
        self.font_family = f"'{font_name}', {GENERIC_FONT_FAMILY}"
        self.font_size = font_size

        # Initialize the SVG root element.
        self.svg = svg_utils.create_node(
            "svg",
            xmlns=svg_utils.NAMESPACE,
            width=CANVAS_SIZE,
            height=CANVAS_SIZE,
            viewBox=svg_utils.seq2str([0, 0, CANVAS_SIZE, CANVAS_SIZE], sep=" "),
        )
        self.defs = svg_utils.create_node("defs", parent=self.svg)

        # Initialize the current node pointer.
        self.current = self.svg

    def auto_id(self, prefix: str = "") -> str:
        """Generate a unique ID within the document namespace."""
        if self._id_counter is None:
            self._id_counter = AutoCounter(self.namespace)
        return self._id_counter.get_id(prefix)

    def create_node(
        self,
        tag: str,
        parent: ET.Element | None = None,
        class_: str = "",
        text: str = "",
        **kwargs: Any,
    ) -> ET.Element:
        """Create an SVG node with the current element as default parent."""
        if parent is None:
            parent = self.current
        return svg_utils.create_node(
            tag, parent=parent, class_=class_, text=text, **kwargs
        )

    def add_font_style(self, source: "FontSource") -> ET.Element:
        """Declare the font at the top of <defs> and return the <style> node.

        Accepts an embedded asset (``@font-face`` rule) or an import reference.
        """
        svg_utils.insert_or_update_style_element(
            self.defs, source.to_css(self.font_name)
        )
        return self.defs[0]

    def add_monochrome_filter(self) -> ET.Element:
        """Add a filter that fully desaturates its input."""
        filter = self.create_node("filter", parent=self.defs, id=MONOCHROME_FILTER_ID)
        self.create_node(
            "feColorMatrix",
            parent=filter,
            type="saturate",
            values=MONOCHROME_SATURATION,
        )
        return filter

    def add_image(
        self,
        href: str,
        box: ScaledLogoBox,
        center: Point | None = None,
        filter: ET.Element | None = None,
    ) -> ET.Element:
        """Add the logo image centered on the given point at the scaled size."""
        x, y = box.placement(center or CANVAS_CENTER)
        return self.create_node(
            "image",
            href=href,
            x=x,
            y=y,
            width=box.width,
            height=box.height,
            preserveAspectRatio="xMidYMid meet",
            filter=svg_utils.get_funciri(filter) if filter is not None else None,
        )

    def add_fragment(self, children: list[ET.Element]) -> None:
        """Append detached content of another document under the current node."""
        svg_utils.append_children(self.current, children)

    def tostring(self, indent: str = "  ") -> str:
        """Serialize the document."""
        return svg_utils.tostring(self.svg, indent=indent)
