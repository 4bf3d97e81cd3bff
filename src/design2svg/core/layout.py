"""Text arrangements around the logo box."""

import logging
import math
import xml.etree.ElementTree as ET
from enum import Enum

from design2svg import svg_utils
from design2svg.core.base import BuilderProtocol
from design2svg.core.geometry import CANVAS_CENTER, Point, ScaledLogoBox

logger = logging.getLogger(__name__)

# Gap between the logo box and the start of the surrounding text.
ARC_MARGIN = 20
HALF_CIRCLE_PADDING = 30
OVAL_PADDING = 80
OVAL_RADIUS_Y = 60
FULL_CIRCLE_PADDING = 50
SPLIT_MARGIN = 20
STACKED_OFFSET = 30
STACKED_LINE_HEIGHT = 60
FLAT_OFFSET = 60


class LayoutStyle(str, Enum):
    """Arrangement of the text. Unknown values resolve to FLAT."""

    CLASSIC = "classic"
    LOWER_HALF_CIRCLE = "lower_half_circle"
    UPPER_HALF_CIRCLE = "upper_half_circle"
    UPPER_OVAL = "upper_oval"
    LOWER_OVAL = "lower_oval"
    FULL_CIRCLE = "full_circle"
    SPLIT = "split"
    STACKED_TEXT = "stacked_text"
    FLAT = "flat"

    @classmethod
    def _missing_(cls, value: object) -> "LayoutStyle":
        logger.debug(f"Unknown layout {value!r}, using flat text")
        return cls.FLAT


def split_words(text: str) -> tuple[str, str]:
    """Split text into two halves by word count.

    The first half receives ``ceil(n / 2)`` words, so for odd counts the
    extra word goes first. Runs of whitespace separate words.

    Example::

        >>> split_words("A B C")
        ('A B', 'C')
    """
    words = text.split()
    middle = math.ceil(len(words) / 2)
    return " ".join(words[:middle]), " ".join(words[middle:])


def arc_path(start: Point, end: Point, rx: float, ry: float, sweep: int) -> str:
    """Path data for a single small elliptical arc from start to end."""
    return (
        f"M {svg_utils.num2str(start.x)},{svg_utils.num2str(start.y)} "
        f"A {svg_utils.num2str(rx)},{svg_utils.num2str(ry)} 0 0 {sweep} "
        f"{svg_utils.num2str(end.x)},{svg_utils.num2str(end.y)}"
    )


class LayoutConverter(BuilderProtocol):
    """Text layout mixin.

    Arc paths are placed in the document ``<defs>``; text elements are
    created under the current node.
    """

    def add_text_layout(
        self,
        text: str,
        layout: LayoutStyle | str,
        attributes: dict[str, str],
        box: ScaledLogoBox,
        center: Point | None = None,
    ) -> list[ET.Element]:
        """Lay out text around the logo box and return the created text nodes.

        Args:
            text: Non-empty text to place.
            layout: Arrangement; unrecognized values fall back to flat text.
            attributes: Presentation attributes from the style resolver.
            box: Scaled logo box the text is arranged around.
            center: Logo center, the canvas center by default.
        """
        center = center or CANVAS_CENTER
        layout = LayoutStyle(layout)
        logger.debug(f"Laying out text: layout={layout.value}, box={box}")

        if layout in (LayoutStyle.CLASSIC, LayoutStyle.LOWER_HALF_CIRCLE):
            radius = box.width / 2 + HALF_CIRCLE_PADDING
            return [
                self._add_lower_arc(
                    text, attributes, box, center, radius, radius, "lower"
                )
            ]

        if layout == LayoutStyle.UPPER_HALF_CIRCLE:
            radius = box.width / 2 + HALF_CIRCLE_PADDING
            return [
                self._add_upper_arc(
                    text, attributes, box, center, radius, radius, "upper"
                )
            ]

        if layout == LayoutStyle.UPPER_OVAL:
            rx = box.width / 2 + OVAL_PADDING
            return [
                self._add_upper_arc(
                    text, attributes, box, center, rx, OVAL_RADIUS_Y, "upper-oval"
                )
            ]

        if layout == LayoutStyle.LOWER_OVAL:
            rx = box.width / 2 + OVAL_PADDING
            return [
                self._add_lower_arc(
                    text, attributes, box, center, rx, OVAL_RADIUS_Y, "lower-oval"
                )
            ]

        if layout == LayoutStyle.FULL_CIRCLE:
            return self._add_full_circle(text, attributes, box, center)

        if layout == LayoutStyle.SPLIT:
            return self._add_split(text, attributes, box, center)

        if layout == LayoutStyle.STACKED_TEXT:
            return [
                self._add_line(
                    word,
                    attributes,
                    Point(
                        center.x,
                        center.y
                        + box.height / 2
                        + STACKED_OFFSET
                        + i * STACKED_LINE_HEIGHT,
                    ),
                )
                for i, word in enumerate(text.split())
            ]

        return [
            self._add_line(
                text,
                attributes,
                Point(center.x, center.y + box.height / 2 + FLAT_OFFSET),
            )
        ]

    def _text_attributes(self, attributes: dict[str, str]) -> dict[str, str]:
        return {
            **attributes,
            "font-family": self.font_family,
            "font-size": self.font_size,
        }

    def _add_path_text(
        self, text: str, attributes: dict[str, str], variant: str, d: str
    ) -> ET.Element:
        """Add an arc path to defs and a text node following it."""
        path = self.create_node(
            "path",
            parent=self.defs,
            id=self.auto_id(f"text-path-{variant}"),
            d=d,
            fill="none",
        )
        node = self.create_node("text")
        text_path = self.create_node(
            "textPath",
            parent=node,
            text=text,
            href=svg_utils.get_uri(path),
            startOffset="50%",
            text_anchor="middle",
        )
        svg_utils.set_attributes(text_path, self._text_attributes(attributes))
        return node

    def _add_lower_arc(
        self,
        text: str,
        attributes: dict[str, str],
        box: ScaledLogoBox,
        center: Point,
        rx: float,
        ry: float,
        variant: str,
    ) -> ET.Element:
        y = center.y + box.height / 2 + ARC_MARGIN
        d = arc_path(Point(center.x - rx, y), Point(center.x + rx, y), rx, ry, 1)
        return self._add_path_text(text, attributes, variant, d)

    def _add_upper_arc(
        self,
        text: str,
        attributes: dict[str, str],
        box: ScaledLogoBox,
        center: Point,
        rx: float,
        ry: float,
        variant: str,
    ) -> ET.Element:
        y = center.y - box.height / 2 - ARC_MARGIN
        d = arc_path(Point(center.x + rx, y), Point(center.x - rx, y), rx, ry, 0)
        return self._add_path_text(text, attributes, variant, d)

    def _add_full_circle(
        self,
        text: str,
        attributes: dict[str, str],
        box: ScaledLogoBox,
        center: Point,
    ) -> list[ET.Element]:
        top_text, bottom_text = split_words(text)
        radius = max(box.width, box.height) / 2 + FULL_CIRCLE_PADDING
        left = Point(center.x - radius, center.y)
        right = Point(center.x + radius, center.y)
        nodes = []
        if top_text:
            d = arc_path(right, left, radius, radius, 0)
            nodes.append(self._add_path_text(top_text, attributes, "top", d))
        if bottom_text:
            d = arc_path(left, right, radius, radius, 1)
            nodes.append(self._add_path_text(bottom_text, attributes, "bottom", d))
        return nodes

    def _add_split(
        self,
        text: str,
        attributes: dict[str, str],
        box: ScaledLogoBox,
        center: Point,
    ) -> list[ET.Element]:
        left_text, right_text = split_words(text)
        nodes = []
        if left_text:
            nodes.append(
                self._add_line(
                    left_text,
                    attributes,
                    Point(center.x - box.width / 2 - SPLIT_MARGIN, center.y),
                    anchor="end",
                    dominant_baseline="middle",
                )
            )
        if right_text:
            nodes.append(
                self._add_line(
                    right_text,
                    attributes,
                    Point(center.x + box.width / 2 + SPLIT_MARGIN, center.y),
                    anchor="start",
                    dominant_baseline="middle",
                )
            )
        return nodes

    def _add_line(
        self,
        text: str,
        attributes: dict[str, str],
        position: Point,
        anchor: str = "middle",
        dominant_baseline: str | None = None,
    ) -> ET.Element:
        """Add a single straight text line."""
        node = self.create_node(
            "text",
            text=text,
            x=position.x,
            y=position.y,
            text_anchor=anchor,
            dominant_baseline=dominant_baseline,
        )
        svg_utils.set_attributes(node, self._text_attributes(attributes))
        return node
