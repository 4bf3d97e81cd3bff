import xml.etree.ElementTree as ET
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from design2svg.core.geometry import Point, ScaledLogoBox
    from design2svg.core.layout import LayoutStyle
    from design2svg.core.style import TextStyle


class BuilderProtocol(Protocol):
    """Document builder state protocol."""

    svg: ET.Element
    defs: ET.Element
    current: ET.Element

    # Suffix of every generated id in the document.
    namespace: str
    # CSS font-family and font-size values applied to all text elements.
    font_family: str
    font_size: str

    # Text styles
    def add_text_style(
        self,
        text_style: "TextStyle | str",
        text_color: str,
        gradient_start: str,
        gradient_end: str,
    ) -> dict[str, str]: ...

    # Text layouts
    def add_text_layout(
        self,
        text: str,
        layout: "LayoutStyle | str",
        attributes: dict[str, str],
        box: "ScaledLogoBox",
        center: "Point | None" = None,
    ) -> list[ET.Element]: ...

    # Utilities
    def auto_id(self, prefix: str = "") -> str: ...
    def create_node(
        self,
        tag: str,
        parent: ET.Element | None = None,
        class_: str = "",
        text: str = "",
        **kwargs: Any,
    ) -> ET.Element: ...
