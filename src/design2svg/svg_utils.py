import logging
import re
import xml.etree.ElementTree as ET
from re import Pattern
from typing import Any, Iterable, Optional, Sequence

logger = logging.getLogger(__name__)

NAMESPACE = "http://www.w3.org/2000/svg"

# Serialize parsed documents with a default namespace instead of ns0: prefixes.
ET.register_namespace("", NAMESPACE)

ILLEGAL_XML_RE: Pattern[str] = re.compile(
    "[\x00-\x08\x0b-\x1f\x7f-\x84\x86-\x9f\ud800-\udfff\ufdd0-\ufddf\ufffe-\uffff]"
)

DEFAULT_NUMBER_DIGITS = 2


def safe_utf8(text: str) -> str:
    """Remove illegal XML characters from text."""
    return ILLEGAL_XML_RE.sub(" ", text)


def num2str(num: int | float | bool, digit: int = DEFAULT_NUMBER_DIGITS) -> str:
    """Convert a number to a string, using the specified format for floats."""
    if isinstance(num, bool):
        return "true" if num else "false"
    if isinstance(num, int):
        return str(num)
    if isinstance(num, float):
        if num.is_integer():
            return str(int(num))
        # Format float with specified number of digits, and trim trailing zeros
        number = f"{num:.{digit}f}"
        number = f"{number[0]}{number[1:].rstrip('0').rstrip('.')}"
        return "0" if number == "-0" else number
    raise ValueError(f"Unsupported type: {type(num)}")


def seq2str(
    seq: Sequence[int | float | bool],
    sep: str = ",",
    digit: int = DEFAULT_NUMBER_DIGITS,
) -> str:
    """Convert a sequence of numbers to a string, using the specified format for floats."""
    return sep.join(num2str(n, digit) for n in seq)


def create_node(
    tag: str,
    parent: Optional[ET.Element] = None,
    class_: str = "",
    text: str = "",
    **kwargs: Any,
) -> ET.Element:
    """Create an XML node with attributes.

    Attribute names may use underscores in place of hyphens (``font_size``
    becomes ``font-size``) and a trailing underscore for Python keywords
    (``in_`` becomes ``in``). Attributes set to None are skipped.

    Values are stored unescaped; escaping happens once, when the tree is
    serialized by :func:`tostring`.
    """
    node = ET.Element(tag)
    if class_:
        node.set("class", class_)
    for key, value in kwargs.items():
        if value is None:
            continue
        key = key.rstrip("_")  # allow trailing underscore for keywords
        key = key.replace("_", "-")  # convert underscores to hyphens
        set_attribute(node, key, value)
    if text:
        node.text = safe_utf8(text)
    if parent is not None:
        parent.append(node)
    return node


def set_attribute(node: ET.Element, key: str, value: Any) -> None:
    """Add an attribute to an XML node."""
    if isinstance(value, (int, float, bool)):
        node.set(key, num2str(value))
    elif isinstance(value, list) and all(
        isinstance(v, (int, float, bool)) for v in value
    ):
        node.set(key, seq2str(value))
    else:
        node.set(key, safe_utf8(str(value)))


def set_attributes(node: ET.Element, attributes: dict[str, Any]) -> None:
    """Set several attributes at once, keeping hyphenated names as-is."""
    for key, value in attributes.items():
        if value is None:
            continue
        set_attribute(node, key, value)


def get_uri(node: ET.Element) -> str:
    """Get an uri string for the given node."""
    id_ = node.get("id")
    if not id_:
        raise ValueError(f"Node must have an 'id' attribute to get uri: {node}")
    return f"#{id_}"


def get_funciri(node: ET.Element) -> str:
    """Get a funciri string for the given node."""
    return f"url({get_uri(node)})"


def get_local_name(node: ET.Element) -> str:
    """Get the tag name without namespace prefix."""
    tag = node.tag
    if not isinstance(tag, str):
        return ""
    return tag.split("}")[-1] if "}" in tag else tag


def _strip_text_element_whitespace(node: ET.Element) -> None:
    """Strip whitespace-only text and tail from SVG text elements.

    SVG preserves whitespace in text elements by default. When pretty-printing
    adds indentation, this whitespace becomes significant and shifts centered
    text. Whitespace-only text/tail content inside text containers is removed.
    """
    if get_local_name(node) in ("text", "tspan", "textPath"):
        if len(node) > 0 and node.text and node.text.strip() == "":
            node.text = None
        for child in node:
            if child.tail and child.tail.strip() == "":
                child.tail = None

    for child in node:
        _strip_text_element_whitespace(child)


def fromstring(data: str) -> ET.Element:
    """Parse an XML string to an Element."""
    return ET.fromstring(data)


def tostring(node: ET.Element, indent: str = "  ") -> str:
    """Convert an XML node to a string.

    Attribute values and text are escaped here, exactly once. ``&``, ``<`` and
    ``>`` are always escaped; ``"`` is escaped in attribute values, which are
    always double-quoted. ``'`` is never significant in this output and is
    written as is, so parsing the result yields the original values.
    """
    if indent:
        ET.indent(node, space=indent)
    _strip_text_element_whitespace(node)
    return ET.tostring(node, encoding="unicode", xml_declaration=False)


def extract_content(svg: ET.Element) -> list[ET.Element]:
    """Detach and return the children of an SVG root, dropping the envelope.

    The returned elements keep their order: typically the ``<defs>`` block
    first and the drawable body after it.
    """
    children = list(svg)
    for child in children:
        svg.remove(child)
        child.tail = None
    return children


def append_children(parent: ET.Element, children: Iterable[ET.Element]) -> None:
    """Append a sequence of elements to the parent in order."""
    for child in children:
        parent.append(child)


def insert_or_update_style_element(parent: ET.Element, css_content: str) -> None:
    """Insert or update a <style> element as the first child of the parent.

    Args:
        parent: Element that should hold the style, the SVG root or <defs>.
        css_content: CSS content to insert or append.

    Note:
        - If a <style> element exists as first child, appends to it
        - Otherwise creates a new <style> element as first child
        - Idempotent: skips if CSS content already present
    """
    style_element = None
    if len(parent) > 0 and get_local_name(parent[0]) == "style":
        style_element = parent[0]

    if style_element is not None:
        existing_text = style_element.text or ""
        if css_content in existing_text:
            logger.debug("CSS content already present, skipping")
            return
        style_element.text = existing_text + "\n" + css_content
    else:
        style_element = ET.Element("style")
        style_element.text = css_content
        parent.insert(0, style_element)
