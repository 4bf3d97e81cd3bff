"""Tests for SVG utility functions."""

import xml.etree.ElementTree as ET

import pytest

from design2svg import svg_utils


class TestNum2Str:
    """Test number formatting of attribute values."""

    def test_booleans_and_integers(self) -> None:
        assert svg_utils.num2str(True) == "true"
        assert svg_utils.num2str(False) == "false"
        assert svg_utils.num2str(-100) == "-100"

    def test_integer_like_float(self) -> None:
        assert svg_utils.num2str(370.0) == "370"
        assert svg_utils.num2str(-5.0) == "-5"

    def test_float_precision(self) -> None:
        assert svg_utils.num2str(130.25) == "130.25"
        assert svg_utils.num2str(0.123) == "0.12"
        assert svg_utils.num2str(1.50) == "1.5"
        assert svg_utils.num2str(0.123456, digit=4) == "0.1235"

    def test_no_scientific_notation(self) -> None:
        assert svg_utils.num2str(0.00001, digit=5) == "0.00001"
        assert svg_utils.num2str(1000000.0) == "1000000"

    def test_negative_zero(self) -> None:
        assert svg_utils.num2str(-0.0) == "0"
        assert svg_utils.num2str(-0.001) == "0"

    def test_invalid_type_raises_error(self) -> None:
        with pytest.raises(ValueError, match="Unsupported type"):
            svg_utils.num2str("string")  # type: ignore

    def test_seq2str(self) -> None:
        assert svg_utils.seq2str([0, 0, 1000, 1000], sep=" ") == "0 0 1000 1000"
        assert svg_utils.seq2str([1, 0.5, 2.0]) == "1,0.5,2"


class TestCreateNode:
    def test_attribute_names(self) -> None:
        node = svg_utils.create_node(
            "feComposite", in_="flood", in2="SourceGraphic", flood_color="#FFF"
        )
        assert node.attrib == {
            "in": "flood",
            "in2": "SourceGraphic",
            "flood-color": "#FFF",
        }

    def test_none_is_skipped(self) -> None:
        node = svg_utils.create_node("image", filter=None, x=1.5)
        assert node.attrib == {"x": "1.5"}

    def test_parent_and_text(self) -> None:
        parent = svg_utils.create_node("svg")
        node = svg_utils.create_node("text", parent=parent, text="Hi\x00!")
        assert parent[0] is node
        assert node.text == "Hi !"

    def test_set_attributes_keeps_hyphens(self) -> None:
        node = ET.Element("text")
        svg_utils.set_attributes(node, {"stroke-width": "2", "font_size": 3})
        assert node.attrib == {"stroke-width": "2", "font_size": "3"}

    def test_get_funciri(self) -> None:
        node = svg_utils.create_node("filter", id="glow-a")
        assert svg_utils.get_uri(node) == "#glow-a"
        assert svg_utils.get_funciri(node) == "url(#glow-a)"
        with pytest.raises(ValueError):
            svg_utils.get_uri(ET.Element("filter"))


class TestToString:
    def test_escaping(self) -> None:
        node = svg_utils.create_node(
            "style", text="@import url('https://a.test/css?x=1&y=2');"
        )
        svg_utils.set_attribute(node, "data-value", '<"&">')
        result = svg_utils.tostring(node)
        assert "x=1&amp;y=2" in result
        assert 'data-value="&lt;&quot;&amp;&quot;&gt;"' in result
        parsed = svg_utils.fromstring(result)
        assert parsed.get("data-value") == '<"&">'

    def test_quotes_round_trip(self) -> None:
        value = "Rock 'n' \"Roll\" <&>"
        node = svg_utils.create_node("text", text=value, data_value=value)
        result = svg_utils.tostring(node)
        assert "&lt;&amp;&gt;" in result
        assert 'data-value="Rock \'n\' &quot;Roll&quot; &lt;&amp;&gt;"' in result
        parsed = svg_utils.fromstring(result)
        assert parsed.text == value
        assert parsed.get("data-value") == value

    def test_text_whitespace_is_not_indented(self) -> None:
        root = svg_utils.create_node("svg")
        text = svg_utils.create_node("text", parent=root)
        svg_utils.create_node("textPath", parent=text, text="HELLO")
        result = svg_utils.tostring(root)
        assert "<text><textPath>HELLO</textPath></text>" in result
        assert result.startswith("<svg>\n  <text>")

    def test_no_indent(self) -> None:
        root = svg_utils.create_node("svg")
        svg_utils.create_node("defs", parent=root)
        assert svg_utils.tostring(root, indent="") == "<svg><defs /></svg>"

    def test_parsed_document_keeps_default_namespace(self) -> None:
        root = svg_utils.fromstring(
            '<svg xmlns="http://www.w3.org/2000/svg"><rect/></svg>'
        )
        result = svg_utils.tostring(root, indent="")
        assert result.startswith('<svg xmlns="http://www.w3.org/2000/svg">')
        assert "ns0" not in result


class TestTreeHelpers:
    def test_extract_content(self) -> None:
        root = svg_utils.create_node("svg")
        defs = svg_utils.create_node("defs", parent=root)
        text = svg_utils.create_node("text", parent=root, text="A")
        svg_utils.tostring(root)  # Adds indentation tails
        assert svg_utils.extract_content(root) == [defs, text]
        assert len(root) == 0
        assert defs.tail is None and text.tail is None

    def test_insert_style_element(self) -> None:
        defs = svg_utils.create_node("defs")
        svg_utils.create_node("filter", parent=defs, id="f")
        svg_utils.insert_or_update_style_element(defs, "a {}")
        svg_utils.insert_or_update_style_element(defs, "b {}")
        svg_utils.insert_or_update_style_element(defs, "a {}")
        assert [node.tag for node in defs] == ["style", "filter"]
        assert defs[0].text == "a {}\nb {}"
