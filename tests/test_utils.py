"""Tests for svg_cleaner.utils module."""

import pytest
from pathlib import Path
from xml.etree import ElementTree as ET

import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from svg_cleaner.utils import (
    SVG_NAMESPACES,
    get_local_name,
    get_namespace,
    parse_svg,
    qualified_name,
)


class TestNames:
    """Tests for tag and attribute name helpers."""

    def test_local_name(self):
        assert get_local_name("{http://www.w3.org/2000/svg}rect") == "rect"
        assert get_local_name("rect") == "rect"

    def test_namespace(self):
        assert get_namespace("{http://www.w3.org/2000/svg}rect") == SVG_NAMESPACES["svg"]
        assert get_namespace("rect") is None

    def test_qualified_name(self):
        assert qualified_name("xlink:href") == f"{{{SVG_NAMESPACES['xlink']}}}href"
        assert qualified_name("inkscape:label") == f"{{{SVG_NAMESPACES['inkscape']}}}label"

    def test_qualified_name_unchanged(self):
        assert qualified_name("fill") == "fill"
        assert qualified_name("foo:bar") == "foo:bar"
        assert qualified_name("{urn:x}y") == "{urn:x}y"


class TestParseSvg:
    """Tests for parse_svg function."""

    def test_parse(self, tmp_path):
        svg_file = tmp_path / "test.svg"
        svg_file.write_text('<svg xmlns="http://www.w3.org/2000/svg"><rect/></svg>')
        tree = parse_svg(svg_file)
        assert get_local_name(tree.getroot().tag) == "svg"

    def test_invalid_xml(self, tmp_path):
        svg_file = tmp_path / "broken.svg"
        svg_file.write_text("<svg><rect></svg>")
        with pytest.raises(ET.ParseError):
            parse_svg(svg_file)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            parse_svg(tmp_path / "missing.svg")
