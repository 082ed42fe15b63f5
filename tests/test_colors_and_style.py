"""Tests for svg_cleaner.colors and svg_cleaner.style modules."""

import pytest
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from svg_cleaner.config import CleanerConfig
from svg_cleaner.colors import NAMED_COLORS, trim_color
from svg_cleaner.style import join_style, split_style


SHORT = CleanerConfig(convert_hex_to_short=True)


class TestTrimColor:
    """Tests for trim_color function."""

    def test_rgb_to_hex(self):
        assert trim_color("rgb(255,255,255)") == "#ffffff"

    def test_rgb_percent_to_hex(self):
        assert trim_color("rgb(100%,100%,100%)") == "#ffffff"

    def test_named_color(self):
        assert trim_color("red") == "#ff0000"

    def test_named_color_case_insensitive(self):
        assert trim_color("CornflowerBlue") == "#6495ed"

    def test_short_hex(self):
        assert trim_color("#aabbcc", SHORT) == "#abc"

    def test_short_hex_not_possible(self):
        assert trim_color("#aabbcd", SHORT) == "#aabbcd"

    def test_short_hex_off_by_default(self):
        assert trim_color("#aabbcc") == "#aabbcc"

    def test_uppercase_hex(self):
        assert trim_color("#FFFFFF", SHORT) == "#fff"

    def test_rgb_with_spaces(self):
        assert trim_color("rgb( 0 , 128 , 255 )") == "#0080ff"

    def test_rgb_clamped(self):
        assert trim_color("rgb(300, -5, 16)") == "#ff0010"

    def test_rgb_percent_truncated(self):
        # 50% -> 127.5 -> 127
        assert trim_color("rgb(50%, 0%, 100%)") == "#7f00ff"

    def test_rgb_exponent_component(self):
        assert trim_color("rgb(1e2,0,0)") == "#640000"
        assert trim_color("rgb(0, 2.5E1, 1e+2)") == "#001964"

    def test_rgb_percent_with_exponent(self):
        assert trim_color("rgb(1e2%, 0%, 0%)") == "#ff0000"

    def test_unknown_keyword_passes_through(self):
        assert trim_color("NotAColor") == "notacolor"

    def test_named_then_short(self):
        assert trim_color("white", SHORT) == "#fff"

    def test_conversion_disabled(self):
        config = CleanerConfig(convert_color_to_hex=False)
        assert trim_color("red", config) == "red"
        assert trim_color("RGB(1,2,3)", config) == "rgb(1,2,3)"

    def test_only_short(self):
        config = CleanerConfig(convert_color_to_hex=False, convert_hex_to_short=True)
        assert trim_color("#FF0000", config) == "#f00"
        assert trim_color("red", config) == "red"


class TestNamedColors:
    """Tests for the NAMED_COLORS table."""

    def test_read_only(self):
        with pytest.raises(TypeError):
            NAMED_COLORS["myred"] = "#ff0000"  # type: ignore

    def test_values_are_long_hex(self):
        for name, value in NAMED_COLORS.items():
            assert name == name.lower()
            assert len(value) == 7 and value.startswith("#")

    def test_gray_spellings(self):
        assert NAMED_COLORS["gray"] == NAMED_COLORS["grey"]
        assert NAMED_COLORS["lightgray"] == NAMED_COLORS["lightgrey"]


class TestSplitStyle:
    """Tests for split_style function."""

    def test_basic(self):
        assert split_style("fill:red; stroke:  blue ") == {
            "fill": "red",
            "stroke": "blue",
        }

    def test_order_preserved(self):
        style = split_style("stroke:blue;fill:red;opacity:.5")
        assert list(style) == ["stroke", "fill", "opacity"]

    def test_duplicate_updates_value_keeps_position(self):
        style = split_style("fill:red;stroke:blue;fill:green")
        assert style == {"fill": "green", "stroke": "blue"}
        assert list(style) == ["fill", "stroke"]

    def test_empty(self):
        assert split_style("") == {}
        assert split_style(" ;; ") == {}

    def test_declaration_without_colon_skipped(self):
        assert split_style("fill;stroke:red") == {"stroke": "red"}

    def test_value_with_colon(self):
        assert split_style("font-family:a:b") == {"font-family": "a:b"}


class TestJoinStyle:
    """Tests for join_style function."""

    def test_basic(self):
        assert join_style({"fill": "red", "stroke": "blue"}) == "fill:red;stroke:blue"

    def test_empty(self):
        assert join_style({}) == ""

    def test_round_trip(self):
        style = split_style(join_style(split_style("fill:red; stroke:  blue ")))
        assert style == {"fill": "red", "stroke": "blue"}
        assert list(style) == ["fill", "stroke"]
