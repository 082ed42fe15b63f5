"""Tests for svg_cleaner.config module."""

import pytest
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from svg_cleaner.config import (
    DEFAULT_CONFIG,
    CleanerConfig,
    parse_config_file,
    parse_config_section,
)


class TestCleanerConfig:
    """Tests for CleanerConfig dataclass."""

    def test_defaults(self):
        config = CleanerConfig()
        assert config.coordinate_precision == 3
        assert config.attribute_precision == 3
        assert config.transform_precision == 5
        assert config.convert_color_to_hex is True
        assert config.convert_hex_to_short is False
        assert config == DEFAULT_CONFIG

    def test_precision_by_kind(self):
        config = CleanerConfig(
            coordinate_precision=1, attribute_precision=2, transform_precision=4
        )
        assert config.precision("coordinate") == 1
        assert config.precision("attribute") == 2
        assert config.precision("transform") == 4

    def test_unknown_kind(self):
        with pytest.raises(ValueError):
            CleanerConfig().precision("angle")  # type: ignore

    def test_immutable(self):
        with pytest.raises(AttributeError):
            DEFAULT_CONFIG.coordinate_precision = 1  # type: ignore

    @pytest.mark.parametrize("value", [-1, 1.5, "3", True])
    def test_invalid_precision(self, value):
        with pytest.raises(ValueError):
            CleanerConfig(coordinate_precision=value)

    def test_invalid_flag(self):
        with pytest.raises(ValueError):
            CleanerConfig(convert_color_to_hex="yes")  # type: ignore

    def test_zero_precision_allowed(self):
        assert CleanerConfig(transform_precision=0).transform_precision == 0


class TestParseConfigSection:
    """Tests for parse_config_section function."""

    def test_full(self):
        config = parse_config_section(
            {
                "precision": {"coordinates": 2, "attributes": 4, "transform": 6},
                "colors": {"to_hex": False, "to_short_hex": True},
            }
        )
        assert config == CleanerConfig(
            coordinate_precision=2,
            attribute_precision=4,
            transform_precision=6,
            convert_color_to_hex=False,
            convert_hex_to_short=True,
        )

    def test_partial_keeps_defaults(self):
        config = parse_config_section({"precision": {"transform": 2}})
        assert config.transform_precision == 2
        assert config.coordinate_precision == 3

    def test_empty_section(self):
        assert parse_config_section({"colors": None}) == DEFAULT_CONFIG

    def test_unknown_section(self):
        with pytest.raises(ValueError, match="fonts"):
            parse_config_section({"fonts": {}})

    def test_unknown_key(self):
        with pytest.raises(ValueError, match="digits"):
            parse_config_section({"precision": {"digits": 2}})

    def test_section_not_dict(self):
        with pytest.raises(ValueError):
            parse_config_section({"precision": 3})

    def test_invalid_value(self):
        with pytest.raises(ValueError):
            parse_config_section({"precision": {"coordinates": -2}})


class TestParseConfigFile:
    """Tests for parse_config_file function."""

    def test_valid_file(self, tmp_path):
        config_file = tmp_path / "cleaner.yaml"
        config_file.write_text(
            """
precision:
  coordinates: 1
colors:
  to_short_hex: true
"""
        )
        config = parse_config_file(config_file)
        assert config.coordinate_precision == 1
        assert config.convert_hex_to_short is True
        assert config.convert_color_to_hex is True

    def test_empty_file(self, tmp_path):
        config_file = tmp_path / "empty.yaml"
        config_file.write_text("")
        assert parse_config_file(config_file) == DEFAULT_CONFIG

    def test_not_a_dict(self, tmp_path):
        config_file = tmp_path / "list.yaml"
        config_file.write_text("- 1\n- 2\n")
        with pytest.raises(ValueError):
            parse_config_file(config_file)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            parse_config_file(tmp_path / "missing.yaml")
