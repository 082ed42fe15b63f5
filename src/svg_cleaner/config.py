"""Cleaner configuration: numeric precisions and color conversion flags."""

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Literal

import yaml

# Default values
DEFAULT_COORDINATE_PRECISION = 3
DEFAULT_ATTRIBUTE_PRECISION = 3
DEFAULT_TRANSFORM_PRECISION = 5

PrecisionKind = Literal["coordinate", "attribute", "transform"]

_PRECISION_KEYS = {
    "coordinates": "coordinate_precision",
    "attributes": "attribute_precision",
    "transform": "transform_precision",
}
_COLOR_KEYS = {
    "to_hex": "convert_color_to_hex",
    "to_short_hex": "convert_hex_to_short",
}


@dataclass(frozen=True)
class CleanerConfig:
    """Immutable settings shared by every cleaning operation.

    One instance is created per run and passed explicitly to each call, so
    several documents can be processed in parallel with the same value.
    """

    coordinate_precision: int = DEFAULT_COORDINATE_PRECISION
    attribute_precision: int = DEFAULT_ATTRIBUTE_PRECISION
    transform_precision: int = DEFAULT_TRANSFORM_PRECISION
    convert_color_to_hex: bool = True
    convert_hex_to_short: bool = False

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if f.name.endswith("_precision"):
                if isinstance(value, bool) or not isinstance(value, int):
                    raise ValueError(f"{f.name} must be an integer, got {value!r}")
                if value < 0:
                    raise ValueError(f"{f.name} must be non-negative, got {value}")
            elif not isinstance(value, bool):
                raise ValueError(f"{f.name} must be a boolean, got {value!r}")

    def precision(self, kind: PrecisionKind) -> int:
        """Return the precision configured for a value category.

        Args:
            kind: "coordinate", "attribute" or "transform".

        Returns:
            Number of decimal digits to keep.
        """
        if kind == "coordinate":
            return self.coordinate_precision
        elif kind == "attribute":
            return self.attribute_precision
        elif kind == "transform":
            return self.transform_precision
        raise ValueError(f"Unknown precision kind: {kind}")


DEFAULT_CONFIG = CleanerConfig()


def parse_config_section(data: dict) -> CleanerConfig:
    """Build a CleanerConfig from already loaded YAML data.

    Args:
        data: Dictionary with optional 'precision' and 'colors' sections.

    Returns:
        Parsed CleanerConfig.

    Raises:
        ValueError: If the format is invalid.
    """
    unknown = set(data) - {"precision", "colors"}
    if unknown:
        raise ValueError(f"Unknown config sections: {', '.join(sorted(unknown))}")

    kwargs: dict = {}
    for section, mapping in (("precision", _PRECISION_KEYS), ("colors", _COLOR_KEYS)):
        section_data = data.get(section) or {}
        if not isinstance(section_data, dict):
            raise ValueError(f"'{section}' section must be a dictionary")
        for key, value in section_data.items():
            if key not in mapping:
                raise ValueError(f"Unknown key in '{section}' section: {key}")
            kwargs[mapping[key]] = value

    return CleanerConfig(**kwargs)


def parse_config_file(config_path: Path) -> CleanerConfig:
    """Parse a YAML configuration file.

    Args:
        config_path: Path to the YAML file.

    Returns:
        Parsed CleanerConfig.

    Raises:
        FileNotFoundError: If the file does not exist.
        yaml.YAMLError: If the file is not valid YAML.
        ValueError: If the config format is invalid.
    """
    with open(config_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if data is None:
        return CleanerConfig()
    if not isinstance(data, dict):
        raise ValueError("Config file must be a YAML dictionary")

    return parse_config_section(data)
