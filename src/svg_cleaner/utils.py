"""Utility functions for SVG parsing and element naming."""

from pathlib import Path
from xml.etree import ElementTree as ET

# SVG namespace mappings
SVG_NAMESPACES = {
    "svg": "http://www.w3.org/2000/svg",
    "inkscape": "http://www.inkscape.org/namespaces/inkscape",
    "sodipodi": "http://sodipodi.sourceforge.net/DTD/sodipodi-0.dtd",
    "xlink": "http://www.w3.org/1999/xlink",
}

# Attributes holding a transform list
TRANSFORM_ATTRIBUTES = ("transform", "gradientTransform", "patternTransform")

# Presentation attributes holding a color
COLOR_ATTRIBUTES = frozenset(
    [
        "fill",
        "stroke",
        "stop-color",
        "flood-color",
        "lighting-color",
        "color",
    ]
)


def register_namespaces() -> None:
    """Register SVG namespaces to preserve prefixes when writing."""
    for prefix, uri in SVG_NAMESPACES.items():
        ET.register_namespace(prefix, uri)


def parse_svg(file_path: Path) -> ET.ElementTree:
    """Parse an SVG file and return the element tree.

    Args:
        file_path: Path to the SVG file.

    Returns:
        Parsed ElementTree.

    Raises:
        FileNotFoundError: If the file does not exist.
        ET.ParseError: If the file is not valid XML.
    """
    register_namespaces()
    return ET.parse(file_path)


def get_local_name(tag: str) -> str:
    """Extract local name from a namespaced tag.

    Args:
        tag: Full tag name, possibly with namespace.

    Returns:
        Local name without namespace prefix.

    Example:
        >>> get_local_name("{http://www.w3.org/2000/svg}rect")
        'rect'
    """
    if tag.startswith("{"):
        return tag.split("}", 1)[1]
    return tag


def get_namespace(tag: str) -> str | None:
    """Extract the namespace URI of a tag, or None for plain tags."""
    if tag.startswith("{"):
        return tag[1:].split("}", 1)[0]
    return None


def qualified_name(name: str) -> str:
    """Expand a prefixed attribute name into ElementTree notation.

    Args:
        name: Attribute name such as ``xlink:href`` or ``fill``.

    Returns:
        ``{uri}local`` for known prefixes, otherwise the name unchanged.

    Example:
        >>> qualified_name("xlink:href")
        '{http://www.w3.org/1999/xlink}href'
    """
    if ":" in name and not name.startswith("{"):
        prefix, local = name.split(":", 1)
        if prefix in SVG_NAMESPACES:
            return f"{{{SVG_NAMESPACES[prefix]}}}{local}"
    return name
