"""Parsing and serialization of the 'style' attribute."""


def split_style(style: str) -> dict[str, str]:
    """Split a style attribute into an ordered name -> value mapping.

    Empty declarations and declarations without ':' are skipped. A repeated
    name updates the value but keeps the position of its first occurrence.

    Args:
        style: Style attribute value, e.g. "fill:red; stroke: blue".

    Returns:
        Mapping of declaration names to values, both trimmed.

    Example:
        >>> split_style("fill:red; stroke:  blue ")
        {'fill': 'red', 'stroke': 'blue'}
    """
    result: dict[str, str] = {}
    for declaration in style.strip().split(";"):
        if not declaration.strip():
            continue
        name, sep, value = declaration.partition(":")
        if not sep:
            continue
        result[name.strip()] = value.strip()
    return result


def join_style(style: dict[str, str]) -> str:
    """Serialize a style mapping back to attribute text.

    Args:
        style: Mapping of declaration names to values.

    Returns:
        Declarations as "name:value" joined with ';', no trailing separator.
    """
    return ";".join(f"{name}:{value}" for name, value in style.items())
