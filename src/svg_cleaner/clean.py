"""SVG cleaning pipeline.

The pipeline runs these steps in order, each of them optional:
- transforms: Rewrite transform attributes in their shortest form
- styles: Normalize style attributes and the colors inside them
- colors: Normalize color presentation attributes
- ids: Give referenced ids the shortest free names
"""

import itertools
import logging
import string
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, Literal
from xml.etree import ElementTree as ET

from .colors import trim_color
from .config import DEFAULT_CONFIG, CleanerConfig
from .references import ReferenceResolver
from .style import join_style, split_style
from .transform import simplify_transform_text
from .utils import COLOR_ATTRIBUTES, TRANSFORM_ATTRIBUTES, parse_svg

logger = logging.getLogger(__name__)

# Step names
StepName = Literal["transforms", "styles", "colors", "ids"]
ALL_STEPS: list[StepName] = ["transforms", "styles", "colors", "ids"]

# Color values left as written
_KEPT_COLOR_KEYWORDS = frozenset(["none", "currentcolor", "inherit", "transparent"])


@dataclass
class PassResult:
    """Attribute counts for one cleaning step."""

    changed: int = 0
    removed: int = 0

    @property
    def total(self) -> int:
        return self.changed + self.removed


@dataclass
class CleanReport:
    """Complete cleaning report."""

    file_path: Path
    results: dict[str, PassResult] = field(default_factory=dict)
    skipped_steps: list[str] = field(default_factory=list)
    unresolved_ids: list[str] = field(default_factory=list)

    @property
    def executed_steps(self) -> list[str]:
        """List of steps that were executed."""
        return list(self.results)

    @property
    def total_changes(self) -> int:
        """Number of attributes changed or removed by all steps."""
        return sum(result.total for result in self.results.values())

    @property
    def has_warnings(self) -> bool:
        """Check if the document references missing ids."""
        return bool(self.unresolved_ids)


def _normalize_color_value(value: str, config: CleanerConfig) -> str:
    """Trim a color unless it is a paint server reference or a keyword."""
    if "url(" in value or value.strip().lower() in _KEPT_COLOR_KEYWORDS:
        return value
    return trim_color(value, config)


def simplify_transforms(root: ET.Element, config: CleanerConfig) -> PassResult:
    """Rewrite every transform attribute in its shortest form.

    Identity and empty transforms are removed.

    Args:
        root: Root element of the document.
        config: Cleaner configuration.

    Returns:
        PassResult with changed and removed attribute counts.

    Raises:
        TransformParseError: If a transform cannot be parsed.
    """
    result = PassResult()
    for elem in root.iter():
        for name in TRANSFORM_ATTRIBUTES:
            value = elem.get(name)
            if value is None:
                continue

            new_value = simplify_transform_text(value, config) if value.strip() else ""
            if not new_value:
                del elem.attrib[name]
                result.removed += 1
                logger.debug("Removed %s=%r", name, value)
            elif new_value != value:
                elem.set(name, new_value)
                result.changed += 1
                logger.debug("Simplified %s=%r to %r", name, value, new_value)
    return result


def normalize_styles(root: ET.Element, config: CleanerConfig) -> PassResult:
    """Re-serialize style attributes, trimming the colors they contain.

    Empty style attributes are removed.

    Args:
        root: Root element of the document.
        config: Cleaner configuration.

    Returns:
        PassResult with changed and removed attribute counts.
    """
    result = PassResult()
    for elem in root.iter():
        value = elem.get("style")
        if value is None:
            continue

        style = split_style(value)
        for name in style:
            if name in COLOR_ATTRIBUTES:
                style[name] = _normalize_color_value(style[name], config)

        new_value = join_style(style)
        if not new_value:
            del elem.attrib["style"]
            result.removed += 1
        elif new_value != value:
            elem.set("style", new_value)
            result.changed += 1
            logger.debug("Normalized style %r to %r", value, new_value)
    return result


def normalize_colors(root: ET.Element, config: CleanerConfig) -> PassResult:
    """Trim color presentation attributes (fill, stroke, stop-color, ...).

    Args:
        root: Root element of the document.
        config: Cleaner configuration.

    Returns:
        PassResult with the changed attribute count.
    """
    result = PassResult()
    for elem in root.iter():
        for name in COLOR_ATTRIBUTES:
            value = elem.get(name)
            if value is None:
                continue
            new_value = _normalize_color_value(value, config)
            if new_value != value:
                elem.set(name, new_value)
                result.changed += 1
    return result


def iter_short_ids() -> Iterator[str]:
    """Yield a, b, ..., z, aa, ab, ... in order of length."""
    for length in itertools.count(1):
        for letters in itertools.product(string.ascii_lowercase, repeat=length):
            yield "".join(letters)


def compact_ids(root: ET.Element) -> PassResult:
    """Rename referenced ids to the shortest free names.

    Ids nobody references are left alone and their names are never reused,
    nor are the names of references that point at no element.

    Args:
        root: Root element of the document.

    Returns:
        PassResult with the renamed id count.
    """
    resolver = ReferenceResolver(root)
    references = resolver.collect_references()
    referenced = [
        ref_id for ref_id in references if resolver.find_by_id(ref_id) is not None
    ]
    # dangling references keep their names so they never start to resolve
    all_ids = {elem.get("id") for elem in root.iter() if elem.get("id") is not None}
    reserved = (all_ids | set(references)) - set(referenced)

    mapping: dict[str, str] = {}
    names = (name for name in iter_short_ids() if name not in reserved)
    for ref_id, new_id in zip(referenced, names):
        if new_id != ref_id:
            mapping[ref_id] = new_id

    if mapping:
        resolver.rename_ids(mapping)
    return PassResult(changed=len(mapping))


def clean_svg_tree(
    tree: ET.ElementTree,
    config: CleanerConfig | None = None,
    steps: list[StepName] | None = None,
) -> CleanReport:
    """Clean an existing ElementTree in place.

    Args:
        tree: ElementTree to clean.
        config: Cleaner configuration (default: DEFAULT_CONFIG).
        steps: Steps to execute (default: all steps).

    Returns:
        CleanReport with results from all executed steps.

    Raises:
        TransformParseError: If a transform cannot be parsed. The tree may
            be partially cleaned and should be discarded.
    """
    config = config or DEFAULT_CONFIG
    if steps is None:
        steps = ALL_STEPS

    root = tree.getroot()
    report = CleanReport(file_path=Path(""))

    for step in ALL_STEPS:
        if step not in steps:
            report.skipped_steps.append(f"{step} (not requested)")
            continue

        if step == "transforms":
            result = simplify_transforms(root, config)
        elif step == "styles":
            result = normalize_styles(root, config)
        elif step == "colors":
            result = normalize_colors(root, config)
        else:
            result = compact_ids(root)

        report.results[step] = result
        logger.info(
            "Step %s: %d changed, %d removed", step, result.changed, result.removed
        )

    report.unresolved_ids = [
        ref.id for ref in ReferenceResolver(root).unresolved_references()
    ]
    return report


def clean_svg(
    svg_path: Path,
    config: CleanerConfig | None = None,
    steps: list[StepName] | None = None,
) -> tuple[ET.ElementTree, CleanReport]:
    """Clean an SVG file.

    Args:
        svg_path: Path to SVG file.
        config: Cleaner configuration.
        steps: Steps to execute (default: all steps).

    Returns:
        Tuple of (cleaned ElementTree, CleanReport).
    """
    tree = parse_svg(svg_path)
    report = clean_svg_tree(tree, config, steps)
    report.file_path = svg_path
    return tree, report


def format_clean_report(report: CleanReport) -> str:
    """Format cleaning report as text.

    Args:
        report: Cleaning report.

    Returns:
        Formatted text.
    """
    lines: list[str] = []
    lines.append(f"File: {report.file_path}")
    lines.append("")

    if report.skipped_steps:
        lines.append("Skipped steps:")
        for step in report.skipped_steps:
            lines.append(f"  - {step}")
        lines.append("")

    lines.append("=" * 60)
    lines.append("STEPS")
    lines.append("=" * 60)
    for step, result in report.results.items():
        lines.append(f"{step}: changed {result.changed}, removed {result.removed}")
    lines.append("")

    for ref_id in report.unresolved_ids:
        lines.append(f"[WARNING] Unresolved reference: #{ref_id}")
    if report.unresolved_ids:
        lines.append("")

    lines.append("=" * 60)
    lines.append("SUMMARY")
    lines.append("=" * 60)
    lines.append(f"Executed steps: {', '.join(report.executed_steps) or 'none'}")
    lines.append(f"Attributes changed or removed: {report.total_changes}")

    return "\n".join(lines)
