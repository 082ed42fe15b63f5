#!/usr/bin/env python3
"""Clean SVG files (transforms -> styles -> colors -> ids)."""

import argparse
import logging
import sys
from pathlib import Path
from xml.etree import ElementTree as ET

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from svg_cleaner.clean import (
    ALL_STEPS,
    StepName,
    clean_svg,
    format_clean_report,
)
from svg_cleaner.config import CleanerConfig, parse_config_file


def parse_steps(steps_arg: str | None) -> list[StepName]:
    """Parse steps argument.

    Args:
        steps_arg: Comma-separated step names or 'all'.

    Returns:
        List of step names to execute.

    Raises:
        ValueError: If invalid step name is provided.
    """
    if steps_arg is None or steps_arg.lower() == "all":
        return list(ALL_STEPS)

    steps: list[StepName] = []
    for step in steps_arg.split(","):
        step = step.strip().lower()
        if step not in ALL_STEPS:
            valid_steps = ", ".join(ALL_STEPS)
            raise ValueError(f"Invalid step '{step}'. Valid steps: {valid_steps}, all")
        steps.append(step)  # type: ignore

    return steps


def main() -> int:
    """Main entry point.

    Returns:
        Exit code:
        - 0: Success
        - 1: I/O or SVG parse error
        - 2: Config or argument error
    """
    parser = argparse.ArgumentParser(
        description="Clean SVG files (transforms -> styles -> colors -> ids).",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Show what would change (no output file)
  %(prog)s input.svg

  # Clean and save output
  %(prog)s input.svg --output output.svg

  # Custom precisions and steps
  %(prog)s input.svg --config cleaner.yaml --steps transforms,colors -o out.svg
""",
    )
    parser.add_argument("svg_file", type=Path, help="Path to SVG file to clean")
    parser.add_argument(
        "--config", "-c", type=Path, help="YAML file with precision and color settings"
    )
    parser.add_argument("--output", "-o", type=Path, help="Output SVG file")
    parser.add_argument(
        "--steps",
        "-s",
        type=str,
        default="all",
        help="Steps to execute: transforms,styles,colors,ids or 'all' (default: all)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Preview changes without writing output",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Log every rewritten attribute"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.svg_file.exists():
        print(f"Error: SVG file not found: {args.svg_file}", file=sys.stderr)
        return 1

    try:
        steps = parse_steps(args.steps)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    config = CleanerConfig()
    if args.config is not None:
        try:
            config = parse_config_file(args.config)
        except Exception as e:
            print(f"Error: Failed to parse config file: {e}", file=sys.stderr)
            return 2

    try:
        tree, report = clean_svg(args.svg_file, config, steps=steps)
    except (ValueError, ET.ParseError, OSError) as e:
        print(f"Error: Failed to clean SVG: {e}", file=sys.stderr)
        return 1

    print(format_clean_report(report))

    if args.output and not args.dry_run:
        try:
            tree.write(args.output, encoding="unicode", xml_declaration=True)
            print(f"\nOutput written to: {args.output}")
        except OSError as e:
            print(f"Error: Failed to write output: {e}", file=sys.stderr)
            return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
