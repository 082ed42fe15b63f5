"""SVG Cleaner - transform, number, style and color normalization for SVG files."""

__version__ = "0.1.0"

from .config import (
    DEFAULT_CONFIG,
    CleanerConfig,
    parse_config_file,
)
from .numeric import (
    NumberCursor,
    NumberFormatError,
    convert_units_to_px,
    format_number,
    fuzzy_equal,
    fuzzy_zero,
    is_zero,
    parse_number,
    round_number,
)
from .colors import NAMED_COLORS, trim_color
from .style import join_style, split_style
from .transform import (
    PrimitiveTransform,
    Transform,
    TransformParseError,
    compose,
    parse_transform,
    simplify_transform,
    simplify_transform_text,
)
from .references import (
    ElementReference,
    ReferenceResolver,
    RewriteResult,
)
from .clean import (
    CleanReport,
    clean_svg,
    clean_svg_tree,
    format_clean_report,
)

__all__ = [
    # Config
    "DEFAULT_CONFIG",
    "CleanerConfig",
    "parse_config_file",
    # Numbers
    "NumberCursor",
    "NumberFormatError",
    "convert_units_to_px",
    "format_number",
    "fuzzy_equal",
    "fuzzy_zero",
    "is_zero",
    "parse_number",
    "round_number",
    # Colors and styles
    "NAMED_COLORS",
    "trim_color",
    "join_style",
    "split_style",
    # Transforms
    "PrimitiveTransform",
    "Transform",
    "TransformParseError",
    "compose",
    "parse_transform",
    "simplify_transform",
    "simplify_transform_text",
    # References
    "ElementReference",
    "ReferenceResolver",
    "RewriteResult",
    # Pipeline
    "CleanReport",
    "clean_svg",
    "clean_svg_tree",
    "format_clean_report",
]
