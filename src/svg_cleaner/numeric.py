"""Number parsing and precision-aware number serialization."""

import math
import re

from .config import DEFAULT_CONFIG, CleanerConfig, PrecisionKind

# Single tolerance used for every float comparison in the cleaner
EPSILON = 1e-9

# Unit to user-unit (px) factors, 90 dpi
UNIT_FACTORS = {
    "pt": 1.25,
    "pc": 15.0,
    "mm": 3.543307,
    "cm": 35.43307,
    "in": 90.0,
}

_LENGTH_RE = re.compile(
    r"^\s*([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)\s*([a-zA-Z%]*)\s*$"
)


class NumberFormatError(ValueError):
    """Raised when a number is expected but no digits are present."""


def fuzzy_equal(a: float, b: float, eps: float = EPSILON) -> bool:
    """Check whether two floats are equal within eps."""
    return abs(a - b) < eps


def fuzzy_zero(value: float, eps: float = EPSILON) -> bool:
    """Check whether a float is zero within eps."""
    return abs(value) < eps


def is_zero(value: float, config: CleanerConfig) -> bool:
    """Check whether a value is invisible at coordinate precision.

    Args:
        value: Value to check.
        config: Cleaner configuration.

    Returns:
        True if |value| is below one unit of the last kept digit.
    """
    return abs(value) < 1 / 10**config.coordinate_precision


def _round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    if value < 0:
        return -math.floor(-value + 0.5)
    return math.floor(value + 0.5)


def round_number(value: float, precision: int) -> str:
    """Serialize a number with at most `precision` fractional digits.

    The shortest text is produced: trailing zeros, a trailing point and a
    leading zero are dropped. When the fraction is tiny compared to the
    integer part it is treated as noise and kept with one digit less.

    Args:
        value: Number to serialize.
        precision: Maximum number of fractional digits.

    Returns:
        Serialized number.

    Raises:
        ValueError: If value is NaN or infinite.

    Example:
        >>> round_number(24.2008, 2)
        '24.2'
        >>> round_number(-0.5, 2)
        '-.5'
    """
    if not math.isfinite(value):
        raise ValueError(f"Cannot serialize non-finite number: {value}")

    fraction, integer = math.modf(value)
    if fuzzy_zero(fraction):
        return str(int(integer))

    # 24.2008 -> 24.2, 3.004 -> 3
    if integer != 0 and precision > 0:
        shown = abs(_round_half_away(fraction * 10**precision))
        if shown * 100 < abs(integer) * 10**precision:
            scale = 10 ** (precision - 1)
            value = integer + _round_half_away(fraction * scale) / scale

    text = f"{value:.{precision}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")

    # 0.1 -> .1, -0.1 -> -.1
    if text.startswith("0."):
        text = text[1:]
    elif text.startswith("-0."):
        text = "-" + text[2:]

    if text in ("", "-", "-0"):
        return "0"
    return text


def format_number(
    value: float, kind: PrecisionKind, config: CleanerConfig | None = None
) -> str:
    """Serialize a number with the precision configured for its category.

    Args:
        value: Number to serialize.
        kind: "coordinate", "attribute" or "transform".
        config: Cleaner configuration, DEFAULT_CONFIG when omitted.

    Returns:
        Serialized number.
    """
    config = config or DEFAULT_CONFIG
    return round_number(value, config.precision(kind))


class NumberCursor:
    """Read position over a string of numbers."""

    def __init__(self, text: str, pos: int = 0):
        self.text = text
        self.pos = pos

    @property
    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def peek(self) -> str:
        """Current character, or an empty string at the end."""
        if self.at_end:
            return ""
        return self.text[self.pos]

    def skip_whitespace(self) -> None:
        while not self.at_end and self.text[self.pos].isspace():
            self.pos += 1

    def skip_separators(self) -> None:
        """Skip any run of whitespace and commas."""
        while not self.at_end and (
            self.text[self.pos].isspace() or self.text[self.pos] == ","
        ):
            self.pos += 1


_DIGITS = "0123456789"


def _scan_digits(text: str, pos: int) -> int:
    while pos < len(text) and text[pos] in _DIGITS:
        pos += 1
    return pos


def parse_number(cursor: NumberCursor) -> float:
    """Read one number at the cursor and advance past it.

    Leading whitespace is skipped. After the number, whitespace and at most
    one comma are consumed as well.

    Args:
        cursor: Cursor to read from; advanced on success.

    Returns:
        Parsed value.

    Raises:
        NumberFormatError: If no digits are found. The cursor is not moved.
    """
    text = cursor.text
    pos = cursor.pos
    while pos < len(text) and text[pos].isspace():
        pos += 1
    start = pos

    if pos < len(text) and text[pos] in "+-":
        pos += 1
    int_end = _scan_digits(text, pos)
    has_digits = int_end > pos
    pos = int_end
    if pos < len(text) and text[pos] == ".":
        frac_end = _scan_digits(text, pos + 1)
        has_digits = has_digits or frac_end > pos + 1
        pos = frac_end

    if not has_digits:
        raise NumberFormatError(
            f"Expected a number at position {cursor.pos} in {text!r}"
        )

    # exponent only when digits follow
    if pos < len(text) and text[pos] in "eE":
        exp_pos = pos + 1
        if exp_pos < len(text) and text[exp_pos] in "+-":
            exp_pos += 1
        exp_end = _scan_digits(text, exp_pos)
        if exp_end > exp_pos:
            pos = exp_end

    value = float(text[start:pos])

    cursor.pos = pos
    cursor.skip_whitespace()
    if cursor.peek() == ",":
        cursor.pos += 1
        cursor.skip_whitespace()
    return value


def convert_units_to_px(text: str, config: CleanerConfig, base_value: float = 0) -> str:
    """Convert a length with an absolute unit into user units.

    Args:
        text: Length such as "10mm" or "50%".
        config: Cleaner configuration (attribute precision is used).
        base_value: Reference length for percentages; ignored when not positive.

    Returns:
        The converted number, or the original text when the unit is relative
        (em, ex), unknown, missing, or the text is not a length.
    """
    match = _LENGTH_RE.match(text)
    if match is None:
        return text

    number = float(match.group(1))
    unit = match.group(2)

    if unit == "px":
        return format_number(number, "attribute", config)
    if unit in UNIT_FACTORS:
        number *= UNIT_FACTORS[unit]
    elif unit == "%" and base_value > 0:
        number = number * base_value / 100
    else:
        return text

    return format_number(number, "attribute", config)
