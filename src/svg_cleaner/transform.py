"""SVG transform lists: parsing, matrix composition and minimal rewriting.

A transform is kept as the six coefficients (a, b, c, d, e, f) of the matrix

    | a c e |
    | b d f |
    | 0 0 1 |

which maps a point (x, y) to (a*x + c*y + e, b*x + d*y + f).
"""

import math
from dataclasses import dataclass
from typing import Literal

from .config import DEFAULT_CONFIG, CleanerConfig
from .numeric import (
    EPSILON,
    NumberCursor,
    NumberFormatError,
    format_number,
    fuzzy_equal,
    fuzzy_zero,
    is_zero,
    parse_number,
)

TransformKind = Literal["matrix", "translate", "scale", "rotate", "skewX", "skewY"]

# Accepted argument counts per function
ARGUMENT_COUNTS: dict[str, tuple[int, ...]] = {
    "matrix": (6,),
    "translate": (1, 2),
    "scale": (1, 2),
    "rotate": (1, 3),
    "skewX": (1,),
    "skewY": (1,),
}

Coefficients = tuple[float, float, float, float, float, float]


class TransformParseError(ValueError):
    """Raised when a transform list cannot be parsed."""


@dataclass(frozen=True)
class PrimitiveTransform:
    """One function of a transform list, as matrix coefficients."""

    kind: TransformKind
    a: float = 1.0
    b: float = 0.0
    c: float = 0.0
    d: float = 1.0
    e: float = 0.0
    f: float = 0.0

    @property
    def coefficients(self) -> Coefficients:
        """Coefficients (a, b, c, d, e, f)."""
        return (self.a, self.b, self.c, self.d, self.e, self.f)


def multiply(m1: Coefficients, m2: Coefficients) -> Coefficients:
    """Multiply two affine matrices, m1 x m2.

    The product applies m2 to a point first, then m1.
    """
    a1, b1, c1, d1, e1, f1 = m1
    a2, b2, c2, d2, e2, f2 = m2
    return (
        a1 * a2 + c1 * b2,
        b1 * a2 + d1 * b2,
        a1 * c2 + c1 * d2,
        b1 * c2 + d1 * d2,
        a1 * e2 + c1 * f2 + e1,
        b1 * e2 + d1 * f2 + f1,
    )


def _make_primitive(name: str, args: list[float]) -> PrimitiveTransform:
    """Build the primitive for a parsed function call."""
    if name == "matrix":
        return PrimitiveTransform("matrix", *args)

    if name == "translate":
        ty = args[1] if len(args) == 2 else 0.0
        return PrimitiveTransform("translate", e=args[0], f=ty)

    if name == "scale":
        sy = args[1] if len(args) == 2 else args[0]
        return PrimitiveTransform("scale", a=args[0], d=sy)

    if name == "rotate":
        theta = math.radians(args[0])
        cos, sin = math.cos(theta), math.sin(theta)
        e = f = 0.0
        if len(args) == 3:
            # translate(cx cy) rotate(angle) translate(-cx -cy)
            cx, cy = args[1], args[2]
            e = cx - cos * cx + sin * cy
            f = cy - sin * cx - cos * cy
        return PrimitiveTransform("rotate", a=cos, b=sin, c=-sin, d=cos, e=e, f=f)

    # skew angles are passed to tan() as given
    if name == "skewX":
        return PrimitiveTransform("skewX", c=math.tan(args[0]))
    return PrimitiveTransform("skewY", b=math.tan(args[0]))


def parse_transform(text: str) -> list[PrimitiveTransform]:
    """Parse a transform attribute into its primitive functions.

    Args:
        text: Non-empty transform list, e.g. "translate(10,20) scale(2)".
            Callers must check for empty values first.

    Returns:
        Primitives in textual order.

    Raises:
        TransformParseError: On an unknown function name, a missing
            parenthesis, a malformed number or a wrong argument count.

    Example:
        >>> parse_transform("scale(2)")
        [PrimitiveTransform(kind='scale', a=2.0, b=0.0, c=0.0, d=2.0, e=0.0, f=0.0)]
    """
    assert text.strip(), "transform text must not be empty"

    primitives: list[PrimitiveTransform] = []
    cursor = NumberCursor(text)
    cursor.skip_separators()

    while not cursor.at_end:
        open_pos = text.find("(", cursor.pos)
        if open_pos == -1:
            raise TransformParseError(f"Missing '(' in transform: {text!r}")

        name = text[cursor.pos : open_pos].strip()
        if name not in ARGUMENT_COUNTS:
            raise TransformParseError(
                f"Unknown transform function {name!r} in: {text!r}"
            )

        cursor.pos = open_pos + 1
        cursor.skip_whitespace()
        args: list[float] = []
        while cursor.peek() != ")":
            if cursor.at_end:
                raise TransformParseError(f"Missing ')' in transform: {text!r}")
            try:
                args.append(parse_number(cursor))
            except NumberFormatError as e:
                raise TransformParseError(
                    f"Invalid argument for {name}() in: {text!r}"
                ) from e
        cursor.pos += 1

        expected = ARGUMENT_COUNTS[name]
        if len(args) not in expected:
            counts = " or ".join(str(n) for n in expected)
            raise TransformParseError(
                f"{name}() takes {counts} arguments, got {len(args)} in: {text!r}"
            )

        primitives.append(_make_primitive(name, args))
        cursor.skip_separators()

    return primitives


@dataclass(frozen=True)
class Transform:
    """A composed transform list."""

    a: float = 1.0
    b: float = 0.0
    c: float = 0.0
    d: float = 1.0
    e: float = 0.0
    f: float = 0.0

    @classmethod
    def from_text(cls, text: str) -> "Transform":
        """Parse and compose a transform attribute."""
        return compose(parse_transform(text))

    @property
    def coefficients(self) -> Coefficients:
        """Coefficients (a, b, c, d, e, f)."""
        return (self.a, self.b, self.c, self.d, self.e, self.f)

    @property
    def x_scale(self) -> float:
        """Length of the transformed x unit vector."""
        return math.hypot(self.a, self.b)

    @property
    def y_scale(self) -> float:
        """Length of the transformed y unit vector."""
        return math.hypot(self.c, self.d)

    @property
    def is_proportional_scale(self) -> bool:
        return abs(self.x_scale - self.y_scale) < 0.0001

    @property
    def is_mirrored(self) -> bool:
        return self.a < 0 or self.c < 0

    def is_rotating(self, config: CleanerConfig | None = None) -> bool:
        """Check whether the transform rotates, at coordinate precision."""
        config = config or DEFAULT_CONFIG
        if fuzzy_zero(self.d):
            return True
        return not is_zero(math.atan(self.b / self.d), config)

    def map_point(self, x: float, y: float) -> tuple[float, float]:
        """Apply the transform to a point."""
        return (
            self.a * x + self.c * y + self.e,
            self.b * x + self.d * y + self.f,
        )

    def simplified(self, config: CleanerConfig | None = None) -> str:
        """Shortest transform attribute text for this matrix."""
        return simplify_transform(self, config)


def compose(primitives: list[PrimitiveTransform]) -> Transform:
    """Multiply primitives in textual order into one transform.

    Args:
        primitives: Primitives as returned by parse_transform.

    Returns:
        Transform mapping a point like the whole list does: the last
        primitive is applied to the point first.

    Raises:
        ValueError: If the list is empty.
    """
    if not primitives:
        raise ValueError("Cannot compose an empty transform list")

    matrix = primitives[0].coefficients
    for primitive in primitives[1:]:
        matrix = multiply(matrix, primitive.coefficients)
    return Transform(*matrix)


def simplify_transform(
    transform: Transform, config: CleanerConfig | None = None
) -> str:
    """Rewrite a composed transform as the shortest equivalent function.

    Forms are tried in order: translate, scale, rotate, skewX, skewY and
    finally matrix. Comparisons use EPSILON.

    Args:
        transform: Composed transform.
        config: Cleaner configuration; translations use coordinate
            precision, everything else transform precision.

    Returns:
        Transform attribute text, or "" for an identity transform.
    """
    config = config or DEFAULT_CONFIG
    a, b, c, d, e, f = transform.coefficients

    def coord(value: float) -> str:
        return format_number(value, "coordinate", config)

    def number(value: float) -> str:
        return format_number(value, "transform", config)

    # [1 0 0 1 tx ty] = translate
    if fuzzy_equal(a, 1) and fuzzy_zero(b) and fuzzy_zero(c) and fuzzy_equal(d, 1):
        tx, ty = coord(e), coord(f)
        if ty != "0":
            return f"translate({tx} {ty})"
        if tx != "0":
            return f"translate({tx})"
        return ""

    # [sx 0 0 sy 0 0] = scale
    if fuzzy_zero(b) and fuzzy_zero(c) and fuzzy_zero(e) and fuzzy_zero(f):
        sx, sy = number(a), number(d)
        if sx == sy == "1":
            return ""
        if sx != sy:
            return f"scale({sx} {sy})"
        return f"scale({sx})"

    no_offset = fuzzy_zero(e) and fuzzy_zero(f)
    # stored rotations are rounded, match them at transform precision
    tolerance = 10.0 ** -config.transform_precision

    # [cos(a) sin(a) -sin(a) cos(a) 0 0] = rotate
    if (
        no_offset
        and fuzzy_equal(a, d)
        and b > EPSILON
        and c < -EPSILON
        and fuzzy_equal(b, -c, tolerance)
        and fuzzy_equal(a * a + b * b, 1, tolerance)
    ):
        angle = number(math.degrees(math.acos(max(-1.0, min(1.0, a)))))
        return "" if angle == "0" else f"rotate({angle})"

    # [1 0 tan(a) 1 0 0] = skewX
    if no_offset and fuzzy_equal(a, 1) and fuzzy_zero(b) and fuzzy_equal(d, 1):
        angle = number(math.degrees(math.atan(c)))
        return "" if angle == "0" else f"skewX({angle})"

    # [1 tan(a) 0 1 0 0] = skewY
    if no_offset and fuzzy_equal(a, 1) and fuzzy_zero(c) and fuzzy_equal(d, 1):
        angle = number(math.degrees(math.atan(b)))
        return "" if angle == "0" else f"skewY({angle})"

    parts = [number(value) for value in (a, b, c, d)]
    parts += [coord(value) for value in (e, f)]
    text = f"matrix({' '.join(parts)})"
    # only the all-zero matrix is dropped, identity is caught by translate
    if text == "matrix(0 0 0 0 0 0)":
        return ""
    return text


def simplify_transform_text(text: str, config: CleanerConfig | None = None) -> str:
    """Parse, compose and simplify a transform attribute value.

    Args:
        text: Non-empty transform attribute value.
        config: Cleaner configuration.

    Returns:
        Shortest equivalent text, "" for identity.

    Raises:
        TransformParseError: If the text cannot be parsed.
    """
    return simplify_transform(compose(parse_transform(text)), config)
