"""Points, vectors and colors for the affine geometry of the renderer.

A ``Point`` is a position (implicit w = 1) and a ``Vector`` is a free
direction (implicit w = 0). Mixing them follows the affine rules:

- Point - Point = Vector
- Point +/- Vector = Point
- Vector +/- Vector = Vector

Adding two points has no geometric meaning and raises ``TypeError``.

Colors are unbounded RGB triples. Channels are only clamped when a canvas
is quantized for output, never during shading.

All equality comparisons use an absolute tolerance of ``EPSILON``.

Example:
    >>> from phongtracer.core.tuples import Point, Vector
    >>> p = Point(1, 2, 3) + Vector(0, 0, 1)
    >>> p == Point(1, 2, 4)
    True
"""

from __future__ import annotations

import math
from dataclasses import dataclass

# Absolute tolerance for every floating-point comparison in the package
EPSILON = 1e-5


def feq(a: float, b: float) -> bool:
    """Compare two floats with the package-wide tolerance."""
    return abs(a - b) <= EPSILON


@dataclass(frozen=True, eq=False)
class Vector:
    """A direction in 3D space (w = 0).

    Attributes:
        x: X component.
        y: Y component.
        z: Z component.
    """

    x: float
    y: float
    z: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "x", float(self.x))
        object.__setattr__(self, "y", float(self.y))
        object.__setattr__(self, "z", float(self.z))

    @property
    def w(self) -> float:
        return 0.0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector):
            return NotImplemented
        return feq(self.x, other.x) and feq(self.y, other.y) and feq(self.z, other.z)

    def __add__(self, other: Vector | Point) -> Vector | Point:
        if isinstance(other, Point):
            return Point(self.x + other.x, self.y + other.y, self.z + other.z)
        if isinstance(other, Vector):
            return Vector(self.x + other.x, self.y + other.y, self.z + other.z)
        return NotImplemented

    def __sub__(self, other: Vector) -> Vector:
        if not isinstance(other, Vector):
            return NotImplemented
        return Vector(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> Vector:
        return Vector(-self.x, -self.y, -self.z)

    def __mul__(self, scalar: float) -> Vector:
        if not isinstance(scalar, (int, float)):
            return NotImplemented
        return Vector(self.x * scalar, self.y * scalar, self.z * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Vector:
        if not isinstance(scalar, (int, float)):
            return NotImplemented
        return Vector(self.x / scalar, self.y / scalar, self.z / scalar)

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z

    def magnitude(self) -> float:
        """Euclidean length of the vector."""
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def normalize(self) -> Vector:
        """Return the unit vector pointing the same way.

        The zero vector has no direction; normalizing it raises
        ``ZeroDivisionError`` and it is up to the caller not to do so.
        """
        mag = self.magnitude()
        return Vector(self.x / mag, self.y / mag, self.z / mag)

    def dot(self, other: Vector) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vector) -> Vector:
        return Vector(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def reflect(self, normal: Vector) -> Vector:
        """Mirror this vector about ``normal`` (which should be unit length)."""
        return self - normal * (2.0 * self.dot(normal))


@dataclass(frozen=True, eq=False)
class Point:
    """A position in 3D space (w = 1).

    Attributes:
        x: X coordinate.
        y: Y coordinate.
        z: Z coordinate.
    """

    x: float
    y: float
    z: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "x", float(self.x))
        object.__setattr__(self, "y", float(self.y))
        object.__setattr__(self, "z", float(self.z))

    @property
    def w(self) -> float:
        return 1.0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Point):
            return NotImplemented
        return feq(self.x, other.x) and feq(self.y, other.y) and feq(self.z, other.z)

    def __add__(self, other: Vector) -> Point:
        if isinstance(other, Point):
            raise TypeError("cannot add two points")
        if not isinstance(other, Vector):
            return NotImplemented
        return Point(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Point | Vector) -> Vector | Point:
        if isinstance(other, Point):
            return Vector(self.x - other.x, self.y - other.y, self.z - other.z)
        if isinstance(other, Vector):
            return Point(self.x - other.x, self.y - other.y, self.z - other.z)
        return NotImplemented

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z


@dataclass(frozen=True, eq=False)
class Color:
    """An RGB color with unbounded channels.

    Attributes:
        red: Red channel.
        green: Green channel.
        blue: Blue channel.
    """

    red: float
    green: float
    blue: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "red", float(self.red))
        object.__setattr__(self, "green", float(self.green))
        object.__setattr__(self, "blue", float(self.blue))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Color):
            return NotImplemented
        return (
            feq(self.red, other.red)
            and feq(self.green, other.green)
            and feq(self.blue, other.blue)
        )

    def __add__(self, other: Color) -> Color:
        if not isinstance(other, Color):
            return NotImplemented
        return Color(self.red + other.red, self.green + other.green, self.blue + other.blue)

    def __sub__(self, other: Color) -> Color:
        if not isinstance(other, Color):
            return NotImplemented
        return Color(self.red - other.red, self.green - other.green, self.blue - other.blue)

    def __mul__(self, other: Color | float) -> Color:
        # Color * Color is the Hadamard (component-wise) product
        if isinstance(other, Color):
            return Color(self.red * other.red, self.green * other.green, self.blue * other.blue)
        if isinstance(other, (int, float)):
            return Color(self.red * other, self.green * other, self.blue * other)
        return NotImplemented

    def __rmul__(self, scalar: float) -> Color:
        if not isinstance(scalar, (int, float)):
            return NotImplemented
        return Color(self.red * scalar, self.green * scalar, self.blue * scalar)

    def __truediv__(self, scalar: float) -> Color:
        if not isinstance(scalar, (int, float)):
            return NotImplemented
        return Color(self.red / scalar, self.green / scalar, self.blue / scalar)

    def __iter__(self):
        yield self.red
        yield self.green
        yield self.blue

    def to_tuple(self) -> tuple[float, float, float]:
        return (self.red, self.green, self.blue)


BLACK = Color(0.0, 0.0, 0.0)
WHITE = Color(1.0, 1.0, 1.0)
