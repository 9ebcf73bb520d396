"""Ray data structure.

A ray is an immutable (origin, direction) pair. Rays are moved between
coordinate spaces with ``transform``; shapes use this to intersect a
canonical object-space primitive instead of the transformed one.

Example:
    >>> from phongtracer.core.ray import Ray
    >>> from phongtracer.core.tuples import Point, Vector
    >>> ray = Ray(Point(2, 3, 4), Vector(1, 0, 0))
    >>> ray.position(2.5)
    Point(x=4.5, y=3.0, z=4.0)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from phongtracer.core.tuples import Point, Vector

if TYPE_CHECKING:
    from phongtracer.core.matrix import Matrix


@dataclass(frozen=True)
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray.
        direction: The direction of the ray. Not required to be unit length;
            object-space rays are generally not normalized.
    """

    origin: Point
    direction: Vector

    __hash__ = None  # type: ignore[assignment]

    def position(self, t: float) -> Point:
        """Compute the point ``origin + direction * t``."""
        return self.origin + self.direction * t

    def transform(self, matrix: Matrix) -> Ray:
        """Return this ray expressed in the space ``matrix`` maps into.

        The origin picks up translation, the direction only the linear part.
        """
        return Ray(matrix * self.origin, matrix * self.direction)
