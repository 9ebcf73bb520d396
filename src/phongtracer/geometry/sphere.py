"""Unit sphere primitive.

In object space the sphere is centered at the origin with radius 1. Size,
position and orientation all come from the shape transform.

The ray-sphere intersection solves

    |origin + t * direction|^2 = 1

which expands to a*t^2 + b*t + c = 0 with

    a = direction . direction
    b = 2 * (direction . origin)
    c = origin . origin - 1

A negative discriminant means a miss. Otherwise both roots are reported,
smaller first, even when they lie behind the ray origin; choosing the
visible one is the job of ``Intersections.hit``.

Example:
    >>> from phongtracer.core.ray import Ray
    >>> from phongtracer.core.tuples import Point, Vector
    >>> from phongtracer.geometry.sphere import Sphere
    >>> xs = Sphere().intersect(Ray(Point(0, 0, -5), Vector(0, 0, 1)))
    >>> [x.t for x in xs]
    [4.0, 6.0]
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from phongtracer.core.tuples import Point, Vector
from phongtracer.geometry.shape import Shape

if TYPE_CHECKING:
    from phongtracer.core.ray import Ray

ORIGIN = Point(0.0, 0.0, 0.0)


class Sphere(Shape):
    """A unit sphere at the object-space origin."""

    def _local_intersect(self, ray: Ray) -> list[float]:
        # Vector from the sphere's center to the ray's origin
        to_ray = ray.origin - ORIGIN

        a = ray.direction.dot(ray.direction)
        b = 2.0 * ray.direction.dot(to_ray)
        c = to_ray.dot(to_ray) - 1.0

        discriminant = b * b - 4.0 * a * c
        if discriminant < 0.0:
            return []

        sqrt_d = math.sqrt(discriminant)
        t1 = (-b - sqrt_d) / (2.0 * a)
        t2 = (-b + sqrt_d) / (2.0 * a)
        return [t1, t2]

    def _local_normal_at(self, point: Point) -> Vector:
        return point - ORIGIN
