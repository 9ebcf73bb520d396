"""Intersection records, the hit rule and precomputed shading state.

An ``Intersection`` pairs a ray parameter ``t`` with the shape that was hit.
It references the shape without owning it; the reference is only meaningful
for the query that produced it.

``Intersections`` is an ordered collection. The visible hit is derived on
demand: after ``sort()``, ``hit()`` returns the first intersection with
t >= 0. Intersections behind the ray origin are ignored, and an empty or
all-negative collection has no hit.

``Intersection.compute_state`` turns a hit into the ``IntersectionState``
needed for shading: the world-space point, eye vector, normal (flipped to face
the eye when the ray starts inside the shape) and the over point, which is
nudged off the surface along the normal so shadow rays do not re-hit the
surface they start on.

Example:
    >>> from phongtracer.core.ray import Ray
    >>> from phongtracer.core.tuples import Point, Vector
    >>> from phongtracer.geometry.sphere import Sphere
    >>> xs = Sphere().intersect(Ray(Point(0, 0, 0), Vector(0, 0, 1)))
    >>> xs.sort().hit().t
    1.0
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING

from phongtracer.core.tuples import EPSILON, Color, Point, Vector, feq

if TYPE_CHECKING:
    from phongtracer.core.ray import Ray
    from phongtracer.geometry.shape import Shape
    from phongtracer.scene.light import PointLight


@dataclass(frozen=True, eq=False)
class Intersection:
    """A ray parameter at which a shape was hit.

    Attributes:
        t: Ray parameter of the intersection.
        object: The shape that was hit (identity matters, not value).
    """

    t: float
    object: Shape

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Intersection):
            return NotImplemented
        return feq(self.t, other.t) and self.object is other.object

    __hash__ = None  # type: ignore[assignment]

    def compute_state(self, ray: Ray) -> IntersectionState:
        """Precompute the shading inputs for this intersection.

        Args:
            ray: The ray that produced this intersection.

        Returns:
            The shading state at ``ray.position(t)``.
        """
        point = ray.position(self.t)
        eye_v = -ray.direction
        normal_v = self.object.normal_at(point)

        inside = normal_v.dot(eye_v) < 0.0
        if inside:
            normal_v = -normal_v

        return IntersectionState(
            t=self.t,
            object=self.object,
            point=point,
            eye_v=eye_v,
            normal_v=normal_v,
            inside=inside,
            over_point=point + normal_v * EPSILON,
        )


class Intersections:
    """An ordered sequence of intersections."""

    def __init__(self, xs: Iterable[Intersection] = ()) -> None:
        self._xs = list(xs)

    def __len__(self) -> int:
        return len(self._xs)

    def __getitem__(self, index: int) -> Intersection:
        return self._xs[index]

    def __iter__(self) -> Iterator[Intersection]:
        return iter(self._xs)

    def __add__(self, other: Intersections) -> Intersections:
        if not isinstance(other, Intersections):
            return NotImplemented
        return Intersections(self._xs + other._xs)

    def __repr__(self) -> str:
        return f"Intersections({self._xs!r})"

    def is_empty(self) -> bool:
        return not self._xs

    def sort(self) -> Intersections:
        """Sort by ascending t in place and return self.

        The sort is stable, so equal t values keep their insertion order.
        """
        self._xs.sort(key=lambda x: x.t)
        return self

    def hit(self) -> Intersection | None:
        """Return the first intersection with t >= 0, or None.

        The collection must already be sorted for this to be the nearest
        visible intersection.
        """
        for x in self._xs:
            if x.t >= 0.0:
                return x
        return None


@dataclass(frozen=True)
class IntersectionState:
    """Derived shading inputs for a single intersection.

    Created by ``Intersection.compute_state``, used once, then discarded.

    Attributes:
        t: Ray parameter of the hit.
        object: The shape that was hit.
        point: World-space hit point.
        eye_v: Unit-ish vector toward the eye (the negated ray direction).
        normal_v: Unit surface normal, flipped to face the eye if needed.
        inside: True if the ray originated inside the shape.
        over_point: ``point`` moved ``EPSILON`` along ``normal_v``; the origin
            for shadow rays and the point passed to lighting.
    """

    t: float
    object: Shape
    point: Point
    eye_v: Vector
    normal_v: Vector
    inside: bool
    over_point: Point

    __hash__ = None  # type: ignore[assignment]

    def lighting(self, light: PointLight, in_shadow: bool) -> Color:
        """Shade this state with the hit object's material."""
        return self.object.material.lighting(
            light, self.over_point, self.eye_v, self.normal_v, in_shadow
        )
