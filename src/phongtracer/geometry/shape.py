"""Base class for transformable shapes.

A shape carries a world-from-object ``transform``, a ``Material`` and two
caches derived from the transform: its inverse (for moving rays and points
into object space) and the transpose of that inverse (for moving normals
back into world space). The caches are computed together in one place,
``_set_transform``, and shapes are changed only by rebuilding them with
``with_transform``/``with_material``, so they can never go stale.

Subclasses implement the geometry in object space:

- ``_local_intersect(ray)``: t values where an object-space ray meets the shape
- ``_local_normal_at(point)``: object-space normal at an object-space point

Shapes compare by identity. Two spheres with equal transforms and materials
are still distinct objects for intersection bookkeeping.
"""

from __future__ import annotations

import copy
from typing import TYPE_CHECKING

from phongtracer.core.matrix import Matrix
from phongtracer.materials.phong import Material

if TYPE_CHECKING:
    from phongtracer.core.ray import Ray
    from phongtracer.core.tuples import Point, Vector
    from phongtracer.scene.intersection import Intersections


class Shape:
    """A primitive placed in the world by an affine transform.

    Attributes:
        transform: Object-to-world transform.
        inverse_transform: Cached inverse of ``transform``.
        normal_transform: Cached transpose of ``inverse_transform``.
        material: Surface material.
    """

    def __init__(self, transform: Matrix | None = None, material: Material | None = None) -> None:
        self._set_transform(transform if transform is not None else Matrix.identity())
        self._material = material if material is not None else Material()

    def _set_transform(self, transform: Matrix) -> None:
        inverse = transform.inverse()
        self._transform = transform
        self._inverse_transform = inverse
        self._normal_transform = inverse.transpose()

    @property
    def transform(self) -> Matrix:
        return self._transform

    @property
    def inverse_transform(self) -> Matrix:
        return self._inverse_transform

    @property
    def normal_transform(self) -> Matrix:
        return self._normal_transform

    @property
    def material(self) -> Material:
        return self._material

    def with_transform(self, transform: Matrix) -> Shape:
        """Return a copy of this shape placed by ``transform``.

        Raises:
            ValueError: If ``transform`` is not invertible.
        """
        shape = copy.copy(self)
        shape._set_transform(transform)
        return shape

    def with_material(self, material: Material) -> Shape:
        """Return a copy of this shape with a different material."""
        shape = copy.copy(self)
        shape._material = material
        return shape

    def intersect(self, ray: Ray) -> Intersections:
        """Intersect a world-space ray with this shape.

        The ray is moved into object space with the cached inverse so the
        subclass always works against its canonical primitive.
        """
        from phongtracer.scene.intersection import Intersection, Intersections

        local_ray = ray.transform(self._inverse_transform)
        return Intersections([Intersection(t, self) for t in self._local_intersect(local_ray)])

    def normal_at(self, world_point: Point) -> Vector:
        """Unit surface normal at a world-space point on the shape.

        Normals are carried by the transpose of the inverse so they stay
        perpendicular to the surface under non-uniform scaling. That step
        can change their length, hence the final normalize.
        """
        local_point = self._inverse_transform * world_point
        local_normal = self._local_normal_at(local_point)
        world_normal = self._normal_transform * local_normal
        return world_normal.normalize()

    def _local_intersect(self, ray: Ray) -> list[float]:
        raise NotImplementedError

    def _local_normal_at(self, point: Point) -> Vector:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}(transform={self._transform!r}, material={self._material!r})"
