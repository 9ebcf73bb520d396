"""World: the shapes and lights of a scene, and per-ray color resolution.

The pipeline for one ray is

    intersect -> hit -> compute_state -> shade_hit (lighting + shadow test)

``World`` is immutable. Its objects and lights are tuples; adding to a world
returns a new one. A world is therefore safe to share, read-only, across a
whole render pass.

Every ray is tested against every shape; there is no acceleration structure.
"""

from __future__ import annotations

import math
from collections.abc import Iterable

from phongtracer.core.matrix import Matrix
from phongtracer.core.ray import Ray
from phongtracer.core.tuples import BLACK, WHITE, Color, Point
from phongtracer.geometry.shape import Shape
from phongtracer.geometry.sphere import Sphere
from phongtracer.materials.phong import Material
from phongtracer.scene.intersection import Intersections, IntersectionState
from phongtracer.scene.light import PointLight


class World:
    """A collection of shapes and point lights.

    Attributes:
        objects: Shapes in the scene, in insertion order.
        lights: Point lights in the scene.
    """

    def __init__(self, objects: Iterable[Shape] = (), lights: Iterable[PointLight] = ()) -> None:
        self._objects = tuple(objects)
        self._lights = tuple(lights)

    @property
    def objects(self) -> tuple[Shape, ...]:
        return self._objects

    @property
    def lights(self) -> tuple[PointLight, ...]:
        return self._lights

    def with_objects(self, objects: Iterable[Shape]) -> World:
        """Return a new world with ``objects`` appended."""
        return World(self._objects + tuple(objects), self._lights)

    def with_lights(self, lights: Iterable[PointLight]) -> World:
        """Return a new world with ``lights`` appended."""
        return World(self._objects, self._lights + tuple(lights))

    def __repr__(self) -> str:
        return f"World(objects={len(self._objects)}, lights={len(self._lights)})"

    def intersect(self, ray: Ray) -> Intersections:
        """All intersections of ``ray`` with every shape, sorted by t."""
        xs = Intersections(x for shape in self._objects for x in shape.intersect(ray))
        return xs.sort()

    def is_shadowed(self, point: Point, light: PointLight) -> bool:
        """Whether something lies between ``point`` and ``light``.

        ``point`` should be an over point; passing a raw surface point lets
        the surface shadow itself through rounding error.
        """
        v = light.position - point
        distance = v.magnitude()
        ray = Ray(point, v.normalize())

        hit = self.intersect(ray).hit()
        return hit is not None and hit.t < distance

    def shade_hit(self, state: IntersectionState) -> Color:
        """Sum the lighting contribution of every light at ``state``."""
        color = BLACK
        for light in self._lights:
            in_shadow = self.is_shadowed(state.over_point, light)
            color = color + state.lighting(light, in_shadow)
        return color

    def color_at(self, ray: Ray) -> Color:
        """Color seen along ``ray``; black when it hits nothing."""
        hit = self.intersect(ray).hit()
        if hit is None:
            return BLACK
        return self.shade_hit(hit.compute_state(ray))


def default_world() -> World:
    """The two concentric spheres and single light used as a reference scene.

    - light: white, at (-10, 10, -10)
    - outer sphere: unit radius, color (0.8, 1.0, 0.6), diffuse 0.7, specular 0.2
    - inner sphere: default material, scaled by 0.5
    """
    light = PointLight(Point(-10, 10, -10), WHITE)
    outer = Sphere(
        material=Material(color=Color(0.8, 1.0, 0.6), diffuse=0.7, specular=0.2),
    )
    inner = Sphere(transform=Matrix().scale_uniform(0.5))
    return World([outer, inner], [light])


def three_sphere_room(lights: Iterable[PointLight] | None = None) -> World:
    """A floor, two walls (flattened spheres) and three colored spheres.

    Args:
        lights: Lights for the scene. Defaults to one white light at
            (-10, 10, -10).
    """
    if lights is None:
        lights = [PointLight(Point(-10, 10, -10), WHITE)]

    room = Material(color=Color(1.0, 0.9, 0.9), specular=0.0)
    floor = Sphere(Matrix().scale(10, 0.01, 10), room)
    left_wall = Sphere(
        Matrix()
        .scale(10, 0.01, 10)
        .rotate_x(math.pi / 2)
        .rotate_y(-math.pi / 4)
        .translate(0, 0, 5),
        room,
    )
    right_wall = Sphere(
        Matrix()
        .scale(10, 0.01, 10)
        .rotate_x(math.pi / 2)
        .rotate_y(math.pi / 4)
        .translate(0, 0, 5),
        room,
    )

    middle = Sphere(
        Matrix().translate(-0.5, 1, 0.5),
        Material(color=Color(0.1, 1, 0.5), diffuse=0.7, specular=0.3),
    )
    right = Sphere(
        Matrix().scale_uniform(0.5).translate(1.5, 0.5, -0.5),
        Material(color=Color(0.5, 1, 0.1), diffuse=0.7, specular=0.3),
    )
    left = Sphere(
        Matrix().scale_uniform(0.33).translate(-1.5, 0.33, -0.75),
        Material(color=Color(1, 0.8, 0.1), diffuse=0.7, specular=0.3),
    )

    return World([floor, left_wall, right_wall, middle, right, left], lights)
