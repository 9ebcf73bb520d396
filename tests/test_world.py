"""Unit tests for worlds: intersection, shading and shadows.

Tests cover:
- Intersecting the default world
- shade_hit from outside and inside a shape
- color_at for misses, hits and hits behind other geometry
- Shadow tests against point lights
- Immutability of world builders
"""

import pytest

from phongtracer.core.matrix import Matrix
from phongtracer.core.ray import Ray
from phongtracer.core.tuples import BLACK, Color, Point, Vector
from phongtracer.geometry import Sphere
from phongtracer.scene import Intersection, PointLight, World, three_sphere_room


class TestWorldConstruction:
    """Tests for world contents."""

    def test_empty_world(self):
        w = World()
        assert w.objects == ()
        assert w.lights == ()

    def test_default_world(self, default_world):
        assert len(default_world.objects) == 2
        assert default_world.lights[0] == PointLight(Point(-10, 10, -10), Color(1, 1, 1))
        outer, inner = default_world.objects
        assert outer.material.color == Color(0.8, 1.0, 0.6)
        assert outer.material.diffuse == 0.7
        assert outer.material.specular == 0.2
        assert inner.transform == Matrix().scale(0.5, 0.5, 0.5)

    def test_builders_return_new_world(self, default_world):
        extra = Sphere()
        bigger = default_world.with_objects([extra])
        assert len(bigger.objects) == 3
        assert bigger.objects[-1] is extra
        assert len(default_world.objects) == 2

        lit = default_world.with_lights([PointLight(Point(0, 0, 0), BLACK)])
        assert len(lit.lights) == 2
        assert len(default_world.lights) == 1

    def test_three_sphere_room(self):
        w = three_sphere_room()
        assert len(w.objects) == 6
        assert len(w.lights) == 1


class TestIntersect:
    """Tests for intersecting every shape in a world."""

    def test_intersections_are_sorted(self, default_world):
        xs = default_world.intersect(Ray(Point(0, 0, -5), Vector(0, 0, 1)))
        assert [x.t for x in xs] == pytest.approx([4.0, 4.5, 5.5, 6.0])

    def test_collects_from_every_shape(self):
        shapes = [Sphere(Matrix().translate(0, 0, 3 * i)) for i in range(20)]
        xs = World(shapes).intersect(Ray(Point(0, 0, -5), Vector(0, 0, 1)))
        assert len(xs) == 40
        assert [x.t for x in xs] == sorted(x.t for x in xs)
        assert xs.hit().object is shapes[0]
        assert {id(x.object) for x in xs} == {id(s) for s in shapes}

    def test_empty_world_has_no_intersections(self):
        assert World().intersect(Ray(Point(0, 0, -5), Vector(0, 0, 1))).is_empty()


class TestShading:
    """Tests for shade_hit and color_at."""

    def test_shade_from_outside(self, default_world):
        ray = Ray(Point(0, 0, -5), Vector(0, 0, 1))
        shape = default_world.objects[0]
        state = Intersection(4, shape).compute_state(ray)
        assert default_world.shade_hit(state) == Color(0.38066, 0.47583, 0.2855)

    def test_shade_from_inside(self, default_world):
        w = World(default_world.objects, [PointLight(Point(0, 0.25, 0), Color(1, 1, 1))])
        ray = Ray(Point(0, 0, 0), Vector(0, 0, 1))
        shape = w.objects[1]
        state = Intersection(0.5, shape).compute_state(ray)
        assert w.shade_hit(state) == Color(0.90498, 0.90498, 0.90498)

    def test_shade_in_shadow(self):
        s1 = Sphere()
        s2 = Sphere(Matrix().translate(0, 0, 10))
        w = World([s1, s2], [PointLight(Point(0, 0, -10), Color(1, 1, 1))])
        ray = Ray(Point(0, 0, 5), Vector(0, 0, 1))
        state = Intersection(4, s2).compute_state(ray)
        assert w.shade_hit(state) == Color(0.1, 0.1, 0.1)

    def test_lights_are_summed(self, default_world):
        light = default_world.lights[0]
        doubled = World(default_world.objects, [light, light])
        ray = Ray(Point(0, 0, -5), Vector(0, 0, 1))
        single = default_world.color_at(ray)
        assert doubled.color_at(ray) == single * 2

    def test_no_lights_is_black(self, default_world):
        w = World(default_world.objects)
        assert w.color_at(Ray(Point(0, 0, -5), Vector(0, 0, 1))) == BLACK

    def test_color_when_ray_misses(self, default_world):
        assert default_world.color_at(Ray(Point(0, 0, -5), Vector(0, 1, 0))) == BLACK

    def test_color_when_ray_hits(self, default_world):
        color = default_world.color_at(Ray(Point(0, 0, -5), Vector(0, 0, 1)))
        assert color == Color(0.38066, 0.47583, 0.2855)

    def test_color_with_hit_behind_ray(self, default_world):
        """A ray starting between the spheres sees the inner one."""
        outer, inner = default_world.objects
        outer = outer.with_material(outer.material.with_ambient(1.0))
        inner = inner.with_material(inner.material.with_ambient(1.0))
        w = World([outer, inner], default_world.lights)
        ray = Ray(Point(0, 0, 0.75), Vector(0, 0, -1))
        assert w.color_at(ray) == inner.material.color


class TestLights:
    """Tests for point lights."""

    def test_fields(self):
        light = PointLight(Point(0, 0, 0), Color(1, 1, 1))
        assert light.position == Point(0, 0, 0)
        assert light.intensity == Color(1, 1, 1)

    def test_equality_is_approximate(self):
        a = PointLight(Point(0, 0, 0), Color(1, 1, 1))
        assert a == PointLight(Point(0, 0, 1e-6), Color(1, 1, 1))

    def test_lights_are_unhashable(self):
        with pytest.raises(TypeError):
            hash(PointLight(Point(0, 0, 0), Color(1, 1, 1)))


class TestShadows:
    """Tests for point-to-light occlusion."""

    @pytest.mark.parametrize(
        "point, expected",
        [
            (Point(0, 10, 0), False),
            (Point(10, -10, 10), True),
            (Point(-20, 20, -20), False),
            (Point(-2, 2, -2), False),
        ],
    )
    def test_is_shadowed(self, default_world, point, expected):
        light = default_world.lights[0]
        assert default_world.is_shadowed(point, light) is expected

    def test_occluder_beyond_light_does_not_shadow(self):
        blocker = Sphere(Matrix().translate(0, 0, -20))
        w = World([blocker], [PointLight(Point(0, 0, -10), Color(1, 1, 1))])
        assert w.is_shadowed(Point(0, 0, 0), w.lights[0]) is False
