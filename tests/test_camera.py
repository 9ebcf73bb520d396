"""Unit tests for the camera.

Tests cover:
- Canvas geometry derived from the field of view
- Ray generation through pixel centers, with and without a view transform
- Rendering a world, including the progress callback
- Constructor validation
"""

import math

import pytest

from phongtracer.camera import Camera
from phongtracer.core.matrix import Matrix
from phongtracer.core.tuples import Color, Point, Vector, feq

SQRT2_2 = math.sqrt(2) / 2


class TestGeometry:
    """Tests for camera construction and pixel size."""

    def test_defaults(self):
        c = Camera(160, 120, math.pi / 2)
        assert c.hsize == 160
        assert c.vsize == 120
        assert c.field_of_view == math.pi / 2
        assert c.transform == Matrix.identity()

    def test_pixel_size_horizontal_canvas(self):
        assert feq(Camera(200, 125, math.pi / 2).pixel_size, 0.01)

    def test_pixel_size_vertical_canvas(self):
        assert feq(Camera(125, 200, math.pi / 2).pixel_size, 0.01)

    def test_half_extents_follow_aspect(self):
        wide = Camera(200, 100, math.pi / 2)
        assert feq(wide.half_width, 1.0)
        assert feq(wide.half_height, 0.5)
        tall = Camera(100, 200, math.pi / 2)
        assert feq(tall.half_width, 0.5)
        assert feq(tall.half_height, 1.0)

    @pytest.mark.parametrize(
        "hsize, vsize, fov",
        [(0, 10, 1.0), (10, -1, 1.0), (10, 10, 0.0), (10, 10, math.pi), (10, 10, -0.5)],
    )
    def test_invalid_arguments_rejected(self, hsize, vsize, fov):
        with pytest.raises(ValueError):
            Camera(hsize, vsize, fov)

    def test_singular_view_rejected(self):
        with pytest.raises(ValueError):
            Camera(10, 10, 1.0).with_transform(Matrix().scale(0, 1, 1))


class TestRayForPixel:
    """Tests for ray generation."""

    def test_center_of_canvas(self):
        ray = Camera(201, 101, math.pi / 2).ray_for_pixel(100, 50)
        assert ray.origin == Point(0, 0, 0)
        assert ray.direction == Vector(0, 0, -1)

    def test_corner_of_canvas(self):
        ray = Camera(201, 101, math.pi / 2).ray_for_pixel(0, 0)
        assert ray.origin == Point(0, 0, 0)
        assert ray.direction == Vector(0.66519, 0.33259, -0.66851)

    def test_transformed_camera(self):
        c = Camera(201, 101, math.pi / 2).with_transform(
            Matrix().translate(0, -2, 5).rotate_y(math.pi / 4)
        )
        ray = c.ray_for_pixel(100, 50)
        assert ray.origin == Point(0, 2, -5)
        assert ray.direction == Vector(SQRT2_2, 0, -SQRT2_2)

    def test_with_transform_leaves_original_untouched(self):
        c = Camera(11, 11, math.pi / 2)
        moved = c.with_transform(Matrix().translate(1, 2, 3))
        assert c.transform == Matrix.identity()
        assert moved.inverse_transform == Matrix().translate(-1, -2, -3)

    def test_directions_are_normalized(self):
        c = Camera(20, 10, 1.2)
        for px, py in [(0, 0), (19, 9), (7, 3)]:
            assert feq(c.ray_for_pixel(px, py).direction.magnitude(), 1.0)


class TestRender:
    """Tests for rendering a world."""

    @pytest.fixture
    def camera(self):
        return Camera(11, 11, math.pi / 2).with_view_transform(
            Point(0, 0, -5), Point(0, 0, 0), Vector(0, 1, 0)
        )

    def test_render_default_world(self, camera, default_world):
        image = camera.render(default_world)
        assert image.width == 11
        assert image.height == 11
        assert image.get(5, 5) == Color(0.38066, 0.47583, 0.2855)

    def test_corners_miss(self, camera, default_world):
        image = camera.render(default_world)
        assert image.get(0, 0) == Color(0, 0, 0)
        assert image.get(10, 10) == Color(0, 0, 0)

    def test_progress_callback(self, camera, default_world):
        calls = []
        camera.render(default_world, callback=lambda done, total: calls.append((done, total)))
        assert calls == [(row, 11) for row in range(1, 12)]
