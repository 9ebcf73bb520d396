"""Unit tests for Phong materials and lighting.

Tests cover:
- Material defaults, validation and with_* builders
- Lighting for eye/light arrangements around a surface
- The shadow term
"""

import math

import pytest

from phongtracer.core.tuples import Color, Point, Vector
from phongtracer.materials import Material, lighting
from phongtracer.scene import PointLight

SQRT2_2 = math.sqrt(2) / 2


@pytest.fixture
def material():
    return Material()


@pytest.fixture
def position():
    return Point(0, 0, 0)


class TestMaterial:
    """Tests for material construction."""

    def test_defaults(self, material):
        assert material.color == Color(1, 1, 1)
        assert material.ambient == 0.1
        assert material.diffuse == 0.9
        assert material.specular == 0.9
        assert material.shininess == 200.0

    def test_default_color_is_white_for_every_instance(self):
        """The default color is shared and compares equal across instances."""
        assert Material().color == Material().color == Color(1, 1, 1)
        assert Material(ambient=0.5).color == Color(1, 1, 1)

    def test_materials_are_unhashable(self, material):
        """Equality is epsilon-tolerant, so there is no consistent hash."""
        with pytest.raises(TypeError):
            hash(material)

    def test_with_builders_return_new_material(self, material):
        changed = material.with_ambient(1.0).with_shininess(10.0)
        assert changed.ambient == 1.0
        assert changed.shininess == 10.0
        assert changed.diffuse == material.diffuse
        assert material.ambient == 0.1

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"ambient": -0.1},
            {"diffuse": -1.0},
            {"specular": -0.5},
            {"shininess": 0.0},
            {"shininess": -10.0},
        ],
    )
    def test_invalid_coefficients_rejected(self, kwargs):
        with pytest.raises(ValueError):
            Material(**kwargs)


class TestLighting:
    """Tests for the Phong reflection model."""

    def test_eye_between_light_and_surface(self, material, position):
        light = PointLight(Point(0, 0, -10), Color(1, 1, 1))
        result = material.lighting(light, position, Vector(0, 0, -1), Vector(0, 0, -1))
        assert result == Color(1.9, 1.9, 1.9)

    def test_eye_offset_45_degrees(self, material, position):
        light = PointLight(Point(0, 0, -10), Color(1, 1, 1))
        eye_v = Vector(0, SQRT2_2, -SQRT2_2)
        result = material.lighting(light, position, eye_v, Vector(0, 0, -1))
        assert result == Color(1.0, 1.0, 1.0)

    def test_light_offset_45_degrees(self, material, position):
        light = PointLight(Point(0, 10, -10), Color(1, 1, 1))
        result = material.lighting(light, position, Vector(0, 0, -1), Vector(0, 0, -1))
        assert result == Color(0.7364, 0.7364, 0.7364)

    def test_eye_in_reflection_path(self, material, position):
        light = PointLight(Point(0, 10, -10), Color(1, 1, 1))
        eye_v = Vector(0, -SQRT2_2, -SQRT2_2)
        result = material.lighting(light, position, eye_v, Vector(0, 0, -1))
        assert result == Color(1.6364, 1.6364, 1.6364)

    def test_light_behind_surface(self, material, position):
        light = PointLight(Point(0, 0, 10), Color(1, 1, 1))
        result = material.lighting(light, position, Vector(0, 0, -1), Vector(0, 0, -1))
        assert result == Color(0.1, 0.1, 0.1)

    def test_surface_in_shadow(self, material, position):
        light = PointLight(Point(0, 0, -10), Color(1, 1, 1))
        result = material.lighting(
            light, position, Vector(0, 0, -1), Vector(0, 0, -1), in_shadow=True
        )
        assert result == Color(0.1, 0.1, 0.1)

    def test_light_intensity_tints_result(self, position):
        m = Material(color=Color(1, 0.5, 0), ambient=1.0, diffuse=0.0, specular=0.0)
        light = PointLight(Point(0, 0, -10), Color(0.5, 1, 1))
        result = m.lighting(light, position, Vector(0, 0, -1), Vector(0, 0, -1))
        assert result == Color(0.5, 0.5, 0)

    def test_functional_form(self, material, position):
        light = PointLight(Point(0, 0, -10), Color(1, 1, 1))
        eye_v = Vector(0, 0, -1)
        normal_v = Vector(0, 0, -1)
        assert lighting(material, light, position, eye_v, normal_v) == material.lighting(
            light, position, eye_v, normal_v
        )
