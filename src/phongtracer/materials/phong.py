"""Phong surface material and lighting.

The Phong reflection model sums three contributions for each light:

- ambient: constant fraction of the surface color, always present
- diffuse: proportional to the cosine between light and normal
- specular: highlight proportional to cos(reflection, eye) ** shininess

A point in shadow, or lit from behind its surface, receives the ambient
term only. Results are unclamped; bright highlights may exceed 1.0.

Example:
    >>> from phongtracer.core.tuples import Color, Point, Vector
    >>> from phongtracer.materials.phong import Material
    >>> from phongtracer.scene.light import PointLight
    >>> light = PointLight(Point(0, 0, -10), Color(1, 1, 1))
    >>> result = Material().lighting(light, Point(0, 0, 0), Vector(0, 0, -1), Vector(0, 0, -1))
    >>> result == Color(1.9, 1.9, 1.9)
    True
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

from phongtracer.core.tuples import BLACK, WHITE, Color, Point, Vector

if TYPE_CHECKING:
    from phongtracer.scene.light import PointLight


@dataclass(frozen=True)
class Material:
    """Phong coefficients and base color of a surface.

    Attributes:
        color: Surface color.
        ambient: Ambient reflection coefficient (>= 0).
        diffuse: Diffuse reflection coefficient (>= 0).
        specular: Specular reflection coefficient (>= 0).
        shininess: Specular exponent (> 0). Larger is a tighter highlight.
    """

    color: Color = field(default_factory=lambda: WHITE)
    ambient: float = 0.1
    diffuse: float = 0.9
    specular: float = 0.9
    shininess: float = 200.0

    __hash__ = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        for name in ("ambient", "diffuse", "specular"):
            value = getattr(self, name)
            if value < 0.0:
                raise ValueError(f"Material {name} = {value} is negative.")
        if self.shininess <= 0.0:
            raise ValueError(f"Material shininess = {self.shininess} must be positive.")

    def with_color(self, color: Color) -> Material:
        return replace(self, color=color)

    def with_ambient(self, ambient: float) -> Material:
        return replace(self, ambient=ambient)

    def with_diffuse(self, diffuse: float) -> Material:
        return replace(self, diffuse=diffuse)

    def with_specular(self, specular: float) -> Material:
        return replace(self, specular=specular)

    def with_shininess(self, shininess: float) -> Material:
        return replace(self, shininess=shininess)

    def lighting(
        self,
        light: PointLight,
        point: Point,
        eye_v: Vector,
        normal_v: Vector,
        in_shadow: bool = False,
    ) -> Color:
        """Shade ``point`` as seen along ``eye_v`` under ``light``.

        Args:
            light: The light source.
            point: World-space point being shaded.
            eye_v: Unit vector from the point toward the eye.
            normal_v: Unit surface normal at the point, facing the eye.
            in_shadow: Whether the point is occluded from the light.

        Returns:
            The unclamped sum of ambient, diffuse and specular terms.
        """
        effective_color = self.color * light.intensity
        ambient = effective_color * self.ambient
        if in_shadow:
            return ambient

        light_v = (light.position - point).normalize()
        # Negative cosine: the light is on the other side of the surface
        light_dot_normal = light_v.dot(normal_v)
        if light_dot_normal < 0.0:
            return ambient

        diffuse = effective_color * self.diffuse * light_dot_normal

        reflect_v = (-light_v).reflect(normal_v)
        reflect_dot_eye = reflect_v.dot(eye_v)
        if reflect_dot_eye > 0.0:
            specular = light.intensity * (self.specular * reflect_dot_eye**self.shininess)
        else:
            specular = BLACK

        return ambient + diffuse + specular


def lighting(
    material: Material,
    light: PointLight,
    point: Point,
    eye_v: Vector,
    normal_v: Vector,
    in_shadow: bool = False,
) -> Color:
    """Functional form of ``Material.lighting``."""
    return material.lighting(light, point, eye_v, normal_v, in_shadow)
