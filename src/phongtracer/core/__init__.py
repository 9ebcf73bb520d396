"""Core algebra and rays.

Components:
    tuples: Point, Vector and Color with epsilon equality
    matrix: 4x4 transforms, cofactor inversion and view_transform
    ray: Ray with position-at-t and transform-by-matrix

Note: integrator is NOT imported here. It allocates Taichi fields at import
time and must only be imported after ``ti.init``.
"""

from .matrix import (
    Matrix,
    rotation_x,
    rotation_y,
    rotation_z,
    scaling,
    shearing,
    translation,
    view_transform,
)
from .ray import Ray
from .tuples import BLACK, EPSILON, WHITE, Color, Point, Vector, feq

__all__ = [
    "BLACK",
    "EPSILON",
    "WHITE",
    "Color",
    "Matrix",
    "Point",
    "Ray",
    "Vector",
    "feq",
    "rotation_x",
    "rotation_y",
    "rotation_z",
    "scaling",
    "shearing",
    "translation",
    "view_transform",
]
