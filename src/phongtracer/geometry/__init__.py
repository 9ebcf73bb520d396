"""Geometry module for ray-traced primitives.

Shapes are defined in object space and placed in the world by a transform:

    Shape: transform + cached inverse + cached normal transform + material
    Sphere: unit sphere at the object-space origin
"""

from .shape import Shape
from .sphere import Sphere

__all__ = ["Shape", "Sphere"]
