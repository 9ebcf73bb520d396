"""Scene description and per-ray shading.

Components:
    light: PointLight
    intersection: Intersection, Intersections (hit rule), IntersectionState
    world: World (intersect, is_shadowed, shade_hit, color_at) and
        reference scenes
"""

from .intersection import Intersection, Intersections, IntersectionState
from .light import PointLight
from .world import World, default_world, three_sphere_room

__all__ = [
    "Intersection",
    "IntersectionState",
    "Intersections",
    "PointLight",
    "World",
    "default_world",
    "three_sphere_room",
]
