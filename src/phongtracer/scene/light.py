"""Point light source."""

from __future__ import annotations

from dataclasses import dataclass

from phongtracer.core.tuples import Color, Point


@dataclass(frozen=True)
class PointLight:
    """A light with no extent, so it casts hard shadows only.

    Attributes:
        position: Position of the light in world space.
        intensity: Brightness and color of the light.
    """

    position: Point
    intensity: Color

    __hash__ = None  # type: ignore[assignment]
