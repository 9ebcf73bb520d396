"""Camera model: maps pixels to world-space rays and renders a world.

The camera sits at the origin of its own space looking toward -z, with the
canvas one unit away on the plane z = -1. ``transform`` is the view
transform (world -> camera); rays are generated in camera space and moved
into world space with its cached inverse.

The canvas is sized from the field of view:

    half_view = tan(fov / 2)
    aspect = hsize / vsize
    aspect >= 1: half_width = half_view, half_height = half_view / aspect
    aspect <  1: half_width = half_view * aspect, half_height = half_view
    pixel_size = 2 * half_width / hsize

Because the camera looks toward -z, +x on the canvas is to the LEFT; pixel
x grows to the right, so world_x = half_width - x_offset.

Example:
    >>> import math
    >>> from phongtracer.camera.camera import Camera
    >>> from phongtracer.core.tuples import Point, Vector
    >>> from phongtracer.scene.world import default_world
    >>> camera = Camera(11, 11, math.pi / 2).with_view_transform(
    ...     Point(0, 0, -5), Point(0, 0, 0), Vector(0, 1, 0)
    ... )
    >>> canvas = camera.render(default_world())
"""

from __future__ import annotations

import copy
import logging
import math
import time
from collections.abc import Callable
from typing import TYPE_CHECKING

from phongtracer.core.matrix import Matrix, view_transform
from phongtracer.core.ray import Ray
from phongtracer.core.tuples import Point, Vector
from phongtracer.preview.canvas import Canvas

if TYPE_CHECKING:
    from phongtracer.scene.world import World

logger = logging.getLogger(__name__)

# Callback receives (rows_completed, total_rows)
ProgressCallback = Callable[[int, int], None]


class Camera:
    """A pinhole camera with a view transform.

    Attributes:
        hsize: Horizontal size of the canvas in pixels.
        vsize: Vertical size of the canvas in pixels.
        field_of_view: Horizontal (or vertical, for tall canvases) field of
            view in radians.
        transform: World-to-camera view transform.
    """

    def __init__(
        self,
        hsize: int,
        vsize: int,
        field_of_view: float,
        transform: Matrix | None = None,
    ) -> None:
        """Create a camera.

        Raises:
            ValueError: If a pixel count is not positive, the field of view
                is outside (0, pi), or the transform is not invertible.
        """
        if hsize <= 0 or vsize <= 0:
            raise ValueError(f"Camera size must be positive, got {hsize}x{vsize}")
        if not 0.0 < field_of_view < math.pi:
            raise ValueError(f"Field of view must be in (0, pi), got {field_of_view}")

        self._hsize = hsize
        self._vsize = vsize
        self._field_of_view = field_of_view

        half_view = math.tan(field_of_view / 2.0)
        aspect = hsize / vsize
        if aspect >= 1.0:
            self._half_width = half_view
            self._half_height = half_view / aspect
        else:
            self._half_width = half_view * aspect
            self._half_height = half_view
        self._pixel_size = (self._half_width * 2.0) / hsize

        self._set_transform(transform if transform is not None else Matrix.identity())

    def _set_transform(self, transform: Matrix) -> None:
        self._inverse_transform = transform.inverse()
        self._transform = transform

    @property
    def hsize(self) -> int:
        return self._hsize

    @property
    def vsize(self) -> int:
        return self._vsize

    @property
    def field_of_view(self) -> float:
        return self._field_of_view

    @property
    def half_width(self) -> float:
        return self._half_width

    @property
    def half_height(self) -> float:
        return self._half_height

    @property
    def pixel_size(self) -> float:
        return self._pixel_size

    @property
    def transform(self) -> Matrix:
        return self._transform

    @property
    def inverse_transform(self) -> Matrix:
        return self._inverse_transform

    def with_transform(self, transform: Matrix) -> Camera:
        """Return a copy of this camera using ``transform`` as its view."""
        camera = copy.copy(self)
        camera._set_transform(transform)
        return camera

    def with_view_transform(self, from_point: Point, to: Point, up: Vector) -> Camera:
        """Return a copy of this camera at ``from_point`` looking at ``to``."""
        return self.with_transform(view_transform(from_point, to, up))

    def ray_for_pixel(self, px: int, py: int) -> Ray:
        """World-space ray from the eye through the center of pixel (px, py)."""
        # Offset from the canvas edge to the pixel's center
        xoffset = (px + 0.5) * self._pixel_size
        yoffset = (py + 0.5) * self._pixel_size

        world_x = self._half_width - xoffset
        world_y = self._half_height - yoffset

        pixel = self._inverse_transform * Point(world_x, world_y, -1.0)
        origin = self._inverse_transform * Point(0.0, 0.0, 0.0)
        direction = (pixel - origin).normalize()

        return Ray(origin, direction)

    def render(self, world: World, callback: ProgressCallback | None = None) -> Canvas:
        """Render ``world`` one pixel at a time on the calling thread.

        Pixels are independent; this loop visits them in row-major order.
        See ``phongtracer.core.integrator.render_image`` for the parallel
        Taichi version of the same pipeline.

        Args:
            world: The scene to render. It is only read.
            callback: Optional function called after each row with
                (rows_completed, total_rows).

        Returns:
            A canvas of ``hsize`` x ``vsize`` unclamped colors.
        """
        logger.debug(
            "Rendering %dx%d with %d objects and %d lights",
            self._hsize,
            self._vsize,
            len(world.objects),
            len(world.lights),
        )
        start = time.perf_counter()

        image = Canvas(self._hsize, self._vsize)
        for y in range(self._vsize):
            for x in range(self._hsize):
                ray = self.ray_for_pixel(x, y)
                image.set(x, y, world.color_at(ray))
            if callback is not None:
                callback(y + 1, self._vsize)

        logger.debug("Render finished in %.3fs", time.perf_counter() - start)
        return image
