"""Data-parallel Phong renderer on Taichi.

This module runs the same per-pixel pipeline as ``Camera.render`` inside a
single Taichi kernel whose outer loop is parallelized over the pixel grid:

    ray_for_pixel -> nearest hit with t >= 0 -> shading state (over point,
    normal flipped toward the eye) -> per light: shadow ray + Phong lighting

Each pixel depends only on the read-only scene, so the pixels are written
into disjoint cells of the color buffer with no synchronization.

The scene is copied into preallocated Taichi fields (structure of arrays),
one slot per sphere and per light. Spheres are uploaded as their cached
inverse transform and its transpose, so the kernel never inverts a matrix.

Taichi must be initialised BEFORE this module is imported, with 64-bit
default floats so kernel results agree with the pure-Python path:

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64)
    >>> from phongtracer.core.integrator import render_image
    >>> canvas = render_image(camera, world)
"""

import logging
import time
from typing import TYPE_CHECKING

import taichi as ti
import taichi.math as tm

from phongtracer.core.tuples import EPSILON
from phongtracer.geometry.sphere import Sphere
from phongtracer.preview.canvas import Canvas

if TYPE_CHECKING:
    from phongtracer.camera.camera import Camera
    from phongtracer.scene.world import World

logger = logging.getLogger(__name__)

# Type aliases for kernel-side vectors (resolve to the default float type)
vec3 = tm.vec3
vec4 = tm.vec4

# =============================================================================
# Capacity
# =============================================================================

MAX_SPHERES = 1024
MAX_LIGHTS = 64

# Preallocated to the maximum size to avoid kernel recompilation
MAX_IMAGE_WIDTH = 2048
MAX_IMAGE_HEIGHT = 2048

# =============================================================================
# Scene Storage (Structure of Arrays)
# =============================================================================

_sphere_inverse = ti.Matrix.field(4, 4, dtype=ti.f64, shape=MAX_SPHERES)
_sphere_normal_transform = ti.Matrix.field(4, 4, dtype=ti.f64, shape=MAX_SPHERES)
_sphere_color = ti.Vector.field(3, dtype=ti.f64, shape=MAX_SPHERES)
_sphere_ambient = ti.field(dtype=ti.f64, shape=MAX_SPHERES)
_sphere_diffuse = ti.field(dtype=ti.f64, shape=MAX_SPHERES)
_sphere_specular = ti.field(dtype=ti.f64, shape=MAX_SPHERES)
_sphere_shininess = ti.field(dtype=ti.f64, shape=MAX_SPHERES)
_num_spheres = ti.field(dtype=ti.i32, shape=())

_light_position = ti.Vector.field(3, dtype=ti.f64, shape=MAX_LIGHTS)
_light_intensity = ti.Vector.field(3, dtype=ti.f64, shape=MAX_LIGHTS)
_num_lights = ti.field(dtype=ti.i32, shape=())

# =============================================================================
# Camera State
# =============================================================================

_camera_inverse = ti.Matrix.field(4, 4, dtype=ti.f64, shape=())
_half_width = ti.field(dtype=ti.f64, shape=())
_half_height = ti.field(dtype=ti.f64, shape=())
_pixel_size = ti.field(dtype=ti.f64, shape=())

# =============================================================================
# Render Target
# =============================================================================

_image_width = ti.field(dtype=ti.i32, shape=())
_image_height = ti.field(dtype=ti.i32, shape=())
_color_buffer = ti.Vector.field(3, dtype=ti.f32, shape=(MAX_IMAGE_WIDTH, MAX_IMAGE_HEIGHT))


def clear_scene() -> None:
    """Remove all spheres and lights from the kernel-side scene."""
    _num_spheres[None] = 0
    _num_lights[None] = 0


def upload_world(world: "World") -> None:
    """Copy a world's spheres and lights into the scene fields.

    Args:
        world: The scene to upload. Only ``Sphere`` shapes are supported.

    Raises:
        TypeError: If the world contains a shape other than a sphere.
        RuntimeError: If the world exceeds ``MAX_SPHERES`` or ``MAX_LIGHTS``.
    """
    if len(world.objects) > MAX_SPHERES:
        raise RuntimeError(f"Maximum number of spheres ({MAX_SPHERES}) exceeded")
    if len(world.lights) > MAX_LIGHTS:
        raise RuntimeError(f"Maximum number of lights ({MAX_LIGHTS}) exceeded")

    for i, shape in enumerate(world.objects):
        if not isinstance(shape, Sphere):
            raise TypeError(f"Kernel renderer only supports spheres, got {type(shape).__name__}")
        material = shape.material
        _sphere_inverse[i] = shape.inverse_transform.to_list()
        _sphere_normal_transform[i] = shape.normal_transform.to_list()
        _sphere_color[i] = material.color.to_tuple()
        _sphere_ambient[i] = material.ambient
        _sphere_diffuse[i] = material.diffuse
        _sphere_specular[i] = material.specular
        _sphere_shininess[i] = material.shininess
    _num_spheres[None] = len(world.objects)

    for i, light in enumerate(world.lights):
        _light_position[i] = (light.position.x, light.position.y, light.position.z)
        _light_intensity[i] = light.intensity.to_tuple()
    _num_lights[None] = len(world.lights)


def setup_camera(camera: "Camera") -> None:
    """Copy the camera's inverse view transform and canvas geometry."""
    _camera_inverse[None] = camera.inverse_transform.to_list()
    _half_width[None] = camera.half_width
    _half_height[None] = camera.half_height
    _pixel_size[None] = camera.pixel_size


def setup_render_target(width: int, height: int) -> None:
    """Set the active image size and clear the color buffer.

    Raises:
        ValueError: If dimensions exceed the preallocated maximum.
    """
    if width > MAX_IMAGE_WIDTH or height > MAX_IMAGE_HEIGHT:
        raise ValueError(
            f"Image dimensions ({width}x{height}) exceed maximum supported "
            f"({MAX_IMAGE_WIDTH}x{MAX_IMAGE_HEIGHT})"
        )
    _image_width[None] = width
    _image_height[None] = height
    _color_buffer.fill(0.0)


# =============================================================================
# Kernel-side Geometry
# =============================================================================


@ti.func
def _transform_point(m, p):
    q = m @ vec4(p[0], p[1], p[2], 1.0)
    return vec3(q[0], q[1], q[2])


@ti.func
def _transform_vector(m, v):
    # w = 0 drops the translation column
    q = m @ vec4(v[0], v[1], v[2], 0.0)
    return vec3(q[0], q[1], q[2])


@ti.func
def _reflect(incident, normal):
    return incident - 2.0 * tm.dot(incident, normal) * normal


@ti.func
def _intersect_sphere(i: ti.i32, origin, direction):
    """Both roots of the ray/unit-sphere quadratic in object space.

    Returns:
        Tuple (hit, t1, t2) with t1 <= t2; hit is 0 on a miss.
    """
    inv = _sphere_inverse[i]
    o = _transform_point(inv, origin)
    d = _transform_vector(inv, direction)

    a = tm.dot(d, d)
    b = 2.0 * tm.dot(d, o)
    c = tm.dot(o, o) - 1.0
    discriminant = b * b - 4.0 * a * c

    hit = 0
    t1 = 0.0
    t2 = 0.0
    if discriminant >= 0.0:
        sqrt_d = ti.sqrt(discriminant)
        t1 = (-b - sqrt_d) / (2.0 * a)
        t2 = (-b + sqrt_d) / (2.0 * a)
        hit = 1
    return hit, t1, t2


@ti.func
def _nearest_hit(origin, direction):
    """Smallest non-negative t over all spheres.

    Ties keep the sphere that comes first in the world, which matches a
    stable ascending sort followed by ``Intersections.hit``.

    Returns:
        Tuple (sphere_index, t); sphere_index is -1 when nothing is hit.
    """
    best_index = -1
    best_t = 0.0
    for i in range(_num_spheres[None]):
        hit, t1, t2 = _intersect_sphere(i, origin, direction)
        if hit == 1:
            t = t1
            if t < 0.0:
                t = t2
            if t >= 0.0 and (best_index == -1 or t < best_t):
                best_index = i
                best_t = t
    return best_index, best_t


@ti.func
def _normal_at(i: ti.i32, world_point):
    object_point = _transform_point(_sphere_inverse[i], world_point)
    # object-space normal of the unit sphere is the point minus the origin
    world_normal = _transform_vector(_sphere_normal_transform[i], object_point)
    return tm.normalize(world_normal)


@ti.func
def _is_shadowed(point, light: ti.i32) -> ti.i32:
    v = _light_position[light] - point
    distance = tm.length(v)
    direction = tm.normalize(v)

    index, t = _nearest_hit(point, direction)
    shadowed = 0
    if index >= 0 and t < distance:
        shadowed = 1
    return shadowed


@ti.func
def _lighting(i: ti.i32, light: ti.i32, point, eye_v, normal_v, in_shadow: ti.i32):
    """Phong lighting of sphere ``i`` by light ``light``."""
    intensity = _light_intensity[light]
    effective_color = _sphere_color[i] * intensity
    ambient = effective_color * _sphere_ambient[i]

    result = ambient
    if in_shadow == 0:
        light_v = tm.normalize(_light_position[light] - point)
        light_dot_normal = tm.dot(light_v, normal_v)
        if light_dot_normal >= 0.0:
            diffuse = effective_color * _sphere_diffuse[i] * light_dot_normal

            specular = vec3(0.0, 0.0, 0.0)
            reflect_dot_eye = tm.dot(_reflect(-light_v, normal_v), eye_v)
            if reflect_dot_eye > 0.0:
                factor = reflect_dot_eye ** _sphere_shininess[i]
                specular = intensity * (_sphere_specular[i] * factor)

            result = ambient + diffuse + specular
    return result


@ti.func
def _color_at(origin, direction):
    color = vec3(0.0, 0.0, 0.0)
    index, t = _nearest_hit(origin, direction)
    if index >= 0:
        point = origin + direction * t
        eye_v = -direction
        normal_v = _normal_at(index, point)
        if tm.dot(normal_v, eye_v) < 0.0:
            normal_v = -normal_v
        over_point = point + normal_v * EPSILON

        for light in range(_num_lights[None]):
            in_shadow = _is_shadowed(over_point, light)
            color += _lighting(index, light, over_point, eye_v, normal_v, in_shadow)
    return color


@ti.func
def _ray_for_pixel(px: ti.i32, py: ti.i32):
    xoffset = (ti.cast(px, ti.f64) + 0.5) * _pixel_size[None]
    yoffset = (ti.cast(py, ti.f64) + 0.5) * _pixel_size[None]

    # camera looks toward -z, so +x is to the left
    world_x = _half_width[None] - xoffset
    world_y = _half_height[None] - yoffset

    inv = _camera_inverse[None]
    pixel = _transform_point(inv, vec3(world_x, world_y, -1.0))
    origin = _transform_point(inv, vec3(0.0, 0.0, 0.0))
    direction = tm.normalize(pixel - origin)
    return origin, direction


@ti.kernel
def _render_kernel():
    for px, py in ti.ndrange(_image_width[None], _image_height[None]):
        origin, direction = _ray_for_pixel(px, py)
        _color_buffer[px, py] = ti.cast(_color_at(origin, direction), ti.f32)


# =============================================================================
# Public API
# =============================================================================


def get_image_numpy():
    """The active region of the color buffer as an (H, W, 3) array."""
    width = int(_image_width[None])
    height = int(_image_height[None])
    image = _color_buffer.to_numpy()[:width, :height]
    # Buffer is indexed [x, y]; images are [row, col]
    return image.transpose(1, 0, 2)


def render_image(camera: "Camera", world: "World") -> Canvas:
    """Render ``world`` through ``camera`` with the parallel kernel.

    Args:
        camera: The camera; its size sets the image size.
        world: The scene. Every shape must be a ``Sphere``.

    Returns:
        A canvas with the same pixel values as ``camera.render(world)``
        (to within float32 storage precision).

    Raises:
        TypeError: If the world contains non-sphere shapes.
        RuntimeError: If the world exceeds the field capacity.
        ValueError: If the camera is larger than the maximum image size.
    """
    logger.debug(
        "Kernel render %dx%d with %d objects and %d lights",
        camera.hsize,
        camera.vsize,
        len(world.objects),
        len(world.lights),
    )
    start = time.perf_counter()

    setup_render_target(camera.hsize, camera.vsize)
    upload_world(world)
    setup_camera(camera)
    _render_kernel()
    canvas = Canvas.from_numpy(get_image_numpy())

    logger.debug("Kernel render finished in %.3fs", time.perf_counter() - start)
    return canvas
