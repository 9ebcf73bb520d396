"""Offline ray tracer for transformed spheres with Phong lighting.

This package renders a scene by casting one ray per pixel from a camera,
finding the nearest visible surface, and shading it with the Phong model
and hard shadows from point lights.

Subpackages:
    core: Points, vectors, colors, 4x4 transforms, rays, and the Taichi
        data-parallel renderer (``core.integrator``, import after ``ti.init``)
    geometry: Shape base class and the unit sphere
    materials: Phong material and lighting
    scene: Intersections, lights and the world
    camera: Pixel-to-ray camera and the reference render loop
    preview: Canvas output sink and Matplotlib preview
"""

__version__ = "0.1.0"
