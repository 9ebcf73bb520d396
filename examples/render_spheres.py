#!/usr/bin/env python3
"""Render the three-sphere room scene.

This script builds a floor and two walls from flattened spheres, places three
colored spheres in front of them, and renders the scene with Phong lighting
and hard shadows from one or two point lights.

Usage:
    python -m examples.render_spheres [options]

Options:
    --width WIDTH       Image width in pixels (default: 400)
    --height HEIGHT     Image height in pixels (default: 200)
    --fov DEGREES       Field of view in degrees (default: 60)
    --two-lights        Add a dim second light on the right
    --parallel          Render with the Taichi kernel instead of pure Python
    --output OUTPUT     Output file path (default: spheres.png)
    --quiet             Suppress progress output

Example:
    python -m examples.render_spheres --width 1024 --height 512 --parallel
"""

from __future__ import annotations

import argparse
import math
import sys
import time
from pathlib import Path

import taichi as ti

from phongtracer.camera import Camera
from phongtracer.core import WHITE, Color, Point, Vector
from phongtracer.scene import PointLight, three_sphere_room


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render the three-sphere room scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=400,
        help="Image width in pixels (default: 400)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=200,
        help="Image height in pixels (default: 200)",
    )
    parser.add_argument(
        "--fov",
        type=float,
        default=60.0,
        help="Field of view in degrees (default: 60)",
    )
    parser.add_argument(
        "--two-lights",
        action="store_true",
        help="Add a dim second light on the right",
    )
    parser.add_argument(
        "--parallel",
        action="store_true",
        help="Render with the Taichi kernel instead of pure Python",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="spheres.png",
        help="Output file path (default: spheres.png)",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args()


def render_spheres(
    width: int = 400,
    height: int = 200,
    fov_degrees: float = 60.0,
    two_lights: bool = False,
    parallel: bool = False,
    output_path: str = "spheres.png",
    quiet: bool = False,
) -> Path:
    """Render the three-sphere room and save it.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        fov_degrees: Field of view in degrees.
        two_lights: If True, split the light between two sources.
        parallel: If True, use the Taichi kernel renderer.
        output_path: Output file path (PNG).
        quiet: If True, suppress progress output.

    Returns:
        Path to the saved image file.
    """
    if two_lights:
        lights = [
            PointLight(Point(-10, 10, -10), WHITE / 1.3),
            PointLight(Point(10, 10, -10), Color(0.3, 0.3, 0.3) / 1.3),
        ]
    else:
        lights = [PointLight(Point(-10, 10, -10), WHITE)]
    world = three_sphere_room(lights)

    camera = Camera(width, height, math.radians(fov_degrees)).with_view_transform(
        Point(0, 1.5, -5), Point(0, 1, 0), Vector(0, 1, 0)
    )

    if not quiet:
        print(f"Rendering {width}x{height} ({len(world.objects)} objects)...")

    start_time = time.time()

    def progress_callback(current: int, target: int) -> None:
        if not quiet:
            print(f"\r  Progress: {current}/{target} rows ({current / target * 100:.1f}%)", end="")

    if parallel:
        # Lazy import: the integrator allocates Taichi fields on import
        from phongtracer.core.integrator import render_image

        canvas = render_image(camera, world)
    else:
        canvas = camera.render(world, callback=progress_callback)
        if not quiet:
            print()  # Newline after progress

    output_file = Path(output_path)
    canvas.save(output_file)

    if not quiet:
        print(f"Saved to: {output_file.absolute()}")
        print(f"Total time: {time.time() - start_time:.2f}s")

    return output_file


def main() -> int:
    """Main entry point."""
    args = parse_args()

    if args.parallel:
        # f64 needs CUDA or CPU; Taichi falls back to CPU without CUDA
        ti.init(arch=ti.cuda, default_fp=ti.f64)

    try:
        render_spheres(
            width=args.width,
            height=args.height,
            fov_degrees=args.fov,
            two_lights=args.two_lights,
            parallel=args.parallel,
            output_path=args.output,
            quiet=args.quiet,
        )
        return 0
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
