"""Camera models for ray generation.

Camera: maps pixel coordinates to world-space rays through a view transform
and renders a world into a canvas.
"""

from .camera import Camera, ProgressCallback

__all__ = ["Camera", "ProgressCallback"]
