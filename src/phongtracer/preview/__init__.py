"""Output and preview of rendered images.

Components:
    canvas: Canvas raster sink (set/get, clamp + quantize, save via Pillow)
    display: Matplotlib preview and image comparison helpers
"""

from .canvas import Canvas
from .display import canvas_to_display_array, compute_rmse, show_canvas

__all__ = ["Canvas", "canvas_to_display_array", "compute_rmse", "show_canvas"]
