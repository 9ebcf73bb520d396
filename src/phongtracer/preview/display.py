"""Matplotlib-based preview of rendered canvases.

Renders are linear and unclamped; highlights may exceed 1.0. For display
each channel is clamped to [0, 1], the same rule used when a canvas is
saved, so the preview matches the written file.

Example:
    >>> from phongtracer.preview.display import show_canvas
    >>> canvas = camera.render(world)
    >>> show_canvas(canvas, title="Three spheres")
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt

if TYPE_CHECKING:
    from phongtracer.preview.canvas import Canvas


def canvas_to_display_array(canvas: Canvas) -> npt.NDArray[np.float32]:
    """Clamp a canvas to [0, 1] for display.

    Args:
        canvas: The canvas to convert.

    Returns:
        Float32 image of shape (H, W, 3) in [0, 1].
    """
    return np.clip(canvas.to_numpy(), 0.0, 1.0).astype(np.float32)


def compute_rmse(canvas_a: Canvas, canvas_b: Canvas) -> float:
    """Root mean squared error between two canvases in linear space.

    Raises:
        ValueError: If the canvases differ in size.
    """
    image_a = canvas_a.to_numpy()
    image_b = canvas_b.to_numpy()
    if image_a.shape != image_b.shape:
        raise ValueError(f"Image shapes must match: {image_a.shape} vs {image_b.shape}")
    return float(np.sqrt(np.mean((image_a - image_b) ** 2)))


def show_canvas(
    canvas: Canvas,
    *,
    title: str | None = None,
    figsize: tuple[float, float] = (8, 8),
    block: bool = True,
) -> None:
    """Display a canvas in a Matplotlib figure.

    Args:
        canvas: The canvas to show.
        title: Figure title (default shows the canvas size).
        figsize: Figure size in inches (width, height).
        block: Whether to block execution until the figure is closed.
    """
    import matplotlib.pyplot as plt

    fig, ax = plt.subplots(1, 1, figsize=figsize)
    ax.imshow(canvas_to_display_array(canvas))
    ax.axis("off")
    ax.set_title(title if title is not None else f"Render Preview - {canvas.width}x{canvas.height}")

    plt.tight_layout()
    plt.show(block=block)
