"""Canvas: the raster sink that rendered colors are written into.

Pixels are stored as unclamped float RGB in a NumPy array of shape
(height, width, 3). Clamping to [0, 1] and quantizing to 8 bits per channel
only happens in ``to_uint8``/``save``.

Example:
    >>> from phongtracer.core.tuples import Color
    >>> from phongtracer.preview.canvas import Canvas
    >>> canvas = Canvas(10, 20)
    >>> canvas.set(2, 3, Color(1.0, 0.0, 0.0))
    >>> canvas.save("red_dot.png")
"""

from __future__ import annotations

from os import PathLike

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from phongtracer.core.tuples import Color


class Canvas:
    """A width x height grid of colors, initially black.

    Attributes:
        width: Number of columns.
        height: Number of rows.
    """

    def __init__(self, width: int, height: int) -> None:
        """Create a black canvas.

        Raises:
            ValueError: If either dimension is not positive.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Canvas dimensions must be positive, got {width}x{height}")
        self._pixels = np.zeros((height, width, 3), dtype=np.float64)

    @classmethod
    def from_numpy(cls, image: npt.NDArray[np.floating]) -> Canvas:
        """Build a canvas from a linear float image of shape (H, W, 3)."""
        if image.ndim != 3 or image.shape[2] != 3:
            raise ValueError(f"Expected an (H, W, 3) image, got shape {image.shape}")
        canvas = cls(image.shape[1], image.shape[0])
        canvas._pixels[...] = image
        return canvas

    @property
    def width(self) -> int:
        return self._pixels.shape[1]

    @property
    def height(self) -> int:
        return self._pixels.shape[0]

    def _check_bounds(self, col: int, row: int) -> None:
        if not (0 <= col < self.width and 0 <= row < self.height):
            raise IndexError(
                f"Pixel ({col}, {row}) is outside the {self.width}x{self.height} canvas"
            )

    def get(self, col: int, row: int) -> Color:
        self._check_bounds(col, row)
        r, g, b = self._pixels[row, col]
        return Color(r, g, b)

    def set(self, col: int, row: int, color: Color) -> None:
        self._check_bounds(col, row)
        self._pixels[row, col] = (color.red, color.green, color.blue)

    def to_numpy(self) -> npt.NDArray[np.float64]:
        """Return a copy of the linear pixel data, shape (H, W, 3)."""
        return self._pixels.copy()

    def to_uint8(self) -> npt.NDArray[np.uint8]:
        """Clamp each channel to [0, 1] and scale to 0..255 (truncating)."""
        return (np.clip(self._pixels, 0.0, 1.0) * 255.0).astype(np.uint8)

    def save(self, path: str | PathLike[str]) -> None:
        """Write the canvas as an 8-bit RGB image.

        The format is chosen by Pillow from the file extension.

        Raises:
            OSError: If the file cannot be written.
            ValueError: If the extension is not a known image format.
        """
        PILImage.fromarray(self.to_uint8()).save(path)
