"""4x4 affine transform matrices with cofactor-based inversion.

This module provides the ``Matrix`` type used for every scene transform, the
builder functions for the standard affine transforms, and ``view_transform``
for orienting a camera.

Inversion uses the adjugate method: the transpose of the cofactor matrix,
divided by the determinant. Determinants are computed by cofactor expansion
along row 0, recursing down to the 2x2 closed form.

Composition convention:
    The fluent builder methods PRE-multiply. ``m.rotate_x(a)`` returns
    ``rotation_x(a) * m``, so a chain such as

        Matrix().rotate_x(a).scale(2, 2, 2).translate(1, 0, 0)

    equals ``translation(1, 0, 0) * scaling(2, 2, 2) * rotation_x(a)`` and
    applies the rotation first even though it reads left-to-right.

Example:
    >>> from phongtracer.core.matrix import Matrix
    >>> from phongtracer.core.tuples import Point
    >>> Matrix().translate(5, -3, 2) * Point(-3, 4, 5)
    Point(x=2.0, y=1.0, z=7.0)
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import overload

import numpy as np
import numpy.typing as npt

from phongtracer.core.tuples import EPSILON, Point, Vector, feq


class Matrix:
    """A square matrix of size 2, 3 or 4 backed by a float64 NumPy array.

    Only 4x4 matrices describe transforms; smaller sizes appear transiently
    as submatrices while computing determinants and cofactors.

    Attributes:
        size: Number of rows (and columns).
    """

    __slots__ = ("_data",)

    def __init__(self, rows: Sequence[Sequence[float]] | npt.ArrayLike | None = None) -> None:
        """Create a matrix from a list of rows, or the 4x4 identity.

        Args:
            rows: Row-major values. ``None`` yields the 4x4 identity.

        Raises:
            ValueError: If the rows do not form a square matrix of size 2-4.
        """
        if rows is None:
            data = np.identity(4, dtype=np.float64)
        else:
            data = np.array(rows, dtype=np.float64)
        if data.ndim != 2 or data.shape[0] != data.shape[1] or not 2 <= data.shape[0] <= 4:
            raise ValueError(f"Matrix must be square with size 2..4, got shape {data.shape}")
        self._data = data

    @classmethod
    def identity(cls, size: int = 4) -> Matrix:
        """Return the identity matrix of the given size."""
        return cls(np.identity(size, dtype=np.float64))

    @property
    def size(self) -> int:
        return self._data.shape[0]

    def __getitem__(self, index: tuple[int, int]) -> float:
        row, col = index
        return float(self._data[row, col])

    def __repr__(self) -> str:
        return f"Matrix({self._data.tolist()!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        if self.size != other.size:
            return False
        return bool(np.all(np.abs(self._data - other._data) <= EPSILON))

    __hash__ = None  # type: ignore[assignment]

    def to_list(self) -> list[list[float]]:
        """Return the matrix as nested row lists."""
        return self._data.tolist()

    def to_numpy(self) -> npt.NDArray[np.float64]:
        """Return a copy of the underlying array."""
        return self._data.copy()

    # -------------------------------------------------------------------------
    # Products
    # -------------------------------------------------------------------------

    @overload
    def __mul__(self, other: Matrix) -> Matrix: ...

    @overload
    def __mul__(self, other: Point) -> Point: ...

    @overload
    def __mul__(self, other: Vector) -> Vector: ...

    def __mul__(self, other):
        if isinstance(other, Matrix):
            if self.size != other.size:
                raise ValueError("cannot multiply matrices of unequal size")
            return Matrix(self._data @ other._data)
        if isinstance(other, Point):
            self._require_transform()
            x, y, z, _ = self._data @ np.array([other.x, other.y, other.z, 1.0])
            return Point(x, y, z)
        if isinstance(other, Vector):
            # w = 0: the translation column never touches a direction
            self._require_transform()
            x, y, z, _ = self._data @ np.array([other.x, other.y, other.z, 0.0])
            return Vector(x, y, z)
        return NotImplemented

    def _require_transform(self) -> None:
        if self.size != 4:
            raise ValueError("only a 4x4 matrix can transform points and vectors")

    # -------------------------------------------------------------------------
    # Linear algebra
    # -------------------------------------------------------------------------

    def transpose(self) -> Matrix:
        return Matrix(self._data.T)

    def determinant(self) -> float:
        """Determinant by cofactor expansion along the first row."""
        if self.size == 2:
            d = self._data
            return float(d[0, 0] * d[1, 1] - d[0, 1] * d[1, 0])
        return sum(float(self._data[0, col]) * self.cofactor(0, col) for col in range(self.size))

    def submatrix(self, row: int, col: int) -> Matrix:
        """Return a copy with the given row and column removed."""
        reduced = np.delete(np.delete(self._data, row, axis=0), col, axis=1)
        return Matrix(reduced)

    def minor(self, row: int, col: int) -> float:
        return self.submatrix(row, col).determinant()

    def cofactor(self, row: int, col: int) -> float:
        minor = self.minor(row, col)
        return minor if (row + col) % 2 == 0 else -minor

    def is_invertible(self) -> bool:
        return not feq(self.determinant(), 0.0)

    def inverse(self) -> Matrix:
        """Invert via the adjugate (transposed cofactors over the determinant).

        Raises:
            ValueError: If the determinant is within ``EPSILON`` of zero. A
                degenerate transform is a bug in the scene description, so
                callers are expected to let this propagate.
        """
        det = self.determinant()
        if feq(det, 0.0):
            raise ValueError(f"matrix is not invertible (determinant {det}): {self!r}")
        result = np.empty_like(self._data)
        for row in range(self.size):
            for col in range(self.size):
                # writing to [col, row] performs the transpose
                result[col, row] = self.cofactor(row, col) / det
        return Matrix(result)

    # -------------------------------------------------------------------------
    # Fluent transform builders (pre-multiplying)
    # -------------------------------------------------------------------------

    def translate(self, x: float, y: float, z: float) -> Matrix:
        return translation(x, y, z) * self

    def scale(self, x: float, y: float, z: float) -> Matrix:
        return scaling(x, y, z) * self

    def scale_uniform(self, s: float) -> Matrix:
        return scaling(s, s, s) * self

    def rotate_x(self, radians: float) -> Matrix:
        return rotation_x(radians) * self

    def rotate_y(self, radians: float) -> Matrix:
        return rotation_y(radians) * self

    def rotate_z(self, radians: float) -> Matrix:
        return rotation_z(radians) * self

    def shear(self, xy: float, xz: float, yx: float, yz: float, zx: float, zy: float) -> Matrix:
        return shearing(xy, xz, yx, yz, zx, zy) * self


# =============================================================================
# Transform constructors
# =============================================================================


def translation(x: float, y: float, z: float) -> Matrix:
    return Matrix(
        [
            [1.0, 0.0, 0.0, x],
            [0.0, 1.0, 0.0, y],
            [0.0, 0.0, 1.0, z],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def scaling(x: float, y: float, z: float) -> Matrix:
    return Matrix(
        [
            [x, 0.0, 0.0, 0.0],
            [0.0, y, 0.0, 0.0],
            [0.0, 0.0, z, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def rotation_x(radians: float) -> Matrix:
    c, s = math.cos(radians), math.sin(radians)
    return Matrix(
        [
            [1.0, 0.0, 0.0, 0.0],
            [0.0, c, -s, 0.0],
            [0.0, s, c, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def rotation_y(radians: float) -> Matrix:
    c, s = math.cos(radians), math.sin(radians)
    return Matrix(
        [
            [c, 0.0, s, 0.0],
            [0.0, 1.0, 0.0, 0.0],
            [-s, 0.0, c, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def rotation_z(radians: float) -> Matrix:
    c, s = math.cos(radians), math.sin(radians)
    return Matrix(
        [
            [c, -s, 0.0, 0.0],
            [s, c, 0.0, 0.0],
            [0.0, 0.0, 1.0, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def shearing(xy: float, xz: float, yx: float, yz: float, zx: float, zy: float) -> Matrix:
    """Shear matrix; ``xy`` moves x in proportion to y, and so on."""
    return Matrix(
        [
            [1.0, xy, xz, 0.0],
            [yx, 1.0, yz, 0.0],
            [zx, zy, 1.0, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def view_transform(from_point: Point, to: Point, up: Vector) -> Matrix:
    """Build the world-to-camera matrix for an eye at ``from_point``.

    The camera looks at ``to`` with ``up`` roughly overhead. ``up`` does not
    need to be exactly perpendicular to the view direction; the true up
    vector is recovered with two cross products.

    Args:
        from_point: Eye position in world space.
        to: Point the eye looks at.
        up: Approximate up direction.

    Returns:
        The orientation matrix composed with a translation by ``-from_point``.
    """
    forward = (to - from_point).normalize()
    left = forward.cross(up.normalize())
    true_up = left.cross(forward)
    orientation = Matrix(
        [
            [left.x, left.y, left.z, 0.0],
            [true_up.x, true_up.y, true_up.z, 0.0],
            [-forward.x, -forward.y, -forward.z, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )
    return orientation * translation(-from_point.x, -from_point.y, -from_point.z)
