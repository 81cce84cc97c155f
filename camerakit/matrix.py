"""Row-major 3x3 and 4x4 matrices for row-vector transforms."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator, Sequence

from camerakit.mathutil import cot
from camerakit.vector import Quaternion, Vector2, Vector3

__all__ = ["Matrix3", "Matrix4"]

Rows = tuple[tuple[float, ...], ...]


def _as_rows(data: Sequence[Sequence[float]], size: int) -> Rows:
    rows = tuple(tuple(float(value) for value in row) for row in data)
    if len(rows) != size or any(len(row) != size for row in rows):
        raise ValueError(f"expected a {size}x{size} matrix")
    return rows


def _identity(size: int) -> Rows:
    return tuple(
        tuple(1.0 if row == col else 0.0 for col in range(size)) for row in range(size)
    )


def _multiply(a: Rows, b: Rows) -> Rows:
    columns = tuple(zip(*b))
    return tuple(
        tuple(sum(x * y for x, y in zip(row, col)) for col in columns) for row in a
    )


def _minor(rows: Rows, skip_row: int, skip_col: int) -> Rows:
    return tuple(
        row[:skip_col] + row[skip_col + 1:]
        for index, row in enumerate(rows)
        if index != skip_row
    )


def _determinant(rows: Rows) -> float:
    if len(rows) == 1:
        return rows[0][0]
    return sum(
        (-1.0) ** col * value * _determinant(_minor(rows, 0, col))
        for col, value in enumerate(rows[0])
    )


@dataclass(frozen=True, slots=True)
class Matrix3:
    """A 3x3 matrix; the default value is the identity."""

    mat: Rows = _identity(3)

    def __post_init__(self) -> None:
        object.__setattr__(self, "mat", _as_rows(self.mat, 3))

    def __iter__(self) -> Iterator[tuple[float, ...]]:
        return iter(self.mat)

    def __matmul__(self, other: Matrix3) -> Matrix3:
        if not isinstance(other, Matrix3):
            return NotImplemented
        return Matrix3(_multiply(self.mat, other.mat))

    @staticmethod
    def create_scale(x_scale, y_scale: float | None = None) -> Matrix3:
        """Scale matrix from two factors, a Vector2, or one uniform factor."""
        if isinstance(x_scale, Vector2):
            x_scale, y_scale = x_scale.x, x_scale.y
        elif y_scale is None:
            y_scale = x_scale
        return Matrix3(
            (
                (x_scale, 0.0, 0.0),
                (0.0, y_scale, 0.0),
                (0.0, 0.0, 1.0),
            )
        )

    @staticmethod
    def create_rotation(theta: float) -> Matrix3:
        """Rotation about the z axis by ``theta`` radians."""
        c, s = math.cos(theta), math.sin(theta)
        return Matrix3(
            (
                (c, s, 0.0),
                (-s, c, 0.0),
                (0.0, 0.0, 1.0),
            )
        )

    @staticmethod
    def create_translation(trans: Vector2) -> Matrix3:
        """Translation on the xy plane."""
        return Matrix3(
            (
                (1.0, 0.0, 0.0),
                (0.0, 1.0, 0.0),
                (trans.x, trans.y, 1.0),
            )
        )


Matrix3.IDENTITY = Matrix3()


@dataclass(frozen=True, slots=True)
class Matrix4:
    """A 4x4 matrix; the default value is the identity."""

    mat: Rows = _identity(4)

    def __post_init__(self) -> None:
        object.__setattr__(self, "mat", _as_rows(self.mat, 4))

    def __iter__(self) -> Iterator[tuple[float, ...]]:
        return iter(self.mat)

    def __matmul__(self, other: Matrix4) -> Matrix4:
        if not isinstance(other, Matrix4):
            return NotImplemented
        return Matrix4(_multiply(self.mat, other.mat))

    def inverted(self) -> Matrix4:
        """Return the inverse; raises ValueError for a singular matrix."""
        det = _determinant(self.mat)
        if det == 0.0:
            raise ValueError("matrix is singular and cannot be inverted")
        cofactors = tuple(
            tuple(
                (-1.0) ** (row + col) * _determinant(_minor(self.mat, row, col))
                for col in range(4)
            )
            for row in range(4)
        )
        return Matrix4(tuple(tuple(value / det for value in col) for col in zip(*cofactors)))

    def translation(self) -> Vector3:
        return Vector3(*self.mat[3][:3])

    def x_axis(self) -> Vector3:
        """Normalized first row (forward)."""
        return Vector3(*self.mat[0][:3]).normalized()

    def y_axis(self) -> Vector3:
        """Normalized second row (left)."""
        return Vector3(*self.mat[1][:3]).normalized()

    def z_axis(self) -> Vector3:
        """Normalized third row (up)."""
        return Vector3(*self.mat[2][:3]).normalized()

    def scale(self) -> Vector3:
        """Scale factors: the lengths of the first three rows."""
        return Vector3(*(Vector3(*row[:3]).length() for row in self.mat[:3]))

    @staticmethod
    def create_scale(x_scale, y_scale: float | None = None, z_scale: float | None = None) -> Matrix4:
        """Scale matrix from three factors, a Vector3, or one uniform factor."""
        if isinstance(x_scale, Vector3):
            x_scale, y_scale, z_scale = x_scale
        elif y_scale is None and z_scale is None:
            y_scale = z_scale = x_scale
        elif y_scale is None or z_scale is None:
            raise ValueError("give one uniform factor or all three factors")
        return Matrix4(
            (
                (x_scale, 0.0, 0.0, 0.0),
                (0.0, y_scale, 0.0, 0.0),
                (0.0, 0.0, z_scale, 0.0),
                (0.0, 0.0, 0.0, 1.0),
            )
        )

    @staticmethod
    def create_uniform_scale(scale: float) -> Matrix4:
        return Matrix4.create_scale(scale, scale, scale)

    @staticmethod
    def create_rotation_x(theta: float) -> Matrix4:
        c, s = math.cos(theta), math.sin(theta)
        return Matrix4(
            (
                (1.0, 0.0, 0.0, 0.0),
                (0.0, c, s, 0.0),
                (0.0, -s, c, 0.0),
                (0.0, 0.0, 0.0, 1.0),
            )
        )

    @staticmethod
    def create_rotation_y(theta: float) -> Matrix4:
        c, s = math.cos(theta), math.sin(theta)
        return Matrix4(
            (
                (c, 0.0, -s, 0.0),
                (0.0, 1.0, 0.0, 0.0),
                (s, 0.0, c, 0.0),
                (0.0, 0.0, 0.0, 1.0),
            )
        )

    @staticmethod
    def create_rotation_z(theta: float) -> Matrix4:
        c, s = math.cos(theta), math.sin(theta)
        return Matrix4(
            (
                (c, s, 0.0, 0.0),
                (-s, c, 0.0, 0.0),
                (0.0, 0.0, 1.0, 0.0),
                (0.0, 0.0, 0.0, 1.0),
            )
        )

    @staticmethod
    def create_from_quaternion(q: Quaternion) -> Matrix4:
        """Rotation matrix equivalent to the unit quaternion ``q``."""
        x, y, z, w = q
        return Matrix4(
            (
                (1.0 - 2.0 * y * y - 2.0 * z * z, 2.0 * x * y + 2.0 * w * z, 2.0 * x * z - 2.0 * w * y, 0.0),
                (2.0 * x * y - 2.0 * w * z, 1.0 - 2.0 * x * x - 2.0 * z * z, 2.0 * y * z + 2.0 * w * x, 0.0),
                (2.0 * x * z + 2.0 * w * y, 2.0 * y * z - 2.0 * w * x, 1.0 - 2.0 * x * x - 2.0 * y * y, 0.0),
                (0.0, 0.0, 0.0, 1.0),
            )
        )

    @staticmethod
    def create_translation(trans: Vector3) -> Matrix4:
        return Matrix4(
            (
                (1.0, 0.0, 0.0, 0.0),
                (0.0, 1.0, 0.0, 0.0),
                (0.0, 0.0, 1.0, 0.0),
                (trans.x, trans.y, trans.z, 1.0),
            )
        )

    @staticmethod
    def create_look_at(eye: Vector3, target: Vector3, up: Vector3) -> Matrix4:
        """View matrix looking from ``eye`` toward ``target``."""
        zaxis = (target - eye).normalized()
        xaxis = Vector3.cross(up, zaxis).normalized()
        yaxis = Vector3.cross(zaxis, xaxis).normalized()
        trans = Vector3(
            -Vector3.dot(xaxis, eye),
            -Vector3.dot(yaxis, eye),
            -Vector3.dot(zaxis, eye),
        )
        return Matrix4(
            (
                (xaxis.x, yaxis.x, zaxis.x, 0.0),
                (xaxis.y, yaxis.y, zaxis.y, 0.0),
                (xaxis.z, yaxis.z, zaxis.z, 0.0),
                (trans.x, trans.y, trans.z, 1.0),
            )
        )

    @staticmethod
    def create_ortho(width: float, height: float, near: float, far: float) -> Matrix4:
        return Matrix4(
            (
                (2.0 / width, 0.0, 0.0, 0.0),
                (0.0, 2.0 / height, 0.0, 0.0),
                (0.0, 0.0, 1.0 / (far - near), 0.0),
                (0.0, 0.0, near / (near - far), 1.0),
            )
        )

    @staticmethod
    def create_perspective_fov(
        fov_y: float, width: float, height: float, near: float, far: float
    ) -> Matrix4:
        y_scale = cot(fov_y / 2.0)
        x_scale = y_scale * height / width
        return Matrix4(
            (
                (x_scale, 0.0, 0.0, 0.0),
                (0.0, y_scale, 0.0, 0.0),
                (0.0, 0.0, far / (far - near), 1.0),
                (0.0, 0.0, -near * far / (far - near), 0.0),
            )
        )

    @staticmethod
    def create_simple_view_proj(width: float, height: float) -> Matrix4:
        """Screen-space view-projection used for sprites."""
        return Matrix4(
            (
                (2.0 / width, 0.0, 0.0, 0.0),
                (0.0, 2.0 / height, 0.0, 0.0),
                (0.0, 0.0, 1.0, 0.0),
                (0.0, 0.0, 1.0, 1.0),
            )
        )


Matrix4.IDENTITY = Matrix4()