"""Immutable 2D/3D vectors and unit quaternions."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator

from camerakit.mathutil import INFINITY, NEG_INFINITY, lerp as _lerp, near_zero

__all__ = [
    "Vector2",
    "Vector3",
    "Quaternion",
    "BLACK",
    "WHITE",
    "RED",
    "GREEN",
    "BLUE",
    "YELLOW",
    "LIGHT_YELLOW",
    "LIGHT_BLUE",
    "LIGHT_PINK",
    "LIGHT_GREEN",
]


def _rows(mat):
    """Return the row data of a matrix object or a plain nested sequence."""
    return getattr(mat, "mat", mat)


@dataclass(frozen=True, slots=True)
class Vector2:
    """A 2D vector."""

    x: float = 0.0
    y: float = 0.0

    def __iter__(self) -> Iterator[float]:
        return iter((self.x, self.y))

    def __add__(self, other: Vector2) -> Vector2:
        if not isinstance(other, Vector2):
            return NotImplemented
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector2) -> Vector2:
        if not isinstance(other, Vector2):
            return NotImplemented
        return Vector2(self.x - other.x, self.y - other.y)

    def __mul__(self, other) -> Vector2:
        if isinstance(other, Vector2):
            return Vector2(self.x * other.x, self.y * other.y)
        if isinstance(other, (int, float)):
            return Vector2(self.x * other, self.y * other)
        return NotImplemented

    def __rmul__(self, other) -> Vector2:
        if isinstance(other, (int, float)):
            return Vector2(self.x * other, self.y * other)
        return NotImplemented

    def __neg__(self) -> Vector2:
        return Vector2(-self.x, -self.y)

    def length_sq(self) -> float:
        return self.x * self.x + self.y * self.y

    def length(self) -> float:
        return math.sqrt(self.length_sq())

    def normalized(self) -> Vector2:
        """Return a unit vector in the same direction."""
        length = self.length()
        if length == 0.0:
            raise ValueError("cannot normalize a zero-length vector")
        return Vector2(self.x / length, self.y / length)

    @staticmethod
    def dot(a: Vector2, b: Vector2) -> float:
        return a.x * b.x + a.y * b.y

    @staticmethod
    def lerp(a: Vector2, b: Vector2, f: float) -> Vector2:
        return a + f * (b - a)

    @staticmethod
    def reflect(v: Vector2, n: Vector2) -> Vector2:
        """Reflect ``v`` about the normalized vector ``n``."""
        return v - 2.0 * Vector2.dot(v, n) * n

    @staticmethod
    def transform(vec: Vector2, mat, w: float = 1.0) -> Vector2:
        """Transform by a 3x3 row-vector matrix; the resulting w is dropped."""
        m = _rows(mat)
        return Vector2(
            vec.x * m[0][0] + vec.y * m[1][0] + w * m[2][0],
            vec.x * m[0][1] + vec.y * m[1][1] + w * m[2][1],
        )


Vector2.ZERO = Vector2(0.0, 0.0)
Vector2.UNIT_X = Vector2(1.0, 0.0)
Vector2.UNIT_Y = Vector2(0.0, 1.0)
Vector2.NEG_UNIT_X = Vector2(-1.0, 0.0)
Vector2.NEG_UNIT_Y = Vector2(0.0, -1.0)


@dataclass(frozen=True, slots=True)
class Vector3:
    """A 3D vector (+x forward, +y right, +z up)."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __iter__(self) -> Iterator[float]:
        return iter((self.x, self.y, self.z))

    def __add__(self, other: Vector3) -> Vector3:
        if not isinstance(other, Vector3):
            return NotImplemented
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector3) -> Vector3:
        if not isinstance(other, Vector3):
            return NotImplemented
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, other) -> Vector3:
        if isinstance(other, Vector3):
            return Vector3(self.x * other.x, self.y * other.y, self.z * other.z)
        if isinstance(other, (int, float)):
            return Vector3(self.x * other, self.y * other, self.z * other)
        return NotImplemented

    def __rmul__(self, other) -> Vector3:
        if isinstance(other, (int, float)):
            return Vector3(self.x * other, self.y * other, self.z * other)
        return NotImplemented

    def __neg__(self) -> Vector3:
        return Vector3(-self.x, -self.y, -self.z)

    def length_sq(self) -> float:
        return self.x * self.x + self.y * self.y + self.z * self.z

    def length(self) -> float:
        return math.sqrt(self.length_sq())

    def normalized(self) -> Vector3:
        """Return a unit vector in the same direction."""
        length = self.length()
        if length == 0.0:
            raise ValueError("cannot normalize a zero-length vector")
        return Vector3(self.x / length, self.y / length, self.z / length)

    @staticmethod
    def dot(a: Vector3, b: Vector3) -> float:
        return a.x * b.x + a.y * b.y + a.z * b.z

    @staticmethod
    def cross(a: Vector3, b: Vector3) -> Vector3:
        return Vector3(
            a.y * b.z - a.z * b.y,
            a.z * b.x - a.x * b.z,
            a.x * b.y - a.y * b.x,
        )

    @staticmethod
    def lerp(a: Vector3, b: Vector3, f: float) -> Vector3:
        return a + f * (b - a)

    @staticmethod
    def reflect(v: Vector3, n: Vector3) -> Vector3:
        """Reflect ``v`` about the normalized vector ``n``."""
        return v - 2.0 * Vector3.dot(v, n) * n

    @staticmethod
    def transform(vec: Vector3, mat, w: float = 1.0) -> Vector3:
        """Transform by a 4x4 row-vector matrix; the resulting w is dropped."""
        m = _rows(mat)
        return Vector3(
            vec.x * m[0][0] + vec.y * m[1][0] + vec.z * m[2][0] + w * m[3][0],
            vec.x * m[0][1] + vec.y * m[1][1] + vec.z * m[2][1] + w * m[3][1],
            vec.x * m[0][2] + vec.y * m[1][2] + vec.z * m[2][2] + w * m[3][2],
        )

    @staticmethod
    def transform_with_persp_div(vec: Vector3, mat, w: float = 1.0) -> Vector3:
        """Transform by a 4x4 matrix and divide by the resulting w when it is not near zero."""
        m = _rows(mat)
        result = Vector3.transform(vec, m, w)
        transformed_w = vec.x * m[0][3] + vec.y * m[1][3] + vec.z * m[2][3] + w * m[3][3]
        if not near_zero(abs(transformed_w)):
            result = result * (1.0 / transformed_w)
        return result

    @staticmethod
    def rotate(v: Vector3, q: Quaternion) -> Vector3:
        """Rotate ``v`` by the unit quaternion ``q``."""
        qv = Vector3(q.x, q.y, q.z)
        return v + 2.0 * Vector3.cross(qv, Vector3.cross(qv, v) + q.w * v)


Vector3.ZERO = Vector3(0.0, 0.0, 0.0)
Vector3.UNIT_X = Vector3(1.0, 0.0, 0.0)
Vector3.UNIT_Y = Vector3(0.0, 1.0, 0.0)
Vector3.UNIT_Z = Vector3(0.0, 0.0, 1.0)
Vector3.NEG_UNIT_X = Vector3(-1.0, 0.0, 0.0)
Vector3.NEG_UNIT_Y = Vector3(0.0, -1.0, 0.0)
Vector3.NEG_UNIT_Z = Vector3(0.0, 0.0, -1.0)
Vector3.INFINITY = Vector3(INFINITY, INFINITY, INFINITY)
Vector3.NEG_INFINITY = Vector3(NEG_INFINITY, NEG_INFINITY, NEG_INFINITY)


@dataclass(frozen=True, slots=True)
class Quaternion:
    """A rotation quaternion; the default value is the identity."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 1.0

    def __iter__(self) -> Iterator[float]:
        return iter((self.x, self.y, self.z, self.w))

    @staticmethod
    def from_axis_angle(axis: Vector3, angle: float) -> Quaternion:
        """Build a rotation of ``angle`` radians about the normalized ``axis``."""
        scalar = math.sin(angle / 2.0)
        return Quaternion(axis.x * scalar, axis.y * scalar, axis.z * scalar, math.cos(angle / 2.0))

    def conjugate(self) -> Quaternion:
        return Quaternion(-self.x, -self.y, -self.z, self.w)

    def length_sq(self) -> float:
        return self.x * self.x + self.y * self.y + self.z * self.z + self.w * self.w

    def length(self) -> float:
        return math.sqrt(self.length_sq())

    def normalized(self) -> Quaternion:
        length = self.length()
        if length == 0.0:
            raise ValueError("cannot normalize a zero-length quaternion")
        return Quaternion(self.x / length, self.y / length, self.z / length, self.w / length)

    @staticmethod
    def dot(a: Quaternion, b: Quaternion) -> float:
        return a.x * b.x + a.y * b.y + a.z * b.z + a.w * b.w

    @staticmethod
    def lerp(a: Quaternion, b: Quaternion, f: float) -> Quaternion:
        """Component-wise interpolation, renormalized."""
        return Quaternion(
            _lerp(a.x, b.x, f),
            _lerp(a.y, b.y, f),
            _lerp(a.z, b.z, f),
            _lerp(a.w, b.w, f),
        ).normalized()

    @staticmethod
    def slerp(a: Quaternion, b: Quaternion, f: float) -> Quaternion:
        """Spherical linear interpolation, falling back to linear when nearly collinear."""
        raw_cosm = Quaternion.dot(a, b)
        cosom = raw_cosm if raw_cosm >= 0.0 else -raw_cosm
        if cosom < 0.9999:
            omega = math.acos(cosom)
            inv_sin = 1.0 / math.sin(omega)
            scale0 = math.sin((1.0 - f) * omega) * inv_sin
            scale1 = math.sin(f * omega) * inv_sin
        else:
            scale0 = 1.0 - f
            scale1 = f
        if raw_cosm < 0.0:
            scale1 = -scale1
        return Quaternion(
            scale0 * a.x + scale1 * b.x,
            scale0 * a.y + scale1 * b.y,
            scale0 * a.z + scale1 * b.z,
            scale0 * a.w + scale1 * b.w,
        ).normalized()

    @staticmethod
    def concatenate(q: Quaternion, p: Quaternion) -> Quaternion:
        """Rotation by ``q`` followed by ``p``."""
        qv = Vector3(q.x, q.y, q.z)
        pv = Vector3(p.x, p.y, p.z)
        vec = p.w * qv + q.w * pv + Vector3.cross(pv, qv)
        return Quaternion(vec.x, vec.y, vec.z, p.w * q.w - Vector3.dot(pv, qv))


Quaternion.IDENTITY = Quaternion(0.0, 0.0, 0.0, 1.0)

BLACK = Vector3(0.0, 0.0, 0.0)
WHITE = Vector3(1.0, 1.0, 1.0)
RED = Vector3(1.0, 0.0, 0.0)
GREEN = Vector3(0.0, 1.0, 0.0)
BLUE = Vector3(0.0, 0.0, 1.0)
YELLOW = Vector3(1.0, 1.0, 0.0)
LIGHT_YELLOW = Vector3(1.0, 1.0, 0.88)
LIGHT_BLUE = Vector3(0.68, 0.85, 0.9)
LIGHT_PINK = Vector3(1.0, 0.71, 0.76)
LIGHT_GREEN = Vector3(0.56, 0.93, 0.56)