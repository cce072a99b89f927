"""Three dimensional vectors and rotation matrices."""

from __future__ import annotations

import math
from typing import Iterable, Union

import numpy as np

__all__ = ["SpaceVector", "RotationMatrix"]

PI2 = 2.0 * math.pi


def _readonly(values: Iterable[float], shape: tuple) -> np.ndarray:
    array = np.array(values, dtype=float).reshape(shape)
    array.setflags(write=False)
    return array


class SpaceVector:
    """Immutable vector holding both its cartesian and its polar coordinates.

    Use :meth:`from_cartesian` or :meth:`from_polar` to create instances. The
    polar angles follow the astronomical convention: ``phi`` is the azimuthal
    angle in ``[0, 2π)`` and ``theta`` the elevation above the x/y plane.
    """

    __slots__ = ("_xyz", "_phi", "_theta", "_r")

    def __init__(self, xyz: np.ndarray, phi: float, theta: float, r: float) -> None:
        self._xyz = xyz
        self._phi = phi
        self._theta = theta
        self._r = r

    @classmethod
    def from_cartesian(cls, x: float, y: float, z: float) -> "SpaceVector":
        x, y, z = float(x), float(y), float(z)

        if x == 0.0 and y == 0.0:
            phi = 0.0
        else:
            phi = math.atan2(y, x)
        if phi < 0.0:
            phi += PI2

        p_sqr = x * x + y * y
        if z == 0.0 and p_sqr == 0.0:
            theta = 0.0
        else:
            theta = math.atan2(z, math.sqrt(p_sqr))

        r = math.sqrt(p_sqr + z * z)
        return cls(_readonly((x, y, z), (3,)), phi, theta, r)

    @classmethod
    def from_polar(cls, phi: float, theta: float, r: float = 1.0) -> "SpaceVector":
        """Create a vector from polar coordinates, keeping them as given."""
        cos_theta = math.cos(theta)
        xyz = _readonly(
            (
                r * math.cos(phi) * cos_theta,
                r * math.sin(phi) * cos_theta,
                r * math.sin(theta),
            ),
            (3,),
        )
        return cls(xyz, float(phi), float(theta), float(r))

    @classmethod
    def of(cls, values: Iterable[float]) -> "SpaceVector":
        """Create a vector from a sequence of exactly three cartesian values."""
        values = list(values)
        if len(values) != 3:
            raise ValueError(f"Invalid vector length: {len(values)}")
        return cls.from_cartesian(*values)

    @property
    def x(self) -> float:
        return float(self._xyz[0])

    @property
    def y(self) -> float:
        return float(self._xyz[1])

    @property
    def z(self) -> float:
        return float(self._xyz[2])

    @property
    def phi(self) -> float:
        """Azimuthal angle, in radians."""
        return self._phi

    @property
    def theta(self) -> float:
        """Polar angle, in radians."""
        return self._theta

    @property
    def r(self) -> float:
        """Radial distance."""
        return self._r

    def as_array(self) -> np.ndarray:
        return self._xyz

    def __add__(self, other: "SpaceVector") -> "SpaceVector":
        return SpaceVector.from_cartesian(*(self._xyz + other._xyz))

    def __sub__(self, other: "SpaceVector") -> "SpaceVector":
        return SpaceVector.from_cartesian(*(self._xyz - other._xyz))

    def __mul__(self, other: "SpaceVector") -> "SpaceVector":
        return SpaceVector.from_cartesian(*(self._xyz * other._xyz))

    def __neg__(self) -> "SpaceVector":
        return SpaceVector.from_cartesian(*(-self._xyz))

    def cross(self, other: "SpaceVector") -> "SpaceVector":
        return SpaceVector.from_cartesian(*np.cross(self._xyz, other._xyz))

    def dot(self, other: "SpaceVector") -> float:
        return float(np.dot(self._xyz, other._xyz))

    def norm(self) -> float:
        return float(np.linalg.norm(self._xyz))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SpaceVector):
            return NotImplemented
        return bool(np.array_equal(self._xyz, other._xyz))

    def __hash__(self) -> int:
        return hash(tuple(self._xyz.tolist()))

    def __repr__(self) -> str:
        return f"SpaceVector(x={self.x}, y={self.y}, z={self.z})"


class RotationMatrix:
    """Immutable 3x3 matrix used for axis rotations and their products."""

    __slots__ = ("_mx",)

    def __init__(self, *values: float) -> None:
        if len(values) == 1 and not np.isscalar(values[0]):
            values = tuple(np.asarray(values[0], dtype=float).ravel())
        if len(values) != 9:
            raise ValueError(f"Requires 9 values, got {len(values)}")
        self._mx = _readonly(values, (3, 3))

    @classmethod
    def identity(cls) -> "RotationMatrix":
        return cls(np.identity(3))

    @classmethod
    def rotate_x(cls, angle: float) -> "RotationMatrix":
        """Rotation by *angle* (radians) about the X axis."""
        c, s = math.cos(angle), math.sin(angle)
        return cls(
            1.0, 0.0, 0.0,
            0.0, c, s,
            0.0, -s, c,
        )

    @classmethod
    def rotate_y(cls, angle: float) -> "RotationMatrix":
        """Rotation by *angle* (radians) about the Y axis."""
        c, s = math.cos(angle), math.sin(angle)
        return cls(
            c, 0.0, -s,
            0.0, 1.0, 0.0,
            s, 0.0, c,
        )

    @classmethod
    def rotate_z(cls, angle: float) -> "RotationMatrix":
        """Rotation by *angle* (radians) about the Z axis."""
        c, s = math.cos(angle), math.sin(angle)
        return cls(
            c, s, 0.0,
            -s, c, 0.0,
            0.0, 0.0, 1.0,
        )

    def get(self, row: int, col: int) -> float:
        if not (0 <= row <= 2 and 0 <= col <= 2):
            raise IndexError(f"Row/column out of range: {row}:{col}")
        return float(self._mx[row, col])

    def transpose(self) -> "RotationMatrix":
        return RotationMatrix(self._mx.T)

    def __matmul__(
        self, other: Union["RotationMatrix", SpaceVector]
    ) -> Union["RotationMatrix", SpaceVector]:
        if isinstance(other, RotationMatrix):
            return RotationMatrix(self._mx @ other._mx)
        if isinstance(other, SpaceVector):
            return SpaceVector.from_cartesian(*(self._mx @ other.as_array()))
        return NotImplemented

    def __mul__(self, scalar: float) -> "RotationMatrix":
        return RotationMatrix(self._mx * float(scalar))

    __rmul__ = __mul__

    def __add__(self, other: "RotationMatrix") -> "RotationMatrix":
        return RotationMatrix(self._mx + other._mx)

    def __sub__(self, other: "RotationMatrix") -> "RotationMatrix":
        return RotationMatrix(self._mx - other._mx)

    def __neg__(self) -> "RotationMatrix":
        return RotationMatrix(-self._mx)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RotationMatrix):
            return NotImplemented
        return bool(np.array_equal(self._mx, other._mx))

    def __hash__(self) -> int:
        return hash(tuple(self._mx.ravel().tolist()))

    def __repr__(self) -> str:
        return f"RotationMatrix({self._mx.tolist()})"
