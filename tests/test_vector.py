from __future__ import annotations

import math

import numpy as np
import pytest

from suncalc.vector import PI2, RotationMatrix, SpaceVector


def _assert_vector(vector: SpaceVector, x: float, y: float, z: float) -> None:
    assert vector.x == pytest.approx(x, abs=1e-12)
    assert vector.y == pytest.approx(y, abs=1e-12)
    assert vector.z == pytest.approx(z, abs=1e-12)


def test_zero_vector_has_zero_polar_coordinates():
    vector = SpaceVector.from_cartesian(0.0, 0.0, 0.0)
    assert vector.phi == 0.0
    assert vector.theta == 0.0
    assert vector.r == 0.0


def test_vector_on_z_axis_has_zero_azimuth():
    vector = SpaceVector.from_cartesian(0.0, 0.0, 2.0)
    assert vector.phi == 0.0
    assert vector.theta == pytest.approx(math.pi / 2.0)
    assert vector.r == pytest.approx(2.0)


@pytest.mark.parametrize(
    ("x", "y", "phi"),
    [
        (1.0, 0.0, 0.0),
        (1.0, 1.0, math.pi / 4.0),
        (-1.0, 0.0, math.pi),
        (0.0, -1.0, 3.0 * math.pi / 2.0),
        (1.0, -1.0, 7.0 * math.pi / 4.0),
    ],
)
def test_azimuth_is_normalized(x: float, y: float, phi: float):
    vector = SpaceVector.from_cartesian(x, y, 0.0)
    assert 0.0 <= vector.phi < PI2
    assert vector.phi == pytest.approx(phi)


def test_polar_constructor_keeps_given_values():
    vector = SpaceVector.from_polar(-1.0, 0.5, 3.0)
    assert vector.phi == -1.0
    assert vector.theta == 0.5
    assert vector.r == 3.0
    _assert_vector(
        vector,
        3.0 * math.cos(-1.0) * math.cos(0.5),
        3.0 * math.sin(-1.0) * math.cos(0.5),
        3.0 * math.sin(0.5),
    )


def test_polar_constructor_defaults_to_unit_length():
    vector = SpaceVector.from_polar(math.pi / 2.0, 0.0)
    _assert_vector(vector, 0.0, 1.0, 0.0)
    assert vector.norm() == pytest.approx(1.0)


def test_of_requires_three_values():
    assert SpaceVector.of([1.0, 2.0, 3.0]) == SpaceVector.from_cartesian(1.0, 2.0, 3.0)
    with pytest.raises(ValueError):
        SpaceVector.of([1.0, 2.0])
    with pytest.raises(ValueError):
        SpaceVector.of([1.0, 2.0, 3.0, 4.0])


def test_vector_arithmetic():
    a = SpaceVector.from_cartesian(1.0, 2.0, 3.0)
    b = SpaceVector.from_cartesian(4.0, 5.0, 6.0)

    _assert_vector(a + b, 5.0, 7.0, 9.0)
    _assert_vector(b - a, 3.0, 3.0, 3.0)
    _assert_vector(a * b, 4.0, 10.0, 18.0)
    _assert_vector(-a, -1.0, -2.0, -3.0)
    assert a.dot(b) == pytest.approx(32.0)
    _assert_vector(a.cross(b), -3.0, 6.0, -3.0)
    assert a.norm() == pytest.approx(math.sqrt(14.0))
    assert a.r == pytest.approx(a.norm())


def test_vectors_are_immutable():
    vector = SpaceVector.from_cartesian(1.0, 2.0, 3.0)
    with pytest.raises(ValueError):
        vector.as_array()[0] = 5.0
    assert hash(vector) == hash(SpaceVector.from_cartesian(1.0, 2.0, 3.0))


def test_matrix_requires_nine_values():
    with pytest.raises(ValueError):
        RotationMatrix(1.0, 2.0, 3.0)
    with pytest.raises(ValueError):
        RotationMatrix(np.zeros((2, 2)))
    assert RotationMatrix(np.identity(3)) == RotationMatrix.identity()


def test_matrix_get_checks_bounds():
    matrix = RotationMatrix(1, 2, 3, 4, 5, 6, 7, 8, 9)
    assert matrix.get(0, 0) == 1.0
    assert matrix.get(1, 2) == 6.0
    assert matrix.get(2, 1) == 8.0
    with pytest.raises(IndexError):
        matrix.get(3, 0)
    with pytest.raises(IndexError):
        matrix.get(0, -1)


def test_matrix_transpose_and_arithmetic():
    matrix = RotationMatrix(1, 2, 3, 4, 5, 6, 7, 8, 9)
    assert matrix.transpose() == RotationMatrix(1, 4, 7, 2, 5, 8, 3, 6, 9)
    assert matrix + matrix == 2 * matrix
    assert matrix - matrix == RotationMatrix(np.zeros((3, 3)))
    assert -matrix == matrix * -1
    assert RotationMatrix.identity() @ matrix == matrix


@pytest.mark.parametrize(
    ("rotation", "vector", "expected"),
    [
        (RotationMatrix.rotate_x(math.pi / 2.0), (0.0, 1.0, 0.0), (0.0, 0.0, -1.0)),
        (RotationMatrix.rotate_y(math.pi / 2.0), (1.0, 0.0, 0.0), (0.0, 0.0, 1.0)),
        (RotationMatrix.rotate_z(math.pi / 2.0), (1.0, 0.0, 0.0), (0.0, -1.0, 0.0)),
    ],
)
def test_axis_rotations(rotation: RotationMatrix, vector, expected):
    _assert_vector(rotation @ SpaceVector.of(vector), *expected)


def test_rotation_transpose_is_inverse():
    rotation = RotationMatrix.rotate_z(0.3) @ RotationMatrix.rotate_x(1.1)
    vector = SpaceVector.from_cartesian(0.2, -0.7, 1.3)
    restored = rotation.transpose() @ (rotation @ vector)
    _assert_vector(restored, 0.2, -0.7, 1.3)
    assert (rotation @ vector).r == pytest.approx(vector.r)
