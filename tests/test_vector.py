import math

import pytest

from camerakit.mathutil import PI, PI_OVER_2
from camerakit.vector import Quaternion, Vector2, Vector3

IDENTITY4 = [
    [1.0, 0.0, 0.0, 0.0],
    [0.0, 1.0, 0.0, 0.0],
    [0.0, 0.0, 1.0, 0.0],
    [0.0, 0.0, 0.0, 1.0],
]
IDENTITY3 = [[1.0, 0.0, 0.0], [0.0, 1.0, 0.0], [0.0, 0.0, 1.0]]


def assert_close(actual, expected, tol=1e-6):
    assert tuple(actual) == pytest.approx(tuple(expected), abs=tol)


def test_vector2_arithmetic():
    a = Vector2(1.0, 2.0)
    b = Vector2(3.0, -4.0)
    assert a + b - b == a
    assert a * 2.0 == 2.0 * a == a + a
    assert -a + a == Vector2.ZERO


def test_vector2_normalized_has_unit_length():
    assert Vector2(3.0, 4.0).normalized().length() == pytest.approx(1.0)


def test_vector2_zero_normalize_raises():
    with pytest.raises(ValueError):
        Vector2.ZERO.normalized()


def test_vector2_dot_and_reflect():
    assert Vector2.dot(Vector2.UNIT_X, Vector2.UNIT_Y) == 0.0
    v = Vector2(1.0, -1.0)
    assert Vector2.reflect(v, Vector2.UNIT_Y) == Vector2(1.0, 1.0)


def test_vector2_lerp_endpoints():
    a, b = Vector2(1.0, 5.0), Vector2(-2.0, 7.0)
    assert Vector2.lerp(a, b, 0.0) == a
    assert Vector2.lerp(a, b, 1.0) == b


def test_vector2_transform_identity_and_translation():
    v = Vector2(3.0, -2.0)
    assert Vector2.transform(v, IDENTITY3) == v
    trans = [[1.0, 0.0, 0.0], [0.0, 1.0, 0.0], [10.0, 20.0, 1.0]]
    assert Vector2.transform(v, trans) == v + Vector2(10.0, 20.0)
    assert Vector2.transform(v, trans, 0.0) == v


def test_vector3_cross_of_basis():
    assert Vector3.cross(Vector3.UNIT_X, Vector3.UNIT_Y) == Vector3.UNIT_Z
    assert Vector3.cross(Vector3.UNIT_Y, Vector3.UNIT_Z) == Vector3.UNIT_X
    assert Vector3.cross(Vector3.UNIT_Y, Vector3.UNIT_X) == Vector3.NEG_UNIT_Z


def test_vector3_cross_is_orthogonal():
    a, b = Vector3(1.0, 2.0, 3.0), Vector3(-4.0, 0.5, 2.0)
    c = Vector3.cross(a, b)
    assert Vector3.dot(c, a) == pytest.approx(0.0)
    assert Vector3.dot(c, b) == pytest.approx(0.0)


def test_vector3_componentwise_multiply_and_iter():
    a = Vector3(1.0, 2.0, 3.0)
    assert tuple(a * Vector3.UNIT_Y) == (0.0, 2.0, 0.0)
    assert list(a) == [1.0, 2.0, 3.0]


def test_vector3_normalized():
    n = Vector3(2.0, -3.0, 6.0).normalized()
    assert n.length() == pytest.approx(1.0)
    assert n.length_sq() == pytest.approx(1.0)
    with pytest.raises(ValueError):
        Vector3.ZERO.normalized()


def test_vector3_lerp_and_reflect():
    a, b = Vector3(0.0, 0.0, 0.0), Vector3(4.0, 8.0, -2.0)
    assert Vector3.lerp(a, b, 0.5) * 2.0 == b
    v = Vector3(1.0, 1.0, -1.0)
    assert Vector3.reflect(v, Vector3.UNIT_Z) == Vector3(1.0, 1.0, 1.0)


def test_vector3_transform_identity_and_w_zero():
    v = Vector3(1.0, 2.0, 3.0)
    assert Vector3.transform(v, IDENTITY4) == v
    trans = [row[:] for row in IDENTITY4]
    trans[3] = [5.0, 6.0, 7.0, 1.0]
    assert Vector3.transform(v, trans) == v + Vector3(5.0, 6.0, 7.0)
    assert Vector3.transform(v, trans, 0.0) == v


def test_vector3_transform_accepts_object_with_mat():
    class Holder:
        mat = IDENTITY4

    v = Vector3(-1.0, 4.0, 2.5)
    assert Vector3.transform(v, Holder()) == v


def test_transform_with_persp_div_divides_by_w():
    v = Vector3(2.0, 4.0, 6.0)
    m = [row[:] for row in IDENTITY4]
    m[3][3] = 2.0
    result = Vector3.transform_with_persp_div(v, m)
    assert tuple(result) == pytest.approx((1.0, 2.0, 3.0), abs=1e-6)


def test_transform_with_persp_div_skips_near_zero_w():
    v = Vector3(2.0, 4.0, 6.0)
    m = [row[:] for row in IDENTITY4]
    m[3][3] = 0.0
    assert Vector3.transform_with_persp_div(v, m) == v


def test_rotate_about_z_quarter_turn():
    q = Quaternion.from_axis_angle(Vector3.UNIT_Z, PI_OVER_2)
    assert_close(Vector3.rotate(Vector3.UNIT_X, q), (0.0, 1.0, 0.0))
    assert_close(Vector3.rotate(Vector3.UNIT_Z, q), (0.0, 0.0, 1.0))


def test_rotate_preserves_length():
    q = Quaternion.from_axis_angle(Vector3(1.0, 1.0, 0.0).normalized(), 0.7)
    v = Vector3(3.0, -1.0, 2.0)
    assert Vector3.rotate(v, q).length() == pytest.approx(v.length())


def test_rotate_by_identity():
    v = Vector3(3.0, -1.0, 2.0)
    assert Vector3.rotate(v, Quaternion.IDENTITY) == v


def test_default_quaternion_is_identity():
    assert Quaternion() == Quaternion.IDENTITY
    assert Quaternion().length() == 1.0


def test_conjugate_undoes_rotation():
    q = Quaternion.from_axis_angle(Vector3.UNIT_Y, 1.1)
    both = Quaternion.concatenate(q, q.conjugate())
    assert_close(both, (0.0, 0.0, 0.0, 1.0))


def test_concatenate_order():
    yaw = Quaternion.from_axis_angle(Vector3.UNIT_Z, PI_OVER_2)
    pitch = Quaternion.from_axis_angle(Vector3.UNIT_Y, 0.4)
    combined = Quaternion.concatenate(yaw, pitch)
    v = Vector3(1.0, 2.0, 3.0)
    expected = Vector3.rotate(Vector3.rotate(v, yaw), pitch)
    assert_close(Vector3.rotate(v, combined), expected)


def test_concatenate_half_turns_make_full_turn():
    half = Quaternion.from_axis_angle(Vector3.UNIT_X, PI / 4)
    full = Quaternion.concatenate(half, half)
    assert_close(Vector3.rotate(Vector3.UNIT_Y, full), (0.0, 0.0, 1.0))


def test_quaternion_normalized_and_dot():
    q = Quaternion(1.0, 2.0, 3.0, 4.0).normalized()
    assert q.length() == pytest.approx(1.0)
    assert Quaternion.dot(q, q) == pytest.approx(1.0)
    with pytest.raises(ValueError):
        Quaternion(0.0, 0.0, 0.0, 0.0).normalized()


def test_slerp_endpoints():
    a = Quaternion.from_axis_angle(Vector3.UNIT_Z, 0.2)
    b = Quaternion.from_axis_angle(Vector3.UNIT_Z, 1.4)
    assert_close(Quaternion.slerp(a, b, 0.0), a)
    assert_close(Quaternion.slerp(a, b, 1.0), b)


def test_slerp_midpoint_is_half_angle():
    a = Quaternion.IDENTITY
    b = Quaternion.from_axis_angle(Vector3.UNIT_Z, 1.2)
    mid = Quaternion.slerp(a, b, 0.5)
    assert_close(mid, (0.0, 0.0, math.sin(0.3), math.cos(0.3)))


def test_slerp_takes_short_path_for_negated_target():
    a = Quaternion.from_axis_angle(Vector3.UNIT_X, 0.3)
    b = Quaternion.from_axis_angle(Vector3.UNIT_X, 0.9)
    neg_b = Quaternion(-b.x, -b.y, -b.z, -b.w)
    r1 = Quaternion.slerp(a, b, 0.5)
    r2 = Quaternion.slerp(a, neg_b, 0.5)
    v = Vector3(0.0, 1.0, 2.0)
    assert_close(Vector3.rotate(v, r1), Vector3.rotate(v, r2))


def test_lerp_quaternion_is_normalized():
    a = Quaternion.IDENTITY
    b = Quaternion.from_axis_angle(Vector3.UNIT_Y, 1.0)
    assert Quaternion.lerp(a, b, 0.3).length() == pytest.approx(1.0)
    assert_close(Quaternion.lerp(a, b, 1.0), b)


def test_vector_constants_relations():
    assert Vector3.reflect(Vector3.UNIT_X, Vector3.UNIT_X) == Vector3.NEG_UNIT_X
    assert Vector2.reflect(Vector2.UNIT_Y, Vector2.UNIT_Y) == Vector2.NEG_UNIT_Y
    assert Vector3.INFINITY.length() == math.inf
    assert Vector3.NEG_INFINITY.length_sq() == math.inf