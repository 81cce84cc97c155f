import math

import pytest

from camerakit.matrix import Matrix3, Matrix4
from camerakit.vector import Quaternion, Vector2, Vector3


def assert_close_vec(actual, expected, tol=1e-6):
    assert tuple(actual) == pytest.approx(tuple(expected), abs=tol)


def assert_close_mat(actual, expected, tol=1e-6):
    flat_actual = [value for row in actual.mat for value in row]
    flat_expected = [value for row in expected.mat for value in row]
    assert flat_actual == pytest.approx(flat_expected, abs=tol)


def test_default_matrix_is_identity():
    assert Matrix4() == Matrix4.IDENTITY
    assert Matrix4().mat[2][2] == 1.0
    assert Matrix4().mat[0][3] == 0.0
    assert Matrix3() == Matrix3.IDENTITY


def test_wrong_shape_raises():
    with pytest.raises(ValueError):
        Matrix4(((1.0, 0.0), (0.0, 1.0)))
    with pytest.raises(ValueError):
        Matrix3(((1.0, 0.0, 0.0),) * 2)


def test_identity_is_neutral_for_multiplication():
    m = Matrix4.create_translation(Vector3(1.0, 2.0, 3.0)) @ Matrix4.create_rotation_x(0.3)
    assert_close_mat(m @ Matrix4.IDENTITY, m)
    assert_close_mat(Matrix4.IDENTITY @ m, m)


def test_translation_round_trip():
    trans = Vector3(5.0, -2.0, 7.5)
    m = Matrix4.create_translation(trans)
    assert m.translation() == trans
    assert_close_vec(Vector3.transform(Vector3.ZERO, m), trans)


def test_scale_extraction():
    m = Matrix4.create_scale(2.0, 3.0, 4.0)
    assert tuple(m.scale()) == pytest.approx((2.0, 3.0, 4.0), abs=1e-6)


def test_scale_overloads_agree():
    assert Matrix4.create_scale(Vector3(2.0, 3.0, 4.0)) == Matrix4.create_scale(2.0, 3.0, 4.0)
    assert Matrix4.create_scale(5.0) == Matrix4.create_uniform_scale(5.0)
    with pytest.raises(ValueError):
        Matrix4.create_scale(1.0, 2.0)


def test_rotation_z_quarter_turn_maps_x_to_y():
    m = Matrix4.create_rotation_z(math.pi / 2)
    assert_close_vec(Vector3.transform(Vector3.UNIT_X, m), (0.0, 1.0, 0.0))


def test_rotation_x_and_y_preserve_length():
    v = Vector3(1.0, 2.0, 3.0)
    for m in (Matrix4.create_rotation_x(0.7), Matrix4.create_rotation_y(-1.1)):
        assert math.isclose(Vector3.transform(v, m).length(), v.length(), rel_tol=1e-9)


def test_quaternion_matrix_matches_rotate():
    q = Quaternion.from_axis_angle(Vector3(1.0, 2.0, 2.0).normalized(), 0.9)
    m = Matrix4.create_from_quaternion(q)
    v = Vector3(3.0, -1.0, 0.5)
    assert_close_vec(Vector3.transform(v, m, 0.0), Vector3.rotate(v, q))


def test_inverse_round_trip():
    m = (
        Matrix4.create_scale(2.0, 3.0, 0.5)
        @ Matrix4.create_from_quaternion(Quaternion.from_axis_angle(Vector3.UNIT_Z, 0.4))
        @ Matrix4.create_translation(Vector3(10.0, -4.0, 2.0))
    )
    assert_close_mat(m @ m.inverted(), Matrix4.IDENTITY)
    assert_close_mat(m.inverted() @ m, Matrix4.IDENTITY)


def test_inverse_of_translation_negates_it():
    m = Matrix4.create_translation(Vector3(1.0, 2.0, 3.0)).inverted()
    assert_close_vec(m.translation(), (-1.0, -2.0, -3.0))


def test_singular_inverse_raises():
    with pytest.raises(ValueError):
        Matrix4.create_scale(1.0, 0.0, 1.0).inverted()


def test_axes_are_normalized_rows():
    m = Matrix4.create_scale(4.0, 5.0, 6.0)
    assert_close_vec(m.x_axis(), (1.0, 0.0, 0.0))
    assert_close_vec(m.y_axis(), (0.0, 1.0, 0.0))
    assert_close_vec(m.z_axis(), (0.0, 0.0, 1.0))


def test_look_at_moves_eye_to_origin_and_target_onto_z():
    eye = Vector3(10.0, 5.0, 3.0)
    target = Vector3(20.0, 5.0, 3.0)
    view = Matrix4.create_look_at(eye, target, Vector3.UNIT_Z)
    assert_close_vec(Vector3.transform(eye, view), (0.0, 0.0, 0.0))
    assert_close_vec(Vector3.transform(target, view), (0.0, 0.0, 10.0))


def test_perspective_maps_near_and_far_planes():
    near, far = 25.0, 10000.0
    proj = Matrix4.create_perspective_fov(math.radians(70.0), 1024.0, 768.0, near, far)
    at_near = Vector3.transform_with_persp_div(Vector3(0.0, 0.0, near), proj)
    at_far = Vector3.transform_with_persp_div(Vector3(0.0, 0.0, far), proj)
    assert math.isclose(at_near.z, 0.0, abs_tol=1e-9)
    assert math.isclose(at_far.z, 1.0, abs_tol=1e-9)


def test_ortho_maps_corner_to_unit_cube():
    m = Matrix4.create_ortho(200.0, 100.0, 1.0, 50.0)
    assert_close_vec(Vector3.transform(Vector3(100.0, 50.0, 50.0), m), (1.0, 1.0, 1.0))


def test_simple_view_proj_maps_half_screen_to_one():
    m = Matrix4.create_simple_view_proj(1024.0, 768.0)
    result = Vector3.transform(Vector3(512.0, -384.0, 0.0), m)
    assert_close_vec(result, (1.0, -1.0, 1.0))


def test_matrix3_translation_and_scale():
    t = Matrix3.create_translation(Vector2(3.0, -4.0))
    assert_close_vec(Vector2.transform(Vector2(1.0, 1.0), t), (4.0, -3.0))
    s = Matrix3.create_scale(2.0, 5.0)
    assert_close_vec(Vector2.transform(Vector2(1.0, 1.0), s), (2.0, 5.0))
    assert Matrix3.create_scale(Vector2(2.0, 5.0)) == s
    assert Matrix3.create_scale(3.0) == Matrix3.create_scale(3.0, 3.0)


def test_matrix3_rotation_quarter_turn_and_product():
    r = Matrix3.create_rotation(math.pi / 2)
    assert_close_vec(Vector2.transform(Vector2.UNIT_X, r), (0.0, 1.0))
    full = r @ r @ r @ r
    assert_close_mat(full, Matrix3.IDENTITY)