import pytest

from camerakit.actor import ActorState, InputState
from camerakit.actors import (
    KEY_A,
    KEY_D,
    KEY_S,
    KEY_W,
    MOUSE_RIGHT,
    CameraMode,
    CameraRig,
    FollowActor,
    FPSActor,
    OrbitActor,
    PlaneActor,
    SplineActor,
    build_level,
)
from camerakit.mathutil import PI
from camerakit.renderer import Renderer
from camerakit.scene import Scene
from camerakit.vector import Vector3


@pytest.fixture
def scene():
    return Scene(Renderer())


def _rig(scene):
    return CameraRig(
        fps_actor=FPSActor(scene),
        follow_actor=FollowActor(scene),
        orbit_actor=OrbitActor(scene),
        spline_actor=SplineActor(scene),
    )


def test_spline_actor_path(scene):
    actor = SplineActor(scene)
    points = actor.camera_comp.path.control_points
    assert len(points) == 6
    assert tuple(points[0]) == pytest.approx((0.0, 0.0, 0.0))
    assert tuple(points[1]) == pytest.approx((300.0, 300.0, 300.0))
    assert tuple(points[2]) == pytest.approx((600.0, 0.0, 0.0))
    assert actor.camera_comp.paused is False


def test_spline_restart(scene):
    actor = SplineActor(scene)
    cam = actor.camera_comp
    cam.index, cam.t, cam.paused = 3, 0.7, True
    actor.restart_spline()
    assert (cam.index, cam.t, cam.paused) == (1, 0.0, False)


def test_fps_forward_input(scene):
    actor = FPSActor(scene)
    actor.actor_input(InputState(keys={KEY_W}))
    assert tuple(actor.move_comp.velocity) == pytest.approx((400.0, 0.0, 0.0))


def test_fps_opposite_keys_cancel(scene):
    actor = FPSActor(scene)
    actor.actor_input(InputState(keys={KEY_W, KEY_S, KEY_A, KEY_D}))
    assert actor.move_comp.velocity.length() == pytest.approx(0.0)


def test_fps_mouse_turns(scene):
    actor = FPSActor(scene)
    actor.actor_input(InputState(mouse_dx=500, mouse_dy=-500))
    assert actor.move_comp.rot_speed.z == pytest.approx(PI * 8)
    assert actor.camera_comp.pitch_speed == pytest.approx(-PI * 8)


def test_fps_model_follows(scene):
    actor = FPSActor(scene)
    actor.update_actor(0.0)
    assert tuple(actor.fps_model.position) == pytest.approx((10.0, 10.0, -10.0))
    assert actor.fps_model.scale == pytest.approx(0.75)


@pytest.mark.parametrize(
    "keys, dist, delta",
    [({KEY_W}, 500.0, -100.0), ({KEY_S}, 500.0, 80.0), (set(), 350.0, 0.0)],
)
def test_follow_distance(scene, keys, dist, delta):
    actor = FollowActor(scene)
    actor.actor_input(InputState(keys=keys))
    assert actor.camera_comp.horz_dist == dist
    assert actor.camera_comp.horz_delta == delta


def test_follow_turning_sets_camera_yaw(scene):
    actor = FollowActor(scene)
    actor.actor_input(InputState(keys={KEY_D}))
    assert actor.camera_comp.yaw_speed == pytest.approx(PI)
    assert actor.move_comp.rot_speed.z == pytest.approx(PI)


def test_orbit_requires_right_button(scene):
    actor = OrbitActor(scene)
    actor.actor_input(InputState(mouse_dx=500, mouse_dy=500))
    assert actor.camera_comp.yaw_speed == 0.0
    actor.actor_input(InputState(mouse_dx=500, mouse_dy=500, mouse_buttons={MOUSE_RIGHT}))
    assert actor.camera_comp.yaw_speed == pytest.approx(-PI * 8)
    assert actor.camera_comp.pitch_speed == pytest.approx(PI * 8)


def test_plane_actor(scene):
    plane = PlaneActor(scene)
    assert plane.scale == 10.0
    assert plane.mesh_comp in scene.renderer.mesh_components


def test_actor_needs_renderer():
    with pytest.raises(ValueError):
        PlaneActor(Scene())


def test_change_camera_follow(scene):
    rig = _rig(scene)
    rig.change_camera(CameraMode.FOLLOW)
    assert rig.follow_actor.state is ActorState.ACTIVE
    assert rig.fps_actor.state is ActorState.PAUSED
    assert rig.orbit_actor.state is ActorState.PAUSED
    assert rig.spline_actor.state is ActorState.PAUSED
    assert rig.fps_actor.mesh_comp.visible is False
    assert rig.follow_actor.mesh_comp.visible is True


def test_change_camera_unknown_falls_back(scene):
    rig = _rig(scene)
    rig.change_camera("9")
    assert rig.mode is CameraMode.FPS
    assert rig.fps_actor.state is ActorState.ACTIVE
    assert rig.orbit_actor.mesh_comp.visible is False


def test_change_camera_spline_restarts(scene):
    rig = _rig(scene)
    rig.spline_actor.camera_comp.paused = True
    rig.change_camera("4")
    assert rig.spline_actor.state is ActorState.ACTIVE
    assert rig.spline_actor.camera_comp.paused is False


def test_build_level(scene):
    rig = build_level(scene)
    planes = [a for a in scene.actors if isinstance(a, PlaneActor)]
    assert len(planes) == 140
    assert rig.mode is CameraMode.FPS
    assert rig.crosshair.visible is True
    assert tuple(scene.renderer.ambient_light) == pytest.approx((0.2, 0.2, 0.2))
    assert rig.end_sphere is not None and tuple(rig.end_sphere.position) == pytest.approx(
        (10000.0, 0.0, 0.0)
    )


def test_build_level_needs_renderer():
    with pytest.raises(ValueError):
        build_level(Scene())


def test_show_screen_ray_moves_markers(scene):
    rig = build_level(scene)
    rig.show_screen_ray(scene.renderer)
    start, direction = scene.renderer.get_screen_direction()
    assert tuple(rig.start_sphere.position) == pytest.approx(tuple(start), abs=1e-6)
    delta = rig.end_sphere.position - rig.start_sphere.position
    assert tuple(delta.normalized()) == pytest.approx(tuple(direction), abs=1e-6)