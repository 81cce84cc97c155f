"""Game-specific actors, the camera rig that switches between them, and the demo level."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from camerakit.actor import Actor, ActorState, InputState
from camerakit.cameras import FollowOrbitCamera, FPSCamera, OrbitCamera
from camerakit.mathutil import PI, near_zero
from camerakit.movement import MoveComponent
from camerakit.renderer import MeshComponent, SpriteComponent
from camerakit.spline import Spline, SplineCamera
from camerakit.vector import Quaternion, Vector3

__all__ = [
    "KEY_W",
    "KEY_A",
    "KEY_S",
    "KEY_D",
    "MOUSE_RIGHT",
    "MAX_MOUSE_SPEED",
    "FPSActor",
    "FollowActor",
    "OrbitActor",
    "SplineActor",
    "PlaneActor",
    "CameraMode",
    "CameraRig",
    "build_level",
]

KEY_W = "w"
KEY_A = "a"
KEY_S = "s"
KEY_D = "d"
MOUSE_RIGHT = "right"

MAX_MOUSE_SPEED = 500
"""Relative mouse motion per frame is treated as lying in [-500, 500]."""

_MAX_ANGULAR_SPEED = PI * 8
_MOVE_SPEED = 400.0


def _mouse_speed(delta: int) -> float:
    """Map relative mouse motion to an angular speed."""
    if delta == 0:
        return 0.0
    return delta / MAX_MOUSE_SPEED * _MAX_ANGULAR_SPEED


def _mesh(actor: Actor, file_name: str) -> MeshComponent:
    renderer = getattr(actor.scene, "renderer", None)
    if renderer is None:
        raise ValueError("the actor's scene has no renderer")
    return MeshComponent(actor, renderer.get_mesh(file_name))


class FPSActor(Actor):
    """First-person actor: WASD movement, mouse look and a weapon model that follows the view."""

    MODEL_OFFSET = Vector3(10.0, 10.0, -10.0)

    def __init__(self, scene) -> None:
        super().__init__(scene)
        self.move_comp = MoveComponent(self)
        self.camera_comp = FPSCamera(self)
        self.fps_model = Actor(scene)
        self.fps_model.scale = 0.75
        self.mesh_comp = _mesh(self.fps_model, "Assets/Rifle.gpmesh")

    def update_actor(self, delta_time: float) -> None:
        super().update_actor(delta_time)
        offset = self.MODEL_OFFSET
        model_pos = (
            self.position
            + self.forward * offset.x
            + self.rightward * offset.y
        )
        self.fps_model.position = Vector3(model_pos.x, model_pos.y, model_pos.z + offset.z)
        pitch = Quaternion.from_axis_angle(self.rightward, self.camera_comp.pitch)
        self.fps_model.rotation = Quaternion.concatenate(self.rotation, pitch)

    def actor_input(self, state: InputState) -> None:
        forward_speed = 0.0
        strafe_speed = 0.0
        if state.is_pressed(KEY_W):
            forward_speed += _MOVE_SPEED
        if state.is_pressed(KEY_S):
            forward_speed -= _MOVE_SPEED
        if state.is_pressed(KEY_A):
            strafe_speed -= _MOVE_SPEED
        if state.is_pressed(KEY_D):
            strafe_speed += _MOVE_SPEED

        self.move_comp.set_forward_speed(forward_speed)
        self.move_comp.set_strafe_speed(strafe_speed)
        self.move_comp.set_yaw_speed(_mouse_speed(state.mouse_dx))
        self.camera_comp.pitch_speed = _mouse_speed(state.mouse_dy)

    def set_visible(self, visible: bool) -> None:
        self.mesh_comp.visible = visible


class FollowActor(Actor):
    """A car followed by a spring camera that can also orbit while the right button is held."""

    def __init__(self, scene) -> None:
        super().__init__(scene)
        self.mesh_comp = _mesh(self, "Assets/RacingCar.gpmesh")
        self.position = Vector3(0.0, 0.0, -100.0)
        self.move_comp = MoveComponent(self)
        self.camera_comp = FollowOrbitCamera(self)
        self.camera_comp.snap_to_ideal()

    def actor_input(self, state: InputState) -> None:
        forward_speed = 0.0
        angular_speed = 0.0
        if state.is_pressed(KEY_W):
            forward_speed += _MOVE_SPEED
        if state.is_pressed(KEY_S):
            forward_speed -= _MOVE_SPEED
        if state.is_pressed(KEY_A):
            angular_speed -= PI
        if state.is_pressed(KEY_D):
            angular_speed += PI

        self.move_comp.set_forward_speed(forward_speed)
        self.move_comp.set_yaw_speed(angular_speed)
        camera = self.camera_comp
        camera.yaw_speed = angular_speed

        # The camera trails further behind while moving.
        if near_zero(forward_speed):
            camera.horz_dist = 350.0
            camera.horz_delta = 0.0
        elif forward_speed > 0.0:
            camera.horz_dist = 500.0
            camera.horz_delta = -100.0
        else:
            camera.horz_dist = 500.0
            camera.horz_delta = 80.0

        if state.is_button_down(MOUSE_RIGHT):
            camera.yaw_speed = -_mouse_speed(state.mouse_dx)
            camera.pitch_speed = _mouse_speed(state.mouse_dy)

    def set_visible(self, visible: bool) -> None:
        self.mesh_comp.visible = visible


class OrbitActor(Actor):
    """A car with a camera orbiting it while the right mouse button is held."""

    def __init__(self, scene) -> None:
        super().__init__(scene)
        self.mesh_comp = _mesh(self, "Assets/RacingCar.gpmesh")
        self.position = Vector3(0.0, 0.0, -100.0)
        self.camera_comp = OrbitCamera(self)

    def actor_input(self, state: InputState) -> None:
        if state.is_button_down(MOUSE_RIGHT):
            self.camera_comp.yaw_speed = -_mouse_speed(state.mouse_dx)
            self.camera_comp.pitch_speed = _mouse_speed(state.mouse_dy)

    def set_visible(self, visible: bool) -> None:
        self.mesh_comp.visible = visible


class SplineActor(Actor):
    """Carries a camera along a fixed zig-zag spline."""

    def __init__(self, scene) -> None:
        super().__init__(scene)
        self.camera_comp = SplineCamera(self)
        points = [Vector3.ZERO]
        for i in range(5):
            if i % 2 == 0:
                points.append(Vector3(300.0 * (i + 1), 300.0, 300.0))
            else:
                points.append(Vector3(300.0 * (i + 1), 0.0, 0.0))
        self.camera_comp.path = Spline(points)
        self.camera_comp.paused = False

    def restart_spline(self) -> None:
        self.camera_comp.restart()


class PlaneActor(Actor):
    """A floor or wall tile."""

    def __init__(self, scene) -> None:
        super().__init__(scene)
        self.scale = 10.0
        self.mesh_comp = _mesh(self, "Assets/Plane.gpmesh")


class CameraMode(Enum):
    """Selectable camera modes, keyed by the number keys that choose them."""

    FPS = "1"
    FOLLOW = "2"
    ORBIT = "3"
    SPLINE = "4"


@dataclass
class CameraRig:
    """The four camera actors; exactly one of them is active at a time."""

    fps_actor: FPSActor
    follow_actor: FollowActor
    orbit_actor: OrbitActor
    spline_actor: SplineActor
    crosshair: Optional[SpriteComponent] = None
    start_sphere: Optional[Actor] = None
    end_sphere: Optional[Actor] = None
    mode: CameraMode = CameraMode.FPS

    def change_camera(self, mode) -> None:
        """Activate ``mode``; an unknown mode falls back to the first-person camera."""
        try:
            mode = CameraMode(mode)
        except ValueError:
            mode = CameraMode.FPS

        self.fps_actor.state = ActorState.PAUSED
        self.fps_actor.set_visible(False)
        if self.crosshair is not None:
            self.crosshair.visible = False
        self.follow_actor.state = ActorState.PAUSED
        self.follow_actor.set_visible(False)
        self.orbit_actor.state = ActorState.PAUSED
        self.orbit_actor.set_visible(False)
        self.spline_actor.state = ActorState.PAUSED

        if mode is CameraMode.FPS:
            self.fps_actor.state = ActorState.ACTIVE
            self.fps_actor.set_visible(True)
            if self.crosshair is not None:
                self.crosshair.visible = True
        elif mode is CameraMode.FOLLOW:
            self.follow_actor.state = ActorState.ACTIVE
            self.follow_actor.set_visible(True)
        elif mode is CameraMode.ORBIT:
            self.orbit_actor.state = ActorState.ACTIVE
            self.orbit_actor.set_visible(True)
        else:
            self.spline_actor.state = ActorState.ACTIVE
            self.spline_actor.restart_spline()
        self.mode = mode

    def show_screen_ray(self, renderer) -> None:
        """Place the marker spheres at the near and far ends of the ray through the screen centre."""
        start = renderer.unproject(Vector3(0.0, 0.0, 0.0))
        end = renderer.unproject(Vector3(0.0, 0.0, 0.9))
        if self.start_sphere is not None:
            self.start_sphere.position = start
        if self.end_sphere is not None:
            self.end_sphere.position = end


def _sprite(scene, position: Vector3, texture_name: str, scale: float = 1.0) -> SpriteComponent:
    actor = Actor(scene)
    actor.position = position
    actor.scale = scale
    sprite = SpriteComponent(actor)
    texture = scene.renderer.get_texture(texture_name)
    if texture is not None:
        sprite.set_texture(texture)
    return sprite


def _marker_sphere(scene, texture_index: int) -> Actor:
    sphere = Actor(scene)
    sphere.position = Vector3(10000.0, 0.0, 0.0)
    sphere.scale = 0.25
    mc = _mesh(sphere, "Assets/Sphere.gpmesh")
    mc.texture_index = texture_index
    return sphere


def build_level(scene) -> CameraRig:
    """Populate ``scene`` with the demo level and return its camera rig in first-person mode."""
    renderer = getattr(scene, "renderer", None)
    if renderer is None:
        raise ValueError("the scene has no renderer")

    cube = Actor(scene)
    cube.position = Vector3(200.0, 75.0, 0.0)
    cube.scale = 100.0
    q = Quaternion.from_axis_angle(Vector3.UNIT_Y, -0.5 * PI)
    q = Quaternion.concatenate(q, Quaternion.from_axis_angle(Vector3.UNIT_Z, -0.75 * PI))
    cube.rotation = q
    _mesh(cube, "Assets/Cube.gpmesh")

    sphere = Actor(scene)
    sphere.position = Vector3(200.0, -75.0, 0.0)
    sphere.scale = 3.0
    _mesh(sphere, "Assets/Sphere.gpmesh")

    start = -1250.0
    size = 250.0
    for i in range(10):
        for j in range(10):
            PlaneActor(scene).position = Vector3(start + i * size, start + j * size, -100.0)

    q = Quaternion.from_axis_angle(Vector3.UNIT_X, 0.5 * PI)
    for i in range(10):
        for y in (start - size, -start + size):
            wall = PlaneActor(scene)
            wall.position = Vector3(start + i * size, y, 0.0)
            wall.rotation = q

    q = Quaternion.concatenate(q, Quaternion.from_axis_angle(Vector3.UNIT_Z, 0.5 * PI))
    for i in range(10):
        for x in (start - size, -start + size):
            wall = PlaneActor(scene)
            wall.position = Vector3(x, start + i * size, 0.0)
            wall.rotation = q

    renderer.ambient_light = Vector3(0.2, 0.2, 0.2)
    light = renderer.directional_light
    light.direction = Vector3(-0.250, -0.433, -0.707)
    light.diffuse_color = Vector3(0.78, 0.88, 1.0)
    light.spec_color = Vector3(0.8, 0.8, 0.8)

    _sprite(scene, Vector3(-350.0, -350.0, 0.0), "Assets/HealthBar.png")
    _sprite(scene, Vector3(375.0, -275.0, 0.0), "Assets/Radar.png", 0.75)
    crosshair = _sprite(scene, Vector3.ZERO, "Assets/Crosshair.png", 2.0)

    rig = CameraRig(
        fps_actor=FPSActor(scene),
        follow_actor=FollowActor(scene),
        orbit_actor=OrbitActor(scene),
        spline_actor=SplineActor(scene),
        crosshair=crosshair,
    )
    rig.change_camera(CameraMode.FPS)
    rig.start_sphere = _marker_sphere(scene, 0)
    rig.end_sphere = _marker_sphere(scene, 1)
    return rig