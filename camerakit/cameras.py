"""Camera components that turn an actor's state into a view matrix."""

from __future__ import annotations

from typing import Optional

from camerakit.actor import Actor, Component
from camerakit.mathutil import PI, clamp
from camerakit.matrix import Matrix4
from camerakit.vector import Quaternion, Vector3

__all__ = [
    "CameraComponent",
    "FPSCamera",
    "FollowCamera",
    "FollowOrbitCamera",
    "OrbitCamera",
]


class CameraComponent(Component):
    """Base class for cameras; publishes its view matrix to the scene's renderer."""

    def __init__(self, owner: Actor, update_order: int = 200) -> None:
        super().__init__(owner, update_order)
        self.view: Optional[Matrix4] = None

    def set_view_matrix(self, view: Matrix4) -> None:
        """Remember ``view`` and hand it to the renderer, if the scene has one."""
        self.view = view
        renderer = getattr(self.owner.scene, "renderer", None)
        if renderer is not None:
            renderer.set_view_matrix(view)


class FPSCamera(CameraComponent):
    """First-person camera at the owner's position, with a clamped pitch."""

    def __init__(self, owner: Actor, update_order: int = 200) -> None:
        super().__init__(owner, update_order)
        self.pitch_speed = 0.0
        self.max_pitch = PI / 3.0
        self.pitch = 0.0

    def update(self, delta_time: float) -> None:
        super().update(delta_time)
        owner = self.owner
        camera_pos = owner.position
        self.pitch = clamp(self.pitch + self.pitch_speed * delta_time, -self.max_pitch, self.max_pitch)
        q = Quaternion.from_axis_angle(owner.rightward, self.pitch)
        view_forward = Vector3.rotate(owner.forward, q)
        target = camera_pos + view_forward * 100.0
        up = Vector3.rotate(Vector3.UNIT_Z, q)
        self.set_view_matrix(Matrix4.create_look_at(camera_pos, target, up))


def _spring_step(
    actual: Vector3, velocity: Vector3, ideal: Vector3, spring: float, delta_time: float
) -> tuple[Vector3, Vector3]:
    """Advance a critically damped spring pulling ``actual`` toward ``ideal``."""
    dampening = 2.0 * spring ** 0.5
    diff = actual - ideal
    accel = -spring * diff - dampening * velocity
    velocity = velocity + accel * delta_time
    return actual + velocity * delta_time, velocity


class FollowCamera(CameraComponent):
    """Third-person camera that trails behind and above its owner on a spring."""

    def __init__(self, owner: Actor, update_order: int = 200) -> None:
        super().__init__(owner, update_order)
        self.horz_dist = 350.0
        self.vert_dist = 150.0
        self.target_dist = 100.0
        self.spring_constant = 64.0
        self.actual_pos = Vector3.ZERO
        self.velocity = Vector3.ZERO

    def _target(self) -> Vector3:
        return self.owner.position + self.owner.forward * self.target_dist

    def update(self, delta_time: float) -> None:
        super().update(delta_time)
        self.actual_pos, self.velocity = _spring_step(
            self.actual_pos, self.velocity, self.compute_camera_pos(),
            self.spring_constant, delta_time,
        )
        self.set_view_matrix(
            Matrix4.create_look_at(self.actual_pos, self._target(), Vector3.UNIT_Z)
        )

    def snap_to_ideal(self) -> None:
        """Jump straight to the ideal position and stop the spring."""
        self.actual_pos = self.compute_camera_pos()
        self.velocity = Vector3.ZERO
        self.set_view_matrix(
            Matrix4.create_look_at(self.actual_pos, self._target(), Vector3.UNIT_Z)
        )

    def compute_camera_pos(self) -> Vector3:
        """Ideal position: behind the owner by the horizontal and above by the vertical distance."""
        owner = self.owner
        return owner.position - owner.forward * self.horz_dist + Vector3.UNIT_Z * self.vert_dist


class FollowOrbitCamera(CameraComponent):
    """A spring-following camera that can also orbit its owner by yaw and pitch."""

    def __init__(self, owner: Actor, update_order: int = 200) -> None:
        super().__init__(owner, update_order)
        self.horz_dist = 350.0
        self.horz_delta = 0.0
        self.vert_dist = 150.0
        self.target_dist = 100.0
        self.spring_constant = 64.0
        self.offset = Vector3(-self.horz_dist, 0.0, self.vert_dist)
        self.up = Vector3.UNIT_Z
        self.pitch_speed = 0.0
        self.yaw_speed = 0.0
        self.actual_pos = Vector3.ZERO
        self.velocity = Vector3.ZERO

    def _target(self) -> Vector3:
        return self.owner.position + self.owner.forward * self.target_dist

    def update(self, delta_time: float) -> None:
        super().update(delta_time)
        yaw = Quaternion.from_axis_angle(Vector3.UNIT_Z, self.yaw_speed * delta_time)
        self.offset = Vector3.rotate(self.offset, yaw)
        self.up = Vector3.rotate(self.up, yaw)

        forward = (-1.0 * self.offset).normalized()
        right = Vector3.cross(self.up, forward).normalized()
        pitch = Quaternion.from_axis_angle(right, self.pitch_speed * delta_time)
        self.offset = Vector3.rotate(self.offset, pitch)
        self.up = Vector3.rotate(self.up, pitch)

        owner = self.owner
        ideal = owner.position + self.offset + owner.forward * self.horz_delta
        self.actual_pos, self.velocity = _spring_step(
            self.actual_pos, self.velocity, ideal, self.spring_constant, delta_time
        )
        self.set_view_matrix(Matrix4.create_look_at(self.actual_pos, self._target(), self.up))

    def snap_to_ideal(self) -> None:
        """Jump straight to the resting position and stop the spring."""
        self.actual_pos = self.compute_camera_pos()
        self.velocity = Vector3.ZERO
        self.set_view_matrix(
            Matrix4.create_look_at(self.actual_pos, self._target(), Vector3.UNIT_Z)
        )

    def compute_camera_pos(self) -> Vector3:
        """Resting position: behind and above the owner."""
        owner = self.owner
        return owner.position - owner.forward * self.horz_dist + Vector3.UNIT_Z * self.vert_dist


class OrbitCamera(CameraComponent):
    """Camera circling its owner at a fixed offset, turned by yaw and pitch speeds."""

    def __init__(self, owner: Actor, update_order: int = 200) -> None:
        super().__init__(owner, update_order)
        self.offset = Vector3(-400.0, 0.0, 0.0)
        self.up = Vector3.UNIT_Z
        self.pitch_speed = 0.0
        self.yaw_speed = 0.0

    def update(self, delta_time: float) -> None:
        super().update(delta_time)
        yaw = Quaternion.from_axis_angle(Vector3.UNIT_Z, self.yaw_speed * delta_time)
        self.offset = Vector3.rotate(self.offset, yaw)
        self.up = Vector3.rotate(self.up, yaw)

        forward = (-1.0 * self.offset).normalized()
        right = Vector3.cross(self.up, forward).normalized()
        pitch = Quaternion.from_axis_angle(right, self.pitch_speed * delta_time)
        self.offset = Vector3.rotate(self.offset, pitch)
        self.up = Vector3.rotate(self.up, pitch)

        target = self.owner.position
        camera_pos = target + self.offset
        self.set_view_matrix(Matrix4.create_look_at(camera_pos, target, self.up))