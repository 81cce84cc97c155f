"""Physics-driven movement and keyboard-driven force input."""

from __future__ import annotations

from typing import Hashable

from camerakit.actor import Actor, Component, InputState
from camerakit.mathutil import near_zero
from camerakit.vector import Quaternion, Vector3

__all__ = ["MoveComponent", "InputComponent"]


class MoveComponent(Component):
    """Moves and turns its owner from velocity, angular velocity, forces and resistance."""

    def __init__(self, owner: Actor, update_order: int = 100) -> None:
        super().__init__(owner, update_order)
        self.mass = 1.0
        self.move_resist = 0.0
        self.rot_resist = 0.0
        self.velocity = Vector3.ZERO
        self.rot_speed = Vector3.ZERO
        self.force = Vector3.ZERO
        self.rot_force = Vector3.ZERO
        self._forward_speed = 0.0
        self._strafe_speed = 0.0

    def update(self, delta_time: float) -> None:
        owner = self.owner
        if not near_zero(self.velocity.length()):
            owner.position = owner.position + self.velocity * delta_time
        if not near_zero(self.rot_speed.length()):
            axis = self.rot_speed.normalized()
            angle = delta_time * self.rot_speed.length()
            increment = Quaternion.from_axis_angle(axis, angle)
            owner.rotation = Quaternion.concatenate(owner.rotation, increment)
        self.velocity = self.velocity + self.accel() * delta_time
        self.rot_speed = self.rot_speed + self.rot_accel() * delta_time

    def accel(self) -> Vector3:
        """Linear acceleration from force and resistance (zero for a massless body)."""
        if near_zero(self.mass):
            return Vector3.ZERO
        inv_mass = 1.0 / self.mass
        return self.force * inv_mass - self.velocity * (self.move_resist * 0.01 * inv_mass)

    def rot_accel(self) -> Vector3:
        """Angular acceleration from torque and resistance (zero without inertia)."""
        imoment = self.imoment()
        if near_zero(imoment):
            return Vector3.ZERO
        inv = 1.0 / imoment
        return self.torque() * inv - self.rot_speed * (self.owner.radius * self.rot_resist * inv)

    def imoment(self) -> float:
        """Moment of inertia of a uniform disc with the owner's radius."""
        radius = self.owner.radius
        return 0.5 * self.mass * radius * radius

    def torque(self) -> Vector3:
        return self.rot_force * self.owner.radius

    def set_forward_speed(self, speed: float) -> None:
        """Set the speed along the owner's forward axis."""
        self._forward_speed = speed
        self._apply_planar_speed()

    def set_strafe_speed(self, speed: float) -> None:
        """Set the speed along the owner's rightward axis."""
        self._strafe_speed = speed
        self._apply_planar_speed()

    def set_yaw_speed(self, speed: float) -> None:
        """Set the angular speed about the world up axis (radians per second)."""
        self.rot_speed = Vector3.UNIT_Z * speed

    def _apply_planar_speed(self) -> None:
        owner = self.owner
        self.velocity = owner.forward * self._forward_speed + owner.rightward * self._strafe_speed


class InputComponent(MoveComponent):
    """Turns held keys into forward, strafe and turning forces."""

    def __init__(
        self,
        owner: Actor,
        update_order: int = 100,
        *,
        forward_key: Hashable | None = None,
        backward_key: Hashable | None = None,
        right_strafe_key: Hashable | None = None,
        left_strafe_key: Hashable | None = None,
        clockwise_key: Hashable | None = None,
        counter_clockwise_key: Hashable | None = None,
        max_forward_force: float = 0.0,
        max_strafe_force: float = 0.0,
        max_rot_force: float = 0.0,
    ) -> None:
        super().__init__(owner, update_order)
        self.forward_key = forward_key
        self.backward_key = backward_key
        self.right_strafe_key = right_strafe_key
        self.left_strafe_key = left_strafe_key
        self.clockwise_key = clockwise_key
        self.counter_clockwise_key = counter_clockwise_key
        self.max_forward_force = max_forward_force
        self.max_strafe_force = max_strafe_force
        self.max_rot_force = max_rot_force

    def process_input(self, state: InputState) -> None:
        forward = 0.0
        if state.is_pressed(self.forward_key):
            forward += self.max_forward_force
        elif state.is_pressed(self.backward_key):
            forward -= self.max_forward_force

        strafe = 0.0
        if state.is_pressed(self.right_strafe_key):
            strafe += self.max_strafe_force
        elif state.is_pressed(self.left_strafe_key):
            strafe -= self.max_strafe_force

        # Positive angles turn counter-clockwise.
        rot = 0.0
        if state.is_pressed(self.clockwise_key):
            rot -= self.max_rot_force
        elif state.is_pressed(self.counter_clockwise_key):
            rot += self.max_rot_force

        owner = self.owner
        self.force = owner.forward * forward + owner.rightward * strafe
        self.rot_force = Vector3.UNIT_Z * rot