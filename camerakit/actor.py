"""Actors, their components and the input snapshot they react to."""

from __future__ import annotations

import bisect
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Hashable

from camerakit.matrix import Matrix4
from camerakit.vector import Quaternion, Vector3

__all__ = ["ActorState", "InputState", "Component", "Actor"]


class ActorState(Enum):
    """Lifecycle state of an actor."""

    ACTIVE = auto()
    PAUSED = auto()
    DEAD = auto()


@dataclass(frozen=True)
class InputState:
    """One frame of input: held keys, relative mouse motion and held mouse buttons."""

    keys: frozenset = field(default_factory=frozenset)
    mouse_dx: int = 0
    mouse_dy: int = 0
    mouse_buttons: frozenset = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        object.__setattr__(self, "keys", frozenset(self.keys))
        object.__setattr__(self, "mouse_buttons", frozenset(self.mouse_buttons))

    def is_pressed(self, key: Hashable | None) -> bool:
        """True when ``key`` is held; an unbound key (None) is never held."""
        return key is not None and key in self.keys

    def is_button_down(self, button: Hashable) -> bool:
        return button in self.mouse_buttons


class Component:
    """A piece of behaviour attached to an actor; lower update orders run first."""

    def __init__(self, owner: Actor, update_order: int = 100) -> None:
        self.owner = owner
        self._update_order = update_order
        owner.add_component(self)

    @property
    def update_order(self) -> int:
        return self._update_order

    def update(self, delta_time: float) -> None:
        """Advance the component by ``delta_time`` seconds."""

    def process_input(self, state: InputState) -> None:
        """React to the current frame's input."""

    def on_update_world_transform(self) -> None:
        """Called after the owner's world transform has been recomputed."""

    def remove(self) -> None:
        """Detach this component from its owner."""
        self.owner.remove_component(self)


class Actor:
    """An object in a scene with a transform and an ordered list of components."""

    def __init__(self, scene) -> None:
        self.scene = scene
        self.state = ActorState.ACTIVE
        self._position = Vector3.ZERO
        self._scale = 1.0
        self._rotation = Quaternion.IDENTITY
        self._radius = 0.0
        self._world_transform = Matrix4.IDENTITY
        self._recompute_world_transform = True
        self._components: list[Component] = []
        scene.add_actor(self)

    # -- transform -------------------------------------------------------

    @property
    def position(self) -> Vector3:
        return self._position

    @position.setter
    def position(self, value: Vector3) -> None:
        self._position = value
        self._recompute_world_transform = True

    @property
    def scale(self) -> float:
        return self._scale

    @scale.setter
    def scale(self, value: float) -> None:
        self._scale = value
        self._recompute_world_transform = True

    @property
    def rotation(self) -> Quaternion:
        return self._rotation

    @rotation.setter
    def rotation(self, value: Quaternion) -> None:
        self._rotation = value
        self._recompute_world_transform = True

    @property
    def radius(self) -> float:
        """Bounding radius including the actor's scale."""
        return self._radius * self._scale

    @radius.setter
    def radius(self, value: float) -> None:
        self._radius = value
        self._recompute_world_transform = True

    @property
    def world_transform(self) -> Matrix4:
        return self._world_transform

    @property
    def forward(self) -> Vector3:
        return Vector3.rotate(Vector3.UNIT_X, self._rotation)

    @property
    def rightward(self) -> Vector3:
        return Vector3.rotate(Vector3.UNIT_Y, self._rotation)

    @property
    def upward(self) -> Vector3:
        return Vector3.rotate(Vector3.UNIT_Z, self._rotation)

    @property
    def components(self) -> tuple[Component, ...]:
        return tuple(self._components)

    # -- per-frame work --------------------------------------------------

    def process_input(self, state: InputState) -> None:
        """Feed input to components and the actor, only while active."""
        if self.state is ActorState.ACTIVE:
            for component in self._components:
                component.process_input(state)
            self.actor_input(state)

    def actor_input(self, state: InputState) -> None:
        """Actor-specific input handling."""

    def update(self, delta_time: float) -> None:
        """Update components and the actor unless the actor is dead."""
        if self.state in (ActorState.ACTIVE, ActorState.PAUSED):
            self.compute_world_transform()
            self.update_components(delta_time)
            self.update_actor(delta_time)
            self.compute_world_transform()

    def update_components(self, delta_time: float) -> None:
        for component in self._components:
            component.update(delta_time)

    def update_actor(self, delta_time: float) -> None:
        """Actor-specific update."""

    def add_component(self, component: Component) -> None:
        """Insert after every component whose update order is not greater."""
        bisect.insort_right(self._components, component, key=lambda c: c.update_order)

    def remove_component(self, component: Component) -> None:
        if component in self._components:
            self._components.remove(component)

    def compute_world_transform(self) -> None:
        """Rebuild scale, then rotation, then translation, if anything changed."""
        if not self._recompute_world_transform:
            return
        self._recompute_world_transform = False
        self._world_transform = (
            Matrix4.create_uniform_scale(self._scale)
            @ Matrix4.create_from_quaternion(self._rotation)
            @ Matrix4.create_translation(self._position)
        )
        for component in self._components:
            component.on_update_world_transform()

    def destroy(self) -> None:
        """Leave the scene and detach every component."""
        self.scene.remove_actor(self)
        for component in reversed(list(self._components)):
            component.remove()
        self._components.clear()