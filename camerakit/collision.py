"""Sphere collision based on an actor's position and scaled radius."""

from __future__ import annotations

from camerakit.actor import Actor, Component
from camerakit.vector import Vector3

__all__ = ["CircleComponent", "intersect"]


class CircleComponent(Component):
    """A bounding sphere centred on its owner."""

    def __init__(self, owner: Actor, update_order: int = 100) -> None:
        super().__init__(owner, update_order)

    @property
    def radius(self) -> float:
        return self.owner.radius

    @property
    def center(self) -> Vector3:
        return self.owner.position


def intersect(a: CircleComponent, b: CircleComponent) -> bool:
    """True when the two spheres overlap or touch."""
    dist_sq = (a.center - b.center).length_sq()
    radii = a.radius + b.radius
    return dist_sq <= radii * radii