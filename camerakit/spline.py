"""Catmull-Rom splines and a camera that travels along one."""

from __future__ import annotations

from dataclasses import dataclass, field

from camerakit.actor import Actor
from camerakit.cameras import CameraComponent
from camerakit.matrix import Matrix4
from camerakit.vector import Vector3

__all__ = ["Spline", "SplineCamera"]


@dataclass
class Spline:
    """Control points of a Catmull-Rom spline; n curve points need n + 2 control points."""

    control_points: list[Vector3] = field(default_factory=list)

    @property
    def num_points(self) -> int:
        return len(self.control_points)

    def compute(self, start_idx: int, t: float) -> Vector3:
        """Position in the segment starting at control point ``start_idx``, for ``t`` in [0, 1]."""
        points = self.control_points
        if start_idx >= len(points):
            return points[-1]
        if start_idx == 0 or start_idx + 2 >= len(points):
            return points[start_idx]
        p0, p1, p2, p3 = points[start_idx - 1:start_idx + 3]
        return 0.5 * (
            (2.0 * p1)
            + (-1.0 * p0 + p2) * t
            + (2.0 * p0 - 5.0 * p1 + 4.0 * p2 - p3) * t * t
            + (-1.0 * p0 + 3.0 * p1 - 3.0 * p2 + p3) * t * t * t
        )


class SplineCamera(CameraComponent):
    """Camera that moves along a spline, looking slightly ahead along it."""

    def __init__(self, owner: Actor, update_order: int = 200) -> None:
        super().__init__(owner, update_order)
        self.path = Spline()
        self.index = 1
        self.t = 0.0
        self.speed = 0.5
        self.paused = True

    def update(self, delta_time: float) -> None:
        super().update(delta_time)
        if not self.paused:
            self.t += self.speed * delta_time
            # Assumes at most one control point is passed per frame.
            if self.t >= 1.0:
                if self.index < self.path.num_points - 3:
                    self.index += 1
                    self.t -= 1.0
                else:
                    self.paused = True

        camera_pos = self.path.compute(self.index, self.t)
        target = self.path.compute(self.index, self.t + 0.01)
        self.set_view_matrix(Matrix4.create_look_at(camera_pos, target, Vector3.UNIT_Z))

    def restart(self) -> None:
        """Go back to the start of the path and resume."""
        self.index = 1
        self.t = 0.0
        self.paused = False