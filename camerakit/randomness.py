"""A seedable source of random scalars and vectors."""

from __future__ import annotations

import random

from camerakit.vector import Vector2, Vector3

__all__ = ["RandomSource"]


class RandomSource:
    """Mersenne Twister backed generator; unseeded instances draw from system entropy."""

    def __init__(self, seed: int | None = None) -> None:
        self._rng = random.Random()
        self.seed(seed)

    def seed(self, seed: int | None) -> None:
        """Reseed the generator; ``None`` uses system entropy."""
        self._rng.seed(seed)

    def get_float(self) -> float:
        """A float in [0.0, 1.0)."""
        return self.get_float_range(0.0, 1.0)

    def get_float_range(self, low: float, high: float) -> float:
        """A float in [low, high)."""
        return low + (high - low) * self._rng.random()

    def get_int_range(self, low: int, high: int) -> int:
        """An int in the closed range [low, high]."""
        if low > high:
            raise ValueError(f"empty range: {low} > {high}")
        return self._rng.randint(low, high)

    def get_vector2(self, low: Vector2, high: Vector2) -> Vector2:
        """A vector inside the box spanned by ``low`` and ``high``."""
        r = Vector2(self.get_float(), self.get_float())
        return low + (high - low) * r

    def get_vector3(self, low: Vector3, high: Vector3) -> Vector3:
        """A vector inside the box spanned by ``low`` and ``high``."""
        r = Vector3(self.get_float(), self.get_float(), self.get_float())
        return low + (high - low) * r