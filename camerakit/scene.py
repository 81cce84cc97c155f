"""The scene: owns actors and drives their per-frame input and update."""

from __future__ import annotations

from camerakit.actor import Actor, ActorState, InputState

__all__ = ["Scene", "frame_delta", "MIN_FRAME_MS", "MAX_FRAME_DELTA"]

MIN_FRAME_MS = 16
MAX_FRAME_DELTA = 0.05


def frame_delta(elapsed_ms: float) -> float:
    """Seconds for a frame that took ``elapsed_ms``, capped at MAX_FRAME_DELTA."""
    if elapsed_ms < 0:
        raise ValueError("elapsed time cannot be negative")
    return min(elapsed_ms / 1000.0, MAX_FRAME_DELTA)


class Scene:
    """A collection of actors; actors created while updating wait until the frame ends."""

    def __init__(self, renderer=None) -> None:
        self.renderer = renderer
        self.running = True
        self._actors: list[Actor] = []
        self._pending: list[Actor] = []
        self._updating = False

    @property
    def actors(self) -> tuple[Actor, ...]:
        return tuple(self._actors)

    @property
    def pending_actors(self) -> tuple[Actor, ...]:
        return tuple(self._pending)

    def add_actor(self, actor: Actor) -> None:
        if self._updating:
            self._pending.append(actor)
        else:
            self._actors.append(actor)

    def remove_actor(self, actor: Actor) -> None:
        """Remove ``actor`` by swapping it with the last entry; unknown actors are ignored."""
        for group in (self._pending, self._actors):
            if actor in group:
                index = group.index(actor)
                group[index] = group[-1]
                group.pop()

    def process_input(self, state: InputState) -> None:
        self._updating = True
        try:
            for actor in self._actors:
                actor.process_input(state)
        finally:
            self._updating = False

    def update(self, delta_time: float) -> None:
        """Update all actors, admit pending ones and destroy the dead."""
        self._updating = True
        try:
            for actor in self._actors:
                actor.update(delta_time)
        finally:
            self._updating = False

        for pending in self._pending:
            pending.compute_world_transform()
            self._actors.append(pending)
        self._pending.clear()

        for actor in [a for a in self._actors if a.state is ActorState.DEAD]:
            actor.destroy()

    def clear(self) -> None:
        """Destroy every actor."""
        for group in (self._actors, self._pending):
            while group:
                actor = group[-1]
                actor.destroy()
                if group and group[-1] is actor:
                    group.pop()