"""Scene rendering state: cached assets, drawable components, view and lighting."""

from __future__ import annotations

import bisect
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from camerakit.actor import Actor, Component
from camerakit.mathutil import to_radians
from camerakit.matrix import Matrix4
from camerakit.mesh import Mesh, MeshError, Texture
from camerakit.vector import Vector3

__all__ = [
    "DirectionalLight",
    "Renderer",
    "MeshComponent",
    "SpriteComponent",
    "NEAR_PLANE",
    "FAR_PLANE",
    "FIELD_OF_VIEW",
]

NEAR_PLANE = 25.0
FAR_PLANE = 10000.0
FIELD_OF_VIEW = 70.0

PathLike = Union[str, Path]


@dataclass
class DirectionalLight:
    """A light shining in one direction everywhere."""

    direction: Vector3 = field(default=Vector3.ZERO)
    diffuse_color: Vector3 = field(default=Vector3.ZERO)
    spec_color: Vector3 = field(default=Vector3.ZERO)


class Renderer:
    """Holds textures, meshes, drawable components and the 3D view/projection."""

    def __init__(self, screen_width: float = 1024.0, screen_height: float = 768.0) -> None:
        self.screen_width = float(screen_width)
        self.screen_height = float(screen_height)
        self.view = Matrix4.create_look_at(Vector3.ZERO, Vector3.UNIT_X, Vector3.UNIT_Z)
        self.projection = Matrix4.create_perspective_fov(
            to_radians(FIELD_OF_VIEW), self.screen_width, self.screen_height, NEAR_PLANE, FAR_PLANE
        )
        self.sprite_view_proj = Matrix4.create_simple_view_proj(self.screen_width, self.screen_height)
        self.ambient_light = Vector3.ZERO
        self.directional_light = DirectionalLight()
        self._textures: dict[str, Texture] = {}
        self._meshes: dict[str, Mesh] = {}
        self._sprites: list[SpriteComponent] = []
        self._mesh_comps: list[MeshComponent] = []

    @property
    def sprites(self) -> tuple[SpriteComponent, ...]:
        return tuple(self._sprites)

    @property
    def mesh_components(self) -> tuple[MeshComponent, ...]:
        return tuple(self._mesh_comps)

    def add_sprite(self, sprite: SpriteComponent) -> None:
        """Insert after every sprite whose draw order is not greater."""
        bisect.insort_right(self._sprites, sprite, key=lambda s: s.draw_order)

    def remove_sprite(self, sprite: SpriteComponent) -> None:
        self._sprites.remove(sprite)

    def add_mesh_comp(self, mesh_comp: MeshComponent) -> None:
        self._mesh_comps.append(mesh_comp)

    def remove_mesh_comp(self, mesh_comp: MeshComponent) -> None:
        self._mesh_comps.remove(mesh_comp)

    def get_texture(self, file_name: PathLike) -> Optional[Texture]:
        """The cached texture, loading it on first use; None when it cannot be loaded."""
        key = str(file_name)
        texture = self._textures.get(key)
        if texture is None:
            try:
                texture = Texture.load(key)
            except MeshError:
                return None
            self._textures[key] = texture
        return texture

    def get_mesh(self, file_name: PathLike) -> Optional[Mesh]:
        """The cached mesh, loading it on first use; None when it cannot be loaded."""
        key = str(file_name)
        mesh = self._meshes.get(key)
        if mesh is None:
            try:
                mesh = Mesh.load(key, self.get_texture)
            except MeshError:
                return None
            self._meshes[key] = mesh
        return mesh

    def set_view_matrix(self, view: Matrix4) -> None:
        self.view = view

    def camera_position(self) -> Vector3:
        """World position of the camera, from the inverse of the view matrix."""
        return self.view.inverted().translation()

    def unproject(self, screen_point: Vector3) -> Vector3:
        """Map a screen point (x, y centred on the screen, z in [0, 1)) to world space."""
        device = Vector3(
            screen_point.x / (self.screen_width * 0.5),
            screen_point.y / (self.screen_height * 0.5),
            screen_point.z,
        )
        unprojection = (self.view @ self.projection).inverted()
        return Vector3.transform_with_persp_div(device, unprojection)

    def get_screen_direction(self) -> tuple[Vector3, Vector3]:
        """Start point on the near plane at the screen centre and the unit view direction."""
        start = self.unproject(Vector3(0.0, 0.0, 0.0))
        end = self.unproject(Vector3(0.0, 0.0, 0.9))
        return start, (end - start).normalized()

    def visible_meshes(self) -> list[MeshComponent]:
        """Mesh components to draw this frame, in registration order."""
        return [mc for mc in self._mesh_comps if mc.visible]

    def visible_sprites(self) -> list[SpriteComponent]:
        """Sprite components to draw this frame, in draw order."""
        return [sprite for sprite in self._sprites if sprite.visible]

    def unload_data(self) -> None:
        """Forget every cached texture and mesh."""
        self._textures.clear()
        self._meshes.clear()


def _renderer_of(owner: Actor) -> Renderer:
    renderer = getattr(owner.scene, "renderer", None)
    if renderer is None:
        raise ValueError("the owner's scene has no renderer")
    return renderer


class MeshComponent(Component):
    """Draws a mesh with its owner's world transform."""

    def __init__(
        self, owner: Actor, mesh: Optional[Mesh] = None, update_order: int = 100
    ) -> None:
        self._renderer = _renderer_of(owner)
        super().__init__(owner, update_order)
        self.mesh = mesh
        self.texture_index = 0
        self.visible = True
        self._renderer.add_mesh_comp(self)
        self._registered = True

    @property
    def texture(self) -> Optional[Texture]:
        """The mesh texture selected by ``texture_index``."""
        return self.mesh.get_texture(self.texture_index) if self.mesh else None

    def world_transform(self) -> Matrix4:
        return self.owner.world_transform

    def remove(self) -> None:
        if self._registered:
            self._renderer.remove_mesh_comp(self)
            self._registered = False
        super().remove()


class SpriteComponent(Component):
    """Draws a textured quad; lower draw orders are drawn first (further back)."""

    def __init__(self, owner: Actor, draw_order: int = 100, update_order: int = 100) -> None:
        self._renderer = _renderer_of(owner)
        super().__init__(owner, update_order)
        self._draw_order = draw_order
        self.texture: Optional[Texture] = None
        self.tex_width = 0
        self.tex_height = 0
        self.visible = True
        self._renderer.add_sprite(self)
        self._registered = True

    @property
    def draw_order(self) -> int:
        return self._draw_order

    def set_texture(self, texture: Texture) -> None:
        """Use ``texture`` and size the owner's radius to half the mean side length."""
        self.texture = texture
        self.tex_width = texture.width
        self.tex_height = texture.height
        self.owner.radius = (self.tex_width + self.tex_height) * 0.25

    def world_transform(self) -> Matrix4:
        """The quad scaled to the texture size, then placed by the owner's transform."""
        scale = Matrix4.create_scale(float(self.tex_width), float(self.tex_height), 1.0)
        return scale @ self.owner.world_transform

    def remove(self) -> None:
        if self._registered:
            self._renderer.remove_sprite(self)
            self._registered = False
        super().remove()