"""Mesh assets: textures, vertex arrays and the JSON mesh format that ties them together."""

from __future__ import annotations

import json
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Sequence, Union

from PIL import Image

from camerakit.vector import Vector3

__all__ = [
    "MeshError",
    "Texture",
    "VertexArray",
    "Mesh",
    "TextureProvider",
    "VERTEX_SIZE",
    "DEFAULT_TEXTURE",
]

VERTEX_SIZE = 8
"""Floats per vertex: position (3), normal (3), texture coordinates (2)."""

DEFAULT_TEXTURE = "Assets/Default.png"
"""Texture used when one named by a mesh cannot be found."""

PathLike = Union[str, Path]


class MeshError(Exception):
    """Raised when a mesh or texture asset cannot be loaded."""


@dataclass(frozen=True)
class Texture:
    """Image metadata for a texture loaded from disk."""

    file_name: str
    width: int
    height: int
    channels: int = 3

    @property
    def has_alpha(self) -> bool:
        return self.channels == 4

    @classmethod
    def load(cls, file_name: PathLike) -> Texture:
        """Read the image's size and channel count; raises MeshError on failure."""
        try:
            with Image.open(file_name) as image:
                width, height = image.size
                channels = len(image.getbands())
        except (OSError, ValueError) as exc:
            raise MeshError(f"failed to load image {file_name}: {exc}") from exc
        return cls(str(file_name), width, height, channels)


TextureProvider = Callable[[str], Optional[Texture]]


@dataclass(frozen=True)
class VertexArray:
    """Interleaved vertex data plus triangle indices."""

    vertices: tuple[float, ...]
    indices: tuple[int, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "vertices", tuple(float(v) for v in self.vertices))
        object.__setattr__(self, "indices", tuple(int(i) for i in self.indices))
        if len(self.vertices) % VERTEX_SIZE:
            raise ValueError(f"vertex data length must be a multiple of {VERTEX_SIZE}")

    @property
    def num_verts(self) -> int:
        return len(self.vertices) // VERTEX_SIZE

    @property
    def num_indices(self) -> int:
        return len(self.indices)


def _non_empty_list(doc: dict, key: str, file_name: PathLike, what: str) -> list:
    value = doc.get(key)
    if not isinstance(value, list) or not value:
        raise MeshError(f"mesh {file_name} has no {what}")
    return value


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


@dataclass(frozen=True)
class Mesh:
    """A loaded mesh: its textures, geometry, shader name and bounds."""

    textures: tuple[Optional[Texture], ...]
    vertex_array: VertexArray
    shader_name: str
    radius: float
    spec_power: float = 100.0

    @classmethod
    def load(cls, file_name: PathLike, texture_provider: TextureProvider) -> Mesh:
        """Parse a version 1 mesh file; textures are fetched through ``texture_provider``."""
        try:
            contents = Path(file_name).read_text(encoding="utf-8")
        except OSError as exc:
            raise MeshError(f"mesh file not found: {file_name}") from exc
        try:
            doc = json.loads(contents)
        except json.JSONDecodeError as exc:
            raise MeshError(f"mesh file {file_name} is not valid JSON") from exc
        if not isinstance(doc, dict):
            raise MeshError(f"mesh file {file_name} is not a JSON object")

        if doc.get("version") != 1:
            raise MeshError(f"mesh file {file_name} is not version 1")

        shader_name = doc.get("shader")
        if not isinstance(shader_name, str):
            raise MeshError(f"mesh file {file_name} names no shader")

        texture_names = _non_empty_list(doc, "textures", file_name, "textures")

        spec_power = doc.get("specularPower")
        if not _is_number(spec_power):
            raise MeshError(f"mesh file {file_name} has no specular power")

        textures = []
        for name in texture_names:
            if not isinstance(name, str):
                raise MeshError(f"mesh file {file_name} has an invalid texture name")
            texture = texture_provider(name)
            if texture is None:
                texture = texture_provider(DEFAULT_TEXTURE)
            textures.append(texture)

        raw_vertices = _non_empty_list(doc, "vertices", file_name, "vertices")
        vertices: list[float] = []
        max_length_sq = 0.0
        for vert in raw_vertices:
            if (
                not isinstance(vert, list)
                or len(vert) != VERTEX_SIZE
                or not all(_is_number(v) for v in vert)
            ):
                raise MeshError(f"mesh file {file_name} has an unexpected vertex format")
            position = Vector3(float(vert[0]), float(vert[1]), float(vert[2]))
            max_length_sq = max(max_length_sq, position.length_sq())
            vertices.extend(float(v) for v in vert)

        raw_indices = _non_empty_list(doc, "indices", file_name, "indices")
        indices: list[int] = []
        for triangle in raw_indices:
            if (
                not isinstance(triangle, list)
                or len(triangle) != 3
                or not all(isinstance(i, int) and not isinstance(i, bool) and i >= 0 for i in triangle)
            ):
                raise MeshError(f"mesh file {file_name} has invalid indices")
            indices.extend(triangle)

        return cls(
            textures=tuple(textures),
            vertex_array=VertexArray(tuple(vertices), tuple(indices)),
            shader_name=shader_name,
            radius=math.sqrt(max_length_sq),
            spec_power=float(spec_power),
        )

    def get_texture(self, index: int) -> Optional[Texture]:
        """The texture at ``index``, or None when out of range."""
        if 0 <= index < len(self.textures):
            return self.textures[index]
        return None


def _as_sequence(value: Sequence) -> tuple:
    return tuple(value)