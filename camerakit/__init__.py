"""3D math, actors and components, scene updates, mesh loading and camera rigs for small game scenes."""

__version__ = "0.1.0"

__all__ = [
    "actor",
    "actors",
    "cameras",
    "collision",
    "mathutil",
    "matrix",
    "mesh",
    "movement",
    "randomness",
    "renderer",
    "scene",
    "spline",
    "vector",
]