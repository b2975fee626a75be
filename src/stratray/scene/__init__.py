"""Scene module for scene management and ray queries.

Components:
    scene: Scene container with nearest-hit resolution and radiance entry point
    config: Literal scene data (SceneConfig) and geometry/material factories
    presets: Ready-made scenes

The scene is read-only while rendering; nearest-hit resolution is a linear
scan over every (geometry, material) pair.
"""

from .config import SceneConfig, make_geometry, make_material
from .presets import create_sphere_row_scene
from .scene import Scene, SceneObject

__all__ = [
    "Scene",
    "SceneObject",
    "SceneConfig",
    "make_geometry",
    "make_material",
    "create_sphere_row_scene",
]
