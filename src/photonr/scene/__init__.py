"""Scene module for scene representation and ray-scene queries.

Components:
    world: Entity and World containers with nearest-hit queries
    description: Scene descriptions (named materials + shapes), JSON loading
        and World construction

The World is built once from a description and is read-only while rendering.
"""

from .description import (
    SceneDescription,
    SceneError,
    SphereShape,
    build_world,
    detect_encoding,
    load_scene,
    material_from_dict,
    scene_from_dict,
    shape_from_dict,
)
from .world import MAX_TOI, TOI_EPSILON, Entity, World

__all__ = [
    # World
    "Entity",
    "World",
    "MAX_TOI",
    "TOI_EPSILON",
    # Descriptions
    "SceneDescription",
    "SphereShape",
    "SceneError",
    "scene_from_dict",
    "material_from_dict",
    "shape_from_dict",
    "detect_encoding",
    "load_scene",
    "build_world",
]
