"""Scene module for scene management and hit records.

Components:
    intersection: Mesh and MaterialHit structures, nearest-hit queries
    manager: Scene manager coordinating spheres and materials
    presets: Built-in scenes

A scene is assembled with a SceneManager, then frozen into a tuple of
meshes that stays read-only for the whole render.
"""

from .intersection import MaterialHit, Mesh, hit_mesh, intersect_scene
from .manager import (
    MaterialInfo,
    MaterialType,
    SceneConfig,
    SceneManager,
    SphereInfo,
    get_material_type,
    material_from_dict,
    material_to_dict,
)
from .presets import (
    create_demo_scene,
    create_single_sphere_scene,
    create_two_balls_scene,
)

__all__ = [
    # Intersection module
    "Mesh",
    "MaterialHit",
    "hit_mesh",
    "intersect_scene",
    # Manager module
    "SceneManager",
    "MaterialType",
    "MaterialInfo",
    "SphereInfo",
    "SceneConfig",
    "get_material_type",
    "material_from_dict",
    "material_to_dict",
    # Presets
    "create_demo_scene",
    "create_single_sphere_scene",
    "create_two_balls_scene",
]
