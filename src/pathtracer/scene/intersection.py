"""Scene-level primitive intersection testing.

A scene is an ordered, immutable sequence of meshes. Each mesh pairs one
sphere with one material, and the index of a mesh in the sequence is its
identity for the rest of the render.

Example:
    >>> from pathtracer.core.ray import Ray, vec3
    >>> from pathtracer.geometry.sphere import Sphere
    >>> from pathtracer.materials import LambertianMaterial
    >>> from pathtracer.scene.intersection import Mesh, intersect_scene
    >>> meshes = (Mesh(Sphere(vec3(0, 0, -1), 0.5), LambertianMaterial(vec3(0.5, 0.5, 0.5))),)
    >>> hit = intersect_scene(Ray(vec3(0, 0, 0), vec3(0, 0, -1)), meshes)
    >>> hit.mesh_index
    0
"""

from collections.abc import Sequence
from dataclasses import dataclass

from pathtracer.core.ray import Ray, Vec3
from pathtracer.geometry.sphere import T_MAX, T_MIN, GeometricHit, Sphere, hit_sphere
from pathtracer.materials import Material


@dataclass(frozen=True)
class Mesh:
    """Immutable pairing of one geometry instance with one material.

    Attributes:
        geometry: The sphere to intersect.
        material: The material applied when the sphere is hit.
    """

    geometry: Sphere
    material: Material


@dataclass(frozen=True)
class MaterialHit:
    """Record of a ray-scene intersection with material information.

    Attributes:
        t: The parameter value along the ray where intersection occurred.
        point: The 3D point where the ray intersected the surface.
        normal: The outward unit surface normal at the intersection point.
        material: The material of the struck mesh.
        mesh_index: Index of the struck mesh in the scene.
    """

    t: float
    point: Vec3
    normal: Vec3
    material: Material
    mesh_index: int


def hit_mesh(ray: Ray, mesh: Mesh, t_min: float = T_MIN, t_max: float = T_MAX) -> GeometricHit | None:
    """Intersect a ray with the geometry of a single mesh."""
    return hit_sphere(ray, mesh.geometry, t_min, t_max)


def intersect_scene(
    ray: Ray,
    meshes: Sequence[Mesh],
    t_min: float = T_MIN,
    t_max: float = T_MAX,
) -> MaterialHit | None:
    """Test ray against all meshes in the scene.

    Iterates through every mesh, tracking the closest hit (smallest t).
    Equal distances keep the first mesh encountered.

    Args:
        ray: The ray to test.
        meshes: The scene meshes.
        t_min: Minimum t value to consider a valid hit.
        t_max: Maximum t value to consider a valid hit.

    Returns:
        The nearest MaterialHit, or None if nothing was hit.
    """
    closest: MaterialHit | None = None
    closest_t = t_max

    for index, mesh in enumerate(meshes):
        rec = hit_mesh(ray, mesh, t_min, closest_t)
        if rec is not None and (closest is None or rec.t < closest.t):
            closest_t = rec.t
            closest = MaterialHit(
                t=rec.t,
                point=rec.point,
                normal=rec.normal,
                material=mesh.material,
                mesh_index=index,
            )

    return closest
