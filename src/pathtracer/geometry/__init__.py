"""Geometry module for shape primitives.

Components:
    sphere: Sphere primitive with ray-sphere intersection

Ray-object intersection follows the pattern:
    hit = hit_sphere(ray, sphere, t_min, t_max)  # GeometricHit or None
"""

from .sphere import T_MAX, T_MIN, GeometricHit, Sphere, hit_sphere

__all__ = [
    "Sphere",
    "GeometricHit",
    "hit_sphere",
    "T_MIN",
    "T_MAX",
]
