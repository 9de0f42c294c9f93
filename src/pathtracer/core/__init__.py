"""Core rendering module.

This module contains the fundamental building blocks for ray tracing:

Components:
    ray: Ray data structure, vector utilities and random samplers
    integrator: Color function and supersampling render loop
    progressive: Progressive sample accumulation with progress reporting

The core module handles the Monte Carlo integration: rays leave the camera,
bounce off surfaces according to their materials up to a fixed depth, and
either get absorbed or pick up the sky gradient.
"""

from .ray import (
    Ray,
    Vec3,
    as_vec3,
    cross,
    dot,
    length,
    length_squared,
    make_ray,
    make_rng,
    normalize,
    random_in_unit_disk,
    random_in_unit_sphere,
    ray_at,
    reflect,
    refract,
    schlick_fresnel,
    vec3,
)

# Note: integrator and progressive are NOT imported here to avoid circular imports.
# Import directly from pathtracer.core.integrator or pathtracer.core.progressive.

__all__ = [
    "Ray",
    "Vec3",
    "ray_at",
    "make_ray",
    "make_rng",
    "vec3",
    "as_vec3",
    "length",
    "length_squared",
    "normalize",
    "dot",
    "cross",
    "reflect",
    "refract",
    "schlick_fresnel",
    "random_in_unit_sphere",
    "random_in_unit_disk",
]
