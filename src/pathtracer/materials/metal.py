"""Metal (specular reflective) material implementation.

Perfect metals (fuzz=0) produce mirror reflections, while fuzzier metals
perturb the reflected direction by a random point in a ball of radius fuzz.

The reflection formula is:
    R = I - 2(I . N)N

A fuzzed ray that ends up pointing into the surface is absorbed.
"""

import math
from dataclasses import dataclass

import numpy as np

from pathtracer.core.ray import (
    Ray,
    Vec3,
    dot,
    normalize,
    random_in_unit_sphere,
    reflect,
)
from pathtracer.materials.material import ScatterRecord, validate_albedo


@dataclass(frozen=True)
class MetalMaterial:
    """Metal material properties.

    Attributes:
        albedo: The reflective color (RGB, each component in [0, 1]).
        fuzz: Radius of the reflection perturbation. Values outside [0, 1]
            are clamped into that range; NaN is rejected.
    """

    albedo: Vec3
    fuzz: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "albedo", validate_albedo(self.albedo))
        fuzz = float(self.fuzz)
        if math.isnan(fuzz):
            raise ValueError("Metal fuzz must be a number, got NaN")
        object.__setattr__(self, "fuzz", min(max(fuzz, 0.0), 1.0))


def scatter_metal(
    albedo: Vec3,
    fuzz: float,
    ray_in: Ray,
    point: Vec3,
    normal: Vec3,
    rng: np.random.Generator,
) -> ScatterRecord | None:
    """Compute the scattered ray for a metal surface.

    Args:
        albedo: The reflective color (RGB).
        fuzz: The perturbation radius in [0, 1]. 0 = perfect mirror.
        ray_in: The incoming ray.
        point: The hit point on the surface.
        normal: The outward unit normal at the hit point.
        rng: Random generator for the fuzz perturbation.

    Returns:
        A ScatterRecord, or None if the perturbed ray points into the surface.
    """
    reflected = reflect(normalize(ray_in.direction), normal)
    direction = reflected
    if fuzz > 0.0:
        direction = reflected + fuzz * random_in_unit_sphere(rng)

    if dot(direction, normal) <= 0.0:
        return None
    return ScatterRecord(attenuation=albedo, scattered=Ray(origin=point, direction=direction))
