"""Lambertian (ideal diffuse) material implementation.

Scattering aims at a random point inside the unit ball sitting on the
surface normal:

    target = hit_point + normal + random_in_unit_sphere()

which approximates a cosine-weighted distribution over the hemisphere.
The surface absorbs nothing beyond its albedo, so the attenuation is the
albedo itself.

Example:
    >>> from pathtracer.core.ray import make_rng, vec3
    >>> from pathtracer.materials.lambertian import scatter_lambertian
    >>> record = scatter_lambertian(
    ...     vec3(0.5, 0.5, 0.5), vec3(0, 0, 0), vec3(0, 1, 0), make_rng(1)
    ... )
"""

from dataclasses import dataclass

import numpy as np

from pathtracer.core.ray import Ray, Vec3, random_in_unit_sphere
from pathtracer.materials.material import ScatterRecord, validate_albedo


@dataclass(frozen=True)
class LambertianMaterial:
    """Lambertian (ideal diffuse) material properties.

    Attributes:
        albedo: The diffuse reflectance color (RGB, each component in [0, 1]).
    """

    albedo: Vec3

    def __post_init__(self) -> None:
        object.__setattr__(self, "albedo", validate_albedo(self.albedo))


def scatter_lambertian(
    albedo: Vec3,
    point: Vec3,
    normal: Vec3,
    rng: np.random.Generator,
) -> ScatterRecord:
    """Sample a scattered ray for a Lambertian surface.

    Always scatters.

    Args:
        albedo: The diffuse reflectance color (RGB).
        point: The hit point on the surface.
        normal: The outward unit normal at the hit point.
        rng: Random generator for the unit-ball sample.

    Returns:
        A ScatterRecord whose attenuation equals the albedo.
    """
    target = point + normal + random_in_unit_sphere(rng)
    scattered = Ray(origin=point, direction=target - point)
    return ScatterRecord(attenuation=albedo, scattered=scattered)
