"""Dielectric (glass/water) material implementation.

This module implements transparent materials like glass and water with
refraction and Fresnel reflectance.

Key physics:
    - Snell's law for refraction: n1 * sin(theta1) = n2 * sin(theta2)
    - Schlick's approximation for Fresnel reflectance
    - Total internal reflection when no refracted direction exists

The material randomly chooses between reflection and refraction based on
the Fresnel reflectance probability, which increases at grazing angles.
Sphere normals always point outward, so whether the ray is entering or
leaving the medium is decided here from the sign of dot(direction, normal).
"""

from dataclasses import dataclass

import numpy as np

from pathtracer.core.ray import (
    Ray,
    Vec3,
    dot,
    length,
    reflect,
    refract,
    schlick_fresnel,
    vec3,
)
from pathtracer.materials.material import ScatterRecord


@dataclass(frozen=True)
class DielectricMaterial:
    """Dielectric (glass/water) material properties.

    Attributes:
        ior: Index of refraction. Common values:
            - Air: 1.0
            - Water: 1.33
            - Glass: 1.5
            - Diamond: 2.4
          Values below 1 model a bubble of thinner medium (e.g. air in glass).
    """

    ior: float

    def __post_init__(self) -> None:
        if not self.ior > 0.0:
            raise ValueError(f"Index of refraction must be positive, got {self.ior}")
        object.__setattr__(self, "ior", float(self.ior))


def scatter_dielectric(
    ior: float,
    ray_in: Ray,
    point: Vec3,
    normal: Vec3,
    rng: np.random.Generator,
) -> ScatterRecord:
    """Compute the scattered ray for a dielectric surface.

    Args:
        ior: Index of refraction of the material.
        ray_in: The incoming ray.
        point: The hit point on the surface.
        normal: The outward unit normal at the hit point.
        rng: Random generator for the reflect/refract choice.

    Returns:
        A ScatterRecord with white attenuation; dielectrics never absorb.
    """
    direction = ray_in.direction
    d_dot_n = dot(direction, normal)

    if d_dot_n > 0.0:
        # Leaving the medium
        outward_normal = -normal
        ni_over_nt = ior
        cosine = ior * d_dot_n / length(direction)
    else:
        outward_normal = normal
        ni_over_nt = 1.0 / ior
        cosine = -d_dot_n / length(direction)

    reflected = reflect(direction, normal)
    refracted = refract(direction, outward_normal, ni_over_nt)

    if refracted is None:
        scattered_direction = reflected
    elif rng.random() < schlick_fresnel(cosine, ior):
        scattered_direction = reflected
    else:
        scattered_direction = refracted

    return ScatterRecord(
        attenuation=vec3(1.0, 1.0, 1.0),
        scattered=Ray(origin=point, direction=scattered_direction),
    )
