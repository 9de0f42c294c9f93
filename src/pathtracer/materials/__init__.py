"""Materials module for light scattering models.

Components:
    lambertian: Ideal diffuse (Lambertian) reflection
    metal: Specular reflection with optional fuzz
    dielectric: Glass-like materials with refraction (Schlick Fresnel)
    material: Scatter record and shared parameter validation

Every material answers one question: given an incoming ray and a hit, what
ray leaves the surface and how much of each color channel survives? The
answer is a ScatterRecord, or None when the light is absorbed.
"""

import numpy as np

from pathtracer.core.ray import Ray

from .dielectric import DielectricMaterial, scatter_dielectric
from .lambertian import LambertianMaterial, scatter_lambertian
from .material import ScatterRecord, validate_albedo
from .metal import MetalMaterial, scatter_metal

# Closed set of material variants
Material = LambertianMaterial | MetalMaterial | DielectricMaterial


def scatter(material: Material, ray_in: Ray, hit, rng: np.random.Generator) -> ScatterRecord | None:
    """Dispatch to the scattering law of the given material.

    Args:
        material: The material of the struck surface.
        ray_in: The incoming ray.
        hit: The hit record (anything with ``point`` and ``normal``).
        rng: Random generator threaded through the render.

    Returns:
        A ScatterRecord, or None if the ray was absorbed.

    Raises:
        TypeError: If the material is not one of the supported variants.
    """
    if isinstance(material, LambertianMaterial):
        return scatter_lambertian(material.albedo, hit.point, hit.normal, rng)
    elif isinstance(material, MetalMaterial):
        return scatter_metal(material.albedo, material.fuzz, ray_in, hit.point, hit.normal, rng)
    elif isinstance(material, DielectricMaterial):
        return scatter_dielectric(material.ior, ray_in, hit.point, hit.normal, rng)
    raise TypeError(f"Unsupported material: {type(material).__name__}")


__all__ = [
    "Material",
    "ScatterRecord",
    "scatter",
    "validate_albedo",
    "LambertianMaterial",
    "scatter_lambertian",
    "MetalMaterial",
    "scatter_metal",
    "DielectricMaterial",
    "scatter_dielectric",
]
