"""Ray data structure, vector utilities and random sampling.

This module provides the fundamental Ray dataclass and the vector helpers
used throughout the path tracer. Vectors are NumPy ``float64`` arrays of
shape ``(3,)``; they carry positions, directions and RGB colors alike.

Randomness is never drawn from global state. Every sampler takes an explicit
``numpy.random.Generator`` so that renders are reproducible from a seed.

Example:
    >>> from pathtracer.core.ray import Ray, make_rng, ray_at, vec3
    >>> ray = Ray(origin=vec3(0.0, 0.0, 0.0), direction=vec3(0.0, 0.0, -1.0))
    >>> point = ray_at(ray, 5.0)  # Point 5 units along the ray
    >>> rng = make_rng(42)
"""

import math
from dataclasses import dataclass

import numpy as np
import numpy.typing as npt

# Type alias for 3D vectors
Vec3 = npt.NDArray[np.float64]


def vec3(x: float, y: float, z: float) -> Vec3:
    """Create a 3D vector from its components."""
    return np.array((x, y, z), dtype=np.float64)


def as_vec3(value) -> Vec3:
    """Convert a tuple, list or array of three numbers to a Vec3.

    Raises:
        ValueError: If the value does not have exactly three components.
    """
    result = np.asarray(value, dtype=np.float64).reshape(-1)
    if result.shape != (3,):
        raise ValueError(f"Expected 3 components, got {len(result)}")
    return result.copy()


@dataclass(frozen=True)
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray.
        direction: The direction vector of the ray. Not required to be
            unit length.
    """

    origin: Vec3
    direction: Vec3


def ray_at(ray: Ray, t: float) -> Vec3:
    """Compute the point along the ray at parameter t.

    Args:
        ray: The ray to evaluate.
        t: The parameter value. Positive values are in front of the origin.

    Returns:
        The point ray.origin + t * ray.direction.
    """
    return ray.origin + t * ray.direction


def make_ray(origin: Vec3, direction: Vec3) -> Ray:
    """Create a ray from origin and direction."""
    return Ray(origin=origin, direction=direction)


# =============================================================================
# Vector Utility Functions
# =============================================================================


def length(v: Vec3) -> float:
    """Compute the Euclidean length of a vector."""
    return math.sqrt(length_squared(v))


def length_squared(v: Vec3) -> float:
    """Compute the squared length of a vector.

    Cheaper than length() when only comparing magnitudes.
    """
    return float(np.dot(v, v))


def normalize(v: Vec3) -> Vec3:
    """Normalize a vector to unit length.

    Args:
        v: The input vector.

    Returns:
        A unit vector in the same direction as v. A zero-length vector is
        returned unchanged.
    """
    n = length(v)
    if n == 0.0:
        return v
    return v / n


def dot(a: Vec3, b: Vec3) -> float:
    """Compute the dot product of two vectors."""
    return float(np.dot(a, b))


def cross(a: Vec3, b: Vec3) -> Vec3:
    """Compute the cross product of two vectors."""
    return np.cross(a, b)


def reflect(incident: Vec3, normal: Vec3) -> Vec3:
    """Reflect an incident vector about a normal.

    Computes R = I - 2(I . N)N. The normal should be unit length for
    correct results.

    Args:
        incident: The incoming direction vector (pointing toward the surface).
        normal: The surface normal.

    Returns:
        The reflected direction vector.
    """
    return incident - 2.0 * dot(incident, normal) * normal


def refract(incident: Vec3, normal: Vec3, ni_over_nt: float) -> Vec3 | None:
    """Refract an incident vector through a surface using Snell's law.

    Args:
        incident: The incoming direction vector (any length).
        normal: The unit normal on the side the ray arrives from.
        ni_over_nt: Ratio of refractive indices (n_incident / n_transmitted).

    Returns:
        The refracted direction, or None on total internal reflection.
    """
    uv = normalize(incident)
    dt = dot(uv, normal)
    discriminant = 1.0 - ni_over_nt * ni_over_nt * (1.0 - dt * dt)
    if discriminant <= 0.0:
        return None
    return ni_over_nt * (uv - normal * dt) - normal * math.sqrt(discriminant)


def schlick_fresnel(cosine: float, ref_idx: float) -> float:
    """Compute Fresnel reflectance using Schlick's approximation.

    Args:
        cosine: Cosine of the angle between incident direction and normal.
        ref_idx: Refractive index of the material.

    Returns:
        The approximate reflectance, clamped to [0, 1].
    """
    r0 = ((1.0 - ref_idx) / (1.0 + ref_idx)) ** 2
    reflectance = r0 + (1.0 - r0) * (1.0 - cosine) ** 5
    return min(max(reflectance, 0.0), 1.0)


# =============================================================================
# Random Sampling Utilities for Monte Carlo
# =============================================================================


def make_rng(seed: int | None = None) -> np.random.Generator:
    """Create the random generator threaded through a render.

    Args:
        seed: Optional seed. None draws fresh entropy from the OS.

    Returns:
        A NumPy Generator.
    """
    return np.random.default_rng(seed)


def random_in_unit_sphere(rng: np.random.Generator) -> Vec3:
    """Generate a random point inside the unit ball.

    Uses rejection sampling over the cube [-1, 1]^3, accepting roughly 52%
    of candidates.

    Returns:
        A random point with squared length < 1.
    """
    while True:
        p = rng.uniform(-1.0, 1.0, size=3)
        if length_squared(p) < 1.0:
            return p


def random_in_unit_disk(rng: np.random.Generator) -> Vec3:
    """Generate a random point inside the unit disk in the xy-plane.

    Used for thin-lens depth of field.

    Returns:
        A random point (x, y, 0) with x^2 + y^2 < 1.
    """
    while True:
        x, y = rng.uniform(-1.0, 1.0, size=2)
        if x * x + y * y < 1.0:
            return vec3(x, y, 0.0)
