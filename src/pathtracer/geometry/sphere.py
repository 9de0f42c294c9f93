"""Sphere primitive with ray-sphere intersection.

The ray-sphere intersection is found by solving:
    |ray_origin + t * ray_direction - center|^2 = radius^2

Expanding and rearranging gives the quadratic equation:
    a*t^2 + 2*h*t + c = 0

where:
    a = dot(direction, direction)
    h = dot(direction, oc)  (half of traditional b)
    c = dot(oc, oc) - radius^2
    oc = origin - center

Example:
    >>> from pathtracer.core.ray import Ray, vec3
    >>> from pathtracer.geometry.sphere import Sphere, hit_sphere
    >>> sphere = Sphere(center=vec3(0, 0, -1), radius=0.5)
    >>> hit = hit_sphere(Ray(vec3(0, 0, 0), vec3(0, 0, -1)), sphere)
    >>> hit.t
    0.5
"""

import math
from dataclasses import dataclass

from pathtracer.core.ray import Ray, Vec3, as_vec3, dot, normalize, ray_at

# Smallest accepted ray parameter; avoids self-intersection ("shadow acne")
T_MIN = 0.001
T_MAX = math.inf


@dataclass(frozen=True)
class Sphere:
    """A sphere defined by center point and radius.

    Attributes:
        center: The center point of the sphere.
        radius: The radius of the sphere (strictly positive).
    """

    center: Vec3
    radius: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "center", as_vec3(self.center))
        if not self.radius > 0.0:
            raise ValueError(f"Sphere radius must be positive, got {self.radius}")
        object.__setattr__(self, "radius", float(self.radius))


@dataclass(frozen=True)
class GeometricHit:
    """Record of a ray-sphere intersection.

    Attributes:
        t: The parameter value along the ray where intersection occurred.
        point: The 3D point where the ray intersected the sphere.
        normal: The surface normal at the intersection point (unit length,
            always points outward from the sphere center, even when the ray
            starts inside the sphere).
    """

    t: float
    point: Vec3
    normal: Vec3


def hit_sphere(
    ray: Ray,
    sphere: Sphere,
    t_min: float = T_MIN,
    t_max: float = T_MAX,
) -> GeometricHit | None:
    """Test for ray-sphere intersection.

    Returns the smaller root if it lies strictly within (t_min, t_max),
    otherwise the larger root if it does. A ray starting inside the sphere
    therefore reports the far wall, and a sphere entirely behind the origin
    is missed.

    Args:
        ray: The ray to test.
        sphere: The sphere to test intersection against.
        t_min: Minimum t value to consider a valid hit (avoids self-intersection).
        t_max: Maximum t value to consider a valid hit.

    Returns:
        A GeometricHit, or None if the ray misses.
    """
    oc = ray.origin - sphere.center

    a = dot(ray.direction, ray.direction)
    h = dot(ray.direction, oc)
    c = dot(oc, oc) - sphere.radius * sphere.radius

    # Half-b form: h^2 - ac instead of b^2 - 4ac
    discriminant = h * h - a * c
    if discriminant < 0.0 or a == 0.0:
        return None

    sqrt_d = math.sqrt(discriminant)
    for t in ((-h - sqrt_d) / a, (-h + sqrt_d) / a):
        if t_min < t < t_max:
            point = ray_at(ray, t)
            # Outward normal: points from center to hit point
            normal = normalize(point - sphere.center)
            return GeometricHit(t=t, point=point, normal=normal)

    return None
