"""Shared material types and parameter validation."""

from dataclasses import dataclass

from pathtracer.core.ray import Ray, Vec3, as_vec3


@dataclass(frozen=True)
class ScatterRecord:
    """Result of a successful scatter event.

    Attributes:
        attenuation: Per-channel fraction of light carried along the
            scattered ray, each component in [0, 1].
        scattered: The outgoing ray, starting at the hit point.
    """

    attenuation: Vec3
    scattered: Ray


def validate_albedo(albedo) -> Vec3:
    """Convert an albedo to a Vec3 and check it is in [0, 1].

    Raises:
        ValueError: If any albedo component is outside [0, 1].
    """
    color = as_vec3(albedo)
    for i, component in enumerate(color):
        if not 0.0 <= component <= 1.0:
            raise ValueError(
                f"Albedo component {i} = {component} is outside [0, 1]. "
                "This would violate energy conservation."
            )
    return color
