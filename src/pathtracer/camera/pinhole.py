"""Pinhole and thin-lens camera model for primary ray generation.

The camera supports:
- Look-at positioning (lookfrom, lookat, vup)
- Vertical field of view specification
- Arbitrary aspect ratios
- Depth of field through a thin lens (aperture and focus distance)
- Jittered sampling for anti-aliasing

The camera builds an orthonormal basis (u, v, w) from the view parameters:
- w: points from lookat toward lookfrom (opposite view direction)
- u: points right in the image plane
- v: points up in the image plane

Configuration (PinholeCamera) is separate from the derived camera state
(Camera), which is computed once by setup_camera() and never changes.

Example:
    >>> from pathtracer.camera.pinhole import PinholeCamera, setup_camera, get_ray
    >>> config = PinholeCamera(
    ...     lookfrom=(0.0, 0.0, 3.0),
    ...     lookat=(0.0, 0.0, 0.0),
    ...     vup=(0.0, 1.0, 0.0),
    ...     vfov=60.0,
    ...     aspect_ratio=16.0 / 9.0,
    ... )
    >>> camera = setup_camera(config)
    >>> ray = get_ray(camera, 0.5, 0.5)  # Ray through image center
"""

import math
from dataclasses import dataclass

import numpy as np

from pathtracer.core.ray import (
    Ray,
    Vec3,
    as_vec3,
    cross,
    length,
    normalize,
    random_in_unit_disk,
)

# =============================================================================
# Camera Data Structures
# =============================================================================


@dataclass
class PinholeCamera:
    """Configuration for a perspective camera.

    With the default aperture of 0 the camera is a perfect pinhole with no
    depth of field. A positive aperture turns it into a thin-lens camera
    that keeps the plane at focus_dist sharp.

    Attributes:
        lookfrom: Camera position in world space (x, y, z).
        lookat: Point the camera is looking at in world space (x, y, z).
        vup: Up direction vector for camera orientation (typically (0, 1, 0)).
        vfov: Vertical field of view in degrees.
        aspect_ratio: Width divided by height of the output image.
        aperture: Lens diameter. 0 disables depth of field.
        focus_dist: Distance to the plane of perfect focus. None means the
            distance from lookfrom to lookat.
    """

    lookfrom: tuple[float, float, float]
    lookat: tuple[float, float, float]
    vup: tuple[float, float, float]
    vfov: float
    aspect_ratio: float
    aperture: float = 0.0
    focus_dist: float | None = 1.0


@dataclass(frozen=True)
class Camera:
    """Derived camera state used during rendering.

    Attributes:
        origin: Camera position.
        u: Right direction in world space.
        v: Up direction in world space.
        w: Backward direction (opposite view direction).
        lower_left_corner: Lower-left corner of the image plane.
        horizontal: Full width of the image plane.
        vertical: Full height of the image plane.
        lens_radius: Half the aperture.
    """

    origin: Vec3
    u: Vec3
    v: Vec3
    w: Vec3
    lower_left_corner: Vec3
    horizontal: Vec3
    vertical: Vec3
    lens_radius: float


# =============================================================================
# Camera Setup
# =============================================================================


def setup_camera(config: PinholeCamera) -> Camera:
    """Compute camera state from configuration.

    Computes the camera's orthonormal basis (u, v, w) and image plane
    geometry from the provided camera parameters.

    Args:
        config: Camera configuration with position, orientation, FOV and lens.

    Returns:
        The immutable Camera state.

    Raises:
        ValueError: If lookfrom equals lookat, vup is parallel to the view
            direction, or a numeric parameter is out of range.
    """
    if not 0.0 < config.vfov < 180.0:
        raise ValueError(f"Vertical field of view must be in (0, 180), got {config.vfov}")
    if not config.aspect_ratio > 0.0:
        raise ValueError(f"Aspect ratio must be positive, got {config.aspect_ratio}")
    if config.aperture < 0.0:
        raise ValueError(f"Aperture must not be negative, got {config.aperture}")

    lookfrom = as_vec3(config.lookfrom)
    lookat = as_vec3(config.lookat)
    vup = as_vec3(config.vup)

    # w points from lookat toward lookfrom (backward)
    w = lookfrom - lookat
    if length(w) == 0.0:
        raise ValueError("lookfrom and lookat must differ")
    w = normalize(w)

    # u points right (perpendicular to w and vup)
    u = cross(vup, w)
    if length(u) == 0.0:
        raise ValueError("vup must not be parallel to the view direction")
    u = normalize(u)

    # v points up in the camera's frame
    v = cross(w, u)

    focus_dist = config.focus_dist
    if focus_dist is None:
        focus_dist = length(lookfrom - lookat)
    if not focus_dist > 0.0:
        raise ValueError(f"Focus distance must be positive, got {focus_dist}")

    half_height = math.tan(config.vfov * math.pi / 360.0)
    half_width = config.aspect_ratio * half_height

    lower_left = (
        lookfrom
        - half_width * focus_dist * u
        - half_height * focus_dist * v
        - focus_dist * w
    )

    return Camera(
        origin=lookfrom,
        u=u,
        v=v,
        w=w,
        lower_left_corner=lower_left,
        horizontal=2.0 * half_width * focus_dist * u,
        vertical=2.0 * half_height * focus_dist * v,
        lens_radius=config.aperture / 2.0,
    )


# =============================================================================
# Ray Generation
# =============================================================================


def get_ray(
    camera: Camera,
    s: float,
    t: float,
    rng: np.random.Generator | None = None,
) -> Ray:
    """Generate a ray through normalized image coordinates (s, t).

    The coordinates are normalized:
    - s = 0: left edge, s = 1: right edge
    - t = 0: bottom edge, t = 1: top edge

    Args:
        camera: The camera state.
        s: Horizontal coordinate in [0, 1] (left to right).
        t: Vertical coordinate in [0, 1] (bottom to top).
        rng: Random generator for lens sampling. Without one (or with a
            zero lens radius) the ray starts exactly at the camera origin.

    Returns:
        A Ray from the (possibly lens-jittered) origin through the image plane.
    """
    offset = np.zeros(3)
    if camera.lens_radius > 0.0 and rng is not None:
        rd = camera.lens_radius * random_in_unit_disk(rng)
        offset = camera.u * rd[0] + camera.v * rd[1]

    origin = camera.origin + offset
    direction = (
        camera.lower_left_corner
        + s * camera.horizontal
        + t * camera.vertical
        - origin
    )
    return Ray(origin=origin, direction=direction)


def get_ray_jittered(
    camera: Camera,
    pixel_i: int,
    pixel_j: int,
    width: int,
    height: int,
    rng: np.random.Generator,
) -> Ray:
    """Generate a jittered ray for anti-aliasing.

    Adds a uniform offset in [0, 1) to the pixel coordinates before
    converting them to normalized image coordinates.

    Args:
        camera: The camera state.
        pixel_i: Pixel x-coordinate (0 = left).
        pixel_j: Pixel y-coordinate (0 = bottom).
        width: Image width in pixels.
        height: Image height in pixels.
        rng: Random generator for jitter and lens sampling.

    Returns:
        A Ray with random sub-pixel offset.
    """
    s = (pixel_i + rng.random()) / width
    t = (pixel_j + rng.random()) / height
    return get_ray(camera, s, t, rng)
