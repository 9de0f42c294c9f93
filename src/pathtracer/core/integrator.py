"""Path tracing integrator for Monte Carlo light transport.

This module implements the color function and the supersampling
render loop.

A ray is traced into the scene. When it hits a surface, the surface's
material decides whether it scatters (and with what attenuation) or is
absorbed; scattered rays are followed bounce by bounce until they escape to
the sky or the depth budget runs out. The sky is a vertical white-to-blue
gradient and is the only light source.

Key features:
    - Material dispatch (Lambertian, Metal, Dielectric)
    - Depth-bounded bounce loop (constant stack depth for any max_depth)
    - Jittered supersampling with an exact running mean
    - Explicit, seedable random generator threaded through every call

Example:
    >>> from pathtracer.camera.pinhole import setup_camera
    >>> from pathtracer.core.integrator import RenderSettings, render_image
    >>> from pathtracer.scene.presets import create_demo_scene
    >>>
    >>> scene, camera_config = create_demo_scene(aspect_ratio=2.0)
    >>> settings = RenderSettings(width=200, height=100, samples_per_pixel=10, seed=1)
    >>> image = render_image(setup_camera(camera_config), scene.build_meshes(), settings)
"""

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass

import numpy as np
import numpy.typing as npt

from pathtracer.camera.pinhole import Camera, get_ray_jittered
from pathtracer.core.ray import Ray, Vec3, make_rng, normalize, vec3
from pathtracer.geometry.sphere import T_MAX, T_MIN
from pathtracer.materials import scatter
from pathtracer.scene.intersection import Mesh, intersect_scene

# =============================================================================
# Rendering Constants
# =============================================================================

# Maximum ray bounces (path length)
MAX_DEPTH = 50

# Scale of the sky gradient parameter. 0.3 gives a narrower, paler band
# than the usual 0.5, which would span the full white-to-blue range.
SKY_SCALE = 0.3

DEFAULT_GAMMA = 2.0

SKY_WHITE = (1.0, 1.0, 1.0)
SKY_BLUE = (0.5, 0.7, 1.0)

# Callback receives (rows_done, total_rows)
ProgressCallback = Callable[[int, int], None]


@dataclass
class RenderSettings:
    """Settings for a render.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        samples_per_pixel: Number of jittered samples averaged per pixel.
        max_depth: Maximum number of bounces per path.
        gamma: Display gamma used when quantizing the output.
        t_min: Smallest accepted ray parameter for intersections.
        sky_scale: Scale of the sky gradient parameter.
        seed: Seed for the random generator. None for a fresh seed.
    """

    width: int = 200
    height: int = 100
    samples_per_pixel: int = 10
    max_depth: int = MAX_DEPTH
    gamma: float = DEFAULT_GAMMA
    t_min: float = T_MIN
    sky_scale: float = SKY_SCALE
    seed: int | None = None

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Image dimensions must be positive, got {self.width}x{self.height}"
            )
        if self.samples_per_pixel <= 0:
            raise ValueError(
                f"samples_per_pixel must be positive, got {self.samples_per_pixel}"
            )
        if self.max_depth < 0:
            raise ValueError(f"max_depth must not be negative, got {self.max_depth}")
        if not self.gamma > 0.0:
            raise ValueError(f"gamma must be positive, got {self.gamma}")
        if not self.t_min >= 0.0:
            raise ValueError(f"t_min must not be negative, got {self.t_min}")

    @property
    def aspect_ratio(self) -> float:
        """Width divided by height."""
        return self.width / self.height


# =============================================================================
# Color Function
# =============================================================================


def background_color(ray: Ray, sky_scale: float = SKY_SCALE) -> Vec3:
    """Compute the sky color seen along an escaping ray.

    Linearly interpolates from white to sky blue by
    t = sky_scale * (normalize(direction).y + 1).

    Args:
        ray: The ray that missed every object.
        sky_scale: Scale of the gradient parameter.

    Returns:
        The background color.
    """
    t = sky_scale * (normalize(ray.direction)[1] + 1.0)
    return (1.0 - t) * vec3(*SKY_WHITE) + t * vec3(*SKY_BLUE)


def ray_color(
    ray: Ray,
    meshes: Sequence[Mesh],
    depth: int,
    rng: np.random.Generator,
    max_depth: int = MAX_DEPTH,
    t_min: float = T_MIN,
    sky_scale: float = SKY_SCALE,
) -> Vec3:
    """Compute the color carried back along a ray.

    1. Hit with depth < max_depth: scatter. A scattered ray contributes
       attenuation * color(scattered, depth + 1); absorption is black.
    2. Hit with depth >= max_depth: black, the bounce budget is exhausted.
    3. No hit: the sky gradient.

    The bounces are unrolled into a loop that multiplies the attenuations
    into a running throughput, so large max_depth values are safe.

    Args:
        ray: The ray to trace.
        meshes: The scene meshes.
        depth: Number of bounces already taken.
        rng: Random generator threaded through the render.
        max_depth: Maximum number of bounces.
        t_min: Smallest accepted ray parameter.
        sky_scale: Scale of the sky gradient parameter.

    Returns:
        The linear RGB color.
    """
    throughput = vec3(1.0, 1.0, 1.0)
    while True:
        hit = intersect_scene(ray, meshes, t_min, T_MAX)
        if hit is None:
            return throughput * background_color(ray, sky_scale)

        if depth >= max_depth:
            return vec3(0.0, 0.0, 0.0)

        record = scatter(hit.material, ray, hit, rng)
        if record is None:
            return vec3(0.0, 0.0, 0.0)

        throughput = throughput * record.attenuation
        ray = record.scattered
        depth += 1


def average_samples(samples: Iterable[Vec3]) -> Vec3:
    """Average color samples with a running mean.

    avg_n = avg_{n-1} + (x_n - avg_{n-1}) / n, so a run of identical samples
    reproduces that color exactly.

    Raises:
        ValueError: If there are no samples.
    """
    average = None
    n = 0
    for sample in samples:
        n += 1
        if average is None:
            average = np.array(sample, dtype=np.float64)
        else:
            average = average + (sample - average) / n
    if average is None:
        raise ValueError("Cannot average zero samples")
    return average


# =============================================================================
# Render Loop
# =============================================================================


def trace_sample(
    pixel_i: int,
    pixel_j: int,
    camera: Camera,
    meshes: Sequence[Mesh],
    settings: RenderSettings,
    rng: np.random.Generator,
) -> Vec3:
    """Trace one jittered camera sample through pixel (i, j).

    Args:
        pixel_i: Pixel x-coordinate (0 = left).
        pixel_j: Pixel y-coordinate (0 = bottom).
        camera: The camera state.
        meshes: The scene meshes.
        settings: Render settings.
        rng: Random generator threaded through the render.

    Returns:
        The linear RGB color of this sample.
    """
    ray = get_ray_jittered(camera, pixel_i, pixel_j, settings.width, settings.height, rng)
    return ray_color(
        ray,
        meshes,
        0,
        rng,
        max_depth=settings.max_depth,
        t_min=settings.t_min,
        sky_scale=settings.sky_scale,
    )


def render_pixel(
    pixel_i: int,
    pixel_j: int,
    camera: Camera,
    meshes: Sequence[Mesh],
    settings: RenderSettings,
    rng: np.random.Generator,
) -> Vec3:
    """Render one pixel by averaging settings.samples_per_pixel samples."""
    return average_samples(
        trace_sample(pixel_i, pixel_j, camera, meshes, settings, rng)
        for _ in range(settings.samples_per_pixel)
    )


def render_image(
    camera: Camera,
    meshes: Sequence[Mesh],
    settings: RenderSettings,
    rng: np.random.Generator | None = None,
    callback: ProgressCallback | None = None,
) -> npt.NDArray[np.float64]:
    """Render the full image.

    Rows are produced from the top of the image (pixel_j = height - 1) to
    the bottom, columns left to right, so row 0 of the result is the top
    row as it is written out.

    Args:
        camera: The camera state.
        meshes: The scene meshes.
        settings: Render settings.
        rng: Random generator. Defaults to make_rng(settings.seed).
        callback: Optional callback called after each row with
            (rows_done, total_rows).

    Returns:
        Linear color image of shape (height, width, 3).
    """
    if rng is None:
        rng = make_rng(settings.seed)

    width, height = settings.width, settings.height
    image = np.zeros((height, width, 3), dtype=np.float64)

    for row in range(height):
        pixel_j = height - 1 - row
        for pixel_i in range(width):
            image[row, pixel_i] = render_pixel(pixel_i, pixel_j, camera, meshes, settings, rng)
        if callback is not None:
            callback(row + 1, height)

    return image


def render_sample_pass(
    camera: Camera,
    meshes: Sequence[Mesh],
    settings: RenderSettings,
    rng: np.random.Generator,
) -> npt.NDArray[np.float64]:
    """Trace one sample for every pixel.

    Returns:
        Linear color image of shape (height, width, 3), top row first.
    """
    width, height = settings.width, settings.height
    image = np.zeros((height, width, 3), dtype=np.float64)
    for row in range(height):
        pixel_j = height - 1 - row
        for pixel_i in range(width):
            image[row, pixel_i] = trace_sample(pixel_i, pixel_j, camera, meshes, settings, rng)
    return image
