"""Built-in scene configurations.

Factory functions returning a populated SceneManager together with the
PinholeCamera that frames it:

- create_demo_scene: a blue diffuse sphere on a large purple ground sphere,
  flanked by a gold mirror sphere and a hollow glass sphere, with a scatter
  of small randomly colored diffuse spheres on the ground.
- create_single_sphere_scene: one diffuse sphere in front of a camera at the
  origin, useful for quick checks.
- create_two_balls_scene: two touching spheres that exactly fill a 90 degree
  field of view, useful for checking camera framing.

Example:
    >>> from pathtracer.camera.pinhole import setup_camera
    >>> from pathtracer.scene.presets import create_demo_scene
    >>> scene, camera_config = create_demo_scene(aspect_ratio=2.0)
    >>> camera = setup_camera(camera_config)
"""

import math

import numpy as np

from pathtracer.camera.pinhole import PinholeCamera
from pathtracer.core.ray import make_rng
from pathtracer.scene.manager import SceneManager

# =============================================================================
# Demo Scene Constants
# =============================================================================

CENTER_SPHERE_ALBEDO = (0.1, 0.2, 0.5)
GROUND_ALBEDO = (0.5, 0.3, 0.8)
GROUND_RADIUS = 100.0

GOLD_ALBEDO = (0.8, 0.6, 0.2)
GOLD_FUZZ = 0.0

GLASS_IOR = 1.5
GLASS_RADIUS = 0.5
# An inner sphere with the inverse index turns the glass ball into a hollow shell
BUBBLE_RADIUS = 0.35

SMALL_SPHERE_COUNT = 30
SMALL_SPHERE_RADIUS = 0.15
SMALL_SPHERE_SPREAD = 3.0

DEMO_LOOKFROM = (3.0, -0.1, 0.2)
DEMO_LOOKAT = (0.0, 0.0, -1.0)
DEMO_VFOV = 30.0


# =============================================================================
# Scene Factories
# =============================================================================


def create_demo_scene(
    aspect_ratio: float = 2.0,
    small_spheres: int = SMALL_SPHERE_COUNT,
    rng: np.random.Generator | None = None,
) -> tuple[SceneManager, PinholeCamera]:
    """Create the demo scene with diffuse, metal and glass spheres.

    Args:
        aspect_ratio: Image width divided by height.
        small_spheres: Number of small random diffuse spheres on the ground.
        rng: Random generator used to place and color the small spheres.
            Defaults to a generator seeded with 0 so the scene is stable.

    Returns:
        A tuple of (SceneManager, PinholeCamera).
    """
    if rng is None:
        rng = make_rng(0)

    scene = SceneManager()
    scene.add_lambertian_sphere((0.0, 0.0, -1.0), 0.5, CENTER_SPHERE_ALBEDO)
    scene.add_lambertian_sphere((0.0, -GROUND_RADIUS - 0.5, -1.0), GROUND_RADIUS, GROUND_ALBEDO)
    scene.add_metal_sphere((1.0, 0.0, -1.0), 0.5, GOLD_ALBEDO, GOLD_FUZZ)
    scene.add_dielectric_sphere((-1.0, 0.0, -1.0), GLASS_RADIUS, GLASS_IOR)
    scene.add_dielectric_sphere((-1.0, 0.0, -1.0), BUBBLE_RADIUS, 1.0 / GLASS_IOR)

    for _ in range(small_spheres):
        x, z = rng.uniform(-SMALL_SPHERE_SPREAD, SMALL_SPHERE_SPREAD, size=2)
        albedo = tuple(float(c) for c in rng.uniform(0.0, 1.0, size=3))
        scene.add_lambertian_sphere(
            (float(x), -0.5 + SMALL_SPHERE_RADIUS, float(z)),
            SMALL_SPHERE_RADIUS,
            albedo,
        )

    camera = PinholeCamera(
        lookfrom=DEMO_LOOKFROM,
        lookat=DEMO_LOOKAT,
        vup=(0.0, 1.0, 0.0),
        vfov=DEMO_VFOV,
        aspect_ratio=aspect_ratio,
        aperture=0.0,
        focus_dist=None,
    )
    return scene, camera


def create_single_sphere_scene(
    aspect_ratio: float = 2.0,
) -> tuple[SceneManager, PinholeCamera]:
    """Create a single diffuse sphere at (0, 0, -1) seen from the origin."""
    scene = SceneManager()
    scene.add_lambertian_sphere((0.0, 0.0, -1.0), 0.5, CENTER_SPHERE_ALBEDO)

    camera = PinholeCamera(
        lookfrom=(0.0, 0.0, 0.0),
        lookat=(0.0, 0.0, -1.0),
        vup=(0.0, 1.0, 0.0),
        vfov=90.0,
        aspect_ratio=aspect_ratio,
    )
    return scene, camera


def create_two_balls_scene(
    aspect_ratio: float = 2.0,
) -> tuple[SceneManager, PinholeCamera]:
    """Create a blue and a red sphere touching at the view axis."""
    r = math.cos(math.pi / 4.0)
    scene = SceneManager()
    scene.add_lambertian_sphere((-r, 0.0, -1.0), r, (0.0, 0.0, 1.0))
    scene.add_lambertian_sphere((r, 0.0, -1.0), r, (1.0, 0.0, 0.0))

    camera = PinholeCamera(
        lookfrom=(0.0, 0.0, 0.0),
        lookat=(0.0, 0.0, -1.0),
        vup=(0.0, 1.0, 0.0),
        vfov=90.0,
        aspect_ratio=aspect_ratio,
    )
    return scene, camera
