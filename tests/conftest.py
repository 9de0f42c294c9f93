"""Pytest configuration for path tracer tests.

This module provides shared fixtures for all test modules: a seeded random
generator and small ready-made scenes.
"""

import matplotlib
import pytest

from pathtracer.camera.pinhole import PinholeCamera, setup_camera
from pathtracer.core.ray import make_rng, vec3
from pathtracer.geometry.sphere import Sphere
from pathtracer.materials import LambertianMaterial
from pathtracer.scene.intersection import Mesh

# Never open windows during tests
matplotlib.use("Agg")


@pytest.fixture
def rng():
    """A seeded random generator so every test run draws the same samples."""
    return make_rng(42)


@pytest.fixture
def single_sphere_meshes():
    """One diffuse sphere at (0, 0, -1) with radius 0.5."""
    return (
        Mesh(
            geometry=Sphere(center=vec3(0.0, 0.0, -1.0), radius=0.5),
            material=LambertianMaterial(albedo=vec3(0.1, 0.2, 0.5)),
        ),
    )


@pytest.fixture
def forward_camera():
    """Pinhole camera at the origin looking down -z with a 2:1 image."""
    return setup_camera(
        PinholeCamera(
            lookfrom=(0.0, 0.0, 0.0),
            lookat=(0.0, 0.0, -1.0),
            vup=(0.0, 1.0, 0.0),
            vfov=90.0,
            aspect_ratio=2.0,
        )
    )
