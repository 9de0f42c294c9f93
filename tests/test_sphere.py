"""Unit tests for ray-sphere intersection.

Tests cover:
- Hits in front of the ray origin (nearest root)
- Misses and spheres behind the ray
- Rays starting inside a sphere (far wall, outward normal)
- The (t_min, t_max) interval, including self-intersection avoidance
- Hit properties over random spheres and rays
- Sphere validation
"""

import numpy as np
import pytest

from pathtracer.core.ray import Ray, length, vec3
from pathtracer.geometry.sphere import T_MIN, Sphere, hit_sphere


@pytest.fixture
def unit_sphere():
    """Sphere of radius 0.5 centered at (0, 0, -1)."""
    return Sphere(center=vec3(0.0, 0.0, -1.0), radius=0.5)


class TestSphereHit:
    """Tests for rays that hit the sphere."""

    def test_hit_through_center(self, unit_sphere):
        """Test that a ray through the center hits the near surface."""
        ray = Ray(origin=vec3(0.0, 0.0, 0.0), direction=vec3(0.0, 0.0, -1.0))
        hit = hit_sphere(ray, unit_sphere)
        assert hit is not None
        assert hit.t == pytest.approx(0.5)
        np.testing.assert_allclose(hit.point, [0.0, 0.0, -0.5])
        np.testing.assert_allclose(hit.normal, [0.0, 0.0, 1.0])

    def test_hit_distance_is_center_distance_minus_radius(self):
        """Test t = |center| - radius for a unit direction from the origin."""
        sphere = Sphere(center=vec3(0.0, 0.0, -5.0), radius=2.0)
        hit = hit_sphere(Ray(vec3(0.0, 0.0, 0.0), vec3(0.0, 0.0, -1.0)), sphere)
        assert hit.t == pytest.approx(3.0)

    def test_unnormalized_direction_scales_t(self, unit_sphere):
        """Test that t is measured in units of the direction vector."""
        ray = Ray(origin=vec3(0.0, 0.0, 0.0), direction=vec3(0.0, 0.0, -2.0))
        hit = hit_sphere(ray, unit_sphere)
        assert hit.t == pytest.approx(0.25)
        np.testing.assert_allclose(hit.point, [0.0, 0.0, -0.5])

    def test_tangent_ray(self, unit_sphere):
        """Test a ray grazing the top of the sphere."""
        ray = Ray(origin=vec3(0.0, 0.5, 0.0), direction=vec3(0.0, 0.0, -1.0))
        hit = hit_sphere(ray, unit_sphere)
        assert hit is not None
        assert hit.t == pytest.approx(1.0)
        np.testing.assert_allclose(hit.normal, [0.0, 1.0, 0.0], atol=1e-12)

    def test_normal_is_unit_length(self, unit_sphere):
        """Test that normals are unit length for off-axis hits."""
        ray = Ray(origin=vec3(0.0, 0.0, 0.0), direction=vec3(0.2, 0.1, -1.0))
        hit = hit_sphere(ray, unit_sphere)
        assert hit is not None
        assert length(hit.normal) == pytest.approx(1.0)

    def test_hit_point_lies_on_surface(self, unit_sphere):
        """Test that the hit point is one radius from the center."""
        ray = Ray(origin=vec3(0.3, -0.2, 1.0), direction=vec3(-0.3, 0.2, -2.0))
        hit = hit_sphere(ray, unit_sphere)
        assert hit is not None
        assert length(hit.point - unit_sphere.center) == pytest.approx(0.5)

    def test_random_hits_have_unit_normals_beyond_t_min(self, rng):
        """Test hit properties over random spheres and rays."""
        hits = 0
        for _ in range(500):
            sphere = Sphere(center=rng.uniform(-5.0, 5.0, 3), radius=rng.uniform(0.1, 3.0))
            origin = rng.uniform(-10.0, 10.0, 3)
            direction = (sphere.center - origin + rng.normal(0.0, 1.0, 3)) * rng.uniform(0.1, 5.0)
            hit = hit_sphere(Ray(origin=origin, direction=direction), sphere)
            if hit is None:
                continue
            hits += 1
            assert length(hit.normal) == pytest.approx(1.0, abs=1e-5)
            assert hit.t > T_MIN
            assert length(hit.point - sphere.center) == pytest.approx(sphere.radius, rel=1e-6)
        assert hits > 100


class TestSphereMiss:
    """Tests for rays that do not produce a hit."""

    def test_ray_pointing_away(self, unit_sphere):
        """Test that a ray pointing up misses."""
        ray = Ray(origin=vec3(0.0, 0.0, 0.0), direction=vec3(0.0, 1.0, 0.0))
        assert hit_sphere(ray, unit_sphere) is None

    def test_sphere_behind_origin(self):
        """Test that a sphere entirely behind the ray is missed."""
        sphere = Sphere(center=vec3(0.0, 0.0, 1.0), radius=0.5)
        ray = Ray(origin=vec3(0.0, 0.0, 0.0), direction=vec3(0.0, 0.0, -1.0))
        assert hit_sphere(ray, sphere) is None

    def test_t_max_excludes_far_hit(self, unit_sphere):
        """Test that hits beyond t_max are rejected."""
        ray = Ray(origin=vec3(0.0, 0.0, 0.0), direction=vec3(0.0, 0.0, -1.0))
        assert hit_sphere(ray, unit_sphere, t_max=0.4) is None

    def test_zero_direction(self, unit_sphere):
        """Test that a degenerate ray never hits."""
        ray = Ray(origin=vec3(0.0, 0.0, 0.0), direction=vec3(0.0, 0.0, 0.0))
        assert hit_sphere(ray, unit_sphere) is None


class TestSphereInside:
    """Tests for rays starting inside or on the sphere."""

    def test_inside_reports_far_wall(self, unit_sphere):
        """Test that a ray from the center hits the far wall."""
        ray = Ray(origin=vec3(0.0, 0.0, -1.0), direction=vec3(0.0, 0.0, -1.0))
        hit = hit_sphere(ray, unit_sphere)
        assert hit.t == pytest.approx(0.5)
        np.testing.assert_allclose(hit.point, [0.0, 0.0, -1.5])

    def test_inside_normal_points_outward(self, unit_sphere):
        """Test that the normal is not flipped toward the ray."""
        ray = Ray(origin=vec3(0.0, 0.0, -1.0), direction=vec3(0.0, 0.0, -1.0))
        hit = hit_sphere(ray, unit_sphere)
        np.testing.assert_allclose(hit.normal, [0.0, 0.0, -1.0])

    def test_surface_origin_leaving_is_ignored(self, unit_sphere):
        """Test that a ray leaving from the surface does not hit itself."""
        ray = Ray(origin=vec3(0.0, 0.0, -0.5), direction=vec3(0.0, 0.0, 1.0))
        assert hit_sphere(ray, unit_sphere) is None

    def test_surface_origin_entering_hits_far_side(self, unit_sphere):
        """Test that a ray entering from the surface skips t=0."""
        ray = Ray(origin=vec3(0.0, 0.0, -0.5), direction=vec3(0.0, 0.0, -1.0))
        hit = hit_sphere(ray, unit_sphere)
        assert hit.t == pytest.approx(1.0)
        assert hit.t > T_MIN


class TestSphereValidation:
    """Tests for Sphere construction."""

    def test_center_converted_to_vec3(self):
        """Test that tuple centers become float arrays."""
        sphere = Sphere(center=(1, 2, 3), radius=1)
        assert sphere.center.dtype == np.float64
        assert sphere.radius == 1.0

    @pytest.mark.parametrize("radius", [0.0, -1.0])
    def test_non_positive_radius_rejected(self, radius):
        """Test that zero and negative radii raise ValueError."""
        with pytest.raises(ValueError, match="radius"):
            Sphere(center=(0.0, 0.0, 0.0), radius=radius)
