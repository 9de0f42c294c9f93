"""Unit tests for ray and vector utilities.

Tests cover:
- Ray construction and evaluation
- Vector helpers (normalize, dot, cross, reflect, refract)
- Schlick's approximation
- Random sampling within the unit ball and unit disk
"""

import math

import numpy as np
import pytest

from pathtracer.core.ray import (
    Ray,
    as_vec3,
    cross,
    dot,
    length,
    length_squared,
    make_ray,
    make_rng,
    normalize,
    random_in_unit_disk,
    random_in_unit_sphere,
    ray_at,
    reflect,
    refract,
    schlick_fresnel,
    vec3,
)


class TestRay:
    """Tests for the Ray dataclass and ray_at."""

    def test_ray_at_origin(self):
        """Test that t=0 returns the origin."""
        ray = Ray(origin=vec3(1.0, 2.0, 3.0), direction=vec3(0.0, 0.0, -1.0))
        np.testing.assert_allclose(ray_at(ray, 0.0), [1.0, 2.0, 3.0])

    def test_ray_at_positive_t(self):
        """Test evaluation along an unnormalized direction."""
        ray = make_ray(vec3(0.0, 0.0, 0.0), vec3(0.0, 2.0, 0.0))
        np.testing.assert_allclose(ray_at(ray, 2.5), [0.0, 5.0, 0.0])

    def test_ray_is_immutable(self):
        """Test that ray fields cannot be reassigned."""
        ray = make_ray(vec3(0.0, 0.0, 0.0), vec3(1.0, 0.0, 0.0))
        with pytest.raises(AttributeError):
            ray.origin = vec3(1.0, 1.0, 1.0)


class TestVectorUtilities:
    """Tests for vector helper functions."""

    def test_as_vec3_from_tuple(self):
        """Test conversion from a tuple."""
        v = as_vec3((1, 2, 3))
        assert v.dtype == np.float64
        np.testing.assert_allclose(v, [1.0, 2.0, 3.0])

    def test_as_vec3_rejects_wrong_size(self):
        """Test that two components are rejected."""
        with pytest.raises(ValueError, match="3 components"):
            as_vec3((1.0, 2.0))

    def test_length(self):
        """Test length of a 3-4-0 vector."""
        assert length(vec3(3.0, 4.0, 0.0)) == pytest.approx(5.0)
        assert length_squared(vec3(3.0, 4.0, 0.0)) == pytest.approx(25.0)

    def test_normalize(self):
        """Test that normalize returns a unit vector."""
        n = normalize(vec3(0.0, 3.0, 4.0))
        assert length(n) == pytest.approx(1.0)
        np.testing.assert_allclose(n, [0.0, 0.6, 0.8])

    def test_normalize_zero_vector(self):
        """Test that a zero vector is returned unchanged."""
        np.testing.assert_allclose(normalize(vec3(0.0, 0.0, 0.0)), [0.0, 0.0, 0.0])

    def test_dot_and_cross(self):
        """Test dot and cross of the x and y axes."""
        x = vec3(1.0, 0.0, 0.0)
        y = vec3(0.0, 1.0, 0.0)
        assert dot(x, y) == 0.0
        np.testing.assert_allclose(cross(x, y), [0.0, 0.0, 1.0])

    def test_reflect_normal_incidence(self):
        """Test reflection straight back off a surface."""
        r = reflect(vec3(0.0, -1.0, 0.0), vec3(0.0, 1.0, 0.0))
        np.testing.assert_allclose(r, [0.0, 1.0, 0.0])

    def test_reflect_45_degrees(self):
        """Test reflection at 45 degrees flips the normal component only."""
        r = reflect(vec3(1.0, -1.0, 0.0), vec3(0.0, 1.0, 0.0))
        np.testing.assert_allclose(r, [1.0, 1.0, 0.0])


class TestRefract:
    """Tests for Snell's law refraction."""

    def test_refract_equal_indices_keeps_direction(self):
        """Test that a ratio of 1 leaves the direction unchanged."""
        d = normalize(vec3(1.0, -1.0, 0.0))
        r = refract(d, vec3(0.0, 1.0, 0.0), 1.0)
        np.testing.assert_allclose(r, d, atol=1e-12)

    def test_refract_bends_toward_normal(self):
        """Test that entering a denser medium bends toward the normal."""
        d = normalize(vec3(1.0, -1.0, 0.0))
        r = refract(d, vec3(0.0, 1.0, 0.0), 1.0 / 1.5)
        # sin(theta_t) = sin(45) / 1.5
        assert r[0] == pytest.approx(math.sin(math.pi / 4.0) / 1.5)
        assert r[1] < 0.0
        assert length(r) == pytest.approx(1.0)

    def test_refract_total_internal_reflection(self):
        """Test that a grazing ray leaving glass cannot refract."""
        d = normalize(vec3(1.0, -0.1, 0.0))
        assert refract(d, vec3(0.0, 1.0, 0.0), 1.5) is None


class TestSchlick:
    """Tests for Schlick's approximation."""

    def test_normal_incidence_glass(self):
        """Test r0 = ((1 - 1.5) / (1 + 1.5))^2 = 0.04 at normal incidence."""
        assert schlick_fresnel(1.0, 1.5) == pytest.approx(0.04)

    def test_grazing_incidence_is_total(self):
        """Test that reflectance reaches 1 at grazing incidence."""
        assert schlick_fresnel(0.0, 1.5) == pytest.approx(1.0)

    def test_clamped_to_unit_interval(self):
        """Test that cosines outside [0, 1] still give a probability."""
        assert 0.0 <= schlick_fresnel(-0.5, 1.5) <= 1.0
        assert 0.0 <= schlick_fresnel(1.5, 1.5) <= 1.0


class TestRandomSampling:
    """Tests for the unit ball and unit disk samplers."""

    def test_unit_sphere_samples_inside(self, rng):
        """Test that every sample lies strictly inside the unit ball."""
        for _ in range(500):
            assert length_squared(random_in_unit_sphere(rng)) < 1.0

    def test_unit_sphere_samples_vary(self, rng):
        """Test that samples cover both signs on every axis."""
        samples = np.array([random_in_unit_sphere(rng) for _ in range(500)])
        assert (samples.min(axis=0) < -0.5).all()
        assert (samples.max(axis=0) > 0.5).all()

    def test_unit_disk_samples_inside_xy_plane(self, rng):
        """Test that disk samples have z = 0 and lie inside the unit circle."""
        for _ in range(500):
            p = random_in_unit_disk(rng)
            assert p[2] == 0.0
            assert p[0] * p[0] + p[1] * p[1] < 1.0

    def test_seeded_generators_agree(self):
        """Test that equal seeds produce equal samples."""
        a = make_rng(7)
        b = make_rng(7)
        for _ in range(10):
            np.testing.assert_array_equal(random_in_unit_sphere(a), random_in_unit_sphere(b))
