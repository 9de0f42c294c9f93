"""Unit tests for metal material.

Tests cover:
- Mirror reflection law for perfect metals
- Fuzz perturbation bounds and clamping
- Absorption of rays scattered into the surface
"""

import math

import numpy as np
import pytest

from pathtracer.core.ray import Ray, dot, length, normalize, vec3
from pathtracer.materials import MetalMaterial, scatter_metal

UP = vec3(0.0, 1.0, 0.0)
ORIGIN = vec3(0.0, 0.0, 0.0)


class TestMetalMaterial:
    """Tests for MetalMaterial construction."""

    def test_default_fuzz_is_zero(self):
        """Test that metals are perfect mirrors by default."""
        assert MetalMaterial(albedo=(0.8, 0.6, 0.2)).fuzz == 0.0

    @pytest.mark.parametrize("fuzz, expected", [(2.0, 1.0), (-0.5, 0.0), (0.3, 0.3)])
    def test_fuzz_clamped(self, fuzz, expected):
        """Test that fuzz is clamped into [0, 1]."""
        assert MetalMaterial(albedo=(0.8, 0.8, 0.8), fuzz=fuzz).fuzz == pytest.approx(expected)

    def test_nan_fuzz_rejected(self):
        """Test that a NaN fuzz raises instead of slipping through the clamp."""
        with pytest.raises(ValueError, match="NaN"):
            MetalMaterial(albedo=(0.8, 0.8, 0.8), fuzz=float("nan"))

    def test_nan_albedo_rejected(self):
        """Test that a NaN albedo component is rejected."""
        with pytest.raises(ValueError, match="energy conservation"):
            MetalMaterial(albedo=(0.8, float("nan"), 0.8))

    def test_albedo_validated(self):
        """Test that albedo components above 1 are rejected."""
        with pytest.raises(ValueError):
            MetalMaterial(albedo=(1.5, 0.5, 0.5))


class TestMetalScatter:
    """Tests for scatter_metal."""

    def test_mirror_reflection_45_degrees(self, rng):
        """Test the mirror law for a perfect metal."""
        ray = Ray(origin=vec3(-1.0, 1.0, 0.0), direction=vec3(1.0, -1.0, 0.0))
        record = scatter_metal(vec3(0.8, 0.6, 0.2), 0.0, ray, ORIGIN, UP, rng)
        assert record is not None
        expected = vec3(math.sqrt(0.5), math.sqrt(0.5), 0.0)
        np.testing.assert_allclose(record.scattered.direction, expected)
        np.testing.assert_allclose(record.scattered.origin, ORIGIN)
        np.testing.assert_allclose(record.attenuation, [0.8, 0.6, 0.2])

    def test_mirror_reflection_is_normalized(self, rng):
        """Test that the reflected direction has unit length for any input length."""
        ray = Ray(origin=vec3(0.0, 5.0, 0.0), direction=vec3(3.0, -4.0, 0.0))
        record = scatter_metal(vec3(1.0, 1.0, 1.0), 0.0, ray, ORIGIN, UP, rng)
        assert length(record.scattered.direction) == pytest.approx(1.0)
        np.testing.assert_allclose(record.scattered.direction, [0.6, 0.8, 0.0])

    def test_perfect_mirror_draws_no_random_numbers(self, rng):
        """Test that fuzz=0 leaves the random generator untouched."""
        state = rng.bit_generator.state
        ray = Ray(origin=vec3(-1.0, 1.0, 0.0), direction=vec3(1.0, -1.0, 0.0))
        scatter_metal(vec3(0.5, 0.5, 0.5), 0.0, ray, ORIGIN, UP, rng)
        assert rng.bit_generator.state == state

    def test_grazing_ray_absorbed(self, rng):
        """Test that a reflection tangent to the surface is absorbed."""
        ray = Ray(origin=vec3(-1.0, 0.0, 0.0), direction=vec3(1.0, 0.0, 0.0))
        assert scatter_metal(vec3(0.5, 0.5, 0.5), 0.0, ray, ORIGIN, UP, rng) is None

    def test_fuzzed_direction_within_fuzz_ball(self, rng):
        """Test that fuzz perturbs the mirror direction by less than fuzz."""
        ray = Ray(origin=vec3(0.0, 1.0, 0.0), direction=vec3(0.0, -1.0, 0.0))
        for _ in range(200):
            record = scatter_metal(vec3(0.5, 0.5, 0.5), 0.3, ray, ORIGIN, UP, rng)
            assert record is not None
            assert length(record.scattered.direction - UP) < 0.3

    def test_fuzzed_rays_never_enter_surface(self, rng):
        """Test that returned rays always leave the surface."""
        incoming = normalize(vec3(1.0, -0.2, 0.0))
        ray = Ray(origin=vec3(-1.0, 0.2, 0.0), direction=incoming)
        absorbed = 0
        for _ in range(300):
            record = scatter_metal(vec3(0.5, 0.5, 0.5), 1.0, ray, ORIGIN, UP, rng)
            if record is None:
                absorbed += 1
            else:
                assert dot(record.scattered.direction, UP) > 0.0
        assert absorbed > 0
