"""Unit tests for the Lambertian material.

Tests cover:
- Albedo validation and defaults
- Scattered ray origin and attenuation
- Scatter directions stay on the normal side
- Cosine-weighted distribution of scatter directions
- Degenerate (near-zero) scatter direction fallback
"""

import numpy as np
import pytest


class _FixedGenerator:
    """Generator stand-in whose uniform() always returns the same vector."""

    def __init__(self, value):
        self._value = np.asarray(value, dtype=np.float64)

    def uniform(self, low, high, size):
        return self._value.copy()


def _hit_from_above():
    from photonr.core.ray import Ray, vec3
    from photonr.geometry.sphere import Intersection

    ray = Ray(vec3(0.0, 1.0, 0.0), vec3(0.0, -1.0, 0.0))
    intersection = Intersection(toi=1.0, normal=vec3(0.0, 1.0, 0.0))
    return ray, intersection


class TestLambertianMaterial:
    """Tests for LambertianMaterial construction."""

    def test_default_albedo(self):
        """Test the default albedo is mid gray."""
        from photonr.materials import LambertianMaterial

        material = LambertianMaterial()
        assert np.allclose(material.albedo, [0.5, 0.5, 0.5])

    def test_albedo_converted_to_array(self):
        """Test that tuple albedos are stored as float64 vectors."""
        from photonr.materials import LambertianMaterial

        material = LambertianMaterial(albedo=(0.1, 0.2, 0.3))
        assert isinstance(material.albedo, np.ndarray)
        assert material.albedo.dtype == np.float64
        assert np.allclose(material.albedo, [0.1, 0.2, 0.3])

    def test_albedo_boundaries_accepted(self):
        """Test that 0 and 1 are valid albedo components."""
        from photonr.materials import LambertianMaterial

        LambertianMaterial(albedo=(0.0, 1.0, 0.0))

    @pytest.mark.parametrize(
        "albedo",
        [(1.5, 0.5, 0.5), (-0.1, 0.5, 0.5), (0.5, float("nan"), 0.5), (0.5, 0.5)],
    )
    def test_invalid_albedo(self, albedo):
        """Test that albedos outside [0, 1] or of the wrong shape are rejected."""
        from photonr.materials import LambertianMaterial

        with pytest.raises(ValueError):
            LambertianMaterial(albedo=albedo)

    def test_material_type(self):
        """Test the dispatch tag."""
        from photonr.materials import LambertianMaterial, MaterialType

        assert LambertianMaterial.material_type == MaterialType.LAMBERTIAN


class TestScatterLambertian:
    """Tests for scatter_lambertian."""

    def test_always_scatters(self, rng, gray_lambertian):
        """Test that a Lambertian surface never absorbs."""
        from photonr.materials import scatter_lambertian

        ray, intersection = _hit_from_above()
        for _ in range(200):
            assert scatter_lambertian(gray_lambertian, rng, ray, intersection) is not None

    def test_attenuation_is_albedo(self, rng):
        """Test that the returned attenuation equals the albedo."""
        from photonr.materials import LambertianMaterial, scatter_lambertian

        material = LambertianMaterial(albedo=(0.8, 0.3, 0.3))
        ray, intersection = _hit_from_above()

        attenuation, _ = scatter_lambertian(material, rng, ray, intersection)
        assert np.allclose(attenuation, [0.8, 0.3, 0.3])

    def test_scattered_origin_is_hit_point(self, rng, gray_lambertian):
        """Test that the scattered ray starts at the hit point."""
        from photonr.materials import scatter_lambertian

        ray, intersection = _hit_from_above()
        _, scattered = scatter_lambertian(gray_lambertian, rng, ray, intersection)
        assert np.allclose(scattered.origin, [0.0, 0.0, 0.0])

    def test_direction_on_normal_side(self, rng, gray_lambertian):
        """Test that scatter directions never point into the surface."""
        from photonr.core.ray import dot
        from photonr.materials import scatter_lambertian

        ray, intersection = _hit_from_above()
        for _ in range(500):
            _, scattered = scatter_lambertian(gray_lambertian, rng, ray, intersection)
            assert dot(scattered.direction, intersection.normal) >= 0.0

    def test_cosine_weighted_distribution(self, rng, gray_lambertian):
        """Test that the mean cosine to the normal is 2/3 (cosine-weighted)."""
        from photonr.core.ray import dot, normalize
        from photonr.materials import scatter_lambertian

        ray, intersection = _hit_from_above()
        cosines = []
        for _ in range(5000):
            _, scattered = scatter_lambertian(gray_lambertian, rng, ray, intersection)
            cosines.append(dot(normalize(scattered.direction), intersection.normal))

        assert np.mean(cosines) == pytest.approx(2.0 / 3.0, abs=0.02)

    def test_near_zero_direction_falls_back_to_normal(self, gray_lambertian):
        """Test that a sample exactly opposite the normal scatters along the normal."""
        from photonr.materials import scatter_lambertian

        ray, intersection = _hit_from_above()
        opposite = _FixedGenerator([0.0, -0.5, 0.0])

        _, scattered = scatter_lambertian(gray_lambertian, opposite, ray, intersection)
        assert np.allclose(scattered.direction, [0.0, 1.0, 0.0])
